"""Macroeconomic state model."""

from dataclasses import dataclass, field

from property_sim.models.enums import EconomicPhase


@dataclass
class Economy:
    """Process-wide macro state, mutated only on quarter boundaries."""

    base_rate: float  # annual %
    inflation_rate: float  # quarterly %
    economic_phase: EconomicPhase
    target_inflation_rate: float
    target_base_rate: float
    quarters_since_phase_change: int = 0
    inflation_history: list[float] = field(default_factory=list)
    inflation_index: float = 1.0  # cumulative price level since game start
