"""Economic cycle engine.

Regime-switching macro drift: the economy sits in one of four phases, each
with its own target band for quarterly inflation and the base rate. Rates
converge toward the targets a fraction of the gap per quarter, so the player
experiences slow "economic eras" rather than a random walk.
"""

from __future__ import annotations

import logging

from property_sim.models.economy import Economy
from property_sim.models.enums import EconomicPhase
from property_sim.models.state import GameState
from property_sim.random_source import RandomSource, chance, uniform

logger = logging.getLogger(__name__)

PHASE_ORDER = [
    EconomicPhase.RECESSION,
    EconomicPhase.RECOVERY,
    EconomicPhase.EXPANSION,
    EconomicPhase.PEAK,
]

# (quarterly inflation %, annual base rate %)
PHASE_RANGES: dict[EconomicPhase, dict[str, tuple[float, float]]] = {
    EconomicPhase.RECESSION: {"inflation": (-0.5, 0.5), "base_rate": (0.25, 2.0)},
    EconomicPhase.RECOVERY: {"inflation": (0.25, 1.0), "base_rate": (1.0, 3.5)},
    EconomicPhase.EXPANSION: {"inflation": (0.75, 1.5), "base_rate": (3.0, 5.5)},
    EconomicPhase.PEAK: {"inflation": (1.25, 2.5), "base_rate": (4.5, 7.0)},
}

MIN_QUARTERS_IN_PHASE = 3
TRANSITION_CHANCE_PER_QUARTER = 0.10
MAX_TRANSITION_CHANCE = 0.30
TARGET_REDRAW_CHANCE = 0.20
CONVERGENCE_RATE = 0.30
MIN_BASE_RATE = 0.1
INFLATION_HISTORY_LENGTH = 4


def create_initial_economy() -> Economy:
    return Economy(
        base_rate=3.0,
        inflation_rate=0.5,
        economic_phase=EconomicPhase.RECOVERY,
        target_inflation_rate=0.5,
        target_base_rate=3.0,
    )


def next_phase(phase: EconomicPhase) -> EconomicPhase:
    return PHASE_ORDER[(PHASE_ORDER.index(phase) + 1) % len(PHASE_ORDER)]


def transition_probability(quarters_in_phase: int) -> float:
    """Chance of leaving the current phase this quarter.

    Zero until the minimum dwell time, then grows linearly and caps out.
    """
    if quarters_in_phase < MIN_QUARTERS_IN_PHASE:
        return 0.0
    excess = quarters_in_phase - MIN_QUARTERS_IN_PHASE + 1
    return min(MAX_TRANSITION_CHANCE, TRANSITION_CHANCE_PER_QUARTER * excess)


def draw_targets(economy: Economy, rand: RandomSource) -> None:
    ranges = PHASE_RANGES[economy.economic_phase]
    economy.target_inflation_rate = uniform(rand, *ranges["inflation"])
    economy.target_base_rate = uniform(rand, *ranges["base_rate"])


def update_economy(economy: Economy, rand: RandomSource) -> Economy:
    """Advance the macro state by one quarter, in place.

    Returns the same ``Economy`` for chaining.
    """
    economy.quarters_since_phase_change += 1

    if chance(rand, transition_probability(economy.quarters_since_phase_change)):
        previous = economy.economic_phase
        economy.economic_phase = next_phase(previous)
        economy.quarters_since_phase_change = 0
        draw_targets(economy, rand)
        logger.info("Economy moved from %s to %s", previous.value, economy.economic_phase.value)
    elif chance(rand, TARGET_REDRAW_CHANCE):
        draw_targets(economy, rand)

    economy.inflation_rate += (economy.target_inflation_rate - economy.inflation_rate) * CONVERGENCE_RATE
    economy.base_rate += (economy.target_base_rate - economy.base_rate) * CONVERGENCE_RATE
    economy.base_rate = max(MIN_BASE_RATE, economy.base_rate)

    economy.inflation_history.append(economy.inflation_rate)
    economy.inflation_history = economy.inflation_history[-INFLATION_HISTORY_LENGTH:]
    economy.inflation_index *= 1 + economy.inflation_rate / 100
    return economy


def apply_inflation(state: GameState) -> None:
    """Inflate every owned and listed property's base value by the realized rate."""
    factor = 1 + state.economy.inflation_rate / 100
    for prop in state.player.properties:
        prop.base_value *= factor
    for listing in (*state.markets.market, *state.markets.auction):
        listing.base_value *= factor


def process_quarter(state: GameState, rand: RandomSource) -> None:
    update_economy(state.economy, rand)
    apply_inflation(state)
    logger.debug(
        "Quarterly update: phase=%s base_rate=%.2f inflation=%.2f",
        state.economy.economic_phase.value,
        state.economy.base_rate,
        state.economy.inflation_rate,
    )
