"""Staff models.

A staff member has a shared shape plus a role carrying the
capability-specific data. Behaviour is dispatched on the role type.
"""

from dataclasses import dataclass, field

from property_sim.models.base import GameDate
from property_sim.models.enums import District, StaffType


@dataclass
class EstateAgentRole:
    """Lets properties and periodically re-prices unfilled listings."""

    last_adjustment_check: GameDate


@dataclass
class CaretakerRole:
    """Starts repairs on assigned vacant properties."""


StaffRole = EstateAgentRole | CaretakerRole


@dataclass
class StaffMember:
    """Employee managing properties within one district."""

    staff_id: str
    name: str
    district: District
    base_salary: float  # monthly, at hire
    current_salary: float
    hired_date: GameDate
    role: StaffRole
    level: int = 1
    experience: int = 0
    assigned_properties: list[str] = field(default_factory=list)
    unpaid_wages: float = 0.0
    months_unpaid: int = 0
    highest_inflation_index: float = 1.0

    @property
    def staff_type(self) -> StaffType:
        if isinstance(self.role, EstateAgentRole):
            return StaffType.ESTATE_AGENT
        return StaffType.CARETAKER
