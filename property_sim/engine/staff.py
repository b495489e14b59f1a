"""Staff: hiring, experience, promotion, payroll and automated tasks.

Estate agents list assigned vacancies and periodically re-price listings
that have not filled. Caretakers start repairs on assigned vacant properties.
Role-specific behaviour is dispatched on the member's role type.
"""

from __future__ import annotations

import logging

from property_sim.engine.calendar import days_between
from property_sim.engine.market import start_maintenance
from property_sim.engine.tenancy import (
    MAX_RENT_MARKUP,
    MIN_RENT_MARKUP,
    TENANCY_PERIODS,
    list_for_rent,
)
from property_sim.exceptions import (
    EntityNotFoundError,
    InsufficientFundsError,
    InvalidEntityStateError,
)
from property_sim.models.enums import District, StaffType
from property_sim.models.property import Property
from property_sim.models.staff import CaretakerRole, EstateAgentRole, StaffMember
from property_sim.models.state import GameState
from property_sim.random_source import RandomSource, chance, choice

logger = logging.getLogger(__name__)

DISTRICT_SALARIES: dict[District, float] = {
    District.INNER_CITY: 900.0,
    District.SUBURBS: 700.0,
    District.OUTSKIRTS: 500.0,
}

# Experience required to reach each level
LEVEL_THRESHOLDS: dict[int, int] = {2: 300, 3: 900, 4: 2000, 5: 4000}
LEVEL_CAPACITY: dict[int, int] = {1: 3, 2: 5, 3: 8, 4: 12, 5: 20}
MAX_LEVEL = 5
XP_PER_PROPERTY_PER_DAY = 1

PROMOTION_BONUS_MULTIPLIER = 2.0
PROMOTION_RAISE = 1.2
MAX_MONTHS_UNPAID = 3

AGENT_ADJUSTMENT_INTERVAL_DAYS = 30
MARKUP_DECREASE_CHANCE = 0.6
PERIOD_REROLL_CHANCE = 0.3
CARETAKER_REPAIR_THRESHOLD = 90


def capacity(member: StaffMember) -> int:
    return LEVEL_CAPACITY[member.level]


def experience_cap(member: StaffMember) -> int:
    """Experience stops accruing at the next level's threshold."""
    return LEVEL_THRESHOLDS[min(member.level + 1, MAX_LEVEL)]


def can_promote(member: StaffMember) -> bool:
    return member.level < MAX_LEVEL and member.experience >= LEVEL_THRESHOLDS[member.level + 1]


def roster(state: GameState, staff_type: StaffType) -> list[StaffMember]:
    if staff_type == StaffType.ESTATE_AGENT:
        return state.staff.estate_agents
    return state.staff.caretakers


def find_staff(state: GameState, staff_id: str, staff_type: StaffType) -> StaffMember:
    for member in roster(state, staff_type):
        if member.staff_id == staff_id:
            return member
    raise EntityNotFoundError(f"{staff_type.value} {staff_id} not found")


def add_staff(state: GameState, member: StaffMember) -> None:
    roster(state, member.staff_type).append(member)
    logger.info("Hired %s as %s in %s", member.name, member.staff_type.value, member.district.value)


def gain_experience(state: GameState) -> None:
    for member in state.all_staff():
        gained = len(member.assigned_properties) * XP_PER_PROPERTY_PER_DAY
        member.experience = min(experience_cap(member), member.experience + gained)


def promote(state: GameState, member: StaffMember) -> float:
    """Pay the promotion bonus, then raise salary and capacity.

    Returns
    -------
    float
        The bonus paid.
    """
    if not can_promote(member):
        raise InvalidEntityStateError(f"{member.name} does not have enough experience for promotion")
    bonus = member.current_salary * PROMOTION_BONUS_MULTIPLIER
    if bonus > state.player.cash:
        raise InsufficientFundsError(f"Promotion bonus {bonus:.2f} exceeds cash {state.player.cash:.2f}")

    state.player.cash -= bonus
    state.player.total_staff_costs += bonus
    member.level += 1
    member.current_salary *= PROMOTION_RAISE
    logger.info("Promoted %s to level %d", member.name, member.level)
    return bonus


# --- Assignment ---


def release_property(state: GameState, prop: Property, staff_type: StaffType) -> None:
    """Detach a property from its staff member of the given type."""
    if staff_type == StaffType.ESTATE_AGENT:
        staff_id, prop.assigned_estate_agent = prop.assigned_estate_agent, None
    else:
        staff_id, prop.assigned_caretaker = prop.assigned_caretaker, None
    if staff_id is None:
        return
    for member in roster(state, staff_type):
        if member.staff_id == staff_id and prop.property_id in member.assigned_properties:
            member.assigned_properties.remove(prop.property_id)


def assign_property(state: GameState, prop: Property, member: StaffMember) -> None:
    """Assign a property, moving it away from any previous member of the same type."""
    if prop.district != member.district:
        raise InvalidEntityStateError(
            f"{prop.name} is in {prop.district.value}, {member.name} works in {member.district.value}"
        )
    if prop.property_id in member.assigned_properties:
        return
    if len(member.assigned_properties) >= capacity(member):
        raise InvalidEntityStateError(f"{member.name} is at capacity ({capacity(member)})")

    release_property(state, prop, member.staff_type)
    member.assigned_properties.append(prop.property_id)
    match member.role:
        case EstateAgentRole():
            prop.assigned_estate_agent = member.staff_id
            list_for_rent(prop, state.game_time.current_date)
        case CaretakerRole():
            prop.assigned_caretaker = member.staff_id


def remove_staff(state: GameState, member: StaffMember) -> None:
    """Unassign everything a member manages and drop them from the roster.

    An agent's rent listings are withdrawn. A caretaker's own repairs in
    progress are abandoned and their cost is not refunded; repairs the player
    ordered carry on.
    """
    for property_id in list(member.assigned_properties):
        prop = state.find_property(property_id)
        if prop is None:
            continue
        match member.role:
            case EstateAgentRole():
                prop.assigned_estate_agent = None
                prop.listed_date = None
            case CaretakerRole():
                prop.assigned_caretaker = None
                if prop.maintenance_started_by == member.staff_id:
                    prop.is_under_maintenance = False
                    prop.maintenance_start_date = None
                    prop.maintenance_started_by = None
    member.assigned_properties.clear()
    team = roster(state, member.staff_type)
    team[:] = [m for m in team if m.staff_id != member.staff_id]


# --- Payroll ---


def apply_wage_inflation(member: StaffMember, inflation_index: float) -> None:
    """Index salary to the price level; never moves down."""
    if inflation_index > member.highest_inflation_index:
        member.current_salary *= inflation_index / member.highest_inflation_index
        member.highest_inflation_index = inflation_index


def process_payroll(state: GameState) -> list[StaffMember]:
    """Settle monthly wages.

    Pays everyone in full when the whole bill (including arrears) is
    affordable; otherwise every member accrues a month unpaid and those at
    the limit quit.

    Returns
    -------
    list[StaffMember]
        Members who quit.
    """
    members = state.all_staff()
    if not members:
        return []

    bill = sum(m.current_salary + m.unpaid_wages for m in members)
    quitters = []
    if bill <= state.player.cash:
        state.player.cash -= bill
        state.player.total_staff_costs += bill
        for member in members:
            member.unpaid_wages = 0.0
            member.months_unpaid = 0
    else:
        for member in members:
            member.unpaid_wages += member.current_salary
            member.months_unpaid += 1
            if member.months_unpaid >= MAX_MONTHS_UNPAID:
                quitters.append(member)
        for member in quitters:
            logger.warning("%s quit after %d months unpaid", member.name, member.months_unpaid)
            remove_staff(state, member)

    for member in state.all_staff():
        apply_wage_inflation(member, state.economy.inflation_index)
    return quitters


# --- Automated tasks ---


def adjust_listing(prop: Property, rand: RandomSource) -> None:
    """Nudge the asking markup one point and maybe reroll the lease length."""
    settings = prop.vacant_settings
    if chance(rand, MARKUP_DECREASE_CHANCE):
        settings.rent_markup = max(MIN_RENT_MARKUP, settings.rent_markup - 1)
    else:
        settings.rent_markup = min(MAX_RENT_MARKUP, settings.rent_markup + 1)
    if chance(rand, PERIOD_REROLL_CHANCE):
        settings.period_months = choice(rand, TENANCY_PERIODS)


def run_estate_agent(state: GameState, member: StaffMember, role: EstateAgentRole, rand: RandomSource) -> None:
    today = state.game_time.current_date
    managed = [p for p in map(state.find_property, member.assigned_properties) if p is not None]

    for prop in managed:
        list_for_rent(prop, today)

    if days_between(role.last_adjustment_check, today) < AGENT_ADJUSTMENT_INTERVAL_DAYS:
        return
    role.last_adjustment_check = today
    for prop in managed:
        if prop.listed_date is None or prop.tenancy is not None:
            continue
        if days_between(prop.listed_date, today) >= AGENT_ADJUSTMENT_INTERVAL_DAYS:
            adjust_listing(prop, rand)


def run_caretaker(state: GameState, member: StaffMember) -> None:
    for property_id in member.assigned_properties:
        prop = state.find_property(property_id)
        if prop is None or prop.tenancy is not None or prop.sale_info is not None:
            continue
        if prop.is_under_maintenance or prop.maintenance > CARETAKER_REPAIR_THRESHOLD:
            continue
        try:
            start_maintenance(state, prop, started_by=member.staff_id)
        except InsufficientFundsError:
            logger.debug("%s cannot afford repairs to %s", member.name, prop.name)


def run_staff_tasks(state: GameState, staff_type: StaffType, rand: RandomSource) -> None:
    for member in roster(state, staff_type):
        match member.role:
            case EstateAgentRole() as role:
                run_estate_agent(state, member, role, rand)
            case CaretakerRole():
                run_caretaker(state, member)
