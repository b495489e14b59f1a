"""Tenancy lifecycle: fill probability, rent and lease expiry.

Rent is markup-only on the market value frozen at signing:
``market_value_at_start * rent_markup / 100 / 12`` per month. The base rate
at signing is frozen alongside it for reporting but does not enter the rent.
"""

from __future__ import annotations

import logging

from property_sim.engine.calendar import add_months, is_after_or_equal
from property_sim.engine.market import calculate_market_value, can_be_let_out
from property_sim.models.base import GameDate
from property_sim.models.property import Area, Property, Tenancy
from property_sim.models.state import GameState
from property_sim.random_source import RandomSource, chance

logger = logging.getLogger(__name__)

MIN_RENT_MARKUP = 1
MAX_RENT_MARKUP = 10
TENANCY_PERIODS = (6, 12, 18, 24)
FILL_PRICE_EXPONENT = 65


def area_quality_modifier(area: Area | None) -> float:
    """0.7 for the worst areas up to 1.3 for the best."""
    if area is None:
        return 1.0
    return 0.7 + (area.average_rating - 1) * 0.15


def calculate_fill_chance(rent_markup: float, area: Area | None = None) -> float:
    """Daily probability (0-1) that a listed vacancy finds a tenant.

    Power-law in the markup, so cheap rents fill dramatically faster.
    """
    return (1 - rent_markup / 100) ** FILL_PRICE_EXPONENT * area_quality_modifier(area)


def calculate_monthly_rent(tenancy: Tenancy) -> float:
    return tenancy.market_value_at_start * tenancy.rent_markup / 100 / 12


def is_available_to_let(prop: Property) -> bool:
    """Vacant, in lettable condition and not listed for sale."""
    return prop.tenancy is None and prop.sale_info is None and can_be_let_out(prop)


def list_for_rent(prop: Property, today: GameDate) -> bool:
    """Put a property on the rental market. Returns False if it is not eligible."""
    if not is_available_to_let(prop) or prop.listed_date is not None:
        return False
    prop.listed_date = today
    return True


def create_tenancy(prop: Property, today: GameDate, base_rate: float) -> Tenancy:
    settings = prop.vacant_settings
    return Tenancy(
        rent_markup=settings.rent_markup,
        period_months=settings.period_months,
        start_date=today,
        end_date=add_months(today, settings.period_months),
        market_value_at_start=calculate_market_value(prop),
        base_rate_at_start=base_rate,
    )


def try_fill_property(
    prop: Property,
    area: Area | None,
    today: GameDate,
    base_rate: float,
    rand: RandomSource,
) -> bool:
    """Roll for a tenant on a listed vacancy. Returns True if a lease was signed."""
    if prop.listed_date is None or not is_available_to_let(prop):
        return False
    if not chance(rand, calculate_fill_chance(prop.vacant_settings.rent_markup, area)):
        return False

    prop.tenancy = create_tenancy(prop, today, base_rate)
    prop.listed_date = None
    logger.debug("%s let at %d%% for %d months", prop.name, prop.tenancy.rent_markup, prop.tenancy.period_months)
    return True


def process_fills(state: GameState, rand: RandomSource, today: GameDate) -> int:
    """Roll every listed vacancy: agent-managed properties first, then self-managed."""
    managed = [p for p in state.player.properties if p.assigned_estate_agent is not None]
    unmanaged = [p for p in state.player.properties if p.assigned_estate_agent is None]
    filled = 0
    for prop in (*managed, *unmanaged):
        if try_fill_property(prop, state.find_area(prop.area), today, state.economy.base_rate, rand):
            filled += 1
    return filled


def collect_rent(state: GameState) -> float:
    """Collect one month's rent from every occupied property."""
    total = 0.0
    for prop in state.player.properties:
        if prop.tenancy is None:
            continue
        rent = calculate_monthly_rent(prop.tenancy)
        prop.total_income_earned += rent
        total += rent
    state.player.cash += total
    return total


def expire_tenancies(state: GameState, today: GameDate) -> list[Property]:
    """End leases whose end date has been reached and reset their asking markup."""
    expired = []
    for prop in state.player.properties:
        if prop.tenancy is not None and is_after_or_equal(today, prop.tenancy.end_date):
            prop.tenancy = None
            prop.vacant_settings.rent_markup = state.settings.default_rent_markup
            expired.append(prop)
    return expired
