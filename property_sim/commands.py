"""Command surface.

Every command is a total function ``(state, ...) -> state``. The input state
is never modified: each command works on a deep copy and returns it. When a
precondition fails (unknown id, insufficient cash, ineligible property) the
original state is returned unchanged and the rejection is logged at DEBUG.
"""

from __future__ import annotations

import copy
import functools
import logging
from typing import Any, Callable

from property_sim.engine import day, market, mortgage, staff
from property_sim.engine.tenancy import MAX_RENT_MARKUP, MIN_RENT_MARKUP, TENANCY_PERIODS, list_for_rent
from property_sim.exceptions import (
    EntityNotFoundError,
    InsufficientFundsError,
    InvalidEntityStateError,
    PropertySimError,
)
from property_sim.generators.listing import ListingGenerator
from property_sim.generators.staff import StaffGenerator
from property_sim.models.enums import District, ListingPool, MortgageType, StaffType
from property_sim.models.property import Property, SaleInfo
from property_sim.models.state import TIME_SPEED_SECONDS, GameState, Prestige
from property_sim.random_source import RandomSource
from property_sim.scenarios.new_game import NewGameScenario

logger = logging.getLogger(__name__)


def command(func: Callable[..., GameState]) -> Callable[..., GameState]:
    """Run ``func`` on a copy of the state; return the original on rejection."""

    @functools.wraps(func)
    def wrapper(state: GameState, *args: Any, **kwargs: Any) -> GameState:
        draft = copy.deepcopy(state)
        try:
            return func(draft, *args, **kwargs)
        except PropertySimError as exc:
            logger.debug("%s rejected: %s", func.__name__, exc)
            return state

    return wrapper


def require_property(state: GameState, property_id: str) -> Property:
    prop = state.find_property(property_id)
    if prop is None:
        raise EntityNotFoundError(f"Property {property_id} not found")
    return prop


def validate_markup(markup: int) -> None:
    if not MIN_RENT_MARKUP <= markup <= MAX_RENT_MARKUP:
        raise InvalidEntityStateError(f"Rent markup {markup} outside {MIN_RENT_MARKUP}-{MAX_RENT_MARKUP}")


# --- Time ---


@command
def advance_day(state: GameState, rand: RandomSource, listings: ListingGenerator) -> GameState:
    return day.run_day(state, rand, listings)


@command
def set_speed(state: GameState, speed: float) -> GameState:
    if speed not in TIME_SPEED_SECONDS:
        raise InvalidEntityStateError(f"Unsupported speed {speed}")
    state.game_time.speed = speed
    return state


@command
def toggle_pause(state: GameState) -> GameState:
    if state.game_over is not None:
        raise InvalidEntityStateError("Game is over")
    state.game_time.is_paused = not state.game_time.is_paused
    return state


@command
def reset(state: GameState, scenario: NewGameScenario) -> GameState:
    """Start a fresh game, keeping prestige counters."""
    return scenario.generate(prestige=state.prestige)


# --- Settings and maintenance ---


@command
def set_property_vacant_settings(
    state: GameState,
    property_id: str,
    rent_markup: int,
    period_months: int,
) -> GameState:
    validate_markup(rent_markup)
    if period_months not in TENANCY_PERIODS:
        raise InvalidEntityStateError(f"Unsupported tenancy period {period_months}")
    prop = require_property(state, property_id)
    prop.vacant_settings.rent_markup = rent_markup
    prop.vacant_settings.period_months = period_months
    return state


@command
def set_default_rent_markup(state: GameState, rent_markup: int) -> GameState:
    validate_markup(rent_markup)
    state.settings.default_rent_markup = rent_markup
    return state


@command
def carry_out_maintenance(state: GameState, property_id: str) -> GameState:
    market.start_maintenance(state, require_property(state, property_id))
    return state


# --- Buying ---


@command
def buy_property_instant(state: GameState, listing_id: str) -> GameState:
    market.buy_listing(state, ListingPool.MARKET, listing_id)
    return state


@command
def buy_auction_property_instant(state: GameState, listing_id: str) -> GameState:
    market.buy_listing(state, ListingPool.AUCTION, listing_id)
    return state


@command
def make_offer(state: GameState, listing_id: str, offer_percentage: float, rand: RandomSource) -> GameState:
    market.make_offer(state, ListingPool.MARKET, listing_id, offer_percentage, rand)
    return state


@command
def make_auction_offer(state: GameState, listing_id: str, offer_percentage: float, rand: RandomSource) -> GameState:
    market.make_offer(state, ListingPool.AUCTION, listing_id, offer_percentage, rand)
    return state


@command
def buy_property_with_mortgage(
    state: GameState,
    listing_id: str,
    mortgage_type: MortgageType,
    deposit_percentage: int,
    term_years: int,
    fixed_period_years: int,
) -> GameState:
    """Buy a market listing at market value, paying the deposit from cash.

    Parameters
    ----------
    state : GameState
        Current state.
    listing_id : str
        Market listing to buy.
    mortgage_type : MortgageType
        Repayment (STANDARD) or interest-only (BTL).
    deposit_percentage : int
        One of the supported deposit tiers.
    term_years : int
        Mortgage term.
    fixed_period_years : int
        Initial fixed-rate period, no longer than the term.

    Returns
    -------
    GameState
        State with the property and its mortgage added.
    """
    mortgage.validate_terms(deposit_percentage, term_years, fixed_period_years)
    listing = market.find_listing(state, ListingPool.MARKET, listing_id)
    price = market.calculate_market_value(listing)
    deposit = price * deposit_percentage / 100
    if deposit > state.player.cash:
        raise InsufficientFundsError(f"Deposit {deposit:.2f} exceeds cash {state.player.cash:.2f}")

    state.player.cash -= deposit
    market.remove_listing(state, ListingPool.MARKET, listing_id)
    prop = market.acquire_listing(state, listing, price)
    loan = mortgage.create_mortgage(
        mortgage_id=f"{prop.property_id}-mortgage",
        property_id=prop.property_id,
        loan=price - deposit,
        mortgage_type=mortgage_type,
        deposit_percentage=deposit_percentage,
        term_years=term_years,
        fixed_period_years=fixed_period_years,
        base_rate=state.economy.base_rate,
        today=state.game_time.current_date,
    )
    state.player.mortgages.append(loan)
    logger.info(
        "Bought %s for %.2f with a %s mortgage of %.2f at %.2f%%",
        prop.name,
        price,
        mortgage_type.value,
        loan.original_loan_amount,
        loan.interest_rate,
    )
    return state


# --- Selling and letting ---


@command
def list_property_for_sale(state: GameState, property_id: str, asking_percentage: float) -> GameState:
    prop = require_property(state, property_id)
    if prop.sale_info is not None:
        raise InvalidEntityStateError(f"{prop.name} is already listed for sale")
    if prop.tenancy is not None or prop.is_under_maintenance:
        raise InvalidEntityStateError(f"{prop.name} must be vacant and not under repair to sell")

    asking_percentage = market.sanitize_percentage(asking_percentage)
    prop.sale_info = SaleInfo(
        asking_percentage=asking_percentage,
        asking_price=market.calculate_market_value(prop) * asking_percentage / 100,
        listed_date=state.game_time.current_date,
    )
    prop.listed_date = None
    return state


@command
def cancel_listing(state: GameState, property_id: str) -> GameState:
    prop = require_property(state, property_id)
    if prop.sale_info is None and prop.listed_date is None:
        raise InvalidEntityStateError(f"{prop.name} is not listed")
    prop.sale_info = None
    prop.listed_date = None
    return state


@command
def list_property_now(state: GameState, property_id: str) -> GameState:
    prop = require_property(state, property_id)
    if not list_for_rent(prop, state.game_time.current_date):
        raise InvalidEntityStateError(f"{prop.name} cannot be listed for rent")
    return state


# --- Mortgages ---


@command
def remortgage_property(
    state: GameState,
    property_id: str,
    mortgage_type: MortgageType,
    term_years: int,
    fixed_period_years: int,
) -> GameState:
    prop = require_property(state, property_id)
    today = state.game_time.current_date
    mortgage.remortgage(
        state,
        prop,
        new_mortgage_id=f"{prop.property_id}-mortgage-{today.year}{today.month:02d}{today.day:02d}",
        mortgage_type=mortgage_type,
        term_years=term_years,
        fixed_period_years=fixed_period_years,
    )
    return state


@command
def pay_off_mortgage(state: GameState, mortgage_id: str) -> GameState:
    mortgage.pay_off_mortgage(state, mortgage_id)
    return state


# --- Staff ---


@command
def hire_staff(
    state: GameState,
    staff_type: StaffType,
    district: District,
    generator: StaffGenerator,
) -> GameState:
    member = generator.generate(
        staff_type,
        district,
        salary=staff.DISTRICT_SALARIES[district],
        hired_date=state.game_time.current_date,
        inflation_index=state.economy.inflation_index,
    )
    staff.add_staff(state, member)
    return state


@command
def fire_staff(state: GameState, staff_id: str, staff_type: StaffType) -> GameState:
    member = staff.find_staff(state, staff_id, staff_type)
    staff.remove_staff(state, member)
    logger.info("Fired %s", member.name)
    return state


@command
def promote_staff(state: GameState, staff_id: str, staff_type: StaffType) -> GameState:
    staff.promote(state, staff.find_staff(state, staff_id, staff_type))
    return state


@command
def assign_property_to_staff(
    state: GameState,
    property_id: str,
    staff_id: str,
    staff_type: StaffType,
) -> GameState:
    prop = require_property(state, property_id)
    staff.assign_property(state, prop, staff.find_staff(state, staff_id, staff_type))
    return state


@command
def unassign_property(state: GameState, property_id: str, staff_type: StaffType) -> GameState:
    prop = require_property(state, property_id)
    assigned = prop.assigned_estate_agent if staff_type == StaffType.ESTATE_AGENT else prop.assigned_caretaker
    if assigned is None:
        raise InvalidEntityStateError(f"{prop.name} has no {staff_type.value} assigned")
    staff.release_property(state, prop, staff_type)
    return state


# --- Modals and prestige ---


@command
def dismiss_balance_sheet_modal(state: GameState) -> GameState:
    state.show_balance_sheet_modal = False
    return state


@command
def dismiss_game_win_modal(state: GameState) -> GameState:
    state.show_game_win_modal = False
    return state


@command
def open_prestige_modal(state: GameState) -> GameState:
    if state.game_win is None:
        raise InvalidEntityStateError("Prestige is only available after a win")
    state.show_prestige_modal = True
    return state


@command
def close_prestige_modal(state: GameState) -> GameState:
    state.show_prestige_modal = False
    return state


@command
def prestige(state: GameState, scenario: NewGameScenario) -> GameState:
    """Start a new game one prestige level higher, with a larger cash pot."""
    if state.game_win is None:
        raise InvalidEntityStateError("Prestige is only available after a win")
    carried = Prestige(level=state.prestige.level + 1, total_wins=state.prestige.total_wins)
    logger.info("Prestige to level %d", carried.level)
    return scenario.generate(prestige=carried)
