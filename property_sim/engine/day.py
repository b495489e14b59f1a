"""Day-advance orchestrator.

``run_day`` is the single place that sequences every subsystem. The order is
fixed so later steps observe the effects of earlier ones:

 1. quarterly economic update
 2. daily interest accrual
 3. staff experience
 4. mortgage variable-rate resets
 5. estate agent listing and re-pricing
 6. fill attempts (agent-managed, then self-managed)
 7. caretaker repairs
 8. first of the month: interest payout, area drift, rent and wear,
    mortgage billing, payroll
 9. tax-year start: balance sheet snapshot and win check
10. repair completion
11. lease expiry
12. property sales
13. market and auction churn
14. peak trackers
15. foreclosure check
"""

from __future__ import annotations

import logging

from property_sim.engine.balance_sheet import (
    calculate_net_worth,
    calculate_overall_balance_sheet,
    total_mortgage_debt,
    total_property_value,
)
from property_sim.engine.calendar import add_days, is_new_quarter
from property_sim.engine.economy import process_quarter
from property_sim.engine.market import churn_pools, complete_maintenance, decay_maintenance, process_sales
from property_sim.engine.mortgage import bill_mortgages, check_rate_resets, remove_settled_mortgages
from property_sim.engine.staff import gain_experience, process_payroll, run_staff_tasks
from property_sim.engine.tenancy import (
    collect_rent,
    expire_tenancies,
    list_for_rent,
    process_fills,
    try_fill_property,
)
from property_sim.generators.listing import ListingGenerator
from property_sim.logging import set_game_date
from property_sim.models.base import GameDate
from property_sim.models.enums import StaffType
from property_sim.models.state import ForeclosureWarning, GameOver, GameState, GameWin
from property_sim.random_source import RandomSource, chance

logger = logging.getLogger(__name__)

TAX_YEAR_START = (4, 6)  # 6 April
BALANCE_SHEET_HISTORY_LIMIT = 50
WIN_SNAPSHOT_COUNT = 50
WIN_NET_WORTH = 1_000_000.0
FORECLOSURE_GRACE_DAYS = 30
FORECLOSURE_DEBT_RATIO = 2.0
AREA_DRIFT_CHANCE = 0.10
DAYS_PER_YEAR = 365


def accrue_interest(state: GameState) -> None:
    """Accrue a day's interest on positive cash and on the savings baseline."""
    daily_rate = state.economy.base_rate / 100 / DAYS_PER_YEAR
    player = state.player
    player.accrued_interest += max(0.0, player.cash) * daily_rate
    player.savings_baseline *= 1 + daily_rate


def pay_out_interest(state: GameState) -> None:
    player = state.player
    player.cash += player.accrued_interest
    player.total_interest_earned += player.accrued_interest
    player.accrued_interest = 0.0


def drift_rating(rating: int, rand: RandomSource) -> int:
    if not chance(rand, AREA_DRIFT_CHANCE):
        return rating
    step = 1 if chance(rand, 0.5) else -1
    return max(1, min(5, rating + step))


def drift_areas(state: GameState, rand: RandomSource) -> None:
    for area in state.areas:
        area.crime = drift_rating(area.crime, rand)
        area.schools = drift_rating(area.schools, rand)
        area.transport = drift_rating(area.transport, rand)
        area.economy = drift_rating(area.economy, rand)


def process_month(state: GameState, rand: RandomSource) -> None:
    pay_out_interest(state)
    drift_areas(state, rand)

    rent = collect_rent(state)
    for prop in state.player.properties:
        decay_maintenance(prop)

    payments = bill_mortgages(state)
    remove_settled_mortgages(state)

    quitters = process_payroll(state)
    logger.debug(
        "Month settled: rent=%.2f mortgage=%.2f quits=%d cash=%.2f",
        rent,
        payments,
        len(quitters),
        state.player.cash,
    )


def take_balance_sheet_snapshot(state: GameState) -> None:
    sheet = calculate_overall_balance_sheet(state)
    state.balance_sheet_history.append(sheet)
    state.balance_sheet_history = state.balance_sheet_history[-BALANCE_SHEET_HISTORY_LIMIT:]
    state.balance_sheets_taken += 1
    state.show_balance_sheet_modal = True

    if state.balance_sheets_taken == WIN_SNAPSHOT_COUNT and state.game_win is None:
        if sheet.net_worth >= WIN_NET_WORTH:
            state.game_win = GameWin(
                date=state.game_time.current_date,
                net_worth=sheet.net_worth,
                days_played=state.tracking.days_played,
                properties_owned=sheet.total_properties,
                prestige_level=state.prestige.level,
            )
            state.prestige.total_wins += 1
            state.show_game_win_modal = True
            state.game_time.is_paused = True
            logger.info("Game won with net worth %.2f", sheet.net_worth)


def finish_repairs(state: GameState, today: GameDate, rand: RandomSource) -> None:
    """Complete due repairs; agent-managed properties are relisted and rolled at once."""
    for prop in complete_maintenance(state, today):
        if prop.assigned_estate_agent is None:
            continue
        if list_for_rent(prop, today):
            try_fill_property(prop, state.find_area(prop.area), today, state.economy.base_rate, rand)


def end_tenancies(state: GameState, today: GameDate) -> None:
    for prop in expire_tenancies(state, today):
        if prop.assigned_estate_agent is not None:
            list_for_rent(prop, today)


def update_tracking(state: GameState) -> None:
    tracking = state.tracking
    tracking.days_played += 1
    tracking.peak_net_worth = max(tracking.peak_net_worth, calculate_net_worth(state))
    tracking.peak_property_count = max(tracking.peak_property_count, len(state.player.properties))


def check_foreclosure(state: GameState, today: GameDate) -> None:
    """Start, advance or cancel the foreclosure countdown."""
    debt = max(0.0, -state.player.cash)
    equity = total_property_value(state) - total_mortgage_debt(state)
    in_distress = debt > 0 and debt >= FORECLOSURE_DEBT_RATIO * equity
    warning = state.foreclosure_warning

    if warning is None:
        if in_distress:
            state.foreclosure_warning = ForeclosureWarning(
                start_date=today,
                days_remaining=FORECLOSURE_GRACE_DAYS,
                debt=debt,
                equity=equity,
            )
            state.game_time.is_paused = True
            logger.warning("Foreclosure warning: debt %.2f against equity %.2f", debt, equity)
        return

    if not in_distress:
        state.foreclosure_warning = None
        logger.info("Foreclosure warning cleared")
        return

    warning.days_remaining -= 1
    warning.debt = debt
    warning.equity = equity
    if warning.days_remaining <= 0:
        state.game_over = build_game_over(state, today, debt, equity)
        state.foreclosure_warning = None
        state.game_time.is_paused = True
        logger.warning("Game over: foreclosed on %s", today)


def build_game_over(state: GameState, today: GameDate, debt: float, equity: float) -> GameOver:
    player = state.player
    rent = sum(p.total_income_earned for p in player.properties)
    rent += sum(s.total_rent_income for s in player.property_sales)
    return GameOver(
        date=today,
        reason="foreclosure",
        days_played=state.tracking.days_played,
        final_cash=player.cash,
        final_debt=debt,
        final_equity=equity,
        peak_net_worth=state.tracking.peak_net_worth,
        peak_property_count=state.tracking.peak_property_count,
        properties_owned=len(player.properties),
        properties_sold=len(player.property_sales),
        total_rent_income=rent,
        total_interest_earned=player.total_interest_earned,
    )


def run_day(state: GameState, rand: RandomSource, listings: ListingGenerator) -> GameState:
    """Advance ``state`` by one simulated day, in place.

    Parameters
    ----------
    state : GameState
        State to mutate. Callers wanting an atomic swap pass a copy.
    rand : RandomSource
        Uniform random source for every roll made today.
    listings : ListingGenerator
        Generator for new market and auction listings.

    Returns
    -------
    GameState
        The same state object.
    """
    if state.game_over is not None:
        return state

    previous = state.game_time.current_date
    today = add_days(previous, 1)
    state.game_time.current_date = today
    set_game_date(today)

    if is_new_quarter(previous, today):
        process_quarter(state, rand)
    accrue_interest(state)
    gain_experience(state)
    check_rate_resets(state, today)
    run_staff_tasks(state, StaffType.ESTATE_AGENT, rand)
    process_fills(state, rand, today)
    run_staff_tasks(state, StaffType.CARETAKER, rand)

    if today.day == 1:
        process_month(state, rand)
    if (today.month, today.day) == TAX_YEAR_START:
        take_balance_sheet_snapshot(state)

    finish_repairs(state, today, rand)
    end_tenancies(state, today)
    process_sales(state, rand, today)
    churn_pools(state, rand, listings)
    update_tracking(state)
    check_foreclosure(state, today)
    return state
