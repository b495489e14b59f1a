"""Mortgage pricing, amortization, rate resets and settlement."""

from __future__ import annotations

import logging

from property_sim.engine.calendar import add_months, is_after_or_equal
from property_sim.engine.market import MORTGAGE_EPSILON, calculate_market_value
from property_sim.exceptions import (
    EntityNotFoundError,
    InsufficientFundsError,
    InvalidEntityStateError,
)
from property_sim.models.base import GameDate
from property_sim.models.enums import MortgageType
from property_sim.models.mortgage import Mortgage
from property_sim.models.property import Property
from property_sim.models.state import GameState

logger = logging.getLogger(__name__)

# Deposit % -> premium over base rate (lower deposit, higher premium)
DEPOSIT_PREMIUMS: dict[int, float] = {
    10: 3.0,
    15: 2.5,
    20: 2.0,
    25: 1.5,
    40: 1.0,
    60: 0.5,
}
BTL_PREMIUM = 1.0
MIN_TERM_YEARS = 5
MAX_TERM_YEARS = 35
FIXED_PERIOD_YEARS = (2, 3, 5, 10)


def deposit_tier(deposit_percentage: float) -> int:
    """Best tier not above the given deposit; anything under 10% prices as 10%."""
    eligible = [tier for tier in DEPOSIT_PREMIUMS if tier <= deposit_percentage]
    return max(eligible) if eligible else min(DEPOSIT_PREMIUMS)


def calculate_interest_rate(base_rate: float, deposit_percentage: float, mortgage_type: MortgageType) -> float:
    rate = base_rate + DEPOSIT_PREMIUMS[deposit_tier(deposit_percentage)]
    if mortgage_type == MortgageType.BTL:
        rate += BTL_PREMIUM
    return rate


def calculate_monthly_payment(loan: float, annual_rate: float, months: int) -> float:
    """Annuity payment ``L * r(1+r)^n / ((1+r)^n - 1)`` with monthly rate r."""
    if months <= 0:
        return loan
    r = annual_rate / 100 / 12
    if r == 0:
        return loan / months
    growth = (1 + r) ** months
    return loan * r * growth / (growth - 1)


def validate_period(term_years: int, fixed_period_years: int) -> None:
    if not MIN_TERM_YEARS <= term_years <= MAX_TERM_YEARS:
        raise InvalidEntityStateError(f"Term {term_years} years outside {MIN_TERM_YEARS}-{MAX_TERM_YEARS}")
    if fixed_period_years not in FIXED_PERIOD_YEARS or fixed_period_years > term_years:
        raise InvalidEntityStateError(f"Invalid fixed period {fixed_period_years} years")


def validate_terms(deposit_percentage: float, term_years: int, fixed_period_years: int) -> None:
    if deposit_percentage not in DEPOSIT_PREMIUMS:
        raise InvalidEntityStateError(f"Unsupported deposit {deposit_percentage}%")
    validate_period(term_years, fixed_period_years)


def create_mortgage(
    mortgage_id: str,
    property_id: str,
    loan: float,
    mortgage_type: MortgageType,
    deposit_percentage: float,
    term_years: int,
    fixed_period_years: int,
    base_rate: float,
    today: GameDate,
) -> Mortgage:
    rate = calculate_interest_rate(base_rate, deposit_percentage, mortgage_type)
    payment = 0.0
    if mortgage_type == MortgageType.STANDARD:
        payment = calculate_monthly_payment(loan, rate, term_years * 12)

    return Mortgage(
        mortgage_id=mortgage_id,
        property_id=property_id,
        mortgage_type=mortgage_type,
        original_loan_amount=loan,
        deposit_percentage=deposit_percentage,
        term_length_years=term_years,
        fixed_period_years=fixed_period_years,
        fixed_period_end_date=add_months(today, fixed_period_years * 12),
        start_date=today,
        interest_rate=rate,
        monthly_payment=payment,
        outstanding_balance=loan,
    )


def find_mortgage(state: GameState, mortgage_id: str) -> Mortgage:
    for mortgage in state.player.mortgages:
        if mortgage.mortgage_id == mortgage_id:
            return mortgage
    raise EntityNotFoundError(f"Mortgage {mortgage_id} not found")


def mortgage_for_property(state: GameState, property_id: str) -> Mortgage | None:
    for mortgage in state.player.mortgages:
        if mortgage.property_id == property_id:
            return mortgage
    return None


def remaining_months(mortgage: Mortgage) -> int:
    return max(1, mortgage.term_length_years * 12 - mortgage.payments_made)


def check_rate_resets(state: GameState, today: GameDate) -> None:
    """Move mortgages past their fixed period onto the live base rate."""
    for mortgage in state.player.mortgages:
        if not is_after_or_equal(today, mortgage.fixed_period_end_date):
            continue
        new_rate = calculate_interest_rate(
            state.economy.base_rate, mortgage.deposit_percentage, mortgage.mortgage_type
        )
        if new_rate == mortgage.interest_rate:
            continue
        mortgage.interest_rate = new_rate
        if mortgage.mortgage_type == MortgageType.STANDARD:
            mortgage.monthly_payment = calculate_monthly_payment(
                mortgage.outstanding_balance, new_rate, remaining_months(mortgage)
            )


def bill_mortgages(state: GameState) -> float:
    """Take one month's payments from cash, which may go negative.

    Returns
    -------
    float
        Total deducted.
    """
    total = 0.0
    for mortgage in state.player.mortgages:
        interest = mortgage.outstanding_balance * mortgage.interest_rate / 100 / 12
        if mortgage.mortgage_type == MortgageType.BTL:
            principal = 0.0
        else:
            principal = min(mortgage.monthly_payment - interest, mortgage.outstanding_balance)
            principal = max(0.0, principal)
        payment = interest + principal

        state.player.cash -= payment
        mortgage.outstanding_balance -= principal
        mortgage.total_interest_paid += interest
        mortgage.total_principal_paid += principal
        state.player.total_mortgage_interest_paid += interest
        state.player.total_mortgage_principal_paid += principal
        mortgage.payments_made += 1
        total += payment
    return total


def remove_settled_mortgages(state: GameState) -> None:
    state.player.mortgages = [
        m for m in state.player.mortgages if m.outstanding_balance >= MORTGAGE_EPSILON
    ]


def pay_off_mortgage(state: GameState, mortgage_id: str) -> float:
    mortgage = find_mortgage(state, mortgage_id)
    if mortgage.outstanding_balance > state.player.cash:
        raise InsufficientFundsError(
            f"Payoff of {mortgage.outstanding_balance:.2f} exceeds cash {state.player.cash:.2f}"
        )
    amount = mortgage.outstanding_balance
    state.player.cash -= amount
    state.player.mortgages = [m for m in state.player.mortgages if m.mortgage_id != mortgage_id]
    logger.info("Paid off mortgage %s (%.2f)", mortgage_id, amount)
    return amount


def calculate_equity(prop: Property, mortgage: Mortgage | None) -> float:
    balance = mortgage.outstanding_balance if mortgage else 0.0
    return calculate_market_value(prop) - balance


def remortgage(
    state: GameState,
    prop: Property,
    new_mortgage_id: str,
    mortgage_type: MortgageType,
    term_years: int,
    fixed_period_years: int,
) -> Mortgage:
    """Replace a property's mortgage, using all current equity as the deposit.

    The replacement carries over the lifetime interest and principal paid on
    the old loan.
    """
    existing = mortgage_for_property(state, prop.property_id)
    if existing is None:
        raise InvalidEntityStateError(f"Property {prop.property_id} has no mortgage to replace")

    equity = calculate_equity(prop, existing)
    if equity <= 0:
        raise InvalidEntityStateError(f"Property {prop.property_id} has no positive equity")
    validate_period(term_years, fixed_period_years)

    deposit_percentage = equity / calculate_market_value(prop) * 100
    replacement = create_mortgage(
        mortgage_id=new_mortgage_id,
        property_id=prop.property_id,
        loan=existing.outstanding_balance,
        mortgage_type=mortgage_type,
        deposit_percentage=deposit_percentage,
        term_years=term_years,
        fixed_period_years=fixed_period_years,
        base_rate=state.economy.base_rate,
        today=state.game_time.current_date,
    )
    replacement.total_interest_paid = existing.total_interest_paid
    replacement.total_principal_paid = existing.total_principal_paid
    state.player.mortgages = [
        replacement if m.mortgage_id == existing.mortgage_id else m for m in state.player.mortgages
    ]
    logger.info("Remortgaged %s at %.2f%%", prop.name, replacement.interest_rate)
    return replacement
