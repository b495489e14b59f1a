"""Mortgage model."""

from dataclasses import dataclass

from property_sim.models.base import GameDate
from property_sim.models.enums import MortgageType


@dataclass
class Mortgage:
    """Loan secured on a property.

    ``property_id`` becomes None when the property is sold while the loan is
    underwater; the remaining balance keeps being billed.
    """

    mortgage_id: str
    property_id: str | None
    mortgage_type: MortgageType
    original_loan_amount: float
    deposit_percentage: float
    term_length_years: int
    fixed_period_years: int
    fixed_period_end_date: GameDate
    start_date: GameDate
    interest_rate: float  # annual %
    monthly_payment: float  # 0 for interest-only
    outstanding_balance: float
    total_interest_paid: float = 0.0
    total_principal_paid: float = 0.0
    payments_made: int = 0
