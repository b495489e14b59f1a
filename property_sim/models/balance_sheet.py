"""Balance sheet snapshot models."""

from dataclasses import dataclass

from property_sim.models.base import GameDate


@dataclass
class PropertyBalanceSheet:
    """Per-property profitability report."""

    property_id: str
    purchase_price: float
    purchase_date: GameDate
    days_owned: int
    years_owned: float
    base_value: float
    market_value: float
    base_value_change: float
    base_value_change_percent: float
    total_rent_income: float
    total_maintenance_costs: float
    total_mortgage_interest: float
    total_mortgage_principal: float
    net_operating_income: float  # rent - maintenance
    net_profit: float  # NOI - interest
    total_gain: float  # net profit + value change
    roi: float  # % of purchase price
    avg_annual_profit: float
    avg_annual_appreciation: float
    avg_annual_total_gain: float
    has_mortgage: bool
    outstanding_balance: float
    current_equity: float
    equity_percent: float
    total_mortgage_payments: float  # interest + principal
    effective_mortgage_cost: float  # interest as % of the original loan


@dataclass
class OverallBalanceSheet:
    """Portfolio-wide snapshot, stored in the yearly history."""

    snapshot_date: GameDate
    total_properties: int
    total_cash: float
    total_property_value: float
    total_base_value: float
    total_debt: float
    total_equity: float
    net_worth: float
    total_rent_income: float
    total_maintenance_costs: float
    total_mortgage_interest: float
    total_mortgage_principal: float
    total_mortgage_payments: float
    total_staff_costs: float
    total_interest_earned: float
    total_properties_sold: int
    total_sale_revenue: float
    total_sale_gains: float
    realized_gains: float
    total_value_change: float
    total_value_change_percent: float  # mean over owned properties
    net_operating_income: float
    net_profit: float
    total_gain: float
    portfolio_roi: float
    avg_property_value: float
    avg_equity_percent: float
    avg_interest_rate: float
    debt_to_value_ratio: float
    monthly_rent_income: float
    monthly_mortgage_payments: float
    monthly_staff_costs: float
    monthly_cash_flow: float
