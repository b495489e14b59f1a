"""Read-only balance sheet aggregation over the current state."""

from property_sim.engine.calendar import days_between
from property_sim.engine.market import calculate_market_value
from property_sim.engine.tenancy import calculate_monthly_rent
from property_sim.models.balance_sheet import OverallBalanceSheet, PropertyBalanceSheet
from property_sim.models.base import GameDate
from property_sim.models.enums import MortgageType
from property_sim.models.mortgage import Mortgage
from property_sim.models.property import Property
from property_sim.models.state import GameState


def calculate_property_balance_sheet(
    prop: Property,
    mortgage: Mortgage | None,
    today: GameDate,
) -> PropertyBalanceSheet:
    """Lifetime profitability of a single property."""
    days_owned = max(1, days_between(prop.purchase_date, today))
    years_owned = days_owned / 365
    market_value = calculate_market_value(prop)

    value_change = prop.base_value - prop.purchase_base_value
    value_change_pct = value_change / prop.purchase_base_value * 100 if prop.purchase_base_value > 0 else 0.0

    interest = mortgage.total_interest_paid if mortgage else 0.0
    principal = mortgage.total_principal_paid if mortgage else 0.0
    balance = mortgage.outstanding_balance if mortgage else 0.0

    noi = prop.total_income_earned - prop.total_maintenance_paid
    original_loan = mortgage.original_loan_amount if mortgage else 0.0
    net_profit = noi - interest
    total_gain = net_profit + value_change
    equity = market_value - balance

    return PropertyBalanceSheet(
        property_id=prop.property_id,
        purchase_price=prop.purchase_price,
        purchase_date=prop.purchase_date,
        days_owned=days_owned,
        years_owned=years_owned,
        base_value=prop.base_value,
        market_value=market_value,
        base_value_change=value_change,
        base_value_change_percent=value_change_pct,
        total_rent_income=prop.total_income_earned,
        total_maintenance_costs=prop.total_maintenance_paid,
        total_mortgage_interest=interest,
        total_mortgage_principal=principal,
        net_operating_income=noi,
        net_profit=net_profit,
        total_gain=total_gain,
        roi=total_gain / prop.purchase_price * 100 if prop.purchase_price > 0 else 0.0,
        avg_annual_profit=net_profit / years_owned,
        avg_annual_appreciation=value_change / years_owned,
        avg_annual_total_gain=total_gain / years_owned,
        has_mortgage=mortgage is not None,
        outstanding_balance=balance,
        current_equity=equity,
        equity_percent=equity / market_value * 100 if market_value > 0 else 0.0,
        total_mortgage_payments=interest + principal,
        effective_mortgage_cost=interest / original_loan * 100 if original_loan > 0 else 0.0,
    )


def monthly_mortgage_obligation(mortgage: Mortgage) -> float:
    if mortgage.mortgage_type == MortgageType.BTL:
        return mortgage.outstanding_balance * mortgage.interest_rate / 100 / 12
    return mortgage.monthly_payment


def total_property_value(state: GameState) -> float:
    return sum(calculate_market_value(p) for p in state.player.properties)


def total_mortgage_debt(state: GameState) -> float:
    return sum(m.outstanding_balance for m in state.player.mortgages)


def calculate_net_worth(state: GameState) -> float:
    return state.player.cash + total_property_value(state) - total_mortgage_debt(state)


def calculate_overall_balance_sheet(state: GameState) -> OverallBalanceSheet:
    """Portfolio snapshot.

    Debt includes mortgages left over from underwater sales, so net worth
    reflects every liability the player still carries. Mortgage interest is
    the lifetime total; the part already charged against a sale through
    ``realized_gains`` is left out of ``net_profit``.
    """
    player = state.player
    today = state.game_time.current_date
    mortgages_by_property = {m.property_id: m for m in player.mortgages if m.property_id is not None}
    sheets = [
        calculate_property_balance_sheet(p, mortgages_by_property.get(p.property_id), today)
        for p in player.properties
    ]

    property_value = sum(s.market_value for s in sheets)
    debt = total_mortgage_debt(state)
    equity = property_value - debt

    rent = sum(s.total_rent_income for s in sheets)
    maintenance = sum(s.total_maintenance_costs for s in sheets)
    interest = player.total_mortgage_interest_paid
    principal = player.total_mortgage_principal_paid
    value_change = sum(s.base_value_change for s in sheets)

    sales = player.property_sales
    realized_interest = sum(s.total_mortgage_interest for s in sales)
    sale_revenue = sum(s.sale_price for s in sales)
    sale_gains = sum(s.sale_price - s.purchase_price for s in sales)
    realized = sum(
        s.sale_price - s.purchase_price + s.total_rent_income - s.total_maintenance_paid - s.total_mortgage_interest
        for s in sales
    )

    noi = rent - maintenance
    net_profit = noi - (interest - realized_interest)
    total_gain = net_profit + value_change + realized
    invested = sum(p.purchase_price for p in player.properties) + sum(s.purchase_price for s in sales)
    count = len(sheets)

    weighted_rate = sum(m.interest_rate * m.outstanding_balance for m in player.mortgages)
    monthly_rent = sum(calculate_monthly_rent(p.tenancy) for p in player.properties if p.tenancy)
    monthly_mortgage = sum(monthly_mortgage_obligation(m) for m in player.mortgages)
    monthly_staff = sum(m.current_salary + m.unpaid_wages for m in state.all_staff())

    return OverallBalanceSheet(
        snapshot_date=today,
        total_properties=len(player.properties),
        total_cash=player.cash,
        total_property_value=property_value,
        total_base_value=sum(s.base_value for s in sheets),
        total_debt=debt,
        total_equity=equity,
        net_worth=player.cash + equity,
        total_rent_income=rent,
        total_maintenance_costs=maintenance,
        total_mortgage_interest=interest,
        total_mortgage_principal=principal,
        total_mortgage_payments=interest + principal,
        total_staff_costs=player.total_staff_costs,
        total_interest_earned=player.total_interest_earned,
        total_properties_sold=len(sales),
        total_sale_revenue=sale_revenue,
        total_sale_gains=sale_gains,
        realized_gains=realized,
        total_value_change=value_change,
        total_value_change_percent=sum(s.base_value_change_percent for s in sheets) / count if count else 0.0,
        net_operating_income=noi,
        net_profit=net_profit,
        total_gain=total_gain,
        portfolio_roi=total_gain / invested * 100 if invested > 0 else 0.0,
        avg_property_value=property_value / count if count else 0.0,
        avg_equity_percent=sum(s.equity_percent for s in sheets) / count if count else 0.0,
        avg_interest_rate=weighted_rate / debt if debt > 0 else 0.0,
        debt_to_value_ratio=debt / property_value * 100 if property_value > 0 else 0.0,
        monthly_rent_income=monthly_rent,
        monthly_mortgage_payments=monthly_mortgage,
        monthly_staff_costs=monthly_staff,
        monthly_cash_flow=monthly_rent - monthly_mortgage - monthly_staff,
    )
