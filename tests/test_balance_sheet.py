"""Tests for balance sheet aggregation."""

import pytest

from property_sim.engine.balance_sheet import (
    calculate_net_worth,
    calculate_overall_balance_sheet,
    calculate_property_balance_sheet,
)
from property_sim.engine.market import sell_property
from property_sim.engine.mortgage import bill_mortgages, create_mortgage, pay_off_mortgage, remortgage
from property_sim.models import (
    District,
    EstateAgentRole,
    GameDate,
    GameState,
    Mortgage,
    MortgageType,
    PropertySale,
    StaffMember,
    Tenancy,
)


def make_mortgage(
    property_id: str | None,
    balance: float,
    today: GameDate,
    interest_paid: float = 300.0,
) -> Mortgage:
    return Mortgage(
        mortgage_id=f"{property_id}-mortgage",
        property_id=property_id,
        mortgage_type=MortgageType.BTL,
        original_loan_amount=balance,
        deposit_percentage=40,
        term_length_years=25,
        fixed_period_years=5,
        fixed_period_end_date=GameDate(2030, 1, 15),
        start_date=today,
        interest_rate=6.0,
        monthly_payment=0.0,
        outstanding_balance=balance,
        total_interest_paid=interest_paid,
        total_principal_paid=100.0,
    )


class TestPropertyBalanceSheet:
    """Tests for single-property profitability."""

    def test_profitability(self, make_property, today: GameDate) -> None:
        prop = make_property(base_value=11000.0, total_income_earned=1200.0, total_maintenance_paid=200.0)
        prop.purchase_base_value = 10000.0
        prop.purchase_price = 10000.0

        sheet = calculate_property_balance_sheet(prop, make_mortgage("prop-001", 6000.0, today), GameDate(2026, 1, 15))

        assert sheet.days_owned == 365
        assert sheet.years_owned == pytest.approx(1.0)
        assert sheet.market_value == pytest.approx(11000.0)
        assert sheet.base_value_change == pytest.approx(1000.0)
        assert sheet.base_value_change_percent == pytest.approx(10.0)
        assert sheet.net_operating_income == pytest.approx(1000.0)
        assert sheet.net_profit == pytest.approx(700.0)
        assert sheet.total_gain == pytest.approx(1700.0)
        assert sheet.roi == pytest.approx(17.0)
        assert sheet.avg_annual_total_gain == pytest.approx(1700.0)
        assert sheet.total_mortgage_payments == pytest.approx(400.0)
        assert sheet.effective_mortgage_cost == pytest.approx(5.0)
        assert sheet.current_equity == pytest.approx(5000.0)
        assert sheet.has_mortgage

    def test_days_owned_at_least_one(self, make_property, today: GameDate) -> None:
        sheet = calculate_property_balance_sheet(make_property(), None, today)

        assert sheet.days_owned == 1
        assert not sheet.has_mortgage
        assert sheet.total_mortgage_payments == 0.0
        assert sheet.effective_mortgage_cost == 0.0
        assert sheet.current_equity == sheet.market_value


class TestOverallBalanceSheet:
    """Tests for the portfolio snapshot."""

    def test_empty_portfolio(self, state: GameState) -> None:
        sheet = calculate_overall_balance_sheet(state)

        assert sheet.total_properties == 0
        assert sheet.net_worth == 50000.0
        assert sheet.portfolio_roi == 0.0
        assert sheet.avg_interest_rate == 0.0
        assert sheet.debt_to_value_ratio == 0.0
        assert sheet.avg_property_value == 0.0
        assert sheet.avg_equity_percent == 0.0
        assert sheet.total_value_change_percent == 0.0

    def test_portfolio_totals(self, state: GameState, make_property, today: GameDate) -> None:
        prop = make_property(
            tenancy=Tenancy(
                rent_markup=6,
                period_months=12,
                start_date=today,
                end_date=GameDate(2026, 1, 15),
                market_value_at_start=10000.0,
                base_rate_at_start=3.0,
            )
        )
        state.player.properties.append(prop)
        state.player.mortgages.append(make_mortgage("prop-001", 6000.0, today))

        sheet = calculate_overall_balance_sheet(state)

        assert sheet.total_property_value == pytest.approx(10000.0)
        assert sheet.total_debt == pytest.approx(6000.0)
        assert sheet.net_worth == pytest.approx(54000.0)
        assert sheet.net_worth == pytest.approx(calculate_net_worth(state))
        assert sheet.debt_to_value_ratio == pytest.approx(60.0)
        assert sheet.avg_interest_rate == pytest.approx(6.0)
        assert sheet.monthly_rent_income == pytest.approx(50.0)
        assert sheet.monthly_mortgage_payments == pytest.approx(30.0)
        assert sheet.monthly_cash_flow == pytest.approx(20.0)

    def test_averages_across_properties(self, state: GameState, make_property, today: GameDate) -> None:
        rising = make_property("prop-001", base_value=11000.0)
        rising.purchase_base_value = 10000.0
        flat = make_property("prop-002", base_value=5000.0)
        state.player.properties.extend([rising, flat])
        state.player.mortgages.append(make_mortgage("prop-001", 5500.0, today))

        sheet = calculate_overall_balance_sheet(state)

        assert sheet.avg_property_value == pytest.approx(8000.0)
        # 50% equity on the mortgaged property, 100% on the other
        assert sheet.avg_equity_percent == pytest.approx(75.0)
        assert sheet.total_value_change_percent == pytest.approx(5.0)

    def test_underwater_mortgage_counts_as_debt(self, state: GameState, today: GameDate) -> None:
        state.player.mortgages.append(make_mortgage(None, 2500.0, today))

        sheet = calculate_overall_balance_sheet(state)

        assert sheet.total_debt == 2500.0
        assert sheet.net_worth == 47500.0

    def test_realized_gains_from_sales(self, state: GameState, today: GameDate) -> None:
        state.player.total_mortgage_interest_paid = 50.0
        state.player.property_sales.append(
            PropertySale(
                property_id="prop-009",
                name="9 Sold Lane",
                purchase_price=8000.0,
                purchase_date=today,
                sale_price=9000.0,
                sale_date=GameDate(2026, 1, 15),
                total_rent_income=500.0,
                total_maintenance_paid=100.0,
                total_mortgage_interest=50.0,
            )
        )

        sheet = calculate_overall_balance_sheet(state)

        assert sheet.total_properties_sold == 1
        assert sheet.total_sale_revenue == 9000.0
        assert sheet.total_sale_gains == 1000.0
        assert sheet.realized_gains == pytest.approx(1350.0)
        assert sheet.portfolio_roi == pytest.approx(1350.0 / 8000.0 * 100)
        assert sheet.total_mortgage_interest == 50.0
        assert sheet.net_profit == 0.0
        assert sheet.total_gain == pytest.approx(1350.0)

    def test_staff_costs_in_monthly_flow(self, state: GameState, make_property, today: GameDate) -> None:
        state.staff.estate_agents.append(
            StaffMember(
                staff_id="agent-001",
                name="Agent",
                district=District.OUTSKIRTS,
                base_salary=500.0,
                current_salary=500.0,
                hired_date=today,
                role=EstateAgentRole(last_adjustment_check=today),
                unpaid_wages=250.0,
            )
        )

        sheet = calculate_overall_balance_sheet(state)

        assert sheet.monthly_staff_costs == 750.0
        assert sheet.monthly_cash_flow == -750.0


class TestLifetimeMortgageInterest:
    """Tests that every unit of mortgage interest is counted exactly once."""

    def standard_mortgage(self, today: GameDate) -> Mortgage:
        return create_mortgage(
            "prop-001-mortgage", "prop-001", 6000.0, MortgageType.STANDARD, 40, 25, 5, 3.0, today
        )

    def test_underwater_sale_counts_interest_once(self, state: GameState, make_property, today: GameDate) -> None:
        prop = make_property(base_value=10000.0)
        state.player.properties.append(prop)
        state.player.mortgages.append(make_mortgage("prop-001", 9500.0, today, interest_paid=0.0))
        for _ in range(12):
            bill_mortgages(state)

        sell_property(state, prop, 5000.0, GameDate(2026, 1, 15))
        sheet = calculate_overall_balance_sheet(state)

        # 6% interest only on 9500 for a year
        assert sheet.total_mortgage_interest == pytest.approx(570.0)
        assert sheet.total_debt == pytest.approx(4500.0)
        assert sheet.realized_gains == pytest.approx(-5570.0)
        assert sheet.net_profit == pytest.approx(0.0, abs=1e-9)
        assert sheet.total_gain == pytest.approx(-5570.0)

    def test_remortgage_then_sale_keeps_history(self, state: GameState, make_property, today: GameDate) -> None:
        prop = make_property(base_value=10000.0)
        state.player.properties.append(prop)
        mortgage = self.standard_mortgage(today)
        state.player.mortgages.append(mortgage)
        for _ in range(12):
            bill_mortgages(state)
        interest = mortgage.total_interest_paid
        principal = mortgage.total_principal_paid

        replacement = remortgage(state, prop, "prop-001-mortgage-20260115", MortgageType.STANDARD, 25, 5)

        assert interest > 0
        assert replacement.total_interest_paid == pytest.approx(interest)
        assert replacement.total_principal_paid == pytest.approx(principal)

        sale = sell_property(state, prop, 10000.0, GameDate(2026, 1, 15))
        sheet = calculate_overall_balance_sheet(state)

        assert sale.total_mortgage_interest == pytest.approx(interest)
        assert sheet.total_mortgage_interest == pytest.approx(interest)
        assert sheet.total_gain == pytest.approx(-interest)

    def test_payoff_keeps_lifetime_interest(self, state: GameState, make_property, today: GameDate) -> None:
        state.player.properties.append(make_property(base_value=10000.0))
        mortgage = self.standard_mortgage(today)
        state.player.mortgages.append(mortgage)
        for _ in range(12):
            bill_mortgages(state)
        interest = mortgage.total_interest_paid

        pay_off_mortgage(state, "prop-001-mortgage")
        sheet = calculate_overall_balance_sheet(state)

        assert state.player.mortgages == []
        assert sheet.total_mortgage_interest == pytest.approx(interest)
        assert sheet.net_profit == pytest.approx(-interest)
