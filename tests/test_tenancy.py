"""Tests for the tenancy and rent engine."""

import pytest

from property_sim.engine.tenancy import (
    MAX_RENT_MARKUP,
    MIN_RENT_MARKUP,
    area_quality_modifier,
    calculate_fill_chance,
    calculate_monthly_rent,
    collect_rent,
    expire_tenancies,
    list_for_rent,
    process_fills,
    try_fill_property,
)
from property_sim.models import Area, District, GameDate, GameState, SaleInfo, Tenancy
from property_sim.random_source import ScriptedRandom


def lease(today: GameDate, end: GameDate, value: float = 1000.0, markup: int = 10) -> Tenancy:
    return Tenancy(
        rent_markup=markup,
        period_months=12,
        start_date=today,
        end_date=end,
        market_value_at_start=value,
        base_rate_at_start=3.0,
    )


class TestFillChance:
    """Tests for the fill probability model."""

    def test_monotonically_decreasing_in_markup(self, sample_area: Area) -> None:
        chances = [calculate_fill_chance(m, sample_area) for m in range(MIN_RENT_MARKUP, MAX_RENT_MARKUP + 1)]

        assert all(a > b for a, b in zip(chances, chances[1:]))

    def test_average_area_is_neutral(self, sample_area: Area) -> None:
        assert calculate_fill_chance(5, sample_area) == pytest.approx(0.95**65)

    def test_area_quality_modifier(self) -> None:
        worst = Area("Fenmoor", District.OUTSKIRTS, 1, 1, 1, 1)
        best = Area("Old Town", District.INNER_CITY, 5, 5, 5, 5)

        assert area_quality_modifier(worst) == pytest.approx(0.7)
        assert area_quality_modifier(best) == pytest.approx(1.3)
        assert area_quality_modifier(None) == 1.0


class TestRent:
    """Tests for rent calculation and collection."""

    def test_monthly_rent(self, today: GameDate) -> None:
        assert calculate_monthly_rent(lease(today, GameDate(2026, 1, 15))) == pytest.approx(8.333, abs=1e-3)

    def test_collect_rent_credits_cash_and_income_equally(
        self, state: GameState, make_property, today: GameDate
    ) -> None:
        occupied = make_property(tenancy=lease(today, GameDate(2026, 1, 15)))
        vacant = make_property("prop-002")
        state.player.properties.extend([occupied, vacant])

        collected = collect_rent(state)

        assert collected == pytest.approx(1000 * 10 / 100 / 12)
        assert state.player.cash - 50000.0 == pytest.approx(occupied.total_income_earned)
        assert vacant.total_income_earned == 0.0

    def test_rent_frozen_at_signing(self, state: GameState, make_property, today: GameDate) -> None:
        prop = make_property(tenancy=lease(today, GameDate(2026, 1, 15)))
        state.player.properties.append(prop)
        prop.base_value *= 2

        assert collect_rent(state) == pytest.approx(8.333, abs=1e-3)


class TestListing:
    """Tests for listing and filling vacancies."""

    def test_list_for_rent(self, make_property, today: GameDate) -> None:
        prop = make_property()

        assert list_for_rent(prop, today)
        assert prop.listed_date == today
        assert not list_for_rent(prop, GameDate(2025, 2, 1))
        assert prop.listed_date == today

    def test_ineligible_properties_not_listed(self, make_property, today: GameDate) -> None:
        ineligible = [
            make_property(tenancy=lease(today, GameDate(2026, 1, 15))),
            make_property(is_under_maintenance=True),
            make_property(maintenance=20.0),
            make_property(sale_info=SaleInfo(100.0, 10000.0, today)),
        ]

        for prop in ineligible:
            assert not list_for_rent(prop, today)
            assert prop.listed_date is None

    def test_fill_creates_frozen_tenancy(self, make_property, sample_area: Area, today: GameDate) -> None:
        prop = make_property(maintenance=80.0, listed_date=today)
        prop.vacant_settings.rent_markup = 7
        prop.vacant_settings.period_months = 6

        assert try_fill_property(prop, sample_area, today, 4.25, lambda: 0.0)

        assert prop.listed_date is None
        assert prop.tenancy is not None
        assert prop.tenancy.rent_markup == 7
        assert prop.tenancy.end_date == GameDate(2025, 7, 15)
        assert prop.tenancy.market_value_at_start == pytest.approx(9000.0)
        assert prop.tenancy.base_rate_at_start == 4.25

    def test_unlisted_property_never_fills(self, make_property, sample_area: Area, today: GameDate) -> None:
        prop = make_property()

        assert not try_fill_property(prop, sample_area, today, 3.0, lambda: 0.0)
        assert prop.tenancy is None

    def test_agent_managed_rolled_first(self, state: GameState, make_property, today: GameDate) -> None:
        self_managed = make_property("prop-001", listed_date=today)
        managed = make_property("prop-002", listed_date=today, assigned_estate_agent="agent-001")
        state.player.properties.extend([self_managed, managed])

        # First draw fails, second succeeds
        filled = process_fills(state, ScriptedRandom([0.99, 0.0]), today)

        assert filled == 1
        assert managed.tenancy is None
        assert self_managed.tenancy is not None


class TestExpiry:
    """Tests for lease expiry."""

    def test_expires_on_end_date(self, state: GameState, make_property, today: GameDate) -> None:
        prop = make_property(tenancy=lease(today, GameDate(2025, 7, 15)))
        prop.vacant_settings.rent_markup = 9
        state.player.properties.append(prop)
        state.settings.default_rent_markup = 4

        assert expire_tenancies(state, GameDate(2025, 7, 14)) == []
        assert expire_tenancies(state, GameDate(2025, 7, 15)) == [prop]
        assert prop.tenancy is None
        assert prop.vacant_settings.rent_markup == 4

    def test_vacant_never_expires(self, state: GameState, make_property) -> None:
        state.player.properties.append(make_property())

        assert expire_tenancies(state, GameDate(2030, 1, 1)) == []
