"""Tests for calendar arithmetic."""

import pytest

from property_sim.engine.calendar import (
    add_days,
    add_months,
    create_date,
    days_between,
    format_date,
    get_days_in_month,
    is_after_or_equal,
    is_leap_year,
    is_new_quarter,
    is_same_date,
)
from property_sim.models import GameDate


class TestLeapYears:
    """Tests for leap-year rules."""

    @pytest.mark.parametrize(
        ("year", "expected"),
        [(2024, True), (1900, False), (2000, True), (2023, False)],
    )
    def test_is_leap_year(self, year: int, expected: bool) -> None:
        assert is_leap_year(year) is expected

    def test_february_length(self) -> None:
        assert get_days_in_month(2024, 2) == 29
        assert get_days_in_month(2023, 2) == 28
        assert get_days_in_month(2023, 12) == 31


class TestAddDays:
    """Tests for add_days."""

    @pytest.mark.parametrize(
        "date",
        [GameDate(2024, 2, 29), GameDate(2025, 12, 31), GameDate(1, 1, 1)],
    )
    def test_zero_is_identity(self, date: GameDate) -> None:
        assert add_days(date, 0) == date

    def test_rolls_into_next_month(self) -> None:
        assert add_days(GameDate(2024, 3, 25), 10) == GameDate(2024, 4, 4)

    def test_rolls_into_next_year(self) -> None:
        assert add_days(GameDate(2024, 12, 25), 10) == GameDate(2025, 1, 4)

    def test_negative_days(self) -> None:
        assert add_days(GameDate(2025, 1, 4), -10) == GameDate(2024, 12, 25)
        assert add_days(GameDate(2024, 3, 1), -1) == GameDate(2024, 2, 29)

    def test_many_days(self) -> None:
        assert add_days(GameDate(2024, 1, 1), 366) == GameDate(2025, 1, 1)


class TestAddMonths:
    """Tests for add_months."""

    def test_clamps_to_short_month(self) -> None:
        assert add_months(GameDate(2023, 1, 31), 1) == GameDate(2023, 2, 28)

    def test_clamps_to_leap_february(self) -> None:
        assert add_months(GameDate(2024, 1, 31), 1) == GameDate(2024, 2, 29)

    def test_crosses_year(self) -> None:
        assert add_months(GameDate(2024, 11, 15), 3) == GameDate(2025, 2, 15)

    def test_negative_months(self) -> None:
        assert add_months(GameDate(2024, 3, 31), -1) == GameDate(2024, 2, 29)
        assert add_months(GameDate(2025, 1, 15), -2) == GameDate(2024, 11, 15)

    def test_round_trip_is_lossy(self) -> None:
        """Day clamping means a forward-then-back round trip can lose days."""
        there = add_months(GameDate(2023, 1, 31), 1)
        assert add_months(there, -1) == GameDate(2023, 1, 28)


class TestComparisons:
    """Tests for date comparison helpers."""

    def test_is_same_date(self) -> None:
        assert is_same_date(create_date(2025, 4, 6), GameDate(2025, 4, 6))
        assert not is_same_date(GameDate(2025, 4, 6), GameDate(2025, 4, 7))

    def test_is_after_or_equal(self) -> None:
        assert is_after_or_equal(GameDate(2025, 4, 6), GameDate(2025, 4, 6))
        assert is_after_or_equal(GameDate(2026, 1, 1), GameDate(2025, 12, 31))
        assert not is_after_or_equal(GameDate(2025, 3, 31), GameDate(2025, 4, 1))

    def test_days_between(self) -> None:
        assert days_between(GameDate(2024, 1, 1), GameDate(2025, 1, 1)) == 366
        assert days_between(GameDate(2025, 1, 1), GameDate(2025, 1, 31)) == 30
        assert days_between(GameDate(2025, 1, 31), GameDate(2025, 1, 1)) == -30

    def test_new_quarter(self) -> None:
        assert is_new_quarter(GameDate(2025, 3, 31), GameDate(2025, 4, 1))
        assert is_new_quarter(GameDate(2024, 12, 31), GameDate(2025, 1, 1))
        assert not is_new_quarter(GameDate(2025, 4, 1), GameDate(2025, 4, 2))
        assert not is_new_quarter(GameDate(2025, 1, 31), GameDate(2025, 2, 1))


class TestFormatDate:
    def test_format(self) -> None:
        assert format_date(GameDate(2025, 4, 6)) == "6 Apr 2025"
        assert str(GameDate(2025, 4, 6)) == "2025-04-06"
