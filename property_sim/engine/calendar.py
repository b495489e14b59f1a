"""Calendar arithmetic over GameDate.

All functions are pure. Inputs are assumed valid.

Note that ``add_months`` clamps the day to the target month's length, so
``add_months(add_months(d, m), -m)`` is not guaranteed to return ``d``
(Jan 31 + 1 month = Feb 28, and Feb 28 - 1 month = Jan 28).
"""

from property_sim.models.base import GameDate

_DAYS_IN_MONTH = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]

_MONTH_NAMES = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]


def create_date(year: int, month: int, day: int) -> GameDate:
    return GameDate(year, month, day)


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def get_days_in_month(year: int, month: int) -> int:
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def add_days(date: GameDate, days: int) -> GameDate:
    """Add (or subtract) whole days, rolling months and years."""
    year, month, day = date.year, date.month, date.day + days

    while day > get_days_in_month(year, month):
        day -= get_days_in_month(year, month)
        month += 1
        if month > 12:
            month = 1
            year += 1

    while day < 1:
        month -= 1
        if month < 1:
            month = 12
            year -= 1
        day += get_days_in_month(year, month)

    return GameDate(year, month, day)


def add_months(date: GameDate, months: int) -> GameDate:
    """Add (or subtract) calendar months, clamping the day to the month's length."""
    total = date.year * 12 + (date.month - 1) + months
    year, month = divmod(total, 12)
    month += 1
    day = min(date.day, get_days_in_month(year, month))
    return GameDate(year, month, day)


def is_same_date(first: GameDate, second: GameDate) -> bool:
    return first == second


def is_after_or_equal(first: GameDate, second: GameDate) -> bool:
    """Lexicographic (year, month, day) comparison."""
    return (first.year, first.month, first.day) >= (second.year, second.month, second.day)


def _ordinal(date: GameDate) -> int:
    """Days since 1 Jan of year 1 (proleptic Gregorian)."""
    y = date.year - 1
    days = y * 365 + y // 4 - y // 100 + y // 400
    days += sum(get_days_in_month(date.year, m) for m in range(1, date.month))
    return days + date.day - 1


def days_between(start: GameDate, end: GameDate) -> int:
    """Exact number of days from ``start`` to ``end`` (negative if end is earlier)."""
    return _ordinal(end) - _ordinal(start)


def quarter_of(date: GameDate) -> int:
    return (date.month - 1) // 3


def is_new_quarter(previous: GameDate, current: GameDate) -> bool:
    """True when ``current`` falls in a different quarter from ``previous``."""
    return quarter_of(current) != quarter_of(previous) or current.year != previous.year


def format_date(date: GameDate) -> str:
    return f"{date.day} {_MONTH_NAMES[date.month - 1]} {date.year}"
