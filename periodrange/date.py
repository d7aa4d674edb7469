"""Calendar arithmetic on plain ``datetime.date`` values.

The decomposition engine never does calendar math by hand: every step goes
through the helpers below so that month/week boundaries, leap years and
clamped month arithmetic behave the same everywhere.

Key functions:
- to_date / to_date_iso_str: Normalize DateLike input
- today_in: Current calendar date in a timezone
- add_units: Add N days/weeks/months/years (month and year arithmetic clamp the day)
- start_of / end_of: Boundaries of the calendar unit containing a date
- compare / same_year_month: Calendar comparisons

Key classes:
- PeriodUnit: Closed set of calendar units
- DateRange: Inclusive pair of dates
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Literal, assert_never

import pendulum
from dateutil.relativedelta import relativedelta

from .exceptions import CalendarArithmeticOverflow

DateLike = str | date | datetime
Comparison = Literal[-1, 0, 1]

DEFAULT_TIMEZONE = "UTC"


class PeriodUnit(Enum):
    """Calendar unit of a single subperiod."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    def __str__(self) -> str:
        return self.value


def to_date(d: DateLike) -> date:
    """Convert DateLike input to date object."""
    if isinstance(d, date) and not isinstance(d, datetime):
        return _as_date(d)
    if isinstance(d, datetime):
        return _as_date(d.date())
    # String input - parse as ISO format
    return datetime.fromisoformat(d).date()


def to_date_iso_str(d: DateLike) -> str:
    """Convert DateLike input to ISO date string (YYYY-MM-DD)."""
    return to_date(d).isoformat()


def _as_date(d: date) -> date:
    # pendulum.Date is a date subclass; keep results plain so reprs and equality stay predictable
    if type(d) is date:
        return d
    return date(d.year, d.month, d.day)


def today_in(timezone: str = DEFAULT_TIMEZONE) -> date:
    """Current calendar date as seen in ``timezone`` (e.g. 'Asia/Tbilisi')."""
    return _as_date(pendulum.today(timezone).date())


def add_units(d: date, n: int, unit: PeriodUnit) -> date:
    """
    Add ``n`` calendar units to ``d`` (``n`` may be negative).

    Month and year arithmetic clamp the day of month to the target month's length.

    Raises:
        CalendarArithmeticOverflow: If the result falls outside years 1..9999

    Examples:
        >>> add_units(date(2024, 1, 31), 1, PeriodUnit.MONTH)
        datetime.date(2024, 2, 29)

        >>> add_units(date(2024, 3, 4), -2, PeriodUnit.WEEK)
        datetime.date(2024, 2, 19)
    """
    match unit:
        case PeriodUnit.DAY:
            delta = relativedelta(days=n)
        case PeriodUnit.WEEK:
            delta = relativedelta(weeks=n)
        case PeriodUnit.MONTH:
            delta = relativedelta(months=n)
        case PeriodUnit.YEAR:
            delta = relativedelta(years=n)
        case _:
            assert_never(unit)

    try:
        return d + delta
    except (OverflowError, ValueError) as err:
        raise CalendarArithmeticOverflow(f"{d.isoformat()} {n:+d} {unit.value}(s) is out of range") from err


def start_of(unit: PeriodUnit, d: date) -> date:
    """First day of the calendar unit containing ``d``. Weeks start on Monday."""
    if unit is PeriodUnit.DAY:
        return _as_date(d)
    try:
        return _as_date(pendulum.date(d.year, d.month, d.day).start_of(unit.value))
    except (OverflowError, ValueError) as err:
        raise CalendarArithmeticOverflow(f"start of the {unit.value} containing {d.isoformat()} is out of range") from err


def end_of(unit: PeriodUnit, d: date) -> date:
    """Last day of the calendar unit containing ``d``. Weeks end on Sunday."""
    if unit is PeriodUnit.DAY:
        return _as_date(d)
    try:
        return _as_date(pendulum.date(d.year, d.month, d.day).end_of(unit.value))
    except (OverflowError, ValueError) as err:
        raise CalendarArithmeticOverflow(f"end of the {unit.value} containing {d.isoformat()} is out of range") from err


def compare(a: date, b: date) -> Comparison:
    """Return -1 if ``a`` is earlier, 0 if equal, 1 if later."""
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def same_year_month(a: date, b: date) -> bool:
    return (a.year, a.month) == (b.year, b.month)


@dataclass(frozen=True, init=False)
class DateRange:
    """Inclusive pair of calendar dates.

    No ordering is enforced: a resolved range may legitimately end before it
    starts, and callers decide what an empty window means.

    Attributes:
        date_start: First day of the range
        date_end: Last day of the range (inclusive)

    Examples:
        >>> DateRange("2024-01-01")  # Single date
        DateRange(date_start=datetime.date(2024, 1, 1), date_end=datetime.date(2024, 1, 1))

        >>> str(DateRange("2024-01-01", "2024-01-31"))
        '[2024-01-01 → 2024-01-31]'
    """

    date_start: date
    date_end: date

    def __init__(self, date_start: DateLike, date_end: DateLike | None = None):
        """Initialize DateRange.

        Args:
            date_start: Start date
            date_end: End date. If None, defaults to date_start
        """
        start = to_date(date_start)
        object.__setattr__(self, "date_start", start)
        object.__setattr__(self, "date_end", start if date_end is None else to_date(date_end))

    def __str__(self) -> str:
        return f"[{self.date_start.isoformat()} → {self.date_end.isoformat()}]"

    def as_tuple(self) -> tuple[date, date]:
        return self.date_start, self.date_end

    def as_expression(self) -> str:
        """Render as an explicit range expression, e.g. ``2024-01-01,2024-01-31``."""
        return f"{self.date_start.isoformat()},{self.date_end.isoformat()}"

    def is_empty(self) -> bool:
        return self.date_start > self.date_end

    def contains(self, d: DateLike) -> bool:
        """Check if date is within the range."""
        return self.date_start <= to_date(d) <= self.date_end

    def days_count(self) -> int:
        """Count number of days in range (inclusive)."""
        return (self.date_end - self.date_start).days + 1

    def shift_by_units(self, n: int, unit: PeriodUnit) -> DateRange:
        """Shift both bounds by ``n`` units (+ forward, - backward)."""
        return DateRange(add_units(self.date_start, n, unit), add_units(self.date_end, n, unit))
