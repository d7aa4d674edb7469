"""Resolve date expressions (``last7``, ``previous3``, ``2024-01-01,today``) to concrete bounds.

Wall-clock tokens (``today``, ``now``, ``yesterday``) and relative expressions
are resolved against an explicit ``today``, which defaults to the current
date in the requested timezone. Literal ``YYYY-MM-DD`` dates are absolute
calendar dates and never depend on the timezone.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from datetime import date
from types import MappingProxyType
from typing import Literal

from .date import DEFAULT_TIMEZONE, DateRange, PeriodUnit, add_units, today_in
from .exceptions import InvalidPeriodUnit, InvalidRangeExpression

logger = logging.getLogger(__name__)

UnitToken = Literal["day", "week", "month", "year", "range"]
RANGE: Literal["range"] = "range"

# Upper bound on N for lastN/previousN
MAX_LAST_N: Mapping[PeriodUnit, int] = MappingProxyType(
    {
        PeriodUnit.DAY: 5 * 365,
        PeriodUnit.WEEK: 10 * 52,
        PeriodUnit.MONTH: 10 * 12,
        PeriodUnit.YEAR: 10,
    }
)

RELATIVE_PATTERN = re.compile(r"(last|previous)([0-9]*)")
DATE_RANGE_PATTERN = re.compile(r"([0-9]{4}-[0-9]{1,2}-[0-9]{1,2}),(([0-9]{4}-[0-9]{1,2}-[0-9]{1,2})|today|now|yesterday)")
DATE_PATTERN = re.compile(r"([0-9]{4})-([0-9]{1,2})-([0-9]{1,2})")

ACCEPTED_FORMS = "'lastN', 'previousN', 'YYYY-MM-DD,YYYY-MM-DD'"


def parse_unit(token: str) -> PeriodUnit | Literal["range"]:
    """Map a unit token to a PeriodUnit, or return ``"range"`` for the range pseudo-unit.

    Raises:
        InvalidPeriodUnit: If token is not day, week, month, year or range (case-sensitive)
    """
    if token == RANGE:
        return RANGE
    try:
        return PeriodUnit(token)
    except ValueError as err:
        raise InvalidPeriodUnit(f"Unknown period unit {token!r}, expected one of day, week, month, year, range") from err


def is_relative_expression(expression: str) -> bool:
    return RELATIVE_PATTERN.fullmatch(expression.strip()) is not None


def parse_date_range(expression: str) -> tuple[str, str] | None:
    """
    Split an explicit range expression into its start date and end token.

    Returns:
        (start, end) strings, or None if expression is not an explicit range

    Examples:
        >>> parse_date_range("2024-01-01,2024-02-15")
        ('2024-01-01', '2024-02-15')

        >>> parse_date_range(" 2024-01-01,yesterday ")
        ('2024-01-01', 'yesterday')

        >>> parse_date_range("last7") is None
        True
    """
    match = DATE_RANGE_PATTERN.fullmatch(expression.strip())
    if match is None:
        return None
    return match.group(1), match.group(2)


def parse_literal_date(value: str) -> date:
    """Parse ``YYYY-M-D`` (zero padding optional) as an absolute calendar date."""
    match = DATE_PATTERN.fullmatch(value.strip())
    if match is None:
        raise InvalidRangeExpression(f"{value!r} is not a YYYY-MM-DD date")
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as err:
        raise InvalidRangeExpression(f"{value!r} is not a valid calendar date") from err


def resolve_date_token(token: str, today: date) -> date:
    """Resolve a single date: a literal date, or one of today, now, yesterday."""
    match token.strip():
        case "today" | "now":
            return today
        case "yesterday":
            return add_units(today, -1, PeriodUnit.DAY)
        case literal:
            return parse_literal_date(literal)


def resolve_expression(
    expression: str,
    unit: PeriodUnit | Literal["range"],
    timezone: str = DEFAULT_TIMEZONE,
    today: date | None = None,
    default_end_date: date | None = None,
) -> DateRange:
    """
    Resolve a date expression to its (start, end) bounds.

    Args:
        expression: 'lastN', 'previousN' or 'YYYY-MM-DD,(YYYY-MM-DD|today|now|yesterday)'
        unit: Unit used for lastN/previousN arithmetic; "range" counts in days
        timezone: Timezone used to determine today when it is not given
        today: Reference date for relative expressions and wall-clock tokens (default: today in timezone)
        default_end_date: Overrides today as the end of lastN/previousN

    Returns:
        DateRange with the resolved bounds. start <= end is not guaranteed for explicit ranges.

    Raises:
        InvalidRangeExpression: If expression matches neither grammar

    Examples:
        >>> resolve_expression("last3", PeriodUnit.DAY, today=date(2020, 2, 10)).as_tuple()
        (datetime.date(2020, 2, 8), datetime.date(2020, 2, 10))

        >>> resolve_expression("previous2", PeriodUnit.MONTH, today=date(2020, 5, 20)).as_tuple()
        (datetime.date(2020, 3, 20), datetime.date(2020, 4, 20))

        >>> resolve_expression("2020-01-01,today", "range", today=date(2020, 5, 20)).as_tuple()
        (datetime.date(2020, 1, 1), datetime.date(2020, 5, 20))
    """
    if today is None:
        today = today_in(timezone)

    relative = RELATIVE_PATTERN.fullmatch(expression.strip())
    if relative is not None:
        last_or_previous, raw_n = relative.groups()
        step_unit = PeriodUnit.DAY if unit == RANGE else unit
        reference_end = default_end_date if default_end_date is not None else today

        if last_or_previous == "last":
            date_end = reference_end
        else:
            date_end = add_units(reference_end, -1, step_unit)

        n = min(int(raw_n) if raw_n else 1, MAX_LAST_N[step_unit])
        # last1 covers one unit ending at date_end, last2 covers two
        n = abs(n - 1)
        date_start = add_units(date_end, -n, step_unit)
    else:
        date_range = parse_date_range(expression)
        if date_range is None:
            raise InvalidRangeExpression(f"The date range {expression!r} is not valid; accepted forms are {ACCEPTED_FORMS}")
        date_start = parse_literal_date(date_range[0])
        date_end = resolve_date_token(date_range[1], today)

    logger.debug("Resolved %r (%s, %s) to %s..%s", expression, unit, timezone, date_start, date_end)
    return DateRange(date_start, date_end)
