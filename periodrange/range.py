"""Arbitrary date ranges decomposed into calendar subperiods.

Key classes:
- Range: A unit token plus a date expression, lazily decomposed into subperiods
- DecompositionResult: The ordered subperiods and the effective end date
- PriorShift: The same request moved back one unit, for period-over-period comparisons

Key functions:
- decompose: One-shot decomposition of a unit and expression
- get_prior_unit_shift: Expression for the period preceding a request
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date
from functools import cached_property

from .date import DEFAULT_TIMEZONE, DateLike, DateRange, add_units, to_date, to_date_iso_str, today_in
from .exceptions import InvalidRangeExpression
from .planner import fill_uniform, plan_optimal
from .resolver import RANGE, UnitToken, is_relative_expression, parse_unit, resolve_date_token, resolve_expression
from .subperiod import Subperiod

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecompositionResult:
    """Subperiods covering a request, in chronological order.

    Attributes:
        subperiods: Ordered subperiods
        effective_end_date: Literal requested end for "range", else the end of the
            last subperiod
    """

    subperiods: tuple[Subperiod, ...]
    effective_end_date: date

    def __len__(self) -> int:
        return len(self.subperiods)

    def __iter__(self) -> Iterator[Subperiod]:
        return iter(self.subperiods)

    @property
    def effective_start_date(self) -> date | None:
        if not self.subperiods:
            return None
        return self.subperiods[0].date_start


@dataclass(frozen=True)
class PriorShift:
    """Request moved back by one unit.

    Attributes:
        expression: Shifted date expression, None when shifting is unsupported
        subperiod: Shifted subperiod for single-date expressions, else None
    """

    expression: str | None = None
    subperiod: Subperiod | None = None

    @classmethod
    def unsupported(cls) -> PriorShift:
        return cls()

    @property
    def supported(self) -> bool:
        return self.expression is not None


class Range:
    """Date range request: a unit token and a date expression.

    The decomposition is computed on first access and then reused.

    Args:
        unit: "day", "week", "month", "year" or "range"
        expression: 'lastN', 'previousN' or 'YYYY-MM-DD,(YYYY-MM-DD|today|now|yesterday)'
        timezone: Timezone used to determine today when it is not given
        today: Date to use as today (default: today in timezone)
        default_end_date: End date for lastN/previousN instead of today

    Raises:
        InvalidPeriodUnit: If unit is not a known token

    Examples:
        >>> r = Range("day", "last3", today=date(2020, 2, 10))
        >>> [sp.date_start.isoformat() for sp in r.subperiods]
        ['2020-02-08', '2020-02-09', '2020-02-10']

        >>> r = Range("range", "2019-01-05,2019-03-10", today=date(2019, 6, 1))
        >>> r.date_end
        datetime.date(2019, 3, 10)
    """

    label = RANGE

    def __init__(
        self,
        unit: UnitToken,
        expression: str,
        timezone: str = DEFAULT_TIMEZONE,
        today: DateLike | None = None,
        *,
        default_end_date: DateLike | None = None,
    ):
        self.unit = parse_unit(unit)
        self.expression = expression
        self.timezone = timezone
        self.today = today_in(timezone) if today is None else to_date(today)
        self.default_end_date = None if default_end_date is None else to_date(default_end_date)

    def __repr__(self) -> str:
        return f"Range({str(self.unit)!r}, {self.expression!r}, timezone={self.timezone!r}, today={self.today.isoformat()!r})"

    def __str__(self) -> str:
        return ",".join(to_date_iso_str(sp.date_start) for sp in self.subperiods)

    def set_default_end_date(self, date_end: DateLike) -> None:
        """Use date_end instead of today as the end of lastN/previousN.

        Raises:
            RuntimeError: If subperiods were already computed
        """
        if "bounds" in self.__dict__:
            raise RuntimeError("default end date must be set before the range is decomposed")
        self.default_end_date = to_date(date_end)

    @cached_property
    def bounds(self) -> DateRange:
        """Resolved (start, end) of the expression."""
        return resolve_expression(self.expression, self.unit, self.timezone, self.today, self.default_end_date)

    @cached_property
    def result(self) -> DecompositionResult:
        date_start, date_end = self.bounds.as_tuple()
        if self.bounds.is_empty():
            logger.debug("Range %r ends before it starts: %s", self.expression, self.bounds)

        if self.unit == RANGE:
            subperiods = plan_optimal(date_start, date_end, self.today)
            # the literal end date, not the end of whichever unit closed the walk
            effective_end = date_end
        else:
            subperiods = fill_uniform(date_start, date_end, self.unit)
            effective_end = subperiods[-1].date_end

        logger.debug("Decomposed %s %r into %d subperiods", self.unit, self.expression, len(subperiods))
        return DecompositionResult(tuple(subperiods), effective_end)

    def decompose(self) -> DecompositionResult:
        return self.result

    @property
    def subperiods(self) -> tuple[Subperiod, ...]:
        return self.result.subperiods

    @property
    def number_of_subperiods(self) -> int:
        return len(self.result)

    @property
    def date_start(self) -> date:
        """Start of the first subperiod.

        Raises:
            InvalidRangeExpression: If the range has no subperiods
        """
        date_start = self.result.effective_start_date
        if date_start is None:
            raise InvalidRangeExpression("Specified date range is invalid.")
        return date_start

    @property
    def date_end(self) -> date:
        return self.result.effective_end_date


def decompose(
    unit: UnitToken,
    expression: str,
    timezone: str = DEFAULT_TIMEZONE,
    today: DateLike | None = None,
    default_end_date: DateLike | None = None,
) -> DecompositionResult:
    """
    Decompose a date expression into subperiods of the given unit.

    Args:
        unit: "day", "week", "month", "year", or "range" for the optimal month/week/day mix
        expression: 'lastN', 'previousN' or 'YYYY-MM-DD,(YYYY-MM-DD|today|now|yesterday)'
        timezone: Timezone used to determine today when it is not given
        today: Date to use as today
        default_end_date: End date for lastN/previousN instead of today

    Returns:
        DecompositionResult with subperiods in chronological order

    Raises:
        InvalidRangeExpression: If expression is not valid
        InvalidPeriodUnit: If unit is not valid

    Examples:
        >>> result = decompose("month", "last2", today="2024-03-15")
        >>> [str(sp) for sp in result]
        ['month[2024-02-01 → 2024-02-29]', 'month[2024-03-01 → 2024-03-31]']
        >>> result.effective_end_date
        datetime.date(2024, 3, 31)
    """
    return Range(unit, expression, timezone, today, default_end_date=default_end_date).decompose()


def get_prior_unit_shift(
    expression: str,
    unit: UnitToken,
    timezone: str = DEFAULT_TIMEZONE,
    today: DateLike | None = None,
) -> PriorShift:
    """
    Shift a request back by one unit, for comparing a period with the one before it.

    Single dates move back one unit; explicit ranges move both bounds of their
    decomposition back one unit. Ranges of unit "range" and lastN/previousN
    expressions have no well-defined predecessor and give PriorShift.unsupported().

    Examples:
        >>> get_prior_unit_shift("2024-03-15", "month").expression
        '2024-02-15'

        >>> get_prior_unit_shift("2024-01-01,2024-01-10", "day").expression
        '2023-12-31,2024-01-09'

        >>> get_prior_unit_shift("last7", "day").supported
        False
    """
    period_unit = parse_unit(unit)
    if period_unit == RANGE or is_relative_expression(expression):
        return PriorShift.unsupported()

    try:
        if "," in expression:
            date_range = Range(unit, expression, timezone, today)
            shifted = DateRange(date_range.date_start, date_range.date_end).shift_by_units(-1, period_unit)
            return PriorShift(shifted.as_expression())

        reference = today_in(timezone) if today is None else to_date(today)
        shifted_date = add_units(resolve_date_token(expression, reference), -1, period_unit)
    except InvalidRangeExpression:
        logger.debug("No prior period for %s %r", unit, expression)
        return PriorShift.unsupported()

    return PriorShift(shifted_date.isoformat(), Subperiod(period_unit, shifted_date))
