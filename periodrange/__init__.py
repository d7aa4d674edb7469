"""
Period Range Package

Decompose arbitrary date ranges and relative expressions (lastN, previousN)
into ordered calendar subperiods: days, weeks, months and years.
"""

from .date import DateLike, DateRange, PeriodUnit, add_units, end_of, start_of, to_date, to_date_iso_str, today_in
from .exceptions import CalendarArithmeticOverflow, InvalidPeriodUnit, InvalidRangeExpression, PeriodRangeError
from .planner import fill_uniform, plan_optimal
from .range import DecompositionResult, PriorShift, Range, decompose, get_prior_unit_shift
from .resolver import MAX_LAST_N, parse_date_range, resolve_expression
from .subperiod import Subperiod

__version__ = "0.1.0"
__all__ = [
    # Calendar helpers
    "DateLike",
    "DateRange",
    "PeriodUnit",
    "to_date",
    "to_date_iso_str",
    "today_in",
    "add_units",
    "start_of",
    "end_of",
    # Decomposition
    "Subperiod",
    "Range",
    "DecompositionResult",
    "PriorShift",
    "decompose",
    "get_prior_unit_shift",
    "fill_uniform",
    "plan_optimal",
    "resolve_expression",
    "parse_date_range",
    "MAX_LAST_N",
    # Errors
    "PeriodRangeError",
    "InvalidRangeExpression",
    "InvalidPeriodUnit",
    "CalendarArithmeticOverflow",
]
