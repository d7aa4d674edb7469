"""Errors raised while resolving and decomposing date ranges."""

from __future__ import annotations


class PeriodRangeError(Exception):
    """Base class for all periodrange errors."""


class InvalidRangeExpression(PeriodRangeError, ValueError):
    """Expression is neither ``lastN``/``previousN`` nor ``YYYY-MM-DD,YYYY-MM-DD``."""


class InvalidPeriodUnit(PeriodRangeError, ValueError):
    """Unit token is not one of day, week, month, year or range."""


class CalendarArithmeticOverflow(PeriodRangeError, OverflowError):
    """Date arithmetic produced a date outside the supported calendar (years 1..9999)."""
