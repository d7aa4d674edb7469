"""A single calendar subperiod: one day, week, month or year."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from .date import DateLike, DateRange, PeriodUnit, end_of, start_of, to_date


@dataclass(frozen=True, init=False)
class Subperiod:
    """One concrete calendar unit identified by its unit and an anchor date.

    The anchor is normalized to the first day of its unit, so any date inside
    the same month (week, ...) yields an equal descriptor.

    Examples:
        >>> sp = Subperiod(PeriodUnit.MONTH, "2024-02-17")
        >>> sp.date_start, sp.date_end
        (datetime.date(2024, 2, 1), datetime.date(2024, 2, 29))

        >>> Subperiod(PeriodUnit.WEEK, "2024-01-03") == Subperiod(PeriodUnit.WEEK, "2024-01-07")
        True
    """

    unit: PeriodUnit
    anchor: date

    def __init__(self, unit: PeriodUnit, anchor: DateLike):
        object.__setattr__(self, "unit", unit)
        object.__setattr__(self, "anchor", start_of(unit, to_date(anchor)))

    def __str__(self) -> str:
        return f"{self.unit.value}{self.as_range()}"

    @property
    def label(self) -> str:
        return self.unit.value

    @property
    def date_start(self) -> date:
        return self.anchor

    @property
    def date_end(self) -> date:
        return end_of(self.unit, self.anchor)

    def as_range(self) -> DateRange:
        return DateRange(self.date_start, self.date_end)

    def contains(self, d: DateLike) -> bool:
        return self.as_range().contains(d)

    def days_count(self) -> int:
        return self.as_range().days_count()
