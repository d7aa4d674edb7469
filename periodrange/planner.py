"""Split a date span into calendar subperiods.

Two strategies:
- fill_uniform: every day/week/month/year touching the span, partial boundary units included whole
- plan_optimal: greedy month > week > day covering used for the "range" pseudo-unit

plan_optimal is a small state machine. ``choose_unit`` is a pure function that
looks at the first uncovered day and returns the next Step (what to emit and
where to continue); ``plan_optimal`` only applies steps until it reaches DONE.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import assert_never

from .date import PeriodUnit, add_units, compare, end_of, same_year_month, start_of
from .subperiod import Subperiod

logger = logging.getLogger(__name__)


class PlannerState(Enum):
    CHOOSE_UNIT = "choose_unit"
    EMIT_MONTH = "emit_month"
    EMIT_WEEK = "emit_week"
    EMIT_DAYS = "emit_days"
    DONE = "done"


@dataclass(frozen=True)
class Step:
    """One planner transition.

    Attributes:
        state: What to emit (EMIT_MONTH, EMIT_WEEK, EMIT_DAYS) or DONE
        date_start: First day covered by this step
        date_end: Last day covered by this step (inclusive)
        next_start: First uncovered day after this step, None when the walk ends here
    """

    state: PlannerState
    date_start: date
    date_end: date
    next_start: date | None

    def subperiods(self) -> list[Subperiod]:
        match self.state:
            case PlannerState.EMIT_MONTH:
                return [Subperiod(PeriodUnit.MONTH, self.date_start)]
            case PlannerState.EMIT_WEEK:
                return [Subperiod(PeriodUnit.WEEK, self.date_start)]
            case PlannerState.EMIT_DAYS:
                return fill_uniform(self.date_start, self.date_end, PeriodUnit.DAY)
            case PlannerState.DONE:
                return []
            case PlannerState.CHOOSE_UNIT:
                raise ValueError("a step never stops in CHOOSE_UNIT")
            case _:
                assert_never(self.state)


def fill_uniform(date_start: date, date_end: date, unit: PeriodUnit) -> list[Subperiod]:
    """
    Every ``unit`` subperiod from the one containing date_start to the one containing date_end.

    Walks backwards from the subperiod containing date_end, so the result always
    holds at least that subperiod even when date_start is after date_end.

    Examples:
        >>> [str(sp) for sp in fill_uniform(date(2024, 1, 20), date(2024, 3, 5), PeriodUnit.MONTH)]
        ['month[2024-01-01 → 2024-01-31]', 'month[2024-02-01 → 2024-02-29]', 'month[2024-03-01 → 2024-03-31]']
    """
    subperiod = Subperiod(unit, date_end)
    found = [subperiod]

    cursor = subperiod.date_start
    while cursor > date_start:
        subperiod = Subperiod(unit, add_units(cursor, -1, unit))
        found.append(subperiod)
        cursor = subperiod.date_start

    found.reverse()
    return found


def month_fits(cursor: date, date_end: date, today: date) -> bool:
    """Whether the whole month starting at cursor can be used as one subperiod.

    The month is used when it starts at cursor and either ends within the span
    or has not finished yet. It is never used when the span ends before today
    while today is still inside that month.
    """
    month_start = start_of(PeriodUnit.MONTH, cursor)
    month_end = end_of(PeriodUnit.MONTH, cursor)
    return (
        cursor == month_start
        and (month_end <= date_end or month_end > today)
        and not (date_end < today and same_year_month(today, month_end))
    )


def choose_unit(cursor: date, date_end: date, today: date) -> Step:
    """Decide how to cover the span starting at cursor, the first uncovered day."""
    if compare(cursor, date_end) > 0:
        return Step(PlannerState.DONE, cursor, date_end, None)

    month_end = end_of(PeriodUnit.MONTH, cursor)
    if month_fits(cursor, date_end, today):
        return Step(PlannerState.EMIT_MONTH, cursor, month_end, add_units(month_end, 1, PeriodUnit.DAY))

    week_start = start_of(PeriodUnit.WEEK, cursor)
    week_end = end_of(PeriodUnit.WEEK, cursor)
    use_months_next = add_units(cursor, 2, PeriodUnit.MONTH).replace(day=1) < date_end

    if use_months_next and week_end > month_end:
        # days up to the month end so that the next month can be taken whole
        return Step(PlannerState.EMIT_DAYS, cursor, month_end, add_units(month_end, 1, PeriodUnit.DAY))
    if week_end > date_end and (week_end < today or date_end < today):
        return Step(PlannerState.EMIT_DAYS, cursor, date_end, None)
    if week_start < cursor and week_end < today:
        return Step(PlannerState.EMIT_DAYS, cursor, week_end, add_units(week_end, 1, PeriodUnit.DAY))
    return Step(PlannerState.EMIT_WEEK, cursor, week_end, add_units(week_end, 1, PeriodUnit.DAY))


def plan_optimal(date_start: date, date_end: date, today: date) -> list[Subperiod]:
    """
    Cover [date_start, date_end] with the fewest months, weeks and days.

    Months are preferred over weeks and weeks over days. A unit may end after
    date_end only when it has not finished as of today. A span that ends
    before it starts gives an empty list.

    Args:
        date_start: First day to cover
        date_end: Last day to cover (inclusive)
        today: Cutoff date; periods ending after it count as not finished

    Returns:
        Subperiods in chronological order

    Examples:
        >>> [str(sp) for sp in plan_optimal(date(2019, 2, 1), date(2019, 3, 3), date(2019, 6, 1))]
        ['month[2019-02-01 → 2019-02-28]', 'day[2019-03-01 → 2019-03-01]', 'day[2019-03-02 → 2019-03-02]', 'day[2019-03-03 → 2019-03-03]']
    """
    subperiods: list[Subperiod] = []
    cursor: date | None = date_start

    while cursor is not None:
        step = choose_unit(cursor, date_end, today)
        logger.debug("%s %s..%s", step.state.value, step.date_start, step.date_end)
        subperiods.extend(step.subperiods())

        cursor = step.next_start

    return subperiods
