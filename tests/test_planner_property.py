from __future__ import annotations

from datetime import date, timedelta

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from periodrange import MAX_LAST_N, PeriodUnit, decompose, fill_uniform, plan_optimal

# Property-based tests (skipped if hypothesis is not installed)
hypothesis = pytest.importorskip("hypothesis")

DATES = st.dates(min_value=date(1990, 1, 1), max_value=date(2040, 12, 31))
SPAN_DAYS = st.integers(min_value=0, max_value=800)
UNITS = st.sampled_from(list(PeriodUnit))


def assert_contiguous(subperiods) -> None:
    for previous, current in zip(subperiods, subperiods[1:]):
        assert current.date_start == previous.date_end + timedelta(days=1)


@settings(deadline=None)
@given(DATES, SPAN_DAYS, st.integers(min_value=1, max_value=400))
def test_elapsed_span_is_tiled_exactly(date_start, span, days_after_end):
    """When the span ends before today, subperiods cover exactly [start, end]."""
    date_end = date_start + timedelta(days=span)
    today = date_end + timedelta(days=days_after_end)

    result = plan_optimal(date_start, date_end, today)

    assert result[0].date_start == date_start
    assert result[-1].date_end == date_end
    assert_contiguous(result)


@settings(deadline=None)
@given(DATES, SPAN_DAYS, DATES)
def test_any_today_covers_every_day(date_start, span, today):
    """Whatever today is, every day of the span falls in some subperiod.

    Units that have not finished yet are used whole, so they may reach
    outside the span.
    """
    date_end = date_start + timedelta(days=span)

    covered = set()
    for subperiod in plan_optimal(date_start, date_end, today):
        covered.update(subperiod.date_start + timedelta(days=i) for i in range(subperiod.days_count()))

    assert all(date_start + timedelta(days=i) in covered for i in range(span + 1))


@given(DATES, st.integers(min_value=1, max_value=400), DATES)
def test_reversed_span_is_empty(date_end, gap, today):
    assert plan_optimal(date_end + timedelta(days=gap), date_end, today) == []


@settings(deadline=None)
@given(DATES, SPAN_DAYS, UNITS)
def test_fill_uniform_covers_both_ends(date_start, span, unit):
    date_end = date_start + timedelta(days=span)

    result = fill_uniform(date_start, date_end, unit)

    assert all(sp.unit is unit for sp in result)
    assert result[0].contains(date_start)
    assert result[-1].contains(date_end)
    assert_contiguous(result)


@settings(deadline=None)
@given(DATES, SPAN_DAYS, UNITS)
def test_fill_uniform_redecomposition_is_idempotent(date_start, span, unit):
    """Decomposing each subperiod's own bounds gives that subperiod back."""
    date_end = date_start + timedelta(days=span)

    for subperiod in fill_uniform(date_start, date_end, unit):
        assert fill_uniform(subperiod.date_start, subperiod.date_end, unit) == [subperiod]


@settings(deadline=None, max_examples=50)
@given(UNITS, st.integers(min_value=1, max_value=3000), DATES)
def test_lastN_count_is_capped(unit, n, today):
    result = decompose(unit.value, f"last{n}", today=today)
    assert len(result) == min(n, MAX_LAST_N[unit])
    assert result.subperiods[-1].contains(today)
