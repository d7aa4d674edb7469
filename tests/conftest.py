from __future__ import annotations

from collections.abc import Iterable

import pytest

from periodrange.subperiod import Subperiod


def describe(subperiods: Iterable[Subperiod]) -> list[tuple[str, str]]:
    """Render subperiods as (unit, start) pairs for compact assertions."""
    return [(sp.label, sp.date_start.isoformat()) for sp in subperiods]


@pytest.fixture()
def describe_subperiods():
    return describe


@pytest.fixture()
def assert_tiles():
    """Check that subperiods cover [start, end] with no gap and no overlap, in order."""

    def check(subperiods: Iterable[Subperiod], start, end) -> None:
        subperiods = list(subperiods)
        assert subperiods, "expected at least one subperiod"
        assert subperiods[0].date_start == start
        assert subperiods[-1].date_end == end
        for previous, current in zip(subperiods, subperiods[1:]):
            assert (current.date_start - previous.date_end).days == 1, f"{previous} and {current} do not touch"

    return check
