"""Tests for MeasuredStats display and serialization."""

from dataclasses import FrozenInstanceError

import pytest

from nicestats.stats.incremental_stats import IncrementalStats
from nicestats.stats.measured_stats import MeasuredStats


def test_str_with_median():
    stats = IncrementalStats.from_values([1.0, 2.0, 3.0], track_median=True)
    stats.finalize_median()
    assert str(stats.get_measured_stats()) == (
        "(N=3, min=1.00000, max=3.00000, med=2.00000, mean=2.00000, SD=1.00000)"
    )


def test_str_without_median_and_missing_values():
    """Absent measures print as '_' and the median part is omitted."""
    assert str(MeasuredStats(count=1, min=4.0, max=4.0, mean=4.0)) == (
        "(N=1, min=4.00000, max=4.00000, mean=4.00000, SD=_)"
    )
    assert str(MeasuredStats()) == "(N=0, min=_, max=_, mean=_, SD=_)"


def test_to_dict():
    d = MeasuredStats(count=2, min=1.0, max=2.0, mean=1.5, std_dev=0.5).to_dict()
    assert d == {
        "count": 2,
        "min": 1.0,
        "max": 2.0,
        "mean": 1.5,
        "median": None,
        "std_dev": 0.5,
    }


def test_frozen():
    with pytest.raises(FrozenInstanceError):
        MeasuredStats().count = 3  # type: ignore[misc]
