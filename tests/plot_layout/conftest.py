"""Fixtures for plot layout tests."""

from __future__ import annotations

import numpy as np
import pytest

from nicestats.plot_layout.distribution_layout import DistributionLayout, HistogramEntry


@pytest.fixture
def small_layout() -> DistributionLayout:
    """Four points in 4 bins: three stacked at 0.0 in bin 0, one at 10.0 in bin 3."""
    layout = DistributionLayout(num_bins=4, track_rows=True)
    layout.add_sorted_values([(1, 0.0), (2, 0.0), (3, 0.0), (4, 10.0)])
    return layout


@pytest.fixture
def midpoint_entries() -> list[HistogramEntry]:
    """Range 0..10 with one value at the middle of each of 10 unit bins."""
    values = [0.0] + [b + 0.5 for b in range(10)] + [10.0]
    return [HistogramEntry(i, v) for i, v in enumerate(values)]


@pytest.fixture
def normal_entries() -> list[tuple[int, float]]:
    """500 sorted normal samples as (id, value) pairs."""
    rng = np.random.default_rng(42)
    values = np.sort(rng.normal(50.0, 12.0, size=500))
    return [(1000 + i, float(v)) for i, v in enumerate(values)]
