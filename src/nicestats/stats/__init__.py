"""Single-pass statistics: scalar accumulator and pairwise correlation tracker."""

from nicestats.stats.incremental_pearson import (
    IncrementalPearson,
    RowSummary,
    triangular_index,
    triangular_size,
)
from nicestats.stats.incremental_stats import IncrementalStats
from nicestats.stats.measured_stats import MeasuredStats

__all__ = [
    "IncrementalPearson",
    "IncrementalStats",
    "MeasuredStats",
    "RowSummary",
    "triangular_index",
    "triangular_size",
]
