"""
Incremental Pearson coefficient (correlation) tracking.

Incremental means the data never has to be in memory at once: rows of k
parallel observations are added one at a time and only running summaries are
kept, so a correlation matrix over a long simulation costs O(k^2) memory instead
of a k x N matrix.

Per-dimension mean/variance use Welford's update. Pairwise covariance is kept in
a flat lower-triangular buffer; entry (i, j) with i >= j lives at
``i * (i + 1) // 2 + j``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

import numpy as np
import pandas as pd

from nicestats.stats.measured_stats import MeasuredStats
from nicestats.utils.logging import get_logger

logger = get_logger(__name__)


def triangular_size(row_dim: int) -> int:
    """Number of entries in a lower-triangular matrix (diagonal included)."""
    return row_dim * (row_dim + 1) // 2


def triangular_index(i: int, j: int) -> int:
    """Flat index of entry (i, j) in lower-triangular storage.

    Order does not matter: (i, j) and (j, i) map to the same entry.
    """
    if i < j:
        i, j = j, i
    return i * (i + 1) // 2 + j


@dataclass
class RowSummary:
    """Running summary for one tracked dimension.

    ``variance`` is the running sum of squared differences (M2), not the
    variance itself; divide by ``rows_tracked - 1`` to get the sample variance.
    """

    prior_mean: float = 0.0
    mean: float = 0.0
    min: float = math.inf
    max: float = -math.inf
    variance: float = 0.0


class IncrementalPearson:
    """Incrementally tracks means, standard deviations and pairwise correlations.

    StdDev: https://math.stackexchange.com/questions/102978/incremental-computation-of-standard-deviation
    Correlation: https://stats.stackexchange.com/questions/410468/online-update-of-pearson-coefficient
    """

    def __init__(self, row_dim: int) -> None:
        """
        Args:
            row_dim: Number of parallel streams (k). Fixed for the tracker's lifetime.
        """
        if row_dim < 1:
            raise ValueError(f"row_dim must be >= 1, got {row_dim}")
        self._row_dim = int(row_dim)
        self._rows = [RowSummary() for _ in range(self._row_dim)]
        self._cov = np.zeros(triangular_size(self._row_dim), dtype=np.float64)
        self._rows_tracked = 0

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[float]], row_dim: Optional[int] = None) -> "IncrementalPearson":
        """Build a tracker from an iterable of rows.

        Args:
            rows: Rows of k values each.
            row_dim: Dimension count; inferred from the first row when None.
        """
        rows = [np.asarray(row, dtype=np.float64) for row in rows]
        if row_dim is None:
            if not rows:
                raise ValueError("row_dim is required when rows is empty")
            row_dim = len(rows[0])
        result = cls(row_dim)
        result.track_rows(rows)
        return result

    @property
    def row_dim(self) -> int:
        return self._row_dim

    @property
    def rows_tracked(self) -> int:
        return self._rows_tracked

    @property
    def rows(self) -> list[RowSummary]:
        return self._rows

    @property
    def covariance_store(self) -> np.ndarray:
        """Copy of the flat triangular covariance accumulator."""
        return self._cov.copy()

    def _check_index(self, index: int) -> int:
        if not 0 <= index < self._row_dim:
            raise IndexError(f"dimension index {index} out of range for row_dim {self._row_dim}")
        return index

    def track_row(self, values: Sequence[float]) -> None:
        """Add one observation per dimension.

        Means are advanced first with each dimension's prior mean saved; the
        covariance increments then use only the saved prior means.

        Raises:
            ValueError: If ``len(values) != row_dim`` or a value is NaN or
                infinite. The tracker is unchanged when the row is rejected.
        """
        x = np.asarray(values, dtype=np.float64)
        if x.ndim != 1 or x.shape[0] != self._row_dim:
            raise ValueError(f"track_row expects {self._row_dim} values, got shape {x.shape}")
        if not np.isfinite(x).all():
            bad = [int(i) for i in np.flatnonzero(~np.isfinite(x))]
            raise ValueError(f"track_row values must be finite; non-finite at dimensions {bad}")

        prior_n = float(self._rows_tracked)
        n = prior_n + 1.0

        for row, value in zip(self._rows, x):
            value = float(value)
            delta = value - row.mean
            delta_n = delta / n
            row.prior_mean = row.mean
            row.mean += delta_n
            row.variance += delta * delta_n * prior_n
            if value > row.max:
                row.max = value
            if value < row.min:
                row.min = value

        prior_means = np.fromiter((row.prior_mean for row in self._rows), dtype=np.float64, count=self._row_dim)
        deviations = prior_means - x
        scale = prior_n / n
        for i in range(self._row_dim):
            start = triangular_index(i, 0)
            # Row i of the triangle holds (i, 0) .. (i, i) contiguously
            self._cov[start:start + i + 1] += deviations[i] * deviations[: i + 1] * scale

        self._rows_tracked += 1

    def track_rows(self, rows: Iterable[Sequence[float]]) -> None:
        for row in rows:
            self.track_row(row)

    def get_mean(self, index: int) -> Optional[float]:
        self._check_index(index)
        if self._rows_tracked > 0:
            return self._rows[index].mean
        return None

    def get_std_dev(self, index: int) -> Optional[float]:
        self._check_index(index)
        if self._rows_tracked > 1:
            return math.sqrt(self._rows[index].variance / (self._rows_tracked - 1))
        return None

    def get_est_normal(self, index: int) -> Optional[tuple[float, float]]:
        """Estimated normal (mean, std_dev) of a dimension; None before two rows."""
        std_dev = self.get_std_dev(index)
        if std_dev is None:
            return None
        return self._rows[index].mean, std_dev

    def get_covariance(self, index: tuple[int, int]) -> Optional[float]:
        """Sample covariance of a pair; None before two rows."""
        i, j = (self._check_index(index[0]), self._check_index(index[1]))
        if self._rows_tracked > 1:
            return float(self._cov[triangular_index(i, j)]) / (self._rows_tracked - 1)
        return None

    def get_pearson_coefficient(self, index: tuple[int, int]) -> Optional[float]:
        """Correlation of a pair of dimensions.

        Returns None before two rows or when either dimension has zero variance.
        """
        i, j = (self._check_index(index[0]), self._check_index(index[1]))
        if self._rows_tracked <= 1:
            return None
        t = self.get_std_dev(i) * self.get_std_dev(j)
        if not (0.0 < t < math.inf):
            return None
        if i == j:
            return 1.0
        coefficient = float(self._cov[triangular_index(i, j)]) / ((self._rows_tracked - 1) * t)
        if math.isnan(coefficient):
            # Accumulators overflowed on extreme but finite values
            return None
        return min(1.0, max(-1.0, coefficient))

    def get_measured_stats(self, index: int) -> Optional[MeasuredStats]:
        """Bundle of stats for one dimension; None when no rows were tracked."""
        self._check_index(index)
        if self._rows_tracked == 0:
            return None
        row = self._rows[index]
        return MeasuredStats(
            count=self._rows_tracked,
            min=row.min,
            max=row.max,
            mean=row.mean,
            median=None,
            std_dev=self.get_std_dev(index),
        )

    def correlation_matrix(self, labels: Optional[Sequence[str]] = None) -> pd.DataFrame:
        """Full symmetric correlation matrix as a DataFrame.

        Undefined coefficients are None (object dtype), never NaN.

        Args:
            labels: Row/column labels; defaults to 0..k-1.
        """
        if labels is None:
            labels = list(range(self._row_dim))
        elif len(labels) != self._row_dim:
            raise ValueError(f"expected {self._row_dim} labels, got {len(labels)}")
        matrix = [
            [self.get_pearson_coefficient((i, j)) for j in range(self._row_dim)]
            for i in range(self._row_dim)
        ]
        return pd.DataFrame(matrix, index=list(labels), columns=list(labels), dtype=object)

    def __repr__(self) -> str:
        return f"IncrementalPearson(row_dim={self._row_dim}, rows_tracked={self._rows_tracked})"
