"""
Single-pass statistics for one stream of values.

Mean and variance follow Welford's update so that no history has to be kept and
there is no catastrophic cancellation from a naive sum of squares. The only
O(n) memory is the optional value buffer used to finalize a median.
"""

from __future__ import annotations

import math
from typing import Iterable, Optional

from nicestats.stats.measured_stats import MeasuredStats
from nicestats.utils.logging import get_logger

logger = get_logger(__name__)


class IncrementalStats:
    """Tracks count, mean, variance, min, max and (optionally) median in one pass.

    Attributes:
        median: Lower median of the pushed values; None until finalize_median().
    """

    def __init__(self, median_capacity: int = 0) -> None:
        """Create an empty accumulator.

        Args:
            median_capacity: Expected number of values. Non-zero enables median
                tracking, which retains every pushed value until finalize_median().
        """
        if median_capacity < 0:
            raise ValueError(f"median_capacity must be >= 0, got {median_capacity}")
        self._count = 0
        self.prior_mean = 0.0
        self._mean = 0.0
        self.sum_squared_diff = 0.0
        self._min = math.inf
        self._max = -math.inf
        self._values: Optional[list[float]] = [] if median_capacity > 0 else None
        self.median: Optional[float] = None

    @classmethod
    def from_values(cls, values: Iterable[float], track_median: bool = False) -> "IncrementalStats":
        """Build an accumulator with values already pushed.

        Args:
            values: Values to push.
            track_median: If True, retain values so finalize_median() can be called.
        """
        values = list(values)
        result = cls(median_capacity=max(len(values), 1) if track_median else 0)
        result.push_values(values)
        return result

    def push_value(self, value: float) -> None:
        """Push one value (Welford update).

        Raises:
            ValueError: If value is NaN or infinite; nothing is updated.
        """
        if not math.isfinite(value):
            raise ValueError(f"push_value() requires a finite value, got {value!r}")
        prior_n = float(self._count)
        self._count += 1
        n = prior_n + 1.0

        delta = value - self._mean
        delta_n = delta / n
        self.prior_mean = self._mean
        self._mean += delta_n
        self.sum_squared_diff += delta * delta_n * prior_n
        if value < self._min:
            self._min = value
        if value > self._max:
            self._max = value

        if self._values is not None:
            self._values.append(value)

    def push_values(self, values: Iterable[float]) -> None:
        for value in values:
            self.push_value(value)

    def count(self) -> int:
        return self._count

    def mean(self) -> Optional[float]:
        return self._mean if self._count > 0 else None

    def min(self) -> Optional[float]:
        return self._min if self._count > 0 else None

    def max(self) -> Optional[float]:
        return self._max if self._count > 0 else None

    def variance(self) -> Optional[float]:
        """Sample variance (divisor n - 1); None with fewer than two values."""
        if self._count > 1:
            return self.sum_squared_diff / (self._count - 1)
        return None

    def std_dev(self) -> Optional[float]:
        """Sample standard deviation; None with fewer than two values."""
        variance = self.variance()
        return math.sqrt(variance) if variance is not None else None

    @property
    def values(self) -> Optional[list[float]]:
        """Retained values (None when median is not tracked or was finalized)."""
        return self._values

    @property
    def tracks_median(self) -> bool:
        return self._values is not None

    def finalize_median(self, keep_values: bool = False) -> None:
        """Sort the retained values and fix the median.

        The lower median is used for even counts: the value at ``(len - 1) // 2``.
        The retained values are dropped afterwards to reclaim memory unless
        ``keep_values`` is set.

        Raises:
            ValueError: If median tracking was not enabled (or the values were
                already dropped by an earlier call).
        """
        if self._values is None:
            raise ValueError(
                "finalize_median() requires median tracking; create with median_capacity > 0"
            )
        if self._values:
            self._values.sort()
            self.median = self._values[(len(self._values) - 1) // 2]
            logger.debug(
                "Sorted %d values to get to median -> %s",
                len(self._values),
                self.get_measured_stats(),
            )

        if not keep_values:
            self._values = None

    def get_measured_stats(self) -> MeasuredStats:
        """The bundle of stats so far (count=0 and all None when empty)."""
        if self._count == 0:
            return MeasuredStats()
        return MeasuredStats(
            count=self._count,
            min=self._min,
            max=self._max,
            mean=self._mean,
            median=self.median,
            std_dev=self.std_dev(),
        )

    def __repr__(self) -> str:
        return f"IncrementalStats{self.get_measured_stats()}"
