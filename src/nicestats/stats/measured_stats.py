"""Bundled statistics measures for tabular display."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Optional

# Decimal places used by MeasuredStats.__str__
DISPLAY_PRECISION = 5


def _format_item(value: Optional[float], prec: int = DISPLAY_PRECISION) -> str:
    """Format an optional float, '_' when absent."""
    if value is None:
        return "_"
    return f"{value:.{prec}f}"


@dataclass(frozen=True)
class MeasuredStats:
    """Count, min, max, mean, median and standard deviation of a value stream.

    Every measure except ``count`` is optional: it is None when there is not
    enough data for it (e.g. std_dev with fewer than two values, or median when
    median tracking was not requested).
    """

    count: int = 0
    min: Optional[float] = None
    max: Optional[float] = None
    mean: Optional[float] = None
    median: Optional[float] = None
    std_dev: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict (one entry per field)."""
        return asdict(self)

    def __str__(self) -> str:
        median = f" med={_format_item(self.median)}," if self.median is not None else ""
        return (
            f"(N={self.count}, min={_format_item(self.min)}, max={_format_item(self.max)},"
            f"{median} mean={_format_item(self.mean)}, SD={_format_item(self.std_dev)})"
        )
