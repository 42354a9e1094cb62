"""Plot span configuration for the distribution layout.

This module defines the PlotSpans dataclass: the named percentage-space
constants (paddings, line widths, marker cap, plot origin and extent) that
parameterize DistributionLayout. The whole plot lives in a 0-100 x 0-100 box.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

from nicestats.utils.logging import get_logger

logger = get_logger(__name__)

# Number of bins used by the histogram display when none is given.
DEFAULT_NUM_BINS = 75

# Spans the caller sets directly; the remaining four are derived from these.
_BASE_FIELDS = (
    "axis_line_width_pct",
    "grid_line_width_pct",
    "mean_line_width_pct",
    "median_line_width_pct",
    "pad_x_pct",
    "inner_pad_pct",
    "pad_y_pct",
    "max_marker_diameter_pct",
)


@dataclass(frozen=True)
class PlotSpans:
    """Defines how the plot area is broken up.

    The x axis runs from ``pad_x_pct`` to ``100 - pad_x_pct``; the first bin
    starts ``inner_pad_pct`` inside it. Points stack upward from
    ``plot_base_y_pct`` (just above the axis line) through ``plot_height_pct``.
    """
    axis_line_width_pct: float = 0.20         # width of x-axis at the bottom
    grid_line_width_pct: float = 0.5
    mean_line_width_pct: float = 0.5          # vertical mean line
    median_line_width_pct: float = 0.5        # vertical median line
    pad_x_pct: float = 1.0                    # padding left and right of chart
    inner_pad_pct: float = 1.5                # inside the axis before first/last point
    pad_y_pct: float = 2.0                    # padding top and bottom of chart
    max_marker_diameter_pct: float = 10.0     # absolute cap on marker diameter
    first_bin_x_start_pct: float = 2.5        # left edge of bin 0
    plot_width_pct: float = 95.0              # width of binned area from first_bin_x_start
    plot_base_y_pct: float = 97.8             # y of the base of the stacks
    plot_height_pct: float = 94.3             # height available for stacking

    def __post_init__(self) -> None:
        if self.plot_width_pct <= 0:
            raise ValueError(f"plot_width_pct must be > 0, got {self.plot_width_pct}")
        if self.plot_height_pct <= 0:
            raise ValueError(f"plot_height_pct must be > 0, got {self.plot_height_pct}")
        if self.max_marker_diameter_pct <= 0:
            raise ValueError(
                f"max_marker_diameter_pct must be > 0, got {self.max_marker_diameter_pct}"
            )

    @classmethod
    def from_base(
        cls,
        *,
        axis_line_width_pct: float = 0.20,
        grid_line_width_pct: float = 0.5,
        mean_line_width_pct: float = 0.5,
        median_line_width_pct: float = 0.5,
        pad_x_pct: float = 1.0,
        inner_pad_pct: float = 1.5,
        pad_y_pct: float = 2.0,
        max_marker_diameter_pct: float = 10.0,
    ) -> "PlotSpans":
        """Build spans from the base widths, deriving the plot origin and extent."""
        first_bin_x_start_pct = pad_x_pct + inner_pad_pct
        # Entire width, less left side up to start of bin 0, less right padding
        plot_width_pct = 100.0 - first_bin_x_start_pct - pad_x_pct - inner_pad_pct
        plot_base_y_pct = 100.0 - pad_y_pct - axis_line_width_pct
        plot_height_pct = plot_base_y_pct - pad_y_pct - inner_pad_pct
        return cls(
            axis_line_width_pct=axis_line_width_pct,
            grid_line_width_pct=grid_line_width_pct,
            mean_line_width_pct=mean_line_width_pct,
            median_line_width_pct=median_line_width_pct,
            pad_x_pct=pad_x_pct,
            inner_pad_pct=inner_pad_pct,
            pad_y_pct=pad_y_pct,
            max_marker_diameter_pct=max_marker_diameter_pct,
            first_bin_x_start_pct=first_bin_x_start_pct,
            plot_width_pct=plot_width_pct,
            plot_base_y_pct=plot_base_y_pct,
            plot_height_pct=plot_height_pct,
        )

    @classmethod
    def with_defaults(cls) -> "PlotSpans":
        """Basic configuration."""
        return cls.from_base()

    @property
    def axis_y_pct(self) -> float:
        """y of the center of the x-axis line."""
        return self.plot_base_y_pct + self.axis_line_width_pct / 2.0

    def to_dict(self) -> dict[str, Any]:
        """Serialize PlotSpans to a dictionary with all fields."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlotSpans":
        """Deserialize PlotSpans from a dictionary.

        Missing base spans take their defaults. When any derived span is missing
        all four are recomputed from the base spans. Unknown keys are ignored
        with a warning.

        Raises:
            ValueError: If a value cannot be converted to float.
        """
        known = {f.name for f in fields(cls)}
        for key in data:
            if key not in known:
                logger.warning(f"Unknown key '{key}' in plot spans, ignoring")

        try:
            base = {k: float(data[k]) for k in _BASE_FIELDS if k in data}
            derived = {k: float(data[k]) for k in known - set(_BASE_FIELDS) if k in data}
        except (TypeError, ValueError) as e:
            raise ValueError(f"PlotSpans values must be numeric: {e}") from e

        spans = cls.from_base(**base)
        if len(derived) == len(known) - len(_BASE_FIELDS):
            return cls(**{**spans.to_dict(), **derived})
        if derived:
            logger.warning(
                f"Partial derived spans {sorted(derived)} ignored; recomputed from base spans"
            )
        return spans
