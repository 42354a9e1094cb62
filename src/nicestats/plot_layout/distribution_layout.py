"""
Stacked-marker layout of a value distribution (a "jittered histogram").

DistributionLayout takes batches of sorted (id, value) observations and lays
every observation out as a circular marker in a 0-100 percentage space:

- the value axis is split into ``num_bins`` equal-width bins;
- markers in a bin share the bin's center x and stack upward from the base;
- the marker diameter is the largest that keeps every stack inside the plot
  height and every marker inside its bin, capped by the configured maximum.

Each call to add_sorted_values() expands the value range and rebuilds the
placement of ALL points; there is no partially updated state.

With ``track_rows=True`` the layout also records rows (points at the same stack
height across bins) and provides selector areas to highlight a selected point's
row and bin. Without it, rows are left empty.
"""

from __future__ import annotations

import bisect
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Union

from nicestats.plot_layout.geometry import SvgArea, SvgDim, SvgPoint
from nicestats.plot_layout.plot_spans import DEFAULT_NUM_BINS, PlotSpans
from nicestats.stats.incremental_stats import IncrementalStats
from nicestats.stats.measured_stats import MeasuredStats
from nicestats.utils.logging import get_logger

logger = get_logger(__name__)

# Keeps a marker strictly narrower than its bin.
BIN_WIDTH_EPSILON_PCT = 0.001

# Fraction of the marker radius the pointer is backed away from the point center.
POINTER_SHIFT_FACTOR = 0.65


class DescriptivePoint(Enum):
    """Quartile break points, min, max and mean."""
    MIN = "Min"
    Q1 = "Q1"
    Q2 = "Q2"       # median
    Q3 = "Q3"
    MAX = "Max"
    MEAN = "Mean"   # point at the mean's insertion position


@dataclass(frozen=True)
class HistogramEntry:
    """A value to be incorporated into the layout, with its caller-assigned id."""
    id: int
    value: float


@dataclass
class PlotPoint:
    """Details of a plotted point, including its value and location.

    ``location``, ``bin_index``, ``row_index`` and ``percentile`` are rewritten on
    every placement rebuild.
    """
    id: int
    value: float
    percentile: float = 0.0
    location: SvgPoint = SvgPoint()
    bin_index: int = 0
    row_index: Optional[int] = None


@dataclass
class PointVector:
    """Indices (into the sorted points) of a bin's or a row's points, bottom/left first."""
    plot_points: list[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.plot_points)


EntryLike = Union[HistogramEntry, tuple[int, float]]


def _as_entry(entry: EntryLike) -> HistogramEntry:
    if isinstance(entry, HistogramEntry):
        return entry
    entry_id, value = entry
    return HistogramEntry(int(entry_id), float(value))


class DistributionLayout:
    """Bins sorted values and computes marker geometry for a stacked distribution plot.

    Attributes:
        spans: Span configuration of the plot.
        num_bins: Number of bins; fixed at construction.
        track_rows: Whether rows are tracked (enables get_selector_areas()).
        value_range: (min, max) of all values so far, or None before any values.
        value_factor: Scales a value-space span to percentage space.
        bin_width_pct: Width of a bin in percentage space.
        bin_width: Width of a bin in value space.
        marker_r_pct: Marker radius; varies as the range and bin occupancy change.
        incremental_stats: Running stats of all ingested values.
    """

    def __init__(
        self,
        spans: Optional[PlotSpans] = None,
        num_bins: int = DEFAULT_NUM_BINS,
        *,
        track_rows: bool = False,
    ) -> None:
        if num_bins < 1:
            raise ValueError(f"num_bins must be >= 1, got {num_bins}")
        self.spans = spans if spans is not None else PlotSpans.with_defaults()
        if self.spans.plot_width_pct / num_bins <= BIN_WIDTH_EPSILON_PCT:
            raise ValueError(
                f"num_bins={num_bins} leaves no room for a marker in plot_width_pct={self.spans.plot_width_pct}"
            )
        self.num_bins = int(num_bins)
        self.track_rows = track_rows

        self.value_range: Optional[tuple[float, float]] = None
        self.value_factor = 0.0
        self.bin_width_pct = 0.0
        self.bin_width = 0.0
        self.marker_r_pct = 0.0
        self.max_bin_occupancy = 0

        self._sorted_points: list[PlotPoint] = []
        self._bins = [PointVector() for _ in range(self.num_bins)]
        self._rows: list[PointVector] = []
        self._id_to_index: dict[int, int] = {}
        self.incremental_stats = IncrementalStats()

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._sorted_points)

    @property
    def sorted_points(self) -> list[PlotPoint]:
        """The points, sorted by value."""
        return self._sorted_points

    @property
    def bins(self) -> list[PointVector]:
        return self._bins

    @property
    def rows(self) -> list[PointVector]:
        return self._rows

    @property
    def marker_diameter_pct(self) -> float:
        return self.marker_r_pct * 2.0

    def get_position(self, point_id: int) -> int:
        """Index of the point with ``point_id`` in the sorted points.

        Raises:
            KeyError: If no point has this id.
        """
        try:
            return self._id_to_index[point_id]
        except KeyError:
            raise KeyError(f"No plot point with id {point_id}") from None

    def get_point(self, point_id: int) -> PlotPoint:
        return self._sorted_points[self.get_position(point_id)]

    def get_point_at(self, position: int) -> PlotPoint:
        """Point at ``position`` in value order (e.g. from a position slider)."""
        if not 0 <= position < len(self._sorted_points):
            raise IndexError(f"position {position} out of range for {len(self._sorted_points)} points")
        return self._sorted_points[position]

    def get_measured_stats(self) -> MeasuredStats:
        """Running stats of all values, with the lower median of the sorted points."""
        stats = self.incremental_stats.get_measured_stats()
        if not self._sorted_points:
            return stats
        median = self._sorted_points[(len(self._sorted_points) - 1) // 2].value
        return MeasuredStats(
            count=stats.count,
            min=stats.min,
            max=stats.max,
            mean=stats.mean,
            median=median,
            std_dev=stats.std_dev,
        )

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def add_sorted_values(self, sorted_values: Iterable[EntryLike]) -> None:
        """Augment current data with more values.

        Args:
            sorted_values: (id, value) pairs, as HistogramEntry or tuples, in
                non-decreasing value order.

        Raises:
            ValueError: If values are not finite or not sorted, an id repeats
                (within the batch or with an earlier batch), or the combined
                value span overflows a float. Nothing is changed when the batch
                is rejected.
        """
        entries = [_as_entry(entry) for entry in sorted_values]
        if not entries:
            return
        self._validate_batch(entries)

        current_start, current_end = self.value_range if self.value_range is not None else (math.inf, -math.inf)
        for entry in entries:
            self.incremental_stats.push_value(entry.value)
            current_start = min(current_start, entry.value)
            current_end = max(current_end, entry.value)

        self._merge_points(entries)
        self.update_range_items((current_start, current_end))
        self.place_points()

        logger.debug(
            "Added %d values: %d points in %d bins, range=%s, marker_r_pct=%.4f",
            len(entries),
            len(self._sorted_points),
            self.num_bins,
            self.value_range,
            self.marker_r_pct,
        )

    def _validate_batch(self, entries: list[HistogramEntry]) -> None:
        seen: set[int] = set()
        prior: Optional[float] = None
        for position, entry in enumerate(entries):
            if not math.isfinite(entry.value):
                raise ValueError(f"Value at batch position {position} is not finite: {entry.value!r}")
            if prior is not None and entry.value < prior:
                raise ValueError(
                    f"New values added must be sorted: position {position} value {entry.value!r} "
                    f"follows {prior!r}"
                )
            if entry.id in seen or entry.id in self._id_to_index:
                raise ValueError(f"Duplicate plot point id {entry.id} at batch position {position}")
            seen.add(entry.id)
            prior = entry.value

        start, end = entries[0].value, entries[-1].value
        if self.value_range is not None:
            start = min(start, self.value_range[0])
            end = max(end, self.value_range[1])
        if not math.isfinite(end - start):
            raise ValueError(f"Value span {start!r} .. {end!r} overflows; scale the values before adding them")

    def _merge_points(self, entries: list[HistogramEntry]) -> None:
        """Merge a sorted batch into the sorted points and rebuild the id lookup."""
        merged: list[PlotPoint] = []
        existing = self._sorted_points
        i = 0
        for entry in entries:
            # Existing points with an equal value stay ahead of the new one
            while i < len(existing) and existing[i].value <= entry.value:
                merged.append(existing[i])
                i += 1
            merged.append(PlotPoint(id=entry.id, value=entry.value))
        merged.extend(existing[i:])

        self._sorted_points = merged
        self._id_to_index = {point.id: index for index, point in enumerate(merged)}

    def update_range_items(self, new_range: tuple[float, float]) -> None:
        """Re-evaluate ``value_factor`` and bin widths when the range changes.

        ``value_factor`` maps a value-space span to percentage space so that the
        full range covers ``plot_width_pct``. A zero-width range (one distinct
        value) gives an infinite factor and a zero ``bin_width``.
        """
        if self.value_range is not None and new_range == self.value_range:
            return
        start, end = new_range
        self.value_range = (start, end)
        value_span = (end - start) / (self.spans.plot_width_pct / 100.0)
        self.value_factor = 100.0 / value_span if value_span > 0 else math.inf
        self.bin_width_pct = self.spans.plot_width_pct / self.num_bins
        # Same as bin_width_pct / value_factor, without overflowing near float max
        self.bin_width = (end - start) / self.num_bins

    def _bin_index_for(self, value: float) -> int:
        if self.bin_width <= 0:
            return 0
        bin_index = math.floor((value - self.value_range[0]) / self.bin_width)
        # Float math can land the maximum value just past the last bin
        return min(max(bin_index, 0), self.num_bins - 1)

    def place_points(self) -> None:
        """Assign every point its bin, row, percentile and location."""
        for bin_ in self._bins:
            bin_.plot_points.clear()
        self._rows = []

        num_points = len(self._sorted_points)
        if num_points == 0:
            self.max_bin_occupancy = 0
            self.marker_r_pct = 0.0
            return

        max_points_in_any_bin = 0
        row_index = 0
        prior_bin_index: Optional[int] = None

        for i, plot_point in enumerate(self._sorted_points):
            bin_index = self._bin_index_for(plot_point.value)

            # Advancing to the next bin restarts the stack at the bottom row
            if prior_bin_index is not None and prior_bin_index != bin_index:
                row_index = 0

            plot_point.percentile = i / num_points
            plot_point.bin_index = bin_index
            bin_ = self._bins[bin_index]
            bin_.plot_points.append(i)

            if self.track_rows:
                if row_index == len(self._rows):
                    self._rows.append(PointVector())
                self._rows[row_index].plot_points.append(i)
                plot_point.row_index = row_index
            else:
                plot_point.row_index = None

            max_points_in_any_bin = max(max_points_in_any_bin, len(bin_))
            prior_bin_index = bin_index
            row_index += 1

        self.max_bin_occupancy = max_points_in_any_bin
        diameter = min(
            self.spans.max_marker_diameter_pct,
            self.spans.plot_height_pct / max_points_in_any_bin,
            self.bin_width_pct - BIN_WIDTH_EPSILON_PCT,
        )
        self.marker_r_pct = diameter / 2.0

        half_bin_width = self.bin_width_pct / 2.0
        for bin_index, bin_ in enumerate(self._bins):
            cx = self.spans.first_bin_x_start_pct + bin_index * self.bin_width_pct + half_bin_width
            cy = self.spans.plot_base_y_pct - self.marker_r_pct
            for point_index in bin_.plot_points:
                self._sorted_points[point_index].location = SvgPoint(cx, cy)
                cy -= diameter

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_descriptive_point(self, descriptive_point: DescriptivePoint) -> tuple[int, PlotPoint]:
        """Get the point for a descriptive break point.

        Quartiles are positional: Q1/Q2/Q3 are at 1, 2 and 3 times ``n // 4``.
        Mean is the insertion position of the running mean among the sorted
        values, which is not necessarily the nearest point by distance.

        Returns:
            (position in sorted order, point)

        Raises:
            ValueError: If there are no points.
        """
        n = len(self._sorted_points)
        if n == 0:
            raise ValueError(f"No points to get descriptive point {descriptive_point.name} from")

        quartile_span = n // 4
        if descriptive_point is DescriptivePoint.MIN:
            position = 0
        elif descriptive_point is DescriptivePoint.Q1:
            position = quartile_span
        elif descriptive_point is DescriptivePoint.Q2:
            position = quartile_span * 2
        elif descriptive_point is DescriptivePoint.Q3:
            position = quartile_span * 3
        elif descriptive_point is DescriptivePoint.MAX:
            position = n - 1
        else:
            mean = self.incremental_stats.mean()
            values = [point.value for point in self._sorted_points]
            position = min(bisect.bisect_left(values, mean), n - 1)

        return position, self._sorted_points[position]

    def get_selector_areas(self, point_id: int) -> tuple[SvgArea, SvgArea]:
        """Row band and bin band that intersect at the selected point.

        Returns:
            (row area spanning the plot width, bin area spanning the plot height)

        Raises:
            ValueError: If the layout does not track rows.
            KeyError: If no point has this id.
        """
        if not self.track_rows:
            raise ValueError("get_selector_areas() requires a layout created with track_rows=True")
        plot_point = self.get_point(point_id)
        spans = self.spans
        diameter = self.marker_diameter_pct
        row_area = SvgArea(
            SvgPoint(spans.first_bin_x_start_pct, spans.plot_base_y_pct - (plot_point.row_index + 1) * diameter),
            SvgDim(spans.plot_width_pct, diameter),
        )
        bin_area = SvgArea(
            SvgPoint(
                spans.first_bin_x_start_pct + plot_point.bin_index * self.bin_width_pct,
                spans.plot_base_y_pct - spans.plot_height_pct,
            ),
            SvgDim(self.bin_width_pct, spans.plot_height_pct),
        )
        return row_area, bin_area

    def get_pointer_geometry(self) -> str:
        """SVG fragment of a pointer aimed at the origin from the upper right.

        An arrowhead triangle plus a line. Translate it with
        get_pointer_transform() to point at a specific point.
        """
        radius = self.marker_r_pct
        diameter = radius * 2.0
        arrow_head_dim = 2.0 * diameter
        arrow_length = 8.0 * radius
        stroke_width = radius
        return (
            f'<path d="M0,{-arrow_head_dim} L{arrow_head_dim},0 L0,0 z" fill="black" '
            f'stroke-width="{stroke_width}"/>'
            f'<line x1="{arrow_length}" y1="{-arrow_length}" x2="{radius}" y2="{-radius}" '
            f'stroke="black" stroke-width="{stroke_width}"/>'
        )

    def get_pointer_translation(self, point_id: int) -> SvgPoint:
        """Where to translate the pointer so it points at the point with ``point_id``.

        Raises:
            KeyError: If no point has this id.
        """
        location = self.get_point(point_id).location
        shift = self.marker_r_pct * POINTER_SHIFT_FACTOR
        return location.translated(shift, -shift)

    def get_pointer_transform(self, point_id: int) -> str:
        """SVG ``transform`` attribute value for get_pointer_translation()."""
        translate = self.get_pointer_translation(point_id)
        return f"translate({translate.x}, {translate.y})"

    def __repr__(self) -> str:
        return (
            f"DistributionLayout(num_bins={self.num_bins}, points={len(self._sorted_points)}, "
            f"track_rows={self.track_rows}, value_range={self.value_range})"
        )
