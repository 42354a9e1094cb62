"""
Descriptive-point table and marker classification for a DistributionLayout.

Pure pandas, no rendering. The table lists which concrete observation stands
for Min/Q1/Q2/Q3/Max/Mean (plus any caller-named points), and the marker
classes tell a renderer how to style each stacked marker.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional

import pandas as pd

from nicestats.plot_layout.distribution_layout import DescriptivePoint, DistributionLayout

# Columns of the descriptive table.
TABLE_COLUMNS = ["point", "id", "position", "value"]

# Label of the row appended for the selected point.
SELECTED_LABEL = "Selected"


class MarkerClass(str, Enum):
    """Style class of a marker, by where its point falls in the distribution."""
    HIGHLIGHT = "highlight"
    MEAN = "mean"
    MEDIAN = "median"
    Q1 = "q1"
    Q2 = "q2"
    Q3 = "q3"
    Q4 = "q4"


def descriptive_table(
    layout: DistributionLayout,
    extra_points: Iterable[tuple[int, str]] = (),
    *,
    selected_id: Optional[int] = None,
) -> pd.DataFrame:
    """
    Build the "Descriptive Distribution Points" table.

    One row per DescriptivePoint plus one per ``(id, label)`` in extra_points,
    sorted by value (ties keep insertion order). When selected_id is given a
    "Selected" row is appended last, after sorting.

    Args:
        layout: Layout with points already added.
        extra_points: Additional (point id, label) rows.
        selected_id: Id of the currently selected point, if any.

    Returns:
        DataFrame with columns point, id, position, value. Empty (with those
        columns) when the layout has no points.

    Raises:
        KeyError: If an extra or selected id is not in the layout.
    """
    if len(layout) == 0:
        return pd.DataFrame(columns=TABLE_COLUMNS)

    rows: list[dict] = []
    for descriptive_point in DescriptivePoint:
        position, plot_point = layout.get_descriptive_point(descriptive_point)
        rows.append({
            "point": descriptive_point.value,
            "id": plot_point.id,
            "position": position,
            "value": plot_point.value,
        })

    for point_id, label in extra_points:
        position = layout.get_position(point_id)
        rows.append({
            "point": str(label),
            "id": point_id,
            "position": position,
            "value": layout.sorted_points[position].value,
        })

    df = pd.DataFrame(rows, columns=TABLE_COLUMNS)
    df = df.sort_values("value", kind="stable").reset_index(drop=True)

    if selected_id is not None:
        position = layout.get_position(selected_id)
        selected = pd.DataFrame([{
            "point": SELECTED_LABEL,
            "id": selected_id,
            "position": position,
            "value": layout.sorted_points[position].value,
        }], columns=TABLE_COLUMNS)
        df = pd.concat([df, selected], ignore_index=True)

    return df


def marker_classes(
    layout: DistributionLayout,
    highlight_ids: Iterable[int] = (),
) -> list[MarkerClass]:
    """
    Classify each sorted point for styling.

    Walks the points in value order. Highlighted ids win; the first point above
    the arithmetic mean is MEAN; then by integer percentile: <= 25 -> Q1,
    < 50 -> Q2, the first point at 50 or above -> MEDIAN, <= 75 -> Q3, else Q4.

    Returns:
        One MarkerClass per point of layout.sorted_points, in the same order.
    """
    points = layout.sorted_points
    if not points:
        return []

    highlight = set(highlight_ids)
    calculated_mean = sum(point.value for point in points) / len(points)
    mean_found = False
    median_found = False

    classes: list[MarkerClass] = []
    for plot_point in points:
        percentile = int(100.0 * plot_point.percentile)
        if plot_point.id in highlight:
            marker_class = MarkerClass.HIGHLIGHT
        elif not mean_found and plot_point.value > calculated_mean:
            mean_found = True
            marker_class = MarkerClass.MEAN
        elif percentile <= 25:
            marker_class = MarkerClass.Q1
        elif percentile < 50:
            marker_class = MarkerClass.Q2
        elif not median_found:
            median_found = True
            marker_class = MarkerClass.MEDIAN
        elif percentile <= 75:
            marker_class = MarkerClass.Q3
        else:
            marker_class = MarkerClass.Q4
        classes.append(marker_class)
    return classes
