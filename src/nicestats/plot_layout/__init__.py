"""Percentage-space layout of a stacked-marker distribution plot."""

from nicestats.plot_layout.descriptive_table import MarkerClass, descriptive_table, marker_classes
from nicestats.plot_layout.distribution_layout import (
    DescriptivePoint,
    DistributionLayout,
    HistogramEntry,
    PlotPoint,
    PointVector,
)
from nicestats.plot_layout.figure import distribution_plot_plotly
from nicestats.plot_layout.geometry import SvgArea, SvgDim, SvgPoint
from nicestats.plot_layout.plot_spans import DEFAULT_NUM_BINS, PlotSpans

__all__ = [
    "DEFAULT_NUM_BINS",
    "DescriptivePoint",
    "DistributionLayout",
    "HistogramEntry",
    "MarkerClass",
    "PlotPoint",
    "PlotSpans",
    "PointVector",
    "SvgArea",
    "SvgDim",
    "SvgPoint",
    "descriptive_table",
    "distribution_plot_plotly",
    "marker_classes",
]
