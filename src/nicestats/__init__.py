"""
nicestats: streaming statistics and stacked-marker distribution layout.

This package provides:
- IncrementalStats: single-pass mean/variance/min/max/median of one value stream
- IncrementalPearson: single-pass per-dimension stats and pairwise correlation
- DistributionLayout: bins sorted observations and computes marker geometry
  for a stacked distribution ("jittered histogram") plot
- Logging utilities for library and script use

For logging configuration in standalone scripts:
    ```python
    from nicestats.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```

When used as a library, logging is handled by the parent application's
configuration.
"""

import logging

from nicestats.utils.logging import configure_logging, get_logger

from nicestats.plot_layout import (
    DescriptivePoint,
    DistributionLayout,
    HistogramEntry,
    PlotSpans,
    descriptive_table,
    distribution_plot_plotly,
)
from nicestats.stats import IncrementalPearson, IncrementalStats, MeasuredStats

# NullHandler so logs don't reach the root logger when no application has
# configured logging. Scripts call configure_logging() to add a real handler.
_logger = logging.getLogger("nicestats")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "DescriptivePoint",
    "DistributionLayout",
    "HistogramEntry",
    "IncrementalPearson",
    "IncrementalStats",
    "MeasuredStats",
    "PlotSpans",
    "configure_logging",
    "descriptive_table",
    "distribution_plot_plotly",
    "get_logger",
]

__version__ = "0.1.0"
