"""Stacked-marker distribution plot as a Plotly figure dict.

Returns a Plotly figure dict (never go.Figure). Coordinates are the layout's
percentage space: both axes span 0-100 and y is reversed so the figure reads
like the SVG the layout was computed for.
"""

from __future__ import annotations

from typing import Iterable, Optional, Union

import plotly.graph_objects as go

from nicestats.plot_layout.descriptive_table import marker_classes
from nicestats.plot_layout.distribution_layout import DistributionLayout
from nicestats.plot_layout.theme import MARKER_COLORS, ThemeMode, ThemePalette, get_theme_palette
from nicestats.utils.logging import get_logger

logger = get_logger(__name__)


def _base_layout(palette: ThemePalette) -> dict:
    hidden_axis = dict(range=[0.0, 100.0], showgrid=False, zeroline=False, showticklabels=False)
    return dict(
        template=palette.template,
        paper_bgcolor=palette.background,
        plot_bgcolor=palette.background,
        font=dict(color=palette.foreground),
        xaxis=dict(hidden_axis),
        yaxis=dict(hidden_axis, range=[100.0, 0.0], scaleanchor="x", scaleratio=1),
        margin=dict(l=0, r=0, t=10, b=10),
        showlegend=False,
    )


def distribution_plot_plotly(
    layout: DistributionLayout,
    *,
    selected_id: Optional[int] = None,
    highlight_ids: Iterable[int] = (),
    theme: Optional[Union[str, ThemeMode]] = None,
) -> dict:
    """Create a figure of the layout's stacked markers.

    Args:
        layout: Layout with points already placed.
        selected_id: Point to draw attention to. Its row and bin bands are
            shaded when the layout tracks rows.
        highlight_ids: Points styled as MarkerClass.HIGHLIGHT.
        theme: Theme mode (DARK or LIGHT). Defaults to LIGHT if None.

    Returns:
        Plotly figure dict; any Plotly front end can render it.
    """
    palette = get_theme_palette(theme)
    spans = layout.spans

    fig = go.Figure()
    fig.update_layout(**_base_layout(palette))

    if len(layout) == 0:
        return fig.to_dict()

    shapes: list[dict] = []

    if selected_id is not None and layout.track_rows:
        for area in layout.get_selector_areas(selected_id):
            shapes.append(dict(
                type="rect",
                x0=area.origin.x, y0=area.origin.y, x1=area.x1, y1=area.y1,
                fillcolor=palette.selector_fill,
                line=dict(width=0),
                layer="below",
            ))

    radius = layout.marker_r_pct
    classes = marker_classes(layout, highlight_ids)
    for plot_point, marker_class in zip(layout.sorted_points, classes):
        cx, cy = plot_point.location.x, plot_point.location.y
        shapes.append(dict(
            type="circle",
            x0=cx - radius, y0=cy - radius, x1=cx + radius, y1=cy + radius,
            fillcolor=MARKER_COLORS[marker_class],
            line=dict(width=0),
        ))

    axis_y = spans.axis_y_pct
    shapes.append(dict(
        type="line",
        x0=spans.pad_x_pct, y0=axis_y, x1=100.0 - spans.pad_x_pct, y1=axis_y,
        line=dict(color=palette.foreground, width=spans.axis_line_width_pct),
    ))

    # Invisible markers carry the hover text for each circle
    fig.add_trace(go.Scatter(
        x=[p.location.x for p in layout.sorted_points],
        y=[p.location.y for p in layout.sorted_points],
        mode="markers",
        marker=dict(opacity=0.0),
        customdata=[[p.id, p.value, p.percentile] for p in layout.sorted_points],
        hovertemplate="id=%{customdata[0]}<br>value=%{customdata[1]:.4g}"
                      "<br>percentile=%{customdata[2]:.1%}<extra></extra>",
    ))

    if selected_id is not None:
        translate = layout.get_pointer_translation(selected_id)
        point = layout.get_point(selected_id)
        fig.add_annotation(
            x=point.location.x, y=point.location.y,
            ax=translate.x + 8.0 * radius, ay=translate.y - 8.0 * radius,
            xref="x", yref="y", axref="x", ayref="y",
            showarrow=True, arrowhead=2, arrowcolor=palette.foreground,
            text="",
        )

    fig.update_layout(shapes=shapes)
    logger.debug("Built distribution figure with %d markers", len(layout))
    return fig.to_dict()
