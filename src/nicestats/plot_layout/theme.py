"""Colors of the distribution figure, per light/dark theme."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from nicestats.plot_layout.descriptive_table import MarkerClass


class ThemeMode(str, Enum):
    """Figure theme mode."""

    DARK = "dark"
    LIGHT = "light"


@dataclass(frozen=True)
class ThemePalette:
    """Plotly template plus the colors the figure draws with."""

    template: str
    background: str
    foreground: str     # axis line, pointer
    selector_fill: str  # row/bin bands behind the selected point


_PALETTES: dict[ThemeMode, ThemePalette] = {
    ThemeMode.LIGHT: ThemePalette("plotly_white", "#ffffff", "#000000", "rgba(255, 200, 0, 0.25)"),
    ThemeMode.DARK: ThemePalette("plotly_dark", "#000000", "#ffffff", "rgba(255, 230, 120, 0.20)"),
}

# Marker fill per class; quartiles shade from light to dark.
MARKER_COLORS: dict[MarkerClass, str] = {
    MarkerClass.HIGHLIGHT: "rgba(0, 200, 255, 0.9)",
    MarkerClass.MEAN: "rgba(220, 40, 40, 0.9)",
    MarkerClass.MEDIAN: "rgba(40, 160, 60, 0.9)",
    MarkerClass.Q1: "rgba(158, 202, 225, 0.9)",
    MarkerClass.Q2: "rgba(107, 174, 214, 0.9)",
    MarkerClass.Q3: "rgba(49, 130, 189, 0.9)",
    MarkerClass.Q4: "rgba(8, 81, 156, 0.9)",
}


def resolve_theme(theme: Optional[Union[str, ThemeMode]]) -> ThemeMode:
    """Map None, a ThemeMode or a name ("dark", "plotly_dark", ...) to a ThemeMode.

    Anything that is not recognizably dark is LIGHT.
    """
    if isinstance(theme, ThemeMode):
        return theme
    if theme is not None and str(theme).lower() in ("dark", "plotly_dark"):
        return ThemeMode.DARK
    return ThemeMode.LIGHT


def get_theme_palette(theme: Optional[Union[str, ThemeMode]]) -> ThemePalette:
    return _PALETTES[resolve_theme(theme)]
