"""Basic geometric primitives in percentage (0-100) SVG space."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SvgPoint:
    """A point; y grows downward as in SVG."""

    x: float = 0.0
    y: float = 0.0

    def translated(self, dx: float, dy: float) -> "SvgPoint":
        return SvgPoint(self.x + dx, self.y + dy)

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class SvgDim:
    width: float = 0.0
    height: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True)
class SvgArea:
    """A rectangle given by its top-left origin and its dimensions."""

    origin: SvgPoint = SvgPoint()
    dim: SvgDim = SvgDim()

    @property
    def x1(self) -> float:
        return self.origin.x + self.dim.width

    @property
    def y1(self) -> float:
        return self.origin.y + self.dim.height

    def contains(self, point: SvgPoint) -> bool:
        """True if point lies inside the area (edges included)."""
        return self.origin.x <= point.x <= self.x1 and self.origin.y <= point.y <= self.y1

    def to_dict(self) -> dict[str, float]:
        return {
            "x": self.origin.x,
            "y": self.origin.y,
            "width": self.dim.width,
            "height": self.dim.height,
        }
