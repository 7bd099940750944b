"""Geometry primitives and unit helpers shared by the layout engine.

All layout coordinates are PDF points measured from the bottom-left corner of
the page. Backends that work top-down (HTML) or in other units (DOCX twips,
half-points and EMUs) convert through the helpers at the bottom of this module.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


TWIPS_PER_POINT = 20
HALF_POINTS_PER_POINT = 2
EMU_PER_POINT = 12700
CSS_PX_PER_POINT = 96.0 / 72.0


@dataclass(slots=True)
class Point:
    x: float
    y: float


@dataclass(slots=True, frozen=True)
class Size:
    width: float
    height: float

    @classmethod
    def from_tuple(cls, value: Iterable[float]) -> "Size":
        width, height = value
        return cls(float(width), float(height))


@dataclass(slots=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        """Ensure non-negative dimensions."""
        if self.width < 0:
            self.width = abs(self.width)
        if self.height < 0:
            self.height = abs(self.height)

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y

    @property
    def top(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    def intersects(self, other: "Rect") -> bool:
        """Check whether two rectangles share a region of positive area.

        Rectangles that only touch along an edge or a corner do not intersect.

        Args:
            other: Another Rect object

        Returns:
            True if the interiors of the rectangles overlap
        """
        return (
            self.left < other.right
            and other.left < self.right
            and self.bottom < other.top
            and other.bottom < self.top
        )

    def union(self, other: "Rect") -> "Rect":
        """Calculate the bounding rectangle that contains both rectangles."""
        left = min(self.left, other.left)
        right = max(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        top = max(self.top, other.top)
        return Rect(x=left, y=bottom, width=right - left, height=top - bottom)


@dataclass(slots=True, frozen=True)
class Margins:
    top: float = 0.0
    bottom: float = 0.0
    left: float = 0.0
    right: float = 0.0

    @classmethod
    def uniform(cls, value: float) -> "Margins":
        return cls(value, value, value, value)


def points_to_twips(value: float | None) -> int:
    if value is None:
        return 0
    return int(round(float(value) * TWIPS_PER_POINT))


def points_to_half_points(value: float | None) -> int:
    if value is None:
        return 0
    return int(round(float(value) * HALF_POINTS_PER_POINT))


def points_to_emu(value: float | None) -> int:
    if value is None:
        return 0
    return int(round(float(value) * EMU_PER_POINT))


def points_to_px(value: float | None) -> float:
    if value is None:
        return 0.0
    return round(float(value) * CSS_PX_PER_POINT, 2)
