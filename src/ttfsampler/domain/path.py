"""Core geometric types for glyph outline representation.

This module defines the fundamental geometric types used throughout ttfsampler:
- PointType: Enum for point type on a quadratic spline
- Point: A 2D point with curve type information
- Path: One closed, expanded contour of a glyph
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class PointType(Enum):
    """Point type on a TrueType contour.

    Points can be:
    - ON_CURVE: Anchor the spline passes through
    - OFF_CURVE_QUAD: Quadratic Bezier control point
    """

    ON_CURVE = auto()
    OFF_CURVE_QUAD = auto()


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space with curve metadata.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate
        y: Y coordinate
        point_type: Type of point (on-curve anchor or control point)
    """

    x: float
    y: float
    point_type: PointType = PointType.ON_CURVE

    @property
    def on_curve(self) -> bool:
        return self.point_type is PointType.ON_CURVE

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x, y, and on_curve fields
        """
        return {"x": self.x, "y": self.y, "on_curve": self.on_curve}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x, y, and on_curve fields

        Returns:
            Point instance
        """
        point_type = PointType.ON_CURVE if data["on_curve"] else PointType.OFF_CURVE_QUAD
        return cls(x=data["x"], y=data["y"], point_type=point_type)


@dataclass(frozen=True)
class Path:
    """A closed contour after implied on-curve points have been restored.

    The point sequence is cyclic: the last point connects back to the first.
    No two consecutive points (including the wrap-around pair) are both
    off-curve.

    Attributes:
        points: Expanded vertices with their on/off-curve type
        min_bound: (x, y) lower corner of the axis-aligned bounding box
        max_bound: (x, y) upper corner of the axis-aligned bounding box
        is_inner: True when the path is a hole of its glyph
    """

    points: tuple[Point, ...]
    min_bound: tuple[float, float] = (0.0, 0.0)
    max_bound: tuple[float, float] = (0.0, 0.0)
    is_inner: bool = False

    @property
    def num_vertices(self) -> int:
        return len(self.points)

    @property
    def vertices(self) -> tuple[tuple[float, float], ...]:
        return tuple(p.to_tuple() for p in self.points)

    @property
    def flags(self) -> tuple[bool, ...]:
        """On-curve flag per vertex, parallel to ``vertices``."""
        return tuple(p.on_curve for p in self.points)

    @property
    def centroid(self) -> tuple[float, float]:
        """Centre of the bounding box."""
        return (
            (self.min_bound[0] + self.max_bound[0]) / 2.0,
            (self.min_bound[1] + self.max_bound[1]) / 2.0,
        )

    def get_vertex(self, index: int) -> Point:
        return self.points[index]

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Return (min_x, min_y, max_x, max_y)."""
        return (*self.min_bound, *self.max_bound)

    def strictly_contains(self, other: "Path") -> bool:
        """True when ``other``'s box lies strictly inside this box on all four sides."""
        return (
            other.min_bound[0] > self.min_bound[0]
            and other.min_bound[1] > self.min_bound[1]
            and other.max_bound[0] < self.max_bound[0]
            and other.max_bound[1] < self.max_bound[1]
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "points": [p.to_dict() for p in self.points],
            "min_bound": list(self.min_bound),
            "max_bound": list(self.max_bound),
            "is_inner": self.is_inner,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Path":
        return cls(
            points=tuple(Point.from_dict(p) for p in data["points"]),
            min_bound=tuple(data["min_bound"]),
            max_bound=tuple(data["max_bound"]),
            is_inner=data["is_inner"],
        )
