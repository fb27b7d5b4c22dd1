"""Quadratic spline reconstruction from raw TrueType contours.

TrueType stores on-curve anchors and off-curve control points of quadratic
Bezier spans. Two consecutive off-curve points share an implied on-curve
point halfway between them, which is not stored. This module restores those
implied anchors, applies the output scale and classifies paths as outer or
inner (holes).

Hole detection is a one-level bounding-box heuristic: a path is inner when
its box lies strictly inside another path's box. Overlapping or multiply
nested shapes are not resolved.
"""

from dataclasses import replace

from ttfsampler.config import ScaleConfig
from ttfsampler.core.geometry import Vec2, bounds, lerp
from ttfsampler.domain import DecodedGlyph, Path, Point, PointType
from ttfsampler.io.glyf import RawGlyphOutline


def _point(xy: Vec2, on_curve: bool) -> Point:
    point_type = PointType.ON_CURVE if on_curve else PointType.OFF_CURVE_QUAD
    return Point(xy[0], xy[1], point_type)


def expand_contour(points: list[Vec2], on_curve: list[bool]) -> list[Point]:
    """Insert the implied on-curve midpoints of one cyclic contour.

    Every input point is emitted in order; after a point whose cyclic
    successor is also off-curve, their midpoint is emitted as an on-curve
    anchor.

    Args:
        points: Contour points
        on_curve: On-curve flag per point

    Returns:
        Expanded points with no two consecutive off-curve points
    """
    n = len(points)
    expanded: list[Point] = []
    for i in range(n):
        expanded.append(_point(points[i], on_curve[i]))

        j = (i + 1) % n
        if on_curve[i] or on_curve[j]:
            continue
        expanded.append(_point(lerp(points[i], points[j], 0.5), True))
    return expanded


def detect_inner_paths(paths: list[Path]) -> list[bool]:
    """Flag each path whose box is strictly inside any other path's box."""
    flags = []
    for i, path in enumerate(paths):
        flags.append(
            any(other.strictly_contains(path) for j, other in enumerate(paths) if j != i)
        )
    return flags


class CurveReconstructor:
    """Builds scaled, expanded paths from raw glyph outlines.

    The reconstructor is stateless apart from its scale factors. A negative
    y scale flips font space (y-up) into screen space (y-down).

    Example:
        reconstructor = CurveReconstructor(scale_x=32.0, scale_y=-32.0)
        glyph = reconstructor.reconstruct(outline, codepoint=ord("A"), glyph_index=36)
    """

    def __init__(self, scale_x: float = 1.0, scale_y: float = 1.0) -> None:
        self.scale_x = scale_x
        self.scale_y = scale_y

    @classmethod
    def from_config(cls, config: ScaleConfig) -> "CurveReconstructor":
        return cls(scale_x=config.scale_x, scale_y=config.scale_y)

    def build_path(self, points: list[Vec2], on_curve: list[bool]) -> Path:
        """Expand, rescale and bound one contour.

        Returns:
            Path with is_inner left False
        """
        expanded = [
            Point(p.x * self.scale_x, p.y * self.scale_y, p.point_type)
            for p in expand_contour(points, on_curve)
        ]
        if not expanded:
            return Path(points=())
        min_bound, max_bound = bounds([p.to_tuple() for p in expanded])
        return Path(points=tuple(expanded), min_bound=min_bound, max_bound=max_bound)

    def reconstruct(
        self, outline: RawGlyphOutline, codepoint: int = 0, glyph_index: int = 0
    ) -> DecodedGlyph:
        """Turn a raw outline into a DecodedGlyph with hole flags.

        Args:
            outline: Decoded simple glyph
            codepoint: Codepoint the glyph was requested for
            glyph_index: Glyph index in the font

        Returns:
            Glyph with one path per contour
        """
        paths = [
            self.build_path(list(points), list(flags)) for points, flags in outline.contours()
        ]
        inner = detect_inner_paths(paths)
        paths = [replace(path, is_inner=flag) for path, flag in zip(paths, inner)]
        return DecodedGlyph(codepoint=codepoint, glyph_index=glyph_index, paths=tuple(paths))
