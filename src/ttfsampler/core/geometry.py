"""Geometric primitives for outline reconstruction and sampling.

This module provides small pure helpers over (x, y) tuples:
- Linear interpolation
- Quadratic Bezier evaluation
- Axis-aligned bounds
- Segment normals
- Vertex centroids

All functions are pure and stateless.
"""

import math

Vec2 = tuple[float, float]


def lerp(p0: Vec2, p1: Vec2, t: float) -> Vec2:
    """Linearly interpolate between two points.

    Examples:
        >>> lerp((0.0, 0.0), (2.0, 4.0), 0.5)
        (1.0, 2.0)
    """
    return ((1.0 - t) * p0[0] + t * p1[0], (1.0 - t) * p0[1] + t * p1[1])


def quadratic_bezier(p0: Vec2, p1: Vec2, p2: Vec2, t: float) -> Vec2:
    """Evaluate B(t) = (1-t)^2 P0 + 2(1-t)t P1 + t^2 P2.

    Args:
        p0: Start anchor
        p1: Control point
        p2: End anchor
        t: Curve parameter in [0, 1]

    Examples:
        >>> quadratic_bezier((0.0, 0.0), (1.0, 2.0), (2.0, 0.0), 0.5)
        (1.0, 1.0)
    """
    u = 1.0 - t
    a = u * u
    b = 2.0 * u * t
    c = t * t
    return (a * p0[0] + b * p1[0] + c * p2[0], a * p0[1] + b * p1[1] + c * p2[1])


def bounds(points: list[Vec2]) -> tuple[Vec2, Vec2]:
    """Component-wise (min, max) over a non-empty point list."""
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return (min(xs), min(ys)), (max(xs), max(ys))


def segment_normal(p0: Vec2, p1: Vec2) -> Vec2:
    """Unit normal of the segment p0 -> p1, the direction rotated a quarter turn clockwise.

    Returns (0, 0) for a degenerate segment.
    """
    dx = p1[0] - p0[0]
    dy = p1[1] - p0[1]
    length = math.hypot(dx, dy)
    if length == 0.0:
        return (0.0, 0.0)
    return (dy / length, -dx / length)


def centroid(points: list[Vec2]) -> Vec2:
    """Mean of a non-empty point list."""
    n = len(points)
    return (sum(p[0] for p in points) / n, sum(p[1] for p in points) / n)
