"""Discretized, arc-length parameterized outline.

A Sampling holds a closed polyline and the cumulative distance of each vertex
from the first one. It carries no reference to the path it was sampled from.
"""

import math
from bisect import bisect_right
from dataclasses import dataclass, field


@dataclass
class Sampling:
    """Closed polyline with cumulative arc length.

    Attributes:
        vertices: Polyline vertices; the closing segment back to the first
            vertex is implicit
        distances: ``distances[i]`` is the length of the polyline from
            vertex 0 to vertex i (``distances[0] == 0``)
    """

    vertices: list[tuple[float, float]] = field(default_factory=list)
    distances: list[float] = field(default_factory=list)

    def add_vertex(self, vertex: tuple[float, float]) -> None:
        """Append a vertex and its cumulative distance."""
        distance = 0.0
        if self.vertices:
            distance = self.distances[-1] + math.dist(self.vertices[-1], vertex)
        self.vertices.append(vertex)
        self.distances.append(distance)

    def __len__(self) -> int:
        return len(self.vertices)

    @property
    def size(self) -> int:
        return len(self.vertices)

    def length(self) -> float:
        """Total length of the closed polyline, closing segment included."""
        if not self.vertices:
            return 0.0
        return self.distances[-1] + math.dist(self.vertices[-1], self.vertices[0])

    def evaluate(self, t: float) -> tuple[float, float]:
        """Return the point at fraction ``t`` of the total length.

        ``t`` is wrapped with period 1: ``t mod 1`` keeping the sign of ``t``,
        then negative values are mirrored to ``1 + t``. Inputs below -1 wrap
        through the same rule, so evaluate(-1.25) == evaluate(0.75).

        Raises:
            ValueError: If the sampling has no vertices
        """
        if not self.vertices:
            raise ValueError("Cannot evaluate an empty sampling")

        t = math.fmod(t, 1.0)
        if t < 0.0:
            t = 1.0 + t

        total = self.length()
        target = t * total
        count = len(self.vertices)

        i1 = (bisect_right(self.distances, target) - 1) % count
        i2 = (i1 + 1) % count
        d1 = self.distances[i1]
        d2 = total if i2 <= i1 else self.distances[i2]

        v1 = self.vertices[i1]
        v2 = self.vertices[i2]
        if d2 - d1 <= 0.0:
            return v1

        u = (target - d1) / (d2 - d1)
        return ((1.0 - u) * v1[0] + u * v2[0], (1.0 - u) * v1[1] + u * v2[1])
