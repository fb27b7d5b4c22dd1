"""Outline discretization.

Walks an expanded path anchor to anchor and emits a closed polyline:
straight spans contribute their start anchor (and optionally evenly spaced
intermediate points), quadratic spans contribute their start anchor and
``subsamples - 1`` points on the curve.
"""

from ttfsampler.config import SamplingConfig
from ttfsampler.core.geometry import lerp, quadratic_bezier
from ttfsampler.domain import Path, Sampling

DEFAULT_SUBSAMPLES = 4


def sample_path(
    path: Path,
    subsamples: int = DEFAULT_SUBSAMPLES,
    enable_segment_sampling: bool = False,
) -> Sampling:
    """Create an arc-length sampling of a path.

    The walk starts at the first on-curve vertex (index 0, or 1 when vertex 0
    is a control point) and steps by one vertex after a straight span and by
    two after a curved span.

    Args:
        path: Expanded path
        subsamples: Subdivisions per span, at least 1
        enable_segment_sampling: Also subdivide straight spans

    Returns:
        Fresh Sampling of the path

    Raises:
        ValueError: If subsamples is less than 1
    """
    if subsamples < 1:
        raise ValueError(f"subsamples must be at least 1, got {subsamples}")

    sampling = Sampling()
    vertices = path.vertices
    flags = path.flags
    n = len(vertices)
    if n == 0:
        return sampling

    i = 0 if flags[0] else 1
    while i < n:
        p0 = vertices[i % n]
        sampling.add_vertex(p0)

        p1 = vertices[(i + 1) % n]
        next_on_curve = flags[(i + 1) % n]

        if next_on_curve:
            if enable_segment_sampling:
                for k in range(1, subsamples):
                    sampling.add_vertex(lerp(p0, p1, k / subsamples))
            i += 1
        else:
            p2 = vertices[(i + 2) % n]
            for k in range(1, subsamples):
                sampling.add_vertex(quadratic_bezier(p0, p1, p2, k / subsamples))
            i += 2

    return sampling


class OutlineSampler:
    """Samples paths with a fixed configuration.

    Example:
        sampler = OutlineSampler(SamplingConfig(subsamples=8))
        sampling = sampler.sample(glyph.get_path(0))
        x, y = sampling.evaluate(0.25)
    """

    def __init__(self, config: SamplingConfig | None = None) -> None:
        self.config = config or SamplingConfig()

    def sample(self, path: Path) -> Sampling:
        return sample_path(
            path,
            subsamples=self.config.subsamples,
            enable_segment_sampling=self.config.enable_segment_sampling,
        )

    def sample_all(self, paths: list[Path]) -> list[Sampling]:
        return [self.sample(path) for path in paths]
