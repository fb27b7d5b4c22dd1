"""Domain models for ttfsampler.

This module contains the value types produced by the font reader and the
sampling engine. All models are:

- Immutable where possible (frozen dataclasses, tuples)
- Independent of the binary layout they were decoded from

Key classes:
- Point: A 2D point with on/off-curve metadata
- Path: One closed, expanded contour with bounds and hole flag
- DecodedGlyph: A simple glyph made of paths
- Sampling: Arc-length parameterized polyline of a path
"""

from ttfsampler.domain.glyph import DecodedGlyph
from ttfsampler.domain.path import Path, Point, PointType
from ttfsampler.domain.sampling import Sampling

__all__: list[str] = [
    # Enums
    "PointType",
    # Core types
    "Point",
    "Path",
    "DecodedGlyph",
    "Sampling",
]
