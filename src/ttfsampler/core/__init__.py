"""Core processing algorithms for ttfsampler.

This module contains the algorithms that turn decoded glyph records into
usable geometry:

- Curve reconstruction (implied on-curve points, scaling, hole detection)
- Outline sampling (polyline discretization, arc-length evaluation)
- Glyph caching (guarded get-or-insert per codepoint)
- Mesh extraction (drawing commands, triangulator input, polylines)

Key functions:
- expand_contour: Restore implied on-curve midpoints
- sample_path: Discretize a path into a Sampling
- extract_path_commands: Convert a glyph into drawing commands
- extract_mesh_data: Flatten a glyph into vertices, segments and holes
- contour_polyline: Evenly spaced points along a Sampling

Key classes:
- CurveReconstructor: Builds scaled paths from raw outlines
- OutlineSampler: Samples paths with a fixed configuration
- GlyphCache: Memoizes decoded glyphs
"""

from ttfsampler.core.cache import GlyphCache
from ttfsampler.core.geometry import (
    bounds,
    centroid,
    lerp,
    quadratic_bezier,
    segment_normal,
)
from ttfsampler.core.mesh import (
    CommandType,
    MeshData,
    PathCommand,
    contour_polyline,
    extract_mesh_data,
    extract_path_commands,
    normal_offset,
)
from ttfsampler.core.reconstruct import CurveReconstructor, detect_inner_paths, expand_contour
from ttfsampler.core.sampler import DEFAULT_SUBSAMPLES, OutlineSampler, sample_path

__all__ = [
    "DEFAULT_SUBSAMPLES",
    # Mesh types
    "CommandType",
    # Reconstruction
    "CurveReconstructor",
    # Cache
    "GlyphCache",
    "MeshData",
    # Sampling
    "OutlineSampler",
    "PathCommand",
    # Geometry functions
    "bounds",
    "centroid",
    "contour_polyline",
    "detect_inner_paths",
    "expand_contour",
    "extract_mesh_data",
    "extract_path_commands",
    "lerp",
    "normal_offset",
    "quadratic_bezier",
    "sample_path",
    "segment_normal",
]
