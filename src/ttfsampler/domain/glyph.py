"""Decoded glyph representation.

This module defines the glyph domain model: the reconstructed, scaled paths
of one simple TrueType glyph together with the codepoint it was requested for.
"""

from dataclasses import dataclass
from typing import Any

from ttfsampler.domain.path import Path


@dataclass(frozen=True)
class DecodedGlyph:
    """A simple glyph with its reconstructed paths.

    Instances are created once by the glyph cache and never mutated.

    Attributes:
        codepoint: Unicode codepoint the glyph was requested for
        glyph_index: Index of the glyph in the font
        paths: Paths in contour order
    """

    codepoint: int
    glyph_index: int
    paths: tuple[Path, ...]

    @property
    def num_paths(self) -> int:
        return len(self.paths)

    def get_path(self, index: int) -> Path | None:
        """Return the path at ``index``, or None when out of range."""
        if 0 <= index < len(self.paths):
            return self.paths[index]
        return None

    def is_inner_path(self, index: int) -> bool:
        """Check if the path at ``index`` was detected as a hole."""
        return self.paths[index].is_inner

    def is_empty(self) -> bool:
        return len(self.paths) == 0

    def get_outer_paths(self) -> list[Path]:
        return [path for path in self.paths if not path.is_inner]

    def get_inner_paths(self) -> list[Path]:
        return [path for path in self.paths if path.is_inner]

    @property
    def outer_path(self) -> Path | None:
        """First path that is not a hole."""
        return next((path for path in self.paths if not path.is_inner), None)

    def bounds(self) -> tuple[tuple[float, float], tuple[float, float]]:
        """Bounding box of the glyph as (min, max).

        Uses the first outer path, falling back to the union of all paths
        when every path is flagged inner.

        Raises:
            ValueError: If the glyph has no paths
        """
        if not self.paths:
            raise ValueError("Empty glyph has no bounds")

        outer = self.outer_path
        if outer is not None:
            return outer.min_bound, outer.max_bound

        min_x = min(p.min_bound[0] for p in self.paths)
        min_y = min(p.min_bound[1] for p in self.paths)
        max_x = max(p.max_bound[0] for p in self.paths)
        max_y = max(p.max_bound[1] for p in self.paths)
        return (min_x, min_y), (max_x, max_y)

    def centroid(self) -> tuple[float, float]:
        """Centre of the glyph bounds."""
        (min_x, min_y), (max_x, max_y) = self.bounds()
        return ((min_x + max_x) / 2.0, (min_y + max_y) / 2.0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "codepoint": self.codepoint,
            "glyph_index": self.glyph_index,
            "paths": [p.to_dict() for p in self.paths],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DecodedGlyph":
        return cls(
            codepoint=data["codepoint"],
            glyph_index=data["glyph_index"],
            paths=tuple(Path.from_dict(p) for p in data["paths"]),
        )
