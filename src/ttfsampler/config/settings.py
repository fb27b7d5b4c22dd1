"""Configuration settings for ttfsampler."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class CmapLookup(str, Enum):
    """Codepoint resolution rule for cmap format 4 segments."""

    LEGACY = "legacy"
    STANDARD = "standard"


class ScaleConfig(BaseModel):
    """Scale applied to em-normalized outlines when a glyph is built.

    Coordinates leave the glyf decoder divided by unitsPerEm, so a font size
    of 1.0 keeps them in em units.
    """

    font_size: float = Field(
        default=1.0,
        gt=0.0,
        description="Multiplier applied to em-normalized coordinates",
    )
    flip_y: bool = Field(
        default=True,
        description="Negate y to go from font space (y-up) to screen space (y-down)",
    )

    @property
    def scale_x(self) -> float:
        return self.font_size

    @property
    def scale_y(self) -> float:
        return -self.font_size if self.flip_y else self.font_size


class SamplingConfig(BaseModel):
    """Configuration for outline discretization."""

    subsamples: int = Field(
        default=4,
        ge=1,
        le=256,
        description="Samples per curve span (and per line span when segment sampling is on)",
    )
    enable_segment_sampling: bool = Field(
        default=False,
        description="Also subdivide straight spans",
    )
    polyline_samples: int = Field(
        default=64,
        ge=2,
        le=8192,
        description="Points evaluated along the arc-length sampling for contour polylines",
    )
    gradient_step: int = Field(
        default=1,
        ge=1,
        le=64,
        description="Neighbour distance (in vertices) used to estimate vertex normals",
    )


class CmapConfig(BaseModel):
    """Configuration for character map lookups."""

    lookup: CmapLookup = Field(
        default=CmapLookup.LEGACY,
        description="Segment scan rule used to resolve codepoints",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class SamplerSettings(BaseModel):
    """Main application settings."""

    scale: ScaleConfig = Field(default_factory=ScaleConfig)
    sampling: SamplingConfig = Field(default_factory=SamplingConfig)
    cmap: CmapConfig = Field(default_factory=CmapConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> SamplerSettings:
    """Get default application settings."""
    return SamplerSettings()
