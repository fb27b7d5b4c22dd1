"""Configuration management for ttfsampler.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- ScaleConfig: Glyph scaling and y-axis orientation
- SamplingConfig: Outline discretization settings
- CmapConfig: Character map lookup rule
- LoggingConfig: Logging settings
- SamplerSettings: Main application settings
"""

from ttfsampler.config.settings import (
    CmapConfig,
    CmapLookup,
    LoggingConfig,
    SamplerSettings,
    SamplingConfig,
    ScaleConfig,
    get_default_settings,
)

__all__ = [
    "CmapConfig",
    "CmapLookup",
    "LoggingConfig",
    "SamplerSettings",
    "SamplingConfig",
    "ScaleConfig",
    "get_default_settings",
]
