"""Utility functions for ttfsampler.

This module provides utility functions including:

- Logging setup and configuration
- Glyph decode statistics
"""

from ttfsampler.utils.logging import (
    DecodeLogger,
    DecodeStats,
    configure_logging,
)

__all__ = [
    "DecodeLogger",
    "DecodeStats",
    "configure_logging",
]
