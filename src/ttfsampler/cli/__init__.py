"""Command-line interface for ttfsampler.

This module provides the CLI using Typer with rich output.

Commands:
- info: Tables and metadata of a font
- glyph: Decoded paths per character
- sample: Arc-length sampling of a character's outer path
"""

from ttfsampler.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
