"""Font I/O layer for ttfsampler.

This module decodes TrueType files straight from their sfnt bytes. Every
multi-byte field is read big-endian through a single range-checked reader.

Key responsibilities:
- Load the table directory and raw table buffers
- Decode head, maxp and loca
- Decode the Unicode format 4 cmap and map codepoints to glyphs
- Decode simple glyph outlines from glyf

Key classes:
- FontReader: Owns a loaded font and its glyph cache
"""

from ttfsampler.io.reader import DEFAULT_CHARS, FontReader, load

__all__ = [
    "DEFAULT_CHARS",
    "FontReader",
    "load",
]
