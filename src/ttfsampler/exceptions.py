"""Exception hierarchy for ttfsampler."""


class TtfSamplerError(Exception):
    """Base exception for all ttfsampler errors."""

    pass


class FontError(TtfSamplerError):
    """Structural errors that abort loading a font file."""

    pass


class FileUnreadableError(FontError):
    """The font file could not be opened or read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read font '{path}': {reason}")


class InvalidMagicError(FontError):
    """The sfnt header does not carry a TrueType magic number."""

    def __init__(self, path: str, magic: int) -> None:
        self.path = path
        self.magic = magic
        super().__init__(f"Invalid magic number 0x{magic:08X} in '{path}'")


class MissingRequiredTableError(FontError):
    """One or more tables needed to decode outlines are absent."""

    def __init__(self, path: str, missing: list[str]) -> None:
        self.path = path
        self.missing = missing
        super().__init__(f"Font '{path}' is missing required tables: {', '.join(missing)}")


class HeadMagicMismatchError(FontError):
    """The head table magic number is not 0x5F0F3CF5."""

    def __init__(self, magic: int) -> None:
        self.magic = magic
        super().__init__(f"head table magic number mismatch: 0x{magic:08X}")


class UnsupportedCmapPlatformError(FontError):
    """No Unicode cmap subtable is present."""

    def __init__(self, available: list[tuple[int, int]]) -> None:
        self.available = available
        super().__init__(f"No Unicode cmap subtable found. Available: {available}")


class UnsupportedCmapFormatError(FontError):
    """The selected cmap subtable is not format 4."""

    def __init__(self, subtable_format: int) -> None:
        self.format = subtable_format
        super().__init__(f"cmap subtable format {subtable_format} is not supported")


class MalformedTableError(FontError):
    """A table field points outside its buffer or holds an invalid value."""

    def __init__(self, tag: str, reason: str) -> None:
        self.tag = tag
        self.reason = reason
        super().__init__(f"Malformed '{tag}' table: {reason}")


class GlyphError(TtfSamplerError):
    """Errors local to a single glyph."""

    pass


class UnsupportedGlyphTypeError(GlyphError):
    """Composite glyphs are not decoded."""

    def __init__(self, glyph_index: int, number_of_contours: int) -> None:
        self.glyph_index = glyph_index
        self.number_of_contours = number_of_contours
        super().__init__(
            f"Glyph {glyph_index} is composite (numberOfContours={number_of_contours})"
        )


class GlyphDecodeError(GlyphError):
    """A glyph record is truncated or inconsistent."""

    def __init__(self, glyph_index: int, reason: str) -> None:
        self.glyph_index = glyph_index
        self.reason = reason
        super().__init__(f"Error decoding glyph {glyph_index}: {reason}")
