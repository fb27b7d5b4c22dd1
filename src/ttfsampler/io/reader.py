"""Font reader for loading TrueType fonts.

This module provides the FontReader class, which owns every table buffer of
a font and the glyph cache built on top of them, and the ``load`` shortcut.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from ttfsampler.config import SamplerSettings
from ttfsampler.core.cache import GlyphCache
from ttfsampler.core.mesh import Displace, MeshData, contour_polyline, extract_mesh_data
from ttfsampler.core.reconstruct import CurveReconstructor
from ttfsampler.core.sampler import OutlineSampler
from ttfsampler.domain import DecodedGlyph, Sampling
from ttfsampler.domain import Path as GlyphPath
from ttfsampler.io.cmap import CharacterMap, decode_cmap
from ttfsampler.io.metadata import HeadTable, LocaTable, MaxpTable, decode_head, decode_maxp
from ttfsampler.io.tables import FontHeader, load_tables, read_font_file
from ttfsampler.utils.logging import DecodeStats

logger = logging.getLogger(__name__)

DEFAULT_CHARS = "".join(chr(c) for c in range(0x20, 0x7F))


@dataclass(frozen=True)
class _FontData:
    header: FontHeader
    tables: dict[str, bytes]
    head: HeadTable
    maxp: MaxpTable
    cmap: CharacterMap
    loca: LocaTable


class FontReader:
    """Loads a TrueType font and serves decoded glyphs.

    Loading is all-or-nothing: any structural problem raises a FontError and
    leaves the reader unloaded. Glyphs are decoded lazily and cached by
    codepoint; failures for single glyphs surface as None.

    Example:
        reader = FontReader(Path("font.ttf"))
        reader.load()
        glyph = reader.get_glyph(ord("A"))
        sampling = reader.sample_path(glyph.get_path(0))
    """

    def __init__(self, font_path: Path, settings: SamplerSettings | None = None) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF font file
            settings: Scale, sampling and cmap settings (defaults if None)
        """
        self._font_path = Path(font_path)
        self._settings = settings or SamplerSettings()
        self._font: _FontData | None = None
        self._cache: GlyphCache | None = None

    @property
    def font_path(self) -> Path:
        return self._font_path

    @property
    def settings(self) -> SamplerSettings:
        return self._settings

    @property
    def is_loaded(self) -> bool:
        return self._font is not None

    def load(self) -> None:
        """Read and decode the font file.

        Raises:
            FileUnreadableError: If the file cannot be read
            InvalidMagicError: If the file is not a TrueType font
            MissingRequiredTableError: If a required table is absent
            HeadMagicMismatchError: If head.magicNumber is wrong
            UnsupportedCmapPlatformError: If there is no Unicode cmap
            UnsupportedCmapFormatError: If the Unicode cmap is not format 4
            MalformedTableError: If any table is truncated or inconsistent
        """
        source = str(self._font_path)
        data = read_font_file(self._font_path)
        header, tables = load_tables(data, source)

        head = decode_head(tables["head"])
        maxp = decode_maxp(tables["maxp"])
        cmap = decode_cmap(tables["cmap"], maxp.num_glyphs, self._settings.cmap.lookup)
        loca = LocaTable.decode(tables["loca"], maxp.num_glyphs, head.long_loca)

        font = _FontData(header=header, tables=tables, head=head, maxp=maxp, cmap=cmap, loca=loca)
        cache = GlyphCache(
            cmap,
            loca,
            tables["glyf"],
            head.units_per_em,
            reconstructor=CurveReconstructor.from_config(self._settings.scale),
        )

        self._font = font
        self._cache = cache
        logger.info(
            "Loaded %s: %d glyphs, %d units per em",
            source,
            maxp.num_glyphs,
            head.units_per_em,
        )

    def _require(self) -> _FontData:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    def _require_cache(self) -> GlyphCache:
        if self._cache is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._cache

    @property
    def units_per_em(self) -> int:
        """Return the font's units per em.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require().head.units_per_em

    @property
    def glyph_count(self) -> int:
        """Return maxp.numGlyphs.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require().maxp.num_glyphs

    @property
    def header(self) -> FontHeader:
        return self._require().header

    @property
    def tables(self) -> dict[str, bytes]:
        """Raw table buffers keyed by tag."""
        return self._require().tables

    @property
    def head(self) -> HeadTable:
        return self._require().head

    @property
    def maxp(self) -> MaxpTable:
        return self._require().maxp

    @property
    def cmap(self) -> CharacterMap:
        return self._require().cmap

    @property
    def loca(self) -> LocaTable:
        return self._require().loca

    @property
    def stats(self) -> DecodeStats:
        return self._require_cache().stats

    def map_char(self, codepoint: int) -> int:
        """Resolve a codepoint to a glyph index (0 when unmapped)."""
        return self._require().cmap.map_char(codepoint)

    def get_glyph(self, codepoint: int) -> DecodedGlyph | None:
        """Get the decoded glyph for a codepoint.

        Args:
            codepoint: 16-bit Unicode codepoint

        Returns:
            Cached glyph, or None when the codepoint has no drawable simple glyph

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require_cache().get(codepoint)

    def preload(self, chars: str = DEFAULT_CHARS) -> int:
        """Decode every character of ``chars`` into the cache.

        Returns:
            Number of characters that produced a glyph
        """
        cache = self._require_cache()
        loaded = sum(1 for char in chars if cache.get(ord(char)) is not None)
        logger.debug("Preloaded %d of %d characters", loaded, len(chars))
        return loaded

    def sample_path(
        self,
        path: GlyphPath,
        subsamples: int | None = None,
        enable_segment_sampling: bool | None = None,
    ) -> Sampling:
        """Sample a path, falling back to the reader's sampling settings."""
        config = self._settings.sampling
        overrides = {}
        if subsamples is not None:
            overrides["subsamples"] = subsamples
        if enable_segment_sampling is not None:
            overrides["enable_segment_sampling"] = enable_segment_sampling
        if overrides:
            config = config.model_copy(update=overrides)
        return OutlineSampler(config).sample(path)

    def mesh_data(self, glyph: DecodedGlyph, displace: Displace | None = None) -> MeshData:
        """Build triangulator input for a glyph with the configured sampling.

        Args:
            glyph: Glyph returned by ``get_glyph``
            displace: Optional per-vertex displacement

        Returns:
            Vertices, closed segment loops and hole markers of every path
        """
        config = self._settings.sampling
        return extract_mesh_data(
            glyph,
            subsamples=config.subsamples,
            enable_segment_sampling=config.enable_segment_sampling,
            displace=displace,
            gradient_step=config.gradient_step,
        )

    def contour_polyline(
        self,
        sampling: Sampling,
        samples: int | None = None,
        displace: Displace | None = None,
    ) -> list[tuple[float, float]]:
        """Evaluate a sampling at evenly spaced fractions (closed polyline).

        ``samples`` defaults to the configured ``polyline_samples``.
        """
        if samples is None:
            samples = self._settings.sampling.polyline_samples
        return contour_polyline(sampling, samples, displace=displace)

    def clear(self) -> None:
        """Drop cached glyphs, keeping the tables loaded."""
        if self._cache is not None:
            self._cache.clear()

    def close(self) -> None:
        """Release all tables and cached glyphs."""
        self._cache = None
        self._font = None

    def __enter__(self) -> "FontReader":
        """Context manager entry, loading the font if needed."""
        if not self.is_loaded:
            self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()


def load(path: Path | str, settings: SamplerSettings | None = None) -> FontReader:
    """Open and fully decode a font file.

    Args:
        path: Font file path
        settings: Optional reader settings

    Returns:
        A loaded FontReader

    Raises:
        FontError: If the file is not a usable TrueType font
    """
    reader = FontReader(Path(path), settings)
    reader.load()
    return reader
