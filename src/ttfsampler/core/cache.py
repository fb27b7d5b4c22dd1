"""Glyph cache keyed by codepoint.

The cache owns the decode pipeline for a single font: cmap lookup, loca
offset, glyf decoding and curve reconstruction. Entries are created once on
first request and never replaced.

Concurrency: a single lock covers the whole get-or-insert sequence (lookup,
decode, insert), so two threads asking for the same uncached codepoint never
decode it twice and never see a half-built entry. Entries are immutable.
"""

import logging
import threading
import time

from ttfsampler.core.reconstruct import CurveReconstructor
from ttfsampler.domain import DecodedGlyph
from ttfsampler.exceptions import GlyphError, UnsupportedGlyphTypeError
from ttfsampler.io.cmap import CharacterMap
from ttfsampler.io.glyf import decode_glyph
from ttfsampler.io.metadata import LocaTable
from ttfsampler.utils.logging import DecodeLogger, DecodeStats

logger = logging.getLogger(__name__)


class GlyphCache:
    """Memoizes decoded glyphs of one font.

    Example:
        cache = GlyphCache(cmap, loca, tables["glyf"], head.units_per_em)
        glyph = cache.get(ord("A"))
        if glyph is None:
            ...  # substitute .notdef or skip
    """

    def __init__(
        self,
        cmap: CharacterMap,
        loca: LocaTable,
        glyf: bytes,
        units_per_em: int,
        reconstructor: CurveReconstructor | None = None,
        decode_logger: DecodeLogger | None = None,
    ) -> None:
        self._cmap = cmap
        self._loca = loca
        self._glyf = glyf
        self._units_per_em = units_per_em
        self._reconstructor = reconstructor or CurveReconstructor()
        self._decode_logger = decode_logger or DecodeLogger()
        self._entries: dict[int, DecodedGlyph] = {}
        self._lock = threading.Lock()

    @property
    def stats(self) -> DecodeStats:
        return self._decode_logger.stats

    def get(self, codepoint: int) -> DecodedGlyph | None:
        """Return the glyph for a codepoint, decoding it on first request.

        Args:
            codepoint: 16-bit Unicode codepoint

        Returns:
            The cached glyph, or None when the codepoint has no mapping, the
            glyph is empty or composite, or its record fails to decode
        """
        with self._lock:
            glyph = self._entries.get(codepoint)
            if glyph is not None:
                self._decode_logger.log_cache_hit(codepoint)
                return glyph
            return self._insert(codepoint)

    def create(self, codepoint: int) -> DecodedGlyph | None:
        """Decode and insert a codepoint that is not cached yet.

        Existing entries are never rebuilt: the request is refused with a
        warning and None is returned.
        """
        with self._lock:
            if codepoint in self._entries:
                logger.debug("Glyph for U+%04X already cached, not recreated", codepoint)
                self._decode_logger.log_recreate_rejected(codepoint)
                return None
            return self._insert(codepoint)

    def clear(self) -> None:
        """Drop every cached entry."""
        with self._lock:
            self._entries.clear()

    def __contains__(self, codepoint: object) -> bool:
        return codepoint in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def _insert(self, codepoint: int) -> DecodedGlyph | None:
        glyph = self._decode(codepoint)
        if glyph is not None:
            self._entries[codepoint] = glyph
        return glyph

    def _decode(self, codepoint: int) -> DecodedGlyph | None:
        start_time = time.perf_counter()

        glyph_index = self._cmap.map_char(codepoint)
        if glyph_index == 0:
            logger.warning("No glyph mapped for U+%04X", codepoint)
            self._decode_logger.log_glyph_missing(codepoint, "unmapped")
            return None
        if glyph_index >= self._loca.num_glyphs:
            logger.warning(
                "U+%04X maps to glyph %d past numGlyphs %d",
                codepoint,
                glyph_index,
                self._loca.num_glyphs,
            )
            self._decode_logger.log_glyph_missing(codepoint, "index out of range")
            return None

        offset, end = self._loca.glyph_range(glyph_index)
        logger.debug("Cache miss for U+%04X, glyph %d at offset %d", codepoint, glyph_index, offset)

        try:
            outline = decode_glyph(
                self._glyf,
                offset,
                glyph_index=glyph_index,
                units_per_em=self._units_per_em,
                end=end,
            )
        except UnsupportedGlyphTypeError as e:
            logger.debug("Composite glyph %d for U+%04X skipped", e.glyph_index, codepoint)
            self._decode_logger.log_glyph_error(codepoint, e)
            return None
        except GlyphError as e:
            logger.debug("Glyph %d for U+%04X failed to decode: %s", glyph_index, codepoint, e)
            self._decode_logger.log_glyph_error(codepoint, e)
            return None

        if outline.is_empty():
            self._decode_logger.log_glyph_missing(codepoint, "no contours")
            return None

        glyph = self._reconstructor.reconstruct(
            outline, codepoint=codepoint, glyph_index=glyph_index
        )
        duration_ms = (time.perf_counter() - start_time) * 1000
        self._decode_logger.log_glyph_decoded(
            codepoint, glyph_index, glyph.num_paths, duration_ms
        )
        return glyph
