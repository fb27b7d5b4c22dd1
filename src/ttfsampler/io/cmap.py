"""Character to glyph mapping (cmap format 4).

Only the Unicode platform (platformID 0, encodings 0 through 4) with a
format 4 subtable is supported.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from ttfsampler.config import CmapLookup
from ttfsampler.exceptions import (
    MalformedTableError,
    UnsupportedCmapFormatError,
    UnsupportedCmapPlatformError,
)
from ttfsampler.io.binary import BinaryReader

logger = logging.getLogger(__name__)

UNICODE_PLATFORM = 0
MAX_UNICODE_ENCODING = 4
SEGMENT_FORMAT = 4
SENTINEL = 0xFFFF


@dataclass(frozen=True, slots=True)
class CmapSubtableRecord:
    """Encoding record from the cmap index."""

    platform_id: int
    platform_specific_id: int
    offset: int


@dataclass(frozen=True, slots=True)
class Segment:
    """One contiguous codepoint range of a format 4 subtable."""

    start_code: int
    end_code: int
    id_delta: int
    id_range_offset: int


@dataclass(frozen=True)
class CharacterMap:
    """Decoded format 4 subtable.

    The four segment arrays are parallel; the last segment is normally the
    0xFFFF sentinel. ``glyph_index_array`` is sized by maxp.numGlyphs,
    truncated to the bytes actually present in the table.

    Attributes:
        subtables: All encoding records of the cmap index
        selected: The record that was decoded
        lookup: Codepoint resolution rule (see ``map_char``)
    """

    version: int
    subtables: tuple[CmapSubtableRecord, ...]
    selected: CmapSubtableRecord
    format: int
    length: int
    language: int
    seg_count_x2: int
    search_range: int
    entry_selector: int
    range_shift: int
    end_code: tuple[int, ...]
    start_code: tuple[int, ...]
    id_delta: tuple[int, ...]
    id_range_offset: tuple[int, ...]
    glyph_index_array: tuple[int, ...]
    reserved_pad: int = 0
    lookup: CmapLookup = CmapLookup.LEGACY

    @property
    def seg_count(self) -> int:
        return self.seg_count_x2 // 2

    @property
    def segment_glyph_count(self) -> int:
        """Sum of segment spans; a diagnostic only, maxp.numGlyphs is authoritative."""
        return sum(end - start for start, end in zip(self.start_code, self.end_code))

    def segments(self) -> Iterator[Segment]:
        """Iterate over segments in table order."""
        for start, end, delta, range_offset in zip(
            self.start_code, self.end_code, self.id_delta, self.id_range_offset
        ):
            yield Segment(start, end, delta, range_offset)

    def map_char(self, codepoint: int) -> int:
        """Resolve a codepoint to a glyph index.

        Segments are scanned in order until the 0xFFFF sentinel; segments
        starting at 0xFFFF are skipped. With ``CmapLookup.LEGACY`` the scan
        continues past matching segments that yield glyph 0 and the glyph
        index array is addressed by ``codepoint - startCode``. With
        ``CmapLookup.STANDARD`` the first matching segment decides and the
        array is addressed through idRangeOffset as the format defines.

        Args:
            codepoint: 16-bit Unicode codepoint

        Returns:
            Glyph index, 0 when unmapped
        """
        seg_count = self.seg_count
        for i, segment in enumerate(self.segments()):
            if segment.end_code == SENTINEL:
                break
            if segment.start_code == SENTINEL:
                logger.debug("Segment %d starts at 0xFFFF, skipped", i)
                continue
            if not segment.start_code <= codepoint <= segment.end_code:
                continue

            if segment.id_range_offset == 0:
                glyph_index = (segment.id_delta + codepoint) & 0xFFFF
            else:
                if self.lookup is CmapLookup.STANDARD:
                    position = (
                        i
                        + segment.id_range_offset // 2
                        + (codepoint - segment.start_code)
                        - seg_count
                    )
                else:
                    position = codepoint - segment.start_code
                glyph_index = self._glyph_at(position)
                if glyph_index:
                    glyph_index = (glyph_index + segment.id_delta) & 0xFFFF

            if glyph_index or self.lookup is CmapLookup.STANDARD:
                return glyph_index

        return 0

    def _glyph_at(self, position: int) -> int:
        if 0 <= position < len(self.glyph_index_array):
            return self.glyph_index_array[position]
        return 0


def select_subtable(records: list[CmapSubtableRecord]) -> CmapSubtableRecord:
    """Pick the first Unicode platform record.

    Raises:
        UnsupportedCmapPlatformError: If no Unicode record exists
    """
    for record in records:
        if (
            record.platform_id == UNICODE_PLATFORM
            and record.platform_specific_id <= MAX_UNICODE_ENCODING
        ):
            return record
    raise UnsupportedCmapPlatformError(
        [(r.platform_id, r.platform_specific_id) for r in records]
    )


def decode_cmap(
    data: bytes, num_glyphs: int, lookup: CmapLookup = CmapLookup.LEGACY
) -> CharacterMap:
    """Decode the cmap index and its Unicode format 4 subtable.

    Args:
        data: Raw cmap table
        num_glyphs: maxp.numGlyphs, the length of the glyph index array
        lookup: Codepoint resolution rule

    Returns:
        Decoded character map

    Raises:
        UnsupportedCmapPlatformError: No Unicode subtable
        UnsupportedCmapFormatError: Selected subtable is not format 4
        MalformedTableError: Truncated arrays or non-zero reservedPad
    """
    reader = BinaryReader(data, tag="cmap")
    version, num_subtables = reader.unpack("HH")
    records = [CmapSubtableRecord(*reader.unpack("HHI")) for _ in range(num_subtables)]

    selected = select_subtable(records)
    logger.debug(
        "Selected cmap subtable platform=%d encoding=%d offset=%d",
        selected.platform_id,
        selected.platform_specific_id,
        selected.offset,
    )

    reader.seek(selected.offset)
    fmt = reader.u16()
    if fmt != SEGMENT_FORMAT:
        raise UnsupportedCmapFormatError(fmt)

    length, language, seg_count_x2, search_range, entry_selector, range_shift = reader.unpack(
        "HHHHHH"
    )
    seg_count = seg_count_x2 // 2

    end_code = reader.array("H", seg_count)
    reserved_pad = reader.u16()
    if reserved_pad != 0:
        raise MalformedTableError("cmap", f"reservedPad is {reserved_pad}, expected 0")
    start_code = reader.array("H", seg_count)
    id_delta = reader.array("h", seg_count)
    id_range_offset = reader.array("H", seg_count)

    available = reader.remaining // 2
    if available < num_glyphs:
        logger.debug(
            "glyphIndexArray truncated to %d of %d entries", available, num_glyphs
        )
    glyph_index_array = reader.array("H", min(available, num_glyphs))

    cmap = CharacterMap(
        version=version,
        subtables=tuple(records),
        selected=selected,
        format=fmt,
        length=length,
        language=language,
        seg_count_x2=seg_count_x2,
        search_range=search_range,
        entry_selector=entry_selector,
        range_shift=range_shift,
        end_code=end_code,
        start_code=start_code,
        id_delta=id_delta,
        id_range_offset=id_range_offset,
        glyph_index_array=glyph_index_array,
        reserved_pad=reserved_pad,
        lookup=lookup,
    )
    logger.debug(
        "cmap format 4: %d segments, segment span %d, numGlyphs %d",
        seg_count,
        cmap.segment_glyph_count,
        num_glyphs,
    )
    return cmap
