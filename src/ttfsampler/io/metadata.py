"""Decoders for the fixed-layout head, maxp and loca tables."""

import logging
from dataclasses import dataclass

from ttfsampler.exceptions import HeadMagicMismatchError, MalformedTableError
from ttfsampler.io.binary import BinaryReader

logger = logging.getLogger(__name__)

HEAD_MAGIC = 0x5F0F3CF5

MAXP_PROFILE_FIELDS: tuple[str, ...] = (
    "max_points",
    "max_contours",
    "max_component_points",
    "max_component_contours",
    "max_zones",
    "max_twilight_points",
    "max_storage",
    "max_function_defs",
    "max_instruction_defs",
    "max_stack_elements",
    "max_size_of_instructions",
    "max_component_elements",
    "max_component_depth",
)


@dataclass(frozen=True, slots=True)
class HeadTable:
    """Decoded ``head`` table.

    ``created`` and ``modified`` are kept as raw 64-bit second counts.
    """

    version: int
    font_revision: int
    checksum_adjustment: int
    magic_number: int
    flags: int
    units_per_em: int
    created: int
    modified: int
    x_min: int
    y_min: int
    x_max: int
    y_max: int
    mac_style: int
    lowest_rec_ppem: int
    font_direction_hint: int
    index_to_loc_format: int
    glyph_data_format: int

    @property
    def long_loca(self) -> bool:
        """True when loca entries are uint32 offsets."""
        return self.index_to_loc_format != 0


@dataclass(frozen=True, slots=True)
class MaxpTable:
    """Decoded ``maxp`` table.

    Attributes:
        version: Table version as a 16.16 fixed integer
        num_glyphs: Number of glyphs in the font
        profile: Version 1.0 profile fields by name (empty for version 0.5)
    """

    version: int
    num_glyphs: int
    profile: dict[str, int]


def decode_head(data: bytes) -> HeadTable:
    """Decode the head table.

    Raises:
        HeadMagicMismatchError: If magicNumber is not 0x5F0F3CF5
        MalformedTableError: If the table is truncated
    """
    reader = BinaryReader(data, tag="head")
    fields = reader.unpack("iiIIHHqqhhhhHHhhh")
    head = HeadTable(*fields)

    if head.magic_number != HEAD_MAGIC:
        raise HeadMagicMismatchError(head.magic_number)
    if head.units_per_em == 0:
        raise MalformedTableError("head", "unitsPerEm is zero")

    return head


def decode_maxp(data: bytes) -> MaxpTable:
    """Decode the maxp table, including the profile fields when present."""
    reader = BinaryReader(data, tag="maxp")
    version, num_glyphs = reader.unpack("iH")

    profile: dict[str, int] = {}
    available = min(reader.remaining // 2, len(MAXP_PROFILE_FIELDS))
    if version == 0x00010000 and available:
        values = reader.array("H", available)
        profile = dict(zip(MAXP_PROFILE_FIELDS, values))

    return MaxpTable(version=version, num_glyphs=num_glyphs, profile=profile)


class LocaTable:
    """Glyph offsets into the glyf table.

    Short-format entries are stored doubled so every offset is a byte offset.
    When the table carries the trailing ``numGlyphs + 1`` entry, glyph lengths
    are known and empty glyphs can be detected.
    """

    def __init__(self, offsets: tuple[int, ...], num_glyphs: int) -> None:
        self._offsets = offsets
        self._num_glyphs = num_glyphs

    @classmethod
    def decode(cls, data: bytes, num_glyphs: int, long_format: bool) -> "LocaTable":
        """Decode loca in the format selected by head.indexToLocFormat.

        Raises:
            MalformedTableError: If fewer than ``num_glyphs`` entries are present
        """
        reader = BinaryReader(data, tag="loca")
        width = 4 if long_format else 2
        available = len(data) // width
        if available < num_glyphs:
            raise MalformedTableError(
                "loca", f"{available} entries for {num_glyphs} glyphs"
            )

        count = min(available, num_glyphs + 1)
        if long_format:
            offsets = reader.array("I", count)
        else:
            offsets = tuple(value * 2 for value in reader.array("H", count))
        return cls(offsets, num_glyphs)

    @property
    def num_glyphs(self) -> int:
        return self._num_glyphs

    def offset(self, glyph_index: int) -> int:
        """Byte offset of a glyph record within glyf."""
        return self._offsets[glyph_index]

    def glyph_range(self, glyph_index: int) -> tuple[int, int | None]:
        """Return (start, end) of a glyph record; end is None when unknown."""
        start = self._offsets[glyph_index]
        if glyph_index + 1 < len(self._offsets):
            return start, self._offsets[glyph_index + 1]
        return start, None

    def __len__(self) -> int:
        return self._num_glyphs
