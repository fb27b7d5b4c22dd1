"""Simple glyph outline decoding from the glyf table.

A simple glyph record is laid out as:

    numberOfContours, xMin, yMin, xMax, yMax      (int16 x 5)
    endPtsOfContours[numberOfContours]           (uint16)
    instructionLength, instructions[]            (uint16, bytes)
    flags[]                                       (uint8, run-length encoded)
    xCoordinates[]                                (uint8 or int16 deltas)
    yCoordinates[]                                (uint8 or int16 deltas)

Composite glyphs (numberOfContours < 0) are rejected.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from ttfsampler.exceptions import GlyphDecodeError, MalformedTableError, UnsupportedGlyphTypeError
from ttfsampler.io.binary import BinaryReader

logger = logging.getLogger(__name__)

ON_CURVE_POINT = 0x01
X_SHORT_VECTOR = 0x02
Y_SHORT_VECTOR = 0x04
REPEAT_FLAG = 0x08
X_IS_SAME_OR_POSITIVE = 0x10
Y_IS_SAME_OR_POSITIVE = 0x20

DESCRIPTOR_SIZE = 10


@dataclass(frozen=True, slots=True)
class GlyphDescriptor:
    """The 10-byte header shared by every glyph record."""

    number_of_contours: int
    x_min: int
    y_min: int
    x_max: int
    y_max: int

    @property
    def is_composite(self) -> bool:
        return self.number_of_contours < 0


@dataclass(frozen=True)
class RawGlyphOutline:
    """Decoded points of a simple glyph.

    Attributes:
        points: Flat (x, y) list, scaled by 1/unitsPerEm
        on_curve: One flag per point
        contour_ends: Index of the last point of each contour
        descriptor: Glyph header the outline was decoded from
    """

    points: tuple[tuple[float, float], ...]
    on_curve: tuple[bool, ...]
    contour_ends: tuple[int, ...]
    descriptor: GlyphDescriptor | None = None

    @property
    def num_points(self) -> int:
        return len(self.points)

    @property
    def num_contours(self) -> int:
        return len(self.contour_ends)

    def is_empty(self) -> bool:
        return not self.contour_ends

    def contours(self) -> Iterator[tuple[tuple[tuple[float, float], ...], tuple[bool, ...]]]:
        """Yield (points, on_curve) slices, one per contour."""
        start = 0
        for end in self.contour_ends:
            yield self.points[start : end + 1], self.on_curve[start : end + 1]
            start = end + 1


def read_descriptor(reader: BinaryReader) -> GlyphDescriptor:
    """Read the glyph header at the cursor."""
    return GlyphDescriptor(*reader.unpack("hhhhh"))


def decode_flags(reader: BinaryReader, num_points: int) -> list[int]:
    """Expand the run-length encoded flag stream.

    A flag with REPEAT_FLAG set is followed by a count byte; the flag (with
    the repeat bit cleared) is then duplicated that many additional times.

    Raises:
        MalformedTableError: If a repeat run overshoots ``num_points``
    """
    flags: list[int] = []
    while len(flags) < num_points:
        flag = reader.u8()
        if flag & REPEAT_FLAG:
            repeats = reader.u8()
            flag &= ~REPEAT_FLAG
            flags.extend([flag] * (repeats + 1))
        else:
            flags.append(flag)

    if len(flags) != num_points:
        raise MalformedTableError(
            "glyf", f"flag repeat run produced {len(flags)} flags for {num_points} points"
        )
    return flags


def coordinate_block_size(flags: list[int], short_bit: int, same_bit: int) -> int:
    """Byte length of one coordinate block as described by the flags."""
    size = 0
    for flag in flags:
        if flag & short_bit:
            size += 1
        elif not flag & same_bit:
            size += 2
    return size


def decode_coordinates(
    reader: BinaryReader, flags: list[int], short_bit: int, same_bit: int
) -> list[int]:
    """Decode one delta-encoded coordinate block into absolute values.

    Each point is stored relative to the previous one, across contour
    boundaries. A short vector is an unsigned byte whose sign comes from
    ``same_bit``; otherwise ``same_bit`` means "unchanged" and its absence
    means a signed 16-bit delta.
    """
    values = []
    current = 0
    for flag in flags:
        if flag & short_bit:
            magnitude = reader.u8()
            current += magnitude if flag & same_bit else -magnitude
        elif not flag & same_bit:
            current += reader.i16()
        values.append(current)
    return values


def decode_simple_glyph(
    reader: BinaryReader,
    descriptor: GlyphDescriptor,
    glyph_index: int = 0,
    scale: float = 1.0,
) -> RawGlyphOutline:
    """Decode a simple glyph's contours, flags and coordinates.

    Args:
        reader: Cursor positioned just after the glyph descriptor
        descriptor: Already-read glyph header
        glyph_index: Glyph index for error messages
        scale: Factor applied to every coordinate (1/unitsPerEm)

    Returns:
        Raw outline with scaled coordinates

    Raises:
        UnsupportedGlyphTypeError: If the glyph is composite
        GlyphDecodeError: If the record is truncated or inconsistent
    """
    if descriptor.is_composite:
        raise UnsupportedGlyphTypeError(glyph_index, descriptor.number_of_contours)
    if descriptor.number_of_contours == 0:
        return RawGlyphOutline(points=(), on_curve=(), contour_ends=(), descriptor=descriptor)

    try:
        contour_ends = reader.array("H", descriptor.number_of_contours)
        if any(b <= a for a, b in zip(contour_ends, contour_ends[1:])):
            raise GlyphDecodeError(glyph_index, f"contour ends not increasing: {contour_ends}")
        num_points = contour_ends[-1] + 1

        instruction_length = reader.u16()
        reader.skip(instruction_length)

        flags = decode_flags(reader, num_points)

        x_start = reader.position
        x_size = coordinate_block_size(flags, X_SHORT_VECTOR, X_IS_SAME_OR_POSITIVE)
        xs = decode_coordinates(reader, flags, X_SHORT_VECTOR, X_IS_SAME_OR_POSITIVE)

        reader.seek(x_start + x_size)
        ys = decode_coordinates(reader, flags, Y_SHORT_VECTOR, Y_IS_SAME_OR_POSITIVE)
    except MalformedTableError as e:
        raise GlyphDecodeError(glyph_index, e.reason) from e

    return RawGlyphOutline(
        points=tuple((x * scale, y * scale) for x, y in zip(xs, ys)),
        on_curve=tuple(bool(flag & ON_CURVE_POINT) for flag in flags),
        contour_ends=tuple(contour_ends),
        descriptor=descriptor,
    )


def decode_glyph(
    glyf: bytes,
    offset: int,
    glyph_index: int = 0,
    units_per_em: int = 1,
    end: int | None = None,
) -> RawGlyphOutline:
    """Decode the glyph record starting at ``offset`` in the glyf table.

    Args:
        glyf: Raw glyf table
        offset: Byte offset from loca
        glyph_index: Glyph index for error messages
        units_per_em: head.unitsPerEm, the coordinate scale denominator
        end: Byte offset of the next glyph record when known

    Returns:
        Raw outline, empty when the record is zero-length or has no contours

    Raises:
        UnsupportedGlyphTypeError: If the glyph is composite
        GlyphDecodeError: If the record lies outside glyf or is truncated
    """
    if end is not None and end == offset:
        return RawGlyphOutline(points=(), on_curve=(), contour_ends=())
    if end is not None and end < offset:
        raise GlyphDecodeError(glyph_index, f"loca end {end} precedes start {offset}")

    limit = len(glyf) if end is None else min(end, len(glyf))
    try:
        reader = BinaryReader(memoryview(glyf)[:limit], tag="glyf", offset=offset)
        descriptor = read_descriptor(reader)
    except MalformedTableError as e:
        raise GlyphDecodeError(glyph_index, e.reason) from e

    logger.debug(
        "Glyph %d: %d contours at offset %d", glyph_index, descriptor.number_of_contours, offset
    )
    return decode_simple_glyph(reader, descriptor, glyph_index, 1.0 / units_per_em)
