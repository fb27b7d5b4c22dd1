"""sfnt container loading.

Parses the 12-byte file header and the table directory, then copies every
table's bytes into a dictionary keyed by tag. The dictionary is owned by the
FontReader and released with it.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from ttfsampler.exceptions import (
    FileUnreadableError,
    InvalidMagicError,
    MalformedTableError,
    MissingRequiredTableError,
)
from ttfsampler.io.binary import BinaryReader

logger = logging.getLogger(__name__)

TRUETYPE_MAGIC = 0x00010000
APPLE_TRUE_MAGIC = 0x74727565  # 'true'
VALID_MAGICS = (TRUETYPE_MAGIC, APPLE_TRUE_MAGIC)

REQUIRED_TABLES: tuple[str, ...] = ("cmap", "glyf", "head", "loca", "maxp")

HEADER_SIZE = 12
TABLE_RECORD_SIZE = 16


@dataclass(frozen=True, slots=True)
class FontHeader:
    """The sfnt offset subtable.

    Attributes:
        magic: sfnt version tag (0x00010000 or 'true')
        num_tables: Number of table directory records
        search_range: Binary search hint from the header
        entry_selector: Binary search hint from the header
        range_shift: Binary search hint from the header
    """

    magic: int
    num_tables: int
    search_range: int = 0
    entry_selector: int = 0
    range_shift: int = 0


@dataclass(frozen=True, slots=True)
class TableRecord:
    """One entry of the table directory."""

    tag: str
    checksum: int
    offset: int
    length: int


def table_checksum(data: bytes) -> int:
    """Sum a table as big-endian uint32 words, zero padded to 4 bytes."""
    padded = data + b"\0" * (-len(data) % 4)
    reader = BinaryReader(padded, tag="checksum")
    return sum(reader.array("I", len(padded) // 4)) & 0xFFFFFFFF


def read_font_file(path: Path) -> bytes:
    """Read a whole font file into memory.

    Raises:
        FileUnreadableError: If the file cannot be opened or read
    """
    try:
        return path.read_bytes()
    except OSError as e:
        raise FileUnreadableError(str(path), e.strerror or str(e)) from e


def read_header(reader: BinaryReader, source: str) -> FontHeader:
    """Decode the offset subtable and validate its magic number.

    Args:
        reader: Reader positioned at the start of the file
        source: File name for error messages

    Raises:
        InvalidMagicError: If the magic is not a TrueType tag
    """
    if reader.remaining < 4:
        raise MalformedTableError("sfnt", f"file too short for a header ({reader.remaining} bytes)")

    magic = reader.u32()
    if magic not in VALID_MAGICS:
        raise InvalidMagicError(source, magic)

    num_tables, search_range, entry_selector, range_shift = reader.unpack("HHHH")
    return FontHeader(
        magic=magic,
        num_tables=num_tables,
        search_range=search_range,
        entry_selector=entry_selector,
        range_shift=range_shift,
    )


def read_table_directory(reader: BinaryReader, num_tables: int) -> list[TableRecord]:
    """Decode ``num_tables`` directory records at the cursor."""
    records = []
    for _ in range(num_tables):
        raw_tag, checksum, offset, length = reader.unpack("4sIII")
        records.append(
            TableRecord(
                tag=raw_tag.decode("latin-1"),
                checksum=checksum,
                offset=offset,
                length=length,
            )
        )
    return records


def load_tables(data: bytes, source: str = "<memory>") -> tuple[FontHeader, dict[str, bytes]]:
    """Split an sfnt file into its header and raw table buffers.

    Args:
        data: Whole font file contents
        source: File name for error messages

    Returns:
        Tuple of (header, mapping of tag to table bytes)

    Raises:
        InvalidMagicError: If the header magic is wrong
        MalformedTableError: If a record points outside the file
        MissingRequiredTableError: If cmap, glyf, head, loca or maxp is absent
    """
    reader = BinaryReader(data, tag="sfnt")
    header = read_header(reader, source)
    records = read_table_directory(reader, header.num_tables)

    tables: dict[str, bytes] = {}
    for record in sorted(records, key=lambda r: r.offset):
        if record.offset + record.length > len(data):
            raise MalformedTableError(
                record.tag,
                f"offset {record.offset} + length {record.length} exceeds file size {len(data)}",
            )
        if record.tag in tables:
            logger.warning("Duplicate table record %r ignored", record.tag)
            continue

        reader.seek(record.offset)
        table = reader.read(record.length)
        tables[record.tag] = table

        if record.tag != "head" and table_checksum(table) != record.checksum:
            logger.debug("Checksum mismatch for table %r", record.tag)

    logger.debug("Loaded tables: %s", sorted(tables))

    missing = [tag for tag in REQUIRED_TABLES if tag not in tables]
    if missing:
        raise MissingRequiredTableError(source, missing)

    return header, tables
