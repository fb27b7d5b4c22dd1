"""Big-endian field reader for sfnt data.

Every multi-byte field in a TrueType file is stored big-endian. All reads in
ttfsampler go through ``BinaryReader.unpack``, which applies the ``>`` struct
byte order explicitly regardless of the host architecture, and range-checks
the read against the underlying buffer before touching it.
"""

import struct

from ttfsampler.exceptions import MalformedTableError


class BinaryReader:
    """Sequential cursor over an immutable byte buffer.

    Example:
        reader = BinaryReader(data, tag="head")
        version, revision = reader.unpack("ii")
        units_per_em = reader.u16()
    """

    def __init__(self, data: bytes, tag: str = "sfnt", offset: int = 0) -> None:
        """Initialize the reader.

        Args:
            data: Buffer to read from
            tag: Table tag used in error messages
            offset: Initial cursor position
        """
        self._data = data
        self._tag = tag
        self._pos = 0
        self.seek(offset)

    @property
    def tag(self) -> str:
        return self._tag

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def __len__(self) -> int:
        return len(self._data)

    def seek(self, offset: int) -> None:
        """Move the cursor to an absolute offset.

        Raises:
            MalformedTableError: If offset lies outside the buffer
        """
        if offset < 0 or offset > len(self._data):
            raise MalformedTableError(
                self._tag, f"offset {offset} outside buffer of {len(self._data)} bytes"
            )
        self._pos = offset

    def skip(self, count: int) -> None:
        """Advance the cursor by ``count`` bytes."""
        self._check(count)
        self._pos += count

    def unpack(self, fmt: str) -> tuple:
        """Read a big-endian struct at the cursor and advance past it.

        Args:
            fmt: struct format without byte-order prefix

        Returns:
            Tuple of decoded values

        Raises:
            MalformedTableError: If the record extends past the buffer
        """
        size = struct.calcsize(">" + fmt)
        self._check(size)
        values = struct.unpack_from(">" + fmt, self._data, self._pos)
        self._pos += size
        return values

    def u8(self) -> int:
        return self.unpack("B")[0]

    def u16(self) -> int:
        return self.unpack("H")[0]

    def i16(self) -> int:
        return self.unpack("h")[0]

    def u32(self) -> int:
        return self.unpack("I")[0]

    def array(self, code: str, count: int) -> tuple[int, ...]:
        """Read ``count`` consecutive values of one struct type code."""
        if count < 0:
            raise MalformedTableError(self._tag, f"negative array length {count}")
        if count == 0:
            return ()
        return self.unpack(f"{count}{code}")

    def read(self, count: int) -> bytes:
        """Read raw bytes."""
        self._check(count)
        chunk = self._data[self._pos : self._pos + count]
        self._pos += count
        return bytes(chunk)

    def _check(self, size: int) -> None:
        if size < 0 or self._pos + size > len(self._data):
            raise MalformedTableError(
                self._tag,
                f"read of {size} bytes at offset {self._pos} exceeds "
                f"buffer of {len(self._data)} bytes",
            )
