"""Shared fixtures: hand-packed sfnt fonts and a fontTools reference font."""

import struct
from pathlib import Path

import pytest

HEAD_MAGIC = 0x5F0F3CF5
SENTINEL_SEGMENT = (0xFFFF, 0xFFFF, 1, 0)


class FontFactory:
    """Packs minimal TrueType tables byte by byte.

    Glyph contours are given as lists of (x, y, on_curve) tuples. Coordinates
    are always written as 2-byte deltas so the flag stream carries only the
    on-curve bit, unless raw glyph bytes are passed instead.
    """

    @staticmethod
    def head(
        units_per_em: int = 1000,
        index_to_loc_format: int = 0,
        magic: int = HEAD_MAGIC,
    ) -> bytes:
        return struct.pack(
            ">iiIIHHqqhhhhHHhhh",
            0x00010000,  # version
            0x00010000,  # fontRevision
            0,  # checkSumAdjustment
            magic,
            0,  # flags
            units_per_em,
            0,  # created
            0,  # modified
            0,
            0,
            1000,
            1000,
            0,  # macStyle
            8,  # lowestRecPPEM
            2,  # fontDirectionHint
            index_to_loc_format,
            0,  # glyphDataFormat
        )

    @staticmethod
    def maxp(num_glyphs: int, profile: bool = False) -> bytes:
        if profile:
            return struct.pack(">iH13H", 0x00010000, num_glyphs, *range(1, 14))
        return struct.pack(">iH", 0x00005000, num_glyphs)

    @staticmethod
    def cmap(
        segments: list[tuple[int, int, int, int]],
        glyph_ids: tuple[int, ...] = (),
        platform_id: int = 0,
        encoding_id: int = 3,
        fmt: int = 4,
        reserved_pad: int = 0,
        sentinel: bool = True,
    ) -> bytes:
        """Pack a cmap with one format 4 subtable.

        Args:
            segments: (startCode, endCode, idDelta, idRangeOffset) per segment
            glyph_ids: glyphIndexArray contents
            sentinel: Append the 0xFFFF terminating segment
        """
        segs = list(segments) + ([SENTINEL_SEGMENT] if sentinel else [])
        seg_count = len(segs)
        length = 16 + seg_count * 8 + 2 * len(glyph_ids)

        body = struct.pack(">HHHHHHH", fmt, length, 0, seg_count * 2, 0, 0, 0)
        body += struct.pack(f">{seg_count}H", *(s[1] for s in segs))
        body += struct.pack(">H", reserved_pad)
        body += struct.pack(f">{seg_count}H", *(s[0] for s in segs))
        body += struct.pack(f">{seg_count}h", *(s[2] for s in segs))
        body += struct.pack(f">{seg_count}H", *(s[3] for s in segs))
        body += struct.pack(f">{len(glyph_ids)}H", *glyph_ids)

        index = struct.pack(">HH", 0, 1) + struct.pack(">HHI", platform_id, encoding_id, 12)
        return index + body

    @staticmethod
    def simple_glyph(
        contours: list[list[tuple[int, int, bool]]], instructions: bytes = b""
    ) -> bytes:
        points = [p for contour in contours for p in contour]
        ends = []
        total = 0
        for contour in contours:
            total += len(contour)
            ends.append(total - 1)

        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        data = struct.pack(">hhhhh", len(contours), min(xs), min(ys), max(xs), max(ys))
        data += struct.pack(f">{len(ends)}H", *ends)
        data += struct.pack(">H", len(instructions)) + instructions
        data += bytes(1 if p[2] else 0 for p in points)

        prev = 0
        for x in xs:
            data += struct.pack(">h", x - prev)
            prev = x
        prev = 0
        for y in ys:
            data += struct.pack(">h", y - prev)
            prev = y

        if len(data) % 2:
            data += b"\0"
        return data

    @staticmethod
    def composite_glyph() -> bytes:
        # header, then one component record: flags, glyphIndex, dx, dy (bytes)
        return struct.pack(">hhhhh", -1, 0, 0, 100, 100) + struct.pack(">HHbb", 0x0002, 1, 0, 0)

    @staticmethod
    def loca(offsets: list[int], long_format: bool = False) -> bytes:
        if long_format:
            return struct.pack(f">{len(offsets)}I", *offsets)
        return struct.pack(f">{len(offsets)}H", *(o // 2 for o in offsets))

    @staticmethod
    def checksum(data: bytes) -> int:
        padded = data + b"\0" * (-len(data) % 4)
        return sum(struct.unpack(f">{len(padded) // 4}I", padded)) & 0xFFFFFFFF

    @classmethod
    def sfnt(cls, tables: dict[str, bytes], magic: int = 0x00010000) -> bytes:
        """Pack tables behind an offset subtable and table directory."""
        tags = sorted(tables)
        header = struct.pack(">IHHHH", magic, len(tags), 0, 0, 0)
        offset = 12 + 16 * len(tags)

        directory = b""
        payload = b""
        for tag in tags:
            table = tables[tag]
            directory += struct.pack(
                ">4sIII", tag.encode("latin-1"), cls.checksum(table), offset + len(payload), len(table)
            )
            payload += table + b"\0" * (-len(table) % 4)
        return header + directory + payload

    @classmethod
    def font(
        cls,
        glyphs: list[bytes],
        cmap: bytes,
        units_per_em: int = 1000,
        long_loca: bool = False,
        omit: tuple[str, ...] = (),
        magic: int = 0x00010000,
    ) -> bytes:
        """Pack a complete font from glyph records and a cmap table."""
        offsets = [0]
        for glyph in glyphs:
            offsets.append(offsets[-1] + len(glyph))

        tables = {
            "cmap": cmap,
            "glyf": b"".join(glyphs),
            "head": cls.head(units_per_em, 1 if long_loca else 0),
            "loca": cls.loca(offsets, long_loca),
            "maxp": cls.maxp(len(glyphs)),
        }
        for tag in omit:
            del tables[tag]
        return cls.sfnt(tables, magic)


# Glyph order of the synthetic font
NOTDEF = [[(0, 0, True), (500, 0, True), (500, 700, True), (0, 700, True)]]
NESTED_SQUARES = [
    [(0, 0, True), (1000, 0, True), (1000, 1000, True), (0, 1000, True)],
    [(200, 200, True), (200, 800, True), (800, 800, True), (800, 200, True)],
]
CURVED = [[(0, 0, True), (1000, 0, False), (1000, 1000, False), (0, 1000, True)]]
ALL_OFF_CURVE = [[(500, 0, False), (1000, 500, False), (500, 1000, False), (0, 500, False)]]

SYNTHETIC_CHARS = {
    " ": 1,
    "C": 3,
    "K": 4,
    "O": 2,
    "Q": 5,
}


@pytest.fixture
def font_factory() -> type[FontFactory]:
    """Byte-level font packer."""
    return FontFactory


@pytest.fixture
def synthetic_font_bytes() -> bytes:
    """Six-glyph font: .notdef, space (empty), O (nested squares), C (curve),
    K (composite), Q (all off-curve)."""
    glyphs = [
        FontFactory.simple_glyph(NOTDEF),
        b"",
        FontFactory.simple_glyph(NESTED_SQUARES),
        FontFactory.simple_glyph(CURVED),
        FontFactory.composite_glyph(),
        FontFactory.simple_glyph(ALL_OFF_CURVE),
    ]
    segments = [
        (ord(char), ord(char), glyph_index - ord(char), 0)
        for char, glyph_index in sorted(SYNTHETIC_CHARS.items())
    ]
    return FontFactory.font(glyphs, FontFactory.cmap(segments))


@pytest.fixture
def synthetic_font(tmp_path: Path, synthetic_font_bytes: bytes) -> Path:
    """Synthetic font written to disk."""
    path = tmp_path / "synthetic.ttf"
    path.write_bytes(synthetic_font_bytes)
    return path


def _draw_reference_glyphs() -> dict:
    from fontTools.pens.ttGlyphPen import TTGlyphPen

    glyphs = {}

    pen = TTGlyphPen(None)
    pen.moveTo((0, 0))
    pen.lineTo((500, 0))
    pen.lineTo((500, 700))
    pen.lineTo((0, 700))
    pen.closePath()
    glyphs[".notdef"] = pen.glyph()

    glyphs["space"] = TTGlyphPen(None).glyph()

    pen = TTGlyphPen(None)
    pen.moveTo((0, 0))
    pen.lineTo((100, 0))
    pen.lineTo((250, 450))
    pen.lineTo((400, 0))
    pen.lineTo((500, 0))
    pen.lineTo((250, 700))
    pen.closePath()
    pen.moveTo((180, 200))
    pen.lineTo((250, 380))
    pen.lineTo((320, 200))
    pen.closePath()
    glyphs["A"] = pen.glyph()

    pen = TTGlyphPen(None)
    pen.moveTo((250, 0))
    pen.qCurveTo((500, 0), (500, 700), (250, 700))
    pen.qCurveTo((0, 700), (0, 0), (250, 0))
    pen.closePath()
    pen.moveTo((250, 100))
    pen.qCurveTo((100, 100), (100, 600), (250, 600))
    pen.qCurveTo((400, 600), (400, 100), (250, 100))
    pen.closePath()
    glyphs["O"] = pen.glyph()

    pen = TTGlyphPen({"A": glyphs["A"]})
    pen.addComponent("A", (1, 0, 0, 1, 50, 0))
    glyphs["R"] = pen.glyph()

    return glyphs


REFERENCE_GLYPH_ORDER = [".notdef", "space", "A", "O", "R"]
REFERENCE_CMAP = {0x20: "space", 0x41: "A", 0x4F: "O", 0x52: "R"}


@pytest.fixture(scope="session")
def reference_font(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """A TrueType font built with fontTools FontBuilder."""
    pytest.importorskip("fontTools")
    from fontTools.fontBuilder import FontBuilder

    fb = FontBuilder(unitsPerEm=1000, isTTF=True)
    fb.setupGlyphOrder(REFERENCE_GLYPH_ORDER)
    fb.setupCharacterMap(REFERENCE_CMAP)
    fb.setupGlyf(_draw_reference_glyphs())
    fb.setupHorizontalMetrics({name: (600, 0) for name in REFERENCE_GLYPH_ORDER})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "Sampler Test", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, usWinAscent=800, usWinDescent=200)
    fb.setupPost()

    path = tmp_path_factory.mktemp("fonts") / "SamplerTest-Regular.ttf"
    fb.save(str(path))
    return path
