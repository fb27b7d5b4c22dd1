"""Unit tests for the FontReader facade."""

from pathlib import Path
from unittest.mock import patch

import pytest
import structlog

from ttfsampler import load
from ttfsampler.config import CmapConfig, CmapLookup, SamplerSettings, SamplingConfig, ScaleConfig
from ttfsampler.exceptions import (
    FileUnreadableError,
    HeadMagicMismatchError,
    InvalidMagicError,
    MissingRequiredTableError,
)
from ttfsampler.io import DEFAULT_CHARS, FontReader

UNIT_SCALE = SamplerSettings(scale=ScaleConfig(flip_y=False))


class TestFontReader:
    """Tests for FontReader class."""

    def test_init(self):
        """Test FontReader initialization."""
        path = Path("test.ttf")
        reader = FontReader(path)
        assert reader.font_path == path
        assert reader.is_loaded is False

    def test_units_per_em_before_load(self):
        """Test accessing units_per_em before loading raises RuntimeError."""
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            _ = reader.units_per_em

    def test_glyph_count_before_load(self):
        """Test accessing glyph_count before loading raises RuntimeError."""
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            _ = reader.glyph_count

    def test_get_glyph_before_load(self):
        """Test requesting a glyph before loading raises RuntimeError."""
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            reader.get_glyph(0x41)

    def test_load_nonexistent_file(self, tmp_path: Path):
        """Test loading a nonexistent file raises FileUnreadableError."""
        reader = FontReader(tmp_path / "nonexistent.ttf")
        with pytest.raises(FileUnreadableError):
            reader.load()
        assert reader.is_loaded is False

    def test_load(self, synthetic_font: Path):
        """Test metadata after a successful load."""
        reader = FontReader(synthetic_font)
        reader.load()
        assert reader.units_per_em == 1000
        assert reader.glyph_count == 6
        assert reader.head.long_loca is False
        assert set(reader.tables) == {"cmap", "glyf", "head", "loca", "maxp"}
        assert reader.map_char(ord("O")) == 2

    def test_load_function(self, synthetic_font: Path):
        """Test the module-level load shortcut with a str path."""
        reader = load(str(synthetic_font))
        assert reader.is_loaded

    def test_invalid_magic(self, tmp_path: Path, synthetic_font_bytes: bytes):
        """A file starting with 0xDEADBEEF fails with InvalidMagicError."""
        path = tmp_path / "bad.ttf"
        path.write_bytes(b"\xde\xad\xbe\xef" + synthetic_font_bytes[4:])

        with patch("ttfsampler.io.tables.read_table_directory") as mock_directory:
            with pytest.raises(InvalidMagicError):
                load(path)
        mock_directory.assert_not_called()

    def test_missing_table_aborts_load(self, tmp_path: Path, font_factory):
        """Test that no partially loaded reader survives a failed load."""
        data = font_factory.font([b""], font_factory.cmap([]), omit=("loca",))
        path = tmp_path / "noloca.ttf"
        path.write_bytes(data)

        reader = FontReader(path)
        with pytest.raises(MissingRequiredTableError, match="loca"):
            reader.load()
        assert reader.is_loaded is False

    def test_head_magic_mismatch(self, tmp_path: Path, font_factory):
        """Test that a bad head magic aborts the load."""
        tables = {
            "cmap": font_factory.cmap([]),
            "glyf": b"",
            "head": font_factory.head(magic=0),
            "loca": font_factory.loca([0, 0]),
            "maxp": font_factory.maxp(1),
        }
        path = tmp_path / "badhead.ttf"
        path.write_bytes(font_factory.sfnt(tables))
        with pytest.raises(HeadMagicMismatchError):
            load(path)

    def test_long_loca(self, tmp_path: Path, font_factory):
        """Test decoding through 32-bit loca offsets."""
        glyph = font_factory.simple_glyph([[(0, 0, True), (100, 0, True), (100, 100, True)]])
        cmap = font_factory.cmap([(0x41, 0x41, 1 - 0x41, 0)])
        path = tmp_path / "long.ttf"
        path.write_bytes(font_factory.font([b"", glyph], cmap, long_loca=True))

        reader = load(path, UNIT_SCALE)
        assert reader.head.long_loca is True
        glyph = reader.get_glyph(0x41)
        assert glyph is not None
        assert glyph.paths[0].max_bound == pytest.approx((0.1, 0.1))

    def test_get_glyph_default_flips_y(self, synthetic_font: Path):
        """Default settings produce screen-space (y-down) coordinates."""
        reader = load(synthetic_font)
        glyph = reader.get_glyph(ord("O"))
        assert glyph.bounds() == ((0.0, -1.0), (1.0, 0.0))

    def test_font_size(self, synthetic_font: Path):
        """Test that font_size scales em units."""
        settings = SamplerSettings(scale=ScaleConfig(font_size=64.0, flip_y=False))
        glyph = load(synthetic_font, settings).get_glyph(ord("O"))
        assert glyph.paths[1].min_bound == pytest.approx((12.8, 12.8))

    def test_missing_glyphs(self, synthetic_font: Path):
        """Empty, composite and unmapped codepoints resolve to None."""
        reader = load(synthetic_font)
        assert reader.get_glyph(ord(" ")) is None
        assert reader.get_glyph(ord("K")) is None
        assert reader.get_glyph(ord("z")) is None

    def test_library_use_is_quiet(self, synthetic_font: Path, capsys):
        """Decoding without configure_logging prints nothing to stdout."""
        structlog.reset_defaults()
        reader = load(synthetic_font)
        assert reader.get_glyph(ord("O")) is not None
        assert reader.get_glyph(ord("K")) is None
        assert capsys.readouterr().out == ""

    def test_context_manager_keeps_loaded_font(self, synthetic_font: Path):
        """Entering an already loaded reader does not reload its tables."""
        reader = load(synthetic_font)
        tables = reader.tables
        with reader as same:
            assert same is reader
            assert same.tables is tables
        assert reader.is_loaded is False

    def test_preload(self, synthetic_font: Path):
        """Test that preload fills the cache for drawable characters."""
        reader = load(synthetic_font)
        assert reader.preload() == 3
        assert reader.stats.decoded_count == 3
        assert len(DEFAULT_CHARS) == 95

    def test_sample_path_overrides(self, synthetic_font: Path):
        """Arguments override the configured sampling options."""
        settings = SamplerSettings(sampling=SamplingConfig(subsamples=2))
        reader = load(synthetic_font, settings)
        path = reader.get_glyph(ord("O")).outer_path
        assert len(reader.sample_path(path)) == 4
        assert len(reader.sample_path(path, enable_segment_sampling=True)) == 8
        assert len(reader.sample_path(path, subsamples=3, enable_segment_sampling=True)) == 12

    def test_mesh_data_uses_sampling_settings(self, synthetic_font: Path):
        """Mesh extraction follows the configured subsamples."""
        settings = SamplerSettings(
            scale=ScaleConfig(flip_y=False),
            sampling=SamplingConfig(subsamples=2, enable_segment_sampling=True),
        )
        reader = load(synthetic_font, settings)
        mesh = reader.mesh_data(reader.get_glyph(ord("O")))
        assert len(mesh.vertices) == 16
        assert mesh.holes == [pytest.approx((0.5, 0.5))]

    def test_contour_polyline_default_samples(self, synthetic_font: Path):
        """The polyline length defaults to polyline_samples plus the closing point."""
        settings = SamplerSettings(sampling=SamplingConfig(polyline_samples=10))
        reader = load(synthetic_font, settings)
        sampling = reader.sample_path(reader.get_glyph(ord("O")).outer_path)
        assert len(reader.contour_polyline(sampling)) == 11
        assert len(reader.contour_polyline(sampling, samples=3)) == 4

    def test_cmap_lookup_setting(self, synthetic_font: Path):
        """Test that the configured lookup rule reaches the cmap."""
        settings = SamplerSettings(cmap=CmapConfig(lookup=CmapLookup.STANDARD))
        assert load(synthetic_font, settings).cmap.lookup is CmapLookup.STANDARD

    def test_clear_keeps_tables(self, synthetic_font: Path):
        """Test that clear drops glyphs but not the font."""
        reader = load(synthetic_font)
        first = reader.get_glyph(ord("O"))
        reader.clear()
        assert reader.is_loaded
        assert reader.get_glyph(ord("O")) is not first

    def test_context_manager(self, synthetic_font: Path):
        """Test FontReader as context manager."""
        with FontReader(synthetic_font) as reader:
            assert reader.is_loaded
            assert reader.get_glyph(ord("C")) is not None
        assert reader.is_loaded is False
