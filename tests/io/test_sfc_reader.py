"""Tests for SFC file reading."""

import pytest

from sfcto.io.sfc_reader import SFCReader


class TestSFCReader:
    """Test SFCReader decoding."""

    def test_read_shift_jis(self, line3_file, line3_content):
        reader = SFCReader(line3_file)
        assert reader.read_text() == line3_content
        assert reader.encoding == "cp932"

    def test_fallback_encoding(self, tmp_path, line3_content):
        sfc_path = tmp_path / "utf8.sfc"
        sfc_path.write_bytes(line3_content.encode("utf-8"))
        reader = SFCReader(sfc_path, encodings=["ascii", "utf-8"])
        assert "傾きあり" in reader.read_text()
        assert reader.encoding == "utf-8"

    def test_undecodable_content(self, tmp_path):
        sfc_path = tmp_path / "broken.sfc"
        sfc_path.write_bytes(b"DATA;\n\xff\xfe\x80\nENDSEC;")
        reader = SFCReader(sfc_path, encodings=["ascii"])
        with pytest.raises(UnicodeDecodeError, match="cannot decode"):
            reader.read_text()
        assert reader.encoding is None

    def test_no_encodings(self, tmp_path):
        with pytest.raises(ValueError, match="No encodings"):
            SFCReader(tmp_path / "any.sfc", encodings=[]).decode(b"DATA;")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="SFC file not found"):
            SFCReader(tmp_path / "missing.sfc").read_text()
