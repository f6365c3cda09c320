"""
Unit tests for the command-line interface (cli/format.py).
"""

import argparse

import pytest

from formdata_formatter.cli.format import main, parse_attachment
from tests.fixtures.documents import SAMPLE_DOCUMENTS


class TestParseAttachment:
    """Tests for parse_attachment()."""

    @pytest.mark.unit
    def test_guessed_content_type(self, tmp_path):
        path = tmp_path / "harbour.png"
        path.write_bytes(b"\x89PNG")

        content_id, source = parse_attachment(f"photo-1={path}")

        assert content_id == "photo-1"
        assert source.name == "harbour.png"
        assert source.content_type == "image/png"
        assert source.data == b"\x89PNG"
        assert source.on_disk is True

    @pytest.mark.unit
    def test_explicit_content_type(self, tmp_path):
        path = tmp_path / "data.bin"
        path.write_bytes(b"x")

        _, source = parse_attachment(f"d={path};application/x-custom")

        assert source.content_type == "application/x-custom"

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["no-equals", "=path", "cid="])
    def test_malformed(self, value):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_attachment(value)

    @pytest.mark.unit
    def test_missing_file(self, tmp_path):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_attachment(f"cid={tmp_path / 'missing.bin'}")


class TestMain:
    """Tests for main()."""

    @pytest.mark.unit
    def test_writes_output_file(self, tmp_path, weather_xml):
        input_path = tmp_path / "payload.xml"
        input_path.write_bytes(weather_xml)
        output_path = tmp_path / "out" / "body.bin"

        code = main([str(input_path), "--boundary", "AaB03x", "--output", str(output_path)])

        assert code == 0
        data = output_path.read_bytes()
        assert data.startswith(b"--AaB03x\r\n")
        assert b'name="date"' in data

    @pytest.mark.unit
    def test_attachment_resolved(self, tmp_path):
        input_path = tmp_path / "envelope.xml"
        input_path.write_bytes(SAMPLE_DOCUMENTS["xop_attachment"])
        photo = tmp_path / "harbour.png"
        photo.write_bytes(b"\x89PNG")
        output_path = tmp_path / "body.bin"

        code = main([
            str(input_path),
            "--boundary", "B",
            "--attachment", f"photo-1={photo}",
            "--output", str(output_path),
        ])

        assert code == 0
        data = output_path.read_bytes()
        assert b'name="photo"; filename="harbour.png"' in data
        assert b"Content-Type: image/png" in data

    @pytest.mark.unit
    def test_formatter_error_exit_code(self, tmp_path):
        input_path = tmp_path / "bad.xml"
        input_path.write_bytes(SAMPLE_DOCUMENTS["invalid_base64"])

        assert main([str(input_path), "--output", str(tmp_path / "o.bin")]) == 1

    @pytest.mark.unit
    def test_missing_input(self, tmp_path):
        assert main([str(tmp_path / "nope.xml")]) == 1
