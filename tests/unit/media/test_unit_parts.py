# tests/unit/media/test_unit_parts.py — v1
"""Tests for media/parts.py — image source decoding and MIME inference."""

from __future__ import annotations

import base64
import binascii

import pytest

from panelforge.media.parts import InlineImage, decode_image_source, load_image_file, to_data_uri


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


class TestDecodeImageSource:
    def test_data_uri(self, png_data_uri, png_bytes):
        image = decode_image_source(png_data_uri)
        assert image == InlineImage(data=png_bytes, mime_type="image/png")

    def test_data_uri_mime_wins_over_sniff(self, jpeg_bytes):
        image = decode_image_source(f"data:image/webp;base64,{_b64(jpeg_bytes)}")
        assert image.mime_type == "image/webp"

    def test_data_uri_without_mime_defaults_to_png(self, jpeg_bytes):
        image = decode_image_source(f"base64,{_b64(jpeg_bytes)}")
        assert image.mime_type == "image/png"

    def test_bare_jpeg_is_sniffed(self, jpeg_bytes):
        image = decode_image_source(_b64(jpeg_bytes))
        assert image.mime_type == "image/jpeg"
        assert image.data == jpeg_bytes

    def test_bare_unknown_defaults_to_png(self):
        assert decode_image_source(_b64(b"GIF89a...")).mime_type == "image/png"

    def test_invalid_base64(self):
        with pytest.raises(binascii.Error):
            decode_image_source("not*base64")


class TestDataUri:
    def test_round_trip(self, png_bytes, png_data_uri):
        assert to_data_uri(png_bytes, "image/png") == png_data_uri
        assert InlineImage(png_bytes, "image/png").data_uri == png_data_uri


class TestLoadImageFile:
    def test_mime_from_extension(self, tmp_path, png_bytes):
        path = tmp_path / "panel.png"
        path.write_bytes(png_bytes)
        assert load_image_file(path) == InlineImage(png_bytes, "image/png")

    def test_jpeg_extension(self, tmp_path, jpeg_bytes):
        path = tmp_path / "panel.jpg"
        path.write_bytes(jpeg_bytes)
        assert load_image_file(str(path)).mime_type == "image/jpeg"

    def test_unknown_extension_is_sniffed(self, tmp_path, jpeg_bytes):
        path = tmp_path / "panel.unknownext"
        path.write_bytes(jpeg_bytes)
        assert load_image_file(path).mime_type == "image/jpeg"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.png"
        path.write_bytes(b"")
        with pytest.raises(ValueError, match="Failed to read file data"):
            load_image_file(path)
