"""Unit tests for scanner.exif module."""

from fractions import Fraction
from unittest.mock import patch

import pytest
from PIL import Image as PILImage

from photo_organizer.errors import EmbeddedMetadataUnreadable
from photo_organizer.scanner.exif import ExifReadResult, _normalize_triplet, read_exif


class FakeTag:
    """Stand-in for an exifread IfdTag: str() gives the printable value."""

    def __init__(self, values):
        self.values = values

    def __str__(self):
        return str(self.values)


class TestExifReadResult:
    """Tests for ExifReadResult class."""

    def test_success(self):
        result = ExifReadResult.success({"DateTime": "2024:03:05 10:00:00"})

        assert result.ok
        assert result.get("DateTime") == "2024:03:05 10:00:00"
        assert result.get("Missing") is None
        assert result.reason is None

    def test_failure(self, tmp_path):
        error = EmbeddedMetadataUnreadable(tmp_path / "x.jpg", "bad header")
        result = ExifReadResult.failure(error)

        assert not result.ok
        assert result.tags == {}
        assert result.reason == "bad header"


class TestReadExif:
    """Tests for read_exif() function."""

    @pytest.mark.integration
    def test_read_jpeg_with_datetime(self, tmp_path, make_jpeg):
        path = make_jpeg(tmp_path / "with_exif.jpg", exif_datetime="2021:06:01 12:34:56")

        result = read_exif(path)

        assert result.ok
        assert result.get("DateTime") == "2021:06:01 12:34:56"

    @pytest.mark.integration
    def test_read_jpeg_without_exif(self, tmp_path, make_jpeg):
        path = make_jpeg(tmp_path / "plain.jpg")

        result = read_exif(path)

        assert result.ok
        assert result.get("DateTimeOriginal") is None
        assert result.get("DateTime") is None

    @pytest.mark.integration
    def test_read_gif_has_no_capture_time(self, tmp_path):
        path = tmp_path / "anim.gif"
        PILImage.new("P", (8, 8)).save(path, format="GIF")

        result = read_exif(path)

        assert result.ok
        assert result.get("DateTime") is None

    def test_corrupted_file_is_a_failure_not_an_exception(self, tmp_path):
        corrupted = tmp_path / "corrupted.jpg"
        corrupted.write_bytes(b"This is not a valid JPEG file")

        result = read_exif(corrupted)

        assert not result.ok
        assert isinstance(result.error, EmbeddedMetadataUnreadable)
        assert result.error.path == corrupted

    def test_missing_file_is_a_failure(self, tmp_path):
        result = read_exif(tmp_path / "gone.jpg")

        assert not result.ok
        assert result.reason

    def test_reader_exception_is_swallowed(self, tmp_path):
        path = tmp_path / "photo.jpg"
        path.write_bytes(b"x")

        with patch("photo_organizer.scanner.exif._read_with_pillow", side_effect=RuntimeError("boom")):
            result = read_exif(path)

        assert not result.ok
        assert "boom" in result.reason

    def test_exifread_fallback_when_pillow_cannot_open(self, tmp_path):
        path = tmp_path / "IMG_0001.jpg"
        path.write_bytes(b"truncated image data")
        tags = {
            "EXIF DateTimeOriginal": FakeTag("2022:02:02 02:02:02"),
            "GPS GPSLatitude": FakeTag([2, 30, 0]),
            "GPS GPSLatitudeRef": FakeTag("S"),
            "Thumbnail JPEGInterchangeFormat": FakeTag([123]),
        }

        with patch("photo_organizer.scanner.exif.exifread.process_file", return_value=tags) as process:
            result = read_exif(path)

        process.assert_called_once()
        assert result.ok
        assert result.error is None
        assert result.get("DateTimeOriginal") == "2022:02:02 02:02:02"
        assert result.get("GPSLatitude") == [(2, 1), (30, 1), (0, 1)]
        assert result.get("GPSLatitudeRef") == "S"
        assert "JPEGInterchangeFormat" not in result.tags

    @pytest.mark.integration
    def test_exifread_not_used_when_pillow_reads_file(self, tmp_path, make_jpeg):
        path = make_jpeg(tmp_path / "plain.jpg")

        with patch("photo_organizer.scanner.exif.exifread.process_file") as process:
            result = read_exif(path)

        process.assert_not_called()
        assert result.ok

    def test_exifread_error_keeps_pillow_reason(self, tmp_path):
        path = tmp_path / "photo.png"
        path.write_bytes(b"x")

        with patch("photo_organizer.scanner.exif._read_with_pillow", side_effect=OSError("cannot identify image file")), \
                patch("photo_organizer.scanner.exif.exifread.process_file", side_effect=ValueError("bad offset")):
            result = read_exif(path)

        assert not result.ok
        assert result.reason == "OSError: cannot identify image file"


class TestNormalizeTriplet:
    """Tests for rational normalization."""

    def test_rationals_become_pairs(self):
        result = _normalize_triplet([Fraction(5, 2), Fraction(30, 1), Fraction(0, 1)])

        assert result == [(5, 2), (30, 1), (0, 1)]

    def test_non_sequence_is_returned_as_is(self):
        assert _normalize_triplet("garbage") == "garbage"
