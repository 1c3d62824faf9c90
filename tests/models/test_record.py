"""Unit tests for models.record module."""

from pathlib import Path

from photo_organizer.models.enums import MediaKind
from photo_organizer.models.record import Fingerprint, MediaRecord


def _record(**overrides) -> MediaRecord:
    values = dict(
        path=Path("/src/IMG_0001.jpg"),
        kind=MediaKind.PHOTO,
        capture_time="2024:03:05 10:00:00",
        reliable=True,
        size_bytes=1234,
        content_hash="1B2M2Y8AsgTpgAmY7PhCfg",
    )
    values.update(overrides)
    return MediaRecord(**values)


class TestFingerprint:
    """Tests for the dedup fingerprint."""

    def test_fingerprint_is_hash_and_size(self):
        record = _record()
        assert record.fingerprint == Fingerprint("1B2M2Y8AsgTpgAmY7PhCfg", 1234)

    def test_same_hash_different_size_is_not_equal(self):
        assert _record().fingerprint != _record(size_bytes=1235).fingerprint

    def test_same_size_different_hash_is_not_equal(self):
        assert _record().fingerprint != _record(content_hash="AAAAAAAAAAAAAAAAAAAAAA").fingerprint

    def test_fingerprint_ignores_path_and_time(self):
        a = _record()
        b = _record(path=Path("/other/copy.jpg"), capture_time="2020:01:01 00:00:00", reliable=False)
        assert a.fingerprint == b.fingerprint


class TestMediaRecord:
    """Tests for MediaRecord helpers."""

    def test_reliability_tag(self):
        assert _record(reliable=True).reliability_tag == "exif"
        assert _record(reliable=False).reliability_tag == "mod"

    def test_to_dict(self):
        result = _record(gps=(2.5, -1.0)).to_dict()

        assert result["path"] == "/src/IMG_0001.jpg"
        assert result["kind"] == "photo"
        assert result["capture_time"] == "2024:03:05 10:00:00"
        assert result["reliable"] is True
        assert result["gps"] == (2.5, -1.0)
