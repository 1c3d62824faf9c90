"""Unit tests for scanner.directory module."""

import logging
import os

import pytest

from photo_organizer.scanner.directory import scan_media_files


class TestScanMediaFiles:
    """Tests for scan_media_files() function."""

    def test_scan_empty_directory(self, tmp_path):
        assert scan_media_files(tmp_path) == []

    def test_scan_filters_by_extension(self, tmp_path):
        (tmp_path / "photo1.jpg").write_text("test")
        (tmp_path / "photo2.PNG").write_text("test")
        (tmp_path / "clip.mov").write_text("test")
        (tmp_path / "notes.txt").write_text("test")
        (tmp_path / "photo1.xmp").write_text("test")

        result = scan_media_files(tmp_path)

        assert {p.name for p in result} == {"photo1.jpg", "photo2.PNG", "clip.mov"}

    def test_scan_is_recursive_and_sorted(self, tmp_path):
        (tmp_path / "b").mkdir()
        (tmp_path / "a" / "deep").mkdir(parents=True)
        (tmp_path / "b" / "2.jpg").write_text("test")
        (tmp_path / "a" / "deep" / "1.jpg").write_text("test")
        (tmp_path / "0.mp4").write_text("test")

        result = scan_media_files(tmp_path)

        assert result == sorted(result)
        assert len(result) == 3
        assert tmp_path / "a" / "deep" / "1.jpg" in result

    def test_scan_skips_dot_files(self, tmp_path):
        (tmp_path / "._IMG_0001.jpg").write_text("appledouble")
        (tmp_path / ".hidden.jpg").write_text("test")
        (tmp_path / "IMG_0001.jpg").write_text("test")

        result = scan_media_files(tmp_path)

        assert [p.name for p in result] == ["IMG_0001.jpg"]

    def test_scan_custom_extensions(self, tmp_path):
        (tmp_path / "a.jpg").write_text("test")
        (tmp_path / "b.webp").write_text("test")

        result = scan_media_files(tmp_path, extensions={".webp"})

        assert [p.name for p in result] == ["b.webp"]

    def test_scan_missing_root_is_soft(self, tmp_path, caplog):
        caplog.set_level(logging.WARNING)

        result = scan_media_files(tmp_path / "nope")

        assert result == []
        assert "Could not list directory" in caplog.text

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="permission checks do not apply to root",
    )
    def test_scan_skips_unreadable_directory(self, tmp_path, caplog):
        locked = tmp_path / "locked"
        locked.mkdir()
        (locked / "secret.jpg").write_text("test")
        (tmp_path / "open.jpg").write_text("test")
        locked.chmod(0)
        caplog.set_level(logging.WARNING)

        try:
            result = scan_media_files(tmp_path)
        finally:
            locked.chmod(0o755)

        assert [p.name for p in result] == ["open.jpg"]
        assert "Could not list directory" in caplog.text
