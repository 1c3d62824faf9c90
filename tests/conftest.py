"""Pytest configuration and shared fixtures."""

import calendar
import os
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

import pytest
from PIL import Image as PILImage

# EXIF base-IFD tag id for DateTime
DATETIME_TAG = 0x0132


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: tests that touch real image files")


def set_mtime(path: Path, when: datetime) -> None:
    """Set a file's modification time from a naive UTC datetime."""
    timestamp = calendar.timegm(when.timetuple())
    os.utime(path, (timestamp, timestamp))


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Directory holding files to import."""
    directory = tmp_path / "source"
    directory.mkdir()
    return directory


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    """Empty organized tree."""
    directory = tmp_path / "target"
    directory.mkdir()
    return directory


@pytest.fixture
def make_jpeg() -> Callable[..., Path]:
    """
    Factory writing a small real JPEG.

    Args (of the returned callable):
        path: Where to write the file
        color: Fill color; different colors give different content
        exif_datetime: Value for the base-IFD DateTime tag, if any
        mtime: Modification time (naive UTC), if any
    """
    def _make(
        path: Path,
        color: str = "red",
        exif_datetime: Optional[str] = None,
        mtime: Optional[datetime] = None,
    ) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        img = PILImage.new("RGB", (16, 16), color=color)
        if exif_datetime is not None:
            exif = PILImage.Exif()
            exif[DATETIME_TAG] = exif_datetime
            img.save(path, format="JPEG", exif=exif)
        else:
            img.save(path, format="JPEG")
        if mtime is not None:
            set_mtime(path, mtime)
        return path

    return _make


@pytest.fixture
def make_file() -> Callable[..., Path]:
    """Factory writing arbitrary bytes (videos, corrupt images) with an optional mtime."""
    def _make(path: Path, content: bytes = b"data", mtime: Optional[datetime] = None) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        if mtime is not None:
            set_mtime(path, mtime)
        return path

    return _make
