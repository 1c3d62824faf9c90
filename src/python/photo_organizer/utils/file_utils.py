"""
File utilities for photo-organizer.

Functions:
    compute_content_hash: Compact MD5 digest of a file's contents
    format_mod_time: Render a modification time in EXIF date-time shape
"""

import base64
import hashlib
from datetime import datetime, timezone
from pathlib import Path
from typing import Union

from photo_organizer.models.record import CAPTURE_TIME_FORMAT

_HASH_CHUNK = 1024 * 1024


def compute_content_hash(file_path: Union[str, Path], chunk_size: int = _HASH_CHUNK) -> str:
    """
    Hash the full contents of a file.

    The 128-bit MD5 digest is base64 encoded without padding, which gives a
    22-character string.

    Args:
        file_path: Path to the file
        chunk_size: Read size in bytes

    Returns:
        22-character digest string

    Raises:
        OSError: If the file cannot be opened or read
    """
    md5 = hashlib.md5()
    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            md5.update(chunk)
    return base64.b64encode(md5.digest()).decode("ascii").rstrip("=")


def format_mod_time(mtime: float) -> str:
    """
    Format a POSIX modification time as "YYYY:MM:DD HH:MM:SS" (UTC).

    Example:
        >>> format_mod_time(1709632800)
        '2024:03:05 10:00:00'
    """
    return datetime.fromtimestamp(mtime, tz=timezone.utc).strftime(CAPTURE_TIME_FORMAT)
