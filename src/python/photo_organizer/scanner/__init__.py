"""Scanner module for discovering media files and reading their metadata."""

from photo_organizer.scanner.directory import scan_media_files
from photo_organizer.scanner.exif import ExifReadResult, read_exif
from photo_organizer.scanner.metadata import (
    decode_gps,
    dms_to_decimal,
    extract_metadata,
    is_valid_capture_time,
)

__all__ = [
    "ExifReadResult",
    "decode_gps",
    "dms_to_decimal",
    "extract_metadata",
    "is_valid_capture_time",
    "read_exif",
    "scan_media_files",
]
