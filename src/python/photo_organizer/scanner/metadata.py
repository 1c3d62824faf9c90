"""
Metadata extraction for media files.

Produces one MediaRecord per file:

- Videos: capture time is always the modification time (unreliable)
- Images: the embedded capture time when it is present and well formed
  (reliable), otherwise the modification time (unreliable)
- All files: byte size and content hash from the current on-disk bytes

Example:
    >>> record = extract_metadata(Path("/media/sdcard/DCIM/IMG_0001.JPG"))
    >>> print(record.capture_time, record.reliability_tag)
    2023:07:14 09:15:30 exif
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence, Tuple, Union

from photo_organizer.errors import ReadFailure, UnsupportedFileType
from photo_organizer.models.enums import IMAGE_EXTENSIONS, VIDEO_EXTENSIONS, MediaKind
from photo_organizer.models.record import MediaRecord
from photo_organizer.scanner.exif import ExifReadResult, read_exif
from photo_organizer.utils.file_utils import compute_content_hash, format_mod_time

logger = logging.getLogger(__name__)

# Preferred first
CAPTURE_TIME_KEYS = ("DateTimeOriginal", "DateTime")

_CAPTURE_TIME_PATTERN = re.compile(r"[0-9]{4}:[0-9]{2}:[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}")


def extract_metadata(
    file_path: Union[str, Path],
    image_extensions: Iterable[str] = IMAGE_EXTENSIONS,
    video_extensions: Iterable[str] = VIDEO_EXTENSIONS,
) -> MediaRecord:
    """
    Extract a normalized MediaRecord from a media file.

    Args:
        file_path: Path to the media file
        image_extensions: Allowlist of image extensions
        video_extensions: Allowlist of video extensions

    Returns:
        MediaRecord

    Raises:
        UnsupportedFileType: Extension is in neither allowlist
        ReadFailure: The file could not be stat-ed or hashed
    """
    file_path = Path(file_path)
    kind = MediaKind.from_filename(file_path, image_extensions, video_extensions)

    if kind is None:
        raise UnsupportedFileType(file_path)

    # Embedded metadata is read before stat/hash; its failures are recovered
    exif = read_exif(file_path) if kind is MediaKind.PHOTO else None

    try:
        stat = os.stat(file_path)
        content_hash = compute_content_hash(file_path)
    except OSError as e:
        raise ReadFailure(file_path, e.strerror or str(e)) from e

    capture_time, reliable, gps = None, False, None

    if exif is not None:
        if exif.ok:
            capture_time = get_capture_time(exif)
            reliable = capture_time is not None and is_valid_capture_time(capture_time)
            gps = decode_gps(exif)
        else:
            logger.debug("Embedded metadata unreadable for %s: %s", file_path, exif.reason)

    if not reliable:
        capture_time = format_mod_time(stat.st_mtime)

    return MediaRecord(
        path=file_path,
        kind=kind,
        capture_time=capture_time,
        reliable=reliable,
        size_bytes=stat.st_size,
        content_hash=content_hash,
        gps=gps,
    )


def get_capture_time(exif: ExifReadResult) -> Optional[str]:
    """Return the first capture-time tag present (even if empty), without validating it."""
    for key in CAPTURE_TIME_KEYS:
        value = exif.get(key)
        if value is not None:
            return str(value)
    return None


def is_valid_capture_time(value: str) -> bool:
    """
    Check that a capture time is exactly "YYYY:MM:DD HH:MM:SS".

    Values starting with "0" are rejected: some writers emit
    "0000:00:00 00:00:00" when the clock was never set.
    """
    return bool(_CAPTURE_TIME_PATTERN.fullmatch(value)) and not value.startswith("0")


def decode_gps(exif: ExifReadResult) -> Optional[Tuple[float, float]]:
    """
    Decode GPS coordinates from EXIF tags.

    Returns:
        (latitude, longitude) in decimal degrees, or None when either
        coordinate is missing or malformed
    """
    latitude = dms_to_decimal(exif.get("GPSLatitude"), exif.get("GPSLatitudeRef"))
    longitude = dms_to_decimal(exif.get("GPSLongitude"), exif.get("GPSLongitudeRef"))

    if latitude is None or longitude is None:
        return None
    return latitude, longitude


def dms_to_decimal(dms: Optional[Sequence[Any]], ref: Any = None) -> Optional[float]:
    """
    Convert a (degrees, minutes, seconds) triplet to decimal degrees.

    Each component is a number or a (numerator, denominator) pair; a zero
    denominator counts as 0. The result is negated when `ref` starts with
    "S" or "W".

    Args:
        dms: Triplet of components
        ref: Hemisphere reference ("N", "S", "E", "W"), optional

    Returns:
        Decimal degrees, or None if the triplet is missing or malformed

    Example:
        >>> dms_to_decimal([(2, 1), (30, 1), (0, 1)], "S")
        -2.5
    """
    if not isinstance(dms, (list, tuple)) or len(dms) != 3:
        return None

    components = [_ratio_to_float(component) for component in dms]
    if any(component is None for component in components):
        return None

    degrees, minutes, seconds = components
    decimal = degrees + minutes / 60.0 + seconds / 3600.0

    if isinstance(ref, bytes):
        ref = ref.decode("ascii", errors="replace")
    if isinstance(ref, str) and ref[:1] in ("S", "W"):
        decimal = -decimal

    return decimal


def _ratio_to_float(component: Any) -> Optional[float]:
    if isinstance(component, bool):
        return None
    if isinstance(component, (int, float)):
        return float(component)
    if isinstance(component, (list, tuple)) and len(component) == 2:
        numerator, denominator = component
        if not all(isinstance(n, (int, float)) and not isinstance(n, bool) for n in component):
            return None
        if denominator == 0:
            return 0.0
        return numerator / denominator
    return None
