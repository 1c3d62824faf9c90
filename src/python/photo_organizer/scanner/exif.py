"""
Embedded capture-metadata reading.

Readers return very different shapes: Pillow hands out numeric tag ids
spread over several IFDs, exifread hands out "GROUP Name" keys with IfdTag
values. ``read_exif`` hides that behind one ``ExifReadResult``: either a flat
mapping keyed by plain EXIF tag names ("DateTimeOriginal", "GPSLatitude",
...) or a failure reason.

Pillow is tried first. When it cannot open the file (truncated image data,
a container it has no plugin for) exifread scans the raw bytes for an EXIF
block instead; the read only fails when neither finds anything.

Values are normalized as follows:
- text values are ``str`` with trailing NUL characters removed
- GPSLatitude / GPSLongitude are lists of (numerator, denominator) tuples
  when the reader provides rationals
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import exifread
from PIL import Image
from PIL.ExifTags import GPSTAGS, TAGS

from photo_organizer.errors import EmbeddedMetadataUnreadable

logger = logging.getLogger(__name__)

# Pointer tags of the Exif and GPS sub-IFDs in the base IFD
EXIF_IFD_POINTER = 0x8769
GPS_IFD_POINTER = 0x8825

# Tags whose values are lists of rationals
RATIONAL_TRIPLET_TAGS = ("GPSLatitude", "GPSLongitude")

# exifread key prefixes that map onto plain EXIF tag names
_EXIFREAD_GROUPS = ("Image ", "EXIF ", "GPS ")


@dataclass(frozen=True)
class ExifReadResult:
    """
    Outcome of reading embedded metadata from one file.

    Attributes:
        ok: True when the reader parsed the file (tags may still be empty)
        tags: Flat tag-name -> value mapping
        error: Why reading failed (only set when ok is False)
    """
    ok: bool
    tags: Dict[str, Any] = field(default_factory=dict)
    error: Optional[EmbeddedMetadataUnreadable] = None

    @classmethod
    def success(cls, tags: Dict[str, Any]) -> "ExifReadResult":
        return cls(ok=True, tags=dict(tags))

    @classmethod
    def failure(cls, error: EmbeddedMetadataUnreadable) -> "ExifReadResult":
        return cls(ok=False, error=error)

    @property
    def reason(self) -> Optional[str]:
        return self.error.reason if self.error else None

    def get(self, key: str, default: Any = None) -> Any:
        return self.tags.get(key, default)


def read_exif(file_path: Path) -> ExifReadResult:
    """
    Read embedded metadata from an image file.

    Never raises: when neither reader finds any tags the result is a
    failure carrying the Pillow error.

    Args:
        file_path: Path to the image file

    Returns:
        ExifReadResult
    """
    file_path = Path(file_path)
    try:
        return ExifReadResult.success(_read_with_pillow(file_path))
    except Exception as e:
        reason = f"{type(e).__name__}: {e}"
        logger.debug("Pillow could not read %s (%s), trying exifread", file_path, reason)

    try:
        tags = _read_with_exifread(file_path)
    except Exception as e:
        logger.debug("exifread could not read %s: %s", file_path, e)
        tags = {}

    if not tags:
        return ExifReadResult.failure(EmbeddedMetadataUnreadable(file_path, reason))
    return ExifReadResult.success(tags)


def _read_with_pillow(file_path: Path) -> Dict[str, Any]:
    with Image.open(file_path) as img:
        exif = img.getexif()

        tags: Dict[str, Any] = {}
        for tag_id, value in exif.items():
            tags[TAGS.get(tag_id, tag_id)] = _normalize_value(value)

        # DateTimeOriginal lives in the Exif sub-IFD, coordinates in the GPS one
        for tag_id, value in exif.get_ifd(EXIF_IFD_POINTER).items():
            tags[TAGS.get(tag_id, tag_id)] = _normalize_value(value)

        for tag_id, value in exif.get_ifd(GPS_IFD_POINTER).items():
            name = GPSTAGS.get(tag_id, tag_id)
            if name in RATIONAL_TRIPLET_TAGS:
                tags[name] = _normalize_triplet(value)
            else:
                tags[name] = _normalize_value(value)

    return tags


def _read_with_exifread(file_path: Path) -> Dict[str, Any]:
    with open(file_path, "rb") as f:
        raw_tags = exifread.process_file(f, details=False)

    tags: Dict[str, Any] = {}
    for key, tag in raw_tags.items():
        group = next((g for g in _EXIFREAD_GROUPS if key.startswith(g)), None)
        if group is None:
            continue

        name = key[len(group):]
        if name in RATIONAL_TRIPLET_TAGS:
            tags[name] = _normalize_triplet(tag.values)
        else:
            tags[name] = _normalize_value(str(tag))

    return tags


def _normalize_value(value: Any) -> Any:
    if isinstance(value, bytes):
        value = value.decode("ascii", errors="replace")
    if isinstance(value, str):
        return value.rstrip("\x00")
    return value


def _normalize_triplet(values: Any) -> Any:
    """Turn rational objects into (numerator, denominator) tuples."""
    if not isinstance(values, (list, tuple)):
        return values

    normalized = []
    for component in values:
        if hasattr(component, "numerator") and hasattr(component, "denominator"):
            normalized.append((component.numerator, component.denominator))
        else:
            normalized.append(component)
    return normalized
