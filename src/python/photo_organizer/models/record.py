"""
MediaRecord and Fingerprint models.

A MediaRecord is produced for every file that goes through metadata
extraction. It is transient: only its fingerprint and the destination path
are persisted in the dedup store.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple, Optional, Tuple

from photo_organizer.models.enums import MediaKind

# Textual shape shared by EXIF capture times and formatted modification times
CAPTURE_TIME_FORMAT = "%Y:%m:%d %H:%M:%S"


class Fingerprint(NamedTuple):
    """Dedup key: two files are duplicates iff hash and size both match."""
    content_hash: str
    size_bytes: int


@dataclass(frozen=True)
class MediaRecord:
    """
    Normalized metadata for a single media file.

    Attributes:
        path: Source file path the record was extracted from
        kind: PHOTO or VIDEO, derived from the extension
        capture_time: "YYYY:MM:DD HH:MM:SS"
        reliable: True only when capture_time came from well-formed
            embedded capture metadata, False when it is the modification time
        size_bytes: Exact file size at read time
        content_hash: Unpadded base64 MD5 digest of the full contents
        gps: (latitude, longitude) in decimal degrees, or None
    """
    path: Path
    kind: MediaKind
    capture_time: str
    reliable: bool
    size_bytes: int
    content_hash: str
    gps: Optional[Tuple[float, float]] = None

    @property
    def fingerprint(self) -> Fingerprint:
        return Fingerprint(self.content_hash, self.size_bytes)

    @property
    def reliability_tag(self) -> str:
        return "exif" if self.reliable else "mod"

    def to_dict(self) -> dict:
        """Convert to a plain dictionary (useful for logging and debugging)."""
        return {
            "path": str(self.path),
            "kind": self.kind.value,
            "capture_time": self.capture_time,
            "reliable": self.reliable,
            "size_bytes": self.size_bytes,
            "content_hash": self.content_hash,
            "gps": self.gps,
        }
