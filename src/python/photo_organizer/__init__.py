"""
photo-organizer - organize photos and videos into a dated tree without duplicates.

Files are moved into `<target>/<photo|video>/YYYY/MM/` and renamed after
their capture time. A persistent store keyed by content hash and size keeps
track of what is already in the tree; repeated content is routed under
`<target>/duplication/` instead of being stored twice.

Usage:
    from pathlib import Path
    from photo_organizer import import_media, report

    result = import_media(Path("/media/sdcard/DCIM"), Path("/photos"))
    print(result)
    print(f"{report(Path('/photos'))} files in the store")
"""

from photo_organizer.__version__ import __version__
from photo_organizer.config import Config
from photo_organizer.errors import (
    DirectoryCreateFailure,
    EmbeddedMetadataUnreadable,
    MoveFailure,
    PhotoOrganizerError,
    ReadFailure,
    StoreUnavailable,
    UnsupportedFileType,
)
from photo_organizer.models import Fingerprint, MediaKind, MediaRecord, OutcomeStatus
from photo_organizer.organizer import (
    BatchResult,
    FileOutcome,
    import_media,
    index_media,
    report,
)
from photo_organizer.paths import build_destination_path
from photo_organizer.scanner import extract_metadata, scan_media_files
from photo_organizer.store import DedupStore, open_store

__all__ = [
    "__version__",
    "Config",
    # Errors
    "DirectoryCreateFailure",
    "EmbeddedMetadataUnreadable",
    "MoveFailure",
    "PhotoOrganizerError",
    "ReadFailure",
    "StoreUnavailable",
    "UnsupportedFileType",
    # Models
    "Fingerprint",
    "MediaKind",
    "MediaRecord",
    "OutcomeStatus",
    # Pipeline
    "BatchResult",
    "DedupStore",
    "FileOutcome",
    "build_destination_path",
    "extract_metadata",
    "import_media",
    "index_media",
    "open_store",
    "report",
    "scan_media_files",
]
