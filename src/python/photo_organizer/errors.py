"""
Exception hierarchy for photo-organizer.

File-level errors carry the offending path and a short reason so the batch
loop can log them and move on. ``StoreUnavailable`` is the only error that
aborts a whole command.
"""

from pathlib import Path
from typing import Optional, Union


class PhotoOrganizerError(Exception):
    """Base class for all photo-organizer errors."""


class FileError(PhotoOrganizerError):
    """An error tied to a single media file."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{reason} (file: {self.path})")


class UnsupportedFileType(FileError):
    """Extension is in neither the image nor the video allowlist."""

    def __init__(self, path: Union[str, Path]):
        super().__init__(path, "unsupported_file_type")


class ReadFailure(FileError):
    """File vanished or could not be read while hashing or stat-ing it."""


class EmbeddedMetadataUnreadable(FileError):
    """Embedded capture metadata is malformed or unsupported.

    Never raised to pipeline callers: the reader reports it as a failed
    ``ExifReadResult`` and extraction falls back to the modification time.
    """


class DirectoryCreateFailure(FileError):
    """Destination directory could not be created."""


class MoveFailure(FileError):
    """File could not be moved (or copied) to its destination."""


class StoreUnavailable(PhotoOrganizerError):
    """Dedup store directory could not be created or opened."""

    def __init__(self, store_dir: Union[str, Path], reason: Optional[str] = None):
        self.store_dir = Path(store_dir)
        self.reason = reason
        message = f"Could not open store at {self.store_dir}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
