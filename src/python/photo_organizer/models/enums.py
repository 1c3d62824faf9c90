"""Enumerations and extension allowlists for photo-organizer models."""

from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Union

# Extensions are compared lowercased, with the leading dot
IMAGE_EXTENSIONS = frozenset({
    ".jpg", ".jpeg", ".png", ".gif", ".bmp", ".tif", ".tiff",
})
VIDEO_EXTENSIONS = frozenset({
    ".mp4", ".mov", ".avi", ".mkv", ".vob", ".mpg", ".wmv", ".heic",
})


def normalize_extensions(extensions: Iterable[str]) -> frozenset:
    """
    Normalize a collection of extensions to lowercase with a leading dot.

    Args:
        extensions: Extensions such as "JPG", ".jpeg" or " png "

    Returns:
        frozenset like {".jpg", ".jpeg", ".png"}
    """
    normalized = set()
    for ext in extensions:
        ext = str(ext).strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        normalized.add(ext)
    return frozenset(normalized)


class MediaKind(Enum):
    """
    Kind of media file, decided by extension only (never by content).

    The value doubles as the top-level directory name in the target tree.
    """
    PHOTO = "photo"
    VIDEO = "video"

    @classmethod
    def from_extension(
        cls,
        extension: str,
        image_extensions: Iterable[str] = IMAGE_EXTENSIONS,
        video_extensions: Iterable[str] = VIDEO_EXTENSIONS,
    ) -> Optional["MediaKind"]:
        """
        Get the MediaKind for a file extension.

        Args:
            extension: File extension (with or without leading dot, any case)
            image_extensions: Allowlist of image extensions
            video_extensions: Allowlist of video extensions

        Returns:
            The matching MediaKind, or None if the extension is in neither list

        Examples:
            >>> MediaKind.from_extension(".JPG")
            <MediaKind.PHOTO: 'photo'>
            >>> MediaKind.from_extension("mov")
            <MediaKind.VIDEO: 'video'>
        """
        ext = extension.strip().lower()
        if ext and not ext.startswith("."):
            ext = "." + ext

        if ext in image_extensions:
            return cls.PHOTO
        if ext in video_extensions:
            return cls.VIDEO
        return None

    @classmethod
    def from_filename(
        cls,
        filename: Union[str, Path],
        image_extensions: Iterable[str] = IMAGE_EXTENSIONS,
        video_extensions: Iterable[str] = VIDEO_EXTENSIONS,
    ) -> Optional["MediaKind"]:
        """Convenience wrapper around from_extension() for a file name or path."""
        return cls.from_extension(
            Path(filename).suffix, image_extensions, video_extensions
        )


class OutcomeStatus(Enum):
    """
    Result of processing one file in a batch.

    The value is the message shown in the progress line.
    """
    IMPORTED = "Imported"
    DUPLICATED = "Duplicated"
    INDEXED = "Indexed"
    FAILED = "Failed"

    @property
    def is_success(self) -> bool:
        return self is not OutcomeStatus.FAILED
