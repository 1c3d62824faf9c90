"""
Directory scanning for discovering media files.

The scanner is deliberately forgiving: a directory that cannot be listed is
logged and skipped so one unreadable folder never stops an import.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Union

from photo_organizer.models.enums import IMAGE_EXTENSIONS, VIDEO_EXTENSIONS

logger = logging.getLogger(__name__)


def scan_media_files(
    directory: Union[str, Path],
    extensions: Optional[Iterable[str]] = None,
) -> List[Path]:
    """
    Recursively list media files under a directory.

    Rules:
    - only regular files whose lowercased extension is in `extensions`
    - files whose name starts with "." are skipped (AppleDouble files etc.)
    - directory symlinks are not followed
    - directories that cannot be listed are logged and skipped

    Args:
        directory: Root directory to scan
        extensions: Allowed extensions (lowercase, leading dot).
                    Defaults to the image and video allowlists.

    Returns:
        Sorted list of file paths

    Example:
        >>> files = scan_media_files(Path("/media/sdcard/DCIM"))
        >>> print(f"Found {len(files)} media files")
    """
    allowed = frozenset(extensions) if extensions is not None else IMAGE_EXTENSIONS | VIDEO_EXTENSIONS

    files: List[Path] = []
    _collect_files(Path(directory), allowed, files)
    return sorted(files)


def _collect_files(directory: Path, allowed: frozenset, files: List[Path]) -> None:
    try:
        entries = list(os.scandir(directory))
    except OSError as e:
        logger.warning("Could not list directory %s: %s", directory, e)
        return

    for entry in entries:
        try:
            if entry.is_dir(follow_symlinks=False):
                _collect_files(Path(entry.path), allowed, files)
                continue

            if not entry.is_file():
                continue
        except OSError as e:
            logger.warning("Could not stat %s: %s", entry.path, e)
            continue

        if entry.name.startswith("."):
            continue

        if Path(entry.name).suffix.lower() in allowed:
            files.append(Path(entry.path))
