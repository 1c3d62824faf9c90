"""
Destination path construction.

Layout (relative to the target root):

    [duplication/]<photo|video>/YYYY/MM/DD_HH_MM_SS_<exif|mod>_<epoch><ext>

`<epoch>` is the wall-clock time in seconds when the path is built, not the
capture time. It only keeps unrelated files captured in the same second
apart; deduplication itself is handled by the store.
"""

import time
from pathlib import Path
from typing import Optional, Union

from photo_organizer.models.record import MediaRecord

DUPLICATE_PREFIX = "duplication"


def build_destination_path(
    source: Union[str, Path],
    record: MediaRecord,
    target_root: Union[str, Path],
    duplicate: bool = False,
    now: Optional[int] = None,
    duplicate_prefix: str = DUPLICATE_PREFIX,
) -> Path:
    """
    Build the destination path for a media file.

    Args:
        source: Source file path; its extension is kept verbatim
        record: Metadata extracted from the source
        target_root: Root of the organized tree
        duplicate: Route the file under the duplicate prefix
        now: Epoch seconds to embed in the name (defaults to the current time)
        duplicate_prefix: Directory segment used for duplicates

    Returns:
        Destination path

    Raises:
        ValueError: If record.capture_time is not "YYYY:MM:DD HH:MM:SS"

    Example:
        >>> build_destination_path("IMG_1.JPG", record, "/photos", now=1700000000)
        PosixPath('/photos/photo/2024/03/05_10_00_00_exif_1700000000.JPG')
    """
    if now is None:
        now = int(time.time())

    date_part, time_part = record.capture_time.split(" ")
    year, month, day = date_part.split(":")
    hour, minute, second = time_part.split(":")

    prefix = duplicate_prefix if duplicate else ""
    directory = Path(target_root, prefix, record.kind.value, year, month)

    ext = Path(source).suffix
    filename = f"{day}_{hour}_{minute}_{second}_{record.reliability_tag}_{int(now)}{ext}"
    return directory / filename
