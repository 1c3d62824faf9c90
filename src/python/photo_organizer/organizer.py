"""
Module for importing, indexing and reporting on an organized media tree.

Three operations, one per command:

- import_media: move files from a source directory into the target tree,
  routing content already in the store under the duplicate prefix
- index_media: rebuild the store from the files already in the target tree
- report: count the records in the store

Files are processed one at a time. A failure on one file is logged, folded
into the BatchResult and the batch moves on; only a store that cannot be
opened aborts a command.
"""

import errno
import logging
import os
import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Union

from photo_organizer.config import Config
from photo_organizer.errors import (
    DirectoryCreateFailure,
    FileError,
    MoveFailure,
    StoreUnavailable,
)
from photo_organizer.models.enums import MediaKind, OutcomeStatus
from photo_organizer.paths import build_destination_path
from photo_organizer.scanner.directory import scan_media_files
from photo_organizer.scanner.metadata import extract_metadata
from photo_organizer.store import DedupStore, open_store, reset_store_dir

logger = logging.getLogger(__name__)


@dataclass
class FileOutcome:
    """Result of processing a single file."""
    path: Path
    status: OutcomeStatus
    destination: Optional[Path] = None
    reason: Optional[str] = None

    @property
    def message(self) -> str:
        if self.status is OutcomeStatus.FAILED:
            return self.reason or self.status.value
        return self.status.value


# Called after every file with (index, total, outcome)
ProgressCallback = Callable[[int, int, FileOutcome], None]


@dataclass
class BatchResult:
    """Track results of an import or index run."""
    total: int = 0
    outcomes: List[FileOutcome] = field(default_factory=list)
    collisions: int = 0

    def add(self, outcome: FileOutcome) -> None:
        self.outcomes.append(outcome)

    def _count(self, status: OutcomeStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is status)

    @property
    def imported(self) -> int:
        return self._count(OutcomeStatus.IMPORTED)

    @property
    def duplicated(self) -> int:
        return self._count(OutcomeStatus.DUPLICATED)

    @property
    def indexed(self) -> int:
        return self._count(OutcomeStatus.INDEXED)

    @property
    def failed(self) -> int:
        return self._count(OutcomeStatus.FAILED)

    @property
    def failures(self) -> List[FileOutcome]:
        return [outcome for outcome in self.outcomes if outcome.status is OutcomeStatus.FAILED]

    def __str__(self):
        parts = [f"Processed {len(self.outcomes)} of {self.total} files."]
        if self.imported or self.duplicated:
            parts.append(f"Imported {self.imported}. Duplicated {self.duplicated}.")
        if self.indexed:
            parts.append(f"Indexed {self.indexed}.")
        if self.collisions:
            parts.append(f"Fingerprint collisions {self.collisions}.")
        parts.append(f"Errors: {self.failed}")
        return " ".join(parts)


def import_media(
    source_dir: Union[str, Path],
    target_dir: Union[str, Path],
    config: Optional[Config] = None,
    progress: Optional[ProgressCallback] = None,
    clock: Callable[[], float] = time.time,
    on_scanned: Optional[Callable[[int], None]] = None,
) -> BatchResult:
    """
    Import media files from source_dir into the organized tree under target_dir.

    Args:
        source_dir: Directory to scan for media files
        target_dir: Root of the organized tree (holds the store)
        config: Configuration (defaults to built-in settings)
        progress: Called after every file
        clock: Source of the epoch seconds embedded in destination names
        on_scanned: Called once with the number of files found

    Returns:
        BatchResult with one outcome per file found

    Raises:
        StoreUnavailable: If the store cannot be opened, read or written
    """
    config = config or Config()
    target_dir = Path(target_dir).absolute()

    with open_store(config.store_dir(target_dir)) as store:
        files = scan_media_files(source_dir, config.media.all_extensions)
        result = BatchResult(total=len(files))
        logger.info("Found %d media files in %s", len(files), source_dir)
        if on_scanned:
            on_scanned(result.total)

        for index, file_path in enumerate(files):
            outcome = import_file(file_path, target_dir, store, config, now=int(clock()))
            result.add(outcome)
            if progress:
                progress(index, result.total, outcome)

    logger.info("Import finished: %s", result)
    return result


def import_file(
    source: Path,
    target_dir: Path,
    store: DedupStore,
    config: Config,
    now: Optional[int] = None,
) -> FileOutcome:
    """
    Import a single file: extract, check the store, move, record.

    Duplicates are moved under the duplicate prefix and never recorded, so
    the store keeps pointing at the first copy.

    Returns:
        FileOutcome (IMPORTED, DUPLICATED or FAILED)

    Raises:
        StoreUnavailable: If the store cannot be read or written. A file
            that was already moved is logged with its new path.
    """
    try:
        record = extract_metadata(
            source, config.media.image_extensions, config.media.video_extensions
        )

        is_duplicate = store.lookup(record.fingerprint) is not None

        destination = build_destination_path(
            source,
            record,
            target_dir,
            duplicate=is_duplicate,
            now=now,
            duplicate_prefix=config.layout.duplicate_prefix,
        )

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreateFailure(source, e.strerror or str(e)) from e

        move_file(source, destination)
    except FileError as e:
        logger.warning("Failed to import %s: %s", source, e.reason)
        return FileOutcome(source, OutcomeStatus.FAILED, reason=e.reason)

    if is_duplicate:
        logger.info("Duplicate %s -> %s", source, destination)
        return FileOutcome(source, OutcomeStatus.DUPLICATED, destination)

    try:
        store.record(record.fingerprint, destination)
    except StoreUnavailable:
        logger.error("Moved %s -> %s but could not record it in the store", source, destination)
        raise
    logger.info("Imported %s -> %s", source, destination)
    return FileOutcome(source, OutcomeStatus.IMPORTED, destination)


def move_file(source: Path, destination: Path) -> None:
    """
    Move source to destination.

    A plain rename is tried first. When source and destination are on
    different filesystems the file is copied and the source deleted; if only
    the delete fails the move still counts as done.

    Raises:
        MoveFailure: If the destination exists or the move/copy fails.
            The source is left in place.
    """
    if destination.exists():
        raise MoveFailure(source, f"destination already exists: {destination}")

    try:
        os.rename(source, destination)
        return
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise MoveFailure(source, e.strerror or str(e)) from e

    logger.debug("Cross-device move, copying %s -> %s", source, destination)
    try:
        shutil.copy2(source, destination)
    except OSError as e:
        _remove_partial_copy(destination)
        raise MoveFailure(source, e.strerror or str(e)) from e

    try:
        os.remove(source)
    except OSError as e:
        logger.warning("Copied %s but could not remove the source: %s", source, e)


def _remove_partial_copy(destination: Path) -> None:
    try:
        destination.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not remove partial copy %s: %s", destination, e)


def index_media(
    target_dir: Union[str, Path],
    config: Optional[Config] = None,
    progress: Optional[ProgressCallback] = None,
    on_scanned: Optional[Callable[[int], None]] = None,
) -> BatchResult:
    """
    Rebuild the store from the files already organized under target_dir.

    The store directory is deleted and recreated, then every media file in
    the photo/ and video/ subtrees is recorded at its current path.

    Returns:
        BatchResult with one outcome per file found

    Raises:
        StoreUnavailable: If the store cannot be reset, opened or written
    """
    config = config or Config()
    target_dir = Path(target_dir).absolute()
    store_dir = config.store_dir(target_dir)

    reset_store_dir(store_dir)

    with open_store(store_dir) as store:
        files = []
        for kind in MediaKind:
            subtree = target_dir / kind.value
            if subtree.is_dir():
                files.extend(scan_media_files(subtree, config.media.all_extensions))

        result = BatchResult(total=len(files))
        logger.info("Found %d media files in %s", len(files), target_dir)
        if on_scanned:
            on_scanned(result.total)

        for index, file_path in enumerate(files):
            outcome = index_file(file_path, store, config, result)
            result.add(outcome)
            if progress:
                progress(index, result.total, outcome)

    logger.info("Index finished: %s", result)
    return result


def index_file(file_path: Path, store: DedupStore, config: Config, result: BatchResult) -> FileOutcome:
    """
    Record one organized file in the store.

    A fingerprint that is already present is overwritten with this path.
    That should not happen in a well-formed tree, so it is logged and counted
    in result.collisions rather than silently absorbed.
    """
    try:
        record = extract_metadata(
            file_path, config.media.image_extensions, config.media.video_extensions
        )
    except FileError as e:
        logger.warning("Failed to index %s: %s", file_path, e.reason)
        return FileOutcome(file_path, OutcomeStatus.FAILED, reason=e.reason)

    previous = store.lookup(record.fingerprint)
    if previous is not None:
        result.collisions += 1
        logger.warning(
            "Fingerprint collision while indexing: %s replaces %s", file_path, previous
        )

    store.record(record.fingerprint, file_path, overwrite=True)
    return FileOutcome(file_path, OutcomeStatus.INDEXED, file_path)


def report(target_dir: Union[str, Path], config: Optional[Config] = None) -> Optional[int]:
    """
    Count the records in the store under target_dir.

    Returns:
        Number of records, or None if target_dir has no store directory
    """
    config = config or Config()
    store_dir = config.store_dir(target_dir)

    if not store_dir.is_dir():
        logger.info("No store found in %s", store_dir)
        return None

    with open_store(store_dir, create=False) as store:
        return store.count()
