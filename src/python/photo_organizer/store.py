"""
Persistent dedup store.

Maps a content fingerprint (hash + size) to the destination path of the
first imported copy. The store lives in its own directory under the target
root and holds a single SQLite database accessed through SQLAlchemy.

A store is owned by one command invocation: open it with ``open_store`` and
it is closed when the ``with`` block exits, whatever happens inside.

Example:
    >>> with open_store(Path("/photos/media_index")) as store:
    ...     if store.lookup(record.fingerprint) is None:
    ...         store.record(record.fingerprint, "/photos/photo/2024/03/...")
    ...     print(store.count())
"""

import logging
import shutil
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional, Union

from sqlalchemy import BigInteger, Engine, String, create_engine, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

from photo_organizer.errors import StoreUnavailable
from photo_organizer.models.record import Fingerprint

logger = logging.getLogger(__name__)

DATABASE_FILENAME = "store.sqlite3"


class Base(DeclarativeBase):
    pass


class FingerprintModel(Base):
    __tablename__ = "fingerprints"

    content_hash: Mapped[str] = mapped_column(String(32), primary_key=True)
    size_bytes: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    path: Mapped[str] = mapped_column(String)


class DedupStore:
    """
    Fingerprint -> path mapping backed by an open SQLAlchemy session.

    Every write is committed immediately so an interrupted run keeps what
    it already recorded.

    Database errors roll back the session and surface as StoreUnavailable.
    """

    def __init__(self, engine: Engine, store_dir: Path):
        self.engine = engine
        self.store_dir = store_dir
        self.session = Session(engine)

    def lookup(self, fingerprint: Fingerprint) -> Optional[str]:
        """Return the recorded path for a fingerprint, or None."""
        with self._database_errors():
            row = self.session.get(
                FingerprintModel, (fingerprint.content_hash, fingerprint.size_bytes)
            )
        return row.path if row is not None else None

    def record(self, fingerprint: Fingerprint, path: Union[str, Path], overwrite: bool = False) -> bool:
        """
        Record the path for a fingerprint.

        Args:
            fingerprint: Content fingerprint
            path: Destination path of the file
            overwrite: Replace an existing entry instead of keeping it

        Returns:
            True if the store was written, False if the fingerprint was
            already present and overwrite is False
        """
        key = (fingerprint.content_hash, fingerprint.size_bytes)

        with self._database_errors():
            row = self.session.get(FingerprintModel, key)

            if row is not None:
                if not overwrite:
                    return False
                row.path = str(path)
            else:
                self.session.add(FingerprintModel(
                    content_hash=fingerprint.content_hash,
                    size_bytes=fingerprint.size_bytes,
                    path=str(path),
                ))

            self.session.commit()
        return True

    def count(self) -> int:
        """Total number of distinct fingerprints recorded."""
        with self._database_errors():
            return self.session.scalar(select(func.count()).select_from(FingerprintModel)) or 0

    @contextmanager
    def _database_errors(self) -> Generator[None, None, None]:
        try:
            yield
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreUnavailable(self.store_dir, str(e)) from e

    def close(self) -> None:
        self.session.close()
        self.engine.dispose()


@contextmanager
def open_store(store_dir: Union[str, Path], create: bool = True) -> Generator[DedupStore, None, None]:
    """
    Open the dedup store in `store_dir` for the duration of a ``with`` block.

    Args:
        store_dir: Store directory
        create: Create the directory when it does not exist (an empty store)

    Yields:
        DedupStore

    Raises:
        StoreUnavailable: If the directory cannot be created or the
            database cannot be opened
    """
    store_dir = Path(store_dir)

    if create:
        try:
            store_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreUnavailable(store_dir, e.strerror or str(e)) from e

    if not store_dir.is_dir():
        raise StoreUnavailable(store_dir, "store directory not found")

    db_path = store_dir / DATABASE_FILENAME
    engine = create_engine(f"sqlite:///{db_path}")
    try:
        Base.metadata.create_all(engine)
    except SQLAlchemyError as e:
        engine.dispose()
        raise StoreUnavailable(store_dir, str(e)) from e

    logger.debug("Opened store at %s", db_path)
    store = DedupStore(engine, store_dir)
    try:
        yield store
    finally:
        store.close()
        logger.debug("Closed store at %s", db_path)


def reset_store_dir(store_dir: Union[str, Path]) -> None:
    """
    Delete the store directory and recreate it empty.

    Raises:
        StoreUnavailable: If the directory cannot be removed or recreated
    """
    store_dir = Path(store_dir)
    try:
        if store_dir.exists():
            shutil.rmtree(store_dir)
        store_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StoreUnavailable(store_dir, e.strerror or str(e)) from e

    logger.info("Reset store directory %s", store_dir)
