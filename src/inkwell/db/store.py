"""Flat-file record store backing the four Inkwell collections.

Each collection is a single JSON array on disk. There is no per-record
addressing: callers read the whole collection, change it in memory and write
the whole collection back. To keep that read-modify-write safe between
concurrent requests, every mutation runs inside :meth:`RecordStore.transaction`,
which holds one in-process lock per collection for the duration of the unit
of work. Locks are always taken in the canonical collection order so that
multi-collection transactions cannot deadlock.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterable, Iterator
from contextlib import ExitStack, contextmanager, suppress
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from inkwell.core.errors import StorageError
from inkwell.models import Article, Comment, Like, Record, User

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)


@dataclass(frozen=True)
class Collection(Generic[R]):
    """A named collection and the model its records are parsed into."""

    name: str
    model: type[R]

    @property
    def filename(self) -> str:
        return f"{self.name}.json"


USERS: Collection[User] = Collection("users", User)
ARTICLES: Collection[Article] = Collection("articles", Article)
COMMENTS: Collection[Comment] = Collection("comments", Comment)
LIKES: Collection[Like] = Collection("likes", Like)

# Lock acquisition order for multi-collection transactions.
ALL_COLLECTIONS: tuple[Collection[Any], ...] = (USERS, ARTICLES, COMMENTS, LIKES)
_RANK = {collection.name: rank for rank, collection in enumerate(ALL_COLLECTIONS)}


class UnitOfWork:
    """Collections locked by one transaction.

    ``get`` reads each collection at most once per transaction and returns the
    staged value after a ``put``. Staged collections are written when the
    transaction exits without an exception.
    """

    def __init__(self, store: RecordStore, collections: Iterable[Collection[Any]]) -> None:
        self._store = store
        self._scope = {collection.name for collection in collections}
        self._loaded: dict[str, list[Any]] = {}
        self._staged: dict[str, list[Any]] = {}

    def _check_scope(self, collection: Collection[Any]) -> None:
        if collection.name not in self._scope:
            raise RuntimeError(f"Collection '{collection.name}' is not locked by this transaction")

    def get(self, collection: Collection[R]) -> list[R]:
        """Return the current records of a locked collection."""
        self._check_scope(collection)
        if collection.name in self._staged:
            return list(self._staged[collection.name])
        if collection.name not in self._loaded:
            self._loaded[collection.name] = self._store._read(collection)
        return list(self._loaded[collection.name])

    def put(self, collection: Collection[R], records: Iterable[R]) -> None:
        """Stage the full replacement contents of a locked collection."""
        self._check_scope(collection)
        self._staged[collection.name] = list(records)

    def commit(self) -> None:
        """Write staged collections, dependents first.

        Writes are atomic per file, not across files. Comments and likes are
        written before the articles and users they reference, so a failure
        part way through can drop children early but never orphans them.
        """
        for collection in reversed(ALL_COLLECTIONS):
            if collection.name in self._staged:
                self._store._write(collection, self._staged[collection.name])


class RecordStore:
    """Whole-collection JSON persistence rooted at ``data_dir``."""

    def __init__(self, data_dir: Path | str) -> None:
        self.data_dir = Path(data_dir)
        self._locks = {collection.name: threading.RLock() for collection in ALL_COLLECTIONS}

    def path_for(self, collection: Collection[Any]) -> Path:
        return self.data_dir / collection.filename

    def ensure_collections(self) -> None:
        """Create the data directory and any missing collection as an empty array."""
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create data directory: {exc}") from exc
        for collection in ALL_COLLECTIONS:
            if not self.path_for(collection).exists():
                with self._locks[collection.name]:
                    self._write(collection, [])
                logger.info("Initialised empty collection %s", collection.name)

    def read_all(self, collection: Collection[R]) -> list[R]:
        """Return every record in ``collection``.

        Never fails: a missing, unreadable or corrupt file reads as empty.
        """
        return self._read(collection)

    def write_all(self, collection: Collection[R], records: Iterable[R]) -> None:
        """Replace the contents of ``collection`` with ``records``."""
        with self._locks[collection.name]:
            self._write(collection, list(records))

    @contextmanager
    def transaction(self, *collections: Collection[Any]) -> Iterator[UnitOfWork]:
        """Lock ``collections`` and yield a unit of work over them.

        Staged changes are written on normal exit; nothing is written if the
        body raises. Locks are released on every exit path.
        """
        if not collections:
            raise ValueError("A transaction needs at least one collection")
        ordered = sorted({c.name: c for c in collections}.values(), key=lambda c: _RANK[c.name])
        with ExitStack() as stack:
            for collection in ordered:
                stack.enter_context(self._locks[collection.name])
            unit = UnitOfWork(self, ordered)
            yield unit
            unit.commit()

    def _read(self, collection: Collection[R]) -> list[R]:
        path = self.path_for(collection)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as exc:
            logger.warning("Could not read %s, treating as empty: %s", path, exc)
            return []

        if not raw.strip():
            return []
        try:
            documents = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Corrupt collection %s, treating as empty: %s", path, exc)
            return []
        if not isinstance(documents, list):
            logger.warning("Collection %s is not a JSON array, treating as empty", path)
            return []

        records: list[R] = []
        for index, document in enumerate(documents):
            try:
                records.append(collection.model.model_validate(document))
            except ValidationError as exc:
                logger.warning(
                    "Skipping invalid %s record at index %d: %s",
                    collection.name,
                    index,
                    exc.errors(include_url=False),
                )
        return records

    def _write(self, collection: Collection[Any], records: list[Any]) -> None:
        path = self.path_for(collection)
        payload = json.dumps([record.to_document() for record in records], indent=2)
        tmp_name: str | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=path.parent,
                prefix=f".{collection.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as exc:
            logger.error("Failed to write collection %s: %s", collection.name, exc)
            raise StorageError(f"Failed to write {collection.name}") from exc
        finally:
            if tmp_name is not None:
                with suppress(OSError):
                    os.unlink(tmp_name)
        logger.debug("Wrote %d %s record(s)", len(records), collection.name)
