"""Persistence contract shared by every storage backend.

A backend stores named collections, each a list of flat JSON-compatible
records. Mutating callers follow one discipline:

    with persistence.lock(ITEMS):
        records = persistence.load(ITEMS)
        ...mutate records...
        persistence.save(ITEMS, records)

The lock is held from load through save, so two writers can never compute
from the same snapshot. Readers call ``load`` without the lock; backends
guarantee that a load never observes a half-written collection.
"""

import threading
from abc import ABC, abstractmethod
from contextlib import ExitStack, contextmanager
from typing import Any, Iterator, Sequence

import structlog

from stockroom.exceptions import LockTimeout, PersistenceError

logger = structlog.get_logger(__name__)

ITEMS = "items"
TRANSACTIONS = "transactions"

# Also the global lock acquisition order.
COLLECTIONS = (ITEMS, TRANSACTIONS)

Record = dict[str, Any]


class Persistence(ABC):
    """Base class for collection storage with per-collection write locks."""

    def __init__(self, lock_timeout: float = 10.0):
        self.lock_timeout = lock_timeout
        self._locks = {name: threading.RLock() for name in COLLECTIONS}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def load(self, collection: str) -> list[Record]:
        """Return a private copy of every record in ``collection``.

        The collection is created empty on first access.
        """
        self._check_collection(collection)
        records = self._load(collection)
        self._check_records(collection, records)
        return [dict(record) for record in records]

    def save(self, collection: str, records: Sequence[Record]) -> None:
        """Atomically replace the contents of ``collection``."""
        self._check_collection(collection)
        self._check_records(collection, list(records))
        snapshot = [dict(record) for record in records]
        with self.lock(collection):
            self._save(collection, snapshot)
        logger.debug("Saved collection", collection=collection, records=len(snapshot))

    @contextmanager
    def lock(self, collection: str) -> Iterator[None]:
        """Hold the write lock for ``collection``.

        Re-entrant for the owning thread. Raises ``LockTimeout`` when the
        lock is not granted within ``lock_timeout`` seconds.
        """
        self._check_collection(collection)
        lock = self._locks[collection]
        if not lock.acquire(timeout=self.lock_timeout):
            logger.warning("Timed out waiting for collection lock", collection=collection, timeout=self.lock_timeout)
            raise LockTimeout(
                f"Timed out waiting for {collection} lock",
                details={"collection": collection, "timeout": self.lock_timeout},
            )
        try:
            yield
        finally:
            lock.release()

    @contextmanager
    def locked(self, *collections: str) -> Iterator[None]:
        """Hold several collection locks, always acquired in ``COLLECTIONS`` order."""
        for collection in collections:
            self._check_collection(collection)
        ordered = sorted(set(collections), key=COLLECTIONS.index)
        with ExitStack() as stack:
            for collection in ordered:
                stack.enter_context(self.lock(collection))
            yield

    def initialize(self) -> None:
        """Create every known collection that does not exist yet."""
        for collection in COLLECTIONS:
            self.load(collection)

    # ------------------------------------------------------------------
    # Backend hooks
    # ------------------------------------------------------------------
    @abstractmethod
    def _load(self, collection: str) -> list[Record]: ...

    @abstractmethod
    def _save(self, collection: str, records: list[Record]) -> None: ...

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _check_collection(collection: str) -> None:
        if collection not in COLLECTIONS:
            raise PersistenceError(
                f"Unknown collection: {collection}",
                details={"collection": collection, "available": list(COLLECTIONS)},
            )

    @staticmethod
    def _check_records(collection: str, records: Any) -> None:
        if not isinstance(records, list) or not all(isinstance(record, dict) for record in records):
            raise PersistenceError(
                f"Malformed {collection} collection: expected a list of objects",
                details={"collection": collection},
            )
