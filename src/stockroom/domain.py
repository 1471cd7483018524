"""Composition root.

Builds the persistence backend and the stores on top of it. Everything is
constructed explicitly and passed down; nothing here is a module-level
singleton, so tests can assemble a ``Stockroom`` over ``MemoryPersistence``.
"""

from dataclasses import dataclass

import structlog

from stockroom.config import Settings
from stockroom.item import ItemStore
from stockroom.ledger import TransactionLedger
from stockroom.persistence import JsonFilePersistence, MemoryPersistence, Persistence
from stockroom.take import TakeItemProcessor

logger = structlog.get_logger(__name__)


@dataclass
class Stockroom:
    persistence: Persistence
    items: ItemStore
    ledger: TransactionLedger
    processor: TakeItemProcessor


def build_persistence(settings: Settings) -> Persistence:
    if settings.persistence == "memory":
        return MemoryPersistence(lock_timeout=settings.lock_timeout)
    return JsonFilePersistence(settings.data_dir, lock_timeout=settings.lock_timeout)


def build_stockroom(settings: Settings | None = None, persistence: Persistence | None = None) -> Stockroom:
    """Wire the stores over ``persistence`` (or one built from ``settings``)."""
    if persistence is None:
        persistence = build_persistence(settings or Settings.from_env())

    items = ItemStore(persistence)
    ledger = TransactionLedger(persistence)
    logger.debug("Stockroom assembled", persistence=type(persistence).__name__)
    return Stockroom(
        persistence=persistence,
        items=items,
        ledger=ledger,
        processor=TakeItemProcessor(items, ledger),
    )
