"""In-memory persistence backend, used by tests and embedded setups."""

from stockroom.persistence.base import Persistence, Record


class MemoryPersistence(Persistence):
    """Keeps each collection as a list of record copies in process memory."""

    def __init__(self, lock_timeout: float = 10.0, initial: dict[str, list[Record]] | None = None):
        super().__init__(lock_timeout)
        self._collections: dict[str, list[Record]] = {}
        for collection, records in (initial or {}).items():
            self.save(collection, records)

    def _load(self, collection: str) -> list[Record]:
        return self._collections.setdefault(collection, [])

    def _save(self, collection: str, records: list[Record]) -> None:
        self._collections[collection] = records
