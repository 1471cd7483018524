from stockroom.persistence.base import COLLECTIONS, ITEMS, TRANSACTIONS, Persistence
from stockroom.persistence.json_file import JsonFilePersistence
from stockroom.persistence.memory import MemoryPersistence

__all__ = [
    "COLLECTIONS",
    "ITEMS",
    "TRANSACTIONS",
    "Persistence",
    "JsonFilePersistence",
    "MemoryPersistence",
]
