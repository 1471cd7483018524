import os
from pathlib import Path

import pytest

from stockroom.domain import build_stockroom
from stockroom.exceptions import PersistenceError
from stockroom.persistence import MemoryPersistence


def pytest_sessionstart(session):
    """Pin the environment before ``app`` (which reads it at import) is loaded."""
    os.environ["ENV"] = "test"
    os.environ["STOCKROOM_PERSISTENCE"] = "memory"
    os.environ["STOCKROOM_STATIC_DIR"] = str(Path(session.config.rootpath) / "tests" / "__no_static__")
    os.environ.pop("STOCKROOM_LOG_DIR", None)


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


class FlakyPersistence(MemoryPersistence):
    """Memory backend whose saves can be made to fail.

    ``failures[collection] = n`` lets ``n`` more saves of that collection
    through, then every further save raises ``PersistenceError``.
    """

    def __init__(self, **kwargs):
        self.failures: dict[str, int] = {}
        super().__init__(**kwargs)

    def _save(self, collection, records):
        if collection in self.failures:
            if self.failures[collection] == 0:
                raise PersistenceError(f"Error writing {collection}", details={"collection": collection})
            self.failures[collection] -= 1
        super()._save(collection, records)


@pytest.fixture()
def persistence():
    return MemoryPersistence(lock_timeout=5.0)


@pytest.fixture()
def stockroom(persistence):
    return build_stockroom(persistence=persistence)


@pytest.fixture()
def flaky_persistence():
    return FlakyPersistence(lock_timeout=5.0)


@pytest.fixture()
def flaky_stockroom(flaky_persistence):
    return build_stockroom(persistence=flaky_persistence)
