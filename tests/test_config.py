from pathlib import Path

import pytest

from stockroom.config import Settings
from stockroom.domain import build_persistence, build_stockroom
from stockroom.persistence import JsonFilePersistence, MemoryPersistence


class TestSettings:
    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.data_dir == Path("data")
        assert settings.static_dir == Path("dist")
        assert settings.persistence == "json"
        assert settings.lock_timeout == 10.0
        assert settings.port == 3000
        assert settings.log_dir is None

    def test_reads_environment(self):
        settings = Settings.from_env(
            {
                "STOCKROOM_DATA_DIR": "/srv/stock",
                "STOCKROOM_PERSISTENCE": "MEMORY",
                "STOCKROOM_LOCK_TIMEOUT": "2.5",
                "STOCKROOM_PORT": "8080",
                "STOCKROOM_LOG_DIR": "/var/log/stockroom",
            }
        )
        assert settings.data_dir == Path("/srv/stock")
        assert settings.persistence == "memory"
        assert settings.lock_timeout == 2.5
        assert settings.port == 8080
        assert settings.log_dir == Path("/var/log/stockroom")

    @pytest.mark.parametrize(
        "environ",
        [
            {"STOCKROOM_PERSISTENCE": "redis"},
            {"STOCKROOM_LOCK_TIMEOUT": "0"},
            {"STOCKROOM_LOCK_TIMEOUT": "soon"},
            {"STOCKROOM_PORT": "http"},
        ],
    )
    def test_invalid_values_fail_fast(self, environ):
        with pytest.raises(ValueError):
            Settings.from_env(environ)


class TestComposition:
    def test_json_backend(self, tmp_path):
        persistence = build_persistence(Settings(data_dir=tmp_path, lock_timeout=3.0))
        assert isinstance(persistence, JsonFilePersistence)
        assert persistence.data_dir == tmp_path
        assert persistence.lock_timeout == 3.0

    def test_memory_backend(self):
        assert isinstance(build_persistence(Settings(persistence="memory")), MemoryPersistence)

    def test_stores_share_injected_persistence(self, persistence):
        stockroom = build_stockroom(persistence=persistence)
        assert stockroom.items.persistence is persistence
        assert stockroom.ledger.persistence is persistence
        assert stockroom.processor.persistence is persistence
