"""Runtime settings for Stockroom.

Values come from environment variables, falling back to built-in defaults:

    STOCKROOM_DATA_DIR       directory holding items.json / transactions.json
    STOCKROOM_STATIC_DIR     built front-end assets served at ``/``
    STOCKROOM_PERSISTENCE    ``json`` (default) or ``memory``
    STOCKROOM_LOCK_TIMEOUT   seconds to wait for a collection lock
    STOCKROOM_HOST / STOCKROOM_PORT
    STOCKROOM_LOG_DIR        enables rotating log files when set
"""

import os
from dataclasses import dataclass
from pathlib import Path

PERSISTENCE_BACKENDS = ("json", "memory")


@dataclass(frozen=True)
class Settings:
    data_dir: Path = Path("data")
    static_dir: Path = Path("dist")
    persistence: str = "json"
    lock_timeout: float = 10.0
    host: str = "0.0.0.0"
    port: int = 3000
    log_dir: Path | None = None

    def __post_init__(self) -> None:
        if self.persistence not in PERSISTENCE_BACKENDS:
            raise ValueError(
                f"Unknown persistence backend: {self.persistence}. Available: {list(PERSISTENCE_BACKENDS)}"
            )
        if self.lock_timeout <= 0:
            raise ValueError(f"lock_timeout must be positive, got {self.lock_timeout}")

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """Build settings from ``environ`` (defaults to ``os.environ``)."""
        env = os.environ if environ is None else environ
        log_dir = env.get("STOCKROOM_LOG_DIR")
        return cls(
            data_dir=Path(env.get("STOCKROOM_DATA_DIR", "data")),
            static_dir=Path(env.get("STOCKROOM_STATIC_DIR", "dist")),
            persistence=env.get("STOCKROOM_PERSISTENCE", "json").lower(),
            lock_timeout=float(env.get("STOCKROOM_LOCK_TIMEOUT", "10")),
            host=env.get("STOCKROOM_HOST", "0.0.0.0"),
            port=int(env.get("STOCKROOM_PORT", "3000")),
            log_dir=Path(log_dir) if log_dir else None,
        )
