"""JSON file persistence backend.

Each collection lives in ``<data_dir>/<collection>.json`` as a
pretty-printed array. Writes go to a sibling ``.tmp`` file which is then
renamed over the target, so a crash mid-write leaves the previous contents
intact and readers never see a partial document.
"""

import json
from pathlib import Path

import structlog

from stockroom.exceptions import PersistenceError
from stockroom.persistence.base import Persistence, Record

logger = structlog.get_logger(__name__)


class JsonFilePersistence(Persistence):
    def __init__(self, data_dir: Path | str, lock_timeout: float = 10.0):
        super().__init__(lock_timeout)
        self.data_dir = Path(data_dir)

    def path_for(self, collection: str) -> Path:
        return self.data_dir / f"{collection}.json"

    def _load(self, collection: str) -> list[Record]:
        path = self.path_for(collection)
        if not path.exists():
            with self.lock(collection):
                if not path.exists():
                    logger.info("Initializing empty collection", collection=collection, path=str(path))
                    self._save(collection, [])
            return []

        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(
                f"Error reading {collection}",
                details={"collection": collection, "path": str(path), "reason": str(exc)},
            ) from exc

        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise PersistenceError(
                f"Malformed {collection} collection: {exc.msg}",
                details={"collection": collection, "path": str(path), "line": exc.lineno},
            ) from exc

    def _save(self, collection: str, records: list[Record]) -> None:
        path = self.path_for(collection)
        temp_path = path.with_name(f"{path.name}.tmp")
        try:
            payload = json.dumps(records, indent=2, ensure_ascii=False)
            self.data_dir.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(payload, encoding="utf-8")
            temp_path.replace(path)
        except (OSError, TypeError, ValueError) as exc:
            raise PersistenceError(
                f"Error writing {collection}",
                details={"collection": collection, "path": str(path), "reason": str(exc)},
            ) from exc
