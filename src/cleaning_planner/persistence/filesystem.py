"""File-based persistence for the customer, job and round collections."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from functools import lru_cache
from pathlib import Path
from typing import Any

from ..config import settings
from ..errors import StorageError

logger = logging.getLogger(__name__)

COLLECTIONS = ("customers", "jobs", "rounds")

# Keyed by resolved file path so every store instance over the same file shares one lock.
_LOCKS: dict[Path, threading.RLock] = {}
_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _LOCKS_GUARD:
        lock = _LOCKS.get(path)
        if lock is None:
            lock = threading.RLock()
            _LOCKS[path] = lock
        return lock


class RecordStore:
    """Loads and saves whole collections as JSON arrays under the data root."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)

    def path_for(self, collection: str) -> Path:
        return self.root / f"{collection}.json"

    def locked(self, collection: str) -> threading.RLock:
        """Lock to hold across a load-modify-save cycle on ``collection``."""
        return _lock_for(self.path_for(collection))

    def load(self, collection: str) -> list[dict[str, Any]]:
        path = self.path_for(collection)
        if not path.exists():
            return []
        try:
            with path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Unable to read collection '{collection}' from {path}") from exc
        if not isinstance(data, list):
            raise StorageError(f"Collection file {path} does not hold a JSON array")
        return data

    def save(self, collection: str, records: list[dict[str, Any]], *, indent: int = 2) -> None:
        path = self.path_for(collection)
        path.parent.mkdir(parents=True, exist_ok=True)
        with self.locked(collection):
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{collection}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(records, handle, ensure_ascii=False, indent=indent)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        logger.debug("Saved %d records to %s", len(records), path)

    def counts(self) -> dict[str, int]:
        return {name: len(self.load(name)) for name in COLLECTIONS}


@lru_cache(maxsize=1)
def get_record_store() -> RecordStore:
    """Store rooted at ``settings.data_root``, used as the API dependency."""
    return RecordStore()
