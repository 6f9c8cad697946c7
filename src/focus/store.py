"""Single-key snapshot persistence over a pluggable key-value backend."""

from __future__ import annotations

import dataclasses
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Optional, Protocol

from .constants import STORAGE_KEY
from .types import PersistedSnapshot
from .validator import default_snapshot, sanitize


class KeyValueStore(Protocol):
    """Minimal string key-value backend used by :class:`PersistenceStore`."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemoryKeyValueStore:
    """Process-local backend used when storage is disabled and in tests."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


class JsonFileKeyValueStore:
    """Key-value backend persisted as one JSON object file.

    Every write replaces the whole file through a temporary file and
    ``os.replace`` so readers never observe a partial write.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path).expanduser()
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        with self._lock:
            values = self._read_all()
            values[key] = value
            self._write_all(values)

    def delete(self, key: str) -> None:
        with self._lock:
            values = self._read_all()
            if key not in values:
                return
            del values[key]
            self._write_all(values)

    def _read_all(self) -> dict[str, Any]:
        if not self._path.is_file():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError, RecursionError):
            return {}
        return raw if isinstance(raw, dict) else {}

    def _write_all(self, values: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.",
            suffix=".tmp",
            dir=str(self._path.parent),
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(values, fh)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class PersistenceStore:
    """Loads, saves, and clears the single serialized session snapshot.

    Persistence is best effort: backend failures are logged and swallowed so
    in-memory state stays authoritative for the running process.
    """

    def __init__(
        self,
        backend: KeyValueStore,
        *,
        key: str = STORAGE_KEY,
        logger: Optional[logging.Logger] = None,
    ):
        self._backend = backend
        self._key = key
        self._logger = logger or logging.getLogger("focus.store")
        self._current = default_snapshot()

    @property
    def current(self) -> PersistedSnapshot:
        """Last snapshot loaded or saved through this store."""
        return self._current

    def load(self) -> PersistedSnapshot:
        try:
            raw = self._backend.get(self._key)
        except Exception as error:
            self._logger.warning("Failed to read stored focus state: %s", error)
            raw = None

        if not raw:
            snapshot = default_snapshot()
        else:
            try:
                snapshot = sanitize(json.loads(raw))
            except (ValueError, RecursionError) as error:
                self._logger.warning("Discarding unparsable focus state: %s", error)
                snapshot = default_snapshot()

        self._current = snapshot
        return snapshot

    def save(self, snapshot: PersistedSnapshot) -> None:
        self._current = snapshot
        try:
            self._backend.set(self._key, json.dumps(snapshot.to_dict()))
        except Exception as error:
            self._logger.warning("Failed to persist focus state: %s", error)

    def update(self, **fields: Any) -> PersistedSnapshot:
        """Merge one holder's fields into the current snapshot and save it whole."""
        snapshot = dataclasses.replace(self._current, **fields)
        self.save(snapshot)
        return snapshot

    def clear(self) -> None:
        self._current = default_snapshot()
        try:
            self._backend.delete(self._key)
        except Exception as error:
            self._logger.warning("Failed to clear stored focus state: %s", error)
