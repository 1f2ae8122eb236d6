"""Key-value persistence port and adapters.

Every store owns exactly one key and reads or writes only that key. Values are
JSON-serializable records (dicts, lists, strings, numbers, booleans, None).

Adapters:
- InMemoryStore for tests and sessions without a data directory
- JsonFileStore for durable storage, one ``<key>.json`` file per key

Several processes sharing one data directory follow last-writer-wins; there is
no conflict detection.
"""

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import structlog

from bookhub.shared.exceptions import StorageError

logger = structlog.get_logger(__name__)


class KeyValueStore(ABC):
    """Abstract persistence medium shared by all stores, partitioned by key."""

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the value stored under ``key``, or None when absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``. Removing an absent key is not an error."""
        ...

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


def _encode(key: str, value: Any) -> str:
    try:
        return json.dumps(value)
    except (TypeError, ValueError) as exc:
        raise StorageError(f"Value for {key!r} is not JSON-serializable: {exc}") from exc


def _decode(key: str, raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise StorageError(f"Stored value for {key!r} is corrupt: {exc}") from exc


class InMemoryStore(KeyValueStore):
    """Process-local storage that keeps values in their serialized form.

    Values are round-tripped through JSON on every write and read, so callers
    never share mutable references with what is stored.
    """

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Any | None:
        raw = self._data.get(key)
        return None if raw is None else _decode(key, raw)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = _encode(key, value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class JsonFileStore(KeyValueStore):
    """Durable storage with one JSON document per key under ``directory``.

    Writes go to a temporary file in the same directory that then replaces the
    target, so a crash mid-write leaves the previous value intact.
    """

    def __init__(self, directory: str | os.PathLike) -> None:
        self.directory = Path(directory)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create storage directory {self.directory}: {exc}") from exc

    def _path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Any | None:
        path = self._path_for(key)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageError(f"Cannot read {path}: {exc}") from exc
        return _decode(key, raw)

    def set(self, key: str, value: Any) -> None:
        path = self._path_for(key)
        payload = _encode(key, value)
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, path)
        except OSError as exc:
            raise StorageError(f"Cannot write {path}: {exc}") from exc
        logger.debug("Storage key written", key=key, path=str(path), size=len(payload))

    def delete(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot delete {path}: {exc}") from exc
