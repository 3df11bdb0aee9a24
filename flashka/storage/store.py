"""
Key-Value Stores - Device-local persistence.

The kiosk only ever remembers two strings per device: a play counter
and a one-time lock flag. Stores here give that a get/set surface:
- MemoryStore for tests and throwaway sessions
- JsonFileStore for a real device (one JSON object on disk)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import Path
import json
import logging

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """String key -> string value store."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value or None."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value, overwriting any previous one."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key if present."""
        pass


class MemoryStore(KeyValueStore):
    """In-memory store. Forgets everything when the process exits."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class JsonFileStore(KeyValueStore):
    """
    File-backed store.

    Usage:
        store = JsonFileStore("~/.flashka/device.json")
        store.set("flashka:plays", "3")

    The file and its directory are created on first write. Every write
    rewrites the whole file; a device holds a handful of keys.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = str(value)
        self._save(data)

    def delete(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._save(data)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def _save(self, data: dict[str, str]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, sort_keys=True)
        tmp_path.replace(self.path)
        logger.debug("Saved %d keys to %s", len(data), self.path)
