"""
Key-value storage backends for the reflection store.

String values under string keys, the same contract a browser's localStorage
offers. The store serializes its whole collection into a single key.
"""

import os
import re
from abc import ABC, abstractmethod
from typing import Dict, Optional

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStorage(ABC):

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Return the stored string for key.
        None if nothing was stored.
        """
        raise NotImplementedError

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        raise NotImplementedError

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Drop key. Missing keys are ignored."""
        raise NotImplementedError


class InMemoryStorage(KeyValueStorage):
    def __init__(self, items: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStorage(KeyValueStorage):
    """
    Keeps each key in its own <key>.json file under base_dir.
    The directory is created on first write.
    """

    def __init__(self, base_dir: str):
        self.base_dir = base_dir

    def _path(self, key: str) -> str:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return os.path.join(self.base_dir, f"{key}.json")

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not os.path.exists(path):
            return None
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        os.makedirs(self.base_dir, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(value)

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        if os.path.exists(path):
            os.remove(path)
