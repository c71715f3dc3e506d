"""
In-memory implementation of StorageBackend.
Nothing survives the process; used for tests and as the default backend.
"""

import threading
from typing import Optional


class MemoryStorage:
    """Dict-backed key-value text store."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def has(self, key: str) -> bool:
        return key in self._data

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def __len__(self) -> int:
        return len(self._data)
