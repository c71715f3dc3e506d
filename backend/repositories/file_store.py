"""
File-based implementation of StorageBackend.
One <key>.json file per key under a configurable data directory.
"""

import logging
import threading
from pathlib import Path
from typing import Optional
from urllib.parse import quote

logger = logging.getLogger(__name__)


class FileStorage:
    """Durable key-value text store: data_dir/{key}.json, atomic writes."""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def path_for(self, key: str) -> Path:
        """Map a key to its file. Percent-encoding keeps distinct keys in distinct files."""
        return self.data_dir / f"{quote(key, safe='')}.json"

    def has(self, key: str) -> bool:
        return self.path_for(key).exists()

    def get(self, key: str) -> Optional[str]:
        try:
            return self.path_for(key).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        with self._lock:
            tmp = path.with_name(path.name + ".tmp")
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(value)
            tmp.replace(path)
        logger.debug("Wrote %d chars to %s", len(value), path)
