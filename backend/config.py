"""
Todo store configuration.
Single source of truth for environment settings.
"""

import logging
import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv

load_dotenv()


def get_settings():
    """Return settings freshly read from the environment."""
    return Settings()


class Settings:
    """Store settings loaded from environment."""

    # Storage: "memory" | "file"
    TODOS_STORAGE: Literal["memory", "file"] = "memory"
    TODOS_DATA_DIR: Path
    TODOS_COLLECTION: str = "todos"

    TODOS_LOG_LEVEL: str = "INFO"

    def __init__(self):
        self.TODOS_STORAGE = (os.environ.get("TODOS_STORAGE") or "memory").strip().lower()
        if self.TODOS_STORAGE not in ("memory", "file"):
            self.TODOS_STORAGE = "memory"
        data_dir = os.environ.get("TODOS_DATA_DIR", "data")
        self.TODOS_DATA_DIR = Path(data_dir)
        self.TODOS_COLLECTION = (os.environ.get("TODOS_COLLECTION") or "todos").strip()
        self.TODOS_LOG_LEVEL = (os.environ.get("TODOS_LOG_LEVEL") or "INFO").strip().upper()

    @property
    def log_level(self) -> int:
        """Numeric logging level; unknown names fall back to INFO."""
        level = logging.getLevelName(self.TODOS_LOG_LEVEL)
        return level if isinstance(level, int) else logging.INFO


def configure_logging(settings=None) -> None:
    s = settings or get_settings()
    logging.basicConfig(level=s.log_level)
