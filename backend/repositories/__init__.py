"""Storage backends: interface, implementations and the configured factory."""

from .base import StorageBackend
from .file_store import FileStorage
from .memory_store import MemoryStorage

__all__ = ["StorageBackend", "FileStorage", "MemoryStorage", "open_storage"]


def open_storage(settings=None) -> StorageBackend:
    """Return the backend selected by TODOS_STORAGE ("memory" | "file")."""
    if settings is None:
        from config import get_settings
        settings = get_settings()
    if settings.TODOS_STORAGE == "file":
        return FileStorage(settings.TODOS_DATA_DIR)
    return MemoryStorage()
