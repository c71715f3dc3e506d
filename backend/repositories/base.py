"""Storage backend interface: a synchronous key-value text store."""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class StorageBackend(Protocol):
    """String-keyed text store. The Store's only durability layer."""

    def has(self, key: str) -> bool:
        ...

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...
