"""
Todo Persistence Layer
One named collection of todo items, persisted as JSON text under a single
storage key:

  <name>  ->  {"todos": [{"id": 123456, "title": "...", ...}, ...]}

Every operation reloads the whole record, mutates it and writes it back.
Results are returned directly and the callback receives the same value inline
before the call returns. find, find_all and save treat a missing callback as a
no-op; remove and drop have no default and reject None.
"""

import logging
import random
import string
import threading
import weakref
from typing import Any, Callable, Optional

from pydantic import ValidationError

from errors import CorruptCollectionError
from repositories import MemoryStorage, StorageBackend
from schemas import Collection

logger = logging.getLogger(__name__)

ID_LENGTH = 6

Item = dict[str, Any]
Callback = Callable[[Any], Any]

_MISSING = object()

# One lock per (backend, collection name), shared by every Store over that pair.
_locks: "weakref.WeakKeyDictionary[object, dict[str, threading.RLock]]" = weakref.WeakKeyDictionary()
_locks_guard = threading.Lock()


def _noop(*_args) -> None:
    return None


def _resolve(callback: Optional[Callback], op: str) -> Callback:
    """None -> no-op. Anything else must be callable."""
    if callback is None:
        return _noop
    if not callable(callback):
        raise TypeError(f"{op}() callback must be callable, got {type(callback).__name__}")
    return callback


def _require(callback: Callback, op: str) -> Callback:
    """Completion callback with no default: None is rejected too."""
    if not callable(callback):
        raise TypeError(f"{op}() requires a callable callback, got {type(callback).__name__}")
    return callback


def _lock_for(storage: StorageBackend, name: str) -> threading.RLock:
    with _locks_guard:
        per_key = _locks.setdefault(storage, {})
        return per_key.setdefault(name, threading.RLock())


def _same_id(value: Any, id: Any) -> bool:
    # bool is an int subclass; True must not address id 1.
    return type(value) is int and type(id) is int and value == id


def _matches(item: Item, query: dict) -> bool:
    for key, value in query.items():
        if item.get(key, _MISSING) != value:
            return False
    return True


class Store:
    """Client-side store for a single todo collection."""

    def __init__(
        self,
        name: str,
        callback: Optional[Callback] = None,
        *,
        storage: Optional[StorageBackend] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Open the collection `name`, creating it empty if it does not exist.

        Args:
            name: Collection name, also the storage key.
            callback: Receives the collection contents ({"todos": [...]}).
            storage: Key-value backend. Defaults to a fresh MemoryStorage.
            rng: Random source for new ids (module `random` when omitted).
        """
        on_ready = _resolve(callback, "Store")
        self._name = name
        self._storage = storage if storage is not None else MemoryStorage()
        self._rng = rng or random
        self._lock = _lock_for(self._storage, name)

        with self._lock:
            if not self._storage.has(name) or not self._read_text():
                self._write(Collection.empty())
                logger.info("Initialized empty collection '%s'", name)
            contents = self.load().model_dump()
        on_ready(contents)

    @classmethod
    def from_settings(cls, settings=None, callback: Optional[Callback] = None) -> "Store":
        """Store over the configured backend and collection name."""
        from config import get_settings
        from repositories import open_storage

        s = settings or get_settings()
        return cls(s.TODOS_COLLECTION, callback, storage=open_storage(s))

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"Store(name={self._name!r}, storage={type(self._storage).__name__})"

    # ── Internal helpers ───────────────────────────────────────────────

    def _read_text(self) -> Optional[str]:
        try:
            return self._storage.get(self._name)
        except UnicodeDecodeError as e:
            raise CorruptCollectionError(self._name, str(e)) from e

    def load(self) -> Collection:
        """Parse the persisted record. Raises CorruptCollectionError on bad text."""
        text = self._read_text()
        if text is None:
            raise CorruptCollectionError(self._name, "no stored record")
        try:
            return Collection.model_validate_json(text)
        except ValidationError as e:
            raise CorruptCollectionError(self._name, str(e)) from e

    def _write(self, collection: Collection) -> None:
        self._storage.set(self._name, collection.model_dump_json())

    def _new_id(self, todos: list[Item]) -> int:
        # 0 is rejected: a falsy id cannot address an item in save().
        while True:
            digits = "".join(self._rng.choices(string.digits, k=ID_LENGTH))
            new_id = int(digits)
            if new_id and all(todo.get("id") != new_id for todo in todos):
                return new_id

    # ── Queries ────────────────────────────────────────────────────────

    def find(self, query: dict, callback: Optional[Callback] = None) -> list[Item]:
        """
        Items whose fields equal every key/value in `query`.

        Keys absent from the query are ignored, so {} matches everything.
        Order is preserved. The callback is not invoked when omitted.
        """
        on_result = _resolve(callback, "find")
        todos = self.load().todos
        found = [todo for todo in todos if _matches(todo, query or {})]
        on_result(found)
        return found

    def find_all(self, callback: Optional[Callback] = None) -> list[Item]:
        on_result = _resolve(callback, "find_all")
        todos = self.load().todos
        on_result(todos)
        return todos

    # ── Mutations ──────────────────────────────────────────────────────

    def save(
        self,
        data: Item,
        callback: Optional[Callback] = None,
        id: Optional[int] = None,
    ) -> list[Item]:
        """
        Create or update an item.

        With a truthy `id`, merges `data` into the first item with that id and
        returns the full list. Otherwise assigns a new id onto `data`, appends
        it and returns [data].
        """
        on_result = _resolve(callback, "save")
        with self._lock:
            collection = self.load()
            todos = collection.todos
            if id:
                for todo in todos:
                    if _same_id(todo.get("id"), id):
                        todo.update({k: v for k, v in data.items() if k != "id"})
                        break
                else:
                    logger.debug("save: no item with id %s in '%s'", id, self._name)
                result = todos
            else:
                data["id"] = self._new_id(todos)
                todos.append(data)
                result = [data]
                logger.debug("save: created item %s in '%s'", data["id"], self._name)
            self._write(collection)
        on_result(result)
        return result

    def remove(self, id: int, callback: Callback) -> list[Item]:
        """Remove the first item with `id`; returns the remaining items."""
        on_result = _require(callback, "remove")
        with self._lock:
            collection = self.load()
            todos = collection.todos
            for i, todo in enumerate(todos):
                if _same_id(todo.get("id"), id):
                    del todos[i]
                    logger.debug("remove: deleted item %s from '%s'", id, self._name)
                    break
            else:
                logger.debug("remove: no item with id %s in '%s'", id, self._name)
            self._write(collection)
        on_result(todos)
        return todos

    def drop(self, callback: Callback) -> list[Item]:
        """Reset the collection to {"todos": []}. The storage key is kept."""
        on_result = _require(callback, "drop")
        collection = Collection.empty()
        with self._lock:
            self._write(collection)
        logger.info("Dropped collection '%s'", self._name)
        on_result(collection.todos)
        return collection.todos
