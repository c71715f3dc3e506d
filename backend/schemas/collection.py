"""Persisted collection record: {"todos": [item, ...]}."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class Collection(BaseModel):
    # Unknown top-level keys survive a load/save cycle.
    model_config = ConfigDict(extra="allow")

    todos: list[dict[str, Any]]

    @classmethod
    def empty(cls) -> "Collection":
        return cls(todos=[])
