"""Errors raised by the todo store."""


class StoreError(Exception):
    """Base for store failures with a machine-readable code."""
    def __init__(self, message: str, code: str = "store_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class CorruptCollectionError(StoreError):
    """Persisted collection text could not be parsed into {todos: [...]}."""
    def __init__(self, name: str, detail: str = ""):
        self.name = name
        message = f"Collection '{name}' is corrupt"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, code="corrupt_collection")
