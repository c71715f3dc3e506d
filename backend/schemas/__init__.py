"""Pydantic schemas for persisted records."""

from .collection import Collection

__all__ = ["Collection"]
