"""Repository protocol definitions for domain layer."""

from .storage import KeyValueStore

__all__ = ["KeyValueStore"]
