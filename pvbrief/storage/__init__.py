"""Key-value storage backends for pvbrief."""

from .store import (
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
    QuotaExceededError,
    StorageError,
    create_store,
)

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "StorageError",
    "QuotaExceededError",
    "create_store",
]
