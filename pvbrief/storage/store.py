"""Key-value store backends modelled on browser local storage."""

from __future__ import annotations

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from loguru import logger

from pvbrief.config.storage import StorageConfig


class StorageError(RuntimeError):
    """Raised when a store cannot be read or written."""


class QuotaExceededError(StorageError):
    """Raised when a write would push the store past its size quota."""


class KeyValueStore(ABC):
    """String-to-string store with the local storage call surface."""

    def __init__(self, *, quota_bytes: int | None = None) -> None:
        self.quota_bytes = quota_bytes

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the value stored under ``key`` or ``None``."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete ``key``; missing keys are ignored."""

    @abstractmethod
    def keys(self) -> list[str]:
        """Return the stored keys."""

    def _check_quota(self, items: dict[str, str]) -> None:
        if self.quota_bytes is None:
            return
        used = sum(len(k.encode("utf-8")) + len(v.encode("utf-8")) for k, v in items.items())
        if used > self.quota_bytes:
            raise QuotaExceededError(
                f"Store quota exceeded: {used} bytes needed, {self.quota_bytes} allowed"
            )


class MemoryStore(KeyValueStore):
    """Store that keeps values in a dictionary for the lifetime of the process."""

    def __init__(self, initial: dict[str, str] | None = None, *, quota_bytes: int | None = None) -> None:
        super().__init__(quota_bytes=quota_bytes)
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        candidate = {**self._items, key: str(value)}
        self._check_quota(candidate)
        self._items = candidate

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)


class JsonFileStore(KeyValueStore):
    """Store persisted as a single JSON object on disk.

    Every call re-reads the file so separate processes see each other's
    writes. Writes go through a temporary file and ``os.replace``.
    """

    def __init__(self, path: Path, *, quota_bytes: int | None = None) -> None:
        super().__init__(quota_bytes=quota_bytes)
        self.path = Path(path)

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = str(value)
        self._check_quota(items)
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._read()
        if key in items:
            del items[key]
            self._write(items)

    def keys(self) -> list[str]:
        return list(self._read())

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot read store file {self.path}: {exc}") from exc
        if not raw.strip():
            return {}
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Store file {self.path} is not valid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise StorageError(f"Store file {self.path} must contain a JSON object")
        return {str(k): str(v) for k, v in payload.items()}

    def _write(self, items: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(items, handle, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"Cannot write store file {self.path}: {exc}") from exc


def create_store(config: StorageConfig, *, base_path: Path | None = None) -> KeyValueStore:
    """Instantiate the store backend selected in ``config``."""

    if config.backend == "memory":
        logger.debug("Using in-memory store")
        return MemoryStore(quota_bytes=config.quota_bytes)

    path = config.path
    if path is None:  # Defensive, should already be validated
        raise ValueError("File storage backend requires a path.")
    if not path.is_absolute() and base_path is not None:
        path = (base_path / path).resolve()
    logger.debug("Using JSON file store at {}", path)
    return JsonFileStore(path, quota_bytes=config.quota_bytes)


__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "StorageError",
    "QuotaExceededError",
    "create_store",
]
