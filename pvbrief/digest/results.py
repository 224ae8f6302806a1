"""Explicit outcomes for digest operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from .models import NewsDigest


class OperationStatus(str, Enum):
    OK = "ok"
    UNKNOWN_CATEGORY = "unknown_category"
    UNKNOWN_SLOT = "unknown_slot"
    INVALID_DIGEST = "invalid_digest"
    WRITE_FAILED = "write_failed"


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a save or update.

    Truthiness mirrors success so callers can keep treating it as a flag.
    """

    status: OperationStatus
    digest: NewsDigest | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.status is OperationStatus.OK

    def __bool__(self) -> bool:
        return self.ok


@dataclass(frozen=True)
class LoadResult:
    """Digest returned by a load and where it came from."""

    digest: NewsDigest
    source: Literal["store", "default"]
    error: Exception | None = None

    @property
    def is_default(self) -> bool:
        return self.source == "default"


__all__ = ["OperationStatus", "OperationResult", "LoadResult"]
