"""News digest models, manager and renderers."""

from __future__ import annotations

from .manager import NewsDataManager, utc_now
from .models import (
    PLACEHOLDER_LINK,
    PLACEHOLDER_TITLE,
    SECTIONS,
    DigestShapeError,
    NewsDigest,
    NewsItem,
)
from .renderer import DigestRenderer
from .results import LoadResult, OperationResult, OperationStatus

__all__ = [
    "DigestRenderer",
    "DigestShapeError",
    "LoadResult",
    "NewsDataManager",
    "NewsDigest",
    "NewsItem",
    "OperationResult",
    "OperationStatus",
    "PLACEHOLDER_LINK",
    "PLACEHOLDER_TITLE",
    "SECTIONS",
    "utc_now",
]
