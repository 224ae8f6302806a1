"""Helpers shared across test modules."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

FIXED_NOW = datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc)


class FakeClock:
    """Deterministic time source that only moves when told to."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now
