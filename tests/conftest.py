"""Shared pytest fixtures and path configuration."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from pvbrief.config import BriefConfig  # noqa: E402
from pvbrief.digest import NewsDataManager  # noqa: E402
from pvbrief.storage import MemoryStore  # noqa: E402

from tests.utils import FIXED_NOW, FakeClock  # noqa: E402


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(FIXED_NOW)


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def brief_config(tmp_path: Path) -> BriefConfig:
    return BriefConfig(export_dir=tmp_path / "exports")


@pytest.fixture()
def manager(store: MemoryStore, brief_config: BriefConfig, clock: FakeClock) -> NewsDataManager:
    return NewsDataManager(store, brief_config, clock=clock)
