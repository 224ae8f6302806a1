"""Configuration namespace for pvbrief."""

from __future__ import annotations

from .app import AppConfig
from .base import BaseConfig, load_config
from .brief import BriefConfig
from .storage import StorageConfig

__all__ = [
    "AppConfig",
    "BaseConfig",
    "BriefConfig",
    "StorageConfig",
    "load_config",
]
