"""Application-level configuration models."""

from __future__ import annotations

from pydantic import Field

from pvbrief.config.base import BaseConfig
from pvbrief.config.brief import BriefConfig
from pvbrief.config.storage import StorageConfig


class AppConfig(BaseConfig):
    """Top-level runtime configuration for the brief manager."""

    logging_level: str = Field("INFO", description="Log level: DEBUG, INFO, WARNING, ERROR")
    storage: StorageConfig = Field(default_factory=StorageConfig, description="Key-value store settings")
    brief: BriefConfig = Field(default_factory=BriefConfig, description="Rendering and export settings")


__all__ = ["AppConfig"]
