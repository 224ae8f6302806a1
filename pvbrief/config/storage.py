"""Key-value store configuration models."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator

from pvbrief.config.base import BaseConfig


class StorageConfig(BaseConfig):
    """Where the digest is persisted and under which keys."""

    backend: Literal["file", "memory"] = Field(
        "file",
        description="Store backend: a JSON file on disk or an in-process dictionary",
    )
    path: Path | None = Field(
        Path("./data/store.json"),
        description="JSON file holding the key-value pairs when using the file backend",
    )
    quota_bytes: int | None = Field(
        None,
        ge=1,
        description="Optional upper bound on the total size of stored values",
    )
    digest_key: str = Field(
        "photovoltaic_news_data",
        min_length=1,
        description="Key under which the serialized digest is stored",
    )
    config_key: str = Field(
        "photovoltaic_config",
        min_length=1,
        description="Key reserved for page-level settings",
    )

    @model_validator(mode="after")
    def _validate_backend(self) -> "StorageConfig":
        if self.backend == "file" and self.path is None:
            raise ValueError("File storage backend requires 'path'.")
        if self.digest_key == self.config_key:
            raise ValueError("'digest_key' and 'config_key' must differ.")
        return self


__all__ = ["StorageConfig"]
