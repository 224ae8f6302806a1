"""Presentation settings for the rendered brief."""

from __future__ import annotations

from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator

from pvbrief.config.base import BaseConfig


class BriefConfig(BaseConfig):
    """Titles, export naming and link targets used by the renderers."""

    title: str = Field("光伏早报", min_length=1, description="Brief title shown in every rendering")
    subtitle: str = Field("30秒速读前沿新闻", description="Tagline below the title")
    export_prefix: str = Field(
        "光伏早报",
        min_length=1,
        description="Filename prefix for exported JSON files",
    )
    export_dir: Path = Field(Path("./exports"), description="Directory receiving exported JSON files")
    site_origin: str = Field(
        "http://localhost:8000",
        description="Origin of the page hosting the brief, used in the plain-text footer",
    )
    detail_path: str = Field("/index.html", description="Path appended to the origin in the footer link")
    timezone: str = Field(
        "UTC",
        description="Timezone used for today's date and for displaying the last update time",
    )

    @field_validator("site_origin")
    @classmethod
    def _strip_trailing_slash(cls, origin: str) -> str:
        return origin.rstrip("/")

    @field_validator("detail_path")
    @classmethod
    def _ensure_leading_slash(cls, path: str) -> str:
        return path if path.startswith("/") else f"/{path}"

    @field_validator("timezone")
    @classmethod
    def _validate_timezone(cls, name: str) -> str:
        try:
            ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone '{name}'") from exc
        return name

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @property
    def detail_url(self) -> str:
        return f"{self.site_origin}{self.detail_path}"


__all__ = ["BriefConfig"]
