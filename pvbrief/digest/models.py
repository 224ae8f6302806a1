"""Data models for the three-section news digest."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping

PLACEHOLDER_TITLE = "请更新新闻标题"
PLACEHOLDER_LINK = "#"
SLOT_COUNT = 3


class DigestShapeError(ValueError):
    """Raised when a payload does not have the digest's sections and slots."""


@dataclass(frozen=True, slots=True)
class SectionSpec:
    """Fixed presentation metadata of one digest section."""

    key: str
    name: str
    emoji: str


SECTIONS: tuple[SectionSpec, ...] = (
    SectionSpec("policy", "宏观政策", "📊"),
    SectionSpec("industry", "产经动态", "💼"),
    SectionSpec("tech", "产技创新", "🔬"),
)
SECTION_KEYS: tuple[str, ...] = tuple(spec.key for spec in SECTIONS)
SLOT_KEYS: tuple[str, ...] = tuple(f"news{number}" for number in range(1, SLOT_COUNT + 1))


def slot_key(slot_number: int | str) -> str:
    return f"news{slot_number}"


@dataclass(slots=True)
class NewsItem:
    """A single headline with its link."""

    title: str = PLACEHOLDER_TITLE
    link: str = PLACEHOLDER_LINK

    def to_dict(self) -> dict[str, str]:
        return {"title": self.title, "link": self.link}

    @classmethod
    def from_dict(cls, payload: Any) -> "NewsItem":
        if not isinstance(payload, Mapping):
            raise DigestShapeError(f"News item must be an object, got {type(payload).__name__}")
        return cls(title=str(payload.get("title") or ""), link=str(payload.get("link") or ""))


def _placeholder_section() -> dict[str, NewsItem]:
    return {key: NewsItem() for key in SLOT_KEYS}


@dataclass(slots=True)
class NewsDigest:
    """The persisted digest: one date, three sections of three slots."""

    date: str
    last_update: str | None = None
    policy: dict[str, NewsItem] = field(default_factory=_placeholder_section)
    industry: dict[str, NewsItem] = field(default_factory=_placeholder_section)
    tech: dict[str, NewsItem] = field(default_factory=_placeholder_section)

    @classmethod
    def default(cls, today: date, last_update: str | None = None) -> "NewsDigest":
        """Placeholder digest for ``today``."""
        return cls(date=today.isoformat(), last_update=last_update)

    def section(self, category: str) -> dict[str, NewsItem] | None:
        """Return the slots of ``category`` or ``None`` for unknown names."""
        if category not in SECTION_KEYS:
            return None
        return getattr(self, category)

    def items(self, category: str) -> list[NewsItem]:
        section = self.section(category)
        if section is None:
            raise KeyError(category)
        return [section[key] for key in SLOT_KEYS]

    def copy(self) -> "NewsDigest":
        return NewsDigest.from_dict(self.to_dict())

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"date": self.date, "lastUpdate": self.last_update}
        for category in SECTION_KEYS:
            payload[category] = {key: item.to_dict() for key, item in getattr(self, category).items()}
        return payload

    @classmethod
    def from_dict(cls, payload: Any) -> "NewsDigest":
        """Build a digest from its JSON shape.

        Only presence is checked: every section must hold news1..news3.
        Extra slots or keys are dropped.
        """
        if not isinstance(payload, Mapping):
            raise DigestShapeError(f"Digest must be an object, got {type(payload).__name__}")
        if "date" not in payload:
            raise DigestShapeError("Digest is missing 'date'")

        sections: dict[str, dict[str, NewsItem]] = {}
        for category in SECTION_KEYS:
            raw_section = payload.get(category)
            if not isinstance(raw_section, Mapping):
                raise DigestShapeError(f"Digest is missing section '{category}'")
            missing = [key for key in SLOT_KEYS if key not in raw_section]
            if missing:
                raise DigestShapeError(f"Section '{category}' is missing {', '.join(missing)}")
            sections[category] = {key: NewsItem.from_dict(raw_section[key]) for key in SLOT_KEYS}

        last_update = payload.get("lastUpdate")
        return cls(
            date=str(payload["date"]),
            last_update=str(last_update) if last_update else None,
            **sections,
        )


__all__ = [
    "PLACEHOLDER_TITLE",
    "PLACEHOLDER_LINK",
    "SLOT_COUNT",
    "SECTIONS",
    "SECTION_KEYS",
    "SLOT_KEYS",
    "SectionSpec",
    "NewsItem",
    "NewsDigest",
    "DigestShapeError",
    "slot_key",
]
