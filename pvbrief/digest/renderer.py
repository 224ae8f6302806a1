"""Rendering helpers turning a digest into API, plain-text and Markdown output."""

from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo
from typing import Any

from jinja2 import BaseLoader, Environment

from pvbrief.config.brief import BriefConfig

from .models import SECTIONS, NewsDigest

UNKNOWN_UPDATE_TIME = "未知"
RULE = "━━━━━━━━━━━━"

_WECHAT_TEMPLATE = """【{{ title }}】{{ date_label }}
{{ rule }}

{% for section in sections %}
{{ section.emoji }} {{ section.name }}
{% for item in section.news %}
{{ loop.index }}. {{ item.title }}
{% endfor %}

{% endfor %}
{{ rule }}
详情点击：{{ detail_url }}
"""

_MARKDOWN_TEMPLATE = """# {{ title }} {{ date_label }}

> {{ subtitle }}

{% for section in sections %}
## {{ section.emoji }} {{ section.name }}
{% for item in section.news %}
{{ loop.index }}. [{{ item.title }}]({{ item.link }})
{% endfor %}
{% if not loop.last %}

{% endif %}
{% endfor %}
"""


def format_month_day(value: str) -> str:
    """``2026-10-19`` -> ``10月19日``; unparseable dates are returned as-is."""
    try:
        parsed = date.fromisoformat(value[:10])
    except (TypeError, ValueError):
        return value
    return f"{parsed.month}月{parsed.day}日"


def format_display_time(value: str | None, tz: tzinfo) -> str:
    """Format an ISO timestamp the way the zh-CN locale displays it."""
    if not value:
        return UNKNOWN_UPDATE_TIME
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return UNKNOWN_UPDATE_TIME
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    try:
        local = parsed.astimezone(tz)
    except OverflowError:
        return UNKNOWN_UPDATE_TIME
    return f"{local.year}/{local.month}/{local.day} {local:%H:%M:%S}"


class DigestRenderer:
    """Render a :class:`NewsDigest` for the API, chat messages and Markdown cards."""

    def __init__(self, config: BriefConfig | None = None) -> None:
        self.config = config or BriefConfig()
        env = Environment(loader=BaseLoader(), autoescape=False, trim_blocks=True, lstrip_blocks=True)
        self._wechat = env.from_string(_WECHAT_TEMPLATE)
        self._markdown = env.from_string(_MARKDOWN_TEMPLATE)

    def api_data(self, digest: NewsDigest) -> dict[str, Any]:
        return {
            "title": self.config.title,
            "subtitle": self.config.subtitle,
            "date": digest.date,
            "updateTime": digest.last_update,
            "sections": [
                {
                    "name": spec.name,
                    "type": spec.key,
                    "news": [item.to_dict() for item in digest.items(spec.key)],
                }
                for spec in SECTIONS
            ],
        }

    def wechat_message(self, digest: NewsDigest) -> str:
        """Plain-text brief: numbered titles only, links left to the footer page."""
        return self._wechat.render(
            title=self.config.title,
            date_label=format_month_day(digest.date),
            rule=RULE,
            sections=self._sections(digest),
            detail_url=self.config.detail_url,
        )

    def markdown(self, digest: NewsDigest) -> str:
        return self._markdown.render(
            title=self.config.title,
            subtitle=self.config.subtitle,
            date_label=format_month_day(digest.date),
            sections=self._sections(digest),
        )

    def _sections(self, digest: NewsDigest) -> list[dict[str, Any]]:
        return [
            {"name": spec.name, "emoji": spec.emoji, "news": digest.items(spec.key)}
            for spec in SECTIONS
        ]


__all__ = [
    "DigestRenderer",
    "UNKNOWN_UPDATE_TIME",
    "format_display_time",
    "format_month_day",
]
