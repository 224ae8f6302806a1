"""Data manager owning the stored digest: load, save, update, export and import."""

from __future__ import annotations

import asyncio
import json
from datetime import date, datetime, timezone
from pathlib import Path
from typing import IO, Any, Callable, Iterable, Mapping, Union

from loguru import logger

from pvbrief.config.app import AppConfig
from pvbrief.config.brief import BriefConfig
from pvbrief.storage import KeyValueStore, StorageError, create_store

from .models import NewsDigest, NewsItem, slot_key
from .renderer import DigestRenderer, format_display_time
from .results import LoadResult, OperationResult, OperationStatus

Clock = Callable[[], datetime]
ImportSource = Union[str, Path, IO[str], IO[bytes]]

DEFAULT_DIGEST_KEY = "photovoltaic_news_data"
DEFAULT_CONFIG_KEY = "photovoltaic_config"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _read_text(source: ImportSource) -> str:
    if isinstance(source, (str, Path)):
        return Path(source).read_text(encoding="utf-8-sig")
    content = source.read()
    if isinstance(content, bytes):
        return content.decode("utf-8-sig")
    return content


def _entry_field(entry: Any, name: str) -> str | None:
    if isinstance(entry, Mapping):
        value = entry.get(name)
    else:
        value = getattr(entry, name, None)
    return str(value) if value else None


class NewsDataManager:
    """Read-modify-write access to the single digest held in a key-value store.

    Load and save never raise: read problems fall back to the placeholder
    digest and write problems come back as a falsy :class:`OperationResult`.
    """

    def __init__(
        self,
        store: KeyValueStore,
        config: BriefConfig | None = None,
        *,
        digest_key: str = DEFAULT_DIGEST_KEY,
        config_key: str = DEFAULT_CONFIG_KEY,
        export_dir: Path | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.store = store
        self.config = config or BriefConfig()
        self.digest_key = digest_key
        self.config_key = config_key
        self.export_dir = export_dir if export_dir is not None else self.config.export_dir
        self._clock = clock or utc_now
        self.renderer = DigestRenderer(self.config)

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        *,
        base_path: Path | None = None,
        clock: Clock | None = None,
    ) -> "NewsDataManager":
        """Build a manager and its store from application configuration.

        Relative store and export paths resolve against ``base_path``.
        """
        store = create_store(config.storage, base_path=base_path)
        export_dir = config.brief.export_dir
        if not export_dir.is_absolute() and base_path is not None:
            export_dir = (base_path / export_dir).resolve()
        return cls(
            store,
            config.brief,
            digest_key=config.storage.digest_key,
            config_key=config.storage.config_key,
            export_dir=export_dir,
            clock=clock,
        )

    # ------------------------------------------------------------------
    # Time helpers
    # ------------------------------------------------------------------
    def today(self) -> date:
        return self._clock().astimezone(self.config.tzinfo).date()

    def _timestamp(self) -> str:
        now = self._clock().astimezone(timezone.utc)
        return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    def default_digest(self) -> NewsDigest:
        return NewsDigest.default(self.today(), last_update=self._timestamp())

    # ------------------------------------------------------------------
    # Storage accessor
    # ------------------------------------------------------------------
    def load(self) -> LoadResult:
        """Load the stored digest, reporting whether the default was used."""
        try:
            raw = self.store.get_item(self.digest_key)
        except (StorageError, OSError) as exc:
            logger.error("Failed to read digest from store: {}", exc)
            return LoadResult(self.default_digest(), "default", exc)

        if raw is None:
            return LoadResult(self.default_digest(), "default")

        try:
            digest = NewsDigest.from_dict(json.loads(raw))
        except (ValueError, RecursionError) as exc:
            logger.error("Stored digest is unreadable, using placeholder digest: {}", exc)
            return LoadResult(self.default_digest(), "default", exc)
        return LoadResult(digest, "store")

    def load_data(self) -> NewsDigest:
        return self.load().digest

    def save_data(self, digest: NewsDigest) -> OperationResult:
        """Stamp ``lastUpdate`` and persist a copy of ``digest``."""
        try:
            stamped = digest.copy()
        except (ValueError, AttributeError, TypeError) as exc:
            logger.error("Refusing to save malformed digest: {}", exc)
            return OperationResult(OperationStatus.INVALID_DIGEST, error=exc)
        stamped.last_update = self._timestamp()
        result = self._write(stamped.to_dict())
        if not result:
            return result
        logger.info("Digest for {} saved to store", stamped.date)
        return OperationResult(OperationStatus.OK, digest=stamped)

    def clear_data(self) -> OperationResult:
        try:
            self.store.remove_item(self.digest_key)
        except (StorageError, OSError) as exc:
            logger.error("Failed to clear digest: {}", exc)
            return OperationResult(OperationStatus.WRITE_FAILED, error=exc)
        logger.info("Digest cleared")
        return OperationResult(OperationStatus.OK)

    def _write(self, payload: Any) -> OperationResult:
        try:
            serialized = json.dumps(payload, ensure_ascii=False)
            self.store.set_item(self.digest_key, serialized)
        except (StorageError, OSError, TypeError, ValueError) as exc:
            logger.error("Failed to save digest: {}", exc)
            return OperationResult(OperationStatus.WRITE_FAILED, error=exc)
        return OperationResult(OperationStatus.OK)

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------
    def update_single_news(
        self, category: str, slot_number: int | str, title: str, link: str
    ) -> OperationResult:
        """Replace one slot; nothing is written when the target does not exist."""
        digest = self.load_data()
        section = digest.section(category)
        if section is None:
            logger.warning("Unknown category '{}'", category)
            return OperationResult(OperationStatus.UNKNOWN_CATEGORY)

        key = slot_key(slot_number)
        if key not in section:
            logger.warning("Unknown slot '{}' in category '{}'", key, category)
            return OperationResult(OperationStatus.UNKNOWN_SLOT)

        section[key] = NewsItem(title=title, link=link)
        return self.save_data(digest)

    def update_category_news(self, category: str, items: Iterable[Any]) -> OperationResult:
        """Update a whole section field by field.

        The i-th entry targets ``news{i}``. Empty or missing titles and links
        keep their current value; ``None`` entries and entries past the last
        slot are skipped. The digest is saved once.
        """
        digest = self.load_data()
        section = digest.section(category)
        if section is None:
            logger.warning("Unknown category '{}'", category)
            return OperationResult(OperationStatus.UNKNOWN_CATEGORY)

        for index, entry in enumerate(items, start=1):
            key = slot_key(index)
            if entry is None or key not in section:
                continue
            current = section[key]
            section[key] = NewsItem(
                title=_entry_field(entry, "title") or current.title,
                link=_entry_field(entry, "link") or current.link,
            )
        return self.save_data(digest)

    # ------------------------------------------------------------------
    # Export / import
    # ------------------------------------------------------------------
    def export_filename(self, digest: NewsDigest) -> str:
        epoch_millis = int(self._clock().timestamp() * 1000)
        return f"{self.config.export_prefix}_{digest.date}_{epoch_millis}.json"

    def export_to_json(self, directory: Path | None = None) -> str | None:
        """Write the current digest as pretty JSON and return the file name.

        Returns ``None`` when the file cannot be written.
        """
        digest = self.load_data()
        filename = self.export_filename(digest)
        target_dir = Path(directory) if directory is not None else self.export_dir
        target = target_dir / filename
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            target.write_text(
                json.dumps(digest.to_dict(), ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
        except OSError as exc:
            logger.error("Failed to export digest to {}: {}", target, exc)
            return None
        logger.info("Digest exported: {}", target)
        return filename

    async def import_from_json(self, source: ImportSource) -> Any:
        """Read ``source`` to completion, parse it and store it as the digest.

        Raises the underlying ``OSError`` or ``json.JSONDecodeError`` when the
        source cannot be read or parsed; the stored digest is left untouched
        in that case. Valid JSON of any shape is accepted.
        """
        try:
            text = await asyncio.to_thread(_read_text, source)
            payload = json.loads(text)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
            logger.error("Failed to import digest: {}", exc)
            raise

        if isinstance(payload, dict):
            payload["lastUpdate"] = self._timestamp()
        result = self._write(payload)
        if result:
            logger.info("Imported digest saved to store")
        return payload

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------
    def generate_api_data(self) -> dict[str, Any]:
        return self.renderer.api_data(self.load_data())

    def generate_wechat_message(self) -> str:
        return self.renderer.wechat_message(self.load_data())

    def generate_markdown(self) -> str:
        return self.renderer.markdown(self.load_data())

    def is_today(self) -> bool:
        return self.load_data().date == self.today().isoformat()

    def get_last_update_time(self) -> str:
        return format_display_time(self.load_data().last_update, self.config.tzinfo)


__all__ = [
    "Clock",
    "DEFAULT_CONFIG_KEY",
    "DEFAULT_DIGEST_KEY",
    "NewsDataManager",
    "utc_now",
]
