"""Command line interface for the pvbrief toolkit."""

from __future__ import annotations

import asyncio
import json
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import typer
from loguru import logger
from pydantic import ValidationError

from .config import AppConfig, load_config
from .digest import NewsDataManager, OperationResult


class RenderFormat(str, Enum):
    api = "api"
    wechat = "wechat"
    markdown = "markdown"


@dataclass(slots=True)
class CLIState:
    """Holds shared state between Typer commands."""

    config_path: Path
    _config: AppConfig | None = None
    _manager: NewsDataManager | None = None

    def ensure_config(self) -> AppConfig:
        if self._config is None:
            if self.config_path.exists():
                logger.debug("Loading configuration from {}", self.config_path)
                self._config = load_config(AppConfig, self.config_path)
            else:
                logger.warning("Configuration file {} not found; using defaults", self.config_path)
                self._config = AppConfig()
        return self._config

    def ensure_manager(self) -> NewsDataManager:
        if self._manager is None:
            config = self.ensure_config()
            self._manager = NewsDataManager.from_config(config, base_path=self.config_path.parent)
        return self._manager


app = typer.Typer(help="Maintain and render the photovoltaic morning brief")


def _default_config_path() -> Path:
    return Path.cwd() / "config" / "pvbrief.toml"


def _configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):  # pragma: no cover - defensive guard
        raise RuntimeError("CLI context is not initialised")
    return state


def _exit(code: int) -> None:
    raise typer.Exit(code)


def _finish(result: OperationResult, success_message: str) -> None:
    if not result:
        logger.error("Operation failed: {}", result.status.value)
        _exit(1)
    logger.info(success_message)


def _parse_item(raw: str) -> dict[str, str]:
    title, _, link = raw.partition("|")
    return {"title": title.strip(), "link": link.strip()}


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Path = typer.Option(
        _default_config_path(),
        help="Path to the TOML configuration file",
    ),
) -> None:
    """Initialise CLI state and logging."""

    state = CLIState(config_path=config.resolve())
    try:
        app_config = state.ensure_config()
    except (ValidationError, ValueError) as exc:
        _configure_logging("INFO")
        logger.error("Invalid configuration {}: {}", state.config_path, exc)
        _exit(2)
        return
    _configure_logging(app_config.logging_level)
    ctx.obj = state


@app.command(help="Print the stored digest as JSON")
def show(ctx: typer.Context) -> None:
    manager = _get_state(ctx).ensure_manager()
    loaded = manager.load()
    if loaded.is_default:
        logger.info("No stored digest; showing placeholder content")
    typer.echo(json.dumps(loaded.digest.to_dict(), indent=2, ensure_ascii=False))


@app.command("set", help="Replace a single news slot")
def set_news(
    ctx: typer.Context,
    category: str = typer.Argument(..., help="Section: policy, industry or tech"),
    slot: int = typer.Argument(..., help="Slot number 1-3"),
    title: str = typer.Option(..., "--title", help="Headline text"),
    link: str = typer.Option(..., "--link", help="Article URL"),
) -> None:
    manager = _get_state(ctx).ensure_manager()
    result = manager.update_single_news(category, slot, title, link)
    _finish(result, f"Updated {category}.news{slot}")


@app.command("set-category", help="Update several slots of one section at once")
def set_category(
    ctx: typer.Context,
    category: str = typer.Argument(..., help="Section: policy, industry or tech"),
    item: list[str] = typer.Option(
        ...,
        "--item",
        help="'TITLE|LINK' for the next slot; leave a side empty to keep the current value",
    ),
) -> None:
    manager = _get_state(ctx).ensure_manager()
    result = manager.update_category_news(category, [_parse_item(raw) for raw in item])
    _finish(result, f"Updated {len(item)} item(s) in {category}")


@app.command(help="Render the digest for the API, WeChat or Markdown")
def render(
    ctx: typer.Context,
    format: RenderFormat = typer.Option(  # noqa: A002 - match CLI option name
        RenderFormat.markdown,
        "--format",
        case_sensitive=False,
        help="Output format",
    ),
) -> None:
    manager = _get_state(ctx).ensure_manager()
    if format is RenderFormat.api:
        typer.echo(json.dumps(manager.generate_api_data(), indent=2, ensure_ascii=False))
    elif format is RenderFormat.wechat:
        typer.echo(manager.generate_wechat_message())
    else:
        typer.echo(manager.generate_markdown())


@app.command(help="Export the digest to a JSON file")
def export(
    ctx: typer.Context,
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        help="Directory for the exported file (defaults to brief.export_dir)",
    ),
) -> None:
    manager = _get_state(ctx).ensure_manager()
    filename = manager.export_to_json(output_dir)
    if filename is None:
        _exit(1)
    typer.echo(filename)


@app.command("import", help="Replace the stored digest with a JSON file")
def import_(
    ctx: typer.Context,
    source: Path = typer.Argument(..., help="JSON file previously produced by 'export'"),
) -> None:
    manager = _get_state(ctx).ensure_manager()
    try:
        asyncio.run(manager.import_from_json(source))
    except (OSError, ValueError, RecursionError) as exc:
        logger.error("Import of {} failed: {}", source, exc)
        _exit(1)
        return
    logger.info("Imported digest from {}", source)


@app.command(help="Remove the stored digest")
def clear(ctx: typer.Context) -> None:
    manager = _get_state(ctx).ensure_manager()
    _finish(manager.clear_data(), "Stored digest removed")


@app.command(help="Report digest date and freshness")
def status(ctx: typer.Context) -> None:
    manager = _get_state(ctx).ensure_manager()
    loaded = manager.load()
    logger.info("Store key: {}", manager.digest_key)
    logger.info("Source: {}", loaded.source)
    logger.info("Digest date: {}", loaded.digest.date)
    logger.info("Is today: {}", manager.is_today())
    logger.info("Last update: {}", manager.get_last_update_time())


def main(argv: list[str] | None = None) -> int:
    """Entry point compatible with setuptools console scripts."""

    try:
        result = app(args=argv, standalone_mode=False)
    except typer.Exit as exc:  # pragma: no cover - Typer translates exit codes
        return exc.exit_code
    if isinstance(result, int):
        return result
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
