"""Shared helpers for CLI tests."""

from __future__ import annotations

from pathlib import Path


def write_config(base_dir: Path, *, logging_level: str = "INFO") -> Path:
    """Write a config that keeps the store and exports inside ``base_dir``."""

    config_text = f"""
logging_level = "{logging_level}"

[storage]
backend = "file"
path = "data/store.json"

[brief]
export_dir = "exports"
site_origin = "https://brief.example.com"
timezone = "Asia/Shanghai"
"""
    config_file = base_dir / "config.toml"
    config_file.write_text(config_text, encoding="utf-8")
    return config_file
