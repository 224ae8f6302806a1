from __future__ import annotations

import json
from pathlib import Path

from pvbrief.cli import main

from .utils import write_config


def test_show_without_store_prints_placeholder(capsys, tmp_path: Path) -> None:
    config_file = write_config(tmp_path)

    exit_code = main(["--config", str(config_file), "show"])

    assert exit_code == 0
    captured = capsys.readouterr()
    payload = json.loads(captured.out)
    assert payload["policy"]["news1"] == {"title": "请更新新闻标题", "link": "#"}
    assert "No stored digest" in captured.err


def test_set_then_show(capsys, tmp_path: Path) -> None:
    config_file = write_config(tmp_path)

    exit_code = main(
        ["--config", str(config_file), "set", "policy", "2", "--title", "T", "--link", "L"]
    )
    assert exit_code == 0
    assert (tmp_path / "data" / "store.json").exists()
    capsys.readouterr()

    main(["--config", str(config_file), "show"])
    payload = json.loads(capsys.readouterr().out)
    assert payload["policy"]["news2"] == {"title": "T", "link": "L"}


def test_set_unknown_category_fails(capsys, tmp_path: Path) -> None:
    config_file = write_config(tmp_path)

    exit_code = main(
        ["--config", str(config_file), "set", "sports", "1", "--title", "T", "--link", "L"]
    )

    assert exit_code == 1
    assert "unknown_category" in capsys.readouterr().err
    assert not (tmp_path / "data" / "store.json").exists()


def test_set_category_partial_items(capsys, tmp_path: Path) -> None:
    config_file = write_config(tmp_path)

    exit_code = main(
        [
            "--config",
            str(config_file),
            "set-category",
            "tech",
            "--item",
            "A|",
            "--item",
            "|",
            "--item",
            "|X",
        ]
    )
    assert exit_code == 0
    capsys.readouterr()

    main(["--config", str(config_file), "show"])
    tech = json.loads(capsys.readouterr().out)["tech"]
    assert tech["news1"] == {"title": "A", "link": "#"}
    assert tech["news2"] == {"title": "请更新新闻标题", "link": "#"}
    assert tech["news3"] == {"title": "请更新新闻标题", "link": "X"}


def test_render_formats(capsys, tmp_path: Path) -> None:
    config_file = write_config(tmp_path)
    main(["--config", str(config_file), "set", "policy", "1", "--title", "Foo", "--link", "http://x"])
    capsys.readouterr()

    assert main(["--config", str(config_file), "render", "--format", "markdown"]) == 0
    assert "1. [Foo](http://x)" in capsys.readouterr().out

    assert main(["--config", str(config_file), "render", "--format", "wechat"]) == 0
    wechat = capsys.readouterr().out
    assert "📊 宏观政策" in wechat
    assert "详情点击：https://brief.example.com/index.html" in wechat

    assert main(["--config", str(config_file), "render", "--format", "api"]) == 0
    api = json.loads(capsys.readouterr().out)
    assert [section["type"] for section in api["sections"]] == ["policy", "industry", "tech"]


def test_export_and_import(capsys, tmp_path: Path) -> None:
    config_file = write_config(tmp_path)
    main(["--config", str(config_file), "set", "industry", "3", "--title", "Q3", "--link", "http://q3"])
    capsys.readouterr()

    assert main(["--config", str(config_file), "export"]) == 0
    filename = capsys.readouterr().out.strip()
    exported = tmp_path / "exports" / filename
    assert filename.startswith("光伏早报_")
    assert exported.exists()

    assert main(["--config", str(config_file), "clear"]) == 0
    assert main(["--config", str(config_file), "import", str(exported)]) == 0
    capsys.readouterr()

    main(["--config", str(config_file), "show"])
    payload = json.loads(capsys.readouterr().out)
    assert payload["industry"]["news3"] == {"title": "Q3", "link": "http://q3"}


def test_import_malformed_file_fails(capsys, tmp_path: Path) -> None:
    config_file = write_config(tmp_path)
    bad = tmp_path / "bad.json"
    bad.write_text("{oops", encoding="utf-8")

    exit_code = main(["--config", str(config_file), "import", str(bad)])

    assert exit_code == 1
    assert "Import of" in capsys.readouterr().err


def test_import_deeply_nested_file_fails(capsys, tmp_path: Path) -> None:
    config_file = write_config(tmp_path)
    nested = tmp_path / "nested.json"
    nested.write_text("[" * 100_000 + "]" * 100_000, encoding="utf-8")

    exit_code = main(["--config", str(config_file), "import", str(nested)])

    assert exit_code == 1
    assert "Import of" in capsys.readouterr().err


def test_status_reports_freshness(capsys, tmp_path: Path) -> None:
    config_file = write_config(tmp_path)
    main(["--config", str(config_file), "set", "policy", "1", "--title", "T", "--link", "L"])
    capsys.readouterr()

    exit_code = main(["--config", str(config_file), "status"])

    assert exit_code == 0
    err = capsys.readouterr().err
    assert "Source: store" in err
    assert "Is today: True" in err
    assert "Last update: 未知" not in err


def test_invalid_config_exits_with_code_2(capsys, tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text("unknown_field = 42\n", encoding="utf-8")

    exit_code = main(["--config", str(config_file), "show"])

    assert exit_code == 2
    assert "Invalid configuration" in capsys.readouterr().err
