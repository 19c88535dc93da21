from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from chara_card.cli import app

from pngkit import itxt, png, text

runner = CliRunner()

CARD_TEXT = '{"name": "Mika", "greeting": "こんにちは"}'


def _card(tmp_path: Path, body: bytes, name: str = "card.png") -> Path:
    p = tmp_path / name
    p.write_bytes(body)
    return p


def test_extract_prints_reserialized_json(tmp_path: Path) -> None:
    p = _card(tmp_path, png(itxt("chara", "junk" + CARD_TEXT)))
    result = runner.invoke(app, ["extract", str(p)])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == json.loads(CARD_TEXT)
    assert "こんにちは" in result.stdout


def test_extract_raw_prints_text_as_found(tmp_path: Path) -> None:
    p = _card(tmp_path, png(itxt("chara", "junk" + CARD_TEXT)))
    result = runner.invoke(app, ["extract", str(p), "--raw"])
    assert result.exit_code == 0
    assert result.stdout == "junk" + CARD_TEXT


def test_extract_indent_from_env(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("CHARA_CARD_JSON_INDENT", "4")
    p = _card(tmp_path, png(text("chara", '{"a": 1}')))
    result = runner.invoke(app, ["extract", str(p)])
    assert result.stdout == '{\n    "a": 1\n}\n'


def test_extract_without_path_is_usage_error() -> None:
    result = runner.invoke(app, ["extract"])
    assert result.exit_code == 1
    assert "Usage: chara-card extract" in result.output


def test_extract_failure_exits_1(tmp_path: Path) -> None:
    p = _card(tmp_path, b"GIF89a")
    result = runner.invoke(app, ["extract", str(p)])
    assert result.exit_code == 1
    assert "NotAContainer" in result.output


def test_extract_missing_file_exits_1(tmp_path: Path) -> None:
    result = runner.invoke(app, ["extract", str(tmp_path / "nope.png")])
    assert result.exit_code == 1
    assert "FileNotFoundError" in result.output


def test_extract_bad_settings_exits_1(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("CHARA_CARD_JSON_INDENT", "wide")
    p = _card(tmp_path, png(text("chara", '{"a": 1}')))
    result = runner.invoke(app, ["extract", str(p)])
    assert result.exit_code == 1
    assert "CHARA_CARD_JSON_INDENT" in result.output


def test_scan_lists_cards(tmp_path: Path) -> None:
    _card(tmp_path, png(text("chara", '{"name": "Mika"}')), "a.png")
    _card(tmp_path, b"junk", "b.png")
    result = runner.invoke(app, ["scan", str(tmp_path)])
    assert result.exit_code == 0
    assert "Mika" in result.stdout
    assert "Done: 1/2" in result.stdout


def test_scan_with_no_cards_exits_2(tmp_path: Path) -> None:
    _card(tmp_path, b"junk", "b.png")
    result = runner.invoke(app, ["scan", str(tmp_path)])
    assert result.exit_code == 2


def test_scan_missing_directory_exits_1(tmp_path: Path) -> None:
    result = runner.invoke(app, ["scan", str(tmp_path / "absent")])
    assert result.exit_code == 1


def test_extract_null_card_exits_1(tmp_path: Path) -> None:
    p = _card(tmp_path, png(text("chara", "null")))
    result = runner.invoke(app, ["extract", str(p)])
    assert result.exit_code == 1
    assert "UnrecoverableData" in result.output


def test_extract_overflowing_number_prints_null(tmp_path: Path) -> None:
    p = _card(tmp_path, png(text("chara", '{"x": 1e400, "y": [-1e400]}')))
    result = runner.invoke(app, ["extract", str(p)])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"x": None, "y": [None]}
    assert "Infinity" not in result.stdout


def test_scan_writes_manifest(tmp_path: Path) -> None:
    cards = tmp_path / "cards"
    cards.mkdir()
    _card(cards, png(itxt("chara", '{"name": "Mika", "description": "バーテンダー", "links": ["x"]}')), "a.png")
    _card(cards, b"junk", "b.png")
    out = tmp_path / "out" / "manifest.json"
    result = runner.invoke(app, ["scan", str(cards), "--manifest", str(out)])
    assert result.exit_code == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["count"] == 1
    assert data["items"][0]["id"] == "v2_mika"
    assert data["items"][0]["behavior"] == "バーテンダー"
    assert data["items"][0]["linksCount"] == 1
    assert [(e["path"], e["kind"]) for e in data["errors"]] == [("b.png", "NotAContainer")]
