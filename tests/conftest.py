"""Test configuration: make the package and the PNG helpers importable."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
TESTS = ROOT / "tests"

for p in (str(ROOT), str(TESTS)):
    if p not in sys.path:
        sys.path.insert(0, p)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("CHARA_CARD_LOG_LEVEL", "CHARA_CARD_JSON_INDENT", "CHARA_CARD_KEYWORD"):
        monkeypatch.delenv(name, raising=False)
