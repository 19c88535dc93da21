# chara_card/loose_json.py
from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from typing import Any, Sequence, Tuple

from .errors import NoEmbeddedData, UnrecoverableData
from .text import TextCandidate

logger = logging.getLogger("chara_card.loose_json")


@dataclass(frozen=True)
class ExtractionResult:
    parsed: Any
    raw_text: str       # the full candidate text, even when recovered from a substring
    keyword: str = ""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def parse_strict(text: str) -> Tuple[bool, Any]:
    """Return (True, value) if `text` is exactly one JSON document, else (False, None)."""
    try:
        return True, json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return False, None


def parse_loose(text: str) -> Tuple[bool, Any]:
    ok, value = parse_strict(text)
    if ok:
        return ok, value
    start, end = text.find("{"), text.rfind("}")
    if start == -1 or end <= start:
        return False, None
    ok, value = parse_strict(text[start:end + 1])
    if ok:
        logger.info("Recovered JSON from braces at %d..%d of %d chars", start, end, len(text))
    return ok, value


def _present(value: Any) -> bool:
    # null, false, 0 and "" carry no card; empty objects and arrays still count
    if isinstance(value, (dict, list)):
        return True
    return bool(value)


def recover(cands: Sequence[TextCandidate]) -> ExtractionResult:
    if not cands:
        raise NoEmbeddedData()
    for c in cands:
        ok, value = parse_loose(c.text)
        if ok and _present(value):
            return ExtractionResult(parsed=value, raw_text=c.text, keyword=c.keyword)
        logger.debug("candidate %r yielded no card (%d chars)", c.keyword, len(c.text))
    raise UnrecoverableData(cands[0].text)


__all__ = ["ExtractionResult", "parse_strict", "parse_loose", "recover"]
