# chara_card/normalize.py
from __future__ import annotations
import datetime as dt
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from .util import slugify

NAME_PATHS = (("name",), ("character",), ("title",), ("data", "name"))
FIRST_MES_PATHS = (
    ("data", "first_mes"),
    ("spec", "first_mes"),
    ("card", "first_mes"),
    ("first_mes",),
    ("prompt",),
)
BEHAVIOR_PATHS = (("description",), ("system_prompt",), ("behavior",), ("data", "description"))
LINKS_PATHS = (("links",), ("data", "links"))


def _s(x: Any) -> str:
    if x is None: return ""
    return x if isinstance(x, str) else str(x)

def _dig(obj: Any, path: Sequence[str]) -> Any:
    for key in path:
        if not isinstance(obj, dict):
            return None
        obj = obj.get(key)
    return obj

def _first(obj: Any, paths) -> str:
    for path in paths:
        v = _dig(obj, path)
        if v is not None:
            return _s(v)
    return ""

def _links(obj: Any) -> List[Any]:
    for path in LINKS_PATHS:
        v = _dig(obj, path)
        if isinstance(v, list):
            return v
    return []

def card_id(parsed: Any, name: str) -> str:
    own = parsed.get("id") if isinstance(parsed, dict) else None
    if own:
        return _s(own)
    return "v2_" + slugify(name) if name else ""

def card_summary(parsed: Any) -> Dict[str, Any]:
    """
    Display fields for listings. Looks in the places different card generations put them;
    no schema checks, anything missing becomes "" (or 0 links).
    """
    name = _first(parsed, NAME_PATHS)
    return {
        "id": card_id(parsed, name),
        "name": name,
        "first_mes": _first(parsed, FIRST_MES_PATHS),
        "behavior": _first(parsed, BEHAVIOR_PATHS),
        "links_count": len(_links(parsed)),
    }

def build_manifest(root: Path, outcomes: Iterable[Tuple[Path, Any]]) -> Dict[str, Any]:
    """
    Manifest of a directory scan: one item per recovered card, one error per failed file.
    Paths are relative to `root`. Keys follow the card indexer's manifest format.
    """
    items, errors = [], []
    for path, outcome in outcomes:
        rel = path.relative_to(root).as_posix()
        if isinstance(outcome, Exception):
            errors.append({"path": rel, "kind": type(outcome).__name__, "error": str(outcome)})
            continue
        s = card_summary(outcome.parsed)
        items.append({
            "path": rel,
            "type": "png",
            "id": s["id"],
            "name": s["name"],
            "first_mes": s["first_mes"],
            "behavior": s["behavior"],
            "linksCount": s["links_count"],
        })
    generated = dt.datetime.now(dt.timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return {"generatedAt": generated, "count": len(items), "items": items, "errors": errors}


__all__ = ["card_id", "card_summary", "build_manifest"]
