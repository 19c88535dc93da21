import math
import re
from typing import Any

_slug_re = re.compile(r"[^a-z0-9]+")
def slugify(value: str, sep: str = "_") -> str:
    v = value.strip().lower()
    v = _slug_re.sub(sep, v)
    return v.strip(sep)

def json_safe(value: Any) -> Any:
    """Replace inf/nan floats with None so the value serializes as standard JSON."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: json_safe(v) for k, v in value.items()}
    if isinstance(value, list):
        return [json_safe(v) for v in value]
    return value
