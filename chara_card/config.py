from dataclasses import dataclass
import logging
import os
from dotenv import load_dotenv, find_dotenv
load_dotenv(find_dotenv(filename=".env", usecwd=True))

from .candidates import CARD_KEYWORD


@dataclass(frozen=True)
class Settings:
    log_level: int
    json_indent: int
    keyword: str

def load_settings() -> Settings:
    bad = []
    level_name = os.getenv("CHARA_CARD_LOG_LEVEL", "WARNING").strip().upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        bad.append("CHARA_CARD_LOG_LEVEL")
        level = logging.WARNING
    try:
        indent = int(os.getenv("CHARA_CARD_JSON_INDENT", "2"))
        if indent < 0: raise ValueError(indent)
    except ValueError:
        bad.append("CHARA_CARD_JSON_INDENT")
        indent = 2
    keyword = os.getenv("CHARA_CARD_KEYWORD", CARD_KEYWORD).strip()
    if not keyword:
        bad.append("CHARA_CARD_KEYWORD")
    if bad:
        raise ValueError(f"Invalid env vars: {', '.join(bad)}")
    return Settings(log_level=level, json_indent=indent, keyword=keyword)
