# chara_card/extract.py
from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterator, List, Tuple, Union

from .candidates import CARD_KEYWORD, select_candidates
from .chunks import iter_chunks
from .errors import CardExtractionError, NoEmbeddedData
from .loose_json import ExtractionResult, recover
from .text import decode_text_chunks

logger = logging.getLogger("chara_card.extract")


def extract_card(data: bytes, keyword: str = CARD_KEYWORD) -> ExtractionResult:
    """Recover the JSON card embedded in PNG bytes.

    Raises NotAContainer, TruncatedChunk, NoEmbeddedData or UnrecoverableData.
    """
    texts = list(decode_text_chunks(iter_chunks(data)))
    if not texts:
        raise NoEmbeddedData()
    ordered = select_candidates(texts, keyword)
    logger.debug(
        "%d textual chunk(s), trying %d: %s",
        len(texts), len(ordered), [c.keyword for c in ordered],
    )
    return recover(ordered)


def extract_card_file(path: Union[str, Path], keyword: str = CARD_KEYWORD) -> ExtractionResult:
    p = Path(path)
    logger.info("Reading %s", p)
    return extract_card(p.read_bytes(), keyword)


ScanOutcome = Union[ExtractionResult, CardExtractionError, OSError]


def find_pngs(root: Union[str, Path]) -> List[Path]:
    return sorted(p for p in Path(root).rglob("*") if p.is_file() and p.suffix.lower() == ".png")


def scan_directory(root: Union[str, Path], keyword: str = CARD_KEYWORD) -> Iterator[Tuple[Path, ScanOutcome]]:
    """Extract every PNG under `root`, yielding per-file errors instead of raising them."""
    for path in find_pngs(root):
        try:
            yield path, extract_card_file(path, keyword)
        except (CardExtractionError, OSError) as e:
            logger.warning("Skipping %s: %s", path, e)
            yield path, e


__all__ = ["extract_card", "extract_card_file", "find_pngs", "scan_directory"]
