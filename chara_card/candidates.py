# chara_card/candidates.py
from typing import List, Sequence

from .text import TextCandidate

CARD_KEYWORD = "chara"


def select_candidates(cands: Sequence[TextCandidate], keyword: str = CARD_KEYWORD) -> List[TextCandidate]:
    """
    Order the candidates the recovery parser should try.

    The last chunk whose keyword matches `keyword` (case-insensitive) wins on its own.
    Without any match every candidate is tried in file order; that fallback is a
    heuristic and may pick up unrelated metadata that happens to hold JSON.
    """
    wanted = keyword.lower()
    matches = [c for c in cands if c.keyword.lower() == wanted]
    if matches:
        return [matches[-1]]
    return list(cands)


__all__ = ["CARD_KEYWORD", "select_candidates"]
