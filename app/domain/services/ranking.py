from typing import Dict, Iterable, List

from app.domain.models.product import Recommendation


def merge(lists: Iterable[Iterable[Recommendation]], limit: int) -> List[Recommendation]:
    """
    Merge candidate lists into one ranked list.
    - Dedup key is the product code; the higher score wins.
    - On equal scores the first occurrence wins and keeps its position.
    - Sort is stable, so ties keep enumeration order.
    """
    if limit <= 0:
        return []

    best: Dict[str, Recommendation] = {}
    for candidates in lists:
        for rec in candidates:
            current = best.get(rec.code)
            if current is None or rec.score > current.score:
                best[rec.code] = rec  # dict keeps the original insertion slot

    ranked = sorted(best.values(), key=lambda r: r.score, reverse=True)
    return ranked[:limit]
