import logging
import time
from typing import List, Optional

from app.domain.models.interaction import SEEN_ACTIONS
from app.domain.models.product import SimilarityEdge
from app.domain.repositories.interaction_repo import InteractionRepo

logger = logging.getLogger(__name__)


class HistoryFilter:
    """
    Drops candidates the session already viewed, carted or purchased.
    Fail-open: if the history lookup fails, candidates pass through unfiltered.
    """

    def __init__(self, interactions: Optional[InteractionRepo]):
        self.interactions = interactions

    async def exclude_seen(self, session_id: str, candidates: List[SimilarityEdge]) -> List[SimilarityEdge]:
        if not candidates:
            return []
        if self.interactions is None:
            return list(candidates)

        t0 = time.perf_counter()
        try:
            seen = await self.interactions.product_codes_for_session(session_id, SEEN_ACTIONS)
        except Exception as e:
            logger.warning("history lookup failed session=%s, returning unfiltered: %s", session_id, e)
            return list(candidates)

        kept = [c for c in candidates if c.target_code not in seen]
        logger.debug(
            "history filter session=%s seen=%s candidates=%s kept=%s time=%.3fs",
            session_id, len(seen), len(candidates), len(kept), time.perf_counter() - t0,
        )
        return kept
