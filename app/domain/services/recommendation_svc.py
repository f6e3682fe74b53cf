import asyncio
import logging
import time
from typing import List, Optional

from app.domain.models.interaction import InteractionAction
from app.domain.models.product import Recommendation, RecommendationResult, SimilarityEdge
from app.domain.repositories.catalog_repo import Catalog
from app.domain.repositories.interaction_repo import InteractionRepo
from app.domain.repositories.similarity_repo import SimilarityRepo
from app.domain.repositories.telemetry_repo import TelemetryRepo
from app.domain.services.constants import (
    DEFAULT_LIMIT,
    SIMILARITY_OVERFETCH,
    FEATURE_RECOMMENDATIONS,
    OPERATION_KNN_QUERY,
    OPERATION_RULE_FALLBACK,
)
from app.domain.services.fallback_svc import fallback_recommendations
from app.domain.services.history_filter import HistoryFilter
from app.domain.services.ranking import merge
from app.utils.tasks import fire_and_forget

logger = logging.getLogger(__name__)


class RecommendationService:
    """
    "Customers also looked at" pipeline for a product page.

    High-level flow:
      1) Log a `view` interaction (background, never awaited).
      2) Query the precomputed similarity table for 2 x limit edges,
         bounded by `similarity_timeout_s`.
      3) No edges (empty, error or timeout) -> rule-based fallback scorer.
      4) Otherwise: drop what the session already saw, hydrate edges from the
         catalog (unknown targets are dropped), dedup and truncate.
      5) Log feature usage to telemetry (background, never awaited).

    Notes:
      - get_recommendations() never raises: any unexpected failure after the
        similarity query re-routes to the fallback scorer.
      - The fallback path is not history-filtered.
      - Session id is passed in by the caller; this class holds no session state.
      - A store given as None is unavailable: no edges, no history, no logging.
    """

    def __init__(
        self,
        *,
        catalog: Catalog,
        similarity: Optional[SimilarityRepo],
        interactions: Optional[InteractionRepo],
        telemetry: Optional[TelemetryRepo],
        similarity_timeout_s: Optional[float] = None,
    ):
        self.catalog = catalog
        self.similarity = similarity
        self.interactions = interactions
        self.telemetry = telemetry
        self.history = HistoryFilter(interactions)
        self.similarity_timeout_s = similarity_timeout_s

    # ---- public API --------------------------------------------------------

    async def get_recommendations(
        self,
        product_code: str,
        session_id: str,
        limit: int = DEFAULT_LIMIT,
    ) -> RecommendationResult:
        t0 = time.perf_counter()
        logger.info("recommend start code=%s session=%s limit=%s", product_code, session_id, limit)

        self._log_interaction(session_id, product_code, InteractionAction.VIEW)

        if limit <= 0:
            return RecommendationResult.build(product_code, [], is_fallback=False)

        try:
            edges = await self._query_similarity(product_code, limit * SIMILARITY_OVERFETCH)
            if not edges:
                result = self._fallback(product_code, limit)
            else:
                items = await self._hydrate(product_code, session_id, edges, limit)
                result = RecommendationResult.build(product_code, items, is_fallback=False)
        except Exception:
            logger.exception("recommend pipeline failed code=%s, using fallback", product_code)
            result = self._fallback(product_code, limit)

        self._log_consumption(product_code, result)
        logger.info(
            "recommend done code=%s items=%s fallback=%s total_time=%.3fs",
            product_code, result.count, result.is_fallback, time.perf_counter() - t0,
        )
        return result

    def record_click(self, product_code: str, session_id: str) -> None:
        """Best-effort: a recommended product was clicked."""
        self._log_interaction(session_id, product_code, InteractionAction.CLICK_RECOMMENDATION)

    # ---- pipeline steps ----------------------------------------------------

    async def _query_similarity(self, product_code: str, count: int) -> List[SimilarityEdge]:
        """Store errors and timeouts read as "no edges"; logs tell them apart."""
        if self.similarity is None:
            logger.warning("similarity store unavailable code=%s, using fallback", product_code)
            return []
        db_t0 = time.perf_counter()
        try:
            edges = await asyncio.wait_for(
                self.similarity.top_similar(product_code, count),
                timeout=self.similarity_timeout_s,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "similarity query timed out code=%s after %.2fs, using fallback",
                product_code, self.similarity_timeout_s,
            )
            return []
        except Exception as e:
            logger.warning("similarity query failed code=%s err=%s, using fallback", product_code, e)
            return []

        dt = time.perf_counter() - db_t0
        if not edges:
            logger.info("similarity no edges code=%s db_time=%.3fs", product_code, dt)
        else:
            logger.info("similarity edges code=%s n=%s db_time=%.3fs", product_code, len(edges), dt)
        return edges

    async def _hydrate(
        self,
        product_code: str,
        session_id: str,
        edges: List[SimilarityEdge],
        limit: int,
    ) -> List[Recommendation]:
        unseen = await self.history.exclude_seen(session_id, edges)

        items: List[Recommendation] = []
        for edge in unseen:
            if edge.target_code == product_code:
                continue
            product = self.catalog.find(edge.target_code)
            if product is None:
                logger.debug("similarity edge to unknown product dropped %s -> %s", product_code, edge.target_code)
                continue
            items.append(Recommendation(product=product, score=edge.score))

        return merge([items], limit)

    def _fallback(self, product_code: str, limit: int) -> RecommendationResult:
        try:
            items = fallback_recommendations(self.catalog, product_code, limit)
        except Exception:
            logger.exception("fallback scorer failed code=%s", product_code)
            items = []
        return RecommendationResult.build(product_code, items, is_fallback=True)

    # ---- side effects (fire-and-forget) ------------------------------------

    def _log_interaction(self, session_id: str, product_code: str, action: InteractionAction) -> None:
        if self.interactions is None:
            logger.debug("interaction store unavailable, %s not logged code=%s", action.value, product_code)
            return
        fire_and_forget(
            self.interactions.append(session_id, product_code, action),
            name=f"interaction:{action.value}:{product_code}",
        )

    def _log_consumption(self, product_code: str, result: RecommendationResult) -> None:
        if self.telemetry is None:
            return
        operation = OPERATION_RULE_FALLBACK if result.is_fallback else OPERATION_KNN_QUERY
        fire_and_forget(
            self.telemetry.record(
                FEATURE_RECOMMENDATIONS,
                operation,
                {
                    "product_code": product_code,
                    "recommendations_count": result.count,
                    "is_fallback": result.is_fallback,
                },
            ),
            name=f"telemetry:{operation}:{product_code}",
        )
