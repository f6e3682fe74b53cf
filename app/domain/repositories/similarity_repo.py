# app/domain/repositories/similarity_repo.py

from __future__ import annotations
from typing import List, Optional
import logging
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.domain.models.product import SimilarityEdge
from app.domain.repositories.similarity_cache_repo import SimilarityCacheRepo

logger = logging.getLogger(__name__)


class SimilarityRepo:
    """
    Read-only adapter over the precomputed 'product_similarity' collection:
      { product_id_1: <source code>, product_id_2: <target code>, similarity_score: float }
    Edges are directed. Errors are not caught here: the recommendation
    service decides how to degrade.
    """

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        cache: Optional[SimilarityCacheRepo] = None,
        collection_name: str = "product_similarity",
    ):
        self.col = db[collection_name]
        self.cache = cache

    async def top_similar(self, source_code: str, count: int) -> List[SimilarityEdge]:
        """
        Return up to `count` outgoing edges of `source_code`, best score first.
        Served from the Redis edge cache when available.
        """
        if count <= 0:
            return []

        if self.cache is not None:
            if (cached := await self.cache.get(source_code, count)) is not None:
                logger.debug("similarity cache hit source=%s count=%s", source_code, count)
                return cached

        cursor = (
            self.col.find(
                {"product_id_1": source_code},
                {"_id": 0, "product_id_2": 1, "similarity_score": 1},
            )
            .sort("similarity_score", -1)
            .limit(count)
        )
        docs = await cursor.to_list(length=count)
        edges = [
            SimilarityEdge(
                source_code=source_code,
                target_code=doc["product_id_2"],
                score=float(doc["similarity_score"]),
            )
            for doc in docs
        ]

        if edges and self.cache is not None:
            await self.cache.set(source_code, count, edges)
        return edges
