# app/domain/repositories/interaction_repo.py

from __future__ import annotations
from typing import Iterable, Set
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.domain.models.interaction import InteractionAction, InteractionEvent


class InteractionRepo:
    """
    Append-only session action log backed by the 'user_interactions' collection:
      { session_id, product_code, action, created_at }
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "user_interactions"):
        self.col = db[collection_name]

    async def append(self, session_id: str, product_code: str, action: InteractionAction) -> None:
        event = InteractionEvent(session_id=session_id, product_code=product_code, action=action)
        await self.col.insert_one(event.to_document())

    async def product_codes_for_session(
        self,
        session_id: str,
        actions: Iterable[InteractionAction],
    ) -> Set[str]:
        """Distinct product codes the session touched with any of `actions`."""
        codes = await self.col.distinct(
            "product_code",
            {"session_id": session_id, "action": {"$in": [a.value for a in actions]}},
        )
        return set(codes or [])
