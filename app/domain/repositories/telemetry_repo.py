from datetime import datetime, timezone
from typing import Any, Dict, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase


class TelemetryRepo:
    """
    Feature-usage accounting sink ('ai_consumption_logs').
    Write-only from this service; nothing here reads it back.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "ai_consumption_logs"):
        self.col = db[collection_name]

    async def record(
        self,
        feature: str,
        operation_type: str,
        metadata: Optional[Dict[str, Any]] = None,
        *,
        tokens_used: int = 0,
        api_calls: int = 1,
        cost_usd: float = 0.0,
    ) -> None:
        await self.col.insert_one({
            "feature": feature,
            "operation_type": operation_type,
            "tokens_used": tokens_used,
            "api_calls": api_calls,
            "cost_usd": cost_usd,
            "metadata": metadata or {},
            "created_at": datetime.now(timezone.utc),
        })
