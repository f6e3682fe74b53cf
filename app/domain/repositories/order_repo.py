# app/domain/repositories/order_repo.py

from __future__ import annotations
from typing import Dict, List, Optional
import re
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from app.domain.models.order import Order, OrderStatus


class OrderRepo:
    """
    Orders backed by the 'orders' collection, plus a sequence document in
    'counters' used to mint human-readable order codes.
    """

    ORDER_CODE_SEQ = "order_code"

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "orders"):
        self.col = db[collection_name]
        self.counters = db["counters"]

    async def next_order_seq(self) -> int:
        doc = await self.counters.find_one_and_update(
            {"_id": self.ORDER_CODE_SEQ},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return int(doc["seq"])

    async def insert(self, order: Order) -> None:
        doc = order.model_dump(mode="python")
        doc["status"] = order.status.value
        await self.col.insert_one(doc)

    async def get(self, order_code: str) -> Optional[Order]:
        doc = await self.col.find_one({"order_code": order_code}, {"_id": 0})
        return Order.model_validate(doc) if doc else None

    async def find_orders(self, status: Optional[OrderStatus] = None, q: Optional[str] = None) -> List[Order]:
        """Newest first; `q` is a case-insensitive substring over customer fields and order code."""
        query: Dict = {}
        if status is not None:
            query["status"] = status.value
        if q:
            rx = {"$regex": re.escape(q), "$options": "i"}
            query["$or"] = [
                {"customer_name": rx},
                {"customer_lastname": rx},
                {"customer_phone": rx},
                {"order_code": rx},
            ]
        cursor = self.col.find(query, {"_id": 0}).sort("created_at", -1)
        docs = await cursor.to_list(length=None)
        return [Order.model_validate(d) for d in docs]

    async def update_status(self, order_code: str, status: OrderStatus) -> Optional[Order]:
        doc = await self.col.find_one_and_update(
            {"order_code": order_code},
            {"$set": {"status": status.value}},
            projection={"_id": 0},
            return_document=ReturnDocument.AFTER,
        )
        return Order.model_validate(doc) if doc else None

    async def count_by_product_code(self) -> Dict[str, int]:
        pipeline = [
            {"$group": {"_id": "$product_code", "n": {"$sum": 1}}},
        ]
        docs = await self.col.aggregate(pipeline).to_list(length=None)
        return {d["_id"]: int(d["n"]) for d in docs if d.get("_id")}
