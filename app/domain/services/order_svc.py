import logging
import time
from datetime import datetime, timezone
from typing import List, Optional

from app.domain.models.order import Order, OrderNotFoundError, OrderStatus, ProductSales
from app.domain.repositories.catalog_repo import Catalog
from app.domain.repositories.order_repo import OrderRepo

logger = logging.getLogger(__name__)

# Stored field lengths; longer input is clipped, not rejected
FIELD_MAX_LENGTHS = {
    "customer_name": 100,
    "customer_lastname": 100,
    "customer_phone": 20,
    "customer_district": 100,
    "product_code": 20,
    "product_name": 200,
    "product_color": 50,
}

ORDER_CODE_PREFIX = "ORD"


def format_order_code(seq: int) -> str:
    return f"{ORDER_CODE_PREFIX}-{seq:06d}"


async def create_order_svc(repo: OrderRepo, payload) -> Order:
    """
    Create an order in status `received`.
    `payload` is a validated OrderIn (non-blank fields, price > 0).
    """
    t0 = time.perf_counter()
    fields = {
        name: str(getattr(payload, name)).strip()[:max_len]
        for name, max_len in FIELD_MAX_LENGTHS.items()
    }
    order_code = format_order_code(await repo.next_order_seq())

    order = Order(
        order_code=order_code,
        product_price=float(payload.product_price),
        status=OrderStatus.RECEIVED,
        created_at=datetime.now(timezone.utc),
        **fields,
    )
    await repo.insert(order)
    logger.info(
        "order created code=%s product=%s price=%.2f time=%.3fs",
        order_code, order.product_code, order.product_price, time.perf_counter() - t0,
    )
    return order


async def list_orders_svc(repo: OrderRepo, status: Optional[OrderStatus] = None, q: Optional[str] = None) -> List[Order]:
    q = (q or "").strip() or None
    orders = await repo.find_orders(status=status, q=q)
    logger.info("orders listed status=%s q=%s n=%s", status.value if status else None, q, len(orders))
    return orders


async def update_order_status_svc(repo: OrderRepo, order_code: str, status: OrderStatus) -> Order:
    order = await repo.update_status(order_code, status)
    if order is None:
        raise OrderNotFoundError(order_code)
    logger.info("order status updated code=%s status=%s", order_code, status.value)
    return order


async def product_sales_svc(repo: OrderRepo, catalog: Catalog) -> List[ProductSales]:
    """Order count per catalog product, best sellers first (catalog order on ties)."""
    counts = await repo.count_by_product_code()
    stats = [
        ProductSales(
            code=p.code,
            name=p.name,
            type=p.type.value,
            compression=p.compression,
            price_sale=p.price_sale,
            sales=counts.get(p.code, 0),
        )
        for p in catalog.all()
    ]
    stats.sort(key=lambda s: s.sales, reverse=True)
    return stats
