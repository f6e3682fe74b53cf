# app/api/v1/routers/orders.py
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Annotated, Optional
import time
import logging

from app.api.deps import catalog_dep, order_repo_dep
from app.api.v1.schemas.orders import (
    OrderCreatedOut,
    OrderIn,
    OrderListOut,
    OrderStatusIn,
    ProductSalesOut,
)
from app.domain.models.order import Order, OrderNotFoundError, OrderStatus
from app.domain.repositories.catalog_repo import Catalog
from app.domain.repositories.order_repo import OrderRepo
from app.domain.services.order_svc import (
    create_order_svc,
    list_orders_svc,
    product_sales_svc,
    update_order_status_svc,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["orders"])
admin_router = APIRouter(prefix="/admin", tags=["admin"])

RepoDep = Annotated[OrderRepo, Depends(order_repo_dep)]


@router.post("/orders", response_model=OrderCreatedOut)
async def create_order(payload: OrderIn, repo: RepoDep) -> OrderCreatedOut:
    logger.info("Request: create_order product_code=%s price=%s", payload.product_code, payload.product_price)
    t0 = time.perf_counter()
    try:
        order = await create_order_svc(repo, payload)
    except Exception:
        logger.exception("create_order failed product_code=%s", payload.product_code)
        raise HTTPException(status_code=500, detail="Order could not be created.")
    logger.info("Response: create_order order_code=%s elapsed_time=%.4fs", order.order_code, time.perf_counter() - t0)
    return OrderCreatedOut(order_code=order.order_code, order=order)


@admin_router.get("/orders", response_model=OrderListOut)
async def list_orders(
    repo: RepoDep,
    status: Optional[OrderStatus] = Query(None),
    q: Optional[str] = Query(None, description="Search customer name, phone or order code"),
) -> OrderListOut:
    orders = await list_orders_svc(repo, status=status, q=q)
    return OrderListOut(items=orders, count=len(orders))


@admin_router.patch("/orders/{order_code}/status", response_model=Order)
async def update_order_status(order_code: str, payload: OrderStatusIn, repo: RepoDep) -> Order:
    try:
        return await update_order_status_svc(repo, order_code, payload.status)
    except OrderNotFoundError:
        raise HTTPException(status_code=404, detail="Order not found.")


@admin_router.get("/products/stats", response_model=ProductSalesOut)
async def product_stats(repo: RepoDep, catalog: Catalog = Depends(catalog_dep)) -> ProductSalesOut:
    t0 = time.perf_counter()
    stats = await product_sales_svc(repo, catalog)
    logger.info("Response: product_stats count=%s elapsed_time=%.4fs", len(stats), time.perf_counter() - t0)
    return ProductSalesOut(items=stats, count=len(stats))
