# app/api/v1/routers/products.py

from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional

from app.api.deps import catalog_dep
from app.api.v1.schemas.reco import ProductListOut, ProductOut
from app.domain.models.product import ProductType
from app.domain.repositories.catalog_repo import Catalog

import logging
logger = logging.getLogger(__name__)

router = APIRouter(tags=["products"])


@router.get("/products", response_model=ProductListOut)
async def list_products(
    type: Optional[ProductType] = Query(None, description="knee-high | panty | thigh-high"),
    compression: Optional[str] = Query(None, description='Compression band, e.g. "18-22 mmHg"'),
    category: Optional[str] = Query(None, description="Category tag"),
    catalog: Catalog = Depends(catalog_dep),
) -> ProductListOut:
    """Catalog listing in catalog order, with optional exact-match filters."""
    products = catalog.all()
    if type is not None:
        products = [p for p in products if p.type == type]
    if compression:
        products = [p for p in products if p.compression == compression]
    if category:
        products = [p for p in products if category in p.category]

    logger.info("Response: list_products type=%s compression=%s category=%s count=%s",
                type.value if type else None, compression, category, len(products))
    items = [ProductOut.from_product(p) for p in products]
    return ProductListOut(items=items, count=len(items))


@router.get("/products/{product_code}", response_model=ProductOut)
async def get_product(product_code: str, catalog: Catalog = Depends(catalog_dep)) -> ProductOut:
    product = catalog.find(product_code)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found.")
    return ProductOut.from_product(product)
