# api/v1/schemas/reco.py
from pydantic import BaseModel
from typing import List, Optional

from app.domain.models.product import Product, RecommendationResult


class ProductOut(BaseModel):
    code: str
    name: str
    type: str
    compression: str
    category: List[str]
    price_sale: float
    price_original: Optional[float] = None
    description: Optional[str] = None
    colors: List[str] = []
    image_url: Optional[str] = None

    @classmethod
    def from_product(cls, p: Product) -> "ProductOut":
        return cls(
            code=p.code,
            name=p.name,
            type=p.type.value,
            compression=p.compression,
            category=list(p.category),
            price_sale=p.price_sale,
            price_original=p.price_original,
            description=p.description,
            colors=list(p.colors),
            image_url=p.image_url,
        )


class RecoItemOut(ProductOut):
    score: float


class RecoResultOut(BaseModel):
    source_product_code: str
    items: List[RecoItemOut]
    count: int
    is_fallback: bool

    @classmethod
    def from_result(cls, res: RecommendationResult) -> "RecoResultOut":
        items = [
            RecoItemOut(**ProductOut.from_product(r.product).model_dump(), score=r.score)
            for r in res.items
        ]
        return cls(
            source_product_code=res.source_product_code,
            items=items,
            count=res.count,
            is_fallback=res.is_fallback,
        )


class ProductListOut(BaseModel):
    items: List[ProductOut]
    count: int
