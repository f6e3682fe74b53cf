from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional, List, Tuple


class ProductType(str, Enum):
    KNEE_HIGH = "knee-high"
    PANTY = "panty"
    THIGH_HIGH = "thigh-high"


class Product(BaseModel):
    code: str
    name: str
    type: ProductType
    compression: str                     # band label, e.g. "12-17 mmHg"
    category: Tuple[str, ...] = ()
    price_sale: float = Field(gt=0)
    price_original: Optional[float] = None
    description: Optional[str] = None
    colors: Tuple[str, ...] = ()
    image_url: Optional[str] = None

    model_config = {"frozen": True}  # immuable = safe

    def shares_category_with(self, other: "Product") -> bool:
        return bool(set(self.category) & set(other.category))


class SimilarityEdge(BaseModel):
    """Directed, precomputed edge read from the similarity store. Not symmetric."""
    source_code: str
    target_code: str
    score: float = Field(ge=0, le=1)
    model_config = {"frozen": True}


class Recommendation(BaseModel):
    product: Product
    score: float = Field(ge=0, le=1)
    model_config = {"frozen": True}

    @property
    def code(self) -> str:
        return self.product.code


class RecommendationResult(BaseModel):
    source_product_code: str
    items: List[Recommendation]
    count: int
    is_fallback: bool = False
    model_config = {"frozen": True}

    @classmethod
    def build(cls, source_product_code: str, items: List[Recommendation], *, is_fallback: bool) -> "RecommendationResult":
        return cls(
            source_product_code=source_product_code,
            items=items,
            count=len(items),
            is_fallback=is_fallback,
        )
