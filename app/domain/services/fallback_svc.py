import logging
from typing import List

from app.domain.models.product import Product, Recommendation
from app.domain.repositories.catalog_repo import Catalog
from app.domain.services.constants import (
    WEIGHT_SAME_COMPRESSION_OTHER_TYPE,
    WEIGHT_SHARED_CATEGORY_OTHER_COMPRESSION,
    WEIGHT_SAME_TYPE_OTHER_COMPRESSION,
)
from app.domain.services.ranking import merge

logger = logging.getLogger(__name__)


def _pool(products: List[Product], weight: float) -> List[Recommendation]:
    return [Recommendation(product=p, score=weight) for p in products]


def fallback_recommendations(catalog: Catalog, current_code: str, limit: int) -> List[Recommendation]:
    """
    Rule-based recommendations when the similarity table has nothing for `current_code`.

    Rules (fixed weights):
      A) same compression, different type            -> 0.85
      B) shared category, different compression      -> 0.70
      C) same type, different compression            -> 0.60

    A product matching several rules keeps its best weight (max, not sum).
    Ties keep pool order: A before B before C, catalog order inside a rule.
    Unknown product -> empty list.
    """
    current = catalog.find(current_code)
    if current is None:
        logger.info("fallback unknown product code=%s", current_code)
        return []

    others = [p for p in catalog.all() if p.code != current.code]

    same_compression = [
        p for p in others
        if p.compression == current.compression and p.type != current.type
    ]
    shared_category = [
        p for p in others
        if p.shares_category_with(current) and p.compression != current.compression
    ]
    same_type = [
        p for p in others
        if p.type == current.type and p.compression != current.compression
    ]

    items = merge(
        [
            _pool(same_compression, WEIGHT_SAME_COMPRESSION_OTHER_TYPE),
            _pool(shared_category, WEIGHT_SHARED_CATEGORY_OTHER_COMPRESSION),
            _pool(same_type, WEIGHT_SAME_TYPE_OTHER_COMPRESSION),
        ],
        limit,
    )
    logger.debug(
        "fallback code=%s pools=(A=%s, B=%s, C=%s) items=%s",
        current_code, len(same_compression), len(shared_category), len(same_type), len(items),
    )
    return items
