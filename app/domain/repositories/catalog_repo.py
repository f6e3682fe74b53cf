# app/domain/repositories/catalog_repo.py

from __future__ import annotations
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Optional
import json
import logging

from app.core.config import get_settings
from app.domain.models.product import Product

logger = logging.getLogger(__name__)


class Catalog:
    """
    Read-only product catalog, indexed by code.
    Keeps the file order: the fallback scorer relies on it for tie-breaks.
    """

    def __init__(self, products: Iterable[Product]):
        self._products: List[Product] = list(products)
        self._by_code: Dict[str, Product] = {}
        for p in self._products:
            if p.code in self._by_code:
                raise ValueError(f"Duplicate product code in catalog: {p.code}")
            self._by_code[p.code] = p

    @classmethod
    def from_json_file(cls, path: str | Path) -> "Catalog":
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls(Product.model_validate(doc) for doc in raw)

    def find(self, code: str) -> Optional[Product]:
        return self._by_code.get(code)

    def all(self) -> List[Product]:
        return list(self._products)

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, code: object) -> bool:
        return code in self._by_code


@lru_cache
def get_catalog() -> Catalog:
    settings = get_settings()
    catalog = Catalog.from_json_file(settings.CATALOG_PATH)
    logger.info("Catalog loaded path=%s products=%s", settings.CATALOG_PATH, len(catalog))
    return catalog
