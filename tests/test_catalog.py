import json

import pytest

from app.core.config import DEFAULT_CATALOG_PATH
from app.domain.models.product import ProductType
from app.domain.repositories.catalog_repo import Catalog, get_catalog

from conftest import make_product


def test_packaged_catalog_loads():
    catalog = get_catalog()

    assert len(catalog) > 0
    assert {p.type for p in catalog.all()} == set(ProductType)
    for p in catalog.all():
        assert p.compression.endswith("mmHg")
        assert p.price_sale > 0


def test_find_exact_code():
    catalog = Catalog([make_product("A"), make_product("B")])

    assert catalog.find("B").code == "B"
    assert catalog.find("b") is None
    assert catalog.find("") is None
    assert "A" in catalog


def test_all_keeps_file_order():
    catalog = Catalog([make_product("Z"), make_product("A"), make_product("M")])

    assert [p.code for p in catalog.all()] == ["Z", "A", "M"]


def test_duplicate_codes_are_rejected():
    with pytest.raises(ValueError):
        Catalog([make_product("A"), make_product("A")])


def test_from_json_file(tmp_path):
    path = tmp_path / "products.json"
    path.write_text(json.dumps([
        {"code": "X1", "name": "Media", "type": "thigh-high", "compression": "20-30 mmHg",
         "category": ["post-surgery"], "price_sale": 10.5},
    ]), encoding="utf-8")

    catalog = Catalog.from_json_file(path)

    product = catalog.find("X1")
    assert product.type == ProductType.THIGH_HIGH
    assert product.category == ("post-surgery",)


def test_default_path_points_at_packaged_file():
    assert DEFAULT_CATALOG_PATH.endswith("products.json")
