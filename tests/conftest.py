import asyncio
import os
from typing import Dict, List, Optional, Set

# Settings are read at import time by app modules
os.environ.setdefault("APP_ENV", "development")
os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")
os.environ.setdefault("MONGO_DB", "storefront_test")
os.environ.setdefault("MONGO_TLS", "false")
os.environ.setdefault("REDIS_URL", "")

import pytest
from mongomock_motor import AsyncMongoMockClient

from app.domain.models.interaction import InteractionAction
from app.domain.models.product import Product, ProductType, SimilarityEdge
from app.domain.repositories.catalog_repo import Catalog
from app.domain.services.recommendation_svc import RecommendationService
from app.utils import tasks


def make_product(code, type=ProductType.KNEE_HIGH, compression="12-17 mmHg", category=(), price=50.0) -> Product:
    return Product(
        code=code,
        name=f"Product {code}",
        type=type,
        compression=compression,
        category=tuple(category),
        price_sale=price,
    )


# --- in-memory stand-ins for the external stores ------------------------------

class FakeSimilarityRepo:
    def __init__(self, edges: Optional[Dict[str, List[tuple]]] = None, error: Optional[Exception] = None, delay: float = 0):
        self.edges = edges or {}
        self.error = error
        self.delay = delay
        self.calls: List[tuple] = []

    async def top_similar(self, source_code: str, count: int) -> List[SimilarityEdge]:
        self.calls.append((source_code, count))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        rows = sorted(self.edges.get(source_code, []), key=lambda r: r[1], reverse=True)[:count]
        return [SimilarityEdge(source_code=source_code, target_code=t, score=s) for t, s in rows]


class FakeInteractionRepo:
    def __init__(
        self,
        history: Optional[Dict[str, Set[str]]] = None,
        fail_append: bool = False,
        fail_history: bool = False,
        delay: float = 0,
    ):
        self.history = history or {}
        self.delay = delay
        self.fail_append = fail_append
        self.fail_history = fail_history
        self.events: List[tuple] = []
        self.history_calls: List[tuple] = []

    async def append(self, session_id: str, product_code: str, action: InteractionAction) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_append:
            raise ConnectionError("interaction store unreachable")
        self.events.append((session_id, product_code, action))

    async def product_codes_for_session(self, session_id, actions) -> Set[str]:
        self.history_calls.append((session_id, frozenset(actions)))
        if self.fail_history:
            raise ConnectionError("interaction store unreachable")
        return set(self.history.get(session_id, set()))


class FakeTelemetryRepo:
    def __init__(self, fail: bool = False, delay: float = 0):
        self.fail = fail
        self.delay = delay
        self.records: List[tuple] = []

    async def record(self, feature, operation_type, metadata=None, **kw) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise ConnectionError("telemetry sink unreachable")
        self.records.append((feature, operation_type, metadata))


# --- fixtures -----------------------------------------------------------------

@pytest.fixture
def catalog() -> Catalog:
    return Catalog([
        make_product("A", ProductType.KNEE_HIGH, "12-17 mmHg"),
        make_product("B", ProductType.PANTY, "12-17 mmHg"),
        make_product("C", ProductType.KNEE_HIGH, "18-22 mmHg"),
        make_product("D", ProductType.THIGH_HIGH, "18-22 mmHg"),
        make_product("E", ProductType.PANTY, "20-30 mmHg"),
        make_product("F", ProductType.THIGH_HIGH, "20-30 mmHg"),
    ])


@pytest.fixture
def make_service(catalog):
    def _make(similarity=None, interactions=None, telemetry=None, timeout=1.0):
        return RecommendationService(
            catalog=catalog,
            similarity=similarity or FakeSimilarityRepo(),
            interactions=interactions or FakeInteractionRepo(),
            telemetry=telemetry or FakeTelemetryRepo(),
            similarity_timeout_s=timeout,
        )
    return _make


@pytest.fixture
async def drain_tasks():
    """Await fire-and-forget writes so tests can assert on them."""
    async def _drain():
        await tasks.drain(timeout=1.0)
    yield _drain
    await tasks.drain(timeout=1.0)


@pytest.fixture
def mongo_db():
    return AsyncMongoMockClient()["storefront_test"]
