# app/api/deps.py
from fastapi import Depends
from app.core.config import get_settings
from app.db.mongo import find_db, get_db
from app.db.redis import get_redis
from app.domain.repositories.catalog_repo import Catalog, get_catalog
from app.domain.repositories.interaction_repo import InteractionRepo
from app.domain.repositories.order_repo import OrderRepo
from app.domain.repositories.similarity_cache_repo import SimilarityCacheRepo
from app.domain.repositories.similarity_repo import SimilarityRepo
from app.domain.repositories.telemetry_repo import TelemetryRepo
from app.domain.services.recommendation_svc import RecommendationService

# Dependency for injecting the MongoDB database into endpoints/services
async def mongo_db(db = Depends(get_db)):
    return db

# Same, but None instead of failing when the client never came up
def optional_mongo_db():
    return find_db()

# Dependency for injecting the Redis client (None when disabled)
def redis_dep():
    return get_redis()

def catalog_dep() -> Catalog:
    return get_catalog()

def order_repo_dep(db = Depends(mongo_db)) -> OrderRepo:
    return OrderRepo(db)

def recommendation_service_dep(
    db = Depends(optional_mongo_db),
    redis = Depends(redis_dep),
    catalog: Catalog = Depends(catalog_dep),
) -> RecommendationService:
    # Built per request: repos are thin wrappers over shared clients
    settings = get_settings()
    if db is None:
        # no Mongo: the service only has the catalog, i.e. the fallback scorer
        return RecommendationService(
            catalog=catalog,
            similarity=None,
            interactions=None,
            telemetry=None,
            similarity_timeout_s=settings.similarity_timeout_s,
        )
    cache = SimilarityCacheRepo(redis, ttl=settings.similarity_cache_ttl) if redis is not None else None
    return RecommendationService(
        catalog=catalog,
        similarity=SimilarityRepo(db, cache=cache),
        interactions=InteractionRepo(db),
        telemetry=TelemetryRepo(db),
        similarity_timeout_s=settings.similarity_timeout_s,
    )
