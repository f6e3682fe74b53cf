import fakeredis
import pytest

from app.domain.repositories.similarity_cache_repo import SimilarityCacheRepo
from app.domain.repositories.similarity_repo import SimilarityRepo


class BrokenRedis:
    async def get(self, key):
        raise ConnectionError("redis down")

    async def set(self, key, value, ex=None):
        raise ConnectionError("redis down")


@pytest.fixture
def redis():
    return fakeredis.FakeAsyncRedis(decode_responses=True)


async def _seed(db):
    await db["product_similarity"].insert_many([
        {"product_id_1": "A", "product_id_2": "B", "similarity_score": 0.8},
        {"product_id_1": "A", "product_id_2": "C", "similarity_score": 0.6},
    ])


async def test_cached_edges_are_served_without_the_store(mongo_db, redis):
    await _seed(mongo_db)
    repo = SimilarityRepo(mongo_db, cache=SimilarityCacheRepo(redis, ttl=60))

    first = await repo.top_similar("A", 8)
    await mongo_db["product_similarity"].delete_many({})
    second = await repo.top_similar("A", 8)

    assert [e.target_code for e in first] == ["B", "C"]
    assert second == first
    assert await redis.ttl("sim:A:8") > 0


async def test_empty_results_are_not_cached(mongo_db, redis):
    repo = SimilarityRepo(mongo_db, cache=SimilarityCacheRepo(redis, ttl=60))

    assert await repo.top_similar("A", 8) == []
    await _seed(mongo_db)

    assert [e.target_code for e in await repo.top_similar("A", 8)] == ["B", "C"]


async def test_cache_key_includes_count(mongo_db, redis):
    await _seed(mongo_db)
    repo = SimilarityRepo(mongo_db, cache=SimilarityCacheRepo(redis, ttl=60))

    assert len(await repo.top_similar("A", 1)) == 1
    assert len(await repo.top_similar("A", 8)) == 2


async def test_redis_errors_fall_through_to_the_store(mongo_db):
    await _seed(mongo_db)
    repo = SimilarityRepo(mongo_db, cache=SimilarityCacheRepo(BrokenRedis(), ttl=60))

    edges = await repo.top_similar("A", 8)

    assert [e.target_code for e in edges] == ["B", "C"]


async def test_corrupt_entry_is_a_miss(redis):
    cache = SimilarityCacheRepo(redis, ttl=60)
    await redis.set(cache.key("A", 8), "not json")

    assert await cache.get("A", 8) is None
