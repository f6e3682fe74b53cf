from app.domain.models.interaction import InteractionAction
from app.domain.models.product import SimilarityEdge
from app.domain.services.history_filter import HistoryFilter

from conftest import FakeInteractionRepo


def edges(*targets):
    return [SimilarityEdge(source_code="A", target_code=t, score=0.5) for t in targets]


async def test_excludes_products_seen_by_session():
    repo = FakeInteractionRepo(history={"s1": {"D"}, "s2": {"E"}})

    kept = await HistoryFilter(repo).exclude_seen("s1", edges("D", "E"))

    assert [e.target_code for e in kept] == ["E"]


async def test_queries_view_cart_and_purchase_actions():
    repo = FakeInteractionRepo()

    await HistoryFilter(repo).exclude_seen("s1", edges("D"))

    assert repo.history_calls == [("s1", frozenset({
        InteractionAction.VIEW,
        InteractionAction.ADD_TO_CART,
        InteractionAction.PURCHASE,
    }))]


async def test_history_failure_is_fail_open():
    repo = FakeInteractionRepo(history={"s1": {"D"}}, fail_history=True)

    kept = await HistoryFilter(repo).exclude_seen("s1", edges("D", "E"))

    assert [e.target_code for e in kept] == ["D", "E"]


async def test_empty_candidates_skip_history_lookup():
    repo = FakeInteractionRepo()

    assert await HistoryFilter(repo).exclude_seen("s1", []) == []
    assert repo.history_calls == []
