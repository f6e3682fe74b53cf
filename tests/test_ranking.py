from app.domain.models.product import Recommendation
from app.domain.services.ranking import merge

from conftest import make_product


def rec(code, score):
    return Recommendation(product=make_product(code), score=score)


def test_duplicates_collapse_to_highest_score():
    merged = merge([[rec("X", 0.6), rec("Y", 0.5)], [rec("X", 0.9)]], limit=10)

    assert [(r.code, r.score) for r in merged] == [("X", 0.9), ("Y", 0.5)]


def test_lower_duplicate_does_not_replace():
    merged = merge([[rec("X", 0.9)], [rec("X", 0.2)]], limit=10)

    assert [(r.code, r.score) for r in merged] == [("X", 0.9)]


def test_equal_scores_keep_first_seen_order():
    merged = merge([[rec("B", 0.7), rec("A", 0.7)], [rec("C", 0.7), rec("B", 0.7)]], limit=10)

    assert [r.code for r in merged] == ["B", "A", "C"]


def test_truncates_to_limit():
    merged = merge([[rec(str(i), i / 10) for i in range(10)]], limit=3)

    assert [r.code for r in merged] == ["9", "8", "7"]


def test_non_positive_limit():
    assert merge([[rec("X", 0.5)]], limit=0) == []
    assert merge([[rec("X", 0.5)]], limit=-1) == []


def test_empty_input():
    assert merge([], limit=4) == []
    assert merge([[], []], limit=4) == []
