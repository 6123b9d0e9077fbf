import math

from ideas_pusher.ranking import blend_key, idea_score, rank_ideas
from ideas_pusher.types import NormalizedRow


def _rows() -> list[NormalizedRow]:
    return [
        NormalizedRow("BTC", 2e9, 5.0),
        NormalizedRow("DOGE", 5e7, -12.0),
        NormalizedRow("XYZ", 5e6, 50.0),
    ]


def test_worked_example() -> None:
    ideas = rank_ideas(_rows(), min_liquidity=1e7, top_n=2)

    assert [i.symbol for i in ideas] == ["BTC", "DOGE"]
    assert [i.rank for i in ideas] == [1, 2]
    assert [i.side for i in ideas] == ["long", "short"]
    assert [i.score for i in ideas] == [65.0, 72.0]
    assert all(i.ttl_sec == 900 for i in ideas)


def test_filters_illiquid_and_non_finite_rows() -> None:
    rows = [
        NormalizedRow("A", math.nan, 1.0),
        NormalizedRow("B", math.inf, 1.0),
        NormalizedRow("C", 9_999_999.0, 1.0),
        NormalizedRow("D", 10_000_000.0, 1.0),
        NormalizedRow("E", 20_000_000.0, math.nan),
    ]
    ideas = rank_ideas(rows)
    assert [i.symbol for i in ideas] == ["D"]


def test_length_is_min_of_top_n_and_liquid_rows() -> None:
    rows = [NormalizedRow(f"S{i}", 1e7 + i, float(i)) for i in range(15)]
    assert len(rank_ideas(rows)) == 10
    assert len(rank_ideas(rows, top_n=20)) == 15
    assert rank_ideas(rows, top_n=0) == []


def test_ranks_are_dense_and_order_follows_blend_key() -> None:
    rows = [
        NormalizedRow("A", 3e7, 1.0),
        NormalizedRow("B", 1e7, 45.0),
        NormalizedRow("C", 8e7, -0.5),
        NormalizedRow("D", 2e7, -20.0),
    ]
    by_symbol = {r.symbol: r for r in rows}
    ideas = rank_ideas(rows, top_n=10, ttl_sec=60)

    assert [i.rank for i in ideas] == list(range(1, len(ideas) + 1))
    keys = [blend_key(by_symbol[i.symbol]) for i in ideas]
    assert keys == sorted(keys, reverse=True)
    assert all(i.ttl_sec == 60 for i in ideas)


def test_side_follows_sign_of_change() -> None:
    rows = [NormalizedRow("UP", 2e7, 0.0), NormalizedRow("DOWN", 2e7, -0.1)]
    sides = {i.symbol: i.side for i in rank_ideas(rows)}
    assert sides == {"UP": "long", "DOWN": "short"}


def test_score_bounds() -> None:
    assert idea_score(0.0) == 60.0
    assert idea_score(-40.0) == 100.0
    assert idea_score(250.0) == 100.0
    assert 60.0 < idea_score(0.01) < 100.0
    assert idea_score(39.9) < 100.0
