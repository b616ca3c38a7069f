"""Unit tests for bulk rank generation."""

from __future__ import annotations

import itertools

import pytest

from kanban_api.logic.rank import parse
from kanban_api.logic.rank_seeder import iter_sequence, rebalance, sequence, spread


def test_sequence_starts_at_middle_and_ascends():
    ranks = sequence(5)
    assert [r.format() for r in ranks[:3]] == ["0|hzzzzz:", "0|i00007:", "0|i0000f:"]
    assert ranks == sorted(ranks)
    assert len(set(ranks)) == 5


def test_sequence_from_explicit_start():
    start = parse("1|100000:")
    ranks = sequence(3, start)
    assert ranks[0] == start
    assert all(r.bucket == 1 for r in ranks)


def test_sequence_edge_counts():
    assert sequence(0) == []
    with pytest.raises(ValueError):
        sequence(-1)


def test_iter_sequence_is_lazy_and_unbounded():
    ranks = list(itertools.islice(iter_sequence(), 100))
    assert ranks == sorted(ranks)
    assert len(set(ranks)) == 100


def test_rebalance_moves_ids_to_next_bucket_in_order():
    assignments = rebalance(["a", "b", "c"], current_bucket=0)
    assert [item_id for item_id, _ in assignments] == ["a", "b", "c"]
    ranks = [rank for _, rank in assignments]
    assert ranks == sorted(ranks)
    assert {r.bucket for r in ranks} == {1}


def test_rebalance_wraps_from_last_bucket():
    assignments = rebalance(["x"], current_bucket=2)
    assert assignments[0][1].bucket == 0
    assert rebalance([]) == []


def test_spread_keeps_the_requested_bucket():
    assert [r.bucket for r in spread(2, 2)] == [2, 2]
