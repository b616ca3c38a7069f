"""Unit tests for rank token generation, parsing and ordering."""

from __future__ import annotations

import pytest

from kanban_api.logic.rank import RankValue, between, gen_next, gen_prev, middle, parse, spread


def test_middle_is_canonical_start():
    assert middle().format() == "0|hzzzzz:"
    assert middle(2).format() == "2|hzzzzz:"


def test_gen_next_and_gen_prev_step_by_eight():
    assert gen_next(middle()).format() == "0|i00007:"
    assert gen_prev(middle()).format() == "0|hzzzzr:"


def test_gen_next_from_fraction_rounds_up_first():
    rank = parse("0|i00000:i")
    assert gen_next(rank).format() == "0|i00009:"
    assert gen_prev(rank).format() == "0|hzzzzs:"


def test_extreme_ranks_jump_to_initial_bounds():
    assert gen_next(parse("0|000000:")).format() == "0|100000:"
    assert gen_prev(parse("0|zzzzzz:")).format() == "0|y00000:"


def test_gen_prev_near_minimum_stays_above_zero():
    rank = parse("0|000005:")
    prev = gen_prev(rank)
    assert parse("0|000000:") < prev < rank


def test_gen_next_near_maximum_stays_below_max():
    rank = parse("0|zzzzzx:")
    nxt = gen_next(rank)
    assert rank < nxt < parse("0|zzzzzz:")


def test_between_picks_short_midpoint():
    assert between(middle(), gen_next(middle())).format() == "0|i00003:"


def test_between_adjacent_integers_adds_one_digit():
    left, right = parse("0|i00000:"), parse("0|i00001:")
    mid = between(left, right)
    assert mid.format() == "0|i00000:i"
    assert left < mid < right


def test_between_is_strict_under_repeated_halving():
    left, right = parse("0|i00000:"), parse("0|i00001:")
    for _ in range(40):
        mid = between(left, right)
        assert left < mid < right
        right = mid
    assert len(right.format()) > len("0|i00000:")


def test_between_rejects_unordered_or_cross_bucket_input():
    with pytest.raises(ValueError):
        between(gen_next(middle()), middle())
    with pytest.raises(ValueError):
        between(middle(), middle())
    with pytest.raises(ValueError):
        between(middle(0), gen_next(middle(1)))


def test_extremes_cannot_be_exceeded():
    with pytest.raises(ValueError):
        gen_next(parse("0|zzzzzz:"))
    with pytest.raises(ValueError):
        gen_prev(parse("0|000000:"))


def test_parse_and_format_preserve_token():
    for token in ("0|hzzzzz:", "1|i00000:i", "2|000001:0a1"):
        assert parse(token).format() == token
        assert str(parse(token)) == token


def test_parse_drops_trailing_fraction_zeros():
    assert parse("0|i00000:i0").format() == "0|i00000:i"
    assert parse("0|i00000:i0") == parse("0|i00000:i")


@pytest.mark.parametrize(
    "token",
    ["", "3|000000:", "0|abc:", "0|i00000", "0|I00000:", "0|i00000:-", "0-i00000:"],
)
def test_parse_rejects_malformed_tokens(token):
    with pytest.raises(ValueError):
        parse(token)


def test_ordering_agrees_with_string_order_within_bucket():
    ranks = [parse(t) for t in ("0|100000:", "0|hzzzzz:", "0|hzzzzz:1", "0|i00000:", "0|i00000:0z")]
    assert sorted(ranks) == ranks
    assert sorted(r.format() for r in ranks) == [r.format() for r in ranks]


def test_bucket_orders_before_decimal():
    assert parse("0|zzzzzz:") < parse("1|000000:")


def test_rank_values_are_hashable_and_equal_by_value():
    assert {parse("0|hzzzzz:"), middle()} == {middle()}


def test_invalid_bucket_is_rejected():
    with pytest.raises(ValueError):
        RankValue(3, middle().decimal)


def test_is_long_compares_serialized_length():
    rank = parse("0|i00000:iiii")
    assert rank.is_long(12)
    assert not rank.is_long(13)


def test_in_next_bucket_rotates():
    assert middle(0).in_next_bucket().bucket == 1
    assert middle(2).in_next_bucket().bucket == 0


def test_spread_returns_ascending_integer_ranks():
    ranks = spread(4, bucket=1)
    assert len(ranks) == 4
    assert ranks == sorted(ranks)
    assert len(set(ranks)) == 4
    assert all(r.bucket == 1 and r.format().endswith(":") for r in ranks)
    assert spread(0) == []
    with pytest.raises(ValueError):
        spread(-1)
