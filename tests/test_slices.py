import math
from collections import Counter
from itertools import permutations

import pytest

from rngkit.index import WeightedError, WeightedErrorKind
from rngkit.mock import StepRng
from rngkit.slices import (
    choose,
    choose_index,
    choose_multiple,
    choose_multiple_weighted,
    choose_weighted,
    choose_weighted_index,
    partial_shuffle,
    shuffle,
)
from rngkit.xoshiro import Xoshiro256PlusPlus

CHARS = list("abcdefghijklmn")


def _rng(seed):
    return Xoshiro256PlusPlus.seed_from_u64(seed)


def test_slice_choose_distribution():
    r = _rng(107)
    picks = [choose(CHARS, r) for _ in range(1000)]
    counts = Counter(picks)
    assert set(counts) == set(CHARS)
    assert sum(counts.values()) == 1000
    assert all(40 < counts[c] < 106 for c in CHARS)


def test_slice_choose_index_distribution():
    r = _rng(107)
    chosen = [0] * 14
    for _ in range(1000):
        chosen[choose_index(chosen, r)] += 1
    assert sum(chosen) == 1000
    assert all(40 < count < 106 for count in chosen)


def test_choose_empty():
    r = _rng(1)
    assert choose([], r) is None
    assert choose_index([], r) is None


def test_choose_with_constant_zero_rng_picks_first():
    assert choose(CHARS, StepRng(0, 0)) == "a"


def test_choose_and_choose_index_agree():
    assert choose(CHARS, _rng(413)) == CHARS[choose_index(CHARS, _rng(413))]


def test_choose_multiple_distinct_members():
    r = _rng(413)
    result = choose_multiple(CHARS, r, 8)
    assert len(result) == 8
    assert len(set(result)) == 8
    assert set(result) <= set(CHARS)


def test_choose_multiple_more_than_length_returns_all():
    result = choose_multiple(CHARS, _rng(5), len(CHARS) + 5)
    assert sorted(result) == CHARS


def test_choose_multiple_reproducible():
    first = choose_multiple(CHARS, _rng(9), 5)
    second = choose_multiple(CHARS, _rng(9), 5)
    assert len(first) == 5
    assert len(set(first)) == 5
    assert set(first) <= set(CHARS)
    assert first == second


def test_shuffle_small_cases():
    r = _rng(108)
    empty = []
    shuffle(empty, r)
    assert empty == []
    one = [1]
    shuffle(one, r)
    assert one == [1]
    two = [1, 2]
    shuffle(two, r)
    assert two in ([1, 2], [2, 1])


def test_shuffle_uniform_permutations():
    r = _rng(108)
    seen = Counter()
    for _ in range(10000):
        arr = [0, 1, 2, 3]
        shuffle(arr, r)
        assert sorted(arr) == [0, 1, 2, 3]
        seen[tuple(arr)] += 1
    assert set(seen) == set(permutations(range(4)))
    assert sum(seen.values()) == 10000
    assert all(330 <= count <= 505 for count in seen.values())


def test_shuffle_is_permutation_and_reproducible():
    a = list(range(13))
    b = list(range(13))
    shuffle(a, _rng(414))
    shuffle(b, _rng(414))
    assert a == b
    assert sorted(a) == list(range(13))


def test_partial_shuffle():
    r = _rng(118)
    assert partial_shuffle([], r, 10) == ([], [])

    v = [1, 2, 3, 4, 5]
    chosen, rest = partial_shuffle(v, r, 2)
    assert (len(chosen), len(rest)) == (2, 3)
    assert chosen[0] != chosen[1]
    assert rest[0] == 1 or rest[1] == 2 or rest[2] == 3
    assert v == rest + chosen


def test_partial_shuffle_full_when_amount_large():
    v = list(range(13))
    chosen, rest = partial_shuffle(v, _rng(414), 20)
    assert rest == []
    assert sorted(chosen) == list(range(13))


WEIGHTS = [1, 2, 3, 0, 5, 6, 7, 1, 2, 3, 4, 5, 6, 7]
N_REPS = 10000


def _verify(counts):
    total = sum(WEIGHTS)
    for w, count in zip(WEIGHTS, counts):
        expected = w * N_REPS / total
        err = abs(count - expected)
        if err != 0:
            err /= expected
        assert err <= 0.25


def test_choose_weighted_distribution():
    r = _rng(406)
    items = [(w, i) for i, w in enumerate(WEIGHTS)]
    picks = [choose_weighted(items, r, lambda it: it[0]) for _ in range(N_REPS)]
    assert all(pick in items for pick in picks)
    counts = Counter(pick[1] for pick in picks)
    assert 3 not in counts
    assert set(counts) == set(range(14)) - {3}
    _verify([counts[i] for i in range(14)])


def test_choose_weighted_index_distribution():
    r = _rng(407)
    items = [[w, 0] for w in WEIGHTS]
    for _ in range(N_REPS):
        items[choose_weighted_index(items, r, lambda it: it[0])][1] += 1
    counts = [it[1] for it in items]
    assert counts[3] == 0
    _verify(counts)


def test_choose_weighted_float_weights():
    r = _rng(3)
    items = [("a", 0.0), ("b", 2.5), ("c", 0.0)]
    for _ in range(50):
        assert choose_weighted(items, r, lambda it: it[1]) == ("b", 2.5)


@pytest.mark.parametrize(
    "items, weight, kind",
    [
        ([], lambda _: 1, WeightedErrorKind.NO_ITEM),
        (["x"], lambda _: 0, WeightedErrorKind.ALL_WEIGHTS_ZERO),
        ([0, -1], lambda x: x, WeightedErrorKind.INVALID_WEIGHT),
        ([-1, 0], lambda x: x, WeightedErrorKind.INVALID_WEIGHT),
        ([1.0, math.nan], lambda x: x, WeightedErrorKind.INVALID_WEIGHT),
    ],
)
def test_choose_weighted_errors(items, weight, kind):
    r = _rng(406)
    with pytest.raises(WeightedError) as info:
        choose_weighted(items, r, weight)
    assert info.value.kind is kind
    with pytest.raises(WeightedError) as info:
        choose_weighted_index(items, r, weight)
    assert info.value.kind is kind


def test_multiple_weighted_zero_weight_excluded():
    r = _rng(413)
    choices = [("a", 2), ("b", 1), ("c", 0)]
    for _ in range(100):
        result = choose_multiple_weighted(choices, r, 2, lambda it: it[1])
        assert len(result) == 2
        assert all(val[0] != "c" for val in result)


def test_multiple_weighted_all_zero():
    choices = [("a", 0), ("b", 0), ("c", 0)]
    result = choose_multiple_weighted(choices, _rng(413), 2, lambda it: it[1])
    assert len(result) == 2
    assert len(set(result)) == 2


@pytest.mark.parametrize(
    "choices",
    [
        [("a", -1), ("b", 1), ("c", 1)],
        [("a", math.nan), ("b", 1.0), ("c", 1.0)],
        [("a", -math.inf), ("b", 1.0), ("c", 1.0)],
    ],
)
def test_multiple_weighted_invalid(choices):
    with pytest.raises(WeightedError) as info:
        choose_multiple_weighted(choices, _rng(413), 2, lambda it: it[1])
    assert info.value.kind is WeightedErrorKind.INVALID_WEIGHT


def test_multiple_weighted_empty():
    assert choose_multiple_weighted([], _rng(413), 0, lambda _: 0) == []


def test_multiple_weighted_infinite_weight_always_chosen():
    r = _rng(413)
    choices = [("a", math.inf), ("b", 1.0), ("c", 1.0)]
    for _ in range(100):
        result = choose_multiple_weighted(choices, r, 2, lambda it: it[1])
        assert len(result) == 2
        assert any(val[0] == "a" for val in result)


def test_multiple_weighted_negative_zero_ok():
    choices = [("a", -0.0), ("b", 1.0), ("c", 1.0)]
    result = choose_multiple_weighted(choices, _rng(413), 2, lambda it: it[1])
    assert len(result) == 2


def test_multiple_weighted_amount_clamped():
    choices = [("a", 1), ("b", 1), ("c", 1)]
    result = choose_multiple_weighted(choices, _rng(2), 10, lambda it: it[1])
    assert sorted(result) == choices


def test_multiple_weighted_distributions():
    choices = [("a", 2), ("b", 1), ("c", 1)]
    r = _rng(414)
    results = [0, 0, 0]
    expected = [4167, 4167, 1666]
    pair_slot = {frozenset("ab"): 0, frozenset("ac"): 1, frozenset("bc"): 2}
    for _ in range(10000):
        result = choose_multiple_weighted(choices, r, 2, lambda it: it[1])
        assert len(result) == 2
        results[pair_slot[frozenset(val[0] for val in result)]] += 1
    assert all(abs(a - b) <= 200 for a, b in zip(results, expected))