"""Random choice, sampling and shuffling over sequences."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Callable, MutableSequence, Sequence
from typing import TypeVar, Union

from .index import WeightedError, WeightedErrorKind, gen_index, sample, sample_weighted
from .rng import Rng

__all__ = [
    "choose",
    "choose_index",
    "choose_multiple",
    "choose_weighted",
    "choose_weighted_index",
    "choose_multiple_weighted",
    "shuffle",
    "partial_shuffle",
]

T = TypeVar("T")
Weight = Union[int, float]


def choose(seq: Sequence[T], rng: Rng) -> T | None:
    """Return one random element of ``seq``, or None if it is empty."""
    index = choose_index(seq, rng)
    return None if index is None else seq[index]


def choose_index(seq: Sequence[T], rng: Rng) -> int | None:
    """Return the index of one random element of ``seq``, or None if it is empty.

    The index lets the caller replace the chosen element in place.
    """
    if not seq:
        return None
    return gen_index(rng, len(seq))


def choose_multiple(seq: Sequence[T], rng: Rng, amount: int) -> list[T]:
    """Return up to ``amount`` distinct elements of ``seq`` in random order.

    If ``amount`` exceeds the length of ``seq``, every element is returned.
    """
    amount = min(amount, len(seq))
    return [seq[i] for i in sample(rng, len(seq), amount)]


def _weighted_index(seq: Sequence[T], rng: Rng, weight: Callable[[T], Weight]) -> int:
    weights = [weight(item) for item in seq]
    if not weights:
        raise WeightedError(WeightedErrorKind.NO_ITEM)
    cumulative: list[Weight] = []
    total: Weight = 0
    for w in weights:
        if not w >= 0:
            raise WeightedError(WeightedErrorKind.INVALID_WEIGHT)
        cumulative.append(total + w if cumulative else w)
        total = cumulative[-1]
    if total == 0:
        raise WeightedError(WeightedErrorKind.ALL_WEIGHTS_ZERO)
    # The last running total is the upper bound, not a partition point.
    cumulative.pop()
    if isinstance(total, float):
        chosen: Weight = rng.gen_range(0.0, total)
    else:
        chosen = rng.gen_range(0, total)
    return bisect_right(cumulative, chosen)


def choose_weighted(seq: Sequence[T], rng: Rng, weight: Callable[[T], Weight]) -> T:
    """Return one element of ``seq`` with probability proportional to ``weight(element)``.

    Raises WeightedError when ``seq`` is empty, a weight is negative or NaN,
    or all weights are zero.
    """
    return seq[_weighted_index(seq, rng, weight)]


def choose_weighted_index(
    seq: Sequence[T], rng: Rng, weight: Callable[[T], Weight]
) -> int:
    """Like :func:`choose_weighted`, but return the index of the chosen element."""
    return _weighted_index(seq, rng, weight)


def choose_multiple_weighted(
    seq: Sequence[T], rng: Rng, amount: int, weight: Callable[[T], Weight]
) -> list[T]:
    """Return up to ``amount`` distinct elements of ``seq``, chosen by weight.

    The order of the result is unspecified. If all weights are equal, even
    zero, every element is equally likely. Raises WeightedError for a
    negative or NaN weight.
    """
    amount = min(amount, len(seq))
    indices = sample_weighted(rng, len(seq), lambda i: float(weight(seq[i])), amount)
    return [seq[i] for i in indices]


def shuffle(seq: MutableSequence[T], rng: Rng) -> None:
    """Shuffle ``seq`` in place."""
    for i in range(len(seq) - 1, 0, -1):
        j = gen_index(rng, i + 1)
        seq[i], seq[j] = seq[j], seq[i]


def partial_shuffle(
    seq: MutableSequence[T], rng: Rng, amount: int
) -> tuple[list[T], list[T]]:
    """Shuffle the tail of ``seq`` in place, stopping after ``amount`` elements.

    Returns two lists: the ``amount`` randomly chosen elements in random
    order, and the remaining elements, which are not fully shuffled. An
    ``amount`` at least the length of ``seq`` performs a full shuffle.
    """
    length = len(seq)
    end = 0 if amount >= length else length - amount
    for i in range(length - 1, end - 1, -1):
        j = gen_index(rng, i + 1)
        seq[i], seq[j] = seq[j], seq[i]
    return list(seq[end:]), list(seq[:end])