"""Random choice and reservoir sampling over arbitrary iterables."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, MutableSequence, Sequence, Sized
from itertools import islice
from operator import length_hint
from typing import TypeVar

from .index import gen_index
from .rng import Rng

__all__ = [
    "iter_choose",
    "iter_choose_stable",
    "iter_choose_multiple_fill",
    "iter_choose_multiple",
]

T = TypeVar("T")

_MISSING = object()


def _nth(it: Iterator[T], n: int):
    """Skip ``n`` items and return the next one, or ``_MISSING`` if exhausted."""
    return next(islice(it, n, None), _MISSING)


def _or_none(value):
    return None if value is _MISSING else value


def iter_choose(iterable: Iterable[T], rng: Rng) -> T | None:
    """Return one random element of ``iterable``, or None if it is empty.

    Sized iterables are sampled with a single index draw. Other iterators
    use their length hint, when they give one, to skip ahead; the chosen
    element and the number of random draws therefore depend on the hints.
    Use :func:`iter_choose_stable` for results that depend only on length.
    """
    if isinstance(iterable, Sized):
        length = len(iterable)
        if length == 0:
            return None
        index = gen_index(rng, length)
        if isinstance(iterable, Sequence):
            return iterable[index]
        return _or_none(_nth(iter(iterable), index))

    it = iter(iterable)
    lower = length_hint(it, 0)
    consumed = 0
    result = _MISSING
    while True:
        if lower > 1:
            ix = gen_index(rng, lower + consumed)
            if ix < lower:
                result = _nth(it, ix)
                skip = lower - (ix + 1)
            else:
                skip = lower
            consumed += lower
            if skip > 0:
                _nth(it, skip - 1)
        else:
            elem = next(it, _MISSING)
            if elem is _MISSING:
                return _or_none(result)
            consumed += 1
            if gen_index(rng, consumed) == 0:
                result = elem
        lower = length_hint(it, 0)


def iter_choose_stable(iterable: Iterable[T], rng: Rng) -> T | None:
    """Return one random element of ``iterable``, or None if it is empty.

    The selection and the random draws depend only on the number of
    elements and the values produced by ``rng``, never on length hints.
    """
    it = iter(iterable)
    consumed = 0
    result = _MISSING
    while True:
        next_index = 0
        lower = length_hint(it, 0)
        if lower >= 2:
            highest = None
            for ix in range(lower):
                if gen_index(rng, consumed + ix + 1) == 0:
                    highest = ix
            consumed += lower
            next_index = lower
            if highest is not None:
                result = _nth(it, highest)
                next_index -= highest + 1

        elem = _nth(it, next_index)
        if elem is _MISSING:
            return _or_none(result)
        if gen_index(rng, consumed + 1) == 0:
            result = elem
        consumed += 1


def iter_choose_multiple_fill(
    iterable: Iterable[T], rng: Rng, buf: MutableSequence[T]
) -> int:
    """Fill ``buf`` with elements chosen at random from ``iterable``.

    The order in ``buf`` is neither stable nor fully random. Returns the
    number of slots filled, which is ``len(buf)`` unless the iterable holds
    fewer elements.
    """
    it = iter(iterable)
    amount = len(buf)
    filled = 0
    for elem in islice(it, amount):
        buf[filled] = elem
        filled += 1
    if filled < amount:
        return filled

    for i, elem in enumerate(it):
        k = gen_index(rng, i + 1 + amount)
        if k < amount:
            buf[k] = elem
    return filled


def iter_choose_multiple(iterable: Iterable[T], rng: Rng, amount: int) -> list[T]:
    """Return up to ``amount`` elements chosen at random from ``iterable``.

    The order of the result is neither stable nor fully random. If the
    iterable holds fewer than ``amount`` elements, all of them are returned
    in their original order.
    """
    if amount < 0:
        raise ValueError("amount must not be negative")
    it = iter(iterable)
    reservoir = list(islice(it, amount))
    if len(reservoir) == amount:
        for i, elem in enumerate(it):
            k = gen_index(rng, i + 1 + amount)
            if k < amount:
                reservoir[k] = elem
    return reservoir