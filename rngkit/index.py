"""Sampling of distinct indices from ``0 .. length``."""

from __future__ import annotations

import heapq
import math
import struct
from collections.abc import Callable
from enum import Enum

from .rng import Rng

__all__ = [
    "WeightedErrorKind",
    "WeightedError",
    "gen_index",
    "sample",
    "sample_weighted",
    "sample_floyd",
    "sample_inplace",
    "sample_rejection",
]

_U32_MAX = (1 << 32) - 1


class WeightedErrorKind(Enum):
    """The reasons a weighted sampling request can be rejected."""

    NO_ITEM = "no weights provided"
    INVALID_WEIGHT = "a weight is invalid"
    ALL_WEIGHTS_ZERO = "all weights are zero"
    TOO_MANY = "too many weights (hit u32::MAX)"


class WeightedError(ValueError):
    """Raised when weights cannot be used for sampling."""

    def __init__(self, kind: WeightedErrorKind) -> None:
        super().__init__(kind.value)
        self.kind = kind

    def __str__(self) -> str:
        return self.kind.value


def _f32(value: float) -> float:
    """Round a float to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


_SMALL_COEFFS = (
    (_f32(1.6), _f32(8.0 / 45.0)),
    (_f32(10.0), _f32(70.0 / 9.0)),
)
_LARGE_COEFFS = (_f32(270.0), _f32(330.0 / 9.0))


def gen_index(rng: Rng, ubound: int) -> int:
    """Return a uniform index in ``0 .. ubound``.

    Bounds that fit in 32 bits are sampled at 32 bits, so results do not
    depend on the platform word size. Raises ValueError if ``ubound`` is 0.
    """
    return rng.gen_range(0, ubound)


def sample(rng: Rng, length: int, amount: int) -> list[int]:
    """Return ``amount`` distinct indices from ``0 .. length`` in random order.

    The algorithm is picked from ``length`` and ``amount``.
    Raises ValueError if ``amount > length``.
    """
    if amount > length:
        raise ValueError("`amount` of samples must be less than or equal to `length`")
    if length > _U32_MAX:
        return sample_rejection(rng, length, amount)

    j = 0 if length < 500_000 else 1
    amount_fp = _f32(amount)
    length_fp = _f32(length)
    if amount < 163:
        m4 = _f32(_SMALL_COEFFS[0][j] * amount_fp)
        threshold = _f32(_f32(_SMALL_COEFFS[1][j] + m4) * amount_fp)
        # When amount < 12, Floyd's algorithm is always faster.
        if amount > 11 and length_fp < threshold:
            return sample_inplace(rng, length, amount)
        return sample_floyd(rng, length, amount)
    if length_fp < _f32(_LARGE_COEFFS[j] * amount_fp):
        return sample_inplace(rng, length, amount)
    return sample_rejection(rng, length, amount)


def sample_weighted(
    rng: Rng,
    length: int,
    weight: Callable[[int], float],
    amount: int,
) -> list[int]:
    """Return ``amount`` distinct indices from ``0 .. length``, chosen by weight.

    ``weight`` is called once for each index. The order of the result is
    unspecified. Raises WeightedError for a negative or NaN weight and
    ValueError if ``amount > length``.
    """
    if length <= _U32_MAX and amount > _U32_MAX:
        raise ValueError("`amount` does not fit in 32 bits")
    return _sample_efraimidis_spirakis(rng, length, weight, amount)


def _sample_efraimidis_spirakis(
    rng: Rng,
    length: int,
    weight: Callable[[int], float],
    amount: int,
) -> list[int]:
    if amount == 0:
        return []
    if amount > length:
        raise ValueError("`amount` of samples must be less than or equal to `length`")

    candidates: list[tuple[float, int]] = []
    for index in range(length):
        w = float(weight(index))
        if not w >= 0.0:
            raise WeightedError(WeightedErrorKind.INVALID_WEIGHT)
        exponent = math.copysign(math.inf, w) if w == 0.0 else 1.0 / w
        x = rng.gen_float()
        if x == 0.0 and exponent < 0.0:
            key = math.inf
        else:
            key = x**exponent
        candidates.append((key, index))

    largest = heapq.nlargest(amount, candidates, key=lambda item: item[0])
    return [index for _, index in largest]


def sample_floyd(rng: Rng, length: int, amount: int) -> list[int]:
    """Sample ``amount`` indices from ``0 .. length`` with Floyd's combination algorithm.

    The result is fully shuffled.
    """
    floyd_shuffle = amount < 50
    indices: list[int] = []
    for j in range(length - amount, length):
        t = rng.gen_range(0, j, inclusive=True)
        if floyd_shuffle:
            if t in indices:
                indices.insert(indices.index(t), j)
                continue
        elif t in indices:
            indices.append(j)
            continue
        indices.append(t)
    if not floyd_shuffle:
        for i in range(amount - 1, 0, -1):
            k = rng.gen_range(0, i, inclusive=True)
            indices[i], indices[k] = indices[k], indices[i]
    return indices


def sample_inplace(rng: Rng, length: int, amount: int) -> list[int]:
    """Sample ``amount`` indices from ``0 .. length`` with a partial Fisher-Yates shuffle.

    Uses memory proportional to ``length``.
    """
    indices = list(range(length))
    for i in range(amount):
        j = rng.gen_range(i, length)
        indices[i], indices[j] = indices[j], indices[i]
    del indices[amount:]
    return indices


def sample_rejection(rng: Rng, length: int, amount: int) -> list[int]:
    """Sample ``amount`` indices from ``0 .. length`` by rejecting duplicates.

    Suited to ``amount`` much smaller than ``length``.
    """
    seen: set[int] = set()
    indices: list[int] = []
    for _ in range(amount):
        pos = rng.gen_range(0, length)
        while pos in seen:
            pos = rng.gen_range(0, length)
        seen.add(pos)
        indices.append(pos)
    return indices