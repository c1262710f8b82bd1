"""The random number generator interface and its convenience sampling methods."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Protocol, TypeVar, Union

__all__ = ["Rng", "RngError"]

_T_co = TypeVar("_T_co", covariant=True)

_U32_MASK = (1 << 32) - 1
_U64_MASK = (1 << 64) - 1
_INT_WIDTHS = (32, 64, 128)
_FILL_WIDTHS = (8, 16, 32, 64, 128)

# Bernoulli sampling compares a u64 against p scaled to the full u64 range.
_BERNOULLI_SCALE = 2.0**64
# 52 random mantissa bits give a float in [0, 1) with spacing 2^-52.
_MANTISSA_STEP = 2.0**-52
_MAX_RAND = 1.0 - _MANTISSA_STEP
# 53 random bits give the standard float in [0, 1).
_STANDARD_STEP = 2.0**-53

Number = Union[int, float]


class RngError(Exception):
    """Raised when a generator cannot produce the requested random data."""


class _Distribution(Protocol[_T_co]):
    def sample(self, rng: Rng) -> _T_co: ...


class Rng(ABC):
    """Base class for random number generators.

    Subclasses supply ``next_u32`` and ``next_u64``; byte filling and all the
    higher-level sampling methods are built on top of them.
    """

    @abstractmethod
    def next_u32(self) -> int:
        """Return the next random value in ``0 .. 2**32``."""

    @abstractmethod
    def next_u64(self) -> int:
        """Return the next random value in ``0 .. 2**64``."""

    def fill_bytes(self, dest) -> None:
        """Fill the writable buffer ``dest`` with random bytes.

        Whole 8-byte chunks come from ``next_u64`` in little-endian order; a
        tail of 5 to 7 bytes uses one more ``next_u64`` and a tail of 1 to 4
        bytes uses ``next_u32``.
        """
        view = memoryview(dest).cast("B")
        length = len(view)
        full = length - length % 8
        for start in range(0, full, 8):
            view[start : start + 8] = self.next_u64().to_bytes(8, "little")
        rest = length - full
        if rest > 4:
            view[full:] = self.next_u64().to_bytes(8, "little")[:rest]
        elif rest:
            view[full:] = self.next_u32().to_bytes(4, "little")[:rest]

    def try_fill_bytes(self, dest) -> None:
        """Fill ``dest`` with random bytes, raising :class:`RngError` on failure."""
        self.fill_bytes(dest)

    def random_bytes(self, n: int) -> bytes:
        """Return ``n`` random bytes."""
        if n < 0:
            raise ValueError("byte count must not be negative")
        buf = bytearray(n)
        self.fill_bytes(buf)
        return bytes(buf)

    def gen_float(self) -> float:
        """Return a float uniformly distributed in ``[0, 1)`` with 53 bits of precision."""
        return (self.next_u64() >> 11) * _STANDARD_STEP

    def gen_range(self, low: Number, high: Number, *, inclusive: bool = False) -> Number:
        """Return a value in ``[low, high)``, or ``[low, high]`` when ``inclusive``.

        Integer bounds give an integer, sampled at the narrowest of 32, 64 or
        128 bits that holds both bounds; a float bound gives a float.
        Raises ValueError for an empty range.
        """
        non_empty = low <= high if inclusive else low < high
        if not non_empty:
            raise ValueError("cannot sample empty range")
        if isinstance(low, float) or isinstance(high, float):
            if inclusive:
                return self._uniform_float_inclusive(float(low), float(high))
            return self._uniform_float_exclusive(float(low), float(high))
        bits, signed = _int_width(low, high)
        upper = high if inclusive else high - 1
        return self._uniform_int_inclusive(low, upper, bits, signed)

    def gen_bool(self, p: float) -> bool:
        """Return True with probability ``p``; raises ValueError unless ``0 <= p <= 1``."""
        if not 0.0 <= p < 1.0:
            if p == 1.0:
                return True
            raise ValueError(f"probability {p!r} is not in [0, 1]")
        return self.next_u64() < int(p * _BERNOULLI_SCALE)

    def gen_ratio(self, numerator: int, denominator: int) -> bool:
        """Return True with probability ``numerator / denominator``.

        Raises ValueError if ``denominator`` is zero or smaller than ``numerator``.
        """
        if numerator < 0 or denominator < 0:
            raise ValueError("numerator and denominator must not be negative")
        if denominator == 0 or numerator > denominator:
            raise ValueError(f"invalid ratio {numerator}/{denominator}")
        if numerator == denominator:
            return True
        threshold = int((numerator / denominator) * _BERNOULLI_SCALE)
        return self.next_u64() < threshold

    def fill_ints(self, count: int, bits: int, signed: bool = False) -> list[int]:
        """Return ``count`` random integers of the given width.

        The values are read from ``count * bits / 8`` random bytes in
        little-endian order. Errors from ``try_fill_bytes`` propagate.
        """
        if bits not in _FILL_WIDTHS:
            raise ValueError(f"unsupported integer width: {bits}")
        if count < 0:
            raise ValueError("count must not be negative")
        width = bits // 8
        buf = bytearray(count * width)
        if count:
            self.try_fill_bytes(buf)
        return [
            int.from_bytes(buf[start : start + width], "little", signed=signed)
            for start in range(0, len(buf), width)
        ]

    def sample(self, distr: _Distribution[_T_co]) -> _T_co:
        """Draw one value from ``distr``, an object with a ``sample(rng)`` method."""
        return distr.sample(self)

    def sample_iter(self, distr: _Distribution[_T_co]) -> Iterator[_T_co]:
        """Yield values from ``distr`` without end."""
        while True:
            yield distr.sample(self)

    def _draw(self, bits: int) -> int:
        if bits == 32:
            return self.next_u32()
        if bits == 64:
            return self.next_u64()
        low = self.next_u64()
        high = self.next_u64()
        return (high << 64) | low

    def _uniform_int_inclusive(self, low: int, high: int, bits: int, signed: bool) -> int:
        span = high - low + 1
        if span == 1 << bits:
            value = self._draw(bits)
            if signed and value >= 1 << (bits - 1):
                value -= 1 << bits
            return value
        mask = (1 << bits) - 1
        zone = (span << (bits - span.bit_length())) - 1
        while True:
            product = self._draw(bits) * span
            if product & mask <= zone:
                return low + (product >> bits)

    def _unit_mantissa(self) -> float:
        return (self.next_u64() >> 12) * _MANTISSA_STEP

    def _uniform_float_exclusive(self, low: float, high: float) -> float:
        scale = high - low
        if not math.isfinite(scale):
            raise ValueError("range overflow")
        while True:
            result = self._unit_mantissa() * scale + low
            if result < high:
                return result
            scale = math.nextafter(scale, -math.inf)

    def _uniform_float_inclusive(self, low: float, high: float) -> float:
        scale = (high - low) / _MAX_RAND
        if not math.isfinite(scale):
            raise ValueError("range overflow")
        while scale * _MAX_RAND + low > high:
            scale = math.nextafter(scale, -math.inf)
        return self._unit_mantissa() * scale + low


def _int_width(low: int, high: int) -> tuple[int, bool]:
    """Pick the narrowest sampling width whose integer type holds both bounds."""
    for bits in _INT_WIDTHS:
        if low >= 0 and high < 1 << bits:
            return bits, False
        half = 1 << (bits - 1)
        if -half <= low and high < half:
            return bits, True
    raise OverflowError("range bounds exceed 128 bits")