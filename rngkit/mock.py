"""A predictable generator for tests."""

from __future__ import annotations

from .rng import Rng

__all__ = ["StepRng"]

_U32_MASK = (1 << 32) - 1
_U64_MASK = (1 << 64) - 1


class StepRng(Rng):
    """Yields an arithmetic sequence of 64-bit values with wrapping addition.

    With an increment of 0 the generator yields a constant.
    """

    __slots__ = ("_value", "_increment")

    def __init__(self, initial: int, increment: int) -> None:
        for name, number in (("initial", initial), ("increment", increment)):
            if not 0 <= number <= _U64_MASK:
                raise ValueError(f"{name} must be an unsigned 64-bit integer")
        self._value = initial
        self._increment = increment

    def next_u32(self) -> int:
        return self.next_u64() & _U32_MASK

    def next_u64(self) -> int:
        result = self._value
        self._value = (self._value + self._increment) & _U64_MASK
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StepRng):
            return NotImplemented
        return (self._value, self._increment) == (other._value, other._increment)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"StepRng(initial={self._value}, increment={self._increment})"

    def __getstate__(self) -> tuple[int, int]:
        return self._value, self._increment

    def __setstate__(self, state: tuple[int, int]) -> None:
        self._value, self._increment = state