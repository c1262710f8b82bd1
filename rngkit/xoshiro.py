"""Small, fast, non-cryptographic xoshiro generators."""

from __future__ import annotations

from .rng import Rng

__all__ = ["Xoshiro128PlusPlus", "Xoshiro256PlusPlus", "SmallRng"]

_U32_MASK = (1 << 32) - 1
_U64_MASK = (1 << 64) - 1
_PHI = 0x9E3779B97F4A7C15


def _rotl32(x: int, k: int) -> int:
    return ((x << k) | (x >> (32 - k))) & _U32_MASK


def _rotl64(x: int, k: int) -> int:
    return ((x << k) | (x >> (64 - k))) & _U64_MASK


def _splitmix_seed(state: int, length: int) -> bytes:
    """Expand a 64-bit value into ``length`` seed bytes with SplitMix64."""
    if not 0 <= state <= _U64_MASK:
        raise ValueError("state must be an unsigned 64-bit integer")
    chunks = []
    for _ in range(length // 8):
        state = (state + _PHI) & _U64_MASK
        z = state
        z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _U64_MASK
        z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _U64_MASK
        z ^= z >> 31
        chunks.append(z.to_bytes(8, "little"))
    return b"".join(chunks)


def _check_seed(seed: bytes, length: int) -> bytes:
    data = bytes(seed)
    if len(data) != length:
        raise ValueError(f"seed must be exactly {length} bytes, got {len(data)}")
    return data


def _state_from_seed(seed: bytes, length: int, width: int) -> tuple[int, ...] | None:
    """Split a seed into little-endian words; ``None`` for an all-zero seed."""
    data = _check_seed(seed, length)
    if not any(data):
        return None
    return tuple(
        int.from_bytes(data[start : start + width], "little")
        for start in range(0, len(data), width)
    )


def _seed_bytes_from_rng(rng: Rng, length: int) -> bytes:
    seed = bytearray(length)
    rng.try_fill_bytes(seed)
    return bytes(seed)


class _Xoshiro(Rng):
    """Shared state handling and comparison for the xoshiro generators."""

    __slots__ = ("_s",)
    SEED_LEN = 0

    def __init__(self, state: tuple[int, int, int, int]) -> None:
        self._s = state

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._s == other._s

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(state={self._s!r})"


class Xoshiro128PlusPlus(_Xoshiro):
    """The xoshiro128++ generator: 128 bits of state, 32-bit output."""

    __slots__ = ()
    SEED_LEN = 16

    @classmethod
    def from_seed(cls, seed: bytes):
        """Create a generator from a 16-byte seed; an all-zero seed is remapped."""
        state = _state_from_seed(seed, cls.SEED_LEN, 4)
        if state is None:
            return cls.seed_from_u64(0)
        return cls(state)

    @classmethod
    def seed_from_u64(cls, state: int):
        """Create a generator from a 64-bit value, expanded with SplitMix64."""
        return cls.from_seed(_splitmix_seed(state, cls.SEED_LEN))

    @classmethod
    def from_rng(cls, rng: Rng):
        """Create a generator seeded with bytes drawn from ``rng``.

        Errors raised by ``rng.try_fill_bytes`` propagate.
        """
        return cls.from_seed(_seed_bytes_from_rng(rng, cls.SEED_LEN))

    def next_u32(self) -> int:
        s0, s1, s2, s3 = self._s
        result = (_rotl32((s0 + s3) & _U32_MASK, 7) + s0) & _U32_MASK
        t = (s1 << 9) & _U32_MASK
        s2 ^= s0
        s3 ^= s1
        s1 ^= s2
        s0 ^= s3
        s2 ^= t
        s3 = _rotl32(s3, 11)
        self._s = (s0, s1, s2, s3)
        return result

    def next_u64(self) -> int:
        low = self.next_u32()
        high = self.next_u32()
        return (high << 32) | low


class Xoshiro256PlusPlus(_Xoshiro):
    """The xoshiro256++ generator: 256 bits of state, 64-bit output."""

    __slots__ = ()
    SEED_LEN = 32

    @classmethod
    def from_seed(cls, seed: bytes):
        """Create a generator from a 32-byte seed; an all-zero seed is remapped."""
        state = _state_from_seed(seed, cls.SEED_LEN, 8)
        if state is None:
            return cls.seed_from_u64(0)
        return cls(state)

    @classmethod
    def seed_from_u64(cls, state: int):
        """Create a generator from a 64-bit value, expanded with SplitMix64."""
        return cls.from_seed(_splitmix_seed(state, cls.SEED_LEN))

    @classmethod
    def from_rng(cls, rng: Rng):
        """Create a generator seeded with bytes drawn from ``rng``.

        Errors raised by ``rng.try_fill_bytes`` propagate.
        """
        return cls.from_seed(_seed_bytes_from_rng(rng, cls.SEED_LEN))

    def next_u32(self) -> int:
        # The lowest bits have linear dependencies, so use the upper half.
        return self.next_u64() >> 32

    def next_u64(self) -> int:
        s0, s1, s2, s3 = self._s
        result = (_rotl64((s0 + s3) & _U64_MASK, 23) + s0) & _U64_MASK
        t = (s1 << 17) & _U64_MASK
        s2 ^= s0
        s3 ^= s1
        s1 ^= s2
        s0 ^= s3
        s2 ^= t
        s3 = _rotl64(s3, 45)
        self._s = (s0, s1, s2, s3)
        return result


class SmallRng(Xoshiro256PlusPlus):
    """A small-state, fast, non-cryptographic generator.

    Not suitable where prediction must be prevented. The algorithm may change
    and should not be relied upon for reproducibility across versions.
    """

    __slots__ = ()