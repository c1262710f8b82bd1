"""Adapters that turn other sources into random number generators."""

from __future__ import annotations

from typing import BinaryIO

from .rng import Rng, RngError

__all__ = ["ReadError", "ReadRng"]


class ReadError(RngError):
    """Raised when the underlying reader of a :class:`ReadRng` fails."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(cause)
        self.cause = cause

    def __str__(self) -> str:
        return f"ReadError: {self.cause}"


class ReadRng(Rng):
    """A generator that reads its random bytes straight from a binary reader.

    Works best with an endless reader. ``try_fill_bytes`` raises
    :class:`ReadError` when the reader fails or runs out of data; the other
    methods raise :class:`RngError`.
    """

    __slots__ = ("_reader",)

    def __init__(self, reader: BinaryIO) -> None:
        self._reader = reader

    def next_u32(self) -> int:
        buf = bytearray(4)
        self.fill_bytes(buf)
        return int.from_bytes(buf, "little")

    def next_u64(self) -> int:
        buf = bytearray(8)
        self.fill_bytes(buf)
        return int.from_bytes(buf, "little")

    def fill_bytes(self, dest) -> None:
        try:
            self.try_fill_bytes(dest)
        except ReadError as err:
            raise RngError(
                f"reading random bytes from reader failed; error: {err}"
            ) from err

    def try_fill_bytes(self, dest) -> None:
        view = memoryview(dest).cast("B")
        total = len(view)
        filled = 0
        while filled < total:
            try:
                chunk = self._reader.read(total - filled)
            except InterruptedError:
                continue
            except OSError as exc:
                raise ReadError(exc) from exc
            if not chunk:
                raise ReadError(EOFError("failed to fill whole buffer"))
            chunk = chunk[: total - filled]
            view[filled : filled + len(chunk)] = chunk
            filled += len(chunk)