"""Seeded random streams for reproducible maps.

All arithmetic is explicit 32-bit unsigned wraparound, so a seed yields the
same values on every platform. Independent streams for different stages are
derived from the seed text and a stream id, never by copying a stream that
is already in use.
"""

from enum import IntEnum

import numpy as np
from numpy.typing import NDArray

MASK32 = 0xFFFFFFFF

FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619


class StreamId(IntEnum):
    """Offsets distinguishing the per-stage streams of one seed."""

    TERRAIN = 0
    RIVERS = 1
    SETTLEMENTS = 2


def _imul(a: int, b: int) -> int:
    return (a * b) & MASK32


def _fnv_fold(h: int, value: int) -> int:
    return _imul(h ^ value, FNV_PRIME)


def hash_seed(text: str) -> int:
    """Hash seed text into a 32-bit integer.

    FNV-1a over UTF-16 code units, so characters outside the Basic
    Multilingual Plane contribute both halves of their surrogate pair.
    """
    data = text.encode("utf-16-le", "surrogatepass")
    h = FNV_OFFSET_BASIS
    for i in range(0, len(data), 2):
        h = _fnv_fold(h, int.from_bytes(data[i:i + 2], "little"))
    return h


def derive_seed(text: str, offset: int) -> int:
    """Hash seed text combined with a stream offset.

    The four little-endian bytes of the offset are folded into the FNV
    accumulator after the text, so every offset gives an unrelated state.
    """
    h = hash_seed(text)
    for byte in (offset & MASK32).to_bytes(4, "little"):
        h = _fnv_fold(h, byte)
    return h


class SeedStream:
    """Mulberry32 pseudo-random stream over a single 32-bit state."""

    def __init__(self, seed: int):
        self.state = _imul((seed & MASK32) ^ 0xDEADBEEF, 2654435761)

    def next(self) -> float:
        """Advance the state and return a float in [0, 1)."""
        self.state = (self.state + 0x6D2B79F5) & MASK32
        t = self.state
        r = _imul(t ^ (t >> 15), 1 | t)
        r ^= (r + _imul(r ^ (r >> 7), 61 | r)) & MASK32
        return ((r ^ (r >> 14)) & MASK32) / 4294967296.0

    def randrange(self, n: int) -> int:
        """Return an integer in [0, n)."""
        return int(self.next() * n)

    def draws(self, count: int) -> NDArray[np.float64]:
        """Return the next ``count`` values as an array, in draw order."""
        return np.fromiter((self.next() for _ in range(count)), dtype=np.float64, count=count)


def seed_stream(seed: str) -> SeedStream:
    """Create the base stream for seed text."""
    return SeedStream(hash_seed(seed))


def derive_stream(seed: str, offset: int) -> SeedStream:
    """Create an independent stream for one generation stage."""
    return SeedStream(derive_seed(seed, offset))
