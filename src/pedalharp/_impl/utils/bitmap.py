"""
Operations on 12-bit pitch masks.

A pitch mask stores one bit per chromatic pitch class. The most significant of the 12 bits
(`MASK12`) stands for the reference pitch: A natural for masks built from notes, or the
tonic for interval patterns of scales and chords. Each following bit is one half-step
higher, so pitch number `p` occupies bit `11 - p`.
"""

from collections.abc import Iterable, Iterator, Sequence
from functools import lru_cache

__all__ = [
    "MASK12",
    "FULL_MASK",
    "pitchBit",
    "rotateLeft",
    "rotateRight",
    "popcount",
    "maskFromPitches",
    "maskPitches",
    "rotationMatches",
    "maskStr",
]

MASK12 = 0b100000000000
"""The reference (left-most) bit of a 12-bit pitch mask."""

FULL_MASK = 0b111111111111
"""All 12 pitch classes."""

_BITMASK: Sequence[int] = tuple(MASK12 >> i for i in range(12))


def pitchBit(pitch: int) -> int:
    """Mask with only the bit for the pitch class of `pitch` set."""
    return _BITMASK[pitch % 12]


def rotateLeft(mask: int, n: int = 1) -> int:
    """
    Rotate the low 12 bits of `mask` left by `n` places. The bit shifted out of position 12
    re-enters at position 1.
    """
    n %= 12
    mask &= FULL_MASK
    return ((mask << n) & FULL_MASK) | (mask >> (12 - n))


def rotateRight(mask: int, n: int = 1) -> int:
    """Inverse of `rotateLeft()`."""
    return rotateLeft(mask, -n)


def popcount(mask: int) -> int:
    """Number of set bits in the low 12 bits of `mask`."""
    return (mask & FULL_MASK).bit_count()


def maskFromPitches(pitches: Iterable[int]) -> int:
    mask = 0
    for p in pitches:
        mask |= pitchBit(p)
    return mask


def maskPitches(mask: int) -> Iterator[int]:
    """Pitch classes present in `mask`, in increasing order."""
    for i, bit in enumerate(_BITMASK):
        if mask & bit:
            yield i


@lru_cache
def rotationMatches(mask: int, pattern: int) -> tuple[int, ...]:
    """
    Rotate `mask` through all 12 positions and return every rotation count at which it equals
    `pattern`. When `pattern` is an interval pattern with the tonic on the reference bit, each
    returned count is the pitch number of a tonic that realizes the pattern in `mask`.
    """
    matches = []
    for i in range(12):
        if mask == pattern:
            matches.append(i)
        mask = rotateLeft(mask)
    return tuple(matches)


def maskStr(mask: int) -> str:
    """Binary string of the 12 bits, reference bit first."""
    return f"{mask & FULL_MASK:012b}"
