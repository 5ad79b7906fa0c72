"""
Catalogs of seventh and ninth chords, given as interval patterns with the root on the
left-most bit, the same layout as the scale masks.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from .note import Note
from .utils.bitmap import maskFromPitches, rotateRight, rotationMatches

__all__ = ["ChordType", "Seventh", "Ninth", "chordNamesByMask"]


class ChordType(Enum):
    """Base of the chord catalogs. Members are `(intervals, abbreviation)` pairs."""

    def __init__(self, intervals: tuple[int, ...], abbreviation: str):
        self._intervals = intervals
        self._mask = maskFromPitches(intervals)
        self._abbreviation = abbreviation

    @property
    def intervals(self) -> tuple[int, ...]:
        """Half-steps above the root."""
        return self._intervals

    @property
    def mask(self) -> int:
        return self._mask

    @property
    def abbreviation(self) -> str:
        return self._abbreviation

    def pitchMask(self, root: Note) -> int:
        """Pitch mask (A natural on the left-most bit) of the chord built on `root`."""
        return rotateRight(self._mask, root.pitchClass)

    def __str__(self) -> str:
        return self._abbreviation


class Seventh(ChordType):
    MAJ7 = ((0, 4, 7, 11), "maj7")
    DOM7 = ((0, 4, 7, 10), "7")
    MIN7 = ((0, 3, 7, 10), "m7")
    MIN_MAJ7 = ((0, 3, 7, 11), "m(maj7)")
    HALF_DIM7 = ((0, 3, 6, 10), "m7b5")
    DIM7 = ((0, 3, 6, 9), "dim7")
    AUG7 = ((0, 4, 8, 10), "7#5")
    AUG_MAJ7 = ((0, 4, 8, 11), "maj7#5")
    SUS7 = ((0, 5, 7, 10), "7sus4")


class Ninth(ChordType):
    MAJ9 = ((0, 2, 4, 7, 11), "maj9")
    DOM9 = ((0, 2, 4, 7, 10), "9")
    MIN9 = ((0, 2, 3, 7, 10), "m9")
    DOM7_FLAT9 = ((0, 1, 4, 7, 10), "7b9")
    DOM7_SHARP9 = ((0, 3, 4, 7, 10), "7#9")
    MIN_MAJ9 = ((0, 2, 3, 7, 11), "m(maj9)")
    SIX_NINE = ((0, 2, 4, 7, 9), "6/9")
    ADD9 = ((0, 2, 4, 7), "add9")


def chordNamesByMask(pitchMask: int, catalog: Iterable[ChordType]) -> list[str]:
    """
    Names like `"Bb7"` for every chord of `catalog` realized by `pitchMask`, in catalog order
    and then by root pitch. Symmetric chords such as `dim7` are named once per root.
    """
    names = []
    for chord in catalog:
        for root in rotationMatches(pitchMask, chord.mask):
            names.append(f"{Note.fromPitch(root)}{chord.abbreviation}")
    return names
