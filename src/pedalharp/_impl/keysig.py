from __future__ import annotations

from collections.abc import Set
from enum import Enum

import pyrsistent as pyr

from .note import BasicNote, Note
from .utils.bitmap import rotateLeft, rotationMatches

__all__ = ["SHARP_ORDER", "FLAT_ORDER", "KeySignature", "Scale"]

SHARP_ORDER = (
    BasicNote.F,
    BasicNote.C,
    BasicNote.G,
    BasicNote.D,
    BasicNote.A,
    BasicNote.E,
    BasicNote.B,
)
"""Letters in the order sharps are added to a key signature."""

FLAT_ORDER = SHARP_ORDER[::-1]
"""Letters in the order flats are added to a key signature."""


class KeySignature(Enum):
    """
    The 15 key signatures, from 7 flats to 7 sharps. Each member carries the tonic of its major
    and minor key and the letters it alters.
    """

    FLAT7 = (-7, Note("Cb"), Note("Ab"))
    FLAT6 = (-6, Note("Gb"), Note("Eb"))
    FLAT5 = (-5, Note("Db"), Note("Bb"))
    FLAT4 = (-4, Note("Ab"), Note("F"))
    FLAT3 = (-3, Note("Eb"), Note("C"))
    FLAT2 = (-2, Note("Bb"), Note("G"))
    FLAT1 = (-1, Note("F"), Note("D"))
    NONE = (0, Note("C"), Note("A"))
    SHARP1 = (1, Note("G"), Note("E"))
    SHARP2 = (2, Note("D"), Note("B"))
    SHARP3 = (3, Note("A"), Note("F#"))
    SHARP4 = (4, Note("E"), Note("C#"))
    SHARP5 = (5, Note("B"), Note("G#"))
    SHARP6 = (6, Note("F#"), Note("D#"))
    SHARP7 = (7, Note("C#"), Note("A#"))

    def __init__(self, count: int, majorNote: Note, minorNote: Note):
        self._count = count
        self._majorNote = majorNote
        self._minorNote = minorNote
        if count >= 0:
            self._sharpFlats = pyr.pset(SHARP_ORDER[:count])
        else:
            self._sharpFlats = pyr.pset(FLAT_ORDER[:-count])

    @classmethod
    def fromCount(cls, count: int) -> KeySignature:
        """Key signature with `count` sharps (positive) or `-count` flats (negative)."""
        if not -7 <= count <= 7:
            raise ValueError(f"Key signatures have at most 7 sharps or flats, got {count}")
        return _byCount[count]

    @classmethod
    def getKeyByNote(cls, pitch: int, major: bool = True) -> list[KeySignature]:
        """
        Key signatures whose major (or minor) tonic has the given pitch. Tonics are compared by
        pitch class, so the result may hold 0, 1 or 2 signatures; two spellings of the same
        tonic exist in the region of 5 to 7 sharps or flats. Pitch numbers outside 0 to 11 are
        reduced first: `getKeyByNote(-1, major=False)`, the pitch of the A-flat minor tonic,
        returns both `FLAT7` and `SHARP5`, as `getKeyByNote(11, major=False)` does.
        """
        pitch %= 12
        return [
            keySig
            for keySig in cls
            if (keySig.majorNote if major else keySig.minorNote).pitchClass == pitch
        ]

    @property
    def count(self) -> int:
        """Number of sharps, or the negated number of flats."""
        return self._count

    @property
    def majorNote(self) -> Note:
        """Tonic of the major key."""
        return self._majorNote

    @property
    def minorNote(self) -> Note:
        """Tonic of the minor keys."""
        return self._minorNote

    @property
    def sharpFlats(self) -> Set[BasicNote]:
        """
        Letters altered by the signature. These are not necessarily the accidentals of a scale,
        e.g. the raised degrees of harmonic and melodic minor.
        """
        return self._sharpFlats

    @property
    def hasSharps(self) -> bool:
        return self._count > 0

    @property
    def hasFlats(self) -> bool:
        return self._count < 0

    @property
    def text(self) -> str:
        if self._count == 0:
            return "(none)"
        return f"{abs(self._count)} {'sharps' if self._count > 0 else 'flats'}"

    def __str__(self) -> str:
        return self.text


_byCount = pyr.pmap({keySig.count: keySig for keySig in KeySignature})


class Scale(Enum):
    """
    The 4 scale qualities. The mask marks the scale's pitches on the 12 chromatic half-steps;
    its left-most bit is the tonic and is always set.
    """

    MAJOR = (0b101011010101, "major")
    MINOR = (0b101101011010, "minor")
    HARMONIC = (0b101101011001, "harmonic minor")
    MELODIC = (0b101101010101, "melodic minor")

    def __init__(self, mask: int, displayName: str):
        self._mask = mask
        self._displayName = displayName

    @property
    def mask(self) -> int:
        return self._mask

    @property
    def displayName(self) -> str:
        return self._displayName

    @property
    def isMajor(self) -> bool:
        return self is Scale.MAJOR

    def relativeOf(self) -> Scale | None:
        """
        The earlier catalog entry whose mask is a rotation of this one, if any. Natural minor
        is the relative of major.
        """
        for other in Scale:
            if other is self:
                return None
            mask = other.mask
            for _ in range(12):
                if mask == self._mask:
                    return other
                mask = rotateLeft(mask)
        return None

    @classmethod
    def getNameByMask(cls, pitchMask: int) -> str:
        """
        Names the scales realized by a pitch mask (A natural on the left-most bit), one line
        per scale quality and tonic. Enharmonic spellings of the same tonic share a line,
        separated by slashes. A scale whose mask is a rotation of an earlier one is reported
        only under the earlier one, so a major scale is not named again as its relative minor.
        Returns an empty string when nothing matches.
        """
        lines = []
        for scale in cls:
            if scale.relativeOf() is not None:
                continue
            for tonic in rotationMatches(pitchMask, scale.mask):
                keySigs = KeySignature.getKeyByNote(tonic, scale.isMajor)
                if len(keySigs) == 0:
                    continue
                if scale.isMajor:
                    names = [str(keySig.majorNote) for keySig in keySigs]
                else:
                    names = [str(keySig.minorNote).lower() for keySig in keySigs]
                lines.append(f"{'/'.join(names)} {scale.displayName}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self._displayName

