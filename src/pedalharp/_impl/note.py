from __future__ import annotations

from bisect import bisect_left, bisect_right
from collections.abc import Callable, Sequence
from enum import IntEnum
from functools import lru_cache
from typing import Self, overload
import typing as t

from bidict import bidict
import numpy as np
import pyrsistent as pyr

from .m21 import M21Mixin
from .utils.bitmap import pitchBit
from .utils.cls import noInstance

if t.TYPE_CHECKING:  # pragma: no cover
    import music21 as m21  # type: ignore

__all__ = [
    "BasicNote",
    "SharpFlat",
    "PEDAL_POSITIONS",
    "BASIC_NOTE_OFFSETS",
    "SpellPref",
    "SpellPrefs",
    "Note",
]

BASIC_NOTE_OFFSETS: Sequence[int] = np.array([0, 2, 3, 5, 7, 8, 10])
"""
Chromatic offset of each natural letter in half-steps above A natural, in letter order
A to G.
"""
BASIC_NOTE_OFFSETS.flags.writeable = False


class BasicNote(IntEnum):
    """
    The 7 natural letter names. Letters are ordered from A, the lowest string letter of a
    pedal harp, and wrap around after G.
    """

    A = 0
    B = 1
    C = 2
    D = 3
    E = 4
    F = 5
    G = 6

    @property
    def offset(self) -> int:
        """Half-steps above A natural."""
        return int(BASIC_NOTE_OFFSETS[self])

    def next(self, n: int = 1) -> BasicNote:
        """The letter `n` steps above, wrapping after G."""
        return BasicNote((self + n) % 7)

    def __str__(self) -> str:
        return self.name


class SharpFlat(IntEnum):
    """
    Accidentals. The first three members are also the positions of a harp pedal, in the order
    the pedal moves through them. A double sharp only occurs as a spelled scale degree.
    """

    SHARP = 0
    NATURAL = 1
    FLAT = 2
    DOUBLESHARP = 3

    @property
    def acci(self) -> int:
        """Signed alteration in half-steps."""
        return _ACCI_VALUES[self]

    @property
    def suffix(self) -> str:
        """Symbol appended to the letter when displaying a note."""
        return _suffixes[self]

    @property
    def isPedalPosition(self) -> bool:
        return self is not SharpFlat.DOUBLESHARP

    def __str__(self) -> str:
        return self.name.lower()


PEDAL_POSITIONS: Sequence[SharpFlat] = (SharpFlat.SHARP, SharpFlat.NATURAL, SharpFlat.FLAT)
"""The positions a pedal can be set to, in search order."""

_ACCI_VALUES = (1, 0, -1, 2)
_suffixes = bidict(
    (
        (SharpFlat.SHARP, "#"),
        (SharpFlat.NATURAL, ""),
        (SharpFlat.FLAT, "b"),
        (SharpFlat.DOUBLESHARP, "x"),
    )
)
# accepted spellings when parsing, on top of the display suffixes
_acciAliases = pyr.pmap(
    {
        "+": SharpFlat.SHARP,
        "-": SharpFlat.FLAT,
        "##": SharpFlat.DOUBLESHARP,
        "++": SharpFlat.DOUBLESHARP,
        "X": SharpFlat.DOUBLESHARP,
        "♯": SharpFlat.SHARP,
        "♮": SharpFlat.NATURAL,
        "♭": SharpFlat.FLAT,
    }
)
_m21Accidentals = pyr.pmap(
    {
        SharpFlat.SHARP: "#",
        SharpFlat.NATURAL: "",
        SharpFlat.FLAT: "-",
        SharpFlat.DOUBLESHARP: "##",
    }
)


def _parseLetter(src: str) -> BasicNote:
    src = src.upper()
    if len(src) != 1 or not "A" <= src <= "G":
        raise ValueError(f"Invalid note letter: {src}")
    return BasicNote(ord(src) - 65)


def _parseSharpFlat(src: str) -> SharpFlat:
    if (sf := _suffixes.inv.get(src)) is not None:
        return sf
    if (sf := _acciAliases.get(src)) is not None:
        return sf
    raise ValueError(f"Invalid accidental: {src}")


def _parseNote(src: str) -> tuple[BasicNote, SharpFlat]:
    src = src.strip()
    if len(src) == 0:
        raise ValueError("Empty note name")
    return _parseLetter(src[0]), _parseSharpFlat(src[1:])


type SpellPref = Callable[[int], BasicNote]
"""
Type alias for a function that takes a pitch class (0 for A natural) and returns the letter
used to spell it. The accidental follows from the difference between the pitch class and the
natural pitch of that letter. Predefined rules can be found in `SpellPrefs`.
"""


@noInstance
class SpellPrefs:
    """See `SpellPref` for details."""

    @staticmethod
    def SHARP(pitchClass: int) -> BasicNote:
        """
        Spell every black key as a sharp of the letter below.

        | input | output | preferred name |
        |:-|:-|:-|
        | `1` | `A` | A sharp |
        | `4` | `C` | C sharp |
        | `11` | `G` | G sharp |
        """
        return BasicNote(bisect_right(BASIC_NOTE_OFFSETS, pitchClass) - 1)

    @staticmethod
    def FLAT(pitchClass: int) -> BasicNote:
        """
        Spell every black key as a flat of the letter above.

        | input | output | preferred name |
        |:-|:-|:-|
        | `1` | `B` | B flat |
        | `9` | `G` | G flat |
        | `11` | `A` | A flat |
        """
        return BasicNote(bisect_left(BASIC_NOTE_OFFSETS, pitchClass) % 7)

    @staticmethod
    def FLAT_F_SHARP(pitchClass: int) -> BasicNote:
        """
        Same as `FLAT`, except that the tritone above C is spelled F sharp instead of G flat.
        This is the default rule of `Note.fromPitch()`.
        """
        if pitchClass == 9:
            return BasicNote.F
        return SpellPrefs.FLAT(pitchClass)


def _acciFor(pitchClass: int, letter: BasicNote) -> SharpFlat:
    diff = (pitchClass - letter.offset + 6) % 12 - 6
    for sf in SharpFlat:
        if sf.acci == diff:
            return sf
    raise ValueError(f"Pitch class {pitchClass} cannot be spelled with letter {letter}")


class Note(M21Mixin["m21.pitch.Pitch"]):
    """
    A spelled pitch: a letter, an accidental and an octave count. Two notes with different
    spellings may share a pitch class, see `samePitch()`.

    The pitch number counts half-steps from A natural, so that A-flat in the base octave has
    the pitch number -1. A note with `octave=1` (or `True`, the octave-up flag) lies 12
    half-steps higher.
    """

    __slots__ = ("_letter", "_sharpFlat", "_octave")

    if t.TYPE_CHECKING:  # pragma: no cover

        @overload
        def __new__(cls, src: str, *, octave: int | bool = 0) -> Self:
            """
            Creates a note from its name, a letter followed by an optional accidental. `#` or
            `+` stands for sharp, `b` or `-` for flat, `x`, `##` or `++` for double sharp.
            """
            ...

        @overload
        def __new__(
            cls,
            letter: BasicNote | int | str,
            sharpFlat: SharpFlat | str = SharpFlat.NATURAL,
            octave: int | bool = 0,
        ) -> Self: ...

    def __new__(cls, arg1, sharpFlat=None, octave=0) -> Self:
        if isinstance(arg1, Note):
            if sharpFlat is None and not octave:
                return arg1
            if sharpFlat is None:
                sharpFlat = arg1.sharpFlat
            arg1 = arg1.letter
        if isinstance(arg1, str) and sharpFlat is None:
            letter, sharpFlat = _parseNote(arg1)
        elif isinstance(arg1, str):
            letter = _parseLetter(arg1)
        elif isinstance(arg1, BasicNote):
            letter = arg1
        elif isinstance(arg1, int):
            letter = BasicNote(arg1 % 7)
        else:
            raise TypeError(f"Unsupported note letter type: {type(arg1).__name__}")

        if sharpFlat is None:
            sharpFlat = SharpFlat.NATURAL
        elif isinstance(sharpFlat, str):
            sharpFlat = _parseSharpFlat(sharpFlat)
        else:
            sharpFlat = SharpFlat(sharpFlat)
        return cls._newHelper(letter, sharpFlat, int(octave))

    @classmethod
    @lru_cache
    def _newHelper(cls, letter: BasicNote, sharpFlat: SharpFlat, octave: int) -> Self:
        # create a new instance with caching
        return cls._newImpl(letter, sharpFlat, octave)

    @classmethod
    def _newImpl(cls, letter: BasicNote, sharpFlat: SharpFlat, octave: int) -> Self:
        self = super().__new__(cls)
        self._letter = letter
        self._sharpFlat = sharpFlat
        self._octave = octave
        return self

    @classmethod
    def fromPitch(cls, number: int, spellPref: SpellPref = SpellPrefs.FLAT_F_SHARP) -> Self:
        """
        Creates a note with the given pitch number, spelled according to `spellPref`.
        """
        pitchClass = number % 12
        letter = spellPref(pitchClass)
        sharpFlat = _acciFor(pitchClass, letter)
        octave = (number - letter.offset - sharpFlat.acci) // 12
        return cls._newHelper(letter, sharpFlat, octave)

    @property
    def letter(self) -> BasicNote:
        return self._letter

    @property
    def sharpFlat(self) -> SharpFlat:
        return self._sharpFlat

    @property
    def octave(self) -> int:
        return self._octave

    @property
    def octaveUp(self) -> bool:
        return self._octave > 0

    @property
    def number(self) -> int:
        """Pitch number in half-steps above A natural of the base octave."""
        return self._letter.offset + self._sharpFlat.acci + 12 * self._octave

    @property
    def pitchClass(self) -> int:
        """Pitch number reduced to the range 0 to 11."""
        return self.number % 12

    @property
    def pitchMask(self) -> int:
        """Pitch mask with the single bit of this note's pitch class."""
        return pitchBit(self.number)

    def samePitch(self, other: Note) -> bool:
        """Whether both notes have the same pitch class, regardless of spelling."""
        return self.pitchClass == other.pitchClass

    def withOctave(self, octave: int | bool) -> Self:
        return self._newHelper(self._letter, self._sharpFlat, int(octave))

    def m21(self, *, octave: int | None = None) -> "m21.pitch.Pitch":
        from music21.pitch import Pitch as m21Pitch

        name = f"{self._letter.name}{_m21Accidentals[self._sharpFlat]}"
        if octave is None:
            return m21Pitch(name)
        return m21Pitch(name, octave=octave)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Note):
            return NotImplemented
        return (self._letter, self._sharpFlat, self._octave) == (
            other._letter,
            other._sharpFlat,
            other._octave,
        )

    def __hash__(self) -> int:
        return hash((self._letter, self._sharpFlat, self._octave))

    def __str__(self) -> str:
        return f"{self._letter.name}{self._sharpFlat.suffix}"

    def __repr__(self) -> str:
        if self._octave:
            return f'{self.__class__.__name__}("{self!s}", octave={self._octave})'
        return f'{self.__class__.__name__}("{self!s}")'
