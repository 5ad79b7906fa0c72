from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from functools import lru_cache
from typing import Self, overload
import logging
import typing as t
import warnings

import numpy as np
import pyrsistent as pyr

from .chords import Ninth, Seventh, chordNamesByMask
from .keysig import Scale
from .note import BASIC_NOTE_OFFSETS, PEDAL_POSITIONS, BasicNote, Note, SharpFlat
from .observe import Observable
from .utils.bitmap import pitchBit, popcount

__all__ = [
    "MIN_SEARCH_NOTES",
    "MAX_SEARCH_NOTES",
    "PedalPosition",
    "Pedal",
    "Pedals",
]

logger = logging.getLogger(__name__)

MIN_SEARCH_NOTES = 4
"""Fewest pitch classes a mask needs for `Pedals.pedalsForPitchMask()` to search it."""

MAX_SEARCH_NOTES = 7
"""Most pitch classes 7 pedals can produce."""

PEDAL_PITCHES: np.ndarray = (BASIC_NOTE_OFFSETS[:, np.newaxis] + np.array([1, 0, -1])) % 12
"""
Pitch classes of every pedal (rows, A to G) in every position (columns, sharp, natural,
flat). A-flat wraps around to 11.
"""
PEDAL_PITCHES.flags.writeable = False

_PEDAL_MASKS: tuple[tuple[int, ...], ...] = tuple(
    tuple(pitchBit(int(p)) for p in row) for row in PEDAL_PITCHES
)

# letters whose pedal may not be flat while the previous letter's pedal is sharp: B-sharp
# sounds above C-flat and E-sharp above F-flat, so a glissando would run backwards
_NO_FLAT_AFTER_SHARP = frozenset((BasicNote.C, BasicNote.F))


class PedalPosition(Sequence[SharpFlat]):
    """
    An immutable snapshot of the positions of all 7 pedals, in letter order A to G. Can be
    indexed by position in the sequence or by `BasicNote`.
    """

    __slots__ = ("_positions",)

    if t.TYPE_CHECKING:  # pragma: no cover

        @overload
        def __new__(cls, positions: Iterable[SharpFlat]) -> Self: ...

        @overload
        def __new__(cls, *positions: SharpFlat) -> Self: ...

    def __new__(cls, *args) -> Self:
        if len(args) == 1 and isinstance(args[0], Iterable):
            positions = tuple(args[0])
        else:
            positions = args
        if len(positions) != 7:
            raise ValueError(f"Expected 7 pedal positions, got {len(positions)}")
        positions = tuple(SharpFlat(p) for p in positions)
        if SharpFlat.DOUBLESHARP in positions:
            raise ValueError("A pedal cannot be set to double sharp")
        return cls._newHelper(positions)

    @classmethod
    @lru_cache
    def _newHelper(cls, positions: tuple[SharpFlat, ...]) -> Self:
        self = super().__new__(cls)
        self._positions = pyr.pvector(positions)
        return self

    @classmethod
    def natural(cls) -> Self:
        """All pedals natural."""
        return cls._newHelper((SharpFlat.NATURAL,) * 7)

    def __len__(self) -> int:
        return 7

    def __getitem__(self, key: int | BasicNote | slice) -> SharpFlat | tuple[SharpFlat, ...]:
        if isinstance(key, slice):
            return tuple(self._positions[key])
        return self._positions[int(key)]

    def __iter__(self) -> Iterator[SharpFlat]:
        return iter(self._positions)

    def notes(self) -> list[Note]:
        """The 7 pedal notes, A to G."""
        return [Note(letter, sf) for letter, sf in zip(BasicNote, self._positions)]

    def getPitchMask(self) -> int:
        mask = 0
        for letter, sf in zip(BasicNote, self._positions):
            mask |= _PEDAL_MASKS[letter][sf]
        return mask

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PedalPosition):
            return NotImplemented
        return self._positions == other._positions

    def __hash__(self) -> int:
        return hash(self._positions)

    def __str__(self) -> str:
        return " ".join(str(note) for note in self.notes())

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}("{self!s}")'


class Pedal:
    """
    The pedal of one string letter. The pitches of its 3 positions are computed once, indexed
    by the `SharpFlat` value of the position.
    """

    __slots__ = ("_letter", "_position", "_pitches", "_pitchMasks")

    def __init__(self, letter: BasicNote):
        self._letter = letter
        self._position = SharpFlat.NATURAL
        self._pitches = tuple(int(p) for p in PEDAL_PITCHES[letter])
        self._pitchMasks = _PEDAL_MASKS[letter]

    @property
    def letter(self) -> BasicNote:
        return self._letter

    @property
    def position(self) -> SharpFlat:
        return self._position

    def getPosition(self) -> SharpFlat:
        return self._position

    def setPosition(self, position: SharpFlat) -> None:
        """Moves the pedal. A double sharp is not a pedal position and is ignored."""
        position = SharpFlat(position)
        if position is SharpFlat.DOUBLESHARP:
            logger.debug("ignoring double sharp for pedal %s", self._letter)
            return
        self._position = position

    def getNote(self) -> Note:
        return Note(self._letter, self._position)

    def getOptions(self) -> list[Note]:
        """Notes of the two positions other than the current one, sharp first."""
        return [
            Note(self._letter, sf) for sf in PEDAL_POSITIONS if sf is not self._position
        ]

    def getPitch(self) -> int:
        """Pitch class of the current position, 0 for A natural."""
        return self._pitches[self._position]

    def getPitchMask(self) -> int:
        return self._pitchMasks[self._position]

    @property
    def allPitchMasks(self) -> tuple[int, int, int]:
        """Pitch masks of the sharp, natural and flat positions."""
        return self._pitchMasks

    def __str__(self) -> str:
        return f"{self._letter.name}{self._position.suffix}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self!s})"


@lru_cache
def _searchPitchMask(pitchMask: int) -> tuple[PedalPosition, ...]:
    n = popcount(pitchMask)
    if n < MIN_SEARCH_NOTES or n > MAX_SEARCH_NOTES:
        return ()
    solutions = []
    chosen = [SharpFlat.NATURAL] * 7

    def search(letter: int, cumMask: int) -> None:
        if letter == 7:
            # every chosen pitch is in the target, but some target pitch may still be missing
            if cumMask == pitchMask:
                solutions.append(PedalPosition(chosen))
            return
        for sf in PEDAL_POSITIONS:
            if (
                letter in _NO_FLAT_AFTER_SHARP
                and sf is SharpFlat.FLAT
                and chosen[letter - 1] is SharpFlat.SHARP
            ):
                continue
            mask = _PEDAL_MASKS[letter][sf]
            if mask & pitchMask == 0:
                continue
            chosen[letter] = sf
            search(letter + 1, cumMask | mask)

    search(0, 0)
    return tuple(solutions)


class Pedals(Observable):
    """
    The 7 pedals of a harp, A to G. Every mutating call fires one `PropertyChange` named
    `PROP_PEDALS` whose old and new values are `PedalPosition` snapshots.
    """

    __slots__ = ("_pedals",)

    PROP_PEDALS = "Pedals"

    def __init__(self, positions: PedalPosition | None = None):
        super().__init__()
        self._pedals = tuple(Pedal(letter) for letter in BasicNote)
        if positions is not None:
            for pedal, sf in zip(self._pedals, positions):
                pedal.setPosition(sf)

    def __getitem__(self, letter: BasicNote) -> Pedal:
        return self._pedals[letter]

    def __iter__(self) -> Iterator[Pedal]:
        return iter(self._pedals)

    def getPosition(self, letter: BasicNote) -> SharpFlat:
        return self._pedals[letter].position

    def getPedalPositions(self) -> PedalPosition:
        return PedalPosition(pedal.position for pedal in self._pedals)

    def label(self, letter: BasicNote) -> str:
        """Display name of one pedal, e.g. `"C#"`."""
        return str(self._pedals[letter])

    def setPosition(self, letter: BasicNote, position: SharpFlat) -> None:
        """Moves one pedal. Setting a double sharp is ignored and fires nothing."""
        position = SharpFlat(position)
        if position is SharpFlat.DOUBLESHARP:
            logger.debug("ignoring double sharp for pedal %s", BasicNote(letter))
            return
        old = self.getPedalPositions()
        self._pedals[letter].setPosition(position)
        self._fire(self.PROP_PEDALS, old, self.getPedalPositions())

    def setAllNatural(self) -> None:
        old = self.getPedalPositions()
        for pedal in self._pedals:
            pedal.setPosition(SharpFlat.NATURAL)
        self._fire(self.PROP_PEDALS, old, self.getPedalPositions())

    def setPedals(self, arg: Note | Iterable[Note] | PedalPosition | None) -> None:
        """
        Sets pedals from:

        * a `Note`: only the pedal of the note's letter changes;
        * an iterable of `Note`s: the pedal of each note's letter, other pedals keep their
          position (call `setAllNatural()` first to reset them);
        * a `PedalPosition`: all 7 pedals.

        `None` is accepted and changes nothing. Notes spelled with a double sharp leave their
        pedal unchanged.
        """
        if arg is None:
            return
        old = self.getPedalPositions()
        if isinstance(arg, PedalPosition):
            for pedal, sf in zip(self._pedals, arg):
                pedal.setPosition(sf)
        elif isinstance(arg, Note):
            self._pedals[arg.letter].setPosition(arg.sharpFlat)
        elif isinstance(arg, Iterable):
            notes = tuple(arg)
            for note in notes:
                if not isinstance(note, Note):
                    raise TypeError(f"Expected a Note, got {type(note).__name__}")
            seen = {}
            for note in notes:
                if seen.get(note.letter, note.sharpFlat) is not note.sharpFlat:
                    warnings.warn(
                        f"Pedal {note.letter} is set more than once; using {note}."
                    )
                seen[note.letter] = note.sharpFlat
                self._pedals[note.letter].setPosition(note.sharpFlat)
        else:
            raise TypeError(f"Cannot set pedals from {type(arg).__name__}")
        self._fire(self.PROP_PEDALS, old, self.getPedalPositions())

    def getNotes(self, firstNote: Note) -> list[Note]:
        """
        The 7 current pedal notes in glissando order, starting at the letter of `firstNote`.
        Notes are placed an octave up once the walk passes G, and from the start when the
        first pedal is A-flat.
        """
        num = int(firstNote.letter)
        octave = (
            firstNote.letter is BasicNote.A and self._pedals[0].position is SharpFlat.FLAT
        )
        notes = []
        for _ in range(7):
            pedal = self._pedals[num % 7]
            notes.append(Note(pedal.letter, pedal.position, octave))
            num += 1
            if num >= 7:
                octave = True
        return notes

    def findAlternate(self, note: Note, candidates: Iterable[Note]) -> Note | None:
        """
        Another position of the pedal of `note`'s letter that sounds like one of
        `candidates`, trying the remaining positions sharp first. `None` if neither does.
        """
        candidates = tuple(candidates)
        for option in self._pedals[note.letter].getOptions():
            if any(option.samePitch(c) for c in candidates):
                return option
        return None

    def getPitchMask(self) -> int:
        mask = 0
        for pedal in self._pedals:
            mask |= pedal.getPitchMask()
        return mask

    def pedalsForPitchMask(self, pitchMask: int) -> list[PedalPosition]:
        """
        Every pedal setting whose combined pitches are exactly `pitchMask`.

        Masks with fewer than 4 or more than 7 pitch classes are not searched. Settings with
        B sharp below C flat, or E sharp below F flat, are excluded since a glissando over
        them would not ascend. Solutions are ordered with pedal A varying slowest and G
        fastest, each pedal trying sharp, natural, flat; the first one is the preferred
        setting. An empty list means no setting exists.
        """
        solutions = list(_searchPitchMask(pitchMask))
        logger.debug(
            "%d pedal settings for pitch mask %012b", len(solutions), pitchMask
        )
        return solutions

    def findChordName(self) -> str:
        """
        Names of the scales, seventh chords and ninth chords sounding on the current pedals,
        one per line. Empty if there is none.
        """
        pitchMask = self.getPitchMask()
        lines = []
        if scaleName := Scale.getNameByMask(pitchMask):
            lines.append(scaleName)
        lines.extend(chordNamesByMask(pitchMask, Seventh))
        lines.extend(chordNamesByMask(pitchMask, Ninth))
        return "\n".join(lines)

    def __str__(self) -> str:
        return " ".join(str(pedal) for pedal in self._pedals)

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}("{self!s}")'
