"""
Pedal presets for a key or a chord, as offered to a harpist: setting the pedals for a scale,
respelling it for tonic-chord and dominant-seventh glissandi, and finding the settings of a
chord.
"""

from __future__ import annotations

import logging

from .chords import ChordType
from .key import Key
from .keysig import Scale
from .note import Note, SharpFlat
from .pedals import PedalPosition, Pedals

__all__ = ["Harp"]

logger = logging.getLogger(__name__)


class Harp:
    """
    A `Key` and the `Pedals` of a harp, plus the note a glissando starts from. Change
    notifications come from the key and the pedals themselves.
    """

    __slots__ = ("_key", "_pedals", "_firstNote")

    def __init__(self, key: Key | None = None, pedals: Pedals | None = None):
        self._key = Key() if key is None else key
        self._pedals = Pedals() if pedals is None else pedals
        self._firstNote = self._key.getFirstNote()

    @property
    def key(self) -> Key:
        return self._key

    @property
    def pedals(self) -> Pedals:
        return self._pedals

    @property
    def firstNote(self) -> Note:
        """The note glissandi start from."""
        return self._firstNote

    @firstNote.setter
    def firstNote(self, note: Note) -> None:
        self._firstNote = note

    def setPedalsForKey(self) -> None:
        """
        Sets the pedals to the notes of the key. A scale with a double sharp cannot be set
        note by note, so the preferred pedal setting for its pitches is used instead.
        """
        self._pedals.setAllNatural()
        notes = self._key.getNotes()
        if any(note.sharpFlat is SharpFlat.DOUBLESHARP for note in notes):
            solutions = self._pedals.pedalsForPitchMask(self._key.getPitchMask())
            if solutions:
                self._pedals.setPedals(solutions[0])
            else:
                logger.debug("no pedal setting for %s", self._key)
        else:
            self._pedals.setPedals(notes)
        self._firstNote = self._key.getFirstNote()

    def _respell(self, degrees: tuple[int, int]) -> None:
        self._key.setScale(Scale.MAJOR)
        self.setPedalsForKey()
        notes = self._key.getNotes()
        replaced = [notes[i] for i in degrees]
        rest = [note for i, note in enumerate(notes) if i not in degrees]
        alternates = [self._pedals.findAlternate(note, rest) for note in replaced]
        for alternate in alternates:
            self._pedals.setPedals(alternate)

    def setPedalsForTonic(self) -> None:
        """
        Pedals for a glissando on the tonic chord of the major key: the 4th and 7th degrees
        are respelled to double other scale notes where their pedals allow it.
        """
        self._respell((3, 6))
        self._firstNote = self._key.getFirstNote()

    def setPedalsForV7(self) -> None:
        """
        Pedals for a glissando on the dominant seventh of the major key: the 1st and 3rd
        degrees are respelled. The glissando starts on the dominant.
        """
        self._respell((0, 2))
        self._firstNote = Note.fromPitch(self._key.getFirstNote().number + 7)

    def setPedalsForChord(self, chord: ChordType, root: Note) -> PedalPosition | None:
        """
        Sets the preferred pedals for a chord and returns them, or returns `None` and leaves
        the pedals unchanged when the chord cannot be played.
        """
        self._firstNote = root
        solutions = self._pedals.pedalsForPitchMask(chord.pitchMask(root))
        if not solutions:
            return None
        self._pedals.setPedals(solutions[0])
        return solutions[0]

    def alternates(self) -> list[PedalPosition]:
        """All pedal settings sounding the same pitches as the current one."""
        return self._pedals.pedalsForPitchMask(self._pedals.getPitchMask())

    def glissNotes(self, octaves: int = 3) -> list[Note]:
        """The notes of a glissando from `firstNote` over several octaves."""
        notes = self._pedals.getNotes(self._firstNote)
        return [note.withOctave(note.octave + o) for o in range(octaves) for note in notes]
