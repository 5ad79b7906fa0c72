from __future__ import annotations

from .keysig import KeySignature, Scale
from .note import BasicNote, Note, SharpFlat
from .observe import Observable

__all__ = ["Key"]

# spelling of a scale degree, by how the signature treats its letter and whether the degree is
# raised (the 7th of harmonic and melodic minor, the 6th of melodic minor)
_SPELLINGS = {
    # (signature accidental, raised)
    (SharpFlat.SHARP, False): SharpFlat.SHARP,
    (SharpFlat.SHARP, True): SharpFlat.DOUBLESHARP,
    (SharpFlat.FLAT, False): SharpFlat.FLAT,
    (SharpFlat.FLAT, True): SharpFlat.NATURAL,
    (SharpFlat.NATURAL, False): SharpFlat.NATURAL,
    (SharpFlat.NATURAL, True): SharpFlat.SHARP,
}


def _isRaised(degree: int, scale: Scale) -> bool:
    if degree == 6:
        return scale in (Scale.HARMONIC, Scale.MELODIC)
    if degree == 5:
        return scale is Scale.MELODIC
    return False


class Key(Observable):
    """
    A key signature together with a scale quality. Changing either fires a `PropertyChange`
    named `PROP_KEYSIG` or `PROP_SCALE` with the old and new values.
    """

    __slots__ = ("_keySig", "_scale")

    PROP_KEYSIG = "KeySig"
    PROP_SCALE = "Scale"

    def __init__(self, keySig: KeySignature = KeySignature.NONE, scale: Scale = Scale.MAJOR):
        super().__init__()
        self._keySig = keySig
        self._scale = scale

    @property
    def keySignature(self) -> KeySignature:
        return self._keySig

    def setKeySignature(self, keySig: KeySignature) -> None:
        old = self._keySig
        self._keySig = keySig
        self._fire(self.PROP_KEYSIG, old, keySig)

    @property
    def scale(self) -> Scale:
        return self._scale

    def setScale(self, scale: Scale) -> None:
        old = self._scale
        self._scale = scale
        self._fire(self.PROP_SCALE, old, scale)

    @property
    def isMajor(self) -> bool:
        return self._scale.isMajor

    def _tonic(self) -> Note:
        if self.isMajor:
            return self._keySig.majorNote
        return self._keySig.minorNote

    def getFirstNote(self) -> Note:
        """Tonic of the key, the first note of `getNotes()`."""
        return self.getNotes()[0]

    def getNotes(self) -> list[Note]:
        """
        The 7 notes of the scale, one per letter starting at the tonic letter. Notes past G are
        placed an octave up, and a scale starting on A-flat is placed an octave up entirely, so
        that pitch numbers increase along the scale. Raised degrees may be spelled with a
        double sharp, which no pedal can produce directly.
        """
        first = self._tonic()
        num = int(first.letter)
        if first.letter is BasicNote.A and first.sharpFlat is SharpFlat.FLAT:
            num = 7
        if self._keySig.hasSharps:
            signatureAcci = SharpFlat.SHARP
        else:
            signatureAcci = SharpFlat.FLAT
        notes = []
        for i in range(7):
            letter = BasicNote(num % 7)
            if letter in self._keySig.sharpFlats:
                acci = signatureAcci
            else:
                acci = SharpFlat.NATURAL
            sharpFlat = _SPELLINGS[acci, _isRaised(i, self._scale)]
            notes.append(Note(letter, sharpFlat, num >= 7))
            num += 1
        return notes

    def getPitchMask(self) -> int:
        mask = 0
        for note in self.getNotes():
            mask |= note.pitchMask
        return mask

    def __str__(self) -> str:
        if self.isMajor:
            return f"{self._tonic()} {self._scale.displayName}"
        # minor keys use lower case
        return f"{str(self._tonic()).lower()} {self._scale.displayName}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._keySig.name}, {self._scale.name})"
