"""
Data handed to an audio player. The library does not play sound; a player implementing
`NotePlayer` receives the notes and the delay between them.
"""

from collections.abc import Iterable, Sequence
from typing import Protocol

from .note import Note
from .utils.bitmap import MASK12

__all__ = [
    "SLOW_DELAY",
    "FAST_DELAY",
    "SAMPLE_NAMES",
    "NotePlayer",
    "sampleIndex",
    "sampleIndices",
    "maskSchedule",
]

SLOW_DELAY = 250
"""Delay between arpeggiated notes, in milliseconds."""

FAST_DELAY = 50
"""Delay between glissando notes, in milliseconds."""


def _sampleNames() -> tuple[str, ...]:
    names = ("A", "As", "B", "C", "Cs", "D", "Ds", "E", "F", "Fs", "G", "Gs")
    result = []
    for i in range(49):
        octave, pitch = divmod(i, 12)
        # sample octaves are numbered like piano keys and change at C
        result.append(f"{names[pitch][0]}{octave + 2 + (pitch >= 3)}{names[pitch][1:]}")
    return tuple(result)


SAMPLE_NAMES: Sequence[str] = _sampleNames()
"""Names of the recorded string samples, A2 to A6, one per half-step. Index 0 is pitch 0."""


class NotePlayer(Protocol):
    def play(self, notes: Sequence[Note], delay: int = SLOW_DELAY) -> None:
        """Plays `notes` in order, `delay` milliseconds apart."""
        ...


def sampleIndex(note: Note) -> int | None:
    """Index of the sample sounding `note`, `None` if it lies outside the recorded range."""
    number = note.number
    if 0 <= number < len(SAMPLE_NAMES):
        return number
    return None


def sampleIndices(notes: Iterable[Note]) -> list[int]:
    """Sample indices of `notes`, skipping notes outside the recorded range."""
    return [i for note in notes if (i := sampleIndex(note)) is not None]


def maskSchedule(mask: int, start: int, octaves: int = 1) -> list[int]:
    """
    Sample indices of an arpeggio over a pitch mask whose left-most bit is the sample `start`,
    repeated for `octaves` octaves and clipped to the recorded range.
    """
    indices = []
    for i in range(12 * octaves):
        index = start + i
        if index >= len(SAMPLE_NAMES):
            break
        if (MASK12 >> (i % 12)) & mask:
            indices.append(index)
    return indices
