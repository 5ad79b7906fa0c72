import unittest
from pathlib import Path
import sys

DIR = Path(__file__).parent if "__file__" in locals() else Path.cwd()
sys.path.append(str(DIR / "../src"))

import pedalharp as ph  # noqa: E402

KS = ph.KeySignature


class TestHarp(unittest.TestCase):
    def test_setPedalsForKey(self):
        harp = ph.Harp(ph.Key(KS.FLAT4))
        harp.setPedalsForKey()
        self.assertEqual(str(harp.pedals), "Ab Bb C Db Eb F G")
        self.assertEqual(harp.firstNote, ph.Note("Ab", octave=1))
        harp.key.setScale(ph.Scale.MELODIC)
        harp.setPedalsForKey()
        self.assertEqual(str(harp.pedals), "Ab Bb C D E F G")
        self.assertEqual(harp.pedals.findChordName(), "f melodic minor")

    def test_doubleSharp(self):
        # Fx cannot be set on a pedal
        key = ph.Key(KS.SHARP5, ph.Scale.HARMONIC)
        harp = ph.Harp(key)
        harp.setPedalsForKey()
        self.assertEqual(harp.pedals.getPitchMask(), key.getPitchMask())
        self.assertEqual(
            harp.pedals.getPedalPositions(),
            harp.pedals.pedalsForPitchMask(key.getPitchMask())[0],
        )
        self.assertEqual(harp.pedals.findChordName(), "ab/g# harmonic minor")

    def test_tonic(self):
        harp = ph.Harp()
        harp.setPedalsForTonic()
        self.assertEqual(str(harp.pedals), "A B# C D E Fb G")
        self.assertEqual(harp.pedals.findChordName(), "C6/9")
        self.assertEqual(harp.firstNote, ph.Note("C"))

    def test_v7(self):
        harp = ph.Harp(ph.Key(KS.NONE, ph.Scale.HARMONIC))
        harp.setPedalsForV7()
        self.assertIs(harp.key.scale, ph.Scale.MAJOR)
        self.assertEqual(str(harp.pedals), "A B Cb D E# F G")
        self.assertEqual(harp.pedals.findChordName(), "G9")
        self.assertEqual(harp.firstNote, ph.Note("G"))

    def test_v7AFlat(self):
        harp = ph.Harp(ph.Key(KS.FLAT4))
        harp.setPedalsForV7()
        self.assertEqual(str(harp.pedals), "A# Bb C# Db Eb F G")
        self.assertEqual(harp.pedals.findChordName(), "Eb9")
        # the dominant of A-flat, above the tonic
        self.assertEqual(harp.firstNote, ph.Note("Eb", octave=1))
        self.assertGreater(harp.firstNote.number, harp.key.getFirstNote().number)

    def test_setPedalsForChord(self):
        harp = ph.Harp()
        pos = harp.setPedalsForChord(ph.Seventh.DIM7, ph.Note("C"))
        self.assertEqual(str(pos), "A B# C D# Eb F# Gb")
        self.assertEqual(harp.pedals.getPedalPositions(), pos)
        self.assertEqual(harp.firstNote, ph.Note("C"))
        # no pedal produces a pitch of G7 on the A string
        self.assertIsNone(harp.setPedalsForChord(ph.Seventh.DOM7, ph.Note("G")))
        self.assertEqual(harp.pedals.getPedalPositions(), pos)

    def test_alternates(self):
        harp = ph.Harp()
        harp.setPedalsForKey()
        alternates = harp.alternates()
        self.assertIn(ph.PedalPosition.natural(), alternates)
        for pos in alternates:
            self.assertEqual(pos.getPitchMask(), harp.key.getPitchMask())

    def test_glissNotes(self):
        harp = ph.Harp()
        harp.setPedalsForKey()
        notes = harp.glissNotes(octaves=2)
        self.assertEqual(len(notes), 14)
        numbers = [n.number for n in notes]
        self.assertEqual(numbers, sorted(numbers))
        self.assertEqual(numbers[0], 3)
        self.assertEqual(numbers[7], 15)


if __name__ == "__main__":
    unittest.main()
