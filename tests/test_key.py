import unittest
from pathlib import Path
import sys

DIR = Path(__file__).parent if "__file__" in locals() else Path.cwd()
sys.path.append(str(DIR / "../src"))

import pedalharp as ph  # noqa: E402


def spelled(notes):
    return [str(note) for note in notes]


class TestKey(unittest.TestCase):
    def test_allKeys(self):
        for keySig in ph.KeySignature:
            for scale in ph.Scale:
                with self.subTest(keySig=keySig, scale=scale):
                    key = ph.Key(keySig, scale)
                    notes = key.getNotes()
                    self.assertEqual(len(notes), 7)
                    self.assertEqual(notes[0], key.getFirstNote())
                    for a, b in zip(notes, notes[1:]):
                        self.assertEqual(b.letter, a.letter.next())
                        self.assertGreater(b.number, a.number)
                    self.assertEqual(ph.popcount(key.getPitchMask()), 7)
                    self.assertEqual(
                        ph.rotationMatches(key.getPitchMask(), scale.mask),
                        (notes[0].pitchClass,),
                    )

    def test_spelling(self):
        KS, S = ph.KeySignature, ph.Scale
        testData = (
            (KS.NONE, S.MAJOR, ["C", "D", "E", "F", "G", "A", "B"]),
            (KS.NONE, S.MINOR, ["A", "B", "C", "D", "E", "F", "G"]),
            (KS.NONE, S.HARMONIC, ["A", "B", "C", "D", "E", "F", "G#"]),
            (KS.NONE, S.MELODIC, ["A", "B", "C", "D", "E", "F#", "G#"]),
            (KS.SHARP5, S.HARMONIC, ["G#", "A#", "B", "C#", "D#", "E", "Fx"]),
            (KS.SHARP5, S.MELODIC, ["G#", "A#", "B", "C#", "D#", "E#", "Fx"]),
            (KS.FLAT3, S.HARMONIC, ["C", "D", "Eb", "F", "G", "Ab", "B"]),
            (KS.FLAT3, S.MELODIC, ["C", "D", "Eb", "F", "G", "A", "B"]),
            (KS.FLAT4, S.MAJOR, ["Ab", "Bb", "C", "Db", "Eb", "F", "G"]),
            (KS.FLAT7, S.HARMONIC, ["Ab", "Bb", "Cb", "Db", "Eb", "Fb", "G"]),
            (KS.SHARP7, S.MAJOR, ["C#", "D#", "E#", "F#", "G#", "A#", "B#"]),
        )
        for keySig, scale, ans in testData:
            with self.subTest(keySig=keySig, scale=scale):
                self.assertEqual(spelled(ph.Key(keySig, scale).getNotes()), ans)

    def test_aFlat(self):
        notes = ph.Key(ph.KeySignature.FLAT4).getNotes()
        self.assertTrue(all(note.octaveUp for note in notes))
        self.assertEqual([n.number for n in notes], [11, 13, 15, 16, 18, 20, 22])
        # octave flags are set once the letters pass G
        notes = ph.Key(ph.KeySignature.NONE).getNotes()
        self.assertEqual([n.octaveUp for n in notes], [False] * 5 + [True] * 2)

    def test_firstNote(self):
        # an A-flat tonic lies an octave up, like the rest of its scale
        testData = (
            (ph.KeySignature.FLAT4, ph.Scale.MAJOR),
            (ph.KeySignature.FLAT7, ph.Scale.MINOR),
            (ph.KeySignature.FLAT7, ph.Scale.HARMONIC),
            (ph.KeySignature.FLAT7, ph.Scale.MELODIC),
        )
        for keySig, scale in testData:
            with self.subTest(keySig=keySig, scale=scale):
                key = ph.Key(keySig, scale)
                self.assertEqual(key.getFirstNote(), ph.Note("Ab", octave=1))
                self.assertEqual(key.getFirstNote().number, 11)
        self.assertEqual(str(ph.Key(ph.KeySignature.FLAT4)), "Ab major")
        self.assertEqual(ph.Key(ph.KeySignature.SHARP5, ph.Scale.MINOR).getFirstNote(), ph.Note("G#"))

    def test_display(self):
        self.assertEqual(str(ph.Key()), "C major")
        self.assertEqual(str(ph.Key(ph.KeySignature.NONE, ph.Scale.HARMONIC)), "a harmonic minor")
        self.assertEqual(str(ph.Key(ph.KeySignature.SHARP4, ph.Scale.MINOR)), "c# minor")
        self.assertEqual(repr(ph.Key()), "Key(NONE, MAJOR)")

    def test_notifications(self):
        key = ph.Key()
        events = []
        listener = events.append
        key.addListener(listener)
        key.setKeySignature(ph.KeySignature.SHARP1)
        key.setScale(ph.Scale.HARMONIC)
        self.assertEqual(
            events,
            [
                ph.PropertyChange("KeySig", ph.KeySignature.NONE, ph.KeySignature.SHARP1),
                ph.PropertyChange("Scale", ph.Scale.MAJOR, ph.Scale.HARMONIC),
            ],
        )
        self.assertEqual(str(key), "e harmonic minor")
        key.removeListener(listener)
        key.removeListener(listener)  # unknown listeners are ignored
        key.setScale(ph.Scale.MAJOR)
        self.assertEqual(len(events), 2)
        self.assertEqual(key.getFirstNote(), ph.Note("G"))

    def test_removeBoundMethod(self):
        class Recorder:
            def __init__(self):
                self.events = []

            def onChange(self, event):
                self.events.append(event)

        key = ph.Key()
        recorder = Recorder()
        key.addListener(recorder.onChange)
        key.removeListener(recorder.onChange)
        key.setScale(ph.Scale.HARMONIC)
        self.assertEqual(recorder.events, [])

        pedals = ph.Pedals()
        pedals.addListener(recorder.onChange)
        pedals.setAllNatural()
        pedals.removeListener(recorder.onChange)
        pedals.setAllNatural()
        self.assertEqual(len(recorder.events), 1)


if __name__ == "__main__":
    unittest.main()
