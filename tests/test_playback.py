import unittest
from pathlib import Path
import sys

DIR = Path(__file__).parent if "__file__" in locals() else Path.cwd()
sys.path.append(str(DIR / "../src"))

import pedalharp as ph  # noqa: E402
from pedalharp import playback  # noqa: E402


class RecordingPlayer:
    def __init__(self):
        self.calls = []

    def play(self, notes, delay=playback.SLOW_DELAY):
        self.calls.append((playback.sampleIndices(notes), delay))


class TestPlayback(unittest.TestCase):
    def test_samples(self):
        self.assertEqual(len(playback.SAMPLE_NAMES), 49)
        self.assertEqual(playback.SAMPLE_NAMES[0], "A2")
        self.assertEqual(playback.SAMPLE_NAMES[1], "A2s")
        self.assertEqual(playback.SAMPLE_NAMES[3], "C3")
        self.assertEqual(playback.SAMPLE_NAMES[48], "A6")

    def test_sampleIndex(self):
        self.assertEqual(playback.sampleIndex(ph.Note("A")), 0)
        self.assertEqual(playback.sampleIndex(ph.Note("C#", octave=1)), 16)
        self.assertEqual(playback.sampleIndex(ph.Note("A", octave=4)), 48)
        self.assertIsNone(playback.sampleIndex(ph.Note("Ab")))
        self.assertIsNone(playback.sampleIndex(ph.Note("B", octave=4)))
        self.assertEqual(
            playback.sampleIndices([ph.Note("Ab"), ph.Note("A"), ph.Note("B")]), [0, 2]
        )

    def test_maskSchedule(self):
        major = ph.Scale.MAJOR.mask
        self.assertEqual(playback.maskSchedule(major, 3), [3, 5, 7, 8, 10, 12, 14])
        self.assertEqual(len(playback.maskSchedule(major, 0, octaves=2)), 14)
        # clipped to the last sample
        self.assertEqual(playback.maskSchedule(major, 40), [40, 42, 44, 45, 47])

    def test_player(self):
        harp = ph.Harp()
        harp.setPedalsForKey()
        player = RecordingPlayer()
        player.play(harp.glissNotes(octaves=1), playback.FAST_DELAY)
        self.assertEqual(player.calls, [([3, 5, 7, 8, 10, 12, 14], 50)])


if __name__ == "__main__":
    unittest.main()
