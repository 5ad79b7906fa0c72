"""
# `pedalharp`: Pedal Settings for the Pedal Harp

This is the top-level module of the `pedalharp` library. It derives the pitches of key
signatures, scales and chords, names the scale or chord sounding on a set of harp pedals, and
finds every pedal setting that produces a given set of pitch classes.
"""

import logging

from ._impl import *  # noqa: F401, F403

logging.getLogger(__name__).addHandler(logging.NullHandler())
