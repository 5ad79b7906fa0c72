from .utils.bitmap import *  # noqa: F401, F403
from .note import *  # noqa: F401, F403
from .observe import *  # noqa: F401, F403
from .keysig import *  # noqa: F401, F403
from .key import *  # noqa: F401, F403
from .chords import *  # noqa: F401, F403
from .pedals import *  # noqa: F401, F403
from .harp import *  # noqa: F401, F403
from . import playback  # noqa: F401
