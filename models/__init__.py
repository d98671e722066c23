from .category import Category
from .track import Track, format_time
from .playback import PlaybackState, PlaybackMode, Infinite, Timed, TIMING_OPTIONS

__all__ = [
    "Category",
    "Track",
    "format_time",
    "PlaybackState",
    "PlaybackMode",
    "Infinite",
    "Timed",
    "TIMING_OPTIONS",
]
