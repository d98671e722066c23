from .header import Header
from .help_screen import HelpScreen
from .track_list import TrackList, TrackItem

__all__ = [
    "Header",
    "HelpScreen",
    "TrackList",
    "TrackItem",
]
