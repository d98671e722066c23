from .catalog import Catalog, CatalogError
from .audio_player import AudioPlayer, AudioSourceUnavailable
from .saved_tracks import SavedTracksStore
from .playback_session import PlaybackSession

__all__ = [
    'Catalog',
    'CatalogError',
    'AudioPlayer',
    'AudioSourceUnavailable',
    'SavedTracksStore',
    'PlaybackSession',
]
