"""
Playback session for Neural Waves.

Holds the current track, play/pause state, playback mode, elapsed and
remaining counters and the saved-track set. The UI registers callbacks for
the events it cares about and redraws when the session emits them.

The one-second tick is a timer obtained from the ``scheduler`` callable
(Textual's ``App.set_interval`` in the app). The session owns that timer and
stops it on every transition that ends playback, so at most one tick source
is ever live.
"""

import logging
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Protocol

from config import TICK_INTERVAL
from models.playback import Infinite, PlaybackMode, PlaybackState, Timed
from models.track import Track, format_time
from services.audio_player import AudioSourceUnavailable
from services.catalog import Catalog
from services.saved_tracks import SavedTracksStore

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def stop(self) -> Any: ...


Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


class PlaybackSession:
    """
    Mode-dependent playback state machine plus the saved-track set.

    States:
        IDLE     no track selected
        PAUSED   track loaded, not playing
        PLAYING  track loaded and the tick is running

    Events (register with ``on``):
        track_selected      (track)
        state_change        (PlaybackState)
        tick                (elapsed_seconds, remaining_seconds)
        mode_changed        (mode)
        saved_changed       (frozenset of saved ids)
        countdown_finished  (track)
    """

    def __init__(
        self,
        catalog: Catalog,
        audio_player,
        scheduler: Scheduler,
        saved_store: Optional[SavedTracksStore] = None,
        tick_interval: float = TICK_INTERVAL,
    ):
        self.catalog = catalog
        self._audio = audio_player
        self._scheduler = scheduler
        self._saved_store = saved_store
        self._tick_interval = tick_interval

        self._current_track_id: Optional[str] = None
        self._state = PlaybackState.IDLE
        self._mode: PlaybackMode = Infinite()
        self.elapsed_seconds: int = 0
        self.remaining_seconds: int = 0

        self._tick_timer: Optional[TimerHandle] = None
        self._audio_started = False
        self._audio_loops = False

        self._callbacks: Dict[str, List[Callable]] = {
            'track_selected': [],
            'state_change': [],
            'tick': [],
            'mode_changed': [],
            'saved_changed': [],
            'countdown_finished': [],
        }

        self._saved_ids = self._load_saved_ids()

    # =========================================================================
    # EVENT SYSTEM
    # =========================================================================

    def on(self, event: str, callback: Callable) -> None:
        """Register a callback for an event."""
        if event in self._callbacks:
            self._callbacks[event].append(callback)
        else:
            logger.warning(f"Unknown event: {event}. Available: {list(self._callbacks.keys())}")

    def off(self, event: str, callback: Callable) -> None:
        """Unregister a callback for an event."""
        if event in self._callbacks and callback in self._callbacks[event]:
            self._callbacks[event].remove(callback)

    def _emit(self, event: str, *args) -> None:
        for callback in self._callbacks.get(event, []):
            try:
                callback(*args)
            except Exception as e:
                logger.error(f"Error in callback for {event}: {e}")

    # =========================================================================
    # STATE
    # =========================================================================

    @property
    def current_track(self) -> Optional[Track]:
        return self.catalog.get(self._current_track_id)

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def mode(self) -> PlaybackMode:
        return self._mode

    @property
    def is_playing(self) -> bool:
        return self._state == PlaybackState.PLAYING

    @property
    def is_ticking(self) -> bool:
        return self._tick_timer is not None

    @property
    def formatted_elapsed(self) -> str:
        return format_time(self.elapsed_seconds)

    @property
    def formatted_remaining(self) -> str:
        return format_time(self.remaining_seconds)

    # =========================================================================
    # TRANSPORT
    # =========================================================================

    def select_track(self, track: Track) -> None:
        """Load a track, paused, with counters reset for the current mode."""
        if track not in self.catalog:
            logger.warning(f"Ignoring selection of track not in catalog: {track.id}")
            return

        self._cancel_tick()
        self._stop_audio()

        self._current_track_id = track.id
        self._state = PlaybackState.PAUSED
        self.elapsed_seconds = 0
        self.remaining_seconds = self._mode.total_seconds

        logger.info(f"Selected track: {track.title}")
        self._emit('track_selected', track)
        self._emit('state_change', self._state)

    def play(self) -> bool:
        """Start or resume playback.

        Returns:
            False if no track is loaded, True otherwise.

        Raises:
            AudioSourceUnavailable: If the track's audio cannot be loaded.
                The session state is left unchanged.
        """
        track = self.current_track
        if track is None:
            logger.debug("play() ignored: no track loaded")
            return False
        if self.is_playing:
            return True

        if self._audio_started:
            self._audio.resume_playback()
        else:
            self._audio.start_playback(track.audio_source, loop=self._mode.loops)
            self._audio_started = True
            self._audio_loops = self._mode.loops

        self._state = PlaybackState.PLAYING
        self._start_tick()
        self._emit('state_change', self._state)
        return True

    def pause(self) -> None:
        """Pause playback, keeping the counters."""
        if not self.is_playing:
            return

        self._audio.pause_playback()
        self._cancel_tick()
        self._state = PlaybackState.PAUSED
        self._emit('state_change', self._state)

    def toggle_play_pause(self) -> bool:
        """Pause if playing, otherwise play. Returns the new playing flag."""
        if self.is_playing:
            self.pause()
            return False
        return self.play()

    def stop(self) -> None:
        """Stop playback and reset the counters to the start of the mode."""
        if self._current_track_id is None:
            return

        self._cancel_tick()
        self._stop_audio()

        self._state = PlaybackState.PAUSED
        self.elapsed_seconds = 0
        self.remaining_seconds = self._mode.total_seconds
        self._emit('state_change', self._state)

    def set_mode(self, mode: PlaybackMode) -> None:
        """Switch between Infinite and Timed playback."""
        self._mode = mode
        self.remaining_seconds = mode.total_seconds

        self._apply_loop_mode()
        if self.is_playing:
            self._start_tick()

        logger.info(f"Playback mode set to {mode.label}")
        self._emit('mode_changed', mode)

    # =========================================================================
    # TICK
    # =========================================================================

    def tick(self) -> None:
        """Advance the counters by one second."""
        if not self.is_playing:
            return

        self.elapsed_seconds += 1
        if isinstance(self._mode, Timed):
            self.remaining_seconds = max(0, self.remaining_seconds - 1)

        self._emit('tick', self.elapsed_seconds, self.remaining_seconds)

        if isinstance(self._mode, Timed) and self.remaining_seconds == 0:
            track = self.current_track
            logger.info(f"Countdown finished for {track.title if track else 'unknown track'}")
            self._emit('countdown_finished', track)
            self.stop()

    def _start_tick(self) -> None:
        self._cancel_tick()
        self._tick_timer = self._scheduler(self._tick_interval, self.tick)

    def _cancel_tick(self) -> None:
        if self._tick_timer is not None:
            self._tick_timer.stop()
            self._tick_timer = None

    def _stop_audio(self) -> None:
        if self._audio_started:
            self._audio.stop_playback()
            self._audio_started = False

    def _apply_loop_mode(self) -> None:
        """Bring started audio in line with the current mode's looping.

        Playing audio is restarted with the new loop flag; paused audio is
        dropped so the next play() starts it fresh.
        """
        if not self._audio_started or self._audio_loops == self._mode.loops:
            return
        if not self.is_playing:
            self._stop_audio()
            return

        track = self.current_track
        try:
            self._audio.start_playback(track.audio_source, loop=self._mode.loops)
            self._audio_loops = self._mode.loops
        except AudioSourceUnavailable as e:
            logger.error(f"Could not restart {track.title} for {self._mode.label} mode: {e}")
            self.stop()

    # =========================================================================
    # SAVED TRACKS
    # =========================================================================

    @property
    def saved_track_ids(self) -> FrozenSet[str]:
        return frozenset(self._saved_ids)

    @property
    def saved_tracks(self) -> List[Track]:
        """Saved tracks in catalog order."""
        return [track for track in self.catalog if track.id in self._saved_ids]

    def is_saved(self, track: Track) -> bool:
        return track.id in self._saved_ids

    def toggle_saved(self, track: Track) -> bool:
        """Add the track if absent, remove it if present.

        Returns:
            True if the track is saved after the call.
        """
        if track not in self.catalog:
            logger.warning(f"Ignoring save of track not in catalog: {track.id}")
            return False

        if track.id in self._saved_ids:
            self._saved_ids.remove(track.id)
            saved = False
        else:
            self._saved_ids.add(track.id)
            saved = True

        logger.debug(f"{'Saved' if saved else 'Unsaved'} track: {track.title}")
        if self._saved_store is not None:
            self._saved_store.save(self._saved_ids)
        self._emit('saved_changed', self.saved_track_ids)
        return saved

    def _load_saved_ids(self) -> set:
        if self._saved_store is None:
            return set()

        saved_ids = set()
        for track_id in self._saved_store.load():
            if self.catalog.get(track_id) is None:
                logger.warning(f"Dropping saved track not in catalog: {track_id}")
                continue
            saved_ids.add(track_id)
        return saved_ids
