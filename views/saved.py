from __future__ import annotations

import logging

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.widgets import Label, Static

from services.playback_session import PlaybackSession
from widgets.track_list import TrackList

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "♡  No Saved Music\n\nPress f on any track to save it here"


class SavedView(Container):
    """Saved music collection, listed in catalog order."""

    BINDINGS = [
        Binding("x", "remove_saved", "Remove"),
        Binding("delete", "remove_saved", "Remove", show=False),
    ]

    def __init__(self, session: PlaybackSession, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.session = session

    def compose(self) -> ComposeResult:
        yield Label("♥ Saved Music", classes="view-title")
        yield Static(EMPTY_MESSAGE, id="saved-empty")
        yield TrackList(self.session, self.session.saved_tracks, id="saved-track-list")

    def on_mount(self) -> None:
        self._update_empty_state()

    async def refresh_tracks(self) -> None:
        """Reload the list after the saved set changed."""
        track_list = self.query_one("#saved-track-list", TrackList)
        previous_index = track_list.index or 0
        tracks = self.session.saved_tracks
        await track_list.set_tracks(tracks)
        if tracks:
            track_list.index = min(previous_index, len(tracks) - 1)
        self._update_empty_state()

    def refresh_rows(self) -> None:
        self.query_one("#saved-track-list", TrackList).refresh_rows()

    def focus_list(self) -> None:
        self.query_one("#saved-track-list", TrackList).focus()

    def _update_empty_state(self) -> None:
        is_empty = not self.session.saved_track_ids
        self.query_one("#saved-empty", Static).display = is_empty
        self.query_one("#saved-track-list", TrackList).display = not is_empty

    def action_remove_saved(self) -> None:
        track = self.query_one("#saved-track-list", TrackList).highlighted_track
        if track is not None and self.session.is_saved(track):
            logger.debug(f"Removing {track.title} from saved music")
            self.session.toggle_saved(track)
