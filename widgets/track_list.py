from __future__ import annotations

import logging

from rich.text import Text
from textual.binding import Binding
from textual.message import Message
from textual.widgets import Label, ListItem, ListView

from models.track import Track
from services.playback_session import PlaybackSession
from styles import COLOR_HEART, COLOR_MUTED, COLOR_PRIMARY

logger = logging.getLogger(__name__)


class TrackItem(ListItem):
    """List row bound to a catalog track."""

    def __init__(self, track: Track, *args, **kwargs):
        super().__init__(Label(""), *args, **kwargs)
        self.track = track


class TrackList(ListView):
    """Track list with saved hearts and a now-playing marker."""

    BINDINGS = [
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
        Binding("f", "toggle_saved", "Save"),
    ]

    class TrackChosen(Message):
        """Posted when the user picks a track with Enter."""

        def __init__(self, track: Track) -> None:
            super().__init__()
            self.track = track

    def __init__(self, session: PlaybackSession, tracks: list[Track] | None = None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.session = session
        self.tracks: list[Track] = list(tracks or [])

    async def on_mount(self) -> None:
        await self.set_tracks(self.tracks)

    async def set_tracks(self, tracks: list[Track]) -> None:
        """Replace the listed tracks."""
        self.tracks = list(tracks)
        await self.clear()
        if self.tracks:
            await self.extend(TrackItem(track) for track in self.tracks)
            self.index = 0
        self.refresh_rows()
        logger.debug(f"Track list {self.id} showing {len(self.tracks)} tracks")

    def refresh_rows(self) -> None:
        """Redraw every row from the session state."""
        for item in self.query(TrackItem):
            item.query_one(Label).update(self.render_row(item.track))

    def render_row(self, track: Track) -> Text:
        current = self.session.current_track
        is_current = current is not None and current == track

        result = Text()
        result.append("▌ ", style=track.category.color)
        if is_current:
            result.append("♪ " if self.session.is_playing else "■ ", style=f"{COLOR_PRIMARY} bold")
        else:
            result.append("  ")
        result.append(track.title, style="bold" if is_current else "")
        result.append(f" - {track.artist}", style=COLOR_MUTED)
        result.append(f"  [{track.formatted_duration}] ", style=COLOR_MUTED)
        if self.session.is_saved(track):
            result.append("♥", style=COLOR_HEART)
        else:
            result.append("♡", style=COLOR_MUTED)
        return result

    @property
    def highlighted_track(self) -> Track | None:
        item = self.highlighted_child
        if isinstance(item, TrackItem):
            return item.track
        return None

    def action_toggle_saved(self) -> None:
        track = self.highlighted_track
        if track is not None:
            self.session.toggle_saved(track)

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if isinstance(event.item, TrackItem):
            event.stop()
            self.post_message(self.TrackChosen(event.item.track))
