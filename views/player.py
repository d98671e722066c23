from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container, Vertical
from textual.widgets import Static

from models.playback import DEFAULT_TIMING_MINUTES, TIMING_OPTIONS, Timed, next_timing_option
from services.playback_session import PlaybackSession
from styles import COLOR_HEART, COLOR_PRIMARY, COLOR_HIGHLIGHT, COLOR_MUTED, COLOR_DIM, COLOR_INACTIVE

PROGRESS_BAR_WIDTH = 40


class PlayerView(Container):
    """Widget displaying the current track, timer and playback mode."""

    def __init__(self, session: PlaybackSession, **kwargs):
        """Initialize PlayerView with the playback session."""
        super().__init__(**kwargs)
        self.session = session
        self.selected_timing_minutes = DEFAULT_TIMING_MINUTES
        self._title_widget: Static | None = None
        self._artist_widget: Static | None = None
        self._category_widget: Static | None = None
        self._time_label_widget: Static | None = None
        self._time_widget: Static | None = None
        self._progress_widget: Static | None = None
        self._mode_widget: Static | None = None
        self._timing_widget: Static | None = None
        self._controls_widget: Static | None = None

    def compose(self) -> ComposeResult:
        """Compose the player view."""
        with Vertical(id="player-body"):
            yield Static("♪", classes="music-icon")
            yield Static("No Track Selected", id="player-title", classes="track-title")
            yield Static("Go to Categories (1) to select a neural music track", id="player-artist", classes="track-metadata")
            yield Static("", id="player-category", classes="track-metadata")
            yield Static("", id="player-time-label", classes="time-label")
            yield Static("", id="player-time", classes="time-display")
            yield Static("", id="player-progress")
            yield Static("", id="player-mode", classes="mode-display")
            yield Static("", id="player-timing", classes="mode-display")
            yield Static("", id="player-controls", classes="state-display")

    def on_mount(self) -> None:
        self._title_widget = self.query_one("#player-title", Static)
        self._artist_widget = self.query_one("#player-artist", Static)
        self._category_widget = self.query_one("#player-category", Static)
        self._time_label_widget = self.query_one("#player-time-label", Static)
        self._time_widget = self.query_one("#player-time", Static)
        self._progress_widget = self.query_one("#player-progress", Static)
        self._mode_widget = self.query_one("#player-mode", Static)
        self._timing_widget = self.query_one("#player-timing", Static)
        self._controls_widget = self.query_one("#player-controls", Static)
        self.update_display()

    def cycle_timing(self, step: int) -> int:
        """Move the timing selection and apply it if Timed mode is active."""
        self.selected_timing_minutes = next_timing_option(self.selected_timing_minutes, step)
        if isinstance(self.session.mode, Timed):
            self.session.set_mode(Timed(self.selected_timing_minutes))
        else:
            self.update_display()
        return self.selected_timing_minutes

    def apply_timed_mode(self) -> None:
        self.session.set_mode(Timed(self.selected_timing_minutes))

    def update_display(self) -> None:
        """Update all display widgets from the session."""
        if self._title_widget is None:
            return

        track = self.session.current_track
        is_timed = isinstance(self.session.mode, Timed)

        if track is None:
            self._title_widget.update("No Track Selected")
            self._artist_widget.update("Go to Categories (1) to select a neural music track")
            self._category_widget.update("")
            self._time_label_widget.update("")
            self._time_widget.update("")
            self._progress_widget.update("")
        else:
            self._title_widget.update(track.title)
            self._artist_widget.update(track.artist)
            self._category_widget.update(Text(f"{track.category.icon} {track.category.label}", style=track.category.color))
            if is_timed:
                self._time_label_widget.update("Remaining Time")
                self._time_widget.update(self.session.formatted_remaining)
            else:
                self._time_label_widget.update("Playing Time")
                self._time_widget.update(self.session.formatted_elapsed)
            self._progress_widget.update(self._render_countdown_bar() if is_timed else "")

        self._mode_widget.update(self._render_mode_selector(is_timed))
        self._timing_widget.update(self._render_timing_options(is_timed))
        self._controls_widget.update(self._render_controls())

    def _render_countdown_bar(self) -> Text:
        total = self.session.mode.total_seconds
        done = total - self.session.remaining_seconds
        filled = int(PROGRESS_BAR_WIDTH * done / total) if total else 0

        result = Text()
        result.append("│", style=COLOR_MUTED)
        result.append("█" * filled, style=COLOR_PRIMARY)
        result.append("─" * (PROGRESS_BAR_WIDTH - filled), style=COLOR_INACTIVE)
        result.append("│", style=COLOR_MUTED)
        return result

    def _render_mode_selector(self, is_timed: bool) -> Text:
        result = Text("Playback Mode  ", style=COLOR_MUTED)
        active = f"{COLOR_HIGHLIGHT} bold reverse"
        result.append(" ∞ Infinite (i) ", style=COLOR_DIM if is_timed else active)
        result.append("  ")
        result.append(" ⏱ Timing (t) ", style=active if is_timed else COLOR_DIM)
        return result

    def _render_timing_options(self, is_timed: bool) -> Text:
        result = Text("Duration (minutes)  ", style=COLOR_MUTED if is_timed else COLOR_DIM)
        for minutes in TIMING_OPTIONS:
            if minutes == self.selected_timing_minutes:
                style = f"{COLOR_PRIMARY} bold reverse" if is_timed else f"{COLOR_DIM} reverse"
            else:
                style = COLOR_MUTED if is_timed else COLOR_DIM
            result.append(f" {minutes} ", style=style)
            result.append(" ")
        result.append(" [ / ]", style=COLOR_DIM)
        return result

    def _render_controls(self) -> Text:
        track = self.session.current_track
        result = Text()
        if track is None:
            return result

        if self.session.is_playing:
            result.append("❚❚ Pause (space)", style=f"{COLOR_PRIMARY} bold")
        else:
            result.append("▶ Play (space)", style=f"{COLOR_PRIMARY} bold")
        result.append("    ■ Stop (s)    ", style=COLOR_MUTED)
        if self.session.is_saved(track):
            result.append("♥ Saved (f)", style=COLOR_HEART)
        else:
            result.append("♡ Save (f)", style=COLOR_MUTED)
        return result
