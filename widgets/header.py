from textual.widgets import Static
from textual.reactive import reactive
from textual.containers import Vertical
from textual.app import ComposeResult
from rich.text import Text
from models.playback import PlaybackState
from styles import COLOR_HEART, COLOR_PRIMARY, COLOR_HIGHLIGHT, COLOR_MUTED, COLOR_DIM

TITLE = "〰 NEURAL WAVES 〰"
TAGLINE = "Choose your focus"

STATE_ICONS = {
    PlaybackState.IDLE: "■ Idle",
    PlaybackState.PAUSED: "❚❚ Paused",
    PlaybackState.PLAYING: "▶ Playing",
}


class Header(Vertical):
    playback_state: reactive[PlaybackState] = reactive(PlaybackState.IDLE)
    mode_label: reactive[str] = reactive("Infinite")
    mode_is_timed: reactive[bool] = reactive(False)
    saved_count: reactive[int] = reactive(0)

    def compose(self) -> ComposeResult:
        yield Static(Text.assemble((TITLE, f"{COLOR_PRIMARY} bold"), "  ", (TAGLINE, COLOR_MUTED)), id="header-title")
        yield Static("─" * 80, id="header-divider")
        yield Static(self._render_status(), id="header-status")

    def _render_status(self) -> Text:
        result = Text()

        state_style = f"{COLOR_HIGHLIGHT} bold" if self.playback_state == PlaybackState.PLAYING else COLOR_DIM
        result.append(STATE_ICONS[self.playback_state], style=state_style)

        result.append("    │    Mode ", style=COLOR_MUTED)
        if self.mode_is_timed:
            result.append("⏱ ", style=COLOR_PRIMARY)
        else:
            result.append("∞ ", style=COLOR_PRIMARY)
        result.append(self.mode_label, style=f"{COLOR_PRIMARY} bold")

        result.append("    │    Saved ", style=COLOR_MUTED)
        result.append("♥ ", style=COLOR_HEART if self.saved_count else COLOR_DIM)
        result.append(str(self.saved_count), style="bold")

        return result

    def _update_status(self) -> None:
        try:
            status_widget = self.query_one("#header-status", Static)
            status_widget.update(self._render_status())
        except Exception:
            pass

    def watch_playback_state(self, new_value: PlaybackState) -> None:
        self._update_status()

    def watch_mode_label(self, new_value: str) -> None:
        self._update_status()

    def watch_mode_is_timed(self, new_value: bool) -> None:
        self._update_status()

    def watch_saved_count(self, new_value: int) -> None:
        self._update_status()
