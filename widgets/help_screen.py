from __future__ import annotations

from textual.screen import ModalScreen
from textual.widgets import Static, Button
from textual.containers import Container, VerticalScroll
from textual.app import ComposeResult

from models.playback import TIMING_OPTIONS

TIMING_TEXT = ", ".join(str(minutes) for minutes in TIMING_OPTIONS)

HELP_TEXT = f"""[bold #5b8def]〰 NEURAL WAVES - Focus, Relax, Sleep[/bold #5b8def]

[bold]SCREENS[/bold]
  1           Categories
  2           Player
  3           Saved music

[bold]NAVIGATION[/bold]
  j/k         Move down/up in a list
  Tab         Move between category and track lists
  Enter       Load the highlighted track in the Player

[bold]PLAYBACK[/bold]
  Space       Play/Pause
  s           Stop and reset the timer
  i           Infinite mode (loop forever)
  t           Timed mode (stop when the countdown ends)
  [ / ]       Previous/next timing option ({TIMING_TEXT} min)

[bold]SAVED MUSIC[/bold]
  f           Save/unsave the highlighted track (or the current one)
  x/Delete    Remove a track from Saved

[bold]OTHER[/bold]
  h/?         Show this help
  q           Quit

[bold]AUDIO FILES[/bold]
  • Tracks are played from ~/.local/share/neuralwaves/audio
  • Set NEURALWAVES_AUDIO_DIR to use another folder"""


class HelpScreen(ModalScreen[None]):
    """Modal screen displaying help information."""

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }

    #help-container {
        width: 80;
        height: 90%;
        background: #11131a;
        border: thick #5b8def;
        padding: 1 2;
    }

    #help-scroll {
        width: 100%;
        height: 1fr;
        margin-bottom: 1;
    }

    #help-content {
        width: 100%;
        height: auto;
    }

    #help-close-button {
        width: 100%;
        height: auto;
        background: #1c2030;
        color: #5b8def;
        border: solid #5b8def;
        text-style: bold;
    }

    #help-close-button:hover {
        background: #2e3347;
        color: #9ab8ff;
    }
    """

    def compose(self) -> ComposeResult:
        """Compose the help screen."""
        with Container(id="help-container"):
            with VerticalScroll(id="help-scroll"):
                yield Static(HELP_TEXT, id="help-content")

            yield Button("Close (Esc)", id="help-close-button", variant="primary")

    def on_mount(self) -> None:
        """Focus the button when screen mounts."""
        self.call_after_refresh(self._focus_button)

    def _focus_button(self) -> None:
        try:
            button = self.query_one("#help-close-button", Button)
            button.focus()
        except Exception:
            pass

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "help-close-button":
            self.dismiss()

    async def on_key(self, event) -> None:
        """Handle key events."""
        if event.key == "escape":
            self.dismiss()
            event.prevent_default()
            event.stop()
        elif event.key == "j":
            scroll = self.query_one("#help-scroll", VerticalScroll)
            scroll.scroll_down()
            event.prevent_default()
            event.stop()
        elif event.key == "k":
            scroll = self.query_one("#help-scroll", VerticalScroll)
            scroll.scroll_up()
            event.prevent_default()
            event.stop()
