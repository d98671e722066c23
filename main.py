from textual.app import App, ComposeResult
from textual.widgets import Footer, ContentSwitcher
from textual.binding import Binding
import logging
import sys

from config import CATALOG_FILE, LOG_FILE, LOG_LEVEL, SAVED_TRACKS_FILE, ensure_data_dir
from models.playback import Infinite, Timed
from models.track import Track
from services.audio_player import AudioPlayer, AudioSourceUnavailable
from services.catalog import Catalog, CatalogError
from services.playback_session import PlaybackSession
from services.saved_tracks import SavedTracksStore
from views import CategoriesView, PlayerView, SavedView
from widgets import Header, HelpScreen, TrackList

logger = logging.getLogger(__name__)

VIEW_IDS = ("categories-view", "player-view", "saved-view")


def configure_logging() -> None:
    """Send application logs to the log file in the data directory."""
    ensure_data_dir()
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(LOG_FILE)
        ]
    )


class NeuralWavesApp(App):
    """Focus, relax and sleep music player built with Textual."""

    CSS_PATH = "styles/app.tcss"
    TITLE = "Neural Waves"

    BINDINGS = [
        Binding("q", "quit", "Quit", priority=True),
        Binding("1", "show_view('categories-view')", "Categories"),
        Binding("2", "show_view('player-view')", "Player"),
        Binding("3", "show_view('saved-view')", "Saved"),
        Binding("space", "play_pause", "Play/Pause"),
        Binding("s", "stop", "Stop"),
        Binding("i", "infinite_mode", "Infinite"),
        Binding("t", "timed_mode", "Timed"),
        Binding("left_square_bracket", "cycle_timing(-1)", "Shorter", show=False),
        Binding("right_square_bracket", "cycle_timing(1)", "Longer", show=False),
        Binding("f", "toggle_saved", "Save"),
        Binding("h", "show_help", "Help"),
        Binding("question_mark", "show_help", "Help", show=False),
    ]

    def __init__(self, audio_player=None, catalog: Catalog | None = None,
                 saved_store: SavedTracksStore | None = None, *args, **kwargs):
        super().__init__(*args, **kwargs)

        logger.info("Starting Neural Waves application")

        if audio_player is None:
            try:
                audio_player = AudioPlayer()
            except RuntimeError as e:
                logger.critical(f"Failed to initialize audio player: {e}")
                raise

        self.session = PlaybackSession(
            catalog if catalog is not None else Catalog.sample(),
            audio_player,
            self.set_interval,
            saved_store=saved_store,
        )
        self.session.on('track_selected', self._on_track_selected)
        self.session.on('state_change', self._on_state_change)
        self.session.on('tick', self._on_tick)
        self.session.on('mode_changed', self._on_mode_changed)
        self.session.on('saved_changed', self._on_saved_changed)
        self.session.on('countdown_finished', self._on_countdown_finished)
        logger.info("Services initialized successfully")

    def compose(self) -> ComposeResult:
        """Compose the main application layout."""
        yield Header()

        with ContentSwitcher(id="view-switcher", initial="categories-view"):
            yield CategoriesView(self.session, id="categories-view")
            yield PlayerView(self.session, id="player-view")
            yield SavedView(self.session, id="saved-view")

        yield Footer()

    def on_mount(self) -> None:
        header = self.query_one(Header)
        header.playback_state = self.session.state
        header.mode_label = self.session.mode.label
        header.mode_is_timed = isinstance(self.session.mode, Timed)
        header.saved_count = len(self.session.saved_track_ids)

        self.query_one("#categories-view", CategoriesView).focus_list()

    # =========================================================================
    # SESSION EVENTS
    # =========================================================================

    def _refresh_track_rows(self) -> None:
        self.query_one("#categories-view", CategoriesView).refresh_rows()
        self.query_one("#saved-view", SavedView).refresh_rows()

    def _on_track_selected(self, track: Track) -> None:
        self._refresh_track_rows()
        self.query_one("#player-view", PlayerView).update_display()

    def _on_state_change(self, state) -> None:
        self.query_one(Header).playback_state = state
        self.query_one("#player-view", PlayerView).update_display()
        self._refresh_track_rows()

    def _on_tick(self, elapsed: int, remaining: int) -> None:
        self.query_one("#player-view", PlayerView).update_display()

    def _on_mode_changed(self, mode) -> None:
        header = self.query_one(Header)
        header.mode_label = mode.label
        header.mode_is_timed = isinstance(mode, Timed)
        self.query_one("#player-view", PlayerView).update_display()

    def _on_saved_changed(self, saved_ids) -> None:
        self.query_one(Header).saved_count = len(saved_ids)
        self.query_one("#categories-view", CategoriesView).refresh_rows()
        self.query_one("#player-view", PlayerView).update_display()
        self.call_later(self.query_one("#saved-view", SavedView).refresh_tracks)

    def _on_countdown_finished(self, track: Track | None) -> None:
        title = track.title if track else "Track"
        self.notify(f"⏱ Timer finished: {title}", severity="information", timeout=5)

    # =========================================================================
    # ACTIONS
    # =========================================================================

    def on_track_list_track_chosen(self, message: TrackList.TrackChosen) -> None:
        """Load the chosen track and switch to the player."""
        self.session.select_track(message.track)
        self.action_show_view("player-view")

    def action_show_view(self, view_id: str) -> None:
        if view_id not in VIEW_IDS:
            logger.warning(f"Unknown view: {view_id}")
            return

        try:
            switcher = self.query_one("#view-switcher", ContentSwitcher)
            switcher.current = view_id

            if view_id == "categories-view":
                self.query_one("#categories-view", CategoriesView).focus_list()
            elif view_id == "saved-view":
                self.query_one("#saved-view", SavedView).focus_list()
            else:
                self.set_focus(None)
        except Exception as e:
            logger.error(f"Error switching to {view_id}: {e}")

    def action_play_pause(self) -> None:
        """Toggle play/pause for the current track."""
        if self.session.current_track is None:
            self.notify("Select a track in Categories first", severity="warning", timeout=3)
            return

        try:
            self.session.toggle_play_pause()
        except AudioSourceUnavailable as e:
            logger.error(f"Cannot play {self.session.current_track.title}: {e}")
            self.notify(
                f"❌ Cannot play track\n\n{e}",
                severity="error",
                timeout=5
            )

    def action_stop(self) -> None:
        """Stop playback."""
        self.session.stop()

    def action_infinite_mode(self) -> None:
        self.session.set_mode(Infinite())

    def action_timed_mode(self) -> None:
        self.query_one("#player-view", PlayerView).apply_timed_mode()

    def action_cycle_timing(self, step: int) -> None:
        minutes = self.query_one("#player-view", PlayerView).cycle_timing(step)
        self.notify(f"⏱ Timer {minutes} min", timeout=1.5)

    def action_toggle_saved(self) -> None:
        """Save or unsave the current track."""
        track = self.session.current_track
        if track is None:
            self.notify("No track selected", severity="warning", timeout=2)
            return

        if self.session.toggle_saved(track):
            self.notify(f"♥ Saved {track.title}", timeout=1.5)
        else:
            self.notify(f"♡ Removed {track.title}", timeout=1.5)

    def action_show_help(self) -> None:
        self.push_screen(HelpScreen())

    def action_quit(self) -> None:
        """Handle quit action for clean shutdown."""
        self.session.stop()
        self.exit()


def main():
    """Entry point for the Neural Waves application.

    Handles initialization errors and provides user-friendly error messages.
    """
    configure_logging()

    try:
        logger.info("=" * 60)
        logger.info("Neural Waves starting up")
        logger.info("=" * 60)

        catalog = Catalog.from_file(CATALOG_FILE) if CATALOG_FILE else Catalog.sample()
        app = NeuralWavesApp(catalog=catalog, saved_store=SavedTracksStore(SAVED_TRACKS_FILE))
        app.run()

        logger.info("Neural Waves shut down cleanly")

    except CatalogError as e:
        logger.critical(f"Invalid catalog: {e}")
        print("\n❌ Neural Waves cannot load its catalog\n")
        print(f"{e}\n")
        sys.exit(1)
    except RuntimeError as e:
        logger.critical(f"Fatal error during startup: {e}")
        print("\n❌ Neural Waves cannot start\n")
        print(f"{e}\n")
        print(f"Check {LOG_FILE} for more details.\n")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Neural Waves interrupted by user")
        print("\n\nGoodbye! 👋\n")
        sys.exit(0)
    except Exception as e:
        logger.critical(f"Unexpected fatal error: {type(e).__name__}: {e}", exc_info=True)
        print("\n❌ Neural Waves encountered an unexpected error\n")
        print(f"{type(e).__name__}: {e}\n")
        print(f"Check {LOG_FILE} for more details.\n")
        sys.exit(1)


if __name__ == "__main__":
    main()
