import pytest

from models.category import Category
from services.audio_player import AudioSourceUnavailable
from services.catalog import Catalog
from services.playback_session import PlaybackSession


class FakeTimer:
    """Stands in for a Textual interval timer; fired by hand."""

    def __init__(self, interval, callback):
        self.interval = interval
        self.callback = callback
        self.stopped = False

    def stop(self):
        self.stopped = True

    def fire(self, times=1):
        for _ in range(times):
            if self.stopped:
                break
            self.callback()


class FakeScheduler:
    def __init__(self):
        self.timers = []

    def __call__(self, interval, callback):
        timer = FakeTimer(interval, callback)
        self.timers.append(timer)
        return timer

    @property
    def live_timers(self):
        return [timer for timer in self.timers if not timer.stopped]

    @property
    def live_timer(self):
        live = self.live_timers
        assert len(live) == 1, f"expected exactly one live timer, found {len(live)}"
        return live[0]


class FakeAudioPlayer:
    """Records rendering commands instead of producing sound."""

    def __init__(self, unavailable=()):
        self.unavailable = set(unavailable)
        self.calls = []

    def start_playback(self, source_locator, loop):
        if source_locator in self.unavailable:
            raise AudioSourceUnavailable(f"Audio file not found: {source_locator}")
        self.calls.append(("start", source_locator, loop))

    def pause_playback(self):
        self.calls.append(("pause",))

    def resume_playback(self):
        self.calls.append(("resume",))

    def stop_playback(self):
        self.calls.append(("stop",))


@pytest.fixture
def catalog():
    return Catalog.sample()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def audio():
    return FakeAudioPlayer()


@pytest.fixture
def session(catalog, audio, scheduler):
    return PlaybackSession(catalog, audio, scheduler)


@pytest.fixture
def focus_track(catalog):
    return catalog.by_category(Category.FOCUS)[0]


@pytest.fixture
def relax_track(catalog):
    return catalog.by_category(Category.RELAX)[0]


@pytest.fixture
def sleep_track(catalog):
    return catalog.by_category(Category.DEEP_SLEEP)[0]


@pytest.fixture
def make_audio():
    return FakeAudioPlayer


@pytest.fixture
def record_events():
    """Return a function that subscribes to every session event and records them in order."""
    def subscribe(session):
        events = []
        for name in ('track_selected', 'state_change', 'tick', 'mode_changed', 'saved_changed', 'countdown_finished'):
            session.on(name, lambda *args, name=name: events.append((name, args)))
        return events
    return subscribe
