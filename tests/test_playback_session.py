import json

import pytest

from models.playback import Infinite, PlaybackState, Timed
from services.audio_player import AudioSourceUnavailable
from services.catalog import Catalog
from services.playback_session import PlaybackSession
from services.saved_tracks import SavedTracksStore


def test_new_session_is_idle(session):
    assert session.state is PlaybackState.IDLE
    assert session.current_track is None
    assert session.mode == Infinite()
    assert session.elapsed_seconds == 0
    assert session.remaining_seconds == 0
    assert session.saved_track_ids == frozenset()


def test_play_without_track_is_a_noop(session, audio, scheduler):
    assert session.play() is False
    assert session.state is PlaybackState.IDLE
    assert audio.calls == []
    assert scheduler.timers == []


def test_pause_and_stop_without_track_are_noops(session, audio):
    session.pause()
    session.stop()
    assert session.state is PlaybackState.IDLE
    assert audio.calls == []


def test_select_track_loads_paused(session, focus_track):
    session.select_track(focus_track)

    assert session.current_track == focus_track
    assert session.state is PlaybackState.PAUSED
    assert session.elapsed_seconds == 0
    assert session.remaining_seconds == 0


def test_select_track_in_timed_mode_resets_countdown(session, focus_track):
    session.set_mode(Timed(15))
    session.select_track(focus_track)
    assert session.remaining_seconds == 900


def test_current_track_is_resolved_through_catalog(session, focus_track):
    session.select_track(focus_track)
    assert session.current_track is session.catalog.get(focus_track.id)


def test_select_track_outside_catalog_is_ignored(audio, scheduler, focus_track, relax_track):
    catalog = Catalog([focus_track])
    session = PlaybackSession(catalog, audio, scheduler)

    session.select_track(relax_track)

    assert session.current_track is None
    assert session.state is PlaybackState.IDLE


def test_play_starts_audio_and_tick(session, audio, scheduler, focus_track):
    session.select_track(focus_track)

    assert session.play() is True

    assert session.state is PlaybackState.PLAYING
    assert audio.calls == [("start", focus_track.audio_source, True)]
    assert scheduler.live_timer.interval == 1.0


def test_timed_mode_starts_audio_without_looping(session, audio, focus_track):
    session.set_mode(Timed(30))
    session.select_track(focus_track)
    session.play()
    assert audio.calls == [("start", focus_track.audio_source, False)]


def test_elapsed_accumulates_only_while_playing(session, scheduler, focus_track):
    session.select_track(focus_track)
    session.play()
    scheduler.live_timer.fire(5)
    session.pause()

    session.tick()

    assert session.elapsed_seconds == 5
    assert session.formatted_elapsed == "0:05"
    assert scheduler.live_timers == []


def test_pause_keeps_counters_and_resume_continues(session, audio, scheduler, focus_track):
    session.set_mode(Timed(15))
    session.select_track(focus_track)
    session.play()
    scheduler.live_timer.fire(10)

    session.pause()
    assert session.state is PlaybackState.PAUSED
    assert session.elapsed_seconds == 10
    assert session.remaining_seconds == 890

    session.play()
    scheduler.live_timer.fire(2)
    assert session.elapsed_seconds == 12
    assert session.remaining_seconds == 888
    assert audio.calls == [
        ("start", focus_track.audio_source, False),
        ("pause",),
        ("resume",),
    ]


def test_stop_resets_counters(session, audio, scheduler, focus_track):
    session.set_mode(Timed(30))
    session.select_track(focus_track)
    session.play()
    scheduler.live_timer.fire(42)

    session.stop()

    assert session.state is PlaybackState.PAUSED
    assert session.elapsed_seconds == 0
    assert session.remaining_seconds == 1800
    assert scheduler.live_timers == []
    assert audio.calls[-1] == ("stop",)


def test_play_after_stop_restarts_audio(session, audio, focus_track):
    session.select_track(focus_track)
    session.play()
    session.stop()
    session.play()
    assert [call[0] for call in audio.calls] == ["start", "stop", "start"]


def test_set_mode_updates_remaining(session, focus_track):
    session.select_track(focus_track)

    session.set_mode(Timed(90))
    assert session.remaining_seconds == 90 * 60
    assert session.formatted_remaining == "90:00"

    session.set_mode(Infinite())
    assert session.remaining_seconds == 0


def test_set_mode_while_playing_keeps_one_live_tick(session, scheduler, focus_track):
    session.select_track(focus_track)
    session.play()
    first = scheduler.live_timer

    session.set_mode(Timed(15))

    assert first.stopped
    assert scheduler.live_timer is not first
    scheduler.live_timer.fire(3)
    assert session.remaining_seconds == 897


def test_set_mode_while_paused_does_not_schedule(session, scheduler, focus_track):
    session.select_track(focus_track)
    session.set_mode(Timed(15))
    assert scheduler.timers == []


def test_switch_to_infinite_while_playing_restarts_looping(session, audio, scheduler, focus_track):
    session.set_mode(Timed(15))
    session.select_track(focus_track)
    session.play()

    session.set_mode(Infinite())
    session.pause()
    session.play()

    source = focus_track.audio_source
    assert audio.calls == [
        ("start", source, False),
        ("start", source, True),
        ("pause",),
        ("resume",),
    ]
    assert session.is_playing
    assert scheduler.live_timer is not None


def test_switch_to_timed_while_playing_restarts_once(session, audio, focus_track):
    session.select_track(focus_track)
    session.play()

    session.set_mode(Timed(15))
    session.set_mode(Timed(30))

    source = focus_track.audio_source
    assert audio.calls == [("start", source, True), ("start", source, False)]


def test_switch_loop_mode_while_paused_starts_fresh_on_play(session, audio, focus_track):
    session.set_mode(Timed(15))
    session.select_track(focus_track)
    session.play()
    session.pause()

    session.set_mode(Infinite())
    assert session.state is PlaybackState.PAUSED
    session.play()

    source = focus_track.audio_source
    assert audio.calls == [
        ("start", source, False),
        ("pause",),
        ("stop",),
        ("start", source, True),
    ]


def test_failed_loop_restart_stops_session(catalog, scheduler, focus_track, make_audio):
    audio = make_audio()
    session = PlaybackSession(catalog, audio, scheduler)
    session.set_mode(Timed(15))
    session.select_track(focus_track)
    session.play()
    scheduler.live_timer.fire(5)

    audio.unavailable.add(focus_track.audio_source)
    session.set_mode(Infinite())

    assert session.state is PlaybackState.PAUSED
    assert session.elapsed_seconds == 0
    assert scheduler.live_timers == []
    assert audio.calls[-1] == ("stop",)


def test_countdown_runs_to_zero_then_stops(session, audio, scheduler, focus_track):
    remaining_seen = []
    finished = []
    session.on('tick', lambda elapsed, remaining: remaining_seen.append(remaining))
    session.on('countdown_finished', finished.append)

    session.set_mode(Timed(15))
    session.select_track(focus_track)
    session.play()
    timer = scheduler.live_timer
    timer.fire(15 * 60)

    assert remaining_seen[-1] == 0
    assert len(remaining_seen) == 900
    assert finished == [focus_track]
    assert timer.stopped
    assert scheduler.live_timers == []
    assert session.is_playing is False
    assert session.state is PlaybackState.PAUSED
    assert session.elapsed_seconds == 0
    assert session.remaining_seconds == 900
    assert audio.calls[-1] == ("stop",)


def test_infinite_mode_never_counts_down(session, scheduler, focus_track):
    session.select_track(focus_track)
    session.play()
    scheduler.live_timer.fire(7200)
    assert session.is_playing
    assert session.remaining_seconds == 0
    assert session.formatted_elapsed == "120:00"


def test_select_track_while_playing_cancels_tick(session, audio, scheduler, focus_track, relax_track):
    session.select_track(focus_track)
    session.play()
    scheduler.live_timer.fire(3)

    session.select_track(relax_track)

    assert session.current_track == relax_track
    assert session.state is PlaybackState.PAUSED
    assert session.elapsed_seconds == 0
    assert scheduler.live_timers == []
    assert audio.calls[-1] == ("stop",)


def test_unavailable_audio_leaves_state_unchanged(catalog, scheduler, focus_track, make_audio):
    audio = make_audio(unavailable={focus_track.audio_source})
    session = PlaybackSession(catalog, audio, scheduler)
    session.select_track(focus_track)

    with pytest.raises(AudioSourceUnavailable):
        session.play()

    assert session.state is PlaybackState.PAUSED
    assert scheduler.timers == []


def test_toggle_play_pause(session, focus_track):
    session.select_track(focus_track)
    assert session.toggle_play_pause() is True
    assert session.is_playing
    assert session.toggle_play_pause() is False
    assert session.state is PlaybackState.PAUSED


def test_toggle_saved_twice_restores_membership(session, focus_track, relax_track):
    session.toggle_saved(relax_track)
    before = session.saved_track_ids

    assert session.toggle_saved(focus_track) is True
    assert session.toggle_saved(focus_track) is False

    assert session.saved_track_ids == before
    assert len(session.saved_track_ids) == 1


def test_save_three_then_unsave_one(session, focus_track, relax_track, sleep_track):
    for track in (focus_track, relax_track, sleep_track):
        session.toggle_saved(track)
    assert len(session.saved_track_ids) == 3

    session.toggle_saved(relax_track)

    assert len(session.saved_track_ids) == 2
    assert not session.is_saved(relax_track)
    assert session.is_saved(focus_track)
    assert session.is_saved(sleep_track)
    assert session.saved_tracks == [focus_track, sleep_track]


def test_saved_tracks_are_persisted(tmp_path, catalog, audio, scheduler, focus_track, sleep_track):
    store = SavedTracksStore(tmp_path / "saved.json")
    session = PlaybackSession(catalog, audio, scheduler, saved_store=store)
    session.toggle_saved(sleep_track)
    session.toggle_saved(focus_track)

    data = json.loads((tmp_path / "saved.json").read_text())
    assert data == {"saved_track_ids": sorted([focus_track.id, sleep_track.id])}

    reopened = PlaybackSession(catalog, audio, scheduler, saved_store=store)
    assert reopened.saved_tracks == [focus_track, sleep_track]


def test_toggle_saved_outside_catalog_is_ignored(tmp_path, audio, scheduler, focus_track, relax_track):
    store = SavedTracksStore(tmp_path / "saved.json")
    session = PlaybackSession(Catalog([focus_track]), audio, scheduler, saved_store=store)

    assert session.toggle_saved(relax_track) is False

    assert session.saved_track_ids == frozenset()
    assert session.saved_tracks == []
    assert not (tmp_path / "saved.json").exists()


def test_saved_ids_missing_from_catalog_are_dropped(tmp_path, catalog, audio, scheduler, focus_track):
    store = SavedTracksStore(tmp_path / "saved.json")
    store.save([focus_track.id, "retired-track"])

    session = PlaybackSession(catalog, audio, scheduler, saved_store=store)

    assert session.saved_track_ids == frozenset({focus_track.id})


def test_events_are_emitted(session, scheduler, focus_track, record_events):
    events = record_events(session)

    session.select_track(focus_track)
    session.play()
    scheduler.live_timer.fire()
    session.set_mode(Timed(60))
    session.toggle_saved(focus_track)

    assert events == [
        ('track_selected', (focus_track,)),
        ('state_change', (PlaybackState.PAUSED,)),
        ('state_change', (PlaybackState.PLAYING,)),
        ('tick', (1, 0)),
        ('mode_changed', (Timed(60),)),
        ('saved_changed', (frozenset({focus_track.id}),)),
    ]


def test_failing_callback_does_not_break_session(session, focus_track):
    def explode(*args):
        raise RuntimeError("boom")

    session.on('state_change', explode)
    session.select_track(focus_track)
    assert session.state is PlaybackState.PAUSED


def test_off_unregisters_callback(session, focus_track):
    seen = []
    session.on('track_selected', seen.append)
    session.off('track_selected', seen.append)
    session.select_track(focus_track)
    assert seen == []
