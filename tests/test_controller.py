"""Tests for the controller wiring grid, sequencer and session clock."""

import pytest

from audio.synth import RecordingSink
from audio.tones import Timbre
from config import AppConfig, GridConfig, SessionConfig
from controller import LOCKED_MSG, HarmonyController
from notes.grid import ToggleResult


def test_default_bass_line(controller: HarmonyController) -> None:
    assert [controller.grid.locked_note(b) for b in range(4)] == [5, 12, 9, 14]
    assert controller.active_notes(2) == frozenset({9})


def test_toggle_plays_preview(controller: HarmonyController, sink: RecordingSink) -> None:
    assert controller.toggle_note(0, 21) is ToggleResult.ADDED
    freq = controller.pitches.frequency_of(21)
    assert sink.tones == [(freq, 0.3, Timbre.SINE, 0.1)]
    assert sink.resumed >= 1
    assert controller.countdown.running


def test_locked_toggle_previews_and_warns(controller: HarmonyController, sink: RecordingSink) -> None:
    assert controller.toggle_note(0, 5) is ToggleResult.LOCKED
    assert len(sink.tones) == 1
    assert controller.message == LOCKED_MSG
    assert controller.active_notes(0) == frozenset({5})
    controller.update(2.5)
    assert controller.message is None


def test_take_toast(controller: HarmonyController) -> None:
    controller.toggle_note(1, 12)
    assert controller.take_toast() == LOCKED_MSG
    assert controller.take_toast() is None


def test_chord_label(controller: HarmonyController) -> None:
    controller.toggle_note(1, 16)  # E3
    controller.toggle_note(1, 19)  # G3
    assert controller.chord_label(1) == "C Major"


def test_out_of_range_pitch(controller: HarmonyController) -> None:
    with pytest.raises(AssertionError):
        controller.toggle_note(0, 37)


def test_playback_cycle(controller: HarmonyController, sink: RecordingSink) -> None:
    assert controller.cursor() is None
    controller.toggle_playback()
    assert controller.cursor() == 0
    assert sink.tones[-1][2] is Timbre.TRIANGLE
    controller.update(2.0)
    assert controller.cursor() == 1
    controller.toggle_playback()
    assert controller.cursor() is None
    controller.stop()
    assert not controller.is_playing


def test_clear_stops_and_resets(controller: HarmonyController) -> None:
    controller.toggle_note(3, 21)
    controller.start()
    controller.clear()
    assert not controller.is_playing
    assert controller.active_notes(3) == frozenset({14})
    assert all(controller.chord_label(b) is None for b in range(4))


def test_session_expiry_stops_playback(sink: RecordingSink) -> None:
    ctl = HarmonyController(AppConfig(session=SessionConfig(activity_seconds=5)), sink)
    ctl.start()
    ctl.update(5.0)
    assert ctl.expired
    assert not ctl.is_playing
    assert ctl.cursor() is None
    # input is ignored until a new session starts
    assert ctl.toggle_note(0, 21) is None
    ctl.start()
    assert not ctl.is_playing
    ctl.new_session()
    assert not ctl.expired
    assert ctl.remaining == 5
    assert ctl.toggle_note(0, 21) is ToggleResult.ADDED


def test_expire_is_stop(controller: HarmonyController) -> None:
    controller.start()
    controller.expire()
    assert controller.cursor() is None
    controller.expire()


def test_no_bass_unbounded(sink: RecordingSink) -> None:
    cfg = AppConfig(grid=GridConfig(bass=(), max_voices=None))
    ctl = HarmonyController(cfg, sink)
    for i in range(6):
        ctl.toggle_note(0, i)
    assert len(ctl.active_notes(0)) == 6
    assert ctl.chord_label(0) == "Complex/Inversion"


def test_bass_outside_range(sink: RecordingSink) -> None:
    cfg = AppConfig(grid=GridConfig(start_octave=3))
    with pytest.raises(ValueError):
        HarmonyController(cfg, sink)


def test_summary(controller: HarmonyController) -> None:
    assert controller.summary().splitlines()[2] == "Bar 1: F2 []"
