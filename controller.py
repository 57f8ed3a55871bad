# controller.py
import logging
from typing import Optional
from audio.tones import Timbre
from config import AppConfig
from notes.eviction import make_eviction
from notes.grid import Grid, ToggleResult
from notes.model import PitchRange
from timeline.countdown import Countdown
from timeline.scheduler import Sequencer

LOCKED_MSG = "Bass line is fixed!"

class HarmonyController:
    """Everything the window talks to: grid edits, playback, session clock.
    Kept free of pygame so it can be driven headless."""

    def __init__(self, cfg: AppConfig, sink):
        self.cfg = cfg
        self.sink = sink
        g, pb = cfg.grid, cfg.playback

        self.pitches = PitchRange(start_octave=g.start_octave, octaves=g.octaves)
        locked = {}
        for bar, (name, octave) in enumerate(g.bass[:g.bars]):
            index = self.pitches.index_of(name, octave)
            if not self.pitches.contains(index):
                raise ValueError(f"Bass note {name}{octave} outside the playable range")
            locked[bar] = index
        self.grid = Grid(bars=g.bars, max_voices=g.max_voices, locked=locked,
                         eviction=make_eviction(g.eviction))
        self.sequencer = Sequencer(self.grid, self.pitches, sink,
                                   tempo_bpm=pb.tempo_bpm, beats_per_bar=pb.beats_per_bar,
                                   sustain=pb.sustain, timbre=Timbre.parse(pb.timbre), volume=pb.volume)
        self.countdown = Countdown(cfg.session.activity_seconds, on_expire=self.expire)
        self._preview_timbre = Timbre.parse(pb.preview_timbre)

        self._toast: Optional[str] = None
        self._toast_time = 0.0

    # ---------- toast ----------
    def toast(self, msg: str):
        self._toast = msg
        self._toast_time = self.cfg.session.toast_seconds

    @property
    def message(self) -> Optional[str]:
        return self._toast

    def take_toast(self) -> Optional[str]:
        msg, self._toast = self._toast, None
        self._toast_time = 0.0
        return msg

    # ---------- grid ----------
    def toggle_note(self, bar: int, index: int) -> Optional[ToggleResult]:
        assert self.pitches.contains(index), f"pitch index {index} out of range"
        if self.expired:
            return None
        self.preview(index, self.cfg.playback.preview_duration)
        result = self.grid.toggle_note(bar, index)
        if result is ToggleResult.LOCKED:
            self.toast(LOCKED_MSG)
        self.countdown.start()
        return result

    def preview(self, index: int, duration: Optional[float] = None):
        pb = self.cfg.playback
        self.sink.resume()
        self.sink.emit(self.pitches.frequency_of(index),
                       pb.key_preview_duration if duration is None else duration,
                       self._preview_timbre, pb.preview_volume)

    def clear(self):
        self.grid.clear()
        self.sequencer.stop()

    # ---------- playback ----------
    def start(self):
        if self.expired:
            return
        self.sink.resume()
        self.sequencer.start()
        self.countdown.start()

    def stop(self):
        self.sequencer.stop()

    def toggle_playback(self):
        if self.sequencer.is_playing:
            self.stop()
        else:
            self.start()

    def expire(self):
        logging.info("Session expired, stopping playback")
        self.stop()

    def new_session(self):
        self.countdown.reset()
        self.clear()

    # ---------- frame ----------
    def update(self, dt: float):
        self.sequencer.update(dt)
        self.countdown.update(dt)
        if self._toast_time > 0:
            self._toast_time -= dt
            if self._toast_time <= 0:
                self._toast_time = 0.0
                self._toast = None

    # ---------- queries ----------
    def active_notes(self, bar: int) -> frozenset:
        return self.grid.active_notes(bar)

    def chord_label(self, bar: int) -> Optional[str]:
        return self.grid.chord_label(bar)

    def cursor(self) -> Optional[int]:
        return self.sequencer.cursor

    @property
    def is_playing(self) -> bool:
        return self.sequencer.is_playing

    @property
    def expired(self) -> bool:
        return self.countdown.expired

    @property
    def remaining(self) -> float:
        return self.countdown.remaining

    def summary(self) -> str:
        return self.grid.as_text(self.pitches)
