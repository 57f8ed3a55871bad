# timeline/scheduler.py
import logging
from enum import Enum
from typing import Optional
from audio.tones import Timbre
from notes.grid import Grid
from notes.model import PitchRange

class State(Enum):
    STOPPED = "stopped"
    PLAYING = "playing"

class Sequencer:
    """Loops over the grid's bars, one bar per step_duration.
    The host calls update(dt) every frame; notes are read from the grid
    at each tick, so edits made while playing are heard on the next bar.
    """
    def __init__(self, grid: Grid, pitches: PitchRange, sink,
                 tempo_bpm: float = 120.0, beats_per_bar: int = 4,
                 sustain: float = 2.5, timbre: Timbre = Timbre.TRIANGLE, volume: float = 0.15):
        if tempo_bpm <= 0:
            raise ValueError(f"tempo must be positive, got {tempo_bpm}")
        if beats_per_bar < 1:
            raise ValueError(f"beats_per_bar must be at least 1, got {beats_per_bar}")
        self.grid = grid
        self.pitches = pitches
        self.sink = sink
        self.tempo_bpm = tempo_bpm
        self.beats_per_bar = beats_per_bar
        self.sustain = sustain
        self.timbre = timbre
        self.volume = volume

        self.state = State.STOPPED
        self._cursor: Optional[int] = None
        self._elapsed = 0.0
        self.ticks = 0

    @property
    def step_duration(self) -> float:
        return (60.0 / self.tempo_bpm) * self.beats_per_bar

    @property
    def cursor(self) -> Optional[int]:
        return self._cursor

    @property
    def is_playing(self) -> bool:
        return self.state is State.PLAYING

    def start(self):
        if self.is_playing:
            return
        self.state = State.PLAYING
        self._elapsed = 0.0
        self.ticks = 0
        self._cursor = 0
        logging.info("Playback started (%.1f BPM, %.2fs per bar)", self.tempo_bpm, self.step_duration)
        self._play_bar(0)

    def stop(self):
        if not self.is_playing:
            return
        self.state = State.STOPPED
        self._elapsed = 0.0
        self._cursor = None
        logging.info("Playback stopped after %d ticks", self.ticks)

    def update(self, dt: float):
        if not self.is_playing:
            return
        self._elapsed += dt
        step = self.step_duration
        while self.is_playing and self._elapsed >= step:
            self._elapsed -= step
            self.tick()

    def tick(self):
        if not self.is_playing:
            return
        self._cursor = (self._cursor + 1) % self.grid.bars
        self.ticks += 1
        self._play_bar(self._cursor)

    def _play_bar(self, bar: int):
        for index in self.grid.ordered_notes(bar):
            self.sink.emit(self.pitches.frequency_of(index), self.sustain, self.timbre, self.volume)
