# midi/export.py
import logging
import mido
from notes.grid import Grid
from notes.model import PitchRange

def grid_to_midi(grid: Grid, pitches: PitchRange, tempo_bpm: float = 120.0,
                 beats_per_bar: int = 4, ticks_per_beat: int = 480,
                 velocity: int = 90) -> mido.MidiFile:
    """One track, each bar written as a block chord lasting the whole bar.
    Empty bars become rests."""
    mid = mido.MidiFile(ticks_per_beat=ticks_per_beat)
    track = mido.MidiTrack()
    mid.tracks.append(track)
    track.append(mido.MetaMessage('track_name', name='Harmony', time=0))
    track.append(mido.MetaMessage('set_tempo', tempo=mido.bpm2tempo(tempo_bpm), time=0))
    track.append(mido.MetaMessage('time_signature', numerator=beats_per_bar, denominator=4, time=0))

    bar_ticks = ticks_per_beat * beats_per_bar
    pending = 0  # delta carried over rests
    for bar in range(grid.bars):
        notes = [pitches.midi_of(i) for i in grid.ordered_notes(bar)]
        if not notes:
            pending += bar_ticks
            continue
        for k, p in enumerate(notes):
            track.append(mido.Message('note_on', note=p, velocity=velocity, time=pending if k == 0 else 0))
        pending = 0
        for k, p in enumerate(notes):
            track.append(mido.Message('note_off', note=p, velocity=0, time=bar_ticks if k == 0 else 0))
    track.append(mido.MetaMessage('end_of_track', time=pending))
    return mid

def save_midi(path: str, grid: Grid, pitches: PitchRange, **kwargs) -> str:
    mid = grid_to_midi(grid, pitches, **kwargs)
    mid.save(path)
    logging.info("Exported %d bars to %s", grid.bars, path)
    return path
