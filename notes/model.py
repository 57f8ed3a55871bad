# notes/model.py
from dataclasses import dataclass
from typing import Tuple

NOTE_NAMES = ['C', 'C#', 'D', 'D#', 'E', 'F', 'F#', 'G', 'G#', 'A', 'A#', 'B']

@dataclass(frozen=True)
class PitchRange:
    """Playable pitches of a session: index 0 is C of `start_octave`,
    one index per semitone, `octaves` full octaves plus the closing C."""
    start_octave: int = 2
    octaves: int = 3

    @property
    def total_notes(self) -> int:
        return 12 * self.octaves + 1

    @property
    def base_midi(self) -> int:
        # MIDI 36 is C2
        return 12 * (self.start_octave + 1)

    def contains(self, index: int) -> bool:
        return 0 <= index < self.total_notes

    def midi_of(self, index: int) -> int:
        return self.base_midi + index

    def frequency_of(self, index: int) -> float:
        return 440.0 * 2 ** ((self.midi_of(index) - 69) / 12)

    def name_of(self, index: int) -> Tuple[str, int]:
        return NOTE_NAMES[index % 12], self.start_octave + index // 12

    def label_of(self, index: int) -> str:
        name, octave = self.name_of(index)
        return f"{name}{octave}"

    def is_black(self, index: int) -> bool:
        return '#' in NOTE_NAMES[index % 12]

    def index_of(self, name: str, octave: int) -> int:
        try:
            pc = NOTE_NAMES.index(name)
        except ValueError:
            raise ValueError(f"Unknown note name: {name}")
        return (octave - self.start_octave) * 12 + pc
