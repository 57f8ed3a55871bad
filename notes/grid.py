# ========================= notes/grid.py =========================
import logging
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional
from notes.chords import classify
from notes.eviction import EvictionStrategy, OldestEviction
from notes.model import PitchRange

class ToggleResult(Enum):
    ADDED = "added"
    REMOVED = "removed"
    REPLACED = "replaced"   # added after evicting one note
    LOCKED = "locked"       # locked note, state unchanged

class Grid:
    """
    每個小節的音符集合 + 和弦標籤快取：
    - locked: bar -> pitch index，永遠存在、不能被移除或擠掉
    - max_voices: 每小節最多音數（None = 不限）
    - 每次改變狀態後重新計算該小節的和弦標籤
    """
    def __init__(self, bars: int = 4, max_voices: Optional[int] = 4,
                 locked: Optional[Mapping[int, int]] = None,
                 eviction: Optional[EvictionStrategy] = None):
        self.bars = bars
        self.max_voices = max_voices
        self.locked: Mapping[int, int] = MappingProxyType(dict(locked or {}))
        self.eviction = eviction or OldestEviction()
        self.last_evicted: Optional[int] = None

        if bars < 1:
            raise ValueError(f"bars must be positive, got {bars}")
        for bar in self.locked:
            if not 0 <= bar < bars:
                raise ValueError(f"Locked note for bar {bar} outside 0..{bars - 1}")
        if max_voices is not None:
            floor = 2 if self.locked else 1
            if max_voices < floor:
                raise ValueError(f"max_voices must be at least {floor}, got {max_voices}")

        # insertion order is kept so eviction is reproducible
        self._notes: List[List[int]] = []
        self._labels: List[Optional[str]] = []
        self.initialize()

    # ---------- lifecycle ----------
    def initialize(self):
        self._notes = [[] for _ in range(self.bars)]
        for bar, index in self.locked.items():
            self._notes[bar].append(index)
        self._labels = [classify(n) for n in self._notes]
        self.last_evicted = None

    def clear(self):
        self.initialize()
        logging.debug("Grid cleared (%d locked notes kept)", len(self.locked))

    # ---------- mutation ----------
    def toggle_note(self, bar: int, index: int) -> ToggleResult:
        assert 0 <= bar < self.bars, f"bar {bar} out of range"
        self.last_evicted = None
        if self.locked.get(bar) == index:
            return ToggleResult.LOCKED

        notes = self._notes[bar]
        if index in notes:
            notes.remove(index)
            result = ToggleResult.REMOVED
        else:
            result = ToggleResult.ADDED
            if self.max_voices is not None and len(notes) >= self.max_voices:
                victim = self.eviction.choose(notes, self.locked.get(bar))
                if victim is not None:
                    notes.remove(victim)
                    self.last_evicted = victim
                    result = ToggleResult.REPLACED
            notes.append(index)

        self._labels[bar] = classify(notes)
        logging.debug("toggle bar=%d index=%d -> %s, label=%r", bar, index, result.value, self._labels[bar])
        return result

    # ---------- queries ----------
    def active_notes(self, bar: int) -> frozenset:
        assert 0 <= bar < self.bars, f"bar {bar} out of range"
        return frozenset(self._notes[bar])

    def ordered_notes(self, bar: int) -> List[int]:
        return sorted(self.active_notes(bar))

    def chord_label(self, bar: int) -> Optional[str]:
        assert 0 <= bar < self.bars, f"bar {bar} out of range"
        return self._labels[bar]

    def labels(self) -> List[Optional[str]]:
        return list(self._labels)

    def locked_note(self, bar: int) -> Optional[int]:
        return self.locked.get(bar)

    def is_locked(self, bar: int, index: int) -> bool:
        return self.locked.get(bar) == index

    def as_text(self, pitches: PitchRange) -> str:
        lines = ["My Harmony Composition:", "-" * 22]
        for bar in range(self.bars):
            names = ", ".join(pitches.label_of(i) for i in self.ordered_notes(bar))
            lines.append(f"Bar {bar + 1}: {names or '(Rest)'} [{self._labels[bar] or ''}]")
        return "\n".join(lines) + "\n"
