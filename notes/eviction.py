# ========================= notes/eviction.py =========================
from typing import Optional, Sequence

class EvictionStrategy:
    name = ""

    def choose(self, notes: Sequence[int], locked: Optional[int]) -> Optional[int]:
        """Pick the note to drop from a full bar. `notes` is in insertion order."""
        raise NotImplementedError

    @staticmethod
    def _candidates(notes: Sequence[int], locked: Optional[int]) -> list:
        return [n for n in notes if n != locked]

class OldestEviction(EvictionStrategy):
    """Drop the earliest-placed note that is not the locked one."""
    name = "oldest"

    def choose(self, notes: Sequence[int], locked: Optional[int]) -> Optional[int]:
        cands = self._candidates(notes, locked)
        return cands[0] if cands else None

class LowestEviction(EvictionStrategy):
    name = "lowest"

    def choose(self, notes: Sequence[int], locked: Optional[int]) -> Optional[int]:
        return min(self._candidates(notes, locked), default=None)

class HighestEviction(EvictionStrategy):
    name = "highest"

    def choose(self, notes: Sequence[int], locked: Optional[int]) -> Optional[int]:
        return max(self._candidates(notes, locked), default=None)

_STRATEGIES = {s.name: s for s in (OldestEviction, LowestEviction, HighestEviction)}

EVICTION_MODES = tuple(_STRATEGIES)

def make_eviction(mode: str) -> EvictionStrategy:
    try:
        return _STRATEGIES[mode]()
    except KeyError:
        raise ValueError(f"Unknown eviction mode: {mode}")
