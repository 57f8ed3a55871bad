# notes/chords.py
from typing import Iterable, Optional, Set
from notes.model import NOTE_NAMES

COMPLEX = "Complex/Inversion"
UNKNOWN = "Unknown"

MAJOR = (0, 4, 7)
MINOR = (0, 3, 7)

def pitch_classes(indices: Iterable[int]) -> Set[int]:
    return {i % 12 for i in indices}

def _triad(root: int, shape) -> Set[int]:
    return {(root + step) % 12 for step in shape}

def classify(indices: Iterable[int]) -> Optional[str]:
    """Name the major/minor triad formed by `indices`.

    Returns None below three notes, "Unknown" when fewer than three distinct
    pitch classes remain, "Complex/Inversion" when the classes match no triad
    exactly. Roots are tried in ascending order, major before minor.
    """
    notes = list(indices)
    if len(notes) < 3:
        return None

    pcs = pitch_classes(notes)
    if len(pcs) < 3:
        return UNKNOWN

    for root in range(12):
        if pcs == _triad(root, MAJOR):
            return f"{NOTE_NAMES[root]} Major"
        if pcs == _triad(root, MINOR):
            return f"{NOTE_NAMES[root]} Minor"
    return COMPLEX

def is_triad(label: Optional[str]) -> bool:
    return bool(label) and (label.endswith(" Major") or label.endswith(" Minor"))
