# render/layout.py
from typing import Optional, Tuple
from config import RenderConfig

Rect = Tuple[int, int, int, int]

class GridLayout:
    """Screen geometry of the note grid. Rows run from the highest pitch
    (top) down to index 0; bars share the width right of the key column."""

    def __init__(self, cfg: RenderConfig, bars: int, total_notes: int):
        self.cfg = cfg
        self.bars = bars
        self.total_notes = total_notes
        self.top = cfg.status_h + cfg.header_h
        self.left = cfg.key_w
        self.bar_w = max(1, (cfg.window_w - cfg.key_w) // bars)
        # rows shrink below cfg.row_h when the range would overflow the window
        self.row_h = max(1, min(cfg.row_h, (cfg.window_h - self.top) // max(1, total_notes)))

    @property
    def bottom(self) -> int:
        return self.top + self.total_notes * self.row_h

    def row_y(self, index: int) -> int:
        return self.top + (self.total_notes - 1 - index) * self.row_h

    def cell_rect(self, bar: int, index: int) -> Rect:
        return (self.left + bar * self.bar_w, self.row_y(index), self.bar_w, self.row_h)

    def key_rect(self, index: int) -> Rect:
        return (0, self.row_y(index), self.cfg.key_w, self.row_h)

    def header_rect(self, bar: int) -> Rect:
        return (self.left + bar * self.bar_w, self.cfg.status_h, self.bar_w, self.cfg.header_h)

    def _index_at(self, y: int) -> Optional[int]:
        if not self.top <= y < self.bottom:
            return None
        return self.total_notes - 1 - (y - self.top) // self.row_h

    def cell_at(self, x: int, y: int) -> Optional[Tuple[int, int]]:
        index = self._index_at(y)
        if index is None or x < self.left:
            return None
        bar = (x - self.left) // self.bar_w
        if bar >= self.bars:
            return None
        return bar, index

    def key_at(self, x: int, y: int) -> Optional[int]:
        if not 0 <= x < self.left:
            return None
        return self._index_at(y)
