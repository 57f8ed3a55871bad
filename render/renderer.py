# render/renderer.py
import logging
import pygame
from typing import Optional
from config import RenderConfig
from notes.chords import is_triad
from render.layout import GridLayout

BTN_PAD_X = 12
BTN_GAP = 10
BUTTONS = ["PLAY/STOP", "CLEAR", "EXPORT", "COPY", "QUIT"]

BG = (15, 23, 42)
PANEL = (30, 41, 59)
LINE = (51, 65, 85)
TEXT = (226, 232, 240)
DIM = (148, 163, 184)
CYAN = (8, 145, 178)
CYAN_HOT = (34, 211, 238)
PURPLE = (147, 51, 234)
GREEN = (52, 211, 153)
RED = (248, 113, 113)

class Renderer:
    def __init__(self, cfg: RenderConfig, layout: GridLayout, pitches):
        pygame.init()
        self.cfg = cfg
        self.layout = layout
        self.pitches = pitches
        self.screen = pygame.display.set_mode((cfg.window_w, cfg.window_h))
        pygame.display.set_caption("Harmonic Solver")
        self.font = pygame.font.SysFont("consolas", 18)
        self.font_small = pygame.font.SysFont("consolas", 13)
        self.font_big = pygame.font.SysFont("consolas", 24, bold=True)
        self.clock = pygame.time.Clock()
        self.button_rects = {}
        logging.debug("Renderer ready: %dx%d, bar width %d", cfg.window_w, cfg.window_h, layout.bar_w)

    def tick(self, fps: int = 60) -> float:
        return self.clock.tick(fps) / 1000.0

    def begin_frame(self):
        self.screen.fill(BG)

    def end_frame(self):
        pygame.display.flip()

    def button_at(self, pos) -> Optional[str]:
        for label, rect in self.button_rects.items():
            if rect.collidepoint(pos):
                return label
        return None

    # ------- status bar -------
    def draw_status_bar(self, playing: bool, clock_text: str, low_time: bool, toast: Optional[str]):
        h = self.cfg.status_h
        pygame.draw.rect(self.screen, PANEL, (0, 0, self.cfg.window_w, h))
        pygame.draw.line(self.screen, LINE, (0, h), (self.cfg.window_w, h), 1)

        x = 10; self.button_rects.clear()
        for label in BUTTONS:
            text = ("STOP" if playing else "PLAY") if label == "PLAY/STOP" else label
            surf = self.font_small.render(text, True, TEXT)
            rect = surf.get_rect(); rect.topleft = (x + BTN_PAD_X, (h - rect.height) // 2)
            box = pygame.Rect(x, 6, rect.width + BTN_PAD_X * 2, h - 12)
            fill = (225, 29, 72) if (label == "PLAY/STOP" and playing) else (40, 52, 72)
            pygame.draw.rect(self.screen, fill, box, border_radius=6)
            pygame.draw.rect(self.screen, LINE, box, 1, border_radius=6)
            self.screen.blit(surf, rect)
            self.button_rects[label] = box
            x += box.width + BTN_GAP

        clock = self.font_big.render(clock_text, True, RED if low_time else CYAN_HOT)
        self.screen.blit(clock, (self.cfg.window_w - clock.get_width() - 14, (h - clock.get_height()) // 2))

        if toast:
            surf = self.font.render(toast, True, (255, 255, 255))
            box = surf.get_rect(center=(self.cfg.window_w // 2 + 120, h // 2)).inflate(24, 8)
            pygame.draw.rect(self.screen, (16, 185, 129), box, border_radius=12)
            self.screen.blit(surf, surf.get_rect(center=box.center))

    # ------- headers -------
    def draw_headers(self, labels, cursor: Optional[int]):
        for bar, label in enumerate(labels):
            x, y, w, h = self.layout.header_rect(bar)
            fill = (51, 65, 85) if cursor == bar else (15, 23, 42)
            pygame.draw.rect(self.screen, fill, (x, y, w, h))
            pygame.draw.rect(self.screen, LINE, (x, y, w, h), 1)
            title = self.font_small.render(f"BAR {bar + 1}", True, DIM)
            self.screen.blit(title, (x + (w - title.get_width()) // 2, y + 4))
            chord = self.font.render(label or "-", True, GREEN if is_triad(label) else DIM)
            self.screen.blit(chord, (x + (w - chord.get_width()) // 2, y + h - chord.get_height() - 4))

    # ------- piano keys -------
    def draw_keys(self):
        for index in range(self.pitches.total_notes):
            x, y, w, h = self.layout.key_rect(index)
            black = self.pitches.is_black(index)
            pygame.draw.rect(self.screen, (30, 41, 59) if black else (226, 232, 240), (x, y, w, h))
            pygame.draw.line(self.screen, LINE, (x, y + h - 1), (x + w, y + h - 1), 1)
            surf = self.font_small.render(self.pitches.label_of(index), True, DIM if black else (15, 23, 42))
            self.screen.blit(surf, (x + w - surf.get_width() - 6, y + (h - surf.get_height()) // 2))

    # ------- grid -------
    def draw_grid(self, grid, cursor: Optional[int]):
        for bar in range(grid.bars):
            active = grid.active_notes(bar)
            locked = grid.locked_note(bar)
            for index in range(self.pitches.total_notes):
                x, y, w, h = self.layout.cell_rect(bar, index)
                shade = (24, 33, 50) if self.pitches.is_black(index) else (20, 28, 45)
                if cursor == bar:
                    shade = tuple(min(255, c + 14) for c in shade)
                pygame.draw.rect(self.screen, shade, (x, y, w, h))
                pygame.draw.rect(self.screen, LINE, (x, y, w, h), 1)
                if index not in active:
                    continue
                if index == locked:
                    color = PURPLE
                else:
                    color = CYAN_HOT if cursor == bar else CYAN
                pygame.draw.rect(self.screen, color, (x + 3, y + 2, w - 6, h - 4), border_radius=5)
                if index == locked:
                    tag = self.font_small.render("LOCK", True, (233, 213, 255))
                    self.screen.blit(tag, (x + (w - tag.get_width()) // 2, y + (h - tag.get_height()) // 2))
