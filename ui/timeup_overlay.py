# ui/timeup_overlay.py
import pygame
from typing import Tuple

class TimeUpOverlay:
    """Time's Up 面板：顯示作品摘要，透過旗標通知 App（匯出 / 重新開始）。"""
    def __init__(self, screen_size: Tuple[int, int], summary: str):
        self.w, self.h = screen_size
        self.summary = summary
        self.active = True

        # 供 App 查詢的請求旗標
        self.want_export = False
        self.want_copy = False
        self.want_restart = False

        self.panel_w = 520
        self.panel_h = 420
        self.panel_x = (self.w - self.panel_w) // 2
        self.panel_y = (self.h - self.panel_h) // 2

        bx = self.panel_x + (self.panel_w - 420) // 2
        by = self.panel_y + self.panel_h - 56
        self.btn_export  = pygame.Rect(bx, by, 130, 34)
        self.btn_copy    = pygame.Rect(bx + 145, by, 130, 34)
        self.btn_restart = pygame.Rect(bx + 290, by, 130, 34)

        self.font       = pygame.font.SysFont("consolas", 16)
        self.font_small = pygame.font.SysFont("consolas", 14)
        self.font_title = pygame.font.SysFont("consolas", 30, bold=True)

    def handle_event(self, e: pygame.event.Event):
        if not self.active:
            return
        if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
            if self.btn_export.collidepoint(e.pos):
                self.want_export = True; return
            if self.btn_copy.collidepoint(e.pos):
                self.want_copy = True; return
            if self.btn_restart.collidepoint(e.pos):
                self.want_restart = True; self.active = False

    def draw(self, surface: pygame.Surface):
        mask = pygame.Surface((self.w, self.h), pygame.SRCALPHA)
        mask.fill((15, 23, 42, 220))
        surface.blit(mask, (0, 0))

        panel = (self.panel_x, self.panel_y, self.panel_w, self.panel_h)
        pygame.draw.rect(surface, (30, 41, 59), panel, border_radius=14)
        pygame.draw.rect(surface, (71, 85, 105), panel, 1, border_radius=14)

        title = self.font_title.render("Time's Up!", True, (255, 255, 255))
        surface.blit(title, (self.panel_x + (self.panel_w - title.get_width()) // 2, self.panel_y + 24))
        sub = self.font.render("The problem solving session has ended.", True, (148, 163, 184))
        surface.blit(sub, (self.panel_x + (self.panel_w - sub.get_width()) // 2, self.panel_y + 68))

        y = self.panel_y + 110
        for line in self.summary.splitlines():
            surf = self.font_small.render(line, True, (203, 213, 225))
            surface.blit(surf, (self.panel_x + 32, y))
            y += surf.get_height() + 4

        self._draw_button(surface, self.btn_export, "Export MIDI", (51, 65, 85))
        self._draw_button(surface, self.btn_copy, "Copy Text", (51, 65, 85))
        self._draw_button(surface, self.btn_restart, "New Session", (8, 145, 178))

    def _draw_button(self, surface: pygame.Surface, rect: pygame.Rect, label: str, fill):
        pygame.draw.rect(surface, fill, rect, border_radius=17)
        t = self.font_small.render(label, True, (255, 255, 255))
        surface.blit(t, (rect.x + (rect.w - t.get_width()) // 2, rect.y + (rect.h - t.get_height()) // 2))
