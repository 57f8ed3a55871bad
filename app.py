# app.py
import logging
import pygame
from typing import Dict, Optional
from config import AppConfig
from controller import HarmonyController
from render.layout import GridLayout
from render.renderer import Renderer
from ui.timeup_overlay import TimeUpOverlay
from input import keymap as km
from midi.export import save_midi
from utils.crashlog import log_exception

def save_file_dialog(title: str, default_ext: str, patterns: list[tuple[str, str]]) -> Optional[str]:
    try:
        import tkinter as tk
        from tkinter import filedialog
        root = tk.Tk(); root.withdraw()
        file = filedialog.asksaveasfilename(title=title, defaultextension=default_ext, filetypes=patterns)
        root.update(); root.destroy()
        return file or None
    except Exception as e:
        logging.warning("Save dialog unavailable: %s", e)
        return None

class App:
    def __init__(self, cfg: AppConfig, sink, keymap: Optional[Dict[int, str]] = None):
        self.cfg = cfg
        self.sink = sink
        self.ctl = HarmonyController(cfg, sink)
        self.layout = GridLayout(cfg.render, self.ctl.grid.bars, self.ctl.pitches.total_notes)
        self.renderer = Renderer(cfg.render, self.layout, self.ctl.pitches)
        self.keymap: Dict[int, str] = dict(keymap or km.DEFAULT_KEYMAP)
        self.overlay: Optional[TimeUpOverlay] = None
        self.running = False

    # ---------- 匯出 ----------
    def export_midi(self):
        path = save_file_dialog("Export MIDI", ".mid", [("MIDI files", "*.mid"), ("All files", "*.*")])
        if not path:
            return False
        pb = self.cfg.playback
        try:
            save_midi(path, self.ctl.grid, self.ctl.pitches,
                      tempo_bpm=pb.tempo_bpm, beats_per_bar=pb.beats_per_bar)
            self.ctl.toast("Exported MIDI!")
            return True
        except (OSError, ValueError) as e:
            log_exception("export_midi", e)
            self.ctl.toast("Failed to export")
            return False

    def copy_summary(self):
        text = self.ctl.summary()
        try:
            if not pygame.scrap.get_init():
                pygame.scrap.init()
            pygame.scrap.put_text(text)
            self.ctl.toast("Copied to clipboard!")
        except pygame.error as e:
            logging.error("Failed to copy: %s", e)
            logging.info("Composition:\n%s", text)
            self.ctl.toast("Failed to copy")

    # ---------- 指令 ----------
    def run_command(self, cmd: str):
        if cmd == km.PLAY:
            self.ctl.toggle_playback()
        elif cmd == km.CLEAR:
            self.ctl.clear()
        elif cmd == km.EXPORT:
            self.export_midi()
        elif cmd == km.COPY:
            self.copy_summary()
        elif cmd == km.QUIT:
            self.running = False

    def _on_click(self, pos):
        label = self.renderer.button_at(pos)
        if label is not None:
            self.run_command({
                "PLAY/STOP": km.PLAY, "CLEAR": km.CLEAR, "EXPORT": km.EXPORT,
                "COPY": km.COPY, "QUIT": km.QUIT,
            }[label])
            return
        cell = self.layout.cell_at(*pos)
        if cell is not None:
            self.ctl.toggle_note(*cell)
            return
        key = self.layout.key_at(*pos)
        if key is not None:
            self.ctl.preview(key)

    # ---------- Main loop ----------
    def run(self):
        self.running = True
        r = self.renderer
        while self.running:
            dt = r.tick(self.cfg.render.fps)
            for e in pygame.event.get():
                if e.type == pygame.QUIT:
                    self.running = False; break

                # Time's Up 覆蓋層事件先處理
                if self.overlay and self.overlay.active:
                    self.overlay.handle_event(e)
                    continue

                if e.type == pygame.KEYDOWN and e.key in self.keymap:
                    self.run_command(self.keymap[e.key])
                elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                    self._on_click(e.pos)

            if not self.running:
                break

            self.ctl.update(dt)

            if self.ctl.expired and self.overlay is None:
                self.overlay = TimeUpOverlay((self.cfg.render.window_w, self.cfg.render.window_h),
                                             self.ctl.summary())
            if self.overlay:
                if self.overlay.want_export:
                    self.export_midi(); self.overlay.want_export = False
                if self.overlay.want_copy:
                    self.copy_summary(); self.overlay.want_copy = False
                if self.overlay.want_restart:
                    self.ctl.new_session()
                    self.overlay = None

            # ----- Render -----
            r.begin_frame()
            cursor = self.ctl.cursor()
            r.draw_status_bar(self.ctl.is_playing, self.ctl.countdown.format(),
                              self.ctl.remaining < 60, self.ctl.message)
            r.draw_headers(self.ctl.grid.labels(), cursor)
            r.draw_keys()
            r.draw_grid(self.ctl.grid, cursor)
            if self.overlay and self.overlay.active:
                self.overlay.draw(r.screen)
            r.end_frame()

        self.ctl.stop()
        logging.info("Window closed")
