# audio/synth.py
import logging
from typing import List, Protocol, Tuple
import pygame
from audio.tones import Timbre, render_tone, to_int16

class ToneSink(Protocol):
    """One-way tone output. emit() is fire-and-forget."""
    def resume(self) -> None: ...
    def emit(self, frequency: float, duration: float, timbre: Timbre, volume: float) -> None: ...

class NullSink:
    def resume(self) -> None:
        pass

    def emit(self, frequency: float, duration: float, timbre: Timbre, volume: float) -> None:
        pass

class RecordingSink:
    """Keeps every emitted tone instead of playing it; used for headless checks."""
    def __init__(self):
        self.tones: List[Tuple[float, float, Timbre, float]] = []
        self.resumed = 0

    def resume(self) -> None:
        self.resumed += 1

    def emit(self, frequency: float, duration: float, timbre: Timbre, volume: float) -> None:
        self.tones.append((frequency, duration, timbre, volume))

    def clear(self):
        self.tones.clear()

class Synth:
    """
    pygame.mixer 合成音源：
    - 第一次 resume()/emit() 才初始化 mixer（之後整個 session 共用）
    - 每個音用獨立 channel，可跨小節重疊
    - 沒有音效裝置時記錄一次警告，之後靜音
    """
    def __init__(self, cfg):
        self.cfg = cfg
        self.ready = False
        self._failed = False
        self._rate = cfg.sample_rate
        self._out_channels = 1

    def resume(self):
        if self.ready or self._failed or not self.cfg.enabled:
            return
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=self.cfg.sample_rate, size=-16, channels=2, buffer=512)
            pygame.mixer.set_num_channels(self.cfg.channels)
            self._rate, _, self._out_channels = pygame.mixer.get_init()
            self.ready = True
            logging.info("[Synth] mixer ready: %d Hz, %d ch", self._rate, self._out_channels)
        except pygame.error as e:
            self._failed = True
            logging.warning("[Synth] audio init failed, running silent: %s", e)

    def emit(self, frequency: float, duration: float, timbre: Timbre, volume: float):
        self.resume()
        if not self.ready:
            return
        try:
            wave = render_tone(frequency, duration, timbre, volume, self._rate)
            sound = pygame.sndarray.make_sound(to_int16(wave, self._out_channels))
            channel = pygame.mixer.find_channel(True)
            if channel is not None:
                channel.play(sound)
        except (pygame.error, ValueError):
            logging.exception("[Synth] failed to play %.2f Hz", frequency)

    def close(self):
        if self.ready:
            pygame.mixer.stop()
            pygame.mixer.quit()
        self.ready = False
