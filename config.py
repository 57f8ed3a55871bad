# ========================= config.py =========================
from dataclasses import dataclass, field
from typing import Optional, Tuple

# 固定低音線 F2 - C3 - A2 - D3
DEFAULT_BASS: Tuple[Tuple[str, int], ...] = (("F", 2), ("C", 3), ("A", 2), ("D", 3))

@dataclass
class GridConfig:
    bars: int = 4
    start_octave: int = 2
    octaves: int = 3                  # C2..C5
    max_voices: Optional[int] = 4     # None = unbounded
    eviction: str = "oldest"          # or "lowest" / "highest"
    bass: Tuple[Tuple[str, int], ...] = DEFAULT_BASS

@dataclass
class PlaybackConfig:
    tempo_bpm: float = 120.0
    beats_per_bar: int = 4
    sustain: float = 2.5
    timbre: str = "triangle"
    volume: float = 0.15
    preview_duration: float = 0.3
    preview_timbre: str = "sine"
    preview_volume: float = 0.1
    key_preview_duration: float = 0.5

@dataclass
class SessionConfig:
    activity_seconds: float = 15 * 60
    toast_seconds: float = 2.0

@dataclass
class AudioConfig:
    sample_rate: int = 44100
    channels: int = 32    # mixer channels, tones overlap across bars
    enabled: bool = True

@dataclass
class RenderConfig:
    window_w: int = 1100
    window_h: int = 860
    status_h: int = 44
    header_h: int = 44
    key_w: int = 96
    row_h: int = 20
    fps: int = 60

@dataclass
class AppConfig:
    grid: GridConfig = field(default_factory=GridConfig)
    playback: PlaybackConfig = field(default_factory=PlaybackConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    audio: AudioConfig = field(default_factory=AudioConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
