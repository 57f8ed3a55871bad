# audio/tones.py
from enum import Enum
import numpy as np

ATTACK = 0.05      # seconds of linear fade-in
FLOOR = 0.001      # exponential decay target

class Timbre(Enum):
    SINE = "sine"
    TRIANGLE = "triangle"
    SQUARE = "square"
    SAWTOOTH = "sawtooth"

    @classmethod
    def parse(cls, name: str) -> "Timbre":
        try:
            return cls(str(name).lower())
        except ValueError:
            raise ValueError(f"Unknown timbre: {name}")

def waveform(freq: float, t: np.ndarray, timbre: Timbre) -> np.ndarray:
    phase = 2 * np.pi * freq * t
    if timbre is Timbre.TRIANGLE:
        return (2 / np.pi) * np.arcsin(np.sin(phase))
    if timbre is Timbre.SQUARE:
        return np.sign(np.sin(phase))
    if timbre is Timbre.SAWTOOTH:
        x = freq * t
        return 2 * (x - np.floor(x + 0.5))
    return np.sin(phase)

def envelope(t: np.ndarray, volume: float, duration: float) -> np.ndarray:
    """Ramp 0 -> volume over ATTACK, then decay exponentially to FLOOR at `duration`."""
    if volume <= 0:
        return np.zeros_like(t)
    env = np.empty_like(t)
    attack = min(ATTACK, duration)
    rising = t < attack
    env[rising] = volume * t[rising] / attack if attack > 0 else volume
    tail = ~rising
    span = max(duration - attack, 1e-6)
    peak = max(volume, FLOOR)
    env[tail] = peak * (FLOOR / peak) ** ((t[tail] - attack) / span)
    return env

def render_tone(freq: float, duration: float, timbre: Timbre = Timbre.SINE,
                volume: float = 0.1, sample_rate: int = 44100) -> np.ndarray:
    """Mono float32 samples in [-1, 1]."""
    volume = min(max(float(volume), 0.0), 1.0)
    samples = max(1, int(sample_rate * duration))
    t = np.arange(samples, dtype=np.float64) / sample_rate
    wave = waveform(freq, t, timbre) * envelope(t, volume, duration)
    return np.clip(wave, -1.0, 1.0).astype(np.float32)

def to_int16(wave: np.ndarray, channels: int = 1) -> np.ndarray:
    pcm = (wave * 32767).astype(np.int16)
    if channels > 1:
        pcm = np.column_stack([pcm] * channels)
    return np.ascontiguousarray(pcm)
