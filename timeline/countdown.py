# timeline/countdown.py
import logging
from typing import Callable, Optional

class Countdown:
    """Activity timer. Idle until start(); fires on_expire once at zero."""
    def __init__(self, total_seconds: float = 15 * 60, on_expire: Optional[Callable[[], None]] = None):
        self.total = float(total_seconds)
        self.on_expire = on_expire
        self.remaining = self.total
        self.running = False

    @property
    def expired(self) -> bool:
        return self.remaining <= 0

    def start(self):
        if not self.expired:
            self.running = True

    def reset(self):
        self.remaining = self.total
        self.running = False

    def update(self, dt: float):
        if not self.running:
            return
        self.remaining = max(0.0, self.remaining - dt)
        if self.expired:
            self.running = False
            logging.info("Session time elapsed")
            if self.on_expire:
                self.on_expire()

    def format(self) -> str:
        secs = int(-(-self.remaining // 1))  # ceil, 0.2s left still shows 00:01
        return f"{secs // 60:02d}:{secs % 60:02d}"
