import os
import tempfile

# headless pygame, and keep crash/app logs out of the checkout
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("HARMONY_LOG_DIR", tempfile.mkdtemp(prefix="harmony-logs-"))

import pytest

from audio.synth import RecordingSink
from config import AppConfig
from controller import HarmonyController


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def controller(sink: RecordingSink) -> HarmonyController:
    return HarmonyController(AppConfig(), sink)
