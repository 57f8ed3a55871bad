"""Tests for command line configuration."""

import json

from main import build_parser, config_from_args, load_keymap


def _cfg(*argv):
    return config_from_args(build_parser().parse_args(list(argv)))


def test_defaults() -> None:
    cfg = _cfg()
    assert cfg.grid.max_voices == 4
    assert cfg.grid.eviction == "oldest"
    assert len(cfg.grid.bass) == 4
    assert cfg.playback.tempo_bpm == 120
    assert cfg.session.activity_seconds == 900
    assert cfg.audio.enabled


def test_overrides() -> None:
    cfg = _cfg("--tempo", "90", "--max-voices", "0", "--no-bass", "--minutes", "1",
               "--eviction", "lowest", "--mute")
    assert cfg.playback.tempo_bpm == 90
    assert cfg.grid.max_voices is None
    assert cfg.grid.bass == ()
    assert cfg.grid.eviction == "lowest"
    assert cfg.session.activity_seconds == 60
    assert not cfg.audio.enabled


def test_load_keymap(tmp_path) -> None:
    import pygame

    pygame.init()
    path = tmp_path / "keys.json"
    path.write_text(json.dumps({"p": "play"}), encoding="utf-8")
    assert load_keymap(str(path)) == {pygame.K_p: "play"}
