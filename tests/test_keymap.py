"""Tests for command key bindings."""

import pygame
import pytest

from input.keymap import (
    CLEAR,
    DEFAULT_KEYMAP,
    PLAY,
    deserialize_keymap,
    serialize_keymap,
)


@pytest.fixture(autouse=True, scope="module")
def _pygame():
    pygame.init()
    yield
    pygame.quit()


def test_default_bindings() -> None:
    assert DEFAULT_KEYMAP[pygame.K_SPACE] == PLAY
    assert DEFAULT_KEYMAP[pygame.K_BACKSPACE] == CLEAR


def test_serialize_uses_key_names() -> None:
    data = serialize_keymap(DEFAULT_KEYMAP)
    assert data["space"] == PLAY
    assert deserialize_keymap(data) == DEFAULT_KEYMAP


def test_numeric_keycodes_accepted() -> None:
    assert deserialize_keymap({str(pygame.K_p): PLAY}) == {pygame.K_p: PLAY}


def test_unknown_command_rejected() -> None:
    with pytest.raises(ValueError):
        deserialize_keymap({"space": "dance"})
