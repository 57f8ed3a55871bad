# ========================= input/keymap.py =========================
import pygame
from typing import Dict

# 指令名稱
PLAY = "play"
CLEAR = "clear"
EXPORT = "export"
COPY = "copy"
QUIT = "quit"

COMMANDS = (PLAY, CLEAR, EXPORT, COPY, QUIT)

# 預設配置（可用 --keymap JSON 覆蓋）
DEFAULT_KEYMAP: Dict[int, str] = {
    pygame.K_SPACE: PLAY,
    pygame.K_BACKSPACE: CLEAR,
    pygame.K_e: EXPORT,
    pygame.K_c: COPY,
    pygame.K_ESCAPE: QUIT,
}

def keycode_to_name(k: int) -> str:
    try:
        return pygame.key.name(k)
    except Exception:
        return str(k)

def name_to_keycode(name: str) -> int:
    """把 'space', 'e' 等名稱轉回 pygame 的 keycode。"""
    try:
        return pygame.key.key_code(name)
    except ValueError:
        # 允許純數字 keycode
        try:
            return int(name)
        except ValueError:
            raise ValueError(f"Unknown key name: {name}")

def serialize_keymap(kmap: Dict[int, str]) -> dict:
    """以 key 名稱輸出，便於人看與儲存 JSON。"""
    return {keycode_to_name(k): cmd for k, cmd in kmap.items()}

def deserialize_keymap(obj: dict) -> Dict[int, str]:
    """從 名稱 -> 指令 的 JSON 還原為 keycode -> 指令。"""
    out: Dict[int, str] = {}
    for kname, cmd in obj.items():
        if cmd not in COMMANDS:
            raise ValueError(f"Unknown command for key {kname!r}: {cmd!r}")
        out[name_to_keycode(str(kname))] = cmd
    return out
