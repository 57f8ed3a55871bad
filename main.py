# main.py
import sys, os
sys.path.append(os.path.dirname(__file__))  # 確保能找到 config.py

from utils.crashlog import setup_crashlog, log_exception, log_dir
setup_crashlog()

import argparse, json
import logging, traceback
from config import AppConfig, GridConfig, PlaybackConfig, SessionConfig, AudioConfig
from notes.eviction import EVICTION_MODES

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

def _init_logging(level=logging.DEBUG):
    logs = log_dir()
    log_path = os.path.join(logs, "app.log")

    if logging.getLogger().handlers:
        return

    logging.basicConfig(level=level, format=LOG_FORMAT, encoding="utf-8")
    try:
        from logging.handlers import RotatingFileHandler
        fh = RotatingFileHandler(log_path, maxBytes=2*1024*1024, backupCount=3, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(fh)
    except OSError as e:
        logging.warning("File logging disabled: %s", e)

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Build chords over a looping bass line.")
    ap.add_argument('--tempo', type=float, default=120.0)
    ap.add_argument('--max-voices', type=int, default=4, help="notes per bar, 0 = unbounded")
    ap.add_argument('--eviction', default='oldest', choices=EVICTION_MODES)
    ap.add_argument('--no-bass', action='store_true', help="start with empty bars")
    ap.add_argument('--minutes', type=float, default=15.0)
    ap.add_argument('--start-octave', type=int, default=2)
    ap.add_argument('--octaves', type=int, default=3)
    ap.add_argument('--keymap', default=None, help="JSON file of key name -> command")
    ap.add_argument('--mute', action='store_true')
    ap.add_argument('--quiet', action='store_true', help="log INFO and above only")
    return ap

def config_from_args(args) -> AppConfig:
    grid = GridConfig(
        start_octave=args.start_octave,
        octaves=args.octaves,
        max_voices=args.max_voices or None,
        eviction=args.eviction,
    )
    if args.no_bass:
        grid.bass = ()
    return AppConfig(
        grid=grid,
        playback=PlaybackConfig(tempo_bpm=args.tempo),
        session=SessionConfig(activity_seconds=args.minutes * 60),
        audio=AudioConfig(enabled=not args.mute),
    )

def load_keymap(path):
    from input.keymap import deserialize_keymap
    with open(path, "r", encoding="utf-8") as f:
        return deserialize_keymap(json.load(f))

def main(argv=None):
    args = build_parser().parse_args(argv)
    _init_logging(logging.INFO if args.quiet else logging.DEBUG)
    logging.info("應用程式啟動")

    from app import App
    from audio.synth import Synth

    cfg = config_from_args(args)
    keymap = load_keymap(args.keymap) if args.keymap else None
    synth = Synth(cfg.audio)
    try:
        App(cfg, synth, keymap=keymap).run()
    finally:
        synth.close()

if __name__ == '__main__':
    try:
        main()
    except Exception as e:
        try:
            log_exception("Top-level exception", e)
        except OSError:
            pass
        logging.error("未捕捉的例外：%s", e, exc_info=True)
        print("程式發生錯誤，請到 logs/ 資料夾看 app.log 與 error-*.txt")
        traceback.print_exc()
