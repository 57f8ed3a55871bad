# utils/crashlog.py
import os, sys, faulthandler, datetime, traceback, threading

APP_NAME = "Harmonic Solver"
_fault_file = None

def log_dir() -> str:
    d = os.environ.get("HARMONY_LOG_DIR") or os.path.join(os.getcwd(), "logs")
    os.makedirs(d, exist_ok=True)
    return d

def _report_path(kind: str) -> str:
    stamp = datetime.datetime.now().strftime("%Y%m%d-%H%M%S-%f")
    return os.path.join(log_dir(), f"{kind}-{stamp}.txt")

def _write_report(kind: str, title: str, exc_type, exc, tb) -> str:
    """One text file per failure: app name, thread, title, traceback."""
    path = _report_path(kind)
    with open(path, "w", encoding="utf-8") as out:
        out.write(f"{APP_NAME} | {title} | thread={threading.current_thread().name}\n")
        out.write("=" * 60 + "\n")
        out.writelines(traceback.format_exception(exc_type, exc, tb))
    return path

def setup_crashlog():
    """Native faults -> native-*.txt, uncaught exceptions (any thread) -> crash-*.txt."""
    global _fault_file
    if _fault_file is None:
        try:
            _fault_file = open(_report_path("native"), "w", encoding="utf-8")
        except OSError:
            return
    faulthandler.enable(_fault_file, all_threads=True)

    def _uncaught(exc_type, exc, tb):
        try:
            _write_report("crash", "uncaught exception", exc_type, exc, tb)
        finally:
            sys.__excepthook__(exc_type, exc, tb)

    sys.excepthook = _uncaught
    threading.excepthook = lambda args: _uncaught(args.exc_type, args.exc_value, args.exc_traceback)

def log_exception(title: str, exc: BaseException) -> str:
    return _write_report("error", title, type(exc), exc, exc.__traceback__)
