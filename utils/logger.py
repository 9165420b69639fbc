# logger.py
import os, glob, logging
from contextvars import ContextVar

_TICK_I = ContextVar("tick_i", default=-1)

LOGGER_NAMES = [
    "main",
    "state",
    "integrator",
    "regulator",
    "fuzzifier",
    "rule_engine",
    "defuzzifier",
    "scheduler",
    "simulation",
    "profiler",
]


def set_tick_index(i: int) -> None:
    """Stamps subsequent records from the current thread with tick number i."""
    _TICK_I.set(int(i))


class TickIndexFilter(logging.Filter):
    def filter(self, record):
        # ensure every record has .i
        record.i = _TICK_I.get()
        return True


def _level(value) -> int:
    if isinstance(value, str):
        return logging.getLevelName(value.upper())
    return int(value)


def setup_logging(
    log_dir: str = "logs",
    overwrite: bool = True,
    log_level=logging.INFO,
    console_level=logging.INFO,
    cleanup_rotated: bool = True,
) -> None:
    """
    Routes every component logger to its own file under `log_dir`.

    Levels may be given as ints or names ("DEBUG"). Per-tick detail is
    logged at DEBUG, so file logging at DEBUG with a 1 ms tick produces
    large files.
    """
    log_level = _level(log_level)
    console_level = _level(console_level)

    os.makedirs(log_dir, exist_ok=True)
    if cleanup_rotated:
        for path in glob.glob(os.path.join(log_dir, "*.log.*")):
            try:
                os.remove(path)
            except OSError:
                pass

    fmt = logging.Formatter("%(i)07d | %(levelname)s | %(name)s | %(message)s")

    # console for "main"
    console = logging.StreamHandler()
    console.setFormatter(fmt)
    console.setLevel(console_level)
    console.addFilter(TickIndexFilter())

    for name in LOGGER_NAMES:
        log = logging.getLogger(name)
        log.setLevel(log_level)
        log.propagate = False
        for h in list(log.handlers):
            log.removeHandler(h)
            h.close()

        mode = "w" if overwrite else "a"
        fh = logging.FileHandler(os.path.join(log_dir, f"{name}.log"), mode=mode, encoding="utf-8")
        fh.setFormatter(fmt)
        fh.setLevel(log_level)
        fh.addFilter(TickIndexFilter())
        log.addHandler(fh)

    # attach console to "main" after filters exist
    logging.getLogger("main").addHandler(console)
    logging.getLogger("main").info("Logging system initialized.")
