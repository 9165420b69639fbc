# tests/test_logging.py
import logging

from utils.logger import LOGGER_NAMES, set_tick_index, setup_logging
from utils.profiler import CodeProfiler


def test_setup_logging_writes_one_file_per_component(tmp_path):
    log_dir = tmp_path / "logs"
    setup_logging(log_dir=str(log_dir), log_level="DEBUG", console_level="WARNING")

    set_tick_index(42)
    logging.getLogger("regulator").info("hello from the regulator")
    for handler in logging.getLogger("regulator").handlers:
        handler.flush()

    for name in LOGGER_NAMES:
        assert (log_dir / f"{name}.log").exists()
    text = (log_dir / "regulator.log").read_text(encoding="utf-8")
    assert "0000042 | INFO | regulator | hello from the regulator" in text

    # Leave the loggers quiet for the rest of the session.
    for name in LOGGER_NAMES:
        log = logging.getLogger(name)
        for h in list(log.handlers):
            log.removeHandler(h)
            h.close()
        log.propagate = True


def test_profiler_warns_over_budget(caplog):
    with caplog.at_level(logging.WARNING, logger="profiler"):
        with CodeProfiler("fast", budget_ms=1000.0) as fast:
            pass
        with CodeProfiler("slow", budget_ms=-1.0) as slow:
            pass

    assert fast.elapsed_ms >= 0.0
    assert slow.elapsed_ms >= 0.0
    messages = [r.getMessage() for r in caplog.records]
    assert any("'slow'" in m and "budget" in m for m in messages)
    assert not any("'fast'" in m for m in messages)
