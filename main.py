"""
Main entry point for the trolley crane controller.

This script builds the crane from config/crane_config.toml, starts the
real-time control loop and plays the part of the display: it polls the
crane state at a fixed refresh rate and logs it. Destinations can be given
on the command line, either as a single target or as a list of
"seconds:position" steps.
"""

import argparse
import logging
import os
import signal
import threading
import time

from crane.config import build_crane, load_config
from utils.logger import setup_logging

# -----------------------------------------------------------------------------
# Cross-platform shutdown handling:
# - SIGINT works on Windows and Linux (Ctrl-C).
# - SIGTERM is installed only on non-Windows.
# -----------------------------------------------------------------------------
shutdown = threading.Event()


def _on_signal(_sig, _frm):
    shutdown.set()


def _install_signal_handlers():
    signal.signal(signal.SIGINT, _on_signal)
    if os.name != "nt":
        signal.signal(signal.SIGTERM, _on_signal)


def _parse_step(text):
    at, _, where = text.partition(":")
    if not where:
        raise argparse.ArgumentTypeError(f"expected SECONDS:POSITION, got '{text}'")
    return float(at), float(where)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Run the trolley crane control loop in real time.")
    p.add_argument("--config", default=None, help="Path to crane_config.toml")
    p.add_argument("--destination", type=float, default=None, help="Initial destination")
    p.add_argument(
        "--step",
        type=_parse_step,
        action="append",
        default=[],
        metavar="SECONDS:POSITION",
        help="Change the destination after SECONDS (repeatable)",
    )
    p.add_argument("--duration", type=float, default=None, help="Stop after this many seconds")
    p.add_argument("--refresh-hz", type=float, default=20.0, help="State polling rate")
    return p.parse_args(argv)


def main_control_loop(argv=None):
    """
    Start the crane, feed it destinations and poll its state until shutdown.
    """
    args = parse_args(argv)
    cfg = load_config(args.config)

    # Initialize logging
    log_cfg = cfg.get("logging", {})
    setup_logging(
        log_dir=log_cfg.get("LOG_DIR", "logs"),
        log_level=log_cfg.get("LEVEL", "INFO"),
        console_level=log_cfg.get("CONSOLE_LEVEL", "INFO"),
    )
    main_log = logging.getLogger("main")
    main_log.info("Application starting...")

    _install_signal_handlers()

    crane = build_crane(cfg)
    main_log.info("All components initialized successfully.")

    steps = sorted(args.step)
    refresh_period = 1.0 / args.refresh_hz
    start_time = time.perf_counter()

    try:
        crane.start()
        if args.destination is not None:
            crane.set_destination(args.destination)

        while not shutdown.is_set():
            elapsed = time.perf_counter() - start_time
            if args.duration is not None and elapsed >= args.duration:
                break

            while steps and steps[0][0] <= elapsed:
                _, where = steps.pop(0)
                crane.set_destination(where)

            state = crane.get_state()
            main_log.info(
                "t=%7.3f s | x=%8.3f | v=%8.3f | a=%9.3f | angle=%+.4f | dest=%7.3f",
                elapsed,
                state.position,
                state.velocity,
                state.acceleration,
                state.angle,
                crane.get_destination(),
            )
            shutdown.wait(refresh_period)

    except KeyboardInterrupt:
        main_log.info("Keyboard interrupt received. Shutting down.")
    except Exception as e:
        main_log.critical(
            "An unhandled exception occurred in the main loop: %s", e, exc_info=True
        )
        raise
    finally:
        # Ensure the control thread is joined on exit
        main_log.info("Stopping control loop.")
        crane.stop()
        main_log.info("Application finished.")


if __name__ == "__main__":
    main_control_loop()
