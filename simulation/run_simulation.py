"""Offline simulation runner: builds the crane from config, replays the
destination schedule faster than real time, and plots the result.
"""
from __future__ import annotations

import argparse

from crane.config import build_crane, load_config
from simulation.central_config import load_simulation_config
from simulation.crane_simulator import CraneSimulator
from simulation.plot_sim_results import plot_sim_results
from utils.logger import setup_logging


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Run the trolley crane control loop offline.")
    p.add_argument("--config", default=None, help="Path to crane_config.toml")
    p.add_argument("--duration", type=float, default=None, help="Override DURATION_S")
    p.add_argument("--save", default=None, help="Save the plot to this PNG path")
    p.add_argument("--no-show", action="store_true", help="Do not open a plot window")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    cfg = load_config(args.config)

    log_cfg = cfg.get("logging", {})
    setup_logging(
        log_dir=log_cfg.get("LOG_DIR", "logs"),
        log_level=log_cfg.get("LEVEL", "INFO"),
        console_level=log_cfg.get("CONSOLE_LEVEL", "INFO"),
    )

    sim_cfg, duration, ic = load_simulation_config(cfg)
    if args.duration is not None:
        duration = args.duration

    sim = CraneSimulator(build_crane(cfg), sim_cfg)
    sim.reset(*ic)
    sim.run(duration)
    plot_sim_results(sim, save_path=args.save, show=not args.no_show)


if __name__ == "__main__":
    main()
