# plot_sim_results.py
"""
plot_sim_results.py
====================

Analysis & plotting utilities for the trolley crane simulator.

The primary function `plot_sim_results()` accepts a completed CraneSimulator
and draws a two-panel Matplotlib figure:

    • Top:    cart position and destination vs time
    • Bottom: sway angle (left axis) and acceleration command (right axis)

Performance metrics (overshoot, settling time, peak sway) are computed with
numpy from the decimated logs and printed after the plot.

This module contains no physics, configuration, or simulation code.
"""
from __future__ import annotations
from typing import Dict, Optional

import numpy as np
import matplotlib.pyplot as plt

from simulation.crane_simulator import CraneSimulator


# ============================================================
# PERFORMANCE METRICS
# ============================================================

def compute_overshoot(position: np.ndarray, destination: float, start: float) -> float:
    """Distance travelled beyond `destination` in the direction of travel."""
    if destination >= start:
        return max(0.0, float(np.max(position)) - destination)
    return max(0.0, destination - float(np.min(position)))


def compute_settling_time(t: np.ndarray, position: np.ndarray, destination: float,
                          band: float = 0.5) -> float:
    """First time after which the cart stays within `band` units of `destination`."""
    outside = np.nonzero(np.abs(position - destination) > band)[0]
    if len(outside) == 0:
        return float(t[0])
    last = outside[-1]
    if last + 1 >= len(t):
        return float("nan")
    return float(t[last + 1])


def compute_peak_sway(angle: np.ndarray) -> float:
    return float(np.max(np.abs(angle))) if len(angle) else 0.0


def segment_metrics(sim: CraneSimulator) -> Dict[str, float]:
    """Metrics for the final destination segment of a run."""
    t = np.array(sim.log_t)
    position = np.array(sim.log_position)
    destination = np.array(sim.log_destination)
    angle = np.array(sim.log_angle)

    if len(t) == 0:
        return {}

    # Last segment starts where the destination last changed.
    changes = np.nonzero(np.diff(destination))[0]
    first = int(changes[-1]) + 1 if len(changes) else 0
    seg_t, seg_pos = t[first:], position[first:]
    target = float(destination[-1])
    start = float(position[first - 1]) if first > 0 else float(position[0])

    return {
        "destination": target,
        "final_error": float(abs(target - position[-1])),
        "overshoot": compute_overshoot(seg_pos, target, start),
        "settling": compute_settling_time(seg_t, seg_pos, target) - float(seg_t[0]),
        "peak_sway": compute_peak_sway(angle),
    }


# ============================================================
# MAIN PLOTTING FUNCTION
# ============================================================

def plot_sim_results(sim: CraneSimulator, title="Trolley Crane Simulation Results",
                     save_path: Optional[str] = None, show: bool = True):
    t = np.array(sim.log_t)
    position = np.array(sim.log_position)
    destination = np.array(sim.log_destination)
    angle = np.array(sim.log_angle)
    acceleration = np.array(sim.log_acceleration)

    fig, (ax_pos, ax_sway) = plt.subplots(2, 1, figsize=(11, 7), sharex=True)

    ax_pos.plot(t, position, label="position")
    ax_pos.plot(t, destination, 'r--', label="destination")
    ax_pos.set_ylabel("Track units")
    ax_pos.set_ylim(0.0, sim.crane.track.track_length)
    ax_pos.set_title(title)
    ax_pos.grid(True)
    ax_pos.legend(loc="upper right")

    ax_sway.plot(t, angle, label="sway angle (rad)")
    ax_sway.set_xlabel("Time (s)")
    ax_sway.set_ylabel("Angle (rad)")
    ax_sway.grid(True)

    # Right axis for the acceleration command
    ax_acc = ax_sway.twinx()
    ax_acc.plot(t, acceleration, color='gray', alpha=0.5, label="acceleration command")
    ax_acc.set_ylabel("Acceleration (units/s²)", color='gray')
    ax_acc.tick_params(axis='y', labelcolor='gray')

    lines = ax_sway.get_lines() + ax_acc.get_lines()
    ax_sway.legend(lines, [ln.get_label() for ln in lines], loc="upper right")

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path)
        print(f"Saved plot to: {save_path}")
    if show:
        plt.show()

    metrics = segment_metrics(sim)
    if metrics:
        print("\n=== PERFORMANCE METRICS ===")
        print(f"Destination:   {metrics['destination']:.3f}")
        print(f"Final error:   {metrics['final_error']:.4f}")
        print(f"Overshoot:     {metrics['overshoot']:.4f}")
        print(f"Settling time: {metrics['settling']:.3f} s")
        print(f"Peak sway:     {metrics['peak_sway']:.4f} rad")
        print("====================================\n")
    return fig
