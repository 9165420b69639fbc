# crane_simulator.py
"""
crane_simulator.py
==================

Offline, faster-than-real-time runner for the trolley crane control loop.

The simulator drives exactly the same pipeline as the real-time loop
(StateStore -> Integrator -> CraneRegulator -> commit) by calling
ControlLoop.tick() back to back, with no sleeping in between. Simulated time
advances by one time quantum per tick.

Operator input is replayed from a schedule of destination changes, the
offline counterpart of clicking on the rail in a GUI.

Logging:
    The simulator records time, position, velocity, acceleration, sway
    angle and destination at a decimated rate (steps_per_log).

Typical usage::

    cfg = load_config()
    sim_cfg, duration, ic = load_simulation_config(cfg)

    sim = CraneSimulator(build_crane(cfg), sim_cfg)
    sim.reset(*ic)
    sim.run(duration)

    # logs available in sim.log_position, sim.log_angle, etc.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from crane.system import TrolleyCrane

sim_log = logging.getLogger("simulation")


# ------------------------------------------------------------
# Dataclasses
# ------------------------------------------------------------

@dataclass
class SimConfig:
    steps_per_log: int = 10
    # (t, destination), applied once simulated time reaches t
    destination_changes: List[Tuple[float, float]] = field(default_factory=list)


# ------------------------------------------------------------
# Simulator
# ------------------------------------------------------------

@dataclass
class CraneSimulator:
    crane: TrolleyCrane
    cfg: SimConfig = field(default_factory=SimConfig)

    t: float = 0.0

    log_t: List[float] = field(default_factory=list)
    log_position: List[float] = field(default_factory=list)
    log_velocity: List[float] = field(default_factory=list)
    log_acceleration: List[float] = field(default_factory=list)
    log_angle: List[float] = field(default_factory=list)
    log_destination: List[float] = field(default_factory=list)
    _log_decim: int = 0
    _pending: List[Tuple[float, float]] = field(default_factory=list)

    @property
    def dt(self) -> float:
        return self.crane.track.time_quantum

    # ------------------------------------------------------------
    def reset(self, position: Optional[float] = None, destination: Optional[float] = None, t: float = 0.0):
        if self.crane.is_running:
            raise RuntimeError("Cannot run the offline simulator while the real-time loop is running")

        self.crane.store.reset(position, destination)
        self.t = t

        self.log_t.clear()
        self.log_position.clear()
        self.log_velocity.clear()
        self.log_acceleration.clear()
        self.log_angle.clear()
        self.log_destination.clear()
        self._log_decim = 0
        self._pending = sorted(self.cfg.destination_changes)

        sim_log.info(
            "Simulator reset: position=%.3f, destination=%.3f, %d scheduled destination changes",
            self.crane.get_state().position,
            self.crane.get_destination(),
            len(self._pending),
        )

    # ------------------------------------------------------------
    def _apply_destination_changes(self):
        while self._pending and self._pending[0][0] <= self.t:
            t_change, destination = self._pending.pop(0)
            applied = self.crane.set_destination(destination)
            sim_log.info("t=%.3f s: destination -> %.3f", t_change, applied)

    # ------------------------------------------------------------
    def step(self):
        if self.crane.is_running:
            raise RuntimeError("Cannot step the offline simulator while the real-time loop is running")
        self._apply_destination_changes()

        state = self.crane.loop.tick()
        self.t += self.dt

        # Logging (decimated)
        self._log_decim += 1
        if self._log_decim >= self.cfg.steps_per_log:
            self.log_t.append(self.t)
            self.log_position.append(state.position)
            self.log_velocity.append(state.velocity)
            self.log_acceleration.append(state.acceleration)
            self.log_angle.append(state.angle)
            self.log_destination.append(self.crane.get_destination())
            self._log_decim = 0

    # ------------------------------------------------------------
    def run(self, seconds):
        steps = int(round(seconds / self.dt))
        for _ in range(steps):
            self.step()
        sim_log.info(
            "Ran %d ticks to t=%.3f s, final position=%.4f",
            steps,
            self.t,
            self.crane.get_state().position,
        )
