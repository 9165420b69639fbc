"""
Owns the physical state of the crane and the operator's destination.

The store follows a single-cell design: CraneState is a frozen value that is
swapped in as a whole, so a reader either sees the previous commit or the
next one and never a mix of fields from both. The lock is held only for the
reference swap or read, never while the control loop is computing.
"""

import logging
import math
import threading
from dataclasses import dataclass, replace
from typing import Optional

from crane.errors import InvalidDestination, InvariantViolation

state_log = logging.getLogger("state")

HALF_PI = math.pi / 2.0


@dataclass(frozen=True)
class TrackConstants:
    """
    Physical constants fixed for a run.

    Attributes:
        track_length (float): Length of the rail in track units.
        time_quantum (float): Tick period in seconds.
        min_accel_time (float): Time (s) the regulator allows to reach a
            target velocity; bounds how hard it accelerates.
        gravity_constant (float): Sway calibration constant used by the
            integrator (track units per s^2).
    """

    track_length: float = 100.0
    time_quantum: float = 0.001
    min_accel_time: float = 0.2
    gravity_constant: float = 981.0

    def __post_init__(self):
        for name in ("track_length", "time_quantum", "min_accel_time", "gravity_constant"):
            value = getattr(self, name)
            if not value > 0:
                raise ValueError(f"TrackConstants.{name} must be positive, got {value!r}")

    @property
    def midpoint(self) -> float:
        return self.track_length / 2.0


@dataclass(frozen=True)
class CraneState:
    """Snapshot of the cart and payload. Never mutated; use evolve()."""

    position: float
    velocity: float = 0.0
    acceleration: float = 0.0
    previous_acceleration: float = 0.0
    angle: float = 0.0

    def evolve(self, **changes) -> "CraneState":
        """Returns a copy with only the given fields changed."""
        return replace(self, **changes)


class StateStore:
    """
    Sole owner of CraneState and the destination.

    Attributes:
        track (TrackConstants): Constants the invariants are checked against.
        reject_out_of_range (bool): When True, set_destination() raises
            InvalidDestination instead of clamping.
    """

    def __init__(self, track: TrackConstants, reject_out_of_range: bool = False):
        self.track = track
        self.reject_out_of_range = reject_out_of_range
        self._lock = threading.Lock()

        start = track.midpoint
        self._state = CraneState(position=start)
        self._destination = start
        state_log.info(
            "StateStore initialized: track_length=%.2f, start=%.2f, policy=%s",
            track.track_length,
            start,
            "reject" if reject_out_of_range else "clamp",
        )

    # ------------------------------------------------------------
    # Crane state
    # ------------------------------------------------------------
    def get_state(self) -> CraneState:
        with self._lock:
            return self._state

    def commit(self, new_state: CraneState) -> None:
        """
        Atomically replaces the stored state.

        Raises:
            InvariantViolation: If position or angle is outside its range.
        """
        self._check_invariants(new_state)
        with self._lock:
            self._state = new_state

    def _check_invariants(self, state: CraneState) -> None:
        if not (0.0 <= state.position <= self.track.track_length):
            state_log.critical("Rejected commit, position out of range: %r", state)
            raise InvariantViolation(
                f"position {state.position!r} outside [0, {self.track.track_length}]"
            )
        if not (-HALF_PI <= state.angle <= HALF_PI):
            state_log.critical("Rejected commit, angle out of range: %r", state)
            raise InvariantViolation(f"angle {state.angle!r} outside [-pi/2, pi/2]")

    # ------------------------------------------------------------
    # Destination
    # ------------------------------------------------------------
    def set_destination(self, x: float) -> float:
        """
        Sets the destination, clamping it onto the track.

        Args:
            x (float): Requested destination in track units.

        Returns:
            float: The destination actually stored.

        Raises:
            InvalidDestination: Only under the reject policy, or for NaN.
        """
        x = self._checked_destination(x)
        with self._lock:
            self._destination = x
        state_log.info("Destination set to %.3f", x)
        return x

    def get_destination(self) -> float:
        with self._lock:
            return self._destination

    def _checked_destination(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            raise InvalidDestination("destination is NaN")

        limit = self.track.track_length
        if not (0.0 <= x <= limit):
            if self.reject_out_of_range:
                raise InvalidDestination(f"destination {x!r} outside [0, {limit}]")
            clamped = max(0.0, min(limit, x))
            state_log.warning("Destination %.3f outside track, clamped to %.3f.", x, clamped)
            x = clamped
        return x

    # ------------------------------------------------------------
    def reset(self, position: Optional[float] = None, destination: Optional[float] = None) -> None:
        """
        Puts the cart at rest at `position` (midpoint by default).

        The destination defaults to the new position. Both are validated
        before either is stored, so a rejected reset leaves the store as it was.
        """
        start = self.track.midpoint if position is None else float(position)
        new_state = CraneState(position=start)
        self._check_invariants(new_state)
        target = self._checked_destination(start if destination is None else destination)

        with self._lock:
            self._state = new_state
            self._destination = target
        state_log.info("Store reset: position=%.3f, destination=%.3f", start, target)
