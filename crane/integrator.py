"""
Advances the crane's physical state by one tick.

The cart is integrated with semi-implicit Euler:
    v <- v + a * dt
    x <- clamp(x + v * dt, 0, track_length)

Sway is not solved as a pendulum. It is driven by the change in acceleration
between consecutive ticks (a jerk-driven linearization):
    angle <- angle + atan((a_prev - a) / g)

so a cart that keeps a constant acceleration holds a constant sway angle,
and the angle telescopes to roughly -a / g.
"""

import logging
import math

from crane.state import CraneState, TrackConstants, HALF_PI

integrator_log = logging.getLogger("integrator")


class Integrator:
    """
    Kinematic model of the trolley and its payload.

    Attributes:
        track (TrackConstants): Rail length, tick period and sway calibration.
    """

    def __init__(self, track: TrackConstants):
        self.track = track
        integrator_log.info(
            "Integrator initialized (dt=%.4f s, g=%.3f).",
            track.time_quantum,
            track.gravity_constant,
        )

    def step(self, state: CraneState) -> CraneState:
        """
        Computes the candidate state for the next tick.

        Position is a hard stop at both rails. The velocity is left as is when
        the cart is pinned, so a stored velocity can be non-zero while the
        position does not change.

        Args:
            state (CraneState): The last committed state.

        Returns:
            CraneState: The candidate state. Its `previous_acceleration` is the
                acceleration consumed by this step.
        """
        dt = self.track.time_quantum

        new_velocity = state.velocity + state.acceleration * dt

        raw_position = state.position + new_velocity * dt
        new_position = max(0.0, min(self.track.track_length, raw_position))
        if new_position != raw_position:
            integrator_log.debug(
                "Cart pinned at rail: raw position %.4f clamped to %.4f (v=%.4f)",
                raw_position,
                new_position,
                new_velocity,
            )

        delta_acc = state.previous_acceleration - state.acceleration
        new_angle = state.angle + math.atan(delta_acc / self.track.gravity_constant)
        # Sway is bounded by the rope hanging horizontal.
        new_angle = max(-HALF_PI, min(HALF_PI, new_angle))

        return state.evolve(
            position=new_position,
            velocity=new_velocity,
            previous_acceleration=state.acceleration,
            angle=new_angle,
        )
