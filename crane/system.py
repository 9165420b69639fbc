"""
Public surface of the crane control core.

Rendering and operator-input code talks only to TrolleyCrane: it polls
get_state() / get_destination() for redraws, pushes set_destination() on a
click, and toggles the loop with start() / stop().
"""

from crane.integrator import Integrator
from crane.scheduler import ControlLoop
from crane.state import CraneState, StateStore, TrackConstants
from regulator.controller import CraneRegulator


class TrolleyCrane:
    """
    Wires StateStore, Integrator, CraneRegulator and ControlLoop together.

    Usable as a context manager; leaving the block stops the control loop.
    """

    def __init__(self, track: TrackConstants, regulator: CraneRegulator, reject_out_of_range: bool = False):
        self.track = track
        self.store = StateStore(track, reject_out_of_range=reject_out_of_range)
        self.integrator = Integrator(track)
        self.regulator = regulator
        self.loop = ControlLoop(self.store, self.integrator, self.regulator)

    @classmethod
    def from_config(cls, config) -> "TrolleyCrane":
        from crane.config import build_crane
        return build_crane(config)

    def set_destination(self, x: float) -> float:
        return self.store.set_destination(x)

    def get_destination(self) -> float:
        return self.store.get_destination()

    def get_state(self) -> CraneState:
        return self.store.get_state()

    def start(self) -> None:
        self.loop.start()

    def stop(self) -> None:
        self.loop.stop()

    @property
    def is_running(self) -> bool:
        return self.loop.is_running

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
