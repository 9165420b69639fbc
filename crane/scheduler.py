"""
Fixed-rate control loop for the trolley crane.

Each tick reads the last committed CraneState, advances it with the
Integrator, asks the regulator for the next acceleration command against
that candidate, and commits the result to the StateStore in one swap.

The loop runs on a thread owned by ControlLoop. Stopping is cooperative: a
threading.Event is checked at every tick boundary and doubles as the
inter-tick wait, so stop() returns as soon as the running tick completes.
A late tick only degrades smoothness; the next tick resumes from whatever
was committed last.
"""

import logging
import threading
import time
from typing import Optional

from crane.integrator import Integrator
from crane.state import CraneState, StateStore
from regulator.controller import CraneRegulator
from utils.logger import set_tick_index
from utils.profiler import CodeProfiler

scheduler_log = logging.getLogger("scheduler")


class ControlLoop:
    """
    Drives Integrator -> Regulator -> StateStore.commit once per tick.

    Attributes:
        store (StateStore): Shared state cell.
        integrator (Integrator): Physics model.
        regulator (CraneRegulator): Fuzzy regulator.
        period (float): Tick period in seconds.
        ticks (int): Number of ticks committed so far.
    """

    def __init__(self, store: StateStore, integrator: Integrator, regulator: CraneRegulator):
        self.store = store
        self.integrator = integrator
        self.regulator = regulator
        self.period = store.track.time_quantum
        self.ticks = 0

        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lifecycle = threading.Lock()
        self._profiler = CodeProfiler("Control Tick", budget_ms=self.period * 1000.0)

    # ------------------------------------------------------------
    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def tick(self) -> CraneState:
        """
        Runs one pipeline pass synchronously.

        Returns:
            CraneState: The state that was committed.

        Raises:
            RuntimeError: If called from another thread while the loop thread
                is running; the store accepts commits from one writer only.
        """
        if self.is_running and threading.current_thread() is not self._thread:
            raise RuntimeError("tick() called while the control loop thread is running")

        set_tick_index(self.ticks)
        state = self.store.get_state()
        destination = self.store.get_destination()

        candidate = self.integrator.step(state)
        command = self.regulator.calculate_acceleration(candidate, destination)
        new_state = candidate.evolve(acceleration=command)

        self.store.commit(new_state)
        self.ticks += 1
        return new_state

    # ------------------------------------------------------------
    def start(self) -> None:
        """Enables the loop. Does nothing if it is already running."""
        with self._lifecycle:
            if self.is_running:
                return
            self._stop.clear()
            self._thread = threading.Thread(target=self._run, name="crane-control-loop")
            self._thread.start()
        scheduler_log.info("Control loop started at %.1f Hz.", 1.0 / self.period)

    def stop(self, timeout: Optional[float] = None) -> None:
        """Disables the loop and joins its thread. The store keeps its last commit."""
        with self._lifecycle:
            thread = self._thread
            if thread is None:
                return
            self._stop.set()
            thread.join(timeout)
            if thread.is_alive():
                scheduler_log.error("Control loop thread did not stop within %s s.", timeout)
                return
            self._thread = None
        scheduler_log.info("Control loop stopped after %d ticks.", self.ticks)

    # ------------------------------------------------------------
    def _run(self) -> None:
        next_deadline = time.perf_counter()
        try:
            while not self._stop.is_set():
                with self._profiler:
                    self.tick()

                next_deadline += self.period
                sleep_time = next_deadline - time.perf_counter()
                if sleep_time > 0:
                    self._stop.wait(sleep_time)
                else:
                    # Behind schedule; resume from now rather than bursting.
                    next_deadline = time.perf_counter()
        except Exception:
            scheduler_log.critical("Control loop terminated by an unhandled exception.", exc_info=True)
            raise
