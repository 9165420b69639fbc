# simulation/central_config.py
"""
Loads the [simulation] section of config/crane_config.toml.

The crane itself is built by crane.config.build_crane(); this module only
adds what an offline run needs on top of it:

    • SimConfig      (log decimation, scheduled destination changes)
    • duration       (seconds of simulated time)
    • ic_tuple       (initial position, initial destination)

Typical usage::

    from crane.config import load_config, build_crane
    from simulation.central_config import load_simulation_config

    cfg = load_config()
    sim_cfg, duration, ic = load_simulation_config(cfg)
"""
from typing import Any, Dict, Tuple

from simulation.crane_simulator import SimConfig


def load_simulation_config(cfg: Dict[str, Any]) -> Tuple[SimConfig, float, Tuple[float, float]]:
    """
    Builds and returns the offline simulation settings:

        sim_cfg     : SimConfig
        duration    : float
        ic_tuple    : (position0, destination0)

    Missing initial conditions default to the track midpoint.
    """
    scfg = cfg.get("simulation", {})
    track_length = float(cfg.get("track", {}).get("TRACK_LENGTH", 100.0))

    changes = [
        (float(ev["t"]), float(ev["destination"]))
        for ev in scfg.get("destination_changes", [])
    ]
    sim_cfg = SimConfig(
        steps_per_log=int(scfg.get("STEPS_PER_LOG", 10)),
        destination_changes=changes,
    )

    duration = float(scfg.get("DURATION_S", 10.0))
    if duration <= 0:
        raise ValueError(f"DURATION_S must be positive, got {duration}")

    position0 = float(scfg.get("INITIAL_POSITION", track_length / 2.0))
    destination0 = float(scfg.get("INITIAL_DESTINATION", position0))

    return sim_cfg, duration, (position0, destination0)
