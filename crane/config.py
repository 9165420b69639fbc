# crane/config.py
"""
Unified configuration loader for the trolley crane.

This module reads config/crane_config.toml and turns the raw TOML tables
into the objects the rest of the project works with, so the control core
never parses files:

    • TrackConstants      ([track])
    • CraneRegulator      ([membership_functions.*], optional [[rule_base]])
    • TrolleyCrane        (everything above, plus DESTINATION_POLICY)

TOML parsing is done with Python's built-in `tomllib`.

Typical usage::

    from crane.config import load_config, build_crane

    cfg = load_config()
    with build_crane(cfg) as crane:
        crane.start()
        crane.set_destination(80.0)
"""
import os
import tomllib
from typing import Any, Dict, Optional

from crane.state import TrackConstants
from crane.system import TrolleyCrane
from regulator.controller import CraneRegulator

DEFAULT_CONFIG_PATH = os.path.normpath(
    os.path.join(os.path.dirname(__file__), "..", "config", "crane_config.toml")
)

DESTINATION_POLICIES = ("clamp", "reject")


# ------------------------------------------------------------
# Load TOML
# ------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Loads the crane configuration; defaults to config/crane_config.toml."""
    with open(path or DEFAULT_CONFIG_PATH, "rb") as f:
        return tomllib.load(f)


# ------------------------------------------------------------
# Builders
# ------------------------------------------------------------
def load_track_constants(cfg: Dict[str, Any]) -> TrackConstants:
    """Builds TrackConstants from [track]; missing keys take the dataclass defaults."""
    track_cfg = cfg.get("track", {})
    defaults = TrackConstants()
    return TrackConstants(
        track_length=float(track_cfg.get("TRACK_LENGTH", defaults.track_length)),
        time_quantum=float(track_cfg.get("TIME_QUANTUM_S", defaults.time_quantum)),
        min_accel_time=float(track_cfg.get("MIN_ACCEL_TIME_S", defaults.min_accel_time)),
        gravity_constant=float(track_cfg.get("GRAVITY_CONSTANT", defaults.gravity_constant)),
    )


def destination_policy(cfg: Dict[str, Any]) -> str:
    policy = str(cfg.get("track", {}).get("DESTINATION_POLICY", "clamp")).lower()
    if policy not in DESTINATION_POLICIES:
        raise ValueError(f"Unknown DESTINATION_POLICY: {policy}")
    return policy


def build_regulator(cfg: Dict[str, Any], track: Optional[TrackConstants] = None) -> CraneRegulator:
    return CraneRegulator(cfg, track or load_track_constants(cfg))


def build_crane(cfg: Dict[str, Any]) -> TrolleyCrane:
    """Builds a ready-to-start TrolleyCrane from a configuration dictionary."""
    track = load_track_constants(cfg)
    regulator = build_regulator(cfg, track)
    return TrolleyCrane(
        track,
        regulator,
        reject_out_of_range=destination_policy(cfg) == "reject",
    )
