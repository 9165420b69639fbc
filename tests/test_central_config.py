# tests/test_central_config.py
import pytest

from crane.config import (
    DEFAULT_CONFIG_PATH,
    build_regulator,
    destination_policy,
    load_config,
    load_track_constants,
)
from crane.state import TrackConstants
from simulation.central_config import load_simulation_config


def test_default_config_has_all_sections(crane_config):
    for key in ("track", "logging", "membership_functions", "simulation"):
        assert key in crane_config
    assert set(crane_config["membership_functions"]) >= {"Distance", "Angle", "Velocity"}


def test_track_constants(track):
    assert track == TrackConstants(track_length=100.0, time_quantum=0.001,
                                   min_accel_time=0.2, gravity_constant=981.0)
    assert track.midpoint == 50.0


def test_track_constants_defaults_for_missing_keys():
    assert load_track_constants({}) == TrackConstants()


def test_load_config_explicit_path(tmp_path):
    path = tmp_path / "small.toml"
    path.write_text('[track]\nTRACK_LENGTH = 20.0\nDESTINATION_POLICY = "reject"\n')
    cfg = load_config(str(path))
    assert load_track_constants(cfg).track_length == 20.0
    assert destination_policy(cfg) == "reject"


def test_default_path_points_at_repo_config():
    assert DEFAULT_CONFIG_PATH.endswith("crane_config.toml")


@pytest.mark.parametrize("policy, expected", [("clamp", "clamp"), ("REJECT", "reject")])
def test_destination_policy(policy, expected):
    assert destination_policy({"track": {"DESTINATION_POLICY": policy}}) == expected


def test_destination_policy_defaults_to_clamp():
    assert destination_policy({}) == "clamp"


def test_unknown_destination_policy():
    with pytest.raises(ValueError):
        destination_policy({"track": {"DESTINATION_POLICY": "wrap"}})


def test_rule_base_override(crane_config):
    crane_config["rule_base"] = [
        {"rule": ["DistanceNegative", "AngleNegative"], "output": "VelocityZero"},
    ]
    regulator = build_regulator(crane_config)
    assert len(regulator.rule_engine.rules) == 1


def test_load_simulation_config(crane_config):
    sim_cfg, duration, ic = load_simulation_config(crane_config)
    assert duration == 20.0
    assert ic == (0.0, 100.0)
    assert sim_cfg.steps_per_log == 10
    assert sim_cfg.destination_changes == [(10.0, 30.0)]


def test_load_simulation_config_defaults():
    sim_cfg, duration, ic = load_simulation_config({"track": {"TRACK_LENGTH": 40.0}})
    assert duration == 10.0
    assert ic == (20.0, 20.0)
    assert sim_cfg.destination_changes == []


def test_load_simulation_config_rejects_bad_duration():
    with pytest.raises(ValueError):
        load_simulation_config({"simulation": {"DURATION_S": 0}})
