# tests/conftest.py
import pytest

from crane.config import build_regulator, load_config, load_track_constants
from crane.integrator import Integrator
from crane.scheduler import ControlLoop
from crane.state import StateStore


# ------------------------------------------------------------
# Real configuration (config/crane_config.toml)
# ------------------------------------------------------------
@pytest.fixture
def crane_config():
    return load_config()


@pytest.fixture
def track(crane_config):
    return load_track_constants(crane_config)


@pytest.fixture
def regulator(crane_config, track):
    return build_regulator(crane_config, track)


@pytest.fixture
def store(track):
    return StateStore(track)


@pytest.fixture
def integrator(track):
    return Integrator(track)


@pytest.fixture
def loop(store, integrator, regulator):
    loop = ControlLoop(store, integrator, regulator)
    yield loop
    loop.stop(timeout=5.0)
