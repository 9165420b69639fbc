import pytest

from regulator.fuzzifier import Fuzzifier, LinguisticVariable
from regulator.membership import MembershipFunction


@pytest.fixture
def basic_fuzzifier():
    """Returns a Fuzzifier with one simple, symmetric variable."""
    theta = LinguisticVariable(
        "Theta",
        MembershipFunction.falling(None, -0.5, 0.0),
        MembershipFunction.pyramidal(-0.5, 0.0, 0.5),
        MembershipFunction.rising(0.0, 0.5),
    )
    return Fuzzifier([theta])


def test_fuzzifier_init(basic_fuzzifier):
    assert "Theta" in basic_fuzzifier.variables


def test_term_names():
    var = LinguisticVariable(
        "Angle",
        MembershipFunction.falling(None, -1.0, 0.0),
        MembershipFunction.pyramidal(-1.0, 0.0, 1.0),
        MembershipFunction.rising(0.0, 1.0),
    )
    assert list(var.terms) == ["AngleNegative", "AngleZero", "AnglePositive"]


def test_fuzzify_single_activation(basic_fuzzifier):
    result = basic_fuzzifier.fuzzify("Theta", 0.0)
    assert result == {"ThetaZero": pytest.approx(1.0)}


def test_fuzzify_multiple_activation(basic_fuzzifier):
    result = basic_fuzzifier.fuzzify("Theta", 0.25)
    assert result["ThetaZero"] == pytest.approx(0.5)
    assert result["ThetaPositive"] == pytest.approx(0.5)
    assert "ThetaNegative" not in result


def test_fuzzify_saturated(basic_fuzzifier):
    result = basic_fuzzifier.fuzzify("Theta", -3.0)
    assert result == {"ThetaNegative": pytest.approx(1.0)}


def test_fuzzify_invalid_input_name(basic_fuzzifier):
    with pytest.raises(KeyError):
        basic_fuzzifier.fuzzify("nonexistent_input", 0.0)


def test_from_config_builds_all_terms(crane_config):
    var = LinguisticVariable.from_config("Angle", crane_config["membership_functions"]["Angle"])
    assert var.zero.grade(0.0) == 1.0
    assert var.negative.grade(-1.0) == 1.0
    assert var.positive.grade(1.0) == 1.0


def test_from_config_missing_term():
    params = {
        "SpeedNegative": {"shape": "falling", "edge": -1.0, "end": 0.0},
        "SpeedZero": {"shape": "pyramidal", "start": -1.0, "edge": 0.0, "end": 1.0},
    }
    with pytest.raises(KeyError):
        LinguisticVariable.from_config("Speed", params)


@pytest.mark.parametrize(
    "error, expected",
    [
        (0.0, {"DistanceZero": 1.0}),
        (12.5, {"DistanceNegative": 0.5, "DistanceZero": 0.5}),
        (-12.5, {"DistancePositive": 0.5, "DistanceZero": 0.5}),
        (80.0, {"DistanceNegative": 1.0}),
        (-80.0, {"DistancePositive": 1.0}),
    ],
)
def test_configured_distance_terms(regulator, error, expected):
    # Distance terms name the cart's offset from the destination:
    # a positive error (destination ahead) means the cart is short of it.
    result = regulator.fuzzifier.fuzzify("Distance", error)
    assert result == pytest.approx(expected)
