# tests/test_rule_engine.py
import itertools

import pytest

from regulator.rule_engine import CRANE_RULE_BASE, OUTPUT_TERMS, RuleEngine


@pytest.fixture
def engine():
    return RuleEngine()


def _bank(dn, dz, dp, an, az, ap):
    """The crane rule bank written out term by term."""
    return {
        "VelocityNegative": max(min(dn, an), min(dz, an), min(dp, an), min(dp, az)),
        "VelocityZero": min(dz, az),
        "VelocityPositive": max(min(dn, az), min(dn, ap), min(dz, ap), min(dp, ap)),
    }


def test_default_rule_base(engine):
    assert len(engine.rules) == 9
    assert engine.rules == CRANE_RULE_BASE
    assert engine.output_terms == OUTPUT_TERMS

    # Every (distance, angle) pair appears exactly once.
    pairs = {tuple(r["rule"]) for r in engine.rules}
    assert len(pairs) == 9


def test_no_memberships_fire_nothing(engine):
    outputs = engine.evaluate({}, {})
    assert outputs == {term: 0.0 for term in OUTPUT_TERMS}


def test_centered_input_fires_only_velocity_zero(engine):
    outputs = engine.evaluate({"DistanceZero": 1.0}, {"AngleZero": 1.0})
    assert outputs == {"VelocityNegative": 0.0, "VelocityZero": 1.0, "VelocityPositive": 0.0}


def test_min_for_and_max_for_aggregation(engine):
    # DP & AZ -> VN at min(0.7, 0.4); DP & AN -> VN at min(0.7, 0.6). max wins.
    outputs = engine.evaluate(
        {"DistancePositive": 0.7},
        {"AngleZero": 0.4, "AngleNegative": 0.6},
    )
    assert outputs["VelocityNegative"] == pytest.approx(0.6)
    assert outputs["VelocityZero"] == 0.0
    assert outputs["VelocityPositive"] == 0.0


GRID = [0.0, 0.3, 1.0]


@pytest.mark.parametrize(
    "dn, dz, dp, an, az, ap",
    [
        (0.0, 0.5, 0.5, 0.2, 0.8, 0.0),
        (0.6, 0.4, 0.0, 0.0, 0.9, 0.1),
        (0.1, 0.9, 0.0, 0.3, 0.7, 0.0),
        (0.0, 0.2, 0.8, 0.0, 0.25, 0.75),
        (1.0, 0.0, 0.0, 0.0, 0.0, 1.0),
        (0.3, 0.3, 0.3, 0.3, 0.3, 0.3),
    ]
    + [(a, b, c, 1.0 - a, a, c) for a, b, c in itertools.product(GRID, GRID, GRID)],
)
def test_bank_matches_table(engine, dn, dz, dp, an, az, ap):
    distance = {"DistanceNegative": dn, "DistanceZero": dz, "DistancePositive": dp}
    angle = {"AngleNegative": an, "AngleZero": az, "AnglePositive": ap}

    outputs = engine.evaluate(distance, angle)
    expected = _bank(dn, dz, dp, an, az, ap)
    for term in OUTPUT_TERMS:
        assert outputs[term] == pytest.approx(expected[term], abs=1e-12)


def test_custom_rule_base():
    rules = [{"rule": ["DistanceZero", "AngleZero"], "output": "VelocityPositive"}]
    engine = RuleEngine(rules)
    outputs = engine.evaluate({"DistanceZero": 0.5}, {"AngleZero": 0.8})
    assert outputs["VelocityPositive"] == pytest.approx(0.5)
    assert outputs["VelocityZero"] == 0.0


def test_unknown_consequent_rejected():
    with pytest.raises(ValueError):
        RuleEngine([{"rule": ["DistanceZero", "AngleZero"], "output": "VelocityHuge"}])


def test_wrong_antecedent_count_rejected():
    with pytest.raises(ValueError):
        RuleEngine([{"rule": ["DistanceZero"], "output": "VelocityZero"}])


def test_none_rule_base_uses_crane_rules():
    engine = RuleEngine(None)
    assert engine.rules == CRANE_RULE_BASE
