"""
Evaluates the fuzzy rule bank of the crane regulator.

This is a Mamdani-style bank: each rule ANDs one Distance term with one
Angle term using `min`, and rules that share a consequent are aggregated
with `max`. The result is one membership degree per Velocity term.
"""

import logging
from typing import Dict, List, Optional, Sequence

rule_engine_log = logging.getLogger("rule_engine")

OUTPUT_TERMS = ("VelocityNegative", "VelocityZero", "VelocityPositive")

# (distance term, angle term) -> velocity term.
# Brake when the payload leans toward overshoot, coast at the target with no
# sway, drive toward the target when the payload leans away from it.
CRANE_RULE_BASE: List[Dict] = [
    {"rule": ["DistanceNegative", "AngleNegative"], "output": "VelocityNegative"},
    {"rule": ["DistanceZero", "AngleNegative"], "output": "VelocityNegative"},
    {"rule": ["DistancePositive", "AngleNegative"], "output": "VelocityNegative"},
    {"rule": ["DistancePositive", "AngleZero"], "output": "VelocityNegative"},
    {"rule": ["DistanceZero", "AngleZero"], "output": "VelocityZero"},
    {"rule": ["DistanceNegative", "AngleZero"], "output": "VelocityPositive"},
    {"rule": ["DistanceNegative", "AnglePositive"], "output": "VelocityPositive"},
    {"rule": ["DistanceZero", "AnglePositive"], "output": "VelocityPositive"},
    {"rule": ["DistancePositive", "AnglePositive"], "output": "VelocityPositive"},
]


class RuleEngine:
    """
    Evaluates a min/max fuzzy rule bank.

    Attributes:
        rules (List[Dict]): Rule definitions. Each rule has a "rule" pair
            [distance_term, angle_term] and an "output" velocity term.
        output_terms (Sequence[str]): Every consequent the bank may produce.
    """

    def __init__(self, rule_base: Optional[List[Dict]] = None, output_terms: Sequence[str] = OUTPUT_TERMS):
        self.rules = list(rule_base) if rule_base else list(CRANE_RULE_BASE)
        self.output_terms = tuple(output_terms)

        for i, rule in enumerate(self.rules):
            if len(rule["rule"]) != 2:
                raise ValueError(f"Rule# {i} must have exactly two antecedents: {rule}")
            if rule["output"] not in self.output_terms:
                raise ValueError(f"Rule# {i} has unknown consequent '{rule['output']}'")

        rule_engine_log.info("Rule Engine initialized with %d rules.", len(self.rules))

    def evaluate(
        self,
        fuzzified_distance: Dict[str, float],
        fuzzified_angle: Dict[str, float],
    ) -> Dict[str, float]:
        """
        Evaluates all rules in the rule base.

        Args:
            fuzzified_distance (Dict[str, float]): Membership degrees for distance.
            fuzzified_angle (Dict[str, float]): Membership degrees for angle.

        Returns:
            Dict[str, float]: Aggregated degree for every output term (0.0 for
                terms no rule fired).
        """
        activations = {term: 0.0 for term in self.output_terms}

        for i, rule in enumerate(self.rules):
            distance_set, angle_set = rule["rule"]

            degree_distance = fuzzified_distance.get(distance_set, 0.0)
            degree_angle = fuzzified_angle.get(angle_set, 0.0)

            # Fuzzy AND.
            firing_strength = min(degree_distance, degree_angle)

            consequent = rule["output"]
            # Fuzzy OR across rules sharing a consequent.
            activations[consequent] = max(activations[consequent], firing_strength)

            if firing_strength > 0:
                rule_engine_log.debug(
                    "Rule# %d (%s, %s) -> %s W=%.3f",
                    i,
                    distance_set,
                    angle_set,
                    consequent,
                    firing_strength,
                )

        return activations
