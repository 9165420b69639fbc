"""
Orchestrates the fuzzy regulator of the trolley crane.

This module integrates the Fuzzifier, Rule Engine and Defuzzifier to turn a
crane state and a destination into an acceleration command. It is stateless
across ticks: everything it needs arrives in the CraneState it is handed.
"""

import logging
from typing import Any, Dict

from crane.errors import DegenerateInference
from crane.state import CraneState, TrackConstants
from regulator.defuzzifier import Defuzzifier
from regulator.fuzzifier import Fuzzifier, LinguisticVariable
from regulator.rule_engine import RuleEngine

regulator_log = logging.getLogger("regulator")


class CraneRegulator:
    """
    The fuzzy position and sway regulator.

    Attributes:
        min_accel_time (float): Time allowed to reach the target velocity.
        fuzzifier (Fuzzifier): Fuzzifies the Distance and Angle inputs.
        rule_engine (RuleEngine): The 3x3 min/max rule bank.
        defuzzifier (Defuzzifier): Collapses Velocity terms to a target velocity.
    """

    def __init__(self, config: Dict[str, Any], track: TrackConstants):
        """
        Initializes the regulator from its configuration.

        Args:
            config (Dict[str, Any]): The full configuration dictionary. Uses
                the "membership_functions" table (Distance, Angle and Velocity
                variables) and the optional "rule_base" list.
            track (TrackConstants): Supplies min_accel_time.

        Raises:
            KeyError: If a linguistic variable or term is missing.
            InvalidShape: If a membership function is malformed.
        """
        mf_params = config["membership_functions"]
        rule_base = config.get("rule_base")

        distance = LinguisticVariable.from_config("Distance", mf_params["Distance"])
        angle = LinguisticVariable.from_config("Angle", mf_params["Angle"])
        velocity = LinguisticVariable.from_config("Velocity", mf_params["Velocity"])

        self.min_accel_time = track.min_accel_time
        self.fuzzifier = Fuzzifier([distance, angle])
        self.rule_engine = RuleEngine(rule_base, output_terms=tuple(velocity.terms))
        self.defuzzifier = Defuzzifier(velocity.terms)
        regulator_log.info(
            "Crane regulator initialized (min_accel_time=%.3f s).", self.min_accel_time
        )

    def target_velocity(self, error: float, angle: float) -> float:
        """
        Runs one fuzzy inference pass.

        Args:
            error (float): destination - position, in track units.
            angle (float): Sway angle in radians.

        Returns:
            float: The velocity the cart should be moving at. 0.0 if no rule fired.
        """
        fuzzified_distance = self.fuzzifier.fuzzify("Distance", error)
        fuzzified_angle = self.fuzzifier.fuzzify("Angle", angle)

        activations = self.rule_engine.evaluate(fuzzified_distance, fuzzified_angle)
        try:
            return self.defuzzifier.defuzzify(activations)
        except DegenerateInference:
            regulator_log.warning(
                "No rule fired for error=%.4f, angle=%.4f. Target velocity 0.", error, angle
            )
            return 0.0

    def calculate_acceleration(self, state: CraneState, destination: float) -> float:
        """
        Computes the acceleration command for the next tick.

        Args:
            state (CraneState): Candidate state produced by the integrator.
            destination (float): Current destination in track units.

        Returns:
            float: The commanded acceleration (track units per s^2).
        """
        error = destination - state.position
        target = self.target_velocity(error, state.angle)
        acceleration = (target - state.velocity) / self.min_accel_time

        regulator_log.debug(
            "error= %.4f, angle= %.4f, v= %.4f -> target= %.4f, a= %.4f",
            error,
            state.angle,
            state.velocity,
            target,
            acceleration,
        )
        return acceleration
