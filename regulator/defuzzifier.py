"""
Computes the crisp output from the aggregated fuzzy rule outputs.

Each output term is collapsed to its representative singleton (its peak
value) and the terms are averaged, weighted by their aggregated membership:

    target = Σ(peak_i * m_i) / Σ(m_i)
"""

import logging
from typing import Dict

from crane.errors import DegenerateInference
from regulator.membership import MembershipFunction

defuzzifier_log = logging.getLogger("defuzzifier")


class Defuzzifier:
    """
    Performs singleton weighted-average defuzzification.

    Attributes:
        output_terms (Dict[str, MembershipFunction]): Output fuzzy sets by name.
        peaks (Dict[str, float]): Their precomputed peak values.
    """

    def __init__(self, output_terms: Dict[str, MembershipFunction]):
        self.output_terms = dict(output_terms)
        self.peaks = {name: mf.peak_value() for name, mf in self.output_terms.items()}
        defuzzifier_log.info(
            "Defuzzifier initialized with peaks: %s",
            {k: round(v, 4) for k, v in self.peaks.items()},
        )

    def defuzzify(self, activations: Dict[str, float]) -> float:
        """
        Calculates the final crisp output value.

        Args:
            activations (Dict[str, float]): Aggregated degree per output term.

        Returns:
            float: The crisp output.

        Raises:
            DegenerateInference: If the total membership is zero (no rule fired).
        """
        numerator = 0.0
        denominator = 0.0

        for term, degree in activations.items():
            if degree <= 0:
                continue
            numerator += self.peaks[term] * degree
            denominator += degree

        if denominator == 0:
            raise DegenerateInference("no rule fired, total output membership is zero")

        final_output = numerator / denominator
        defuzzifier_log.debug(
            "Defuzzified output: %.4f (total membership %.3f)", final_output, denominator
        )
        return final_output
