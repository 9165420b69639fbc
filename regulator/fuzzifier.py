"""
Fuzzifies crisp input values into degrees of membership of linguistic terms.

Every input of the crane regulator (the distance error and the sway angle)
is described by a LinguisticVariable: a named triple of membership functions
tagged Negative, Zero and Positive. The Fuzzifier maps a crisp value of such
an input to a {term_name: degree} dictionary.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable

from regulator.membership import MembershipFunction

fuzzifier_log = logging.getLogger("fuzzifier")

TAGS = ("Negative", "Zero", "Positive")


@dataclass(frozen=True)
class LinguisticVariable:
    """
    A named triple of fuzzy sets over one measured or output quantity.

    Attributes:
        name (str): Prefix of the term names, e.g. "Distance".
        negative (MembershipFunction): The <name>Negative term.
        zero (MembershipFunction): The <name>Zero term.
        positive (MembershipFunction): The <name>Positive term.
    """

    name: str
    negative: MembershipFunction
    zero: MembershipFunction
    positive: MembershipFunction

    @property
    def terms(self) -> Dict[str, MembershipFunction]:
        return {
            f"{self.name}Negative": self.negative,
            f"{self.name}Zero": self.zero,
            f"{self.name}Positive": self.positive,
        }

    @classmethod
    def from_config(cls, name: str, params: Dict[str, Dict[str, Any]]) -> "LinguisticVariable":
        """
        Builds a variable from a config table keyed by full term names.

        Args:
            name (str): Variable name, e.g. "Angle".
            params (Dict[str, Dict[str, Any]]): {"AngleNegative": {...}, ...}

        Raises:
            KeyError: If one of the three terms is missing.
        """
        functions = []
        for tag in TAGS:
            term = f"{name}{tag}"
            if term not in params:
                raise KeyError(f"Linguistic variable '{name}' has no '{term}' term")
            functions.append(MembershipFunction.from_config(params[term]))
        return cls(name, *functions)


class Fuzzifier:
    """
    Calculates membership degrees for crisp inputs.

    Attributes:
        variables (Dict[str, LinguisticVariable]): Input variables by name.
    """

    def __init__(self, variables: Iterable[LinguisticVariable]) -> None:
        self.variables = {v.name: v for v in variables}
        fuzzifier_log.info(
            "Fuzzifier initialized with variables: %s", ", ".join(self.variables)
        )

    def fuzzify(self, input_name: str, crisp_value: float) -> Dict[str, float]:
        """
        Fuzzifies a single crisp input value.

        Args:
            input_name (str): The name of the input variable ('Distance' or 'Angle').
            crisp_value (float): The crisp value to fuzzify.

        Returns:
            Dict[str, float]: Term name to membership degree. Only terms with
                a degree > 0 are included.
        """
        if input_name not in self.variables:
            raise KeyError(f"No linguistic variable defined for input '{input_name}'")

        fuzzified_output = {}
        for term_name, mf in self.variables[input_name].terms.items():
            degree = mf.grade(crisp_value)
            if degree > 0:
                fuzzified_output[term_name] = degree

        if fuzzifier_log.isEnabledFor(logging.DEBUG):
            formatted_output = {k: f"{v:.3f}" for k, v in fuzzified_output.items()}
            fuzzifier_log.debug(
                "Fuzzified %s= %.4f -> %s", input_name, crisp_value, formatted_output
            )
        return fuzzified_output
