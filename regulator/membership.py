r"""
Piecewise-linear membership functions with a single edge.

Three shapes are supported:

    RISING          FALLING         PYRAMIDAL
    1 |     /---    1 |---\         1 |    /\
      |    /          |    \          |   /  \
    0 +---/------   0 +-----\----   0 +--/----\--
         s  e              e  n          s  e  n

Each function is described by up to three breakpoints: `start`, `edge` and
`end`. The grade is exactly 1.0 at `edge`.
"""

import enum
from dataclasses import dataclass
from typing import Any, Dict, Optional

from crane.errors import InvalidShape


class Shape(enum.Enum):
    RISING = "rising"
    FALLING = "falling"
    PYRAMIDAL = "pyramidal"


@dataclass(frozen=True)
class MembershipFunction:
    """
    A fuzzy set given by a piecewise-linear membership function.

    Attributes:
        shape (Shape): Which side(s) of the edge slope.
        start (Optional[float]): Foot of the rising slope, None if open.
        edge (float): The point of full membership.
        end (Optional[float]): Foot of the falling slope, None if open.

    Raises:
        InvalidShape: If `edge` is missing, both feet are missing, a pyramid
            lacks a foot, or the breakpoints are not ordered.
    """

    shape: Shape
    start: Optional[float]
    edge: Optional[float]
    end: Optional[float] = None

    def __post_init__(self):
        if not isinstance(self.shape, Shape):
            try:
                object.__setattr__(self, "shape", Shape(str(self.shape).lower()))
            except ValueError:
                raise InvalidShape(f"Unknown membership function shape {self.shape!r}") from None

        if self.edge is None or (self.start is None and self.end is None):
            raise InvalidShape(
                "'edge' and at least one of 'start' and 'end' must be specified "
                f"(got start={self.start}, edge={self.edge}, end={self.end})"
            )
        if self.shape is Shape.PYRAMIDAL and (self.start is None or self.end is None):
            raise InvalidShape(f"Pyramidal function needs both feet, got {self!r}")
        if self.start is not None and self.start > self.edge:
            raise InvalidShape(f"start {self.start} lies after edge {self.edge}")
        if self.end is not None and self.end < self.edge:
            raise InvalidShape(f"end {self.end} lies before edge {self.edge}")

    # ------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------
    @classmethod
    def rising(cls, start: Optional[float], edge: float, end: Optional[float] = None):
        return cls(Shape.RISING, start, edge, end)

    @classmethod
    def falling(cls, start: Optional[float], edge: float, end: Optional[float] = None):
        return cls(Shape.FALLING, start, edge, end)

    @classmethod
    def pyramidal(cls, start: float, edge: float, end: float):
        return cls(Shape.PYRAMIDAL, start, edge, end)

    @classmethod
    def from_config(cls, params: Dict[str, Any]) -> "MembershipFunction":
        """
        Builds a function from a config table such as
        {shape = "rising", start = 0.0, edge = 25.0}.
        """
        if "shape" not in params:
            raise InvalidShape(f"Membership function table has no 'shape': {params}")

        def _opt(key):
            value = params.get(key)
            return None if value is None else float(value)

        return cls(params["shape"], _opt("start"), _opt("edge"), _opt("end"))

    # ------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------
    def grade(self, x: float) -> float:
        """
        Calculates the degree of membership of `x`.

        Args:
            x (float): The crisp value.

        Returns:
            float: The degree of membership, from 0.0 to 1.0.
        """
        if x == self.edge:
            return 1.0

        if x < self.edge:
            # Flat top on the left of a falling slope.
            if self.shape is Shape.FALLING or self.start is None:
                return 1.0
            if x <= self.start:
                return 0.0
            return (x - self.start) / (self.edge - self.start)

        # Flat top on the right of a rising slope.
        if self.shape is Shape.RISING or self.end is None:
            return 1.0
        if x >= self.end:
            return 0.0
        return (self.end - x) / (self.end - self.edge)

    def peak_value(self) -> float:
        """Returns the representative crisp value used for defuzzification."""
        if self.shape is Shape.FALLING and self.start is not None:
            return (self.start + self.edge) / 2.0
        if self.shape is Shape.RISING and self.end is not None:
            return (self.edge + self.end) / 2.0
        return self.edge
