"""
Axis Module

Line equations and the Axis data structure.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class LineEquation:
    """
    A planar line: y = a*x + b, or x = vertical_x for vertical lines.

    Vertical lines keep a and b as None instead of carrying infinities.
    """
    a: Optional[float] = None
    b: Optional[float] = None
    vertical_x: Optional[float] = None

    @classmethod
    def from_points(
        cls,
        point1: Tuple[float, float],
        point2: Tuple[float, float]
    ) -> "LineEquation":
        """
        Line through two points.

        Raises:
            ValueError: If the points coincide
        """
        x1, y1 = point1
        x2, y2 = point2

        if x1 == x2:
            if y1 == y2:
                raise ValueError(f"Cannot define a line through one point {point1}")
            return cls(vertical_x=float(x1))

        a = (y1 - y2) / (x1 - x2)
        b = (y2 * x1 - y1 * x2) / (x1 - x2)
        return cls(a=a, b=b)

    @property
    def is_vertical(self) -> bool:
        return self.vertical_x is not None

    @property
    def is_finite(self) -> bool:
        """True when every defined coefficient is finite."""
        if self.is_vertical:
            return math.isfinite(self.vertical_x)
        return (
            self.a is not None and self.b is not None
            and math.isfinite(self.a) and math.isfinite(self.b)
        )

    def y_at(self, x: float) -> float:
        """Evaluate y for a given x (non-vertical lines only)."""
        if self.is_vertical:
            raise ValueError("y is undefined on a vertical line")
        return self.a * x + self.b

    def inverse_form(self) -> Optional[Tuple[float, float]]:
        """
        Coefficients (c, d) of x = c*y + d.

        Returns:
            (c, d), or None for a horizontal line
        """
        if self.is_vertical:
            return 0.0, self.vertical_x
        if self.a == 0:
            return None
        return 1 / self.a, -self.b / self.a


def average_equations(first: LineEquation, second: LineEquation) -> Optional[LineEquation]:
    """
    Average two line equations into their centerline.

    Slopes and intercepts are averaged independently. When either line is
    vertical, or both are steeper than 45 degrees, both are averaged in
    x = c*y + d form instead. Near-vertical edges tilting in opposite
    directions (slopes +500 and -500) then average to a vertical line
    between them instead of a horizontal one.

    Returns:
        The averaged equation, or None when a vertical line meets a
        horizontal one
    """
    steep = first.is_vertical or second.is_vertical or (abs(first.a) > 1 and abs(second.a) > 1)
    if not steep:
        return LineEquation(
            a=(first.a + second.a) / 2,
            b=(first.b + second.b) / 2,
        )

    inverse_first = first.inverse_form()
    inverse_second = second.inverse_form()
    if inverse_first is None or inverse_second is None:
        return None

    c = (inverse_first[0] + inverse_second[0]) / 2
    d = (inverse_first[1] + inverse_second[1]) / 2

    if c == 0:
        return LineEquation(vertical_x=d)
    return LineEquation(a=1 / c, b=-d / c)


@dataclass
class Axis:
    """A detected structural axis in planar coordinates."""
    equation: LineEquation
    theta: float
    start: Tuple[float, float]
    end: Tuple[float, float]
    edge_cluster_ids: Tuple[Optional[int], Optional[int]] = (None, None)

    @property
    def a(self) -> Optional[float]:
        """Slope (None for a vertical axis)."""
        return self.equation.a

    @property
    def b(self) -> Optional[float]:
        """Intercept (None for a vertical axis)."""
        return self.equation.b

    @property
    def is_finite(self) -> bool:
        values = (*self.start, *self.end, self.theta)
        return self.equation.is_finite and all(math.isfinite(v) for v in values)

    def to_dict(self) -> dict:
        """Convert axis to dictionary for serialization."""
        return {
            "a": self.a,
            "b": self.b,
            "vertical_x": self.equation.vertical_x,
            "theta": self.theta,
            "x1": self.start[0],
            "y1": self.start[1],
            "z1": 0.0,
            "x2": self.end[0],
            "y2": self.end[1],
            "z2": 0.0,
        }
