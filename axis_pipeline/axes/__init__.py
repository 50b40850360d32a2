# Axis derivation module

from .axis import (
    LineEquation,
    Axis,
    average_equations,
)

from .pairer import (
    find_longest,
    find_theta_matches,
    build_axis,
    pair_axes,
)

__all__ = [
    # Axis
    "LineEquation",
    "Axis",
    "average_equations",
    # Pairer
    "find_longest",
    "find_theta_matches",
    "build_axis",
    "pair_axes",
]
