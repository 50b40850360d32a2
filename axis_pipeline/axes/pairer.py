"""
Axis Pairer Module

Pairs opposite edges of a linear structure and derives its centerline.
A beam seen from the side shows two parallel edges; the axis is the average
of their line equations.
"""

import logging
from typing import List, Optional, Tuple

from ..constants import PAIR_ANGLE_TOLERANCE_DEG, EDGES_PER_AXIS
from ..lines.segment import MergedSegment, angle_difference
from .axis import Axis, LineEquation, average_equations

logger = logging.getLogger(__name__)

# (min_x, max_x, min_y, max_y) of the planar cloud
Extent = Tuple[float, float, float, float]


def find_longest(worklist: List[MergedSegment]) -> int:
    """Index of the longest segment (earliest on ties)."""
    best = 0
    for i, seg in enumerate(worklist):
        if seg.length > worklist[best].length:
            best = i
    return best


def find_theta_matches(
    worklist: List[MergedSegment],
    ref_theta: float,
    tolerance: float = PAIR_ANGLE_TOLERANCE_DEG
) -> List[int]:
    """
    Indices of segments whose theta lies strictly within ref_theta +/- tolerance.

    The band wraps across the +/-90 degree seam. The reference segment
    itself is included.
    """
    return [
        i for i, seg in enumerate(worklist)
        if angle_difference(seg.theta, ref_theta) < tolerance
    ]


def build_axis(
    edge_a: MergedSegment,
    edge_b: MergedSegment,
    extent: Extent
) -> Tuple[Optional[Axis], Optional[str]]:
    """
    Build the centerline axis of two opposite edges.

    The axis endpoints lie at the cloud's min/max X on the averaged line, or
    at min/max Y for a vertical axis.

    Args:
        edge_a: First edge
        edge_b: Second edge
        extent: (min_x, max_x, min_y, max_y) of the planar cloud

    Returns:
        Tuple of (axis, None) or (None, reason) when no valid axis exists
    """
    min_x, max_x, min_y, max_y = extent
    ids = (edge_a.cluster_id, edge_b.cluster_id)

    try:
        eq_a = LineEquation.from_points(edge_a.point1, edge_a.point2)
        eq_b = LineEquation.from_points(edge_b.point1, edge_b.point2)
    except ValueError as e:
        return None, f"Edges {ids} dropped: {e}"

    equation = average_equations(eq_a, eq_b)
    if equation is None:
        return None, f"Edges {ids} dropped: cannot average a vertical and a horizontal edge"

    if equation.is_vertical:
        start = (equation.vertical_x, min_y)
        end = (equation.vertical_x, max_y)
    else:
        start = (min_x, equation.y_at(min_x))
        end = (max_x, equation.y_at(max_x))

    axis = Axis(
        equation=equation,
        theta=edge_a.theta,
        start=start,
        end=end,
        edge_cluster_ids=ids,
    )

    if not axis.is_finite:
        return None, f"Edges {ids} dropped: axis has non-finite values"

    return axis, None


def pair_axes(
    segments: List[MergedSegment],
    extent: Extent,
    angle_tolerance: float = PAIR_ANGLE_TOLERANCE_DEG
) -> Tuple[List[Axis], List[str]]:
    """
    Pair merged segments into axes by iterative elimination.

    Algorithm:
    1. Take the longest remaining segment as reference
    2. Find the remaining segments within angle_tolerance of its theta
    3. Not exactly two matches: discard the reference only
    4. Exactly two matches: average their equations into an axis and
       remove both
    5. Repeat until no segments remain

    The worklist shrinks by one or two segments per round, so there are at
    most len(segments) rounds and at most len(segments) // 2 axes.

    Args:
        segments: Merged segments (not modified)
        extent: (min_x, max_x, min_y, max_y) of the planar cloud
        angle_tolerance: Theta band for partner edges (degrees)

    Returns:
        Tuple of (axes in emission order, warnings for dropped pairs)
    """
    worklist = list(segments)
    axes: List[Axis] = []
    warnings: List[str] = []

    while worklist:
        ref_idx = find_longest(worklist)
        ref_theta = worklist[ref_idx].theta
        matches = find_theta_matches(worklist, ref_theta, angle_tolerance)

        if len(matches) != EDGES_PER_AXIS:
            logger.debug(
                f"Reference theta={ref_theta:.1f}: {len(matches)} parallel edges, discarded"
            )
            del worklist[ref_idx]
            continue

        edge_a, edge_b = (worklist[i] for i in matches)
        axis, reason = build_axis(edge_a, edge_b, extent)

        consumed = set(matches)
        worklist = [seg for i, seg in enumerate(worklist) if i not in consumed]

        if axis is None:
            warnings.append(reason)
            logger.warning(reason)
            continue

        axes.append(axis)
        logger.debug(
            f"Axis {len(axes)}: theta={axis.theta:.1f}, edges {axis.edge_cluster_ids}"
        )

    logger.info(f"Axis pairing: {len(segments)} segments -> {len(axes)} axes")
    return axes, warnings
