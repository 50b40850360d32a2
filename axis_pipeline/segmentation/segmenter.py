"""
Segmenter Module

Partitions the point cloud along detected axes. Each axis is thickened into
a corridor; points inside the corridor belong to that axis. Axes are
processed in order and a claimed point is never tested again.
"""

import logging
from dataclasses import dataclass, field
from typing import List

import numpy as np
import shapely
from shapely.geometry import LineString, Polygon

from ..constants import CORRIDOR_MARGIN_RATIO, REMAINDER_LABEL
from ..axes.axis import Axis

logger = logging.getLogger(__name__)


@dataclass
class CloudPartition:
    """Result of segmenting a point cloud along axes."""
    clusters: List[np.ndarray]
    remainder: np.ndarray
    labels: np.ndarray
    corridors: List[Polygon] = field(default_factory=list)

    @property
    def cluster_sizes(self) -> List[int]:
        return [len(c) for c in self.clusters]


def corridor_half_width(beam_width: float, margin: float = CORRIDOR_MARGIN_RATIO) -> float:
    """Half-width of the corridor: (beam_width + margin * beam_width) / 2."""
    return (beam_width + margin * beam_width) / 2


def build_corridor(axis: Axis, half_width: float) -> Polygon:
    """
    Buffer an axis centerline into a corridor polygon.

    Args:
        axis: Axis with its two span endpoints
        half_width: Distance from the centerline to the corridor edge

    Returns:
        Corridor polygon (round caps)
    """
    centerline = LineString([axis.start, axis.end])
    corridor = centerline.buffer(half_width)
    shapely.prepare(corridor)
    return corridor


def points_in_corridor(corridor: Polygon, planar_xy: np.ndarray) -> np.ndarray:
    """
    Test which planar points lie in the corridor (boundary counts as inside).

    Returns:
        Boolean mask aligned with planar_xy
    """
    if len(planar_xy) == 0:
        return np.zeros(0, dtype=bool)
    return shapely.intersects_xy(corridor, planar_xy[:, 0], planar_xy[:, 1])


def segment_by_axes(
    points: np.ndarray,
    planar: np.ndarray,
    axes: List[Axis],
    beam_width: float,
    margin: float = CORRIDOR_MARGIN_RATIO
) -> CloudPartition:
    """
    Split a point cloud into one cluster per axis plus a remainder.

    Algorithm:
    1. Start with every point remaining
    2. For each axis in order, build its corridor
    3. Remaining points inside the corridor form the axis cluster
       (rows taken from the original cloud)
    4. Points outside stay remaining for the next axis
    5. Points left after the last axis form the remainder

    Args:
        points: Original (N, k) point cloud
        planar: Planar coordinates (N, 2+) aligned row by row with points
        axes: Axes in pairing order
        beam_width: Approximate width of the structure (> 0)
        margin: Corridor safety margin as a fraction of beam_width

    Returns:
        CloudPartition; labels[i] is the axis index of row i or -1

    Raises:
        ValueError: On a non-positive beam width or misaligned inputs
    """
    if not np.isfinite(beam_width) or beam_width <= 0:
        raise ValueError(f"Beam width must be a positive number: {beam_width}")

    points = np.asarray(points)
    planar_xy = np.asarray(planar)[:, :2]
    if len(points) != len(planar_xy):
        raise ValueError(
            f"Planar cloud has {len(planar_xy)} points, original has {len(points)}"
        )

    half_width = corridor_half_width(beam_width, margin)
    labels = np.full(len(points), REMAINDER_LABEL, dtype=int)
    clusters: List[np.ndarray] = []
    corridors: List[Polygon] = []

    remaining = np.arange(len(points))

    for axis_idx, axis in enumerate(axes):
        corridor = build_corridor(axis, half_width)
        inside = points_in_corridor(corridor, planar_xy[remaining])

        claimed = remaining[inside]
        labels[claimed] = axis_idx
        clusters.append(points[claimed])
        corridors.append(corridor)

        remaining = remaining[~inside]

        logger.debug(
            f"Axis {axis_idx + 1}: {len(claimed)} points claimed, {len(remaining)} remaining"
        )

    remainder = points[remaining]

    logger.info(
        f"Segmentation: {len(points)} points -> {len(clusters)} clusters "
        f"({sum(len(c) for c in clusters)} points), {len(remainder)} remaining"
    )

    return CloudPartition(
        clusters=clusters,
        remainder=remainder,
        labels=labels,
        corridors=corridors,
    )
