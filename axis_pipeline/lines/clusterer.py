"""
Line Clusterer Module

Groups duplicate line detections that describe the same physical edge.
The Hough transform typically reports several nearly identical segments
along each edge of a beam; they are grouped here before merging.
"""

import logging
from typing import List

from ..constants import CLUSTER_ANGLE_TOLERANCE_DEG, CLUSTER_RHO_TOLERANCE
from .segment import LineSegment, LineCluster, angle_difference, rho_difference

logger = logging.getLogger(__name__)


def order_segments(segments: List[LineSegment]) -> List[LineSegment]:
    """
    Order segments by theta, then rho.

    The sort is stable, so segments with equal (theta, rho) keep their
    detection order.
    """
    return sorted(segments, key=lambda s: (s.theta, s.rho))


def is_duplicate_detection(
    seed: LineSegment,
    candidate: LineSegment,
    angle_tolerance: float = CLUSTER_ANGLE_TOLERANCE_DEG,
    rho_tolerance: float = CLUSTER_RHO_TOLERANCE
) -> bool:
    """
    Check whether a candidate lies close enough to a seed to join its cluster.

    Near the +/-90 degree seam the candidate is compared in its equivalent
    (theta + 180, -rho) form.

    Args:
        seed: Segment the cluster was started from
        candidate: Segment under test
        angle_tolerance: Max theta difference (degrees, exclusive)
        rho_tolerance: Max rho difference (raster units, exclusive)

    Returns:
        True if both differences are below their tolerances
    """
    return (
        angle_difference(seed.theta, candidate.theta) < angle_tolerance
        and rho_difference(seed.theta, seed.rho, candidate.theta, candidate.rho) < rho_tolerance
    )


def cluster_line_segments(
    segments: List[LineSegment],
    angle_tolerance: float = CLUSTER_ANGLE_TOLERANCE_DEG,
    rho_tolerance: float = CLUSTER_RHO_TOLERANCE,
    sort_segments: bool = True
) -> List[LineCluster]:
    """
    Partition segments into clusters of duplicate detections.

    Algorithm:
    1. Optionally order segments by (theta, rho) so the result does not
       depend on detection order
    2. Take the first unclustered segment as seed
    3. Add every other unclustered segment that is a duplicate of the seed
    4. Repeat until every segment belongs to a cluster

    Only the seed is compared against candidates. A segment close to a
    member but not to the seed stays for a later cluster.

    Theta differences wrap at +/-90 degrees: a near-horizontal edge may be
    reported at 89.5 or at -89.5, and those are 1 degree apart. Across the
    wrap, rho is compared with its sign flipped.

    Args:
        segments: Raw line detections
        angle_tolerance: Max theta difference to the seed (degrees)
        rho_tolerance: Max rho difference to the seed (raster units)
        sort_segments: Order by (theta, rho) before clustering

    Returns:
        Clusters in emission order, ids starting at 1. Empty if no segments.
    """
    if not segments:
        logger.warning("Line clustering: no segments to cluster")
        return []

    ordered = order_segments(segments) if sort_segments else list(segments)
    unclustered = list(range(len(ordered)))
    clusters: List[LineCluster] = []

    while unclustered:
        seed_idx = unclustered[0]
        seed = ordered[seed_idx]
        members = [seed_idx]

        for idx in unclustered[1:]:
            if is_duplicate_detection(seed, ordered[idx], angle_tolerance, rho_tolerance):
                members.append(idx)

        claimed = set(members)
        unclustered = [idx for idx in unclustered if idx not in claimed]

        cluster = LineCluster(
            cluster_id=len(clusters) + 1,
            segments=[ordered[idx] for idx in members],
        )
        clusters.append(cluster)

        logger.debug(
            f"Cluster {cluster.cluster_id}: seed theta={seed.theta:.1f} "
            f"rho={seed.rho:.1f}, {len(cluster)} segments"
        )

    logger.info(f"Line clustering: {len(segments)} segments -> {len(clusters)} clusters")
    return clusters
