"""
Line Merger Module

Reduces each cluster of duplicate detections to one representative segment.
The extremities are the two pooled endpoints farthest from the pool's
centroid, so noisy detections along an edge extend rather than average it.
"""

import logging
from typing import List, Optional, Tuple

import numpy as np

from ..projection.rasterizer import RasterGrid
from .segment import LineCluster, MergedSegment

logger = logging.getLogger(__name__)


def pool_endpoints(cluster: LineCluster) -> np.ndarray:
    """
    Collect the endpoints of every member into one array.

    Order: all point1 values in member order, then all point2 values.

    Returns:
        (2 * len(cluster), 2) array
    """
    first = [seg.point1 for seg in cluster.segments]
    second = [seg.point2 for seg in cluster.segments]
    return np.array(first + second, dtype=np.float64)


def select_extremities(points: np.ndarray) -> Tuple[int, int]:
    """
    Pick the two points farthest from the centroid.

    Selects the maximum distance, excludes it, then selects the maximum
    again. The first pick goes to the earliest point on ties. Among points
    tied for the second pick, the one farthest from the first pick wins, so
    duplicate detections of an edge do not collapse onto one of its ends.

    Args:
        points: (N, 2) array with N >= 2

    Returns:
        Indices of the two chosen points
    """
    centroid = points.mean(axis=0)
    distances = np.sqrt(((points - centroid) ** 2).sum(axis=1))

    first = int(np.argmax(distances))
    distances[first] = -np.inf

    tied = np.flatnonzero(np.isclose(distances, distances.max()))
    spread = np.sqrt(((points[tied] - points[first]) ** 2).sum(axis=1))
    second = int(tied[np.argmax(spread)])
    return first, second


def merge_cluster(cluster: LineCluster, grid: Optional[RasterGrid] = None) -> MergedSegment:
    """
    Merge a cluster into one segment.

    Args:
        cluster: Non-empty cluster of detections
        grid: Raster grid used to convert pixels to planar units
              (if None the endpoints stay in raster units)

    Returns:
        MergedSegment carrying the first member's theta and rho

    Raises:
        ValueError: If the cluster is empty
    """
    if len(cluster) == 0:
        raise ValueError(f"Cannot merge empty cluster {cluster.cluster_id}")

    points = pool_endpoints(cluster)
    first, second = select_extremities(points)
    extremities = points[[first, second]]

    if grid is not None:
        extremities = grid.to_planar(extremities)

    seed = cluster.seed
    return MergedSegment(
        point1=(float(extremities[0, 0]), float(extremities[0, 1])),
        point2=(float(extremities[1, 0]), float(extremities[1, 1])),
        theta=seed.theta,
        rho=seed.rho,
        cluster_id=cluster.cluster_id,
    )


def merge_clusters(
    clusters: List[LineCluster],
    grid: Optional[RasterGrid] = None
) -> Tuple[List[MergedSegment], List[str]]:
    """
    Merge every cluster, dropping degenerate results.

    A cluster is dropped when it is empty, when its merged segment has zero
    length, or when any merged value is not finite.

    Args:
        clusters: Clusters from cluster_line_segments()
        grid: Raster grid for pixel-to-planar conversion

    Returns:
        Tuple of (merged segments in cluster order, warnings for dropped clusters)
    """
    merged: List[MergedSegment] = []
    warnings: List[str] = []

    for cluster in clusters:
        if len(cluster) == 0:
            warnings.append(f"Cluster {cluster.cluster_id} dropped: no segments")
            continue

        segment = merge_cluster(cluster, grid)

        if not segment.is_finite:
            warnings.append(f"Cluster {cluster.cluster_id} dropped: merged segment is not finite")
            continue

        if segment.length == 0:
            warnings.append(f"Cluster {cluster.cluster_id} dropped: merged segment has zero length")
            continue

        merged.append(segment)

    for warning in warnings:
        logger.warning(warning)

    logger.info(f"Line merging: {len(clusters)} clusters -> {len(merged)} segments")
    return merged, warnings
