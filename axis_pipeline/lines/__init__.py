# Line clustering and merging module

from .segment import (
    LineSegment,
    LineCluster,
    MergedSegment,
    normal_form,
    point_distance,
    crosses_theta_seam,
    angle_difference,
    rho_difference,
)

from .clusterer import (
    order_segments,
    is_duplicate_detection,
    cluster_line_segments,
)

from .merger import (
    pool_endpoints,
    select_extremities,
    merge_cluster,
    merge_clusters,
)

__all__ = [
    # Segment
    "LineSegment",
    "LineCluster",
    "MergedSegment",
    "normal_form",
    "point_distance",
    "crosses_theta_seam",
    "angle_difference",
    "rho_difference",
    # Clusterer
    "order_segments",
    "is_duplicate_detection",
    "cluster_line_segments",
    # Merger
    "pool_endpoints",
    "select_extremities",
    "merge_cluster",
    "merge_clusters",
]
