# Point cloud segmentation module

from .segmenter import (
    CloudPartition,
    corridor_half_width,
    build_corridor,
    points_in_corridor,
    segment_by_axes,
)

__all__ = [
    "CloudPartition",
    "corridor_half_width",
    "build_corridor",
    "points_in_corridor",
    "segment_by_axes",
]
