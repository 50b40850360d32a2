"""
Planar Axis Pipeline: axis detection and segmentation of planar point clouds.
"""

from .settings import AxisDetectionParams, load_params
from .pipeline import SegmentationResult, segment, segment_from_lines

__version__ = "1.0.0"

__all__ = [
    "AxisDetectionParams",
    "load_params",
    "SegmentationResult",
    "segment",
    "segment_from_lines",
]
