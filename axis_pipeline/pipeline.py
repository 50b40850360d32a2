"""
Pipeline Orchestration Module

Coordinates axis detection and segmentation from a point cloud:
projection -> raster -> line extraction -> clustering -> merging ->
pairing -> segmentation.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import numpy as np

from .constants import (
    Confidence,
    INSUFFICIENT_DATA_MESSAGE,
    SINGLE_AXIS_MESSAGE,
    MIN_AXES_FOR_SEGMENTATION,
)
from .settings import AxisDetectionParams
from .projection.plane import validate_point_cloud, project_to_plane
from .projection.rasterizer import RasterGrid, build_raster_grid, rasterize
from .projection.line_extractor import extract_line_segments
from .lines.segment import LineSegment, MergedSegment
from .lines.clusterer import cluster_line_segments
from .lines.merger import merge_clusters
from .axes.axis import Axis
from .axes.pairer import pair_axes
from .segmentation.segmenter import segment_by_axes


logger = logging.getLogger(__name__)

LineExtractor = Callable[[np.ndarray], List[LineSegment]]


@dataclass
class SegmentationResult:
    """
    Result of axis detection and segmentation.

    Iterating yields (clusters, axes, remainder). When no more than one axis
    could be resolved, clusters holds the whole input cloud, axes is empty,
    the remainder is empty and confidence is LOW.
    """
    clusters: List[np.ndarray]
    axes: List[Axis]
    remainder: np.ndarray
    labels: np.ndarray
    confidence: str
    warnings: List[str] = field(default_factory=list)
    line_segments: List[LineSegment] = field(default_factory=list)
    merged_segments: List[MergedSegment] = field(default_factory=list)
    processing_time: float = 0.0

    def __iter__(self):
        return iter((self.clusters, self.axes, self.remainder))

    @property
    def is_segmented(self) -> bool:
        """True when the cloud was split along detected axes."""
        return len(self.axes) > 0


def validate_beam_width(beam_width: float) -> float:
    """
    Check that the beam width is a positive finite number.

    Raises:
        ValueError: If it is not
    """
    try:
        value = float(beam_width)
    except (TypeError, ValueError):
        raise ValueError(f"Beam width must be a number: {beam_width!r}")

    if not np.isfinite(value) or value <= 0:
        raise ValueError(f"Beam width must be positive: {beam_width}")
    return value


def unsegmented_result(
    points: np.ndarray,
    reason: str,
    warnings: List[str],
    line_segments: Optional[List[LineSegment]] = None,
    merged_segments: Optional[List[MergedSegment]] = None,
) -> SegmentationResult:
    """
    Fallback result: the whole cloud as one cluster, no axes, no remainder.
    """
    logger.warning(reason)

    return SegmentationResult(
        clusters=[points],
        axes=[],
        remainder=points[:0],
        labels=np.zeros(len(points), dtype=int),
        confidence=Confidence.LOW,
        warnings=warnings + [reason],
        line_segments=line_segments or [],
        merged_segments=merged_segments or [],
    )


def segment_from_lines(
    points: np.ndarray,
    planar: np.ndarray,
    line_segments: List[LineSegment],
    beam_width: float,
    grid: Optional[RasterGrid] = None,
    params: Optional[AxisDetectionParams] = None,
) -> SegmentationResult:
    """
    Derive axes from line detections and segment the cloud along them.

    Args:
        points: Original (N, k) point cloud
        planar: Planar coordinates aligned row by row with points
        line_segments: Line detections (pixel coordinates if grid is given,
                       otherwise planar coordinates)
        beam_width: Approximate width of the structure
        grid: Raster grid the detections were made on
        params: Detection parameters (defaults if None)

    Returns:
        SegmentationResult
    """
    params = params or AxisDetectionParams()
    beam_width = validate_beam_width(beam_width)
    points = np.asarray(points)
    planar = np.asarray(planar)
    warnings: List[str] = []

    if not line_segments:
        return unsegmented_result(points, INSUFFICIENT_DATA_MESSAGE, warnings)

    clusters = cluster_line_segments(
        line_segments,
        angle_tolerance=params.cluster_angle_tolerance,
        rho_tolerance=params.cluster_rho_tolerance,
        sort_segments=params.sort_segments,
    )

    merged, merge_warnings = merge_clusters(clusters, grid)
    warnings.extend(merge_warnings)

    if not merged:
        return unsegmented_result(points, INSUFFICIENT_DATA_MESSAGE, warnings, line_segments)

    xy = planar[:, :2]
    extent = (
        float(xy[:, 0].min()),
        float(xy[:, 0].max()),
        float(xy[:, 1].min()),
        float(xy[:, 1].max()),
    )
    axes, pair_warnings = pair_axes(merged, extent, angle_tolerance=params.pair_angle_tolerance)
    warnings.extend(pair_warnings)

    if len(axes) < MIN_AXES_FOR_SEGMENTATION:
        reason = SINGLE_AXIS_MESSAGE if axes else INSUFFICIENT_DATA_MESSAGE
        return unsegmented_result(points, reason, warnings, line_segments, merged)

    logger.info(f"{len(axes)} axes were found!")

    partition = segment_by_axes(
        points, planar, axes, beam_width, margin=params.corridor_margin
    )

    return SegmentationResult(
        clusters=partition.clusters,
        axes=axes,
        remainder=partition.remainder,
        labels=partition.labels,
        confidence=Confidence.MEDIUM if warnings else Confidence.HIGH,
        warnings=warnings,
        line_segments=list(line_segments),
        merged_segments=merged,
    )


def segment(
    points: np.ndarray,
    beam_width: float,
    params: Optional[AxisDetectionParams] = None,
    line_extractor: Optional[LineExtractor] = None,
) -> SegmentationResult:
    """
    Detect the main axes of a planar point cloud and segment it along them.

    Args:
        points: (N, 3+) point cloud; extra columns travel with their points
        beam_width: Approximate width of the structure in project units
        params: Detection parameters (defaults if None)
        line_extractor: Callable mapping the binary raster to LineSegments
                        in pixel coordinates (Canny + Hough if None)

    Returns:
        SegmentationResult, which unpacks to (clusters, axes, remainder)

    Raises:
        ValueError: On an invalid point cloud or beam width
    """
    start_time = time.time()
    params = params or AxisDetectionParams()

    beam_width = validate_beam_width(beam_width)
    points = validate_point_cloud(points)

    logger.info(f"Detecting axes in {len(points)} points (beam width {beam_width})")

    projection = project_to_plane(points)
    grid = build_raster_grid(projection.planar, params.raster_resolution, params.raster_padding)
    raster = rasterize(projection.planar, grid)

    if line_extractor is None:
        line_segments = extract_line_segments(raster, params)
    else:
        line_segments = list(line_extractor(raster))

    result = segment_from_lines(
        points,
        projection.planar,
        line_segments,
        beam_width,
        grid=grid,
        params=params,
    )
    result.processing_time = time.time() - start_time

    logger.info(
        f"Axis detection finished: {len(result.axes)} axes, "
        f"{len(result.clusters)} clusters, {len(result.remainder)} remaining points "
        f"({result.processing_time:.1f}s)"
    )
    return result
