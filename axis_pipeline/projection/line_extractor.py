"""
Line Extractor Module

Default line extractor: Canny edges followed by the probabilistic Hough
transform. Any callable taking the binary raster and returning LineSegments
in pixel coordinates can be used in its place.
"""

import logging
from typing import List, Optional

import cv2
import numpy as np

from ..lines.segment import LineSegment
from ..settings import AxisDetectionParams

logger = logging.getLogger(__name__)


def to_edge_input(raster: np.ndarray) -> np.ndarray:
    """
    Convert a binary raster into an 8-bit 0/255 image.

    Accepts boolean, 0/1 or 0/255 rasters.
    """
    raster = np.asarray(raster)
    if raster.dtype == bool or (raster.size and raster.max() <= 1):
        return (raster > 0).astype(np.uint8) * 255
    return raster.astype(np.uint8)


def detect_edges(raster: np.ndarray, params: Optional[AxisDetectionParams] = None) -> np.ndarray:
    """
    Detect edges in the occupancy image using Canny.

    Args:
        raster: Binary occupancy image
        params: Detection parameters (defaults if None)

    Returns:
        Edge image (0/255)
    """
    params = params or AxisDetectionParams()
    image = to_edge_input(raster)
    return cv2.Canny(image, params.canny_low, params.canny_high, apertureSize=3)


def extract_line_segments(
    raster: np.ndarray,
    params: Optional[AxisDetectionParams] = None
) -> List[LineSegment]:
    """
    Extract candidate line segments from a binary raster.

    Segments shorter than hough_peak_ratio times the longest detection are
    discarded, and at most hough_max_lines of the longest are kept.

    Args:
        raster: Binary occupancy image (row 0 = max Y)
        params: Detection parameters (defaults if None)

    Returns:
        LineSegments in pixel coordinates, longest first
    """
    params = params or AxisDetectionParams()

    edges = detect_edges(raster, params)

    detected = cv2.HoughLinesP(
        edges,
        rho=params.hough_rho_step,
        theta=np.radians(params.hough_theta_step_deg),
        threshold=int(params.hough_min_votes),
        minLineLength=params.hough_min_line_length,
        maxLineGap=params.hough_max_line_gap,
    )

    if detected is None or len(detected) == 0:
        logger.debug("Hough transform found no lines")
        return []

    segments = []
    for x1, y1, x2, y2 in detected.reshape(-1, 4):
        segments.append(LineSegment.from_endpoints(
            (float(x1), float(y1)),
            (float(x2), float(y2)),
        ))

    segments.sort(key=lambda s: s.length, reverse=True)
    min_length = params.hough_peak_ratio * segments[0].length
    kept = [s for s in segments if s.length >= min_length][:params.hough_max_lines]

    logger.info(f"Line extraction: {len(segments)} Hough segments -> {len(kept)} kept")
    return kept
