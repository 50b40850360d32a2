"""
Settings Module

Overridable parameters for axis detection. Defaults come from constants.py;
a YAML file may override any subset of them.
"""

import logging
from dataclasses import dataclass, fields, asdict, replace
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .constants import (
    DEFAULT_RASTER_RESOLUTION,
    RASTER_PADDING_PIX,
    CANNY_THRESHOLD_LOW,
    CANNY_THRESHOLD_HIGH,
    HOUGH_RHO_STEP,
    HOUGH_THETA_STEP_DEG,
    HOUGH_PEAK_THRESHOLD_RATIO,
    HOUGH_MIN_VOTES,
    HOUGH_MAX_LINES,
    HOUGH_MIN_LINE_LENGTH,
    HOUGH_MAX_LINE_GAP,
    CLUSTER_ANGLE_TOLERANCE_DEG,
    CLUSTER_RHO_TOLERANCE,
    PAIR_ANGLE_TOLERANCE_DEG,
    CORRIDOR_MARGIN_RATIO,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AxisDetectionParams:
    """Parameters for the axis detection pipeline."""
    # Raster
    raster_resolution: float = DEFAULT_RASTER_RESOLUTION
    raster_padding: int = RASTER_PADDING_PIX
    # Line extraction
    canny_low: float = CANNY_THRESHOLD_LOW
    canny_high: float = CANNY_THRESHOLD_HIGH
    hough_rho_step: float = HOUGH_RHO_STEP
    hough_theta_step_deg: float = HOUGH_THETA_STEP_DEG
    hough_peak_ratio: float = HOUGH_PEAK_THRESHOLD_RATIO
    hough_min_votes: int = HOUGH_MIN_VOTES
    hough_max_lines: int = HOUGH_MAX_LINES
    hough_min_line_length: float = HOUGH_MIN_LINE_LENGTH
    hough_max_line_gap: float = HOUGH_MAX_LINE_GAP
    # Clustering
    cluster_angle_tolerance: float = CLUSTER_ANGLE_TOLERANCE_DEG
    cluster_rho_tolerance: float = CLUSTER_RHO_TOLERANCE
    sort_segments: bool = True
    # Pairing
    pair_angle_tolerance: float = PAIR_ANGLE_TOLERANCE_DEG
    # Segmentation
    corridor_margin: float = CORRIDOR_MARGIN_RATIO

    def to_dict(self) -> Dict[str, Any]:
        """Convert parameters to a plain dictionary."""
        return asdict(self)


def params_from_dict(values: Dict[str, Any], base: AxisDetectionParams = None) -> AxisDetectionParams:
    """
    Build parameters from a dictionary of overrides.

    Args:
        values: Mapping of parameter name to value
        base: Parameters to start from (defaults if None)

    Returns:
        New AxisDetectionParams

    Raises:
        ValueError: If a key does not name a parameter
    """
    base = base or AxisDetectionParams()
    known = {f.name for f in fields(AxisDetectionParams)}

    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"Unknown axis detection parameters: {', '.join(unknown)}")

    return replace(base, **values)


def load_params(path: Union[str, Path]) -> AxisDetectionParams:
    """
    Load parameters from a YAML settings file.

    The file may either hold the parameters at top level or under an
    ``axis_detection`` section. Missing keys keep their defaults.

    Args:
        path: Path to the YAML file

    Returns:
        AxisDetectionParams with the file's overrides applied
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    with open(path) as f:
        settings = yaml.safe_load(f) or {}

    if not isinstance(settings, dict):
        raise ValueError(f"Settings file must contain a mapping: {path}")

    section = settings.get("axis_detection", settings)
    params = params_from_dict(section or {})
    logger.debug(f"Loaded axis detection settings from {path}: {params}")
    return params
