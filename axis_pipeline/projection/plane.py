"""
Plane Projection Module

Projects a roughly planar 3D point cloud onto its principal plane.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from ..constants import MIN_POINTS_FOR_PCA

logger = logging.getLogger(__name__)


@dataclass
class PlanarProjection:
    """A point cloud expressed in its principal-component frame, Z flattened."""
    planar: np.ndarray
    coefficients: np.ndarray

    @property
    def extent(self) -> Tuple[float, float, float, float]:
        """(min_x, max_x, min_y, max_y) of the planar cloud."""
        xy = self.planar[:, :2]
        return (
            float(xy[:, 0].min()),
            float(xy[:, 0].max()),
            float(xy[:, 1].min()),
            float(xy[:, 1].max()),
        )


def validate_point_cloud(points: np.ndarray) -> np.ndarray:
    """
    Check that points is an (N, k) array with k >= 3 and finite XYZ.

    Args:
        points: Candidate point cloud

    Returns:
        The same cloud as a numpy array

    Raises:
        ValueError: If the cloud cannot be processed
    """
    points = np.asarray(points)

    if points.ndim != 2 or points.shape[1] < 3:
        raise ValueError(f"Point cloud must be an (N, 3+) array, got shape {points.shape}")

    if len(points) < MIN_POINTS_FOR_PCA:
        raise ValueError(f"Need at least {MIN_POINTS_FOR_PCA} points, got {len(points)}")

    if not np.all(np.isfinite(points[:, :3])):
        raise ValueError("Point cloud contains non-finite coordinates")

    return points


def principal_axes(xyz: np.ndarray) -> np.ndarray:
    """
    Compute the principal component coefficients of a 3D cloud.

    Columns are ordered by decreasing variance. Each column is signed so that
    its largest-magnitude element is positive, which makes the projection
    reproducible across runs.

    Args:
        xyz: (N, 3) coordinates

    Returns:
        3x3 coefficient matrix
    """
    centered = xyz - xyz.mean(axis=0)
    _, _, vt = np.linalg.svd(centered, full_matrices=False)
    coefficients = vt.T

    for col in range(coefficients.shape[1]):
        pivot = np.argmax(np.abs(coefficients[:, col]))
        if coefficients[pivot, col] < 0:
            coefficients[:, col] = -coefficients[:, col]

    return coefficients


def project_to_plane(points: np.ndarray) -> PlanarProjection:
    """
    Transform a point cloud into its principal frame and drop the normal axis.

    The transform is applied to the raw coordinates (not the centered ones),
    so planar coordinates keep the cloud's absolute offset along the two
    in-plane directions.

    Args:
        points: (N, 3+) point cloud; extra columns are ignored

    Returns:
        PlanarProjection with an (N, 3) planar array whose Z column is 0
    """
    points = validate_point_cloud(points)
    xyz = points[:, :3].astype(np.float64)

    coefficients = principal_axes(xyz)
    planar = xyz @ coefficients
    planar[:, 2] = 0.0

    projection = PlanarProjection(planar=planar, coefficients=coefficients)
    min_x, max_x, min_y, max_y = projection.extent
    logger.debug(
        f"Projected {len(points)} points to plane: "
        f"x=[{min_x:.3f}, {max_x:.3f}], y=[{min_y:.3f}, {max_y:.3f}]"
    )
    return projection
