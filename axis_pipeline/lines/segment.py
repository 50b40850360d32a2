"""
Line Segment Module

Data structures for raw line detections, clusters of duplicate detections,
and the merged representative segments.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


def normal_form(
    point1: Tuple[float, float],
    point2: Tuple[float, float]
) -> Tuple[float, float]:
    """
    Calculate the normal-form (theta, rho) of the line through two points.

    Uses rho = x*cos(theta) + y*sin(theta) with theta in [-90, 90) degrees,
    the convention of the standard Hough transform.

    Args:
        point1: First point (x, y)
        point2: Second point (x, y)

    Returns:
        Tuple of (theta in degrees, signed rho)
    """
    dx = point2[0] - point1[0]
    dy = point2[1] - point1[1]

    theta = math.degrees(math.atan2(-dx, dy))
    # Fold into [-90, 90); rho changes sign with the normal
    if theta >= 90:
        theta -= 180
    elif theta < -90:
        theta += 180

    theta_rad = math.radians(theta)
    rho = point1[0] * math.cos(theta_rad) + point1[1] * math.sin(theta_rad)
    return theta, rho


def point_distance(p1: Tuple[float, float], p2: Tuple[float, float]) -> float:
    """Calculate distance between two points."""
    return math.sqrt((p2[0] - p1[0]) ** 2 + (p2[1] - p1[1]) ** 2)


def crosses_theta_seam(theta1: float, theta2: float) -> bool:
    """
    True when two thetas sit on opposite sides of the +/-90 degree seam.

    (theta, rho) and (theta + 180, -rho) describe the same line, so a line
    at 89.5 degrees is 1 degree away from one at -89.5 degrees.
    """
    return abs(theta1 - theta2) > 90


def angle_difference(theta1: float, theta2: float) -> float:
    """
    Calculate the difference between two line angles.

    Args:
        theta1: First angle in degrees
        theta2: Second angle in degrees

    Returns:
        Absolute difference in degrees (0-90)
    """
    diff = abs(theta1 - theta2)
    # Handle wrap-around at 180 degrees
    if diff > 90:
        diff = 180 - diff
    return diff


def rho_difference(theta1: float, rho1: float, theta2: float, rho2: float) -> float:
    """Difference in rho, flipping the sign of one rho across the theta seam."""
    if crosses_theta_seam(theta1, theta2):
        return abs(rho1 + rho2)
    return abs(rho1 - rho2)


@dataclass
class LineSegment:
    """A candidate line detection in raster-pixel coordinates."""
    point1: Tuple[float, float]
    point2: Tuple[float, float]
    theta: float
    rho: float

    @classmethod
    def from_endpoints(
        cls,
        point1: Tuple[float, float],
        point2: Tuple[float, float]
    ) -> "LineSegment":
        """Create a segment, deriving theta and rho from its endpoints."""
        theta, rho = normal_form(point1, point2)
        return cls(point1=tuple(point1), point2=tuple(point2), theta=theta, rho=rho)

    @property
    def length(self) -> float:
        """Calculate segment length."""
        return point_distance(self.point1, self.point2)


@dataclass
class LineCluster:
    """Detections believed to be duplicates of one physical edge."""
    cluster_id: int
    segments: List[LineSegment] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.segments)

    @property
    def seed(self) -> LineSegment:
        """The segment the cluster was grown from."""
        return self.segments[0]


@dataclass
class MergedSegment:
    """
    Representative segment of a cluster, in planar coordinates.

    theta and rho are those of the cluster's first member, not recomputed
    from the merged endpoints.
    """
    point1: Tuple[float, float]
    point2: Tuple[float, float]
    theta: float
    rho: float
    cluster_id: Optional[int] = None

    @property
    def length(self) -> float:
        """Distance between the two extremities."""
        return point_distance(self.point1, self.point2)

    @property
    def is_finite(self) -> bool:
        """True when every coordinate and parameter is a finite number."""
        values = (*self.point1, *self.point2, self.theta, self.rho)
        return all(math.isfinite(v) for v in values)
