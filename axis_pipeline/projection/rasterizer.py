"""
Rasterizer Module

Converts a planar point cloud into a binary occupancy image.

Image: origin top-left, row index increases downward (toward min Y)
Plane: origin at (min_x, min_y), Y increases upward
"""

import logging
import math
from dataclasses import dataclass

import numpy as np

from ..constants import DEFAULT_RASTER_RESOLUTION, MAX_RASTER_PIXELS, RASTER_PADDING_PIX

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RasterGrid:
    """Geometry of the raster laid over the planar cloud."""
    resolution: float
    min_x: float
    min_y: float
    max_x: float
    max_y: float
    width_pix: int
    height_pix: int

    def to_planar(self, pixel_points: np.ndarray) -> np.ndarray:
        """
        Convert (col, row) pixel coordinates to planar (x, y).

        Args:
            pixel_points: (N, 2) array of pixel coordinates

        Returns:
            (N, 2) array of planar coordinates
        """
        pixel_points = np.asarray(pixel_points, dtype=np.float64).reshape(-1, 2)
        planar = np.empty_like(pixel_points)
        planar[:, 0] = pixel_points[:, 0] * self.resolution + self.min_x
        planar[:, 1] = self.max_y - pixel_points[:, 1] * self.resolution  # Flip Y
        return planar

    def to_pixels(self, planar_xy: np.ndarray) -> np.ndarray:
        """
        Convert planar (x, y) to integer (col, row) pixel indices.

        Points on the max edges are clamped into the last row/column.
        """
        planar_xy = np.asarray(planar_xy, dtype=np.float64).reshape(-1, 2)
        cols = np.floor((planar_xy[:, 0] - self.min_x) / self.resolution).astype(np.int64)
        rows_up = np.floor((planar_xy[:, 1] - self.min_y) / self.resolution).astype(np.int64)

        cols = np.clip(cols, 0, self.width_pix - 1)
        rows_up = np.clip(rows_up, 0, self.height_pix - 1)
        rows = self.height_pix - 1 - rows_up

        return np.column_stack([cols, rows])


def build_raster_grid(
    planar: np.ndarray,
    resolution: float = DEFAULT_RASTER_RESOLUTION,
    padding: int = RASTER_PADDING_PIX
) -> RasterGrid:
    """
    Lay a raster grid over the planar cloud's bounding box.

    Args:
        planar: (N, 2+) planar coordinates
        resolution: Cell size in project units
        padding: Empty cells added on every side of the bounding box

    Returns:
        RasterGrid covering the cloud

    Raises:
        ValueError: On a non-positive resolution or an oversized raster
    """
    if not resolution > 0:
        raise ValueError(f"Raster resolution must be positive: {resolution}")

    xy = np.asarray(planar)[:, :2]
    margin = padding * resolution
    min_x, min_y = (float(v) - margin for v in xy.min(axis=0))
    max_x, max_y = (float(v) + margin for v in xy.max(axis=0))

    width_pix = max(1, math.ceil((max_x - min_x) / resolution))
    height_pix = max(1, math.ceil((max_y - min_y) / resolution))

    if width_pix * height_pix > MAX_RASTER_PIXELS:
        raise ValueError(
            f"Raster of {width_pix}x{height_pix} pixels exceeds limit; "
            f"increase the resolution (currently {resolution})"
        )

    return RasterGrid(
        resolution=resolution,
        min_x=min_x,
        min_y=min_y,
        max_x=max_x,
        max_y=max_y,
        width_pix=width_pix,
        height_pix=height_pix,
    )


def rasterize(planar: np.ndarray, grid: RasterGrid) -> np.ndarray:
    """
    Build the binary occupancy image of a planar cloud.

    Args:
        planar: (N, 2+) planar coordinates
        grid: Raster grid from build_raster_grid()

    Returns:
        uint8 image (height_pix, width_pix): 255 where a cell holds points, else 0
    """
    raster = np.zeros((grid.height_pix, grid.width_pix), dtype=np.uint8)

    pixels = grid.to_pixels(np.asarray(planar)[:, :2])
    raster[pixels[:, 1], pixels[:, 0]] = 255

    occupied = int(np.count_nonzero(raster))
    logger.debug(
        f"Rasterized {len(pixels)} points into {grid.width_pix}x{grid.height_pix} "
        f"image ({occupied} occupied cells)"
    )
    return raster
