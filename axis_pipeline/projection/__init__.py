# Point cloud projection, rasterization and line extraction module

from .plane import (
    PlanarProjection,
    validate_point_cloud,
    principal_axes,
    project_to_plane,
)

from .rasterizer import (
    RasterGrid,
    build_raster_grid,
    rasterize,
)

from .line_extractor import (
    to_edge_input,
    detect_edges,
    extract_line_segments,
)

__all__ = [
    # Plane
    "PlanarProjection",
    "validate_point_cloud",
    "principal_axes",
    "project_to_plane",
    # Rasterizer
    "RasterGrid",
    "build_raster_grid",
    "rasterize",
    # Line Extractor
    "to_edge_input",
    "detect_edges",
    "extract_line_segments",
]
