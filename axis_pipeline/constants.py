"""
Planar Axis Pipeline - Master Constants Reference

Empirical thresholds used by the axis detection stages. They were tuned on
beam and facade scans at centimetre resolution; override them through
AxisDetectionParams (settings.py) rather than editing them here.
"""

# =============================================================================
# PROJECTION AND RASTER CONSTANTS
# =============================================================================

# Raster cell size in project units (0.01 = 1 cm for metric clouds)
DEFAULT_RASTER_RESOLUTION = 0.01

# Minimum number of points needed to compute a principal plane
MIN_POINTS_FOR_PCA = 3

# Refuse to allocate rasters larger than this many pixels
MAX_RASTER_PIXELS = 100_000_000

# Empty border around the cloud (pixels); edges on the image border are
# invisible to the edge detector
RASTER_PADDING_PIX = 5

# =============================================================================
# LINE EXTRACTION CONSTANTS
# =============================================================================

# Canny hysteresis thresholds on the 0/255 occupancy image
CANNY_THRESHOLD_LOW = 50
CANNY_THRESHOLD_HIGH = 150

# Hough accumulator resolution
HOUGH_RHO_STEP = 1
HOUGH_THETA_STEP_DEG = 1

# Peaks below this fraction of the longest detection are discarded
HOUGH_PEAK_THRESHOLD_RATIO = 0.3

# Minimum accumulator votes for the probabilistic Hough transform
HOUGH_MIN_VOTES = 20

# Maximum number of detections handed to the clusterer
HOUGH_MAX_LINES = 15

# Segments shorter than this (pixels) are not reported
HOUGH_MIN_LINE_LENGTH = 40

# Collinear pieces separated by less than this (pixels) are joined
HOUGH_MAX_LINE_GAP = 20

# =============================================================================
# LINE CLUSTERING CONSTANTS
# =============================================================================

# Max theta difference between a seed and a duplicate detection (degrees)
CLUSTER_ANGLE_TOLERANCE_DEG = 10

# Max rho difference between a seed and a duplicate detection (raster units)
CLUSTER_RHO_TOLERANCE = 10

# =============================================================================
# AXIS PAIRING CONSTANTS
# =============================================================================

# Edges within this theta band of the reference edge are candidate partners
PAIR_ANGLE_TOLERANCE_DEG = 5

# An axis is only produced when exactly this many edges share a direction
EDGES_PER_AXIS = 2

# Fewer axes than this means the cloud is not segmented
MIN_AXES_FOR_SEGMENTATION = 2

# =============================================================================
# SEGMENTATION CONSTANTS
# =============================================================================

# Safety margin added to the beam width before buffering (20%)
CORRIDOR_MARGIN_RATIO = 0.2

# Label given to points left in the remainder
REMAINDER_LABEL = -1

# =============================================================================
# MESSAGES
# =============================================================================

INSUFFICIENT_DATA_MESSAGE = "Data quality insufficient to determine axes! Assuming 1 axis..."

SINGLE_AXIS_MESSAGE = "1 axis was found! Returning the whole cloud as one cluster"

# =============================================================================
# CONFIDENCE LEVELS
# =============================================================================

class Confidence:
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
