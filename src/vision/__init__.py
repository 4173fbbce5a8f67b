"""Vision module for color-based target tracking.

This module handles the per-frame computer vision tasks using OpenCV:
- HSV color ranges
- Color segmentation
- Contour extraction
- Position estimation
- Shared pipeline state
- Live video processing
"""

# Import core classes and functions
from src.vision.color_ranges import COLOR_RANGES, ColorLabel, ColorRange, range_of
from src.vision.contours import find_contours
from src.vision.pipeline import ColorTrackingPipeline
from src.vision.pipeline_state import PipelineState
from src.vision.position_estimation import FrameResult, estimate_position
from src.vision.segmentation import build_color_mask, segment_frame

# Video processing pulls in the camera layer; import it directly when needed:
# from src.vision.video_processor import LiveVideoProcessor

__all__ = [
    "COLOR_RANGES",
    "ColorLabel",
    "ColorRange",
    "ColorTrackingPipeline",
    "FrameResult",
    "PipelineState",
    "build_color_mask",
    "estimate_position",
    "find_contours",
    "range_of",
    "segment_frame",
]
