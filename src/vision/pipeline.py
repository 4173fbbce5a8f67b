"""Per-frame color tracking pipeline.

Each call to process_frame runs:
1. HSV conversion
2. Mask construction for the active target colors
3. Contour extraction
4. Position estimation
5. Result publishing
6. Bounding box annotation
"""

import logging
from typing import FrozenSet, Optional, Union

import numpy as np

from src.vision.annotation import (
    DEFAULT_BOX_COLOR,
    DEFAULT_BOX_THICKNESS,
    draw_bounding_boxes,
)
from src.vision.color_ranges import ColorLabel
from src.vision.contours import ContourExtractor, make_contour_extractor
from src.vision.pipeline_state import PipelineState
from src.vision.position_estimation import (
    FrameResult,
    estimate_position,
    get_selection_strategy,
)
from src.vision.segmentation import COLOR_ORDER_CONVERSIONS, segment_frame

logger = logging.getLogger(__name__)


class ColorTrackingPipeline:
    """Track colored targets in camera frames.

    process_frame is called from the frame thread; the target color and
    result accessors may be called from any other thread.
    """

    def __init__(
        self,
        config: Optional[dict] = None,
        contour_extractor: Optional[ContourExtractor] = None,
        state: Optional[PipelineState] = None,
    ):
        """Initialize the pipeline.

        Args:
            config: Optional configuration dictionary with keys
                color_order, selection, contour_retrieval, target_colors
                and annotation
            contour_extractor: Optional replacement for OpenCV contour
                extraction
            state: Optional shared state object

        Raises:
            ValueError: If the configuration names an unknown color order,
                selection strategy, retrieval mode or color
        """
        if config is None:
            config = {}

        self.color_order = config.get("color_order", "bgr").lower()
        if self.color_order not in COLOR_ORDER_CONVERSIONS:
            raise ValueError(f"Unsupported color order: {self.color_order}")

        self.selection = get_selection_strategy(config.get("selection", "first"))

        if contour_extractor is None:
            contour_extractor = make_contour_extractor(
                config.get("contour_retrieval", "tree")
            )
        self.contour_extractor = contour_extractor

        annotation = config.get("annotation", {})
        self.annotate = annotation.get("enabled", True)
        self.box_color = tuple(annotation.get("color", DEFAULT_BOX_COLOR))
        self.box_thickness = int(annotation.get("thickness", DEFAULT_BOX_THICKNESS))

        if state is None:
            state = PipelineState(config.get("target_colors", []))
        self.state = state

    def process_frame(self, frame: np.ndarray) -> np.ndarray:
        """Run the pipeline on one frame.

        Args:
            frame: Input frame (uint8, H x W x 3)

        Returns:
            Copy of the frame with detection boxes drawn, or an unannotated
            copy if processing fails. Empty frames are returned as given.
        """
        if not isinstance(frame, np.ndarray) or frame.size == 0:
            logger.warning("Received empty frame, skipping")
            return frame

        try:
            target_colors = self.state.get_colors()
            if not target_colors:
                return frame.copy()

            mask = segment_frame(frame, target_colors, self.color_order)
            contours = self.contour_extractor(mask)

            result = estimate_position(
                contours,
                selection=self.selection,
                previous=self.state.get_result().position,
            )
            if result is not None:
                self.state.publish(result)
                logger.debug(
                    f"Detected {result.count} target(s) at {result.position}"
                )

            if self.annotate and len(contours) > 0:
                return draw_bounding_boxes(
                    frame,
                    contours,
                    color=self.box_color,
                    thickness=self.box_thickness,
                )
            return frame.copy()

        except Exception as e:
            logger.error(f"Error processing frame: {e}")
            return frame.copy()

    def add_target_color(self, label: Union[ColorLabel, str]) -> None:
        """Enable a target color. Unknown labels are logged and ignored."""
        try:
            self.state.add_color(label)
        except ValueError as e:
            logger.warning(f"Ignoring target color: {e}")

    def clear_target_colors(self) -> None:
        """Disable all target colors."""
        self.state.clear_colors()

    def get_target_colors(self) -> FrozenSet[ColorLabel]:
        """Snapshot of the enabled target colors."""
        return self.state.get_colors()

    def get_frame_result(self) -> FrameResult:
        """Latest published target count and position."""
        return self.state.get_result()
