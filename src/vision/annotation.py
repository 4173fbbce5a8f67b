"""Drawing utilities for detection results.

Note: nothing here is shown on screen unless display_frame is called.
"""

from typing import Optional, Sequence, Tuple

import cv2
import numpy as np

from src.vision.position_estimation import FrameResult

DEFAULT_BOX_COLOR = (0, 255, 0)
DEFAULT_BOX_THICKNESS = 2


def draw_bounding_boxes(
    image: np.ndarray,
    contours: Sequence[np.ndarray],
    color: Tuple[int, int, int] = DEFAULT_BOX_COLOR,
    thickness: int = DEFAULT_BOX_THICKNESS,
) -> np.ndarray:
    """Draw the bounding rectangle of every contour.

    Args:
        image: Image to draw on
        contours: Contours to outline
        color: Box color in the image's channel order
        thickness: Line thickness

    Returns:
        Copy of the image with boxes drawn
    """
    result = image.copy()

    for contour in contours:
        x, y, w, h = cv2.boundingRect(contour)
        cv2.rectangle(result, (x, y), (x + w - 1, y + h - 1), color, thickness)

    return result


def draw_frame_result(
    image: np.ndarray,
    result: FrameResult,
    color: Tuple[int, int, int] = (255, 255, 255),
) -> np.ndarray:
    """Draw the tracked position and target count.

    Args:
        image: Image to draw on
        result: Published frame result
        color: Text and marker color

    Returns:
        Copy of the image with the result drawn
    """
    vis_image = image.copy()

    position_text = "none"
    if result.position is not None:
        x, y = result.position
        cv2.drawMarker(
            vis_image,
            (int(round(x)), int(round(y))),
            color,
            markerType=cv2.MARKER_CROSS,
            markerSize=12,
            thickness=2,
        )
        position_text = f"({x:.1f}, {y:.1f})"

    cv2.putText(
        vis_image,
        f"Targets: {result.count} | Position: {position_text}",
        (10, 30),
        cv2.FONT_HERSHEY_SIMPLEX,
        0.7,
        color,
        2,
    )

    return vis_image


def display_frame(
    image: np.ndarray,
    result: Optional[FrameResult] = None,
    window_name: str = "Color Tracking",
) -> None:
    """Show an annotated frame in a window.

    Args:
        image: Annotated frame
        result: Optional result to overlay
        window_name: Name of display window
    """
    if result is not None:
        image = draw_frame_result(image, result)

    cv2.imshow(window_name, image)
