"""Color segmentation of camera frames.

This module builds binary masks marking the pixels whose HSV value falls
inside any of the active color ranges.
"""

from typing import Iterable, Union

import cv2
import numpy as np

from src.vision.color_ranges import COLOR_RANGES, ColorLabel

COLOR_ORDER_CONVERSIONS = {
    "bgr": cv2.COLOR_BGR2HSV,
    "rgb": cv2.COLOR_RGB2HSV,
}


def convert_to_hsv(
    frame: np.ndarray,
    color_order: str = "bgr",
) -> np.ndarray:
    """Convert a 3-channel frame to OpenCV HSV.

    Args:
        frame: Input frame (uint8, H x W x 3)
        color_order: Channel order of the frame, "bgr" or "rgb"

    Returns:
        HSV image with hue in [0, 180)

    Raises:
        ValueError: If the color order is not supported
    """
    try:
        code = COLOR_ORDER_CONVERSIONS[color_order.lower()]
    except KeyError:
        raise ValueError(f"Unsupported color order: {color_order}") from None
    return cv2.cvtColor(frame, code)


def build_color_mask(
    hsv: np.ndarray,
    active_labels: Iterable[Union[ColorLabel, str]],
) -> np.ndarray:
    """Build a mask of pixels matching any active color.

    Args:
        hsv: HSV image (uint8, H x W x 3)
        active_labels: Colors to match

    Returns:
        Binary mask (uint8, 0/255) with the same height and width as hsv
    """
    mask = np.zeros(hsv.shape[:2], dtype=np.uint8)

    for label in active_labels:
        color_range = COLOR_RANGES[ColorLabel.parse(label)]
        # Wrapping ranges are already split, so every test is a plain inRange
        for interval in color_range.intervals:
            in_range = cv2.inRange(hsv, interval.lower, interval.upper)
            mask = cv2.bitwise_or(mask, in_range)

    return mask


def segment_frame(
    frame: np.ndarray,
    active_labels: Iterable[Union[ColorLabel, str]],
    color_order: str = "bgr",
) -> np.ndarray:
    """Segment a frame by the active target colors.

    Args:
        frame: Input frame (uint8, H x W x 3)
        active_labels: Colors to match
        color_order: Channel order of the frame, "bgr" or "rgb"

    Returns:
        Binary mask (uint8, 0/255)
    """
    labels = list(active_labels)
    if not labels:
        return np.zeros(frame.shape[:2], dtype=np.uint8)

    hsv = convert_to_hsv(frame, color_order)
    return build_color_mask(hsv, labels)
