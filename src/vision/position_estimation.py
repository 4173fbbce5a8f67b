"""Target position estimation from contours.

This module reduces the contours found in a frame to a target count and a
single target position.
"""

import math
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple, Union

import cv2
import numpy as np

Position = Tuple[float, float]
SelectionStrategy = Callable[[Sequence[np.ndarray], Optional[Position]], np.ndarray]


@dataclass(frozen=True)
class FrameResult:
    """Latest detection published by the pipeline.

    Attributes:
        count: Number of contours found in the frame
        position: (x, y) pixel position of the selected contour, None before
            the first detection
    """

    count: int = 0
    position: Optional[Position] = None


def bounding_box_midpoint(contour: np.ndarray) -> Position:
    """Midpoint of the axis-aligned bounding box of a contour.

    Args:
        contour: Contour points, (N, 1, 2) or (N, 2) array of (x, y)

    Returns:
        (x, y) midpoint
    """
    points = np.asarray(contour).reshape(-1, 2)
    x_min, y_min = points.min(axis=0)
    x_max, y_max = points.max(axis=0)
    return (float(x_max + x_min) / 2.0, float(y_max + y_min) / 2.0)


def select_first(
    contours: Sequence[np.ndarray],
    previous: Optional[Position] = None,
) -> np.ndarray:
    """Select the first contour in discovery order."""
    return contours[0]


def select_largest_area(
    contours: Sequence[np.ndarray],
    previous: Optional[Position] = None,
) -> np.ndarray:
    """Select the contour enclosing the largest area.

    Ties go to the earliest contour.
    """
    return max(contours, key=cv2.contourArea)


def select_nearest_to_previous(
    contours: Sequence[np.ndarray],
    previous: Optional[Position] = None,
) -> np.ndarray:
    """Select the contour whose midpoint is closest to the previous position.

    Falls back to the first contour when nothing has been seen yet.
    """
    if previous is None:
        return contours[0]

    def distance(contour: np.ndarray) -> float:
        x, y = bounding_box_midpoint(contour)
        return math.hypot(x - previous[0], y - previous[1])

    return min(contours, key=distance)


SELECTION_STRATEGIES = {
    "first": select_first,
    "largest_area": select_largest_area,
    "nearest_to_previous": select_nearest_to_previous,
}


def get_selection_strategy(
    selection: Union[str, SelectionStrategy],
) -> SelectionStrategy:
    """Resolve a selection strategy by name.

    Raises:
        ValueError: If the name is not a known strategy
    """
    if callable(selection):
        return selection
    try:
        return SELECTION_STRATEGIES[selection]
    except KeyError:
        raise ValueError(
            f"Unknown selection strategy: {selection}. "
            f"Expected one of {sorted(SELECTION_STRATEGIES)}"
        ) from None


def estimate_position(
    contours: Sequence[np.ndarray],
    selection: Union[str, SelectionStrategy] = "first",
    previous: Optional[Position] = None,
) -> Optional[FrameResult]:
    """Estimate the target count and position for a frame.

    Args:
        contours: Contours in discovery order
        selection: Strategy name or callable picking the tracked contour
        previous: Last published position, used by nearest_to_previous

    Returns:
        FrameResult for the frame, or None when there are no contours. None
        means "no update": the last published result stays in place.
    """
    if len(contours) == 0:
        return None

    strategy = get_selection_strategy(selection)
    selected = strategy(contours, previous)

    return FrameResult(
        count=len(contours),
        position=bounding_box_midpoint(selected),
    )
