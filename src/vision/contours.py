"""Contour extraction from binary masks."""

from typing import Callable, List, Sequence

import cv2
import numpy as np

ContourExtractor = Callable[[np.ndarray], Sequence[np.ndarray]]

_RETRIEVAL_MODES = {
    "tree": cv2.RETR_TREE,
    "external": cv2.RETR_EXTERNAL,
}


def find_contours(
    mask: np.ndarray,
    retrieval: str = "tree",
) -> List[np.ndarray]:
    """Find region boundaries in a binary mask.

    Discovery order is whatever OpenCV returns, which is stable for a given
    mask.

    Args:
        mask: Binary mask (uint8, 0/255)
        retrieval: "tree" for the full hierarchy, "external" for outer
            boundaries only

    Returns:
        List of contours, each an (N, 1, 2) array of (x, y) points. Empty
        when the mask has no set pixels.

    Raises:
        ValueError: If the retrieval mode is not supported
    """
    if retrieval not in _RETRIEVAL_MODES:
        raise ValueError(f"Unsupported contour retrieval mode: {retrieval}")

    contours, _ = cv2.findContours(
        mask,
        _RETRIEVAL_MODES[retrieval],
        cv2.CHAIN_APPROX_SIMPLE,
    )
    return list(contours)


def make_contour_extractor(retrieval: str = "tree") -> ContourExtractor:
    """Create a contour extractor bound to a retrieval mode."""
    if retrieval not in _RETRIEVAL_MODES:
        raise ValueError(f"Unsupported contour retrieval mode: {retrieval}")

    def extract(mask: np.ndarray) -> List[np.ndarray]:
        return find_contours(mask, retrieval)

    return extract
