"""Camera interface for real hardware.

This module provides frame capture with resolution and orientation settings.
"""

from typing import Optional, Tuple

import cv2
import numpy as np

_ROTATIONS = {
    "upright": None,
    "sideways_left": cv2.ROTATE_90_COUNTERCLOCKWISE,
    "sideways_right": cv2.ROTATE_90_CLOCKWISE,
    "upside_down": cv2.ROTATE_180,
}


class Camera:
    """Interface for camera hardware."""

    def __init__(
        self,
        camera_id: int,
        resolution: Optional[Tuple[int, int]] = None,
        rotation: str = "upright",
    ):
        """Initialize camera.

        Args:
            camera_id: Camera device ID
            resolution: Optional (width, height) to request from the device
            rotation: Mounting orientation, one of "upright",
                "sideways_left", "sideways_right", "upside_down"

        Raises:
            ValueError: If the rotation is not supported
        """
        if rotation not in _ROTATIONS:
            raise ValueError(f"Unsupported camera rotation: {rotation}")

        self.camera_id = camera_id
        self.resolution = resolution
        self.rotation = rotation
        self.cap = None

    def connect(self) -> None:
        """Connect to camera hardware.

        Raises:
            RuntimeError: If the device cannot be opened
        """
        cap = cv2.VideoCapture(self.camera_id)
        if not cap.isOpened():
            cap.release()
            raise RuntimeError(f"Failed to open camera {self.camera_id}")

        if self.resolution is not None:
            width, height = self.resolution
            cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
            cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)

        self.cap = cap

    def disconnect(self) -> None:
        """Disconnect from camera."""
        if self.cap is not None:
            self.cap.release()
            self.cap = None

    def capture(self) -> np.ndarray:
        """Capture a single frame.

        Returns:
            Image as numpy array (BGR format)

        Raises:
            RuntimeError: If camera is not connected or the read fails
        """
        if self.cap is None:
            raise RuntimeError("Camera not connected")

        ret, frame = self.cap.read()
        if not ret:
            raise RuntimeError("Failed to capture frame")

        rotate_code = _ROTATIONS[self.rotation]
        if rotate_code is not None:
            frame = cv2.rotate(frame, rotate_code)

        return frame
