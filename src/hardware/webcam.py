"""Webcam facade used by the robot control loop.

This module ties a camera, the color tracking pipeline and the live video
processor together behind the calls the control loop makes.
"""

import logging
import threading
from pathlib import Path
from typing import FrozenSet, Optional, Union

from src.hardware.camera import Camera
from src.utils.config_loader import DEFAULT_CONFIG_PATH, load_config
from src.vision.color_ranges import ColorLabel
from src.vision.pipeline import ColorTrackingPipeline
from src.vision.position_estimation import FrameResult, Position
from src.vision.video_processor import LiveVideoProcessor

logger = logging.getLogger(__name__)

NO_PIPELINE_POSITION = (-1.0, -1.0)


class Webcam:
    """Camera with an attached color tracking pipeline.

    Every accessor is safe to call before a pipeline is attached: mutators do
    nothing and readers return empty values.
    """

    def __init__(
        self,
        camera: Camera,
        pipeline: Optional[ColorTrackingPipeline] = None,
    ):
        """Initialize webcam.

        Args:
            camera: Camera object for frame capture
            pipeline: Optional pipeline to run on every frame
        """
        self.camera = camera
        self.pipeline = pipeline
        self.processor: Optional[LiveVideoProcessor] = None
        self._processing_thread: Optional[threading.Thread] = None

    @classmethod
    def from_config(
        cls,
        config_path: Union[str, Path] = DEFAULT_CONFIG_PATH,
    ) -> "Webcam":
        """Create a Webcam from a YAML config file.

        Args:
            config_path: Path to the config file; settings are read from its
                "vision" section

        Returns:
            Configured Webcam (not yet started)
        """
        config = load_config(config_path)
        vision_config = config.get("vision", {})
        camera_config = vision_config.get("camera", {})

        resolution = camera_config.get("resolution")
        camera = Camera(
            camera_config.get("id", 0),
            resolution=tuple(resolution) if resolution else None,
            rotation=camera_config.get("rotation", "upright"),
        )
        pipeline = ColorTrackingPipeline(config=vision_config)

        return cls(camera, pipeline)

    def start(self, target_fps: Optional[float] = None) -> None:
        """Open the camera and start processing frames in the background.

        Args:
            target_fps: Optional processing rate limit

        Raises:
            RuntimeError: If no pipeline is attached or the camera fails to open
        """
        if self.pipeline is None:
            raise RuntimeError("No pipeline attached to webcam")

        if self._processing_thread is not None and self._processing_thread.is_alive():
            logger.warning("Webcam already streaming")
            return

        if self.camera.cap is None:
            self.camera.connect()

        self.processor = LiveVideoProcessor(self.camera, self.pipeline)
        self.processor.start()
        self._processing_thread = threading.Thread(
            target=self.processor.run_continuous,
            kwargs={"target_fps": target_fps},
            daemon=True,
        )
        self._processing_thread.start()

        logger.info(f"Webcam {self.camera.camera_id} streaming")

    def stop(self) -> None:
        """Stop processing and release the camera."""
        if self.processor is not None:
            self.processor.stop()
        if self._processing_thread is not None:
            self._processing_thread.join(timeout=2.0)
            self._processing_thread = None
        self.camera.disconnect()

        logger.info(f"Webcam {self.camera.camera_id} stopped")

    def add_target_color(self, label: Union[ColorLabel, str]) -> None:
        """Enable a target color."""
        if self.pipeline is None:
            return
        self.pipeline.add_target_color(label)

    def clear_target_colors(self) -> None:
        """Disable all target colors."""
        if self.pipeline is None:
            return
        self.pipeline.clear_target_colors()

    def get_target_colors(self) -> FrozenSet[ColorLabel]:
        """Enabled target colors."""
        if self.pipeline is None:
            return frozenset()
        return self.pipeline.get_target_colors()

    def get_frame_result(self) -> FrameResult:
        """Latest published target count and position."""
        if self.pipeline is None:
            return FrameResult()
        return self.pipeline.get_frame_result()

    def get_contour_position(self) -> Optional[Position]:
        """Last seen target position.

        Returns:
            (x, y) position, None if nothing has been seen yet, or (-1, -1)
            when no pipeline is attached
        """
        if self.pipeline is None:
            return NO_PIPELINE_POSITION
        return self.pipeline.get_frame_result().position

    def get_contour_count(self) -> int:
        """Number of targets in the last frame with a detection."""
        return self.get_frame_result().count

    def __repr__(self) -> str:
        return f"Webcam(camera_id={self.camera.camera_id}, pipeline={self.pipeline is not None})"
