"""Live video processing for color tracking.

This module feeds live camera frames through the color tracking pipeline.
"""

import logging
import threading
import time
from dataclasses import dataclass
from queue import Empty, Full, Queue
from typing import Callable, Optional

import numpy as np

from src.hardware.camera import Camera
from src.vision.pipeline import ColorTrackingPipeline
from src.vision.position_estimation import FrameResult

logger = logging.getLogger(__name__)


@dataclass
class ProcessingResult:
    """Result of processing a single video frame.

    Attributes:
        frame: Annotated frame returned by the pipeline
        frame_result: Published result after this frame
        processing_time: Time taken to process frame (seconds)
        frame_number: Sequential frame number
    """

    frame: np.ndarray
    frame_result: FrameResult
    processing_time: float
    frame_number: int


class LiveVideoProcessor:
    """Run camera frames through a ColorTrackingPipeline.

    A background thread captures frames into a small queue; frames are
    processed one at a time, in capture order, by whichever thread calls
    process_next_frame (usually run_continuous).
    """

    def __init__(
        self,
        camera: Camera,
        pipeline: ColorTrackingPipeline,
        callback: Optional[Callable[[ProcessingResult], None]] = None,
    ):
        """Initialize live video processor.

        Args:
            camera: Camera object for frame capture
            pipeline: Pipeline each frame is passed through
            callback: Optional callback function called with each result
        """
        self.camera = camera
        self.pipeline = pipeline
        self.callback = callback

        self.is_running = False
        self.frame_queue: Queue[tuple[np.ndarray, int]] = Queue(maxsize=2)
        self.capture_thread: Optional[threading.Thread] = None
        self.frame_number = 0

        self._latest_lock = threading.Lock()
        self._latest_frame: Optional[np.ndarray] = None

    def start(self) -> None:
        """Begin capturing frames on a background thread.

        Raises:
            RuntimeError: If camera is not connected
        """
        if self.camera.cap is None:
            raise RuntimeError(f"Camera {self.camera.camera_id} is not connected")
        if self.is_running:
            logger.warning("Capture already running")
            return

        self.frame_number = 0
        self.is_running = True
        self.capture_thread = threading.Thread(
            target=self._capture_frames,
            name=f"capture-{self.camera.camera_id}",
            daemon=True,
        )
        self.capture_thread.start()
        logger.info(f"Capturing from camera {self.camera.camera_id}")

    def stop(self) -> None:
        """Stop capturing and discard frames still waiting in the queue."""
        if not self.is_running:
            return
        self.is_running = False

        if self.capture_thread is not None:
            self.capture_thread.join(timeout=2.0)
            self.capture_thread = None

        dropped = 0
        while True:
            try:
                self.frame_queue.get_nowait()
            except Empty:
                break
            dropped += 1
        logger.info(f"Capture stopped, discarded {dropped} queued frame(s)")

    def _capture_frames(self) -> None:
        """Feed camera frames into the queue until stopped.

        Frames arriving while the queue is full are dropped so the pipeline
        always works on recent frames.
        """
        while self.is_running:
            try:
                frame = self.camera.capture()
            except RuntimeError as e:
                # Device hiccup; keep the last published result and retry
                logger.error(f"Camera {self.camera.camera_id}: {e}")
                time.sleep(0.1)
                continue

            self.frame_number += 1
            try:
                self.frame_queue.put_nowait((frame, self.frame_number))
            except Full:
                logger.debug(f"Dropped frame {self.frame_number}")

    def process_next_frame(self) -> Optional[ProcessingResult]:
        """Process the next available frame.

        Returns:
            ProcessingResult if frame available, None otherwise
        """
        if not self.is_running:
            return None

        try:
            frame, frame_num = self.frame_queue.get_nowait()
        except Empty:
            return None

        start_time = time.time()
        annotated = self.pipeline.process_frame(frame)
        processing_time = time.time() - start_time

        with self._latest_lock:
            self._latest_frame = annotated

        result = ProcessingResult(
            frame=annotated,
            frame_result=self.pipeline.get_frame_result(),
            processing_time=processing_time,
            frame_number=frame_num,
        )

        if self.callback is not None:
            try:
                self.callback(result)
            except Exception as e:
                logger.error(f"Error in result callback for frame {frame_num}: {e}")

        return result

    def latest_frame(self) -> Optional[np.ndarray]:
        """Most recent annotated frame, None before the first frame."""
        with self._latest_lock:
            return self._latest_frame

    def run_continuous(
        self,
        max_frames: Optional[int] = None,
        target_fps: Optional[float] = None,
    ) -> None:
        """Process frames until stopped or max_frames have been handled.

        Args:
            max_frames: Stop after this many processed frames (None for no limit)
            target_fps: Optional cap on the processing rate
        """
        if not self.is_running:
            self.start()

        min_interval = 1.0 / target_fps if target_fps else 0.0
        processed = 0
        next_due = time.monotonic()

        try:
            while self.is_running:
                wait = next_due - time.monotonic()
                if wait > 0:
                    time.sleep(wait)

                result = self.process_next_frame()
                if result is None:
                    time.sleep(0.01)
                    continue

                next_due = time.monotonic() + min_interval
                processed += 1
                logger.debug(
                    f"Frame {result.frame_number}: {result.frame_result} "
                    f"({result.processing_time * 1000:.1f} ms)"
                )
                if max_frames is not None and processed >= max_frames:
                    break
        except KeyboardInterrupt:
            logger.info("Processing interrupted by user")
        finally:
            self.stop()
