"""Tests for the webcam facade and camera interface."""

import time

import cv2
import numpy as np
import pytest

from src.hardware.camera import Camera
from src.hardware.webcam import NO_PIPELINE_POSITION, Webcam
from src.vision.color_ranges import ColorLabel
from src.vision.pipeline import ColorTrackingPipeline
from src.vision.position_estimation import FrameResult


def test_camera_rejects_unknown_rotation():
    """Test unsupported mounting orientations raise ValueError."""
    with pytest.raises(ValueError):
        Camera(0, rotation="diagonal")


def test_camera_capture_requires_connection():
    """Test capture before connect raises RuntimeError."""
    camera = Camera(0, resolution=(640, 480))

    with pytest.raises(RuntimeError):
        camera.capture()


def test_webcam_without_pipeline_is_inert():
    """Test accessors are no-ops when no pipeline is attached."""
    webcam = Webcam(Camera(0))

    webcam.add_target_color("green")
    webcam.clear_target_colors()

    assert webcam.get_target_colors() == frozenset()
    assert webcam.get_contour_position() == NO_PIPELINE_POSITION
    assert webcam.get_frame_result() == FrameResult()
    assert webcam.get_contour_count() == 0

    with pytest.raises(RuntimeError):
        webcam.start()


def test_webcam_delegates_to_pipeline(green_frame):
    """Test target colors and results pass through to the pipeline."""
    pipeline = ColorTrackingPipeline()
    webcam = Webcam(Camera(0), pipeline)

    assert webcam.get_contour_position() is None

    webcam.add_target_color(ColorLabel.GREEN)
    webcam.add_target_color("green")
    assert webcam.get_target_colors() == frozenset({ColorLabel.GREEN})

    pipeline.process_frame(green_frame)
    assert webcam.get_contour_count() == 1
    assert webcam.get_contour_position() == pipeline.get_frame_result().position

    webcam.clear_target_colors()
    assert webcam.get_target_colors() == frozenset()


def test_webcam_from_config(tmp_path):
    """Test building a webcam from a YAML file."""
    config_file = tmp_path / "vision.yaml"
    config_file.write_text(
        "vision:\n"
        "  color_order: rgb\n"
        "  selection: largest_area\n"
        "  target_colors: [blue, magenta]\n"
        "  camera:\n"
        "    id: 2\n"
        "    resolution: [320, 240]\n"
        "    rotation: upside_down\n"
    )

    webcam = Webcam.from_config(config_file)

    assert webcam.camera.camera_id == 2
    assert webcam.camera.resolution == (320, 240)
    assert webcam.camera.rotation == "upside_down"
    assert webcam.pipeline.color_order == "rgb"
    assert webcam.get_target_colors() == frozenset({ColorLabel.BLUE, ColorLabel.MAGENTA})


def test_webcam_from_default_config():
    """Test the bundled config produces a working webcam."""
    webcam = Webcam.from_config()

    assert webcam.camera.resolution == (640, 480)
    assert webcam.get_target_colors() == frozenset()


class FakeCapture:
    """cv2.VideoCapture stand-in serving one fixed frame."""

    def __init__(self, frame=None, opened=True):
        self.frame = frame
        self.opened = opened
        self.released = False
        self.properties = {}

    def isOpened(self):
        return self.opened

    def set(self, prop, value):
        self.properties[prop] = value
        return True

    def read(self):
        if self.frame is None:
            return False, None
        return True, self.frame.copy()

    def release(self):
        self.released = True


def _wait_for(condition, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.01)
    return condition()


def test_camera_connect_applies_resolution(monkeypatch):
    """Test connect opens the device and requests the configured size."""
    capture = FakeCapture()
    monkeypatch.setattr(cv2, "VideoCapture", lambda camera_id: capture)
    camera = Camera(1, resolution=(320, 240))

    camera.connect()

    assert camera.cap is capture
    assert capture.properties[cv2.CAP_PROP_FRAME_WIDTH] == 320
    assert capture.properties[cv2.CAP_PROP_FRAME_HEIGHT] == 240

    camera.disconnect()
    assert capture.released
    assert camera.cap is None


def test_camera_connect_fails_when_device_closed(monkeypatch):
    """Test connect raises and releases when the device will not open."""
    capture = FakeCapture(opened=False)
    monkeypatch.setattr(cv2, "VideoCapture", lambda camera_id: capture)
    camera = Camera(3)

    with pytest.raises(RuntimeError):
        camera.connect()

    assert capture.released
    assert camera.cap is None


def test_camera_capture_applies_rotation(green_frame):
    """Test a sideways mount swaps the frame's height and width."""
    height, width = green_frame.shape[:2]
    camera = Camera(0, rotation="sideways_left")
    camera.cap = FakeCapture(green_frame)

    frame = camera.capture()

    assert frame.shape == (width, height, 3)


def test_camera_capture_upright_keeps_shape(green_frame):
    """Test an upright mount returns frames as read."""
    camera = Camera(0)
    camera.cap = FakeCapture(green_frame)

    np.testing.assert_array_equal(camera.capture(), green_frame)


def test_camera_capture_read_failure():
    """Test a failed read raises RuntimeError."""
    camera = Camera(0)
    camera.cap = FakeCapture(None)

    with pytest.raises(RuntimeError):
        camera.capture()


def test_webcam_start_stop_and_restart(monkeypatch, green_frame):
    """Test streaming publishes results and stops all worker threads."""
    height, width = green_frame.shape[:2]
    monkeypatch.setattr(cv2, "VideoCapture", lambda camera_id: FakeCapture(green_frame))
    camera = Camera(0)
    camera.cap = FakeCapture(green_frame)
    webcam = Webcam(camera, ColorTrackingPipeline(config={"target_colors": ["green"]}))

    webcam.start()
    processing_thread = webcam._processing_thread
    capture_thread = webcam.processor.capture_thread

    assert _wait_for(lambda: webcam.get_contour_count() == 1)
    assert webcam.get_contour_position() == pytest.approx(
        ((width - 1) / 2, (height - 1) / 2)
    )

    webcam.stop()

    assert not processing_thread.is_alive()
    assert not capture_thread.is_alive()
    assert webcam.camera.cap is None

    # Restart reconnects through cv2.VideoCapture
    webcam.clear_target_colors()
    webcam.add_target_color("blue")
    webcam.start()
    try:
        assert webcam.camera.cap is not None
        assert _wait_for(lambda: webcam.processor.latest_frame() is not None)
        assert webcam.get_contour_count() == 1
    finally:
        webcam.stop()

    assert webcam._processing_thread is None
