"""Pytest configuration and shared fixtures."""

import cv2
import numpy as np
import pytest


def _hsv_to_bgr(hsv):
    pixel = np.array([[hsv]], dtype=np.uint8)
    return tuple(int(c) for c in cv2.cvtColor(pixel, cv2.COLOR_HSV2BGR)[0, 0])


@pytest.fixture
def hsv_to_bgr():
    """Fixture providing a single-color HSV to BGR converter."""
    return _hsv_to_bgr


@pytest.fixture
def make_hsv_frame():
    """Fixture providing a factory for solid-color BGR frames."""

    def make(hsv, shape=(60, 80)):
        height, width = shape
        hsv_image = np.zeros((height, width, 3), dtype=np.uint8)
        hsv_image[:, :] = hsv
        return cv2.cvtColor(hsv_image, cv2.COLOR_HSV2BGR)

    return make


@pytest.fixture
def sample_image():
    """Fixture providing a black test frame."""
    return np.zeros((60, 80, 3), dtype=np.uint8)


@pytest.fixture
def green_frame(make_hsv_frame):
    """Fixture providing a frame filled with solid green."""
    return make_hsv_frame((60, 200, 200))


@pytest.fixture
def blue_frame(make_hsv_frame):
    """Fixture providing a frame filled with solid blue."""
    return make_hsv_frame((110, 200, 200))


@pytest.fixture
def two_squares_frame():
    """Fixture providing a black frame with a small and a large green square."""
    frame = np.zeros((100, 120, 3), dtype=np.uint8)
    green = _hsv_to_bgr((60, 200, 200))
    frame[10:20, 10:20] = green
    frame[40:90, 50:110] = green
    return frame


def _in_raw_bounds(color_range, hsv):
    """Check an HSV value against a range's literal bounds on the hue circle."""
    h, s, v = (int(c) for c in hsv)
    lower_h, upper_h = color_range.lower[0], color_range.upper[0]
    if lower_h < 0:
        lower_h += 180

    if lower_h <= upper_h:
        hue_ok = lower_h <= h <= upper_h
    else:
        hue_ok = h >= lower_h or h <= upper_h

    return (
        hue_ok
        and color_range.lower[1] <= s <= color_range.upper[1]
        and color_range.lower[2] <= v <= color_range.upper[2]
    )


@pytest.fixture
def in_raw_bounds():
    """Fixture providing a range check computed from literal HSV bounds."""
    return _in_raw_bounds
