"""HSV color ranges for target color matching.

This module defines the fixed table of colors the tracker can look for.
Hue follows the OpenCV 8-bit convention, [0, 180). A range whose lower hue
is negative, or greater than its upper hue, wraps across hue 0 and is split
into two ordinary intervals when the range is built.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple, Union

import numpy as np

HUE_DOMAIN = 180
HUE_MAX = HUE_DOMAIN - 1
CHANNEL_MAX = 255

HsvTuple = Tuple[int, int, int]


class ColorLabel(Enum):
    """Colors the pipeline can be asked to track."""

    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    MAGENTA = "magenta"

    @classmethod
    def parse(cls, label: Union["ColorLabel", str]) -> "ColorLabel":
        """Resolve a label or its (case-insensitive) name.

        Raises:
            ValueError: If the label is not one of the known colors
        """
        if isinstance(label, cls):
            return label
        if isinstance(label, str):
            try:
                return cls[label.strip().upper()]
            except KeyError:
                pass
        raise ValueError(f"Unknown color label: {label!r}")


@dataclass(frozen=True, eq=False)
class HsvInterval:
    """Inclusive, non-wrapping HSV bounds ready for cv2.inRange."""

    lower: np.ndarray
    upper: np.ndarray


def _split_hue(lower_hue: int, upper_hue: int) -> Tuple[Tuple[int, int], ...]:
    """Split a possibly wrapping hue range into ordinary sub-intervals."""
    if lower_hue < 0:
        lower_hue += HUE_DOMAIN
    upper_hue = min(upper_hue, HUE_MAX)

    if lower_hue <= upper_hue:
        return ((lower_hue, upper_hue),)

    # Wraps through 0: [lower, max] and [0, upper]
    return ((lower_hue, HUE_MAX), (0, upper_hue))


@dataclass(frozen=True)
class ColorRange:
    """Lower and upper HSV bounds for one color.

    Attributes:
        label: Color this range describes
        lower: Lower (h, s, v) bound; h may be negative to mark wraparound
        upper: Upper (h, s, v) bound
        intervals: Pre-split non-wrapping intervals used for matching
    """

    label: ColorLabel
    lower: HsvTuple
    upper: HsvTuple
    intervals: Tuple[HsvInterval, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for bound in (self.lower, self.upper):
            if len(bound) != 3:
                raise ValueError(f"HSV bound must have 3 components: {bound}")
            if not all(0 <= c <= CHANNEL_MAX for c in bound[1:]):
                raise ValueError(f"Saturation/value out of range: {bound}")

        intervals = tuple(
            HsvInterval(
                lower=np.array([h_low, self.lower[1], self.lower[2]], dtype=np.uint8),
                upper=np.array([h_high, self.upper[1], self.upper[2]], dtype=np.uint8),
            )
            for h_low, h_high in _split_hue(self.lower[0], self.upper[0])
        )
        object.__setattr__(self, "intervals", intervals)

    @property
    def wraps(self) -> bool:
        """Whether the hue range crosses the hue origin."""
        return len(self.intervals) > 1

    def contains(self, hsv: HsvTuple) -> bool:
        """Check a single HSV value against this range."""
        return any(
            all(
                interval.lower[i] <= hsv[i] <= interval.upper[i]
                for i in range(3)
            )
            for interval in self.intervals
        )


COLOR_RANGES: Dict[ColorLabel, ColorRange] = {
    # Red to reddish-orange
    ColorLabel.RED: ColorRange(ColorLabel.RED, (0, 70, 40), (15, 255, 255)),
    # Yellow-orange to lime-yellow
    ColorLabel.YELLOW: ColorRange(ColorLabel.YELLOW, (20, 70, 50), (33, 255, 255)),
    ColorLabel.GREEN: ColorRange(ColorLabel.GREEN, (50, 100, 100), (70, 255, 255)),
    # Teal to indigo
    ColorLabel.BLUE: ColorRange(ColorLabel.BLUE, (90, 70, 50), (125, 255, 255)),
    # Magenta through to red, wrapping across hue 0
    ColorLabel.MAGENTA: ColorRange(ColorLabel.MAGENTA, (-30, 70, 40), (5, 255, 255)),
}


def range_of(label: Union[ColorLabel, str]) -> ColorRange:
    """Look up the HSV range for a color.

    Args:
        label: ColorLabel or color name

    Returns:
        ColorRange for the color

    Raises:
        ValueError: If the label is unknown
    """
    return COLOR_RANGES[ColorLabel.parse(label)]
