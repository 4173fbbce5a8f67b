"""State shared between the frame producer and the control loop."""

import logging
import threading
from typing import FrozenSet, Iterable, Union

from src.vision.color_ranges import ColorLabel
from src.vision.position_estimation import FrameResult

logger = logging.getLogger(__name__)


class PipelineState:
    """Target colors and the latest frame result behind one lock.

    The frame thread snapshots the target colors once per frame and swaps in
    a new immutable FrameResult; the control loop adds or clears colors and
    reads the result. The lock is only held to copy or swap references.
    """

    def __init__(self, target_colors: Iterable[Union[ColorLabel, str]] = ()):
        self._lock = threading.Lock()
        self._target_colors = {ColorLabel.parse(label) for label in target_colors}
        self._result = FrameResult()

    def add_color(self, label: Union[ColorLabel, str]) -> None:
        """Enable a target color. Adding an enabled color does nothing.

        Raises:
            ValueError: If the label is unknown
        """
        color = ColorLabel.parse(label)
        with self._lock:
            self._target_colors.add(color)

    def clear_colors(self) -> None:
        """Disable all target colors."""
        with self._lock:
            self._target_colors.clear()

    def get_colors(self) -> FrozenSet[ColorLabel]:
        """Point-in-time snapshot of the target colors."""
        with self._lock:
            return frozenset(self._target_colors)

    def get_result(self) -> FrameResult:
        """Latest published result."""
        with self._lock:
            return self._result

    def publish(self, result: FrameResult) -> None:
        """Replace the published result."""
        with self._lock:
            self._result = result
        logger.debug(f"Published {result}")
