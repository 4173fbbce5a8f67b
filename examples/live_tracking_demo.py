"""Example script for live color tracking.

This script starts the webcam pipeline and runs a stand-in control loop that
polls the latest target count and position while the frames are processed.
"""

import argparse
import logging
import sys
import threading
import time
from pathlib import Path

import cv2

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.hardware.webcam import Webcam
from src.utils.config_loader import DEFAULT_CONFIG_PATH
from src.utils.logging_config import setup_logging
from src.vision.annotation import display_frame

# Setup logging
setup_logging(log_level=logging.INFO)
logger = logging.getLogger(__name__)


def control_loop(webcam: Webcam, stop: threading.Event, period: float = 0.5) -> None:
    """Poll the pipeline the way a robot control loop would.

    Args:
        webcam: Webcam to read results from
        stop: Event set when the demo is shutting down
        period: Seconds between polls
    """
    while not stop.is_set():
        result = webcam.get_frame_result()
        logger.info(f"Targets: {result.count}, position: {result.position}")
        stop.wait(period)


def main() -> None:
    """Main function for live tracking demo."""
    parser = argparse.ArgumentParser(description="Live color tracking demo")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH)
    parser.add_argument(
        "--color",
        action="append",
        default=[],
        help="Target color to enable (repeatable), e.g. --color green",
    )
    parser.add_argument("--fps", type=float, default=None)
    args = parser.parse_args()

    logger.info("Starting live tracking demo")

    webcam = Webcam.from_config(args.config)
    for color in args.color or ["green"]:
        webcam.add_target_color(color)
    logger.info(f"Tracking colors: {sorted(c.name for c in webcam.get_target_colors())}")

    stop = threading.Event()
    poller = threading.Thread(target=control_loop, args=(webcam, stop), daemon=True)

    try:
        webcam.start(target_fps=args.fps)
        poller.start()

        # Press 'q' to quit
        logger.info("Press 'q' to quit")
        while True:
            frame = webcam.processor.latest_frame()
            if frame is not None:
                display_frame(frame, webcam.get_frame_result(), "Live Color Tracking")
            if cv2.waitKey(30) & 0xFF == ord("q"):
                logger.info("Quit key pressed")
                break
            time.sleep(0.01)

    except KeyboardInterrupt:
        logger.info("Demo interrupted by user")
    except RuntimeError as e:
        logger.error(f"Error in demo: {e}", exc_info=True)
    finally:
        stop.set()
        webcam.stop()
        cv2.destroyAllWindows()
        logger.info("Demo finished")


if __name__ == "__main__":
    main()
