"""Logging configuration for the project.

This module sets up consistent logging across all modules. Per-frame
messages from the vision pipeline are logged at DEBUG so they can be kept
quiet separately from lifecycle messages.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    log_dir: Optional[Path] = None,
    log_level: int = logging.INFO,
    pipeline_log_level: Optional[int] = None,
    log_file_name: str = "color_tracking.log",
) -> None:
    """Configure logging for the project.

    Args:
        log_dir: Optional directory to save log files
        log_level: Logging level (default: INFO)
        pipeline_log_level: Optional separate level for the per-frame
            vision loggers
        log_file_name: Name of the log file inside log_dir
    """
    handlers = [logging.StreamHandler()]
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / log_file_name))

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )

    if pipeline_log_level is not None:
        for name in ("src.vision.pipeline", "src.vision.pipeline_state"):
            logging.getLogger(name).setLevel(pipeline_log_level)
