"""Tests for configuration loading."""

import logging

import pytest

from src.utils.config_loader import DEFAULT_CONFIG_PATH, load_config
from src.utils.logging_config import setup_logging


def test_load_default_config():
    """Test the bundled config has a vision section."""
    config = load_config(DEFAULT_CONFIG_PATH)

    vision = config["vision"]
    assert vision["selection"] == "first"
    assert vision["color_order"] == "bgr"
    assert vision["annotation"]["thickness"] == 2


def test_load_missing_config(tmp_path):
    """Test a missing file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_load_empty_config(tmp_path):
    """Test an empty file loads as an empty dict."""
    config_file = tmp_path / "empty.yaml"
    config_file.write_text("")

    assert load_config(config_file) == {}


def test_load_non_mapping_config(tmp_path):
    """Test a non-mapping document raises ValueError."""
    config_file = tmp_path / "list.yaml"
    config_file.write_text("- red\n- green\n")

    with pytest.raises(ValueError):
        load_config(config_file)


def test_setup_logging_creates_log_dir(tmp_path):
    """Test logging setup creates the log directory and file."""
    log_dir = tmp_path / "logs"

    setup_logging(
        log_dir=log_dir,
        log_level=logging.INFO,
        pipeline_log_level=logging.WARNING,
    )
    try:
        logging.getLogger("src.test").info("hello")

        assert (log_dir / "color_tracking.log").exists()
        assert logging.getLogger("src.vision.pipeline").level == logging.WARNING
    finally:
        root = logging.getLogger()
        for handler in list(root.handlers):
            if isinstance(handler, logging.FileHandler):
                root.removeHandler(handler)
                handler.close()
        logging.getLogger("src.vision.pipeline").setLevel(logging.NOTSET)
        logging.getLogger("src.vision.pipeline_state").setLevel(logging.NOTSET)
