"""Configuration file loading.

This module reads YAML configuration files into plain dictionaries.
"""

from pathlib import Path
from typing import Union

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "configs" / "vision_config.yaml"


def load_config(config_path: Union[str, Path] = DEFAULT_CONFIG_PATH) -> dict:
    """Load a YAML configuration file.

    Args:
        config_path: Path to the YAML file

    Returns:
        Configuration dictionary (empty for an empty file)

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file does not contain a mapping
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(
            f"Config file must contain a mapping, got {type(config).__name__}: "
            f"{config_path}"
        )

    return config
