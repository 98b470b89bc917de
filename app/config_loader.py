"""Configuration loading utilities."""

from pathlib import Path
from typing import Any

import yaml

from app.constants import CONFIG_DIR


def load_base_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load the base configuration from config.yaml.

    Args:
        config_path: Optional path to config file. Defaults to CONFIG_DIR / "config.yaml"

    Returns:
        Parsed configuration dictionary (empty if the file is missing)
    """
    if config_path is None:
        config_path = CONFIG_DIR / "config.yaml"

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        return {}
