from pathlib import Path
from typing import Any, Optional, Union

import yaml

from pet_supplies.logger import setup_logger

logger = setup_logger("config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"
PROJECT_ROOT = Path(__file__).resolve().parent.parent

REQUIRED_DATA_KEYS = ("raw_folder", "cleansed_folder", "products_key", "products_clean_key")


def load_config(path: Optional[Union[str, Path]] = None) -> dict[str, Any]:
    """
    Load pipeline settings from YAML.

    Falls back to the config.yaml shipped next to this module.
    """
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    logger.info(f"Loading config from {config_path}")

    with open(config_path) as f:
        config = yaml.safe_load(f) or {}

    data_cfg = config.get("data")
    if not data_cfg:
        raise ValueError(f"'data' section missing in {config_path}")

    missing = [key for key in REQUIRED_DATA_KEYS if not data_cfg.get(key)]
    if missing:
        raise ValueError(f"Missing data settings in {config_path}: {missing}")

    config.setdefault("chart", {})
    return config
