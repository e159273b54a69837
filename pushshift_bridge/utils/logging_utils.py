"""Logging setup for the bridge process."""

import logging
import logging.config
from pathlib import Path
from typing import Optional, Union

import yaml

from ..config.settings import get_settings

PACKAGE_LOGGER = "pushshift_bridge"
FALLBACK_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _load_config(config_path: Path) -> dict:
    with open(config_path, "rt", encoding="utf-8") as f:
        log_config = yaml.safe_load(f)
    if not isinstance(log_config, dict):
        raise ValueError("logging config must be a mapping")
    return log_config


def setup_logging(config_path: Optional[Union[str, Path]] = None, debug: Optional[bool] = None) -> bool:
    """
    Configure logging for the bridge.

    The YAML document at ``config_path`` (``LOGGING_CONFIG_PATH`` by default)
    is applied with ``dictConfig``. A missing or broken file leaves a plain
    stderr handler in place instead. With ``debug`` (``DEBUG`` by default)
    the package logger is lowered to DEBUG on top of whatever the file says.

    Returns:
        True if the YAML config was applied, False if the fallback was used.
    """
    settings = get_settings()
    path = Path(config_path or settings.LOGGING_CONFIG_PATH)
    debug = settings.DEBUG if debug is None else debug

    applied = False
    reason = f"not found at {path}"
    if path.exists():
        try:
            logging.config.dictConfig(_load_config(path))
            applied = True
        except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
            reason = f"could not be loaded from {path}: {e}"

    if not applied:
        logging.basicConfig(level=logging.INFO, format=FALLBACK_FORMAT)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if debug:
        package_logger.setLevel(logging.DEBUG)

    if applied:
        package_logger.info(f"Logging configured from {path}")
    else:
        package_logger.warning(f"Logging config {reason}; using basicConfig")
    return applied
