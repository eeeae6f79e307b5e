import logging
import os
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import cast

import platformdirs
from packaging.version import Version

from meditimer.logging_ import LOG_LEVELS

PACKAGE_KEY = "meditimer"

try:
    VERSION = Version(version(PACKAGE_KEY))
except PackageNotFoundError:
    # running from a source checkout that was never installed
    VERSION = Version("0.0.0")


def get_log_level() -> LOG_LEVELS:
    log_level = (
        os.getenv("MEDITIMER__LOG_LEVEL") or os.getenv("MEDITIMER_LOG_LEVEL") or os.getenv("LOG_LEVEL") or "INFO"
    ).upper()
    if log_level not in list(LOG_LEVELS.__args__):
        logging.getLogger(__name__).warning("Log level %r is not valid, defaulting to INFO", log_level)
        log_level = "INFO"
    return cast("LOG_LEVELS", log_level)


def get_dev_mode():
    """Check if developer mode should be enabled.

    Returns:
        True if developer mode is enabled, False otherwise.
    """
    logger = logging.getLogger(__name__)
    if "debugpy" in sys.modules:
        logger.warning("Developer mode enabled via 'debugpy'")
        return True

    if sys.flags.dev_mode:
        logger.warning("Developer mode enabled via 'python -X dev'")
        return True

    return False


def default_data_dir() -> Path:
    """Return the first found data directory based on environment variables or defaults.

    Will return the first of:
    - MEDITIMER__DATA_DIR environment variable
    - MEDITIMER_DATA_DIR environment variable
    - platformdirs user data path

    """

    if env := os.getenv("MEDITIMER__DATA_DIR", os.getenv("MEDITIMER_DATA_DIR")):
        return Path(env)
    return platformdirs.user_data_path(PACKAGE_KEY, version=f"v{VERSION.major}")


def default_sounds_dir() -> Path:
    """Sound assets live in a `sounds` folder under the data directory unless configured."""
    return default_data_dir() / "sounds"


def log_level_default_factory(data: dict[str, LOG_LEVELS | None]) -> LOG_LEVELS:
    """Default factory for per-component log level fields."""
    return data.get("log_level") or get_log_level()
