from typing import Any

PROD_DEFAULTS = dict(
    tick_interval_seconds=1.0,
    fade_tick_interval_seconds=0.05,
    idle_tick_interval_seconds=5.0,
    ticker_shutdown_timeout_seconds=5,
)


DEV_DEFAULTS = dict(
    tick_interval_seconds=0.5,
    fade_tick_interval_seconds=0.05,
    idle_tick_interval_seconds=1.0,
    ticker_shutdown_timeout_seconds=10,
)


def get_default_dict(dev: bool = False) -> dict[str, Any]:
    """Get the default configuration dictionary.

    Args:
        dev: Whether to use development defaults.

    Returns:
        The default configuration dictionary.
    """
    return DEV_DEFAULTS if dev else PROD_DEFAULTS
