import logging
import sys
import threading
from contextlib import suppress
from typing import Literal

import coloredlogs

FORMAT_DATE = "%Y-%m-%d"
FORMAT_TIME = "%H:%M:%S"
FORMAT_DATETIME = f"{FORMAT_DATE} {FORMAT_TIME}"
FMT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s.%(funcName)s:%(lineno)d ─ %(message)s"

LOG_LEVELS = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def enable_logging(log_level: LOG_LEVELS) -> None:
    """Set up the logging"""

    logger = logging.getLogger("meditimer")

    logger.setLevel(log_level)

    # don't propagate to root - if someone wants to do a basicConfig on root we don't want
    # our logs going there too.
    logger.propagate = False

    logger.handlers.clear()

    # the handler stays at NOTSET and the logger itself is clamped, so per-component
    # loggers can go lower than the package level
    coloredlogs.install(level=logging.NOTSET, logger=logger, fmt=FMT, datefmt=FORMAT_DATETIME)

    # coloredlogs.install resets the logger to WARNING
    logger.setLevel(log_level)

    # coloredlogs also installs a handler on the root logger
    with suppress(IndexError):
        logging.getLogger().handlers.pop(0)

    logging.captureWarnings(True)

    sys.excepthook = lambda *args: logging.getLogger("meditimer").exception("Uncaught exception", exc_info=args)
    threading.excepthook = lambda args: logging.getLogger("meditimer").exception(
        "Uncaught thread exception",
        exc_info=(args.exc_type, args.exc_value, args.exc_traceback),  # pyright: ignore[reportArgumentType]
    )
