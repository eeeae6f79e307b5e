import typing
import uuid
from logging import Logger, getLogger

from meditimer.logging_ import LOG_LEVELS


class _LoggerMixin:
    """Mixin to provide logging capabilities to classes."""

    unique_id: str
    """Unique identifier for the instance."""

    logger: Logger
    """Logger for the instance."""

    unique_name: str
    """Unique name for the instance."""

    def __init__(self, unique_name_prefix: str | None = None) -> None:
        self.unique_id = uuid.uuid4().hex
        self.unique_name = f"{unique_name_prefix or type(self).__name__}.{self.unique_id[:8]}"
        self.logger = getLogger(f"meditimer.{self.unique_name}")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} unique_name={self.unique_name}>"

    def set_logger_to_level(self, level: LOG_LEVELS) -> None:
        """Set this instance's logger level independently of the package logger.

        The package handler is installed at NOTSET, so a child logger can be more verbose than its parent.
        """
        self.logger.setLevel(level)


class MeditimerBase(_LoggerMixin):
    """Base class for the long-lived components (store, engine, ticker, gateways)."""

    class_name: typing.ClassVar[str]
    """Name of the class, set on subclassing."""

    def __init_subclass__(cls) -> None:
        cls.class_name = cls.__name__

    def __init__(self, unique_name_prefix: str | None = None, log_level: LOG_LEVELS | None = None) -> None:
        """
        Args:
            unique_name_prefix: Optional prefix for the unique name. If None, the class name is used.
            log_level: Optional log level for this instance's logger.
        """
        super().__init__(unique_name_prefix=unique_name_prefix)
        if log_level:
            self.set_logger_to_level(log_level)
        self.logger.debug("Creating instance of '%s'", self.class_name)

    def __repr__(self) -> str:
        return f"<{self.class_name} unique_name={self.unique_name}>"
