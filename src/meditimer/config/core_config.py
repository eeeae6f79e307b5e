import logging
from pathlib import Path
from typing import Annotated, Any

from pydantic import BeforeValidator, Field, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from meditimer.enums import NotificationStrategy
from meditimer.logging_ import LOG_LEVELS, enable_logging

from .defaults import get_default_dict
from .helpers import (
    VERSION,
    default_data_dir,
    default_sounds_dir,
    get_dev_mode,
    get_log_level,
    log_level_default_factory,
)

LOGGER = logging.getLogger(__name__)


class MeditimerConfig(BaseSettings):
    """Configuration for meditimer."""

    model_config = SettingsConfigDict(
        env_prefix="meditimer__",
        env_file=[".env", "./config/.env"],
        toml_file=["meditimer.toml", "./config/meditimer.toml"],
        env_ignore_empty=True,
        extra="ignore",
        env_nested_delimiter="__",
        validate_by_name=True,
        use_attribute_docstrings=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type["BaseSettings"],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources = (
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
            TomlConfigSettingsSource(settings_cls),
        )
        return sources

    dev_mode: bool = Field(default_factory=get_dev_mode)
    """Enable developer mode, which uses shorter tick intervals and longer shutdown timeouts."""

    # General configuration
    log_level: Annotated[LOG_LEVELS, BeforeValidator(str.upper)] = Field(default_factory=get_log_level)
    """Logging level for meditimer."""

    data_dir: Path = Field(default_factory=default_data_dir)
    """Directory to store the template database in."""

    sounds_dir: Path = Field(default_factory=default_sounds_dir)
    """Directory containing the alarm sound assets."""

    # Template store

    store_filename: str = Field(default="meditimer.db")
    """Name of the SQLite key-value file inside data_dir."""

    templates_key: str = Field(default="TimerTemplates")
    """Key the serialized template collection is stored under."""

    # Engine and ticker

    tick_interval_seconds: float = Field(default=1.0, gt=0)
    """Interval between countdown recomputations while a timer is running."""

    fade_tick_interval_seconds: float = Field(default=0.05, gt=0)
    """Interval between recomputations while an alarm volume is ramping up."""

    idle_tick_interval_seconds: float = Field(default=5.0, gt=0)
    """Interval the ticker sleeps for when nothing is running."""

    ticker_shutdown_timeout_seconds: float = Field(default=5, gt=0)
    """Length of time to wait for the ticker to exit before cancelling it."""

    exclusive_timers: bool = Field(default=True)
    """Whether starting a timer stops every other running timer."""

    notification_strategy: NotificationStrategy = Field(default=NotificationStrategy.SCHEDULED)
    """Whether to schedule completion notifications or operate silently."""

    notification_title: str = Field(default="Meditation Complete")
    """Title of the completion notification."""

    notification_body: str = Field(default="Your {name} meditation is complete!")
    """Body of the completion notification, `{name}` is replaced by the template name."""

    # Component log levels

    engine_log_level: Annotated[LOG_LEVELS, BeforeValidator(str.upper)] = Field(
        default_factory=log_level_default_factory
    )
    """Logging level for the timer engine. Defaults to the value of log_level."""

    store_log_level: Annotated[LOG_LEVELS, BeforeValidator(str.upper)] = Field(
        default_factory=log_level_default_factory
    )
    """Logging level for the template store. Defaults to the value of log_level."""

    ticker_log_level: Annotated[LOG_LEVELS, BeforeValidator(str.upper)] = Field(
        default_factory=log_level_default_factory
    )
    """Logging level for the ticker. Defaults to the value of log_level."""

    gateway_log_level: Annotated[LOG_LEVELS, BeforeValidator(str.upper)] = Field(
        default_factory=log_level_default_factory
    )
    """Logging level for the audio and notification gateways. Defaults to the value of log_level."""

    @property
    def store_path(self) -> Path:
        """Full path of the template database."""
        return self.data_dir / self.store_filename

    @model_validator(mode="before")
    @classmethod
    def apply_profile_defaults(cls, data: Any) -> Any:
        """Fill unset timing values from the dev profile when running in developer mode.

        The field defaults already match the prod profile.
        """
        if not isinstance(data, dict):
            return data

        dev = data.get("dev_mode")
        if dev is None:
            field = cls.model_fields["dev_mode"]
            dev = field.default_factory() if field.default_factory else field.default  # pyright: ignore[reportCallIssue]

        if not dev:
            return data

        for key, value in get_default_dict(dev=True).items():
            data.setdefault(key, value)

        return data

    @model_validator(mode="after")
    def validate_meditimer_config(self) -> "MeditimerConfig":
        self.data_dir = self.data_dir.resolve()
        self.sounds_dir = self.sounds_dir.resolve()

        if self.fade_tick_interval_seconds > self.tick_interval_seconds:
            LOGGER.warning(
                "fade_tick_interval_seconds (%s) is larger than tick_interval_seconds (%s)",
                self.fade_tick_interval_seconds,
                self.tick_interval_seconds,
            )

        return self

    def model_post_init(self, context: Any):
        enable_logging(self.log_level)

        LOGGER.info("meditimer version: %s", VERSION)
        LOGGER.debug("meditimer configuration: %s", self.model_dump_json(indent=4))

        self.data_dir.mkdir(parents=True, exist_ok=True)

    def reload(self):
        """Reload the configuration from all sources."""
        self.__init__()  # type: ignore
