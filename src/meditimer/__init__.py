import logging

from .config import MeditimerConfig
from .core.core import Meditimer
from .core.ticker import Ticker
from .engine import AlarmFade, TimerEngine, recompute
from .enums import NotificationStrategy, SoundOption, TimerPhase
from .models import TimerRunState, TimerTemplate
from .store import SqliteKeyValueStore, TemplateStore

logging.getLogger("meditimer").addHandler(logging.NullHandler())

__all__ = [
    "AlarmFade",
    "Meditimer",
    "MeditimerConfig",
    "NotificationStrategy",
    "SoundOption",
    "SqliteKeyValueStore",
    "TemplateStore",
    "Ticker",
    "TimerEngine",
    "TimerPhase",
    "TimerRunState",
    "TimerTemplate",
    "recompute",
]
