from .engine import StateListener, TimerEngine
from .fade import AlarmFade
from .reconcile import progress, recompute, resume_anchor

__all__ = [
    "AlarmFade",
    "StateListener",
    "TimerEngine",
    "progress",
    "recompute",
    "resume_anchor",
]
