from .run_state import TimerRunState
from .template import TemplateList, TimerTemplate

__all__ = ["TemplateList", "TimerRunState", "TimerTemplate"]
