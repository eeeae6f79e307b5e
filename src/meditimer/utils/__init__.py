from .time_utils import format_time, now, parse_duration, time_components

__all__ = [
    "format_time",
    "now",
    "parse_duration",
    "time_components",
]
