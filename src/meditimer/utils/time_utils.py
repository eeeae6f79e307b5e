import re

from whenever import Instant, TimeDelta

_COLON_DURATION_RE = re.compile(r"^(?:(\d+):)?(\d{1,2}):(\d{1,2})$")
_SECONDS_ONLY_RE = re.compile(r"^\d+(?:\.\d+)?$")


def now() -> Instant:
    """Get the current time as a timezone independent Instant."""
    return Instant.now()


def seconds_between(later: Instant, earlier: Instant) -> float:
    """Return `later - earlier` in (fractional) seconds, negative if `later` is before `earlier`."""
    return (later - earlier).in_seconds()


def shift(instant: Instant, seconds: float) -> Instant:
    """Return `instant` moved by `seconds`, which may be negative."""
    return instant + TimeDelta(seconds=seconds)


def time_components(seconds: float) -> tuple[int, int, int]:
    """Split a duration into whole hours, minutes and seconds.

    Fractions of a second are truncated.
    """
    total = int(max(seconds, 0))
    return total // 3600, total // 60 % 60, total % 60


def format_time(seconds: float) -> str:
    """Format a duration for display.

    Returns `HH:MM:SS` when the duration is at least one hour, `MM:SS` otherwise.

    Examples:
        >>> format_time(65)
        '01:05'
        >>> format_time(3723)
        '01:02:03'
    """
    hours, minutes, secs = time_components(seconds)
    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def parse_duration(value: str | float | int) -> float:
    """Parse a user supplied duration into seconds.

    Accepts a number of seconds (`"90"`), `MM:SS` (`"25:00"`) or `HH:MM:SS` (`"1:30:00"`).

    Raises:
        ValueError: If the value cannot be parsed or is negative.
    """
    if isinstance(value, int | float):
        if value < 0:
            raise ValueError(f"Duration cannot be negative: {value}")
        return float(value)

    text = value.strip()
    if _SECONDS_ONLY_RE.match(text):
        return float(text)

    match = _COLON_DURATION_RE.match(text)
    if not match:
        raise ValueError(f"Invalid duration {value!r}, expected seconds, MM:SS or HH:MM:SS")

    hours, minutes, seconds = (int(part) if part else 0 for part in match.groups())
    if seconds >= 60 or (match.group(1) and minutes >= 60):
        raise ValueError(f"Invalid duration {value!r}, minutes and seconds must be below 60")

    return float(hours * 3600 + minutes * 60 + seconds)
