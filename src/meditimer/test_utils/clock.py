from whenever import Instant, TimeDelta

DEFAULT_START = Instant.from_utc(2030, 1, 1, 6, 0, 0)


class FakeClock:
    """Manually advanced clock, callable like `Instant.now`."""

    def __init__(self, start: Instant = DEFAULT_START) -> None:
        self.current = start

    def __call__(self) -> Instant:
        return self.current

    def advance(self, seconds: float) -> Instant:
        """Move the clock forward by `seconds` and return the new time."""
        self.current = self.current + TimeDelta(seconds=seconds)
        return self.current
