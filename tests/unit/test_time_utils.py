import pytest
from whenever import Instant

from meditimer.utils.time_utils import format_time, parse_duration, seconds_between, shift, time_components


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (0, "00:00"),
        (5, "00:05"),
        (65, "01:05"),
        (599.9, "09:59"),
        (3599, "59:59"),
        (3600, "01:00:00"),
        (3723, "01:02:03"),
        (-4, "00:00"),
    ],
)
def test_format_time(seconds: float, expected: str) -> None:
    assert format_time(seconds) == expected


def test_time_components() -> None:
    assert time_components(3723.8) == (1, 2, 3)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (90, 90.0),
        (12.5, 12.5),
        ("90", 90.0),
        ("2.5", 2.5),
        (" 25:00 ", 1500.0),
        ("1:30:00", 5400.0),
        ("0:05", 5.0),
    ],
)
def test_parse_duration(value: str | float, expected: float) -> None:
    assert parse_duration(value) == expected


@pytest.mark.parametrize("value", ["", "abc", "1:2:3:4", "10:75", "1:60:00", "-5", -5])
def test_parse_duration_rejects_invalid(value: str | int) -> None:
    with pytest.raises(ValueError):
        parse_duration(value)


def test_shift_and_seconds_between() -> None:
    start = Instant.from_utc(2030, 1, 1, 6, 0, 0)
    later = shift(start, 90.5)

    assert seconds_between(later, start) == pytest.approx(90.5)
    assert seconds_between(start, later) == pytest.approx(-90.5)
    assert shift(later, -90.5) == start


def test_seconds_between_keeps_fractions() -> None:
    start = Instant.from_utc(2030, 1, 1, 6, 0, 0)
    later = start.add(milliseconds=250)

    assert seconds_between(later, start) == pytest.approx(0.25)
    assert seconds_between(start, start) == 0
