import re
import time
from datetime import datetime, timedelta

import pytest

from threadlab import timefmt


def test_format_time_naive_datetime():
    moment = datetime(2024, 1, 2, 3, 4, 5, 678000)
    assert timefmt.format_time(moment) == "2024-01-02 03:04:05.678"


def test_format_time_epoch_matches_datetime():
    stamp = 1_700_000_000.25
    assert timefmt.format_time(stamp) == timefmt.format_time(datetime.fromtimestamp(stamp))


def test_format_time_shape_and_milliseconds_padded():
    text = timefmt.format_time(datetime(2020, 5, 6, 7, 8, 9, 5000))
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3}", text)
    assert text.endswith(".005")


def test_format_duration_components():
    span = timedelta(hours=1, minutes=2, seconds=3, milliseconds=4)
    assert timefmt.format_duration(span) == "1:02:03.004"


def test_format_duration_accepts_seconds():
    span = timedelta(hours=5, seconds=7, milliseconds=250)
    assert timefmt.format_duration(span.total_seconds()) == timefmt.format_duration(span)


def test_format_duration_zero():
    assert timefmt.format_duration(timedelta(0)) == "0:00:00.000"


def test_format_duration_negative_is_signed():
    span = timedelta(minutes=3, seconds=1)
    assert timefmt.format_duration(-span) == "-" + timefmt.format_duration(span)


def test_format_duration_hours_not_wrapped():
    text = timefmt.format_duration(timedelta(hours=30))
    assert text.startswith("30:")


def test_duration_between_round_trip():
    start = time.monotonic()
    end = start + 2.5
    assert timefmt.duration_between(start, end) == timedelta(seconds=2.5)
    assert timefmt.duration_between(end, start) == -timedelta(seconds=2.5)


def test_monotonic_to_wall_is_close_to_now():
    wall = timefmt.monotonic_to_wall(time.monotonic())
    assert abs((wall - datetime.now()).total_seconds()) < 1.0


def test_monotonic_to_wall_preserves_offsets():
    base = time.monotonic()
    later = timefmt.monotonic_to_wall(base + 60)
    now = timefmt.monotonic_to_wall(base)
    assert abs((later - now).total_seconds() - 60) < 0.5


def test_format_monotonic_is_current_wall_time():
    text = timefmt.format_monotonic(time.monotonic())
    parsed = datetime.strptime(text, "%Y-%m-%d %H:%M:%S")
    assert abs((parsed - datetime.now()).total_seconds()) < 2.0


def test_current_time_year():
    assert timefmt.current_time("%Y") == str(datetime.now().year)


def test_current_time_empty_format_rejected():
    with pytest.raises(ValueError):
        timefmt.current_time("")


def test_current_time_too_long_rejected():
    with pytest.raises(ValueError):
        timefmt.current_time("x" * 80)


def test_sleep_until_waits():
    target = time.monotonic() + 0.05
    timefmt.sleep_until(target)
    assert time.monotonic() >= target


def test_sleep_until_past_returns_immediately():
    before = time.monotonic()
    timefmt.sleep_until(before - 10)
    assert time.monotonic() - before < 0.5