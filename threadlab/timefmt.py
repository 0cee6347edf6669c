"""Wall-clock and monotonic time helpers: formatting, conversion and sleeping."""

from __future__ import annotations

import time
from datetime import datetime, timedelta
from typing import Union

TimeLike = Union[datetime, float, int]
DurationLike = Union[timedelta, float, int]

_MAX_FORMATTED = 63
_MS = timedelta(milliseconds=1)


def _as_local_datetime(when: TimeLike) -> datetime:
    if isinstance(when, datetime):
        return when.astimezone() if when.tzinfo is not None else when
    return datetime.fromtimestamp(when)


def _checked(text: str, what: str) -> str:
    if not text or len(text) > _MAX_FORMATTED:
        raise ValueError(f"cannot format {what}")
    return text


def format_time(when: TimeLike) -> str:
    """Format a wall-clock time as ``YYYY-MM-DD HH:MM:SS.mmm`` in local time.

    ``when`` is a datetime (naive values are taken as local time) or seconds
    since the epoch.
    """
    moment = _as_local_datetime(when)
    return f"{moment:%Y-%m-%d %H:%M:%S}.{moment.microsecond // 1000:03d}"


def monotonic_to_wall(tp: float) -> datetime:
    """Map a ``time.monotonic()`` reading onto the local wall clock."""
    now_wall = time.time()
    now_mono = time.monotonic()
    return datetime.fromtimestamp(now_wall + (tp - now_mono))


def format_monotonic(tp: float) -> str:
    """Format a ``time.monotonic()`` reading as ``YYYY-MM-DD HH:MM:SS``."""
    return _checked(monotonic_to_wall(tp).strftime("%Y-%m-%d %H:%M:%S"), "time")


def format_duration(duration: DurationLike) -> str:
    """Format a duration as ``H:MM:SS.mmm``; negative values get a leading ``-``."""
    if not isinstance(duration, timedelta):
        duration = timedelta(seconds=duration)
    sign = "-" if duration < timedelta(0) else ""
    total_ms = abs(duration) // _MS
    hours, rest = divmod(total_ms, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    seconds, millis = divmod(rest, 1000)
    return f"{sign}{hours}:{minutes:02d}:{seconds:02d}.{millis:03d}"


def duration_between(start: float, end: float) -> timedelta:
    """Return the time elapsed from ``start`` to ``end`` (monotonic readings)."""
    return timedelta(seconds=end - start)


def current_time(fmt: str) -> str:
    """Format the current local time with a ``strftime`` pattern.

    Raises ValueError when the result is empty or too long.
    """
    return _checked(datetime.now().strftime(fmt), "current time")


def sleep_until(tp: float) -> None:
    """Block until ``time.monotonic()`` reaches ``tp``."""
    remaining = tp - time.monotonic()
    if remaining > 0:
        time.sleep(remaining)