"""Largest free gap in an event after rescheduling up to ``k`` meetings."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from typing import Optional


def _check(start_time: Sequence[int], end_time: Sequence[int]) -> None:
    if len(start_time) != len(end_time):
        raise ValueError("start_time and end_time must have the same length")


def _largest_gap(
    event_time: int,
    start_time: Sequence[int],
    end_time: Sequence[int],
    starts: Sequence[int],
) -> int:
    """Largest gap when meeting ``i`` is shifted to begin at ``starts[i]``."""
    best = 0
    prev_end = 0
    for original, finish, moved in zip(start_time, end_time, starts):
        best = max(best, moved - prev_end)
        prev_end = finish - (original - moved)
    return max(best, event_time - prev_end)


def max_free_time(
    event_time: int, k: int, start_time: Sequence[int], end_time: Sequence[int]
) -> int:
    """Greedy search: slide runs of up to ``k`` meetings fully left or fully right."""
    _check(start_time, end_time)
    n = len(start_time)
    best = _largest_gap(event_time, start_time, end_time, start_time)

    for first in range(n):
        moves = k
        starts = list(start_time)
        valid = True
        i = first
        while i < n and moves > 0:
            earliest = 0 if i == 0 else end_time[i - 1] - (start_time[i - 1] - starts[i - 1])
            if starts[i] > earliest:
                starts[i] = earliest
                moves -= 1
            if i > 0 and starts[i] < end_time[i - 1] - (start_time[i - 1] - starts[i - 1]):
                valid = False
                break
            i += 1
        if valid:
            best = max(best, _largest_gap(event_time, start_time, end_time, starts))

    for last in range(n - 1, -1, -1):
        moves = k
        starts = list(start_time)
        valid = True
        i = last
        while i >= 0 and moves > 0:
            duration = end_time[i] - start_time[i]
            latest = event_time - duration if i == n - 1 else starts[i + 1] - duration
            if starts[i] < latest:
                starts[i] = latest
                moves -= 1
            if i < n - 1 and starts[i] + duration > starts[i + 1]:
                valid = False
                break
            i -= 1
        if valid:
            best = max(best, _largest_gap(event_time, start_time, end_time, starts))

    return best


def max_free_time_exhaustive(
    event_time: int, k: int, start_time: Sequence[int], end_time: Sequence[int]
) -> int:
    """Backtracking search over every choice of up to ``k`` single-meeting moves."""
    _check(start_time, end_time)
    meetings = sorted(zip(start_time, end_time))
    n = len(meetings)
    originals = [s for s, _ in meetings]
    finishes = [e for _, e in meetings]
    best = _largest_gap(event_time, originals, finishes, originals)
    starts = list(originals)

    def moved_end(i: int) -> int:
        return finishes[i] - (originals[i] - starts[i])

    def search(pos: int, moves_left: int) -> None:
        nonlocal best
        if moves_left == 0 or pos >= n:
            best = max(best, _largest_gap(event_time, originals, finishes, starts))
            return

        search(pos + 1, moves_left)

        earliest = 0 if pos == 0 else moved_end(pos - 1)
        duration = finishes[pos] - originals[pos]
        if starts[pos] > earliest:
            saved = starts[pos]
            starts[pos] = earliest
            search(pos + 1, moves_left - 1)
            starts[pos] = saved

        next_start = event_time - duration if pos == n - 1 else starts[pos + 1]
        latest = next_start - duration
        if starts[pos] < latest:
            saved = starts[pos]
            starts[pos] = latest
            search(pos + 1, moves_left - 1)
            starts[pos] = saved

    search(0, k)
    return best


_EXAMPLES = [
    (5, 1, [1, 3], [2, 5]),
    (10, 1, [0, 2, 9], [1, 4, 10]),
    (5, 2, [0, 1, 2, 3, 4], [1, 2, 3, 4, 5]),
    (64, 2, [29, 49], [37, 54]),
]

_LARGE_EXAMPLE = (
    887,
    24,
    [61, 69, 71, 72, 99, 101, 103, 159, 374, 376, 406, 426, 449, 450, 453, 714, 770,
     772, 778, 804, 811, 864, 866, 883, 884],
    [68, 70, 72, 88, 101, 103, 135, 342, 376, 398, 417, 449, 450, 452, 705, 768, 772,
     777, 803, 806, 863, 865, 883, 884, 886],
)


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="threadlab-meetings", description="Maximum free time after rescheduling"
    )
    parser.parse_args(argv)
    for number, example in enumerate(_EXAMPLES, start=1):
        print(f"Example {number}")
        print(f"Example {number} Output: {max_free_time(*example)}")
    print(f"Output: {max_free_time(*_LARGE_EXAMPLE)}")
    return 0