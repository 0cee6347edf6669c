"""Small thread-coordination demos: futures, counters, call-once and hand-off."""

from __future__ import annotations

import argparse
import threading
import time
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Optional

Emit = Callable[[str], None]


def compute_sum(start: int, end: int) -> int:
    """Return the sum of the integers from ``start`` to ``end`` inclusive."""
    return sum(range(start, end + 1))


def process_data(ident: int, delay: float = 0.5, emit: Emit = print) -> None:
    """Pretend to work on ``ident`` for ``delay`` seconds, then report."""
    time.sleep(delay)
    emit(f"Processed data for ID {ident} in thread ID: {threading.get_ident()}")


def _sum_and_report(start: int, end: int, emit: Emit) -> int:
    total = compute_sum(start, end)
    emit(f"Computed sum from {start} to {end} in thread ID: {threading.get_ident()}")
    return total


def async_demo(emit: Emit = print) -> int:
    """Run a sum and a slow job on worker threads; return the sum."""
    with ThreadPoolExecutor(max_workers=2) as pool:
        total_future = pool.submit(_sum_and_report, 1, 1000, emit)
        data_future = pool.submit(process_data, 42, 0.5, emit)
        emit(f"Main thread ID: {threading.get_ident()}")
        total = total_future.result()
        emit(f"Sum result: {total}")
        data_future.result()
    return total


class Counter:
    """An integer counter that may be incremented from many threads."""

    def __init__(self, start: int = 0) -> None:
        self._lock = threading.Lock()
        self._value = start

    def increment(self) -> int:
        """Add one and return the new value."""
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


def run_counter_threads(threads: int = 3, per_thread: int = 5, emit: Emit = print) -> int:
    """Let ``threads`` workers each bump a shared counter ``per_thread`` times."""
    if threads < 0 or per_thread < 0:
        raise ValueError("threads and per_thread must not be negative")
    counter = Counter()

    def work(ident: int) -> None:
        for _ in range(per_thread):
            emit(f"Thread {ident}: Counter = {counter.increment()}")

    workers = [threading.Thread(target=work, args=(i,)) for i in range(1, threads + 1)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    final = counter.value
    emit(f"Final Counter: {final}")
    return final


class OnceFlag:
    """Runs a callable at most once, however many threads ask."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    def call(self, func: Callable[..., Any], *args: Any) -> bool:
        """Run ``func(*args)`` unless it has already completed; report whether it ran.

        If ``func`` raises, the flag stays unset and a later call tries again.
        """
        if self._done:
            return False
        with self._lock:
            if self._done:
                return False
            func(*args)
            self._done = True
            return True


def handoff(value: int = 42, emit: Emit = print) -> int:
    """Pass ``value`` from a producer thread to a waiting consumer thread."""
    cond = threading.Condition()
    items: deque[int] = deque()

    def produce() -> None:
        with cond:
            items.append(value)
            cond.notify()

    def consume() -> int:
        with cond:
            cond.wait_for(lambda: bool(items))
            item = items.popleft()
        emit(f"Consumed: {item}")
        return item

    with ThreadPoolExecutor(max_workers=2) as pool:
        consumed = pool.submit(consume)
        pool.submit(produce).result()
        return consumed.result()


def _once_demo(emit: Emit) -> None:
    flag = OnceFlag()
    workers = [
        threading.Thread(target=flag.call, args=(emit, f"Initialized once: {ident}"))
        for ident in (1, 2)
    ]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()


_DEMOS = ("async", "atomic", "mutex", "once", "handoff")


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="threadlab-basics", description="Threading basics")
    parser.add_argument("demo", nargs="?", choices=(*_DEMOS, "all"), default="all")
    args = parser.parse_args(argv)
    chosen = _DEMOS if args.demo == "all" else (args.demo,)
    for demo in chosen:
        if demo == "async":
            async_demo()
        elif demo == "atomic":
            run_counter_threads(3, 5)
        elif demo == "mutex":
            run_counter_threads(2, 1000)
        elif demo == "once":
            _once_demo(print)
        else:
            handoff(42)
    return 0