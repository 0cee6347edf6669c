"""A bounded FIFO buffer shared by a producer thread and a consumer thread."""

from __future__ import annotations

import argparse
import threading
import time
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional

Emit = Callable[[str], None]


class BoundedBuffer:
    """A blocking FIFO of at most ``capacity`` items that can be closed."""

    def __init__(self, capacity: int = 10) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._items: deque[int] = deque()
        self._lock = threading.Lock()
        self._not_empty = threading.Condition(self._lock)
        self._not_full = threading.Condition(self._lock)
        self._closed = False

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def put(self, item: int) -> int:
        """Append ``item``, waiting for room; return the size afterwards.

        Raises ValueError if the buffer is closed.
        """
        with self._not_full:
            self._not_full.wait_for(lambda: len(self._items) < self.capacity or self._closed)
            if self._closed:
                raise ValueError("buffer is closed")
            self._items.append(item)
            size = len(self._items)
            self._not_empty.notify()
        return size

    def _take(self) -> tuple[int, int]:
        with self._not_empty:
            self._not_empty.wait_for(lambda: bool(self._items) or self._closed)
            if not self._items:
                raise EOFError("buffer is closed and empty")
            item = self._items.popleft()
            size = len(self._items)
            self._not_full.notify()
        return item, size

    def get(self) -> int:
        """Remove and return the oldest item, waiting for one.

        Raises EOFError once the buffer is closed and drained.
        """
        return self._take()[0]

    def close(self) -> None:
        """Refuse further items and wake every waiting thread."""
        with self._lock:
            self._closed = True
            self._not_empty.notify_all()
            self._not_full.notify_all()


def producer(
    buffer: BoundedBuffer, count: int = 50, delay: float = 0.1, emit: Emit = print
) -> int:
    """Put items 1..``count`` into ``buffer``; return how many went in."""
    ident = threading.get_ident()
    produced = 0
    for item in range(1, count + 1):
        try:
            size = buffer.put(item)
        except ValueError:
            break
        produced += 1
        emit(f"Prod thread {ident}: item: {item}, buf_size: {size}")
        if delay > 0:
            time.sleep(delay)
    return produced


def consumer(
    buffer: BoundedBuffer, count: int = 50, delay: float = 0.14, emit: Emit = print
) -> list[int]:
    """Take up to ``count`` items from ``buffer``; return them in order taken."""
    ident = threading.get_ident()
    taken: list[int] = []
    while len(taken) < count:
        try:
            item, size = buffer._take()
        except EOFError:
            break
        taken.append(item)
        emit(f"Cons thread {ident}: item: {item}, buf_size: {size}")
        if delay > 0:
            time.sleep(delay)
    return taken


def run(
    count: int = 50,
    capacity: int = 10,
    produce_delay: float = 0.1,
    consume_delay: float = 0.14,
    emit: Emit = print,
) -> tuple[int, int]:
    """Run one producer and one consumer to completion; return both counts."""
    if count < 0:
        raise ValueError("count must not be negative")
    buffer = BoundedBuffer(capacity)
    with ThreadPoolExecutor(max_workers=2) as pool:
        made = pool.submit(producer, buffer, count, produce_delay, emit)
        taken = pool.submit(consumer, buffer, count, consume_delay, emit)
        produced = made.result()
        consumed = len(taken.result())
    buffer.close()
    emit(f"Final: Produced {produced} items, Consumed {consumed} items")
    return produced, consumed


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="threadlab-buffer", description="Bounded buffer demo")
    parser.add_argument("--count", type=int, default=50, help="items to pass through")
    parser.add_argument("--capacity", type=int, default=10, help="buffer capacity")
    args = parser.parse_args(argv)
    run(count=args.count, capacity=args.capacity)
    return 0