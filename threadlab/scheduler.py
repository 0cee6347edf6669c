"""A periodic earliest-deadline-first task scheduler running on its own thread."""

from __future__ import annotations

import argparse
import heapq
import itertools
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from threadlab.timefmt import format_time

Emit = Callable[[str], None]
Work = Callable[[int], None]


@dataclass(eq=False)
class Task:
    """A periodic job; ``next_deadline`` is wall-clock seconds since the epoch."""

    task_id: int
    priority: int
    period_ms: int
    exec_time_ms: int
    work: Work
    next_deadline: float = field(default_factory=time.time)

    @property
    def period(self) -> float:
        return self.period_ms / 1000.0

    @property
    def execution_time(self) -> float:
        return self.exec_time_ms / 1000.0

    def __lt__(self, other: Task) -> bool:
        # Earlier deadline first; on equal deadlines higher priority first.
        return (self.next_deadline, -self.priority) < (other.next_deadline, -other.priority)

    def run(self) -> None:
        self.work(self.task_id)


class Scheduler:
    """Runs registered periodic tasks, earliest deadline first, until stopped."""

    def __init__(self, emit: Emit = print) -> None:
        self._emit = emit
        self._tasks: list[Task] = []
        self._ready: list[tuple[float, int, int, Task]] = []
        self._order = itertools.count()
        self._cond = threading.Condition()
        self._running = False
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        with self._cond:
            return self._running

    def add_task(
        self, task_id: int, priority: int, period_ms: int, exec_time_ms: int, work: Work
    ) -> Task:
        with self._cond:
            task = Task(task_id, priority, period_ms, exec_time_ms, work)
            self._emit(
                f"Created task {task_id}: Priority={priority}, Period={period_ms}ms, "
                f"ExecTime={exec_time_ms}ms at {format_time(time.time())}"
            )
            self._tasks.append(task)
            self._cond.notify()
            self._emit(f"Added task {task_id} to scheduler at {format_time(time.time())}")
        return task

    def start(self) -> None:
        with self._cond:
            if self._running:
                return
            self._running = True
            self._thread = threading.Thread(target=self._loop, daemon=True)
            self._thread.start()
            self._emit(f"Scheduler started at {format_time(time.time())}")

    def stop(self) -> None:
        with self._cond:
            self._running = False
            self._cond.notify()
        thread, self._thread = self._thread, None
        if thread is not None:
            thread.join()
            self._emit(f"Scheduler stopped at {format_time(time.time())}")

    def __enter__(self) -> Scheduler:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def _loop(self) -> None:
        while True:
            with self._cond:
                if not self._running:
                    break
                now = time.time()
                for task in self._tasks:
                    if task.next_deadline <= now:
                        self._emit(f"Task {task.task_id} ready at {format_time(now)}")
                        task.next_deadline += task.period
                        heapq.heappush(
                            self._ready,
                            (task.next_deadline, -task.priority, next(self._order), task),
                        )
                if self._ready:
                    task = heapq.heappop(self._ready)[-1]
                else:
                    task = None
                    if self._tasks:
                        nearest = min(t.next_deadline for t in self._tasks)
                        self._cond.wait_for(
                            lambda: not self._running or bool(self._ready),
                            timeout=max(0.0, nearest - time.time()),
                        )
                    else:
                        self._cond.wait_for(lambda: not self._running or bool(self._tasks))
            if task is not None:
                self._execute(task)

    def _execute(self, task: Task) -> None:
        self._emit(f"Executing task {task.task_id} at {format_time(time.time())}")
        task.run()
        time.sleep(task.execution_time)
        finished = time.time()
        if finished > task.next_deadline:
            self._emit(f"Task {task.task_id} missed deadline at {format_time(finished)}")
        else:
            self._emit(f"Task {task.task_id} completed at {format_time(finished)}")


def _sensor_reading(task_id: int) -> None:
    print(f"Task {task_id}: Reading sensor data at {format_time(time.time())}")


def _control_loop(task_id: int) -> None:
    print(f"Task {task_id}: Executing control loop at {format_time(time.time())}")


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="threadlab-scheduler", description="EDF scheduler demo")
    parser.add_argument("--duration", type=float, default=10.0, help="seconds to run")
    args = parser.parse_args(argv)
    with Scheduler() as scheduler:
        scheduler.add_task(1, 2, 1000, 200, _sensor_reading)
        scheduler.add_task(2, 1, 2000, 300, _control_loop)
        scheduler.add_task(3, 3, 500, 100, _sensor_reading)
        scheduler.start()
        time.sleep(args.duration)
    return 0