"""A discrete PID controller fed by a slow sensor thread through a shared channel."""

from __future__ import annotations

import argparse
import random
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

Emit = Callable[[str], None]


@dataclass
class PIDController:
    """PID controller whose integral and derivative are per-step (no time base)."""

    kp: float
    ki: float
    kd: float
    prev_error: float = 0.0
    integral: float = 0.0

    def compute(self, setpoint: float, measurement: float) -> float:
        error = setpoint - measurement
        self.integral += error
        derivative = error - self.prev_error
        self.prev_error = error
        return self.kp * error + self.ki * self.integral + self.kd * derivative


class SensorChannel:
    """Latest sensor value and the monotonic time it was written, behind a lock."""

    def __init__(self, value: float = 0.0) -> None:
        self._lock = threading.Lock()
        self._value = value
        self._timestamp = time.monotonic()

    def write(self, value: float) -> None:
        with self._lock:
            self._value = value
            self._timestamp = time.monotonic()

    def read(self) -> float:
        with self._lock:
            return self._value

    @property
    def timestamp(self) -> float:
        with self._lock:
            return self._timestamp


def _random_reading() -> float:
    return random.randrange(1000) / 100.0


def sensor_loop(
    channel: SensorChannel,
    stop: threading.Event,
    period: float = 2.0,
    source: Callable[[], float] = _random_reading,
    emit: Emit = print,
) -> None:
    """Every ``period`` seconds publish a new reading until ``stop`` is set."""
    ident = threading.get_ident()
    while not stop.is_set():
        stop.wait(period)
        value = source()
        channel.write(value)
        emit(f"[SensorThread | ID: {ident}] New sensor value: {value:.2f}")


def control_loop(
    channel: SensorChannel,
    stop: threading.Event,
    period: float = 0.5,
    setpoint: float = 5.0,
    pid: Optional[PIDController] = None,
    emit: Emit = print,
) -> None:
    """Every ``period`` seconds run the PID on the latest reading until ``stop`` is set."""
    if pid is None:
        pid = PIDController(1.0, 0.1, 0.05)
    ident = threading.get_ident()
    while not stop.is_set():
        stop.wait(period)
        measured = channel.read()
        output = pid.compute(setpoint, measured)
        emit(f"[ControlThread | ID: {ident}] Measured: {measured:.2f}, PID Output: {output:.2f}")


def run_demo(
    duration: float = 10.0,
    setpoint: float = 5.0,
    sensor_period: float = 2.0,
    control_period: float = 0.5,
    emit: Emit = print,
) -> PIDController:
    """Run sensor and control threads for ``duration`` seconds; return the controller."""
    channel = SensorChannel()
    stop = threading.Event()
    pid = PIDController(1.0, 0.1, 0.05)
    workers = [
        threading.Thread(target=sensor_loop, args=(channel, stop, sensor_period),
                         kwargs={"emit": emit}),
        threading.Thread(target=control_loop, args=(channel, stop, control_period, setpoint, pid, emit)),
    ]
    for worker in workers:
        worker.start()
    time.sleep(duration)
    stop.set()
    for worker in workers:
        worker.join()
    emit("\n[Main] Program completed. Exiting.")
    return pid


def benchmark(iterations: int = 1_000_000) -> tuple[float, PIDController]:
    """Race a writer and a PID reader over ``iterations`` steps.

    Returns the elapsed wall time in seconds and the controller afterwards.
    """
    if iterations < 0:
        raise ValueError("iterations must not be negative")
    channel = SensorChannel()
    pid = PIDController(1.0, 0.1, 0.05)

    def write_all() -> None:
        for i in range(iterations):
            channel.write(i * 0.001)

    def control_all() -> None:
        for _ in range(iterations):
            pid.compute(5.0, channel.read())

    started = time.perf_counter()
    workers = [threading.Thread(target=write_all), threading.Thread(target=control_all)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    return time.perf_counter() - started, pid


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="threadlab-pid", description="PID controller demo")
    parser.add_argument("--duration", type=float, default=10.0, help="seconds to run")
    parser.add_argument("--setpoint", type=float, default=5.0, help="control target")
    parser.add_argument("--benchmark", type=int, metavar="ITERATIONS",
                        help="run the threaded benchmark instead of the demo")
    args = parser.parse_args(argv)
    if args.benchmark is not None:
        elapsed, _ = benchmark(args.benchmark)
        print(f"{args.benchmark} iterations in {elapsed:.6f} s")
    else:
        run_demo(duration=args.duration, setpoint=args.setpoint)
    return 0