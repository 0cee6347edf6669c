"""A simulated plant driven by a time-based PID while a delayed sensor observes it."""

from __future__ import annotations

import argparse
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

Emit = Callable[[str], None]


@dataclass
class TimedPID:
    """PID controller whose integral and derivative use a fixed time step ``dt``."""

    kp: float
    ki: float
    kd: float
    dt: float
    integral: float = 0.0
    previous_error: float = 0.0

    def __post_init__(self) -> None:
        if self.dt <= 0:
            raise ValueError("dt must be positive")

    def compute(self, error: float) -> float:
        self.integral += error * self.dt
        derivative = (error - self.previous_error) / self.dt
        output = self.kp * error + self.ki * self.integral + self.kd * derivative
        self.previous_error = error
        return output


class Plant:
    """The true plant state and a delayed sensor copy of it, guarded by one lock."""

    def __init__(self, initial: float = 1.0) -> None:
        self._lock = threading.Lock()
        self._plant_state = initial
        self._sensor_value = initial

    @property
    def plant_state(self) -> float:
        with self._lock:
            return self._plant_state

    @property
    def sensor_value(self) -> float:
        with self._lock:
            return self._sensor_value

    def control_step(
        self, pid: TimedPID, setpoint: float = 0.0, dt: float = 0.01
    ) -> tuple[float, float, float]:
        """Drive the plant by one step from the last sensor reading.

        Returns the sensed value, the controller output and the new plant state.
        """
        with self._lock:
            sensed = self._sensor_value
        output = pid.compute(setpoint - sensed)
        with self._lock:
            self._plant_state += output * dt
            state = self._plant_state
        return sensed, output, state

    def sensor_loop(
        self, stop: threading.Event, delay: float = 0.5, emit: Emit = print
    ) -> None:
        """Copy the plant state into the sensor value, ``delay`` seconds late."""
        ident = threading.get_ident()
        while not stop.is_set():
            with self._lock:
                observed = self._plant_state
            if stop.wait(delay):
                break
            with self._lock:
                self._sensor_value = observed
            emit(f"Sensor thread {ident}: Updated sensor_value to {observed:f}")

    def controller_loop(
        self,
        pid: TimedPID,
        stop: threading.Event,
        period: float = 0.01,
        emit: Emit = print,
    ) -> None:
        """Step the plant towards zero every ``period`` seconds until ``stop`` is set."""
        ident = threading.get_ident()
        while not stop.is_set():
            sensed, output, state = self.control_step(pid, 0.0, period)
            emit(
                f"Controller thread {ident}: sensor_value = {sensed:f}, "
                f"output = {output:f}, plant_state = {state:f}"
            )
            stop.wait(period)


def run(duration: float = 5.0, emit: Emit = print) -> Plant:
    """Run the sensor and controller threads for ``duration`` seconds; return the plant."""
    plant = Plant()
    pid = TimedPID(1.0, 0.1, 0.01, 0.01)
    stop = threading.Event()
    workers = [
        threading.Thread(target=plant.sensor_loop, args=(stop, 0.5, emit)),
        threading.Thread(target=plant.controller_loop, args=(pid, stop, 0.01, emit)),
    ]
    for worker in workers:
        worker.start()
    time.sleep(duration)
    stop.set()
    for worker in workers:
        worker.join()
    return plant


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="threadlab-plant", description="Plant control demo")
    parser.add_argument("--duration", type=float, default=5.0, help="seconds to run")
    args = parser.parse_args(argv)
    run(duration=args.duration)
    return 0