"""Several sensor threads feed a buffer that a fusion thread averages into one estimate."""

from __future__ import annotations

import argparse
import random
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

Emit = Callable[[str], None]


@dataclass(frozen=True)
class SensorReading:
    """One sensor value and the ``time.monotonic_ns()`` reading when it was taken."""

    value: float
    timestamp: int


@dataclass(frozen=True)
class StateEstimate:
    """The fused value and the ``time.monotonic_ns()`` reading of its last update."""

    fused_value: float
    last_updated: int


class SensorFusion:
    """Collects readings from many sensors and averages them into a shared estimate."""

    def __init__(
        self,
        emit: Emit = print,
        source: Optional[Callable[[], float]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._emit = emit
        self._rng = rng if rng is not None else random.Random()
        self._source = source if source is not None else (lambda: self._rng.uniform(0.0, 100.0))
        self._state = StateEstimate(0.0, time.monotonic_ns())
        self._state_lock = threading.Lock()
        self._readings: list[SensorReading] = []
        self._readings_lock = threading.Lock()
        self._stop = threading.Event()

    @property
    def running(self) -> bool:
        return not self._stop.is_set()

    @property
    def pending(self) -> int:
        """Number of readings waiting to be fused."""
        with self._readings_lock:
            return len(self._readings)

    def read_sensor(self, sensor_name: str, sensor_id: int) -> SensorReading:
        """Take one reading from the named sensor."""
        reading = SensorReading(self._source(), time.monotonic_ns())
        self._emit(
            f"[DEBUG] Sensor {sensor_name} (ID: {sensor_id}) read value: "
            f"{reading.value:.2f} at time {reading.timestamp}"
        )
        return reading

    def add_reading(self, reading: SensorReading) -> int:
        """Store ``reading`` for the next fusion; return the buffer size afterwards."""
        with self._readings_lock:
            self._readings.append(reading)
            return len(self._readings)

    def fuse(self) -> Optional[StateEstimate]:
        """Average the buffered readings into the state and clear the buffer.

        Returns the new estimate, or None when there was nothing to fuse.
        """
        with self._readings_lock:
            if not self._readings:
                self._emit("[DEBUG] No sensor data to fuse")
                return None
            average = sum(r.value for r in self._readings) / len(self._readings)
            with self._state_lock:
                self._state = StateEstimate(average, time.monotonic_ns())
                estimate = self._state
            self._emit(
                f"[DEBUG] Fused state updated: value = {estimate.fused_value:.2f} "
                f"at time {estimate.last_updated}"
            )
            self._readings.clear()
        return estimate

    def sensor_thread(self, sensor_name: str, sensor_id: int, period: float = 0.1) -> None:
        """Read and store a value every ``period`` seconds until stopped."""
        while not self._stop.is_set():
            size = self.add_reading(self.read_sensor(sensor_name, sensor_id))
            self._emit(
                f"[DEBUG] Sensor {sensor_name} (ID: {sensor_id}) stored reading, "
                f"buffer size: {size}"
            )
            self._stop.wait(period)
        self._emit(f"[DEBUG] Sensor {sensor_name} (ID: {sensor_id}) thread stopped")

    def fusion_thread(self, period: float = 0.2) -> None:
        """Fuse the buffered readings every ``period`` seconds until stopped."""
        while not self._stop.is_set():
            self.fuse()
            self._stop.wait(period)
        self._emit("[DEBUG] Fusion thread stopped")

    def stop(self) -> None:
        """Ask every sensor and fusion loop to finish."""
        self._stop.set()
        self._emit("[DEBUG] Stopping all threads")

    def state(self) -> StateEstimate:
        """Return the current estimate."""
        with self._state_lock:
            return self._state


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="threadlab-fusion", description="Sensor fusion demo")
    parser.add_argument("--duration", type=float, default=2.0, help="seconds to run")
    args = parser.parse_args(argv)

    print("[DEBUG] Starting sensor fusion system")
    fusion = SensorFusion()
    threads = [
        threading.Thread(target=fusion.sensor_thread, args=(name, ident))
        for ident, name in enumerate(("IMU", "Camera", "Lidar"), start=1)
    ]
    threads.append(threading.Thread(target=fusion.fusion_thread))
    for thread in threads:
        thread.start()
    time.sleep(args.duration)
    fusion.stop()
    for thread in threads:
        thread.join()

    final = fusion.state()
    print(
        f"[DEBUG] Final fused state: value = {final.fused_value:.2f} "
        f"at time {final.last_updated}"
    )
    print("[DEBUG] System shutdown")
    return 0