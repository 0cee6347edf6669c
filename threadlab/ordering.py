"""Ordering threads: alternating output, staged execution and a traffic light."""

from __future__ import annotations

import argparse
import functools
import random
import threading
import time
from typing import Callable, Optional

Emit = Callable[[str], None]
Action = Callable[[], None]


def _writer(word: str) -> Action:
    return functools.partial(print, word, end="", flush=True)


class FooBar:
    """Makes a ``foo`` thread and a ``bar`` thread alternate ``n`` times, foo first."""

    def __init__(self, n: int) -> None:
        if n < 0:
            raise ValueError("n must not be negative")
        self.n = n
        self._cond = threading.Condition()
        self._foo_turn = True

    def foo(self, print_foo: Action = _writer("foo")) -> None:
        for _ in range(self.n):
            with self._cond:
                self._cond.wait_for(lambda: self._foo_turn)
                print_foo()
                self._foo_turn = False
                self._cond.notify_all()

    def bar(self, print_bar: Action = _writer("bar")) -> None:
        for _ in range(self.n):
            with self._cond:
                self._cond.wait_for(lambda: not self._foo_turn)
                print_bar()
                self._foo_turn = True
                self._cond.notify_all()


class Foo:
    """Forces ``first``, ``second`` and ``third`` to run in that order."""

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._step = 0

    def first(self, print_first: Action = _writer("first")) -> None:
        with self._cond:
            print_first()
            self._step = 1
            self._cond.notify_all()

    def second(self, print_second: Action = _writer("second")) -> None:
        with self._cond:
            self._cond.wait_for(lambda: self._step >= 1)
            print_second()
            self._step = 2
            self._cond.notify_all()

    def third(self, print_third: Action = _writer("third")) -> None:
        with self._cond:
            self._cond.wait_for(lambda: self._step >= 2)
            print_third()


class TrafficLight:
    """A light over roads 1 and 2; road 1 starts green."""

    def __init__(self, emit: Emit = print) -> None:
        self._lock = threading.Lock()
        self._green_road = 1
        self._emit = emit

    @property
    def green_road(self) -> int:
        with self._lock:
            return self._green_road

    def car_arrived(
        self,
        car_id: int,
        road_id: int,
        direction: int,
        turn_green: Action,
        go_through: Action,
    ) -> bool:
        """Let a car pass, switching the light first if needed; report whether it switched."""
        if road_id not in (1, 2):
            raise ValueError(f"unknown road {road_id}")
        with self._lock:
            switched = road_id != self._green_road
            if switched:
                turn_green()
                self._green_road = road_id
                self._emit(f"Traffic light switched to green for Road {road_id} for car {car_id}")
            else:
                self._emit(f"Road {road_id} already green for car {car_id}")
            go_through()
            self._emit(f"Car {car_id} passed through intersection")
        return switched


def _run_all(threads: list[threading.Thread]) -> None:
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()


def _foobar_demo(n: int) -> None:
    foobar = FooBar(n)
    _run_all([threading.Thread(target=foobar.foo), threading.Thread(target=foobar.bar)])
    print()


def _print_first_demo() -> None:
    foo = Foo()
    stages = [("first", foo.first), ("second", foo.second), ("third", foo.third)]
    random.shuffle(stages)
    print("Shuffled thread start order: " + "".join(f"{name} " for name, _ in stages))
    _run_all([threading.Thread(target=stage) for _, stage in stages])
    print()


def _traffic_demo() -> None:
    light = TrafficLight()
    turn_green = functools.partial(print, "Traffic light turned green")
    go_through = functools.partial(print, "Car is passing through")

    road_names = {1: "A", 2: "B"}
    cars = []
    for car_id, road_id in ((1, 1), (2, 2), (3, 1)):
        def arrive(car_id: int = car_id, road_id: int = road_id) -> None:
            print(f"Car {car_id} arriving on Road {road_names[road_id]}")
            light.car_arrived(car_id, road_id, 1, turn_green, go_through)

        car = threading.Thread(target=arrive)
        car.start()
        cars.append(car)
        if car_id != 3:
            time.sleep(0.1)
    for car in cars:
        car.join()
    print("All cars have passed")


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="threadlab-ordering", description="Thread ordering demos")
    parser.add_argument("demo", nargs="?", choices=("foobar", "first", "traffic", "all"),
                        default="all")
    parser.add_argument("-n", type=int, default=4, help="foobar repetitions")
    args = parser.parse_args(argv)
    if args.demo in ("foobar", "all"):
        _foobar_demo(args.n)
    if args.demo in ("first", "all"):
        _print_first_demo()
    if args.demo in ("traffic", "all"):
        _traffic_demo()
    return 0