# threadlab

A set of small, self-contained concurrency exercises built on the standard
`threading` module. It has no third-party dependencies. Each module can be
used as a library and also has a command that runs a short demonstration and
prints what the threads do.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Commands

| Command               | What it shows                                                         |
|-----------------------|-----------------------------------------------------------------------|
| `threadlab-pid`       | A slow random sensor and a 2 Hz PID control loop sharing one reading  |
| `threadlab-plant`     | A PID controller driving a simulated plant through a delayed sensor   |
| `threadlab-scheduler` | An earliest-deadline-first periodic task scheduler                    |
| `threadlab-meetings`  | Maximum free time after rescheduling up to *k* meetings (examples)    |
| `threadlab-basics`    | Futures, lock-protected counters, run-once, condition hand-off        |
| `threadlab-ordering`  | Alternating foo/bar, first/second/third ordering, a traffic light     |
| `threadlab-buffer`    | A producer and a consumer around a bounded buffer                     |
| `threadlab-fusion`    | Several sensor threads feeding a fusion thread that averages readings |

Options:

- `threadlab-pid [--duration SECONDS] [--setpoint VALUE] [--benchmark ITERATIONS]`
  (defaults 10 s and 5.0; `--benchmark` runs the threaded benchmark and prints
  its elapsed time instead of the demo)
- `threadlab-plant [--duration SECONDS]` (default 5 s)
- `threadlab-scheduler [--duration SECONDS]` (default 10 s)
- `threadlab-meetings` prints the results of a fixed set of examples
- `threadlab-basics [async|atomic|mutex|once|handoff|all]` (default `all`)
- `threadlab-ordering [foobar|first|traffic|all] [-n N]` (default `all`, `-n 4`)
- `threadlab-buffer [--count N] [--capacity N]` (defaults 50 and 10)
- `threadlab-fusion [--duration SECONDS]` (default 2 s)

The timed demos stop on their own once their duration has passed.

## Library use

Most functions that report progress take an `emit` callable (default `print`)
that receives each line of output, so the output can be captured or silenced.

### Timing helpers — `threadlab.timefmt`

- `format_time(when)` — a datetime or epoch seconds as local
  `YYYY-MM-DD HH:MM:SS.mmm`.
- `monotonic_to_wall(tp)` — maps a `time.monotonic()` reading to a local
  `datetime`; `format_monotonic(tp)` renders it as `YYYY-MM-DD HH:MM:SS`.
- `format_duration(duration)` — a `timedelta` or seconds as `H:MM:SS.mmm`,
  with a leading `-` for negative values.
- `duration_between(start, end)` — a `timedelta` between two monotonic readings.
- `current_time(fmt)` — the current local time through a `strftime` pattern;
  raises `ValueError` if the result is empty or longer than 63 characters.
- `sleep_until(tp)` — blocks until `time.monotonic()` reaches `tp`.

### PID control — `threadlab.pid`

`PIDController(kp, ki, kd).compute(setpoint, measurement)` returns the output
for one step; the integral and derivative are per step, with no time base.
`SensorChannel` holds the latest reading and its monotonic `timestamp` behind
a lock (`write(value)`, `read()`). `sensor_loop` and `control_loop` are the two
thread bodies, stopped by a `threading.Event`; `run_demo(...)` runs both for a
given duration and returns the controller. `benchmark(iterations)` runs a
writer thread and a PID reader thread concurrently over `iterations` steps
and returns the elapsed seconds and the controller; negative `iterations`
raise `ValueError`.

### Plant simulation — `threadlab.plant`

`TimedPID(kp, ki, kd, dt).compute(error)` scales its integral and derivative
by the time step `dt` (which must be positive). `Plant` keeps a true
`plant_state` and a delayed `sensor_value`, both starting at 1.0.
`Plant.control_step(pid, setpoint, dt)` moves the plant one step from the last
sensor reading and returns `(sensed, output, new_state)`.
`Plant.sensor_loop` and `Plant.controller_loop` are the thread bodies, and
`run(duration, emit)` drives both and returns the plant.

### Scheduling — `threadlab.scheduler`

```python
from threadlab.scheduler import Scheduler

with Scheduler() as scheduler:
    scheduler.add_task(1, 2, 1000, 200, lambda task_id: print("sensor", task_id))
    scheduler.add_task(2, 1, 2000, 300, lambda task_id: print("control", task_id))
    scheduler.start()
    # ... let it run ...
# leaving the block calls scheduler.stop()
```

`add_task(task_id, priority, period_ms, exec_time_ms, work)` returns the
`Task`; `work` is called with the task id, and the task then sleeps for its
execution time. Ready tasks run earliest deadline first; among equal
deadlines the higher priority wins. A task that finishes after its next
deadline is reported as having missed it.

### Meeting rescheduling — `threadlab.meetings`

```python
from threadlab.meetings import max_free_time

max_free_time(5, 1, [1, 3], [2, 5])   # 2
```

`max_free_time` slides runs of up to *k* meetings fully left or fully right
and returns the largest free gap it finds. `max_free_time_exhaustive`
backtracks over every choice of up to *k* single-meeting moves. Both raise
`ValueError` when the start and end lists differ in length.

### Thread basics — `threadlab.basics`

```python
from threadlab.basics import compute_sum

compute_sum(1, 1000)   # 500500
```

- `async_demo(emit)` runs a sum and a slow job (`process_data`) on a thread
  pool and returns the sum.
- `Counter.increment()` is a lock-protected counter returning the new value;
  `run_counter_threads(threads, per_thread, emit)` drives several threads over
  one counter and returns the final count.
- `OnceFlag.call(func, *args)` runs `func` only the first time and reports
  whether it ran; if `func` raises, a later call tries again.
- `handoff(value, emit)` passes one value from a producer thread to a waiting
  consumer through a condition variable and returns it.

### Ordering — `threadlab.ordering`

- `FooBar(n)`: `foo` and `bar` alternate strictly `n` times, starting with foo.
- `Foo`: `first`, `second` and `third` run in that order whatever order the
  threads start in.
- `TrafficLight.car_arrived(car_id, road_id, direction, turn_green, go_through)`
  calls `turn_green` only when the car is on the red road (road 1 starts
  green), then `go_through`, and returns whether the light switched. Roads
  other than 1 and 2 raise `ValueError`.

Each action defaults to writing its own word to standard output.

### Bounded buffer — `threadlab.buffer`

`BoundedBuffer(capacity)`: `put` blocks while full and returns the new size,
`get` blocks while empty, and `close` wakes everyone waiting. After closing,
`put` raises `ValueError` and `get` raises `EOFError` once the buffer is
drained. `producer`, `consumer` and `run(count, capacity, produce_delay,
consume_delay, emit)` build the two-thread pipeline on top of it; `run`
returns the produced and consumed counts.

### Sensor fusion — `threadlab.fusion`

`SensorFusion` collects `SensorReading`s from any number of sensor threads
(`sensor_thread(name, id, period)`); `fuse()` averages the buffered readings
into a `StateEstimate`, clears the buffer and returns the estimate (or `None`
when nothing was buffered), and `state()` returns the latest estimate.
Readings come from a random value in 0–100 unless a `source` callable is
given. `stop()` ends all loops.

## Limits

These are demonstrations: the sensors are simulated, nothing is stored
between runs, and all output goes to standard output or the `emit` callable.