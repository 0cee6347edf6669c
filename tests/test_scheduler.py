import threading
import time

import pytest

from threadlab.scheduler import Scheduler, Task, main


def _noop(task_id):
    pass


def _wait_for(predicate, timeout=3.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


def test_task_orders_by_deadline_first():
    early = Task(1, 1, 100, 10, _noop, next_deadline=100.0)
    late = Task(2, 9, 100, 10, _noop, next_deadline=200.0)
    assert sorted([late, early]) == [early, late]


def test_task_same_deadline_prefers_higher_priority():
    low = Task(1, 1, 100, 10, _noop, next_deadline=50.0)
    high = Task(2, 3, 100, 10, _noop, next_deadline=50.0)
    assert sorted([low, high]) == [high, low]


def test_task_period_in_seconds():
    task = Task(4, 1, 1500, 250, _noop)
    assert task.period == pytest.approx(1500 / 1000)
    assert task.execution_time == pytest.approx(250 / 1000)


def test_task_run_passes_its_id():
    seen = []
    Task(11, 1, 100, 10, seen.append).run()
    assert seen == [11]


def test_scheduler_runs_task_repeatedly():
    lines = []
    calls = []
    scheduler = Scheduler(emit=lines.append)
    scheduler.add_task(7, 1, 30, 1, calls.append)
    scheduler.start()
    try:
        assert _wait_for(lambda: len(calls) >= 2)
    finally:
        scheduler.stop()
    assert set(calls) == {7}
    assert any(line.startswith("Scheduler started at") for line in lines)
    assert any(line.startswith("Scheduler stopped at") for line in lines)
    assert any(line.startswith("Created task 7: Priority=1, Period=30ms, ExecTime=1ms") for line in lines)


def test_earliest_deadline_runs_first():
    calls = []
    scheduler = Scheduler(emit=lambda line: None)
    scheduler.add_task(1, 5, 1000, 1, calls.append)
    scheduler.add_task(2, 1, 50, 1, calls.append)
    scheduler.start()
    try:
        assert _wait_for(lambda: len(calls) >= 1)
    finally:
        scheduler.stop()
    assert calls[0] == 2


def test_missed_deadline_is_reported():
    lines = []
    scheduler = Scheduler(emit=lines.append)
    scheduler.add_task(3, 1, 20, 60, _noop)
    scheduler.start()
    try:
        _wait_for(lambda: any("missed deadline" in line for line in lines))
    finally:
        scheduler.stop()
    missed = [line for line in lines if " missed deadline at " in line]
    assert len(missed) >= 1
    assert missed[0].split(" missed deadline at ")[0] == "Task 3"


def test_stop_without_start_emits_nothing():
    lines = []
    scheduler = Scheduler(emit=lines.append)
    scheduler.stop()
    assert lines == []
    assert scheduler.running is False


def test_start_twice_starts_once():
    lines = []
    scheduler = Scheduler(emit=lines.append)
    scheduler.start()
    scheduler.start()
    scheduler.stop()
    started = [line for line in lines if line.startswith("Scheduler started")]
    assert len(started) == 1


def test_context_manager_stops_scheduler():
    lines = []
    with Scheduler(emit=lines.append) as scheduler:
        scheduler.start()
        assert scheduler.running is True
    assert scheduler.running is False
    assert lines[-1].startswith("Scheduler stopped at")


def test_empty_scheduler_wakes_for_new_task():
    calls = []
    lines = []
    event = threading.Event()

    def work(task_id):
        calls.append(task_id)
        event.set()

    scheduler = Scheduler(emit=lines.append)
    scheduler.start()
    try:
        scheduler.add_task(9, 1, 1000, 1, work)
        event.wait(2.0)
    finally:
        scheduler.stop()
    assert calls[:1] == [9]
    created = [line for line in lines if line.startswith("Created task 9")]
    assert created[0].split(" at ")[0] == "Created task 9: Priority=1, Period=1000ms, ExecTime=1ms"
    assert scheduler.running is False


def test_main_rejects_bad_duration():
    with pytest.raises(SystemExit):
        main(["--duration", "later"])