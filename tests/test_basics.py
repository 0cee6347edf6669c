import threading

import pytest

from threadlab.basics import (
    Counter,
    OnceFlag,
    async_demo,
    compute_sum,
    handoff,
    process_data,
    run_counter_threads,
)


def test_compute_sum_of_first_thousand():
    assert compute_sum(1, 1000) == 500500


def test_compute_sum_single_and_empty_range():
    assert compute_sum(3, 3) == 3
    assert compute_sum(5, 4) == 0


def test_compute_sum_is_additive_over_split_ranges():
    assert compute_sum(1, 10) + compute_sum(11, 20) == compute_sum(1, 20)


def test_process_data_reports_id():
    lines = []
    process_data(42, 0.0, lines.append)
    assert len(lines) == 1
    assert lines[0].startswith("Processed data for ID 42 in thread ID: ")


def test_async_demo_returns_sum_and_reports():
    lines = []
    total = async_demo(lines.append)
    assert total == compute_sum(1, 1000)
    assert f"Sum result: {total}" in lines
    assert any(line.startswith("Main thread ID: ") for line in lines)
    assert any(line.startswith("Computed sum from 1 to 1000") for line in lines)


def test_counter_increment_returns_new_value():
    counter = Counter(10)
    assert counter.increment() == 11
    assert counter.value == 11


def test_counter_threads_reach_total():
    lines = []
    final = run_counter_threads(4, 250, lines.append)
    assert final == 4 * 250
    assert lines[-1] == f"Final Counter: {final}"


def test_counter_threads_emit_every_value_once():
    lines = []
    run_counter_threads(3, 5, lines.append)
    values = sorted(int(line.rsplit("= ", 1)[1]) for line in lines[:-1])
    assert values == list(range(1, 3 * 5 + 1))


def test_counter_threads_reject_negative():
    with pytest.raises(ValueError):
        run_counter_threads(-1, 5, lambda _: None)


def test_once_flag_runs_once_across_threads():
    flag = OnceFlag()
    calls = []
    results = []

    def worker(ident):
        results.append(flag.call(calls.append, ident))

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(calls) == 1
    assert results.count(True) == 1
    assert flag.done is True


def test_once_flag_retries_after_exception():
    flag = OnceFlag()

    def boom():
        raise RuntimeError("fail")

    with pytest.raises(RuntimeError):
        flag.call(boom)
    assert flag.done is False
    calls = []
    assert flag.call(calls.append, 1) is True
    assert calls == [1]
    assert flag.call(calls.append, 2) is False
    assert calls == [1]


def test_handoff_delivers_value():
    lines = []
    assert handoff(7, lines.append) == 7
    assert lines == ["Consumed: 7"]