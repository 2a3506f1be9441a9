import threading

import pytest

from app.services.countdown import (
    CountdownTimer,
    TimerDriver,
    TimerState,
    TimerStateError,
    next_session_type,
)


def collect(timer):
    events = []
    timer.subscribe(events.append)
    return events


def test_defaults_per_session_type():
    assert CountdownTimer("focus").duration == 1500
    assert CountdownTimer("break").duration == 300
    assert CountdownTimer("long_break").duration == 900


def test_runs_to_zero_and_completes_once():
    timer = CountdownTimer("focus", 5)
    events = collect(timer)
    timer.start()
    for _ in range(5):
        timer.tick()

    assert timer.remaining == 0
    assert timer.state == TimerState.COMPLETED
    assert [e.kind for e in events].count("complete") == 1

    # Extra ticks after completion do nothing
    timer.tick()
    timer.tick()
    assert timer.remaining == 0
    assert [e.kind for e in events].count("complete") == 1


def test_ticks_ignored_unless_running():
    timer = CountdownTimer("break", 10)
    timer.tick()
    assert timer.remaining == 10

    timer.start()
    timer.tick()
    timer.pause()
    timer.tick()
    timer.tick()
    assert timer.remaining == 9
    assert timer.state == TimerState.PAUSED

    timer.resume()
    timer.tick()
    assert timer.remaining == 8
    assert timer.elapsed == 2


def test_remaining_never_negative():
    timer = CountdownTimer("focus", 1)
    timer.start()
    for _ in range(3):
        timer.tick()
    assert timer.remaining == 0


def test_invalid_transitions_raise():
    timer = CountdownTimer("focus", 3)
    with pytest.raises(TimerStateError):
        timer.pause()
    with pytest.raises(TimerStateError):
        timer.resume()

    timer.start()
    with pytest.raises(TimerStateError):
        timer.start()
    with pytest.raises(TimerStateError):
        timer.resume()


def test_reset_restores_full_duration():
    timer = CountdownTimer("focus", 4)
    timer.start()
    timer.tick()
    timer.reset()
    assert timer.state == TimerState.IDLE
    assert timer.remaining == 4


def test_completed_timer_can_restart():
    timer = CountdownTimer("break", 2)
    events = collect(timer)
    timer.start()
    timer.tick()
    timer.tick()
    timer.start()
    assert timer.state == TimerState.RUNNING
    assert timer.remaining == 2
    timer.tick()
    timer.tick()
    assert [e.kind for e in events].count("complete") == 2


def test_switch_loads_new_session_type():
    timer = CountdownTimer("focus", 5)
    timer.start()
    timer.tick()
    timer.switch("long_break")
    assert timer.state == TimerState.IDLE
    assert timer.session_type == "long_break"
    assert timer.remaining == 900


def test_invalid_session_and_duration_rejected():
    with pytest.raises(ValueError):
        CountdownTimer("nap")
    with pytest.raises(ValueError):
        CountdownTimer("focus", 0)


def test_unsubscribe_stops_events():
    timer = CountdownTimer("focus", 3)
    events = []
    unsubscribe = timer.subscribe(events.append)
    timer.start()
    timer.tick()
    unsubscribe()
    timer.tick()
    assert len(events) == 1


@pytest.mark.parametrize("completed, done, expected", [
    ("focus", 1, "break"),
    ("focus", 3, "break"),
    ("focus", 4, "long_break"),
    ("focus", 8, "long_break"),
    ("break", 1, "focus"),
    ("long_break", 4, "focus"),
])
def test_next_session_type(completed, done, expected):
    assert next_session_type(completed, done) == expected


def test_driver_ticks_until_complete():
    timer = CountdownTimer("focus", 3)
    finished = threading.Event()
    timer.subscribe(lambda e: finished.set() if e.kind == "complete" else None)

    driver = TimerDriver(timer, interval=0.01)
    timer.start()
    driver.start()
    assert finished.wait(timeout=5)
    driver.stop(timeout=1)

    assert timer.state == TimerState.COMPLETED
    assert not driver.is_alive


def test_driver_stop_freezes_timer():
    timer = CountdownTimer("focus", 1000)
    driver = TimerDriver(timer, interval=0.01)
    timer.start()
    driver.start()
    driver.stop(timeout=1)
    remaining = timer.remaining
    assert not driver.is_alive
    assert timer.remaining == remaining
    assert remaining > 0
