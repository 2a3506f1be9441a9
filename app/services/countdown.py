"""
Pomodoro countdown timer.

CountdownTimer is a small state machine (idle -> running <-> paused ->
completed) advanced one second per tick(). Listeners subscribe for tick and
completion events; the completion event fires exactly once per run.

TimerDriver delivers ticks from a background thread so the timer keeps time
without the caller polling it. Both are plain objects: construct them where
they are needed and pass them around, there is no shared instance.
"""
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from app.core.defaults import (
    DEFAULT_SESSION_DURATION,
    DEFAULT_BREAK_DURATION,
    DEFAULT_LONG_BREAK_DURATION,
    DEFAULT_SESSIONS_UNTIL_LONG_BREAK,
    SESSION_TYPES,
)

logger = logging.getLogger(__name__)


class TimerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


class TimerStateError(RuntimeError):
    """Raised for a transition the current state does not allow."""


@dataclass(frozen=True)
class TimerEvent:
    kind: str  # "tick" or "complete"
    remaining: int
    session_type: str


TimerListener = Callable[[TimerEvent], None]


DEFAULT_DURATIONS = {
    "focus": DEFAULT_SESSION_DURATION,
    "break": DEFAULT_BREAK_DURATION,
    "long_break": DEFAULT_LONG_BREAK_DURATION,
}


def next_session_type(
    completed_type: str,
    focus_sessions_done: int,
    sessions_until_long_break: int = DEFAULT_SESSIONS_UNTIL_LONG_BREAK,
) -> str:
    """
    Session that follows `completed_type` in a Pomodoro cycle.

    `focus_sessions_done` includes the session just completed. Every
    `sessions_until_long_break`-th focus session is followed by a long break.
    """
    if completed_type not in SESSION_TYPES:
        raise ValueError(f"Unknown session type: {completed_type}")
    if completed_type != "focus":
        return "focus"
    if sessions_until_long_break > 0 and focus_sessions_done % sessions_until_long_break == 0:
        return "long_break"
    return "break"


class CountdownTimer:
    def __init__(self, session_type: str = "focus", duration: Optional[int] = None):
        self._lock = threading.RLock()
        self._listeners: List[TimerListener] = []
        self._session_type = "focus"
        self._duration = 0
        self._remaining = 0
        self._state = TimerState.IDLE
        self._load(session_type, duration)

    # -- read-only view -------------------------------------------------

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def duration(self) -> int:
        return self._duration

    @property
    def session_type(self) -> str:
        return self._session_type

    @property
    def elapsed(self) -> int:
        return self._duration - self._remaining

    # -- subscriptions --------------------------------------------------

    def subscribe(self, listener: TimerListener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # -- transitions ----------------------------------------------------

    def start(self) -> None:
        """Start from idle, or restart a completed timer with its full duration."""
        with self._lock:
            if self._state == TimerState.COMPLETED:
                self._remaining = self._duration
            elif self._state != TimerState.IDLE:
                raise TimerStateError(f"Cannot start a timer that is {self._state.value}")
            if self._remaining <= 0:
                raise TimerStateError("Cannot start a timer with no time remaining")
            self._state = TimerState.RUNNING

    def pause(self) -> None:
        with self._lock:
            if self._state != TimerState.RUNNING:
                raise TimerStateError(f"Cannot pause a timer that is {self._state.value}")
            self._state = TimerState.PAUSED

    def resume(self) -> None:
        with self._lock:
            if self._state != TimerState.PAUSED:
                raise TimerStateError(f"Cannot resume a timer that is {self._state.value}")
            self._state = TimerState.RUNNING

    def reset(self) -> None:
        """Restore the full duration of the current session type and stop."""
        with self._lock:
            self._remaining = self._duration
            self._state = TimerState.IDLE

    def switch(self, session_type: str, duration: Optional[int] = None) -> None:
        """Load a different session type; the timer returns to idle."""
        with self._lock:
            self._load(session_type, duration)

    def tick(self) -> None:
        """Advance one second. Ticks outside the running state are ignored."""
        events = []
        with self._lock:
            if self._state != TimerState.RUNNING:
                return
            self._remaining = max(0, self._remaining - 1)
            events.append(TimerEvent("tick", self._remaining, self._session_type))
            if self._remaining == 0:
                self._state = TimerState.COMPLETED
                events.append(TimerEvent("complete", 0, self._session_type))
            listeners = list(self._listeners)

        for event in events:
            if event.kind == "complete":
                logger.info("[TIMER] %s session of %ss complete", event.session_type, self._duration)
            for listener in listeners:
                listener(event)

    def _load(self, session_type: str, duration: Optional[int]) -> None:
        if session_type not in SESSION_TYPES:
            raise ValueError(f"Unknown session type: {session_type}")
        if duration is None:
            duration = DEFAULT_DURATIONS[session_type]
        if duration <= 0:
            raise ValueError("duration must be a positive number of seconds")
        self._session_type = session_type
        self._duration = int(duration)
        self._remaining = self._duration
        self._state = TimerState.IDLE


class TimerDriver:
    """Calls timer.tick() every `interval` seconds on a daemon thread."""

    def __init__(self, timer: CountdownTimer, interval: float = 1.0):
        self.timer = timer
        self.interval = interval
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_alive:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="countdown-ticker", daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop_event.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)
        self._thread = None

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval):
            self.timer.tick()
            if self.timer.state == TimerState.COMPLETED:
                break
