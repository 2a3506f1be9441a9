#!/usr/bin/env python3
"""
Console Pomodoro timer built on the same countdown engine the app uses.

Runs focus and break sessions back to back, printing the remaining time.
Run from project root:
  python scripts/focus_timer.py
  python scripts/focus_timer.py --focus 1500 --break 300 --cycles 4
"""

from __future__ import annotations

import argparse
import sys
import threading
from pathlib import Path

# Run from project root; ensure app is importable
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from app.core.defaults import (
    DEFAULT_BREAK_DURATION,
    DEFAULT_LONG_BREAK_DURATION,
    DEFAULT_SESSION_DURATION,
    DEFAULT_SESSIONS_UNTIL_LONG_BREAK,
)
from app.services.countdown import CountdownTimer, TimerDriver, TimerEvent, next_session_type


def format_remaining(seconds: int) -> str:
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"


def run_session(timer: CountdownTimer, interval: float) -> None:
    """Block until the loaded session completes."""
    done = threading.Event()

    def on_event(event: TimerEvent) -> None:
        if event.kind == "tick":
            print(f"\r[{event.session_type}] {format_remaining(event.remaining)}", end="", flush=True)
        elif event.kind == "complete":
            print(f"\r[{event.session_type}] done   ")
            done.set()

    unsubscribe = timer.subscribe(on_event)
    driver = TimerDriver(timer, interval=interval)
    try:
        timer.start()
        driver.start()
        done.wait()
    finally:
        driver.stop()
        unsubscribe()


def main() -> None:
    parser = argparse.ArgumentParser(description="Run Pomodoro cycles in the terminal.")
    parser.add_argument("--focus", type=int, default=DEFAULT_SESSION_DURATION, help="Focus length in seconds")
    parser.add_argument("--break", dest="break_", type=int, default=DEFAULT_BREAK_DURATION, help="Break length in seconds")
    parser.add_argument("--long-break", type=int, default=DEFAULT_LONG_BREAK_DURATION, help="Long break length in seconds")
    parser.add_argument("--cycles", type=int, default=DEFAULT_SESSIONS_UNTIL_LONG_BREAK, help="Focus sessions to run")
    parser.add_argument("--interval", type=float, default=1.0, help="Seconds per tick (lower it to fast-forward)")
    args = parser.parse_args()

    durations = {"focus": args.focus, "break": args.break_, "long_break": args.long_break}
    timer = CountdownTimer("focus", durations["focus"])
    focus_done = 0

    try:
        while focus_done < args.cycles:
            run_session(timer, args.interval)
            completed = timer.session_type
            if completed == "focus":
                focus_done += 1
                if focus_done == args.cycles:
                    break
            following = next_session_type(completed, focus_done)
            timer.switch(following, durations[following])
    except KeyboardInterrupt:
        print("\nStopped.")
        return

    print(f"\nCompleted {focus_done} focus session(s).")


if __name__ == "__main__":
    main()
