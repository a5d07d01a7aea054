"""
Bounded polling with a cancellable wait between attempts.

This module provides a helper for checking a condition a fixed number of
times, pausing between checks, and giving up quietly when the condition
never becomes true.

WHY A BOUNDED POLL?
-------------------
Some external systems (print spoolers, for example) accept work and then
finish it in the background with no callback. The only way to learn that the
work is done is to ask again later. Asking forever would leave a thread
running for jobs that are stuck in a queue, so the number of attempts is
capped:
  - Attempt 1: wait, then check
  - Attempt 2: wait, then check
  - ... up to max_attempts
  - Condition still false → give up (EXHAUSTED), nothing is raised

Each attempt is preceded by the wait, so the first check happens one
interval after polling starts.

CANCELLATION:
-------------
The wait function returns True when polling should stop early. Passing a
``threading.Event().wait`` gives a cancellation token for free: calling
``event.set()`` from another thread wakes the waiter immediately and ends
polling with CANCELLED.

Tests pass their own wait function, so no real time passes.

USAGE:
------
    from utils.polling import poll_until, PollOutcome

    stop = threading.Event()
    outcome = poll_until(lambda: job_id not in active_jobs(),
                         max_attempts=10, interval=0.5, wait=stop.wait)
    if outcome is PollOutcome.SATISFIED:
        ...
"""

import time
from enum import Enum
from typing import Callable, Optional


class PollOutcome(Enum):
    SATISFIED = "satisfied"   # condition became true
    EXHAUSTED = "exhausted"   # all attempts used, condition still false
    CANCELLED = "cancelled"   # wait function asked us to stop


def _sleep(seconds: float) -> bool:
    """Default wait: plain sleep, never cancels."""
    time.sleep(seconds)
    return False


def poll_until(
    condition: Callable[[], bool],
    max_attempts: int = 10,
    interval: float = 0.5,
    wait: Callable[[float], bool] = _sleep,
    on_attempt: Optional[Callable[[int, bool], None]] = None,
) -> PollOutcome:
    """
    Check ``condition`` up to ``max_attempts`` times, waiting before each check.

    Args:
        condition: Called once per attempt. Returns True when we're done.

        max_attempts: Maximum number of checks. Default is 10.

        interval: Seconds to wait before each check. Default is 0.5.

        wait: Function that waits ``interval`` seconds and returns True if
              polling should stop early. ``threading.Event.wait`` fits this
              signature, and so does a fake clock in tests.

        on_attempt: Optional callback after each check. Receives:
                    - attempt: Which attempt just ran (1-indexed)
                    - satisfied: The value condition() returned

    Returns:
        PollOutcome.SATISFIED as soon as condition() returns True,
        PollOutcome.CANCELLED if wait() returned True,
        PollOutcome.EXHAUSTED if every attempt returned False.
    """
    for attempt in range(1, max_attempts + 1):
        # Wait first; a True return means someone cancelled us
        if wait(interval):
            return PollOutcome.CANCELLED

        satisfied = bool(condition())

        if on_attempt:
            on_attempt(attempt, satisfied)

        if satisfied:
            # Stop immediately, remaining attempts are not consumed
            return PollOutcome.SATISFIED

    return PollOutcome.EXHAUSTED
