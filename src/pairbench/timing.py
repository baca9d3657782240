"""Timing capture for individual routine calls.

A routine is any callable taking one payload and returning a
``(duration_ns, output)`` tuple, where the routine measures its own
elapsed time.  The :func:`timed` decorator builds such a routine from a
plain function using :func:`time.perf_counter_ns`.

:func:`time_call` is what the measurement loop uses: it hands the whole
result to :func:`black_box` so the output is observably consumed, keeps
the duration and releases the output straight away.
"""

from __future__ import annotations

import functools
import time
from typing import Any, Callable

TimedOutput = tuple[int, Any]
Routine = Callable[[Any], TimedOutput]

# Holds the most recent routine result.  Module-level so that no call
# site can prove the value is unused.
_sink: list[Any] = [None]


# ---------------------------------------------------------------------------
# Opaque use
# ---------------------------------------------------------------------------


def black_box(value: Any) -> Any:
    """Store *value* in the module sink and return it unchanged."""
    _sink[0] = value
    return _sink[0]


def _release() -> None:
    _sink[0] = None


# ---------------------------------------------------------------------------
# Routine construction and invocation
# ---------------------------------------------------------------------------


def timed(func: Callable[[Any], Any]) -> Routine:
    """Wrap a plain ``func(payload) -> output`` into a self-timing routine.

    The returned callable yields ``(elapsed_ns, output)``.  Only the call
    to *func* is inside the timed region.
    """

    @functools.wraps(func)
    def routine(payload: Any) -> TimedOutput:
        start = time.perf_counter_ns()
        output = func(payload)
        elapsed = time.perf_counter_ns() - start
        return elapsed, output

    return routine


def time_call(routine: Routine, payload: Any) -> int:
    """Invoke *routine* on *payload* and return only its duration.

    The output is passed through :func:`black_box` and discarded as soon
    as the duration has been read.  Negative durations reported by a
    routine are clamped to zero.
    """
    duration, _ = black_box(routine(payload))
    _release()
    return max(int(duration), 0)
