"""Built-in string routines for comparison runs.

Each routine takes a string payload and reports its own duration via
:func:`pairbench.timing.timed`.  ``len_x1000`` and ``len_x985`` differ
by 1.5% of work and serve as a sensitivity check: a healthy machine
should flag the pair as a change.
"""

from __future__ import annotations

from pairbench.timing import Routine, timed


@timed
def _len(payload: str) -> int:
    return len(payload)


@timed
def _count(payload: str) -> int:
    return sum(1 for _ in payload)


@timed
def _count_reversed(payload: str) -> int:
    return sum(1 for _ in reversed(payload))


def _repeat_len(times: int) -> Routine:
    def repeat(payload: str) -> int:
        total = 0
        for _ in range(times):
            total += len(payload)
        return total

    repeat.__name__ = f"len_x{times}"
    return timed(repeat)


ROUTINES: dict[str, Routine] = {
    "len": _len,
    "count": _count,
    "count_reversed": _count_reversed,
    "len_x1000": _repeat_len(1000),
    "len_x985": _repeat_len(985),
}

DESCRIPTIONS: dict[str, str] = {
    "len": "Builtin len() of the payload.",
    "count": "Character count by iterating the payload.",
    "count_reversed": "Character count by iterating the payload backwards.",
    "len_x1000": "len() repeated 1000 times.",
    "len_x985": "len() repeated 985 times (1.5% less work than len_x1000).",
}

# The comparisons run when no pairs are configured.
DEFAULT_PAIRS: list[tuple[str, str]] = [
    ("len", "len"),
    ("count", "count"),
    ("count_reversed", "count_reversed"),
    ("len_x1000", "len_x985"),
    ("count", "count_reversed"),
    ("len", "count"),
]


def get_routine(name: str, routines: dict[str, Routine] | None = None) -> Routine:
    """Look up a routine by name.

    Raises:
        KeyError: If no routine has that name.
    """
    table = ROUTINES if routines is None else routines
    try:
        return table[name]
    except KeyError:
        raise KeyError(
            f"Unknown routine '{name}'. Available: {', '.join(sorted(table))}"
        ) from None
