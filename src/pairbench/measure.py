"""The paired measurement loop.

Every trial draws one fresh payload and times both routines on it.  The
order of the two calls is decided per trial by a coin flip so that cache
warmth, frequency drift or thermal trends do not systematically favour
whichever routine runs first.  The recorded pair is always
``(base_duration, candidate_duration)`` whatever the physical order was.
"""

from __future__ import annotations

import random

from pairbench.generator import PayloadGenerator
from pairbench.logging import get_logger
from pairbench.timing import Routine, time_call

log = get_logger("measure")

MeasurementPair = tuple[int, int]


def measure(
    generator: PayloadGenerator,
    base: Routine,
    candidate: Routine,
    n: int,
    *,
    rng: random.Random | None = None,
) -> list[MeasurementPair]:
    """Run *n* paired trials and return the durations in trial order.

    Args:
        generator: Supplies one payload per trial.
        base: The reference routine; its duration goes in position 0.
        candidate: The routine under test; its duration goes in position 1.
        n: Number of trials.
        rng: Source of the per-trial order coin flip.  A fresh unseeded
            ``random.Random`` is used when omitted.

    Returns:
        A list of exactly *n* ``(base_ns, candidate_ns)`` pairs.

    Raises:
        ValueError: If *n* is negative.
    """
    if n < 0:
        raise ValueError(f"Trial count cannot be negative (got {n}).")
    if rng is None:
        rng = random.Random()

    result: list[MeasurementPair] = []
    base_first = 0

    for _ in range(n):
        payload = generator.produce_next()

        if rng.random() < 0.5:
            base_first += 1
            base_ns = time_call(base, payload)
            candidate_ns = time_call(candidate, payload)
        else:
            candidate_ns = time_call(candidate, payload)
            base_ns = time_call(base, payload)

        result.append((base_ns, candidate_ns))

    log.debug("Measured %d trials (base ran first in %d)", n, base_first)
    return result
