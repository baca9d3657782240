"""Statistical functions for paired benchmark comparison.

Provides symmetric outlier winsorizing of the difference series and the
z-score significance test that decides whether two routines differ.

Note the deliberate asymmetry in :func:`compute_stats`: mins and means of
the base and candidate durations come from the raw samples, while the
significance test runs on the winsorized difference series.  Reported
means therefore include the outliers that the decision ignores.

References:
    Winsorizing: https://en.wikipedia.org/wiki/Winsorizing
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Sequence

from scipy.stats import norm  # type: ignore[import-untyped]

from pairbench.logging import get_logger

log = get_logger("stats")

# |z| at or above this flags a change (about 99% two-tailed confidence).
Z_THRESHOLD = 2.6


class InsufficientSamplesError(ValueError):
    """Fewer than two trials were supplied, so variance is undefined."""


# ---------------------------------------------------------------------------
# Outlier masking
# ---------------------------------------------------------------------------


def mask_symmetric_outliers(values: list[int]) -> None:
    """Winsorize symmetric outliers of *values* in place.

    Extreme values are replaced with the most extreme value that survives,
    so the sample count never changes.  Outliers are only clamped when:

    - they lie at least 3 IQR from the median,
    - no more than 5% of observations are clamped on each side,
    - the two tails stay roughly balanced: a trim step is committed only
      while the counts removed from each side differ by fewer than 3 or
      by less than 30% of the total removed.

    A step that breaks the balance rule is kept tentatively; if later
    steps restore the balance it gets committed, otherwise the last
    committed bounds are used.

    Quartile and median positions use floor indexing into the sorted
    values without interpolation.
    """
    n = len(values)
    if n == 0:
        return

    sorted_v = sorted(values)

    iqr = sorted_v[n * 75 // 100] - sorted_v[n * 25 // 100]
    median = sorted_v[n // 2]

    top = n - 1
    bottom = 0
    committed_top = top
    committed_bottom = bottom

    while bottom < n * 5 // 100 and top > n * 95 // 100:
        bottom_diff = median - sorted_v[bottom]
        top_diff = sorted_v[top] - median

        if max(bottom_diff, top_diff) < 3 * iqr:
            break

        if top_diff > bottom_diff:
            top -= 1
        else:
            bottom += 1

        top_removed = n - top - 1
        bottom_removed = bottom
        abs_diff = abs(top_removed - bottom_removed)

        # TODO: replace the fixed 0.3 ratio with a binomial test on the split.
        deviation = abs_diff / (bottom_removed + top_removed)
        if abs_diff < 3 or deviation < 0.3:
            committed_top = top
            committed_bottom = bottom

    low = sorted_v[committed_bottom]
    high = sorted_v[committed_top]
    for i, value in enumerate(values):
        if value < low:
            values[i] = low
        elif value > high:
            values[i] = high


# ---------------------------------------------------------------------------
# Comparison statistics
# ---------------------------------------------------------------------------


def _relative_pct(delta: float, base: float) -> float:
    if base != 0:
        return delta / base * 100
    if delta == 0:
        return 0.0
    return math.copysign(math.inf, delta)


def _json_float(value: float, ndigits: int = 3) -> float | str:
    """Round for JSON; infinities become ``"inf"``/``"-inf"`` strings."""
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return round(value, ndigits)


@dataclass
class ComparisonStats:
    """Statistics snapshot for one base/candidate comparison.

    ``base_*`` and ``candidate_*`` fields come from the unmasked samples;
    ``diff_*``, ``std_err``, ``z_score``, ``p_value`` and
    ``change_detected`` come from the masked difference series.
    """

    n: int
    base_min: int
    candidate_min: int
    base_mean: float
    candidate_mean: float
    diff_mean: float
    diff_stdev: float
    std_err: float
    z_score: float
    p_value: float
    masked_count: int
    change_detected: bool

    @property
    def min_delta_pct(self) -> float:
        """Relative change of the candidate minimum, in percent."""
        return _relative_pct(self.candidate_min - self.base_min, self.base_min)

    @property
    def mean_delta_pct(self) -> float:
        """Masked mean difference relative to the base mean, in percent."""
        return _relative_pct(self.diff_mean, self.base_mean)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict with rounded values."""
        return {
            "n": self.n,
            "base_min": self.base_min,
            "candidate_min": self.candidate_min,
            "min_delta_pct": _json_float(self.min_delta_pct),
            "base_mean": _json_float(self.base_mean),
            "candidate_mean": _json_float(self.candidate_mean),
            "diff_mean": _json_float(self.diff_mean),
            "mean_delta_pct": _json_float(self.mean_delta_pct),
            "diff_stdev": _json_float(self.diff_stdev),
            "std_err": _json_float(self.std_err),
            "z_score": _json_float(self.z_score),
            "p_value": self.p_value,
            "masked_count": self.masked_count,
            "change_detected": self.change_detected,
        }


def compute_stats(samples: Sequence[tuple[int, int]]) -> ComparisonStats:
    """Compute the comparison statistics for a sample set.

    Args:
        samples: ``(base_ns, candidate_ns)`` pairs in trial order.  Not
            modified.

    Returns:
        ComparisonStats for the sample set.  When the masked differences
        have zero variance the z-score is 0.0 if their mean is zero and
        signed infinity otherwise.

    Raises:
        InsufficientSamplesError: If fewer than 2 pairs are given.
    """
    n = len(samples)
    if n < 2:
        raise InsufficientSamplesError(
            f"Need at least 2 trials to estimate variance (got {n})."
        )

    base = [b for b, _ in samples]
    candidate = [c for _, c in samples]

    base_min = min(base)
    candidate_min = min(candidate)
    base_mean = sum(base) / n
    candidate_mean = sum(candidate) / n

    raw_diff = [c - b for b, c in samples]
    diff = list(raw_diff)
    mask_symmetric_outliers(diff)
    masked_count = sum(1 for before, after in zip(raw_diff, diff) if before != after)
    if masked_count:
        log.debug("Winsorized %d of %d differences", masked_count, n)

    diff_mean = sum(diff) / n
    variance = sum((d - diff_mean) ** 2 for d in diff) / (n - 1)
    diff_stdev = math.sqrt(variance)
    std_err = diff_stdev / math.sqrt(n)

    if std_err == 0:
        z_score = 0.0 if diff_mean == 0 else math.copysign(math.inf, diff_mean)
    else:
        z_score = diff_mean / std_err

    p_value = float(2.0 * norm.sf(abs(z_score)))

    return ComparisonStats(
        n=n,
        base_min=base_min,
        candidate_min=candidate_min,
        base_mean=base_mean,
        candidate_mean=candidate_mean,
        diff_mean=diff_mean,
        diff_stdev=diff_stdev,
        std_err=std_err,
        z_score=z_score,
        p_value=p_value,
        masked_count=masked_count,
        change_detected=abs(z_score) >= Z_THRESHOLD,
    )
