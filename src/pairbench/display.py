"""Terminal display formatting for comparison results.

One fixed-width line per comparison, under a matching header.  Durations
are in nanoseconds.
"""

from __future__ import annotations

from pairbench.stats import ComparisonStats

CHANGE_MARKER = "CHANGE DETECTED"

NAME_WIDTH = 40


def format_header() -> str:
    """Column header matching :func:`format_summary_line`."""
    columns = ["B min", "C min", "min ∆", "B mean", "C mean", "mean ∆", "mean ∆ (%)"]
    return f"{'name':<{NAME_WIDTH}s} " + " ".join(f"{c:>10s}" for c in columns)


def format_summary_line(name: str, stats: ComparisonStats) -> str:
    """Format one comparison as a fixed-width line.

    Fields: name, base min, candidate min, min delta %, base mean,
    candidate mean, masked diff mean, mean delta %, and the change marker
    when a change was detected.
    """
    line = (
        f"{name:<{NAME_WIDTH}s} "
        f"{stats.base_min:>10d} {stats.candidate_min:>10d} "
        f"{stats.min_delta_pct:>9.1f}% "
        f"{stats.base_mean:>10.1f} {stats.candidate_mean:>10.1f} "
        f"{stats.diff_mean:>10.1f} "
        f"{stats.mean_delta_pct:>9.1f}%"
    )
    if stats.change_detected:
        line += f" {CHANGE_MARKER}"
    return line


def _format_p(p: float) -> str:
    if p < 0.0001:
        return "<0.0001"
    return f"{p:.4f}"


def format_details(stats: ComparisonStats) -> str:
    """Format the extended statistics for one comparison."""
    lines = [
        f"    trials:        {stats.n}",
        f"    masked diffs:  {stats.masked_count}",
        f"    diff stdev:    {stats.diff_stdev:.1f} ns",
        f"    std error:     {stats.std_err:.2f} ns",
        f"    z-score:       {stats.z_score:+.2f}",
        f"    p-value:       {_format_p(stats.p_value)}",
    ]
    return "\n".join(lines)
