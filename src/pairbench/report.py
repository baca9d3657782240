"""Reporting for a single base/candidate comparison.

:func:`report` turns a sample set into a :class:`ComparisonResult`: the
statistics snapshot, the formatted summary line and, when requested, a
sampled CSV export of the raw pairs.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

from pairbench.display import format_summary_line
from pairbench.export import write_csv
from pairbench.logging import get_logger
from pairbench.stats import ComparisonStats, compute_stats

log = get_logger("report")


@dataclass
class ComparisonResult:
    """Outcome of comparing one routine pair."""

    name: str
    stats: ComparisonStats
    summary: str
    export_path: Path | None = None
    exported_rows: int = 0

    @property
    def change_detected(self) -> bool:
        return self.stats.change_detected

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "name": self.name,
            "stats": self.stats.to_dict(),
            "export_path": str(self.export_path) if self.export_path else None,
            "exported_rows": self.exported_rows,
        }


def report(
    name: str,
    samples: Sequence[tuple[int, int]],
    *,
    export_path: Path | None = None,
) -> ComparisonResult:
    """Compute statistics for *samples* and optionally export them.

    Args:
        name: Label for the comparison (e.g. ``"len / count"``).
        samples: ``(base_ns, candidate_ns)`` pairs from one measurement run.
        export_path: If given, write the sampled raw pairs there as CSV.

    Raises:
        InsufficientSamplesError: If fewer than 2 pairs are given.  No
            file is written in that case.
    """
    stats = compute_stats(samples)
    summary = format_summary_line(name, stats)

    result = ComparisonResult(name=name, stats=stats, summary=summary)
    if export_path is not None:
        result.export_path = export_path
        result.exported_rows = write_csv(export_path, samples)

    log.debug(
        "%s: z=%.2f diff_mean=%.1f change=%s",
        name,
        stats.z_score,
        stats.diff_mean,
        stats.change_detected,
    )
    return result
