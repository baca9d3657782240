"""Export raw measurement pairs to CSV.

The file holds one ``base_ns,candidate_ns`` line per sampled trial, no
header.  Long runs are thinned by a fixed stride so that plotting tools
never receive more than :data:`MAX_EXPORT_ROWS` points.  Values are the
raw, unmasked durations.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Sequence

from pairbench.logging import get_logger

log = get_logger("export")

MAX_EXPORT_ROWS = 1000


def sample_stride(n: int) -> int:
    """Stride that keeps at most MAX_EXPORT_ROWS of *n* rows."""
    return max(1, -(-n // MAX_EXPORT_ROWS))


def sample_pairs(samples: Sequence[tuple[int, int]]) -> list[tuple[int, int]]:
    """Return every ``stride``-th pair, starting at index 0, in order."""
    factor = sample_stride(len(samples))
    return list(samples[::factor])


def export_csv(samples: Sequence[tuple[int, int]]) -> str:
    """Render the sampled pairs as CSV text."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    for base_ns, candidate_ns in sample_pairs(samples):
        writer.writerow([base_ns, candidate_ns])
    return output.getvalue()


def write_csv(path: Path, samples: Sequence[tuple[int, int]]) -> int:
    """Write the sampled pairs to *path*, creating parent directories.

    Returns:
        The number of rows written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    text = export_csv(samples)
    path.write_text(text, encoding="utf-8")
    rows = text.count("\n")
    log.debug("Wrote %d of %d pairs to %s", rows, len(samples), path)
    return rows
