"""Comparison execution engine.

Orchestrates:
1. Configuration validation
2. Payload generator construction (once per run)
3. Paired measurement of every configured routine pair
4. Statistics, summary line and CSV export per pair

The generator is built before any measurement; if that fails, nothing
is measured and no report is produced.
"""

from __future__ import annotations

import random
import time
from typing import Callable

from pairbench.config import BenchConfig, PairDef, validate_config
from pairbench.generator import PayloadGenerator, build_generator
from pairbench.logging import get_logger
from pairbench.measure import measure
from pairbench.report import ComparisonResult, report
from pairbench.routines import ROUTINES, get_routine
from pairbench.timing import Routine

log = get_logger("runner")

ResultCallback = Callable[[ComparisonResult], None]


class ComparisonRunner:
    """Runs every routine pair of a BenchConfig.

    Usage::

        runner = ComparisonRunner(config)
        results = runner.run()
    """

    def __init__(
        self,
        config: BenchConfig,
        *,
        routines: dict[str, Routine] | None = None,
        rng: random.Random | None = None,
        on_result: ResultCallback | None = None,
    ) -> None:
        self.config = config
        self.routines = ROUTINES if routines is None else routines
        if rng is None:
            rng = random.Random(config.seed + 1 if config.seed is not None else None)
        self.rng = rng
        self.on_result = on_result

    def run(self) -> list[ComparisonResult]:
        """Execute all comparisons.

        Returns:
            One ComparisonResult per pair, in configuration order.

        Raises:
            ValueError: If the configuration has errors.
            GeneratorError: If the payload generator cannot be built.
        """
        errors = [e for e in validate_config(self.config, self.routines) if e.severity == "error"]
        if errors:
            raise ValueError(
                "Invalid configuration: " + "; ".join(f"{e.field}: {e.message}" for e in errors)
            )

        generator = build_generator(self.config.generator, seed=self.config.seed)
        log.debug("Using %s", type(generator).__name__)

        results: list[ComparisonResult] = []
        for pair in self.config.resolved_pairs():
            result = self._run_pair(generator, pair)
            results.append(result)
            if self.on_result is not None:
                self.on_result(result)

        changed = sum(1 for r in results if r.change_detected)
        log.info("Compared %d pairs, %d with a detected change", len(results), changed)
        return results

    def _run_pair(self, generator: PayloadGenerator, pair: PairDef) -> ComparisonResult:
        base = get_routine(pair.base, self.routines)
        candidate = get_routine(pair.candidate, self.routines)

        log.debug("Measuring %s (%d trials)", pair.label, self.config.iterations)
        start = time.monotonic()
        samples = measure(
            generator,
            base,
            candidate,
            self.config.iterations,
            rng=self.rng,
        )
        elapsed = time.monotonic() - start

        result = report(pair.label, samples, export_path=self.config.export_path_for(pair))
        log.debug("%s done in %.2fs", pair.label, elapsed)
        return result
