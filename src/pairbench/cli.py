"""Command-line interface for pairbench.

Subcommands:
    pairbench run        Measure and compare routine pairs
    pairbench routines   List the built-in routines
"""

from __future__ import annotations

import json
from pathlib import Path

import click

from pairbench import __version__
from pairbench.logging import setup_logging


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """pairbench: detect latency changes between two implementations."""


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------


@main.command()
@click.option(
    "--profile",
    "profile_path",
    type=click.Path(exists=True, path_type=Path),
    help="YAML profile defining generator and routine pairs.",
)
@click.option(
    "--pair",
    "inline_pairs",
    type=str,
    multiple=True,
    help="Inline pair: 'base:candidate[=label]' (repeatable).",
)
@click.option(
    "--iterations",
    type=int,
    default=None,
    help="Trials per pair (default: 50000, min: 2).",
)
@click.option("--seed", type=int, default=None, help="Seed for payloads and call order.")
@click.option(
    "--export-dir",
    type=click.Path(path_type=Path),
    default=None,
    help="Directory for sampled CSV exports (default: results).",
)
@click.option("--no-export", is_flag=True, default=False, help="Do not write CSV files.")
@click.option("--json", "as_json", is_flag=True, help="Output results as JSON.")
@click.option("--details", is_flag=True, default=False, help="Show z-score and p-value.")
@click.option("-v", "--verbose", is_flag=True, help="Show detailed output.")
@click.option("-q", "--quiet", is_flag=True, help="Only show errors.")
@click.option("--log-file", type=click.Path(path_type=Path), default=None)
def run(  # noqa: PLR0913
    profile_path: Path | None,
    inline_pairs: tuple[str, ...],
    iterations: int | None,
    seed: int | None,
    export_dir: Path | None,
    no_export: bool,
    as_json: bool,
    details: bool,
    verbose: bool,
    quiet: bool,
    log_file: Path | None,
) -> None:
    """Measure routine pairs and report significant latency changes.

    Without --profile or --pair, the built-in default pairs are compared.

    \b
    Examples:
        # Default comparisons
        pairbench run --iterations 20000

        # Inline pairs
        pairbench run --pair len:count --pair "len_x1000:len_x985=sensitivity"

        # From a YAML profile, without CSV output
        pairbench run --profile strings.yaml --no-export
    """
    from pairbench.config import (
        config_from_profile,
        load_profile,
        parse_inline_pair,
        validate_config,
    )
    from pairbench.display import format_details, format_header
    from pairbench.generator import GeneratorError
    from pairbench.report import ComparisonResult
    from pairbench.routines import ROUTINES
    from pairbench.runner import ComparisonRunner

    setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)

    cli_overrides: dict[str, object] = {
        "iterations": iterations,
        "seed": seed,
        "export_dir": export_dir,
        "no_export": no_export,
    }

    try:
        if profile_path:
            config = config_from_profile(load_profile(profile_path), cli_overrides=cli_overrides)
        else:
            config = config_from_profile({}, cli_overrides=cli_overrides)
        for spec in inline_pairs:
            config.pairs.append(parse_inline_pair(spec))
    except (ValueError, OSError) as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc

    problems = validate_config(config, ROUTINES)
    for problem in problems:
        click.echo(f"{problem.severity.capitalize()}: {problem.field}: {problem.message}", err=True)
    if any(p.severity == "error" for p in problems):
        raise SystemExit(1)

    printed: list[ComparisonResult] = []

    def _print_result(result: ComparisonResult) -> None:
        # Header is printed together with the first row.
        if not printed:
            if config.name:
                click.echo(config.name)
            click.echo(format_header())
        printed.append(result)
        click.echo(result.summary)
        if details:
            click.echo(format_details(result.stats))

    runner = ComparisonRunner(config, on_result=None if as_json else _print_result)

    try:
        results = runner.run()
    except GeneratorError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc
    except KeyboardInterrupt:
        click.echo("\nComparison interrupted.", err=True)
        raise SystemExit(130)  # noqa: B904

    if as_json:
        click.echo(json.dumps([r.to_dict() for r in results], indent=2, allow_nan=False))
    elif config.export_dir is not None:
        click.echo(f"\nSamples saved to: {config.export_dir}", err=True)


# ---------------------------------------------------------------------------
# routines
# ---------------------------------------------------------------------------


@main.command("routines")
def routines_cmd() -> None:
    """List the built-in routines available for comparison."""
    from pairbench.routines import DESCRIPTIONS, ROUTINES

    for name in sorted(ROUTINES):
        click.echo(f"{name:<16s} {DESCRIPTIONS.get(name, '')}")
