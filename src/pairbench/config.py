"""Comparison configuration and profile loading.

Handles:
- Loading comparison profiles from YAML files.
- Parsing inline pair definitions from CLI arguments.
- Merging CLI options with profile defaults.
- Validating the final configuration before any measurement.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from pairbench.generator import DEFAULT_ALPHABET, GENERATOR_KINDS, GeneratorConfig
from pairbench.logging import get_logger
from pairbench.routines import DEFAULT_PAIRS
from pairbench.timing import Routine

log = get_logger("config")


# ---------------------------------------------------------------------------
# Pair definitions
# ---------------------------------------------------------------------------


@dataclass
class PairDef:
    """A base/candidate routine pair to compare."""

    base: str
    candidate: str
    name: str = ""  # Display label; defaults to "base / candidate"
    export: bool = True

    @property
    def label(self) -> str:
        return self.name or f"{self.base} / {self.candidate}"

    @property
    def export_filename(self) -> str:
        return f"{self.base}-{self.candidate}.csv"


def default_pairs() -> list[PairDef]:
    """The comparisons run when nothing else is configured."""
    return [PairDef(base=b, candidate=c) for b, c in DEFAULT_PAIRS]


# ---------------------------------------------------------------------------
# BenchConfig
# ---------------------------------------------------------------------------


@dataclass
class BenchConfig:
    """Resolved configuration for a comparison run."""

    name: str = ""
    iterations: int = 50000  # Trials per pair
    seed: int | None = None
    export_dir: Path | None = field(default_factory=lambda: Path("results"))
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    pairs: list[PairDef] = field(default_factory=list)

    def resolved_pairs(self) -> list[PairDef]:
        """Configured pairs, or the default set when none are given."""
        return self.pairs or default_pairs()

    def export_path_for(self, pair: PairDef) -> Path | None:
        if self.export_dir is None or not pair.export:
            return None
        return self.export_dir / pair.export_filename


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


@dataclass
class ValidationError:
    """A single configuration validation error."""

    field: str
    message: str
    severity: str = "error"  # "error" or "warning"


def validate_config(
    config: BenchConfig,
    routines: dict[str, Routine],
) -> list[ValidationError]:
    """Validate a comparison configuration.

    Returns a list of validation errors.  Empty list means valid.
    """
    errors: list[ValidationError] = []

    if config.iterations < 2:
        errors.append(
            ValidationError(
                field="iterations",
                message=(
                    f"Need at least 2 iterations to estimate variance "
                    f"(got {config.iterations})."
                ),
            )
        )
    elif config.iterations < 1000:
        errors.append(
            ValidationError(
                field="iterations",
                message=(
                    f"Only {config.iterations} iterations; results below 1000 "
                    f"trials are noisy."
                ),
                severity="warning",
            )
        )

    for i, pair in enumerate(config.resolved_pairs()):
        for role, routine_name in (("base", pair.base), ("candidate", pair.candidate)):
            if routine_name not in routines:
                errors.append(
                    ValidationError(
                        field=f"pairs[{i}].{role}",
                        message=(
                            f"Unknown routine '{routine_name}'. "
                            f"Available: {', '.join(sorted(routines))}"
                        ),
                    )
                )

    if config.export_dir is not None:
        seen: dict[str, int] = {}
        for i, pair in enumerate(config.resolved_pairs()):
            if not pair.export:
                continue
            first = seen.setdefault(pair.export_filename, i)
            if first != i:
                errors.append(
                    ValidationError(
                        field=f"pairs[{i}]",
                        message=(
                            f"Export file '{pair.export_filename}' is already "
                            f"written by pairs[{first}]; set 'export: false' "
                            f"on one of them."
                        ),
                    )
                )

    gen = config.generator
    if gen.kind not in GENERATOR_KINDS:
        errors.append(
            ValidationError(
                field="generator.kind",
                message=(
                    f"Unknown generator kind '{gen.kind}'. "
                    f"Valid kinds: {', '.join(GENERATOR_KINDS)}"
                ),
            )
        )
    elif gen.kind == "random-string":
        if gen.min_length < 0 or gen.max_length < gen.min_length:
            errors.append(
                ValidationError(
                    field="generator",
                    message=(
                        f"Invalid length range [{gen.min_length}, {gen.max_length}]."
                    ),
                )
            )
    elif gen.kind == "wordlist":
        if gen.wordlist is None:
            errors.append(
                ValidationError(
                    field="generator.wordlist",
                    message="The wordlist generator needs a 'wordlist' path.",
                )
            )
        elif not Path(gen.wordlist).is_file():
            errors.append(
                ValidationError(
                    field="generator.wordlist",
                    message=f"Word list does not exist: {gen.wordlist}",
                )
            )

    return errors


# ---------------------------------------------------------------------------
# YAML profile loading
# ---------------------------------------------------------------------------


def load_profile(profile_path: Path) -> dict[str, Any]:
    """Load a comparison profile from a YAML file.

    Profile format::

        name: "string length routines"
        iterations: 50000
        seed: 42
        export_dir: results

        generator:
          kind: random-string
          min_length: 0
          max_length: 1000

        pairs:
          - base: len
            candidate: count
          - base: len_x1000
            candidate: len_x985
            name: "sensitivity check"
            export: false

    Returns:
        The parsed YAML as a dict.
    """
    if not profile_path.exists():
        raise FileNotFoundError(f"Profile not found: {profile_path}")

    try:
        data = yaml.safe_load(profile_path.read_text())
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in profile {profile_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Profile must be a YAML mapping, got {type(data).__name__}")

    log.debug("Loaded profile %s", profile_path)
    return data


def _generator_from_profile(data: Any) -> GeneratorConfig:
    if data is None:
        return GeneratorConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Profile 'generator' must be a mapping, got {type(data).__name__}")
    wordlist = data.get("wordlist")
    return GeneratorConfig(
        kind=data.get("kind", "random-string"),
        min_length=int(data.get("min_length", 0)),
        max_length=int(data.get("max_length", 1000)),
        alphabet=data.get("alphabet", DEFAULT_ALPHABET),
        wordlist=Path(wordlist) if wordlist else None,
        words_per_payload=int(data.get("words_per_payload", 8)),
    )


def _pairs_from_profile(data: Any) -> list[PairDef]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError("Profile 'pairs' must be a list of base/candidate mappings")

    pairs: list[PairDef] = []
    for i, entry in enumerate(data):
        if isinstance(entry, str):
            pairs.append(parse_inline_pair(entry))
            continue
        if not isinstance(entry, dict):
            raise ValueError(f"Pair {i} must be a mapping, got {type(entry).__name__}")
        if "base" not in entry or "candidate" not in entry:
            raise ValueError(f"Pair {i} needs both 'base' and 'candidate'.")
        pairs.append(
            PairDef(
                base=str(entry["base"]),
                candidate=str(entry["candidate"]),
                name=entry.get("name", ""),
                export=bool(entry.get("export", True)),
            )
        )
    return pairs


def config_from_profile(
    profile_data: dict[str, Any],
    *,
    cli_overrides: dict[str, Any] | None = None,
) -> BenchConfig:
    """Build a BenchConfig from a parsed YAML profile.

    CLI overrides take precedence over profile values for: name,
    iterations, seed, export_dir, no_export.

    Args:
        profile_data: Parsed YAML profile dict.
        cli_overrides: Dict of CLI option values.  Keys match BenchConfig
            field names, plus ``no_export``.
    """
    cli = cli_overrides or {}

    seed = cli["seed"] if cli.get("seed") is not None else profile_data.get("seed")
    iterations = (
        cli["iterations"]
        if cli.get("iterations") is not None
        else profile_data.get("iterations", 50000)
    )

    config = BenchConfig(
        name=cli.get("name") or profile_data.get("name", ""),
        iterations=int(iterations),
        seed=int(seed) if seed is not None else None,
        generator=_generator_from_profile(profile_data.get("generator")),
        pairs=_pairs_from_profile(profile_data.get("pairs")),
    )

    if cli.get("export_dir"):
        config.export_dir = Path(cli["export_dir"])
    elif "export_dir" in profile_data:
        export_dir = profile_data["export_dir"]
        config.export_dir = Path(export_dir) if export_dir else None
    if cli.get("no_export"):
        config.export_dir = None

    return config


# ---------------------------------------------------------------------------
# Inline pair parsing
# ---------------------------------------------------------------------------


def parse_inline_pair(spec: str) -> PairDef:
    """Parse an inline pair specification from CLI.

    Format: ``"base:candidate"`` or ``"base:candidate=label"``.

    Examples::

        "len:count"
        "len_x1000:len_x985=sensitivity check"
    """
    label = ""
    if "=" in spec:
        spec, label = spec.split("=", 1)
        label = label.strip()

    if ":" not in spec:
        raise ValueError(
            f"Invalid pair spec: '{spec}'. Expected format: 'base:candidate[=label]'"
        )

    base, candidate = (part.strip() for part in spec.split(":", 1))
    if not base or not candidate:
        raise ValueError(f"Pair spec '{spec}' needs both a base and a candidate routine.")

    return PairDef(base=base, candidate=candidate, name=label)
