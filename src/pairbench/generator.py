"""Payload generators feeding the measurement loop.

A generator is constructed once and then asked for one payload per
trial through :meth:`PayloadGenerator.produce_next`.  Construction may
fail (bad parameters, unreadable word list) and raises
:class:`GeneratorError`; individual ``produce_next`` calls never fail.
"""

from __future__ import annotations

import random
import string
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pairbench.logging import get_logger

log = get_logger("generator")

DEFAULT_ALPHABET = string.ascii_letters + string.digits + " "


class GeneratorError(RuntimeError):
    """A payload generator could not be constructed."""


class PayloadGenerator:
    """Base class for payload generators."""

    def produce_next(self) -> Any:
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Random strings
# ---------------------------------------------------------------------------


class RandomStringGenerator(PayloadGenerator):
    """Produces strings of random length drawn from *alphabet*."""

    def __init__(
        self,
        min_length: int = 0,
        max_length: int = 1000,
        *,
        alphabet: str = DEFAULT_ALPHABET,
        seed: int | None = None,
    ) -> None:
        if min_length < 0:
            raise GeneratorError(f"min_length cannot be negative (got {min_length}).")
        if max_length < min_length:
            raise GeneratorError(
                f"max_length ({max_length}) must be >= min_length ({min_length})."
            )
        if not alphabet:
            raise GeneratorError("Alphabet must contain at least one character.")
        self.min_length = min_length
        self.max_length = max_length
        self.alphabet = alphabet
        self._rng = random.Random(seed)

    def produce_next(self) -> str:
        length = self._rng.randint(self.min_length, self.max_length)
        return "".join(self._rng.choices(self.alphabet, k=length))


# ---------------------------------------------------------------------------
# Word lists
# ---------------------------------------------------------------------------


class WordlistGenerator(PayloadGenerator):
    """Produces space-joined phrases of random words from a fixed vocabulary."""

    def __init__(
        self,
        words: list[str],
        *,
        words_per_payload: int = 8,
        seed: int | None = None,
    ) -> None:
        if not words:
            raise GeneratorError("Word list is empty.")
        if words_per_payload < 1:
            raise GeneratorError(
                f"words_per_payload must be at least 1 (got {words_per_payload})."
            )
        self.words = words
        self.words_per_payload = words_per_payload
        self._rng = random.Random(seed)

    @classmethod
    def from_file(
        cls,
        path: Path,
        *,
        words_per_payload: int = 8,
        seed: int | None = None,
    ) -> WordlistGenerator:
        """Load one word per line from *path*.

        Raises:
            GeneratorError: If the file cannot be read or holds no words.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise GeneratorError(f"Cannot read word list {path}: {exc}") from exc
        words = [line.strip() for line in text.splitlines() if line.strip()]
        log.debug("Loaded %d words from %s", len(words), path)
        return cls(words, words_per_payload=words_per_payload, seed=seed)

    def produce_next(self) -> str:
        return " ".join(self._rng.choices(self.words, k=self.words_per_payload))


# ---------------------------------------------------------------------------
# Construction from configuration
# ---------------------------------------------------------------------------


@dataclass
class GeneratorConfig:
    """Which generator to build and with what parameters."""

    kind: str = "random-string"  # "random-string" or "wordlist"
    min_length: int = 0
    max_length: int = 1000
    alphabet: str = DEFAULT_ALPHABET
    wordlist: Path | None = None
    words_per_payload: int = 8


GENERATOR_KINDS = ("random-string", "wordlist")


def build_generator(config: GeneratorConfig, *, seed: int | None = None) -> PayloadGenerator:
    """Construct the generator described by *config*.

    Raises:
        GeneratorError: If the kind is unknown or construction fails.
    """
    if config.kind == "random-string":
        return RandomStringGenerator(
            config.min_length,
            config.max_length,
            alphabet=config.alphabet,
            seed=seed,
        )
    if config.kind == "wordlist":
        if config.wordlist is None:
            raise GeneratorError("The wordlist generator needs a 'wordlist' path.")
        return WordlistGenerator.from_file(
            Path(config.wordlist),
            words_per_payload=config.words_per_payload,
            seed=seed,
        )
    raise GeneratorError(
        f"Unknown generator kind '{config.kind}'. Valid kinds: {', '.join(GENERATOR_KINDS)}"
    )
