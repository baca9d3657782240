"""Shared test fixtures for pairbench tests."""

from __future__ import annotations

from typing import Any

from pairbench.generator import PayloadGenerator
from pairbench.timing import Routine


class CountingGenerator(PayloadGenerator):
    """Yields 0, 1, 2, ... so every payload is distinct."""

    def __init__(self) -> None:
        self.produced = 0

    def produce_next(self) -> int:
        value = self.produced
        self.produced += 1
        return value


def constant_routine(duration: int, output: Any = None) -> Routine:
    """A routine that always reports *duration* nanoseconds."""

    def routine(payload: Any) -> tuple[int, Any]:
        return duration, output

    return routine


def recording_routine(duration: int, calls: list[tuple[str, Any]], tag: str) -> Routine:
    """A constant-duration routine that appends ``(tag, payload)`` to *calls*."""

    def routine(payload: Any) -> tuple[int, Any]:
        calls.append((tag, payload))
        return duration, payload

    return routine


def make_pairs(base: list[int], candidate: list[int]) -> list[tuple[int, int]]:
    """Zip base and candidate durations into measurement pairs."""
    return list(zip(base, candidate))
