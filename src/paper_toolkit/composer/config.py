"""
Module: composer.config

Purpose:
    Configuration dataclass for the composition pipeline. Immutable
    configuration with validation on construction.

Key Classes:
    - ComposeConfig: Tuning for selection and concurrency

Used By:
    - composer.controller: compose_paper()
    - paper_toolkit.cli: Command line overrides
"""

from __future__ import annotations

from dataclasses import dataclass

from paper_toolkit.common.thresholds import DEFAULT_MAX_WORKERS, OVERFETCH_FACTOR

from .selection.relaxation import DEFAULT_CASCADE, RelaxationStep, validate_cascade


@dataclass(frozen=True)
class ComposeConfig:
    """
    Configuration for composing papers (immutable).

    Attributes:
        overfetch_factor: Candidates fetched per wanted question in
            randomized mode, so every chapter has material
        max_workers: Thread pool size for per-type selection
        parallel: Run per-type selection concurrently
        strict_validation: Full jsonschema validation of requests
        cascade: Fallback relaxation levels, strict first

    Example:
        >>> config = ComposeConfig(parallel=False)
        >>> config.fetch_limit(5)
        15
    """

    overfetch_factor: int = OVERFETCH_FACTOR
    max_workers: int = DEFAULT_MAX_WORKERS
    parallel: bool = True
    strict_validation: bool = True
    cascade: tuple[RelaxationStep, ...] = DEFAULT_CASCADE

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.overfetch_factor < 1:
            raise ValueError(f"overfetch_factor must be at least 1: {self.overfetch_factor}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be positive: {self.max_workers}")
        validate_cascade(self.cascade)

    def fetch_limit(self, desired: int) -> int:
        """Rows to fetch per fallback level for a randomized draw."""
        return desired * self.overfetch_factor
