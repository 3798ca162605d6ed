"""
Module: composer.selection

Purpose:
    Question selection for one type: the fallback relaxation cascade and
    chapter-balanced distribution of a shuffled pool.

Key Functions:
    - select_with_fallback(): Cascade of progressively relaxed queries
    - distribute_by_chapter(): Round-robin chapter coverage

Key Classes:
    - RelaxationStep: One cascade level as data
    - FallbackOutcome: Cascade result for one type
"""

from .relaxation import DEFAULT_CASCADE, RelaxationStep, validate_cascade
from .fallback import FallbackOutcome, select_with_fallback
from .distributor import distribute_by_chapter, in_scope_first, shuffled, type_rng

__all__ = [
    "DEFAULT_CASCADE",
    "RelaxationStep",
    "validate_cascade",
    "FallbackOutcome",
    "select_with_fallback",
    "distribute_by_chapter",
    "in_scope_first",
    "shuffled",
    "type_rng",
]
