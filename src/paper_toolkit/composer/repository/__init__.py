"""
Module: composer.repository

Purpose:
    Read-only question repository interface and an in-memory
    implementation.
"""

from .base import QuestionQuery, QuestionRepository, RepositoryError, SortOrder
from .memory import InMemoryQuestionRepository

__all__ = [
    "QuestionQuery",
    "QuestionRepository",
    "RepositoryError",
    "SortOrder",
    "InMemoryQuestionRepository",
]
