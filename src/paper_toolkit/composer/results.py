"""
Module: composer.results

Purpose:
    What compose_paper() hands back. Errors and warnings are values on
    the result so partial success (some types satisfied, others not) is
    representable.

Key Classes:
    - TypeReport: Per-type selection feedback for the caller
    - UnsatisfiableTypeWarning: A type found nothing at any level
    - EmptyPaperError: Every requested type was unsatisfiable
    - ComposeResult: Paper, reports and the error, if any
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from paper_toolkit.core.errors import ComposeError
from paper_toolkit.core.models import ComposedPaper
from paper_toolkit.core.utils.serialization import paper_to_dict

from .layout import Adjustment, LayoutTruncation


class EmptyPaperError(ComposeError):
    """Every requested question type was unsatisfiable."""


@dataclass(frozen=True)
class UnsatisfiableTypeWarning:
    """A requested type returned zero questions after full relaxation."""

    question_type: str
    requested: int
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "question_type": self.question_type,
            "requested": self.requested,
            "message": self.message,
        }


@dataclass(frozen=True)
class TypeReport:
    """
    Selection feedback for one type.

    Attributes:
        question_type: Type reported on
        requested: Total after layout clamping
        delivered: Questions placed in the section
        level: Fallback level that produced them ("manual" in manual mode)
        fell_back: Filters relaxed or fewer than requested delivered
        unsatisfiable: Nothing found at any level
    """

    question_type: str
    requested: int
    delivered: int
    level: str
    fell_back: bool
    unsatisfiable: bool

    @property
    def shortfall(self) -> int:
        return max(self.requested - self.delivered, 0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "question_type": self.question_type,
            "requested": self.requested,
            "delivered": self.delivered,
            "level": self.level,
            "fell_back": self.fell_back,
            "unsatisfiable": self.unsatisfiable,
        }


@dataclass(frozen=True)
class ComposeResult:
    """
    Complete composition result (immutable).

    Exactly one of ``paper`` and ``error`` is set.

    Example:
        >>> result = compose_paper(request, repository)
        >>> result.ok
        True
        >>> result.paper.total_marks
        32
    """

    paper: Optional[ComposedPaper] = None
    error: Optional[ComposeError] = None
    adjustments: tuple[Adjustment, ...] = ()
    truncations: tuple[LayoutTruncation, ...] = ()
    warnings: tuple[UnsatisfiableTypeWarning, ...] = ()
    type_reports: tuple[TypeReport, ...] = ()

    def __post_init__(self) -> None:
        if (self.paper is None) == (self.error is None):
            raise ValueError("ComposeResult needs exactly one of paper and error")

    @property
    def ok(self) -> bool:
        return self.error is None

    def report(self, question_type: str) -> Optional[TypeReport]:
        for report in self.type_reports:
            if report.question_type == question_type:
                return report
        return None

    def raise_for_error(self) -> ComposedPaper:
        """Return the paper, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.paper

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "error": (
                {"type": type(self.error).__name__, "message": str(self.error)}
                if self.error else None
            ),
            "paper": paper_to_dict(self.paper) if self.paper else None,
            "adjustments": [a.to_dict() for a in self.adjustments],
            "truncations": [t.to_dict() for t in self.truncations],
            "warnings": [w.to_dict() for w in self.warnings],
            "type_reports": [r.to_dict() for r in self.type_reports],
        }
