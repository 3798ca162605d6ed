"""
Module: composer.selection.relaxation

Purpose:
    The fallback cascade as data: an ordered tuple of relaxation steps,
    each naming the filters it drops from the strict query. Adding a level
    means adding a step, not new control flow.

Key Classes:
    - RelaxationStep: Filters dropped at one level

Key Constants:
    - DEFAULT_CASCADE: strict -> drop difficulty -> drop source ->
      type + subject only

Used By:
    - composer.selection.fallback: select_with_fallback()
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from paper_toolkit.composer.repository import QuestionQuery


@dataclass(frozen=True)
class RelaxationStep:
    """
    One level of the fallback cascade.

    Steps are cumulative: each names every filter dropped at that level,
    so a later step must drop a superset of an earlier one for the
    cascade to stay monotonic.
    """

    name: str
    drop_difficulty: bool = False
    drop_source: bool = False
    drop_chapters: bool = False

    def apply(self, strict: QuestionQuery) -> QuestionQuery:
        """Relax the strict query according to this step."""
        return replace(
            strict,
            difficulty=None if self.drop_difficulty else strict.difficulty,
            source=None if self.drop_source else strict.source,
            chapter_ids=None if self.drop_chapters else strict.chapter_ids,
        )

    def covers(self, other: RelaxationStep) -> bool:
        """True if this step drops at least everything other drops."""
        return (
            (self.drop_difficulty or not other.drop_difficulty)
            and (self.drop_source or not other.drop_source)
            and (self.drop_chapters or not other.drop_chapters)
        )


DEFAULT_CASCADE: tuple[RelaxationStep, ...] = (
    RelaxationStep("strict"),
    RelaxationStep("drop_difficulty", drop_difficulty=True),
    RelaxationStep("drop_source", drop_difficulty=True, drop_source=True),
    RelaxationStep(
        "type_and_subject", drop_difficulty=True, drop_source=True, drop_chapters=True
    ),
)


def validate_cascade(cascade: tuple[RelaxationStep, ...]) -> None:
    """
    Check that a cascade is non-empty and monotonic.

    Raises:
        ValueError: If a step is stricter than an earlier one
    """
    if not cascade:
        raise ValueError("Relaxation cascade cannot be empty")
    for earlier, later in zip(cascade, cascade[1:]):
        if not later.covers(earlier):
            raise ValueError(
                f"Relaxation step {later.name!r} is stricter than {earlier.name!r}"
            )
