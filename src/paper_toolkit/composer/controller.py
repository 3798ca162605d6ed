"""
Module: composer.controller

Purpose:
    Orchestrate the complete paper composition pipeline.
    Validate -> Budget -> Select (per type) -> Truncate -> Marks -> Paper

Key Functions:
    - compose_paper(): Main entry point for composing a paper

Concurrency:
    Per-type selection runs concurrently in a ThreadPoolExecutor; the
    fallback cascade inside one type stays sequential. Assembly of the
    ComposedPaper is the only synchronization point. The repository is
    read-only and types share no mutable state, so no locks are needed.

Error handling:
    This is the only layer that catches. Inner layers raise
    ValidationError / RepositoryError; they come back as
    ComposeResult.error. Unsatisfiable types are warnings, not errors.

Dependencies:
    - composer.layout: Budgets and post-hoc caps
    - composer.selection: Fallback cascade and chapter balancing
    - core.models: ComposedPaper and friends

Used By:
    - paper_toolkit.cli: compose command
"""

from __future__ import annotations

import logging
import random
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Union

from paper_toolkit.core.errors import ComposeError
from paper_toolkit.core.models import (
    ComposedPaper,
    ComposedSection,
    Question,
    SelectedQuestion,
    SelectionCriteria,
    resolve_marks,
)

from .config import ComposeConfig
from .layout import enforce_layout_caps, resolve_budgets
from .repository import QuestionRepository
from .request import CompositionRequest, SelectionMode
from .results import ComposeResult, EmptyPaperError, TypeReport, UnsatisfiableTypeWarning
from .selection import (
    distribute_by_chapter,
    in_scope_first,
    select_with_fallback,
    shuffled,
    type_rng,
)

logger = logging.getLogger(__name__)

MANUAL_LEVEL = "manual"


@dataclass(frozen=True)
class _TypeSelection:
    """Questions picked for one type plus the report on how."""

    questions: tuple[Question, ...]
    report: TypeReport


def compose_paper(
    request: Union[CompositionRequest, Mapping[str, Any]],
    repository: QuestionRepository,
    *,
    config: Optional[ComposeConfig] = None,
) -> ComposeResult:
    """
    Compose a paper from start to finish.

    Pipeline:
    1. Validate the request (dict payloads go through the JSON schema)
    2. Clamp requested counts to the layout (random mode)
    3. Select each type: fallback cascade + chapter balance, or manual ids
    4. Truncate to the requested totals, then to the layout caps
    5. Resolve marks and assemble the ComposedPaper

    Args:
        request: CompositionRequest or its JSON payload
        repository: Read-only question source
        config: Tuning (defaults to ComposeConfig())

    Returns:
        ComposeResult. Never raises for ComposeError subclasses; call
        result.raise_for_error() to get exceptions instead.

    Example:
        >>> result = compose_paper(payload, InMemoryQuestionRepository(bank))
        >>> result.paper.total_marks
        32
    """
    config = config or ComposeConfig()
    start_time = time.perf_counter()

    try:
        if not isinstance(request, CompositionRequest):
            request = CompositionRequest.from_dict(request, strict=config.strict_validation)
        return _compose(request, repository, config, start_time)
    except ComposeError as e:
        logger.error(f"Composition failed: {e}")
        return ComposeResult(error=e)


def _compose(
    request: CompositionRequest,
    repository: QuestionRepository,
    config: ComposeConfig,
    start_time: float,
) -> ComposeResult:
    seed = request.seed if request.seed is not None else _draw_seed()
    logger.info(
        f"Composing {request.mode.value} paper for subject {request.subject_id} "
        f"({request.layout.name}, {len(request.scope)} chapters, seed {seed})"
    )

    budget = resolve_budgets(request.criteria, request.layout, request.subject_category)
    if request.mode is SelectionMode.MANUAL:
        # Manual id lists bypass budgeting; the post-hoc caps catch overflow
        criteria = dict(request.criteria)
        adjustments = ()
    else:
        criteria = budget.criteria
        adjustments = budget.adjustments

    types = [t for t in request.type_order if criteria[t].is_requested]
    for question_type, ids in request.manual_ids.items():
        type_criteria = criteria.get(question_type)
        if ids and (type_criteria is None or not type_criteria.is_requested):
            logger.warning(
                f"Manual {question_type} ids ignored: requested total is 0 ({len(ids)} ids)"
            )
    if not types:
        return ComposeResult(
            error=EmptyPaperError("No question type was requested"),
            adjustments=adjustments,
        )

    selections = _select_all(types, criteria, request, repository, config, seed)

    warnings: List[UnsatisfiableTypeWarning] = []
    sections: List[ComposedSection] = []
    for question_type in types:
        selection = selections[question_type]
        if selection.report.unsatisfiable:
            warnings.append(UnsatisfiableTypeWarning(
                question_type,
                selection.report.requested,
                f"No {question_type} questions found for this subject",
            ))
            continue
        sections.append(_build_section(
            question_type, selection.questions, criteria[question_type],
            request.mark_overrides,
        ))

    reports = tuple(selections[t].report for t in types)

    sections, truncations = enforce_layout_caps(sections, budget.mcq_max, budget.subjective_max)

    if not sections:
        return ComposeResult(
            error=EmptyPaperError("Every requested question type was unsatisfiable"),
            adjustments=adjustments,
            truncations=tuple(truncations),
            warnings=tuple(warnings),
            type_reports=reports,
        )

    paper = ComposedPaper(
        sections=tuple(sections),
        layout=request.layout,
        subject_id=request.subject_id,
        seed=seed,
    )

    elapsed = time.perf_counter() - start_time
    logger.info(
        f"Composed {paper.question_count} questions in {len(sections)} sections, "
        f"{paper.total_marks} marks ({elapsed:.2f}s)"
    )

    return ComposeResult(
        paper=paper,
        adjustments=adjustments,
        truncations=tuple(truncations),
        warnings=tuple(warnings),
        type_reports=reports,
    )


def _select_all(
    types: List[str],
    criteria: Mapping[str, SelectionCriteria],
    request: CompositionRequest,
    repository: QuestionRepository,
    config: ComposeConfig,
    seed: int,
) -> Dict[str, _TypeSelection]:
    """Run selection for every type, concurrently when configured."""

    def select(question_type: str) -> _TypeSelection:
        if request.mode is SelectionMode.MANUAL:
            return _select_manual(question_type, criteria[question_type], request, repository)
        return _select_random(
            question_type, criteria[question_type], request, repository, config, seed
        )

    if not config.parallel or len(types) == 1:
        return {t: select(t) for t in types}

    workers = min(config.max_workers, len(types))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="compose") as executor:
        futures = {t: executor.submit(select, t) for t in types}
        return {t: future.result() for t, future in futures.items()}


def _select_random(
    question_type: str,
    criteria: SelectionCriteria,
    request: CompositionRequest,
    repository: QuestionRepository,
    config: ComposeConfig,
    seed: int,
) -> _TypeSelection:
    desired = criteria.requested_total
    outcome = select_with_fallback(
        repository,
        question_type,
        request.subject_id,
        request.scope.chapter_ids,
        desired=desired,
        source=criteria.source,
        difficulty=criteria.difficulty_filter,
        fetch_limit=config.fetch_limit(desired),
        cascade=config.cascade,
    )

    pool = shuffled(outcome.questions, type_rng(seed, question_type))
    if request.scope.is_multi_chapter:
        picked = distribute_by_chapter(pool, desired, request.scope.chapter_ids)
    else:
        picked = in_scope_first(pool, request.scope.chapter_ids)[:desired]

    logger.debug(f"{question_type}: picked {len(picked)}/{desired} from pool of {len(pool)}")

    return _TypeSelection(
        questions=tuple(picked),
        report=TypeReport(
            question_type=question_type,
            requested=desired,
            delivered=len(picked),
            level=outcome.level,
            fell_back=outcome.fell_back,
            unsatisfiable=outcome.unsatisfiable,
        ),
    )


def _select_manual(
    question_type: str,
    criteria: SelectionCriteria,
    request: CompositionRequest,
    repository: QuestionRepository,
) -> _TypeSelection:
    """Verify the caller's ordered ids; unknown or mistyped ids are dropped."""
    wanted = request.manual_ids.get(question_type, ())
    found = {q.id: q for q in repository.get_many(wanted)}

    picked: List[Question] = []
    seen: set[str] = set()
    for question_id in wanted:
        question = found.get(question_id)
        if question is None:
            logger.warning(f"Manual {question_type} id {question_id} not found; dropped")
            continue
        if question.question_type != question_type:
            logger.warning(
                f"Manual id {question_id} is {question.question_type}, "
                f"not {question_type}; dropped"
            )
            continue
        if question_id in seen:
            logger.warning(f"Manual id {question_id} listed twice; duplicate dropped")
            continue
        seen.add(question_id)
        picked.append(question)

    requested = criteria.requested_total
    if len(picked) > requested:
        logger.warning(
            f"Manual {question_type}: {len(picked) - requested} ids beyond the "
            f"requested total of {requested} dropped"
        )
    picked = picked[:requested]

    return _TypeSelection(
        questions=tuple(picked),
        report=TypeReport(
            question_type=question_type,
            requested=requested,
            delivered=len(picked),
            level=MANUAL_LEVEL,
            fell_back=len(picked) < requested,
            unsatisfiable=requested > 0 and not picked,
        ),
    )


def _build_section(
    question_type: str,
    questions: tuple[Question, ...],
    criteria: SelectionCriteria,
    overrides: Mapping[str, int],
) -> ComposedSection:
    selected = tuple(
        SelectedQuestion(
            question_id=question.id,
            question_type=question_type,
            order=order,
            marks=resolve_marks(question.id, criteria.default_marks, overrides),
            chapter_id=question.chapter_id,
            overridden=question.id in overrides,
        )
        for order, question in enumerate(questions, 1)
    )
    return ComposedSection(
        question_type=question_type,
        questions=selected,
        attempt=min(criteria.requested_attempt, len(selected)),
        default_marks=criteria.default_marks,
    )


def _draw_seed() -> int:
    """Fresh seed, recorded on the paper so it can be regenerated."""
    return random.SystemRandom().randrange(2**31)
