import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import paper_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from paper_toolkit.composer.repository import InMemoryQuestionRepository  # noqa: E402
from paper_toolkit.core.models import (  # noqa: E402
    Difficulty,
    McqOption,
    Question,
    SourceCategory,
)


def make_question(
    qid,
    question_type="short",
    chapter_id="c1",
    *,
    subject_id="bio",
    difficulty=Difficulty.ANY,
    source=SourceCategory.BOOK,
    text=None,
    text_secondary=None,
    correct_option=None,
):
    """Build a Question with sensible defaults (mcq gets four options)."""
    options = ()
    if question_type == "mcq":
        options = tuple(
            McqOption(label, f"Option {label.upper()} of {qid}") for label in "abcd"
        )
        correct_option = correct_option or "b"
    return Question(
        id=str(qid),
        question_type=question_type,
        subject_id=subject_id,
        chapter_id=chapter_id,
        text=text if text is not None else f"Question {qid}?",
        text_secondary=text_secondary,
        difficulty=difficulty,
        source=source,
        options=options,
        correct_option=correct_option,
    )


def make_bank(counts, *, start=1, subject_id="bio", **kwargs):
    """
    Build questions from {(question_type, chapter_id): count}.

    Ids are sequential integers starting at ``start``.
    """
    questions = []
    next_id = start
    for (question_type, chapter_id), count in counts.items():
        for _ in range(count):
            questions.append(make_question(
                next_id, question_type, chapter_id, subject_id=subject_id, **kwargs
            ))
            next_id += 1
    return questions


@pytest.fixture
def question_factory():
    """Return the make_question helper."""
    return make_question


@pytest.fixture
def bank_factory():
    """Return the make_bank helper."""
    return make_bank


@pytest.fixture
def standard_bank():
    """Three chapters with plenty of mcq, short and long questions."""
    return make_bank({
        ("mcq", "c1"): 10, ("mcq", "c2"): 10, ("mcq", "c3"): 10,
        ("short", "c1"): 10, ("short", "c2"): 10, ("short", "c3"): 10,
        ("long", "c1"): 5, ("long", "c2"): 5, ("long", "c3"): 5,
    })


@pytest.fixture
def repository(standard_bank):
    """In-memory repository over the standard bank."""
    return InMemoryQuestionRepository(standard_bank)


@pytest.fixture
def base_request():
    """A valid random-mode request over the standard bank."""
    return {
        "subject_id": "bio",
        "subject_name": "Biology",
        "chapters": ["c1", "c2", "c3"],
        "layout": "separate",
        "seed": 11,
        "types": {
            "mcq": {"total": 10, "attempt": 10, "marks": 1},
            "short": {"total": 10, "attempt": 6, "marks": 2},
            "long": {"total": 5, "attempt": 3, "marks": 5},
        },
    }
