"""
Unit tests for the in-memory question repository.
"""

from paper_toolkit.composer.repository import (
    InMemoryQuestionRepository,
    QuestionQuery,
    SortOrder,
)
from paper_toolkit.core.models import Difficulty, SourceCategory
from paper_toolkit.core.utils.serialization import save_questions_jsonl


class TestInMemoryQuestionRepository:

    def test_query_when_default_order_then_id_descending_numeric(self, question_factory):
        # Arrange
        repo = InMemoryQuestionRepository(
            [question_factory(i) for i in (2, 10, 9, 1)]
        )

        # Act
        rows = repo.query(QuestionQuery("short", "bio"))

        # Assert
        assert [q.id for q in rows] == ["10", "9", "2", "1"]

    def test_query_when_ascending_then_id_ascending(self, question_factory):
        repo = InMemoryQuestionRepository([question_factory(i) for i in (3, 1, 2)])

        rows = repo.query(QuestionQuery("short", "bio", order=SortOrder.ID_ASC))

        assert [q.id for q in rows] == ["1", "2", "3"]

    def test_query_when_filters_then_all_applied(self, question_factory):
        repo = InMemoryQuestionRepository([
            question_factory(1, chapter_id="c1", difficulty=Difficulty.HARD),
            question_factory(2, chapter_id="c2", difficulty=Difficulty.HARD),
            question_factory(3, chapter_id="c1", difficulty=Difficulty.EASY),
            question_factory(4, chapter_id="c1", difficulty=Difficulty.HARD,
                             source=SourceCategory.PAST_PAPER),
            question_factory(5, "long", chapter_id="c1", difficulty=Difficulty.HARD),
            question_factory(6, chapter_id="c1", subject_id="chem", difficulty=Difficulty.HARD),
        ])

        rows = repo.query(QuestionQuery(
            "short", "bio", chapter_ids=("c1",),
            source=SourceCategory.BOOK, difficulty=Difficulty.HARD,
        ))

        assert [q.id for q in rows] == ["1"]

    def test_query_when_limit_then_truncated(self, question_factory):
        repo = InMemoryQuestionRepository([question_factory(i) for i in range(1, 8)])

        rows = repo.query(QuestionQuery("short", "bio", limit=3))

        assert [q.id for q in rows] == ["7", "6", "5"]

    def test_query_when_called_then_recorded(self, question_factory):
        repo = InMemoryQuestionRepository([question_factory(1)])

        repo.query(QuestionQuery("short", "bio"))
        repo.query(QuestionQuery("long", "bio"))

        assert [q.question_type for q in repo.queries] == ["short", "long"]

    def test_init_when_duplicate_ids_then_first_kept(self, question_factory):
        first = question_factory(1, text="first")
        repo = InMemoryQuestionRepository([first, question_factory(1, text="second")])

        assert len(repo) == 1
        assert repo.get_many(["1"]) == [first]

    def test_get_many_when_unknown_ids_then_absent(self, question_factory):
        repo = InMemoryQuestionRepository([question_factory(1), question_factory(2)])

        assert [q.id for q in repo.get_many(["2", "99", "1"])] == ["2", "1"]

    def test_from_jsonl_when_saved_bank_then_loaded(self, tmp_path, standard_bank):
        path = tmp_path / "bank.jsonl"
        save_questions_jsonl(standard_bank, path)

        repo = InMemoryQuestionRepository.from_jsonl(path, strict=True)

        assert len(repo) == len(standard_bank)
