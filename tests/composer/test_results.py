"""
Tests for ComposeResult invariants.
"""

import pytest

from paper_toolkit.composer import ComposeResult, EmptyPaperError, compose_paper


class TestComposeResult:

    def test_result_when_paper_and_error_both_missing_then_raises(self):
        with pytest.raises(ValueError, match="exactly one"):
            ComposeResult()

    def test_result_when_paper_and_error_both_set_then_raises(self, base_request, repository):
        # Arrange
        paper = compose_paper(base_request, repository).raise_for_error()

        # Act / Assert
        with pytest.raises(ValueError, match="exactly one"):
            ComposeResult(paper=paper, error=EmptyPaperError("empty"))

    def test_raise_for_error_when_paper_then_returned(self, base_request, repository):
        result = compose_paper(base_request, repository)

        assert result.raise_for_error() is result.paper

    def test_raise_for_error_when_error_then_raised(self):
        result = ComposeResult(error=EmptyPaperError("nothing selected"))

        with pytest.raises(EmptyPaperError, match="nothing selected"):
            result.raise_for_error()
