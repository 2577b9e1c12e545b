"""
Tests for the matching engine.

Tests cover:
- Tokenization and stemming
- TF-IDF corpus fitting and scoring
- Ranking order, ties and truncation
- Corpus teardown on every exit path

Run with: pytest backend/tests/test_ranking.py -v
"""
import pytest
from unittest.mock import patch

from staffing.services.ranking import (
    CandidateCorpus,
    CandidateDocument,
    IndexBuildError,
    rank,
    tokenize,
)


def docs(*keywords):
    return [CandidateDocument(employee_id=i + 1, keywords=k) for i, k in enumerate(keywords)]


class TestTokenize:
    """Tests for the unicode tokenizer with Porter stemming."""

    def test_stems_words(self):
        """Should reduce words to their Porter stems."""
        assert tokenize("running systems") == ["run", "system"]

    def test_splits_unicode_words(self):
        """Non-ASCII letters belong to words."""
        assert len(tokenize("järjestelmä kehitys")) == 2

    def test_empty_text(self):
        assert tokenize("") == []
        assert tokenize(None) == []


class TestRank:
    """Tests for ranking candidates against a query document."""

    def test_relevant_candidate_ranks_first(self):
        """Employee sharing query terms outranks an unrelated one."""
        candidates = docs(
            "paint brush canvas",
            "go backend concurrency concurrency concurrency concurrency",
        )
        results = rank("payments scalable backend systems", candidates, limit=10)

        assert [employee_id for _, employee_id in results] == [2, 1]
        assert results[0][0] > 0
        assert results[1][0] == pytest.approx(0.0)

    def test_more_repetitions_never_score_lower(self):
        """Repeating query terms in a candidate cannot lower its score."""
        candidates = docs(
            "go backend",
            "go go go backend backend",
            "paint canvas",
        )
        results = dict((eid, score) for score, eid in rank("go backend", candidates, limit=10))

        assert results[2] >= results[1]
        assert results[1] > results[3]

    def test_ties_keep_candidate_order(self):
        """Equal scores keep the input order (stable sort)."""
        candidates = docs("python", "python", "python")
        results = rank("python", candidates, limit=10)
        assert [eid for _, eid in results] == [1, 2, 3]

    def test_truncates_to_limit(self):
        candidates = docs(*[f"python dev{i}" for i in range(20)])
        assert len(rank("python", candidates, limit=5)) == 5

    def test_empty_candidates_returns_empty_list(self):
        assert rank("python", [], limit=10) == []

    def test_empty_query_scores_zero(self):
        """An empty query scores zero against every candidate."""
        results = rank("", docs("python", "rust"), limit=10)
        assert results == [(0.0, 1), (0.0, 2)]

    def test_candidates_without_tokens_score_zero(self):
        """A corpus with no vocabulary does not fail."""
        results = rank("python", docs("", ""), limit=10)
        assert results == [(0.0, 1), (0.0, 2)]

    def test_query_terms_outside_corpus_are_ignored(self):
        """The query is projected into the candidates' feature space."""
        candidates = docs("backend python", "frontend react")
        assert rank("haskell backend", candidates, 10) == rank("backend", candidates, 10)

    def test_stemming_matches_word_forms(self):
        """Different inflections of a word match after stemming."""
        results = rank("testing", docs("tests", "paint"), limit=10)
        assert results[0][1] == 1
        assert results[0][0] > 0

    def test_vectorizer_failure_raises_index_build_error(self):
        """Failures while fitting surface as IndexBuildError."""
        with patch("staffing.services.ranking.TfidfVectorizer") as mock_vectorizer:
            mock_vectorizer.return_value.fit_transform.side_effect = ValueError("boom")
            with pytest.raises(IndexBuildError):
                rank("python", docs("python"), limit=10)


class TestCandidateCorpus:
    """Tests for the scoped corpus resource."""

    def test_released_after_block(self):
        """Fitted state is dropped when the block exits."""
        with CandidateCorpus(docs("python", "rust")) as corpus:
            scores = corpus.score("python")
            assert scores[0] > scores[1]

        assert corpus.closed
        with pytest.raises(IndexBuildError):
            corpus.score("python")

    def test_released_when_block_raises(self):
        """Teardown also happens when the block raises."""
        corpus = CandidateCorpus(docs("python"))
        with pytest.raises(RuntimeError):
            with corpus:
                raise RuntimeError("request failed")

        assert corpus.closed

    def test_cannot_refit_closed_corpus(self):
        corpus = CandidateCorpus(docs("python"))
        corpus.close()
        with pytest.raises(IndexBuildError):
            corpus.fit()
