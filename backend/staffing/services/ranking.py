"""
Matching Engine - Vector-Space Ranking of Employee Keyword Documents

Builds a throwaway corpus from candidate keyword documents, fits a TF-IDF
feature space over the candidates only, projects the query into that space
and scores every candidate with an inner product.

Architecture:
    candidates → [tokenize + Porter stem] → TfidfVectorizer.fit
    query      → [tokenize + Porter stem] → transform → L2 normalize
                              ↓
              scores = corpus_matrix · query_vector
                              ↓
              stable sort descending → top `limit`

Weighting:
    Candidate rows keep raw TF-IDF weights (no length normalization), so
    repeating a query term in a candidate document never lowers its score.
    The query is L2-normalized so scores do not depend on query length.

Key Classes:
    - CandidateDocument: (employee_id, keywords) value fed to the corpus
    - CandidateCorpus: scoped resource, released on every exit path

Complexity:
    - Fit: O(n * m) where n=candidates, m=avg tokens
    - Score: O(nnz) sparse matrix-vector product
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

import numpy as np
from nltk.stem import PorterStemmer
from nltk.tokenize import RegexpTokenizer
from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.preprocessing import normalize as l2_normalize

from staffing.middleware.metrics import record_corpus_size

logger = logging.getLogger(__name__)

_word_tokenizer = RegexpTokenizer(r"\w+")
_stemmer = PorterStemmer()


class IndexBuildError(Exception):
    """Corpus could not be built or fitted. Fatal for the current search."""


@dataclass(frozen=True)
class CandidateDocument:
    employee_id: int
    keywords: str


@lru_cache(maxsize=50000)
def _stem(token: str) -> str:
    return _stemmer.stem(token, to_lowercase=False)


def tokenize(text: str) -> List[str]:
    """
    Split text into stemmed word tokens.

    Unicode-aware word splitting, Porter stemming, no case folding and no
    stop-word removal (keyword documents are already normalized).

    Args:
        text: Keyword document

    Returns:
        List of stemmed tokens
    """
    if not text:
        return []
    return [_stem(token) for token in _word_tokenizer.tokenize(text)]


class CandidateCorpus:
    """
    Transient TF-IDF index over candidate keyword documents.

    Use as a context manager: the feature space is fitted on enter and
    released on exit, whether the block finishes, raises or is cancelled.

    Example:
        >>> docs = [CandidateDocument(1, "python backend"), CandidateDocument(2, "paint")]
        >>> with CandidateCorpus(docs) as corpus:
        ...     scores = corpus.score("backend")
    """

    def __init__(self, documents: Sequence[CandidateDocument]) -> None:
        self.documents: List[CandidateDocument] = list(documents)
        self._vectorizer: Optional[TfidfVectorizer] = None
        self._matrix = None
        self._has_vocabulary = False
        self.closed = False

    def __enter__(self) -> "CandidateCorpus":
        self.fit()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False

    def fit(self) -> "CandidateCorpus":
        """
        Fit the feature space on candidate documents only.

        Raises:
            IndexBuildError: If the corpus is closed or vectorizing fails
        """
        if self.closed:
            raise IndexBuildError("Corpus has been closed")

        texts = [doc.keywords or "" for doc in self.documents]

        # No tokens anywhere: nothing to fit, every candidate scores zero
        if not any(tokenize(text) for text in texts):
            self._has_vocabulary = False
            return self

        vectorizer = TfidfVectorizer(
            analyzer=tokenize,
            norm=None,
            smooth_idf=True,
        )
        try:
            self._matrix = vectorizer.fit_transform(texts)
        except (ValueError, MemoryError) as e:
            raise IndexBuildError(f"Failed to build candidate corpus: {e}") from e

        self._vectorizer = vectorizer
        self._has_vocabulary = True
        return self

    def score(self, query: str) -> np.ndarray:
        """
        Score every candidate against the query.

        Args:
            query: Query keyword document (project or position keywords)

        Returns:
            Array of scores aligned with `documents`. All zeros for an empty
            query or a corpus without vocabulary.
        """
        if self.closed:
            raise IndexBuildError("Corpus has been closed")

        if not self._has_vocabulary or not query:
            return np.zeros(len(self.documents))

        query_vector = l2_normalize(self._vectorizer.transform([query]))
        scores = (self._matrix @ query_vector.T).toarray().ravel()
        return np.nan_to_num(scores)

    def close(self) -> None:
        """Release the fitted vectorizer and matrix."""
        self._vectorizer = None
        self._matrix = None
        self._has_vocabulary = False
        if not self.closed:
            self.closed = True
            logger.debug(f"Released candidate corpus of {len(self.documents)} documents")


def rank(
    query: str,
    candidates: Sequence[CandidateDocument],
    limit: int,
) -> List[Tuple[float, int]]:
    """
    Rank candidates against a query keyword document.

    Args:
        query: Query keyword document
        candidates: Candidate documents, in a stable order
        limit: Maximum number of results

    Returns:
        List of (score, employee_id) sorted by score descending; ties keep
        input order.

    Raises:
        IndexBuildError: If the corpus cannot be built
    """
    if not candidates:
        return []

    record_corpus_size(len(candidates))

    with CandidateCorpus(candidates) as corpus:
        scores = corpus.score(query)

    # sorted() is stable, so equal scores keep candidate order
    order = sorted(range(len(candidates)), key=lambda i: -scores[i])
    return [(float(scores[i]), candidates[i].employee_id) for i in order[:limit]]
