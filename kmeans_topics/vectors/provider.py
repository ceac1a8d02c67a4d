"""
Document vector providers consumed by the clustering engine.

The engine needs two capabilities from the corpus side:
- VectorProvider: sparse (term_id, weight) pairs per document
- TermDictionary: the text of a term_id, for topic reports

Term weighting is not computed here. InMemoryVectorProvider wraps weights
computed elsewhere; TfidfVectorProvider delegates tokenization and TF-IDF
weighting to scikit-learn.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any, Protocol, Union

import numpy as np

logger = logging.getLogger(__name__)

SparseRow = Union[Mapping[int, float], Iterable[tuple[int, float]]]


class VectorProvider(Protocol):
    """Supplies one sparse weight vector per document over a fixed vocabulary."""

    @property
    def num_docs(self) -> int:
        ...

    @property
    def num_terms(self) -> int:
        ...

    def doc_weights(self, doc_id: int) -> Iterable[tuple[int, float]]:
        """(term_id, weight) pairs for one document; absent terms weigh 0."""
        ...


class TermDictionary(Protocol):
    """Maps term ids back to their text."""

    def term_text(self, term_id: int) -> str:
        ...


class InMemoryVectorProvider:
    """
    Provider over precomputed sparse rows.

    Usage:
        >>> provider = InMemoryVectorProvider(
        ...     rows=[{0: 1.0}, {2: 0.5}],
        ...     vocabulary=["gpu", "memory", "fab"],
        ... )
        >>> list(provider.doc_weights(1))
        [(2, 0.5)]
    """

    def __init__(self, rows: Sequence[SparseRow], vocabulary: Sequence[str]):
        self._rows: list[list[tuple[int, float]]] = []
        for row in rows:
            items = row.items() if isinstance(row, Mapping) else row
            self._rows.append([(int(t), float(w)) for t, w in items])
        self._vocabulary = list(vocabulary)

    @classmethod
    def from_dense(
        cls, matrix: Any, vocabulary: Sequence[str] | None = None
    ) -> "InMemoryVectorProvider":
        """
        Build a provider from a dense (num_docs, num_terms) matrix.

        Zero entries are dropped. Without a vocabulary, terms are named
        "term_<id>".
        """
        dense = np.asarray(matrix, dtype=np.float64)
        if dense.ndim != 2:
            raise ValueError(f"Expected a 2-d matrix, got shape {dense.shape}")
        if vocabulary is None:
            vocabulary = [f"term_{i}" for i in range(dense.shape[1])]
        if len(vocabulary) != dense.shape[1]:
            raise ValueError(
                f"vocabulary ({len(vocabulary)}) and matrix columns "
                f"({dense.shape[1]}) must have the same length"
            )
        rows = [
            [(int(t), float(row[t])) for t in np.flatnonzero(row)]
            for row in dense
        ]
        return cls(rows, vocabulary)

    @property
    def num_docs(self) -> int:
        return len(self._rows)

    @property
    def num_terms(self) -> int:
        return len(self._vocabulary)

    def doc_weights(self, doc_id: int) -> list[tuple[int, float]]:
        return list(self._rows[doc_id])

    def term_text(self, term_id: int) -> str:
        return self._vocabulary[term_id]


class TfidfVectorProvider:
    """
    Provider backed by a fitted scikit-learn TfidfVectorizer.

    Usage:
        >>> provider = TfidfVectorProvider.from_texts(
        ...     ["gpu gpu chips", "memory bandwidth", "gpu memory"],
        ... )
        >>> provider.num_docs, provider.num_terms
        (3, 4)
    """

    def __init__(self, matrix: Any, feature_names: Sequence[str]):
        """
        Args:
            matrix: Sparse document-term matrix (num_docs, num_terms), CSR.
            feature_names: Term text per column.
        """
        self._matrix = matrix.tocsr()
        self._feature_names = [str(name) for name in feature_names]

    @classmethod
    def from_texts(
        cls,
        texts: Sequence[str],
        stop_words: Sequence[str] | None = None,
        **vectorizer_options: Any,
    ) -> "TfidfVectorProvider":
        """
        Fit TF-IDF weights over a list of document texts.

        Args:
            texts: One string per document; doc_id is the list index.
            stop_words: Words to drop before weighting.
            **vectorizer_options: Extra TfidfVectorizer keyword arguments.

        Returns:
            Provider exposing the fitted weights.
        """
        from sklearn.feature_extraction.text import TfidfVectorizer

        vectorizer = TfidfVectorizer(
            stop_words=list(stop_words) if stop_words else None,
            **vectorizer_options,
        )
        matrix = vectorizer.fit_transform(texts)
        feature_names = vectorizer.get_feature_names_out()
        logger.info(
            f"Created tf-idf vectors: {matrix.shape[0]} docs, "
            f"{matrix.shape[1]} terms, {matrix.nnz} non-zero weights"
        )
        return cls(matrix, feature_names)

    @property
    def num_docs(self) -> int:
        return self._matrix.shape[0]

    @property
    def num_terms(self) -> int:
        return self._matrix.shape[1]

    def doc_weights(self, doc_id: int) -> list[tuple[int, float]]:
        start, end = self._matrix.indptr[doc_id], self._matrix.indptr[doc_id + 1]
        indices = self._matrix.indices[start:end]
        data = self._matrix.data[start:end]
        return [(int(t), float(w)) for t, w in zip(indices, data)]

    def term_text(self, term_id: int) -> str:
        return self._feature_names[term_id]


def load_line_corpus(path: str | Path) -> list[str]:
    """Read a line corpus: one document per line, so doc_id is the line index.

    Blank lines are kept as empty documents.
    """
    with open(path, encoding="utf-8") as f:
        documents = [line.rstrip("\r\n") for line in f]
    logger.info(f"Loaded {len(documents)} documents from {path}")
    return documents


def load_stop_words(path: str | Path) -> list[str]:
    """Read a stop word list: one word per non-blank line."""
    with open(path, encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip()]
