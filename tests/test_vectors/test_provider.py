"""Tests for document vector providers."""

import numpy as np
import pytest

from kmeans_topics.vectors.provider import (
    InMemoryVectorProvider,
    TfidfVectorProvider,
    load_line_corpus,
    load_stop_words,
)


class TestInMemoryVectorProvider:
    """Tests for InMemoryVectorProvider."""

    def test_mapping_and_pair_rows(self):
        provider = InMemoryVectorProvider(
            rows=[{0: 1.0, 2: 0.5}, [(1, 0.25)]],
            vocabulary=["gpu", "memory", "fab"],
        )

        assert provider.num_docs == 2
        assert provider.num_terms == 3
        assert provider.doc_weights(0) == [(0, 1.0), (2, 0.5)]
        assert provider.doc_weights(1) == [(1, 0.25)]
        assert provider.term_text(2) == "fab"

    def test_from_dense_drops_zeros(self):
        provider = InMemoryVectorProvider.from_dense([[0.0, 3.0], [1.5, 0.0]], ["a", "b"])

        assert provider.doc_weights(0) == [(1, 3.0)]
        assert provider.doc_weights(1) == [(0, 1.5)]

    def test_from_dense_default_vocabulary(self):
        provider = InMemoryVectorProvider.from_dense(np.eye(3))
        assert provider.term_text(1) == "term_1"

    def test_from_dense_vocabulary_mismatch(self):
        with pytest.raises(ValueError, match="vocabulary"):
            InMemoryVectorProvider.from_dense([[1.0, 2.0]], ["only_one"])

    def test_from_dense_rejects_1d(self):
        with pytest.raises(ValueError, match="2-d"):
            InMemoryVectorProvider.from_dense([1.0, 2.0])


class TestTfidfVectorProvider:
    """Tests for TfidfVectorProvider."""

    @pytest.fixture
    def texts(self):
        return [
            "nvidia gpu architecture gpu",
            "hbm memory bandwidth",
            "gpu memory demand",
        ]

    def test_shape(self, texts):
        provider = TfidfVectorProvider.from_texts(texts)

        assert provider.num_docs == 3
        # architecture, bandwidth, demand, gpu, hbm, memory, nvidia
        assert provider.num_terms == 7

    def test_sparse_rows_cover_document_terms(self, texts):
        provider = TfidfVectorProvider.from_texts(texts)

        words = {provider.term_text(t) for t, _ in provider.doc_weights(1)}

        assert words == {"hbm", "memory", "bandwidth"}
        assert all(w > 0 for _, w in provider.doc_weights(1))

    def test_rows_are_l2_normalized(self, texts):
        provider = TfidfVectorProvider.from_texts(texts)
        weights = np.array([w for _, w in provider.doc_weights(0)])
        assert np.linalg.norm(weights) == pytest.approx(1.0)

    def test_stop_words_removed(self, texts):
        provider = TfidfVectorProvider.from_texts(texts, stop_words=["gpu", "memory"])

        vocabulary = {provider.term_text(t) for t in range(provider.num_terms)}

        assert "gpu" not in vocabulary
        assert "memory" not in vocabulary
        assert provider.num_terms == 5


class TestCorpusFiles:
    """Tests for line corpus and stop word loading."""

    def test_load_line_corpus_keeps_blank_lines(self, tmp_path):
        path = tmp_path / "corpus.dat"
        path.write_text("first doc\n\n  second doc  \n")

        assert load_line_corpus(path) == ["first doc", "", "  second doc  "]

    def test_load_line_corpus_without_trailing_newline(self, tmp_path):
        path = tmp_path / "corpus.dat"
        path.write_text("first doc\nsecond doc")

        assert load_line_corpus(path) == ["first doc", "second doc"]

    def test_blank_document_is_zero_row(self, tmp_path):
        path = tmp_path / "corpus.dat"
        path.write_text("gpu chip\n\nbread oven\n")

        provider = TfidfVectorProvider.from_texts(load_line_corpus(path))

        assert provider.num_docs == 3
        assert provider.doc_weights(1) == []

    def test_load_stop_words(self, tmp_path):
        path = tmp_path / "stop.txt"
        path.write_text("the\na\n\nof\n")

        assert load_stop_words(path) == ["the", "a", "of"]
