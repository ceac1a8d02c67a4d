"""Shared fixtures for clustering tests."""

from unittest.mock import MagicMock

import numpy as np
import pytest

from kmeans_topics.clustering.config import KMeansConfig
from kmeans_topics.vectors.provider import InMemoryVectorProvider


class FixedInitializer:
    """Seeds centroids from a fixed list of documents."""

    name = "fixed"

    def __init__(self, doc_ids):
        self.doc_ids = list(doc_ids)

    def choose(self, documents, num_topics, rng, distance):
        return self.doc_ids[:num_topics]


def scripted_rng(integers=(), choices=()):
    """A stand-in Generator whose draws are scripted in order."""
    rng = MagicMock(spec=np.random.Generator)
    rng.integers.side_effect = list(integers)
    rng.choice.side_effect = list(choices)
    return rng


@pytest.fixture
def kmeans_config():
    """Small config values for fast test clustering."""
    return KMeansConfig(
        max_iters=50,
        topics=3,
        init_method="kmeans++",
        output_terms=2,
        model_prefix="test-model",
        random_seed=42,
    )


@pytest.fixture
def two_topic_provider():
    """
    4 documents over a 3-term vocabulary: two pairs of identical vectors.

    Docs 0 and 1 are [1, 0, 0]; docs 2 and 3 are [0, 0, 1].
    """
    return InMemoryVectorProvider.from_dense(
        [[1, 0, 0], [1, 0, 0], [0, 0, 1], [0, 0, 1]],
        vocabulary=["gpu", "memory", "fab"],
    )


@pytest.fixture
def line_provider():
    """
    9 one-term documents at 0,1,2 / 10,11,12 / 20,21,22.

    Seeding from docs 0, 1, 2 takes three iterations to settle:
    inertia 322 -> 154.5 -> 154.5.
    """
    return InMemoryVectorProvider.from_dense(
        [[0], [1], [2], [10], [11], [12], [20], [21], [22]],
        vocabulary=["x"],
    )


@pytest.fixture
def grouped_provider():
    """
    15 documents in 3 groups of 5 identical vectors over 6 terms.

    Any kmeans++ draw picks exactly one seed per group, since documents
    identical to a chosen seed get zero weight.
    """
    groups = [
        [0.9, 0.4, 0.0, 0.0, 0.0, 0.1],
        [0.0, 0.1, 0.8, 0.5, 0.0, 0.0],
        [0.2, 0.0, 0.0, 0.1, 0.7, 0.6],
    ]
    rows = [vector for vector in groups for _ in range(5)]
    return InMemoryVectorProvider.from_dense(
        rows,
        vocabulary=["gpu", "nvidia", "memory", "hbm", "fab", "tsmc"],
    )


@pytest.fixture
def noisy_matrix():
    """30x8 random matrix with 3 loose groups, fixed seed."""
    rng = np.random.RandomState(42)
    centers = rng.rand(3, 8) * 5
    rows = [center + rng.randn(10, 8) * 0.3 for center in centers]
    return np.vstack(rows)


@pytest.fixture
def fixed_initializer():
    """Factory for an Initializer that seeds from the given doc ids."""
    return FixedInitializer


@pytest.fixture
def make_rng():
    """Factory for a scripted random source."""
    return scripted_rng
