"""
Centroid seeding strategies.

Each strategy picks the documents whose vectors become the initial
centroids. The random source is passed in explicitly so runs are
reproducible with a seeded numpy Generator.

Strategies:
- RandomKInitializer ("randk"): num_topics independent uniform draws
- KMeansPlusPlusInitializer ("kmeans++"): distance-weighted draws that
  favor documents far from the centroids chosen so far
"""

import logging
from typing import Protocol

import numpy as np

from kmeans_topics.clustering.assignment import find_nearest
from kmeans_topics.clustering.distance import DistanceMetric
from kmeans_topics.clustering.errors import InvalidConfigurationError

logger = logging.getLogger(__name__)


class Initializer(Protocol):
    """Chooses the documents that seed each centroid slot."""

    name: str

    def choose(
        self,
        documents: np.ndarray,
        num_topics: int,
        rng: np.random.Generator,
        distance: DistanceMetric,
    ) -> list[int]:
        """Return one doc_id per centroid slot, in slot order."""
        ...


class RandomKInitializer:
    """
    Pick num_topics documents uniformly at random.

    Draws are independent (with replacement), so the same document can
    seed two slots and produce duplicate centroids.
    """

    name = "randk"

    def choose(
        self,
        documents: np.ndarray,
        num_topics: int,
        rng: np.random.Generator,
        distance: DistanceMetric,
    ) -> list[int]:
        num_docs = len(documents)
        return [int(rng.integers(0, num_docs)) for _ in range(num_topics)]


class KMeansPlusPlusInitializer:
    """
    K-Means++ seeding.

    The first centroid is a uniform draw. Each following slot ``c`` draws a
    document with probability proportional to its distance to the nearest
    of the ``c`` centroids already chosen.
    """

    name = "kmeans++"

    def choose(
        self,
        documents: np.ndarray,
        num_topics: int,
        rng: np.random.Generator,
        distance: DistanceMetric,
    ) -> list[int]:
        num_docs = len(documents)
        chosen = [int(rng.integers(0, num_docs))]

        centroids = np.zeros((num_topics, documents.shape[1]), dtype=np.float64)
        centroids[0] = documents[chosen[0]]

        weights = np.empty(num_docs, dtype=np.float64)
        for centroid_count in range(1, num_topics):
            for doc_id in range(num_docs):
                _, weights[doc_id] = find_nearest(
                    documents[doc_id], centroids, distance, limit=centroid_count
                )

            total = weights.sum()
            if total > 0:
                doc_id = int(rng.choice(num_docs, p=weights / total))
            else:
                # Every document coincides with a chosen centroid
                logger.debug("All kmeans++ weights are zero, drawing uniformly")
                doc_id = int(rng.integers(0, num_docs))

            chosen.append(doc_id)
            centroids[centroid_count] = documents[doc_id]

        return chosen


INITIALIZERS: dict[str, type] = {
    RandomKInitializer.name: RandomKInitializer,
    KMeansPlusPlusInitializer.name: KMeansPlusPlusInitializer,
}


def make_initializer(name: str) -> Initializer:
    """
    Resolve an init-method string to a seeding strategy.

    Args:
        name: "kmeans++" or "randk".

    Returns:
        A fresh Initializer instance.

    Raises:
        InvalidConfigurationError: If the name is not a known strategy.
    """
    try:
        return INITIALIZERS[name]()
    except KeyError:
        raise InvalidConfigurationError(
            f"Unsupported init-method {name!r}; expected one of "
            f"{', '.join(repr(n) for n in INITIALIZERS)}"
        ) from None
