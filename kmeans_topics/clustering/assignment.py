"""
Assignment and update steps of Lloyd's algorithm.

Core functions shared by the model and the kmeans++ initializer:
nearest-centroid search, cluster means, and total inertia.
"""

from collections.abc import Sequence
from typing import Optional

import numpy as np

from kmeans_topics.clustering.distance import DistanceMetric
from kmeans_topics.clustering.errors import EmptyClusterError


def find_nearest(
    vector: np.ndarray,
    centroids: np.ndarray,
    distance: DistanceMetric,
    limit: Optional[int] = None,
) -> tuple[int, float]:
    """
    Find the nearest of the first ``limit`` centroids to a vector.

    Ties go to the lowest-indexed centroid.

    Args:
        vector: Document vector of length num_terms.
        centroids: Centroid matrix (num_topics, num_terms).
        distance: Metric used to compare vectors.
        limit: Number of leading centroids to search. None = all of them.

    Returns:
        Tuple of (cluster_id, distance) for the nearest centroid.

    Raises:
        ValueError: If limit is outside [1, number of centroids].
    """
    if limit is None:
        limit = len(centroids)
    if not 1 <= limit <= len(centroids):
        raise ValueError(
            f"limit must be between 1 and {len(centroids)}, got {limit}"
        )

    distances = distance.to_many(vector, centroids[:limit])
    # argmin returns the first occurrence of the minimum
    best = int(np.argmin(distances))
    return best, float(distances[best])


def compute_mean(
    documents: np.ndarray,
    doc_ids: Sequence[int],
    cluster_id: int = -1,
) -> np.ndarray:
    """
    Compute the term-by-term mean vector over a set of documents.

    Args:
        documents: Document matrix (num_docs, num_terms).
        doc_ids: Rows to average.
        cluster_id: Cluster being averaged, used in the error message.

    Returns:
        Mean vector of length num_terms.

    Raises:
        EmptyClusterError: If doc_ids is empty.
    """
    if len(doc_ids) == 0:
        raise EmptyClusterError(cluster_id)
    return documents[np.asarray(doc_ids, dtype=np.intp)].mean(axis=0)


def total_inertia(
    documents: np.ndarray,
    centroids: np.ndarray,
    assignments: np.ndarray,
    distance: DistanceMetric,
) -> float:
    """Sum of distances between every document and its assigned centroid."""
    total = 0.0
    for cluster_id in range(len(centroids)):
        members = documents[assignments == cluster_id]
        if len(members):
            total += float(distance.to_many(centroids[cluster_id], members).sum())
    return total
