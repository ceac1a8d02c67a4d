"""
Plain-text persistence of a fitted model.

A saved model is three files sharing a prefix:
- <prefix>.docs: one line per document, num_terms space-separated weights
- <prefix>.centroids: one line per cluster, num_terms space-separated weights
- <prefix>.clusters: one line per document, "<doc_id> <cluster_id>"

Rows are written in ascending index order with no header. Weights use 17
significant digits so they parse back to the same float64 values.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np

logger = logging.getLogger(__name__)

DOCS_SUFFIX = ".docs"
CENTROIDS_SUFFIX = ".centroids"
CLUSTERS_SUFFIX = ".clusters"

_FLOAT_FORMAT = "%.17g"


@dataclass
class SavedModel:
    """Arrays read back from a saved model."""

    documents: np.ndarray
    centroids: np.ndarray
    assignments: np.ndarray

    @property
    def num_docs(self) -> int:
        return self.documents.shape[0]

    @property
    def num_terms(self) -> int:
        return self.documents.shape[1]

    @property
    def num_topics(self) -> int:
        return self.centroids.shape[0]

    def cluster_sizes(self) -> list[int]:
        """Documents per cluster, indexed by cluster_id."""
        counts = np.bincount(self.assignments, minlength=self.num_topics)
        return [int(c) for c in counts]


def model_paths(prefix: str | Path) -> tuple[Path, Path, Path]:
    """Return the (docs, centroids, clusters) paths for a prefix."""
    prefix = str(prefix)
    return (
        Path(prefix + DOCS_SUFFIX),
        Path(prefix + CENTROIDS_SUFFIX),
        Path(prefix + CLUSTERS_SUFFIX),
    )


def save_vectors(path: str | Path, vectors: np.ndarray) -> None:
    """Write one vector per line as space-separated floats."""
    np.savetxt(path, np.atleast_2d(vectors), fmt=_FLOAT_FORMAT, delimiter=" ")


def save_clusters(path: str | Path, assignments: np.ndarray) -> None:
    """Write "<doc_id> <cluster_id>" per document."""
    assignments = np.asarray(assignments, dtype=np.int64)
    pairs = np.column_stack([np.arange(len(assignments), dtype=np.int64), assignments])
    np.savetxt(path, pairs, fmt="%d", delimiter=" ")


def save_model(
    prefix: str | Path,
    documents: np.ndarray,
    centroids: np.ndarray,
    assignments: np.ndarray,
) -> tuple[Path, Path, Path]:
    """
    Save documents, centroids, and assignments under a common prefix.

    Args:
        prefix: Path prefix; suffixes .docs, .centroids, .clusters are appended.
        documents: Document matrix (num_docs, num_terms).
        centroids: Centroid matrix (num_topics, num_terms).
        assignments: cluster_id per doc_id.

    Returns:
        The three paths written.

    Raises:
        OSError: If a file cannot be written. Files already written are kept.
    """
    docs_path, centroids_path, clusters_path = model_paths(prefix)
    save_vectors(docs_path, documents)
    save_vectors(centroids_path, centroids)
    save_clusters(clusters_path, assignments)
    logger.info(f"Saved model to {docs_path}, {centroids_path}, {clusters_path}")
    return docs_path, centroids_path, clusters_path


def load_vectors(path: str | Path) -> np.ndarray:
    """Read a .docs or .centroids file into a (rows, num_terms) matrix."""
    return np.loadtxt(path, dtype=np.float64, ndmin=2)


def load_clusters(path: str | Path) -> np.ndarray:
    """
    Read a .clusters file into a cluster_id-per-doc_id array.

    Raises:
        ValueError: If doc ids are not 0..n-1 in ascending order.
    """
    pairs = np.loadtxt(path, dtype=np.int64, ndmin=2)
    if pairs.size == 0:
        return np.zeros(0, dtype=np.int64)
    if pairs.shape[1] != 2:
        raise ValueError(f"{path}: expected 2 columns, got {pairs.shape[1]}")
    if not np.array_equal(pairs[:, 0], np.arange(len(pairs))):
        raise ValueError(f"{path}: doc ids must run 0..{len(pairs) - 1} in order")
    return pairs[:, 1].copy()


def load_model(prefix: str | Path) -> SavedModel:
    """Read the three files written by save_model()."""
    docs_path, centroids_path, clusters_path = model_paths(prefix)
    return SavedModel(
        documents=load_vectors(docs_path),
        centroids=load_vectors(centroids_path),
        assignments=load_clusters(clusters_path),
    )
