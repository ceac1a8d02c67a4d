"""
K-Means topic model over document term-weight vectors.

Groups the documents of a corpus into a fixed number of clusters with
Lloyd's algorithm and reports each cluster's most significant terms.

Architecture:
- Dense numpy matrices for document vectors and centroids
- Seeding and distance are swappable strategies (Initializer, DistanceMetric)
- Random source injected as a numpy Generator for reproducible runs
- Documents assigned in ascending doc_id order; a pass with zero changes
  ends the run, max_iters is a hard ceiling
- Empty clusters are fatal (EmptyClusterError), never re-seeded
"""

import logging
import time
from pathlib import Path
from typing import Optional, Union

import numpy as np

from kmeans_topics.clustering.assignment import compute_mean, find_nearest, total_inertia
from kmeans_topics.clustering.distance import DistanceMetric, SumOfSquaresDistance
from kmeans_topics.clustering.errors import InvalidConfigurationError
from kmeans_topics.clustering.initializers import Initializer, make_initializer
from kmeans_topics.clustering.persistence import save_model
from kmeans_topics.clustering.reporting import report_topics
from kmeans_topics.clustering.schemas import (
    ClusterTopic,
    IterationStats,
    KMeansResult,
    RunState,
)
from kmeans_topics.vectors.provider import TermDictionary, VectorProvider

logger = logging.getLogger(__name__)


class KMeansModel:
    """
    K-Means clustering of a corpus into num_topics clusters.

    Usage:
        >>> model = KMeansModel(provider, num_topics=2, rng=np.random.default_rng(7))
        >>> result = model.run(max_iters=100, init_method="kmeans++", output_terms=5)
        >>> result.converged, result.num_iterations
        (True, 4)
        >>> model.save("out/kmeans-model")
    """

    def __init__(
        self,
        provider: VectorProvider,
        num_topics: int,
        *,
        distance: DistanceMetric | None = None,
        rng: np.random.Generator | None = None,
        terms: TermDictionary | None = None,
    ):
        """
        Allocate the model for a corpus.

        Args:
            provider: Source of sparse document vectors.
            num_topics: Number of clusters, 1 <= num_topics <= num_docs.
            distance: Distance metric. Defaults to sum-of-squares.
            rng: Random source for seeding. Defaults to an unseeded Generator.
            terms: Term dictionary for reports. Defaults to the provider when
                it implements term_text().

        Raises:
            InvalidConfigurationError: If num_topics is out of range.
        """
        num_docs = provider.num_docs
        if not 1 <= num_topics <= num_docs:
            raise InvalidConfigurationError(
                f"num_topics must be between 1 and num_docs ({num_docs}), "
                f"got {num_topics}"
            )

        self.provider = provider
        self.distance = distance or SumOfSquaresDistance()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.terms = terms if terms is not None else (
            provider if hasattr(provider, "term_text") else None
        )

        self._num_topics = num_topics
        self._num_terms = provider.num_terms
        self._num_docs = num_docs

        self.documents = np.zeros((self._num_docs, self._num_terms), dtype=np.float64)
        self.centroids = np.zeros((self._num_topics, self._num_terms), dtype=np.float64)
        self.assignments = np.zeros(self._num_docs, dtype=np.int64)
        self.state = RunState.INIT

    @property
    def num_topics(self) -> int:
        return self._num_topics

    @property
    def num_terms(self) -> int:
        return self._num_terms

    @property
    def num_docs(self) -> int:
        return self._num_docs

    def init_documents(self) -> None:
        """
        Densify every provider row into the document matrix.

        Raises:
            ValueError: If the provider returns a term_id outside [0, num_terms).
        """
        for doc_id in range(self._num_docs):
            for term_id, weight in self.provider.doc_weights(doc_id):
                if not 0 <= term_id < self._num_terms:
                    raise ValueError(
                        f"Document {doc_id} has term_id {term_id} outside "
                        f"vocabulary of {self._num_terms} terms"
                    )
                self.documents[doc_id, term_id] = weight
        logger.info(
            f"Stored document vectors: {self._num_docs} docs x {self._num_terms} terms"
        )

    def init_centroids(self, init_method: Union[str, Initializer]) -> list[int]:
        """
        Seed the centroids from document vectors.

        Args:
            init_method: "kmeans++", "randk", or an Initializer instance.

        Returns:
            The doc_id copied into each centroid slot.

        Raises:
            InvalidConfigurationError: If init_method is an unknown name.
        """
        initializer = (
            make_initializer(init_method) if isinstance(init_method, str) else init_method
        )
        chosen = initializer.choose(
            self.documents, self._num_topics, self.rng, self.distance
        )
        for cluster_id, doc_id in enumerate(chosen):
            self.centroids[cluster_id] = self.documents[doc_id]

        logger.info(
            f"Initialized {len(chosen)} centroids with {initializer.name} "
            f"from documents {chosen}"
        )
        return chosen

    def find_nearest(
        self, vector: np.ndarray, limit: Optional[int] = None
    ) -> tuple[int, float]:
        """Nearest of the first ``limit`` centroids (default all) to a vector."""
        return find_nearest(vector, self.centroids, self.distance, limit)

    def assign_document(self, doc_id: int) -> bool:
        """
        Move a document to its nearest cluster.

        Returns:
            True if the document's cluster changed.
        """
        cluster_id, _ = self.find_nearest(self.documents[doc_id])
        if cluster_id == self.assignments[doc_id]:
            return False
        self.assignments[doc_id] = cluster_id
        return True

    def update_centroids(self) -> list[int]:
        """
        Recompute every centroid as the mean of its assigned documents.

        Returns:
            Documents per cluster, indexed by cluster_id.

        Raises:
            EmptyClusterError: If a cluster has no assigned documents.
        """
        sizes: list[int] = []
        for cluster_id in range(self._num_topics):
            doc_ids = np.flatnonzero(self.assignments == cluster_id)
            logger.debug(f"Cluster {cluster_id} contains {len(doc_ids)} docs")
            self.centroids[cluster_id] = compute_mean(
                self.documents, doc_ids, cluster_id=cluster_id
            )
            sizes.append(len(doc_ids))
        return sizes

    def inertia(self) -> float:
        """Total sum of squares between documents and their centroids."""
        return total_inertia(self.documents, self.centroids, self.assignments, self.distance)

    def run(
        self,
        max_iters: int,
        init_method: Union[str, Initializer] = "kmeans++",
        output_terms: int = 0,
    ) -> KMeansResult:
        """
        Cluster the corpus until no assignment changes or max_iters is hit.

        Args:
            max_iters: Maximum number of assignment/update iterations.
            init_method: "kmeans++", "randk", or an Initializer instance.
            output_terms: Top terms to report per cluster. 0 = no report.

        Returns:
            KMeansResult with the terminal state and per-iteration stats.

        Raises:
            InvalidConfigurationError: On max_iters < 1 or unknown init_method,
                before any computation.
            EmptyClusterError: If an update pass finds an empty cluster.
        """
        if max_iters < 1:
            raise InvalidConfigurationError(f"max_iters must be >= 1, got {max_iters}")
        if isinstance(init_method, str):
            init_method = make_initializer(init_method)

        start_time = time.monotonic()
        self.state = RunState.INIT
        self.assignments[:] = 0
        self.init_documents()
        self.init_centroids(init_method)

        self.state = RunState.ITERATING
        iterations: list[IterationStats] = []
        for iteration in range(1, max_iters + 1):
            changed = 0
            for doc_id in range(self._num_docs):
                if self.assign_document(doc_id):
                    changed += 1
            sizes = self.update_centroids()

            stats = IterationStats(
                iteration=iteration,
                changed=changed,
                inertia=self.inertia(),
                cluster_sizes=sizes,
            )
            iterations.append(stats)
            logger.info(
                f"Iteration {iteration}, updated {changed} docs, "
                f"inertia={stats.inertia:.6f}"
            )

            if changed == 0:
                self.state = RunState.CONVERGED
                break
        else:
            self.state = RunState.MAX_ITERS_REACHED
            logger.warning(f"Reached max_iters={max_iters} without converging")

        elapsed = time.monotonic() - start_time
        logger.info(
            f"Clustering complete: {self.state.value} after {len(iterations)} "
            f"iterations, {elapsed:.2f}s elapsed"
        )

        topics: list[ClusterTopic] = []
        if output_terms > 0:
            topics = self.report_topics(output_terms)

        return KMeansResult(
            state=self.state,
            iterations=iterations,
            assignments=self.assignments.copy(),
            topics=topics,
        )

    def report_topics(
        self, num_terms: int, terms: TermDictionary | None = None
    ) -> list[ClusterTopic]:
        """
        List each cluster's highest-weighted centroid terms.

        Raises:
            ValueError: If no term dictionary is available.
        """
        terms = terms or self.terms
        if terms is None:
            raise ValueError("A term dictionary is required to report topics")
        return report_topics(self.centroids, terms, num_terms)

    def save(self, prefix: str | Path) -> tuple[Path, Path, Path]:
        """Write <prefix>.docs, <prefix>.centroids and <prefix>.clusters."""
        return save_model(prefix, self.documents, self.centroids, self.assignments)
