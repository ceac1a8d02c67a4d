"""
K-Means document clustering into topics.

This module groups documents into a fixed number of clusters with Lloyd's
algorithm over term-weight vectors, seeded by random-k or K-Means++, and
reports the most significant terms of each cluster.

Components:
- KMeansConfig: Configuration for the clustering engine
- KMeansModel: Model owning vectors, centroids, and assignments; runs the loop
- RandomKInitializer / KMeansPlusPlusInitializer: Centroid seeding strategies
- SumOfSquaresDistance: Default distance metric
- KMeansResult / ClusterTopic: Run results and topic reports
"""

from kmeans_topics.clustering.config import KMeansConfig
from kmeans_topics.clustering.distance import DistanceMetric, SumOfSquaresDistance
from kmeans_topics.clustering.errors import (
    EmptyClusterError,
    InvalidConfigurationError,
    KMeansError,
    MissingConfigError,
)
from kmeans_topics.clustering.initializers import (
    Initializer,
    KMeansPlusPlusInitializer,
    RandomKInitializer,
    make_initializer,
)
from kmeans_topics.clustering.model import KMeansModel
from kmeans_topics.clustering.persistence import SavedModel, load_model, save_model
from kmeans_topics.clustering.reporting import format_topics
from kmeans_topics.clustering.schemas import (
    ClusterTopic,
    IterationStats,
    KMeansResult,
    RunState,
    TopicTerm,
)

__all__ = [
    "KMeansConfig",
    "KMeansModel",
    "DistanceMetric",
    "SumOfSquaresDistance",
    "Initializer",
    "RandomKInitializer",
    "KMeansPlusPlusInitializer",
    "make_initializer",
    "KMeansError",
    "InvalidConfigurationError",
    "MissingConfigError",
    "EmptyClusterError",
    "SavedModel",
    "save_model",
    "load_model",
    "format_topics",
    "RunState",
    "IterationStats",
    "ClusterTopic",
    "TopicTerm",
    "KMeansResult",
]
