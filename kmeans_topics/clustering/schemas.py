"""Schema definitions for K-Means runs.

Provides the run state machine enum, per-iteration statistics, the
reported topics, and the result object returned by KMeansModel.run().
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

import numpy as np


class RunState(str, Enum):
    """Lifecycle of a clustering run."""

    INIT = "init"
    ITERATING = "iterating"
    CONVERGED = "converged"
    MAX_ITERS_REACHED = "max_iters_reached"

    @property
    def is_terminal(self) -> bool:
        return self in (RunState.CONVERGED, RunState.MAX_ITERS_REACHED)


@dataclass
class IterationStats:
    """
    Outcome of one assignment + update pass.

    Attributes:
        iteration: 1-based iteration number.
        changed: Documents whose cluster changed during the assignment pass.
        inertia: Total within-cluster sum of squares after the update pass.
        cluster_sizes: Documents per cluster, indexed by cluster_id.
    """

    iteration: int
    changed: int
    inertia: float
    cluster_sizes: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "iteration": self.iteration,
            "changed": self.changed,
            "inertia": self.inertia,
            "cluster_sizes": list(self.cluster_sizes),
        }


@dataclass(frozen=True)
class TopicTerm:
    """A term and its weight in a cluster centroid."""

    term_id: int
    text: str
    weight: float


@dataclass
class ClusterTopic:
    """
    The highest-weighted terms of one cluster.

    Example:
        >>> topic = ClusterTopic(cluster_id=0, terms=[TopicTerm(3, "gpu", 0.41)])
        >>> topic.words
        ['gpu']
    """

    cluster_id: int
    terms: list[TopicTerm] = field(default_factory=list)

    @property
    def words(self) -> list[str]:
        return [term.text for term in self.terms]

    def to_dict(self) -> dict[str, Any]:
        return {
            "cluster_id": self.cluster_id,
            "terms": [
                {"term_id": t.term_id, "text": t.text, "weight": t.weight}
                for t in self.terms
            ],
        }


@dataclass
class KMeansResult:
    """
    Result of a completed KMeansModel.run().

    Attributes:
        state: Terminal state (CONVERGED or MAX_ITERS_REACHED).
        iterations: Statistics for every iteration that ran, in order.
        assignments: Copy of the final doc_id -> cluster_id array.
        topics: Reported topics; empty when reporting was disabled.
    """

    state: RunState
    iterations: list[IterationStats]
    assignments: np.ndarray
    topics: list[ClusterTopic] = field(default_factory=list)

    @property
    def converged(self) -> bool:
        return self.state == RunState.CONVERGED

    @property
    def num_iterations(self) -> int:
        return len(self.iterations)

    @property
    def inertia(self) -> Optional[float]:
        """Inertia after the last iteration (None if nothing ran)."""
        if not self.iterations:
            return None
        return self.iterations[-1].inertia

    def to_dict(self) -> dict[str, Any]:
        return {
            "state": self.state.value,
            "iterations": [it.to_dict() for it in self.iterations],
            "assignments": self.assignments.tolist(),
            "topics": [topic.to_dict() for topic in self.topics],
        }
