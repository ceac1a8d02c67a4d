"""Tests for clustering run schemas."""

import numpy as np

from kmeans_topics.clustering.schemas import (
    ClusterTopic,
    IterationStats,
    KMeansResult,
    RunState,
    TopicTerm,
)


class TestRunState:
    """Tests for RunState."""

    def test_terminal_states(self):
        assert RunState.CONVERGED.is_terminal
        assert RunState.MAX_ITERS_REACHED.is_terminal
        assert not RunState.INIT.is_terminal
        assert not RunState.ITERATING.is_terminal

    def test_string_values(self):
        assert RunState("converged") is RunState.CONVERGED
        assert RunState.MAX_ITERS_REACHED == "max_iters_reached"


class TestKMeansResult:
    """Tests for KMeansResult."""

    def test_properties(self):
        result = KMeansResult(
            state=RunState.CONVERGED,
            iterations=[
                IterationStats(iteration=1, changed=4, inertia=2.5, cluster_sizes=[2, 2]),
                IterationStats(iteration=2, changed=0, inertia=1.0, cluster_sizes=[3, 1]),
            ],
            assignments=np.array([0, 0, 0, 1]),
        )

        assert result.converged
        assert result.num_iterations == 2
        assert result.inertia == 1.0
        assert result.topics == []

    def test_inertia_none_without_iterations(self):
        result = KMeansResult(
            state=RunState.MAX_ITERS_REACHED,
            iterations=[],
            assignments=np.zeros(0, dtype=np.int64),
        )
        assert result.inertia is None
        assert not result.converged

    def test_to_dict(self):
        result = KMeansResult(
            state=RunState.MAX_ITERS_REACHED,
            iterations=[IterationStats(iteration=1, changed=1, inertia=0.5, cluster_sizes=[1])],
            assignments=np.array([0]),
            topics=[ClusterTopic(0, [TopicTerm(4, "gpu", 0.75)])],
        )

        assert result.to_dict() == {
            "state": "max_iters_reached",
            "iterations": [
                {"iteration": 1, "changed": 1, "inertia": 0.5, "cluster_sizes": [1]},
            ],
            "assignments": [0],
            "topics": [
                {"cluster_id": 0, "terms": [{"term_id": 4, "text": "gpu", "weight": 0.75}]},
            ],
        }


class TestClusterTopic:
    """Tests for ClusterTopic."""

    def test_words(self):
        topic = ClusterTopic(
            cluster_id=2,
            terms=[TopicTerm(1, "memory", 0.9), TopicTerm(0, "hbm", 0.4)],
        )
        assert topic.words == ["memory", "hbm"]
