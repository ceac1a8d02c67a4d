"""
Topic reports: the highest-weighted terms of each cluster centroid.

Selection uses a bounded heap of the requested size per cluster rather
than sorting the full vocabulary.
"""

import heapq

import numpy as np

from kmeans_topics.clustering.schemas import ClusterTopic, TopicTerm
from kmeans_topics.vectors.provider import TermDictionary


def top_terms(centroid: np.ndarray, num_terms: int) -> list[tuple[int, float]]:
    """
    Select the num_terms highest-weighted terms of a centroid.

    Args:
        centroid: Centroid vector of length num_terms.
        num_terms: How many terms to return. Truncated to the vocabulary size.

    Returns:
        List of (term_id, weight), descending weight; equal weights are
        ordered by ascending term_id.
    """
    if num_terms <= 0:
        return []
    best = heapq.nlargest(
        num_terms,
        range(len(centroid)),
        key=lambda term_id: (centroid[term_id], -term_id),
    )
    return [(int(term_id), float(centroid[term_id])) for term_id in best]


def report_topics(
    centroids: np.ndarray,
    terms: TermDictionary,
    num_terms: int,
) -> list[ClusterTopic]:
    """Build one ClusterTopic per centroid, in ascending cluster_id order."""
    return [
        ClusterTopic(
            cluster_id=cluster_id,
            terms=[
                TopicTerm(term_id=term_id, text=terms.term_text(term_id), weight=weight)
                for term_id, weight in top_terms(centroid, num_terms)
            ],
        )
        for cluster_id, centroid in enumerate(centroids)
    ]


def format_topics(topics: list[ClusterTopic]) -> str:
    """
    Render topics as text.

    Each cluster is a "Cluster <id>" header, one "<term>\\t<weight>" line
    per term, and a blank line.
    """
    lines: list[str] = []
    for topic in topics:
        lines.append(f"Cluster {topic.cluster_id}")
        for term in topic.terms:
            lines.append(f"{term.text}\t{term.weight:g}")
        lines.append("")
    return "\n".join(lines)
