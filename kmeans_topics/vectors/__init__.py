"""
Document vector providers.

Components:
- VectorProvider / TermDictionary: capabilities the clustering engine consumes
- InMemoryVectorProvider: precomputed sparse rows
- TfidfVectorProvider: TF-IDF weights fitted with scikit-learn
"""

from kmeans_topics.vectors.provider import (
    InMemoryVectorProvider,
    TermDictionary,
    TfidfVectorProvider,
    VectorProvider,
    load_line_corpus,
    load_stop_words,
)

__all__ = [
    "VectorProvider",
    "TermDictionary",
    "InMemoryVectorProvider",
    "TfidfVectorProvider",
    "load_line_corpus",
    "load_stop_words",
]
