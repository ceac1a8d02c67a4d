"""
Distance metrics between term-weight vectors.

Only relative ordering matters to the clustering engine, so the default
metric is the squared Euclidean (sum-of-squares) distance with no square root.
"""

from typing import Protocol

import numpy as np


class DistanceMetric(Protocol):
    """Dissimilarity between equal-length vectors."""

    def __call__(self, a: np.ndarray, b: np.ndarray) -> float:
        ...

    def to_many(self, vector: np.ndarray, matrix: np.ndarray) -> np.ndarray:
        """Distance from ``vector`` to every row of ``matrix``."""
        ...


def sum_of_squares(a: np.ndarray, b: np.ndarray) -> float:
    """Compute the sum-of-squares distance between two vectors."""
    diff = np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)
    return float(np.dot(diff, diff))


class SumOfSquaresDistance:
    """Squared Euclidean distance: sum of (a[i] - b[i])^2 over all terms."""

    def __call__(self, a: np.ndarray, b: np.ndarray) -> float:
        return sum_of_squares(a, b)

    def to_many(self, vector: np.ndarray, matrix: np.ndarray) -> np.ndarray:
        diff = np.asarray(matrix, dtype=np.float64) - np.asarray(vector, dtype=np.float64)
        return np.einsum("ij,ij->i", diff, diff)

    def __repr__(self) -> str:
        return "SumOfSquaresDistance()"
