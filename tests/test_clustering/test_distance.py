"""Tests for distance metrics."""

import numpy as np
import pytest

from kmeans_topics.clustering.distance import SumOfSquaresDistance, sum_of_squares


class TestSumOfSquares:
    """Tests for the sum-of-squares distance."""

    def test_known_value(self):
        """Should sum squared differences without taking a square root."""
        assert sum_of_squares(np.array([1.0, 2.0, 3.0]), np.array([0.0, 0.0, 5.0])) == 9.0

    def test_identical_vectors(self):
        """Identical vectors are at distance zero."""
        v = np.array([0.3, 0.0, 1.7])
        assert sum_of_squares(v, v) == 0.0

    def test_symmetric(self):
        a = np.array([0.1, 0.5, 0.9])
        b = np.array([0.4, 0.2, 0.0])
        assert sum_of_squares(a, b) == pytest.approx(sum_of_squares(b, a))

    def test_callable_metric(self):
        metric = SumOfSquaresDistance()
        assert metric(np.array([1.0, 1.0]), np.array([0.0, 0.0])) == 2.0


class TestToMany:
    """Tests for SumOfSquaresDistance.to_many()."""

    def test_matches_pairwise(self, noisy_matrix):
        """to_many() should agree with calling the metric row by row."""
        metric = SumOfSquaresDistance()
        vector = noisy_matrix[0]

        batched = metric.to_many(vector, noisy_matrix)

        assert batched.shape == (len(noisy_matrix),)
        expected = [metric(vector, row) for row in noisy_matrix]
        np.testing.assert_allclose(batched, expected)

    def test_zero_for_own_row(self, noisy_matrix):
        metric = SumOfSquaresDistance()
        assert metric.to_many(noisy_matrix[3], noisy_matrix)[3] == 0.0
