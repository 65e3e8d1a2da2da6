import numpy as np
import pytest

from kmeans_engine.distance import squared_distance, pairwise_squared_distances


def test_squared_distance_known_value():
    assert squared_distance([0.0, 0.0], [3.0, 4.0]) == 25.0


def test_squared_distance_symmetric_and_zero_iff_equal():
    rng = np.random.default_rng(3)
    vectors = rng.normal(size=(20, 6))
    for i, a in enumerate(vectors):
        for j, b in enumerate(vectors):
            assert squared_distance(a, b) == squared_distance(b, a)
            if i == j:
                assert squared_distance(a, b) == 0.0
            else:
                assert squared_distance(a, b) > 0.0


def test_squared_distance_length_mismatch():
    with pytest.raises(ValueError):
        squared_distance([1.0, 2.0], [1.0, 2.0, 3.0])


def test_pairwise_matches_single_pair():
    rng = np.random.default_rng(5)
    points = rng.normal(size=(15, 4))
    centroids = rng.normal(size=(3, 4))
    matrix = pairwise_squared_distances(points, centroids)
    assert matrix.shape == (15, 3)
    for i, p in enumerate(points):
        for k, c in enumerate(centroids):
            assert np.isclose(matrix[i, k], squared_distance(p, c))


def test_pairwise_dimension_mismatch():
    with pytest.raises(ValueError):
        pairwise_squared_distances(np.zeros((2, 3)), np.zeros((2, 4)))
