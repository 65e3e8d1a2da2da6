import numpy as np
import pytest

from kmeans_engine import KMeansEngine, InitializationError, NotReadyError
from kmeans_engine.initializer import bounding_box, seed_centroids
from kmeans_engine.synthetic import HARNESS_RANGES, harness_buffer


def test_initialize_requires_data():
    engine = KMeansEngine()
    with pytest.raises(NotReadyError):
        engine.initialize()


def test_centroids_lie_inside_bounding_box():
    engine = KMeansEngine(random_state=1)
    engine.ingest(harness_buffer(1000, seed=1), stride=len(HARNESS_RANGES))
    engine.set_cluster_count(8)
    engine.initialize()

    lower, upper = bounding_box(engine.points.values)
    centroids = engine.centroids
    assert centroids.shape == (8, 5)
    assert np.all(centroids >= lower)
    assert np.all(centroids <= upper)


def test_bounding_box_per_dimension():
    values = np.array([[1.0, 10.0], [3.0, -2.0], [2.0, 4.0]])
    lower, upper = bounding_box(values)
    assert np.array_equal(lower, [1.0, -2.0])
    assert np.array_equal(upper, [3.0, 10.0])


def test_degenerate_dimension_pins_to_bound():
    engine = KMeansEngine(random_state=0)
    engine.ingest([1.0, 7.0, 2.0, 7.0, 3.0, 7.0], stride=2)
    engine.initialize()
    assert np.all(engine.centroids[:, 1] == 7.0)


def test_initialize_is_reproducible_with_random_state():
    buffer = harness_buffer(200, seed=4)
    first = KMeansEngine(random_state=11)
    second = KMeansEngine(random_state=11)
    for engine in (first, second):
        engine.ingest(buffer, stride=5)
        engine.initialize()
    assert np.array_equal(first.centroids, second.centroids)


def test_min_separation_is_honored():
    rng = np.random.default_rng(0)
    lower = np.zeros(3)
    upper = np.full(3, 100.0)
    centroids = seed_centroids(lower, upper, 5, rng, min_separation=10.0)
    for i in range(5):
        for j in range(i + 1, 5):
            assert np.linalg.norm(centroids[i] - centroids[j]) >= 10.0


def test_min_separation_impossible_raises():
    engine = KMeansEngine(min_separation=1.0, max_seed_attempts=5)
    engine.ingest(np.ones(8), stride=2)
    engine.set_cluster_count(2)
    with pytest.raises(InitializationError):
        engine.initialize()
    assert engine.centroids is None


def test_changing_cluster_count_requires_reinitialize():
    engine = KMeansEngine(random_state=2)
    engine.ingest(harness_buffer(50, seed=2), stride=5)
    engine.set_cluster_count(3)
    engine.initialize()
    engine.assign()

    engine.set_cluster_count(4)
    with pytest.raises(NotReadyError):
        engine.assign()
    with pytest.raises(NotReadyError):
        engine.update_centroids()

    engine.initialize()
    assert engine.centroids.shape == (4, 5)
    assert engine.moved_count is None
    engine.assign()
    assert engine.moved_count == 50


def test_reinitialize_resets_assignments():
    engine = KMeansEngine(random_state=3)
    engine.ingest(harness_buffer(30, seed=3), stride=5)
    engine.initialize()
    engine.assign()
    engine.initialize()
    assert np.all(engine.labels == -1)
    assert engine.inertia is None
