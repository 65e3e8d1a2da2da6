import numpy as np
import pytest

from kmeans_engine import KMeansEngine, NotReadyError, UNASSIGNED
from kmeans_engine.distance import squared_distance
from kmeans_engine.steps import assign_step


def test_assign_requires_centroids():
    engine = KMeansEngine()
    engine.ingest(np.arange(6), stride=2)
    with pytest.raises(NotReadyError):
        engine.assign()


def test_single_cluster_first_assign_counts_every_point():
    rng = np.random.default_rng(0)
    engine = KMeansEngine(random_state=0)
    engine.ingest(rng.normal(size=40), stride=4)
    engine.set_cluster_count(1)
    engine.initialize()

    engine.assign()
    # Unassigned points differ from cluster 0, so all of them moved
    assert engine.moved_count == 10
    assert np.all(engine.labels == 0)

    engine.assign()
    assert engine.moved_count == 0


def test_assign_picks_nearest_centroid_and_records_distance():
    values = np.array([[0.0, 0.0], [9.0, 9.0], [1.0, 0.0], [10.0, 10.0]])
    centroids = np.array([[10.0, 10.0], [0.0, 0.0]])
    labels = np.full(4, UNASSIGNED, dtype=np.int64)
    distances = np.full(4, np.finfo(np.float64).max)

    moved = assign_step(values, centroids, labels, distances)

    assert moved == 4
    assert labels.tolist() == [1, 0, 1, 0]
    for i in range(4):
        assert distances[i] == squared_distance(values[i], centroids[labels[i]])


def test_ties_go_to_lowest_index():
    values = np.array([[0.0, 0.0]])
    centroids = np.array([[5.0, 0.0], [-1.0, 0.0], [1.0, 0.0], [0.0, 1.0]])
    labels = np.full(1, UNASSIGNED, dtype=np.int64)
    distances = np.zeros(1)
    assign_step(values, centroids, labels, distances)
    assert labels[0] == 1
    assert distances[0] == 1.0


def test_moved_count_only_counts_changes():
    values = np.array([[0.0], [1.0], [10.0], [11.0]])
    labels = np.array([0, 0, 0, 1], dtype=np.int64)
    distances = np.zeros(4)
    moved = assign_step(values, np.array([[0.5], [10.5]]), labels, distances)
    assert moved == 1
    assert labels.tolist() == [0, 0, 1, 1]
    # Distances are refreshed for unmoved points too
    assert distances.tolist() == [0.25, 0.25, 0.25, 0.25]


def test_chunked_assignment_matches_single_pass():
    rng = np.random.default_rng(8)
    values = rng.normal(size=(1000, 3))
    centroids = rng.normal(size=(7, 3))

    results = []
    for chunk_size in (1000, 64, 7):
        labels = np.full(1000, UNASSIGNED, dtype=np.int64)
        distances = np.empty(1000)
        moved = assign_step(values, centroids, labels, distances, chunk_size=chunk_size)
        assert moved == 1000
        results.append((labels, distances))

    for labels, distances in results[1:]:
        assert np.array_equal(labels, results[0][0])
        assert np.allclose(distances, results[0][1])


def test_predict_does_not_mutate_state():
    engine = KMeansEngine(random_state=5)
    engine.ingest(np.arange(20, dtype=np.float64), stride=2)
    engine.set_cluster_count(2)
    engine.initialize()
    engine.assign()
    labels_before = engine.labels
    moved_before = engine.moved_count

    predicted = engine.predict(np.array([[0.0, 1.0], [18.0, 19.0]]))

    assert predicted.shape == (2,)
    assert np.array_equal(engine.labels, labels_before)
    assert engine.moved_count == moved_before
    assert engine.predict([0.0, 1.0])[0] == predicted[0]
