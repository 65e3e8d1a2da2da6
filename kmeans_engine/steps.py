"""
The two halves of a Lloyd iteration: nearest-centroid assignment and
centroid recomputation.
"""

from typing import List, Tuple

import numpy as np

from .distance import pairwise_squared_distances
from .initializer import draw_uniform

EMPTY_CLUSTER_POLICIES = ("reseed", "random_point", "freeze")


def assign_step(
    values: np.ndarray,
    centroids: np.ndarray,
    cluster_index: np.ndarray,
    distance_squared: np.ndarray,
    chunk_size: int = 4096,
) -> int:
    """
    Assign every point to its nearest centroid, in place.

    Ties go to the lowest centroid index. ``cluster_index`` and
    ``distance_squared`` are overwritten for every point, moved or not.

    Args:
        values: Points, shape (n_points, stride)
        centroids: Centroids, shape (n_clusters, stride)
        cluster_index: Current assignment per point, updated in place
        distance_squared: Distance to assigned centroid, updated in place
        chunk_size: Points processed per distance matrix

    Returns:
        Number of points whose assignment changed
    """
    moved = 0
    n_points = values.shape[0]

    for start in range(0, n_points, chunk_size):
        stop = min(start + chunk_size, n_points)
        distances = pairwise_squared_distances(values[start:stop], centroids)
        # argmin returns the first minimum, i.e. the lowest index on ties
        nearest = np.argmin(distances, axis=1)

        moved += int(np.count_nonzero(cluster_index[start:stop] != nearest))
        cluster_index[start:stop] = nearest
        distance_squared[start:stop] = distances[np.arange(stop - start), nearest]

    return moved


def update_step(
    values: np.ndarray,
    centroids: np.ndarray,
    cluster_index: np.ndarray,
    bounds: Tuple[np.ndarray, np.ndarray],
    rng: np.random.Generator,
    policy: str = "reseed",
) -> List[int]:
    """
    Move every centroid to the mean of its assigned points, in place.

    Clusters without members are handled by ``policy``:

    - ``"reseed"``: redraw uniformly inside the bounding box
    - ``"random_point"``: move onto a randomly chosen data point
    - ``"freeze"``: keep the current position

    Args:
        values: Points, shape (n_points, stride)
        centroids: Centroids, shape (n_clusters, stride), updated in place
        cluster_index: Assignment per point
        bounds: (lower, upper) bounding box of the points
        rng: Random generator used by the empty-cluster policy
        policy: Empty-cluster policy name

    Returns:
        Indices of clusters that had no members
    """
    if policy not in EMPTY_CLUSTER_POLICIES:
        raise ValueError(f"Unknown empty cluster policy: {policy}")

    n_clusters = centroids.shape[0]
    empty = []

    for k in range(n_clusters):
        mask = cluster_index == k
        count = int(np.count_nonzero(mask))
        if count:
            centroids[k] = values[mask].sum(axis=0) / count
            continue

        empty.append(k)
        if policy == "reseed":
            lower, upper = bounds
            centroids[k] = draw_uniform(lower, upper, 1, rng)[0]
        elif policy == "random_point":
            centroids[k] = values[rng.integers(values.shape[0])]

    return empty


def compute_inertia(distance_squared: np.ndarray, cluster_index: np.ndarray) -> float:
    """Within-cluster sum of squares over assigned points."""
    assigned = cluster_index >= 0
    return float(np.sum(distance_squared[assigned]))
