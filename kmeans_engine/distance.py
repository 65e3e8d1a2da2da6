"""
Squared Euclidean distance.

The square root is never taken: callers only compare distances against each
other, and the ordering is the same with or without it.
"""

import numpy as np


def squared_distance(a, b) -> float:
    """
    Sum of per-dimension squared differences between two vectors.

    Args:
        a: First vector
        b: Second vector, same length as ``a``

    Returns:
        Squared Euclidean distance
    """
    a = np.asarray(a)
    b = np.asarray(b)
    if a.shape != b.shape:
        raise ValueError(f"Vector shapes differ: {a.shape} vs {b.shape}")
    diff = a - b
    return float(np.dot(diff, diff))


def pairwise_squared_distances(points: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """
    Squared distance from every point to every centroid.

    Args:
        points: Array of shape (n_points, stride)
        centroids: Array of shape (n_clusters, stride)

    Returns:
        Array of shape (n_points, n_clusters)
    """
    if points.shape[1] != centroids.shape[1]:
        raise ValueError(
            f"Dimension mismatch: points have {points.shape[1]}, "
            f"centroids have {centroids.shape[1]}"
        )
    # (n, 1, d) - (1, k, d) -> (n, k, d)
    diff = points[:, np.newaxis, :] - centroids[np.newaxis, :, :]
    return np.sum(diff * diff, axis=2)
