"""
Synthetic datasets for the example driver and the tests.
"""

from typing import Optional, Tuple

import numpy as np
from sklearn.datasets import make_blobs

# Per-dimension [low, high) integer ranges of the harness dataset
HARNESS_RANGES = (
    (30, 60),
    (50, 150),
    (100, 150),
    (25, 175),
    (10, 20),
)


def harness_buffer(n_points: int = 1000, seed: Optional[int] = None) -> np.ndarray:
    """
    Flat buffer of ``n_points`` five-dimensional points with integer values
    drawn from ``HARNESS_RANGES``.
    """
    rng = np.random.default_rng(seed)
    lows = np.array([low for low, _ in HARNESS_RANGES])
    highs = np.array([high for _, high in HARNESS_RANGES])
    rows = rng.integers(lows, highs, size=(n_points, len(HARNESS_RANGES)))
    return rows.astype(np.float32).ravel()


def blobs(
    n_points: int = 1000,
    n_features: int = 2,
    n_clusters: int = 3,
    cluster_std: float = 1.0,
    seed: Optional[int] = None,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Isotropic Gaussian blobs.

    Returns:
        (X, y, centers) where X has shape (n_points, n_features), y holds the
        true blob of each row and centers the blob centers
    """
    X, y, centers = make_blobs(
        n_samples=n_points,
        n_features=n_features,
        centers=n_clusters,
        cluster_std=cluster_std,
        random_state=seed,
        return_centers=True,
    )
    return X, y, centers


def two_blobs(
    n_per_blob: int = 200,
    n_features: int = 2,
    separation: float = 20.0,
    seed: Optional[int] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Two well separated blobs centered at the origin and at ``separation``
    along every axis.

    Returns:
        (X, true_means) where true_means are the sample means of each blob
    """
    rng = np.random.default_rng(seed)
    a = rng.normal(loc=0.0, scale=1.0, size=(n_per_blob, n_features))
    b = rng.normal(loc=separation, scale=1.0, size=(n_per_blob, n_features))
    X = np.vstack([a, b])
    return X, np.vstack([a.mean(axis=0), b.mean(axis=0)])
