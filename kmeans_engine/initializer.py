"""
Centroid seeding from the per-dimension bounding box of the data.
"""

from typing import Optional, Tuple

import numpy as np

from .errors import InitializationError


def bounding_box(values: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Per-dimension minimum and maximum over all points.

    Args:
        values: Array of shape (n_points, stride), n_points >= 1

    Returns:
        (lower, upper), each of shape (stride,)
    """
    return values.min(axis=0), values.max(axis=0)


def draw_uniform(
    lower: np.ndarray,
    upper: np.ndarray,
    n: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """Draw ``n`` vectors uniformly from [lower, upper) per dimension."""
    samples = rng.uniform(lower, upper, size=(n, lower.shape[0]))
    # A degenerate dimension has no half-open interval; pin it to the bound.
    degenerate = lower == upper
    if np.any(degenerate):
        samples[:, degenerate] = lower[degenerate]
    return samples


def seed_centroids(
    lower: np.ndarray,
    upper: np.ndarray,
    n_clusters: int,
    rng: np.random.Generator,
    min_separation: Optional[float] = None,
    max_attempts: int = 100,
) -> np.ndarray:
    """
    Seed ``n_clusters`` centroids uniformly inside the bounding box.

    When ``min_separation`` is given, each candidate is redrawn until its
    Euclidean distance to every already accepted centroid is at least
    ``min_separation``.

    Args:
        lower: Per-dimension lower bounds
        upper: Per-dimension upper bounds
        n_clusters: Number of centroids to draw
        rng: Random generator
        min_separation: Minimum pairwise distance between centroids
        max_attempts: Candidates drawn per centroid before giving up

    Returns:
        Array of shape (n_clusters, stride)
    """
    if not min_separation:
        return draw_uniform(lower, upper, n_clusters, rng)

    min_sq = float(min_separation) ** 2
    accepted = np.empty((n_clusters, lower.shape[0]), dtype=np.float64)

    for c_id in range(n_clusters):
        for _ in range(max_attempts):
            candidate = draw_uniform(lower, upper, 1, rng)[0]
            if c_id == 0:
                break
            diff = accepted[:c_id] - candidate
            if np.min(np.sum(diff * diff, axis=1)) >= min_sq:
                break
        else:
            raise InitializationError(
                f"Could not place centroid {c_id} at least {min_separation} away "
                f"from the others after {max_attempts} attempts"
            )
        accepted[c_id] = candidate

    return accepted
