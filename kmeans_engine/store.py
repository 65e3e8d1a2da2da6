"""
Storage for ingested points and cluster centroids.

Both stores keep their data in contiguous numpy arrays. A point's cluster
index starts as ``UNASSIGNED`` so that "never assigned" is distinguishable
from "assigned to cluster 0".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np

UNASSIGNED = -1


@dataclass(frozen=True)
class Point:
    """Read-only view of a single stored observation."""

    values: np.ndarray
    cluster_index: int
    distance_squared: float

    @property
    def is_assigned(self) -> bool:
        return self.cluster_index != UNASSIGNED


class PointStore:
    """
    Append-only collection of fixed-dimension points plus their
    per-point assignment metadata.

    Args:
        dtype: Floating numpy dtype used for values and distances
    """

    def __init__(self, dtype=np.float64):
        self.dtype = np.dtype(dtype)
        self.stride = 0
        self.values = np.empty((0, 0), dtype=self.dtype)
        self.cluster_index = np.empty(0, dtype=np.int64)
        self.distance_squared = np.empty(0, dtype=self.dtype)

    @property
    def max_distance(self) -> float:
        return float(np.finfo(self.dtype).max)

    def __len__(self) -> int:
        return self.values.shape[0]

    def __getitem__(self, index: int) -> Point:
        return Point(
            values=self.values[index].copy(),
            cluster_index=int(self.cluster_index[index]),
            distance_squared=float(self.distance_squared[index]),
        )

    def __iter__(self) -> Iterator[Point]:
        for i in range(len(self)):
            yield self[i]

    def append(self, rows: np.ndarray) -> None:
        """Append validated rows of shape (n, stride)."""
        n, stride = rows.shape
        if len(self) == 0:
            self.stride = stride
            self.values = rows.astype(self.dtype, copy=True)
        else:
            self.values = np.vstack([self.values, rows.astype(self.dtype)])
        self.cluster_index = np.concatenate(
            [self.cluster_index, np.full(n, UNASSIGNED, dtype=np.int64)]
        )
        self.distance_squared = np.concatenate(
            [self.distance_squared, np.full(n, self.max_distance, dtype=self.dtype)]
        )

    def reset_assignments(self) -> None:
        self.cluster_index.fill(UNASSIGNED)
        self.distance_squared.fill(self.max_distance)

    @property
    def n_scalars(self) -> int:
        return int(self.values.size)


class CentroidStore:
    """
    Ordered collection of cluster centers, indexed 0..k-1.

    The whole array is replaced by the initializer and mutated in place by
    the update step.
    """

    def __init__(self, dtype=np.float64):
        self.dtype = np.dtype(dtype)
        self.positions: Optional[np.ndarray] = None

    def __len__(self) -> int:
        return 0 if self.positions is None else self.positions.shape[0]

    def __getitem__(self, index: int) -> np.ndarray:
        if self.positions is None:
            raise IndexError("No centroids have been initialized")
        return self.positions[index].copy()

    @property
    def is_empty(self) -> bool:
        return self.positions is None

    def replace(self, positions: np.ndarray) -> None:
        self.positions = np.array(positions, dtype=self.dtype, copy=True)

    def clear(self) -> None:
        self.positions = None
