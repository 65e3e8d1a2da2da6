"""
Lloyd's algorithm clustering engine.

The engine owns a point store and a centroid store and exposes the
individual steps of the algorithm (ingest, initialize, assign, update) as
well as a convergence loop that drives them. One instance is meant to have a
single owner; concurrent callers are serialized by an internal lock that is
held for each step and for the whole of ``run()``.
"""

from __future__ import annotations

import functools
import threading
from dataclasses import dataclass, replace
from typing import Callable, Optional, Tuple

import numpy as np

from .config import EngineConfig
from .diagnostics import format_round
from .errors import InvalidInputError, NotReadyError
from .initializer import bounding_box, seed_centroids
from .steps import assign_step, compute_inertia, update_step
from .store import UNASSIGNED, CentroidStore, PointStore


@dataclass
class ConvergenceResult:
    """Outcome of a call to ``KMeansEngine.run``."""

    n_iter: int
    converged: bool
    moved_count: int
    inertia: float


def _locked(method):
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)
    return wrapper


class KMeansEngine:
    """
    Partition N-dimensional points into k clusters by iterative centroid
    refinement.

    Typical use::

        engine = KMeansEngine(random_state=0)
        engine.ingest(buffer, stride=3)
        engine.set_cluster_count(4)
        result = engine.run()
        labels = engine.labels

    Args:
        config: Base configuration; defaults to ``EngineConfig()``
        **overrides: Individual ``EngineConfig`` fields overriding ``config``
    """

    def __init__(self, config: Optional[EngineConfig] = None, **overrides):
        config = config or EngineConfig()
        try:
            config = replace(config, **overrides)
        except TypeError as e:
            raise InvalidInputError(str(e)) from e
        self.config = config.validate()
        self.verbose = self.config.verbose

        dtype = np.dtype(self.config.dtype)
        self._lock = threading.RLock()
        self._points = PointStore(dtype)
        self._centroids = CentroidStore(dtype)
        self._rng = np.random.default_rng(self.config.random_state)

        self._n_clusters = self.config.n_clusters or 0
        self._k_explicit = bool(self.config.n_clusters)
        self._moved_count: Optional[int] = None
        self._bounds: Optional[Tuple[np.ndarray, np.ndarray]] = None
        self._stale = False
        self._assigned = False
        self.empty_clusters = []

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def _validate_buffer(self, buffer, stride, length) -> np.ndarray:
        if buffer is None:
            raise InvalidInputError("Input buffer is None")
        if isinstance(stride, bool) or not isinstance(stride, (int, np.integer)) or stride < 1:
            raise InvalidInputError(f"Stride must be a positive integer, got {stride!r}")

        try:
            flat = np.asarray(buffer, dtype=self._points.dtype)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Input buffer is not numeric: {e}") from e
        if flat.ndim != 1:
            raise InvalidInputError(
                f"Input buffer must be flat, got shape {flat.shape}; use ingest_rows() for 2-D data"
            )

        if length is None:
            length = flat.shape[0]
        if isinstance(length, bool) or not isinstance(length, (int, np.integer)):
            raise InvalidInputError(f"Length must be an integer, got {length!r}")
        if length < 1:
            raise InvalidInputError("Input buffer is empty")
        if length > flat.shape[0]:
            raise InvalidInputError(
                f"Length {length} exceeds buffer size {flat.shape[0]}"
            )
        if length % stride:
            raise InvalidInputError(
                f"Length {length} is not a multiple of stride {stride}; "
                f"trailing {length % stride} value(s) do not form a full point"
            )
        if self._points.stride and stride != self._points.stride:
            raise InvalidInputError(
                f"Stride {stride} does not match the stride of stored points ({self._points.stride})"
            )

        rows = flat[:length].reshape(-1, stride)
        if not np.all(np.isfinite(rows)):
            raise InvalidInputError("Input buffer contains NaN or infinite values")
        return rows

    @_locked
    def ingest(self, buffer, stride: int, length: Optional[int] = None) -> int:
        """
        Split a flat buffer into points of ``stride`` values and store them.

        Args:
            buffer: Flat sequence or array of numbers
            stride: Number of dimensions per point
            length: Number of values of ``buffer`` to use (default: all)

        Returns:
            Total number of scalar values stored (points x stride)

        Raises:
            InvalidInputError: if the buffer, length or stride is unusable.
                Nothing is stored in that case.
        """
        rows = self._validate_buffer(buffer, stride, length)

        self._points.append(rows)
        self._bounds = None
        if not self._k_explicit and not self._n_clusters:
            self._n_clusters = int(stride)

        if self.verbose:
            print(f"Ingested {rows.shape[0]} points with {stride} dimensions "
                  f"({len(self._points)} total)")
        return self._points.n_scalars

    def ingest_rows(self, rows) -> int:
        """Ingest a 2-D array of shape (n_points, stride)."""
        rows = np.asarray(rows)
        if rows.ndim != 2:
            raise InvalidInputError(f"Expected a 2-D array, got shape {rows.shape}")
        return self.ingest(rows.ravel(), stride=rows.shape[1])

    # ------------------------------------------------------------------
    # Cluster count and initialization
    # ------------------------------------------------------------------

    @_locked
    def set_cluster_count(self, n_clusters: int) -> None:
        """
        Set the number of clusters. Zero is ignored.

        Changing k after initialization leaves the centroids stale until
        ``initialize()`` is called again.
        """
        if isinstance(n_clusters, bool) or not isinstance(n_clusters, (int, np.integer)):
            raise InvalidInputError(f"Cluster count must be an integer, got {n_clusters!r}")
        if not n_clusters:
            return
        if n_clusters < 0:
            raise InvalidInputError(f"Cluster count must be positive, got {n_clusters}")

        if self.verbose:
            print(f"Setting the number of clusters to {n_clusters}")
        if n_clusters != self._n_clusters and not self._centroids.is_empty:
            self._stale = True
        self._n_clusters = int(n_clusters)
        self._k_explicit = True

    @_locked
    def initialize(self) -> None:
        """
        Seed the centroids uniformly inside the bounding box of the points.

        Replaces any existing centroids and clears all point assignments.
        """
        if not self._points.stride or not self._n_clusters or not len(self._points):
            raise NotReadyError("Ingest data and set a cluster count before initializing")

        lower, upper = self.bounding_box
        positions = seed_centroids(
            lower,
            upper,
            self._n_clusters,
            self._rng,
            min_separation=self.config.min_separation,
            max_attempts=self.config.max_seed_attempts,
        )
        self._centroids.replace(positions)
        self._points.reset_assignments()
        self._stale = False
        self._assigned = False
        self._moved_count = None
        self.empty_clusters = []

        if self.verbose:
            print(f"Initialized {self._n_clusters} centroids inside the bounding box")

    def _require_centroids(self) -> None:
        if self._centroids.is_empty:
            raise NotReadyError("Centroids have not been initialized")
        if self._stale:
            raise NotReadyError(
                f"Cluster count changed to {self._n_clusters}; call initialize() again"
            )

    # ------------------------------------------------------------------
    # Lloyd steps
    # ------------------------------------------------------------------

    @_locked
    def assign(self) -> None:
        """Assign every point to its nearest centroid and record how many moved."""
        self._require_centroids()
        self._moved_count = assign_step(
            self._points.values,
            self._centroids.positions,
            self._points.cluster_index,
            self._points.distance_squared,
            chunk_size=self.config.chunk_size,
        )
        self._assigned = True

    @_locked
    def update_centroids(self) -> None:
        """Move every centroid to the mean of its members."""
        self._require_centroids()
        if not self._assigned:
            raise NotReadyError("Call assign() before update_centroids()")

        self.empty_clusters = update_step(
            self._points.values,
            self._centroids.positions,
            self._points.cluster_index,
            self.bounding_box,
            self._rng,
            policy=self.config.empty_cluster_policy,
        )
        if self.verbose and self.empty_clusters:
            print(f"Empty clusters {self.empty_clusters} handled with "
                  f"'{self.config.empty_cluster_policy}' policy")

    @property
    def moved_count(self) -> Optional[int]:
        """Points that changed cluster in the last assignment; None before the first."""
        return self._moved_count

    def get_num_points_moved(self) -> Optional[int]:
        return self._moved_count

    # ------------------------------------------------------------------
    # Convergence loop
    # ------------------------------------------------------------------

    @_locked
    def run(
        self,
        max_iters: Optional[int] = None,
        callback: Optional[Callable[[int, int, float], None]] = None,
    ) -> ConvergenceResult:
        """
        Alternate assignment and update until no point moves.

        Centroids are initialized first when missing or stale. The loop stops
        as soon as an assignment moves no point; the centroids are then the
        means of their members. Otherwise it stops after ``max_iters`` rounds,
        skipping the last update so labels and inertia match the centroids.

        Args:
            max_iters: Round cap (default: ``config.max_iters``)
            callback: Called as ``callback(round, moved_count, inertia)``
                after each assignment

        Returns:
            ConvergenceResult
        """
        if max_iters is None:
            max_iters = self.config.max_iters
        if max_iters < 1:
            raise InvalidInputError("max_iters must be at least 1")
        if self._centroids.is_empty or self._stale:
            self.initialize()

        converged = False
        n_iter = 0
        for n_iter in range(1, max_iters + 1):
            self.assign()
            current_inertia = self.inertia
            if callback is not None:
                callback(n_iter, self._moved_count, current_inertia)
            if self.verbose:
                print(format_round(n_iter, self._moved_count, current_inertia))
            if self._moved_count == 0:
                converged = True
                break
            # Labels and distances must describe the returned centroids
            if n_iter == max_iters:
                break
            self.update_centroids()

        if self.verbose:
            state = "Converged" if converged else "Stopped at iteration cap"
            print(f"{state} after {n_iter} rounds")

        return ConvergenceResult(
            n_iter=n_iter,
            converged=converged,
            moved_count=self._moved_count,
            inertia=self.inertia,
        )

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def stride(self) -> int:
        return self._points.stride

    @property
    def n_clusters(self) -> int:
        return self._n_clusters

    @property
    def n_points(self) -> int:
        return len(self._points)

    @property
    def points(self) -> PointStore:
        return self._points

    @property
    def centroids(self) -> Optional[np.ndarray]:
        if self._centroids.is_empty:
            return None
        return self._centroids.positions.copy()

    @property
    def labels(self) -> np.ndarray:
        return self._points.cluster_index.copy()

    @property
    def distances_squared(self) -> np.ndarray:
        return self._points.distance_squared.copy()

    @property
    def inertia(self) -> Optional[float]:
        """Within-cluster sum of squared distances; None before assignment."""
        if not self._assigned:
            return None
        return compute_inertia(self._points.distance_squared, self._points.cluster_index)

    @property
    def bounding_box(self) -> Optional[Tuple[np.ndarray, np.ndarray]]:
        if not len(self._points):
            return None
        if self._bounds is None:
            self._bounds = bounding_box(self._points.values)
        return self._bounds

    def get_cluster_sizes(self) -> np.ndarray:
        """Number of assigned points per centroid."""
        labels = self._points.cluster_index
        return np.bincount(labels[labels != UNASSIGNED], minlength=self._n_clusters)

    def predict(self, X) -> np.ndarray:
        """Index of the nearest centroid for each row of ``X``, without storing it."""
        self._require_centroids()
        X = np.asarray(X, dtype=self._points.dtype)
        if X.ndim == 1:
            X = X.reshape(1, -1)
        if X.shape[1] != self.stride:
            raise InvalidInputError(
                f"Expected {self.stride} dimensions, got {X.shape[1]}"
            )
        labels = np.full(X.shape[0], UNASSIGNED, dtype=np.int64)
        distances = np.empty(X.shape[0], dtype=self._points.dtype)
        assign_step(X, self._centroids.positions, labels, distances,
                    chunk_size=self.config.chunk_size)
        return labels
