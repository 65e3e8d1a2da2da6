"""
K-means estimator built on KMeansEngine.
Bounding-box seeding, restarts and a fit/predict interface.
"""

import numpy as np
from typing import Optional

from .engine import KMeansEngine
from .errors import InvalidInputError, NotFittedError


class KMeans:
    """
    K-means clustering estimator.

    Features:
    - Uniform seeding inside the data's bounding box
    - Multiple initialization attempts, best inertia wins
    - Stops when no point changes cluster, or at max_iters
    - Configurable handling of clusters that lose all members
    """

    def __init__(
        self,
        n_clusters: int,
        max_iters: int = 300,
        n_init: int = 1,
        random_state: Optional[int] = None,
        empty_cluster_policy: str = 'random_point',
        min_separation: Optional[float] = None,
        dtype=np.float64,
        verbose: bool = False
    ):
        """
        Initialize K-means clustering.

        Args:
            n_clusters: Number of clusters
            max_iters: Maximum number of assign/update rounds per run
            n_init: Number of different initializations to try
            random_state: Random seed for reproducibility
            empty_cluster_policy: 'reseed', 'random_point' or 'freeze'
            min_separation: Minimum distance between seeded centroids
            dtype: Floating point type used for computation
            verbose: Whether to print progress information
        """
        if n_clusters < 1:
            raise InvalidInputError("n_clusters must be at least 1")
        if n_init < 1:
            raise InvalidInputError("n_init must be at least 1")

        self.n_clusters = n_clusters
        self.max_iters = max_iters
        self.n_init = n_init
        self.random_state = random_state
        self.empty_cluster_policy = empty_cluster_policy
        self.min_separation = min_separation
        self.dtype = np.dtype(dtype)
        self.verbose = verbose

        # Results
        self.cluster_centers_ = None
        self.labels_ = None
        self.inertia_ = None
        self.n_iter_ = None
        self.converged_ = None
        self.engine_ = None

    def _make_engine(self, seed) -> KMeansEngine:
        return KMeansEngine(
            dtype=self.dtype.name,
            n_clusters=self.n_clusters,
            max_iters=self.max_iters,
            random_state=seed,
            empty_cluster_policy=self.empty_cluster_policy,
            min_separation=self.min_separation,
            verbose=self.verbose,
        )

    def fit(self, X) -> 'KMeans':
        """
        Fit K-means clustering to the data.

        Args:
            X: Input data of shape (n_samples, n_features)

        Returns:
            self
        """
        X = np.asarray(X, dtype=self.dtype)
        if X.ndim != 2:
            raise InvalidInputError(f"Expected a 2-D array, got shape {X.shape}")

        if self.verbose:
            print(f"Fitting K-means with {self.n_clusters} clusters on {X.shape[0]} samples...")

        seeds = np.random.SeedSequence(self.random_state).spawn(self.n_init)
        best_inertia = float('inf')
        best_engine = None
        best_result = None

        # Try multiple initializations
        for init_run, seed in enumerate(seeds):
            if self.verbose and self.n_init > 1:
                print(f"Initialization {init_run + 1}/{self.n_init}")

            engine = self._make_engine(seed)
            engine.ingest_rows(X)
            result = engine.run()

            if result.inertia < best_inertia:
                best_inertia = result.inertia
                best_engine = engine
                best_result = result

        self.engine_ = best_engine
        self.cluster_centers_ = best_engine.centroids
        self.labels_ = best_engine.labels
        self.inertia_ = best_result.inertia
        self.n_iter_ = best_result.n_iter
        self.converged_ = best_result.converged

        if self.verbose:
            print(f"Final inertia: {self.inertia_:.2f}")

        return self

    def predict(self, X) -> np.ndarray:
        """
        Predict cluster labels for new data.

        Args:
            X: Input data of shape (n_samples, n_features)

        Returns:
            Cluster labels
        """
        if self.engine_ is None:
            raise NotFittedError("Model must be fitted before prediction")

        return self.engine_.predict(X)

    def fit_predict(self, X) -> np.ndarray:
        """
        Fit the model and predict cluster labels.

        Args:
            X: Input data of shape (n_samples, n_features)

        Returns:
            Cluster labels
        """
        return self.fit(X).labels_

    def get_cluster_info(self) -> dict:
        """Get information about the clustering results."""
        if self.engine_ is None:
            raise NotFittedError("Model must be fitted first")

        cluster_sizes = self.engine_.get_cluster_sizes()

        return {
            'n_clusters': self.n_clusters,
            'inertia': self.inertia_,
            'n_iterations': self.n_iter_,
            'converged': self.converged_,
            'cluster_sizes': {k: int(size) for k, size in enumerate(cluster_sizes)},
            'avg_cluster_size': float(np.mean(cluster_sizes)),
            'std_cluster_size': float(np.std(cluster_sizes)),
            'min_cluster_size': int(np.min(cluster_sizes)),
            'max_cluster_size': int(np.max(cluster_sizes))
        }
