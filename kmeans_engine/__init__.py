"""
K-means clustering engine for N-dimensional numeric data.
"""

from .version import __version__
from .config import EngineConfig
from .distance import squared_distance, pairwise_squared_distances
from .engine import KMeansEngine, ConvergenceResult
from .errors import (
    KMeansEngineError,
    InvalidInputError,
    NotReadyError,
    InitializationError,
    NotFittedError,
)
from .kmeans import KMeans
from .store import UNASSIGNED, Point

__all__ = [
    "__version__",
    "EngineConfig",
    "squared_distance",
    "pairwise_squared_distances",
    "KMeansEngine",
    "ConvergenceResult",
    "KMeansEngineError",
    "InvalidInputError",
    "NotReadyError",
    "InitializationError",
    "NotFittedError",
    "KMeans",
    "UNASSIGNED",
    "Point",
]
