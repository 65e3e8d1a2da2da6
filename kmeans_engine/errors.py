"""
Exceptions raised by the clustering engine.
"""


class KMeansEngineError(Exception):
    """Base class for all engine errors."""


class InvalidInputError(KMeansEngineError, ValueError):
    """Rejected input buffer or configuration value. Engine state is unchanged."""


class NotReadyError(KMeansEngineError, RuntimeError):
    """An operation was called before its preconditions were met."""


class InitializationError(KMeansEngineError):
    """Centroids could not be seeded with the requested minimum separation."""


class NotFittedError(KMeansEngineError, ValueError):
    """The estimator was used before ``fit``."""
