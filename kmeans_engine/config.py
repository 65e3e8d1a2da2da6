"""
Engine configuration.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional, Union

import numpy as np

from .errors import InvalidInputError
from .steps import EMPTY_CLUSTER_POLICIES


@dataclass
class EngineConfig:
    """Settings for a KMeansEngine instance."""

    dtype: str = "float64"
    n_clusters: Optional[int] = None       # None -> stride at first ingestion
    max_iters: int = 300                   # Cap for run()
    random_state: Optional[int] = None
    empty_cluster_policy: str = "reseed"
    min_separation: Optional[float] = None
    max_seed_attempts: int = 100
    chunk_size: int = 4096                 # Points per distance matrix
    verbose: bool = False

    def validate(self) -> "EngineConfig":
        try:
            dtype = np.dtype(self.dtype)
        except TypeError as e:
            raise InvalidInputError(f"Unknown dtype: {self.dtype!r}") from e
        if not np.issubdtype(dtype, np.floating):
            raise InvalidInputError(f"dtype must be floating point, got {dtype}")
        if self.n_clusters is not None and self.n_clusters < 0:
            raise InvalidInputError("n_clusters must be non-negative")
        if self.max_iters < 1:
            raise InvalidInputError("max_iters must be at least 1")
        if self.empty_cluster_policy not in EMPTY_CLUSTER_POLICIES:
            raise InvalidInputError(
                f"empty_cluster_policy must be one of {EMPTY_CLUSTER_POLICIES}, "
                f"got {self.empty_cluster_policy!r}"
            )
        if self.min_separation is not None and self.min_separation < 0:
            raise InvalidInputError("min_separation must be non-negative")
        if self.max_seed_attempts < 1:
            raise InvalidInputError("max_seed_attempts must be at least 1")
        if self.chunk_size < 1:
            raise InvalidInputError("chunk_size must be at least 1")
        return self

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "EngineConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise InvalidInputError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data).validate()

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "EngineConfig":
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))
