"""
Progress formatting and state dumps for debugging a clustering run.
"""

import json
from pathlib import Path
from typing import Optional, Union


def format_round(round_index: int, moved_count: int, inertia: Optional[float]) -> str:
    """One line of convergence-loop progress."""
    inertia_text = "n/a" if inertia is None else f"{inertia:.4f}"
    return f"Round {round_index}: {moved_count} points moved, inertia {inertia_text}"


def dump_state(engine, path: Union[str, Path], include_points: bool = True) -> dict:
    """
    Write the engine's points, centroids and assignments to a JSON file.

    The file is a debugging aid only and is never read back.

    Args:
        engine: KMeansEngine to dump
        path: Output file
        include_points: Also write every point with its assignment

    Returns:
        The dumped state as a dict
    """
    bounds = engine.bounding_box
    centroids = engine.centroids

    state = {
        'stride': engine.stride,
        'n_clusters': engine.n_clusters,
        'n_points': engine.n_points,
        'moved_count': engine.moved_count,
        'inertia': engine.inertia,
        'bounding_box': None if bounds is None else {
            'lower': bounds[0].tolist(),
            'upper': bounds[1].tolist(),
        },
        'centroids': None if centroids is None else centroids.tolist(),
        'cluster_sizes': engine.get_cluster_sizes().tolist(),
    }

    if include_points:
        state['points'] = [
            {
                'values': point.values.tolist(),
                'cluster_index': point.cluster_index,
                'distance_squared': point.distance_squared if point.is_assigned else None,
            }
            for point in engine.points
        ]

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(state, f, indent=2)

    return state
