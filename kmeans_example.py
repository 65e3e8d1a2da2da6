"""Example driver for KMeansEngine.

Synthesizes a dataset, runs the assign/update loop until no point moves (or
the round cap is hit), and reports rounds, moved count, inertia and cluster
sizes. Optionally compares the result with scikit-learn's KMeans.
"""

import argparse
import sys
import time

import numpy as np

from kmeans_engine import EngineConfig, KMeansEngine
from kmeans_engine.diagnostics import dump_state
from kmeans_engine.synthetic import HARNESS_RANGES, blobs, harness_buffer


def load_dataset(args):
    """Return (flat_buffer, stride) for the requested dataset."""
    if args.dataset == 'harness':
        return harness_buffer(args.points, seed=args.seed), len(HARNESS_RANGES)
    X, _, _ = blobs(
        n_points=args.points,
        n_features=args.dims,
        n_clusters=args.clusters or 3,
        seed=args.seed,
    )
    return X.ravel(), X.shape[1]


def compare_with_sklearn(engine: KMeansEngine, seed):
    """Fit sklearn KMeans on the same points and print both inertias."""
    from sklearn.cluster import KMeans as SklearnKMeans

    X = engine.points.values
    start = time.time()
    reference = SklearnKMeans(n_clusters=engine.n_clusters, n_init=3, random_state=seed).fit(X)
    elapsed = time.time() - start

    print(f"\nscikit-learn KMeans ({elapsed:.2f}s):")
    print(f"  Inertia: {reference.inertia_:.2f} (engine: {engine.inertia:.2f})")
    print(f"  Iterations: {reference.n_iter_}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Run k-means on synthetic data")
    parser.add_argument('--dataset', choices=['harness', 'blobs'], default='harness',
                        help='Synthetic dataset to cluster (default: harness)')
    parser.add_argument('--points', type=int, default=1000,
                        help='Number of points to generate (default: 1000)')
    parser.add_argument('--dims', type=int, default=2,
                        help='Dimensions for the blobs dataset (default: 2)')
    parser.add_argument('--clusters', type=int, default=0,
                        help='Number of clusters (default: number of dimensions)')
    parser.add_argument('--max-iters', type=int, default=None,
                        help='Round cap for the convergence loop')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for data and centroid seeding')
    parser.add_argument('--policy', choices=['reseed', 'random_point', 'freeze'], default=None,
                        help='Placement of centroids that lose all members')
    parser.add_argument('--min-separation', type=float, default=None,
                        help='Minimum distance between seeded centroids')
    parser.add_argument('--config', default=None,
                        help='JSON file with EngineConfig fields')
    parser.add_argument('--dump', default=None,
                        help='Write the final engine state to this JSON file')
    parser.add_argument('--compare-sklearn', action='store_true',
                        help='Also fit sklearn KMeans and compare inertia')
    parser.add_argument('--quiet', action='store_true',
                        help='Only print the final summary')
    args = parser.parse_args(argv)

    config = EngineConfig.from_json(args.config) if args.config else EngineConfig()
    overrides = {'verbose': not args.quiet}
    if args.seed is not None:
        overrides['random_state'] = args.seed
    if args.max_iters is not None:
        overrides['max_iters'] = args.max_iters
    if args.policy is not None:
        overrides['empty_cluster_policy'] = args.policy
    if args.min_separation is not None:
        overrides['min_separation'] = args.min_separation

    print("K-means Engine Example")
    print("=" * 50)

    buffer, stride = load_dataset(args)
    engine = KMeansEngine(config, **overrides)
    n_values = engine.ingest(buffer, stride=stride)
    print(f"Stored {n_values} values ({engine.n_points} points x {engine.stride} dimensions)")

    engine.set_cluster_count(args.clusters)
    print(f"Clustering into {engine.n_clusters} clusters")

    start = time.time()
    result = engine.run()
    elapsed = time.time() - start

    print(f"\nResults ({elapsed:.2f}s):")
    print(f"  Rounds: {result.n_iter}")
    print(f"  Converged: {result.converged}")
    print(f"  Points moved in last round: {result.moved_count}")
    print(f"  Inertia: {result.inertia:.2f}")

    sizes = engine.get_cluster_sizes()
    print("\nCluster distribution:")
    for k, (size, centroid) in enumerate(zip(sizes, engine.centroids)):
        print(f"  Cluster {k}: {size} points, centroid {np.round(centroid, 2).tolist()}")

    if args.dump:
        dump_state(engine, args.dump)
        print(f"\nState written to {args.dump}")

    if args.compare_sklearn:
        compare_with_sklearn(engine, args.seed)

    return 0 if result.converged else 1


if __name__ == "__main__":
    sys.exit(main())
