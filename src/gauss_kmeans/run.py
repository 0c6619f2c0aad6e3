# run.py

import argparse
import os

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from loguru import logger

from gauss_kmeans.clusterer import cluster
from gauss_kmeans.comparison import compare
from gauss_kmeans.config import DEFAULT_CONFIG
from gauss_kmeans.metrics import compute_metrics
from gauss_kmeans.plotter import plot_clusters, plot_distributions
from gauss_kmeans.rng import as_random_state
from gauss_kmeans.selection import compute_metrics_over_k, detect_elbow, plot_elbow
from gauss_kmeans.synthetic_data import (
    default_group_specs,
    flatten_distributions,
    generate,
    group_centers,
)
from gauss_kmeans.transforms import DIRECTIONS, explode_distribution, nudge


def _parse_move(value):
    """LABEL:DIRECTION[:STEPS], e.g. blue:right:5"""
    parts = value.split(":")
    if len(parts) not in (2, 3):
        raise argparse.ArgumentTypeError(f"expected LABEL:DIRECTION[:STEPS], got {value!r}")
    label, direction = parts[0], parts[1].lower()
    if direction not in DIRECTIONS:
        raise argparse.ArgumentTypeError(f"unknown direction {direction!r}")
    try:
        steps = int(parts[2]) if len(parts) == 3 else 1
    except ValueError:
        raise argparse.ArgumentTypeError(f"steps must be an integer, got {parts[2]!r}")
    return label, direction, steps


def _positive_int(value):
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {number}")
    return number


def build_parser():
    parser = argparse.ArgumentParser(
        description="Gaussian overlap playground: generate, perturb, cluster and compare k"
    )
    parser.add_argument("--sample-size", type=int, default=DEFAULT_CONFIG.sample_size,
                        help="Points per group")
    parser.add_argument("--std-dev", type=float, default=DEFAULT_CONFIG.std_dev)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--move", type=_parse_move, action="append", default=[],
                        metavar="LABEL:DIRECTION[:STEPS]")
    parser.add_argument("--explode", action="append", default=[], metavar="LABEL")
    parser.add_argument("--k", type=int, default=DEFAULT_CONFIG.main_k)
    parser.add_argument("--alt-k", type=int, nargs="+", default=list(DEFAULT_CONFIG.alternative_ks))
    parser.add_argument("--sweep", type=_positive_int, default=None, metavar="K_MAX",
                        help="Also sweep k=1..K_MAX and report the elbow")
    parser.add_argument("--plots", default=None, metavar="DIR",
                        help="Write PNG plots to this directory")
    return parser


def _print_result(title, result, metrics):
    print(f"\n=== {title} ===")
    print(f"Iterations: {result.iterations}")
    print(f"Sum of Squared Errors (SSE): {result.sse:.2f}")
    print(f"Avg intra distance: {metrics.average_intra_distance:.3f}")
    print(f"Avg centroid separation: {metrics.average_inter_centroid_distance:.3f}")
    print(f"Min centroid separation: {metrics.min_inter_centroid_distance:.3f}")
    print(f"Score (separation / intra): {metrics.score:.3f}")


def run_session(args):
    rs = as_random_state(args.seed)

    # 1) Generate the groups
    specs = default_group_specs(std_dev=args.std_dev)
    distributions, overlap = generate(args.sample_size, specs, random_state=rs)
    centers = group_centers(specs)
    print(f"Initial sample size/group: {args.sample_size}")
    print(f"Initial overlap: {overlap:.1f}%")

    # 2) Perturb
    for label, direction, steps in args.move:
        for _ in range(steps):
            distributions = nudge(distributions, label, direction)
    for label in args.explode:
        distributions = explode_distribution(distributions, label, random_state=rs)

    X, _ = flatten_distributions(distributions)

    # 3) Main clustering
    main = cluster(X, args.k, random_state=rs)
    main_metrics = compute_metrics(X, main.assignments, main.centroids)
    _print_result(f"K-MEANS (k={main.k})", main, main_metrics)

    # 4) Reclusters and recommendations
    comparisons = []
    for alt_k in args.alt_k:
        alt = cluster(X, alt_k, random_state=rs)
        alt_metrics = compute_metrics(X, alt.assignments, alt.centroids)
        _print_result(f"COMPARISON (k={alt.k})", alt, alt_metrics)
        print(f"SSE is {'lower' if alt.sse < main.sse else 'higher'} than with k={main.k}.")

        comparison = compare(main, main_metrics, alt, alt_metrics)
        print(f"Best split: k={comparison.recommended_k}. {comparison.explanation}")
        comparisons.append(comparison)

    sweep_df = None
    if args.sweep is not None:
        if args.sweep < 1:
            raise ValueError(f"--sweep must be >= 1, got {args.sweep}")
        sweep_df = compute_metrics_over_k(X, range(1, args.sweep + 1), random_state=rs)
        print("\n=== K SWEEP ===")
        print(sweep_df.to_string(index=False))
        print(f"Elbow k: {detect_elbow(sweep_df)}")

    if args.plots:
        os.makedirs(args.plots, exist_ok=True)
        ax = plot_distributions(distributions, centers, title="Generated groups",
                                savepath=os.path.join(args.plots, "distributions.png"))
        plt.close(ax.figure)
        ax = plot_clusters(X, main.assignments, main.centroids, title=f"K-Means (k={main.k})",
                           savepath=os.path.join(args.plots, f"kmeans_k{main.k}.png"))
        plt.close(ax.figure)
        if sweep_df is not None:
            fig = plot_elbow(sweep_df, detect_elbow(sweep_df))
            fig.savefig(os.path.join(args.plots, "elbow.png"))
            plt.close(fig)
        logger.info(f"Plots written to {args.plots}")

    return main, comparisons


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        run_session(args)
    except (ValueError, KeyError) as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    main()
