"""
Command-line driver: load points, cluster them, print the clusters.

Usage:
    pointcluster <points.txt> [N] [--chunk=10] [--plot] [--dendrogram] [-v]
"""

import argparse
import logging
import sys
from typing import List, Optional

from .agglomerative import agglomerative
from .config import CLUSTER_CHUNK, DEFAULT_TARGET_COUNT
from .errors import PointClusterError
from .io import load_clusters, print_clusters
from .logging_config import setup_logging

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pointcluster",
        description="Agglomerative clustering of 2-D points by average pairwise distance",
    )
    parser.add_argument("input", help="Point file, one 'id x y' per line")
    parser.add_argument(
        "clusters",
        nargs="?",
        type=_positive_int,
        default=DEFAULT_TARGET_COUNT,
        help=f"Number of clusters to stop at (default: {DEFAULT_TARGET_COUNT})",
    )
    parser.add_argument(
        "--chunk",
        type=_positive_int,
        default=CLUSTER_CHUNK,
        help=f"Cluster storage growth increment (default: {CLUSTER_CHUNK})",
    )
    parser.add_argument("--plot", action="store_true", help="Show a scatter plot of the result")
    parser.add_argument(
        "--dendrogram",
        action="store_true",
        help="Show the merge dendrogram (requires N == 1)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every merge")
    parser.add_argument("--log-file", help="Also write log records to this file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.dendrogram and args.clusters != 1:
        parser.error("--dendrogram needs the full merge history, use N == 1")

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)

    try:
        collection = load_clusters(args.input, chunk=args.chunk)
        leaf_labels = [str(cluster[0].id) for cluster in collection]
        collection, Z = agglomerative(
            collection,
            n_clusters=args.clusters,
            return_linkage=args.dendrogram,
        )
    except PointClusterError as exc:
        logger.debug("Clustering failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print_clusters(collection)

    if args.plot or args.dendrogram:
        import matplotlib.pyplot as plt
        from .plotting import plot_clusters, plot_dendrogram

        if args.plot:
            fig, ax = plt.subplots()
            plot_clusters(ax, collection)
        if args.dendrogram and Z is not None and len(Z):
            plot_dendrogram(Z, labels=leaf_labels)
        plt.show()

    return 0
