"""
Reading point lists and printing clusters.

Input format, one point per line:

    count=3        (optional header: load only the first N points)
    1 0 0
    2 10 0
    3 11.5 0.25

Output format:

    Clusters:
    cluster 0: 1[0,0]
    cluster 1: 2[10,0] 3[11.5,0.25]
"""

import logging
import re
import sys
from pathlib import Path
from typing import Iterable, List, Optional, TextIO, Union

import numpy as np

from .config import CLUSTER_CHUNK
from .errors import LoadError
from .types import POINT_DTYPE, Point, Cluster, ClusterCollection

__all__ = [
    "parse_points",
    "load_clusters",
    "format_cluster",
    "print_cluster",
    "print_clusters",
]

logger = logging.getLogger(__name__)

_COUNT_HEADER = re.compile(r"^count\s*=\s*(\S+)$")

# ids are stored in the cluster's int64 field
_ID_RANGE = np.iinfo(POINT_DTYPE["id"])


def _parse_point(line: str, lineno: int, source: str) -> Point:
    fields = line.split()
    if len(fields) != 3:
        raise LoadError(f"{source}:{lineno}: expected 'id x y', got {line!r}")
    try:
        point = Point(int(fields[0]), float(fields[1]), float(fields[2]))
    except ValueError as exc:
        raise LoadError(f"{source}:{lineno}: invalid point {line!r}") from exc
    if not _ID_RANGE.min <= point.id <= _ID_RANGE.max:
        raise LoadError(f"{source}:{lineno}: id {point.id} out of range "
                        f"[{_ID_RANGE.min}, {_ID_RANGE.max}]")
    return point


def parse_points(lines: Iterable[str], source: str = "<input>") -> List[Point]:
    """
    Parse point lines into Points, in order.

    Blank lines are skipped. An optional leading ``count=N`` line limits the
    result to the first N points and requires at least N to be present.

    Args:
        lines: Text lines (trailing newlines allowed).
        source: Name used in error messages.

    Returns:
        Parsed points.

    Raises:
        LoadError: on a malformed line, a duplicate id or a short file.
    """
    points: List[Point] = []
    seen = set()
    limit: Optional[int] = None
    header_allowed = True

    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line:
            continue

        if header_allowed:
            header_allowed = False
            match = _COUNT_HEADER.match(line)
            if match:
                try:
                    limit = int(match.group(1))
                except ValueError as exc:
                    raise LoadError(f"{source}:{lineno}: invalid count {match.group(1)!r}") from exc
                if limit < 0:
                    raise LoadError(f"{source}:{lineno}: count must not be negative")
                continue

        if limit is not None and len(points) == limit:
            break

        point = _parse_point(line, lineno, source)
        if point.id in seen:
            raise LoadError(f"{source}:{lineno}: duplicate id {point.id}")
        seen.add(point.id)
        points.append(point)

    if limit is not None and len(points) < limit:
        raise LoadError(f"{source}: header announces {limit} points, found {len(points)}")
    return points


def load_clusters(path: Union[str, Path], chunk: int = CLUSTER_CHUNK) -> ClusterCollection:
    """
    Load a point file into a collection of singleton clusters.

    Args:
        path: Point file to read.
        chunk: Growth increment given to every cluster.

    Returns:
        One cluster per loaded point, in file order. len() of the result is
        the number of loaded points.

    Raises:
        LoadError: if the file cannot be read or parsed.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            points = parse_points(handle, source=str(path))
    except OSError as exc:
        raise LoadError(f"cannot read {path}: {exc}") from exc

    logger.info("Loaded %d points from %s", len(points), path)
    return ClusterCollection.from_points(points, chunk=chunk)


def format_cluster(cluster: Cluster) -> str:
    """Render a cluster's points as space separated ``id[x,y]`` items."""
    return " ".join(f"{p.id}[{p.x:g},{p.y:g}]" for p in cluster)


def print_cluster(cluster: Cluster, file: Optional[TextIO] = None) -> None:
    print(format_cluster(cluster), file=file if file is not None else sys.stdout)


def print_clusters(collection: ClusterCollection, count: Optional[int] = None,
                   file: Optional[TextIO] = None) -> None:
    """
    Print the first `count` clusters of a collection (all by default).

    Args:
        collection: Clusters to print.
        count: Number of leading clusters to print.
        file: Destination stream, stdout by default.
    """
    out = file if file is not None else sys.stdout
    if count is None:
        count = len(collection)
    print("Clusters:", file=out)
    for index in range(min(count, len(collection))):
        print(f"cluster {index}: {format_cluster(collection[index])}", file=out)
