"""
Configuration constants for pointcluster.

Runtime choices (target count, growth chunk, log level) come from the
command line; these are only the defaults and fixed formats.
"""

# Number of points by which a cluster's storage grows when it is full.
CLUSTER_CHUNK: int = 10

# Stop the merge loop at a single cluster unless told otherwise.
DEFAULT_TARGET_COUNT: int = 1

LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATEFMT: str = '%H:%M:%S'
