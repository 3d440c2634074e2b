"""
Exception hierarchy for pointcluster.

AllocationError is fatal for a clustering run. PreconditionViolation signals
caller misuse (bad index, empty cluster, non-positive target).
"""


class PointClusterError(Exception):
    """Base class for all pointcluster errors."""


class AllocationError(PointClusterError, MemoryError):
    """Storage for a cluster could not be obtained."""


class PreconditionViolation(PointClusterError, ValueError):
    """An operation was called with arguments it does not accept."""


class LoadError(PointClusterError, ValueError):
    """The point source could not be read or parsed."""
