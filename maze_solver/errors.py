"""Failure kinds raised by the solving pipeline. All are recoverable by the caller."""


class MazeSolverError(RuntimeError):
    """Base class; the message is meant to be shown to a user as-is."""


class EmptyOrUnloadableImage(MazeSolverError):
    pass


class NoOpeningsFound(MazeSolverError):
    pass


class NoPathFound(MazeSolverError):
    """Retrying with the same cell size and thresholds reproduces the same grid."""
