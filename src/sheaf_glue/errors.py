"""Exception hierarchy.

Construction errors are fatal precondition violations. Cover errors are
recoverable: the caller may adjust the cover and retry.
"""


class SheafGlueError(ValueError):
    """Base class for every error raised by sheaf_glue."""
    pass


class ConstructionError(SheafGlueError):
    """Raised when a space is assembled from inconsistent parts."""
    pass


class CoverError(SheafGlueError):
    """Raised when a cover cannot be glued."""
    pass


class IncompatibleCover(CoverError):
    """Cover entries ``i`` and ``j`` disagree on their overlap."""

    def __init__(self, i: int, j: int, overlap=None):
        self.i = i
        self.j = j
        self.overlap = overlap
        msg = f"Cover entries {i} and {j} disagree on their overlap"
        if overlap is not None:
            msg += f" ({len(overlap)} points)"
        super().__init__(msg)

    @property
    def pair(self):
        return (self.i, self.j)


class NonOpenDomain(CoverError):
    """Cover entry ``index`` has a domain that is not open in the space."""

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Cover entry {index} has a domain that is not open in the space")
