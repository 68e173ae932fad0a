"""Exception taxonomy for tool operations.

Library code raises these; the tool boundary turns every exception into a
``{"success": False, "error": ...}`` result.
"""


class MetisError(Exception):
    """Base class for metis-mcp-core errors."""

    pass


class InvalidArgumentError(MetisError, ValueError):
    """A parameter is missing or out of range.

    Examples: non-positive chunk size, overlap >= chunk size, unknown provider.
    """

    pass


class PatternLimitError(MetisError):
    """A text scan produced more matches than the configured cap."""

    pass


class NotInitializedError(MetisError):
    """An operation needs a handle (pool, collection, model) that was never set up."""

    pass


__all__ = [
    "MetisError",
    "InvalidArgumentError",
    "PatternLimitError",
    "NotInitializedError",
]
