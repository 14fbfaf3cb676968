"""
Polygon Area Game Error Hierarchy

Everything the solver raises derives from PolyAreaError. Each class carries
a fixed ``code`` and keyword context describing the offending input, so a
caller can log the failure without parsing the message.

Usage:
    from polyarea.errors import InvalidParametersError

    try:
        solver = MinimaxSolver(GameParameters.create(n, k))
    except InvalidParametersError as e:
        logger.warning(f"Rejected input: {e}")
"""

from typing import Any

__all__ = [
    "ConfigurationError",
    "InvalidParametersError",
    "InvalidStateError",
    "PolyAreaError",
    "SearchLimitError",
]


class PolyAreaError(Exception):
    """Base exception for all solver errors.

    Keyword arguments other than ``message`` become ``context``; ``None``
    values are left out.
    """
    code: str = "POLYAREA_ERROR"

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context = {key: value for key, value in context.items() if value is not None}

    def __str__(self) -> str:
        text = f"[{self.code}] {self.message}"
        if not self.context:
            return text
        details = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{text} ({details})"


# =============================================================================
# Input Errors
# =============================================================================


class InvalidParametersError(PolyAreaError):
    """Game parameters that do not describe a playable game.

    Raised before any search starts when ``k < 3`` or ``n < k + 2``.
    """
    code: str = "INVALID_PARAMETERS"

    def __init__(self, message: str, n: Any = None, k: Any = None):
        super().__init__(message, n=n, k=k)
        self.n = n
        self.k = k


class InvalidStateError(PolyAreaError):
    """Malformed gap sequence.

    Raised when a gap sequence is empty, contains a gap smaller than one,
    or does not sum to the number of points on the circle.
    """
    code: str = "INVALID_STATE"


class ConfigurationError(PolyAreaError):
    """Invalid solver configuration or environment override."""
    code: str = "CONFIGURATION_ERROR"


# =============================================================================
# Search Errors
# =============================================================================


class SearchLimitError(PolyAreaError):
    """Search exceeded its node or wall-clock budget."""
    code: str = "SEARCH_LIMIT"

    def __init__(
        self,
        message: str,
        nodes_visited: int | None = None,
        elapsed_seconds: float | None = None,
    ):
        if elapsed_seconds is not None:
            elapsed_seconds = round(elapsed_seconds, 3)
        super().__init__(
            message, nodes_visited=nodes_visited, elapsed_seconds=elapsed_seconds
        )
        self.nodes_visited = nodes_visited
        self.elapsed_seconds = elapsed_seconds
