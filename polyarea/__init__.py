"""Exact solver for the polygon area game.

Counters sit on a regular n-gon of marked points; a move slides one counter
so that the counters' polygon strictly grows. The player who cannot move is
stuck. ``solve(n, k)`` reports which player wins under optimal play.
"""

from polyarea.ai import (
    GraphRecorder,
    MinimaxSolver,
    canonical_key,
    legal_moves,
    solve,
)
from polyarea.config import SolverConfig
from polyarea.errors import (
    ConfigurationError,
    InvalidParametersError,
    InvalidStateError,
    PolyAreaError,
    SearchLimitError,
)
from polyarea.geometry import CircleTable, area_of, coordinates_of, polygon_area
from polyarea.models import (
    CandidateMove,
    GameParameters,
    SolveResult,
    TerminalConvention,
    Winner,
)

__version__ = "0.1.0"

__all__ = [
    "CandidateMove",
    "CircleTable",
    "ConfigurationError",
    "GameParameters",
    "GraphRecorder",
    "InvalidParametersError",
    "InvalidStateError",
    "MinimaxSolver",
    "PolyAreaError",
    "SearchLimitError",
    "SolveResult",
    "SolverConfig",
    "TerminalConvention",
    "Winner",
    "area_of",
    "canonical_key",
    "coordinates_of",
    "legal_moves",
    "polygon_area",
    "solve",
]
