"""
Shared pytest fixtures for polyarea tests.

Game parameters and solvers are function-scoped so every test gets its own
transposition table.
"""

from pathlib import Path
import sys
from typing import Callable, Optional

import pytest

# Make `import polyarea` work when pytest runs from a checkout without an
# editable install.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from polyarea.ai.canonical import canonical_key
from polyarea.ai.minimax_solver import MinimaxSolver
from polyarea.ai.move_generation import legal_moves
from polyarea.ai.observers import SearchObserver
from polyarea.config import SolverConfig
from polyarea.geometry import CircleTable
from polyarea.models import PLAYER_ONE, GameParameters, TerminalConvention


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def solver_factory() -> Callable[..., MinimaxSolver]:
    """Factory for creating solvers with customizable config."""

    def _create_solver(
        n: int = 7,
        k: int = 3,
        observer: Optional[SearchObserver] = None,
        **config_values,
    ) -> MinimaxSolver:
        return MinimaxSolver(
            GameParameters.create(n, k),
            config=SolverConfig(**config_values),
            observer=observer,
        )

    return _create_solver


@pytest.fixture
def hexagon() -> CircleTable:
    return CircleTable.for_points(6)


@pytest.fixture
def pentagon() -> CircleTable:
    return CircleTable.for_points(5)


# =============================================================================
# REFERENCE SEARCH
# =============================================================================


def brute_force_value(
    gaps,
    player: int,
    circle: CircleTable,
    convention: TerminalConvention = TerminalConvention.NORMAL,
    memo: Optional[dict] = None,
) -> int:
    """Plain minimax without pruning, memoized on (canonical key, player)."""
    if memo is None:
        memo = {}
    key = (canonical_key(gaps), player)
    if key in memo:
        return memo[key]
    moves = legal_moves(gaps, circle)
    if not moves:
        value = convention.terminal_value(player)
    else:
        values = [
            brute_force_value(m.gaps, -player, circle, convention, memo)
            for m in moves
        ]
        value = max(values) if player == PLAYER_ONE else min(values)
    memo[key] = value
    return value


@pytest.fixture
def reference_value() -> Callable[..., int]:
    return brute_force_value
