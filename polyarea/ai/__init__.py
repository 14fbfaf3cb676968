"""Search components for the polygon area game.

- canonical.py: dihedral canonical keys for gap sequences
- move_generation.py: area-increasing move generation
- transposition_table.py: solved-position cache
- minimax_solver.py: alpha-beta solver
- observers.py: node/edge callbacks and in-memory graph capture
"""

from polyarea.ai.canonical import (
    canonical_key,
    canonical_key_with_player,
    dihedral_images,
    minimal_rotation_index,
)
from polyarea.ai.minimax_solver import MinimaxSolver, solve
from polyarea.ai.move_generation import MoveGenerator, legal_moves
from polyarea.ai.observers import (
    CompositeObserver,
    GraphRecorder,
    NullObserver,
    SearchObserver,
)
from polyarea.ai.transposition_table import Bound, TableEntry, TranspositionTable

__all__ = [
    "Bound",
    "CompositeObserver",
    "GraphRecorder",
    "MinimaxSolver",
    "MoveGenerator",
    "NullObserver",
    "SearchObserver",
    "TableEntry",
    "TranspositionTable",
    "canonical_key",
    "canonical_key_with_player",
    "dihedral_images",
    "legal_moves",
    "minimal_rotation_index",
    "solve",
]
