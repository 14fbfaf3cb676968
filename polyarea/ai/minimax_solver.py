"""Exact minimax solver for the polygon area game.

The solver proves the game-theoretic value of a position with depth-first
minimax, alpha-beta pruning and a transposition table keyed by the
position's canonical form plus the player to move. Player 1 (``+1``)
maximizes and player 2 (``-1``) minimizes; every node resolves to ``+1`` or
``-1`` because the game graph is finite and has no draws.

Each solver instance owns its transposition table, and the table is cleared
at the start of every top-level solve, so independent solvers never share
state.

Usage:
    from polyarea.ai.minimax_solver import MinimaxSolver
    from polyarea.models import GameParameters

    solver = MinimaxSolver(GameParameters.create(n=7, k=3))
    winner = solver.solve()           # Winner.PLAYER1 or Winner.PLAYER2
    result = solver.analyze()         # SolveResult with statistics
"""

from __future__ import annotations

import logging
import math
import sys
import time
from contextlib import contextmanager
from typing import Iterator, Sequence

from ..config import SolverConfig
from ..errors import InvalidStateError, SearchLimitError
from ..geometry import CircleTable
from ..metrics import record_solve
from ..models import (
    PLAYER_ONE,
    PLAYER_TWO,
    CandidateMove,
    GameParameters,
    GapSequence,
    SolveResult,
    Winner,
    validate_gaps,
)
from .canonical import CanonicalKey, SearchKey, canonical_key, canonical_key_with_player
from .move_generation import MoveGenerator
from .observers import NullObserver, SearchObserver
from .transposition_table import Bound, TableEntry, TranspositionTable

logger = logging.getLogger(__name__)

# The wall-clock budget is checked every this many expanded nodes.
LIMIT_CHECK_INTERVAL = 100


@contextmanager
def raised_recursion_limit(limit: int) -> Iterator[None]:
    """Raise the interpreter recursion limit for the duration of a solve."""
    previous = sys.getrecursionlimit()
    if limit > previous:
        sys.setrecursionlimit(limit)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


class MinimaxSolver:
    """Solves one (n, k) game with memoized alpha-beta search.

    Terminal values follow ``config.terminal_convention``: under the normal
    convention the stuck player loses, under the misere convention the stuck
    player is recorded as the winner.
    """

    def __init__(
        self,
        params: GameParameters,
        config: SolverConfig | None = None,
        observer: SearchObserver | None = None,
    ) -> None:
        self.params = params
        self.config = config or SolverConfig()
        self.observer: SearchObserver = observer or NullObserver()
        self.circle = CircleTable.for_points(params.n)
        self.move_generator = MoveGenerator(self.circle, self.config.epsilon)
        self.transposition_table = TranspositionTable(
            max_entries=self.config.max_table_entries
        )
        # Per-solve bookkeeping, reset by _begin().
        self.nodes_visited: int = 0
        self.start_time: float = 0.0
        self._reported_nodes: set[SearchKey] = set()
        self._reported_edges: set[tuple[CanonicalKey, CanonicalKey]] = set()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def solve(self, state: Sequence[int] | None = None) -> Winner:
        """Winner under optimal play, player 1 to move from ``state``.

        ``state`` defaults to the packed start position of the parameters.
        """
        return self.analyze(state).winner

    def analyze(self, state: Sequence[int] | None = None) -> SolveResult:
        """Solve ``state`` and report the value with search statistics."""
        gaps = self._begin(state)
        n, k = self.params.n, self.params.k
        logger.info(f"Solving n={n} k={k} from {gaps}")

        outcome = "error"
        try:
            with raised_recursion_limit(self.config.recursion_limit):
                value = self.solve_value(gaps, PLAYER_ONE, -math.inf, math.inf)
            winner = Winner.from_value(value)
            outcome = winner.value
        finally:
            elapsed = time.time() - self.start_time
            table = self.transposition_table
            record_solve(
                outcome=outcome,
                elapsed_seconds=elapsed,
                nodes_visited=self.nodes_visited,
                hits=table.hits,
                misses=table.misses,
                table_entries=len(table),
            )
            logger.debug(f"Transposition table: {table.stats()}")

        logger.info(
            f"Solved n={n} k={k}: {winner.value} "
            f"({self.nodes_visited} nodes, {len(table)} entries, {elapsed:.3f}s)"
        )
        return SolveResult(
            n=n,
            k=k,
            start_state=gaps,
            start_area=self.move_generator.area(gaps),
            winner=winner,
            value=value,
            terminal_convention=self.config.terminal_convention,
            nodes_visited=self.nodes_visited,
            table_entries=len(table),
            table_hits=table.hits,
            elapsed_seconds=elapsed,
        )

    def legal_moves(self, state: Sequence[int] | None = None) -> list[CandidateMove]:
        """Legal successors of ``state``, largest resulting area first."""
        return self.move_generator.legal_moves(self._validate(state))

    def principal_line(self, state: Sequence[int] | None = None) -> list[GapSequence]:
        """One line of optimal play from ``state`` to a terminal position.

        At every ply the mover takes the largest-area move that keeps the
        proven game value.
        """
        gaps = self._begin(state)
        line = [gaps]
        player = PLAYER_ONE
        with raised_recursion_limit(self.config.recursion_limit):
            target = self._exact_value(gaps, player)
            while True:
                moves = self.move_generator.legal_moves(gaps)
                if not moves:
                    break
                opponent = -player
                for move in moves:
                    if self._exact_value(move.gaps, opponent) == target:
                        gaps = move.gaps
                        break
                else:
                    raise InvalidStateError(
                        "No move preserves the solved value",
                        gaps=gaps, value=target,
                    )
                line.append(gaps)
                player = opponent
        logger.debug(f"Principal line of length {len(line)} from {line[0]}")
        return line

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def solve_value(
        self,
        gaps: GapSequence,
        player: int,
        alpha: float,
        beta: float,
    ) -> int:
        """Alpha-beta value of ``gaps`` with ``player`` to move.

        Returns ``+1`` when player 1 wins and ``-1`` when player 2 wins. The
        result is exact when it lies strictly inside ``(alpha, beta)`` and a
        bound otherwise; the transposition table records which.
        """
        self.nodes_visited += 1
        self._check_limits()

        key = canonical_key_with_player(gaps, player)
        entry = self.transposition_table.get(key)
        if entry is not None:
            if entry.bound is Bound.EXACT:
                return entry.value
            if entry.bound is Bound.LOWER:
                alpha = max(alpha, entry.value)
            else:
                beta = min(beta, entry.value)
            if alpha >= beta:
                return entry.value

        moves = self.move_generator.legal_moves(gaps)
        self._report_node(key, gaps, player, not moves)

        if not moves:
            value = self.config.terminal_convention.terminal_value(player)
            self.transposition_table.put(key, TableEntry(value))
            return value

        alpha_orig, beta_orig = alpha, beta
        if player == PLAYER_ONE:
            best = -math.inf
            for move in moves:
                self._report_edge(key[0], gaps, move.gaps)
                value = self.solve_value(move.gaps, PLAYER_TWO, alpha, beta)
                best = max(best, value)
                alpha = max(alpha, best)
                if beta <= alpha:
                    break
        else:
            best = math.inf
            for move in moves:
                self._report_edge(key[0], gaps, move.gaps)
                value = self.solve_value(move.gaps, PLAYER_ONE, alpha, beta)
                best = min(best, value)
                beta = min(beta, best)
                if beta <= alpha:
                    break

        best = int(best)
        self.transposition_table.put(key, _table_entry(best, alpha_orig, beta_orig))
        return best

    def _exact_value(self, gaps: GapSequence, player: int) -> int:
        entry = self.transposition_table.get(canonical_key_with_player(gaps, player))
        if entry is not None and entry.bound is Bound.EXACT:
            return entry.value
        return self.solve_value(gaps, player, -math.inf, math.inf)

    # Bound entries in the table send a node back through the search, so
    # observer events are filtered to the first occurrence within a solve.

    def _report_node(self, key: SearchKey, gaps: GapSequence, player: int, terminal: bool) -> None:
        if key in self._reported_nodes:
            return
        self._reported_nodes.add(key)
        self.observer.on_node(gaps, player, terminal)

    def _report_edge(self, source: CanonicalKey, gaps: GapSequence, successor: GapSequence) -> None:
        edge = (source, canonical_key(successor))
        if edge in self._reported_edges:
            return
        self._reported_edges.add(edge)
        self.observer.on_edge(gaps, successor)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _validate(self, state: Sequence[int] | None) -> GapSequence:
        if state is None:
            return self.params.start_state()
        gaps = validate_gaps(state, self.params.n)
        if len(gaps) != self.params.k:
            raise InvalidStateError(
                "Gap sequence length must equal the number of counters",
                gaps=gaps, k=self.params.k,
            )
        return gaps

    def _begin(self, state: Sequence[int] | None) -> GapSequence:
        gaps = self._validate(state)
        self.transposition_table.clear()
        self.nodes_visited = 0
        self.start_time = time.time()
        self._reported_nodes.clear()
        self._reported_edges.clear()
        return gaps

    def _check_limits(self) -> None:
        max_nodes = self.config.max_nodes
        if max_nodes is not None and self.nodes_visited > max_nodes:
            raise SearchLimitError(
                f"Search exceeded node limit of {max_nodes}",
                nodes_visited=self.nodes_visited,
                elapsed_seconds=time.time() - self.start_time,
            )
        limit = self.config.time_limit_seconds
        if limit is None or self.nodes_visited % LIMIT_CHECK_INTERVAL:
            return
        elapsed = time.time() - self.start_time
        if elapsed > limit:
            raise SearchLimitError(
                f"Search exceeded time limit of {limit}s",
                nodes_visited=self.nodes_visited,
                elapsed_seconds=elapsed,
            )


def _table_entry(value: int, alpha: float, beta: float) -> TableEntry:
    """Classify a fail-soft result against the window it was searched with.

    Values are only ever +1 or -1, so a lower bound of +1 and an upper bound
    of -1 are already exact.
    """
    if value <= alpha:
        bound = Bound.EXACT if value == PLAYER_TWO else Bound.UPPER
    elif value >= beta:
        bound = Bound.EXACT if value == PLAYER_ONE else Bound.LOWER
    else:
        bound = Bound.EXACT
    return TableEntry(value, bound)


def solve(
    n: int,
    k: int,
    config: SolverConfig | None = None,
    observer: SearchObserver | None = None,
) -> Winner:
    """Validate ``(n, k)`` and solve the game from the packed start position."""
    params = GameParameters.create(n, k)
    return MinimaxSolver(params, config=config, observer=observer).solve()
