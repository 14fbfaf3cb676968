"""
Models for the polygon area game.

Pydantic models describe the validated inputs and the reported results of a
solve. The hot search path works on plain tuples (``GapSequence``) and the
lightweight ``CandidateMove`` dataclass to keep per-node overhead low.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from numbers import Integral
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import InvalidParametersError, InvalidStateError

# Arc lengths between consecutive counters, read clockwise around the circle.
GapSequence = tuple[int, ...]

# Player tags used by the search. Player 1 maximizes, player 2 minimizes.
PLAYER_ONE = 1
PLAYER_TWO = -1


class Winner(str, Enum):
    """Game-theoretic outcome reported to callers"""
    PLAYER1 = "player1"
    PLAYER2 = "player2"
    NONE = "none"

    @classmethod
    def from_value(cls, value: int | None) -> Winner:
        if value == PLAYER_ONE:
            return cls.PLAYER1
        if value == PLAYER_TWO:
            return cls.PLAYER2
        return cls.NONE


class TerminalConvention(str, Enum):
    """Who is credited with the win when the player to move is stuck.

    NORMAL: the player with no legal move loses.
    MISERE: the player with no legal move is recorded as the winner.
    """
    NORMAL = "normal"
    MISERE = "misere"

    def terminal_value(self, player: int) -> int:
        """Search value of a terminal node with ``player`` to move."""
        if self is TerminalConvention.MISERE:
            return player
        return -player


def validate_gaps(gaps: Iterable[int], n: int | None = None) -> GapSequence:
    """Return ``gaps`` as a tuple, raising InvalidStateError if malformed."""
    raw = tuple(gaps)
    if not raw:
        raise InvalidStateError("Gap sequence must not be empty")
    if any(isinstance(g, bool) or not isinstance(g, Integral) for g in raw):
        raise InvalidStateError("Gaps must be integers", gaps=raw)
    seq = tuple(int(g) for g in raw)
    for gap in seq:
        if gap < 1:
            raise InvalidStateError(
                "Every gap must be at least 1", gaps=seq
            )
    if n is not None and sum(seq) != n:
        raise InvalidStateError(
            "Gaps must sum to the number of points",
            gaps=seq, n=n,
        )
    return seq


@dataclass(frozen=True, slots=True)
class CandidateMove:
    """A legal successor state together with its polygon area."""
    gaps: GapSequence
    area: float


class GameParameters(BaseModel):
    """Board size (points on the circle) and number of counters."""
    model_config = ConfigDict(frozen=True)

    n: int = Field(description="Number of marked points on the circle")
    k: int = Field(description="Number of counters")

    @model_validator(mode="after")
    def _check_playable(self) -> GameParameters:
        if self.k < 3:
            raise ValueError(f"need at least 3 counters, got k={self.k}")
        if self.n < self.k + 2:
            raise ValueError(
                f"need n >= k + 2 points, got n={self.n}, k={self.k}"
            )
        return self

    @classmethod
    def create(cls, n: int, k: int) -> GameParameters:
        """Build validated parameters, raising InvalidParametersError."""
        try:
            return cls(n=n, k=k)
        except ValidationError as e:
            errors = e.errors()
            detail = errors[0]["msg"] if errors else str(e)
            raise InvalidParametersError(
                f"Invalid game parameters: {detail}", n=n, k=k
            ) from e

    def start_state(self) -> GapSequence:
        """Counters packed together: k-1 unit gaps and one long gap."""
        return (1,) * (self.k - 1) + (self.n - self.k + 1,)


class SolveResult(BaseModel):
    """Outcome and search statistics for one solve."""
    model_config = ConfigDict(frozen=True)

    n: int
    k: int
    start_state: GapSequence
    start_area: float
    winner: Winner
    value: int
    terminal_convention: TerminalConvention
    nodes_visited: int = 0
    table_entries: int = 0
    table_hits: int = 0
    elapsed_seconds: float = 0.0
