"""Legal move generation for the polygon area game.

A move takes ``j`` units of arc from one gap and gives them to an adjacent
gap, which slides the counter between them. The move is legal only if the
counters' polygon grows by more than ``epsilon``. Since the area strictly
increases along every line of play and is bounded by the regular polygon,
the game graph is finite and acyclic.

Successors that are rotations or reflections of one another are returned
once, ordered by descending area so alpha-beta search tries the biggest
jumps first.
"""

from __future__ import annotations

from typing import Iterator, Sequence

from ..config import DEFAULT_EPSILON
from ..geometry import CircleTable, polygon_area
from ..models import CandidateMove, GapSequence
from .canonical import CanonicalKey, canonical_key


def iter_redistributions(gaps: Sequence[int]) -> Iterator[GapSequence]:
    """Every gap sequence reachable by shifting arc between adjacent gaps.

    For counter ``i`` the gaps on either side are ``gaps[i-1]`` and
    ``gaps[i]``; each keeps at least one unit.
    """
    k = len(gaps)
    for i in range(k):
        prev = (i - 1) % k
        for j in range(1, gaps[i]):
            candidate = list(gaps)
            candidate[i] -= j
            candidate[prev] += j
            yield tuple(candidate)
        for j in range(1, gaps[prev]):
            candidate = list(gaps)
            candidate[i] += j
            candidate[prev] -= j
            yield tuple(candidate)


class MoveGenerator:
    """Generates area-increasing successors for one board size.

    Areas are memoized per canonical key, since rotating or reflecting the
    counters does not change the polygon's area.
    """

    def __init__(self, circle: CircleTable, epsilon: float = DEFAULT_EPSILON):
        self.circle = circle
        self.epsilon = epsilon
        self._areas: dict[CanonicalKey, float] = {}
        self.candidates_generated = 0

    def area(self, gaps: Sequence[int], key: CanonicalKey | None = None) -> float:
        if key is None:
            key = canonical_key(gaps)
        area = self._areas.get(key)
        if area is None:
            area = polygon_area(key, self.circle)
            self._areas[key] = area
        return area

    def legal_moves(self, gaps: Sequence[int]) -> list[CandidateMove]:
        """Deduplicated legal successors, largest resulting area first.

        An empty list means the player to move is stuck.
        """
        current_key = canonical_key(gaps)
        threshold = self.area(gaps, current_key) + self.epsilon

        seen: set[CanonicalKey] = set()
        moves: list[CandidateMove] = []
        for candidate in iter_redistributions(gaps):
            self.candidates_generated += 1
            key = canonical_key(candidate)
            # Symmetric to the current position: not a real move.
            if key == current_key or key in seen:
                continue
            area = self.area(candidate, key)
            if area > threshold:
                seen.add(key)
                moves.append(CandidateMove(gaps=candidate, area=area))

        moves.sort(key=lambda m: m.area, reverse=True)
        return moves

    def clear(self) -> None:
        self._areas.clear()
        self.candidates_generated = 0


def legal_moves(
    gaps: Sequence[int],
    circle: CircleTable,
    epsilon: float = DEFAULT_EPSILON,
) -> list[CandidateMove]:
    """One-shot legal move generation without a shared area cache."""
    return MoveGenerator(circle, epsilon).legal_moves(tuple(gaps))
