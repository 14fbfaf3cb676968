"""Canonical keys for gap sequences under rotation and reflection.

Two boards that differ only by turning or flipping the polygon are the same
game position. Every gap sequence is reduced to the lexicographically
smallest member of its dihedral class so the transposition table can share
results between them.

Usage:
    from polyarea.ai.canonical import canonical_key, canonical_key_with_player

    canonical_key((1, 2, 4, 1))               # -> (1, 1, 2, 4)
    canonical_key_with_player((1, 2, 4, 1), 1)  # -> ((1, 1, 2, 4), 1)
"""

from __future__ import annotations

from typing import Sequence

from ..errors import InvalidStateError
from ..models import GapSequence

CanonicalKey = GapSequence
SearchKey = tuple[CanonicalKey, int]


def minimal_rotation_index(seq: Sequence[int]) -> int:
    """Start index of the lexicographically smallest rotation, in O(len).

    Two candidate starts ``i`` and ``j`` are compared over a doubled buffer
    with a shared match length ``k``. On a mismatch the losing candidate
    jumps past the compared run; the scan stops once a candidate runs off
    the end or a full-length match is found (constant sequences).
    """
    length = len(seq)
    if length == 0:
        raise InvalidStateError("Cannot rotate an empty sequence")
    doubled = list(seq) * 2
    i, j, k = 0, 1, 0
    while i < length and j < length and k < length:
        a = doubled[i + k]
        b = doubled[j + k]
        if a == b:
            k += 1
            continue
        if a > b:
            i += k + 1
        else:
            j += k + 1
        if i == j:
            j += 1
        k = 0
    return min(i, j)


def rotate(seq: Sequence[int], index: int) -> GapSequence:
    seq = tuple(seq)
    index %= len(seq)
    return seq[index:] + seq[:index]


def minimal_rotation(seq: Sequence[int]) -> GapSequence:
    return rotate(seq, minimal_rotation_index(seq))


def canonical_key(seq: Sequence[int]) -> CanonicalKey:
    """Smallest rotation of the sequence or of its reversal.

    Ties keep the forward rotation.
    """
    forward = minimal_rotation(seq)
    backward = minimal_rotation(tuple(reversed(tuple(seq))))
    # Tuples compare element-wise, shorter-is-less on a common prefix.
    return backward if backward < forward else forward


def canonical_key_with_player(seq: Sequence[int], player: int) -> SearchKey:
    """Transposition key: same geometry with a different mover is a new node."""
    return canonical_key(seq), player


def dihedral_images(seq: Sequence[int]) -> list[GapSequence]:
    """All rotations of ``seq`` followed by all rotations of its reversal."""
    seq = tuple(seq)
    if not seq:
        raise InvalidStateError("Cannot rotate an empty sequence")
    reverse = tuple(reversed(seq))
    return [rotate(seq, i) for i in range(len(seq))] + [
        rotate(reverse, i) for i in range(len(seq))
    ]
