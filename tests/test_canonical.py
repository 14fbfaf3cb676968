"""Unit tests for dihedral canonicalization."""

import itertools

import pytest

from polyarea.ai.canonical import (
    canonical_key,
    canonical_key_with_player,
    dihedral_images,
    minimal_rotation,
    minimal_rotation_index,
    rotate,
)
from polyarea.errors import InvalidStateError


def _compositions(n: int, k: int):
    """All k-part compositions of n with parts >= 1."""
    for cuts in itertools.combinations(range(1, n), k - 1):
        bounds = (0,) + cuts + (n,)
        yield tuple(bounds[i + 1] - bounds[i] for i in range(k))


class TestMinimalRotation:
    """Tests for the linear-time minimal rotation scan."""

    def test_already_minimal(self) -> None:
        assert minimal_rotation_index((1, 2, 3)) == 0

    def test_rotated_input(self) -> None:
        assert minimal_rotation_index((3, 1, 2)) == 1
        assert minimal_rotation((3, 1, 2)) == (1, 2, 3)

    def test_constant_sequence_terminates(self) -> None:
        assert minimal_rotation_index((2, 2, 2, 2, 2)) == 0

    def test_periodic_sequence(self) -> None:
        seq = (2, 1, 1, 2, 1, 1)
        assert minimal_rotation(seq) == (1, 1, 2, 1, 1, 2)

    def test_single_element(self) -> None:
        assert minimal_rotation_index((7,)) == 0

    def test_empty_sequence_rejected(self) -> None:
        with pytest.raises(InvalidStateError):
            minimal_rotation_index(())

    @pytest.mark.parametrize("n,k", [(6, 3), (8, 4), (9, 5), (10, 6)])
    def test_matches_naive_minimum(self, n, k) -> None:
        for seq in _compositions(n, k):
            naive = min(rotate(seq, i) for i in range(len(seq)))
            assert minimal_rotation(seq) == naive


class TestCanonicalKey:
    """Tests for rotation/reflection invariance of canonical keys."""

    def test_documented_example(self) -> None:
        key = canonical_key((1, 2, 4, 1))
        assert key == (1, 1, 2, 4)
        assert canonical_key((2, 4, 1, 1)) == key
        assert canonical_key((1, 4, 2, 1)) == key

    def test_reflection_only_class(self) -> None:
        # (1, 3, 2) is a mirror image of (1, 2, 3), not a rotation.
        assert canonical_key((1, 3, 2)) == (1, 2, 3)

    def test_key_is_smallest_dihedral_image(self) -> None:
        seq = (3, 1, 4, 1, 5)
        assert canonical_key(seq) == min(dihedral_images(seq))

    def test_key_is_hashable_tuple(self) -> None:
        key = canonical_key([2, 1, 3])
        assert isinstance(key, tuple)
        assert {key: 1}[(1, 2, 3)] == 1

    @pytest.mark.parametrize("n,k", [(7, 3), (8, 4), (10, 5)])
    def test_every_image_shares_the_key(self, n, k) -> None:
        for seq in _compositions(n, k):
            key = canonical_key(seq)
            for image in dihedral_images(seq):
                assert canonical_key(image) == key

    def test_distinct_classes_get_distinct_keys(self) -> None:
        # Compositions of 6 into 3 parts form exactly 3 dihedral classes.
        keys = {canonical_key(seq) for seq in _compositions(6, 3)}
        assert keys == {(1, 1, 4), (1, 2, 3), (2, 2, 2)}


class TestKeyWithPlayer:
    """Tests for the transposition-table key."""

    def test_includes_player(self) -> None:
        assert canonical_key_with_player((2, 4, 1, 1), 1) == ((1, 1, 2, 4), 1)

    def test_players_are_distinct_nodes(self) -> None:
        assert canonical_key_with_player((1, 2, 3), 1) != canonical_key_with_player(
            (1, 2, 3), -1
        )

    def test_symmetric_states_share_key(self) -> None:
        assert canonical_key_with_player((3, 2, 1), -1) == canonical_key_with_player(
            (1, 2, 3), -1
        )


class TestDihedralImages:
    def test_image_count(self) -> None:
        assert len(dihedral_images((1, 2, 4, 1))) == 8

    def test_contains_rotations_and_reflections(self) -> None:
        images = dihedral_images((1, 2, 4, 1))
        assert (2, 4, 1, 1) in images
        assert (1, 4, 2, 1) in images
