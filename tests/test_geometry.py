"""Unit tests for polygon geometry."""

import math

import numpy as np
import pytest

from polyarea.ai.canonical import dihedral_images
from polyarea.errors import InvalidParametersError
from polyarea.geometry import (
    CircleTable,
    area_of,
    coordinates_of,
    polygon_area,
    precompute_unit_circle,
    vertex_offsets,
)


class TestCircleTable:
    """Tests for the pre-computed unit circle."""

    def test_points_lie_on_unit_circle(self) -> None:
        circle = CircleTable(12)
        radii = np.hypot(circle.points[:, 0], circle.points[:, 1])
        assert np.allclose(radii, 1.0)

    def test_first_point_at_angle_zero(self) -> None:
        circle = CircleTable(5)
        assert np.allclose(circle.points[0], [1.0, 0.0])

    def test_quarter_turn_on_square(self) -> None:
        circle = CircleTable(4)
        assert np.allclose(circle.points[1], [0.0, 1.0], atol=1e-12)

    def test_table_is_read_only(self) -> None:
        circle = CircleTable(6)
        with pytest.raises(ValueError):
            circle.points[0, 0] = 2.0

    def test_for_points_is_shared(self) -> None:
        assert CircleTable.for_points(9) is CircleTable.for_points(9)
        assert precompute_unit_circle(9) is CircleTable.for_points(9)

    def test_rejects_empty_circle(self) -> None:
        with pytest.raises(InvalidParametersError):
            CircleTable(0)


class TestCoordinates:
    """Tests for mapping gap sequences to vertices."""

    def test_vertex_offsets_are_cumulative(self) -> None:
        assert list(vertex_offsets((1, 2, 3), 6)) == [0, 1, 3]

    def test_coordinates_follow_offsets(self, hexagon) -> None:
        coords = coordinates_of((1, 2, 3), hexagon)
        assert coords.shape == (3, 2)
        assert np.allclose(coords, hexagon.points[[0, 1, 3]])

    def test_single_gap(self, hexagon) -> None:
        coords = coordinates_of((6,), hexagon)
        assert np.allclose(coords, hexagon.points[[0]])


class TestArea:
    """Tests for the shoelace area."""

    def test_right_triangle_on_hexagon(self, hexagon) -> None:
        # Vertices at 0, 60 and 180 degrees span a diameter.
        assert polygon_area((1, 2, 3), hexagon) == pytest.approx(math.sqrt(3) / 2)

    def test_equilateral_triangle(self, hexagon) -> None:
        assert polygon_area((2, 2, 2), hexagon) == pytest.approx(3 * math.sqrt(3) / 4)

    def test_unit_square(self) -> None:
        square = CircleTable(4)
        assert polygon_area((1, 1, 1, 1), square) == pytest.approx(2.0)

    def test_winding_order_does_not_matter(self, hexagon) -> None:
        coords = coordinates_of((1, 2, 3), hexagon)
        assert area_of(coords[::-1]) == pytest.approx(area_of(coords))

    def test_area_is_non_negative(self) -> None:
        clockwise = np.array([[0.0, 0.0], [0.0, 1.0], [1.0, 0.0]])
        assert area_of(clockwise) == pytest.approx(0.5)

    def test_degenerate_polygon_has_zero_area(self) -> None:
        assert area_of(np.array([[0.0, 0.0], [1.0, 1.0]])) == 0.0

    @pytest.mark.parametrize("gaps,n", [((1, 2, 4, 1), 8), ((1, 1, 5), 7), ((2, 3, 1, 3), 9)])
    def test_area_invariant_under_symmetry(self, gaps, n) -> None:
        circle = CircleTable.for_points(n)
        expected = polygon_area(gaps, circle)
        for image in dihedral_images(gaps):
            assert abs(polygon_area(image, circle) - expected) < 1e-9

    def test_packed_start_is_smaller_than_spread(self) -> None:
        circle = CircleTable.for_points(5)
        assert polygon_area((1, 1, 3), circle) < polygon_area((1, 2, 2), circle)
