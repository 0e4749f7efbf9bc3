"""Tests for tour inspection helpers."""

import numpy as np
import pytest

from roundtrip.core.tours import (
    check_tour,
    edge_set,
    is_valid_tour,
    render_ascii,
    to_edge_matrices,
    tour_edges,
    transpose_tour,
    vertex_degrees,
)

SQUARE = (0, 1, 3, 2)
THREE_BY_FOUR = (0, 1, 2, 5, 4, 7, 8, 11, 10, 9, 6, 3)


class TestEdges:

    def test_tour_edges_include_closing_edge(self):
        assert tour_edges(SQUARE) == [(0, 1), (1, 3), (3, 2), (2, 0)]

    def test_edge_set_ignores_direction(self):
        assert edge_set(SQUARE) == edge_set(tuple(reversed(SQUARE)))
        assert edge_set(SQUARE) == frozenset({(0, 1), (1, 3), (2, 3), (0, 2)})

    def test_vertex_degrees(self):
        degrees = vertex_degrees(3, 4, THREE_BY_FOUR)
        assert degrees.shape == (12,)
        assert (degrees == 2).all()


class TestCheckTour:

    def test_valid(self):
        assert check_tour(2, 2, SQUARE) == []
        assert is_valid_tour(3, 4, THREE_BY_FOUR)

    def test_wrong_length(self):
        problems = check_tour(2, 2, (0, 1, 3))
        assert any("expected 4" in p for p in problems)

    def test_repeated_vertex(self):
        assert "tour repeats a vertex" in check_tour(2, 2, (0, 1, 0, 2))

    def test_out_of_grid(self):
        assert "tour leaves the grid" in check_tour(2, 2, (0, 1, 3, 4))

    def test_diagonal_step(self):
        problems = check_tour(2, 2, (0, 3, 1, 2))
        assert "0->3 is not a grid edge" in problems

    def test_row_wraparound_is_not_an_edge(self):
        # 2 -> 3 crosses from the end of row 0 to the start of row 1
        assert not is_valid_tour(3, 2, (0, 1, 2, 3, 4, 5))


class TestEdgeMatrices:

    def test_square(self):
        H, V = to_edge_matrices(2, 2, SQUARE)
        assert H.shape == (2, 1)
        assert V.shape == (1, 2)
        assert H.all() and V.all()

    def test_three_by_four(self):
        H, V = to_edge_matrices(3, 4, THREE_BY_FOUR)
        np.testing.assert_array_equal(H, [[1, 1], [0, 1], [0, 1], [1, 1]])
        np.testing.assert_array_equal(V, [[1, 0, 1], [1, 1, 0], [1, 0, 1]])
        # Every vertex of a tour has degree two.
        assert H.sum() + V.sum() == 12

    def test_rejects_non_grid_edge(self):
        with pytest.raises(ValueError):
            to_edge_matrices(2, 2, (0, 3, 1, 2))


class TestTranspose:

    def test_transpose_is_valid_on_transposed_grid(self):
        t = transpose_tour(3, 4, THREE_BY_FOUR)
        assert is_valid_tour(4, 3, t)

    def test_transpose_twice_is_identity(self):
        assert transpose_tour(4, 3, transpose_tour(3, 4, THREE_BY_FOUR)) == THREE_BY_FOUR


class TestRenderAscii:

    def test_square(self):
        assert render_ascii(2, 2, SQUARE) == "O-O\n| |\nO-O"

    def test_three_by_four(self):
        expected = "\n".join([
            "O-O-O",
            "|   |",
            "O O-O",
            "| |",
            "O O-O",
            "|   |",
            "O-O-O",
        ])
        assert render_ascii(3, 4, THREE_BY_FOUR) == expected
