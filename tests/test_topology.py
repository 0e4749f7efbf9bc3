"""Tests for GridTopology construction."""

import numpy as np
import pytest

from roundtrip.core.topology import GridTopology


class TestConstruction:
    """Tests for size checks and basic attributes."""

    @pytest.mark.parametrize("n,m", [(1, 4), (4, 1), (0, 0), (1, 1)])
    def test_rejects_degenerate_grids(self, n, m):
        with pytest.raises(ValueError):
            GridTopology(n, m)

    def test_sizes(self):
        topo = GridTopology(4, 5)
        assert topo.size == 20
        assert topo.rim_count == 14
        assert topo.interior_count == 6
        assert topo.corners == (0, 3, 16, 19)

    def test_coordinates_are_row_major(self):
        topo = GridTopology(4, 3)
        assert topo.coords(0) == (0, 0)
        assert topo.coords(5) == (1, 1)
        assert topo.coords(11) == (2, 3)
        assert topo.vertex(2, 3) == 11

    def test_grid_neighbours(self):
        topo = GridTopology(4, 4)
        assert topo.grid_neighbours(0) == [1, 4]
        assert topo.grid_neighbours(5) == [1, 4, 6, 9]
        assert topo.grid_neighbours(15) == [11, 14]

    def test_no_wraparound_between_rows(self):
        topo = GridTopology(4, 4)
        assert not topo.has_grid_edge(3, 4)
        assert 4 not in topo.grid_neighbours(3)


class TestRim:
    """Tests for the clockwise rim sequence."""

    def test_square_rim_order(self):
        topo = GridTopology(4, 4)
        assert topo.rim == [0, 1, 2, 3, 7, 11, 15, 14, 13, 12, 8, 4]

    def test_rectangular_rim_order(self):
        topo = GridTopology(3, 4)
        assert topo.rim == [0, 1, 2, 5, 8, 11, 10, 9, 6, 3]

    def test_two_by_two(self):
        assert GridTopology(2, 2).rim == [0, 1, 3, 2]

    @pytest.mark.parametrize("n,m", [(2, 6), (6, 2), (3, 4), (5, 6), (7, 3)])
    def test_rim_covers_boundary_once(self, n, m):
        topo = GridTopology(n, m)
        boundary = {
            v for v in range(topo.size)
            if v // n in (0, m - 1) or v % n in (0, n - 1)
        }
        assert len(topo.rim) == len(boundary) == 2 * (n + m) - 4
        assert set(topo.rim) == boundary

    @pytest.mark.parametrize("n,m", [(2, 6), (3, 4), (4, 5), (6, 3)])
    def test_rim_is_a_closed_walk(self, n, m):
        topo = GridTopology(n, m)
        rim = topo.rim
        for k in range(len(rim)):
            assert topo.has_grid_edge(rim[k - 1], rim[k])

    @pytest.mark.parametrize("n,m", [(2, 2), (2, 6), (4, 4), (5, 6)])
    def test_rim_ends_beside_start(self, n, m):
        assert GridTopology(n, m).rim[-1] == n


class TestAdjacency:
    """Tests for the directional adjacency relation."""

    def test_matrix_is_read_only(self):
        topo = GridTopology(4, 4)
        with pytest.raises(ValueError):
            topo.adjacency[5, 6] = False

    def test_rim_vertex_entered_only_from_predecessor(self):
        topo = GridTopology(4, 5)
        for k, r in enumerate(topo.rim):
            sources = np.flatnonzero(topo.adjacency[:, r]).tolist()
            assert sources == [topo.rim[k - 1]]

    def test_interior_edges_are_symmetric(self):
        topo = GridTopology(5, 6)
        for v in range(topo.size):
            for w in topo.grid_neighbours(v):
                if not topo.is_rim[v] and not topo.is_rim[w]:
                    assert topo.adjacency[v, w] and topo.adjacency[w, v]

    def test_rim_to_interior_edges_kept(self):
        topo = GridTopology(4, 4)
        assert topo.adjacency[1, 5]
        assert not topo.adjacency[5, 1]

    def test_every_edge_is_a_lattice_edge(self):
        topo = GridTopology(6, 4)
        for i, j in zip(*np.nonzero(topo.adjacency)):
            assert topo.has_grid_edge(int(i), int(j))

    def test_successors(self):
        topo = GridTopology(4, 4)
        assert topo.successors[0] == (1,)
        assert topo.successors[5] == (6, 9)
        assert topo.successors[1] == (2, 5)

    def test_inward_neighbours(self):
        topo = GridTopology(4, 4)
        assert topo.inward[1] == (5,)
        assert topo.inward[4] == (5,)
        assert topo.inward[0] == ()
        assert topo.inward[5] == ()
