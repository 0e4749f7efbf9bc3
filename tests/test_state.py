"""Tests for SearchState bookkeeping."""

import pytest

from roundtrip.core.state import SearchState
from roundtrip.core.topology import GridTopology


@pytest.fixture
def state() -> SearchState:
    return SearchState(GridTopology(4, 4))


class TestPath:
    """Tests for entering and leaving vertices."""

    def test_fresh_state(self, state):
        assert state.depth == 0
        assert state.rim_progress == 0
        assert state.return_edge is None
        assert not any(state.visited)

    def test_enter_and_leave(self, state):
        state.enter(0)
        state.enter(1)
        assert state.path == [0, 1]
        assert state.visited[1]
        state.leave(1)
        assert state.path == [0]
        assert not state.visited[1]

    def test_leave_out_of_order_raises(self, state):
        state.enter(0)
        state.enter(1)
        with pytest.raises(RuntimeError):
            state.leave(0)

    def test_next_rim_vertex_follows_progress(self, state):
        assert state.next_rim_vertex() == 0
        state.rim_progress = 4
        assert state.next_rim_vertex() == 7


class TestReturnEdge:
    """Tests for the temporarily opened interior-to-rim edge."""

    def test_can_step_follows_adjacency(self, state):
        assert state.can_step(1, 5)
        assert not state.can_step(5, 1)
        state.enter(5)
        assert not state.can_step(1, 5)

    def test_opened_edge_allows_step(self, state):
        with state.opened_return_edge(5, 1) as edge:
            assert edge == (5, 1)
            assert state.can_step(5, 1)
        assert state.return_edge is None
        assert not state.can_step(5, 1)

    def test_nested_edges_restore_previous(self, state):
        with state.opened_return_edge(5, 1):
            with state.opened_return_edge(6, 2):
                assert state.return_edge == (6, 2)
                assert not state.can_step(5, 1)
            assert state.return_edge == (5, 1)
        assert state.return_edge is None

    def test_edge_restored_on_error(self, state):
        with pytest.raises(KeyError):
            with state.opened_return_edge(5, 1):
                raise KeyError("boom")
        assert state.return_edge is None
