"""
Mutable search board used during one enumeration run.
"""

import contextlib
from typing import Iterator, List, Optional, Tuple

from .topology import GridTopology

Edge = Tuple[int, int]


class SearchState:
    """
    Visited flags and the in-progress path for a single search.

    Attributes:
        topology: Grid the search runs on
        visited: Per-vertex visited flag
        path: Vertices of the tour under construction, in visiting order
        rim_progress: Number of rim vertices on the current path
        return_edge: The one temporarily opened (interior, rim) edge, if any
    """

    def __init__(self, topology: GridTopology):
        self.topology = topology
        self.visited = [False] * topology.size
        self.path: List[int] = []
        self.rim_progress = 0
        self.return_edge: Optional[Edge] = None

    @property
    def depth(self) -> int:
        return len(self.path)

    def next_rim_vertex(self) -> int:
        """The rim vertex the path must reach next."""
        return self.topology.rim[self.rim_progress]

    def enter(self, v: int) -> None:
        self.visited[v] = True
        self.path.append(v)

    def leave(self, v: int) -> None:
        top = self.path.pop()
        if top != v:
            raise RuntimeError(f"Path unwound out of order: expected {v}, got {top}")
        self.visited[v] = False

    def can_step(self, v: int, i: int) -> bool:
        """Check if i is unvisited and may be entered from v right now."""
        if self.visited[i]:
            return False
        return bool(self.topology.adjacency[v, i]) or self.return_edge == (v, i)

    @contextlib.contextmanager
    def opened_return_edge(self, source: int, target: int) -> Iterator[Edge]:
        """
        Open the edge source -> target for the duration of the block.

        The previously open edge, if any, is restored on exit.
        """
        previous = self.return_edge
        self.return_edge = (source, target)
        try:
            yield self.return_edge
        finally:
            self.return_edge = previous
