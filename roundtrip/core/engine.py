"""
Constrained depth-first enumeration of closed tours on a grid graph.

The search starts at vertex 0 (the top-left corner) and only ever walks the
rim clockwise. Each step from a rim vertex into the interior is an excursion
that has to come back to the next rim vertex, so a return edge to that
vertex is opened for the duration of the excursion. Inside the interior,
moves that would cut the unvisited vertices into two separate regions are
refused before they are made.

Together these rules make the last vertex of any complete path the final
rim vertex (vertex n), which is adjacent to the start, so every complete
path is a tour. Every undirected tour is found exactly once.
"""

import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from .metrics import RunMetrics
from .state import SearchState
from .topology import GridTopology

Tour = Tuple[int, ...]
ProgressCallback = Callable[[float, int], None]

START_VERTEX = 0
DEFAULT_PROGRESS_EVERY = 10_000


@dataclass
class SearchResult:
    """Outcome of a single enumeration run."""
    n: int
    m: int
    tours: int
    metrics: RunMetrics
    paths: List[Tour] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for serialization."""
        return {
            "n": self.n,
            "m": self.m,
            "tours": self.tours,
            "metrics": self.metrics.to_dict(),
            "recorded_paths": len(self.paths),
        }


class SearchEngine:
    """
    Backtracking enumerator over a GridTopology.

    Args:
        topology: Grid to search
        record_tours: Keep the accepted tours in the result
        record_limit: Keep at most this many tours (None keeps all)
        progress_every: Invoke on_progress each time the tour count
            reaches a multiple of this value (0 disables it)
        on_progress: Callback receiving (elapsed seconds, tour count)
        verify_closure: Check the closing edge of each complete path
            instead of relying on the rim constraints
    """

    def __init__(
        self,
        topology: GridTopology,
        record_tours: bool = False,
        record_limit: Optional[int] = None,
        progress_every: int = DEFAULT_PROGRESS_EVERY,
        on_progress: Optional[ProgressCallback] = None,
        verify_closure: bool = False,
    ):
        self.topology = topology
        self.record_tours = record_tours
        self.record_limit = record_limit
        self.progress_every = progress_every
        self.on_progress = on_progress
        self.verify_closure = verify_closure

        self.state: Optional[SearchState] = None
        self.metrics: Optional[RunMetrics] = None
        self.paths: List[Tour] = []

    def run(self) -> SearchResult:
        """Enumerate every tour of the grid from a fresh state."""
        self.state = SearchState(self.topology)
        self.metrics = RunMetrics()
        self.paths = []

        # _visit, _explore and _start_excursion can all be on the stack per vertex.
        needed = 3 * self.topology.size + 200
        if sys.getrecursionlimit() < needed:
            sys.setrecursionlimit(needed)

        self._visit(START_VERTEX)
        self.metrics.finish()

        return SearchResult(
            n=self.topology.n,
            m=self.topology.m,
            tours=self.metrics.tours,
            metrics=self.metrics,
            paths=self.paths,
        )

    # ---------- Search ----------

    def _visit(self, v: int) -> None:
        topo, state, metrics = self.topology, self.state, self.metrics
        metrics.calls += 1

        at_rim = topo.is_rim[v]
        if at_rim:
            state.rim_progress += 1
            if state.rim_progress == topo.rim_count and state.depth + 1 < topo.size:
                # The last rim vertex has to be the last vertex of the tour.
                metrics.rim_exhausted += 1
                state.rim_progress -= 1
                return

        if state.depth + 1 == topo.size:
            self._accept(v)
        else:
            state.enter(v)
            self._explore(v, at_rim)
            state.leave(v)
            metrics.backtracks += 1

        if at_rim:
            state.rim_progress -= 1

    def _explore(self, v: int, at_rim: bool) -> None:
        topo, state = self.topology, self.state
        visited, is_rim = state.visited, topo.is_rim

        for i in topo.successors[v]:
            if visited[i]:
                continue
            if at_rim and not is_rim[i]:
                self._start_excursion(i)
            elif not at_rim and not is_rim[i] and self._splits(v, i):
                self.metrics.split_rejections += 1
            else:
                self._visit(i)

        edge = state.return_edge
        if edge is not None and edge[0] == v and state.can_step(v, edge[1]):
            self._visit(edge[1])

    def _start_excursion(self, i: int) -> None:
        """Step from the rim into interior vertex i, if the way back is open."""
        state = self.state
        target = state.next_rim_vertex()
        for j in self.topology.inward[target]:
            if not state.visited[j]:
                break
        else:
            self.metrics.no_return_edge += 1
            return

        with state.opened_return_edge(j, target):
            self._visit(i)

    def _splits(self, v: int, i: int) -> bool:
        """
        Check if moving from interior v to interior i is certain to fail.

        Two patterns are fatal. A move that turns away from an unvisited
        rim vertex directly beside v leaves that vertex with no way in.
        A move towards an already visited vertex, with both sides of i
        still unvisited, separates the two sides for good.
        """
        n = self.topology.n
        visited, is_rim = self.state.visited, self.topology.is_rim
        step = i - v

        if step == -n:  # north
            if not visited[v + n] and is_rim[v - 1] and not visited[v - 1]:
                return True
            ahead = (i - n, i - n - 1, i - n + 1)
            sides = (i - 1, i + 1)
        elif step == n:  # south
            if not visited[v - n] and is_rim[v + 1] and not visited[v + 1]:
                return True
            ahead = (i + n, i + n - 1, i + n + 1)
            sides = (i - 1, i + 1)
        elif step == -1:  # west
            if not visited[v + 1] and is_rim[v + n] and not visited[v + n]:
                return True
            ahead = (i - 1, i - 1 + n, i - 1 - n)
            sides = (i + n, i - n)
        else:  # east
            ahead = (i + 1, i + 1 + n, i + 1 - n)
            sides = (i + n, i - n)

        if visited[sides[0]] or visited[sides[1]]:
            return False
        return any(visited[a] for a in ahead)

    def _accept(self, v: int) -> None:
        metrics = self.metrics
        if self.verify_closure and not self.topology.has_grid_edge(v, START_VERTEX):
            metrics.unclosed += 1
            return

        metrics.tours += 1
        if self.record_tours and (self.record_limit is None or len(self.paths) < self.record_limit):
            self.paths.append(tuple(self.state.path) + (v,))

        if self.on_progress is not None and self.progress_every and metrics.tours % self.progress_every == 0:
            self.on_progress(metrics.elapsed, metrics.tours)


# ---------- Entry points ----------

def solve(
    n: int,
    m: int,
    record_tours: bool = False,
    record_limit: Optional[int] = None,
    progress_every: int = DEFAULT_PROGRESS_EVERY,
    on_progress: Optional[ProgressCallback] = None,
    verify_closure: bool = False,
) -> SearchResult:
    """
    Enumerate the closed tours of an n x m grid.

    Grids with an odd vertex count or a side of length 1 have no tour and
    return an empty result without searching.

    Args:
        n: Number of columns
        m: Number of rows
        record_tours: Keep accepted tours in the result
        record_limit: Keep at most this many tours
        progress_every: Tour interval between progress callbacks
        on_progress: Callback receiving (elapsed seconds, tour count)
        verify_closure: Check the closing edge of each complete path

    Returns:
        SearchResult with the tour count and run metrics
    """
    if n < 1 or m < 1:
        raise ValueError(f"Grid dimensions must be positive, got {n}x{m}")

    if (n * m) % 2 or min(n, m) < 2:
        metrics = RunMetrics()
        metrics.finish()
        return SearchResult(n=n, m=m, tours=0, metrics=metrics)

    engine = SearchEngine(
        GridTopology(n, m),
        record_tours=record_tours,
        record_limit=record_limit,
        progress_every=progress_every,
        on_progress=on_progress,
        verify_closure=verify_closure,
    )
    return engine.run()


def count_tours(n: int, m: int) -> int:
    """Number of undirected closed tours of the n x m grid."""
    return solve(n, m).tours


def enumerate_tours(n: int, m: int) -> List[Tour]:
    """All closed tours of the n x m grid, each starting 0 -> 1."""
    return solve(n, m, record_tours=True).paths
