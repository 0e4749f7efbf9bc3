"""
Grid graph topology for closed-tour enumeration.

This module provides the GridTopology class, which derives the fixed
adjacency structure of an n x m dot grid together with the clockwise
sequence of its rim vertices.

Vertices are numbered row-major: vertex i sits at row i // n, column i % n.
The adjacency relation is seeded with the directional constraints the
search relies on:

- consecutive rim vertices are linked clockwise only
- no static edge leads from the interior back onto the rim
"""

from typing import List, Tuple

import numpy as np


class GridTopology:
    """
    Fixed adjacency structure of an n x m grid graph.

    A rim vertex can only be entered from its clockwise predecessor on the
    rim. Every other grid edge is present in both directions.

    Attributes:
        n: Number of columns (length of a row)
        m: Number of rows
        size: Vertex count n * m
        rim: Rim vertices in clockwise order, starting at vertex 0
        is_rim: Per-vertex rim membership
        adjacency: Read-only (size x size) boolean matrix; adjacency[i, j]
            is True when j may be entered directly from i
        successors: Per-vertex tuple of static successors, ascending
        inward: Per-vertex tuple of interior grid neighbours of a rim
            vertex (empty for corners and interior vertices)
    """

    def __init__(self, n: int, m: int):
        if n < 2 or m < 2:
            raise ValueError(f"Grid must be at least 2x2, got {n}x{m}")
        self.n, self.m = n, m
        self.size = n * m

        self.rim = self._build_rim()
        self.is_rim = [False] * self.size
        for v in self.rim:
            self.is_rim[v] = True

        self.adjacency = self._build_adjacency()
        self._check_lattice()
        self.adjacency.flags.writeable = False

        self.successors = tuple(
            tuple(int(j) for j in np.flatnonzero(row)) for row in self.adjacency
        )
        self.inward = tuple(
            tuple(j for j in self.grid_neighbours(v) if not self.is_rim[j])
            if self.is_rim[v] else ()
            for v in range(self.size)
        )

    # ---------- Coordinates ----------

    def coords(self, v: int) -> Tuple[int, int]:
        """Return (row, column) of vertex v."""
        return divmod(v, self.n)

    def vertex(self, row: int, col: int) -> int:
        """Return the vertex id at (row, column)."""
        return row * self.n + col

    def grid_neighbours(self, v: int) -> List[int]:
        """Lattice neighbours of v in ascending order, ignoring direction."""
        row, col = self.coords(v)
        out = []
        if row > 0:
            out.append(v - self.n)
        if col > 0:
            out.append(v - 1)
        if col < self.n - 1:
            out.append(v + 1)
        if row < self.m - 1:
            out.append(v + self.n)
        return out

    def has_grid_edge(self, a: int, b: int) -> bool:
        """Check if a and b are lattice-adjacent."""
        ra, ca = self.coords(a)
        rb, cb = self.coords(b)
        return abs(ra - rb) + abs(ca - cb) == 1

    @property
    def corners(self) -> Tuple[int, int, int, int]:
        n, size = self.n, self.size
        return (0, n - 1, size - n, size - 1)

    @property
    def rim_count(self) -> int:
        return len(self.rim)

    @property
    def interior_count(self) -> int:
        return self.size - len(self.rim)

    # ---------- Construction ----------

    def _build_rim(self) -> List[int]:
        """Rim vertices walked clockwise from the top-left corner."""
        n, m = self.n, self.m
        rim = list(range(n))                                  # top row, left to right
        rim += [(row + 1) * n - 1 for row in range(1, m)]     # right column, downwards
        rim += [n * m - 1 - col for col in range(1, n)]       # bottom row, right to left
        rim += [n * (m - 1 - row) for row in range(1, m - 1)] # left column, upwards
        return rim

    def _build_adjacency(self) -> np.ndarray:
        adj = np.zeros((self.size, self.size), dtype=bool)
        for v in range(self.size):
            for w in self.grid_neighbours(v):
                adj[v, w] = True

        # A rim vertex keeps a single incoming edge: from its clockwise predecessor.
        for k, r in enumerate(self.rim):
            adj[:, r] = False
            adj[self.rim[k - 1], r] = True
        return adj

    def _check_lattice(self) -> None:
        """Every seeded edge must be a unit step within a row or column."""
        for i, j in zip(*np.nonzero(self.adjacency)):
            if not self.has_grid_edge(int(i), int(j)):
                raise ValueError(f"Non-lattice edge {i}->{j} in {self.n}x{self.m} grid")

    def __repr__(self) -> str:
        return f"GridTopology(n={self.n}, m={self.m})"
