"""
Tour inspection: validation, edge views and ASCII rendering.

A tour is a sequence of vertex ids; the closing edge from the last vertex
back to the first is implied.
"""

from typing import FrozenSet, List, Sequence, Tuple

import numpy as np

Tour = Sequence[int]
Edge = Tuple[int, int]


def tour_edges(tour: Tour) -> List[Edge]:
    """Directed edges of a tour, including the closing edge."""
    return [(tour[k], tour[(k + 1) % len(tour)]) for k in range(len(tour))]


def edge_set(tour: Tour) -> FrozenSet[Edge]:
    """Undirected edge set of a tour; equal for both traversal directions."""
    return frozenset(tuple(sorted(e)) for e in tour_edges(tour))


def vertex_degrees(n: int, m: int, tour: Tour) -> np.ndarray:
    """Number of tour edges incident to each vertex."""
    degrees = np.zeros(n * m, dtype=int)
    for a, b in edge_set(tour):
        degrees[a] += 1
        degrees[b] += 1
    return degrees


def check_tour(n: int, m: int, tour: Tour) -> List[str]:
    """
    Validate a tour against the n x m grid graph.

    Args:
        n: Number of columns
        m: Number of rows
        tour: Vertex sequence

    Returns:
        List of problems found (empty for a valid tour)
    """
    size = n * m
    problems = []
    if len(tour) != size:
        problems.append(f"tour has {len(tour)} vertices, expected {size}")
    if len(set(tour)) != len(tour):
        problems.append("tour repeats a vertex")
    if any(not 0 <= v < size for v in tour):
        problems.append("tour leaves the grid")
        return problems

    for a, b in tour_edges(tour):
        ra, ca = divmod(a, n)
        rb, cb = divmod(b, n)
        if abs(ra - rb) + abs(ca - cb) != 1:
            problems.append(f"{a}->{b} is not a grid edge")

    if len(tour) == size and not problems:
        bad = [v for v, d in enumerate(vertex_degrees(n, m, tour)) if d != 2]
        if bad:
            problems.append(f"vertices without degree 2: {bad}")
    return problems


def is_valid_tour(n: int, m: int, tour: Tour) -> bool:
    return not check_tour(n, m, tour)


def to_edge_matrices(n: int, m: int, tour: Tour) -> Tuple[np.ndarray, np.ndarray]:
    """
    Convert a tour to horizontal and vertical edge matrices.

    H[y][x] is True if the edge (x,y)-(x+1,y) is used, V[y][x] if the
    edge (x,y)-(x,y+1) is used.
    """
    H = np.zeros((m, n - 1), dtype=bool)
    V = np.zeros((m - 1, n), dtype=bool)
    for a, b in edge_set(tour):
        y, x = divmod(a, n)
        if b == a + 1 and x < n - 1:
            H[y][x] = True
        elif b == a + n:
            V[y][x] = True
        else:
            raise ValueError(f"{a}-{b} is not a grid edge of a {n}x{m} grid")
    return H, V


def transpose_tour(n: int, m: int, tour: Tour) -> Tuple[int, ...]:
    """Map a tour of the n x m grid onto the transposed m x n grid."""
    out = []
    for v in tour:
        row, col = divmod(v, n)
        out.append(col * m + row)
    return tuple(out)


def render_ascii(n: int, m: int, tour: Tour) -> str:
    """ASCII drawing of a tour: 'O' for vertices, '-' and '|' for edges."""
    H, V = to_edge_matrices(n, m, tour)
    grid_h, grid_w = 2 * m - 1, 2 * n - 1
    canvas = [[' '] * grid_w for _ in range(grid_h)]
    for y in range(m):
        for x in range(n):
            canvas[2 * y][2 * x] = 'O'
    for y in range(m):
        for x in range(n - 1):
            if H[y][x]:
                canvas[2 * y][2 * x + 1] = '-'
    for y in range(m - 1):
        for x in range(n):
            if V[y][x]:
                canvas[2 * y + 1][2 * x] = '|'
    return "\n".join(''.join(row).rstrip() for row in canvas)
