"""
Core module containing the grid graph and the tour search.

- topology: GridTopology, adjacency and clockwise rim order
- state: SearchState, the mutable board of one run
- metrics: RunMetrics counters
- engine: SearchEngine and the solve/count/enumerate entry points
- tours: tour validation and rendering helpers
"""

from .topology import GridTopology
from .state import SearchState
from .metrics import RunMetrics
from .engine import (
    SearchEngine,
    SearchResult,
    solve,
    count_tours,
    enumerate_tours,
)
from .tours import check_tour, is_valid_tour, render_ascii

__all__ = [
    "GridTopology",
    "SearchState",
    "RunMetrics",
    "SearchEngine",
    "SearchResult",
    "solve",
    "count_tours",
    "enumerate_tours",
    "check_tour",
    "is_valid_tour",
    "render_ascii",
]
