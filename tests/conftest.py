"""Pytest configuration and fixtures."""

import io
from typing import Callable, FrozenSet, Set

import pytest
from rich.console import Console

from roundtrip.core.tours import edge_set
from roundtrip.pipeline.config import AppConfig, OutputConfig


def brute_force_tours(n: int, m: int) -> Set[FrozenSet]:
    """Every closed tour of the n x m grid as an undirected edge set.

    Plain depth-first search over all paths from vertex 0; each tour is
    reached once per direction and the set folds the two together.
    """
    size = n * m
    found = set()
    visited = [False] * size
    path = [0]
    visited[0] = True

    def neighbours(v):
        row, col = divmod(v, n)
        if row > 0:
            yield v - n
        if col > 0:
            yield v - 1
        if col < n - 1:
            yield v + 1
        if row < m - 1:
            yield v + n

    def extend(v):
        if len(path) == size:
            if 0 in neighbours(v):
                found.add(edge_set(path))
            return
        for w in neighbours(v):
            if not visited[w]:
                visited[w] = True
                path.append(w)
                extend(w)
                path.pop()
                visited[w] = False

    extend(0)
    return found


@pytest.fixture(scope="session")
def reference_tours() -> Callable[[int, int], Set[FrozenSet]]:
    """Brute-force tour enumerator, cached per grid size."""
    cache = {}

    def get(n: int, m: int) -> Set[FrozenSet]:
        if (n, m) not in cache:
            cache[(n, m)] = brute_force_tours(n, m)
        return cache[(n, m)]

    return get


@pytest.fixture
def console() -> Console:
    """Console writing to a string buffer, without colour or wrapping surprises."""
    return Console(file=io.StringIO(), width=200, color_system=None, force_terminal=False)


@pytest.fixture
def output_of(console) -> Callable[[], str]:
    """Read back everything printed on the test console."""
    return lambda: console.file.getvalue()


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    """Default configuration writing into a temporary directory."""
    return AppConfig(output=OutputConfig(output_dir=str(tmp_path / "output")))
