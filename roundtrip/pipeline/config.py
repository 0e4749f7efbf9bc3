"""
Configuration loading and data classes for RoundTrip runs.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import yaml

DEFAULT_CONFIG_PATH = os.path.join("config", "roundtrip.yaml")


@dataclass
class GridLimits:
    """Bounds a grid must satisfy before a search is started."""
    max_side: int = 20
    min_vertices: int = 12
    max_vertices: int = 128
    require_n_le_m: bool = True

    def check(self, n: int, m: int) -> List[str]:
        """
        Validate grid dimensions.

        Returns:
            List of problems (empty when the grid may be searched)
        """
        problems = []
        if n < 1 or m < 1:
            return [f"n and m must be positive (got {n} x {m})"]
        if n > self.max_side or m > self.max_side:
            problems.append(f"n and m must be less or equal to {self.max_side} and {self.max_side}")
        if self.require_n_le_m and n > m:
            problems.append(f"n ({n}) should be less or equal to m ({m})")
        size = n * m
        if size < self.min_vertices:
            problems.append(f"Too small! Board size n*m must be min {self.min_vertices} "
                            f"and max {self.max_vertices}.")
        elif size > self.max_vertices:
            problems.append(f"Too big! Board size n*m must be min {self.min_vertices} "
                            f"and max {self.max_vertices}.")
        elif size % 2:
            problems.append("Invalid matrix size: n * m MUST be an even number")
        return problems


@dataclass
class SearchConfig:
    """Search engine options."""
    progress_every: int = 10_000
    record_tours: bool = False
    record_limit: Optional[int] = None
    verify_closure: bool = False


@dataclass
class OutputConfig:
    """Where and how results are reported."""
    output_dir: str = "output"
    results_file: str = "results.json"
    save_results: bool = True
    render_limit: int = 0
    show_limit: int = 0
    gallery_limit: int = 0

    @property
    def results_path(self) -> str:
        return os.path.join(self.output_dir, self.results_file)


@dataclass
class AppConfig:
    """Complete configuration."""
    limits: GridLimits = field(default_factory=GridLimits)
    search: SearchConfig = field(default_factory=SearchConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    grids: List[Tuple[int, int]] = field(default_factory=list)


def load_yaml(path: str) -> Dict[str, Any]:
    """Load a YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _check_mapping(data: Any, section: str) -> None:
    if not isinstance(data, dict):
        raise ValueError(f"'{section}' must be a mapping, got {type(data).__name__}")


def parse_limits(data: Optional[Dict[str, Any]]) -> GridLimits:
    """Parse grid limits from dictionary."""
    if data is None:
        return GridLimits()
    _check_mapping(data, "limits")
    return GridLimits(
        max_side=data.get("max_side", 20),
        min_vertices=data.get("min_vertices", 12),
        max_vertices=data.get("max_vertices", 128),
        require_n_le_m=data.get("require_n_le_m", True),
    )


def parse_search_config(data: Optional[Dict[str, Any]]) -> SearchConfig:
    """Parse search options from dictionary."""
    if data is None:
        return SearchConfig()
    _check_mapping(data, "search")
    return SearchConfig(
        progress_every=data.get("progress_every", 10_000),
        record_tours=data.get("record_tours", False),
        record_limit=data.get("record_limit"),
        verify_closure=data.get("verify_closure", False),
    )


def parse_output_config(data: Optional[Dict[str, Any]]) -> OutputConfig:
    """Parse output options from dictionary."""
    if data is None:
        return OutputConfig()
    _check_mapping(data, "output")
    return OutputConfig(
        output_dir=data.get("output_dir", "output"),
        results_file=data.get("results_file", "results.json"),
        save_results=data.get("save_results", True),
        render_limit=data.get("render_limit", 0),
        show_limit=data.get("show_limit", 0),
        gallery_limit=data.get("gallery_limit", 0),
    )


def parse_grids(data: Optional[List[Any]]) -> List[Tuple[int, int]]:
    """Parse the batch grid list, e.g. [[4, 4], [4, 6]]."""
    if data is not None and not isinstance(data, list):
        raise ValueError(f"'grids' must be a list, got {type(data).__name__}")

    grids = []
    for entry in data or []:
        if not isinstance(entry, (list, tuple)) or len(entry) != 2:
            raise ValueError(f"Grid entry must be [n, m], got {entry!r}")
        try:
            grids.append((int(entry[0]), int(entry[1])))
        except (TypeError, ValueError):
            raise ValueError(f"Grid entry must hold two integers, got {entry!r}")
    return grids


def load_config(path: Optional[str] = None) -> AppConfig:
    """
    Load configuration from YAML.

    Args:
        path: Config file; when None the default path is tried and the
            built-in defaults are used if it does not exist

    Returns:
        AppConfig
    """
    if path is None:
        if not os.path.exists(DEFAULT_CONFIG_PATH):
            return AppConfig()
        path = DEFAULT_CONFIG_PATH

    data = load_yaml(path)
    _check_mapping(data, path)
    return AppConfig(
        limits=parse_limits(data.get("limits")),
        search=parse_search_config(data.get("search")),
        output=parse_output_config(data.get("output")),
        grids=parse_grids(data.get("grids")),
    )
