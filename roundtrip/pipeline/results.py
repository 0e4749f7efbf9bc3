"""
Results store for RoundTrip runs.

Keeps one record per grid size in a JSON file so batch runs can be
inspected (and resumed) after the fact.
"""

import json
import os
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set


@dataclass
class GridRun:
    """Result of searching a single grid."""
    n: int
    m: int
    success: bool
    tours: Optional[int] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
    runtime_sec: Optional[float] = None
    error: Optional[str] = None
    timestamp: float = field(default_factory=time.time)

    @property
    def key(self) -> str:
        return grid_key(self.n, self.m)

    def to_dict(self) -> Dict[str, Any]:
        """Convert run to dictionary for serialization."""
        return {
            "n": self.n,
            "m": self.m,
            "success": self.success,
            "tours": self.tours,
            "metrics": self.metrics,
            "runtime_sec": self.runtime_sec,
            "error": self.error,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GridRun":
        return cls(
            n=data["n"],
            m=data["m"],
            success=data["success"],
            tours=data.get("tours"),
            metrics=data.get("metrics", {}),
            runtime_sec=data.get("runtime_sec"),
            error=data.get("error"),
            timestamp=data.get("timestamp", time.time()),
        )


def grid_key(n: int, m: int) -> str:
    return f"{n}x{m}"


class ResultStore:
    """
    JSON-backed store of completed and failed grid runs.

    Every update is written to a temporary file first and then renamed
    over the store, so an interrupted run never leaves a truncated file.
    """

    def __init__(self, path: str):
        """
        Initialize results store.

        Args:
            path: Path to the results JSON file
        """
        self.path = path
        self._data = self._load_or_create()

    def _load_or_create(self) -> Dict[str, Any]:
        """Load existing results or create a new store."""
        if os.path.exists(self.path):
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            data.setdefault("completed", {})
            data.setdefault("failed", {})
            data.setdefault("stats", {"created": time.time(), "last_update": time.time()})
            return data

        return {
            "completed": {},
            "failed": {},
            "stats": {"created": time.time(), "last_update": time.time()},
        }

    def _save(self) -> None:
        """Save results to file."""
        self._data["stats"]["last_update"] = time.time()
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)

        tmp_path = self.path + ".tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2)
        os.replace(tmp_path, self.path)

    def record(self, run: GridRun) -> None:
        """Store a run; a success clears any earlier failure for that grid."""
        if run.success:
            self._data["completed"][run.key] = run.to_dict()
            self._data["failed"].pop(run.key, None)
        else:
            self._data["failed"][run.key] = run.to_dict()
        self._save()

    def get(self, n: int, m: int) -> Optional[GridRun]:
        """Get the completed run for a grid, if any."""
        data = self._data["completed"].get(grid_key(n, m))
        return GridRun.from_dict(data) if data else None

    def completed_keys(self) -> Set[str]:
        return set(self._data["completed"].keys())

    def runs(self) -> List[GridRun]:
        """All stored runs, completed first, each group ordered by grid size."""
        def order(run: GridRun):
            return (run.n * run.m, run.n)

        completed = sorted((GridRun.from_dict(d) for d in self._data["completed"].values()), key=order)
        failed = sorted((GridRun.from_dict(d) for d in self._data["failed"].values()), key=order)
        return completed + failed
