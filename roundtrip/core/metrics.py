"""
Counters describing the shape of one search run.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class RunMetrics:
    """
    Search-tree counters, only ever incremented during a run.

    Attributes:
        calls: Recursive visits made
        rim_exhausted: Branches cut because the rim ran out before the interior
        backtracks: Visits that exhausted their neighbours
        unclosed: Complete paths rejected by the optional closure check
        no_return_edge: Interior entries refused for lack of a return edge
        split_rejections: Interior moves refused by the split heuristics
        tours: Accepted tours
    """
    calls: int = 0
    rim_exhausted: int = 0
    backtracks: int = 0
    unclosed: int = 0
    no_return_edge: int = 0
    split_rejections: int = 0
    tours: int = 0
    started_at: float = field(default_factory=time.time)
    finished_at: Optional[float] = None

    def finish(self) -> None:
        self.finished_at = time.time()

    @property
    def elapsed(self) -> float:
        """Wall-clock seconds since the run started (frozen once finished)."""
        end = self.finished_at if self.finished_at is not None else time.time()
        return end - self.started_at

    def to_dict(self) -> Dict[str, Any]:
        """Convert counters to a dictionary for serialization."""
        return {
            "calls": self.calls,
            "rim_exhausted": self.rim_exhausted,
            "backtracks": self.backtracks,
            "unclosed": self.unclosed,
            "no_return_edge": self.no_return_edge,
            "split_rejections": self.split_rejections,
            "tours": self.tours,
            "elapsed_sec": self.elapsed,
        }
