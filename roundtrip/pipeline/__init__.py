"""
Run pipeline: configuration, run orchestration and the results store.
"""

from .config import AppConfig, GridLimits, OutputConfig, SearchConfig, load_config
from .results import GridRun, ResultStore
from .runner import RoundTripRunner, format_time

__all__ = [
    "AppConfig",
    "GridLimits",
    "OutputConfig",
    "SearchConfig",
    "load_config",
    "GridRun",
    "ResultStore",
    "RoundTripRunner",
    "format_time",
]
