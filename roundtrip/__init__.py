"""
RoundTrip: closed tours (Hamiltonian cycles) on rectangular grid graphs.
"""

from roundtrip.core import count_tours, enumerate_tours, solve

__version__ = "0.1.0"

__all__ = ["solve", "count_tours", "enumerate_tours", "__version__"]
