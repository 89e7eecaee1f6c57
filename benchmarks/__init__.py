"""
Benchmarks package for digest-ordered sets.

This package times the core operations of every set variant:
- add (build phase)
- contains for present and absent values
- remove of every stored value

Runs are reproducible: synthetic data and skip-list heights derive from a
single base seed, and each repetition shifts it deterministically.
"""

from .config import BenchmarkConfig, BenchmarkMetadata
from .runner import BenchmarkRunner

__all__ = ["BenchmarkConfig", "BenchmarkMetadata", "BenchmarkRunner"]
