"""Core benchmark runner for digest-ordered set performance measurements."""

import logging
import random
import time
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
from tqdm import tqdm

from digest_sets.factory import make_set_factory
from digest_sets.invariants import assert_set_invariants_raise
from digest_sets.set_stats import set_stats_

from .config import BenchmarkConfig, BenchmarkMetadata, get_git_commit_hash
from .data import draw_sample, generate_values, load_values


@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    height: int
    add_time: float
    hit_time: float
    miss_time: float
    remove_time: float


@dataclass
class BenchmarkInput:
    """Pre-generated data for one repetition (not timed)."""
    seed: int
    values: List[str]
    hits: List[str]
    misses: List[str]


class BenchmarkRunner:
    """
    Manages the benchmark lifecycle with proper phase separation.
    
    Phases:
    1. Setup (not timed): Configuration and data generation
    2. Warmup (not timed): Optional warmup iterations
    3. Run (timed): add, contains (hit/miss), remove
    4. Verify (not timed): Invariant checks between build and removal
    """
    
    def __init__(self, config: BenchmarkConfig):
        self.config = config
        self._dataset: Optional[List[str]] = None
        self._check_logging_level()
    
    def _check_logging_level(self) -> None:
        """Warn if verbose logging is enabled during measurement."""
        current_level = logging.getLogger("digest_sets").getEffectiveLevel()
        if current_level < logging.INFO:
            level_name = logging.getLevelName(current_level)
            logging.warning(
                "Verbose logging (%s) is enabled. This may affect benchmark timing! "
                "Set log level to INFO or higher for accurate measurements.",
                level_name
            )

    def _dataset_values(self) -> Optional[List[str]]:
        if self.config.input_file and self._dataset is None:
            self._dataset = load_values(self.config.input_file)
        return self._dataset
    
    def setup(self, size: int, repetitions: int) -> List[BenchmarkInput]:
        """
        Setup phase: Generate input values for every repetition.
        
        NOT TIMED.
        """
        inputs = []
        dataset = self._dataset_values()
        lookups = self.config.lookups

        for i in range(repetitions):
            run_seed = self.config.seed + i
            rng = random.Random(run_seed)
            if dataset is not None:
                values = draw_sample(dataset, size, rng)
            else:
                values = generate_values(size, run_seed)
            hits = [rng.choice(values) for _ in range(lookups)] if values else []
            misses = generate_values(lookups, run_seed, prefix="absent")
            inputs.append(BenchmarkInput(run_seed, values, hits, misses))
        
        return inputs
    
    def warmup(self, kind: str, inputs: List[BenchmarkInput]) -> None:
        """
        Warmup phase: Build a few sets to warm caches.
        
        NOT TIMED.
        """
        if self.config.skip_warmup:
            return
        
        for inp in inputs[:min(3, len(inputs))]:
            s = make_set_factory(kind, **self._kwargs(kind, inp.seed))(inp.values)
            for v in inp.hits[:100]:
                s.contains(v)
    
    @staticmethod
    def _kwargs(kind: str, seed: int) -> dict:
        return {"seed": seed} if kind == "skiplist" else {}

    def run_single(self, kind: str, inp: BenchmarkInput) -> BenchmarkResult:
        """
        Run measurement on a single input.
        
        TIMED - only the set operations are measured.
        """
        s = make_set_factory(kind, **self._kwargs(kind, inp.seed))()
        add = s.add
        contains = s.contains
        remove = s.remove

        t0 = time.perf_counter()
        for v in inp.values:
            add(v)
        add_time = time.perf_counter() - t0

        t0 = time.perf_counter()
        for v in inp.hits:
            contains(v)
        hit_time = time.perf_counter() - t0

        t0 = time.perf_counter()
        for v in inp.misses:
            contains(v)
        miss_time = time.perf_counter() - t0

        stats = set_stats_(s)
        self.verify(s, stats, expected_size=len(inp.values))

        t0 = time.perf_counter()
        for v in inp.values:
            remove(v)
        remove_time = time.perf_counter() - t0

        if s.size() != 0:
            raise AssertionError(f"Set not empty after removing all values: size={s.size()}")

        return BenchmarkResult(stats.height, add_time, hit_time, miss_time, remove_time)

    def verify(self, s, stats, expected_size: int) -> None:
        """
        Verify phase: Check invariants and size.
        
        NOT TIMED.
        """
        assert_set_invariants_raise(s, stats)
        if s.size() != expected_size:
            raise AssertionError(f"Size mismatch: expected {expected_size}, got {s.size()}")
    
    def run_benchmark(
        self, size: int, kind: str, repetitions: int
    ) -> Tuple[List[BenchmarkResult], BenchmarkMetadata]:
        """Run the complete benchmark lifecycle for one (size, kind) pair."""
        metadata = BenchmarkMetadata(
            commit_hash=get_git_commit_hash(),
            config=self.config,
            size=size,
            kind=kind,
            repetitions=repetitions,
        )
        logging.info(str(metadata))

        inputs = self.setup(size, repetitions)
        self.warmup(kind, inputs)

        results = []
        for inp in tqdm(inputs, desc=f"{kind} n={size}", unit="run", leave=False):
            results.append(self.run_single(kind, inp))
        return results, metadata

    def aggregate_and_report(
        self, results: List[BenchmarkResult], metadata: BenchmarkMetadata
    ) -> None:
        """Aggregate timing results and log a summary table."""
        n = max(metadata.size, 1)
        lookups = max(self.config.lookups, 1)
        heights = np.array([r.height for r in results], dtype=float)

        rows = [
            ("add (us/op)", np.array([r.add_time for r in results]) / n * 1e6),
            ("contains hit (us/op)", np.array([r.hit_time for r in results]) / lookups * 1e6),
            ("contains miss (us/op)", np.array([r.miss_time for r in results]) / lookups * 1e6),
            ("remove (us/op)", np.array([r.remove_time for r in results]) / n * 1e6),
        ]

        header = f"{'Metric':<24}{'Mean':>12}{'Std':>12}{'Min':>12}{'Max':>12}"
        sep = "-" * len(header)
        logging.info("")
        logging.info(header)
        logging.info(sep)
        for name, arr in rows:
            logging.info(f"{name:<24}{arr.mean():12.3f}{arr.std():12.3f}{arr.min():12.3f}{arr.max():12.3f}")
        logging.info(f"{'height':<24}{heights.mean():12.3f}{heights.std():12.3f}{heights.min():12.0f}{heights.max():12.0f}")
        logging.info(sep)
