#!/usr/bin/env python3
"""
Main entry point for digest-ordered set benchmarks.

This script runs performance benchmarks with proper phase separation:
- Setup (not timed): Data generation and configuration
- Warmup (not timed): Cache warming
- Run (timed): add / contains / remove
- Verify (not timed): Invariant checks

Usage:
    # Run with default settings
    python -m benchmarks.run_benchmarks
    
    # Run with custom seed for reproducibility
    BENCHMARK_SEED=123 python -m benchmarks.run_benchmarks
    
    # Benchmark on values read from a file (one per line)
    python -m benchmarks.run_benchmarks --input-file authors.txt --sizes 1000 5000
    
    # Run in verify-only mode (no timing report)
    BENCHMARK_VERIFY_ONLY=true python -m benchmarks.run_benchmarks
"""

import argparse
import logging
import os
import sys
import time
from datetime import datetime

from digest_sets.factory import SET_TYPES

from .config import BenchmarkConfig
from .runner import BenchmarkRunner


def setup_logging(config: BenchmarkConfig, log_dir: str = None) -> None:
    """
    Configure logging for benchmark output.
    
    Args:
        config: Benchmark configuration
        log_dir: Optional directory for log files
    """
    handlers = [logging.StreamHandler()]
    
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_path = os.path.join(log_dir, f"benchmark_{ts}.log")
        handlers.append(logging.FileHandler(log_path, mode="w"))
    
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Run digest-ordered set benchmarks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    
    parser.add_argument("--seed", type=int, help="Random seed for reproducibility (default: from env or 42)")
    parser.add_argument("--sizes", type=int, nargs="+", help="Set sizes to benchmark (default: 100 1000 10000)")
    parser.add_argument(
        "--kinds", nargs="+", choices=sorted(SET_TYPES), help="Set variants to benchmark (default: rbtree skiplist)"
    )
    parser.add_argument("--repetitions", type=int, help="Number of repetitions per configuration (default: 20)")
    parser.add_argument("--lookups", type=int, help="contains() calls per phase (default: 1000)")
    parser.add_argument("--input-file", help="File with one value per line (default: synthetic values)")
    parser.add_argument("--verify-only", action="store_true", help="Run in verify-only mode (no timing report)")
    parser.add_argument("--skip-warmup", action="store_true", help="Skip warmup phase")
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level (default: INFO)"
    )
    parser.add_argument("--log-dir", help="Directory for log files (default: benchmarks/logs)")
    
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> BenchmarkConfig:
    """Start from the environment and apply command-line overrides."""
    config = BenchmarkConfig.from_env()
    
    if args.seed is not None:
        config.seed = args.seed
    if args.sizes is not None:
        config.sizes = args.sizes
    if args.kinds is not None:
        config.kinds = args.kinds
    if args.repetitions is not None:
        config.repetitions = args.repetitions
    if args.lookups is not None:
        config.lookups = args.lookups
    if args.input_file is not None:
        config.input_file = args.input_file
    if args.verify_only:
        config.verify_only = True
    if args.skip_warmup:
        config.skip_warmup = True
    if args.log_level is not None:
        config.log_level = args.log_level
    return config


def main(argv=None) -> int:
    """
    Main benchmark execution.
    
    Returns:
        Exit code (0 for success)
    """
    args = parse_args(argv)
    config = build_config(args)
    
    log_dir = args.log_dir or os.path.join(os.path.dirname(__file__), "logs")
    setup_logging(config, log_dir if not config.verify_only else None)
    
    logging.info("=" * 70)
    logging.info("DIGEST SET BENCHMARKS")
    logging.info("=" * 70)
    
    if config.verify_only:
        logging.info("Mode: VERIFY-ONLY (correctness checks, no timing report)")
    else:
        logging.info("Mode: PERFORMANCE (timed measurements)")
    
    runner = BenchmarkRunner(config)
    overall_start = time.perf_counter()
    
    for size in config.sizes:
        for kind in config.kinds:
            logging.info("")
            logging.info("=" * 70)
            logging.info(f"BENCHMARK: n={size}, kind={kind}, repetitions={config.repetitions}")
            logging.info("=" * 70)
            
            run_start = time.perf_counter()
            results, metadata = runner.run_benchmark(size=size, kind=kind, repetitions=config.repetitions)
            
            if not config.verify_only:
                runner.aggregate_and_report(results, metadata)
            
            logging.info(f"Execution time: {time.perf_counter() - run_start:.3f} seconds")
    
    logging.info("")
    logging.info("=" * 70)
    logging.info(f"TOTAL EXECUTION TIME: {time.perf_counter() - overall_start:.3f} seconds")
    logging.info("=" * 70)
    
    return 0


if __name__ == "__main__":
    sys.exit(main())
