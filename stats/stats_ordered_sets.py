"""Shape statistics for digest-ordered sets."""

import argparse
import logging
import math
import os
import random
import time
from datetime import datetime

import numpy as np

from digest_sets.factory import SET_TYPES, make_set_factory
from digest_sets.invariants import assert_set_invariants_raise
from digest_sets.set_stats import set_stats_

logger = logging.getLogger(__name__)


def random_values(n: int, rng: np.random.Generator) -> list[str]:
    """Draw *n* distinct string values from a 2^32 integer space."""
    space = 1 << 32
    if space <= n:
        raise ValueError(f"Value-space too small! Required: {n}, Available: {space}")
    ints = rng.choice(space, size=n, replace=False)
    return [f"value-{int(i)}" for i in ints]


def random_set_of_size(kind: str, n: int, seed: int):
    """Build a set of the given kind from *n* random values, seeded end to end."""
    rng = np.random.default_rng(seed)
    kwargs = {"seed": seed} if kind == "skiplist" else {}
    factory = make_set_factory(kind, **kwargs)
    return factory(random_values(n, rng))


def repeated_experiment(
    size: int,
    repetitions: int,
    kind: str,
    seed: int = 0,
) -> None:
    """
    Repeatedly builds random sets of *size* values and aggregates their shape.

    Heights are compared against the perfect binary height ceil(log2(n + 1)).
    """
    t_all_0 = time.perf_counter()

    heights = []
    black_heights = []
    top_level_counts = []
    times_build = []
    times_stats = []

    for rep in range(repetitions):
        t0 = time.perf_counter()
        s = random_set_of_size(kind, size, seed + rep)
        times_build.append(time.perf_counter() - t0)

        t0 = time.perf_counter()
        stats = set_stats_(s)
        times_stats.append(time.perf_counter() - t0)

        assert_set_invariants_raise(s, stats)

        heights.append(stats.height)
        black_heights.append(stats.black_height)
        if stats.level_hist:
            top_level_counts.append(stats.level_hist.get(stats.height, 0))

    perfect_height = math.ceil(math.log2(size + 1)) if size > 0 else 0

    heights_arr = np.asarray(heights, dtype=float)
    rows = [
        ("Height", heights_arr.mean(), heights_arr.var()),
        ("Perfect height", perfect_height, None),
    ]
    if perfect_height:
        amp = heights_arr / perfect_height
        rows.append(("Height amplification", amp.mean(), amp.var()))
    if kind == "rbtree":
        bh = np.asarray(black_heights, dtype=float)
        rows.append(("Black height", bh.mean(), bh.var()))
    if top_level_counts:
        top = np.asarray(top_level_counts, dtype=float)
        rows.append(("Nodes on top level", top.mean(), top.var()))

    build = np.asarray(times_build)
    stats_t = np.asarray(times_stats)
    rows.append(("Build time (s)", build.mean(), build.var()))
    rows.append(("Stats time (s)", stats_t.mean(), stats_t.var()))

    header = f"{'Metric':<22} {'Avg':>15} {'(Var)':>15}"
    sep_line = "-" * len(header)

    logger.info(header)
    logger.info(sep_line)
    for name, avg, var in rows:
        if var is None:
            logger.info(f"{name:<22} {avg:>15}")
        else:
            var_str = f"({var:.4f})"
            logger.info(f"{name:<22} {avg:15.4f} {var_str:>15}")

    logger.info(sep_line)
    logger.info("Execution time: %.3f seconds", time.perf_counter() - t_all_0)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run shape statistics experiments for digest-ordered sets.")
    parser.add_argument(
        "--sizes", type=int, nargs="+", default=[10, 100, 1000, 10_000], help="List of set sizes to test."
    )
    parser.add_argument(
        "--kinds", nargs="+", choices=sorted(SET_TYPES), default=["rbtree", "skiplist", "bst"],
        help="Set variants to test."
    )
    parser.add_argument("--repetitions", type=int, default=5, help="Number of repetitions for each experiment.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility.")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Set the logging level (default: INFO)",
    )

    args = parser.parse_args()

    seed = args.seed if args.seed is not None else random.randrange(1 << 30)

    log_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "logs")
    os.makedirs(log_dir, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_path = os.path.join(log_dir, f"run_{ts}.log")

    log_level = getattr(logging, args.log_level)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(log_path, mode="w"),
            logging.StreamHandler(),
        ],
        force=True,
    )
    logging.getLogger("digest_sets").setLevel(log_level)

    logger.info("Seed: %d", seed)
    for n in args.sizes:
        for kind in args.kinds:
            logger.info("")
            logger.info(
                f"---------------- NOW RUNNING EXPERIMENT: n = {n}, kind = {kind}, repetitions = {args.repetitions} ----------------"
            )
            t0 = time.perf_counter()
            repeated_experiment(size=n, repetitions=args.repetitions, kind=kind, seed=seed)
            logger.info(f"Total experiment time: {time.perf_counter() - t0:.3f} seconds")
