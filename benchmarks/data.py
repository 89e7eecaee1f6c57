"""Benchmark input: loading values from disk and drawing deterministic samples."""

import logging
import os
import random
from typing import List

_logger = logging.getLogger(__name__)


def load_values(filepath: str) -> List[str]:
    """
    Load values from a file holding one value per line.

    Surrounding whitespace is stripped and blank lines are skipped.

    Raises:
        FileNotFoundError: If *filepath* does not exist.
    """
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"Input file not found: {os.path.abspath(filepath)}")

    values = []
    with open(filepath, encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if line:
                values.append(line)

    _logger.info("Loaded %d values from %s", len(values), filepath)
    return values


def draw_sample(values: List[str], n: int, rng: random.Random) -> List[str]:
    """
    Draw *n* values without replacement.

    Raises:
        ValueError: If *n* exceeds the number of available values.
    """
    if n > len(values):
        raise ValueError(f"Sample size {n} exceeds dataset size {len(values)}")
    return rng.sample(values, n)


def generate_values(n: int, seed: int, prefix: str = "item") -> List[str]:
    """Generate *n* distinct synthetic values, deterministically for a given seed."""
    rng = random.Random(seed)
    space = 1 << 32
    return [f"{prefix}-{i}" for i in rng.sample(range(space), k=n)]
