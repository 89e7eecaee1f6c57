"""Benchmark configuration and metadata management."""

import os
import subprocess
from dataclasses import dataclass
from typing import Optional


@dataclass
class BenchmarkConfig:
    """Configuration for benchmark runs."""
    
    # Reproducibility
    seed: int = 42
    
    # Benchmark parameters
    sizes: list[int] = None
    kinds: list[str] = None
    repetitions: int = 20
    lookups: int = 1000
    
    # Input: one value per line; synthetic values when None
    input_file: Optional[str] = None
    
    # Execution control
    verify_only: bool = False
    skip_warmup: bool = False
    
    # Logging
    log_level: str = "INFO"
    
    def __post_init__(self):
        if self.sizes is None:
            self.sizes = [100, 1000, 10_000]
        if self.kinds is None:
            self.kinds = ["rbtree", "skiplist"]
    
    @classmethod
    def from_env(cls) -> "BenchmarkConfig":
        """Create config from environment variables."""
        return cls(
            seed=int(os.environ.get("BENCHMARK_SEED", "42")),
            input_file=os.environ.get("BENCHMARK_INPUT_FILE") or None,
            verify_only=os.environ.get("BENCHMARK_VERIFY_ONLY", "").lower() == "true",
            skip_warmup=os.environ.get("BENCHMARK_SKIP_WARMUP", "").lower() == "true",
            log_level=os.environ.get("BENCHMARK_LOG_LEVEL", "INFO"),
        )


def get_git_commit_hash() -> Optional[str]:
    """Get the current git commit hash."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            capture_output=True,
            text=True,
            check=True,
            cwd=os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        )
        return result.stdout.strip()
    except (subprocess.CalledProcessError, FileNotFoundError):
        return None


@dataclass
class BenchmarkMetadata:
    """Metadata about a benchmark run."""
    
    commit_hash: Optional[str]
    config: BenchmarkConfig
    size: int
    kind: str
    repetitions: int
    
    def __str__(self) -> str:
        """Format metadata as string."""
        lines = [
            f"Commit: {self.commit_hash or 'unknown'}",
            f"Seed: {self.config.seed}",
            f"Input: {self.config.input_file or 'synthetic'}",
            f"Size (n): {self.size}",
            f"Set kind: {self.kind}",
            f"Repetitions: {self.repetitions}",
        ]
        return "\n".join(lines)
