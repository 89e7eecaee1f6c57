"""Helpers shared by the test suites."""

from typing import Iterable, List


class ScriptedRandom:
    """
    Stand-in random source that replays fixed draws.

    Raises AssertionError when more draws are requested than scripted, so a
    test notices if an operation consumed randomness it should not have.
    """

    def __init__(self, draws: Iterable[float]):
        self._draws = list(draws)
        self.calls = 0

    def random(self) -> float:
        if not self._draws:
            raise AssertionError("ScriptedRandom exhausted")
        self.calls += 1
        return self._draws.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._draws)


def draws_for_heights(heights: Iterable[int], max_level: int, p: float = 0.5) -> List[float]:
    """Translate target node heights into the draws that produce them."""
    draws: List[float] = []
    for h in heights:
        if not 1 <= h <= max_level:
            raise ValueError(f"height {h} outside 1..{max_level}")
        draws.extend([0.0] * (h - 1))
        if h < max_level:
            draws.append(min(p + (1.0 - p) / 2, 0.999))
    return draws


def rng_for_heights(heights: Iterable[int], max_level: int, p: float = 0.5) -> ScriptedRandom:
    return ScriptedRandom(draws_for_heights(heights, max_level, p))
