"""Stateless seeded pseudo-random draws.

Every function is a pure function of its arguments: there is no generator
object and no global state. Callers derive a distinct seed per logical draw
by offsetting a base seed (``seed + 1``, ``seed + index``) so unrelated
draws do not correlate. The mixing function is the splitmix64 finaliser,
which maps consecutive integers to well-spread 64-bit outputs.
"""

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

_MASK64 = (1 << 64) - 1
_GOLDEN_GAMMA = 0x9E3779B97F4A7C15
_FLOAT_SCALE = float(1 << 53)


def _mix64(seed: int) -> int:
    """splitmix64 output function applied to a single seed value."""
    z = (seed + _GOLDEN_GAMMA) & _MASK64
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK64
    return z ^ (z >> 31)


def next_float(seed: int) -> float:
    """Return a float in [0, 1) determined entirely by ``seed``.

    Uses the top 53 bits of the mixed value so every output is an exactly
    representable double strictly below 1.0. Negative and arbitrarily large
    seeds are reduced modulo 2**64.
    """
    return (_mix64(seed & _MASK64) >> 11) / _FLOAT_SCALE


def next_int(low: int, high: int, seed: int) -> int:
    """Return an integer in [low, high] inclusive determined by ``seed``.

    Raises:
        ValueError: If high < low.
    """
    if high < low:
        raise ValueError(f"Empty range: high ({high}) < low ({low})")
    return low + int(next_float(seed) * (high - low + 1))


def shuffle(items: Sequence[T], seed: int) -> list[T]:
    """Return a seeded Fisher-Yates permutation of ``items``.

    Step ``i`` (walking from the tail) swaps position ``i`` with
    ``next_int(0, i, seed + i)``, so the permutation depends only on the
    sequence length and the seed. The input is not modified.
    """
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = next_int(0, i, seed + i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
