"""Reproducibility infrastructure: stateless PRNG and seed sources."""

from src.reproducibility.prng import next_float, next_int, shuffle
from src.reproducibility.seed import (
    daily_seed,
    fresh_seed,
    hash_string,
    verify_seed_determinism,
)

__all__ = [
    "next_float",
    "next_int",
    "shuffle",
    "daily_seed",
    "fresh_seed",
    "hash_string",
    "verify_seed_determinism",
]
