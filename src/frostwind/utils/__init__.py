"""Utility functions for the Frostwind game system."""

from frostwind.utils.rng import RandomSource, SeededRandom, seed_to_int, weighted_pick

__all__ = [
    "RandomSource",
    "SeededRandom",
    "seed_to_int",
    "weighted_pick",
]
