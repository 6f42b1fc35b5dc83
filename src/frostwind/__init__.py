"""Frostwind Keep: a turn-based army, economy and campaign simulation."""

from frostwind.engine import CommandResult, GameEngine

__all__ = ["CommandResult", "GameEngine"]
