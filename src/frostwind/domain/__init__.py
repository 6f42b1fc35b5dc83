"""Game rules for Frostwind Keep.

The domain package holds every rule of the simulation and operates purely
in-memory:

* Dataclasses describing the game state (see :mod:`models`).
* Enumerations and strongly-typed identifiers used across the rules layer.
* Tunable numbers (see :mod:`rules_config`) and static tables (see
  :mod:`catalog`).
* Pure rule functions that validate first and mutate the state afterwards.
"""

from . import (
    campaign,
    catalog,
    economy,
    enums,
    errors,
    events,
    missions,
    models,
    quests,
    recruitment,
    rules_config,
    stats,
    tavern,
    tick,
    training,
)

__all__ = [
    "campaign",
    "catalog",
    "economy",
    "enums",
    "errors",
    "events",
    "missions",
    "models",
    "quests",
    "recruitment",
    "rules_config",
    "stats",
    "tavern",
    "tick",
    "training",
]
