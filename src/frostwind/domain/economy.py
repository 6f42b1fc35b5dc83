"""Buildings and the daily treasury."""

from __future__ import annotations

import math

from frostwind.domain import stats
from frostwind.domain.catalog import BUILDING_CONFIGS
from frostwind.domain.enums import BuildingType, LogLevel
from frostwind.domain.errors import CommandRejected
from frostwind.domain.models import GameState
from frostwind.domain.rules_config import DEFAULT_RULES, RulesConfig


def upgrade_cost(kind: BuildingType, level: int) -> int:
    """Cost of raising ``kind`` from ``level`` to ``level + 1``."""

    config = BUILDING_CONFIGS[kind]
    return math.floor(config.base_cost * config.cost_multiplier**level)


def upgrade_building(
    state: GameState,
    kind: BuildingType,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> int:
    """Raise a building one level and return the new level.

    Raises:
        CommandRejected: If the treasury cannot cover the cost.
    """

    level = state.buildings.get(kind, 0)
    cost = upgrade_cost(kind, level)
    if state.gold < cost:
        raise CommandRejected(f"Not enough gold: {cost} needed to upgrade {BUILDING_CONFIGS[kind].name}.")

    state.gold -= cost
    state.buildings[kind] = level + 1
    state.add_log(
        f"Upgraded {BUILDING_CONFIGS[kind].name} to level {level + 1}.",
        LogLevel.SUCCESS,
        limit=rules.logs.max_entries,
    )
    return level + 1


def apply_daily_economy(
    state: GameState,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> tuple[int, int]:
    """Charge maintenance and collect income for the day.

    The treasury may go negative; there is no bankruptcy rule.

    Returns:
        ``(maintenance, income)`` applied.
    """

    maintenance = stats.daily_maintenance(state)
    income = stats.daily_income(state, rules)
    state.gold += income - maintenance
    return maintenance, income
