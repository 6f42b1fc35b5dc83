"""Derived statistics recomputed from the game state on every read."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from frostwind.domain.catalog import TERRITORIES, UNIT_CONFIGS
from frostwind.domain.enums import BuildingType, TerritoryStatus, UnitStatus
from frostwind.domain.models import CommanderStats, GameState, StatBlock, Unit
from frostwind.domain.rules_config import DEFAULT_RULES, RulesConfig


@dataclass(frozen=True, slots=True)
class TerritoryBonus:
    income: int = 0
    population: int = 0


@dataclass(frozen=True, slots=True)
class DerivedStats:
    """Read-only summary handed to the presentation layer."""

    total_soldiers: int
    max_population: int
    daily_recruit_cap: int
    army: StatBlock
    total_power: int
    daily_maintenance: int
    daily_income: int


def total_soldiers(state: GameState) -> int:
    return sum(unit.count for unit in state.units)


def commander_bonus(state: GameState) -> CommanderStats:
    """Sum the stat triples of every hired commander."""

    return CommanderStats(
        command=sum(commander.stats.command for commander in state.commanders),
        valor=sum(commander.stats.valor for commander in state.commanders),
        strategy=sum(commander.stats.strategy for commander in state.commanders),
    )


def territory_bonus(state: GameState) -> TerritoryBonus:
    """Sum passive income and population granted by owned territories."""

    income = 0
    population = 0
    for territory_id, status in state.territories.items():
        if status != TerritoryStatus.OWNED:
            continue
        territory = TERRITORIES.get(territory_id)
        if territory is None:
            continue
        income += territory.passive_income
        population += territory.passive_pop_cap
    return TerritoryBonus(income=income, population=population)


def max_population(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> int:
    population = rules.population
    return (
        population.base_cap
        + state.buildings.get(BuildingType.BARRACKS, 0) * population.barracks_bonus_per_level
        + commander_bonus(state).command * population.command_multiplier
        + territory_bonus(state).population
        + state.population_cap_modifier
    )


def daily_recruit_cap(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> int:
    return math.floor(max_population(state, rules) * rules.recruitment.daily_recruit_fraction)


def army_stats(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> StatBlock:
    """Aggregate attributes of the whole army.

    Units still in training contribute at a discount. Power is further scaled
    by the hired commanders' valor and floored.
    """

    stats = StatBlock()
    for unit in state.units:
        modifier = rules.combat.training_penalty if unit.status == UnitStatus.TRAINING else 1.0
        stats.power += unit.power * unit.count * modifier
        stats.mobility += unit.mobility * unit.count * modifier
        stats.range += unit.range * unit.count * modifier
        stats.magic += unit.magic * unit.count * modifier

    valor = commander_bonus(state).valor
    stats.power = math.floor(stats.power * (1 + valor * rules.combat.valor_power_bonus))
    return stats


def total_power(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> int:
    return int(army_stats(state, rules).power)


def selected_stats(units: Iterable[Unit]) -> StatBlock:
    """Nominal attribute totals of a deployment selection."""

    stats = StatBlock()
    for unit in units:
        stats.power += unit.power * unit.count
        stats.mobility += unit.mobility * unit.count
        stats.range += unit.range * unit.count
        stats.magic += unit.magic * unit.count
    return stats


def daily_maintenance(state: GameState) -> int:
    return sum(UNIT_CONFIGS[unit.type].maintenance * unit.count for unit in state.units)


def daily_income(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> int:
    market = state.buildings.get(BuildingType.MARKET, 0) * rules.economy.market_income_per_level
    return market + territory_bonus(state).income


def summarize(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> DerivedStats:
    """Compute every derived statistic in one pass over the state."""

    army = army_stats(state, rules)
    return DerivedStats(
        total_soldiers=total_soldiers(state),
        max_population=max_population(state, rules),
        daily_recruit_cap=daily_recruit_cap(state, rules),
        army=army,
        total_power=int(army.power),
        daily_maintenance=daily_maintenance(state),
        daily_income=daily_income(state, rules),
    )
