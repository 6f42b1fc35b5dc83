"""Commander lottery: the tavern pool and hiring."""

from __future__ import annotations

import math

from frostwind.domain.catalog import COMMANDER_NAMES, COMMANDER_TITLES, RARITY_ORDER, RARITY_TIERS
from frostwind.domain.enums import CommanderRarity, LogLevel
from frostwind.domain.errors import CommandRejected
from frostwind.domain.models import Commander, CommanderID, CommanderStats, GameState
from frostwind.domain.rules_config import DEFAULT_RULES, RulesConfig
from frostwind.utils.rng import RandomSource, weighted_pick


def roll_rarity(rng: RandomSource) -> CommanderRarity:
    """Roll a rarity tier by cumulative probability, lowest tier first."""

    return weighted_pick(rng, [(rarity, RARITY_TIERS[rarity].probability) for rarity in RARITY_ORDER])


def generate_commander(
    commander_id: CommanderID,
    rng: RandomSource,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> Commander:
    """Generate a random commander.

    Stats are drawn independently and uniformly within the rarity's bounds;
    name and title come from fixed lists. The hire cost is the base cost
    scaled by the rarity.
    """

    rarity = roll_rarity(rng)
    tier = RARITY_TIERS[rarity]
    commander_stats = CommanderStats(
        command=rng.randint(tier.min_stat, tier.max_stat),
        valor=rng.randint(tier.min_stat, tier.max_stat),
        strategy=rng.randint(tier.min_stat, tier.max_stat),
    )
    return Commander(
        id=commander_id,
        name=rng.choice(COMMANDER_NAMES),
        title=rng.choice(COMMANDER_TITLES),
        rarity=rarity,
        cost=math.floor(rules.tavern.base_cost * tier.cost_multiplier),
        stats=commander_stats,
        description=f"A commander with {rarity} potential.",
    )


def tavern_refresh_due(state: GameState, *, rules: RulesConfig = DEFAULT_RULES) -> bool:
    """Whether the pool is old enough to be regenerated.

    An emptied pool waits for the regular refresh like any other.
    """

    return state.day - state.last_tavern_refresh_day >= rules.tavern.refresh_days


def refresh_tavern(
    state: GameState,
    rng: RandomSource,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> list[Commander]:
    """Replace the whole tavern pool with freshly generated commanders."""

    pool = [
        generate_commander(CommanderID(state.allocate_id("cmd")), rng, rules=rules)
        for _ in range(rules.tavern.pool_size)
    ]
    state.tavern_commanders = pool
    state.last_tavern_refresh_day = state.day
    return pool


def hire_commander(
    state: GameState,
    commander_id: CommanderID,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> Commander:
    """Move a commander from the tavern into service.

    Raises:
        CommandRejected: If the commander is not in the pool or the treasury
            cannot cover the fee.
    """

    commander = next(
        (candidate for candidate in state.tavern_commanders if candidate.id == commander_id),
        None,
    )
    if commander is None:
        raise CommandRejected(f"Commander {commander_id} is not at the tavern.")
    if state.gold < commander.cost:
        raise CommandRejected(f"Cannot afford {commander.name}'s fee of {commander.cost} gold.")

    state.gold -= commander.cost
    state.commanders.append(commander)
    state.tavern_commanders = [
        candidate for candidate in state.tavern_commanders if candidate.id != commander_id
    ]
    state.add_log(
        f"{commander.title} {commander.name} joined the keep!",
        LogLevel.SUCCESS,
        limit=rules.logs.max_entries,
    )
    return commander
