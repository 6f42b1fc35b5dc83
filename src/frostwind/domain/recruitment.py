"""Unit recruitment and merging rules."""

from __future__ import annotations

import math
from collections.abc import Sequence

from frostwind.domain import stats
from frostwind.domain.catalog import QUALITY_TIERS, UNIT_CONFIGS, scale_label
from frostwind.domain.enums import LogLevel, SoldierQuality, UnitStatus, UnitType
from frostwind.domain.errors import CommandRejected
from frostwind.domain.models import GameState, Unit, UnitID
from frostwind.domain.rules_config import DEFAULT_RULES, RulesConfig
from frostwind.utils.rng import RandomSource


def roll_quality(rng: RandomSource, rules: RulesConfig = DEFAULT_RULES) -> SoldierQuality:
    """Roll a recruit quality: Rookie by default, better above fixed thresholds."""

    roll = rng.random()
    if roll > rules.recruitment.elite_threshold:
        return SoldierQuality.ELITE
    if roll > rules.recruitment.veteran_threshold:
        return SoldierQuality.VETERAN
    return SoldierQuality.ROOKIE


def unit_name(kind: UnitType, quality: SoldierQuality, count: int) -> str:
    """Display name built from quality, archetype and formation size."""

    return f"{QUALITY_TIERS[quality].label} {UNIT_CONFIGS[kind].name} {scale_label(count)}"


def build_unit(
    unit_id: UnitID,
    kind: UnitType,
    quantity: int,
    quality: SoldierQuality,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> Unit:
    """Create a freshly recruited unit in the training pipeline."""

    config = UNIT_CONFIGS[kind]
    multiplier = QUALITY_TIERS[quality].multiplier
    return Unit(
        id=unit_id,
        type=kind,
        name=unit_name(kind, quality, quantity),
        count=quantity,
        quality=quality,
        status=UnitStatus.TRAINING,
        training_days_left=rules.recruitment.training_days,
        power=math.floor(config.power * multiplier),
        mobility=math.floor(config.mobility * multiplier),
        range=math.floor(config.range * multiplier),
        magic=math.floor(config.magic * multiplier),
        morale=rules.recruitment.starting_morale,
        stamina=rules.recruitment.starting_stamina,
    )


def recruit(
    state: GameState,
    kind: UnitType,
    quantity: int,
    rng: RandomSource,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> Unit:
    """Recruit ``quantity`` soldiers of ``kind`` as a new training unit.

    Checks run in a fixed order and the first failure aborts before any state
    is touched: population cap, daily quota, then gold.

    Raises:
        CommandRejected: If any precondition fails.
    """

    if quantity <= 0:
        raise CommandRejected(f"Cannot recruit {quantity} soldiers.")

    cap = stats.max_population(state, rules)
    if stats.total_soldiers(state) + quantity > cap:
        raise CommandRejected(
            f"Population cap reached ({cap}). Upgrade the barracks or take the village."
        )

    quota = stats.daily_recruit_cap(state, rules)
    if state.recruited_today + quantity > quota:
        raise CommandRejected(f"Today's recruitment quota is exhausted ({quota}).")

    config = UNIT_CONFIGS[kind]
    total_cost = config.cost * quantity
    if state.gold < total_cost:
        raise CommandRejected(f"Not enough gold: {total_cost} needed, {state.gold} available.")

    quality = roll_quality(rng, rules)
    unit = build_unit(UnitID(state.allocate_id("unit")), kind, quantity, quality, rules=rules)

    state.gold -= total_cost
    state.units.append(unit)
    state.recruited_today += quantity
    state.add_log(
        f"Recruited {quantity} {QUALITY_TIERS[quality].label} {config.name}.",
        LogLevel.SUCCESS,
        limit=rules.logs.max_entries,
    )
    return unit


def merge_units(
    state: GameState,
    unit_ids: Sequence[UnitID],
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> Unit:
    """Combine two or more idle units of one archetype into a single unit.

    The merged unit keeps the quality and attributes of the largest input and
    is renamed for its new size. Malformed selections are rejected silently.

    Raises:
        CommandRejected: With ``level=None`` if fewer than two units match, or
            the selection mixes archetypes or includes non-idle units.
    """

    wanted = set(unit_ids)
    targets = [unit for unit in state.units if unit.id in wanted]
    if len(targets) < 2:
        raise CommandRejected("merge needs at least two units", level=None)
    if any(unit.type != targets[0].type for unit in targets):
        raise CommandRejected("merge needs units of a single type", level=None)
    if any(unit.status != UnitStatus.IDLE for unit in targets):
        raise CommandRejected("merge needs idle units", level=None)

    primary = targets[0]
    for unit in targets[1:]:
        if unit.count > primary.count:
            primary = unit

    total = sum(unit.count for unit in targets)
    merged = Unit(
        id=UnitID(state.allocate_id("unit")),
        type=primary.type,
        name=unit_name(primary.type, primary.quality, total),
        count=total,
        quality=primary.quality,
        status=UnitStatus.IDLE,
        training_days_left=0,
        power=primary.power,
        mobility=primary.mobility,
        range=primary.range,
        magic=primary.magic,
        morale=primary.morale,
        stamina=primary.stamina,
    )

    state.units = [unit for unit in state.units if unit.id not in wanted]
    state.units.append(merged)
    state.add_log(
        f"Merged {len(targets)} units into {merged.name} ({total} soldiers).",
        limit=rules.logs.max_entries,
    )
    return merged
