"""Mission deployment and resolution rules."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from frostwind.domain import campaign, stats
from frostwind.domain.enums import BuildingType, LogLevel, UnitStatus
from frostwind.domain.errors import CommandRejected
from frostwind.domain.models import (
    ActiveMission,
    BattleLoss,
    BattleResult,
    GameState,
    MissionID,
    Quest,
    StatBlock,
    TerritoryID,
    Unit,
    UnitID,
)
from frostwind.domain.rules_config import DEFAULT_RULES, RulesConfig
from frostwind.utils.rng import RandomSource

BIASED_ATTRIBUTES: tuple[str, ...] = ("mobility", "range", "magic")


@dataclass(slots=True)
class MissionOutcome:
    """Resolution details of a single mission."""

    mission: ActiveMission
    result: BattleResult
    removed_unit_ids: list[UnitID] = field(default_factory=list)
    opened_territories: list[TerritoryID] = field(default_factory=list)


def calculate_win_chance(
    selected: StatBlock,
    quest: Quest,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> float:
    """Probability that a selection of units wins a quest.

    The base chance grows with the power ratio and is clamped. Every attribute
    the quest weights above 1.0 then halves the chance when the selection has
    none of it, trims it when it is under a fifth of the power, and otherwise
    adds a flat bonus. The result is clamped once more at the end.

    Returns:
        A fraction in ``[0.05, 0.99]``, or ``0.0`` for a selection with no power.
    """

    combat = rules.combat
    if selected.power <= 0:
        return 0.0

    ratio = selected.power / max(quest.required_power, 1)
    chance = combat.base_win_chance + ratio * combat.power_ratio_weight
    chance = min(combat.max_base_chance, max(combat.min_base_chance, chance))

    if quest.bias is not None:
        for attribute in BIASED_ATTRIBUTES:
            weight = getattr(quest.bias, attribute)
            if weight is None or weight <= combat.bias_threshold:
                continue
            value = getattr(selected, attribute)
            if value == 0:
                chance *= combat.absent_attribute_penalty
            elif value < selected.power * combat.weak_attribute_ratio:
                chance *= combat.weak_attribute_penalty
            else:
                chance += combat.strong_attribute_bonus

    return max(combat.min_base_chance, min(combat.max_win_chance, chance))


def preview_win_chance(
    state: GameState,
    quest: Quest,
    unit_ids: Sequence[UnitID],
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> float:
    """Win chance for the idle units among ``unit_ids``."""

    return calculate_win_chance(stats.selected_stats(idle_units(state, unit_ids)), quest, rules=rules)


def idle_units(state: GameState, unit_ids: Sequence[UnitID]) -> list[Unit]:
    wanted = set(unit_ids)
    return [unit for unit in state.units if unit.id in wanted and unit.status == UnitStatus.IDLE]


def deploy(
    state: GameState,
    quest: Quest,
    unit_ids: Sequence[UnitID],
    win_chance: float,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> ActiveMission:
    """Send idle units towards a quest.

    Identifiers that do not name an idle unit are dropped, so a stale
    selection can never put a unit on two missions at once.

    Raises:
        CommandRejected: If no idle unit remains in the selection, or the
            win chance is not a probability.
    """

    if not 0.0 <= win_chance <= 1.0:
        raise CommandRejected(f"Win chance must be between 0 and 1, got {win_chance}.")

    units = idle_units(state, unit_ids)
    if not units:
        raise CommandRejected(f"No idle units selected for {quest.title}.")

    mission = ActiveMission(
        id=MissionID(state.allocate_id("mission")),
        quest=quest,
        deployed_unit_ids=[unit.id for unit in units],
        start_day=state.day,
        arrival_day=state.day + quest.duration,
        win_chance=win_chance,
    )
    for unit in units:
        unit.status = UnitStatus.DEPLOYED

    state.active_missions.append(mission)
    state.daily_quests = [existing for existing in state.daily_quests if existing.id != quest.id]
    state.add_log(
        f"Troops set out for {quest.title}, expected to arrive on day {mission.arrival_day}.",
        limit=rules.logs.max_entries,
    )
    return mission


def loss_fraction(
    is_victory: bool,
    hospital_level: int,
    rng: RandomSource,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> float:
    """Fraction of a unit lost in one engagement, jittered per unit."""

    tuning = rules.missions
    base = tuning.victory_loss_fraction if is_victory else tuning.defeat_loss_fraction
    base = max(tuning.min_loss_fraction, base - hospital_level * tuning.hospital_reduction_per_level)
    return base * rng.uniform(tuning.loss_jitter_min, tuning.loss_jitter_max)


def resolve_mission(
    state: GameState,
    mission: ActiveMission,
    rng: RandomSource,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> MissionOutcome:
    """Roll a mission's outcome and apply casualties and rewards."""

    is_victory = rng.random() < mission.win_chance
    hospital = state.buildings.get(BuildingType.HOSPITAL, 0)
    deployed = set(mission.deployed_unit_ids)

    losses: list[BattleLoss] = []
    for unit in state.units:
        if unit.id not in deployed:
            continue
        unit.status = UnitStatus.IDLE
        if unit.count <= 0:
            continue
        lost = math.ceil(unit.count * loss_fraction(is_victory, hospital, rng, rules=rules))
        lost = min(lost, unit.count)
        if lost > 0:
            losses.append(BattleLoss(unit_name=unit.name, count=lost))
            unit.count -= lost

    removed = [unit.id for unit in state.units if unit.count <= 0]
    state.units = [unit for unit in state.units if unit.count > 0]

    quest = mission.quest
    opened: list[TerritoryID] = []
    if is_victory:
        state.gold += quest.reward_gold
        state.reputation += quest.danger_level * rules.missions.reputation_per_danger
        state.completed_quests += 1
        if quest.is_campaign and quest.territory_id is not None:
            opened = campaign.conquer(state, quest.territory_id)

    result = BattleResult(
        quest_title=quest.title,
        is_victory=is_victory,
        reward_gold=quest.reward_gold if is_victory else 0,
        losses=tuple(losses),
        territory_unlocked=quest.title if is_victory and quest.is_campaign else None,
    )
    state.last_battle_result = result

    casualties = sum(loss.count for loss in losses)
    if is_victory:
        state.add_log(
            f"Victory at {quest.title}: +{quest.reward_gold} gold, {casualties} casualties.",
            LogLevel.SUCCESS,
            limit=rules.logs.max_entries,
        )
    else:
        state.add_log(
            f"Defeat at {quest.title}: {casualties} casualties.",
            LogLevel.DANGER,
            limit=rules.logs.max_entries,
        )
    return MissionOutcome(
        mission=mission,
        result=result,
        removed_unit_ids=removed,
        opened_territories=opened,
    )


def resolve_arrived_missions(
    state: GameState,
    rng: RandomSource,
    *,
    as_of_day: int,
    rules: RulesConfig = DEFAULT_RULES,
) -> list[MissionOutcome]:
    """Resolve every mission arriving on or before ``as_of_day``.

    Missions are resolved in deployment order; only the last result is kept
    as ``last_battle_result``.
    """

    arrived = [mission for mission in state.active_missions if mission.arrival_day <= as_of_day]
    state.active_missions = [
        mission for mission in state.active_missions if mission.arrival_day > as_of_day
    ]
    return [resolve_mission(state, mission, rng, rules=rules) for mission in arrived]
