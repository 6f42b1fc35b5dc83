"""Daily tick orchestration for Frostwind Keep."""

from __future__ import annotations

from dataclasses import dataclass, field

from frostwind.domain import economy, events, missions, quests, tavern, training
from frostwind.domain.enums import LogLevel
from frostwind.domain.models import EventID, GameState, UnitID
from frostwind.domain.rules_config import DEFAULT_RULES, RulesConfig
from frostwind.utils.rng import RandomSource


@dataclass(slots=True)
class TickReport:
    """What happened while moving into ``day``."""

    day: int
    outcomes: list[missions.MissionOutcome] = field(default_factory=list)
    maintenance: int = 0
    income: int = 0
    units_ready: list[UnitID] = field(default_factory=list)
    event_id: EventID | None = None
    tavern_refreshed: bool = False


def run_daily_tick(
    state: GameState,
    rng: RandomSource,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> TickReport:
    """Advance the game by one day.

    Phases run in a fixed order: missions arriving on the day being entered
    are resolved, the treasury settles, training advances, the quest board is
    rerolled, an event may fire, the recruitment quota resets and the day
    counter moves on. A stale tavern pool is refreshed last.
    """

    outcomes = missions.resolve_arrived_missions(state, rng, as_of_day=state.day + 1, rules=rules)
    maintenance, income = economy.apply_daily_economy(state, rules=rules)
    ready = _advance_training(state, rules)
    quests.generate_daily_quests(state, rng, rules=rules)
    event = events.maybe_trigger_event(state, rng, rules=rules)

    state.recruited_today = 0
    state.day += 1

    refreshed = tavern.tavern_refresh_due(state, rules=rules)
    if refreshed:
        tavern.refresh_tavern(state, rng, rules=rules)

    return TickReport(
        day=state.day,
        outcomes=outcomes,
        maintenance=maintenance,
        income=income,
        units_ready=ready,
        event_id=event.id if event is not None else None,
        tavern_refreshed=refreshed,
    )


def _advance_training(state: GameState, rules: RulesConfig) -> list[UnitID]:
    ready = training.advance_training(state)
    for unit in ready:
        state.add_log(f"{unit.name} completed training.", LogLevel.SUCCESS, limit=rules.logs.max_entries)
    return [unit.id for unit in ready]
