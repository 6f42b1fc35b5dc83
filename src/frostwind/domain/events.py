"""Random encounters and their branching choices.

Each event lists its choices for display, and a parallel effect table maps
``(event id, choice index)`` to a typed :class:`EventEffect`. The two tables
are checked against each other when the module loads.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from frostwind.domain import stats
from frostwind.domain.enums import LogLevel, SoldierQuality, UnitStatus, UnitType
from frostwind.domain.errors import CommandRejected
from frostwind.domain.models import EventChoice, EventID, GameEvent, GameState, Unit, UnitID
from frostwind.domain.rules_config import DEFAULT_RULES, RulesConfig
from frostwind.utils.rng import RandomSource


@dataclass(frozen=True, slots=True)
class UnitGrant:
    """A ready-made unit handed over by an event."""

    type: UnitType
    name: str
    count: int
    quality: SoldierQuality = SoldierQuality.ROOKIE
    training_days: int = 3
    power: int = 0
    mobility: int = 0
    range: int = 0
    magic: int = 0
    morale: int = 80
    stamina: int = 80


@dataclass(frozen=True, slots=True)
class EventEffect:
    gold: int = 0
    reputation: int = 0
    grant: UnitGrant | None = None
    message: str | None = None


RANDOM_EVENTS: tuple[GameEvent, ...] = (
    GameEvent(
        id=EventID("evt_refugees"),
        title="Refugee Column",
        description=(
            "Refugees fleeing the fighting gather outside the keep and beg for shelter. "
            "They are poor, but some of them could bear arms."
        ),
        choices=(
            EventChoice("Take them in", "Population +20, gold -200, reputation +10"),
            EventChoice("Turn them away", "Reputation -10"),
        ),
    ),
    GameEvent(
        id=EventID("evt_merchant"),
        title="Black Market Trader",
        description="A shady trader offers your troops some 'special' supplies in these troubled times.",
        choices=(
            EventChoice("Buy military supplies", "Gold -1000, reputation +50"),
            EventChoice("Demand protection money", "Gold +500, reputation -20"),
            EventChoice("Send him away", "Nothing happens"),
        ),
    ),
    GameEvent(
        id=EventID("evt_festival"),
        title="Harvest Festival",
        description="Despite the war, nearby villagers want a small festival to pray for peace.",
        choices=(
            EventChoice("Sponsor the festival", "Gold -500, reputation +30"),
            EventChoice("Forbid gatherings", "Reputation -10"),
        ),
    ),
)

EVENT_EFFECTS: Mapping[EventID, tuple[EventEffect, ...]] = MappingProxyType(
    {
        EventID("evt_refugees"): (
            EventEffect(
                gold=-200,
                reputation=10,
                grant=UnitGrant(
                    type=UnitType.INFANTRY,
                    name="Refugee Militia",
                    count=20,
                    power=5,
                    mobility=5,
                ),
                message="The refugees joined our ranks.",
            ),
            EventEffect(reputation=-10),
        ),
        EventID("evt_merchant"): (
            EventEffect(gold=-1000, reputation=50),
            EventEffect(gold=500, reputation=-20),
            EventEffect(),
        ),
        EventID("evt_festival"): (
            EventEffect(gold=-500, reputation=30),
            EventEffect(reputation=-10),
        ),
    }
)


def validate_event_table(
    events: tuple[GameEvent, ...],
    effects: Mapping[EventID, tuple[EventEffect, ...]],
) -> None:
    """Ensure every event has exactly one effect per choice.

    Raises:
        ValueError: On a missing, surplus or mismatched effect table entry.
    """

    seen: set[EventID] = set()
    for event in events:
        if event.id in seen:
            raise ValueError(f"duplicate event id: {event.id}")
        seen.add(event.id)
        if not event.choices:
            raise ValueError(f"event {event.id} has no choices")
        table = effects.get(event.id)
        if table is None:
            raise ValueError(f"event {event.id} has no effect table")
        if len(table) != len(event.choices):
            raise ValueError(
                f"event {event.id} has {len(event.choices)} choices but {len(table)} effects"
            )
    surplus = set(effects) - seen
    if surplus:
        raise ValueError(f"effects defined for unknown events: {sorted(surplus)}")


validate_event_table(RANDOM_EVENTS, EVENT_EFFECTS)


def maybe_trigger_event(
    state: GameState,
    rng: RandomSource,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> GameEvent | None:
    """Possibly draw a new event; never while one is still pending."""

    if state.current_event is not None:
        return None
    if rng.random() >= rules.events.daily_chance:
        return None
    event = rng.choice(RANDOM_EVENTS)
    state.current_event = event
    state.add_log(f"Event: {event.title}", LogLevel.WARNING, limit=rules.logs.max_entries)
    return event


def _granted_unit(state: GameState, grant: UnitGrant, count: int) -> Unit:
    return Unit(
        id=UnitID(state.allocate_id("unit")),
        type=grant.type,
        name=grant.name,
        count=count,
        quality=grant.quality,
        status=UnitStatus.TRAINING if grant.training_days > 0 else UnitStatus.IDLE,
        training_days_left=grant.training_days,
        power=grant.power,
        mobility=grant.mobility,
        range=grant.range,
        magic=grant.magic,
        morale=grant.morale,
        stamina=grant.stamina,
    )


def choose_event(
    state: GameState,
    choice_index: int,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> EventEffect:
    """Apply the chosen option of the pending event and clear it.

    A granted unit is trimmed to the free room under the population cap and
    dropped when there is none.

    Raises:
        CommandRejected: If no event is pending (silently) or the index does
            not name a choice.
    """

    event = state.current_event
    if event is None:
        raise CommandRejected("no event pending", level=None)
    if not 0 <= choice_index < len(event.choices):
        raise CommandRejected(f"{event.title} has no choice {choice_index}.")

    effect = EVENT_EFFECTS[event.id][choice_index]
    state.gold += effect.gold
    state.reputation += effect.reputation
    granted = 0
    if effect.grant is not None:
        room = stats.max_population(state, rules=rules) - stats.total_soldiers(state)
        granted = min(effect.grant.count, max(room, 0))
        if granted > 0:
            state.units.append(_granted_unit(state, effect.grant, granted))
    state.current_event = None

    choice = event.choices[choice_index]
    state.add_log(
        effect.message or f"{event.title}: {choice.text}.",
        LogLevel.SUCCESS if granted > 0 else LogLevel.INFO,
        limit=rules.logs.max_entries,
    )
    if effect.grant is not None and granted < effect.grant.count:
        state.add_log(
            f"Only room for {granted} of {effect.grant.count} {effect.grant.name}; "
            "the rest moved on.",
            LogLevel.WARNING,
            limit=rules.logs.max_entries,
        )
    return effect
