"""Dataclasses describing every Frostwind game entity.

The engine owns a single :class:`GameState` aggregate. Everything reachable
from it is plain data; the rules live in the sibling modules and operate on
these types directly. Configuration entries (territories, events) are frozen,
state entries are mutable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NewType

from .enums import (
    BuildingType,
    CommanderRarity,
    Difficulty,
    LogLevel,
    SoldierQuality,
    TerritoryStatus,
    UnitStatus,
    UnitType,
)

# --- Strongly typed identifiers -------------------------------------------------

UnitID = NewType("UnitID", str)
CommanderID = NewType("CommanderID", str)
MissionID = NewType("MissionID", str)
QuestID = NewType("QuestID", str)
TerritoryID = NewType("TerritoryID", str)
EventID = NewType("EventID", str)
LogID = NewType("LogID", str)


# --- Value objects --------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class StatBias:
    """Attribute weighting a quest or territory applies to the win chance."""

    power: float | None = None
    mobility: float | None = None
    range: float | None = None
    magic: float | None = None


@dataclass(slots=True)
class StatBlock:
    """Aggregate combat attributes."""

    power: float = 0.0
    mobility: float = 0.0
    range: float = 0.0
    magic: float = 0.0


@dataclass(frozen=True, slots=True)
class CommanderStats:
    command: int
    valor: int
    strategy: int


# --- Core dataclasses -----------------------------------------------------------


@dataclass(slots=True)
class Unit:
    """A recruited body of soldiers of one archetype and quality."""

    id: UnitID
    type: UnitType
    name: str
    count: int
    quality: SoldierQuality
    status: UnitStatus
    training_days_left: int
    power: int
    mobility: int
    range: int
    magic: int
    # Tracked for display only; no rule reads these yet.
    morale: int = 100
    stamina: int = 100


@dataclass(frozen=True, slots=True)
class Commander:
    """Hireable or hired commander. Immutable once generated."""

    id: CommanderID
    name: str
    title: str
    rarity: CommanderRarity
    cost: int
    stats: CommanderStats
    level: int = 1
    description: str = ""


@dataclass(frozen=True, slots=True)
class Territory:
    """Campaign map node (configuration, not state)."""

    id: TerritoryID
    name: str
    description: str
    required_power: int
    difficulty: Difficulty
    reward_gold: int
    bonus_description: str
    unlocks: tuple[TerritoryID, ...] = ()
    passive_income: int = 0
    passive_pop_cap: int = 0
    combat_bias: StatBias | None = None


@dataclass(frozen=True, slots=True)
class Quest:
    """Attackable objective: a daily contract or a campaign territory."""

    id: QuestID
    title: str
    description: str
    difficulty: Difficulty
    required_power: int
    reward_gold: int
    duration: int
    danger_level: int
    bias: StatBias | None = None
    is_campaign: bool = False
    territory_id: TerritoryID | None = None


@dataclass(slots=True)
class ActiveMission:
    """Units in flight towards a quest objective."""

    id: MissionID
    quest: Quest
    deployed_unit_ids: list[UnitID]
    start_day: int
    arrival_day: int
    win_chance: float


@dataclass(frozen=True, slots=True)
class BattleLoss:
    unit_name: str
    count: int


@dataclass(frozen=True, slots=True)
class BattleResult:
    """Snapshot of the most recently resolved mission."""

    quest_title: str
    is_victory: bool
    reward_gold: int
    losses: tuple[BattleLoss, ...] = ()
    territory_unlocked: str | None = None


@dataclass(frozen=True, slots=True)
class EventChoice:
    text: str
    effect_description: str


@dataclass(frozen=True, slots=True)
class GameEvent:
    """Random encounter presented to the player."""

    id: EventID
    title: str
    description: str
    choices: tuple[EventChoice, ...]


@dataclass(frozen=True, slots=True)
class LogEntry:
    id: LogID
    day: int
    message: str
    level: LogLevel = LogLevel.INFO


# --- Root aggregate -------------------------------------------------------------


@dataclass(slots=True)
class GameState:
    """Root aggregate holding everything the engine mutates."""

    day: int = 1
    gold: int = 0
    reputation: int = 0
    units: list[Unit] = field(default_factory=list)
    commanders: list[Commander] = field(default_factory=list)
    tavern_commanders: list[Commander] = field(default_factory=list)
    buildings: dict[BuildingType, int] = field(
        default_factory=lambda: {kind: 0 for kind in BuildingType}
    )
    territories: dict[TerritoryID, TerritoryStatus] = field(default_factory=dict)
    active_missions: list[ActiveMission] = field(default_factory=list)
    daily_quests: list[Quest] = field(default_factory=list)
    current_event: GameEvent | None = None
    last_battle_result: BattleResult | None = None
    recruited_today: int = 0
    last_tavern_refresh_day: int = 0
    logs: list[LogEntry] = field(default_factory=list)
    completed_quests: int = 0
    population_cap_modifier: int = 0
    debug_mode: bool = False
    id_counter: int = 0

    def allocate_id(self, prefix: str) -> str:
        """Return a fresh identifier unique within this state.

        Identifiers already held by a unit, commander, mission or log entry
        are skipped, so a state assembled by hand or loaded with a stale
        counter never hands out a duplicate.
        """

        taken = self._ids_in_use()
        while True:
            self.id_counter += 1
            candidate = f"{prefix}_{self.id_counter}"
            if candidate not in taken:
                return candidate

    def _ids_in_use(self) -> set[str]:
        taken: set[str] = {unit.id for unit in self.units}
        taken.update(commander.id for commander in self.commanders)
        taken.update(commander.id for commander in self.tavern_commanders)
        taken.update(mission.id for mission in self.active_missions)
        taken.update(entry.id for entry in self.logs)
        return taken

    def add_log(self, message: str, level: LogLevel = LogLevel.INFO, *, limit: int = 50) -> LogEntry:
        """Prepend a log entry, keeping only the ``limit`` most recent."""

        entry = LogEntry(
            id=LogID(self.allocate_id("log")),
            day=self.day,
            message=message,
            level=level,
        )
        self.logs.insert(0, entry)
        del self.logs[limit:]
        return entry

    def find_unit(self, unit_id: UnitID) -> Unit | None:
        for unit in self.units:
            if unit.id == unit_id:
                return unit
        return None
