"""The game engine: single owner of the Frostwind state.

Every command goes through :class:`GameEngine`. The rule functions in
:mod:`frostwind.domain` raise :class:`CommandRejected` before touching state,
and the engine turns those rejections into a player-facing log entry and a
rejected :class:`CommandResult`. Callers only ever see deep copies of the
state.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from frostwind.domain import (
    campaign,
    economy,
    events,
    missions,
    quests,
    recruitment,
    stats,
    tavern,
)
from frostwind.domain.enums import BuildingType, LogLevel, UnitType
from frostwind.domain.errors import CommandRejected
from frostwind.domain.models import (
    BattleResult,
    CommanderID,
    GameState,
    Quest,
    QuestID,
    TerritoryID,
    UnitID,
)
from frostwind.domain.rules_config import DEFAULT_RULES, RulesConfig
from frostwind.domain.stats import DerivedStats
from frostwind.domain.tick import TickReport, run_daily_tick
from frostwind.utils.rng import RandomSource, SeededRandom

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Welcome to Frostwind Keep, commander. Your fief awaits."


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of a command.

    ``subject_id`` is the identifier of the unit, mission or commander the
    command produced, or the new level for a building upgrade.
    """

    accepted: bool
    detail: str = ""
    subject_id: str | None = None


def new_game_state(
    rng: RandomSource,
    *,
    rules: RulesConfig = DEFAULT_RULES,
    debug_mode: bool = False,
) -> GameState:
    """Build the opening position of a new game."""

    state = GameState(
        gold=rules.economy.starting_gold,
        territories=campaign.initial_territories(),
        daily_quests=quests.initial_quests(),
        debug_mode=debug_mode,
    )
    state.add_log(WELCOME_MESSAGE, LogLevel.INFO, limit=rules.logs.max_entries)
    tavern.refresh_tavern(state, rng, rules=rules)
    return state


class GameEngine:
    """Owns a :class:`GameState` and exposes the command surface."""

    def __init__(
        self,
        *,
        rules: RulesConfig = DEFAULT_RULES,
        rng: RandomSource | None = None,
        seed: int | str | None = None,
        debug_mode: bool = False,
        state: GameState | None = None,
    ) -> None:
        self._rules = rules
        self._rng: RandomSource = rng if rng is not None else SeededRandom(seed)
        self._debug_mode = debug_mode
        if state is None:
            state = new_game_state(self._rng, rules=rules, debug_mode=debug_mode)
        elif not state.tavern_commanders:
            tavern.refresh_tavern(state, self._rng, rules=rules)
        self._state = state

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def rules(self) -> RulesConfig:
        return self._rules

    @property
    def state(self) -> GameState:
        """Deep copy of the current state; mutating it has no effect."""

        return copy.deepcopy(self._state)

    @property
    def stats(self) -> DerivedStats:
        return stats.summarize(self._state, self._rules)

    def find_quest(self, quest_id: QuestID) -> Quest:
        """Return a quest from the board, or the attack quest of a territory.

        Raises:
            KeyError: If no daily quest or territory carries the identifier.
        """

        for quest in self._state.daily_quests:
            if quest.id == quest_id:
                return quest
        prefix = "cq_"
        if quest_id.startswith(prefix):
            territory = campaign.get_territory(TerritoryID(quest_id[len(prefix):]))
            return quests.campaign_quest(territory, rules=self._rules)
        raise KeyError(f"unknown quest {quest_id}")

    def win_chance(self, quest: Quest | QuestID, unit_ids: Sequence[UnitID]) -> float:
        """Preview the win chance of the idle units among ``unit_ids``."""

        if not isinstance(quest, Quest):
            quest = self.find_quest(quest)
        return missions.preview_win_chance(self._state, quest, unit_ids, rules=self._rules)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def recruit(self, kind: UnitType, quantity: int) -> CommandResult:
        def action() -> str:
            unit = recruitment.recruit(self._state, kind, quantity, self._rng, rules=self._rules)
            return unit.id

        return self._execute("recruit", action)

    def merge_units(self, unit_ids: Sequence[UnitID]) -> CommandResult:
        return self._execute(
            "merge_units",
            lambda: recruitment.merge_units(self._state, unit_ids, rules=self._rules).id,
        )

    def deploy(
        self,
        quest_id: QuestID,
        unit_ids: Sequence[UnitID],
        win_chance: float | None = None,
    ) -> CommandResult:
        """Send units to a quest on the board.

        When ``win_chance`` is omitted it is computed from the selection.

        Raises:
            KeyError: If the quest is not on the board.
        """

        quest = next((quest for quest in self._state.daily_quests if quest.id == quest_id), None)
        if quest is None:
            raise KeyError(f"unknown quest {quest_id}")
        return self._execute("deploy", lambda: self._send(quest, unit_ids, win_chance))

    def attack_territory(
        self,
        territory_id: TerritoryID,
        unit_ids: Sequence[UnitID],
        win_chance: float | None = None,
    ) -> CommandResult:
        """Launch a campaign attack on an available territory.

        Raises:
            KeyError: If the territory is not on the campaign map.
        """

        territory = campaign.get_territory(territory_id)
        quest = quests.campaign_quest(territory, rules=self._rules)

        def action() -> str:
            campaign.ensure_attackable(self._state, territory_id)
            return self._send(quest, unit_ids, win_chance)

        return self._execute("attack_territory", action)

    def upgrade_building(self, kind: BuildingType) -> CommandResult:
        return self._execute(
            "upgrade_building",
            lambda: str(economy.upgrade_building(self._state, kind, rules=self._rules)),
        )

    def hire_commander(self, commander_id: CommanderID) -> CommandResult:
        return self._execute(
            "hire_commander",
            lambda: tavern.hire_commander(self._state, commander_id, rules=self._rules).id,
        )

    def refresh_tavern(self) -> CommandResult:
        def action() -> str | None:
            tavern.refresh_tavern(self._state, self._rng, rules=self._rules)
            return None

        return self._execute("refresh_tavern", action)

    def choose_event(self, choice_index: int) -> CommandResult:
        def action() -> str | None:
            event_id = self._state.current_event.id if self._state.current_event else None
            events.choose_event(self._state, choice_index, rules=self._rules)
            return event_id

        return self._execute("choose_event", action)

    def acknowledge_battle_result(self) -> BattleResult | None:
        """Dismiss and return the latest battle result, if any."""

        result = self._state.last_battle_result
        self._state.last_battle_result = None
        return result

    def advance_day(self) -> TickReport:
        report = run_daily_tick(self._state, self._rng, rules=self._rules)
        logger.info(
            "advanced to day %s: %s missions resolved, income %s, maintenance %s",
            report.day,
            len(report.outcomes),
            report.income,
            report.maintenance,
        )
        return report

    # ------------------------------------------------------------------
    # Debug overrides
    # ------------------------------------------------------------------

    def set_gold(self, amount: int) -> CommandResult:
        self._state.gold = amount
        self._state.add_log(
            f"Treasury set to {amount} gold.", LogLevel.WARNING, limit=self._rules.logs.max_entries
        )
        return CommandResult(accepted=True, detail=f"gold={amount}")

    def set_population_cap_modifier(self, amount: int) -> CommandResult:
        self._state.population_cap_modifier = amount
        return CommandResult(accepted=True, detail=f"population_cap_modifier={amount}")

    def reset_game(self) -> CommandResult:
        logger.info("resetting game")
        self._state = new_game_state(self._rng, rules=self._rules, debug_mode=self._debug_mode)
        return CommandResult(accepted=True, detail="reset")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _send(self, quest: Quest, unit_ids: Sequence[UnitID], win_chance: float | None) -> str:
        if win_chance is None:
            win_chance = missions.preview_win_chance(self._state, quest, unit_ids, rules=self._rules)
        mission = missions.deploy(self._state, quest, unit_ids, win_chance, rules=self._rules)
        return mission.id

    def _execute(self, name: str, action: Callable[[], str | None]) -> CommandResult:
        logger.debug("executing %s", name)
        try:
            subject_id = action()
        except CommandRejected as exc:
            logger.info("%s rejected: %s", name, exc)
            if exc.level is not None:
                self._state.add_log(str(exc), exc.level, limit=self._rules.logs.max_entries)
            return CommandResult(accepted=False, detail=str(exc))
        return CommandResult(accepted=True, subject_id=subject_id)
