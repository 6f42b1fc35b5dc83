"""Runtime primitives backing the Frostwind HTTP API."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import TypeAdapter

from frostwind.config import Settings, get_settings
from frostwind.domain import models as dm
from frostwind.domain.rules_config import DEFAULT_RULES, RulesConfig
from frostwind.domain.stats import DerivedStats
from frostwind.domain.tick import TickReport
from frostwind.engine import GameEngine

logger = logging.getLogger(__name__)

T = TypeVar("T")

STATE_ADAPTER: TypeAdapter[dm.GameState] = TypeAdapter(dm.GameState)
STATS_ADAPTER: TypeAdapter[DerivedStats] = TypeAdapter(DerivedStats)
BATTLE_ADAPTER: TypeAdapter[dm.BattleResult | None] = TypeAdapter(dm.BattleResult | None)


class GameSession:
    """Serialises access to a single :class:`GameEngine`.

    Commands run under one lock so a day advance never interleaves with a
    recruit or deploy issued by another request.
    """

    def __init__(self, engine: GameEngine) -> None:
        self.engine = engine
        self._lock = asyncio.Lock()

    async def run(self, action: Callable[[GameEngine], T]) -> T:
        async with self._lock:
            return action(self.engine)

    async def advance(self, days: int = 1) -> list[TickReport]:
        async with self._lock:
            reports = [self.engine.advance_day() for _ in range(days)]
        logger.info("advanced %s day(s), now on day %s", days, reports[-1].day if reports else "?")
        return reports

    def state_dict(self) -> dict[str, Any]:
        return STATE_ADAPTER.dump_python(self.engine.state, mode="json")

    def stats_dict(self) -> dict[str, Any]:
        return STATS_ADAPTER.dump_python(self.engine.stats, mode="json")

    @staticmethod
    def battle_dict(result: dm.BattleResult | None) -> dict[str, Any] | None:
        return BATTLE_ADAPTER.dump_python(result, mode="json")

    @staticmethod
    def tick_dict(report: TickReport) -> dict[str, Any]:
        return {
            "day": report.day,
            "maintenance": report.maintenance,
            "income": report.income,
            "units_ready": list(report.units_ready),
            "event_id": report.event_id,
            "tavern_refreshed": report.tavern_refreshed,
            "battles": [
                BATTLE_ADAPTER.dump_python(outcome.result, mode="json") for outcome in report.outcomes
            ],
        }


class ApiState:
    """Aggregated services shared by the FastAPI layer."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        rules: RulesConfig = DEFAULT_RULES,
        engine: GameEngine | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.rules = rules
        if engine is None:
            engine = GameEngine(
                rules=rules, seed=self.settings.seed, debug_mode=self.settings.debug_mode
            )
        self.session = GameSession(engine)

    async def shutdown(self) -> None:
        logger.info("shutting down on day %s", self.session.engine.state.day)


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()
