"""HTTP routes for the Frostwind API."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from frostwind.api.runtime import ApiState, GameSession
from frostwind.domain import models as dm
from frostwind.domain.enums import BuildingType, UnitType
from frostwind.engine import CommandResult

router = APIRouter()


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]


def require_debug(state: ApiStateDep) -> ApiState:
    if not state.settings.debug_mode:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="debug mode disabled")
    return state


DebugStateDep = Annotated[ApiState, Depends(require_debug)]


class CommandResponse(BaseModel):
    accepted: bool
    detail: str = ""
    subject_id: str | None = None

    @classmethod
    def from_result(cls, result: CommandResult) -> CommandResponse:
        return cls(accepted=result.accepted, detail=result.detail, subject_id=result.subject_id)


class RecruitRequest(BaseModel):
    kind: UnitType
    quantity: int = Field(ge=1)


class AdvanceRequest(BaseModel):
    days: int = Field(default=1, ge=1, le=30)


class AdvanceResponse(BaseModel):
    day: int
    ticks: list[dict[str, Any]]


class SelectionRequest(BaseModel):
    unit_ids: list[str] = Field(min_length=1)


class DeployRequest(SelectionRequest):
    win_chance: float | None = Field(default=None, ge=0.0, le=1.0)


class WinChanceResponse(BaseModel):
    quest_id: str
    win_chance: float


class MergeRequest(BaseModel):
    unit_ids: list[str] = Field(min_length=2)


class EventChoiceRequest(BaseModel):
    choice_index: int


class AmountRequest(BaseModel):
    amount: int


def _unit_ids(raw: list[str]) -> list[dm.UnitID]:
    return [dm.UnitID(unit_id) for unit_id in raw]


@router.get("/health")
async def health(state: ApiStateDep) -> dict[str, object]:
    return {
        "status": "ok",
        "day": state.session.engine.state.day,
        "debug_mode": state.settings.debug_mode,
    }


@router.get("/state")
async def get_game_state(state: ApiStateDep) -> dict[str, Any]:
    return state.session.state_dict()


@router.get("/stats")
async def get_stats(state: ApiStateDep) -> dict[str, Any]:
    return state.session.stats_dict()


@router.post("/advance", response_model=AdvanceResponse)
async def advance_day(request: AdvanceRequest, state: ApiStateDep) -> AdvanceResponse:
    reports = await state.session.advance(request.days)
    return AdvanceResponse(
        day=reports[-1].day,
        ticks=[GameSession.tick_dict(report) for report in reports],
    )


@router.post("/recruit", response_model=CommandResponse)
async def recruit(request: RecruitRequest, state: ApiStateDep) -> CommandResponse:
    result = await state.session.run(lambda engine: engine.recruit(request.kind, request.quantity))
    return CommandResponse.from_result(result)


@router.post("/units/merge", response_model=CommandResponse)
async def merge_units(request: MergeRequest, state: ApiStateDep) -> CommandResponse:
    unit_ids = _unit_ids(request.unit_ids)
    result = await state.session.run(lambda engine: engine.merge_units(unit_ids))
    return CommandResponse.from_result(result)


@router.post("/quests/{quest_id}/win-chance", response_model=WinChanceResponse)
async def preview_win_chance(
    quest_id: str,
    request: SelectionRequest,
    state: ApiStateDep,
) -> WinChanceResponse:
    unit_ids = _unit_ids(request.unit_ids)
    try:
        chance = await state.session.run(
            lambda engine: engine.win_chance(dm.QuestID(quest_id), unit_ids)
        )
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="quest not found") from exc
    return WinChanceResponse(quest_id=quest_id, win_chance=chance)


@router.post("/quests/{quest_id}/deploy", response_model=CommandResponse)
async def deploy(quest_id: str, request: DeployRequest, state: ApiStateDep) -> CommandResponse:
    unit_ids = _unit_ids(request.unit_ids)
    try:
        result = await state.session.run(
            lambda engine: engine.deploy(dm.QuestID(quest_id), unit_ids, request.win_chance)
        )
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="quest not found") from exc
    return CommandResponse.from_result(result)


@router.post("/territories/{territory_id}/attack", response_model=CommandResponse)
async def attack_territory(
    territory_id: str,
    request: DeployRequest,
    state: ApiStateDep,
) -> CommandResponse:
    unit_ids = _unit_ids(request.unit_ids)
    try:
        result = await state.session.run(
            lambda engine: engine.attack_territory(
                dm.TerritoryID(territory_id), unit_ids, request.win_chance
            )
        )
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="territory not found"
        ) from exc
    return CommandResponse.from_result(result)


@router.post("/buildings/{kind}/upgrade", response_model=CommandResponse)
async def upgrade_building(kind: BuildingType, state: ApiStateDep) -> CommandResponse:
    result = await state.session.run(lambda engine: engine.upgrade_building(kind))
    return CommandResponse.from_result(result)


@router.post("/tavern/refresh", response_model=CommandResponse)
async def refresh_tavern(state: ApiStateDep) -> CommandResponse:
    result = await state.session.run(lambda engine: engine.refresh_tavern())
    return CommandResponse.from_result(result)


@router.post("/tavern/{commander_id}/hire", response_model=CommandResponse)
async def hire_commander(commander_id: str, state: ApiStateDep) -> CommandResponse:
    result = await state.session.run(
        lambda engine: engine.hire_commander(dm.CommanderID(commander_id))
    )
    return CommandResponse.from_result(result)


@router.post("/event/choose", response_model=CommandResponse)
async def choose_event(request: EventChoiceRequest, state: ApiStateDep) -> CommandResponse:
    result = await state.session.run(lambda engine: engine.choose_event(request.choice_index))
    return CommandResponse.from_result(result)


@router.post("/battle/acknowledge")
async def acknowledge_battle_result(state: ApiStateDep) -> dict[str, Any] | None:
    result = await state.session.run(lambda engine: engine.acknowledge_battle_result())
    return GameSession.battle_dict(result)


@router.post("/debug/gold", response_model=CommandResponse)
async def set_gold(request: AmountRequest, state: DebugStateDep) -> CommandResponse:
    result = await state.session.run(lambda engine: engine.set_gold(request.amount))
    return CommandResponse.from_result(result)


@router.post("/debug/population-cap", response_model=CommandResponse)
async def set_population_cap_modifier(
    request: AmountRequest, state: DebugStateDep
) -> CommandResponse:
    result = await state.session.run(
        lambda engine: engine.set_population_cap_modifier(request.amount)
    )
    return CommandResponse.from_result(result)


@router.post("/debug/reset", response_model=CommandResponse)
async def reset_game(state: DebugStateDep) -> CommandResponse:
    result = await state.session.run(lambda engine: engine.reset_game())
    return CommandResponse.from_result(result)
