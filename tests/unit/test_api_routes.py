"""Integration tests for the FastAPI layer."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from frostwind.api.app import create_app
from frostwind.api.runtime import ApiState
from frostwind.config import Settings
from frostwind.engine import GameEngine
from support import ScriptedRandom


def _make_app(*, debug_mode: bool = True):
    def factory() -> ApiState:
        settings = Settings(seed=1, debug_mode=debug_mode)
        engine = GameEngine(rng=ScriptedRandom(), debug_mode=debug_mode)
        return ApiState(settings=settings, engine=engine)

    app = create_app(state_factory=factory)
    transport = ASGITransport(app=app)
    return app, transport


@pytest.mark.asyncio
async def test_game_loop_via_api():
    app, transport = _make_app()

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "day": 1, "debug_mode": True}

        response = await client.post("/recruit", json={"kind": "Infantry", "quantity": 20})
        assert response.status_code == 200
        recruited = response.json()
        assert recruited["accepted"] is True
        unit_id = recruited["subject_id"]

        response = await client.post("/recruit", json={"kind": "Infantry", "quantity": 1})
        assert response.status_code == 200
        assert response.json()["accepted"] is False

        response = await client.post("/recruit", json={"kind": "Infantry", "quantity": 0})
        assert response.status_code == 422

        response = await client.post(
            "/quests/dq_init_2/win-chance", json={"unit_ids": [unit_id]}
        )
        assert response.status_code == 200
        assert response.json()["win_chance"] == 0.0

        response = await client.post("/advance", json={"days": 3})
        assert response.status_code == 200
        advanced = response.json()
        assert advanced["day"] == 4
        assert len(advanced["ticks"]) == 3
        assert advanced["ticks"][-1]["units_ready"] == [unit_id]

        response = await client.get("/state")
        payload = response.json()
        assert payload["gold"] == 9_000 - 3 * 40
        (unit,) = payload["units"]
        assert unit["status"] == "Idle"

        response = await client.post("/quests/dq_missing/deploy", json={"unit_ids": [unit_id]})
        assert response.status_code == 404

        response = await client.post(
            "/territories/t_nowhere/attack", json={"unit_ids": [unit_id]}
        )
        assert response.status_code == 404

        response = await client.post(
            "/territories/t_start/attack", json={"unit_ids": [unit_id], "win_chance": 1.0}
        )
        assert response.status_code == 200
        assert response.json()["accepted"] is True

        response = await client.post("/advance", json={})
        battles = response.json()["ticks"][0]["battles"]
        assert len(battles) == 1
        assert battles[0]["is_victory"] is True

        response = await client.get("/state")
        territories = response.json()["territories"]
        assert territories["t_start"] == "Owned"
        assert territories["t_village"] == "Available"

        response = await client.post("/battle/acknowledge")
        assert response.status_code == 200
        assert response.json()["quest_title"] == "Frostwind Outskirts"
        response = await client.post("/battle/acknowledge")
        assert response.json() is None

        response = await client.get("/stats")
        stats = response.json()
        assert stats["daily_income"] == 50
        assert stats["total_soldiers"] < 20


@pytest.mark.asyncio
async def test_buildings_tavern_and_events_via_api():
    app, transport = _make_app()

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        response = await client.post("/buildings/Barracks/upgrade")
        assert response.json() == {"accepted": True, "detail": "", "subject_id": "1"}

        response = await client.post("/buildings/Castle/upgrade")
        assert response.status_code == 422

        response = await client.post("/tavern/refresh")
        assert response.json()["accepted"] is True

        state = (await client.get("/state")).json()
        commander_id = state["tavern_commanders"][0]["id"]
        response = await client.post(f"/tavern/{commander_id}/hire")
        assert response.json()["subject_id"] == commander_id

        response = await client.post("/tavern/cmd_missing/hire")
        assert response.status_code == 200
        assert response.json()["accepted"] is False

        response = await client.post("/event/choose", json={"choice_index": 0})
        assert response.json()["accepted"] is False

        response = await client.post("/units/merge", json={"unit_ids": ["a"]})
        assert response.status_code == 422


@pytest.mark.asyncio
async def test_debug_overrides_via_api():
    app, transport = _make_app()

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        response = await client.post("/debug/gold", json={"amount": 5})
        assert response.json()["accepted"] is True
        assert (await client.get("/state")).json()["gold"] == 5

        response = await client.post("/debug/population-cap", json={"amount": 100})
        assert response.json()["accepted"] is True
        assert (await client.get("/stats")).json()["max_population"] == 300

        response = await client.post("/debug/reset")
        assert response.json()["accepted"] is True
        state = (await client.get("/state")).json()
        assert state["gold"] == 10_000
        assert state["population_cap_modifier"] == 0


@pytest.mark.asyncio
async def test_debug_endpoints_disabled_outside_debug_mode():
    app, transport = _make_app(debug_mode=False)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        response = await client.post("/debug/gold", json={"amount": 5})
        assert response.status_code == 403
        assert (await client.get("/state")).json()["gold"] == 10_000
