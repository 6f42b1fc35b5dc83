"""Tests for the game engine command surface."""

from __future__ import annotations

import pytest

from frostwind.domain import models as dm
from frostwind.domain import quests
from frostwind.domain.enums import BuildingType, LogLevel, TerritoryStatus, UnitStatus, UnitType
from frostwind.engine import WELCOME_MESSAGE, GameEngine
from support import ScriptedRandom, make_state, make_unit


def _engine_with(*units: dm.Unit, gold: int = 10_000) -> GameEngine:
    state = make_state(*units, gold=gold)
    state.daily_quests = quests.initial_quests()
    state.territories = {
        dm.TerritoryID("t_start"): TerritoryStatus.AVAILABLE,
        dm.TerritoryID("t_village"): TerritoryStatus.LOCKED,
    }
    return GameEngine(rng=ScriptedRandom(), state=state)


def test_new_game_opening_position():
    engine = GameEngine(rng=ScriptedRandom())
    state = engine.state

    assert state.day == 1
    assert state.gold == 10_000
    assert [quest.id for quest in state.daily_quests] == ["dq_init_1", "dq_init_2"]
    assert state.territories[dm.TerritoryID("t_start")] == TerritoryStatus.AVAILABLE
    assert state.territories[dm.TerritoryID("t_village")] == TerritoryStatus.LOCKED
    assert len(state.tavern_commanders) == 3
    assert state.last_tavern_refresh_day == 1
    assert state.logs[0].message == WELCOME_MESSAGE


def test_state_is_a_snapshot():
    engine = GameEngine(rng=ScriptedRandom())
    snapshot = engine.state
    snapshot.gold = 0
    snapshot.units.append(make_unit())
    assert engine.state.gold == 10_000
    assert engine.state.units == []


def test_same_seed_replays_identically():
    def play(engine: GameEngine) -> dm.GameState:
        engine.recruit(UnitType.INFANTRY, 20)
        for _ in range(5):
            engine.advance_day()
        return engine.state

    assert play(GameEngine(seed=42)) == play(GameEngine(seed=42))


def test_recruit_then_train_scenario():
    engine = GameEngine(rng=ScriptedRandom())

    result = engine.recruit(UnitType.INFANTRY, 20)

    assert result.accepted
    unit = engine.state.find_unit(dm.UnitID(result.subject_id))
    assert unit is not None
    assert engine.state.gold == 9_000
    assert unit.status == UnitStatus.TRAINING
    assert unit.training_days_left == 3

    for _ in range(3):
        engine.advance_day()

    unit = engine.state.find_unit(dm.UnitID(result.subject_id))
    assert unit.status == UnitStatus.IDLE
    assert unit.training_days_left == 0


def test_rejected_command_logs_warning_and_changes_nothing():
    engine = GameEngine(rng=ScriptedRandom())
    engine.recruit(UnitType.INFANTRY, 20)
    before = engine.state

    result = engine.recruit(UnitType.INFANTRY, 1)

    after = engine.state
    assert not result.accepted
    assert "quota" in result.detail
    assert after.logs[0].level == LogLevel.WARNING
    assert after.gold == before.gold
    assert after.units == before.units
    assert after.recruited_today == 20


def test_silent_rejection_adds_no_log():
    engine = _engine_with(make_unit("unit_a"), make_unit("unit_b", kind=UnitType.SCOUT))
    logs_before = len(engine.state.logs)

    result = engine.merge_units([dm.UnitID("unit_a"), dm.UnitID("unit_b")])

    assert not result.accepted
    assert len(engine.state.logs) == logs_before


def test_merge_through_engine():
    engine = _engine_with(make_unit("unit_a", count=30), make_unit("unit_b", count=20))
    result = engine.merge_units([dm.UnitID("unit_a"), dm.UnitID("unit_b")])
    assert result.accepted
    (merged,) = engine.state.units
    assert merged.id == result.subject_id
    assert merged.count == 50


def test_deploy_computes_win_chance_when_omitted():
    engine = _engine_with(make_unit(count=50, power=10))
    quest_id = dm.QuestID("dq_init_2")

    preview = engine.win_chance(quest_id, [dm.UnitID("unit_a")])
    result = engine.deploy(quest_id, [dm.UnitID("unit_a")])

    assert result.accepted
    (mission,) = engine.state.active_missions
    assert mission.id == result.subject_id
    assert mission.win_chance == pytest.approx(preview)
    assert [quest.id for quest in engine.state.daily_quests] == ["dq_init_1"]


def test_deploying_a_deployed_unit_is_rejected():
    engine = _engine_with(make_unit())
    assert engine.deploy(dm.QuestID("dq_init_1"), [dm.UnitID("unit_a")], 0.5).accepted

    second = engine.deploy(dm.QuestID("dq_init_2"), [dm.UnitID("unit_a")], 0.5)

    assert not second.accepted
    assert len(engine.state.active_missions) == 1


def test_deploy_unknown_quest_raises():
    engine = _engine_with(make_unit())
    with pytest.raises(KeyError):
        engine.deploy(dm.QuestID("dq_nope"), [dm.UnitID("unit_a")])


def test_attack_territory_flow():
    engine = _engine_with(make_unit(count=100))

    locked = engine.attack_territory(dm.TerritoryID("t_village"), [dm.UnitID("unit_a")])
    assert not locked.accepted
    assert engine.state.logs[0].level == LogLevel.WARNING

    attack = engine.attack_territory(dm.TerritoryID("t_start"), [dm.UnitID("unit_a")], 1.0)
    assert attack.accepted
    (mission,) = engine.state.active_missions
    assert mission.quest.is_campaign
    assert mission.quest.territory_id == "t_start"

    engine.advance_day()

    state = engine.state
    assert state.territories[dm.TerritoryID("t_start")] == TerritoryStatus.OWNED
    assert state.territories[dm.TerritoryID("t_village")] == TerritoryStatus.AVAILABLE
    result = engine.acknowledge_battle_result()
    assert result is not None
    assert result.is_victory
    assert engine.acknowledge_battle_result() is None


def test_attack_unknown_territory_raises():
    engine = _engine_with(make_unit())
    with pytest.raises(KeyError):
        engine.attack_territory(dm.TerritoryID("t_atlantis"), [dm.UnitID("unit_a")])


def test_campaign_quest_preview_by_id():
    engine = _engine_with(make_unit(count=30))
    chance = engine.win_chance(dm.QuestID("cq_t_start"), [dm.UnitID("unit_a")])
    assert chance == pytest.approx(0.3 + 0.4)


def test_upgrade_and_hire():
    engine = GameEngine(rng=ScriptedRandom())

    upgrade = engine.upgrade_building(BuildingType.BARRACKS)
    assert upgrade.accepted
    assert upgrade.subject_id == "1"
    assert engine.stats.max_population == 300

    commander = engine.state.tavern_commanders[0]
    hire = engine.hire_commander(commander.id)
    assert hire.accepted
    assert engine.state.gold == 10_000 - 2_000 - commander.cost
    assert [c.id for c in engine.state.commanders] == [commander.id]


def test_refresh_tavern_replaces_pool():
    engine = GameEngine(rng=ScriptedRandom())
    before = {commander.id for commander in engine.state.tavern_commanders}
    assert engine.refresh_tavern().accepted
    after = {commander.id for commander in engine.state.tavern_commanders}
    assert before.isdisjoint(after)


def test_choose_event_without_event_is_a_no_op():
    engine = GameEngine(rng=ScriptedRandom())
    logs_before = engine.state.logs
    result = engine.choose_event(0)
    assert not result.accepted
    assert engine.state.logs == logs_before


def test_debug_overrides_and_reset():
    engine = GameEngine(rng=ScriptedRandom())

    assert engine.set_gold(123).accepted
    assert engine.state.gold == 123
    assert engine.set_population_cap_modifier(50).accepted
    assert engine.stats.max_population == 250

    engine.recruit(UnitType.INFANTRY, 2)
    engine.advance_day()
    assert engine.reset_game().accepted

    state = engine.state
    assert state.day == 1
    assert state.gold == 10_000
    assert state.units == []
    assert state.population_cap_modifier == 0


def test_loaded_state_never_reissues_an_existing_unit_id():
    engine = _engine_with(make_unit("unit_1", count=30), make_unit("unit_2", count=20))

    result = engine.recruit(UnitType.INFANTRY, 10)

    assert result.accepted
    assert result.subject_id not in {"unit_1", "unit_2"}
    ids = [unit.id for unit in engine.state.units]
    assert len(ids) == len(set(ids)) == 3


def test_hiring_the_whole_pool_leaves_the_tavern_empty_until_refresh_day():
    engine = GameEngine(seed=1)
    engine.set_gold(1_000_000)
    for commander in engine.state.tavern_commanders:
        assert engine.hire_commander(commander.id).accepted

    engine.advance_day()
    assert engine.state.tavern_commanders == []
    engine.advance_day()
    assert engine.state.tavern_commanders == []

    report = engine.advance_day()
    assert report.tavern_refreshed
    assert len(engine.state.tavern_commanders) == 3
    assert engine.state.last_tavern_refresh_day == 4
