"""Tests for quest board generation."""

from __future__ import annotations

import pytest

from frostwind.domain import quests
from frostwind.domain.catalog import QUEST_TEMPLATES, TERRITORIES
from frostwind.domain.enums import Difficulty
from support import ScriptedRandom, make_state, make_unit


@pytest.mark.parametrize(
    ("soldiers", "expected"),
    [(0, 3), (49, 3), (50, 3), (100, 4), (400, 10), (10_000, 10)],
)
def test_quest_count_scales_and_clamps(soldiers, expected):
    assert quests.quest_count(soldiers) == expected


def test_initial_quests():
    opening = quests.initial_quests()
    assert [quest.id for quest in opening] == ["dq_init_1", "dq_init_2"]
    assert [quest.required_power for quest in opening] == [500, 300]
    assert opening[0].title == QUEST_TEMPLATES[0].title
    assert opening[1].bias == QUEST_TEMPLATES[3].bias


def test_generated_quests_scale_with_day_and_difficulty():
    state = make_state()
    state.day = 100
    rng = ScriptedRandom(
        choices=[0, 1, 6],
        randoms=[0.1, 0.5, 0.5],
        uniforms=[1.0, 1.0, 1.0],
    )

    board = quests.generate_daily_quests(state, rng)

    assert state.daily_quests == board
    assert [quest.id for quest in board] == ["dq_100_0", "dq_100_1", "dq_100_2"]
    # base 300 x difficulty multiplier x (1 + 100/100)
    assert [quest.required_power for quest in board] == [600, 1200, 2400]
    assert [quest.difficulty for quest in board] == [Difficulty.E, Difficulty.D, Difficulty.B]
    assert board[0].bias == QUEST_TEMPLATES[0].bias
    assert board[1].bias is None
    assert board[2].bias is None
    assert rng.calls[:3] == ["choice", "random", "uniform"]


def test_board_size_follows_army_size():
    state = make_state(make_unit(count=250))
    assert len(quests.generate_daily_quests(state, ScriptedRandom())) == 7


def test_campaign_quest_mirrors_territory():
    territory = TERRITORIES["t_forest"]
    quest = quests.campaign_quest(territory)

    assert quest.id == "cq_t_forest"
    assert quest.is_campaign
    assert quest.territory_id == "t_forest"
    assert quest.required_power == territory.required_power
    assert quest.reward_gold == territory.reward_gold
    assert quest.bias == territory.combat_bias
    assert quest.duration == 1
    assert quest.danger_level == 3
