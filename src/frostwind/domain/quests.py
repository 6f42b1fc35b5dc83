"""Quest board generation and campaign attack quests."""

from __future__ import annotations

import math

from frostwind.domain import stats
from frostwind.domain.catalog import DIFFICULTY_MULTIPLIERS, QUEST_TEMPLATES, QuestTemplate
from frostwind.domain.models import GameState, Quest, QuestID, Territory
from frostwind.domain.rules_config import DEFAULT_RULES, RulesConfig
from frostwind.utils.rng import RandomSource


def quest_from_template(
    template: QuestTemplate,
    quest_id: QuestID,
    required_power: int,
    *,
    keep_bias: bool = True,
) -> Quest:
    return Quest(
        id=quest_id,
        title=template.title,
        description=template.description,
        difficulty=template.difficulty,
        required_power=required_power,
        reward_gold=template.reward_gold,
        duration=template.duration,
        danger_level=template.danger_level,
        bias=template.bias if keep_bias else None,
    )


def initial_quests() -> list[Quest]:
    """The two contracts posted on the opening day."""

    return [
        quest_from_template(QUEST_TEMPLATES[0], QuestID("dq_init_1"), 500),
        quest_from_template(QUEST_TEMPLATES[3], QuestID("dq_init_2"), 300),
    ]


def campaign_quest(territory: Territory, *, rules: RulesConfig = DEFAULT_RULES) -> Quest:
    """Build the attack quest for a campaign territory."""

    return Quest(
        id=QuestID(f"cq_{territory.id}"),
        title=territory.name,
        description=territory.description,
        difficulty=territory.difficulty,
        required_power=territory.required_power,
        reward_gold=territory.reward_gold,
        duration=rules.missions.campaign_duration_days,
        danger_level=rules.missions.campaign_danger_level,
        bias=territory.combat_bias,
        is_campaign=True,
        territory_id=territory.id,
    )


def quest_count(soldiers: int, rules: RulesConfig = DEFAULT_RULES) -> int:
    """Number of daily quests; grows with the army and is clamped."""

    quests = rules.quests
    raw = soldiers // quests.soldiers_per_quest + quests.quest_offset
    return min(quests.max_quests, max(quests.min_quests, raw))


def generate_daily_quests(
    state: GameState,
    rng: RandomSource,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> list[Quest]:
    """Replace the quest board with freshly rolled contracts.

    Each quest clones a random template. Most lose their attribute bias so
    ordinary contracts stay approachable, and the required power scales with
    the template difficulty and the elapsed days, with some variance.
    """

    tuning = rules.quests
    growth = 1 + state.day / tuning.days_per_difficulty_step
    quests: list[Quest] = []
    for index in range(quest_count(stats.total_soldiers(state), rules)):
        template = rng.choice(QUEST_TEMPLATES)
        keep_bias = rng.random() < tuning.bias_retention_chance
        variance = rng.uniform(tuning.variance_min, tuning.variance_max)
        base_power = tuning.base_required_power * DIFFICULTY_MULTIPLIERS[template.difficulty] * growth
        quests.append(
            quest_from_template(
                template,
                QuestID(f"dq_{state.day}_{index}"),
                math.floor(base_power * variance),
                keep_bias=keep_bias,
            )
        )

    state.daily_quests = quests
    return quests
