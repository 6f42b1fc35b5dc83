"""Declarative rule configuration for the Frostwind domain."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EconomyRules:
    """Starting treasury and building/territory yields."""

    starting_gold: int = 10_000
    market_income_per_level: int = 150


@dataclass(frozen=True, slots=True)
class PopulationRules:
    """Population cap contributions."""

    base_cap: int = 200
    barracks_bonus_per_level: int = 100
    command_multiplier: int = 10


@dataclass(frozen=True, slots=True)
class RecruitmentRules:
    """Daily quota, quality thresholds and training length."""

    daily_recruit_fraction: float = 0.1
    training_days: int = 3
    veteran_threshold: float = 0.70
    elite_threshold: float = 0.95
    starting_morale: int = 100
    starting_stamina: int = 100


@dataclass(frozen=True, slots=True)
class CombatRules:
    """Army strength modifiers and win-chance model."""

    training_penalty: float = 0.6
    valor_power_bonus: float = 0.05
    base_win_chance: float = 0.3
    power_ratio_weight: float = 0.4
    min_base_chance: float = 0.05
    max_base_chance: float = 0.95
    max_win_chance: float = 0.99
    bias_threshold: float = 1.0
    absent_attribute_penalty: float = 0.5
    weak_attribute_penalty: float = 0.8
    weak_attribute_ratio: float = 0.2
    strong_attribute_bonus: float = 0.10


@dataclass(frozen=True, slots=True)
class MissionRules:
    """Casualty and reward parameters applied on mission resolution."""

    victory_loss_fraction: float = 0.05
    defeat_loss_fraction: float = 0.15
    hospital_reduction_per_level: float = 0.01
    min_loss_fraction: float = 0.01
    loss_jitter_min: float = 0.5
    loss_jitter_max: float = 1.5
    reputation_per_danger: int = 10
    campaign_duration_days: int = 1
    campaign_danger_level: int = 3


@dataclass(frozen=True, slots=True)
class QuestRules:
    """Daily quest board generation."""

    min_quests: int = 3
    max_quests: int = 10
    soldiers_per_quest: int = 50
    quest_offset: int = 2
    bias_retention_chance: float = 0.2
    base_required_power: int = 300
    days_per_difficulty_step: int = 100
    variance_min: float = 0.8
    variance_max: float = 1.2


@dataclass(frozen=True, slots=True)
class TavernRules:
    """Commander lottery tuning."""

    pool_size: int = 3
    refresh_days: int = 3
    base_cost: int = 1000


@dataclass(frozen=True, slots=True)
class EventRules:
    """Random encounter frequency."""

    daily_chance: float = 0.15


@dataclass(frozen=True, slots=True)
class LogRules:
    """Player-facing log retention."""

    max_entries: int = 50


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    economy: EconomyRules = EconomyRules()
    population: PopulationRules = PopulationRules()
    recruitment: RecruitmentRules = RecruitmentRules()
    combat: CombatRules = CombatRules()
    missions: MissionRules = MissionRules()
    quests: QuestRules = QuestRules()
    tavern: TavernRules = TavernRules()
    events: EventRules = EventRules()
    logs: LogRules = LogRules()


DEFAULT_RULES = RulesConfig()
