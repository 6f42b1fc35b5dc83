"""Static configuration tables consumed by the rules layer.

Everything here is immutable reference data: unit archetypes, quality and
rarity tiers, building costs, the campaign graph and the quest templates the
daily board is cloned from. The campaign graph is validated when the module
is imported so a malformed table fails fast instead of mid-game.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .enums import (
    BuildingType,
    CommanderRarity,
    Difficulty,
    SoldierQuality,
    UnitCategory,
    UnitType,
)
from .models import StatBias, Territory, TerritoryID


@dataclass(frozen=True, slots=True)
class UnitConfig:
    """Fixed template of a unit archetype."""

    type: UnitType
    category: UnitCategory
    name: str
    cost: int
    maintenance: int
    power: int
    mobility: int
    range: int
    magic: int
    description: str
    bonuses: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class QualityTier:
    multiplier: float
    label: str
    probability: float


@dataclass(frozen=True, slots=True)
class BuildingConfig:
    type: BuildingType
    name: str
    base_cost: int
    cost_multiplier: float
    description: str
    effect_description: str


@dataclass(frozen=True, slots=True)
class RarityTier:
    """Stat bounds, price and draw weight of a commander rarity."""

    min_stat: int
    max_stat: int
    cost_multiplier: int
    probability: float


@dataclass(frozen=True, slots=True)
class QuestTemplate:
    """Blueprint cloned by the daily quest generator."""

    title: str
    description: str
    difficulty: Difficulty
    reward_gold: int
    duration: int
    danger_level: int
    bias: StatBias | None = None


def _units(configs: Iterable[UnitConfig]) -> Mapping[UnitType, UnitConfig]:
    return MappingProxyType({config.type: config for config in configs})


UNIT_CONFIGS: Mapping[UnitType, UnitConfig] = _units(
    [
        UnitConfig(
            UnitType.INFANTRY, UnitCategory.BASIC, "Infantry", 50, 2, 10, 10, 0, 0,
            "Balanced line infantry.",
        ),
        UnitConfig(
            UnitType.ENGINEER, UnitCategory.SPECIAL, "Engineers", 120, 6, 11, 10, 0, 0,
            "Siege works and field fortifications.",
            ("Power +10%", "Siege efficiency +30%"),
        ),
        UnitConfig(
            UnitType.SCOUT, UnitCategory.SPECIAL, "Scouts", 100, 5, 8, 50, 5, 0,
            "Reconnaissance troops with outstanding mobility.",
            ("Mobility +50%", "Quest success +15%"),
        ),
        UnitConfig(
            UnitType.MEDIC, UnitCategory.SPECIAL, "Medics", 150, 7, 5, 10, 0, 5,
            "Battlefield surgeons that keep casualties down.",
            ("Casualties -50%", "Stamina recovery +100%"),
        ),
        UnitConfig(
            UnitType.CBRN, UnitCategory.SPECIAL, "Plague Wardens", 180, 8, 12, 10, 10, 0,
            "Specialists against plague and miasma monsters.",
            ("Debuff immunity", "Hazard damage +30%"),
        ),
        UnitConfig(
            UnitType.SPECIAL_FORCES, UnitCategory.SPECIAL, "Special Forces", 300, 15, 20, 20, 10, 0,
            "Elite operators for the hardest contracts.",
            ("All attributes +20%",),
        ),
        UnitConfig(
            UnitType.HEAVY_INFANTRY, UnitCategory.SPECIAL, "Heavy Infantry", 150, 8, 20, 8, 0, 0,
            "Armoured infantry that excels in a frontal clash.",
            ("Power +20%", "Mobility -20%", "Stamina cost +30%"),
        ),
        UnitConfig(
            UnitType.LIGHT_CAVALRY, UnitCategory.CAVALRY, "Light Cavalry", 200, 10, 12, 80, 0, 0,
            "Fast riders for scouting and harassment.",
            ("Mobility +80%", "Power +10%"),
        ),
        UnitConfig(
            UnitType.HEAVY_CAVALRY, UnitCategory.CAVALRY, "Heavy Cavalry", 350, 18, 25, 40, 0, 0,
            "Shock cavalry that breaks enemy lines.",
            ("Power +40%", "Mobility +40%", "Stamina cost +20%"),
        ),
        UnitConfig(
            UnitType.BEAST_CAVALRY, UnitCategory.CAVALRY, "Beast Riders", 500, 25, 30, 60, 0, 20,
            "Riders mounted on tamed monsters.",
            ("Power +50%", "Morale +30%", "Magic resistance +20%"),
        ),
        UnitConfig(
            UnitType.MUSKETEER, UnitCategory.RANGED, "Musketeers", 180, 9, 15, 10, 50, 0,
            "Firearm troops with strong penetration.",
            ("Range +50%", "Armour piercing +30%"),
        ),
        UnitConfig(
            UnitType.ARTILLERY, UnitCategory.RANGED, "Artillery", 400, 20, 40, 5, 80, 0,
            "Siege guns that flatten fortifications.",
            ("Range +80%", "Siege damage +100%", "Mobility -40%"),
        ),
        UnitConfig(
            UnitType.MAGE, UnitCategory.MAGIC, "Battle Mages", 450, 22, 25, 10, 30, 100,
            "Combat casters, the bane of monsters.",
            ("Magic +100%", "Versus monsters +50%", "Stamina cost +40%"),
        ),
    ]
)

QUALITY_TIERS: Mapping[SoldierQuality, QualityTier] = MappingProxyType(
    {
        SoldierQuality.ROOKIE: QualityTier(multiplier=1.0, label="Rookie", probability=0.70),
        SoldierQuality.VETERAN: QualityTier(multiplier=1.2, label="Veteran", probability=0.25),
        SoldierQuality.ELITE: QualityTier(multiplier=1.5, label="Elite", probability=0.05),
    }
)

BUILDING_CONFIGS: Mapping[BuildingType, BuildingConfig] = MappingProxyType(
    {
        BuildingType.BARRACKS: BuildingConfig(
            BuildingType.BARRACKS, "Barracks", 2000, 1.5,
            "Expand the barracks to house more soldiers.",
            "+100 population cap per level",
        ),
        BuildingType.MARKET: BuildingConfig(
            BuildingType.MARKET, "Market", 800, 1.6,
            "A thriving market brings steady taxes.",
            "+150 daily income per level",
        ),
        BuildingType.HOSPITAL: BuildingConfig(
            BuildingType.HOSPITAL, "Field Hospital", 1000, 1.8,
            "Timely treatment for the wounded.",
            "Mission casualties -1% per level",
        ),
        BuildingType.WALLS: BuildingConfig(
            BuildingType.WALLS, "Walls", 2000, 2.0,
            "Sturdy walls keep the keep safe.",
            "Improves retreat odds on failed missions",
        ),
    }
)

RARITY_ORDER: tuple[CommanderRarity, ...] = (
    CommanderRarity.N,
    CommanderRarity.R,
    CommanderRarity.SR,
    CommanderRarity.SSR,
)

RARITY_TIERS: Mapping[CommanderRarity, RarityTier] = MappingProxyType(
    {
        CommanderRarity.N: RarityTier(min_stat=1, max_stat=5, cost_multiplier=1, probability=0.50),
        CommanderRarity.R: RarityTier(min_stat=4, max_stat=10, cost_multiplier=3, probability=0.35),
        CommanderRarity.SR: RarityTier(min_stat=8, max_stat=18, cost_multiplier=8, probability=0.12),
        CommanderRarity.SSR: RarityTier(
            min_stat=15, max_stat=30, cost_multiplier=20, probability=0.03
        ),
    }
)

COMMANDER_TITLES: tuple[str, ...] = (
    "Ironwall", "Ranger", "Sage", "Berserker", "Guardian", "Vanguard",
    "Ember", "Dawn", "Shadow", "Glory", "Judgement",
)

COMMANDER_NAMES: tuple[str, ...] = (
    "Gareth", "Ayla", "Roland", "Siegfried", "Jeanne", "Arthur", "Lancelot",
    "Gawain", "Tristan", "Bedivere", "Kay", "Galahad", "Percival", "Bors",
    "Geraint", "Lamorak",
)

DIFFICULTY_MULTIPLIERS: Mapping[Difficulty, float] = MappingProxyType(
    {
        Difficulty.F: 0.5,
        Difficulty.E: 1.0,
        Difficulty.D: 2.0,
        Difficulty.C: 3.0,
        Difficulty.B: 4.0,
        Difficulty.A: 6.0,
        Difficulty.S: 10.0,
        Difficulty.SS: 20.0,
    }
)

# Upper headcount bound of each formation label; anything larger is an army.
SCALE_LABELS: tuple[tuple[int, str], ...] = (
    (20, "Squad"),
    (50, "Section"),
    (100, "Platoon"),
    (250, "Company"),
    (500, "Battalion"),
    (1000, "Regiment"),
    (2500, "Brigade"),
    (5000, "Division"),
    (10000, "Corps"),
)
LARGEST_SCALE_LABEL = "Army"

START_TERRITORY = TerritoryID("t_start")

CAMPAIGN_MAP: tuple[Territory, ...] = (
    Territory(
        id=TerritoryID("t_start"),
        name="Frostwind Outskirts",
        description="Clear the lesser monsters gathering around the keep.",
        required_power=300,
        difficulty=Difficulty.F,
        reward_gold=1000,
        bonus_description="Reputation unlocked, base taxes +50",
        unlocks=(TerritoryID("t_village"),),
        passive_income=50,
        combat_bias=StatBias(power=1.0),
    ),
    Territory(
        id=TerritoryID("t_village"),
        name="Dawnlight Village",
        description="A village held by orcs. Retaking it secures recruits and taxes.",
        required_power=1500,
        difficulty=Difficulty.D,
        reward_gold=3000,
        bonus_description="Daily taxes +200, population cap +50",
        unlocks=(TerritoryID("t_mine"), TerritoryID("t_forest")),
        passive_income=200,
        passive_pop_cap=50,
        combat_bias=StatBias(power=1.0),
    ),
    Territory(
        id=TerritoryID("t_mine"),
        name="Blackiron Mine",
        description="A strategic resource site. Narrow tunnels favour infantry.",
        required_power=4000,
        difficulty=Difficulty.C,
        reward_gold=5000,
        bonus_description="Daily taxes +500",
        unlocks=(TerritoryID("t_fort"),),
        passive_income=500,
        combat_bias=StatBias(power=1.2, mobility=0.5),
    ),
    Territory(
        id=TerritoryID("t_forest"),
        name="Whispering Forest",
        description="Elves and monsters mingle here. Fast troops win guerrilla fights.",
        required_power=3500,
        difficulty=Difficulty.C,
        reward_gold=4000,
        bonus_description="Population cap +30",
        passive_pop_cap=30,
        combat_bias=StatBias(mobility=2.0, range=1.5),
    ),
    Territory(
        id=TerritoryID("t_fort"),
        name="Windbreak Fortress",
        description="A hardened fortress. Only heavy firepower will crack it.",
        required_power=10000,
        difficulty=Difficulty.A,
        reward_gold=15000,
        bonus_description="Population cap +200",
        unlocks=(TerritoryID("t_capital"),),
        passive_pop_cap=200,
        combat_bias=StatBias(range=2.5, magic=1.5, mobility=0.2),
    ),
    Territory(
        id=TerritoryID("t_capital"),
        name="Ruins of the Old Capital",
        description="The final battle. Reclaim humanity's glory!",
        required_power=50000,
        difficulty=Difficulty.SS,
        reward_gold=100000,
        bonus_description="Campaign complete",
        passive_income=5000,
        combat_bias=StatBias(power=1.0, magic=1.0, range=1.0, mobility=1.0),
    ),
)

QUEST_TEMPLATES: tuple[QuestTemplate, ...] = (
    QuestTemplate(
        "Supply Escort",
        "Help a caravan through dangerous ground. Speed matters.",
        Difficulty.E, 800, 1, 2, StatBias(mobility=2.0),
    ),
    QuestTemplate(
        "Hold the Line",
        "Hold the outpost until reinforcements arrive. Heavy fire needed.",
        Difficulty.D, 1500, 1, 3, StatBias(range=1.5, power=1.2),
    ),
    QuestTemplate(
        "Dispel the Mist",
        "An eerie fog has crept into the forest. Mages must purge it.",
        Difficulty.C, 2500, 2, 3, StatBias(magic=2.5),
    ),
    QuestTemplate(
        "Bandit Sweep",
        "Clear out a nearby bandit camp. Conventional fighting.",
        Difficulty.E, 500, 1, 1, StatBias(power=1.0),
    ),
    QuestTemplate(
        "Night Reconnaissance",
        "Slip behind enemy lines and gather intelligence.",
        Difficulty.D, 1200, 1, 2, StatBias(mobility=2.5),
    ),
    QuestTemplate(
        "Siege Support",
        "Help allies storm a small fort. Ranged fire required.",
        Difficulty.C, 3000, 3, 4, StatBias(range=2.0),
    ),
    QuestTemplate(
        "Monster Hunt",
        "A powerful beast is rampaging. Magic is recommended.",
        Difficulty.B, 5000, 2, 5, StatBias(magic=2.0),
    ),
)


def territory_index(territories: Iterable[Territory] = CAMPAIGN_MAP) -> dict[TerritoryID, Territory]:
    """Return territories keyed by identifier."""

    return {territory.id: territory for territory in territories}


def validate_campaign_map(
    territories: Iterable[Territory],
    *,
    start: TerritoryID = START_TERRITORY,
) -> None:
    """Validate the campaign graph is a DAG rooted at ``start``.

    Raises:
        ValueError: On duplicate ids, dangling unlock references, a missing or
            non-root start node, or a cycle.
    """

    nodes: dict[TerritoryID, Territory] = {}
    for territory in territories:
        if territory.id in nodes:
            raise ValueError(f"duplicate territory id: {territory.id}")
        nodes[territory.id] = territory

    if start not in nodes:
        raise ValueError(f"start territory {start} not defined")

    unlocked_by: set[TerritoryID] = set()
    for territory in nodes.values():
        for target in territory.unlocks:
            if target not in nodes:
                raise ValueError(f"{territory.id} unlocks unknown territory {target}")
            unlocked_by.add(target)

    if start in unlocked_by:
        raise ValueError(f"start territory {start} must not be unlocked by another territory")

    # Kahn's algorithm; leftovers mean a cycle.
    indegree = {territory_id: 0 for territory_id in nodes}
    for territory in nodes.values():
        for target in territory.unlocks:
            indegree[target] += 1
    queue = [territory_id for territory_id, degree in indegree.items() if degree == 0]
    visited = 0
    while queue:
        current = queue.pop()
        visited += 1
        for target in nodes[current].unlocks:
            indegree[target] -= 1
            if indegree[target] == 0:
                queue.append(target)
    if visited != len(nodes):
        raise ValueError("campaign map contains an unlock cycle")


def scale_label(count: int) -> str:
    """Return the formation label for a headcount."""

    for upper_bound, label in SCALE_LABELS:
        if count <= upper_bound:
            return label
    return LARGEST_SCALE_LABEL


validate_campaign_map(CAMPAIGN_MAP)
TERRITORIES: Mapping[TerritoryID, Territory] = MappingProxyType(territory_index())
