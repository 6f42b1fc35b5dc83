"""Enumerations and type aliases for the Frostwind domain."""

from __future__ import annotations

from enum import StrEnum


class UnitCategory(StrEnum):
    """Broad families the unit archetypes belong to."""

    BASIC = "basic"
    SPECIAL = "special"
    CAVALRY = "cavalry"
    RANGED = "ranged"
    MAGIC = "magic"


class UnitType(StrEnum):
    """Unit archetypes available at the recruitment office."""

    INFANTRY = "Infantry"
    ENGINEER = "Engineer"
    SCOUT = "Scout"
    MEDIC = "Medic"
    CBRN = "CBRN"
    SPECIAL_FORCES = "SpecialForces"
    HEAVY_INFANTRY = "HeavyInfantry"
    LIGHT_CAVALRY = "LightCavalry"
    HEAVY_CAVALRY = "HeavyCavalry"
    BEAST_CAVALRY = "BeastCavalry"
    MUSKETEER = "Musketeer"
    ARTILLERY = "Artillery"
    MAGE = "Mage"


class SoldierQuality(StrEnum):
    """Per-unit quality tier rolled at recruitment."""

    ROOKIE = "Rookie"
    VETERAN = "Veteran"
    ELITE = "Elite"


class UnitStatus(StrEnum):
    """Readiness pipeline states of a unit."""

    IDLE = "Idle"
    TRAINING = "Training"
    DEPLOYED = "Deployed"


class BuildingType(StrEnum):
    """Upgradable city buildings."""

    BARRACKS = "Barracks"
    MARKET = "Market"
    HOSPITAL = "Hospital"
    WALLS = "Walls"


class CommanderRarity(StrEnum):
    """Rarity tiers of tavern commanders, lowest first."""

    N = "N"
    R = "R"
    SR = "SR"
    SSR = "SSR"


class TerritoryStatus(StrEnum):
    """Campaign map progress of a territory."""

    LOCKED = "Locked"
    AVAILABLE = "Available"
    OWNED = "Owned"


class Difficulty(StrEnum):
    """Difficulty grades shared by territories and quests."""

    F = "F"
    E = "E"
    D = "D"
    C = "C"
    B = "B"
    A = "A"
    S = "S"
    SS = "SS"


class LogLevel(StrEnum):
    """Severity of a player-facing log entry."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"
