"""Campaign map progression.

Territories form an unlock DAG rooted at a single start node. Only two
transitions exist: ``Available -> Owned`` through a victorious attack, and
``Locked -> Available`` when a newly owned neighbour lists the territory in
its unlocks. Owned territories never regress.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from frostwind.domain.catalog import CAMPAIGN_MAP, START_TERRITORY, TERRITORIES
from frostwind.domain.enums import TerritoryStatus
from frostwind.domain.errors import CommandRejected
from frostwind.domain.models import GameState, Territory, TerritoryID


def initial_territories(
    territories: Iterable[Territory] = CAMPAIGN_MAP,
    *,
    start: TerritoryID = START_TERRITORY,
) -> dict[TerritoryID, TerritoryStatus]:
    """Every territory locked except the start node."""

    statuses = {territory.id: TerritoryStatus.LOCKED for territory in territories}
    statuses[start] = TerritoryStatus.AVAILABLE
    return statuses


def get_territory(
    territory_id: TerritoryID,
    catalog: Mapping[TerritoryID, Territory] = TERRITORIES,
) -> Territory:
    """Look up a territory definition.

    Raises:
        KeyError: If the identifier is not part of the campaign map.
    """

    try:
        return catalog[territory_id]
    except KeyError:
        raise KeyError(f"unknown territory {territory_id}") from None


def territories_with_status(state: GameState, status: TerritoryStatus) -> list[TerritoryID]:
    return [territory_id for territory_id, current in state.territories.items() if current == status]


def available_territories(state: GameState) -> list[TerritoryID]:
    return territories_with_status(state, TerritoryStatus.AVAILABLE)


def owned_territories(state: GameState) -> list[TerritoryID]:
    return territories_with_status(state, TerritoryStatus.OWNED)


def ensure_attackable(state: GameState, territory_id: TerritoryID) -> Territory:
    """Return the territory if it can be attacked right now.

    Raises:
        KeyError: If the territory does not exist.
        CommandRejected: If the territory is locked, already owned, or
            already targeted by a mission in flight.
    """

    territory = get_territory(territory_id)
    status = state.territories.get(territory_id, TerritoryStatus.LOCKED)
    if status != TerritoryStatus.AVAILABLE:
        raise CommandRejected(f"{territory.name} cannot be attacked ({status}).")
    if any(mission.quest.territory_id == territory_id for mission in state.active_missions):
        raise CommandRejected(f"An attack on {territory.name} is already under way.")
    return territory


def conquer(
    state: GameState,
    territory_id: TerritoryID,
    catalog: Mapping[TerritoryID, Territory] = TERRITORIES,
) -> list[TerritoryID]:
    """Mark a territory owned and open up the locked territories it unlocks.

    Returns:
        Identifiers that flipped from ``Locked`` to ``Available``.
    """

    territory = get_territory(territory_id, catalog)
    state.territories[territory_id] = TerritoryStatus.OWNED

    opened: list[TerritoryID] = []
    for unlock_id in territory.unlocks:
        if state.territories.get(unlock_id) == TerritoryStatus.LOCKED:
            state.territories[unlock_id] = TerritoryStatus.AVAILABLE
            opened.append(unlock_id)
    return opened
