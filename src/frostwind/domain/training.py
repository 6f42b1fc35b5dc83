"""Training pipeline: recruits become ready after a fixed number of days."""

from __future__ import annotations

from frostwind.domain.enums import UnitStatus
from frostwind.domain.models import GameState, Unit


def advance_training(state: GameState) -> list[Unit]:
    """Tick every training unit by one day and return those now ready."""

    ready: list[Unit] = []
    for unit in state.units:
        if unit.status != UnitStatus.TRAINING:
            continue
        unit.training_days_left -= 1
        if unit.training_days_left <= 0:
            unit.training_days_left = 0
            unit.status = UnitStatus.IDLE
            ready.append(unit)
    return ready
