"""Shared builders and a scripted random source for the Frostwind tests."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Sequence
from typing import TypeVar

from frostwind.domain import models as dm
from frostwind.domain.enums import Difficulty, SoldierQuality, UnitStatus, UnitType

T = TypeVar("T")


class ScriptedRandom:
    """RandomSource that replays queued values.

    Each method has its own queue. When a queue runs dry ``random`` returns
    ``default_random``, ``uniform`` returns ``low``, ``randint`` returns
    ``low`` and ``choice`` returns the first option. ``choice`` queues hold
    indexes into the offered sequence.
    """

    def __init__(
        self,
        *,
        randoms: Iterable[float] = (),
        uniforms: Iterable[float] = (),
        ints: Iterable[int] = (),
        choices: Iterable[int] = (),
        default_random: float = 0.5,
    ) -> None:
        self.randoms = deque(randoms)
        self.uniforms = deque(uniforms)
        self.ints = deque(ints)
        self.choices = deque(choices)
        self.default_random = default_random
        self.calls: list[str] = []

    def random(self) -> float:
        self.calls.append("random")
        return self.randoms.popleft() if self.randoms else self.default_random

    def uniform(self, low: float, high: float) -> float:
        self.calls.append("uniform")
        return self.uniforms.popleft() if self.uniforms else low

    def randint(self, low: int, high: int) -> int:
        self.calls.append("randint")
        return self.ints.popleft() if self.ints else low

    def choice(self, options: Sequence[T]) -> T:
        self.calls.append("choice")
        return options[self.choices.popleft() if self.choices else 0]


def make_unit(
    unit_id: str = "unit_a",
    *,
    kind: UnitType = UnitType.INFANTRY,
    count: int = 100,
    status: UnitStatus = UnitStatus.IDLE,
    power: int = 10,
    mobility: int = 10,
    range: int = 0,
    magic: int = 0,
    quality: SoldierQuality = SoldierQuality.ROOKIE,
) -> dm.Unit:
    return dm.Unit(
        id=dm.UnitID(unit_id),
        type=kind,
        name=f"{quality} {kind} test",
        count=count,
        quality=quality,
        status=status,
        training_days_left=3 if status == UnitStatus.TRAINING else 0,
        power=power,
        mobility=mobility,
        range=range,
        magic=magic,
    )


def make_quest(
    quest_id: str = "q_test",
    *,
    required_power: int = 1000,
    reward_gold: int = 800,
    duration: int = 1,
    danger_level: int = 2,
    bias: dm.StatBias | None = None,
) -> dm.Quest:
    return dm.Quest(
        id=dm.QuestID(quest_id),
        title="Test Contract",
        description="A contract used by the tests.",
        difficulty=Difficulty.E,
        required_power=required_power,
        reward_gold=reward_gold,
        duration=duration,
        danger_level=danger_level,
        bias=bias,
    )


def make_state(*units: dm.Unit, gold: int = 10_000) -> dm.GameState:
    return dm.GameState(gold=gold, units=list(units))
