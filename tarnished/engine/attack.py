from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple


class Direction(IntEnum):
    FORWARD = 0
    BACKWARD = 1
    RIGHT = 2
    LEFT = 3

    @property
    def label(self) -> str:
        return self.name.title()


@dataclass(frozen=True)
class AttackSpec:
    """One boss strike: telegraph text, timing and the two directions that evade it."""

    text: str
    charge_ticks: int
    cooldown_ticks: int
    dodge_window: Tuple[int, int]
    damage: int

    def __post_init__(self):
        if self.charge_ticks < 0 or self.cooldown_ticks < 0:
            raise ValueError(f"Attack timings must be >= 0: {self.text!r}")
        if self.damage < 0:
            raise ValueError(f"Attack damage must be >= 0: {self.text!r}")
        if len(self.dodge_window) != 2:
            raise ValueError(f"Attack needs exactly 2 dodge directions: {self.text!r}")
        object.__setattr__(self, "dodge_window", tuple(int(d) for d in self.dodge_window))

    def evaded_by(self, direction: int) -> bool:
        return direction in self.dodge_window


@dataclass(frozen=True)
class Combo:
    attacks: Tuple[AttackSpec, ...]

    def __post_init__(self):
        if not self.attacks:
            raise ValueError("A combo needs at least one attack")
        if all(a.charge_ticks == 0 and a.cooldown_ticks == 0 for a in self.attacks):
            raise ValueError("A combo must give the player at least one tick to act")
        object.__setattr__(self, "attacks", tuple(self.attacks))

    def __iter__(self):
        return iter(self.attacks)

    def __len__(self):
        return len(self.attacks)


@dataclass(frozen=True)
class BossPhase:
    combos: Tuple[Combo, ...]

    def __post_init__(self):
        if not self.combos:
            raise ValueError("A boss phase needs at least one combo")
        object.__setattr__(self, "combos", tuple(self.combos))

    def choose_combo(self, rng: random.Random) -> Combo:
        return self.combos[rng.randrange(len(self.combos))]
