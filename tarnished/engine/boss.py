from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Optional

from tarnished.engine.attack import BossPhase, Combo


@dataclass(frozen=True)
class BossDialogue:
    win: str = ""
    phase_change: str = ""
    death: str = ""


@dataclass
class Boss:
    """
    Generic boss. Every named boss is the same type fed from the roster table.

    `current_hp` may drop below zero; anything <= 0 counts as defeated.
    `phase` moves 1 -> 2 once per attempt; only `reset()` puts it back.
    """

    name: str
    max_hp: int
    phase_one: BossPhase
    phase_two: BossPhase
    dialogue: BossDialogue = field(default_factory=BossDialogue)
    reward: int = 0
    id: Optional[str] = None
    current_hp: int = -1
    phase: int = 1

    def __post_init__(self):
        if self.max_hp <= 0:
            raise ValueError(f"Boss max_hp must be positive: {self.name}")
        if self.current_hp < 0:
            self.current_hp = self.max_hp
        self.original_hp = self.max_hp

    @property
    def is_defeated(self) -> bool:
        return self.current_hp <= 0

    @property
    def pool(self) -> BossPhase:
        return self.phase_one if self.phase == 1 else self.phase_two

    def take_damage(self, amount: int) -> int:
        amount = max(0, int(amount))
        self.current_hp -= amount
        return amount

    def check_phase_transition(self) -> bool:
        return self.phase == 1 and self.current_hp <= self.original_hp // 2

    def enter_phase_two(self) -> None:
        self.phase = 2

    def choose_combo(self, rng: random.Random) -> Combo:
        return self.pool.choose_combo(rng)

    def reset(self, hp: Optional[int] = None) -> None:
        self.current_hp = self.original_hp if hp is None else int(hp)
        self.phase = 1
