from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from tarnished.engine.roster import default_weapon
from tarnished.engine.rules import rule
from tarnished.engine.weapon import Weapon


STAT_NAMES = ("Vigor", "Mind", "Endurance", "Strength", "Dexterity", "Intelligence", "Faith", "Arcane")
VIGOR, MIND = 0, 1
FIGHT_STAT_OFFSET = 3

STARTING_HP = 300
STARTING_FP = 200
STARTING_RUNES = 15
STARTING_HEAL_CHARGES = 2


@dataclass
class Player:
    name: str
    hp: int = STARTING_HP
    fp: int = STARTING_FP
    max_hp: int = STARTING_HP
    max_fp: int = STARTING_FP
    stamina: int = 0
    stats: List[int] = field(default_factory=lambda: [0] * len(STAT_NAMES))
    weapon: Weapon = field(default_factory=default_weapon)
    runes: int = STARTING_RUNES
    heal_charges: int = STARTING_HEAL_CHARGES

    def __post_init__(self):
        if len(self.stats) != len(STAT_NAMES):
            raise ValueError(f"Player needs {len(STAT_NAMES)} stats, got {len(self.stats)}")

    @property
    def is_defeated(self) -> bool:
        return self.hp <= 0

    def fight_stats(self) -> List[int]:
        """STR, DEX, INT, FTH, ARC: the only stats that feed weapon damage."""
        return list(self.stats[FIGHT_STAT_OFFSET:])

    def spend_runes(self, amount: int) -> None:
        self.runes -= int(amount)

    def add_runes(self, amount: int) -> None:
        self.runes += int(amount)

    def heal(self, target: str, ceiling: int, rules: Optional[dict] = None) -> int:
        """
        Restore hp or fp by the heal amount, capped at `ceiling`.
        Returns the amount actually restored. Charge bookkeeping is the caller's job.
        """
        amount = int(rule(rules, "heal_amount"))
        if target == "fp":
            before = self.fp
            self.fp = min(ceiling, self.fp + amount)
            return max(0, self.fp - before)
        before = self.hp
        self.hp = min(ceiling, self.hp + amount)
        return max(0, self.hp - before)

    def raise_ceilings(self, vigor_added: int, mind_added: int, rules: Optional[dict] = None) -> None:
        """Level-up growth: ceilings (and current pools) rise per newly added Vigor/Mind point."""
        hp_gain = int(vigor_added) * int(rule(rules, "hp_per_vigor"))
        fp_gain = int(mind_added) * int(rule(rules, "fp_per_mind"))
        self.max_hp += hp_gain
        self.max_fp += fp_gain
        self.hp += hp_gain
        self.fp += fp_gain
