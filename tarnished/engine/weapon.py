from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from tarnished.engine.rules import rule


FIGHT_STATS = ("STR", "DEX", "INT", "FTH", "ARC")
MAX_UPGRADE_LEVEL = 4

# level -> (flat damage added, scaling multiplier, upgrade cost added)
UPGRADE_LADDER = {
    0: (25, 1.25, 25),
    1: (50, 1.5, 50),
    2: (100, 1.75, 100),
    3: (200, 2.0, None),
}


@dataclass
class Weapon:
    name: str
    attacks: Dict[str, str]
    scaling: List[float]
    damage: int
    time: int
    price: int = 0
    description: str = ""
    level: int = 0
    upgrade_cost: int = 10
    base_name: str = field(default="", repr=False)

    def __post_init__(self):
        if len(self.scaling) != len(FIGHT_STATS):
            raise ValueError(f"{self.name}: scaling needs {len(FIGHT_STATS)} weights")
        self.scaling = [float(s) for s in self.scaling]
        if not self.base_name:
            self.base_name = self.name

    def label(self, kind: str) -> str:
        return self.attacks.get(kind, kind.title())

    @property
    def is_max_level(self) -> bool:
        return self.level >= MAX_UPGRADE_LEVEL

    def compute_damage(self, fight_stats: Sequence[int], rules: Optional[dict] = None) -> int:
        """
        floor(sum(scaling[i] * stat[i]) * factor) + base damage.
        `fight_stats` is STR, DEX, INT, FTH, ARC in that order.
        """
        factor = rule(rules, "damage_stat_factor")
        total = sum(w * int(s) for w, s in zip(self.scaling, fight_stats))
        return int(math.floor(total * factor)) + int(self.damage)

    def attack_damage(self, kind: str, fight_stats: Sequence[int], rules: Optional[dict] = None) -> int:
        mult = int(rule(rules, "attack_multipliers").get(kind, 1))
        return self.compute_damage(fight_stats, rules) * mult

    def attack_time(self, kind: str, stamina: int = 0, rules: Optional[dict] = None) -> int:
        mult = int(rule(rules, "attack_time_multipliers").get(kind, 1))
        divisor = int(rule(rules, "stamina_time_divisor")) or 1
        return max(0, self.time * mult - int(stamina) // divisor)

    def upgrade(self) -> bool:
        """Climb one rung of the ladder. Returns False (and changes nothing) at the top."""
        if self.is_max_level:
            return False
        flat, mult, cost = UPGRADE_LADDER[self.level]
        self.damage += flat
        self.scaling = [s * mult for s in self.scaling]
        self.level += 1
        self.upgrade_cost = 0 if cost is None else self.upgrade_cost + cost
        self.name = f"{self.base_name} +{self.level}"
        return True
