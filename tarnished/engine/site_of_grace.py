from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from tarnished.engine.player import MIND, STAT_NAMES, VIGOR, Player
from tarnished.engine.rules import rule
from tarnished.engine.validator import validate
from tarnished.engine.weapon import Weapon


logger = logging.getLogger(__name__)


class StatAllocation:
    """
    One level-up pass over the eight stats, in order.

    Runes leave the purse as each stat is allocated, so the running total the
    player sees is always honest; `undo()` pops the last allocation and refunds
    it. Nothing touches `player.stats` until `commit()`.
    """

    def __init__(self, player: Player, rules: Optional[Dict[str, Any]] = None):
        self.player = player
        self.rules = rules
        self.stats: List[int] = list(player.stats)
        self.index = 0
        self.history: List[Tuple[int, int]] = []

    @property
    def is_complete(self) -> bool:
        return self.index >= len(STAT_NAMES)

    @property
    def current_stat(self) -> Optional[str]:
        return None if self.is_complete else STAT_NAMES[self.index]

    @property
    def spent(self) -> int:
        return sum(points for _, points in self.history)

    def allocate(self, points: int) -> None:
        validate(not self.is_complete, "Every stat has been allocated.")
        validate(isinstance(points, int) and points >= 0, "Has to be positive.")
        cap = int(rule(self.rules, "stat_cap"))
        validate(self.stats[self.index] + points <= cap, f"Cannot go over {cap}.")
        validate(points <= self.player.runes, "Not enough runes.")

        self.player.spend_runes(points)
        self.history.append((self.index, points))
        self.stats[self.index] += points
        self.index += 1

    def undo(self) -> None:
        validate(bool(self.history), "No actions to undo.")
        idx, points = self.history.pop()
        self.stats[idx] -= points
        self.player.add_runes(points)
        self.index = idx

    def abandon(self) -> None:
        while self.history:
            self.undo()

    def commit(self) -> List[int]:
        validate(self.is_complete, "Allocate every stat before confirming.")
        vigor_added = self.stats[VIGOR] - self.player.stats[VIGOR]
        mind_added = self.stats[MIND] - self.player.stats[MIND]
        self.player.stats = list(self.stats)
        self.player.raise_ceilings(vigor_added, mind_added, self.rules)
        logger.info("Level up committed: stats=%s spent=%s runes", self.player.stats, self.spent)
        self.history = []
        return self.player.stats


def buy_weapon(player: Player, catalog: List[Weapon], index: int) -> Weapon:
    """
    Trade the held weapon for catalog[index].
    The player pays the new price, is refunded the old one, and the old
    weapon takes the bought one's slot on the rack.
    """
    validate(0 <= index < len(catalog), "Invalid choice. Please select a valid weapon.")
    wanted = catalog[index]
    validate(player.runes >= wanted.price, "Not enough runes. Choose a different weapon.")

    player.spend_runes(wanted.price)
    player.add_runes(player.weapon.price)
    catalog[index] = player.weapon
    player.weapon = wanted
    logger.info("Bought %s for %s runes", wanted.name, wanted.price)
    return wanted


def upgrade_weapon(player: Player) -> Weapon:
    weapon = player.weapon
    validate(not weapon.is_max_level, f"{weapon.name} cannot be upgraded further.")
    cost = weapon.upgrade_cost
    validate(player.runes >= cost, "Not enough runes.")
    player.spend_runes(cost)
    weapon.upgrade()
    logger.info("Upgraded to %s for %s runes", weapon.name, cost)
    return weapon
