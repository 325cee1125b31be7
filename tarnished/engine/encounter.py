from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from tarnished.engine.boss import Boss
from tarnished.engine.player import Player
from tarnished.engine.rules import rule
from tarnished.engine.turn_resolver import EncounterResult, TurnResolver


logger = logging.getLogger(__name__)


@dataclass
class CombatSession:
    """Pre-fight snapshot; everything a lost attempt gives back."""

    hp: int
    fp: int
    heal_charges: int
    boss_hp: int

    @classmethod
    def capture(cls, player: Player, boss: Boss) -> "CombatSession":
        return cls(player.hp, player.fp, player.heal_charges, boss.current_hp)

    def restore_player(self, player: Player) -> None:
        player.hp = self.hp
        player.fp = self.fp
        player.heal_charges = self.heal_charges

    def restore_boss(self, boss: Boss) -> None:
        boss.reset(self.boss_hp)


@dataclass
class EncounterOutcome:
    won: bool
    attempts: int
    player: Player
    boss: Boss
    last_result: Optional[EncounterResult] = None


class Encounter:
    """
    Runs attempts against one boss until the player wins.

    A lost attempt restores the snapshot and hands control to `between_attempts`
    (the Site of Grace) when the player has runes to spend. `max_attempts`
    gives up after that many losses; None retries forever.
    """

    def __init__(
        self,
        player: Player,
        boss: Boss,
        action_source,
        ui: Any = None,
        rng: Optional[random.Random] = None,
        rules: Optional[Dict[str, Any]] = None,
        between_attempts: Optional[Callable[[Player], None]] = None,
        max_attempts: Optional[int] = None,
    ):
        self.player = player
        self.boss = boss
        self.action_source = action_source
        self.ui = ui
        self.rng = rng or random.Random()
        self.rules = rules
        self.between_attempts = between_attempts
        self.max_attempts = max_attempts
        self.session = CombatSession.capture(player, boss)
        self.attempts = 0

    def new_resolver(self) -> TurnResolver:
        return TurnResolver(self.player, self.boss, ui=self.ui, rng=self.rng, rules=self.rules)

    def fight(self) -> EncounterOutcome:
        while True:
            self.attempts += 1
            logger.info("Attempt %s against %s", self.attempts, self.boss.name)
            result = self.new_resolver().run(self.action_source)
            if result.player_won:
                self.award_victory()
                return EncounterOutcome(True, self.attempts, self.player, self.boss, result)

            self.recover_from_defeat()
            if self.max_attempts is not None and self.attempts >= self.max_attempts:
                logger.info("Giving up on %s after %s attempts", self.boss.name, self.attempts)
                return EncounterOutcome(False, self.attempts, self.player, self.boss, result)
            if self.between_attempts is not None and self.player.runes > 0:
                self.between_attempts(self.player)
                # Levelling at grace moves the pools; the next attempt starts from there.
                self.session.hp = self.player.hp
                self.session.fp = self.player.fp

    def recover_from_defeat(self) -> None:
        self.session.restore_player(self.player)
        self.session.restore_boss(self.boss)

    def award_victory(self) -> None:
        self.session.restore_player(self.player)
        self.player.add_runes(self.boss.reward)
        self.player.heal_charges += int(rule(self.rules, "victory_heal_charges"))
        logger.info("%s defeated in %s attempt(s): +%s runes, %s heal charges",
                    self.boss.name, self.attempts, self.boss.reward, self.player.heal_charges)
        if self.ui is not None:
            self.ui.reward(f"You receive {self.boss.reward} runes.")
