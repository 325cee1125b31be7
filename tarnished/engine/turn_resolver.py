from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from tarnished.engine.actions import Attack, Dodge, Heal, Wait, is_valid
from tarnished.engine.attack import AttackSpec, Combo, Direction
from tarnished.engine.boss import Boss
from tarnished.engine.player import Player
from tarnished.engine.rules import rule
from tarnished.ui.events import (
    emit_attack_telegraph,
    emit_boss_update,
    emit_combat_log,
    emit_combat_result,
    emit_combat_state,
    emit_phase_change,
    emit_player_update,
)


logger = logging.getLogger(__name__)


class Status(str, Enum):
    IN_PROGRESS = "in_progress"
    PLAYER_DEFEATED = "player_defeated"
    BOSS_DEFEATED = "boss_defeated"
    PHASE_TRANSITIONING = "phase_transitioning"


class Stage(str, Enum):
    CHARGE_UP = "charge_up"
    COOLDOWN = "cooldown"


TERMINAL = (Status.PLAYER_DEFEATED, Status.BOSS_DEFEATED)


@dataclass
class TickReport:
    tick: int
    action: Any
    stage: Optional[str]
    accepted: bool = True
    time_cost: int = 0
    remaining: int = 0
    dodged: bool = False
    hit: bool = False
    damage_taken: int = 0
    damage_dealt: int = 0
    phase_changed: bool = False
    status: Status = Status.IN_PROGRESS


@dataclass
class ResolverView:
    """What an action source gets to look at before choosing."""

    stage: str
    remaining: int
    attack: Optional[str]
    tick: int
    player_hp: int
    player_max_hp: int
    player_fp: int
    heal_charges: int
    boss_name: str
    boss_hp: int
    boss_max_hp: int
    boss_phase: int
    weapon: str


@dataclass
class EncounterResult:
    status: Status
    ticks: int
    turns: int = 0

    @property
    def player_won(self) -> bool:
        return self.status == Status.BOSS_DEFEATED


class TurnResolver:
    """
    Tick-by-tick state machine for one attempt at one boss.

    Each boss turn is a combo; each attack in it runs CHARGE_UP then COOLDOWN.
    The resolver waits for exactly one player action per tick (`step`) and
    settles everything that needs no input (zero-length windows, strikes,
    drawing the next combo) before asking again.

    `run(source)` is the blocking driver; `start()` + `step(action)` let a
    caller push actions one at a time.
    """

    def __init__(
        self,
        player: Player,
        boss: Boss,
        ui: Any = None,
        rng: Optional[random.Random] = None,
        rules: Optional[Dict[str, Any]] = None,
    ):
        self.player = player
        self.boss = boss
        self.ui = ui
        self.rng = rng or random.Random()
        self.rules = rules

        self.status = Status.IN_PROGRESS
        self.stage: Optional[Stage] = None
        self.combo: Optional[Combo] = None
        self.attack: Optional[AttackSpec] = None
        self.attack_index = 0
        self.remaining = 0
        self.tick = 0
        self.turns = 0
        self.started = False
        self._hit_landed = False
        self._damage_taken = 0

    # -- driving -----------------------------------------------------------

    def start(self) -> None:
        if self.started:
            return
        self.started = True
        logger.info("Encounter start: %s vs %s (hp %s, phase %s)",
                    self.player.name, self.boss.name, self.boss.current_hp, self.boss.phase)
        if self.ui is not None:
            emit_combat_state(self.ui, True)
        self._push_state()
        self._begin_turn()
        self._settle()
        if self.status in TERMINAL:
            self._announce_end()

    def run(self, action_source) -> EncounterResult:
        self.start()
        while self.status == Status.IN_PROGRESS:
            action = action_source.next_action(self.view())
            self.step(action)
        return self.result()

    def step(self, action: Any) -> TickReport:
        if not self.started:
            self.start()
        if self.status in TERMINAL:
            return TickReport(self.tick, action, self._stage_value(), accepted=False,
                              remaining=self.remaining, status=self.status)

        stage = self.stage
        boss_hp_before = self.boss.current_hp
        cost = self._apply_action(action)
        if cost is None:
            self._say("Invalid action. Try again.", "system")
            return TickReport(self.tick, action, self._stage_value(), accepted=False,
                              remaining=self.remaining, status=self.status)

        self.tick += 1
        report = TickReport(self.tick, action, stage.value, time_cost=cost,
                            damage_dealt=max(0, boss_hp_before - self.boss.current_hp))
        self._hit_landed = False
        self._damage_taken = 0

        if self.boss.check_phase_transition():
            self._transition()
            report.phase_changed = True
            if not self._check_boss_death():
                self._begin_turn()
                self._settle()
            return self._finish(report)

        if self._check_boss_death():
            return self._finish(report)

        if stage == Stage.CHARGE_UP:
            if isinstance(action, Dodge):
                if self.remaining <= int(rule(self.rules, "dodge_window")) and self.attack.evaded_by(action.direction):
                    self._say("Successfully dodged attack!", "dodge")
                    report.dodged = True
                    self.remaining = 0
                    self._begin_cooldown()
                    self._settle()
                    return self._finish(report)
                self.remaining -= int(rule(self.rules, "failed_dodge_ticks"))
            self.remaining -= cost
        else:
            self.remaining -= cost

        self._settle()
        return self._finish(report)

    def result(self) -> EncounterResult:
        return EncounterResult(self.status, self.tick, self.turns)

    def view(self) -> ResolverView:
        return ResolverView(
            stage=self._stage_value(),
            remaining=self.remaining,
            attack=self.attack.text if self.attack else None,
            tick=self.tick,
            player_hp=self.player.hp,
            player_max_hp=self.player.max_hp,
            player_fp=self.player.fp,
            heal_charges=self.player.heal_charges,
            boss_name=self.boss.name,
            boss_hp=self.boss.current_hp,
            boss_max_hp=self.boss.max_hp,
            boss_phase=self.boss.phase,
            weapon=self.player.weapon.name,
        )

    # -- boss side ---------------------------------------------------------

    def _begin_turn(self) -> None:
        self.combo = self.boss.choose_combo(self.rng)
        self.turns += 1
        self.attack_index = 0
        logger.debug("Turn %s: %s draws a %s-attack combo (phase %s)",
                     self.turns, self.boss.name, len(self.combo), self.boss.phase)
        self._begin_attack()

    def _begin_attack(self) -> None:
        self.attack = self.combo.attacks[self.attack_index]
        self.stage = Stage.CHARGE_UP
        self.remaining = self.attack.charge_ticks
        self._say(self.attack.text, "telegraph")
        if self.ui is not None:
            emit_attack_telegraph(self.ui, self.attack, self.remaining)

    def _strike(self) -> None:
        damage = self.attack.damage
        self.player.hp -= damage
        self._hit_landed = True
        self._damage_taken += damage
        self._say("You were hit!", "hit")
        logger.debug("Hit for %s, player hp %s", damage, self.player.hp)
        if self.player.is_defeated:
            self.status = Status.PLAYER_DEFEATED
            if self.boss.dialogue.win:
                self._say(self.boss.dialogue.win, "boss")
            self._say("You died", "result")

    def _begin_cooldown(self) -> None:
        self.stage = Stage.COOLDOWN
        self.remaining = self.attack.cooldown_ticks

    def _next_attack(self) -> None:
        self.attack_index += 1
        if self.attack_index >= len(self.combo):
            self._begin_turn()
        else:
            self._begin_attack()

    def _settle(self) -> None:
        # Advance through everything that needs no player input.
        while self.status == Status.IN_PROGRESS:
            if self.stage == Stage.CHARGE_UP and self.remaining <= 0:
                self._strike()
                if self.status != Status.IN_PROGRESS:
                    return
                self._begin_cooldown()
            elif self.stage == Stage.COOLDOWN and self.remaining <= 0:
                self._next_attack()
            else:
                return

    def _transition(self) -> None:
        self.status = Status.PHASE_TRANSITIONING
        self.boss.enter_phase_two()
        logger.info("%s enters phase 2 at hp %s", self.boss.name, self.boss.current_hp)
        if self.boss.dialogue.phase_change:
            self._say(self.boss.dialogue.phase_change, "phase")
        if self.ui is not None:
            emit_phase_change(self.ui, self.boss)
        self.status = Status.IN_PROGRESS

    def _check_boss_death(self) -> bool:
        if not self.boss.is_defeated:
            return False
        self.status = Status.BOSS_DEFEATED
        if self.boss.dialogue.death:
            self._say(self.boss.dialogue.death, "boss")
        self._say("Foe Slain", "result")
        return True

    # -- player side -------------------------------------------------------

    def _apply_action(self, action: Any) -> Optional[int]:
        """Apply the action's effect and return its time cost; None means not a valid choice."""
        if not is_valid(action):
            return None

        wasted = int(rule(self.rules, "wasted_turn_ticks"))

        if isinstance(action, Attack):
            if action.kind == "special":
                fp_cost = int(rule(self.rules, "special_fp_cost"))
                if self.player.fp < fp_cost:
                    self._say("Not enough focus!", "system")
                    return wasted
                self.player.fp -= fp_cost
            weapon = self.player.weapon
            dealt = self.boss.take_damage(weapon.attack_damage(action.kind, self.player.fight_stats(), self.rules))
            self._say(f"You use {weapon.label(action.kind)}!", "attack")
            self._say(f"You hit for {dealt} hp!", "attack")
            return weapon.attack_time(action.kind, self.player.stamina, self.rules)

        if isinstance(action, Heal):
            if self.player.heal_charges <= 0:
                self._say("Out of heals!", "system")
                return wasted
            self.player.heal_charges -= 1
            ceiling = self.player.max_fp if action.target == "fp" else self.player.max_hp
            restored = self.player.heal(action.target, ceiling, self.rules)
            self._say(f"You restore {restored} {action.target}.", "heal")
            return int(rule(self.rules, "heal_ticks"))

        if isinstance(action, Wait):
            return max(action.ticks, int(rule(self.rules, "min_wait_ticks")))

        # Dodge: resolved against the attack, costs nothing itself.
        try:
            label = Direction(action.direction).label
        except ValueError:
            label = "nowhere"
        self._say(f"Dodged {label}!", "dodge")
        return 0

    # -- output ------------------------------------------------------------

    def _finish(self, report: TickReport) -> TickReport:
        report.hit = self._hit_landed
        report.damage_taken = self._damage_taken
        report.remaining = self.remaining
        report.status = self.status
        logger.debug(
            "tick=%s action=%s stage=%s cost=%s remaining=%s dodged=%s hit=%s status=%s",
            report.tick, report.action, report.stage, report.time_cost,
            report.remaining, report.dodged, report.hit, report.status.value,
        )
        self._push_state()
        if self.status in TERMINAL:
            self._announce_end()
        return report

    def _announce_end(self) -> None:
        result = self.result()
        logger.info("Encounter over: %s after %s ticks (%s turns)",
                    result.status.value, result.ticks, result.turns)
        if self.ui is not None:
            emit_combat_result(self.ui, result)
            emit_combat_state(self.ui, False)

    def _push_state(self) -> None:
        if self.ui is None:
            return
        emit_player_update(self.ui, self.player)
        emit_boss_update(self.ui, self.boss)

    def _say(self, text: str, log_type: Optional[str] = None) -> None:
        if self.ui is not None:
            emit_combat_log(self.ui, text, log_type)

    def _stage_value(self) -> Optional[str]:
        return self.stage.value if self.stage else None
