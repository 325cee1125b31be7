from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Protocol, Union

from tarnished.engine.attack import Direction


ATTACK_KINDS = ("light", "heavy", "special")
HEAL_TARGETS = ("hp", "fp")


@dataclass(frozen=True)
class Attack:
    kind: str  # "light" | "heavy" | "special"


@dataclass(frozen=True)
class Dodge:
    direction: int  # Direction id; anything outside 0..3 is just a failed dodge


@dataclass(frozen=True)
class Heal:
    target: str  # "hp" | "fp"


@dataclass(frozen=True)
class Wait:
    ticks: int


Action = Union[Attack, Dodge, Heal, Wait]


class ActionSource(Protocol):
    def next_action(self, view: Any) -> Optional[Action]: ...


def is_valid(action: Any) -> bool:
    if isinstance(action, Attack):
        return action.kind in ATTACK_KINDS
    if isinstance(action, Heal):
        return action.target in HEAL_TARGETS
    if isinstance(action, Wait):
        return isinstance(action.ticks, int) and action.ticks >= 0
    return isinstance(action, Dodge)


def _direction(raw: Any) -> Optional[int]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    s = str(raw or "").strip()
    if s.lstrip("-").isdigit():
        return int(s)
    try:
        return int(Direction[s.upper()])
    except KeyError:
        return None


def parse_action(payload: Union[str, Dict[str, Any], None]) -> Optional[Action]:
    """
    Turn a loose payload into an Action, or None when it is not a recognised choice.

    Accepted shapes:
      "attack:heavy" | "dodge:2" | "dodge:left" | "heal:fp" | "wait:3"
      {"action": "attack", "kind": "light"}
      {"action": "dodge", "direction": 0}
      {"action": "heal", "target": "hp"}
      {"action": "wait", "ticks": 1}
    Dodge directions are ids (0=forward .. 3=left), not the 1-4 menu numbers.
    """
    if isinstance(payload, str):
        name, _, arg = payload.partition(":")
        payload = {"action": name, "arg": arg}
    if not isinstance(payload, dict):
        return None

    name = str(payload.get("action") or "").strip().lower()
    arg = payload.get("arg")

    if name == "attack":
        kind = str(payload.get("kind") or arg or "").strip().lower()
        return Attack(kind) if kind in ATTACK_KINDS else None

    if name == "dodge":
        raw = payload.get("direction", arg)
        direction = _direction(raw)
        return Dodge(direction) if direction is not None else None

    if name == "heal":
        target = str(payload.get("target") or arg or "").strip().lower()
        return Heal(target) if target in HEAL_TARGETS else None

    if name == "wait":
        raw = payload.get("ticks", arg)
        try:
            ticks = int(raw)
        except (TypeError, ValueError):
            return None
        return Wait(ticks) if ticks >= 0 else None

    return None


class ScriptedActionSource:
    """Feeds a fixed list of actions; once exhausted it keeps waiting one tick."""

    def __init__(self, actions: Iterable[Union[Action, str, Dict[str, Any]]], fallback: Optional[Action] = None):
        self.actions: List[Any] = list(actions)
        self.fallback = fallback if fallback is not None else Wait(1)
        self.seen: List[Any] = []

    def next_action(self, view: Any) -> Optional[Action]:
        self.seen.append(view)
        if not self.actions:
            return self.fallback
        nxt = self.actions.pop(0)
        if isinstance(nxt, (str, dict)):
            return parse_action(nxt)
        return nxt


class AutoPilot:
    """
    Non-interactive player for `--auto` runs.
    Attacks while the strike is far off, gambles on a dodge inside the window,
    heals when low and a charge is left.
    """

    def __init__(self, rng: Optional[random.Random] = None, heal_below: float = 0.35, dodge_window: int = 2):
        self.rng = rng or random.Random()
        self.heal_below = heal_below
        self.dodge_window = dodge_window

    def next_action(self, view: Any) -> Optional[Action]:
        if view.heal_charges > 0 and view.player_hp < view.player_max_hp * self.heal_below:
            return Heal("hp")
        if view.stage == "cooldown":
            return Attack("light")
        if view.remaining <= self.dodge_window:
            return Dodge(self.rng.randrange(len(Direction)))
        return Attack("light")
