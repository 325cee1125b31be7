from __future__ import annotations

from typing import Any, Optional

from tarnished.engine.actions import ATTACK_KINDS, Action, Attack, Dodge, Heal, Wait
from tarnished.engine.attack import Direction


ACTION_MENU = ["Attack", "Dodge", "Heal", "Wait"]
HEAL_MENU = ["Hp", "Fp"]


class PromptActionSource:
    """
    Console menus for one player action per tick.
    Returns None for anything unusable so the resolver re-prompts.
    """

    def __init__(self, ui, player=None):
        self.ui = ui
        self.player = player

    def show_status(self, view) -> None:
        self.ui.system(f"Health: {view.player_hp}")
        self.ui.system(f"Focus: {view.player_fp}")
        self.ui.system(f"Boss Health: {view.boss_hp}")
        self.ui.system(f"Total Heals: {view.heal_charges}")

    def next_action(self, view: Any) -> Optional[Action]:
        self.show_status(view)
        picked = self.ui.choice("Choose an action:", ACTION_MENU)
        if picked is None:
            return None

        if picked == 0:
            labels = [kind.title() for kind in ATTACK_KINDS]
            if self.player is not None:
                labels = [f"{kind.title()} ({self.player.weapon.label(kind)})" for kind in ATTACK_KINDS]
            kind = self.ui.choice("Choose an attack:", labels)
            return None if kind is None else Attack(ATTACK_KINDS[kind])

        if picked == 1:
            direction = self.ui.choice("Choose a direction:", [d.label for d in Direction])
            return None if direction is None else Dodge(direction)

        if picked == 2:
            if view.heal_charges <= 0:
                # Still an action: the resolver charges the wasted turn.
                return Heal("hp")
            target = self.ui.choice("What are you healing?", HEAL_MENU)
            return None if target is None else Heal(HEAL_MENU[target].lower())

        raw = self.ui.text_input("How long?")
        try:
            ticks = int(str(raw).strip())
        except ValueError:
            return None
        return Wait(ticks) if ticks >= 0 else None
