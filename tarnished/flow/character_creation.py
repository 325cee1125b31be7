from __future__ import annotations

from typing import List, Optional

from tarnished.engine.player import Player
from tarnished.engine.weapon import Weapon
from tarnished.flow.grace import prompt_level_up, prompt_weapon_purchase


DEFAULT_NAME = "Tarnished"


def run_character_creation(ui, catalog: List[Weapon], weapon: Optional[Weapon] = None, rules: Optional[dict] = None) -> Player:
    name = (ui.text_input("What is thy name?") or "").strip() or DEFAULT_NAME
    player = Player(name) if weapon is None else Player(name, weapon=weapon)

    ui.system("Choose your first weapon.")
    prompt_weapon_purchase(ui, player, catalog)

    ui.system("Spend your runes on your stats.")
    prompt_level_up(ui, player, rules)

    ui.system(f"{player.name} takes up the {player.weapon.name}.")
    return player
