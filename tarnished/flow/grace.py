from __future__ import annotations

from typing import List, Optional

from tarnished.engine.player import STAT_NAMES, Player
from tarnished.engine.site_of_grace import StatAllocation, buy_weapon, upgrade_weapon
from tarnished.engine.validator import safe_validate
from tarnished.engine.weapon import Weapon


GRACE_MENU = ["Purchase New Weapon", "Level Up", "Upgrade Weapon", "Leave"]


def prompt_weapon_purchase(ui, player: Player, catalog: List[Weapon]) -> bool:
    ui.system(f"Runes: {player.runes}")
    options = [f"{w.name} - Price: {w.price} Runes" for w in catalog] + ["Back"]
    while True:
        idx = ui.choice("Choose a Weapon:", options)
        if idx is None or idx == len(catalog):
            return False
        weapon = catalog[idx]
        if weapon.description:
            ui.system(weapon.description)
        if not ui.confirm():
            continue
        ok, msg = safe_validate(buy_weapon, player, catalog, idx)
        if not ok:
            ui.error(msg)
            continue
        ui.system(f"You now wield the {player.weapon.name}.")
        return True


def _stat_line(stats) -> str:
    return ", ".join(f"{name} {val}" for name, val in zip(STAT_NAMES, stats))


def prompt_level_up(ui, player: Player, rules: Optional[dict] = None) -> bool:
    allocation = StatAllocation(player, rules)
    while True:
        while not allocation.is_complete:
            ui.system(f"Current Stats: {_stat_line(allocation.stats)}")
            ui.system(f"Runes remaining: {player.runes}")
            raw = ui.text_input(f"Points into {allocation.current_stat} (or enter -1 to undo):")
            if raw is None:
                allocation.abandon()
                return False
            try:
                points = int(str(raw).strip())
            except ValueError:
                ui.error("Invalid input. Please enter a number.")
                continue
            if points == -1:
                ok, msg = safe_validate(allocation.undo)
            else:
                ok, msg = safe_validate(allocation.allocate, points)
            if not ok:
                ui.error(msg)

        ui.system(f"Current Stats: {_stat_line(allocation.stats)}")
        if ui.confirm():
            allocation.commit()
            ui.system(f"Health {player.max_hp}, Focus {player.max_fp}.")
            return True
        # Step back onto the last stat and keep adjusting.
        allocation.undo()


def prompt_weapon_upgrade(ui, player: Player) -> bool:
    weapon = player.weapon
    if weapon.is_max_level:
        ui.error(f"{weapon.name} cannot be upgraded further.")
        return False
    if not ui.confirm(f"This will cost you {weapon.upgrade_cost} runes. Are you sure?"):
        return False
    ok, msg = safe_validate(upgrade_weapon, player)
    if not ok:
        ui.error(msg)
        return False
    ui.system(f"Your weapon is now {player.weapon.name}.")
    return True


def run_site_of_grace(ui, player: Player, catalog: List[Weapon], rules: Optional[dict] = None) -> None:
    ui.scene("You rest at a Site of Grace.")
    while True:
        picked = ui.choice("What dost thou wish to do?", GRACE_MENU)
        if picked is None or picked == 3:
            return
        if picked == 0:
            prompt_weapon_purchase(ui, player, catalog)
        elif picked == 1:
            prompt_level_up(ui, player, rules)
        elif picked == 2:
            prompt_weapon_upgrade(ui, player)
