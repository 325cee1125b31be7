import sys
from pathlib import Path
import unittest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tarnished.engine.player import Player  # noqa: E402
from tarnished.engine.site_of_grace import StatAllocation, buy_weapon, upgrade_weapon  # noqa: E402
from tarnished.engine.validator import ValidationError, safe_validate  # noqa: E402
from tarnished.engine.weapon import Weapon  # noqa: E402


def weapon(name, price):
    return Weapon(name, {"light": "Poke", "heavy": "Shove", "special": "Flurry"}, [1.0, 0, 0, 0, 0],
                  damage=100, time=2, price=price)


class TestStatAllocation(unittest.TestCase):
    def test_allocate_spends_runes_as_it_goes(self):
        player = Player("Tester")
        alloc = StatAllocation(player)
        alloc.allocate(5)
        self.assertEqual(player.runes, 10)
        self.assertEqual(alloc.current_stat, "Mind")
        self.assertEqual(player.stats[0], 0)

    def test_undo_refunds_and_steps_back(self):
        player = Player("Tester")
        alloc = StatAllocation(player)
        alloc.allocate(3)
        alloc.allocate(4)
        alloc.undo()
        self.assertEqual(player.runes, 12)
        self.assertEqual(alloc.current_stat, "Mind")
        self.assertEqual(alloc.stats[1], 0)

    def test_rules(self):
        player = Player("Tester", runes=500, stats=[98, 0, 0, 0, 0, 0, 0, 0])
        alloc = StatAllocation(player)
        with self.assertRaisesRegex(ValidationError, "Cannot go over 99"):
            alloc.allocate(2)
        with self.assertRaisesRegex(ValidationError, "positive"):
            alloc.allocate(-3)
        with self.assertRaisesRegex(ValidationError, "No actions to undo"):
            alloc.undo()
        poor = StatAllocation(Player("Poor", runes=1))
        with self.assertRaisesRegex(ValidationError, "Not enough runes"):
            poor.allocate(2)

    def test_commit_raises_ceilings_once(self):
        player = Player("Tester")
        alloc = StatAllocation(player)
        for points in (2, 1, 0, 5, 0, 0, 0, 0):
            alloc.allocate(points)
        self.assertTrue(alloc.is_complete)
        alloc.commit()
        self.assertEqual(player.stats, [2, 1, 0, 5, 0, 0, 0, 0])
        self.assertEqual((player.max_hp, player.hp), (360, 360))
        self.assertEqual((player.max_fp, player.fp), (230, 230))
        self.assertEqual(player.runes, 7)

        again = StatAllocation(player)
        for points in (1, 0, 0, 0, 0, 0, 0, 0):
            again.allocate(points)
        again.commit()
        self.assertEqual(player.max_hp, 390)

    def test_commit_needs_every_stat(self):
        alloc = StatAllocation(Player("Tester"))
        alloc.allocate(1)
        ok, msg = safe_validate(alloc.commit)
        self.assertFalse(ok)
        self.assertIn("every stat", msg)

    def test_abandon_refunds_everything(self):
        player = Player("Tester")
        alloc = StatAllocation(player)
        alloc.allocate(4)
        alloc.allocate(6)
        alloc.abandon()
        self.assertEqual(player.runes, 15)
        self.assertEqual(alloc.current_stat, "Vigor")


class TestWeaponShop(unittest.TestCase):
    def test_buy_swaps_into_catalog_with_refund(self):
        player = Player("Tester", runes=100, weapon=weapon("Club", 10))
        catalog = [weapon("Spear", 40), weapon("Axe", 60)]
        bought = buy_weapon(player, catalog, 1)
        self.assertEqual(bought.name, "Axe")
        self.assertEqual(player.weapon.name, "Axe")
        self.assertEqual(player.runes, 50)
        self.assertEqual([w.name for w in catalog], ["Spear", "Club"])

    def test_buy_refused(self):
        player = Player("Tester", runes=5)
        catalog = [weapon("Spear", 40)]
        ok, msg = safe_validate(buy_weapon, player, catalog, 0)
        self.assertFalse(ok)
        self.assertIn("Not enough runes", msg)
        ok, _ = safe_validate(buy_weapon, player, catalog, 3)
        self.assertFalse(ok)
        self.assertEqual(player.weapon.name, "Fist")
        self.assertEqual(player.runes, 5)

    def test_upgrade_costs_runes(self):
        player = Player("Tester")
        upgrade_weapon(player)
        self.assertEqual(player.runes, 5)
        self.assertEqual(player.weapon.name, "Fist +1")
        with self.assertRaisesRegex(ValidationError, "Not enough runes"):
            upgrade_weapon(player)
        self.assertEqual(player.weapon.level, 1)

    def test_upgrade_refused_at_max_level(self):
        player = Player("Tester", runes=10_000)
        for _ in range(4):
            upgrade_weapon(player)
        runes = player.runes
        ok, msg = safe_validate(upgrade_weapon, player)
        self.assertFalse(ok)
        self.assertIn("cannot be upgraded", msg)
        self.assertEqual(player.runes, runes)


if __name__ == "__main__":
    unittest.main()
