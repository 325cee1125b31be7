import json
import os
import sys
import tempfile
from pathlib import Path
import unittest
from unittest.mock import patch

from pydantic import ValidationError as SchemaError

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tarnished.engine.roster import (  # noqa: E402
    AttackRecord,
    BossRecord,
    boss_ids,
    build_boss,
    build_catalog,
    default_weapon,
    load_campaign,
)
from tarnished.engine.rules import DEFAULT_RULES, RULES_ENV_VAR, deep_merge, load_rules, rule  # noqa: E402


class TestRoster(unittest.TestCase):
    def test_every_boss_builds(self):
        ids = boss_ids()
        self.assertIn("margit", ids)
        for boss_id in ids:
            boss = build_boss(boss_id)
            self.assertGreater(boss.max_hp, 0)
            self.assertTrue(boss.phase_one.combos)
            self.assertTrue(boss.phase_two.combos)

    def test_margit(self):
        margit = build_boss("margit")
        self.assertEqual(margit.name, "Margit, the Fell Omen")
        self.assertEqual(margit.current_hp, 4174)
        self.assertEqual(margit.reward, 15)
        self.assertTrue(margit.dialogue.phase_change)

    def test_builds_fresh_objects(self):
        a = build_boss("margit")
        a.take_damage(100)
        self.assertEqual(build_boss("margit").current_hp, 4174)

    def test_unknown_ids(self):
        with self.assertRaises(KeyError):
            build_boss("nobody")
        with self.assertRaises(KeyError):
            build_catalog("nowhere")

    def test_catalog_and_default_weapon(self):
        catalog = build_catalog("stormveil_gate")
        self.assertTrue(catalog)
        self.assertEqual(catalog[0].name, "Greatsword")
        fist = default_weapon()
        self.assertEqual((fist.name, fist.damage, fist.time, fist.price), ("Fist", 50, 1, 0))

    def test_campaign_order(self):
        chapters = load_campaign().chapters
        self.assertEqual(chapters[0].boss, "margit")
        self.assertEqual(chapters[0].opening, "character_creation")
        self.assertTrue(all(c.opening == "grace" for c in chapters[1:]))

    def test_bad_records_fail_at_load(self):
        with self.assertRaises(SchemaError):
            AttackRecord(text="x", charge=-1, cooldown=0, dodge=[0, 1], damage=1)
        with self.assertRaises(SchemaError):
            AttackRecord(text="x", charge=1, cooldown=0, dodge=[0], damage=1)
        with self.assertRaises(SchemaError):
            BossRecord(id="b", name="B", hp=10, phases={"1": [[{"text": "x", "charge": 1, "cooldown": 0,
                                                                 "dodge": [0, 1], "damage": 1}]]})

    def test_campaign_with_unknown_boss(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "campaign.json"
            path.write_text(json.dumps({"chapters": [{"boss": "nobody", "catalog": "liurnia"}]}), encoding="utf-8")
            with self.assertRaises(KeyError):
                load_campaign(path)


class TestRules(unittest.TestCase):
    def test_shipped_rules_match_defaults(self):
        rules = load_rules()
        for key, value in DEFAULT_RULES.items():
            self.assertEqual(rules[key], value, key)

    def test_override_from_env(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "rules.json"
            path.write_text(json.dumps({"heal_amount": 80, "attack_multipliers": {"heavy": 3}}), encoding="utf-8")
            with patch.dict(os.environ, {RULES_ENV_VAR: str(path)}):
                rules = load_rules()
        self.assertEqual(rules["heal_amount"], 80)
        self.assertEqual(rules["attack_multipliers"], {"light": 1, "heavy": 3, "special": 2})

    def test_bad_override_raises(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "rules.json"
            path.write_text("[1, 2]", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_rules(path)

    def test_rule_falls_back_to_defaults(self):
        self.assertEqual(rule(None, "dodge_window"), 2)
        self.assertEqual(rule({"dodge_window": 3}, "dodge_window"), 3)
        self.assertEqual(rule({}, "stat_cap"), 99)

    def test_deep_merge_replaces_lists(self):
        merged = deep_merge({"a": {"b": 1, "c": [1]}}, {"a": {"c": [2]}})
        self.assertEqual(merged, {"a": {"b": 1, "c": [2]}})


if __name__ == "__main__":
    unittest.main()
