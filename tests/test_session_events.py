import random
import sys
from pathlib import Path
import unittest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tarnished.engine.attack import AttackSpec, BossPhase, Combo  # noqa: E402
from tarnished.engine.boss import Boss, BossDialogue  # noqa: E402
from tarnished.engine.player import Player  # noqa: E402
from tarnished.engine.turn_resolver import EncounterResult, Status  # noqa: E402
from tarnished.session import EncounterSession  # noqa: E402
from tarnished.ui.events import (  # noqa: E402
    build_attack_telegraph,
    build_boss_update,
    build_combat_result,
    build_player_update,
    emit_event,
)


def make_boss():
    one = BossPhase((Combo((AttackSpec("Swing..", 2, 0, (0, 1), 50),)),))
    two = BossPhase((Combo((AttackSpec("Rage..", 3, 1, (2, 3), 10),)),))
    return Boss("Test Boss", 100, one, two, BossDialogue(phase_change="Enough!"), id="test")


def types(events):
    return [e["type"] for e in events]


class TestEventBuilders(unittest.TestCase):
    def test_player_update(self):
        payload = build_player_update(Player("Tester", hp=120))
        self.assertEqual(payload["type"], "player_update")
        self.assertEqual(payload["player"]["hp"], {"current": 120, "max": 300})
        self.assertEqual(payload["player"]["weapon"], "Fist")

    def test_boss_update(self):
        payload = build_boss_update(make_boss())
        self.assertEqual(payload["boss"]["id"], "test")
        self.assertEqual(payload["boss"]["phase"], 1)

    def test_telegraph_hides_dodge_window(self):
        payload = build_attack_telegraph(AttackSpec("Swing..", 2, 0, (0, 1), 50), 2)
        self.assertNotIn("dodge", payload)
        self.assertEqual(payload["charge"], 2)

    def test_combat_result(self):
        payload = build_combat_result(EncounterResult(Status.BOSS_DEFEATED, 7, 3))
        self.assertEqual(payload, {"type": "combat_result", "status": "boss_defeated", "player_won": True, "ticks": 7})

    def test_emit_without_session_is_a_noop(self):
        class _Provider:
            pass

        emit_event(_Provider(), {"type": "combat_state", "active": True})

    def test_emit_survives_broken_session(self):
        class _Session:
            def emit(self, payload):
                raise RuntimeError("socket closed")

        class _Provider:
            session = _Session()

        emit_event(_Provider(), {"type": "combat_log", "text": "x"})


class TestEncounterSession(unittest.TestCase):
    def test_start_surfaces_state_and_prompt(self):
        session = EncounterSession(Player("Tester"), make_boss(), rng=random.Random(0))
        events = session.step({"action": "start"})
        kinds = types(events)
        for expected in ("combat_state", "player_update", "boss_update", "attack_telegraph", "awaiting_action"):
            self.assertIn(expected, kinds)
        self.assertIn({"type": "narration", "text": "Swing..", "data": None}, events)
        awaiting = events[-1]
        self.assertEqual(awaiting["view"]["remaining"], 2)
        self.assertEqual(awaiting["view"]["stage"], "charge_up")

    def test_step_returns_only_new_events(self):
        session = EncounterSession(Player("Tester"), make_boss(), rng=random.Random(0))
        session.step()
        events = session.step("dodge:0")
        self.assertTrue(session.last_report.dodged)
        self.assertIn("Successfully dodged attack!", [e.get("text") for e in events])
        self.assertNotIn("combat_state", types(events))

    def test_first_step_may_carry_an_action(self):
        session = EncounterSession(Player("Tester"), make_boss(), rng=random.Random(0))
        session.step({"action": "attack", "kind": "light"})
        self.assertTrue(session.last_report.phase_changed)

    def test_invalid_payload_reprompts(self):
        session = EncounterSession(Player("Tester"), make_boss(), rng=random.Random(0))
        session.step()
        events = session.step("kick")
        self.assertFalse(session.last_report.accepted)
        self.assertEqual(events[-1]["type"], "awaiting_action")
        self.assertEqual(events[-1]["view"]["tick"], 0)

    def test_victory_ends_session(self):
        session = EncounterSession(Player("Tester"), make_boss(), rng=random.Random(0))
        session.step()
        phase_events = session.step("attack:light")
        self.assertIn("phase_change", types(phase_events))
        events = session.step("attack:light")
        self.assertTrue(session.finished)
        result = [e for e in events if e["type"] == "combat_result"]
        self.assertEqual(result[0]["player_won"], True)
        self.assertNotIn("awaiting_action", types(events))
        after = session.step("attack:light")
        self.assertEqual(types(after), ["error"])


if __name__ == "__main__":
    unittest.main()
