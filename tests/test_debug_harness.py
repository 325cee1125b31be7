import importlib.util
import sys
from pathlib import Path
import unittest
from unittest.mock import patch

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tarnished.ui.ui import UI  # noqa: E402


def load_harness():
    spec = importlib.util.spec_from_file_location("drive_encounter_debug", ROOT / "tools" / "drive_encounter_debug.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestDebugHarness(unittest.TestCase):
    def test_provider_tags_each_channel(self):
        harness = load_harness()
        ui = UI(harness.HarnessProvider())
        with patch("builtins.print") as printed:
            ui.narration("You were hit!")
            ui.reward("You receive 5 runes.")
        lines = [call.args[0] for call in printed.call_args_list]
        self.assertEqual(lines, ["narration | You were hit!", "   reward | You receive 5 runes."])
        self.assertEqual(ui.choice("Pick", ["a", "b"]), 0)

    def test_main_prints_a_result(self):
        harness = load_harness()
        with patch("builtins.print") as printed:
            harness.main("margit", 7, max_ticks=10)
        last = printed.call_args_list[-1].args[0]
        self.assertTrue(last.startswith("[RESULT] "))


if __name__ == "__main__":
    unittest.main()
