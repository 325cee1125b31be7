"""
Deterministic harness to drive one boss encounter tick by tick so you can debug/step through.

Usage (plain run):
  python tools/drive_encounter_debug.py [boss_id] [seed]

Usage (step through with pdb):
  python -m pdb tools/drive_encounter_debug.py

It:
  - builds the boss from game-data and a default player
  - seeds combo selection
  - feeds a fixed opening script, then lets the autopilot play
  - prints every narration line and the per-tick report

Set breakpoints in `TurnResolver.step` / `_settle` to watch the state machine.
"""
from __future__ import annotations

import os
import random
import sys
from pathlib import Path
from typing import Optional

# Ensure project root on sys.path
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tarnished.engine.actions import AutoPilot, parse_action  # noqa: E402
from tarnished.engine.player import Player  # noqa: E402
from tarnished.engine.roster import build_boss  # noqa: E402
from tarnished.engine.turn_resolver import Status, TurnResolver  # noqa: E402
from tarnished.ui.provider import UIProvider  # noqa: E402
from tarnished.ui.ui import UI  # noqa: E402


OPENING = ["attack:light", "wait:1", "dodge:forward", "heal:hp"]


def _echo(channel: str):
    def emit(self, text: str, data: Optional[dict] = None) -> None:
        print(f"{channel:>9} | {text}")
    return emit


class HarnessProvider(UIProvider):
    """Prints every line tagged with its channel. The resolver never prompts here."""

    scene = _echo("scene")
    narration = _echo("narration")
    reward = _echo("reward")
    system = _echo("system")
    error = _echo("error")

    def choice(self, prompt, options, data=None):
        return 0

    def text_input(self, prompt, data=None):
        return ""


def main(boss_id: str = "margit", seed: int = 7, max_ticks: int = 500):
    rng = random.Random(seed)
    ui = UI(HarnessProvider())
    player = Player("Harness")
    boss = build_boss(boss_id)
    resolver = TurnResolver(player, boss, ui=ui, rng=rng)
    pilot = AutoPilot(random.Random(seed))

    resolver.start()
    script = list(OPENING)
    while resolver.status == Status.IN_PROGRESS and resolver.tick < max_ticks:
        action = parse_action(script.pop(0)) if script else pilot.next_action(resolver.view())
        report = resolver.step(action)
        print(f"[TICK] {report}")

    print(f"[RESULT] {resolver.result()}")


if __name__ == "__main__":
    if os.getenv("DEBUGPY"):
        import debugpy

        debugpy.listen(("0.0.0.0", 5678))
        print("Waiting for debugger attach on 5678...")
        debugpy.wait_for_client()
        print("Debugger attached.")
    args = sys.argv[1:]
    main(args[0] if args else "margit", int(args[1]) if len(args) > 1 else 7)
