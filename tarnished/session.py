"""
session.py
----------
Step-driven wrapper around TurnResolver for non-blocking front ends.
Each step takes one action payload and returns the events it produced.
"""

from dataclasses import asdict
from typing import Any, Dict, List, Optional

from tarnished.engine.actions import parse_action
from tarnished.engine.turn_resolver import Status, TurnResolver
from tarnished.ui.event_provider import EventProvider
from tarnished.ui.ui import UI


ACTION_OPTIONS = ["attack:light", "attack:heavy", "attack:special", "dodge:<0-3>", "heal:hp", "heal:fp", "wait:<ticks>"]


class EncounterSession:
    def __init__(self, player, boss, rng=None, rules=None):
        self.events: List[Dict[str, Any]] = []
        self.ui = UI(EventProvider(self))
        self.resolver = TurnResolver(player, boss, ui=self.ui, rng=rng, rules=rules)
        self.last_report = None

    @property
    def finished(self) -> bool:
        return self.resolver.status != Status.IN_PROGRESS

    def emit(self, event: Dict[str, Any]):
        self.events.append(event)

    def step(self, player_input: Optional[Any] = None):
        self.events = []
        if not self.resolver.started:
            self.resolver.start()
            if player_input is None or _is_start(player_input):
                self._emit_awaiting()
                return self.events

        if self.finished:
            self.ui.error("The encounter is over.")
            return self.events

        self.last_report = self.resolver.step(parse_action(player_input))
        self._emit_awaiting()
        return self.events

    def _emit_awaiting(self):
        if self.finished:
            return
        self.emit({
            "type": "awaiting_action",
            "view": asdict(self.resolver.view()),
            "options": ACTION_OPTIONS,
        })


def _is_start(player_input: Any) -> bool:
    return isinstance(player_input, dict) and player_input.get("action") == "start"
