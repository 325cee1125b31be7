from __future__ import annotations

from typing import Any, Dict, List, Optional
from tarnished.ui.provider import UIProvider


CLEAR_SCREEN = "\033[H\033[2J"


class CLIProvider(UIProvider):
    """
    Console provider.

    pace=True makes every narration line wait for Enter, the way the game
    reads when played slowly; it is off by default so fights scroll.
    """

    def __init__(self, pace: bool = False, clear_screen: bool = False):
        self.pace = pace
        self.clear_screen = clear_screen

    def scene(self, text: str, data: Optional[Dict[str, Any]] = None) -> None:
        if self.clear_screen:
            print(CLEAR_SCREEN, end="", flush=True)
        print()
        print(text)
        print()

    def narration(self, text: str, data: Optional[Dict[str, Any]] = None) -> None:
        print(text)
        if self.pace:
            input()

    def reward(self, text: str, data: Optional[Dict[str, Any]] = None) -> None:
        print(f"\n* {text} *\n")

    def system(self, text: str, data: Optional[Dict[str, Any]] = None) -> None:
        print(text)

    def error(self, text: str, data: Optional[Dict[str, Any]] = None) -> None:
        print(f"[ERROR] {text}")

    def choice(self, prompt: str, options: List[str], data: Optional[Dict[str, Any]] = None) -> int:
        print()
        if prompt:
            print(prompt)
        for i, opt in enumerate(options, start=1):
            print(f"{i}) {opt}")

        while True:
            raw = input("> ").strip()
            if raw.isdigit() and 1 <= int(raw) <= len(options):
                return int(raw) - 1
            self.error(f"Invalid action. Pick 1 to {len(options)}.")

    def text_input(self, prompt: str, data: Optional[Dict[str, Any]] = None) -> str:
        return input(f"{prompt} ").strip()

    def confirm(self, prompt: str = "Are you sure?") -> bool:
        while True:
            answer = input(f"{prompt} (Y or N) ").strip().upper()
            if answer in ("Y", "N"):
                return answer == "Y"
            self.error("Please enter Y or N.")
