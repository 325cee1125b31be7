from __future__ import annotations

from typing import Any, Dict, List, Optional
from tarnished.ui.provider import UIProvider


class UI:
    """
    Engine and menus talk to UI, never to a provider directly,
    so the same fight runs on the console, in tests or behind a session.
    """

    def __init__(self, provider: UIProvider):
        self.provider = provider

    def scene(self, text: str, data: Optional[Dict[str, Any]] = None) -> None:
        self.provider.scene(text, data)

    def narration(self, text: str, data: Optional[Dict[str, Any]] = None) -> None:
        self.provider.narration(text, data)

    def reward(self, text: str, data: Optional[Dict[str, Any]] = None) -> None:
        self.provider.reward(text, data)

    def system(self, text: str, data: Optional[Dict[str, Any]] = None) -> None:
        self.provider.system(text, data)

    def error(self, text: str, data: Optional[Dict[str, Any]] = None) -> None:
        self.provider.error(text, data)

    def choice(self, prompt: str, options: List[str], data: Optional[Dict[str, Any]] = None) -> Optional[int]:
        return self.provider.choice(prompt, options, data)

    def text_input(self, prompt: str, data: Optional[Dict[str, Any]] = None) -> Optional[str]:
        return self.provider.text_input(prompt, data)

    def confirm(self, prompt: str = "Are you sure?") -> bool:
        return bool(self.provider.confirm(prompt))
