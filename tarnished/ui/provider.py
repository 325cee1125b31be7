from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class UIProvider(ABC):
    """
    Output sink and prompt source for one player.

    Narration never waits for acknowledgement unless the provider chooses to
    pace it. Blocking providers answer choice()/text_input() directly;
    non-blocking ones (is_blocking = False) return None and deliver the
    answer with the next step payload.
    """

    is_blocking = True

    @abstractmethod
    def scene(self, text: str, data: Optional[Dict[str, Any]] = None) -> None:
        """Chapter openings and arena descriptions."""

    @abstractmethod
    def narration(self, text: str, data: Optional[Dict[str, Any]] = None) -> None:
        """Combat lines: telegraphs, hits, dodges, boss dialogue."""

    @abstractmethod
    def reward(self, text: str, data: Optional[Dict[str, Any]] = None) -> None:
        """Runes and heal charges granted after a victory."""

    @abstractmethod
    def system(self, text: str, data: Optional[Dict[str, Any]] = None) -> None:
        pass

    @abstractmethod
    def error(self, text: str, data: Optional[Dict[str, Any]] = None) -> None:
        pass

    @abstractmethod
    def choice(
        self,
        prompt: str,
        options: List[str],
        data: Optional[Dict[str, Any]] = None,
    ) -> Optional[int]:
        """0-based index of the selected option."""

    @abstractmethod
    def text_input(
        self,
        prompt: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> Optional[str]:
        """Raw string input: names, stat points, wait lengths."""

    def confirm(self, prompt: str = "Are you sure?") -> Optional[bool]:
        picked = self.choice(prompt, ["Yes", "No"])
        return None if picked is None else picked == 0
