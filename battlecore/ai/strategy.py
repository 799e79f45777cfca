"""AI shooting strategy interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from battlecore.core.models import Coord, Message


class ShotStrategy(ABC):
    """Computer opponent contract: pick a target, learn from the outcome."""

    @abstractmethod
    def choose_shot(self) -> Coord:
        """Return next coordinate to fire."""

    @abstractmethod
    def notify_result(self, coord: Coord, message: Message) -> None:
        """Update strategy state with shot result."""
