"""
Base Agent Interface for automated seats.

An agent turns a PlayerView (one seat's private cards plus the public
table) into a Decision. Agents are shared between seats, so ``decide`` must
not keep per-seat state; all randomness comes from the rng the controller
passes in, which keeps seeded games reproducible.

Usage:
    class MyAgent(BaseAgent):
        def decide(self, view, rng):
            if view.can_check:
                return Decision(ActionType.CHECK)
            return Decision(ActionType.CALL)
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
import random

from holdem.core.rules import ActionType
from holdem.core.view import PlayerView, Decision


class BaseAgent(ABC):
    """
    Abstract base class for automated policies.

    Attributes:
        name: Human-readable name
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name or self.__class__.__name__

    @abstractmethod
    def decide(self, view: PlayerView, rng: random.Random) -> Decision:
        """
        Choose an action for the seat described by ``view``.

        Must return a legal action for that view: CHECK only when
        ``view.can_check``, RAISE only to a total between
        ``view.min_raise_to`` and ``view.max_bet``.
        """

    def on_hand_start(self, hand_number: int) -> None:
        """Called when a new hand starts."""
        pass

    def on_hand_end(self, result: Dict[str, Any]) -> None:
        """
        Called when a hand ends.

        Args:
            result: Dictionary containing:
                - winners: List of winner info
                - showdown: Whether there was a showdown
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"


class CallAgent(BaseAgent):
    """
    An agent that always checks or calls.

    Useful for tests and as a passive baseline.
    """

    def decide(self, view: PlayerView, rng: random.Random) -> Decision:
        if view.can_check:
            return Decision(ActionType.CHECK, reason="free card")
        return Decision(ActionType.CALL, reason="calling station")
