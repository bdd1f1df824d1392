"""
What an automated policy sees, and what it answers with.
"""

from __future__ import annotations
from typing import List
from dataclasses import dataclass, field

from holdem.core.card import Card
from holdem.core.rules import ActionType, GamePhase


@dataclass(frozen=True)
class PlayerView:
    """Private view of one seat plus the public table."""
    player_id: int
    phase: GamePhase
    hole_cards: List[Card]
    community_cards: List[Card]
    chips: int
    own_bet: int
    current_bet: int
    min_raise: int
    pot: int

    @property
    def call_amount(self) -> int:
        """Chips owed to stay in, before clamping to the stack."""
        return max(0, self.current_bet - self.own_bet)

    @property
    def can_check(self) -> bool:
        return self.current_bet == self.own_bet

    @property
    def max_bet(self) -> int:
        """Largest total bet this seat can make this round."""
        return self.chips + self.own_bet

    @property
    def min_raise_to(self) -> int:
        return self.current_bet + self.min_raise


@dataclass(frozen=True)
class Decision:
    """An action chosen by a policy. ``amount`` is the raise-to total."""
    action: ActionType
    amount: int = 0
    reason: str = field(default="", compare=False)
