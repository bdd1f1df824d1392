"""
Player class for Texas Hold'em.

Manages a seat's state:
- Stack (chip count) and the chips committed this round / this hand
- Hole cards and the cached showdown evaluation
- Participation flags (folded, all-in) and positional flags (button, blinds)
"""

from __future__ import annotations
from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field

from holdem.core.card import Card
from holdem.core.hand import HandResult


@dataclass
class Player:
    """
    A player in the Texas Hold'em game.

    Attributes:
        player_id: Stable seat id (0 is the human seat by default)
        name: Display name
        chips: Chips behind (not yet committed)
        is_automated: True if the policy acts for this seat
        current_bet: Amount committed in the current betting round
        total_bet: Total amount committed in the current hand (for side pots)
        hole_cards: The player's private cards (0 or 2)
        hand_result: Evaluation cached at showdown
    """
    player_id: int
    name: str
    chips: int
    is_automated: bool = False
    current_bet: int = 0
    total_bet: int = 0
    has_folded: bool = False
    is_all_in: bool = False
    is_dealer: bool = False
    is_small_blind: bool = False
    is_big_blind: bool = False
    hole_cards: List[Card] = field(default_factory=list)
    hand_result: Optional[HandResult] = None
    cards_revealed: bool = False

    # Acted since the last full raise in this betting round
    has_acted: bool = False
    # Last action for display
    last_action: Optional[str] = None

    def reset_for_new_hand(self) -> None:
        """Reset per-hand state. Seats without chips sit the hand out."""
        self.hole_cards = []
        self.current_bet = 0
        self.total_bet = 0
        self.is_all_in = False
        self.is_dealer = False
        self.is_small_blind = False
        self.is_big_blind = False
        self.hand_result = None
        self.cards_revealed = False
        self.has_acted = False
        self.last_action = None
        self.has_folded = self.chips == 0

    def reset_for_new_round(self) -> None:
        """Reset player state for a new betting round (flop, turn, river)."""
        self.current_bet = 0
        self.has_acted = False
        self.last_action = None

    def deal_cards(self, cards: List[Card]) -> None:
        """Deal hole cards to the player."""
        self.hole_cards = list(cards)

    def commit(self, amount: int) -> int:
        """
        Move chips from the stack into the pot.

        Args:
            amount: Requested amount

        Returns:
            Actual amount committed (clamped to the stack)
        """
        if amount <= 0:
            return 0

        actual = min(amount, self.chips)
        self.chips -= actual
        self.current_bet += actual
        self.total_bet += actual

        if self.chips == 0:
            self.is_all_in = True

        return actual

    def fold(self) -> None:
        """Fold the hand."""
        self.has_folded = True
        self.last_action = "FOLD"

    def win(self, amount: int) -> None:
        """Receive chips from a pot."""
        self.chips += amount

    @property
    def is_in_hand(self) -> bool:
        """Still contesting the pot (not folded)."""
        return not self.has_folded

    @property
    def can_act(self) -> bool:
        """Eligible to act in a betting round."""
        return not self.has_folded and not self.is_all_in

    @property
    def max_bet(self) -> int:
        """Largest total this player can have in front of them this round."""
        return self.chips + self.current_bet

    def to_dict(self, hide_cards: bool = True) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            hide_cards: If True, only include hole cards once revealed
        """
        result = {
            "id": self.player_id,
            "name": self.name,
            "chips": self.chips,
            "current_bet": self.current_bet,
            "total_bet": self.total_bet,
            "is_automated": self.is_automated,
            "has_folded": self.has_folded,
            "is_all_in": self.is_all_in,
            "is_dealer": self.is_dealer,
            "is_small_blind": self.is_small_blind,
            "is_big_blind": self.is_big_blind,
            "cards_revealed": self.cards_revealed,
            "last_action": self.last_action,
        }

        if self.hole_cards and (self.cards_revealed or not hide_cards):
            result["cards"] = [card.to_dict() for card in self.hole_cards]
        if self.cards_revealed and self.hand_result is not None:
            result["hand_name"] = self.hand_result.name

        return result

    def to_public_dict(self) -> Dict[str, Any]:
        """Get public information (visible to all players)."""
        return self.to_dict(hide_cards=True)

    def __repr__(self) -> str:
        return (
            f"Player({self.player_id}, {self.name}, chips={self.chips}, "
            f"bet={self.current_bet}, folded={self.has_folded}, all_in={self.is_all_in})"
        )

    def __str__(self) -> str:
        cards_str = " ".join(str(c) for c in self.hole_cards) if self.hole_cards else "??"
        return f"{self.name} [{cards_str}] ${self.chips}"
