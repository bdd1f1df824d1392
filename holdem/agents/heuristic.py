"""
Heuristic Agent Implementation.

A stateless rule-of-thumb policy. Hand strength is the evaluator category
(1-10) of hole cards plus board; before the flop, when there is no board,
a small hole-card table stands in for it. One uniform draw per decision
drives the randomised choices:

1. Default: check if possible, otherwise call.
2. Strength >= 4, draw < 0.4 and a minimum raise is affordable:
   raise to current bet + 2 * min raise (capped at the stack).
3. Otherwise, strength <= 1, draw < 0.25 and more than 50 to call: fold.
4. Otherwise, call > 40% of the stack, strength < 3 and draw < 0.3: fold.
"""

import random
from typing import List, Optional

from holdem.agents.base import BaseAgent
from holdem.core.card import Card, Rank
from holdem.core.hand import HandRank, evaluate_hand
from holdem.core.rules import ActionType, HAND_SIZE
from holdem.core.view import PlayerView, Decision


def preflop_strength(hole: List[Card]) -> int:
    """
    Rough category-scale strength for two hole cards.

    Pairs of tens or better rate like trips, other pairs, suited connectors
    and two broadway cards like one pair, everything else as high card.
    """
    if len(hole) < 2:
        return 0

    high, low = sorted((c.rank for c in hole), reverse=True)
    if high == low:
        return int(HandRank.THREE_OF_A_KIND) if high >= Rank.TEN else int(HandRank.ONE_PAIR)

    suited = hole[0].suit == hole[1].suit
    connected = high - low == 1 or (high == Rank.ACE and low == Rank.TWO)
    if (suited and connected) or low >= Rank.JACK:
        return int(HandRank.ONE_PAIR)
    return int(HandRank.HIGH_CARD)


def hand_strength(view: PlayerView) -> int:
    """Evaluator category of the seat's cards, or the preflop table without a board."""
    cards = view.hole_cards + view.community_cards
    if len(cards) < HAND_SIZE:
        return preflop_strength(view.hole_cards)
    return evaluate_hand(cards).rank


class HeuristicAgent(BaseAgent):
    """
    Rule-based opponent.

    The thresholds are configurable so tables can be tuned, the defaults
    reproduce the classic behaviour.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        raise_strength: int = 4,
        raise_probability: float = 0.4,
        weak_fold_probability: float = 0.25,
        weak_fold_min_call: int = 50,
        pressure_fold_ratio: float = 0.4,
        pressure_fold_strength: int = 3,
        pressure_fold_probability: float = 0.3,
    ):
        super().__init__(name)
        self.raise_strength = raise_strength
        self.raise_probability = raise_probability
        self.weak_fold_probability = weak_fold_probability
        self.weak_fold_min_call = weak_fold_min_call
        self.pressure_fold_ratio = pressure_fold_ratio
        self.pressure_fold_strength = pressure_fold_strength
        self.pressure_fold_probability = pressure_fold_probability

    def decide(self, view: PlayerView, rng: random.Random) -> Decision:
        strength = hand_strength(view)
        roll = rng.random()
        call_amount = view.call_amount

        if (
            strength >= self.raise_strength
            and roll < self.raise_probability
            and view.max_bet >= view.min_raise_to
        ):
            target = min(view.current_bet + 2 * view.min_raise, view.max_bet)
            return Decision(ActionType.RAISE, target, reason=f"strength {strength}")

        if (
            strength <= HandRank.HIGH_CARD
            and roll < self.weak_fold_probability
            and call_amount > self.weak_fold_min_call
        ):
            return Decision(ActionType.FOLD, reason="weak hand facing a bet")

        if (
            call_amount > self.pressure_fold_ratio * view.chips
            and strength < self.pressure_fold_strength
            and roll < self.pressure_fold_probability
        ):
            return Decision(ActionType.FOLD, reason="bet too large for hand")

        if view.can_check:
            return Decision(ActionType.CHECK)
        return Decision(ActionType.CALL)
