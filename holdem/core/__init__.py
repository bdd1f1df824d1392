"""
Hold'em Core - Pure Python Texas Hold'em Game Logic

This module contains the evaluator and the table state machine, without
any presentation or scheduling concerns.
"""

from holdem.core.card import Card, Deck, Rank, Suit, parse_cards
from holdem.core.hand import HandRank, HandResult, evaluate_hand, compare_hands
from holdem.core.player import Player
from holdem.core.rules import GamePhase, ActionType, GameConfig, SMALL_BLIND, BIG_BLIND
from holdem.core.errors import (
    PokerError, IllegalActionError, IllegalPhaseError, InsufficientChipsError,
    InvariantViolationError,
)
from holdem.core.view import PlayerView, Decision
from holdem.core.table import Table, ActionRecord
from holdem.core.game import HoldemGame, ActionResult

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "parse_cards",
    "HandRank",
    "HandResult",
    "evaluate_hand",
    "compare_hands",
    "Player",
    "GamePhase",
    "ActionType",
    "GameConfig",
    "SMALL_BLIND",
    "BIG_BLIND",
    "PokerError",
    "IllegalActionError",
    "IllegalPhaseError",
    "InsufficientChipsError",
    "InvariantViolationError",
    "PlayerView",
    "Decision",
    "Table",
    "ActionRecord",
    "HoldemGame",
    "ActionResult",
]
