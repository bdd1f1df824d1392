"""
holdem - Single-table No-Limit Texas Hold'em Engine

One human against computer opponents:
- Pure Python hand evaluator and table state machine
- Heuristic policy for automated seats
- Snapshot schemas and an asyncio session for presentation layers

Usage:
    from holdem import HoldemGame, ActionType
    from holdem.interface import TableSession
"""

__version__ = "0.2.0"

from holdem.core.card import Card, Deck
from holdem.core.player import Player
from holdem.core.game import HoldemGame, ActionResult
from holdem.core.hand import HandRank, evaluate_hand
from holdem.core.rules import ActionType, GamePhase

__all__ = [
    "Card",
    "Deck",
    "Player",
    "HoldemGame",
    "ActionResult",
    "HandRank",
    "evaluate_hand",
    "ActionType",
    "GamePhase",
    "__version__",
]
