"""
Texas Hold'em Rules and Constants.

Table rules used by the engine:

1. The button moves one funded seat clockwise every hand. The first hand of a
   session starts with seat 0 on the button.

2. Small blind is the first funded seat left of the button, big blind the
   next one. This holds heads-up as well, so with two players the button
   posts the big blind and the other seat opens preflop.

3. Preflop, the first seat left of the big blind acts first. Postflop, the
   first seat left of the button that can still act opens.

4. Minimum raise: a raise must increase the bet by at least the previous
   raise increment (the big blind at the start of a street).
"""

from enum import Enum
from dataclasses import dataclass
from typing import List, Sequence, Tuple


class GamePhase(str, Enum):
    """Phases of the table. Values are stable strings for collaborators."""
    SETUP = "setup"        # Seats not configured yet
    WAITING = "waiting"    # Configured, waiting for a hand to start
    PREFLOP = "preflop"    # After hole cards dealt, before flop
    FLOP = "flop"          # After 3 community cards
    TURN = "turn"          # After 4th community card
    RIVER = "river"        # After 5th community card
    SHOWDOWN = "showdown"  # Hand resolved, results visible


class ActionType(str, Enum):
    """Possible player actions."""
    FOLD = "FOLD"
    CHECK = "CHECK"
    CALL = "CALL"
    RAISE = "RAISE"
    ALL_IN = "ALL_IN"


# Display names, keyed by phase value
PHASE_NAMES = {
    GamePhase.SETUP: "Setup",
    GamePhase.WAITING: "Waiting",
    GamePhase.PREFLOP: "Preflop",
    GamePhase.FLOP: "Flop",
    GamePhase.TURN: "Turn",
    GamePhase.RIVER: "River",
    GamePhase.SHOWDOWN: "Showdown",
}

BETTING_PHASES = (GamePhase.PREFLOP, GamePhase.FLOP, GamePhase.TURN, GamePhase.RIVER)

# Next street for each betting phase
NEXT_PHASE = {
    GamePhase.PREFLOP: GamePhase.FLOP,
    GamePhase.FLOP: GamePhase.TURN,
    GamePhase.TURN: GamePhase.RIVER,
    GamePhase.RIVER: GamePhase.SHOWDOWN,
}

# Game parameters
SMALL_BLIND = 10
BIG_BLIND = 20
MIN_PLAYERS = 2
MAX_PLAYERS = 8
MIN_STARTING_CHIPS = 2 * BIG_BLIND

HUMAN_NAME = "YOU"
AI_NAMES = ["Alex", "Bella", "Chris", "Diana", "Ethan", "Fiona", "George"]

# Cards per phase
HOLE_CARDS = 2
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1
TOTAL_COMMUNITY_CARDS = 5

# Cards dealt when entering each street
STREET_CARDS = {
    GamePhase.FLOP: FLOP_CARDS,
    GamePhase.TURN: TURN_CARDS,
    GamePhase.RIVER: RIVER_CARDS,
}

# Hand evaluation
HAND_SIZE = 5  # Best 5-card hand


@dataclass
class GameConfig:
    """Table configuration. Blinds are fixed for the whole session."""
    small_blind: int = SMALL_BLIND
    big_blind: int = BIG_BLIND
    burn_cards: bool = False
    # Artificial deliberation for automated seats, in seconds
    think_delay_min: float = 1.0
    think_delay_max: float = 2.0


def default_player_names(num_players: int) -> List[str]:
    """Seat 0 is the human, the rest take names from the AI roster."""
    names = [HUMAN_NAME]
    for i in range(1, num_players):
        names.append(AI_NAMES[i - 1] if i - 1 < len(AI_NAMES) else f"AI{i}")
    return names


def next_seat(start: int, funded: Sequence[bool]) -> int:
    """
    First funded seat strictly clockwise from ``start``.

    Returns -1 if no seat qualifies.
    """
    n = len(funded)
    for i in range(1, n + 1):
        pos = (start + i) % n
        if funded[pos]:
            return pos
    return -1


def get_blind_positions(dealer_position: int, funded: Sequence[bool]) -> Tuple[int, int]:
    """
    Calculate small blind and big blind positions.

    Args:
        dealer_position: Seat holding the button
        funded: Per-seat flag, True if the seat has chips this hand

    Returns:
        Tuple of (small_blind_position, big_blind_position)
    """
    if sum(1 for f in funded if f) < 2:
        raise ValueError("Need at least 2 funded players")

    sb_pos = next_seat(dealer_position, funded)
    bb_pos = next_seat(sb_pos, funded)
    return sb_pos, bb_pos


def min_raise_target(current_bet: int, min_raise: int) -> int:
    """Smallest legal total for a raise."""
    return current_bet + min_raise
