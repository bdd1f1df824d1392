"""
Pytest configuration and shared fixtures for holdem tests.
"""

import random

import pytest
from holdem.core.card import Card, Deck, Rank, Suit, parse_cards
from holdem.core.player import Player
from holdem.core.game import HoldemGame
from holdem.core.rules import ActionType, GameConfig


@pytest.fixture
def deck():
    """Create a fresh deck shuffled from a fixed seed."""
    return Deck(rng=random.Random(1234))


@pytest.fixture
def unshuffled_deck():
    """Create a fresh unshuffled deck."""
    return Deck(shuffle=False)


@pytest.fixture
def sample_player():
    """Create a sample player with 1000 chips."""
    return Player(player_id=0, name="YOU", chips=1000)


@pytest.fixture
def quiet_config():
    """Default blinds without think delays."""
    return GameConfig(think_delay_min=0.0, think_delay_max=0.0)


@pytest.fixture
def make_game(quiet_config):
    """
    Build a hot-seat game (every seat submits its own actions) whose deck
    deals ``cards`` in order: two per seat in seat order, then the board.
    """
    def _make(player_count=2, cards="", starting_chips=1000, stacks=None, seed=0):
        ordered = parse_cards(cards)
        game = HoldemGame(
            config=quiet_config,
            rng=random.Random(seed),
            deck_factory=lambda rng: Deck.from_deal_order(ordered),
        )
        game.configure(player_count, starting_chips, automated=[False] * player_count)
        if stacks is not None:
            for player, chips in zip(game.players, stacks):
                player.chips = chips
        return game

    return _make


@pytest.fixture
def check_down():
    """Play the current hand out with every seat checking or calling."""
    def _check_down(game):
        while game.is_hand_running():
            seat = game.table.current_player
            moves = [a["type"] for a in game.get_legal_actions(seat)]
            action = ActionType.CHECK if ActionType.CHECK.value in moves else ActionType.CALL
            result = game.submit_action(seat, action)
            assert result.success, result.message

    return _check_down


@pytest.fixture
def heads_up_game():
    """A 2-player game with 1000 chips each and a seeded shuffled deck."""
    game = HoldemGame(config=GameConfig(), rng=random.Random(7))
    game.configure(2, 1000, automated=[False, False])
    return game


@pytest.fixture
def sample_hand():
    """Create a sample 5-card hand (pair of aces)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.ACE, Suit.HEARTS),
        Card(Rank.KING, Suit.DIAMONDS),
        Card(Rank.QUEEN, Suit.CLUBS),
        Card(Rank.JACK, Suit.SPADES),
    ]


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return parse_cards("As Ks Qs Js Ts")


@pytest.fixture
def straight_flush():
    """Create a straight flush (9-high)."""
    return parse_cards("9h 8h 7h 6h 5h")


@pytest.fixture
def wheel():
    """Create the five-high straight A-2-3-4-5."""
    return parse_cards("Ac 2d 3h 4s 5c")
