"""
Tests for the Hold'em hand controller.
"""

import random

import pytest
from holdem.agents.base import BaseAgent, CallAgent
from holdem.core.game import HoldemGame
from holdem.core.errors import IllegalPhaseError
from holdem.core.rules import ActionType, GamePhase
from holdem.core.view import Decision


class CheckingAgent(BaseAgent):
    """Always checks, even when that is illegal."""

    def decide(self, view, rng):
        return Decision(ActionType.CHECK)


class RecordingAgent(CallAgent):
    """Calling station that remembers the hook calls."""

    def __init__(self):
        super().__init__()
        self.started = []
        self.ended = []

    def on_hand_start(self, hand_number):
        self.started.append(hand_number)

    def on_hand_end(self, result):
        self.ended.append(result)


class TestConfigure:
    """Tests for table configuration."""

    def test_new_game_in_setup(self):
        """Nothing is seated before configure."""
        game = HoldemGame()
        assert game.phase == GamePhase.SETUP
        assert game.num_players == 0

    @pytest.mark.parametrize("count", [1, 9])
    def test_invalid_player_count(self, count):
        """Only 2-8 seats are allowed."""
        with pytest.raises(ValueError):
            HoldemGame().configure(count, 1000)

    def test_invalid_starting_chips(self):
        """Stacks must cover two big blinds."""
        with pytest.raises(ValueError):
            HoldemGame().configure(4, 39)

    def test_default_seats(self):
        """Seat 0 is the human, the rest are named computer seats."""
        game = HoldemGame()
        game.configure(4, 2000)
        assert game.phase == GamePhase.WAITING
        assert [p.name for p in game.players] == ["YOU", "Alex", "Bella", "Chris"]
        assert [p.is_automated for p in game.players] == [False, True, True, True]
        assert all(p.chips == 2000 for p in game.players)

    def test_set_agent_rejects_human_seat(self):
        """Only automated seats take a policy."""
        game = HoldemGame()
        game.configure(3, 1000)
        with pytest.raises(ValueError):
            game.set_agent(0, CallAgent())


class TestStartHand:
    """Tests for starting a hand."""

    def test_start_requires_configuration(self):
        """A hand cannot start before seating."""
        with pytest.raises(IllegalPhaseError):
            HoldemGame().start_hand()

    def test_start_hand(self, heads_up_game):
        """Blinds posted, cards dealt, the small blind to act heads-up."""
        heads_up_game.start_hand()
        assert heads_up_game.phase == GamePhase.PREFLOP
        assert heads_up_game.is_hand_running()
        assert heads_up_game.table.pot == 30
        assert heads_up_game.table.dealer_position == 0
        assert heads_up_game.current_player.player_id == 1
        for player in heads_up_game.players:
            assert len(player.hole_cards) == 2

    def test_cannot_start_during_hand(self, heads_up_game):
        """A second start during a hand is rejected."""
        heads_up_game.start_hand()
        with pytest.raises(IllegalPhaseError):
            heads_up_game.start_hand()

    def test_hand_history_starts(self, heads_up_game):
        """The hand history opens with the button and blinds."""
        heads_up_game.start_hand()
        first = heads_up_game.hand_history[0]
        assert first["action"] == "HAND_START"
        assert first["dealer"] == 0
        assert first["big_blind"] == 0


class TestSubmitAction:
    """Tests for submit_action."""

    def test_call(self, heads_up_game):
        """A legal call succeeds and reports the chips moved."""
        heads_up_game.start_hand()
        result = heads_up_game.submit_action(1, ActionType.CALL)
        assert result.success
        assert result.amount == 10
        assert result.message == "Alex: CALL $10"
        assert heads_up_game.current_player.player_id == 0

    def test_action_string(self, heads_up_game):
        """Action names are accepted in any case."""
        heads_up_game.start_hand()
        assert heads_up_game.submit_action(1, "call").success

    def test_unknown_action(self, heads_up_game):
        """Unknown actions are rejected."""
        heads_up_game.start_hand()
        result = heads_up_game.submit_action(1, "BET")
        assert not result.success
        assert result.error == "illegal_action"

    def test_not_your_turn(self, heads_up_game):
        """Acting out of turn fails and changes nothing."""
        heads_up_game.start_hand()
        before = heads_up_game.get_state()
        result = heads_up_game.submit_action(0, ActionType.FOLD)
        assert not result.success
        assert result.error == "illegal_action"
        assert heads_up_game.get_state() == before

    def test_check_facing_bet(self, heads_up_game):
        """Checking while owing chips fails."""
        heads_up_game.start_hand()
        result = heads_up_game.submit_action(1, ActionType.CHECK)
        assert not result.success
        assert "call" in result.message

    def test_call_nothing_owed_checks(self, heads_up_game):
        """The big blind calling a limp checks its option."""
        heads_up_game.start_hand()
        heads_up_game.submit_action(1, ActionType.CALL)
        result = heads_up_game.submit_action(0, ActionType.CALL)
        assert result.success
        assert result.action_type == ActionType.CHECK
        assert result.amount == 0
        assert heads_up_game.phase == GamePhase.FLOP
        assert heads_up_game.table.pot == 40

    def test_raise_beyond_stack(self, heads_up_game):
        """An unaffordable raise reports insufficient chips."""
        heads_up_game.start_hand()
        result = heads_up_game.submit_action(1, ActionType.RAISE, 5000)
        assert not result.success
        assert result.error == "insufficient_chips"

    def test_action_after_hand_over(self, heads_up_game):
        """No actions are accepted at showdown."""
        heads_up_game.start_hand()
        heads_up_game.submit_action(1, ActionType.FOLD)
        result = heads_up_game.submit_action(0, ActionType.CHECK)
        assert not result.success
        assert result.error == "illegal_phase"

    def test_automated_seat_rejected(self):
        """The human cannot act for a computer seat."""
        game = HoldemGame(rng=random.Random(3))
        game.configure(2, 1000)
        game.start_hand()
        assert game.is_automated_turn()
        result = game.submit_action(1, ActionType.CALL)
        assert not result.success
        assert "computer" in result.message


class TestBettingRounds:
    """Tests for street progression."""

    def test_preflop_to_flop(self, heads_up_game):
        """Call and check deal the flop, the seat after the button opens."""
        heads_up_game.start_hand()
        heads_up_game.submit_action(1, ActionType.CALL)
        heads_up_game.submit_action(0, ActionType.CHECK)
        assert heads_up_game.phase == GamePhase.FLOP
        assert len(heads_up_game.table.community_cards) == 3
        assert heads_up_game.current_player.player_id == 1
        assert heads_up_game.table.current_bet == 0

    def test_full_hand_to_showdown(self, heads_up_game, check_down):
        """Checking down reaches showdown and pays the whole pot."""
        heads_up_game.start_hand()
        check_down(heads_up_game)
        assert heads_up_game.phase == GamePhase.SHOWDOWN
        assert len(heads_up_game.table.community_cards) == 5
        winners = heads_up_game.get_winners()
        assert sum(w["amount"] for w in winners) == 40
        assert sum(p.chips for p in heads_up_game.players) == 2000
        assert len(heads_up_game.get_showdown()) == 2

    def test_raise_and_call(self, heads_up_game):
        """A raise forces the other seat to respond before the flop."""
        heads_up_game.start_hand()
        heads_up_game.submit_action(1, ActionType.RAISE, 60)
        assert heads_up_game.phase == GamePhase.PREFLOP
        assert heads_up_game.current_player.player_id == 0
        heads_up_game.submit_action(0, ActionType.CALL)
        assert heads_up_game.phase == GamePhase.FLOP
        assert heads_up_game.table.pot == 120

    def test_win_by_fold(self, heads_up_game):
        """A fold ends the hand without a showdown."""
        heads_up_game.start_hand()
        heads_up_game.submit_action(1, ActionType.FOLD)
        assert heads_up_game.phase == GamePhase.SHOWDOWN
        assert heads_up_game.get_winners() == [{
            "player_id": 0,
            "name": "YOU",
            "amount": 30,
            "hand_rank": None,
            "hand_name": None,
            "cards": [],
        }]
        assert heads_up_game.get_showdown() == []


class TestHandLifecycle:
    """Tests for finishing, restarting and resetting."""

    def test_finish_hand(self, heads_up_game):
        """finish_hand moves from showdown to waiting."""
        heads_up_game.start_hand()
        with pytest.raises(IllegalPhaseError):
            heads_up_game.finish_hand()
        heads_up_game.submit_action(1, ActionType.FOLD)
        heads_up_game.finish_hand()
        assert heads_up_game.phase == GamePhase.WAITING
        assert heads_up_game.get_winners() == []

    def test_next_hand_moves_button(self, heads_up_game):
        """Starting from showdown deals the next hand with the next button."""
        heads_up_game.start_hand()
        heads_up_game.submit_action(1, ActionType.FOLD)
        heads_up_game.start_hand()
        assert heads_up_game.table.hand_number == 2
        assert heads_up_game.table.dealer_position == 1
        assert heads_up_game.table.big_blind_position == 1
        assert heads_up_game.current_player.player_id == 0

    def test_reset_to_setup(self, heads_up_game):
        """Resetting mid-hand abandons it without paying the pot."""
        heads_up_game.start_hand()
        heads_up_game.reset_to_setup()
        assert heads_up_game.phase == GamePhase.SETUP
        assert heads_up_game.players == []
        assert not heads_up_game.is_hand_running()


class TestAutomatedTurns:
    """Tests for the policy hook."""

    def test_no_automated_turn_for_human(self, heads_up_game):
        """play_automated_turn does nothing on a human turn."""
        heads_up_game.start_hand()
        assert heads_up_game.play_automated_turn() is None

    def test_illegal_policy_falls_back(self, quiet_config):
        """An illegal policy action is replaced by a call."""
        game = HoldemGame(config=quiet_config, rng=random.Random(1), agent=CheckingAgent())
        game.configure(2, 1000)
        game.start_hand()
        result = game.play_automated_turn()
        assert result.success
        assert result.action_type == ActionType.CALL
        assert game.current_player.player_id == 0

    def test_hooks(self, quiet_config):
        """Agents hear about hand start and end."""
        agent = RecordingAgent()
        game = HoldemGame(config=quiet_config, rng=random.Random(2), agent=agent)
        game.configure(3, 1000, automated=[True, True, True])
        game.start_hand()
        game.run_automated_turns()
        assert game.phase == GamePhase.SHOWDOWN
        assert agent.started == [1]
        assert len(agent.ended) == 1
        assert agent.ended[0]["showdown"] is True

    def test_run_stops_for_human(self, quiet_config):
        """Automated play pauses when the human is to act."""
        game = HoldemGame(config=quiet_config, rng=random.Random(4), agent=CallAgent())
        game.configure(4, 1000)
        game.start_hand()
        results = game.run_automated_turns()
        assert len(results) == 1
        assert game.current_player.player_id == 0


class TestGameState:
    """Tests for get_state and legal action queries."""

    def test_public_info(self, heads_up_game):
        """Public info carries the table and the phase name."""
        heads_up_game.start_hand()
        public = heads_up_game.get_state()["public_info"]
        assert public["phase"] == "preflop"
        assert public["phase_name"] == "Preflop"
        assert public["pot"] == 30
        assert public["current_player"] == 1
        assert public["dealer_position"] == 0
        assert all("cards" not in p for p in public["players"])

    def test_private_info_for_actor(self, heads_up_game):
        """The acting seat sees its cards and raise range."""
        heads_up_game.start_hand()
        private = heads_up_game.get_state(for_player_id=1)["private_info"]
        assert private["is_turn"]
        assert len(private["hand"]) == 2
        assert private["chips_to_call"] == 10
        assert private["min_raise_to"] == 40
        assert private["max_raise_to"] == 1000
        assert private["available_moves"] == ["FOLD", "CALL", "RAISE", "ALL_IN"]

    def test_private_info_waiting_seat(self, heads_up_game):
        """A seat that is not to act has no legal actions."""
        heads_up_game.start_hand()
        private = heads_up_game.get_state(for_player_id=0)["private_info"]
        assert not private["is_turn"]
        assert private["legal_actions"] == []
        assert heads_up_game.get_legal_actions(0) == []

    def test_showdown_reveals_cards(self, heads_up_game, check_down):
        """Revealed hands appear in the public seats after showdown."""
        heads_up_game.start_hand()
        check_down(heads_up_game)
        players = heads_up_game.get_state()["public_info"]["players"]
        assert all(len(p["cards"]) == 2 for p in players)
        assert all(p["hand_name"] for p in players)
