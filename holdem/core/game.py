"""
Texas Hold'em Hand Controller.

This module drives hands on a single table:
- Seating one human and automated opponents
- Button rotation, blinds and dealing
- Turn order and betting-round completion
- Running the board out and resolving the showdown
- Asking the automated policy for decisions on its seats

All state lives in the Table; the controller only calls its transitions.
"""

from __future__ import annotations
from typing import Callable, List, Dict, Optional, Any, Iterable, Union
from dataclasses import dataclass
import logging
import random

from holdem.core.card import Deck
from holdem.core.player import Player
from holdem.core.table import Table, ActionRecord
from holdem.core.view import PlayerView, Decision
from holdem.core.errors import PokerError, IllegalActionError, IllegalPhaseError
from holdem.core.rules import (
    GamePhase, ActionType, GameConfig, PHASE_NAMES,
    MIN_PLAYERS, MAX_PLAYERS, MIN_STARTING_CHIPS,
    default_player_names, next_seat, min_raise_target,
)


logger = logging.getLogger(__name__)

DeckFactory = Callable[[random.Random], Deck]


@dataclass
class ActionResult:
    """Result of a submitted action."""
    success: bool
    message: str
    action_type: Optional[ActionType] = None
    amount: int = 0
    player_id: Optional[int] = None
    error: Optional[str] = None


def shuffled_deck(rng: random.Random) -> Deck:
    return Deck(rng=rng)


class HoldemGame:
    """
    Hand controller for one human against automated opponents.

    Usage:
        game = HoldemGame(rng=random.Random(42))
        game.configure(player_count=4, starting_chips=2000)
        game.start_hand()

        while game.is_hand_running():
            if game.is_automated_turn():
                game.play_automated_turn()
            else:
                state = game.get_state(for_player_id=0)
                game.submit_action(0, ActionType.CALL)

        winners = game.get_winners()
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
        agent=None,
        deck_factory: Optional[DeckFactory] = None,
    ):
        """
        Args:
            config: Table configuration (blinds, burn policy, think delay)
            rng: Shared random source for shuffling and policy decisions
            agent: Policy for automated seats (HeuristicAgent by default)
            deck_factory: Builds the deck for each hand from the shared rng
        """
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else random.Random()
        self.table = Table(self.config)
        self._default_agent = agent
        self._agents: Dict[int, Any] = {}
        self._deck_factory = deck_factory or shuffled_deck

        # Hand history for replay
        self.hand_history: List[Dict[str, Any]] = []
        self._winners: List[Dict[str, Any]] = []

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def phase(self) -> GamePhase:
        return self.table.phase

    @property
    def players(self) -> List[Player]:
        return self.table.players

    @property
    def num_players(self) -> int:
        return self.table.num_players

    @property
    def current_player(self) -> Optional[Player]:
        """The player whose turn it is to act."""
        if self.table.current_player < 0:
            return None
        return self.table.players[self.table.current_player]

    def is_hand_running(self) -> bool:
        """Check if a betting round is in progress."""
        return self.table.is_betting

    def is_automated_turn(self) -> bool:
        player = self.current_player
        return player is not None and player.is_automated

    def funded_players(self) -> List[Player]:
        return [p for p in self.players if p.chips > 0]

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def configure(
        self,
        player_count: int,
        starting_chips: int,
        names: Optional[List[str]] = None,
        automated: Optional[Iterable[bool]] = None,
    ) -> None:
        """
        Create the seats. Seat 0 is the human unless ``automated`` says otherwise.

        Args:
            player_count: Number of seats (2-8)
            starting_chips: Stack for every seat (at least two big blinds)
            names: Optional display names
            automated: Optional per-seat flags; default is human on seat 0 only

        Raises:
            ValueError: Bad player count, stack, names or flags
            IllegalPhaseError: A hand is in progress
        """
        if player_count < MIN_PLAYERS or player_count > MAX_PLAYERS:
            raise ValueError(f"Number of players must be {MIN_PLAYERS}-{MAX_PLAYERS}")
        if starting_chips < max(MIN_STARTING_CHIPS, 2 * self.config.big_blind):
            raise ValueError(f"Starting chips must be at least {2 * self.config.big_blind}")

        names = list(names) if names is not None else default_player_names(player_count)
        flags = list(automated) if automated is not None else [i != 0 for i in range(player_count)]
        if len(names) != player_count or len(flags) != player_count:
            raise ValueError("names and automated must have one entry per seat")

        players = [
            Player(player_id=i, name=names[i], chips=starting_chips, is_automated=flags[i])
            for i in range(player_count)
        ]
        self.table.seat_players(players)

        if self._default_agent is None and any(flags):
            from holdem.agents.heuristic import HeuristicAgent
            self._default_agent = HeuristicAgent()
        self._agents = {p.player_id: self._default_agent for p in players if p.is_automated}

        self.hand_history = []
        self._winners = []
        logger.info(f"Table configured: {player_count} players, {starting_chips} chips each")

    def set_agent(self, player_id: int, agent) -> None:
        """Use a specific policy for one automated seat."""
        player = self.table.get_player(player_id)
        if player is None or not player.is_automated:
            raise ValueError(f"Seat {player_id} is not an automated seat")
        self._agents[player_id] = agent

    def start_hand(self) -> None:
        """
        Start a new hand: move the button, shuffle, post blinds, deal.

        Raises:
            IllegalPhaseError: Not between hands, or fewer than two funded players
        """
        if self.phase not in (GamePhase.WAITING, GamePhase.SHOWDOWN):
            raise IllegalPhaseError(f"Cannot start a hand during {self.phase.value}")
        if len(self.funded_players()) < 2:
            logger.warning("Cannot start hand: not enough players with chips")
            raise IllegalPhaseError("Not enough players with chips")

        if self.phase == GamePhase.SHOWDOWN:
            self.table.advance_phase()

        table = self.table
        table.new_hand(self._deck_factory(self.rng), self._next_dealer())
        self.hand_history = []
        self._winners = []
        logger.info(f"Starting hand #{table.hand_number}")

        # Post blinds
        sb = table.post_blind(table.small_blind_position, self.config.small_blind)
        bb = table.post_blind(table.big_blind_position, self.config.big_blind, big=True)
        logger.debug(f"Blinds posted: SB={sb} BB={bb}")

        table.deal_hole_cards()

        self._log_action("HAND_START", {
            "hand_number": table.hand_number,
            "dealer": table.dealer_position,
            "small_blind": table.small_blind_position,
            "big_blind": table.big_blind_position,
        })

        for agent in set(self._agents.values()):
            agent.on_hand_start(table.hand_number)

        if table.is_round_complete():
            self._end_betting_round()
        else:
            table.set_current_player(table.next_actor(table.big_blind_position))

    def _next_dealer(self) -> int:
        """Seat 0 deals the first hand; afterwards the button moves one funded seat on."""
        funded = [p.chips > 0 for p in self.players]
        if self.table.dealer_position < 0:
            return 0 if funded[0] else next_seat(0, funded)
        return next_seat(self.table.dealer_position, funded)

    def submit_action(
        self,
        player_id: int,
        action: Union[ActionType, str],
        amount: int = 0,
    ) -> ActionResult:
        """
        Apply an action from the human collaborator.

        Rejected (state unchanged) unless it is this player's turn, the seat
        is not run by the policy, and the action is legal.
        """
        try:
            action_type = self._parse_action(action)
            player = self.table.get_player(player_id)
            if player is None:
                raise IllegalActionError(f"No player with id {player_id}", player_id)
            if player.is_automated:
                raise IllegalActionError(f"{player.name} is played by the computer", player_id)
            record = self._apply(player_id, action_type, amount)
        except PokerError as e:
            logger.warning(f"Rejected {action!r} from seat {player_id}: {e.message}")
            return ActionResult(False, e.message, player_id=player_id, error=e.kind)

        return self._result(record)

    def play_automated_turn(self) -> Optional[ActionResult]:
        """
        Let the policy act for the current seat if it is automated.

        Returns:
            The applied action, or None if it is not an automated turn
        """
        if not self.is_hand_running() or not self.is_automated_turn():
            return None

        player_id = self.table.current_player
        view = self.table.player_view(player_id)
        decision = self._agents[player_id].decide(view, self.rng)

        try:
            record = self._apply(player_id, decision.action, decision.amount)
        except PokerError as e:
            fallback = self._passive_decision(view)
            logger.warning(
                f"Policy chose illegal {decision.action.value} for seat {player_id} "
                f"({e.message}); playing {fallback.action.value}"
            )
            record = self._apply(player_id, fallback.action, fallback.amount)

        return self._result(record)

    def run_automated_turns(self, max_turns: Optional[int] = None) -> List[ActionResult]:
        """Play automated turns until a human must act or the hand is over."""
        results: List[ActionResult] = []
        while self.is_automated_turn() and (max_turns is None or len(results) < max_turns):
            result = self.play_automated_turn()
            if result is None:
                break
            results.append(result)
        return results

    def finish_hand(self) -> None:
        """Leave the showdown and wait for the next hand."""
        if self.phase != GamePhase.SHOWDOWN:
            raise IllegalPhaseError(f"No finished hand during {self.phase.value}")
        self.table.advance_phase()

    def reset_to_setup(self) -> None:
        """Abort any hand and clear the table. No pot is distributed."""
        if self.table.is_betting:
            logger.info(f"Hand #{self.table.hand_number} abandoned")
        self.table.reset_to_setup()
        self._agents = {}
        self.hand_history = []
        self._winners = []

    # ------------------------------------------------------------------
    # Turn flow
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_action(action: Union[ActionType, str]) -> ActionType:
        if isinstance(action, ActionType):
            return action
        try:
            return ActionType(str(action).upper())
        except ValueError:
            raise IllegalActionError(f"Invalid action: {action}") from None

    @staticmethod
    def _passive_decision(view: PlayerView) -> Decision:
        if view.can_check:
            return Decision(ActionType.CHECK)
        return Decision(ActionType.CALL)

    def _apply(self, player_id: int, action_type: ActionType, amount: int) -> ActionRecord:
        """Apply an action to the table and move the hand forward."""
        record = self.table.apply_action(player_id, action_type, amount)
        logger.debug(
            f"Seat {player_id} {record.label} (pot {self.table.pot}, "
            f"bet {self.table.current_bet}, actions {self.table.action_count})"
        )
        self._log_action(record.action_type.value, {
            "player": player_id,
            "amount": record.amount,
            "total_bet": record.total_bet,
        })
        self._advance_turn(player_id)
        return record

    def _advance_turn(self, acting_seat: int) -> None:
        table = self.table

        if len(table.players_in_hand) <= 1:
            self._end_hand_early()
            return

        if table.is_round_complete():
            self._end_betting_round()
            return

        next_seat_ = table.next_actor(acting_seat)
        if next_seat_ == -1:
            self._end_betting_round()
            return
        table.set_current_player(next_seat_)

    def _end_betting_round(self) -> None:
        """
        Deal the next street and open its betting. Streets where fewer than
        two players can still bet are dealt straight through to showdown.
        """
        table = self.table
        while True:
            phase = table.advance_phase()
            if phase == GamePhase.SHOWDOWN:
                self._showdown()
                return
            self._log_action(phase.name, {"cards": [str(c) for c in table.community_cards]})

            if len(table.eligible_players) >= 2:
                table.set_current_player(table.next_actor(table.dealer_position))
                return

    def _showdown(self) -> None:
        table = self.table
        payouts = table.award_pot()

        winners = []
        for pid, amount in sorted(payouts.items()):
            player = table.players[pid]
            winners.append({
                "player_id": pid,
                "name": player.name,
                "amount": amount,
                "hand_rank": player.hand_result.rank,
                "hand_name": player.hand_result.name,
                "cards": [str(c) for c in player.hand_result.best_cards],
            })
        self._finish(winners, "SHOWDOWN")

    def _end_hand_early(self) -> None:
        """Everyone else folded: the remaining player takes the pot unseen."""
        table = self.table
        payouts = table.award_pot()

        winners = [{
            "player_id": pid,
            "name": table.players[pid].name,
            "amount": amount,
            "hand_rank": None,
            "hand_name": None,
            "cards": [],
        } for pid, amount in payouts.items()]
        self._finish(winners, "WIN_BY_FOLD")

    def _finish(self, winners: List[Dict[str, Any]], how: str) -> None:
        self._winners = winners
        self._log_action(how, {"winners": winners})
        summary = ", ".join(
            f"{w['name']} +{w['amount']}" + (f" ({w['hand_name']})" if w["hand_name"] else "")
            for w in winners
        )
        logger.info(f"Hand #{self.table.hand_number} over: {summary}")
        for agent in set(self._agents.values()):
            agent.on_hand_end({"winners": winners, "showdown": how == "SHOWDOWN"})

    def _result(self, record: ActionRecord) -> ActionResult:
        return ActionResult(
            success=True,
            message=f"{self.players[record.player_id].name}: {record.label}",
            action_type=record.action_type,
            amount=record.amount,
            player_id=record.player_id,
        )

    def _log_action(self, action: str, details: Dict[str, Any]) -> None:
        """Log an action to hand history."""
        self.hand_history.append({
            "action": action,
            "phase": self.phase.value,
            **details
        })

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_legal_actions(self, player_id: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Legal actions for a player (default: the current player). Empty
        unless it is that player's turn.
        """
        if player_id is None:
            player_id = self.table.current_player
        if player_id < 0 or player_id != self.table.current_player:
            return []
        return self.table.legal_actions(self.table.players[player_id])

    def get_winners(self) -> List[Dict[str, Any]]:
        """Winner information after the hand is complete."""
        if self.phase != GamePhase.SHOWDOWN:
            return []
        return list(self._winners)

    def get_showdown(self) -> List[Dict[str, Any]]:
        """Revealed hands at showdown: hole cards and evaluated hand names."""
        if self.phase != GamePhase.SHOWDOWN:
            return []
        return [
            {
                "player_id": p.player_id,
                "name": p.name,
                "cards": [c.to_dict() for c in p.hole_cards],
                "hand_rank": p.hand_result.rank,
                "hand_name": p.hand_result.name,
                "won": self.table.payouts.get(p.player_id, 0),
            }
            for p in self.players
            if p.cards_revealed and p.hand_result is not None
        ]

    def get_state(self, for_player_id: Optional[int] = None) -> Dict[str, Any]:
        """
        Get the current game state.

        Args:
            for_player_id: If specified, include private info for this player

        Returns:
            Game state dictionary
        """
        public_info = self.table.to_dict()
        public_info["phase_name"] = PHASE_NAMES[self.phase]

        private_info: Dict[str, Any] = {}
        player = self.table.get_player(for_player_id) if for_player_id is not None else None
        if player is not None:
            legal = self.get_legal_actions(player.player_id)
            private_info = {
                "player_id": player.player_id,
                "hand": [c.to_dict() for c in player.hole_cards],
                "is_turn": self.table.current_player == player.player_id,
                "available_moves": [a["type"] for a in legal],
                "legal_actions": legal,
                "chips_to_call": self.table.call_amount(player),
                "min_raise_to": min(
                    min_raise_target(self.table.current_bet, self.table.min_raise),
                    player.max_bet,
                ),
                "max_raise_to": player.max_bet,
            }

        return {
            "public_info": public_info,
            "private_info": private_info,
            "showdown": self.get_showdown(),
            "winners": self.get_winners(),
        }
