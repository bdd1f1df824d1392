"""
Table state for a single Hold'em table.

The Table is the single source of truth for a hand in progress: seats, deck,
board, pot, phase, whose turn it is and the per-round betting counters. It
only changes through the transition methods below. Each one validates its
preconditions before touching anything, so a rejected transition leaves the
table exactly as it was. Chip conservation is checked after every change.
"""

from __future__ import annotations
from typing import List, Dict, Optional, Any
from dataclasses import dataclass
import logging

from holdem.core.card import Card, Deck
from holdem.core.hand import HandResult, evaluate_hand
from holdem.core.player import Player
from holdem.core.pot import Pot, build_pots, award_pots
from holdem.core.view import PlayerView
from holdem.core.errors import (
    IllegalActionError, IllegalPhaseError, InsufficientChipsError, InvariantViolationError,
)
from holdem.core.rules import (
    GamePhase, ActionType, GameConfig, BETTING_PHASES, NEXT_PHASE, STREET_CARDS,
    HOLE_CARDS, TOTAL_COMMUNITY_CARDS, get_blind_positions, min_raise_target, next_seat,
)


logger = logging.getLogger(__name__)


@dataclass
class ActionRecord:
    """An applied player action."""
    player_id: int
    action_type: ActionType
    amount: int        # Chips moved into the pot by this action
    total_bet: int     # Player's bet for the round afterwards
    is_all_in: bool
    reopened: bool     # Raised the bet and reset the action count
    phase: GamePhase

    @property
    def label(self) -> str:
        """Short display hint, e.g. 'CALL $40' or 'RAISE $120'."""
        if self.action_type == ActionType.FOLD:
            return "FOLD"
        if self.action_type == ActionType.CHECK:
            return "CHECK"
        if self.is_all_in:
            return f"ALL-IN ${self.total_bet}"
        if self.action_type == ActionType.CALL:
            return f"CALL ${self.amount}"
        return f"RAISE ${self.total_bet}"


class Table:
    """
    Mutable table state with explicit, validated transitions.

    Transitions: seat_players, new_hand, post_blind, deal_hole_cards,
    set_current_player, apply_action, reset_round, advance_phase,
    award_pot, reset_to_setup.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()
        self.players: List[Player] = []
        self.deck: Optional[Deck] = None
        self.community_cards: List[Card] = []
        self.phase = GamePhase.SETUP
        self.hand_number = 0

        # Positions
        self.dealer_position = -1
        self.small_blind_position = -1
        self.big_blind_position = -1
        self.current_player = -1

        # Betting state
        self.pot = 0
        self.current_bet = 0
        self.min_raise = self.config.big_blind
        self.action_count = 0
        self.last_aggressor = -1

        # Result of the last award: player id -> chips won
        self.payouts: Dict[int, int] = {}
        self.pots: List[Pot] = []

        self._chips_in_play = 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def is_betting(self) -> bool:
        return self.phase in BETTING_PHASES

    @property
    def players_in_hand(self) -> List[Player]:
        """Non-folded players."""
        return [p for p in self.players if p.is_in_hand]

    @property
    def eligible_players(self) -> List[Player]:
        """Non-folded, non-all-in players (the ones who can still act)."""
        return [p for p in self.players if p.can_act]

    @property
    def total_chips(self) -> int:
        """Chips behind plus the pot. Constant within a hand."""
        return sum(p.chips for p in self.players) + self.pot

    def get_player(self, player_id: int) -> Optional[Player]:
        if 0 <= player_id < len(self.players):
            return self.players[player_id]
        return None

    def call_amount(self, player: Player) -> int:
        """Chips the player must add to call, clamped to their stack."""
        return min(max(0, self.current_bet - player.current_bet), player.chips)

    def next_actor(self, from_seat: int) -> int:
        """First seat clockwise from ``from_seat`` that can act, or -1."""
        return next_seat(from_seat, [p.can_act for p in self.players])

    def is_round_complete(self) -> bool:
        """
        A betting round ends when at most one player is left in the hand,
        or every player who can act has matched the bet and acted since the
        last raise (so action_count has reached their number).
        """
        if len(self.players_in_hand) <= 1:
            return True

        eligible = self.eligible_players
        if not eligible:
            return True

        return (
            all(p.current_bet == self.current_bet for p in eligible)
            and self.action_count >= len(eligible)
            and all(p.has_acted for p in eligible)
        )

    def legal_actions(self, player: Player) -> List[Dict[str, Any]]:
        """
        Legal actions for ``player`` if it were their turn.

        Returns:
            List of action dicts with type and constraints
        """
        if not self.is_betting or not player.can_act:
            return []

        actions: List[Dict[str, Any]] = [{"type": ActionType.FOLD.value}]

        owed = self.current_bet - player.current_bet
        if owed <= 0:
            actions.append({"type": ActionType.CHECK.value})
        else:
            actions.append({"type": ActionType.CALL.value, "amount": min(owed, player.chips)})

        min_target = min_raise_target(self.current_bet, self.min_raise)
        if player.max_bet >= min_target:
            actions.append({
                "type": ActionType.RAISE.value,
                "min": min_target,
                "max": player.max_bet,
            })

        if player.chips > 0:
            actions.append({"type": ActionType.ALL_IN.value, "amount": player.max_bet})

        return actions

    def player_view(self, player_id: int) -> PlayerView:
        """Private view for one seat, used by automated policies."""
        player = self.players[player_id]
        return PlayerView(
            player_id=player_id,
            phase=self.phase,
            hole_cards=list(player.hole_cards),
            community_cards=list(self.community_cards),
            chips=player.chips,
            own_bet=player.current_bet,
            current_bet=self.current_bet,
            min_raise=self.min_raise,
            pot=self.pot,
        )

    # ------------------------------------------------------------------
    # Seating
    # ------------------------------------------------------------------

    def seat_players(self, players: List[Player]) -> None:
        """Replace the seats. Only allowed between hands."""
        if self.phase not in (GamePhase.SETUP, GamePhase.WAITING, GamePhase.SHOWDOWN):
            raise IllegalPhaseError(f"Cannot seat players during {self.phase.value}")

        self.players = players
        self.hand_number = 0
        self.dealer_position = -1
        self.small_blind_position = -1
        self.big_blind_position = -1
        self._clear_hand_state()
        self.phase = GamePhase.WAITING
        self._chips_in_play = self.total_chips

    def reset_to_setup(self) -> None:
        """Abandon everything, including any hand in progress. No pot is paid out."""
        self.players = []
        self.hand_number = 0
        self.dealer_position = -1
        self.small_blind_position = -1
        self.big_blind_position = -1
        self._clear_hand_state()
        self.phase = GamePhase.SETUP
        self._chips_in_play = 0

    def _clear_hand_state(self) -> None:
        self.deck = None
        self.community_cards = []
        self.pot = 0
        self.current_bet = 0
        self.min_raise = self.config.big_blind
        self.action_count = 0
        self.last_aggressor = -1
        self.current_player = -1
        self.payouts = {}
        self.pots = []

    # ------------------------------------------------------------------
    # Hand setup
    # ------------------------------------------------------------------

    def new_hand(self, deck: Deck, dealer_position: int) -> None:
        """
        Begin a hand: reset seats, install the deck, place the button and
        blinds. Phase becomes PREFLOP.
        """
        if self.phase != GamePhase.WAITING:
            raise IllegalPhaseError(f"Cannot start a hand during {self.phase.value}")

        funded = [p.chips > 0 for p in self.players]
        if sum(funded) < 2:
            raise IllegalPhaseError("Not enough players with chips")
        if not funded[dealer_position]:
            raise IllegalActionError(f"Seat {dealer_position} cannot hold the button without chips")

        sb_pos, bb_pos = get_blind_positions(dealer_position, funded)

        self._clear_hand_state()
        for player in self.players:
            player.reset_for_new_hand()

        self.hand_number += 1
        self.deck = deck
        self.dealer_position = dealer_position
        self.small_blind_position = sb_pos
        self.big_blind_position = bb_pos
        self.players[dealer_position].is_dealer = True
        self.players[sb_pos].is_small_blind = True
        self.players[bb_pos].is_big_blind = True

        self.phase = GamePhase.PREFLOP
        self._chips_in_play = self.total_chips
        logger.debug(
            f"Hand #{self.hand_number}: dealer={dealer_position} sb={sb_pos} bb={bb_pos}"
        )

    def post_blind(self, player_id: int, amount: int, big: bool = False) -> int:
        """
        Post a forced bet, clamped to the player's stack.

        Posting the big blind opens preflop betting at ``amount`` with a
        minimum raise of the same size, even when the poster is short.

        Returns:
            Chips actually posted
        """
        if self.phase != GamePhase.PREFLOP or self.community_cards:
            raise IllegalPhaseError("Blinds are posted before any card is dealt")
        player = self.players[player_id]
        if player.has_folded:
            raise IllegalActionError(f"{player.name} is not in this hand")

        posted = player.commit(amount)
        self.pot += posted
        player.last_action = f"{'BB' if big else 'SB'} ${posted}"
        if big:
            self.current_bet = amount
            self.min_raise = amount

        self._check_invariants()
        return posted

    def deal_hole_cards(self) -> None:
        """Deal two cards to every seat in the hand, seat by seat."""
        if self.phase != GamePhase.PREFLOP or self.deck is None:
            raise IllegalPhaseError("Hole cards are dealt at the start of preflop")
        if any(p.hole_cards for p in self.players):
            raise IllegalPhaseError("Hole cards already dealt")

        for player in self.players:
            if player.is_in_hand:
                player.deal_cards(self.deck.deal(HOLE_CARDS))

    def set_current_player(self, player_id: int) -> None:
        """Move the turn cursor. -1 means nobody is to act."""
        if player_id != -1:
            if not self.is_betting:
                raise IllegalPhaseError(f"No betting during {self.phase.value}")
            if not self.players[player_id].can_act:
                raise IllegalActionError(f"{self.players[player_id].name} cannot act")
        self.current_player = player_id

    # ------------------------------------------------------------------
    # Betting
    # ------------------------------------------------------------------

    def apply_action(self, player_id: int, action_type: ActionType, amount: int = 0) -> ActionRecord:
        """
        Validate and apply an action for the player whose turn it is.

        Args:
            player_id: Acting seat
            action_type: FOLD, CHECK, CALL, RAISE or ALL_IN
            amount: Raise-to total for RAISE, ignored otherwise

        Raises:
            IllegalPhaseError: No betting round in progress
            IllegalActionError: Wrong actor or action not allowed
            InsufficientChipsError: Raise target beyond the player's stack
        """
        if not self.is_betting:
            raise IllegalPhaseError(f"No betting during {self.phase.value}", player_id)
        if player_id != self.current_player:
            raise IllegalActionError("Not this player's turn", player_id)

        player = self.players[player_id]
        if not player.can_act:
            raise IllegalActionError(f"{player.name} cannot act", player_id)

        owed = self.current_bet - player.current_bet
        committed = 0
        reopened = False

        if action_type == ActionType.FOLD:
            player.fold()
            self.action_count += 1

        elif action_type == ActionType.CHECK:
            if owed > 0:
                raise IllegalActionError(f"Cannot check, must call ${owed}", player_id)
            self.action_count += 1

        elif action_type == ActionType.CALL:
            if owed <= 0:
                action_type = ActionType.CHECK
            else:
                committed = player.commit(owed)
            self.action_count += 1

        elif action_type == ActionType.RAISE:
            min_target = min_raise_target(self.current_bet, self.min_raise)
            if amount > player.max_bet:
                raise InsufficientChipsError(
                    f"Cannot raise to ${amount}, at most ${player.max_bet} available", player_id
                )
            if amount < min_target:
                raise IllegalActionError(
                    f"Minimum raise is to ${min_target} (current: ${self.current_bet}, "
                    f"min raise: ${self.min_raise})",
                    player_id,
                )
            prior_bet = self.current_bet
            committed = player.commit(amount - player.current_bet)
            self.current_bet = amount
            self.min_raise = amount - prior_bet
            self._mark_aggressor(player_id)
            reopened = True

        elif action_type == ActionType.ALL_IN:
            if player.chips == 0:
                raise IllegalActionError("Already all-in", player_id)
            committed = player.commit(player.chips)
            if player.current_bet > self.current_bet:
                increment = player.current_bet - self.current_bet
                self.current_bet = player.current_bet
                self.min_raise = increment
                self._mark_aggressor(player_id)
                reopened = True
            else:
                self.action_count += 1

        else:
            raise IllegalActionError(f"Unknown action: {action_type}", player_id)

        player.has_acted = True
        self.pot += committed

        record = ActionRecord(
            player_id=player_id,
            action_type=action_type,
            amount=committed,
            total_bet=player.current_bet,
            is_all_in=player.is_all_in,
            reopened=reopened,
            phase=self.phase,
        )
        player.last_action = record.label

        self._check_invariants()
        return record

    def _mark_aggressor(self, player_id: int) -> None:
        """A raise counts as the first action of a fresh lap around the table."""
        self.last_aggressor = player_id
        self.action_count = 1
        for i, player in enumerate(self.players):
            if i != player_id and player.can_act:
                player.has_acted = False

    # ------------------------------------------------------------------
    # Streets
    # ------------------------------------------------------------------

    def reset_round(self) -> None:
        """Clear per-round bets and counters before a new street."""
        for player in self.players:
            player.reset_for_new_round()
        self.current_bet = 0
        self.min_raise = self.config.big_blind
        self.action_count = 0
        self.last_aggressor = -1
        self.current_player = -1

    def advance_phase(self) -> GamePhase:
        """
        Move to the next phase.

        From a betting phase this resets the round and deals the next street
        (nothing is dealt on the way to showdown). From SHOWDOWN it returns
        the table to WAITING.

        Returns:
            The new phase
        """
        if self.phase == GamePhase.SHOWDOWN:
            self.phase = GamePhase.WAITING
            self.current_player = -1
            return self.phase
        if not self.is_betting:
            raise IllegalPhaseError(f"Cannot advance from {self.phase.value}")

        next_phase = NEXT_PHASE[self.phase]
        self.reset_round()
        if next_phase in STREET_CARDS:
            self._deal_community(STREET_CARDS[next_phase])
        self.phase = next_phase
        logger.debug(f"Hand #{self.hand_number}: {next_phase.value} {self.board_str}")
        return self.phase

    def _deal_community(self, count: int) -> None:
        if self.deck is None:
            raise IllegalPhaseError("No deck in play")
        if len(self.community_cards) + count > TOTAL_COMMUNITY_CARDS:
            raise IllegalPhaseError("Board is already complete")
        if self.config.burn_cards:
            self.deck.burn()
        self.community_cards.extend(self.deck.deal(count))

    @property
    def board_str(self) -> str:
        return " ".join(str(c) for c in self.community_cards)

    # ------------------------------------------------------------------
    # Showdown
    # ------------------------------------------------------------------

    def award_pot(self) -> Dict[int, int]:
        """
        Pay out the pot and end the hand in SHOWDOWN.

        With a single player left in the hand they take everything, no cards
        are evaluated or revealed. Otherwise every remaining hand is
        evaluated and revealed, side pots are built and each goes to its
        best eligible hand, split on ties.

        Returns:
            Mapping of player id to chips won
        """
        if not self.is_betting and self.phase != GamePhase.SHOWDOWN:
            raise IllegalPhaseError(f"No pot to award during {self.phase.value}")
        if self.phase == GamePhase.SHOWDOWN and self.pot == 0 and self.payouts:
            raise IllegalPhaseError("Pot already awarded")

        contenders = self.players_in_hand
        self.pots = build_pots(self.players)

        if len(contenders) == 1:
            payouts = {contenders[0].player_id: self.pot}
        else:
            results: Dict[int, HandResult] = {}
            for player in contenders:
                player.hand_result = evaluate_hand(player.hole_cards + self.community_cards)
                player.cards_revealed = True
                results[player.player_id] = player.hand_result
            payouts = award_pots(
                self.pots,
                lambda pid: results[pid].key,
                self._seat_order_from_button(),
            )

        if sum(payouts.values()) != self.pot:
            raise InvariantViolationError(
                f"Payouts {sum(payouts.values())} do not match pot {self.pot}"
            )

        for pid, amount in payouts.items():
            self.players[pid].win(amount)

        self.payouts = payouts
        self.pot = 0
        self.current_player = -1
        self.phase = GamePhase.SHOWDOWN
        self._check_invariants()
        return payouts

    def _seat_order_from_button(self) -> List[int]:
        n = self.num_players
        return [(self.dealer_position + 1 + i) % n for i in range(n)]

    # ------------------------------------------------------------------
    # Invariants
    # ------------------------------------------------------------------

    def _check_invariants(self) -> None:
        if self.total_chips != self._chips_in_play:
            raise InvariantViolationError(
                f"Chip count {self.total_chips} != {self._chips_in_play} at hand start"
            )
        for player in self.players:
            if player.is_all_in and player.chips != 0:
                raise InvariantViolationError(f"{player.name} is all-in with chips behind")
        if self.is_betting and self.pot != sum(p.total_bet for p in self.players):
            raise InvariantViolationError("Pot does not match committed chips")

    def to_dict(self) -> Dict[str, Any]:
        """Public table information."""
        return {
            "phase": self.phase.value,
            "hand_number": self.hand_number,
            "pot": self.pot,
            "current_bet": self.current_bet,
            "min_raise": self.min_raise,
            "action_count": self.action_count,
            "last_aggressor": self.last_aggressor,
            "board": [c.to_dict() for c in self.community_cards],
            "dealer_position": self.dealer_position,
            "small_blind_position": self.small_blind_position,
            "big_blind_position": self.big_blind_position,
            "current_player": self.current_player,
            "players": [p.to_public_dict() for p in self.players],
        }
