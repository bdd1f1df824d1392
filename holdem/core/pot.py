"""
Pot construction and distribution.

Pots are built from each player's total commitment for the hand. Every
distinct commitment level among players still in the hand closes a layer;
a layer is contested by the non-folded players who reached it. Chips a
folded player put in above the last contested level join the topmost pot.
An uncalled excess ends up in a pot with a single eligible player and is
returned to them by the award.
"""

from __future__ import annotations
from typing import Callable, Dict, List, Sequence
from dataclasses import dataclass, field

from holdem.core.player import Player


@dataclass
class Pot:
    """A main pot or side pot."""
    amount: int = 0
    eligible_players: List[int] = field(default_factory=list)

    def add(self, amount: int) -> None:
        self.amount += amount


def build_pots(players: Sequence[Player]) -> List[Pot]:
    """
    Split the chips committed this hand into a main pot and side pots.

    Args:
        players: Every seat at the table, in seat order

    Returns:
        Pots from the main pot upward. Their amounts sum to the total
        committed by all players.
    """
    levels = sorted({p.total_bet for p in players if p.is_in_hand and p.total_bet > 0})

    pots: List[Pot] = []
    prev_level = 0
    for level in levels:
        amount = sum(
            min(p.total_bet, level) - min(p.total_bet, prev_level)
            for p in players
        )
        eligible = [p.player_id for p in players if p.is_in_hand and p.total_bet >= level]
        pots.append(Pot(amount=amount, eligible_players=eligible))
        prev_level = level

    # Folded chips above every live level
    leftover = sum(max(0, p.total_bet - prev_level) for p in players)
    if leftover:
        if pots:
            pots[-1].add(leftover)
        else:
            pots.append(Pot(amount=leftover))

    return pots


def split_pot(
    pot: Pot,
    winners: Sequence[int],
    seat_order: Sequence[int],
) -> Dict[int, int]:
    """
    Divide a pot evenly among tied winners.

    Odd chips go one at a time to the winners in ``seat_order``, which the
    caller supplies clockwise starting left of the button.

    Returns:
        Mapping of player id to chips won
    """
    if not winners:
        return {}

    share, remainder = divmod(pot.amount, len(winners))
    payouts = {pid: share for pid in winners}
    for pid in seat_order:
        if remainder == 0:
            break
        if pid in payouts:
            payouts[pid] += 1
            remainder -= 1
    return payouts


def award_pots(
    pots: Sequence[Pot],
    rank_of: Callable[[int], object],
    seat_order: Sequence[int],
) -> Dict[int, int]:
    """
    Award every pot to the best ranked eligible players.

    Args:
        pots: Pots from build_pots
        rank_of: Ordering key for a player id (higher is better)
        seat_order: Player ids clockwise from the seat left of the button

    Returns:
        Mapping of player id to total chips won
    """
    totals: Dict[int, int] = {}
    for pot in pots:
        if not pot.eligible_players or pot.amount == 0:
            continue
        if len(pot.eligible_players) == 1:
            winners = list(pot.eligible_players)
        else:
            best = max(rank_of(pid) for pid in pot.eligible_players)
            winners = [pid for pid in pot.eligible_players if rank_of(pid) == best]
        for pid, amount in split_pot(pot, winners, seat_order).items():
            totals[pid] = totals.get(pid, 0) + amount
    return totals
