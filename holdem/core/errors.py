"""
Exceptions raised by the Hold'em core.

Every error carries a short ``kind`` string so the command layer can report
it to a presentation collaborator without leaking exception classes.
"""

from typing import Optional


class PokerError(Exception):
    """Base class for recoverable engine errors. State is left unchanged."""

    kind = "poker_error"

    def __init__(self, message: str, player_id: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.player_id = player_id


class IllegalActionError(PokerError):
    """Action not permitted in the current state (wrong actor, check facing a bet, short raise)."""

    kind = "illegal_action"


class InsufficientChipsError(IllegalActionError):
    """A raise target the player cannot afford. Calls and all-ins clamp instead."""

    kind = "insufficient_chips"


class IllegalPhaseError(PokerError):
    """Command invoked in a phase that forbids it."""

    kind = "illegal_phase"


class InvariantViolationError(RuntimeError):
    """Internal accounting broke. Not recoverable, never caught by the engine."""

    kind = "internal_error"
