"""
Pydantic schemas for the presentation boundary.

Commands coming in are validated with the request models; state going out
is the controller's ``get_state`` dict validated into GameStateSchema.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from holdem.core.rules import ActionType, BIG_BLIND, MIN_PLAYERS, MAX_PLAYERS


# ============= Request Schemas =============

class ConfigureRequest(BaseModel):
    """Request to seat a new table."""
    player_count: int = Field(ge=MIN_PLAYERS, le=MAX_PLAYERS, default=4)
    starting_chips: int = Field(ge=2 * BIG_BLIND, default=2000)


class ActionRequest(BaseModel):
    """Request to take a game action."""
    player_id: Optional[int] = Field(default=None, ge=0, description="Acting seat, the human seat if omitted")
    action_type: ActionType = Field(..., description="Action type: FOLD, CHECK, CALL, RAISE, ALL_IN")
    amount: int = Field(default=0, ge=0, description="Raise-to total for RAISE")

    @field_validator("action_type", mode="before")
    @classmethod
    def _upper(cls, value):
        return value.upper() if isinstance(value, str) else value


# ============= Response Schemas =============

class CardSchema(BaseModel):
    """Card representation."""
    rank: str
    suit: str
    text: str
    color: str


class PlayerPublicSchema(BaseModel):
    """Seat information visible to everyone."""
    id: int
    name: str
    chips: int
    current_bet: int
    total_bet: int
    is_automated: bool
    has_folded: bool
    is_all_in: bool
    is_dealer: bool
    is_small_blind: bool
    is_big_blind: bool
    cards_revealed: bool
    last_action: Optional[str] = None
    cards: Optional[List[CardSchema]] = None
    hand_name: Optional[str] = None


class ActionSchema(BaseModel):
    """Available action."""
    type: str
    amount: Optional[int] = None
    min: Optional[int] = None
    max: Optional[int] = None


class PublicInfoSchema(BaseModel):
    """Public table state."""
    phase: str
    phase_name: str
    hand_number: int
    pot: int
    current_bet: int
    min_raise: int
    action_count: int
    last_aggressor: int
    board: List[CardSchema]
    dealer_position: int
    small_blind_position: int
    big_blind_position: int
    current_player: int
    players: List[PlayerPublicSchema]


class PrivateInfoSchema(BaseModel):
    """Private state for the requesting seat."""
    player_id: Optional[int] = None
    hand: List[CardSchema] = []
    is_turn: bool = False
    available_moves: List[str] = []
    legal_actions: List[ActionSchema] = []
    chips_to_call: int = 0
    min_raise_to: int = 0
    max_raise_to: int = 0


class ShowdownEntrySchema(BaseModel):
    """A hand revealed at showdown."""
    player_id: int
    name: str
    cards: List[CardSchema]
    hand_rank: int
    hand_name: str
    won: int = 0


class WinnerSchema(BaseModel):
    """Winner information."""
    player_id: int
    name: str
    amount: int
    hand_rank: Optional[int] = None
    hand_name: Optional[str] = None
    cards: List[str] = []


class GameStateSchema(BaseModel):
    """Complete snapshot for one seat."""
    public_info: PublicInfoSchema
    private_info: PrivateInfoSchema
    showdown: List[ShowdownEntrySchema] = []
    winners: List[WinnerSchema] = []


class ActionResultSchema(BaseModel):
    """Result of a submitted action."""
    model_config = ConfigDict(use_enum_values=True)

    success: bool
    message: str
    action_type: Optional[ActionType] = None
    amount: int = 0
    player_id: Optional[int] = None
    error: Optional[str] = None


# ============= Session Message Schemas =============

class StateMessage(BaseModel):
    """State update pushed to subscribers."""
    type: str = "state"
    state: GameStateSchema


class ActionMessage(BaseModel):
    """An action that was just applied."""
    type: str = "action"
    result: ActionResultSchema


class ThinkingMessage(BaseModel):
    """An automated seat is deliberating."""
    type: str = "thinking"
    player_id: int
    delay: float


class ResultMessage(BaseModel):
    """Hand result pushed to subscribers."""
    type: str = "result"
    winners: List[WinnerSchema]
    showdown: List[ShowdownEntrySchema]
    board: List[CardSchema]


class ErrorMessage(BaseModel):
    """A rejected command."""
    type: str = "error"
    error: str
    message: str
