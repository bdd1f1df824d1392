"""Presentation boundary: validated schemas and the asynchronous table session."""

from holdem.interface.schemas import (
    ConfigureRequest,
    ActionRequest,
    ActionResultSchema,
    GameStateSchema,
)
from holdem.interface.session import TableSession

__all__ = [
    "ConfigureRequest",
    "ActionRequest",
    "ActionResultSchema",
    "GameStateSchema",
    "TableSession",
]
