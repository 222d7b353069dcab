"""
Request and response models for the HTTP surface.
"""

import time
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from .rules import RuleConfig

Booster = Literal["orange", "purple", "teamrank"]


class ErrorCode(str, Enum):
    """Error codes returned to clients."""
    INVALID_REQUEST = "INVALID_REQUEST"
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    GAME_EXISTS = "GAME_EXISTS"
    UNKNOWN_PLAYER = "UNKNOWN_PLAYER"
    INVALID_PLAYERS = "INVALID_PLAYERS"
    EMPTY_CATALOG = "EMPTY_CATALOG"
    DUPLICATE_CARD = "DUPLICATE_CARD"
    INVALID_CATALOG = "INVALID_CATALOG"
    CARD_NOT_IN_HAND = "CARD_NOT_IN_HAND"
    ALREADY_PLAYED = "ALREADY_PLAYED"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    INVALID_BOOSTER = "INVALID_BOOSTER"
    BOOSTER_UNAVAILABLE = "BOOSTER_UNAVAILABLE"
    NO_ACTIVE_HAND = "NO_ACTIVE_HAND"
    HAND_INCOMPLETE = "HAND_INCOMPLETE"
    ACTION_NOT_ALLOWED = "ACTION_NOT_ALLOWED"
    INTERNAL = "INTERNAL"


class CreateGameRequest(BaseModel):
    """Create game request."""
    game_id: Optional[str] = Field(default=None, min_length=1, max_length=50)
    players: Optional[List[str]] = Field(default=None, min_length=2, max_length=8)
    rules: Optional[RuleConfig] = None


class DealRequest(BaseModel):
    """Deal request. Cards are raw store rows, normalized on the way in."""
    cards: List[Dict[str, Any]] = Field(..., min_length=1)
    shuffle: bool = False
    seed: Optional[int] = None
    fill_defaults: bool = False


class GameDataRequest(BaseModel):
    """Booster metadata request."""
    orange_cap_player: Optional[str] = None
    purple_cap_player: Optional[str] = None
    team_rankings: Dict[str, int] = Field(default_factory=dict)


class SelectStatRequest(BaseModel):
    stat: str = Field(..., max_length=50)


class SelectCardRequest(BaseModel):
    player_id: str = Field(..., min_length=1)
    card_id: str = Field(..., min_length=1)


class PlayCardRequest(BaseModel):
    """Play card request."""
    player_id: str = Field(..., min_length=1)
    card_id: str = Field(..., min_length=1)
    booster: Optional[Booster] = None


class SetPlayersRequest(BaseModel):
    players: List[str] = Field(..., min_length=2, max_length=8)


class StateResponse(BaseModel):
    """Full state response."""
    state: Dict[str, Any]
    timestamp: float


class ErrorResponse(BaseModel):
    """Error response."""
    code: ErrorCode
    message: str
    timestamp: float


def create_state_response(state: Dict[str, Any]) -> StateResponse:
    return StateResponse(state=state, timestamp=time.time())


def create_error_response(code: ErrorCode, message: str) -> ErrorResponse:
    return ErrorResponse(code=code, message=message, timestamp=time.time())
