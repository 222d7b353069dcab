"""
Cricket trumps game engine: hand dealing, stat selection, booster scoring
and hand resolution for a Top Trumps style card game.
"""

from .engine import GameSession, TrumpsEngine
from .errors import CatalogError, GameError, InvalidOperation
from .models import Card, GameState, Hand, PlayedCard, Player
from .rules import RuleConfig, create_rules, default_rules

__all__ = [
    "Card",
    "CatalogError",
    "GameError",
    "GameSession",
    "GameState",
    "Hand",
    "InvalidOperation",
    "PlayedCard",
    "Player",
    "RuleConfig",
    "TrumpsEngine",
    "create_rules",
    "default_rules",
]
