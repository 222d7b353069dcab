"""Game models and data structures"""

import math
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from .constants import BOOSTER_TYPES, PHASE_WAITING

_NUMERIC_PREFIX = re.compile(r'^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?')


def parse_stat_value(raw: Union[int, float, str, None]) -> float:
    """
    Convert a raw stat value to a number.

    Numbers pass through. Strings are read up to the end of their leading
    numeric part, so "75*" (a not-out score) reads as 75. Anything that does
    not start with a number, and None, reads as 0.
    """
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        value = float(raw)
        return value if math.isfinite(value) else 0.0
    if isinstance(raw, str):
        match = _NUMERIC_PREFIX.match(raw)
        if not match:
            return 0.0
        return float(match.group(0))
    return 0.0


@dataclass(frozen=True)
class Card:
    id: str
    name: str
    team: str
    stats: Dict[str, float] = field(default_factory=dict)

    def __post_init__(self):
        # Stats are always numbers, however the card was built
        object.__setattr__(
            self, 'stats', {str(k): parse_stat_value(v) for k, v in self.stats.items()}
        )

    def __hash__(self):
        return hash(self.id)

    def stat(self, key: str) -> float:
        return self.stats.get(key, 0.0)


@dataclass
class BoosterEntitlement:
    orange: bool = True
    purple: bool = True
    teamrank: bool = True

    def is_available(self, booster: str) -> bool:
        if booster not in BOOSTER_TYPES:
            return False
        return getattr(self, booster)

    def consume(self, booster: str):
        setattr(self, booster, False)

    def as_dict(self) -> Dict[str, bool]:
        return {'orange': self.orange, 'purple': self.purple, 'teamrank': self.teamrank}


@dataclass
class Player:
    id: str
    score: int = 0
    hand: List[Card] = field(default_factory=list)
    boosters: BoosterEntitlement = field(default_factory=BoosterEntitlement)

    def holds(self, card_id: str) -> bool:
        return any(c.id == card_id for c in self.hand)


@dataclass
class PlayedCard:
    player_id: str
    card: Card
    final_value: float
    booster_used: Optional[str] = None  # orange|purple|teamrank


@dataclass
class Hand:
    initiator: str
    selected_stat: str
    played_cards: List[PlayedCard] = field(default_factory=list)
    winner: Optional[str] = None

    def has_played(self, player_id: str) -> bool:
        return any(pc.player_id == player_id for pc in self.played_cards)


@dataclass
class GameData:
    """Booster metadata supplied by the card store."""
    orange_cap_player: Optional[str] = None
    purple_cap_player: Optional[str] = None
    team_rankings: Dict[str, int] = field(default_factory=dict)


@dataclass
class GameState:
    id: str
    version: int = 0
    phase: str = PHASE_WAITING  # waiting|stat_selection|card_selection|resolution|game_over
    players: Dict[str, Player] = field(default_factory=dict)  # insertion order is turn order
    current_player: int = 0
    selected_stat: Optional[str] = None
    selected_card: Optional[Card] = None  # UI focus only
    current_hand: Optional[Hand] = None
    completed_hands: List[Hand] = field(default_factory=list)
    orange_cap_player: Optional[str] = None
    purple_cap_player: Optional[str] = None
    team_rankings: Dict[str, int] = field(default_factory=dict)
    game_log: List[str] = field(default_factory=list)

    @property
    def player_ids(self) -> List[str]:
        return list(self.players.keys())

    @property
    def current_player_id(self) -> Optional[str]:
        ids = self.player_ids
        if not ids:
            return None
        return ids[self.current_player]
