"""
Stat scoring with booster multipliers, and hand winner selection.
"""

from typing import Dict, List, Optional

from .constants import (
    BATTING_STATS, BOWLING_STATS, BOOSTER_ORANGE, BOOSTER_PURPLE, BOOSTER_TEAMRANK,
    CAP_MULTIPLIER, LOWER_IS_BETTER_STATS, TEAM_RANK_MULTIPLIERS
)
from .models import Card, PlayedCard, parse_stat_value

__all__ = [
    "beats",
    "determine_winner",
    "is_lower_better",
    "parse_stat_value",
    "score_value",
    "team_rank_multiplier",
]


def team_rank_multiplier(team: Optional[str], team_rankings: Dict[str, int]) -> float:
    """Multiplier for the team-rank booster; unranked teams get no bonus."""
    if not team:
        return 1.0
    rank = team_rankings.get(team)
    return TEAM_RANK_MULTIPLIERS.get(rank, 1.0)


def score_value(
    card: Card,
    stat: str,
    booster: Optional[str],
    orange_cap_player: Optional[str],
    purple_cap_player: Optional[str],
    team_rankings: Dict[str, int],
) -> float:
    """
    Calculate the value of a card's stat with boosters applied.

    The orange and purple steps each apply a single 1.2 when either the
    booster is played or the card's player holds the cap on a matching stat.
    Steps compound multiplicatively.
    """
    base_value = card.stat(stat)
    multiplier = 1.0

    # Orange cap (batting stats)
    if booster == BOOSTER_ORANGE or (
        orange_cap_player is not None
        and orange_cap_player == card.name
        and stat in BATTING_STATS
    ):
        multiplier *= CAP_MULTIPLIER

    # Purple cap (bowling stats)
    if booster == BOOSTER_PURPLE or (
        purple_cap_player is not None
        and purple_cap_player == card.name
        and stat in BOWLING_STATS
    ):
        multiplier *= CAP_MULTIPLIER

    if booster == BOOSTER_TEAMRANK:
        multiplier *= team_rank_multiplier(card.team, team_rankings)

    return base_value * multiplier


def is_lower_better(stat: str) -> bool:
    """Check if the smaller value wins a hand on this stat."""
    return stat in LOWER_IS_BETTER_STATS


def beats(candidate: float, best: float, stat: str) -> bool:
    """Check if candidate strictly improves on best for this stat."""
    if is_lower_better(stat):
        return candidate < best
    return candidate > best


def determine_winner(played_cards: List[PlayedCard], stat: str) -> PlayedCard:
    """
    Pick the winning play of a hand.

    Plays are scanned in order and only a strict improvement replaces the
    running best, so on a tie the earliest play wins.
    """
    if not played_cards:
        raise ValueError("Cannot determine a winner without played cards")

    winning = played_cards[0]
    for played in played_cards[1:]:
        if beats(played.final_value, winning.final_value, stat):
            winning = played
    return winning
