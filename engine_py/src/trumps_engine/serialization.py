"""
State serialization and sanitization utilities.
"""

from typing import Any, Dict, List, Optional

from .constants import GAME_LOG_TAIL
from .models import Card, GameState, Hand, PlayedCard


def serialize_card(card: Card) -> Dict[str, Any]:
    return {
        "id": card.id,
        "name": card.name,
        "team": card.team,
        "stats": dict(card.stats),
    }


def serialize_played_card(played: PlayedCard) -> Dict[str, Any]:
    return {
        "player_id": played.player_id,
        "card": serialize_card(played.card),
        "booster_used": played.booster_used,
        "final_value": played.final_value,
    }


def serialize_hand(hand: Hand) -> Dict[str, Any]:
    return {
        "initiator": hand.initiator,
        "selected_stat": hand.selected_stat,
        "played_cards": [serialize_played_card(pc) for pc in hand.played_cards],
        "winner": hand.winner,
    }


def sanitize_state(state: GameState, viewer_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Render game state for the presentation layer.

    Args:
        state: Game state to render
        viewer_id: Player looking at the table. Only their hand is shown in
            full; other players show a card count. With no viewer (a shared
            hot-seat screen) every hand is shown.

    Returns:
        JSON-safe state dictionary
    """
    sanitized = {
        "id": state.id,
        "version": state.version,
        "phase": state.phase,
        "player_order": state.player_ids,
        "current_player": state.current_player,
        "current_player_id": state.current_player_id,
        "selected_stat": state.selected_stat,
        "selected_card": serialize_card(state.selected_card) if state.selected_card else None,
        "current_hand": serialize_hand(state.current_hand) if state.current_hand else None,
        "completed_hands": [serialize_hand(h) for h in state.completed_hands],
        "orange_cap_player": state.orange_cap_player,
        "purple_cap_player": state.purple_cap_player,
        "team_rankings": dict(state.team_rankings),
        "players": {},
        "game_log": state.game_log[-GAME_LOG_TAIL:],
    }

    for player_id, player in state.players.items():
        sanitized_player = {
            "id": player.id,
            "score": player.score,
            "hand_count": len(player.hand),
            "boosters": player.boosters.as_dict(),
        }

        if viewer_id is None or player_id == viewer_id:
            sanitized_player["hand"] = [serialize_card(c) for c in player.hand]

        sanitized["players"][player_id] = sanitized_player

    return sanitized


def standings(state: GameState) -> List[Dict[str, Any]]:
    """Players ordered by score, highest first; seat order breaks ties."""
    ranked = sorted(
        enumerate(state.players.values()),
        key=lambda item: (-item[1].score, item[0])
    )
    return [
        {"position": pos, "player_id": player.id, "score": player.score}
        for pos, (_, player) in enumerate(ranked, start=1)
    ]
