"""
Card shuffling and dealing utilities.
"""

import random
from typing import Dict, List, Optional, Sequence

from .models import Card


def shuffle_cards(cards: Sequence[Card], seed: Optional[int] = None) -> List[Card]:
    """
    Shuffle a catalog deterministically if seed is provided.

    Args:
        cards: Cards to shuffle
        seed: Optional seed for deterministic shuffling

    Returns:
        Shuffled copy of the cards
    """
    cards_copy = list(cards)

    if seed is not None:
        rng = random.Random(seed)
        rng.shuffle(cards_copy)
    else:
        random.shuffle(cards_copy)

    return cards_copy


def deal_hands(cards: Sequence[Card], player_ids: Sequence[str], hand_size: int) -> Dict[str, List[Card]]:
    """
    Deal contiguous chunks of the catalog to players in seat order.

    The player at index i gets cards [i*hand_size, (i+1)*hand_size). Cards past
    hand_size * len(player_ids) are not dealt. A short catalog leaves the later
    players with fewer (or no) cards.
    """
    return {
        player_id: list(cards[i * hand_size:(i + 1) * hand_size])
        for i, player_id in enumerate(player_ids)
    }
