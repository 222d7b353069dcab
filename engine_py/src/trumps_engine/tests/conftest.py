"""
Shared fixtures for the trumps engine tests.
"""

import pytest

from trumps_engine.engine import GameSession
from trumps_engine.models import Card


def build_card(card_id, name=None, team="Delhi Capitals", **stats):
    return Card(
        id=card_id,
        name=name or f"Cricketer {card_id}",
        team=team,
        stats={key: float(value) for key, value in stats.items()},
    )


def build_catalog(count):
    """Cards c0..c{count-1}: runs rise with the index, wickets fall."""
    return [
        build_card(f"c{i}", Runs_Scored=100 + i, Wickets_Taken=20 - i, Economy_Rate=10 - i * 0.1)
        for i in range(count)
    ]


def all_card_ids(state):
    """Every card id the state holds, wherever it is."""
    ids = []
    for player in state.players.values():
        ids.extend(c.id for c in player.hand)
    if state.current_hand:
        ids.extend(pc.card.id for pc in state.current_hand.played_cards)
    for hand in state.completed_hands:
        ids.extend(pc.card.id for pc in hand.played_cards)
    return ids


@pytest.fixture
def make_card():
    return build_card


@pytest.fixture
def catalog():
    return build_catalog(20)


@pytest.fixture
def session():
    return GameSession("test-game")


@pytest.fixture
def dealt_session(session, catalog):
    session.deal(catalog)
    return session


@pytest.fixture
def play_round():
    """Play one full hand: every player plays the card at `pick` on `stat`, then resolve."""
    def _play_round(session, stat, pick=0, boosters=None):
        boosters = boosters or {}
        session.select_stat(stat)
        for player_id in session.state.player_ids:
            card = session.state.players[player_id].hand[pick]
            session.play_card(player_id, card, boosters.get(player_id))
        return session.resolve_hand()
    return _play_round


@pytest.fixture
def card_ids():
    return all_card_ids
