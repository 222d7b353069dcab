"""
Basic tests for the trumps game engine.
"""

import pytest

from trumps_engine.constants import DEFAULT_PLAYERS
from trumps_engine.engine import GameSession
from trumps_engine.errors import (
    ACTION_NOT_ALLOWED, ALREADY_PLAYED, DUPLICATE_CARD, EMPTY_CATALOG, HAND_INCOMPLETE,
    NO_ACTIVE_HAND, InvalidOperation
)
from trumps_engine.rules import create_rules
from trumps_engine.serialization import sanitize_state


def test_new_session(session):
    """A new game waits for a deal with four empty-handed players."""
    state = session.state
    assert state.phase == "waiting"
    assert state.player_ids == DEFAULT_PLAYERS
    assert state.current_player == 0
    assert state.current_hand is None
    assert all(p.score == 0 for p in state.players.values())
    assert all(p.hand == [] for p in state.players.values())


def test_deal_twenty_cards(session, catalog):
    """Each of four players gets five cards, contiguous and in catalog order."""
    session.deal(catalog)

    for i, player_id in enumerate(session.state.player_ids):
        hand = session.state.players[player_id].hand
        assert [c.id for c in hand] == [f"c{j}" for j in range(i * 5, i * 5 + 5)]
    assert session.state.phase == "stat_selection"
    assert session.state.current_player == 0


def test_deal_drops_remainder(session, make_card, catalog):
    extra = catalog + [make_card("c20"), make_card("c21")]
    session.deal(extra)

    dealt = [c.id for p in session.state.players.values() for c in p.hand]
    assert dealt == [f"c{i}" for i in range(20)]
    assert "c20" not in dealt and "c21" not in dealt


def test_deal_with_custom_hand_size(make_card):
    rules = create_rules(hand_size=2)
    session = GameSession("small", players=["A", "B"], rules=rules)
    session.deal([make_card(f"x{i}") for i in range(5)])

    assert [c.id for c in session.state.players["A"].hand] == ["x0", "x1"]
    assert [c.id for c in session.state.players["B"].hand] == ["x2", "x3"]


def test_deal_empty_catalog(session):
    with pytest.raises(InvalidOperation) as exc:
        session.deal([])
    assert exc.value.code == EMPTY_CATALOG
    assert session.state.phase == "waiting"


def test_deal_duplicate_ids(session, make_card):
    with pytest.raises(InvalidOperation) as exc:
        session.deal([make_card("same"), make_card("same")])
    assert exc.value.code == DUPLICATE_CARD


def test_deal_replaces_previous_game(dealt_session, play_round, catalog):
    play_round(dealt_session, "Runs_Scored")
    dealt_session.deal(list(reversed(catalog)))

    state = dealt_session.state
    assert state.completed_hands == []
    assert state.current_player == 0
    assert [c.id for c in state.players["Player 1"].hand] == ["c19", "c18", "c17", "c16", "c15"]


def test_select_stat_moves_to_card_selection(dealt_session):
    dealt_session.select_stat("Runs_Scored")
    assert dealt_session.state.selected_stat == "Runs_Scored"
    assert dealt_session.state.phase == "card_selection"


def test_select_stat_outside_stat_selection_keeps_phase(session):
    """Recorded, but only the stat_selection phase transitions."""
    session.select_stat("Sixes")
    assert session.state.selected_stat == "Sixes"
    assert session.state.phase == "waiting"


def test_select_card_is_focus_only(dealt_session):
    card = dealt_session.state.players["Player 1"].hand[2]
    dealt_session.select_card(card)

    assert dealt_session.state.selected_card == card
    assert dealt_session.state.phase == "stat_selection"
    assert len(dealt_session.state.players["Player 1"].hand) == 5


def test_first_play_creates_hand(dealt_session):
    dealt_session.select_stat("Runs_Scored")
    card = dealt_session.state.players["Player 2"].hand[0]
    dealt_session.select_card(card)
    played = dealt_session.play_card("Player 2", card)

    hand = dealt_session.state.current_hand
    assert hand.initiator == "Player 2"
    assert hand.selected_stat == "Runs_Scored"
    assert hand.played_cards == [played]
    assert played.final_value == pytest.approx(105)
    assert not dealt_session.state.players["Player 2"].holds(card.id)
    assert dealt_session.state.selected_card is None
    assert dealt_session.state.phase == "card_selection"


def test_play_without_stat_uses_empty_stat(dealt_session):
    card = dealt_session.state.players["Player 1"].hand[0]
    played = dealt_session.play_card("Player 1", card)

    assert dealt_session.state.current_hand.selected_stat == ""
    assert played.final_value == 0
    assert dealt_session.state.phase == "card_selection"


def test_later_plays_use_the_hand_stat(dealt_session):
    dealt_session.select_stat("Runs_Scored")
    dealt_session.play_card("Player 1", dealt_session.state.players["Player 1"].hand[0])
    dealt_session.select_stat("Wickets_Taken")
    played = dealt_session.play_card("Player 2", dealt_session.state.players["Player 2"].hand[0])

    assert played.final_value == pytest.approx(105)


def test_round_completes_after_every_player(dealt_session):
    dealt_session.select_stat("Runs_Scored")
    for n, player_id in enumerate(dealt_session.state.player_ids, start=1):
        dealt_session.play_card(player_id, dealt_session.state.players[player_id].hand[0])
        expected = "resolution" if n == 4 else "card_selection"
        assert dealt_session.state.phase == expected


def test_resolve_awards_point_and_winner_leads(dealt_session, play_round):
    hand = play_round(dealt_session, "Runs_Scored")

    # c15 has the most runs
    assert hand.winner == "Player 4"
    state = dealt_session.state
    assert state.players["Player 4"].score == 1
    assert state.completed_hands == [hand]
    assert state.current_hand is None
    assert state.phase == "stat_selection"
    assert state.current_player == 3


def test_resolve_lower_is_better(dealt_session, play_round):
    """c0 concedes the most, c15 the least."""
    hand = play_round(dealt_session, "Economy_Rate")
    assert hand.winner == "Player 4"


def test_resolve_higher_wickets(dealt_session, play_round):
    hand = play_round(dealt_session, "Wickets_Taken")
    assert hand.winner == "Player 1"
    assert dealt_session.state.current_player == 0


def test_resolve_without_hand(dealt_session):
    with pytest.raises(InvalidOperation) as exc:
        dealt_session.resolve_hand()
    assert exc.value.code == NO_ACTIVE_HAND


def test_resolve_incomplete_hand(dealt_session):
    dealt_session.select_stat("Runs_Scored")
    dealt_session.play_card("Player 1", dealt_session.state.players["Player 1"].hand[0])

    with pytest.raises(InvalidOperation) as exc:
        dealt_session.resolve_hand()
    assert exc.value.code == HAND_INCOMPLETE
    assert dealt_session.state.current_hand is not None


def test_full_game_reaches_game_over(dealt_session, play_round, card_ids):
    for n in range(5):
        play_round(dealt_session, "Runs_Scored")
        if n < 4:
            assert dealt_session.state.phase == "stat_selection"

    state = dealt_session.state
    assert state.phase == "game_over"
    assert len(state.completed_hands) == 5
    assert sum(p.score for p in state.players.values()) == 5
    assert state.players["Player 4"].score == 5
    assert dealt_session.leaders() == ["Player 4"]
    assert sorted(card_ids(state)) == sorted(f"c{i}" for i in range(20))


def test_game_over_leaves_turn_pointer(make_card):
    """The final hand's winner does not take the lead."""
    session = GameSession("duel", players=["A", "B"], rules=create_rules(hand_size=1))
    session.deal([make_card("a", Runs_Scored=10), make_card("b", Runs_Scored=90)])
    session.select_stat("Runs_Scored")
    session.play_card("A", session.state.players["A"].hand[0])
    session.play_card("B", session.state.players["B"].hand[0])
    hand = session.resolve_hand()

    assert hand.winner == "B"
    assert session.state.phase == "game_over"
    assert session.state.current_player == 0


def test_tie_goes_to_first_player_to_play(make_card):
    session = GameSession("tie", players=["A", "B"], rules=create_rules(hand_size=1))
    session.deal([make_card("a", Runs_Scored=50), make_card("b", Runs_Scored=50)])
    session.select_stat("Runs_Scored")
    session.play_card("B", session.state.players["B"].hand[0])
    session.play_card("A", session.state.players["A"].hand[0])

    assert session.resolve_hand().winner == "B"


def test_partition_invariant_through_a_game(dealt_session, card_ids):
    expected = sorted(f"c{i}" for i in range(20))
    state = dealt_session.state
    assert sorted(card_ids(state)) == expected

    for _ in range(5):
        dealt_session.select_stat("Sixes")
        for player_id in state.player_ids:
            dealt_session.play_card(player_id, state.players[player_id].hand[-1])
            ids = card_ids(state)
            assert len(ids) == len(set(ids))
            assert sorted(ids) == expected
        dealt_session.resolve_hand()
        assert sorted(card_ids(state)) == expected


def test_start_new_hand_from_lobby(session):
    session.select_stat("Fours")
    session.start_new_hand()

    assert session.state.phase == "stat_selection"
    assert session.state.selected_stat is None
    assert session.state.selected_card is None


def test_reset_restores_defaults(catalog, play_round):
    session = GameSession("reset", rules=create_rules(booster_policy="consumed"))
    session.deal(catalog)
    play_round(session, "Runs_Scored", boosters={"Player 1": "orange"})
    session.select_stat("Sixes")
    session.play_card("Player 2", session.state.players["Player 2"].hand[0])

    session.reset()

    state = session.state
    assert state.phase == "waiting"
    assert state.current_player == 0
    assert state.current_hand is None
    assert state.completed_hands == []
    assert state.selected_stat is None
    assert all(p.score == 0 for p in state.players.values())
    assert all(p.boosters.as_dict() == {"orange": True, "purple": True, "teamrank": True}
               for p in state.players.values())


def test_deal_after_reset_matches_fresh_game(catalog, play_round):
    fresh = GameSession("fresh")
    fresh.deal(catalog)

    replayed = GameSession("replayed")
    replayed.deal(catalog)
    play_round(replayed, "Runs_Scored")
    replayed.reset()
    replayed.deal(catalog)

    ignore = {"id", "version", "game_log"}
    a = {k: v for k, v in sanitize_state(fresh.state).items() if k not in ignore}
    b = {k: v for k, v in sanitize_state(replayed.state).items() if k not in ignore}
    assert a == b


def test_play_rejected_while_waiting(session, make_card):
    with pytest.raises(InvalidOperation) as exc:
        session.play_card("Player 1", make_card("c0"))
    assert exc.value.code == ACTION_NOT_ALLOWED


def test_start_new_hand_during_resolution_still_resolves(dealt_session):
    """A finished hand left pending by start_new_hand can still be resolved."""
    state = dealt_session.state
    dealt_session.select_stat("Runs_Scored")
    for player_id in state.player_ids:
        dealt_session.play_card(player_id, state.players[player_id].hand[0])
    assert state.phase == "resolution"

    dealt_session.start_new_hand()
    dealt_session.select_stat("Runs_Scored")
    assert state.phase == "card_selection"
    assert len(state.current_hand.played_cards) == 4

    with pytest.raises(InvalidOperation) as exc:
        dealt_session.play_card("Player 1", state.players["Player 1"].hand[0])
    assert exc.value.code == ALREADY_PLAYED

    hand = dealt_session.resolve_hand()
    assert hand.winner == "Player 4"
    assert state.current_hand is None
    assert state.phase == "stat_selection"
    assert state.current_player == 3
    assert state.players["Player 4"].score == 1


def test_start_new_hand_during_card_selection_keeps_hand(dealt_session):
    state = dealt_session.state
    dealt_session.select_stat("Runs_Scored")
    for player_id in ["Player 1", "Player 2"]:
        dealt_session.play_card(player_id, state.players[player_id].hand[0])

    dealt_session.start_new_hand()
    assert state.phase == "stat_selection"
    assert state.selected_stat is None

    with pytest.raises(InvalidOperation) as exc:
        dealt_session.resolve_hand()
    assert exc.value.code == HAND_INCOMPLETE

    dealt_session.select_stat("Sixes")
    for player_id in ["Player 3", "Player 4"]:
        dealt_session.play_card(player_id, state.players[player_id].hand[0])
    assert state.phase == "resolution"

    hand = dealt_session.resolve_hand()
    # The hand keeps the stat it started with
    assert hand.selected_stat == "Runs_Scored"
    assert hand.winner == "Player 4"
    assert state.current_hand is None
