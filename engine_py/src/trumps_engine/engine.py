"""Game engine: per-game state machine and the registry of running games"""

import logging
import threading
import uuid
from typing import Dict, List, Optional, Sequence

from .constants import (
    BOOSTER_TYPES, DEFAULT_PLAYERS, PHASE_CARD_SELECTION, PHASE_GAME_OVER,
    PHASE_RESOLUTION, PHASE_STAT_SELECTION, PHASE_WAITING
)
from .errors import (
    ACTION_NOT_ALLOWED, ALREADY_PLAYED, BOOSTER_UNAVAILABLE, CARD_NOT_IN_HAND,
    DUPLICATE_CARD, EMPTY_CATALOG, GAME_EXISTS, GAME_NOT_FOUND, HAND_INCOMPLETE,
    INVALID_BOOSTER, INVALID_PLAYERS, NO_ACTIVE_HAND, NOT_YOUR_TURN, UNKNOWN_PLAYER,
    GameError, InvalidOperation
)
from .models import BoosterEntitlement, Card, GameData, GameState, Hand, PlayedCard, Player
from .rules import RuleConfig, default_rules
from .scoring import determine_winner, score_value
from .shuffle import deal_hands

logger = logging.getLogger(__name__)


class GameSession:
    """
    One game of cricket trumps.

    The action methods are the only mutators of ``state``. Each one runs under
    the session lock and either applies its whole transition or raises
    ``InvalidOperation`` leaving the state untouched.
    """

    def __init__(self, game_id: str, players: Optional[Sequence[str]] = None,
                 rules: Optional[RuleConfig] = None):
        self.rules = rules or default_rules
        self.state = GameState(id=game_id)
        self._lock = threading.Lock()
        self._install_players(list(players) if players is not None else list(DEFAULT_PLAYERS))

    # Roster

    def _install_players(self, player_ids: List[str]):
        if not player_ids or any(not p for p in player_ids):
            raise InvalidOperation(INVALID_PLAYERS, "Player ids must be non-empty")
        if len(set(player_ids)) != len(player_ids):
            raise InvalidOperation(INVALID_PLAYERS, "Player ids must be unique")
        if not self.rules.validate_player_count(len(player_ids)):
            raise InvalidOperation(
                INVALID_PLAYERS,
                f"Need between {self.rules.min_players} and {self.rules.max_players} players"
            )
        self.state.players = {pid: Player(id=pid) for pid in player_ids}
        self.state.current_player = 0

    def set_players(self, player_ids: Sequence[str]):
        """Replace the roster. Scores and boosters start fresh."""
        with self._lock:
            if self.state.phase != PHASE_WAITING:
                raise InvalidOperation(ACTION_NOT_ALLOWED, "Players can only change before the deal")
            self._install_players(list(player_ids))
            self._touch(f"Players: {', '.join(self.state.player_ids)}")

    def next_player(self):
        """Advance the turn pointer to the next seat."""
        with self._lock:
            state = self.state
            state.current_player = (state.current_player + 1) % len(state.players)
            state.version += 1

    def expected_player(self) -> str:
        """The player whose turn it notionally is: the leader, then each seat after them."""
        state = self.state
        ids = state.player_ids
        played = len(state.current_hand.played_cards) if state.current_hand else 0
        return ids[(state.current_player + played) % len(ids)]

    # Actions

    def deal(self, cards: Sequence[Card]):
        """Deal hand_size cards to each player in seat order; surplus cards are dropped."""
        with self._lock:
            if not cards:
                raise InvalidOperation(EMPTY_CATALOG, "Cannot deal an empty catalog")
            ids = [c.id for c in cards]
            if len(set(ids)) != len(ids):
                raise InvalidOperation(DUPLICATE_CARD, "Card ids must be unique within a game")

            state = self.state
            hands = deal_hands(cards, state.player_ids, self.rules.hand_size)
            for player_id, hand in hands.items():
                state.players[player_id].hand = hand

            state.current_player = 0
            state.selected_stat = None
            state.selected_card = None
            state.current_hand = None
            state.completed_hands = []
            state.phase = PHASE_STAT_SELECTION

            dealt = sum(len(h) for h in hands.values())
            dropped = len(cards) - dealt
            if dealt < self.rules.cards_needed(len(hands)):
                logger.warning(f"Game {state.id}: catalog too short, only {dealt} cards dealt")
            logger.info(f"Game {state.id}: dealt {dealt} cards to {len(hands)} players ({dropped} undealt)")
            self._touch(f"Dealt {self.rules.hand_size} cards to each player")

    def select_stat(self, stat: str):
        with self._lock:
            state = self.state
            state.selected_stat = stat
            if state.phase == PHASE_STAT_SELECTION:
                state.phase = PHASE_CARD_SELECTION
                self._touch(f"{state.current_player_id} chose {stat}")
            else:
                state.version += 1

    def select_card(self, card: Card):
        """Highlight a card for the acting player. Does not touch hands."""
        with self._lock:
            self.state.selected_card = card
            self.state.version += 1

    def play_card(self, player_id: str, card: Card, booster: Optional[str] = None) -> PlayedCard:
        with self._lock:
            state = self.state
            player = self._check_play(player_id, card, booster)
            # Score the dealt card, not whatever copy the caller passed in
            card = next(c for c in player.hand if c.id == card.id)

            hand = state.current_hand
            stat = hand.selected_stat if hand else (state.selected_stat or '')
            final_value = score_value(
                card,
                stat,
                booster,
                state.orange_cap_player,
                state.purple_cap_player,
                state.team_rankings,
            )

            if hand is None:
                hand = Hand(initiator=player_id, selected_stat=stat)
                state.current_hand = hand

            played = PlayedCard(
                player_id=player_id,
                card=card,
                final_value=final_value,
                booster_used=booster,
            )
            hand.played_cards.append(played)
            player.hand = [c for c in player.hand if c.id != card.id]
            if booster and self.rules.consumes_boosters:
                player.boosters.consume(booster)
            state.selected_card = None

            all_played = all(hand.has_played(pid) for pid in state.player_ids)
            state.phase = PHASE_RESOLUTION if all_played else PHASE_CARD_SELECTION

            logger.debug(f"Game {state.id}: {player_id} played {card.id} on {stat or '-'} for {final_value}")
            boost_note = f" with {booster} booster" if booster else ""
            self._touch(f"{player_id} played {card.name}{boost_note}: {final_value:g}")
            return played

    def resolve_hand(self) -> Hand:
        with self._lock:
            state = self.state
            hand = state.current_hand
            if hand is None:
                self._reject(NO_ACTIVE_HAND, "No hand in progress")
            # Completeness, not phase: start_new_hand may have moved the phase on
            if not all(hand.has_played(pid) for pid in state.player_ids):
                self._reject(HAND_INCOMPLETE, "Not every player has played a card yet")

            winning = determine_winner(hand.played_cards, hand.selected_stat)
            hand.winner = winning.player_id
            state.completed_hands.append(hand)
            state.players[winning.player_id].score += 1
            state.current_hand = None

            if all(len(p.hand) == 0 for p in state.players.values()):
                state.phase = PHASE_GAME_OVER
                logger.info(f"Game {state.id}: game over, scores {self.scores()}")
            else:
                state.phase = PHASE_STAT_SELECTION
                state.current_player = state.player_ids.index(winning.player_id)

            logger.info(f"Game {state.id}: hand {len(state.completed_hands)} won by {winning.player_id}")
            self._touch(f"{winning.player_id} won the hand on {hand.selected_stat or '-'} with {winning.final_value:g}")
            if state.phase == PHASE_GAME_OVER:
                self._touch(f"Game over! Winner: {', '.join(self.leaders())}")
            return hand

    def start_new_hand(self):
        with self._lock:
            state = self.state
            state.selected_stat = None
            state.selected_card = None
            state.phase = PHASE_STAT_SELECTION
            self._touch(f"New hand, {state.current_player_id} to choose a stat")

    def set_game_data(self, orange_cap_player: Optional[str], purple_cap_player: Optional[str],
                      team_rankings: Dict[str, int]):
        with self._lock:
            state = self.state
            state.orange_cap_player = orange_cap_player or None
            state.purple_cap_player = purple_cap_player or None
            state.team_rankings = dict(team_rankings)
            state.version += 1

    def apply_game_data(self, data: GameData):
        self.set_game_data(data.orange_cap_player, data.purple_cap_player, data.team_rankings)

    def reset(self):
        with self._lock:
            state = self.state
            state.current_player = 0
            state.selected_stat = None
            state.selected_card = None
            state.current_hand = None
            state.completed_hands = []
            for player in state.players.values():
                player.score = 0
                player.hand = []
                player.boosters = BoosterEntitlement()
            state.phase = PHASE_WAITING
            logger.info(f"Game {state.id}: reset")
            self._touch("Game reset")

    # Queries

    def find_card(self, player_id: str, card_id: str) -> Card:
        player = self._get_player(player_id)
        for card in player.hand:
            if card.id == card_id:
                return card
        self._reject(CARD_NOT_IN_HAND, f"{player_id} does not hold {card_id}")

    def scores(self) -> Dict[str, int]:
        return {pid: p.score for pid, p in self.state.players.items()}

    def leaders(self) -> List[str]:
        """Players with the top score, in seat order. The first is the declared winner."""
        scores = self.scores()
        if not scores:
            return []
        best = max(scores.values())
        return [pid for pid, score in scores.items() if score == best]

    # Helpers

    def _get_player(self, player_id: str) -> Player:
        player = self.state.players.get(player_id)
        if player is None:
            self._reject(UNKNOWN_PLAYER, f"Unknown player {player_id}")
        return player

    def _check_play(self, player_id: str, card: Card, booster: Optional[str]) -> Player:
        state = self.state
        player = self._get_player(player_id)
        if booster is not None and booster not in BOOSTER_TYPES:
            self._reject(INVALID_BOOSTER, f"Unknown booster {booster}")
        if state.phase in (PHASE_WAITING, PHASE_RESOLUTION, PHASE_GAME_OVER):
            self._reject(ACTION_NOT_ALLOWED, f"Cannot play a card during {state.phase}")
        if state.current_hand and state.current_hand.has_played(player_id):
            self._reject(ALREADY_PLAYED, f"{player_id} already played this hand")
        if not player.holds(card.id):
            self._reject(CARD_NOT_IN_HAND, f"{player_id} does not hold {card.id}")
        if self.rules.enforce_turn_order and player_id != self.expected_player():
            self._reject(NOT_YOUR_TURN, f"It is {self.expected_player()}'s turn")
        if booster is not None and not player.boosters.is_available(booster):
            self._reject(BOOSTER_UNAVAILABLE, f"{player_id} has already used the {booster} booster")
        return player

    def _reject(self, code: str, message: str):
        logger.warning(f"Game {self.state.id}: rejected [{code}] {message}")
        raise InvalidOperation(code, message)

    def _touch(self, log_line: str):
        self.state.version += 1
        self.state.game_log.append(log_line)


class TrumpsEngine:
    """Registry of independent game sessions keyed by game id."""

    def __init__(self, rules: Optional[RuleConfig] = None):
        self.rules = rules or default_rules
        self.games: Dict[str, GameSession] = {}
        self._lock = threading.Lock()

    def create_game(self, game_id: Optional[str] = None, players: Optional[Sequence[str]] = None,
                    rules: Optional[RuleConfig] = None) -> GameSession:
        with self._lock:
            game_id = game_id or str(uuid.uuid4())[:8]
            if game_id in self.games:
                raise GameError(GAME_EXISTS, f"Game {game_id} already exists")
            session = GameSession(game_id, players=players, rules=rules or self.rules)
            self.games[game_id] = session
            logger.info(f"Created game {game_id} with players {session.state.player_ids}")
            return session

    def get_game(self, game_id: str) -> GameSession:
        session = self.games.get(game_id)
        if session is None:
            raise GameError(GAME_NOT_FOUND, f"Game {game_id} not found")
        return session

    def remove_game(self, game_id: str):
        with self._lock:
            if self.games.pop(game_id, None) is None:
                raise GameError(GAME_NOT_FOUND, f"Game {game_id} not found")
            logger.info(f"Removed game {game_id}")
