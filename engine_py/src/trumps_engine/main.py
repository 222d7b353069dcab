"""FastAPI main application for the cricket trumps engine"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from .catalog import normalize_cards
from .engine import GameSession, TrumpsEngine
from .errors import GAME_NOT_FOUND, GameError
from .events import (
    CreateGameRequest, DealRequest, ErrorCode, GameDataRequest, PlayCardRequest,
    SelectCardRequest, SelectStatRequest, SetPlayersRequest, create_error_response,
    create_state_response
)
from .serialization import sanitize_state, standings
from .shuffle import shuffle_cards

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Cricket Trumps Engine API",
    version="1.0.0",
    default_response_class=ORJSONResponse,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://localhost:5173", "*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

engine = TrumpsEngine()


@app.exception_handler(GameError)
async def game_error_handler(request: Request, exc: GameError):
    status_code = 404 if exc.code == GAME_NOT_FOUND else 400
    try:
        code = ErrorCode(exc.code)
    except ValueError:
        code = ErrorCode.INTERNAL
    body = create_error_response(code, exc.message)
    return ORJSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _state(session: GameSession, viewer: Optional[str] = None) -> dict:
    return create_state_response(sanitize_state(session.state, viewer)).model_dump()


@app.get("/")
async def root():
    return {"message": "Cricket Trumps Engine API", "version": "1.0.0"}


@app.get("/health")
async def health_check():
    return {"status": "healthy", "games": len(engine.games)}


@app.post("/games", status_code=201)
def create_game(request: CreateGameRequest):
    session = engine.create_game(request.game_id, players=request.players, rules=request.rules)
    return _state(session)


@app.get("/games/{game_id}")
def get_game(game_id: str, viewer: Optional[str] = None):
    return _state(engine.get_game(game_id), viewer)


@app.delete("/games/{game_id}")
def delete_game(game_id: str):
    engine.remove_game(game_id)
    return {"removed": game_id}


@app.get("/games/{game_id}/standings")
def get_standings(game_id: str):
    session = engine.get_game(game_id)
    return {"phase": session.state.phase, "standings": standings(session.state)}


@app.post("/games/{game_id}/players")
def set_players(game_id: str, request: SetPlayersRequest):
    session = engine.get_game(game_id)
    session.set_players(request.players)
    return _state(session)


@app.post("/games/{game_id}/deal")
def deal(game_id: str, request: DealRequest):
    session = engine.get_game(game_id)
    cards = normalize_cards(request.cards, fill_defaults=request.fill_defaults)
    if request.shuffle:
        cards = shuffle_cards(cards, request.seed)
    session.deal(cards)
    return _state(session)


@app.post("/games/{game_id}/game-data")
def set_game_data(game_id: str, request: GameDataRequest):
    session = engine.get_game(game_id)
    session.set_game_data(request.orange_cap_player, request.purple_cap_player, request.team_rankings)
    return _state(session)


@app.post("/games/{game_id}/select-stat")
def select_stat(game_id: str, request: SelectStatRequest):
    session = engine.get_game(game_id)
    session.select_stat(request.stat)
    return _state(session)


@app.post("/games/{game_id}/select-card")
def select_card(game_id: str, request: SelectCardRequest):
    session = engine.get_game(game_id)
    session.select_card(session.find_card(request.player_id, request.card_id))
    return _state(session)


@app.post("/games/{game_id}/play")
def play_card(game_id: str, request: PlayCardRequest):
    session = engine.get_game(game_id)
    card = session.find_card(request.player_id, request.card_id)
    session.play_card(request.player_id, card, request.booster)
    return _state(session)


@app.post("/games/{game_id}/resolve")
def resolve_hand(game_id: str):
    session = engine.get_game(game_id)
    session.resolve_hand()
    return _state(session)


@app.post("/games/{game_id}/new-hand")
def start_new_hand(game_id: str):
    session = engine.get_game(game_id)
    session.start_new_hand()
    return _state(session)


@app.post("/games/{game_id}/next-player")
def next_player(game_id: str):
    session = engine.get_game(game_id)
    session.next_player()
    return _state(session)


@app.post("/games/{game_id}/reset")
def reset_game(game_id: str):
    session = engine.get_game(game_id)
    session.reset()
    return _state(session)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
