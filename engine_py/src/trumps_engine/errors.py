# engine_py/src/trumps_engine/errors.py

class GameError(Exception):
    """Base exception for game-related errors."""
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class InvalidOperation(GameError):
    """An action was rejected because its preconditions do not hold."""


class CatalogError(GameError):
    """Upstream card or booster data could not be turned into game data."""
    def __init__(self, message: str):
        super().__init__(INVALID_CATALOG, message)


# Specific error codes
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

