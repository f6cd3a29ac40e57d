# engine_py/src/codenames_engine/errors.py

from typing import Optional

from .constants import (
    ERROR_CONFLICT, ERROR_FORBIDDEN, ERROR_INVALID_INPUT, ERROR_PLAYER_NOT_FOUND,
    ERROR_ROOM_NOT_FOUND, ERROR_TEAM_REQUIRED
)


class GameError(Exception):
    """Base exception for game-related errors."""
    def __init__(self, code: str, message: str, room_code: Optional[str] = None,
                 player_id: Optional[str] = None):
        self.code = code
        self.message = message
        self.room_code = room_code
        self.player_id = player_id
        super().__init__(f"[{code}] {message}")

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "room_code": self.room_code,
            "player_id": self.player_id,
        }


class RoomNotFound(GameError):
    def __init__(self, room_code: str):
        super().__init__(ERROR_ROOM_NOT_FOUND, f"Room {room_code} not found", room_code=room_code)


class PlayerNotFound(GameError):
    def __init__(self, room_code: str, player_id: str):
        super().__init__(
            ERROR_PLAYER_NOT_FOUND,
            f"Player {player_id} not found in room {room_code}",
            room_code=room_code,
            player_id=player_id,
        )


class TeamRequired(GameError):
    def __init__(self, room_code: str, player_id: str):
        super().__init__(
            ERROR_TEAM_REQUIRED,
            "Select a team before choosing a role",
            room_code=room_code,
            player_id=player_id,
        )


class Forbidden(GameError):
    def __init__(self, message: str, room_code: Optional[str] = None,
                 player_id: Optional[str] = None):
        super().__init__(ERROR_FORBIDDEN, message, room_code=room_code, player_id=player_id)


class InvalidInput(GameError):
    def __init__(self, message: str, room_code: Optional[str] = None,
                 player_id: Optional[str] = None):
        super().__init__(ERROR_INVALID_INPUT, message, room_code=room_code, player_id=player_id)


class ConcurrencyConflict(GameError):
    """Raised when a version-checked write keeps losing to concurrent writers."""
    def __init__(self, room_code: str, attempts: int):
        self.attempts = attempts
        super().__init__(
            ERROR_CONFLICT,
            f"Room {room_code} changed concurrently {attempts} times, try again",
            room_code=room_code,
        )
