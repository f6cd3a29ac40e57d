"""Codenames room turn-state engine."""

from .errors import (
    ConcurrencyConflict, Forbidden, GameError, InvalidInput, PlayerNotFound,
    RoomNotFound, TeamRequired
)
from .models import Card, Hint, Player, RoomState
from .rules import RuleConfig, create_rules, default_rules
from .storage import InMemoryRoomStorage, JsonFileRoomStorage, RoomStorage
from .store import RoomStateStore

__all__ = [
    "Card", "Hint", "Player", "RoomState",
    "GameError", "RoomNotFound", "PlayerNotFound", "TeamRequired", "Forbidden",
    "InvalidInput", "ConcurrencyConflict",
    "RuleConfig", "create_rules", "default_rules",
    "RoomStorage", "InMemoryRoomStorage", "JsonFileRoomStorage",
    "RoomStateStore",
]
