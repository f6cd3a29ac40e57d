"""
Room HTTP endpoints.

Thin adapter over RoomStateStore: parse the body, call the store, return the
room sanitized for the caller. Errors are turned into JSON by
`game_error_handler`, registered in main.create_app.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .constants import (
    ERROR_CONFLICT, ERROR_FORBIDDEN, ERROR_INVALID_INPUT, ERROR_PLAYER_NOT_FOUND,
    ERROR_ROOM_NOT_FOUND, ERROR_TEAM_REQUIRED
)
from .errors import GameError
from .serialization import sanitize_state
from .store import RoomStateStore

router = APIRouter(prefix="/api/rooms", tags=["rooms"])
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ERROR_ROOM_NOT_FOUND: 404,
    ERROR_PLAYER_NOT_FOUND: 404,
    ERROR_INVALID_INPUT: 400,
    ERROR_TEAM_REQUIRED: 400,
    ERROR_FORBIDDEN: 403,
    ERROR_CONFLICT: 409,
}


# Request bodies
class PlayerBody(BaseModel):
    player_id: str


class CreateRoomBody(PlayerBody):
    player_name: str


class JoinBody(PlayerBody):
    player_name: str


class TeamBody(PlayerBody):
    team: str


class RoleBody(PlayerBody):
    role: str


class HintBody(PlayerBody):
    word: str
    number: int


class RevealBody(PlayerBody):
    card_id: str


async def game_error_handler(request: Request, exc: GameError) -> JSONResponse:
    status = ERROR_STATUS.get(exc.code, 500)
    if status >= 500:
        logger.error(f"Unmapped game error on {request.url.path}: {exc}")
    return JSONResponse(status_code=status, content={"code": exc.code, "message": exc.message})


def get_store(request: Request) -> RoomStateStore:
    return request.app.state.store


@router.post("")
def create_room(body: CreateRoomBody, store: RoomStateStore = Depends(get_store)):
    state, player = store.create_room(body.player_id, body.player_name)
    return {"player_id": player.id, "room": sanitize_state(state, player.id)}


@router.get("/{code}")
def get_room(code: str, viewer_id: Optional[str] = None, store: RoomStateStore = Depends(get_store)):
    return sanitize_state(store.get_room_state(code), viewer_id)


@router.post("/{code}/join")
def join_room(code: str, body: JoinBody, store: RoomStateStore = Depends(get_store)):
    state, player = store.join_room(code, body.player_id, body.player_name)
    return {"player_id": player.id, "room": sanitize_state(state, player.id)}


@router.post("/{code}/team")
def select_team(code: str, body: TeamBody, store: RoomStateStore = Depends(get_store)):
    state = store.select_team(code, body.player_id, body.team)
    return sanitize_state(state, body.player_id)


@router.post("/{code}/role")
def set_role(code: str, body: RoleBody, store: RoomStateStore = Depends(get_store)):
    state, replaced = store.set_role(code, body.player_id, body.role)
    return {"replaced_spymaster": replaced, "room": sanitize_state(state, body.player_id)}


@router.post("/{code}/hint")
def send_hint(code: str, body: HintBody, store: RoomStateStore = Depends(get_store)):
    state = store.send_hint(code, body.player_id, body.word, body.number)
    return sanitize_state(state, body.player_id)


@router.post("/{code}/reveal")
def reveal_card(code: str, body: RevealBody, store: RoomStateStore = Depends(get_store)):
    state = store.reveal_card(code, body.player_id, body.card_id)
    return sanitize_state(state, body.player_id)


@router.post("/{code}/end-turn")
def end_turn(code: str, body: PlayerBody, store: RoomStateStore = Depends(get_store)):
    state = store.end_turn(code, body.player_id)
    return sanitize_state(state, body.player_id)


@router.post("/{code}/reset")
def reset_game(code: str, body: PlayerBody, store: RoomStateStore = Depends(get_store)):
    state = store.reset_game(code, body.player_id)
    return sanitize_state(state, body.player_id)


@router.post("/{code}/mic")
def toggle_mic(code: str, body: PlayerBody, store: RoomStateStore = Depends(get_store)):
    state = store.toggle_mic(code, body.player_id)
    return sanitize_state(state, body.player_id)


@router.post("/{code}/leave")
def leave_room(code: str, body: PlayerBody, store: RoomStateStore = Depends(get_store)):
    state = store.leave_room(code, body.player_id)
    return sanitize_state(state)
