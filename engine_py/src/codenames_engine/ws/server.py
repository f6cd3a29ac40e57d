"""
WebSocket endpoint for Codenames rooms.

Every mutation goes through the RoomStateStore held on `app.state.store`;
this module only tracks which socket watches which room and pushes each
viewer their own sanitized state afterwards.
"""

import logging
from collections import defaultdict
from typing import Dict, Optional, Set, Tuple

import orjson
from fastapi import WebSocket, WebSocketDisconnect

from ..diff import compute_diff, should_send_full_state
from ..errors import GameError
from ..models import RoomState
from ..serialization import sanitize_state
from ..store import RoomStateStore
from .events import (
    CreateEvent, EndTurnEvent, ErrorCode, EventType, JoinEvent, LeaveEvent,
    RequestStateEvent, ResetEvent, RevealEvent, SelectTeamEvent, SendHintEvent,
    SetRoleEvent, ToggleMicEvent, create_error_event, create_join_success_event,
    create_state_full_event, create_state_patch_event, parse_inbound_event
)

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Tracks room membership of sockets and the last state each one saw."""

    def __init__(self):
        self.room_connections: Dict[str, Set[WebSocket]] = defaultdict(set)
        self.connection_players: Dict[WebSocket, Tuple[str, str]] = {}
        self.last_sent: Dict[WebSocket, RoomState] = {}

    def connect(self, websocket: WebSocket, room_code: str, player_id: str):
        """Attach a socket to a room, detaching it from any previous one."""
        self.disconnect(websocket)
        self.room_connections[room_code].add(websocket)
        self.connection_players[websocket] = (room_code, player_id)
        logger.info(f"Player {player_id} connected to room {room_code}")

    def disconnect(self, websocket: WebSocket) -> Optional[Tuple[str, str]]:
        membership = self.connection_players.pop(websocket, None)
        self.last_sent.pop(websocket, None)
        if membership is None:
            return None

        room_code, player_id = membership
        connections = self.room_connections.get(room_code)
        if connections is not None:
            connections.discard(websocket)
            if not connections:
                del self.room_connections[room_code]
        logger.info(f"Player {player_id} disconnected from room {room_code}")
        return membership

    def membership(self, websocket: WebSocket) -> Optional[Tuple[str, str]]:
        return self.connection_players.get(websocket)

    async def send_full_state(self, websocket: WebSocket, state: RoomState, player_id: Optional[str]):
        event = create_state_full_event(sanitize_state(state, player_id))
        await websocket.send_text(event.model_dump_json())
        self.last_sent[websocket] = state

    async def broadcast_state_update(self, state: RoomState):
        """Push `state` to every socket in the room, as a patch where possible."""
        for websocket in list(self.room_connections.get(state.code, ())):
            membership = self.connection_players.get(websocket)
            if membership is None:
                continue
            _, player_id = membership
            try:
                old_state = self.last_sent.get(websocket)
                if old_state is None:
                    await self.send_full_state(websocket, state, player_id)
                    continue

                ops = compute_diff(old_state, state, player_id)
                if not ops:
                    continue
                if should_send_full_state(ops):
                    await self.send_full_state(websocket, state, player_id)
                else:
                    patch_event = create_state_patch_event(state.version, ops)
                    await websocket.send_text(patch_event.model_dump_json())
                    self.last_sent[websocket] = state
            except Exception as e:
                logger.error(f"Error broadcasting to player {player_id}: {e}")
                self.disconnect(websocket)


async def send_error(websocket: WebSocket, code: ErrorCode, message: str):
    await websocket.send_text(create_error_event(code, message).model_dump_json())


async def handle_create(websocket, event: CreateEvent, store, manager):
    state, player = store.create_room(event.player_id, event.name)
    manager.connect(websocket, state.code, player.id)
    await websocket.send_text(create_join_success_event(player.id, state.code).model_dump_json())
    await manager.send_full_state(websocket, state, player.id)


async def handle_join(websocket, event: JoinEvent, store, manager):
    state, player = store.join_room(event.room_code, event.player_id, event.name)
    manager.connect(websocket, state.code, player.id)
    await websocket.send_text(create_join_success_event(player.id, state.code).model_dump_json())
    await manager.broadcast_state_update(state)


async def handle_room_event(websocket, event, store: RoomStateStore, manager: ConnectionManager):
    """Run a mutation on behalf of the socket's player and broadcast the result."""
    membership = manager.membership(websocket)
    if membership is None:
        await send_error(websocket, ErrorCode.NOT_IN_ROOM, "Join a room first")
        return

    room_code, player_id = membership

    if isinstance(event, RequestStateEvent):
        await manager.send_full_state(websocket, store.get_room_state(room_code), player_id)
        return

    if isinstance(event, SelectTeamEvent):
        state = store.select_team(room_code, player_id, event.team)
    elif isinstance(event, SetRoleEvent):
        state, _ = store.set_role(room_code, player_id, event.role)
    elif isinstance(event, SendHintEvent):
        state = store.send_hint(room_code, player_id, event.word, event.number)
    elif isinstance(event, RevealEvent):
        state = store.reveal_card(room_code, player_id, event.card_id)
    elif isinstance(event, EndTurnEvent):
        state = store.end_turn(room_code, player_id)
    elif isinstance(event, ResetEvent):
        state = store.reset_game(room_code, player_id)
    elif isinstance(event, ToggleMicEvent):
        state = store.toggle_mic(room_code, player_id)
    elif isinstance(event, LeaveEvent):
        state = store.leave_room(room_code, player_id)
        manager.disconnect(websocket)
    else:
        raise ValueError(f"Unhandled event type: {type(event)}")

    await manager.broadcast_state_update(state)


async def handle_event(websocket: WebSocket, event, store: RoomStateStore, manager: ConnectionManager):
    """Handle an inbound event."""
    if event.type == EventType.CREATE:
        await handle_create(websocket, event, store, manager)
    elif event.type == EventType.JOIN:
        await handle_join(websocket, event, store, manager)
    else:
        await handle_room_event(websocket, event, store, manager)


async def websocket_endpoint(websocket: WebSocket):
    """Main WebSocket endpoint."""
    store: RoomStateStore = websocket.app.state.store
    manager: ConnectionManager = websocket.app.state.connections

    await websocket.accept()
    logger.info("WebSocket connection accepted")

    try:
        while True:
            raw_data = await websocket.receive_text()
            try:
                event = parse_inbound_event(orjson.loads(raw_data))
                await handle_event(websocket, event, store, manager)
            except GameError as e:
                await send_error(websocket, ErrorCode(e.code), e.message)
            except ValueError as e:
                await send_error(websocket, ErrorCode.INVALID_EVENT, str(e))
            except WebSocketDisconnect:
                raise
            except Exception as e:
                logger.error(f"Error handling event: {e}", exc_info=True)
                await send_error(websocket, ErrorCode.INTERNAL, "Internal server error")
    except WebSocketDisconnect:
        logger.info("WebSocket disconnected")
    finally:
        manager.disconnect(websocket)
