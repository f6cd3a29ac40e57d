"""
WebSocket event models and validation.
"""

import time
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


class EventType(str, Enum):
    """Inbound event types."""
    CREATE = "create"
    JOIN = "join"
    SELECT_TEAM = "select_team"
    SET_ROLE = "set_role"
    SEND_HINT = "send_hint"
    REVEAL = "reveal"
    END_TURN = "end_turn"
    RESET = "reset"
    TOGGLE_MIC = "toggle_mic"
    LEAVE = "leave"
    REQUEST_STATE = "request_state"


class OutboundEventType(str, Enum):
    """Outbound event types."""
    JOIN_SUCCESS = "join_success"
    STATE_FULL = "state_full"
    STATE_PATCH = "state_patch"
    ERROR = "error"


class ErrorCode(str, Enum):
    """Error codes for client events."""
    INVALID_EVENT = "INVALID_EVENT"
    NOT_IN_ROOM = "NOT_IN_ROOM"
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"
    TEAM_REQUIRED = "TEAM_REQUIRED"
    FORBIDDEN = "FORBIDDEN"
    INVALID_INPUT = "INVALID_INPUT"
    CONFLICT = "CONFLICT"
    INTERNAL = "INTERNAL"


# Inbound event models
class BaseEvent(BaseModel):
    """Base event model."""
    type: EventType


class CreateEvent(BaseEvent):
    """Create a room; the sender becomes its first player."""
    type: EventType = EventType.CREATE
    player_id: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=30)


class JoinEvent(BaseEvent):
    """Join room event."""
    type: EventType = EventType.JOIN
    room_code: str = Field(..., min_length=1, max_length=16)
    player_id: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=30)


class SelectTeamEvent(BaseEvent):
    type: EventType = EventType.SELECT_TEAM
    team: str


class SetRoleEvent(BaseEvent):
    type: EventType = EventType.SET_ROLE
    role: str


class SendHintEvent(BaseEvent):
    """Spymaster clue."""
    type: EventType = EventType.SEND_HINT
    word: str = Field(..., max_length=50)
    number: int


class RevealEvent(BaseEvent):
    type: EventType = EventType.REVEAL
    card_id: str = Field(..., min_length=1)


class EndTurnEvent(BaseEvent):
    type: EventType = EventType.END_TURN


class ResetEvent(BaseEvent):
    type: EventType = EventType.RESET


class ToggleMicEvent(BaseEvent):
    type: EventType = EventType.TOGGLE_MIC


class LeaveEvent(BaseEvent):
    type: EventType = EventType.LEAVE


class RequestStateEvent(BaseEvent):
    """Request full state event."""
    type: EventType = EventType.REQUEST_STATE


# Union type for all inbound events
InboundEvent = Union[
    CreateEvent,
    JoinEvent,
    SelectTeamEvent,
    SetRoleEvent,
    SendHintEvent,
    RevealEvent,
    EndTurnEvent,
    ResetEvent,
    ToggleMicEvent,
    LeaveEvent,
    RequestStateEvent,
]


# Outbound event models
class JoinSuccessEvent(BaseModel):
    """Join success confirmation event."""
    type: OutboundEventType = OutboundEventType.JOIN_SUCCESS
    player_id: str
    room_code: str
    timestamp: float


class StateFullEvent(BaseModel):
    """Full state event."""
    type: OutboundEventType = OutboundEventType.STATE_FULL
    state: Dict[str, Any]
    timestamp: float


class PatchOperation(BaseModel):
    """JSON Patch operation."""
    op: str = Field(..., pattern="^(replace|add|remove)$")
    path: str
    value: Optional[Any] = None


class StatePatchEvent(BaseModel):
    """State patch event."""
    type: OutboundEventType = OutboundEventType.STATE_PATCH
    version: int
    ops: List[PatchOperation]
    timestamp: float


class ErrorEvent(BaseModel):
    """Error event."""
    type: OutboundEventType = OutboundEventType.ERROR
    code: ErrorCode
    message: str
    timestamp: float


EVENT_MAP = {
    EventType.CREATE: CreateEvent,
    EventType.JOIN: JoinEvent,
    EventType.SELECT_TEAM: SelectTeamEvent,
    EventType.SET_ROLE: SetRoleEvent,
    EventType.SEND_HINT: SendHintEvent,
    EventType.REVEAL: RevealEvent,
    EventType.END_TURN: EndTurnEvent,
    EventType.RESET: ResetEvent,
    EventType.TOGGLE_MIC: ToggleMicEvent,
    EventType.LEAVE: LeaveEvent,
    EventType.REQUEST_STATE: RequestStateEvent,
}


def parse_inbound_event(data: Dict[str, Any]) -> InboundEvent:
    """
    Parse raw event data into appropriate event model.

    Args:
        data: Raw event data from WebSocket

    Returns:
        Parsed event model

    Raises:
        ValueError: If event type is invalid or data is malformed
    """
    if not isinstance(data, dict):
        raise ValueError("Event must be a JSON object")

    event_type = data.get("type")
    if not event_type:
        raise ValueError("Missing event type")

    try:
        event_type = EventType(event_type)
    except ValueError:
        raise ValueError(f"Invalid event type: {event_type}")

    try:
        return EVENT_MAP[event_type](**data)
    except Exception as e:
        raise ValueError(f"Invalid event data: {str(e)}")


def create_error_event(code: ErrorCode, message: str) -> ErrorEvent:
    """Create an error event."""
    return ErrorEvent(code=code, message=message, timestamp=time.time())


def create_join_success_event(player_id: str, room_code: str) -> JoinSuccessEvent:
    """Create a join success event."""
    return JoinSuccessEvent(player_id=player_id, room_code=room_code, timestamp=time.time())


def create_state_full_event(state: Dict[str, Any]) -> StateFullEvent:
    """Create a full state event."""
    return StateFullEvent(state=state, timestamp=time.time())


def create_state_patch_event(version: int, ops: List[Dict]) -> StatePatchEvent:
    """Create a state patch event."""
    return StatePatchEvent(
        version=version,
        ops=[PatchOperation(**op) for op in ops],
        timestamp=time.time()
    )
