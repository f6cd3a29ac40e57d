"""
State serialization and sanitization utilities.
"""

from dataclasses import asdict
from typing import Any, Dict, Optional

from .constants import ROLE_SPYMASTER
from .models import Card, Hint, Player, RoomState


def room_to_dict(state: RoomState) -> Dict[str, Any]:
    """
    Convert a room to plain data for persistence. Nothing is hidden.
    """
    data = asdict(state)
    data["players"] = [asdict(p) for p in state.players.values()]
    return data


def room_from_dict(data: Dict[str, Any]) -> RoomState:
    """
    Rebuild a room from `room_to_dict` output.
    """
    fields = dict(data)
    fields["cards"] = [Card(**card) for card in data.get("cards", [])]
    fields["players"] = {p["id"]: Player(**p) for p in data.get("players", [])}
    fields["hint_history"] = [Hint(**hint) for hint in data.get("hint_history", [])]
    fields["game_log"] = list(data.get("game_log", []))
    return RoomState(**fields)


def can_see_key(state: RoomState, viewer_id: Optional[str]) -> bool:
    """Whether the viewer may see the colour of unrevealed cards."""
    if state.winner is not None:
        return True
    viewer = state.active_player(viewer_id) if viewer_id else None
    return viewer is not None and viewer.role == ROLE_SPYMASTER


def _serialize_card(card: Card, show_key: bool) -> Dict[str, Any]:
    return {
        "id": card.id,
        "word": card.word,
        "type": card.type if (card.revealed or show_key) else None,
        "revealed": card.revealed,
        "revealed_by_team": card.revealed_by_team,
    }


def serialize_player(player: Player) -> Dict[str, Any]:
    """Serialize a player for the room snapshot."""
    return {
        "id": player.id,
        "name": player.name,
        "team": player.team,
        "role": player.role,
        "mic_muted": player.mic_muted,
        "is_active": player.is_active,
    }


def sanitize_state(state: RoomState, viewer_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Sanitize room state for transmission to clients.

    Args:
        state: Room state to sanitize
        viewer_id: ID of the player viewing the state; spymasters see the key

    Returns:
        Sanitized state dictionary safe for JSON transmission
    """
    show_key = can_see_key(state, viewer_id)
    current_hint = state.current_hint

    return {
        "code": state.code,
        "version": state.version,
        "game_number": state.game_number,
        "starting_team": state.starting_team,
        "turn": {
            "team": state.turn_team,
            "status": state.turn_status,
            "hint_word": state.hint_word,
            "hint_number": state.hint_number,
            "guesses_left": state.guesses_left,
        },
        "current_hint": asdict(current_hint) if current_hint else None,
        "hint_history": [asdict(h) for h in state.hint_history],
        "red_cards_left": state.red_cards_left,
        "blue_cards_left": state.blue_cards_left,
        "winner": state.winner,
        "win_reason": state.win_reason,
        "red_spymaster_id": state.red_spymaster_id,
        "blue_spymaster_id": state.blue_spymaster_id,
        "cards": [_serialize_card(card, show_key) for card in state.cards],
        "players": [serialize_player(p) for p in state.active_players],
        "viewer_id": viewer_id,
        "show_key": show_key,
        "game_log": state.game_log[-10:],
    }

