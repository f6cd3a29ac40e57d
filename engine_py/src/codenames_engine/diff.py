"""
State diff computation for efficient updates.
"""

import copy
from typing import Any, Dict, List, Optional

from .models import RoomState
from .serialization import sanitize_state

TOP_LEVEL_FIELDS = [
    "version", "game_number", "starting_team", "current_hint", "hint_history",
    "red_cards_left", "blue_cards_left", "winner", "win_reason",
    "red_spymaster_id", "blue_spymaster_id", "show_key",
]

TURN_FIELDS = ["team", "status", "hint_word", "hint_number", "guesses_left"]

CARD_FIELDS = ["word", "type", "revealed", "revealed_by_team"]


def compute_diff(
    old_state: Optional[RoomState],
    new_state: RoomState,
    viewer_id: Optional[str] = None
) -> List[Dict[str, Any]]:
    """
    Compute a JSON Patch-style diff between two states.

    Both states are sanitized for the viewer first, so a patch never leaks
    more than the full snapshot would.

    Args:
        old_state: Previous room state
        new_state: New room state
        viewer_id: ID of the player viewing the state

    Returns:
        List of patch operations
    """
    if old_state is None:
        return []

    old_sanitized = sanitize_state(old_state, viewer_id)
    new_sanitized = sanitize_state(new_state, viewer_id)

    ops = []

    for field in TOP_LEVEL_FIELDS:
        old_value = old_sanitized.get(field)
        new_value = new_sanitized.get(field)
        if old_value != new_value:
            ops.append({"op": "replace", "path": f"/{field}", "value": new_value})

    old_turn = old_sanitized["turn"]
    new_turn = new_sanitized["turn"]
    for turn_field in TURN_FIELDS:
        if old_turn.get(turn_field) != new_turn.get(turn_field):
            ops.append({
                "op": "replace",
                "path": f"/turn/{turn_field}",
                "value": new_turn.get(turn_field)
            })

    old_cards = old_sanitized["cards"]
    new_cards = new_sanitized["cards"]
    if [c["id"] for c in old_cards] != [c["id"] for c in new_cards]:
        # New board
        ops.append({"op": "replace", "path": "/cards", "value": new_cards})
    else:
        for index, (old_card, new_card) in enumerate(zip(old_cards, new_cards)):
            for card_field in CARD_FIELDS:
                if old_card[card_field] != new_card[card_field]:
                    ops.append({
                        "op": "replace",
                        "path": f"/cards/{index}/{card_field}",
                        "value": new_card[card_field]
                    })

    if old_sanitized["players"] != new_sanitized["players"]:
        ops.append({"op": "replace", "path": "/players", "value": new_sanitized["players"]})

    old_log = old_sanitized["game_log"]
    new_log = new_sanitized["game_log"]
    if old_log != new_log:
        ops.append({"op": "replace", "path": "/game_log", "value": new_log})

    return ops


def apply_diff(state: Dict[str, Any], ops: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Apply a diff to a sanitized state dictionary.

    Args:
        state: Current state dictionary
        ops: List of patch operations to apply

    Returns:
        Updated state dictionary
    """
    new_state = copy.deepcopy(state)

    for op in ops:
        path_parts = [p for p in op["path"].split("/") if p]
        if op["op"] in ("replace", "add"):
            _set_nested_value(new_state, path_parts, op.get("value"))
        elif op["op"] == "remove":
            _remove_nested_value(new_state, path_parts)

    return new_state


def _step(current: Any, key: str) -> Any:
    if isinstance(current, list):
        return current[int(key)]
    return current.setdefault(key, {})


def _set_nested_value(obj: Dict[str, Any], path: List[str], value: Any):
    """Set a value at a nested path; list segments are indices."""
    current = obj
    for key in path[:-1]:
        current = _step(current, key)

    if not path:
        return
    if isinstance(current, list):
        current[int(path[-1])] = value
    else:
        current[path[-1]] = value


def _remove_nested_value(obj: Dict[str, Any], path: List[str]):
    current = obj
    for key in path[:-1]:
        if isinstance(current, dict) and key not in current:
            return
        current = _step(current, key)

    if path and isinstance(current, dict) and path[-1] in current:
        del current[path[-1]]


def should_send_full_state(ops: List[Dict[str, Any]], threshold: int = 10) -> bool:
    """
    Determine if a full state should be sent instead of a diff.

    Args:
        ops: List of patch operations
        threshold: Maximum number of operations before sending full state

    Returns:
        True if full state should be sent
    """
    if len(ops) > threshold:
        return True
    # A new board replaces every card anyway
    return any(op["path"] == "/cards" for op in ops)
