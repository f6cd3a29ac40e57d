"""
Input and move validation.
"""

from typing import Optional

from .constants import (
    ROLE_GUESSER, ROLES, ROOM_CODE_ALPHABET, ROOM_CODE_LENGTH, STATUS_GUESSING, TEAMS
)
from .errors import InvalidInput
from .models import Card, RoomState
from .rules import RuleConfig


class ValidationResult:
    """Result of move validation."""

    def __init__(
        self,
        valid: bool,
        reason: Optional[str] = None,
        card: Optional[Card] = None
    ):
        self.valid = valid
        self.reason = reason
        self.card = card

    @classmethod
    def success(cls, card: Optional[Card] = None) -> 'ValidationResult':
        """Create a successful validation result."""
        return cls(valid=True, card=card)

    @classmethod
    def skip(cls, reason: str) -> 'ValidationResult':
        """Create a result for a move that should be ignored."""
        return cls(valid=False, reason=reason)


def normalize_room_code(room_code: str) -> str:
    """
    Strip and upper-case a room code, rejecting malformed ones.

    Raises:
        InvalidInput: If the code has the wrong length or characters
    """
    code = (room_code or "").strip().upper()
    if len(code) != ROOM_CODE_LENGTH or any(ch not in ROOM_CODE_ALPHABET for ch in code):
        raise InvalidInput(f"Invalid room code: {room_code!r}", room_code=code or None)
    return code


def validate_player_name(name: str) -> str:
    """Return the trimmed player name, rejecting blank ones."""
    trimmed = (name or "").strip()
    if not trimmed:
        raise InvalidInput("Name is required")
    return trimmed


def validate_player_id(player_id: str) -> str:
    if not player_id or not player_id.strip():
        raise InvalidInput("Player id is required")
    return player_id


def validate_team(team: str) -> str:
    if team not in TEAMS:
        raise InvalidInput(f"Unknown team: {team!r}")
    return team


def validate_role(role: str) -> str:
    if role not in ROLES:
        raise InvalidInput(f"Unknown role: {role!r}")
    return role


def validate_hint(word: str, number: int, rules: RuleConfig) -> str:
    """
    Validate a spymaster hint.

    Args:
        word: Clue word, must be a single token
        number: Target count
        rules: Active rule configuration (hint range)

    Returns:
        The trimmed hint word

    Raises:
        InvalidInput: If the word is blank or has whitespace, or the number is out of range
    """
    trimmed = (word or "").strip()
    if not trimmed:
        raise InvalidInput("Please type a hint before sending")
    if any(ch.isspace() for ch in trimmed):
        raise InvalidInput("A hint must be a single word")
    if isinstance(number, bool) or not isinstance(number, int):
        raise InvalidInput(f"Hint number must be an integer, got {number!r}")
    if not rules.validate_hint_number(number):
        raise InvalidInput(
            f"Hint number must be between {rules.hint_min} and {rules.hint_max}, got {number}"
        )
    return trimmed


def validate_reveal(state: RoomState, player_id: str, card_id: str) -> ValidationResult:
    """
    Check the soft preconditions of a card reveal.

    Reveals race with other clicks and with turn changes, so a failed check
    means "ignore this click", not an error.

    Args:
        state: Current room state
        player_id: Player clicking the card (already known to be active)
        card_id: Card being revealed

    Returns:
        ValidationResult carrying the card on success, or the skip reason
    """
    player = state.active_player(player_id)
    if player is None:
        return ValidationResult.skip("player not in room")
    if player.role != ROLE_GUESSER:
        return ValidationResult.skip("only guessers can reveal cards")
    if player.team != state.turn_team:
        return ValidationResult.skip("not your team's turn")
    if state.winner is not None:
        return ValidationResult.skip("game is over")
    if state.turn_status != STATUS_GUESSING:
        return ValidationResult.skip("waiting for a hint")
    if state.guesses_left <= 0:
        return ValidationResult.skip("no guesses left")

    card = state.get_card(card_id)
    if card is None:
        return ValidationResult.skip("card not found")
    if card.revealed:
        return ValidationResult.skip("card already revealed")

    return ValidationResult.success(card)
