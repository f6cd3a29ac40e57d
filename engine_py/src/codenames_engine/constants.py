"""Game constants for the Codenames room engine."""

from typing import Dict, List

# Teams
TEAM_RED = "red"
TEAM_BLUE = "blue"
TEAMS: List[str] = [TEAM_RED, TEAM_BLUE]

# Card types
CARD_RED = "red"
CARD_BLUE = "blue"
CARD_NEUTRAL = "neutral"
CARD_ASSASSIN = "assassin"
CARD_TYPES: List[str] = [CARD_RED, CARD_BLUE, CARD_NEUTRAL, CARD_ASSASSIN]

# Roles
ROLE_SPYMASTER = "spymaster"
ROLE_GUESSER = "guesser"
ROLES: List[str] = [ROLE_SPYMASTER, ROLE_GUESSER]

# Turn status
STATUS_WAITING_HINT = "WAITING_HINT"
STATUS_GUESSING = "GUESSING"

# Win reasons
WIN_ASSASSIN = "assassin"
WIN_CARDS = "cards"

# Board layout
BOARD_SIZE = 25
STARTING_TEAM_CARDS = 9
SECOND_TEAM_CARDS = 8
NEUTRAL_CARDS = 7
ASSASSIN_CARDS = 1

# Room codes avoid 0/O and 1/I so they can be read aloud and typed back
ROOM_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
ROOM_CODE_LENGTH = 6
MAX_ROOM_CODE_ATTEMPTS = 100

GAME_LOG_LIMIT = 50

# Error codes
ERROR_ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
ERROR_PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"
ERROR_TEAM_REQUIRED = "TEAM_REQUIRED"
ERROR_FORBIDDEN = "FORBIDDEN"
ERROR_INVALID_INPUT = "INVALID_INPUT"
ERROR_CONFLICT = "CONFLICT"
ERROR_INTERNAL = "INTERNAL"


def other_team(team: str) -> str:
    """Return the opposing team."""
    return TEAM_BLUE if team == TEAM_RED else TEAM_RED


def spymaster_slot(team: str) -> str:
    """Name of the RoomState attribute holding a team's spymaster id."""
    return "red_spymaster_id" if team == TEAM_RED else "blue_spymaster_id"


def card_counts(starting_team: str) -> Dict[str, int]:
    """Card type distribution for a board where `starting_team` moves first."""
    return {
        starting_team: STARTING_TEAM_CARDS,
        other_team(starting_team): SECOND_TEAM_CARDS,
        CARD_NEUTRAL: NEUTRAL_CARDS,
        CARD_ASSASSIN: ASSASSIN_CARDS,
    }
