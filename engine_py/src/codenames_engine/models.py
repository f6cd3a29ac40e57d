"""Game models and data structures"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .constants import (
    CARD_BLUE, CARD_RED, GAME_LOG_LIMIT, ROLE_GUESSER, STATUS_WAITING_HINT,
    TEAM_RED, spymaster_slot
)


@dataclass
class Card:
    id: str
    word: str
    type: str  # red|blue|neutral|assassin
    revealed: bool = False
    revealed_by_team: Optional[str] = None


@dataclass
class Hint:
    word: str
    number: int
    team: str


@dataclass
class Player:
    id: str
    name: str
    team: Optional[str] = None  # None = spectator
    role: str = ROLE_GUESSER
    mic_muted: bool = False
    is_active: bool = True


@dataclass
class RoomState:
    code: str
    version: int = 1
    cards: List[Card] = field(default_factory=list)
    players: Dict[str, Player] = field(default_factory=dict)  # insertion order = join order
    starting_team: str = TEAM_RED
    turn_team: str = TEAM_RED
    turn_status: str = STATUS_WAITING_HINT
    hint_word: Optional[str] = None
    hint_number: Optional[int] = None
    guesses_left: int = 0
    red_cards_left: int = 0
    blue_cards_left: int = 0
    winner: Optional[str] = None
    win_reason: Optional[str] = None
    red_spymaster_id: Optional[str] = None
    blue_spymaster_id: Optional[str] = None
    hint_history: List[Hint] = field(default_factory=list)  # most recent first
    game_number: int = 1
    game_log: List[str] = field(default_factory=list)

    def increment_version(self):
        self.version += 1

    def log(self, message: str):
        self.game_log.append(message)
        if len(self.game_log) > GAME_LOG_LIMIT:
            del self.game_log[:-GAME_LOG_LIMIT]

    def get_card(self, card_id: str) -> Optional[Card]:
        for card in self.cards:
            if card.id == card_id:
                return card
        return None

    def active_player(self, player_id: str) -> Optional[Player]:
        player = self.players.get(player_id)
        if player is None or not player.is_active:
            return None
        return player

    def spymaster_id(self, team: str) -> Optional[str]:
        return getattr(self, spymaster_slot(team))

    def set_spymaster_id(self, team: str, player_id: Optional[str]):
        setattr(self, spymaster_slot(team), player_id)

    def count_unrevealed(self, card_type: str) -> int:
        return sum(1 for c in self.cards if c.type == card_type and not c.revealed)

    def recount_cards_left(self):
        self.red_cards_left = self.count_unrevealed(CARD_RED)
        self.blue_cards_left = self.count_unrevealed(CARD_BLUE)

    def clear_hint(self):
        self.turn_status = STATUS_WAITING_HINT
        self.hint_word = None
        self.hint_number = None
        self.guesses_left = 0

    @property
    def current_hint(self) -> Optional[Hint]:
        if self.hint_word is None:
            return None
        return Hint(word=self.hint_word, number=self.hint_number, team=self.turn_team)

    @property
    def active_players(self) -> List[Player]:
        return [p for p in self.players.values() if p.is_active]
