"""
RoomStateStore: the single entry point for every room mutation.

Each operation reads the current room, runs the matching pure transition from
`engine`, and writes the result back with a version check. A lost race simply
re-reads and re-runs the transition.
"""

import logging
import random
from typing import Callable, Optional, Sequence, Tuple, TypeVar

from . import engine
from .constants import (
    ERROR_INTERNAL, MAX_ROOM_CODE_ATTEMPTS, ROOM_CODE_ALPHABET, ROOM_CODE_LENGTH
)
from .errors import ConcurrencyConflict, GameError, RoomNotFound
from .models import Player, RoomState
from .rules import RuleConfig, default_rules
from .storage import InMemoryRoomStorage, RoomStorage
from .validate import normalize_room_code, validate_player_id, validate_player_name
from .words import DEFAULT_WORD_POOL

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RoomStateStore:
    """
    Owns all room state transitions.

    Args:
        storage: Persistence adapter; a fresh in-memory one when omitted
        word_pool: Words boards are drawn from
        rules: Rule configuration
        rng: Optional random source for codes and boards (seed it in tests)
    """

    def __init__(
        self,
        storage: Optional[RoomStorage] = None,
        word_pool: Sequence[str] = DEFAULT_WORD_POOL,
        rules: RuleConfig = default_rules,
        rng: Optional[random.Random] = None,
    ):
        self.storage = storage if storage is not None else InMemoryRoomStorage()
        self.word_pool = list(word_pool)
        self.rules = rules
        self.rng = rng or random.Random()

    # Internals

    def _generate_code(self) -> str:
        return "".join(self.rng.choice(ROOM_CODE_ALPHABET) for _ in range(ROOM_CODE_LENGTH))

    def _load(self, code: str) -> RoomState:
        state = self.storage.get(code)
        if state is None:
            raise RoomNotFound(code)
        return state

    def _mutate(
        self,
        room_code: str,
        transition: Callable[[RoomState], Tuple[RoomState, T]],
    ) -> Tuple[RoomState, T]:
        """
        Run `transition` against the stored room until the write lands.

        The transition returns (new_state, extra). Returning the input state
        object itself means "nothing changed" and skips the write.

        Raises:
            RoomNotFound: If the room does not exist
            ConcurrencyConflict: If every attempt lost a race
        """
        code = normalize_room_code(room_code)
        attempts = self.rules.max_write_retries

        for attempt in range(1, attempts + 1):
            current = self._load(code)
            new_state, extra = transition(current)
            if new_state is current:
                return current, extra
            if self.storage.compare_and_set(new_state, current.version):
                return new_state, extra
            logger.warning(
                f"Version conflict on room {code} at v{current.version} "
                f"(attempt {attempt}/{attempts}), retrying"
            )

        raise ConcurrencyConflict(code, attempts)

    def _apply(self, room_code: str, transition: Callable[[RoomState], RoomState]) -> RoomState:
        state, _ = self._mutate(room_code, lambda s: (transition(s), None))
        return state

    # Operations

    def create_room(self, player_id: str, player_name: str) -> Tuple[RoomState, Player]:
        """
        Create a room with a fresh board and the creator as its only player.

        Raises:
            InvalidInput: Blank name or player id
            GameError: If no free room code was found
        """
        validate_player_id(player_id)
        validate_player_name(player_name)

        for _ in range(MAX_ROOM_CODE_ATTEMPTS):
            code = self._generate_code()
            state, player = engine.new_room(
                code, player_id, player_name, self.word_pool, self.rules, self.rng
            )
            if self.storage.create(state):
                logger.info(f"Room {code} created by {player.name} ({player_id})")
                return state, player
            logger.warning(f"Room code collision on {code}, regenerating")

        raise GameError(ERROR_INTERNAL, "Could not allocate a unique room code")

    def join_room(self, room_code: str, player_id: str, player_name: str) -> Tuple[RoomState, Player]:
        state, player = self._mutate(
            room_code, lambda s: engine.join_room(s, player_id, player_name)
        )
        logger.info(f"{player.name} ({player_id}) joined room {state.code}")
        return state, player

    def select_team(self, room_code: str, player_id: str, team: str) -> RoomState:
        return self._apply(room_code, lambda s: engine.select_team(s, player_id, team))

    def set_role(self, room_code: str, player_id: str, role: str) -> Tuple[RoomState, bool]:
        """
        Returns:
            (room, replaced_spymaster) tuple
        """
        return self._mutate(room_code, lambda s: engine.set_role(s, player_id, role))

    def send_hint(self, room_code: str, player_id: str, word: str, number: int) -> RoomState:
        return self._apply(
            room_code, lambda s: engine.send_hint(s, player_id, word, number, self.rules)
        )

    def reveal_card(self, room_code: str, player_id: str, card_id: str) -> RoomState:
        """Reveal a card; ignored clicks return the stored room unchanged."""
        return self._apply(room_code, lambda s: engine.reveal_card(s, player_id, card_id))

    def end_turn(self, room_code: str, player_id: str) -> RoomState:
        return self._apply(room_code, lambda s: engine.end_turn(s, player_id))

    def reset_game(self, room_code: str, player_id: str) -> RoomState:
        return self._apply(
            room_code,
            lambda s: engine.reset_game(s, player_id, self.word_pool, self.rules, self.rng),
        )

    def toggle_mic(self, room_code: str, player_id: str) -> RoomState:
        return self._apply(room_code, lambda s: engine.toggle_mic(s, player_id))

    def leave_room(self, room_code: str, player_id: str) -> RoomState:
        state = self._apply(room_code, lambda s: engine.leave_room(s, player_id))
        logger.info(f"Player {player_id} left room {state.code}")
        return state

    def get_room_state(self, room_code: str) -> RoomState:
        return self._load(normalize_room_code(room_code))
