"""
Room turn-state machine.

Every operation is a pure transition: it receives the current RoomState and
returns a new one, never mutating its input. Persistence and concurrency are
handled by the store, which runs these functions inside a version-checked
write loop.
"""

import copy
import logging
import random
from typing import List, Optional, Sequence, Tuple

from .constants import (
    BOARD_SIZE, CARD_ASSASSIN, CARD_BLUE, CARD_NEUTRAL, CARD_RED, ROLE_GUESSER,
    ROLE_SPYMASTER, STATUS_GUESSING, STATUS_WAITING_HINT, TEAMS,
    WIN_ASSASSIN, WIN_CARDS, other_team
)
from .errors import Forbidden, PlayerNotFound, TeamRequired
from .models import Hint, Player, RoomState
from .rules import RuleConfig, default_rules
from .shuffle import create_deck, pick_starting_team
from .validate import (
    validate_hint, validate_player_id, validate_player_name, validate_reveal,
    validate_role, validate_team
)

logger = logging.getLogger(__name__)


def _require_player(state: RoomState, player_id: str) -> Player:
    player = state.active_player(player_id)
    if player is None:
        raise PlayerNotFound(state.code, player_id)
    return player


def _deal_board(state: RoomState, word_pool: Sequence[str], rules: RuleConfig,
                rng: Optional[random.Random]):
    """Deal a fresh board onto `state` and reset all turn state."""
    starting_team = pick_starting_team(rules.starting_team, rng)
    state.cards = create_deck(
        word_pool, starting_team, rng, id_prefix=f"g{state.game_number}"
    )
    state.starting_team = starting_team
    state.turn_team = starting_team
    state.clear_hint()
    state.hint_history = []
    state.winner = None
    state.win_reason = None
    state.recount_cards_left()


def _end_turn(state: RoomState):
    """Hand the turn to the other team and wait for their hint."""
    state.turn_team = other_team(state.turn_team)
    state.clear_hint()


def _release_spymaster(state: RoomState, player: Player):
    """Clear any spymaster slot held by `player` and make them a guesser."""
    for team in TEAMS:
        if state.spymaster_id(team) == player.id:
            state.set_spymaster_id(team, None)
    player.role = ROLE_GUESSER


def new_room(
    code: str,
    player_id: str,
    player_name: str,
    word_pool: Sequence[str],
    rules: RuleConfig = default_rules,
    rng: Optional[random.Random] = None,
) -> Tuple[RoomState, Player]:
    """
    Build the initial state of a room.

    Args:
        code: Room code, already checked for uniqueness by the caller
        player_id: Client-generated id of the creator
        player_name: Display name of the creator
        word_pool: Words to draw the board from
        rules: Rule configuration
        rng: Optional random source

    Returns:
        (room, creator) tuple; the creator is a spectator guesser
    """
    validate_player_id(player_id)
    name = validate_player_name(player_name)

    state = RoomState(code=code)
    _deal_board(state, word_pool, rules, rng)

    player = Player(id=player_id, name=name)
    state.players[player_id] = player
    state.log(f"{name} created room {code}")
    return state, player


def join_room(state: RoomState, player_id: str, player_name: str) -> Tuple[RoomState, Player]:
    """
    Add a player to the room, or rename and reactivate a returning one.

    Returns:
        (new state, player) tuple
    """
    validate_player_id(player_id)
    name = validate_player_name(player_name)

    new_state = copy.deepcopy(state)
    player = new_state.players.get(player_id)
    if player is not None:
        rejoined = not player.is_active
        player.name = name
        player.is_active = True
        new_state.log(f"{name} {'rejoined' if rejoined else 'reconnected'}")
    else:
        player = Player(id=player_id, name=name)
        new_state.players[player_id] = player
        new_state.log(f"{name} joined")

    new_state.increment_version()
    return new_state, player


def select_team(state: RoomState, player_id: str, team: str) -> RoomState:
    """
    Put a player on a team.

    Re-selecting the current team keeps the role. Moving to the other team
    gives up any spymaster slot, since a slot may only point at a member of
    its own team.
    """
    validate_team(team)
    new_state = copy.deepcopy(state)
    player = _require_player(new_state, player_id)

    if player.team != team:
        if player.role == ROLE_SPYMASTER:
            _release_spymaster(new_state, player)
        player.team = team
        new_state.log(f"{player.name} joined team {team}")

    new_state.increment_version()
    return new_state


def set_role(state: RoomState, player_id: str, role: str) -> Tuple[RoomState, bool]:
    """
    Change a player's role on their team.

    Taking the spymaster role replaces any current holder, who is demoted to
    guesser in the same transition.

    Returns:
        (new state, replaced_spymaster) tuple

    Raises:
        TeamRequired: If the player has not picked a team
    """
    validate_role(role)
    new_state = copy.deepcopy(state)
    player = _require_player(new_state, player_id)
    if player.team is None:
        raise TeamRequired(new_state.code, player_id)

    team = player.team
    current_id = new_state.spymaster_id(team)
    replaced = False

    if role == ROLE_SPYMASTER:
        if current_id is not None and current_id != player_id:
            former = new_state.players.get(current_id)
            if former is not None:
                former.role = ROLE_GUESSER
                new_state.log(f"{former.name} is no longer {team} spymaster")
            replaced = True
        new_state.set_spymaster_id(team, player_id)
        player.role = ROLE_SPYMASTER
        new_state.log(f"{player.name} is now {team} spymaster")
    else:
        if current_id == player_id:
            new_state.set_spymaster_id(team, None)
        player.role = ROLE_GUESSER

    new_state.increment_version()
    return new_state, replaced


def send_hint(state: RoomState, player_id: str, word: str, number: int,
              rules: RuleConfig = default_rules) -> RoomState:
    """
    Give the current team's clue and open the guessing phase.

    The team gets `number + 1` guesses: one bonus guess beyond the stated
    count, as in standard Codenames, so a team can catch up on a word missed
    on an earlier clue.

    Raises:
        InvalidInput: Bad hint word or number
        Forbidden: Game over, caller is not the turn team's spymaster, or a
            hint is already active
    """
    player = _require_player(state, player_id)
    word = validate_hint(word, number, rules)

    if state.winner is not None:
        raise Forbidden("The game is over", room_code=state.code, player_id=player_id)
    if state.spymaster_id(state.turn_team) != player_id:
        raise Forbidden(
            "Only the current team's Spymaster can send hints",
            room_code=state.code,
            player_id=player_id,
        )
    if state.turn_status != STATUS_WAITING_HINT:
        raise Forbidden(
            "A hint is already active for this turn",
            room_code=state.code,
            player_id=player_id,
        )

    new_state = copy.deepcopy(state)
    new_state.hint_word = word
    new_state.hint_number = number
    new_state.turn_status = STATUS_GUESSING
    new_state.guesses_left = number + 1

    hint = Hint(word=word, number=number, team=new_state.turn_team)
    new_state.hint_history = [hint] + new_state.hint_history[:rules.hint_history_limit - 1]
    new_state.log(f"{player.name} hinted \"{word}\" for {number}")

    new_state.increment_version()
    return new_state


def reveal_card(state: RoomState, player_id: str, card_id: str) -> RoomState:
    """
    Reveal a card for the guessing team.

    Failed soft preconditions (wrong role or team, no active hint, game over,
    unknown or already revealed card) return `state` itself, unchanged.

    Raises:
        PlayerNotFound: If the player is not in the room
    """
    player = _require_player(state, player_id)
    check = validate_reveal(state, player_id, card_id)
    if not check.valid:
        logger.debug(f"Ignoring reveal of {card_id} by {player_id} in {state.code}: {check.reason}")
        return state

    new_state = copy.deepcopy(state)
    card = new_state.get_card(card_id)
    team = new_state.turn_team
    card.revealed = True
    card.revealed_by_team = team
    new_state.log(f"{player.name} revealed {card.word} ({card.type})")

    if card.type == CARD_ASSASSIN:
        new_state.winner = other_team(team)
        new_state.win_reason = WIN_ASSASSIN
    else:
        if card.type == CARD_RED:
            new_state.red_cards_left -= 1
        elif card.type == CARD_BLUE:
            new_state.blue_cards_left -= 1

        if new_state.red_cards_left == 0:
            new_state.winner = CARD_RED
            new_state.win_reason = WIN_CARDS
        elif new_state.blue_cards_left == 0:
            new_state.winner = CARD_BLUE
            new_state.win_reason = WIN_CARDS

    if new_state.winner is not None:
        new_state.clear_hint()
        new_state.log(f"Team {new_state.winner} wins ({new_state.win_reason})")
        logger.info(f"Room {new_state.code}: {new_state.winner} wins by {new_state.win_reason}")
    elif card.type == team:
        new_state.guesses_left -= 1
        if new_state.guesses_left <= 0:
            _end_turn(new_state)
    else:
        # Neutral or opponent card
        _end_turn(new_state)

    new_state.increment_version()
    return new_state


def end_turn(state: RoomState, player_id: str) -> RoomState:
    """
    End the current team's turn early.

    Only the spymaster of the team holding the turn may do this.

    Raises:
        Forbidden: Caller does not hold the turn team's spymaster slot, or
            the game is over
    """
    player = _require_player(state, player_id)
    if state.winner is not None:
        raise Forbidden("The game is over", room_code=state.code, player_id=player_id)
    if state.spymaster_id(state.turn_team) != player_id:
        raise Forbidden(
            "Only the current team's Spymaster can end the turn",
            room_code=state.code,
            player_id=player_id,
        )

    new_state = copy.deepcopy(state)
    new_state.log(f"{player.name} ended the {new_state.turn_team} turn")
    _end_turn(new_state)
    new_state.increment_version()
    return new_state


def reset_game(
    state: RoomState,
    player_id: str,
    word_pool: Sequence[str],
    rules: RuleConfig = default_rules,
    rng: Optional[random.Random] = None,
) -> RoomState:
    """
    Deal a new board. Roster, teams and spymasters are kept.

    Raises:
        Forbidden: If the caller is not a spymaster
    """
    player = _require_player(state, player_id)
    if player_id not in (state.red_spymaster_id, state.blue_spymaster_id):
        raise Forbidden(
            "Only a Spymaster can reset the game",
            room_code=state.code,
            player_id=player_id,
        )

    new_state = copy.deepcopy(state)
    new_state.game_number += 1
    _deal_board(new_state, word_pool, rules, rng)
    new_state.log(f"{player.name} started game {new_state.game_number}, {new_state.turn_team} goes first")
    logger.info(f"Room {new_state.code} reset to game {new_state.game_number}")

    new_state.increment_version()
    return new_state


def toggle_mic(state: RoomState, player_id: str) -> RoomState:
    new_state = copy.deepcopy(state)
    player = _require_player(new_state, player_id)
    player.mic_muted = not player.mic_muted
    new_state.increment_version()
    return new_state


def leave_room(state: RoomState, player_id: str) -> RoomState:
    """
    Soft-delete a player. Their record stays on the room as inactive.
    """
    new_state = copy.deepcopy(state)
    player = _require_player(new_state, player_id)
    _release_spymaster(new_state, player)
    player.is_active = False
    new_state.log(f"{player.name} left")
    new_state.increment_version()
    return new_state


def check_invariants(state: RoomState) -> List[str]:
    """
    List every room invariant the state violates (empty when consistent).
    """
    problems = []

    if len(state.cards) != BOARD_SIZE:
        problems.append(f"board has {len(state.cards)} cards")
    if sum(1 for c in state.cards if c.type == CARD_ASSASSIN) != 1:
        problems.append("board must have exactly one assassin")
    if state.red_cards_left != state.count_unrevealed(CARD_RED):
        problems.append("red_cards_left out of sync with the board")
    if state.blue_cards_left != state.count_unrevealed(CARD_BLUE):
        problems.append("blue_cards_left out of sync with the board")

    if state.turn_team not in TEAMS:
        problems.append(f"invalid turn team {state.turn_team!r}")
    if state.turn_status == STATUS_WAITING_HINT:
        if state.hint_word is not None or state.hint_number is not None or state.guesses_left != 0:
            problems.append("WAITING_HINT with an active hint or guesses left")
    elif state.turn_status == STATUS_GUESSING:
        if state.hint_word is None or state.hint_number is None or state.guesses_left < 0:
            problems.append("GUESSING without a hint")
    else:
        problems.append(f"invalid turn status {state.turn_status!r}")

    for team in TEAMS:
        slot = state.spymaster_id(team)
        if slot is not None:
            holder = state.active_player(slot)
            if holder is None or holder.team != team or holder.role != ROLE_SPYMASTER:
                problems.append(f"{team} spymaster slot points at an invalid player")
        holders = [
            p.id for p in state.active_players
            if p.team == team and p.role == ROLE_SPYMASTER
        ]
        if len(holders) > 1 or (holders and holders[0] != slot):
            problems.append(f"{team} spymaster role and slot disagree")

    for player in state.players.values():
        if player.role == ROLE_SPYMASTER and player.team is None:
            problems.append(f"spectator {player.id} holds the spymaster role")

    known_types = {CARD_RED, CARD_BLUE, CARD_NEUTRAL, CARD_ASSASSIN}
    for card in state.cards:
        if card.type not in known_types:
            problems.append(f"card {card.id} has unknown type {card.type!r}")
        if card.revealed != (card.revealed_by_team is not None):
            problems.append(f"card {card.id} reveal fields disagree")

    return problems
