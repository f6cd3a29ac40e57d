"""
Tests for the room turn-state machine.
"""

import copy
import random

import pytest

from codenames_engine import engine
from codenames_engine.constants import (
    CARD_ASSASSIN, CARD_BLUE, CARD_NEUTRAL, CARD_RED, ROLE_GUESSER, ROLE_SPYMASTER,
    STATUS_GUESSING, STATUS_WAITING_HINT, TEAM_BLUE, TEAM_RED, TEAMS, WIN_ASSASSIN,
    WIN_CARDS
)
from codenames_engine.errors import (
    Forbidden, InvalidInput, PlayerNotFound, TeamRequired
)
from codenames_engine.rules import create_rules
from codenames_engine.words import DEFAULT_WORD_POOL

from .conftest import ROOM_CODE, cards_of


def test_new_room():
    """A fresh room has a full board, no hint and the creator as spectator."""
    state, player = engine.new_room(
        ROOM_CODE, "p1", "  Alice ", DEFAULT_WORD_POOL, rng=random.Random(1)
    )

    assert state.version == 1
    assert len(state.cards) == 25
    assert state.turn_team == state.starting_team
    assert state.turn_status == STATUS_WAITING_HINT
    assert state.guesses_left == 0
    assert state.winner is None
    assert state.red_spymaster_id is None and state.blue_spymaster_id is None
    assert player.name == "Alice"
    assert player.team is None
    assert player.role == ROLE_GUESSER
    assert list(state.players) == ["p1"]
    assert engine.check_invariants(state) == []


def test_new_room_starting_team_gets_nine_cards():
    for team in TEAMS:
        state, _ = engine.new_room(
            ROOM_CODE, "p1", "Alice", DEFAULT_WORD_POOL,
            create_rules(starting_team=team), random.Random(3)
        )
        assert state.starting_team == team
        assert len(cards_of(state, team)) == 9
        assert state.red_cards_left + state.blue_cards_left == 17


def test_new_room_rejects_blank_name():
    with pytest.raises(InvalidInput):
        engine.new_room(ROOM_CODE, "p1", "   ", DEFAULT_WORD_POOL)


def test_join_room_appends_and_renames(room):
    state, player = engine.join_room(room, "newbie", "Nina")
    assert list(state.players)[-1] == "newbie"
    assert player.team is None

    renamed, player = engine.join_room(state, "newbie", "Nina B")
    assert renamed.players["newbie"].name == "Nina B"
    assert len(renamed.players) == len(state.players)


def test_transitions_do_not_mutate_input(room):
    before = copy.deepcopy(room)
    engine.send_hint(room, "red-spy", "ocean", 2)
    engine.toggle_mic(room, "red-guess")
    assert room == before


def test_select_team_same_team_keeps_role(room):
    state = engine.select_team(room, "red-spy", TEAM_RED)
    assert state.players["red-spy"].role == ROLE_SPYMASTER
    assert state.red_spymaster_id == "red-spy"
    assert state.version == room.version + 1


def test_select_team_switch_releases_spymaster(room):
    state = engine.select_team(room, "red-spy", TEAM_BLUE)
    player = state.players["red-spy"]
    assert player.team == TEAM_BLUE
    assert player.role == ROLE_GUESSER
    assert state.red_spymaster_id is None
    assert state.blue_spymaster_id == "blue-spy"
    assert engine.check_invariants(state) == []


def test_select_team_unknown_team(room):
    with pytest.raises(InvalidInput):
        engine.select_team(room, "red-guess", "green")


def test_set_role_requires_team():
    state, _ = engine.new_room(ROOM_CODE, "p1", "Alice", DEFAULT_WORD_POOL)
    with pytest.raises(TeamRequired):
        engine.set_role(state, "p1", ROLE_SPYMASTER)


def test_set_role_unknown_player(room):
    with pytest.raises(PlayerNotFound):
        engine.set_role(room, "ghost", ROLE_SPYMASTER)


def test_spymaster_replacement(room):
    """Taking an occupied slot demotes the holder in the same transition."""
    state, replaced = engine.set_role(room, "red-guess", ROLE_SPYMASTER)

    assert replaced is True
    assert state.red_spymaster_id == "red-guess"
    assert state.players["red-guess"].role == ROLE_SPYMASTER
    assert state.players["red-spy"].role == ROLE_GUESSER
    assert engine.check_invariants(state) == []


def test_set_role_same_holder_is_not_replacement(room):
    state, replaced = engine.set_role(room, "red-spy", ROLE_SPYMASTER)
    assert replaced is False
    assert state.red_spymaster_id == "red-spy"


def test_set_role_guesser_clears_slot(room):
    state, replaced = engine.set_role(room, "red-spy", ROLE_GUESSER)
    assert replaced is False
    assert state.red_spymaster_id is None
    assert state.players["red-spy"].role == ROLE_GUESSER


def test_spymaster_uniqueness_under_random_moves(room):
    """Random team and role changes never break the spymaster invariant."""
    rng = random.Random(2024)
    state = room
    for extra in ("x1", "x2"):
        state, _ = engine.join_room(state, extra, extra.upper())
    player_ids = list(state.players)

    for _ in range(400):
        player_id = rng.choice(player_ids)
        if rng.random() < 0.4:
            state = engine.select_team(state, player_id, rng.choice(TEAMS))
        else:
            try:
                state, _ = engine.set_role(state, player_id, rng.choice([ROLE_SPYMASTER, ROLE_GUESSER]))
            except TeamRequired:
                continue
        assert engine.check_invariants(state) == []
        for team in TEAMS:
            holders = [p for p in state.players.values() if p.team == team and p.role == ROLE_SPYMASTER]
            assert len(holders) <= 1


def test_send_hint_opens_guessing(room):
    state = engine.send_hint(room, "red-spy", "  ocean ", 2)

    assert state.turn_status == STATUS_GUESSING
    assert state.hint_word == "ocean"
    assert state.hint_number == 2
    assert state.guesses_left == 3
    assert state.hint_history[0].word == "ocean"
    assert state.hint_history[0].team == TEAM_RED
    assert state.version == room.version + 1


def test_send_hint_zero_gives_one_guess(room):
    state = engine.send_hint(room, "red-spy", "nothing", 0)
    assert state.guesses_left == 1


@pytest.mark.parametrize("word,number", [
    ("", 2),
    ("   ", 2),
    ("two words", 2),
    ("ocean", -1),
    ("ocean", 10),
    ("ocean", True),
])
def test_send_hint_invalid_input(room, word, number):
    with pytest.raises(InvalidInput):
        engine.send_hint(room, "red-spy", word, number)


def test_send_hint_forbidden(room):
    # Wrong team's spymaster, a guesser, and a second hint in one turn
    with pytest.raises(Forbidden):
        engine.send_hint(room, "blue-spy", "ocean", 2)
    with pytest.raises(Forbidden):
        engine.send_hint(room, "red-guess", "ocean", 2)

    state = engine.send_hint(room, "red-spy", "ocean", 2)
    with pytest.raises(Forbidden):
        engine.send_hint(state, "red-spy", "beach", 1)


def test_hint_history_keeps_three_most_recent(room):
    state = room
    for word in ["one", "two", "three", "four"]:
        spymaster = "red-spy" if state.turn_team == TEAM_RED else "blue-spy"
        state = engine.send_hint(state, spymaster, word, 1)
        state = engine.end_turn(state, spymaster)

    assert [h.word for h in state.hint_history] == ["four", "three", "two"]


def test_guess_streak_scenario(room):
    """Hint ("ocean", 2) allows three correct guesses, then the turn passes."""
    state = engine.send_hint(room, "red-spy", "ocean", 2)
    red_cards = cards_of(state, CARD_RED)

    for expected_left in (2, 1):
        card = red_cards.pop()
        state = engine.reveal_card(state, "red-guess", card.id)
        assert state.get_card(card.id).revealed_by_team == TEAM_RED
        assert state.turn_team == TEAM_RED
        assert state.guesses_left == expected_left
        assert engine.check_invariants(state) == []

    state = engine.reveal_card(state, "red-guess", red_cards.pop().id)
    assert state.red_cards_left == 6
    assert state.turn_team == TEAM_BLUE
    assert state.turn_status == STATUS_WAITING_HINT
    assert state.hint_word is None
    assert state.guesses_left == 0
    assert engine.check_invariants(state) == []


def test_neutral_card_ends_turn(room):
    state = engine.send_hint(room, "red-spy", "ocean", 2)
    state = engine.reveal_card(state, "red-guess", cards_of(state, CARD_NEUTRAL)[0].id)
    assert state.turn_team == TEAM_BLUE
    assert state.turn_status == STATUS_WAITING_HINT


def test_opponent_card_ends_turn_and_counts_for_them(room):
    state = engine.send_hint(room, "red-spy", "ocean", 2)
    state = engine.reveal_card(state, "red-guess", cards_of(state, CARD_BLUE)[0].id)
    assert state.blue_cards_left == 7
    assert state.turn_team == TEAM_BLUE


def test_assassin_scenario(room):
    state = engine.send_hint(room, "red-spy", "ocean", 2)
    assassin = cards_of(state, CARD_ASSASSIN)[0]
    state = engine.reveal_card(state, "red-guess", assassin.id)

    assert state.winner == TEAM_BLUE
    assert state.win_reason == WIN_ASSASSIN
    assert state.turn_status == STATUS_WAITING_HINT
    assert engine.check_invariants(state) == []

    # The game is over: further reveals are ignored, hints and turn ends refused
    other = cards_of(state, CARD_RED)[0]
    assert engine.reveal_card(state, "red-guess", other.id) is state
    with pytest.raises(Forbidden):
        engine.send_hint(state, "red-spy", "again", 1)
    with pytest.raises(Forbidden):
        engine.end_turn(state, "red-spy")


def test_win_by_exhaustion_mid_turn(room):
    """Revealing the opponent's last card makes the opponent win immediately."""
    state = copy.deepcopy(room)
    blue_cards = cards_of(state, CARD_BLUE)
    for card in blue_cards[:-1]:
        card.revealed = True
        card.revealed_by_team = TEAM_BLUE
    state.recount_cards_left()
    assert state.blue_cards_left == 1

    state = engine.send_hint(state, "red-spy", "ocean", 2)
    state = engine.reveal_card(state, "red-guess", blue_cards[-1].id)

    assert state.winner == TEAM_BLUE
    assert state.win_reason == WIN_CARDS
    assert state.blue_cards_left == 0
    assert engine.check_invariants(state) == []


def test_reveal_idempotent(room):
    state = engine.send_hint(room, "red-spy", "ocean", 2)
    card = cards_of(state, CARD_RED)[0]
    once = engine.reveal_card(state, "red-guess", card.id)
    twice = engine.reveal_card(once, "red-guess", card.id)

    assert twice is once
    assert twice.version == once.version
    assert twice.red_cards_left == once.red_cards_left


def test_reveal_soft_preconditions_are_noops(room):
    card = cards_of(room, CARD_RED)[0]
    # No hint yet
    assert engine.reveal_card(room, "red-guess", card.id) is room

    state = engine.send_hint(room, "red-spy", "ocean", 2)
    assert engine.reveal_card(state, "red-spy", card.id) is state
    assert engine.reveal_card(state, "blue-guess", card.id) is state
    assert engine.reveal_card(state, "red-guess", "no-such-card") is state


def test_reveal_unknown_player_is_an_error(room):
    with pytest.raises(PlayerNotFound):
        engine.reveal_card(room, "ghost", room.cards[0].id)


def test_end_turn_only_turn_spymaster(room):
    with pytest.raises(Forbidden):
        engine.end_turn(room, "red-guess")
    with pytest.raises(Forbidden):
        engine.end_turn(room, "blue-spy")

    state = engine.end_turn(room, "red-spy")
    assert state.turn_team == TEAM_BLUE
    assert state.turn_status == STATUS_WAITING_HINT


def test_end_turn_during_guessing(room):
    state = engine.send_hint(room, "red-spy", "ocean", 2)
    state = engine.end_turn(state, "red-spy")
    assert state.turn_team == TEAM_BLUE
    assert state.guesses_left == 0
    assert state.hint_word is None


def test_reset_game(room):
    state = engine.send_hint(room, "red-spy", "ocean", 2)
    state = engine.reveal_card(state, "red-guess", cards_of(state, CARD_ASSASSIN)[0].id)

    with pytest.raises(Forbidden):
        engine.reset_game(state, "red-guess", DEFAULT_WORD_POOL)

    fresh = engine.reset_game(state, "blue-spy", DEFAULT_WORD_POOL, rng=random.Random(5))
    assert fresh.game_number == 2
    assert fresh.winner is None
    assert fresh.win_reason is None
    assert fresh.hint_history == []
    assert fresh.turn_team == fresh.starting_team
    assert fresh.turn_status == STATUS_WAITING_HINT
    assert not any(c.revealed for c in fresh.cards)
    assert {c.id for c in fresh.cards}.isdisjoint({c.id for c in state.cards})
    assert fresh.red_spymaster_id == "red-spy"
    assert fresh.blue_spymaster_id == "blue-spy"
    assert list(fresh.players) == list(state.players)
    assert engine.check_invariants(fresh) == []


def test_toggle_mic(room):
    state = engine.toggle_mic(room, "blue-guess")
    assert state.players["blue-guess"].mic_muted is True
    state = engine.toggle_mic(state, "blue-guess")
    assert state.players["blue-guess"].mic_muted is False


def test_leave_and_rejoin(room):
    state = engine.leave_room(room, "red-spy")
    player = state.players["red-spy"]

    assert player.is_active is False
    assert player.role == ROLE_GUESSER
    assert state.red_spymaster_id is None
    assert engine.check_invariants(state) == []

    with pytest.raises(PlayerNotFound):
        engine.toggle_mic(state, "red-spy")

    state, player = engine.join_room(state, "red-spy", "Rita")
    assert player.is_active is True
    assert player.team == TEAM_RED


def test_version_increments_by_one_per_transition(room):
    state = room
    steps = [
        lambda s: engine.send_hint(s, "red-spy", "ocean", 1),
        lambda s: engine.reveal_card(s, "red-guess", cards_of(s, CARD_NEUTRAL)[0].id),
        lambda s: engine.send_hint(s, "blue-spy", "sky", 1),
        lambda s: engine.end_turn(s, "blue-spy"),
        lambda s: engine.toggle_mic(s, "red-guess"),
        lambda s: engine.select_team(s, "red-guess", TEAM_RED),
    ]
    for step in steps:
        next_state = step(state)
        assert next_state.version == state.version + 1
        state = next_state


def test_turn_invariant_through_a_game(room):
    """Play random legal moves until someone wins, checking invariants at every step."""
    rng = random.Random(99)
    state = room
    for _ in range(200):
        if state.winner is not None:
            break
        team = state.turn_team
        spymaster = state.spymaster_id(team)
        guesser = "red-guess" if team == TEAM_RED else "blue-guess"
        if state.turn_status == STATUS_WAITING_HINT:
            state = engine.send_hint(state, spymaster, "clue", rng.randint(0, 3))
        else:
            hidden = [c for c in state.cards if not c.revealed]
            state = engine.reveal_card(state, guesser, rng.choice(hidden).id)
        assert engine.check_invariants(state) == []

    assert state.winner in TEAMS
