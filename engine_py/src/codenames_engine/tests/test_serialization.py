"""
Tests for state sanitization and the patch stream.
"""

from codenames_engine import engine
from codenames_engine.constants import CARD_ASSASSIN, CARD_RED, TEAM_RED
from codenames_engine.diff import apply_diff, compute_diff, should_send_full_state
from codenames_engine.serialization import can_see_key, room_from_dict, room_to_dict, sanitize_state
from codenames_engine.words import DEFAULT_WORD_POOL

from .conftest import cards_of


def test_guessers_do_not_see_the_key(room):
    view = sanitize_state(room, "red-guess")
    assert view["show_key"] is False
    assert all(card["type"] is None for card in view["cards"])
    assert all(card["word"] for card in view["cards"])


def test_spectators_and_anonymous_viewers_do_not_see_the_key(room):
    state, _ = engine.join_room(room, "watcher", "Wendy")
    assert not can_see_key(state, "watcher")
    assert not can_see_key(state, None)
    assert all(card["type"] is None for card in sanitize_state(state)["cards"])


def test_spymasters_see_the_key(room):
    view = sanitize_state(room, "blue-spy")
    assert view["show_key"] is True
    assert [card["type"] for card in view["cards"]] == [card.type for card in room.cards]


def test_revealed_cards_are_public(room):
    state = engine.send_hint(room, "red-spy", "ocean", 2)
    card = cards_of(state, CARD_RED)[0]
    state = engine.reveal_card(state, "red-guess", card.id)

    view = sanitize_state(state, "blue-guess")
    shown = next(c for c in view["cards"] if c["id"] == card.id)
    assert shown["type"] == CARD_RED
    assert shown["revealed_by_team"] == TEAM_RED
    assert view["turn"]["guesses_left"] == 2
    assert view["current_hint"] == {"word": "ocean", "number": 2, "team": TEAM_RED}


def test_key_is_public_after_game_over(room):
    state = engine.send_hint(room, "red-spy", "ocean", 2)
    state = engine.reveal_card(state, "red-guess", cards_of(state, CARD_ASSASSIN)[0].id)
    view = sanitize_state(state, "red-guess")
    assert view["show_key"] is True
    assert all(card["type"] is not None for card in view["cards"])


def test_inactive_players_are_hidden(room):
    state = engine.leave_room(room, "blue-guess")
    view = sanitize_state(state)
    assert "blue-guess" not in [p["id"] for p in view["players"]]
    # Still on record for persistence
    assert "blue-guess" in [p["id"] for p in room_to_dict(state)["players"]]


def test_room_dict_round_trip(room):
    assert room_from_dict(room_to_dict(room)) == room


def test_reveal_patch_is_small_and_applies(room):
    old = engine.send_hint(room, "red-spy", "ocean", 2)
    new = engine.reveal_card(old, "red-guess", cards_of(old, CARD_RED)[0].id)

    ops = compute_diff(old, new, "red-guess")
    paths = {op["path"] for op in ops}

    assert "/version" in paths
    assert "/turn/guesses_left" in paths
    assert "/red_cards_left" in paths
    assert not should_send_full_state(ops)
    assert apply_diff(sanitize_state(old, "red-guess"), ops) == sanitize_state(new, "red-guess")


def test_no_diff_for_unchanged_state(room):
    assert compute_diff(room, room, "red-guess") == []
    assert compute_diff(None, room) == []


def test_new_board_forces_full_state(room):
    new = engine.reset_game(room, "red-spy", DEFAULT_WORD_POOL)
    ops = compute_diff(room, new, "red-guess")
    assert should_send_full_state(ops)
