"""
Shared fixtures: a seated four-player room where red moves first.
"""

import random

import pytest

from codenames_engine import engine
from codenames_engine.constants import ROLE_SPYMASTER, TEAM_BLUE, TEAM_RED
from codenames_engine.rules import create_rules
from codenames_engine.store import RoomStateStore
from codenames_engine.words import DEFAULT_WORD_POOL

ROOM_CODE = "ABC234"

# player id -> (name, team, spymaster?)
SEATING = {
    "red-spy": ("Rita", TEAM_RED, True),
    "blue-spy": ("Bram", TEAM_BLUE, True),
    "red-guess": ("Rosa", TEAM_RED, False),
    "blue-guess": ("Bill", TEAM_BLUE, False),
}


def seat_players(state):
    """Join, team up and promote every player in SEATING (creator included)."""
    for player_id, (name, team, is_spymaster) in SEATING.items():
        if player_id not in state.players:
            state, _ = engine.join_room(state, player_id, name)
        state = engine.select_team(state, player_id, team)
        if is_spymaster:
            state, _ = engine.set_role(state, player_id, ROLE_SPYMASTER)
    return state


def cards_of(state, card_type, revealed=False):
    return [c for c in state.cards if c.type == card_type and c.revealed == revealed]


@pytest.fixture
def red_first():
    return create_rules(starting_team="red")


@pytest.fixture
def room(red_first):
    """Room with both spymasters and one guesser per team, red to hint."""
    state, _ = engine.new_room(
        ROOM_CODE, "red-spy", "Rita", DEFAULT_WORD_POOL, red_first, random.Random(7)
    )
    return seat_players(state)


@pytest.fixture
def store(red_first):
    return RoomStateStore(rules=red_first, rng=random.Random(11))


@pytest.fixture
def seated_store(store):
    """Store holding one seated room; returns (store, code)."""
    state, _ = store.create_room("red-spy", "Rita")
    for player_id, (name, team, is_spymaster) in SEATING.items():
        if player_id != "red-spy":
            store.join_room(state.code, player_id, name)
        store.select_team(state.code, player_id, team)
        if is_spymaster:
            store.set_role(state.code, player_id, ROLE_SPYMASTER)
    return store, state.code
