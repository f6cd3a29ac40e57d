"""
Board shuffling and deck generation utilities.
"""

import random
from collections import Counter
from typing import List, Optional, Sequence, TypeVar

from .constants import (
    ASSASSIN_CARDS, BOARD_SIZE, CARD_ASSASSIN, CARD_BLUE, CARD_NEUTRAL, CARD_RED,
    NEUTRAL_CARDS, SECOND_TEAM_CARDS, STARTING_TEAM_CARDS, TEAMS, card_counts
)
from .errors import InvalidInput
from .models import Card
from .words import normalize_words

T = TypeVar("T")


def shuffle_items(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """
    Return a uniformly shuffled copy of `items` (Fisher-Yates).

    Args:
        items: Items to shuffle
        rng: Random source; the module-level generator is used when omitted

    Returns:
        Shuffled copy, the input is left untouched
    """
    rng = rng or random
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def build_type_layout(starting_team: str) -> List[str]:
    """Unshuffled list of card types for a board; the starting team gets 9 cards."""
    layout = []
    for card_type, count in card_counts(starting_team).items():
        layout.extend([card_type] * count)
    return layout


def pick_starting_team(policy: str, rng: Optional[random.Random] = None) -> str:
    """Resolve a RuleConfig.starting_team policy to a concrete team."""
    if policy in TEAMS:
        return policy
    return (rng or random).choice(TEAMS)


def create_deck(
    word_pool: Sequence[str],
    starting_team: str,
    rng: Optional[random.Random] = None,
    id_prefix: str = "card",
) -> List[Card]:
    """
    Build a fresh 25-card board.

    Words and types are shuffled independently so that any word can end up
    with any type.

    Args:
        word_pool: Candidate words, at least 25 distinct after normalization
        starting_team: Team that moves first (receives 9 cards)
        rng: Optional random source, pass a seeded Random for deterministic boards
        id_prefix: Prefix for card ids, should differ between boards of the same room

    Returns:
        List of 25 unrevealed cards

    Raises:
        InvalidInput: If the pool is too small or the team is unknown
    """
    if starting_team not in TEAMS:
        raise InvalidInput(f"Unknown starting team: {starting_team}")

    words = normalize_words(word_pool)
    if len(words) < BOARD_SIZE:
        raise InvalidInput(
            f"Word pool needs at least {BOARD_SIZE} distinct words, got {len(words)}"
        )

    selected = shuffle_items(words, rng)[:BOARD_SIZE]
    types = shuffle_items(build_type_layout(starting_team), rng)

    return [
        Card(id=f"{id_prefix}-{index}", word=word, type=card_type)
        for index, (word, card_type) in enumerate(zip(selected, types))
    ]


def validate_deck_integrity(cards: List[Card], word_pool: Optional[Sequence[str]] = None) -> bool:
    """
    Validate that a board satisfies the deck invariant.

    Args:
        cards: Board to check
        word_pool: When given, every word must come from this pool

    Returns:
        True if the board is well formed
    """
    if len(cards) != BOARD_SIZE:
        return False

    words = [card.word for card in cards]
    if len(set(words)) != BOARD_SIZE:
        return False
    if len({card.id for card in cards}) != BOARD_SIZE:
        return False
    if word_pool is not None:
        pool = set(normalize_words(word_pool))
        if not all(word in pool for word in words):
            return False

    counts = Counter(card.type for card in cards)
    if set(counts) - {CARD_RED, CARD_BLUE, CARD_NEUTRAL, CARD_ASSASSIN}:
        return False
    if counts[CARD_ASSASSIN] != ASSASSIN_CARDS or counts[CARD_NEUTRAL] != NEUTRAL_CARDS:
        return False
    return sorted([counts[CARD_RED], counts[CARD_BLUE]]) == [SECOND_TEAM_CARDS, STARTING_TEAM_CARDS]
