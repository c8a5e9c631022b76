"""
Card helpers, shuffling and dealing utilities.

A card is an integer id in [0, 51] where ``id = point * 4 + suit``, so
ordering raw ids orders cards by point first and suit second.
"""

import random
from typing import Dict, Iterable, List, Optional

from .constants import DECK_SIZE, POINTS, SUITS


def point(card: int) -> int:
    """Point index of a card (0 is "3", 12 is "2")."""
    return card // 4


def suit(card: int) -> int:
    """Suit index of a card (0 is clubs, 3 is spades)."""
    return card % 4


def card_label(card: int) -> str:
    return f"{POINTS[point(card)]}{SUITS[suit(card)]}"


def hand_label(cards: Iterable[int]) -> str:
    return " ".join(card_label(c) for c in sorted(cards))


def create_deck() -> List[int]:
    """Create a standard 52-card deck."""
    return list(range(DECK_SIZE))


def shuffle_deck(deck: List[int], seed: Optional[int] = None) -> List[int]:
    """
    Shuffle a deck deterministically if seed is provided.

    ``random.shuffle`` is a Fisher-Yates shuffle, so every permutation
    is equally likely.

    Args:
        deck: List of card ids to shuffle
        seed: Optional seed for deterministic shuffling

    Returns:
        Shuffled copy of the deck
    """
    deck_copy = deck.copy()

    if seed is not None:
        rng = random.Random(seed)
        rng.shuffle(deck_copy)
    else:
        random.shuffle(deck_copy)

    return deck_copy


def deal_cards(deck: List[int], player_count: int) -> List[List[int]]:
    """
    Deal ``len(deck) // player_count`` cards to each player.

    Players receive consecutive slices of the deck in seat order. Cards
    left over after the even split are not dealt.

    Args:
        deck: Shuffled deck of cards
        player_count: Number of players to deal to

    Returns:
        One sorted hand per player, in seat order
    """
    if player_count <= 0:
        return []

    per_player = len(deck) // player_count
    return [
        sort_hand(deck[i * per_player:(i + 1) * per_player])
        for i in range(player_count)
    ]


def sort_hand(hand: Iterable[int]) -> List[int]:
    return sorted(hand)


def group_by_point(hand: Iterable[int]) -> Dict[int, List[int]]:
    """Group cards of a hand by point, each group in id order."""
    groups: Dict[int, List[int]] = {}
    for card in sort_hand(hand):
        groups.setdefault(point(card), []).append(card)
    return groups


def find_pairs(hand: Iterable[int]) -> List[List[int]]:
    """
    Find one pair per point in a hand, for quick card selection.

    Only the two lowest cards of each point group are offered.
    """
    return [group[:2] for group in group_by_point(hand).values() if len(group) >= 2]


def find_full_houses(hand: Iterable[int]) -> List[List[int]]:
    """
    Find full houses in a hand, for quick card selection.

    Each triple (the three lowest cards of a point group) is combined with
    the two lowest cards of every other point group holding a pair.
    """
    groups = group_by_point(hand)
    threes = [g for g in groups.values() if len(g) >= 3]
    pairs = [g for g in groups.values() if len(g) >= 2]

    results = []
    for triple in threes:
        for pair in pairs:
            if point(triple[0]) != point(pair[0]):
                results.append(triple[:3] + pair[:2])
    return results
