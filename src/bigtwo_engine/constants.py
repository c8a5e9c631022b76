"""Game constants for Big Two."""

from typing import List

# Ranked weakest to strongest: "3" is the lowest point, "2" the highest
POINTS: List[str] = ['3', '4', '5', '6', '7', '8', '9', '10', 'J', 'Q', 'K', 'A', '2']
SUITS: List[str] = ['♣', '♦', '♥', '♠']

DECK_SIZE = 52

# Three of clubs, must be part of the first play of a round
OPENING_CARD = 0

# Room lifecycle
STATUS_WAITING = 'waiting'
STATUS_PLAYING = 'playing'
STATUS_ENDED = 'ended'

# Join intents
MODE_CREATE = 'create'
MODE_JOIN = 'join'

# Hand types
HAND_SINGLE = 'SINGLE'
HAND_PAIR = 'PAIR'
HAND_STRAIGHT = 'STRAIGHT'
HAND_FLUSH = 'FLUSH'
HAND_FULL_HOUSE = 'FULL_HOUSE'
HAND_FOUR_KIND = 'FOUR_KIND'
HAND_STRAIGHT_FLUSH = 'STRAIGHT_FLUSH'

HAND_NAMES = {
    HAND_SINGLE: 'Single',
    HAND_PAIR: 'Pair',
    HAND_STRAIGHT: 'Straight',
    HAND_FLUSH: 'Flush',
    HAND_FULL_HOUSE: 'Full House',
    HAND_FOUR_KIND: 'Four of a Kind',
    HAND_STRAIGHT_FLUSH: 'Straight Flush',
}

# Category order among five-card hands
FIVE_CARD_RANKS = {
    HAND_STRAIGHT: 1,
    HAND_FLUSH: 2,
    HAND_FULL_HOUSE: 3,
    HAND_FOUR_KIND: 4,
    HAND_STRAIGHT_FLUSH: 5,
}

AVATARS: List[str] = ['👑', '🛡️', '⚔️', '💎', '🔥', '🌀', '🎭', '🃏']
