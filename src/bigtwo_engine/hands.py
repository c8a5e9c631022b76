"""
Hand classification and comparison for Big Two plays.

Legal plays are singles, pairs and five-card hands. Within a hand type the
``power`` card decides; between different five-card hands the category
``rank`` decides first.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from .cards import point, suit
from .constants import (
    FIVE_CARD_RANKS, HAND_FLUSH, HAND_FOUR_KIND, HAND_FULL_HOUSE, HAND_NAMES,
    HAND_PAIR, HAND_SINGLE, HAND_STRAIGHT, HAND_STRAIGHT_FLUSH, OPENING_CARD,
)
from .errors import (
    DOES_NOT_BEAT, INVALID_HAND_SHAPE, MUST_LEAD_OPENING_CARD, SIZE_MISMATCH,
)


@dataclass(frozen=True)
class HandInfo:
    """Classification of a legal play."""
    type: str
    power: int  # card id used as the ordering key
    size: int
    rank: Optional[int] = None  # only set for five-card hands

    @property
    def name(self) -> str:
        return HAND_NAMES[self.type]


class CompareResult:
    """Result of checking a play against the cards on the table."""

    def __init__(
        self,
        accepted: bool,
        error_code: Optional[str] = None,
        reason: Optional[str] = None,
        info: Optional[HandInfo] = None
    ):
        self.accepted = accepted
        self.error_code = error_code
        self.reason = reason
        self.info = info

    @classmethod
    def success(cls, info: HandInfo) -> 'CompareResult':
        return cls(accepted=True, info=info)

    @classmethod
    def error(cls, error_code: str, reason: str, info: Optional[HandInfo] = None) -> 'CompareResult':
        return cls(accepted=False, error_code=error_code, reason=reason, info=info)

    def __repr__(self) -> str:
        if self.accepted:
            return f"CompareResult(accepted=True, info={self.info!r})"
        return f"CompareResult(accepted=False, error_code={self.error_code!r})"


def _five_card_hand(cards: List[int]) -> Optional[HandInfo]:
    pts = [point(c) for c in cards]
    suits = [suit(c) for c in cards]
    highest = cards[-1]

    is_flush = all(s == suits[0] for s in suits)
    # Plain consecutive run; A-2-3-4-5 style wraps are not straights
    is_straight = all(pts[i] == pts[i - 1] + 1 for i in range(1, 5))

    if is_flush and is_straight:
        hand_type, power = HAND_STRAIGHT_FLUSH, highest
    elif pts[0] == pts[3] or pts[1] == pts[4]:
        # The middle card always belongs to the four
        hand_type, power = HAND_FOUR_KIND, cards[2]
    elif (pts[0] == pts[2] and pts[3] == pts[4]) or (pts[0] == pts[1] and pts[2] == pts[4]):
        # The middle card always belongs to the triple
        hand_type, power = HAND_FULL_HOUSE, cards[2]
    elif is_flush:
        hand_type, power = HAND_FLUSH, highest
    elif is_straight:
        hand_type, power = HAND_STRAIGHT, highest
    else:
        return None

    return HandInfo(type=hand_type, power=power, size=5, rank=FIVE_CARD_RANKS[hand_type])


def classify(cards: Iterable[int]) -> Optional[HandInfo]:
    """
    Classify a set of cards into a hand type.

    Args:
        cards: Card ids being played

    Returns:
        HandInfo for a legal shape, or None if the cards form no legal hand
    """
    sorted_cards = sorted(cards)
    size = len(sorted_cards)

    # A hand is a set; repeated ids never form a legal shape
    if size == 0 or len(set(sorted_cards)) != size:
        return None

    if size == 1:
        return HandInfo(type=HAND_SINGLE, power=sorted_cards[0], size=1)

    if size == 2:
        if point(sorted_cards[0]) == point(sorted_cards[1]):
            return HandInfo(type=HAND_PAIR, power=sorted_cards[1], size=2)
        return None

    if size == 5:
        return _five_card_hand(sorted_cards)

    return None


def compare(
    candidate: Iterable[int],
    reference: Optional[Iterable[int]] = None,
    is_first_turn: bool = False
) -> CompareResult:
    """
    Decide whether a candidate play may be laid on the reference play.

    Args:
        candidate: Cards the player wants to play
        reference: Cards currently on the table, empty or None for a free lead
        is_first_turn: Whether this is the first play of the round

    Returns:
        CompareResult with the classification of the candidate on success
    """
    candidate = list(candidate)
    reference = list(reference) if reference else []

    info = classify(candidate)
    if info is None:
        return CompareResult.error(INVALID_HAND_SHAPE, "These cards do not form a valid hand")

    if is_first_turn and OPENING_CARD not in candidate:
        return CompareResult.error(
            MUST_LEAD_OPENING_CARD,
            "The first play of the round must include the 3♣",
            info
        )

    # Free lead: any legal shape opens a new trick
    if not reference:
        return CompareResult.success(info)

    if len(candidate) != len(reference):
        return CompareResult.error(
            SIZE_MISMATCH,
            f"Must play {len(reference)} cards (played {len(candidate)})",
            info
        )

    last_info = classify(reference)

    if last_info is not None and info.type == last_info.type:
        if info.power > last_info.power:
            return CompareResult.success(info)
        return CompareResult.error(DOES_NOT_BEAT, f"{info.name} is not higher than the table", info)

    if last_info is not None and info.size == 5:
        if info.rank > last_info.rank:
            return CompareResult.success(info)
        if info.rank == last_info.rank and info.power > last_info.power:
            return CompareResult.success(info)
        return CompareResult.error(
            DOES_NOT_BEAT,
            f"{info.name} is a weaker category than {last_info.name}",
            info
        )

    return CompareResult.error(DOES_NOT_BEAT, "Hand type does not match the table", info)
