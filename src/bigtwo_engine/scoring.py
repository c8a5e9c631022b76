# src/bigtwo_engine/scoring.py

from typing import Dict

from .models import RoomState
from .rules import RuleConfig


def card_penalty(cards_left: int, rules: RuleConfig) -> int:
    """
    Points lost for the cards still held when the round ends.

    Ten or more cards cost double; a hand that was never played from
    (13 cards) costs the doubled amount three times over.
    """
    penalty = cards_left
    if cards_left >= rules.penalty_double_threshold:
        penalty *= 2
    if cards_left == rules.untouched_hand_size:
        penalty *= rules.untouched_hand_multiplier
    return penalty


def settle_scores(state: RoomState, winner_id: str) -> Dict[str, int]:
    """
    Applies end-of-round scoring to every player in the room.

    This function mutates the state: each player's score drops by their
    card penalty and the winner gains the flat win bonus.

    Args:
        state: The RoomState of a round that just ended.
        winner_id: The player who emptied their hand.

    Returns:
        The score change applied to each player, keyed by player id.
    """
    rules = state.rule_config
    changes = {}

    for player in state.players:
        delta = -card_penalty(player.hand_size, rules)
        if player.id == winner_id:
            delta += rules.win_bonus
        player.score += delta
        changes[player.id] = delta

    return changes
