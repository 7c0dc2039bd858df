from __future__ import annotations

import logging
from typing import List, Sequence

from .errors import NoWinner
from .hands import Hand

LOGGER = logging.getLogger(__name__)


def calculate_winners(hands: Sequence[Hand]) -> List[int]:
    """Return the indices of every winning hand, in input order.

    Hands are ranked by category first. When several share the best category the
    key cards are compared position by position, keeping only the hands holding
    the highest rank at each position. More than one index means a split pot.
    """
    if not hands:
        raise NoWinner("No hands to compare")

    ordered = sorted(range(len(hands)), key=lambda idx: hands[idx].strength, reverse=True)
    best = hands[ordered[0]]
    tied = [idx for idx in ordered if hands[idx].category == best.category]

    positions = min(len(hands[idx].cards) for idx in tied)
    for position in range(positions):
        if len(tied) == 1:
            break
        highest = max(hands[idx].ranks[position] for idx in tied)
        tied = [idx for idx in tied if hands[idx].ranks[position] == highest]
        LOGGER.debug("Kicker position %s: rank %s leaves %s contenders", position, highest, len(tied))

    if len(tied) > 1:
        LOGGER.debug("Split between %s hands: %s", len(tied), best.describe())
    return sorted(tied)


def calculate_winning_hand(hands: Sequence[Hand]) -> Hand:
    """Return one representative winning hand."""
    return hands[calculate_winners(hands)[0]]
