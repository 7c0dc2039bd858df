from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Sequence, Tuple

from .cards import Card, Rank


class HandCategory(IntEnum):
    """Hand categories from weakest to strongest."""

    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9

    @property
    def title(self) -> str:
        return self.name.replace("_", " ").title().replace(" A ", " a ").replace(" Of ", " of ")


@dataclass(frozen=True)
class Hand:
    """A classified hand: its category plus the ordered key cards.

    Primary cards come first, kickers after. Showdown keys hold five cards; the
    pre-flop reading holds only the two hole cards.
    """

    category: HandCategory
    cards: Tuple[Card, ...]

    @classmethod
    def of(cls, category: HandCategory, cards: Sequence[Card]) -> "Hand":
        return cls(category, tuple(cards))

    @property
    def ranks(self) -> Tuple[int, ...]:
        return tuple(int(card.rank) for card in self.cards)

    @property
    def strength(self) -> Tuple[int, Tuple[int, ...]]:
        """Total-order key. Higher is better."""
        return (int(self.category), self.ranks)

    @property
    def labels(self) -> List[str]:
        return [card.label for card in self.cards]

    def beats(self, other: "Hand") -> bool:
        return self.strength > other.strength

    def ties(self, other: "Hand") -> bool:
        return self.strength == other.strength

    def describe(self) -> str:
        return describe_hand(self)

    def __str__(self) -> str:
        return self.describe()


def _high(rank: Rank) -> str:
    return f"{rank.title} high"


def describe_hand(hand: Hand) -> str:
    category = hand.category
    cards = hand.cards
    title = category.title
    if not cards:
        return title
    lead = cards[0]
    if category == HandCategory.ROYAL_FLUSH:
        return f"{title} ({lead.suit.title})"
    if category == HandCategory.STRAIGHT_FLUSH:
        return f"{title} ({_high(lead.rank)}, {lead.suit.title})"
    if category == HandCategory.FOUR_OF_A_KIND:
        return f"{title} ({lead.rank.plural})"
    if category == HandCategory.FULL_HOUSE:
        return f"{title} ({lead.rank.plural} over {cards[3].rank.plural})"
    if category == HandCategory.FLUSH:
        return f"{title} ({lead.suit.title}, {_high(lead.rank)})"
    if category == HandCategory.STRAIGHT:
        return f"{title} ({_high(lead.rank)})"
    if category == HandCategory.THREE_OF_A_KIND:
        return f"{title} ({lead.rank.plural})"
    if category == HandCategory.TWO_PAIR:
        return f"{title} ({lead.rank.plural} and {cards[2].rank.plural})"
    if category == HandCategory.ONE_PAIR:
        return f"{title} ({lead.rank.plural})"
    return f"{title} ({lead.rank.title})"
