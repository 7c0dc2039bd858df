from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterable, List, Optional, Sequence

from .errors import DeckExhausted


class Rank(IntEnum):
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    @property
    def symbol(self) -> str:
        return RANK_SYMBOLS[self]

    @property
    def title(self) -> str:
        return self.name.capitalize()

    @property
    def plural(self) -> str:
        return "Sixes" if self is Rank.SIX else f"{self.title}s"


class Suit(Enum):
    HEARTS = "h"
    DIAMONDS = "d"
    CLUBS = "c"
    SPADES = "s"

    @property
    def title(self) -> str:
        return self.name.capitalize()


RANK_SYMBOLS = {rank: symbol for rank, symbol in zip(Rank, "23456789TJQKA")}
SYMBOL_RANKS = {symbol: rank for rank, symbol in RANK_SYMBOLS.items()}
SUIT_ORDER = {suit: idx for idx, suit in enumerate(Suit)}


@dataclass(frozen=True)
class Card:
    rank: Rank
    suit: Suit

    def __post_init__(self) -> None:
        if not isinstance(self.rank, Rank):
            raise ValueError(f"Invalid rank: {self.rank}")
        if not isinstance(self.suit, Suit):
            raise ValueError(f"Invalid suit: {self.suit}")

    @property
    def label(self) -> str:
        return f"{self.rank.symbol}{self.suit.value}"

    @property
    def sort_key(self) -> tuple:
        # Suit only keeps equal ranks in a fixed order; it never decides strength.
        return (int(self.rank), -SUIT_ORDER[self.suit])

    def __str__(self) -> str:
        return self.label


def sort_descending(cards: Iterable[Card]) -> List[Card]:
    return sorted(cards, key=lambda card: card.sort_key, reverse=True)


def canonical_cards() -> List[Card]:
    return [Card(rank, suit) for rank in Rank for suit in Suit]


class Deck:
    """52 unique cards; shuffled once while undealt, then drawn from the top."""

    def __init__(self, cards: Optional[Sequence[Card]] = None) -> None:
        self._cards: List[Card] = list(cards) if cards is not None else canonical_cards()
        self.drawn = 0

    def __len__(self) -> int:
        return len(self._cards)

    @property
    def cards(self) -> List[Card]:
        return list(self._cards)

    def shuffle(self, rng: Optional[random.Random] = None) -> None:
        if self.drawn:
            raise RuntimeError("Cannot shuffle a deck that has been dealt from")
        (rng or random.Random()).shuffle(self._cards)

    def draw(self) -> Card:
        if not self._cards:
            raise DeckExhausted(f"Deck exhausted after {self.drawn} draws")
        self.drawn += 1
        return self._cards.pop(0)

    def deal(self, count: int) -> List[Card]:
        return [self.draw() for _ in range(count)]


def new_seed() -> int:
    return random.SystemRandom().getrandbits(32)


def build_deck(seed: Optional[int] = None) -> Deck:
    deck = Deck()
    deck.shuffle(random.Random(new_seed() if seed is None else seed))
    return deck


def parse_label(label: str) -> Card:
    if len(label) != 2:
        raise ValueError(f"Invalid card label: {label}")
    rank = SYMBOL_RANKS.get(label[0].upper())
    if rank is None:
        raise ValueError(f"Invalid rank: {label[0]}")
    try:
        suit = Suit(label[1].lower())
    except ValueError:
        raise ValueError(f"Invalid suit: {label[1]}") from None
    return Card(rank, suit)


def parse_cards(labels: Sequence[str]) -> List[Card]:
    return [parse_label(label) for label in labels]


def cards_to_labels(cards: Iterable[Card]) -> List[str]:
    return [card.label for card in cards]
