from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple

from .cards import Card
from .hands import Hand


class Street(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    PRE_FLOP = "PRE_FLOP"
    FLOP = "FLOP"
    TURN = "TURN"
    RIVER = "RIVER"


# Street reached once the community pool holds this many cards.
STREET_BY_COMMUNITY = {0: Street.PRE_FLOP, 3: Street.FLOP, 4: Street.TURN, 5: Street.RIVER}


@dataclass
class GameConfig:
    min_players: int = 1
    max_players: Optional[int] = None
    registered_players: Optional[FrozenSet[str]] = None
    seed: Optional[int] = None


@dataclass(frozen=True)
class Player:
    name: str
    hole_cards: Tuple[Card, ...] = ()
    hand: Optional[Hand] = None

    def with_card(self, card: Card) -> "Player":
        return replace(self, hole_cards=self.hole_cards + (card,))

    def with_hand(self, hand: Hand) -> "Player":
        return replace(self, hand=hand)

    def cleared(self) -> "Player":
        return Player(self.name)

    @property
    def hand_description(self) -> Optional[str]:
        return self.hand.describe() if self.hand else None


@dataclass(frozen=True)
class DealState:
    # One immutable snapshot per street; transitions build a new one.
    street: Street = Street.NOT_STARTED
    players: Tuple[Player, ...] = ()
    community: Tuple[Card, ...] = ()
    burned: Tuple[Card, ...] = ()
    winners: Tuple[int, ...] = ()
    winning_hand: Optional[Hand] = None

    @property
    def is_terminal(self) -> bool:
        return self.street == Street.RIVER

    def dealt_cards(self) -> List[Card]:
        hole = [card for player in self.players for card in player.hole_cards]
        return hole + list(self.burned) + list(self.community)


@dataclass
class PlayerResult:
    name: str
    hand: Optional[str]
    winner: bool = False
    hole_cards: List[str] = field(default_factory=list)

    def to_payload(self) -> Dict[str, object]:
        return {"name": self.name, "hand": self.hand, "winner": self.winner, "hole": list(self.hole_cards)}


@dataclass
class DealResult:
    players: List[PlayerResult]
    winners: List[str]
    community: List[str] = field(default_factory=list)

    @property
    def winner(self) -> str:
        return self.winners[0]

    @property
    def is_split(self) -> bool:
        return len(self.winners) > 1

    def to_payload(self) -> Dict[str, object]:
        return {
            "players": [player.to_payload() for player in self.players],
            "winner": self.winner,
            "winners": list(self.winners),
            "community": list(self.community),
        }
