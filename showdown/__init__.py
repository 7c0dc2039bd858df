"""Hold'em hand evaluation and single-deal street progression."""

from .cards import Card, Deck, Rank, Suit, build_deck, parse_cards, parse_label
from .errors import DeckExhausted, NoWinner, ShowdownError, UnregisteredPlayers, ValidationError
from .evaluator import identify_hand
from .game import Game, advance_street, start_deal, validate_roster
from .hands import Hand, HandCategory
from .models import DealResult, DealState, GameConfig, Player, PlayerResult, Street
from .winners import calculate_winners, calculate_winning_hand

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "build_deck",
    "parse_cards",
    "parse_label",
    "DeckExhausted",
    "NoWinner",
    "ShowdownError",
    "UnregisteredPlayers",
    "ValidationError",
    "identify_hand",
    "Game",
    "advance_street",
    "start_deal",
    "validate_roster",
    "Hand",
    "HandCategory",
    "DealResult",
    "DealState",
    "GameConfig",
    "Player",
    "PlayerResult",
    "Street",
    "calculate_winners",
    "calculate_winning_hand",
]
