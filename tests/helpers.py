from __future__ import annotations

from typing import List, Sequence

from showdown.cards import Deck, parse_cards
from showdown.evaluator import identify_hand
from showdown.game import Game, advance_street, start_deal
from showdown.hands import Hand
from showdown.models import DealState, GameConfig


def hand(hole: Sequence[str], community: Sequence[str] = ()) -> Hand:
    """Classify a hand from card labels."""
    return identify_hand(parse_cards(hole), parse_cards(community))


def create_game(players: int = 3, seed: int = 42, **config: object) -> Game:
    names = [f"Player{idx}" for idx in range(players)]
    return Game(names, GameConfig(seed=seed, **config))  # type: ignore[arg-type]


def rigged_deck(holes: Sequence[Sequence[str]], board: Sequence[str]) -> Deck:
    """Stack a deck so a deal hands out exactly these hole cards and board.

    Burn cards are taken from the unused cards in canonical order.
    """
    hole_cards = [parse_cards(pair) for pair in holes]
    board_cards = parse_cards(board)
    used = {card for pair in hole_cards for card in pair} | set(board_cards)
    spare = [card for card in Deck().cards if card not in used]

    order = [pair[0] for pair in hole_cards] + [pair[1] for pair in hole_cards]
    order += [spare.pop(0)] + board_cards[:3]
    order += [spare.pop(0)] + board_cards[3:4]
    order += [spare.pop(0)] + board_cards[4:]
    return Deck(order + spare)


def deal_to_river(names: Sequence[str], deck: Deck) -> List[DealState]:
    """Run the transition functions by hand, returning the state after each street."""
    state, _ = start_deal(names, deck)
    states = [state]
    while not state.is_terminal:
        state, _ = advance_street(state, deck)
        states.append(state)
    return states
