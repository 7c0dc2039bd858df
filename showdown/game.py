from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .cards import Card, Deck, build_deck, cards_to_labels, new_seed
from .errors import DeckExhausted, UnregisteredPlayers, ValidationError
from .evaluator import HOLE_CARDS, MAX_COMMUNITY_CARDS, identify_hand
from .hands import Hand
from .models import STREET_BY_COMMUNITY, DealResult, DealState, GameConfig, Player, PlayerResult, Street
from .winners import calculate_winners

LOGGER = logging.getLogger(__name__)

Event = Dict[str, object]
Listener = Callable[[Event], None]

FLOP_CARDS = 3

# The transition functions below are pure apart from drawing from the deck they
# are handed. Game only owns the deck and swaps in each new DealState.


def validate_roster(names: Sequence[str], config: GameConfig) -> List[str]:
    if isinstance(names, str) or not isinstance(names, Sequence):
        raise ValidationError("Roster must be a list of player names")
    roster: List[str] = []
    seen = set()
    for name in names:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Player names must be non-empty strings")
        display = name.strip()
        key = display.casefold()
        if key in seen:
            raise ValidationError(f"Duplicate player: {display}")
        seen.add(key)
        roster.append(display)

    if len(roster) < max(config.min_players, 1):
        raise ValidationError(f"At least {max(config.min_players, 1)} player(s) required")
    if config.max_players is not None and len(roster) > config.max_players:
        raise ValidationError(f"At most {config.max_players} players allowed")

    if config.registered_players is not None:
        registered = {name.casefold() for name in config.registered_players}
        unregistered = [name for name in roster if name.casefold() not in registered]
        if unregistered:
            raise UnregisteredPlayers(unregistered)
    return roster


def _hands_event(players: Sequence[Player]) -> Event:
    return {
        "ev": "HANDS",
        "hands": [{"name": player.name, "hand": player.hand_description} for player in players],
    }


def start_deal(names: Sequence[str], deck: Deck) -> Tuple[DealState, List[Event]]:
    """Deal two hole cards to each player, one card per player per pass."""
    players = [Player(name) for name in names]
    for _ in range(HOLE_CARDS):
        players = [player.with_card(deck.draw()) for player in players]
    players = [player.with_hand(identify_hand(player.hole_cards, ())) for player in players]

    state = DealState(street=Street.PRE_FLOP, players=tuple(players))
    events: List[Event] = [
        {"ev": "HOLE_CARDS", "players": [player.name for player in players]},
        _hands_event(players),
    ]
    return state, events


def advance_street(state: DealState, deck: Deck) -> Tuple[DealState, List[Event]]:
    """Burn and reveal the next street, then re-read every hand.

    Reaching the river settles the winners; advancing a finished deal returns it as is.
    """
    if state.street == Street.NOT_STARTED:
        raise RuntimeError("Deal not started")
    if state.is_terminal:
        return state, []

    burned = state.burned + (deck.draw(),)
    count = FLOP_CARDS if not state.community else 1
    revealed = deck.deal(count)
    community = state.community + tuple(revealed)
    street = STREET_BY_COMMUNITY[len(community)]

    players = tuple(player.with_hand(identify_hand(player.hole_cards, community)) for player in state.players)

    events: List[Event] = []
    if street == Street.FLOP:
        events.append({"ev": "FLOP", "cards": cards_to_labels(revealed)})
    else:
        events.append({"ev": street.value, "card": revealed[0].label})
    events.append(_hands_event(players))

    next_state = replace(state, street=street, players=players, community=community, burned=burned)
    if len(community) >= MAX_COMMUNITY_CARDS:
        next_state, showdown = settle(next_state)
        events.append(showdown)
    return next_state, events


def settle(state: DealState) -> Tuple[DealState, Event]:
    hands: List[Hand] = [player.hand for player in state.players if player.hand is not None]
    if len(hands) != len(state.players):
        raise RuntimeError("Every player needs a hand at showdown")
    winners = tuple(calculate_winners(hands))
    winning_hand = hands[winners[0]]
    event: Event = {
        "ev": "SHOWDOWN",
        "winners": [state.players[idx].name for idx in winners],
        "hand": winning_hand.describe(),
        "cards": winning_hand.labels,
    }
    return replace(state, winners=winners, winning_hand=winning_hand), event


class Game:
    """A single deal for a fixed roster, from hole cards to the river."""

    def __init__(
        self,
        names: Sequence[str],
        config: Optional[GameConfig] = None,
        listener: Optional[Listener] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.names = validate_roster(names, self.config)
        self.listener = listener
        self.deck: Optional[Deck] = None
        self.seed: Optional[int] = None
        self.state = DealState()
        self.events: List[Event] = []
        self.aborted: Optional[Exception] = None
        self.start_new_game()

    # Deal lifecycle --------------------------------------------------

    def start_new_game(self, seed: Optional[int] = None) -> DealState:
        if seed is None:
            seed = self.config.seed if self.config.seed is not None else new_seed()
        self.seed = seed
        self.state = DealState()
        self.events = []
        self.aborted = None
        self.deck = build_deck(seed)
        self._transition(lambda: start_deal(self.names, self.deck))
        return self.state

    def next_action(self) -> List[Event]:
        if self.aborted is not None:
            raise RuntimeError("Deal aborted; start a new game")
        if self.state.is_terminal:
            return []
        assert self.deck is not None
        return self._transition(lambda: advance_street(self.state, self.deck))

    def play_to_showdown(self) -> DealResult:
        while not self.has_ended():
            self.next_action()
        return self.result()

    def _transition(self, step: Callable[[], Tuple[DealState, List[Event]]]) -> List[Event]:
        try:
            state, events = step()
        except DeckExhausted as exc:
            self.aborted = exc
            LOGGER.warning("Deal aborted for %s players: %s", len(self.names), exc)
            raise
        self.state = state
        self._emit(events)
        if state.winning_hand is not None and events:
            LOGGER.debug("Winning hand %s for %s", state.winning_hand, [player.name for player in self.winners])
        return events

    def _emit(self, events: List[Event]) -> None:
        self.events.extend(events)
        if self.listener is None:
            return
        for event in events:
            try:
                self.listener(event)
            except Exception:
                LOGGER.exception("Event listener failed on %s", event.get("ev"))

    # Queries ---------------------------------------------------------

    @property
    def players(self) -> Tuple[Player, ...]:
        return self.state.players

    @property
    def community_cards(self) -> Tuple[Card, ...]:
        return self.state.community

    @property
    def street(self) -> Street:
        return self.state.street

    @property
    def winning_hand(self) -> Optional[Hand]:
        return self.state.winning_hand

    @property
    def winners(self) -> List[Player]:
        return [self.state.players[idx] for idx in self.state.winners]

    def has_ended(self) -> bool:
        return self.state.is_terminal

    def player(self, name: str) -> Player:
        if not isinstance(name, str):
            raise ValueError(f"Unknown player: {name!r}")
        key = name.strip().casefold()
        for player in self.state.players:
            if player.name.casefold() == key:
                return player
        raise ValueError(f"Unknown player: {name}")

    def identify_player_hand(self, name: str) -> Hand:
        player = self.player(name)
        return identify_hand(player.hole_cards, self.state.community)

    def check_if_player_won(self, name: str) -> bool:
        player = self.player(name)
        return any(winner is player for winner in self.winners)

    def result(self) -> DealResult:
        if not self.has_ended():
            raise RuntimeError("Deal not finished")
        winner_names = [player.name for player in self.winners]
        return DealResult(
            players=[
                PlayerResult(
                    name=player.name,
                    hand=player.hand_description,
                    winner=player.name in winner_names,
                    hole_cards=cards_to_labels(player.hole_cards),
                )
                for player in self.state.players
            ],
            winners=winner_names,
            community=cards_to_labels(self.state.community),
        )
