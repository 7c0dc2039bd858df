import pytest

from showdown.cards import Deck, parse_cards
from showdown.evaluator import identify_hand
from showdown.game import Game, advance_street, start_deal
from showdown.hands import HandCategory
from showdown.models import DealState, GameConfig, Street

from .helpers import create_game, deal_to_river, rigged_deck


def test_start_deal_hands_out_hole_cards_round_robin():
    state, events = start_deal(["A", "B", "C"], Deck())
    assert state.street == Street.PRE_FLOP
    assert state.community == ()
    holes = {player.name: [card.label for card in player.hole_cards] for player in state.players}
    assert holes == {"A": ["2h", "2s"], "B": ["2d", "3h"], "C": ["2c", "3d"]}
    assert state.players[0].hand.category == HandCategory.ONE_PAIR
    assert state.players[1].hand.category == HandCategory.HIGH_CARD
    assert [event["ev"] for event in events] == ["HOLE_CARDS", "HANDS"]


def test_streets_progress_flop_turn_river():
    deck = Deck()
    states = deal_to_river(["A", "B"], deck)
    assert [state.street for state in states] == [Street.PRE_FLOP, Street.FLOP, Street.TURN, Street.RIVER]
    assert [len(state.community) for state in states] == [0, 3, 4, 5]
    assert [len(state.burned) for state in states] == [0, 1, 2, 3]
    assert len(deck) == 52 - 4 - 8


def test_transitions_leave_previous_states_untouched():
    deck = Deck()
    state, _ = start_deal(["A", "B"], deck)
    flop, _ = advance_street(state, deck)
    assert state.community == ()
    assert state.street == Street.PRE_FLOP
    assert flop is not state


def test_hands_are_recomputed_on_every_street():
    for state in deal_to_river(["A", "B", "C"], Deck()):
        for player in state.players:
            assert player.hand == identify_hand(player.hole_cards, state.community)


def test_no_card_is_dealt_twice():
    deck = Deck()
    final = deal_to_river(["A", "B", "C", "D"], deck)[-1]
    dealt = final.dealt_cards()
    assert len(dealt) == len(set(dealt)) == 4 * 2 + 8
    assert not set(dealt) & set(deck.cards)


def test_advancing_a_finished_deal_is_a_no_op():
    deck = Deck()
    final = deal_to_river(["A", "B"], deck)[-1]
    remaining = len(deck)
    again, events = advance_street(final, deck)
    assert again is final
    assert events == []
    assert len(deck) == remaining


def test_advance_requires_a_started_deal():
    with pytest.raises(RuntimeError, match="not started"):
        advance_street(DealState(), Deck())


def test_royal_flush_deal_settles_the_winner():
    deck = rigged_deck([["As", "Ks"], ["7h", "7d"]], ["Qs", "Js", "Ts", "2c", "3c"])
    final = deal_to_river(["Ana", "Ben"], deck)[-1]
    assert final.winners == (0,)
    assert final.winning_hand.category == HandCategory.ROYAL_FLUSH
    assert final.winning_hand.describe() == "Royal Flush (Spades)"
    assert final.players[1].hand.category == HandCategory.ONE_PAIR


def test_game_plays_a_seeded_deal_to_showdown():
    game = create_game(players=4, seed=5)
    assert game.street == Street.PRE_FLOP
    assert all(len(player.hole_cards) == 2 for player in game.players)
    assert game.winning_hand is None

    streets = []
    while not game.has_ended():
        game.next_action()
        streets.append(game.street)
    assert streets == [Street.FLOP, Street.TURN, Street.RIVER]
    assert len(game.community_cards) == 5
    assert game.winning_hand is not None
    assert game.winners
    assert all(winner.hand.ties(game.winning_hand) for winner in game.winners)


def test_same_seed_reproduces_the_deal():
    first = create_game(seed=21).play_to_showdown()
    second = create_game(seed=21).play_to_showdown()
    assert first == second


def test_next_action_after_river_keeps_the_result():
    game = create_game(seed=8)
    result = game.play_to_showdown()
    winning = game.winning_hand
    assert game.next_action() == []
    assert game.winning_hand is winning
    assert game.result() == result


def test_result_flags_winners_and_describes_hands():
    game = create_game(players=3, seed=17)
    result = game.play_to_showdown()
    assert [entry.name for entry in result.players] == ["Player0", "Player1", "Player2"]
    assert all(entry.hand for entry in result.players)
    assert [entry.name for entry in result.players if entry.winner] == result.winners
    assert result.winner == result.winners[0]
    for entry in result.players:
        assert game.check_if_player_won(entry.name) is entry.winner
    payload = result.to_payload()
    assert payload["winner"] == result.winner
    assert len(payload["community"]) == 5


def test_split_pot_marks_every_tied_player(monkeypatch):
    deck = rigged_deck([["2c", "3d"], ["4h", "5s"], ["6h", "8d"]], ["Ah", "Kd", "Qs", "Jc", "Tc"])
    monkeypatch.setattr("showdown.game.build_deck", lambda seed: deck)
    game = Game(["Ana", "Ben", "Cy"])
    result = game.play_to_showdown()
    assert result.is_split
    assert result.winners == ["Ana", "Ben", "Cy"]
    assert game.check_if_player_won("ben")


def test_identify_player_hand_uses_current_community():
    game = create_game(seed=3)
    name = game.players[0].name
    assert game.identify_player_hand(name) == game.players[0].hand
    game.next_action()
    assert game.identify_player_hand(name) == game.player(name).hand


def test_start_new_game_resets_the_deal():
    game = create_game(seed=12)
    game.play_to_showdown()
    state = game.start_new_game(seed=13)
    assert state.street == Street.PRE_FLOP
    assert game.community_cards == ()
    assert game.winners == []
    assert game.winning_hand is None
    assert len(game.deck) == 52 - 2 * len(game.players)


def test_listener_receives_events_in_order():
    seen = []
    Game(["A", "B"], GameConfig(seed=1), listener=seen.append).play_to_showdown()
    assert [event["ev"] for event in seen] == [
        "HOLE_CARDS",
        "HANDS",
        "FLOP",
        "HANDS",
        "TURN",
        "HANDS",
        "RIVER",
        "HANDS",
        "SHOWDOWN",
    ]
    assert len(seen[2]["cards"]) == 3


def test_failing_listener_does_not_disturb_the_deal():
    def boom(event):
        raise RuntimeError("listener down")

    game = Game(["A", "B"], GameConfig(seed=2), listener=boom)
    result = game.play_to_showdown()
    assert result.winners
    assert len(game.events) == 9


def test_hole_cards_match_the_community_free_reading():
    game = create_game(seed=4)
    for player in game.players:
        assert player.hand == identify_hand(player.hole_cards, [])
        assert parse_cards([card.label for card in player.hole_cards]) == list(player.hole_cards)


def test_unseeded_games_get_their_own_decks():
    decks = {tuple(card.label for card in Game(["A", "B"]).deck.cards) for _ in range(200)}
    assert len(decks) == 200
