from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence

from .cards import Card, Rank, Suit, sort_descending
from .hands import Hand, HandCategory

HOLE_CARDS = 2
MAX_COMMUNITY_CARDS = 5
HAND_SIZE = 5

ROYAL_RANKS = frozenset({Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING, Rank.ACE})
WHEEL_RANKS = (Rank.FIVE, Rank.FOUR, Rank.THREE, Rank.TWO, Rank.ACE)


def identify_hand(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> Hand:
    """Return the best hand a player holds with the community cards revealed so far."""
    hole = list(hole_cards)
    community = list(community_cards)
    _validate(hole, community)

    if not community:
        # Pre-flop reading of the two hole cards only.
        ordered = sort_descending(hole)
        if ordered[0].rank == ordered[1].rank:
            return Hand.of(HandCategory.ONE_PAIR, ordered)
        return Hand.of(HandCategory.HIGH_CARD, ordered)

    combined = sort_descending(hole + community)

    flush_cards = _flush_cards(combined)
    if flush_cards:
        if ROYAL_RANKS.issubset(card.rank for card in flush_cards):
            return Hand.of(HandCategory.ROYAL_FLUSH, [card for card in flush_cards if card.rank in ROYAL_RANKS])
        window = _straight_window(flush_cards)
        if window:
            return Hand.of(HandCategory.STRAIGHT_FLUSH, window)

    groups = _rank_groups(combined)

    quads = _first_group(groups, 4)
    if quads:
        return Hand.of(HandCategory.FOUR_OF_A_KIND, quads + _remaining(combined, quads)[:1])

    trips = _first_group(groups, 3)
    if trips:
        candidates = [group for group in groups if group is not trips and len(group) >= 2]
        if candidates:
            pair_part = max(candidates, key=lambda group: group[0].rank)
            return Hand.of(HandCategory.FULL_HOUSE, trips + pair_part[:2])

    if flush_cards:
        return Hand.of(HandCategory.FLUSH, flush_cards[:HAND_SIZE])

    window = _straight_window(combined)
    if window:
        return Hand.of(HandCategory.STRAIGHT, window)

    if trips:
        return Hand.of(HandCategory.THREE_OF_A_KIND, trips + _remaining(combined, trips)[:2])

    pair = _first_group(groups, 2)
    if pair:
        second = next((group for group in groups if group is not pair and len(group) == 2), None)
        if second:
            return Hand.of(HandCategory.TWO_PAIR, pair + second + _remaining(combined, pair + second)[:1])
        return Hand.of(HandCategory.ONE_PAIR, pair + _remaining(combined, pair)[:3])

    return Hand.of(HandCategory.HIGH_CARD, combined[:HAND_SIZE])


def _validate(hole: List[Card], community: List[Card]) -> None:
    if len(hole) != HOLE_CARDS:
        raise ValueError(f"Expected {HOLE_CARDS} hole cards, got {len(hole)}")
    if len(community) > MAX_COMMUNITY_CARDS:
        raise ValueError(f"At most {MAX_COMMUNITY_CARDS} community cards allowed, got {len(community)}")
    pool = hole + community
    if len(set(pool)) != len(pool):
        raise ValueError("Duplicate card in hand")


def _flush_cards(cards: List[Card]) -> Optional[List[Card]]:
    """Cards of the flush suit, best first; the suit with the highest cards wins if several qualify."""
    by_suit: Dict[Suit, List[Card]] = defaultdict(list)
    for card in cards:
        by_suit[card.suit].append(card)
    eligible = [group for group in by_suit.values() if len(group) >= HAND_SIZE]
    if not eligible:
        return None
    return max(eligible, key=lambda group: [card.rank for card in group])


def _rank_groups(cards: List[Card]) -> List[List[Card]]:
    """Cards grouped by rank, largest groups first, higher rank first within a size."""
    by_rank: Dict[Rank, List[Card]] = defaultdict(list)
    for card in cards:
        by_rank[card.rank].append(card)
    return sorted(by_rank.values(), key=lambda group: (len(group), group[0].rank), reverse=True)


def _first_group(groups: List[List[Card]], size: int) -> Optional[List[Card]]:
    return next((group for group in groups if len(group) == size), None)


def _remaining(cards: List[Card], used: Iterable[Card]) -> List[Card]:
    taken = set(used)
    return [card for card in cards if card not in taken]


def _straight_window(cards: List[Card]) -> Optional[List[Card]]:
    # cards are sorted descending, so the first card seen per rank is kept
    distinct: List[Card] = []
    for card in cards:
        if not distinct or distinct[-1].rank != card.rank:
            distinct.append(card)

    for idx in range(len(distinct) - 4):
        if distinct[idx].rank - distinct[idx + 4].rank == 4:
            return distinct[idx : idx + 5]

    by_rank = {card.rank: card for card in reversed(distinct)}
    if all(rank in by_rank for rank in WHEEL_RANKS):
        return [by_rank[rank] for rank in WHEEL_RANKS]
    return None
