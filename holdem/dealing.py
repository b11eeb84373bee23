from __future__ import annotations

from dataclasses import replace
from typing import List, Tuple

from .cards import Card
from .errors import DeckExhaustedError
from .models import GameState, Stage

HOLE_CARDS = 2

_COMMUNITY_COUNTS = {
    Stage.FLOP: 3,
    Stage.TURN: 1,
    Stage.RIVER: 1,
}


def community_card_count(stage: Stage) -> int:
    return _COMMUNITY_COUNTS.get(stage, 0)


def draw(deck: Tuple[Card, ...], count: int) -> Tuple[List[Card], Tuple[Card, ...]]:
    """Pop ``count`` cards off the top (end) of ``deck``; returns (drawn, remaining)."""
    if len(deck) < count:
        raise DeckExhaustedError(count, len(deck))
    remaining = list(deck)
    drawn = [remaining.pop() for _ in range(count)]
    return drawn, tuple(remaining)


def deal_cards(state: GameState) -> GameState:
    active = [idx for idx, player in enumerate(state.players) if player.is_active]
    needed = HOLE_CARDS * len(active)
    if len(state.deck) < needed:
        raise DeckExhaustedError(needed, len(state.deck))

    hands = {idx: list(state.players[idx].cards) for idx in active}
    deck = state.deck
    # One card per active seat per pass, in table order.
    for _ in range(HOLE_CARDS):
        for idx in active:
            drawn, deck = draw(deck, 1)
            hands[idx].append(drawn[0].turned(False))

    players = tuple(
        replace(player, cards=tuple(hands[idx])) if idx in hands else player
        for idx, player in enumerate(state.players)
    )
    return replace(state, players=players, deck=deck)


def deal_community_cards(state: GameState) -> GameState:
    count = community_card_count(state.stage)
    if count == 0:
        return state
    drawn, deck = draw(state.deck, count)
    community = state.community_cards + tuple(card.turned(True) for card in drawn)
    return replace(state, community_cards=community, deck=deck)
