from __future__ import annotations

from typing import List, Optional

from .cards import DECK_SIZE
from .errors import InvalidStateError
from .models import GameState, Stage

MAX_COMMUNITY_CARDS = 5


def total_chips(state: GameState) -> int:
    # Bets of the running round are already counted in the pot.
    return sum(player.chips for player in state.players) + state.pot


def check_state(state: GameState, expected_total: Optional[int] = None) -> List[str]:
    """Return a description of every broken table invariant (empty when the state is sound)."""
    problems: List[str] = []
    players = state.players

    if not players:
        problems.append("table has no players")

    cards = list(state.deck) + list(state.community_cards)
    for player in players:
        cards.extend(player.cards)
    if len(cards) != DECK_SIZE:
        problems.append(f"{len(cards)} cards accounted for, expected {DECK_SIZE}")
    if len(set(cards)) != len(cards):
        problems.append("duplicate cards in play")
    if len(state.community_cards) > MAX_COMMUNITY_CARDS:
        problems.append(f"{len(state.community_cards)} community cards")

    for player in players:
        if player.chips < 0:
            problems.append(f"{player.id} has negative chips")
        if player.bet < 0:
            problems.append(f"{player.id} has a negative bet")
    if state.pot < 0:
        problems.append("pot is negative")
    if state.current_bet < 0:
        problems.append("current bet is negative")

    turns = [player.id for player in players if player.is_turn]
    if len(turns) > 1:
        problems.append(f"several players hold the turn: {', '.join(turns)}")
    for idx, player in enumerate(players):
        if not player.is_turn:
            continue
        if not player.is_active:
            problems.append(f"{player.id} holds the turn after folding")
        if idx != state.current_player_index:
            problems.append(f"{player.id} holds the turn but current player index is {state.current_player_index}")
    if turns and state.stage in (Stage.SHOWDOWN, Stage.ENDED):
        problems.append(f"{turns[0]} holds the turn after the hand ended")

    highest = max((player.bet for player in players if player.is_active), default=0)
    if state.current_bet < highest:
        problems.append(f"current bet {state.current_bet} below an active bet of {highest}")

    if players and not 0 <= state.current_player_index < len(players):
        problems.append(f"current player index {state.current_player_index} out of range")
    if players and not 0 <= state.dealer_index < len(players):
        problems.append(f"dealer index {state.dealer_index} out of range")

    if expected_total is not None and total_chips(state) != expected_total:
        problems.append(f"{total_chips(state)} chips in play, expected {expected_total}")
    return problems


def assert_valid(state: GameState, expected_total: Optional[int] = None) -> GameState:
    problems = check_state(state, expected_total)
    if problems:
        raise InvalidStateError(problems)
    return state
