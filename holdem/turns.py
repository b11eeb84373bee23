from __future__ import annotations

from dataclasses import replace
from typing import List, Optional

from .models import GameState, Player


def active_players(state: GameState) -> List[Player]:
    return [player for player in state.players if player.is_active]


def active_count(state: GameState) -> int:
    return sum(1 for player in state.players if player.is_active)


def next_active_index(state: GameState, start: int) -> Optional[int]:
    """First active seat after ``start``, wrapping around to ``start`` itself last."""
    count = len(state.players)
    if count == 0:
        return None
    for offset in range(1, count + 1):
        idx = (start + offset) % count
        if state.players[idx].is_active:
            return idx
    return None


def give_turn(state: GameState, index: Optional[int]) -> GameState:
    # index=None clears every turn flag: nobody is left to act.
    players = tuple(
        player if player.is_turn == (idx == index) else replace(player, is_turn=idx == index)
        for idx, player in enumerate(state.players)
    )
    if index is None:
        return replace(state, players=players)
    return replace(state, players=players, current_player_index=index)


def next_player(state: GameState) -> GameState:
    return give_turn(state, next_active_index(state, state.current_player_index))
