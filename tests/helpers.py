from __future__ import annotations

import random
from dataclasses import replace
from typing import Iterable, Optional, Tuple

from holdem.betting import apply_action
from holdem.dealing import deal_cards
from holdem.models import ActionType, ActionWindow, GameState, Player
from holdem.table import initialize_game


def create_state(
    *,
    players: int = 4,
    initial_chips: int = 1_000,
    sb: int = 5,
    bb: int = 10,
    seed: int = 42,
    deal: bool = True,
) -> GameState:
    """Fresh preflop table, hole cards dealt unless ``deal`` is False."""
    state = initialize_game(players, initial_chips, sb, bb, seed=seed)
    return deal_cards(state) if deal else state


def act(state: GameState, action: ActionType, amount: Optional[int] = None) -> GameState:
    """Apply ``action`` for whoever holds the turn and insist it was accepted."""
    actor = state.current_player
    assert actor is not None, "nobody holds the turn"
    result = apply_action(state, actor.id, action, amount)
    assert result.accepted, f"{actor.id} {action.value} rejected: {result.reason}"
    return result.state


def perform_actions(state: GameState, actions: Iterable[Tuple[ActionType, Optional[int]]]) -> GameState:
    """Apply a scripted sequence of (action, amount) for successive actors."""
    for action, amount in actions:
        state = act(state, action, amount)
    return state


def set_player(state: GameState, index: int, **changes: object) -> GameState:
    players = list(state.players)
    players[index] = replace(players[index], **changes)
    return replace(state, players=tuple(players))


def random_strategy(rng: random.Random):
    def choose(state: GameState, player: Player, window: ActionWindow) -> Tuple[ActionType, Optional[int]]:
        action = rng.choice(window.legal)
        if action == ActionType.RAISE_TO:
            return action, rng.randint(window.min_raise_to, window.max_raise_to)
        return action, None

    return choose
