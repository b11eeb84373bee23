from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Tuple

from .models import ActionResult, ActionType, ActionWindow, GameState, Player, RejectReason, Stage
from .turns import active_count, give_turn, next_player

LOGGER = logging.getLogger("holdem_betting")

# Betting rules for the acting seat. Illegal requests come back as rejected
# ActionResults carrying the untouched input state; nothing here raises.


def _reject(state: GameState, reason: RejectReason, player_id: str) -> ActionResult:
    LOGGER.debug("Rejected action from %s: %s", player_id, reason.value)
    return ActionResult.rejected(state, reason)


def _acting_seat(state: GameState, player_id: str) -> Tuple[Optional[int], Optional[RejectReason]]:
    if state.stage in (Stage.SHOWDOWN, Stage.ENDED):
        return None, RejectReason.HAND_OVER
    idx = state.find_player(player_id) if player_id else None
    if idx is None:
        return None, RejectReason.UNKNOWN_PLAYER
    player = state.players[idx]
    if not player.is_turn or not player.is_active:
        return None, RejectReason.NOT_YOUR_TURN
    return idx, None


def _finish_uncontested(state: GameState) -> GameState:
    # Only one player left contesting: they take the pot and the hand is over.
    winner = next(idx for idx, player in enumerate(state.players) if player.is_active)
    players = tuple(
        replace(
            player,
            bet=0,
            is_turn=False,
            chips=player.chips + state.pot if idx == winner else player.chips,
        )
        for idx, player in enumerate(state.players)
    )
    LOGGER.info("%s wins %d uncontested", players[winner].name, state.pot)
    return replace(state, players=players, pot=0, current_bet=0, stage=Stage.ENDED)


def fold(state: GameState, player_id: str) -> ActionResult:
    idx, reason = _acting_seat(state, player_id)
    if reason is not None:
        return _reject(state, reason, player_id)

    folded = state.with_player(idx, is_active=False, is_turn=False)
    remaining = active_count(folded)
    if remaining == 1:
        return ActionResult.ok(_finish_uncontested(folded))
    if remaining == 0:
        return ActionResult.ok(give_turn(replace(folded, stage=Stage.ENDED), None))
    return ActionResult.ok(next_player(folded))


def check(state: GameState, player_id: str) -> ActionResult:
    idx, reason = _acting_seat(state, player_id)
    if reason is not None:
        return _reject(state, reason, player_id)

    player = state.players[idx]
    if state.current_bet != 0 and player.bet != state.current_bet:
        return _reject(state, RejectReason.CANNOT_CHECK, player_id)
    return ActionResult.ok(next_player(state))


def call(state: GameState, player_id: str) -> ActionResult:
    idx, reason = _acting_seat(state, player_id)
    if reason is not None:
        return _reject(state, reason, player_id)

    player = state.players[idx]
    to_call = state.current_bet - player.bet
    all_in = player.chips <= to_call
    paid = player.chips if all_in else to_call

    updated = state.with_player(idx, chips=player.chips - paid, bet=player.bet + paid, is_all_in=all_in)
    return ActionResult.ok(next_player(replace(updated, pot=state.pot + paid)))


def raise_to(state: GameState, player_id: str, amount: int) -> ActionResult:
    idx, reason = _acting_seat(state, player_id)
    if reason is not None:
        return _reject(state, reason, player_id)

    player = state.players[idx]
    # Minimum raise is double the current bet, and it must actually raise.
    if amount <= state.current_bet or amount < state.current_bet * 2:
        return _reject(state, RejectReason.BELOW_MINIMUM_RAISE, player_id)
    additional = amount - player.bet
    if additional > player.chips:
        return _reject(state, RejectReason.INSUFFICIENT_CHIPS, player_id)

    chips = player.chips - additional
    updated = state.with_player(idx, chips=chips, bet=amount, is_all_in=chips == 0)
    return ActionResult.ok(next_player(replace(updated, pot=state.pot + additional, current_bet=amount)))


def apply_action(state: GameState, player_id: str, action: ActionType, amount: Optional[int] = None) -> ActionResult:
    if action == ActionType.FOLD:
        return fold(state, player_id)
    if action == ActionType.CHECK:
        return check(state, player_id)
    if action == ActionType.CALL:
        return call(state, player_id)
    if action == ActionType.RAISE_TO:
        if amount is None:
            return _reject(state, RejectReason.MISSING_AMOUNT, player_id)
        return raise_to(state, player_id, amount)
    return _reject(state, RejectReason.UNSUPPORTED_ACTION, player_id)


def all_players_acted(state: GameState) -> bool:
    """True once every player who can still bet has matched the current bet.

    This does not prove a full orbit has happened: with ``current_bet`` at 0
    and nobody having acted yet it is already true.
    """
    return all(player.bet == state.current_bet for player in state.players if player.can_act)


def legal_actions(state: GameState, player_id: str) -> ActionWindow:
    idx, reason = _acting_seat(state, player_id)
    if reason is not None:
        return ActionWindow()

    player: Player = state.players[idx]
    window = ActionWindow(legal=[ActionType.FOLD])
    to_call = state.current_bet - player.bet
    if state.current_bet == 0 or to_call == 0:
        window.legal.append(ActionType.CHECK)
    if to_call > 0:
        window.legal.append(ActionType.CALL)
        window.call_amount = min(to_call, player.chips)

    max_raise_to = player.chips + player.bet
    min_raise_to = max(state.current_bet * 2, state.current_bet + 1)
    if player.chips > 0 and max_raise_to >= min_raise_to:
        window.legal.append(ActionType.RAISE_TO)
        window.min_raise_to = min_raise_to
        window.max_raise_to = max_raise_to
    return window
