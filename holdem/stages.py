from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from .betting import all_players_acted
from .dealing import community_card_count, deal_community_cards
from .models import ActionResult, GameState, RejectReason, Stage
from .turns import give_turn, next_active_index

LOGGER = logging.getLogger("holdem_stages")

_NEXT_STAGE = {
    Stage.PREFLOP: Stage.FLOP,
    Stage.FLOP: Stage.TURN,
    Stage.TURN: Stage.RIVER,
    Stage.RIVER: Stage.SHOWDOWN,
    Stage.SHOWDOWN: Stage.ENDED,
    Stage.ENDED: Stage.ENDED,
}


def get_next_stage(stage: Stage) -> Stage:
    return _NEXT_STAGE.get(Stage(stage), Stage.ENDED)


def advance_stage(state: GameState) -> ActionResult:
    """Close the betting round and move the hand to its next stage."""
    if state.stage == Stage.ENDED:
        return ActionResult.rejected(state, RejectReason.HAND_OVER)
    if not all_players_acted(state):
        return ActionResult.rejected(state, RejectReason.BETTING_INCOMPLETE)

    stage = get_next_stage(state.stage)
    players = tuple(replace(player, bet=0) if player.bet else player for player in state.players)
    advanced = replace(state, players=players, current_bet=0, stage=stage)

    if community_card_count(stage):
        advanced = deal_community_cards(advanced)

    if stage in (Stage.SHOWDOWN, Stage.ENDED):
        advanced = give_turn(advanced, None)
    else:
        # Post-flop action opens with the dealer, or the next seat still in.
        dealer = state.dealer_index
        if advanced.players[dealer].is_active:
            first = dealer
        else:
            first = next_active_index(advanced, dealer)
        advanced = give_turn(advanced, first)

    LOGGER.info("Stage %s -> %s (pot %d)", state.stage.value, stage.value, state.pot)
    return ActionResult.ok(advanced)


def award_pot(state: GameState, winner_ids: Sequence[str]) -> ActionResult:
    """Pay the pot to ``winner_ids`` in equal shares and end the hand.

    Odd chips go one at a time to the winners in table order. Picking the
    winners (hand ranking) is up to the caller. Only a showdown, or a hand
    that ended with chips still in the pot, can be paid.
    """
    if state.stage == Stage.ENDED and state.pot == 0:
        return ActionResult.rejected(state, RejectReason.HAND_OVER)
    if state.stage not in (Stage.SHOWDOWN, Stage.ENDED):
        return ActionResult.rejected(state, RejectReason.HAND_IN_PROGRESS)
    if not winner_ids:
        return ActionResult.rejected(state, RejectReason.NO_WINNERS)
    winners = []
    for player_id in winner_ids:
        idx = state.find_player(player_id)
        if idx is None or not state.players[idx].is_active:
            return ActionResult.rejected(state, RejectReason.UNKNOWN_PLAYER)
        if idx not in winners:
            winners.append(idx)
    winners.sort()

    share, remainder = divmod(state.pot, len(winners))
    payouts = {idx: share + (1 if pos < remainder else 0) for pos, idx in enumerate(winners)}
    players = tuple(
        replace(player, chips=player.chips + payouts.get(idx, 0), bet=0, is_turn=False)
        for idx, player in enumerate(state.players)
    )
    for idx in winners:
        LOGGER.info("%s collects %d", players[idx].name, payouts[idx])
    return ActionResult.ok(replace(state, players=players, pot=0, current_bet=0, stage=Stage.ENDED))
