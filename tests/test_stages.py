from dataclasses import replace

import pytest

from holdem.invariants import check_state
from holdem.models import ActionType, RejectReason, Stage
from holdem.stages import advance_stage, award_pot, get_next_stage

from .helpers import create_state, perform_actions, set_player


def called_around(players: int = 4):
    """Preflop with everyone in for the big blind and the big blind checking."""
    state = create_state(players=players)
    return perform_actions(state, [(ActionType.CALL, None)] * (players - 1) + [(ActionType.CHECK, None)])


@pytest.mark.parametrize(
    "stage, expected",
    [
        (Stage.PREFLOP, Stage.FLOP),
        (Stage.FLOP, Stage.TURN),
        (Stage.TURN, Stage.RIVER),
        (Stage.RIVER, Stage.SHOWDOWN),
        (Stage.SHOWDOWN, Stage.ENDED),
        (Stage.ENDED, Stage.ENDED),
    ],
)
def test_get_next_stage(stage, expected):
    assert get_next_stage(stage) == expected


def test_advance_waits_for_bets_to_be_matched():
    state = create_state(players=4)
    result = advance_stage(state)
    assert result.reason == RejectReason.BETTING_INCOMPLETE
    assert result.state is state


def test_advance_to_flop_resets_round_and_reveals_three():
    state = called_around()
    assert state.pot == 40

    flop = advance_stage(state).state
    assert flop.stage == Stage.FLOP
    assert len(flop.community_cards) == 3
    assert all(card.face_up for card in flop.community_cards)
    assert len(flop.deck) == 52 - 8 - 3
    assert flop.current_bet == 0
    assert all(player.bet == 0 for player in flop.players)
    assert flop.pot == 40
    assert flop.current_player_index == flop.dealer_index == 0
    assert [player.is_turn for player in flop.players] == [True, False, False, False]
    assert check_state(flop, expected_total=4000) == []


def test_full_hand_reaches_showdown_then_ended():
    state = advance_stage(called_around()).state
    state = advance_stage(state).state
    assert state.stage == Stage.TURN
    assert len(state.community_cards) == 4

    state = advance_stage(state).state
    assert state.stage == Stage.RIVER
    assert len(state.community_cards) == 5

    state = advance_stage(state).state
    assert state.stage == Stage.SHOWDOWN
    assert len(state.community_cards) == 5
    assert not any(player.is_turn for player in state.players)

    state = advance_stage(state).state
    assert state.stage == Stage.ENDED
    assert advance_stage(state).reason == RejectReason.HAND_OVER


def test_folded_dealer_passes_first_postflop_turn():
    state = create_state(players=4)
    state = perform_actions(
        state,
        [(ActionType.CALL, None), (ActionType.FOLD, None), (ActionType.CALL, None), (ActionType.CHECK, None)],
    )
    assert not state.players[0].is_active

    flop = advance_stage(state).state
    assert flop.current_player_index == 1
    assert flop.players[1].is_turn
    assert not flop.players[0].is_turn


def test_award_pot_to_single_winner():
    state = replace(advance_stage(called_around()).state, stage=Stage.SHOWDOWN)
    result = award_pot(state, ["player-2"])
    assert result.accepted
    paid = result.state
    assert paid.players[2].chips == 990 + 40
    assert paid.pot == 0
    assert paid.stage == Stage.ENDED
    assert not any(player.is_turn for player in paid.players)


def test_award_pot_splits_odd_chip_in_table_order():
    state = replace(create_state(players=2), pot=15, stage=Stage.SHOWDOWN)
    paid = award_pot(state, ["player-1", "player-0"]).state
    assert paid.players[0].chips == 995 + 8
    assert paid.players[1].chips == 990 + 7


def test_award_pot_rejections():
    state = replace(create_state(players=4), stage=Stage.SHOWDOWN)
    assert award_pot(state, []).reason == RejectReason.NO_WINNERS
    assert award_pot(state, ["ghost"]).reason == RejectReason.UNKNOWN_PLAYER
    folded = set_player(state, 1, is_active=False)
    assert award_pot(folded, ["player-1"]).reason == RejectReason.UNKNOWN_PLAYER


def test_award_pot_refused_while_betting_continues():
    state = create_state(players=4)
    result = award_pot(state, ["player-0"])
    assert result.reason == RejectReason.HAND_IN_PROGRESS
    assert result.state is state

    flop = advance_stage(called_around()).state
    assert award_pot(flop, ["player-0"]).reason == RejectReason.HAND_IN_PROGRESS


def test_award_pot_after_hand_ended():
    ended = replace(create_state(players=2), pot=15, stage=Stage.ENDED)
    assert award_pot(ended, ["player-0"]).accepted

    empty = replace(ended, pot=0)
    result = award_pot(empty, ["player-0"])
    assert result.reason == RejectReason.HAND_OVER
    assert result.state is empty
