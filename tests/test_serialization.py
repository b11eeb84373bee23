import json

import pytest

from holdem.errors import InvalidStateError
from holdem.models import ActionType, Player, Room
from holdem.serialization import (
    dumps,
    loads,
    room_from_dict,
    room_to_dict,
    state_from_dict,
    state_to_dict,
)
from holdem.stages import advance_stage

from .helpers import create_state, perform_actions


def mid_hand_state():
    state = create_state(players=3, seed=77)
    state = perform_actions(state, [(ActionType.CALL, None), (ActionType.CALL, None), (ActionType.CHECK, None)])
    return advance_stage(state).state


def test_snapshot_survives_json_round_trip():
    state = mid_hand_state()
    restored = loads(dumps(state), expected_total=3000)

    assert restored == state
    assert [card.face_up for card in restored.community_cards] == [True, True, True]
    assert all(not card.face_up for card in restored.players[0].cards)
    assert restored.stage == state.stage


def test_duplicate_card_rejected():
    data = state_to_dict(mid_hand_state())
    data["deck"][0] = dict(data["community_cards"][0])

    with pytest.raises(InvalidStateError, match="duplicate cards") as excinfo:
        state_from_dict(data)
    assert excinfo.value.problems


def test_missing_card_rejected():
    data = state_to_dict(mid_hand_state())
    data["deck"].pop()
    with pytest.raises(InvalidStateError, match="51 cards"):
        state_from_dict(data)


def test_two_turn_holders_rejected():
    data = state_to_dict(mid_hand_state())
    for player in data["players"]:
        player["is_turn"] = True
    with pytest.raises(InvalidStateError, match="several players hold the turn"):
        state_from_dict(data)


def test_folded_turn_holder_rejected():
    data = state_to_dict(create_state(players=4))
    data["players"][3]["is_active"] = False
    with pytest.raises(InvalidStateError, match="holds the turn after folding"):
        state_from_dict(data, expected_total=4000)


def test_turn_holder_must_match_current_index():
    data = state_to_dict(mid_hand_state())
    data["current_player_index"] = 2
    with pytest.raises(InvalidStateError, match="current player index is 2"):
        state_from_dict(data)


@pytest.mark.parametrize(
    "field, value, message",
    [
        ("is_active", "false", "is_active must be true or false"),
        ("is_turn", 1, "is_turn must be true or false"),
        ("seat_position", "2", "seat_position must be an integer"),
        ("seat_position", True, "seat_position must be an integer"),
    ],
)
def test_mistyped_player_fields_rejected(field, value, message):
    data = state_to_dict(mid_hand_state())
    data["players"][1][field] = value
    with pytest.raises(InvalidStateError, match=message):
        state_from_dict(data)


def test_mistyped_card_flag_rejected():
    data = state_to_dict(mid_hand_state())
    data["community_cards"][0]["face_up"] = "yes"
    with pytest.raises(InvalidStateError, match="face_up must be true or false"):
        state_from_dict(data)


def test_chip_total_mismatch_rejected():
    raw = dumps(mid_hand_state())
    with pytest.raises(InvalidStateError, match="chips in play"):
        loads(raw, expected_total=5000)


def test_negative_chips_rejected():
    data = state_to_dict(mid_hand_state())
    data["players"][0]["chips"] = -10
    with pytest.raises(InvalidStateError, match="negative chips"):
        state_from_dict(data)


@pytest.mark.parametrize(
    "raw, message",
    [
        ("not json", "malformed JSON"),
        ("[]", "JSON object"),
        (json.dumps({"players": []}), "missing field"),
    ],
)
def test_malformed_payloads_rejected(raw, message):
    with pytest.raises(InvalidStateError, match=message):
        loads(raw)


def test_unknown_stage_rejected():
    data = state_to_dict(mid_hand_state())
    data["stage"] = "intermission"
    with pytest.raises(InvalidStateError):
        state_from_dict(data)


def test_room_round_trip_keeps_seats():
    room = Room(players=(Player(id="a", name="A", chips=50, seat_position=2),), max_seats=6)
    assert room_from_dict(json.loads(json.dumps(room_to_dict(room)))) == room


def test_room_rejects_mistyped_seat():
    data = room_to_dict(Room(players=(Player(id="a", name="A", chips=50, seat_position=2),), max_seats=6))
    data["players"][0]["seat_position"] = "2"
    with pytest.raises(InvalidStateError, match="seat_position"):
        room_from_dict(data)
