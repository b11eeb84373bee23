from __future__ import annotations

import json
from typing import Any, Dict, Optional

from .cards import Card
from .errors import InvalidStateError
from .invariants import check_state
from .models import GameState, Player, Room, Stage

# Snapshot codec for whatever stores or ships table state. Every field
# round-trips; decoding refuses states that break the table invariants.


def card_to_dict(card: Card) -> Dict[str, object]:
    return {"suit": card.suit, "rank": card.rank, "face_up": card.face_up}


def card_from_dict(data: Dict[str, Any]) -> Card:
    return Card(data["suit"], data["rank"], face_up=_flag(data, "face_up", False))


def player_to_dict(player: Player) -> Dict[str, object]:
    return {
        "id": player.id,
        "name": player.name,
        "chips": player.chips,
        "cards": [card_to_dict(card) for card in player.cards],
        "is_active": player.is_active,
        "is_dealer": player.is_dealer,
        "is_small_blind": player.is_small_blind,
        "is_big_blind": player.is_big_blind,
        "is_turn": player.is_turn,
        "is_all_in": player.is_all_in,
        "bet": player.bet,
        "seat_position": player.seat_position,
    }


def _flag(data: Dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise InvalidStateError([f"{key} must be true or false, got {value!r}"])
    return value


def _seat(data: Dict[str, Any]) -> Optional[int]:
    value = data.get("seat_position")
    if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
        raise InvalidStateError([f"seat_position must be an integer or null, got {value!r}"])
    return value


def player_from_dict(data: Dict[str, Any]) -> Player:
    return Player(
        id=str(data["id"]),
        name=str(data["name"]),
        chips=int(data["chips"]),
        cards=tuple(card_from_dict(card) for card in data.get("cards", [])),
        is_active=_flag(data, "is_active", True),
        is_dealer=_flag(data, "is_dealer", False),
        is_small_blind=_flag(data, "is_small_blind", False),
        is_big_blind=_flag(data, "is_big_blind", False),
        is_turn=_flag(data, "is_turn", False),
        is_all_in=_flag(data, "is_all_in", False),
        bet=int(data.get("bet", 0)),
        seat_position=_seat(data),
    )


def state_to_dict(state: GameState) -> Dict[str, object]:
    return {
        "players": [player_to_dict(player) for player in state.players],
        "community_cards": [card_to_dict(card) for card in state.community_cards],
        "deck": [card_to_dict(card) for card in state.deck],
        "pot": state.pot,
        "current_bet": state.current_bet,
        "stage": state.stage.value,
        "current_player_index": state.current_player_index,
        "dealer_index": state.dealer_index,
        "small_blind_amount": state.small_blind_amount,
        "big_blind_amount": state.big_blind_amount,
    }


def state_from_dict(data: Dict[str, Any], expected_total: Optional[int] = None) -> GameState:
    try:
        state = GameState(
            players=tuple(player_from_dict(player) for player in data["players"]),
            community_cards=tuple(card_from_dict(card) for card in data.get("community_cards", [])),
            deck=tuple(card_from_dict(card) for card in data["deck"]),
            pot=int(data["pot"]),
            current_bet=int(data["current_bet"]),
            stage=Stage(data["stage"]),
            current_player_index=int(data["current_player_index"]),
            dealer_index=int(data["dealer_index"]),
            small_blind_amount=int(data["small_blind_amount"]),
            big_blind_amount=int(data["big_blind_amount"]),
        )
    except InvalidStateError:
        raise
    except KeyError as exc:
        raise InvalidStateError([f"missing field {exc.args[0]}"]) from exc
    except (TypeError, ValueError) as exc:
        raise InvalidStateError([str(exc)]) from exc

    problems = check_state(state, expected_total)
    if problems:
        raise InvalidStateError(problems)
    return state


def dumps(state: GameState) -> str:
    return json.dumps(state_to_dict(state))


def loads(raw: str, expected_total: Optional[int] = None) -> GameState:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidStateError([f"malformed JSON: {exc.msg}"]) from exc
    if not isinstance(data, dict):
        raise InvalidStateError(["snapshot must be a JSON object"])
    return state_from_dict(data, expected_total)


def room_to_dict(room: Room) -> Dict[str, object]:
    return {"max_seats": room.max_seats, "players": [player_to_dict(player) for player in room.players]}


def room_from_dict(data: Dict[str, Any]) -> Room:
    return Room(
        players=tuple(player_from_dict(player) for player in data.get("players", [])),
        max_seats=int(data.get("max_seats", Room().max_seats)),
    )
