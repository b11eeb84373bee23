from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence

from .cards import create_deck
from .dealing import deal_cards
from .errors import ConfigurationError, TableFullError
from .models import (
    MAX_PLAYERS,
    MIN_PLAYERS,
    ActionResult,
    GameState,
    Player,
    RejectReason,
    Room,
    Stage,
    TableConfig,
)

LOGGER = logging.getLogger("holdem_table")

# Table setup: seats, dealer button, blinds. Everything returns fresh snapshots.


@dataclass(frozen=True)
class Roles:
    dealer: int
    small_blind: int
    big_blind: int
    # Seat that actually posts the small blind. Heads-up this is the dealer,
    # while the other seat carries both blind flags and posts the big blind.
    small_blind_payer: int
    first_to_act: int


def assign_roles(eligible: Sequence[int], dealer: int) -> Roles:
    """Resolve blind seats and the first preflop actor for a dealer among ``eligible`` seats."""
    if len(eligible) < MIN_PLAYERS:
        raise ConfigurationError("At least two seats are needed to assign blinds")
    if dealer not in eligible:
        raise ConfigurationError(f"Dealer seat {dealer} is not in play")

    pos = list(eligible).index(dealer)
    count = len(eligible)
    if count == 2:
        other = eligible[(pos + 1) % count]
        return Roles(dealer=dealer, small_blind=other, big_blind=other, small_blind_payer=dealer, first_to_act=dealer)

    sb = eligible[(pos + 1) % count]
    bb = eligible[(pos + 2) % count]
    first = eligible[(pos + 3) % count]
    return Roles(dealer=dealer, small_blind=sb, big_blind=bb, small_blind_payer=sb, first_to_act=first)


def _post(player: Player, amount: int) -> Player:
    paid = min(amount, player.chips)
    chips = player.chips - paid
    return replace(player, chips=chips, bet=player.bet + paid, is_all_in=chips == 0)


def post_blinds(players: List[Player], roles: Roles, small_blind: int, big_blind: int) -> int:
    """Post both blinds in place on ``players``; returns the chips moved into the pot."""
    before = players[roles.small_blind_payer].chips + players[roles.big_blind].chips
    players[roles.small_blind_payer] = _post(players[roles.small_blind_payer], small_blind)
    players[roles.big_blind] = _post(players[roles.big_blind], big_blind)
    return before - players[roles.small_blind_payer].chips - players[roles.big_blind].chips


def _apply_roles(players: List[Player], roles: Roles) -> None:
    for idx, player in enumerate(players):
        players[idx] = replace(
            player,
            is_dealer=idx == roles.dealer,
            is_small_blind=idx == roles.small_blind,
            is_big_blind=idx == roles.big_blind,
            is_turn=idx == roles.first_to_act,
        )


def _validate_blinds(initial_chips: int, small_blind: int, big_blind: int) -> None:
    if small_blind < 0 or big_blind < 0:
        raise ConfigurationError("Blinds cannot be negative")
    if small_blind > big_blind:
        raise ConfigurationError("Small blind cannot exceed the big blind")
    if initial_chips < big_blind:
        raise ConfigurationError(f"Starting stack {initial_chips} cannot cover the big blind {big_blind}")


def initialize_game(
    player_count: int,
    initial_chips: int = 1000,
    small_blind: int = 5,
    big_blind: int = 10,
    seed: Optional[int] = None,
) -> GameState:
    _validate_blinds(initial_chips, small_blind, big_blind)
    count = min(max(player_count, MIN_PLAYERS), MAX_PLAYERS)

    players = [Player(id=f"player-{i}", name=f"Player {i + 1}", chips=initial_chips) for i in range(count)]
    roles = assign_roles(list(range(count)), dealer=0)
    _apply_roles(players, roles)
    pot = post_blinds(players, roles, small_blind, big_blind)

    LOGGER.info("Table initialized with %d players (blinds %d/%d)", count, small_blind, big_blind)
    return GameState(
        players=tuple(players),
        deck=create_deck(seed),
        community_cards=(),
        pot=pot,
        current_bet=big_blind,
        stage=Stage.PREFLOP,
        current_player_index=roles.first_to_act,
        dealer_index=roles.dealer,
        small_blind_amount=small_blind,
        big_blind_amount=big_blind,
    )


def initialize_from_config(config: TableConfig) -> GameState:
    config = config.clamped()
    return initialize_game(config.players, config.starting_stack, config.sb, config.bb, seed=config.seed)


def start_new_hand(state: GameState, seed: Optional[int] = None) -> ActionResult:
    if state.stage not in (Stage.SHOWDOWN, Stage.ENDED):
        return ActionResult.rejected(state, RejectReason.HAND_IN_PROGRESS)
    if state.pot > 0:
        return ActionResult.rejected(state, RejectReason.POT_NOT_AWARDED)

    # Busted players sit out; everyone else is dealt back in.
    eligible = [idx for idx, player in enumerate(state.players) if player.chips > 0]
    if len(eligible) < MIN_PLAYERS:
        return ActionResult.rejected(state, RejectReason.NOT_ENOUGH_PLAYERS)

    count = len(state.players)
    dealer = next(
        idx
        for idx in ((state.dealer_index + offset) % count for offset in range(1, count + 1))
        if idx in eligible
    )
    players = [
        replace(
            player,
            cards=(),
            bet=0,
            is_active=idx in eligible,
            is_all_in=False,
        )
        for idx, player in enumerate(state.players)
    ]
    roles = assign_roles(eligible, dealer)
    _apply_roles(players, roles)
    pot = post_blinds(players, roles, state.small_blind_amount, state.big_blind_amount)

    fresh = replace(
        state,
        players=tuple(players),
        deck=create_deck(seed),
        community_cards=(),
        pot=pot,
        current_bet=state.big_blind_amount,
        stage=Stage.PREFLOP,
        current_player_index=roles.first_to_act,
        dealer_index=dealer,
    )
    LOGGER.info("New hand: dealer seat %d, %d players in", dealer, len(eligible))
    return ActionResult.ok(deal_cards(fresh))


# Seating -------------------------------------------------------------


def first_available_seat(room: Room) -> int:
    taken = {player.seat_position for player in room.players}
    for seat in range(len(room.players) + 1):
        if seat not in taken:
            return seat
    return len(room.players)


def join_room(room: Room, player: Player) -> Room:
    for existing in room.players:
        if existing.id == player.id:
            return room
    if len(room.players) >= room.max_seats:
        raise TableFullError("Table is full")
    seated = replace(player, seat_position=first_available_seat(room))
    return replace(room, players=room.players + (seated,))


def leave_room(room: Room, player_id: str) -> Room:
    return replace(room, players=tuple(player for player in room.players if player.id != player_id))
