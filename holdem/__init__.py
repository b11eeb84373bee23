"""Single-table Texas Hold'em state engine: pure transitions over immutable snapshots."""

from .betting import all_players_acted, apply_action, call, check, fold, legal_actions, raise_to
from .cards import Card, RANKS, SUITS, card_code, card_image, create_deck, shuffle_deck
from .dealing import deal_cards, deal_community_cards
from .errors import ConfigurationError, DeckExhaustedError, EngineError, InvalidStateError, TableFullError
from .models import ActionResult, ActionType, ActionWindow, GameState, Player, RejectReason, Room, Stage, TableConfig
from .session import TableSession
from .stages import advance_stage, award_pot, get_next_stage
from .table import first_available_seat, initialize_game, join_room, leave_room, start_new_hand
from .turns import next_player

__all__ = [
    "Card",
    "RANKS",
    "SUITS",
    "card_code",
    "card_image",
    "create_deck",
    "shuffle_deck",
    "deal_cards",
    "deal_community_cards",
    "initialize_game",
    "start_new_hand",
    "first_available_seat",
    "join_room",
    "leave_room",
    "next_player",
    "fold",
    "check",
    "call",
    "raise_to",
    "apply_action",
    "all_players_acted",
    "legal_actions",
    "get_next_stage",
    "advance_stage",
    "award_pot",
    "TableSession",
    "ActionResult",
    "ActionType",
    "ActionWindow",
    "GameState",
    "Player",
    "RejectReason",
    "Room",
    "Stage",
    "TableConfig",
    "EngineError",
    "ConfigurationError",
    "DeckExhaustedError",
    "InvalidStateError",
    "TableFullError",
]
