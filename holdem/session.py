from __future__ import annotations

import logging
import threading
from typing import Callable, Optional, Sequence, Tuple

from .betting import apply_action
from .dealing import deal_cards
from .invariants import assert_valid, total_chips
from .models import ActionResult, ActionType, GameState, RejectReason, TableConfig
from .stages import advance_stage, award_pot
from .table import initialize_from_config, start_new_hand

LOGGER = logging.getLogger("holdem_session")

# TableSession is the single owner of a table's canonical snapshot. The
# engine functions stay pure; this class serializes who gets to apply them.


class TableSession:
    def __init__(self, config: TableConfig, state: Optional[GameState] = None) -> None:
        self.config = config.clamped()
        self.lock = threading.Lock()
        self.hand_counter = 0
        if state is None:
            state = deal_cards(initialize_from_config(self.config))
            self.hand_counter = 1
        self.state = assert_valid(state)
        self.version = 0
        self.chips_in_play = total_chips(self.state)

    def snapshot(self) -> Tuple[int, GameState]:
        with self.lock:
            return self.version, self.state

    def act(
        self,
        player_id: str,
        action: ActionType,
        amount: Optional[int] = None,
        expected_version: Optional[int] = None,
    ) -> ActionResult:
        return self._apply(lambda state: apply_action(state, player_id, action, amount), expected_version)

    def advance(self, expected_version: Optional[int] = None) -> ActionResult:
        return self._apply(advance_stage, expected_version)

    def award(self, winner_ids: Sequence[str], expected_version: Optional[int] = None) -> ActionResult:
        return self._apply(lambda state: award_pot(state, winner_ids), expected_version)

    def new_hand(self, seed: Optional[int] = None, expected_version: Optional[int] = None) -> ActionResult:
        return self._apply(lambda state: start_new_hand(state, seed), expected_version, self._count_hand)

    def _count_hand(self) -> None:
        self.hand_counter += 1
        LOGGER.info("Hand #%d dealt", self.hand_counter)

    def _apply(
        self,
        transition: Callable[[GameState], ActionResult],
        expected_version: Optional[int],
        on_accept: Optional[Callable[[], None]] = None,
    ) -> ActionResult:
        # on_accept runs under the lock, after the new state is committed.
        with self.lock:
            if expected_version is not None and expected_version != self.version:
                LOGGER.debug("Stale submission at version %s (current %s)", expected_version, self.version)
                return ActionResult.rejected(self.state, RejectReason.STALE_VERSION)
            result = transition(self.state)
            if not result.accepted:
                return result
            self.state = assert_valid(result.state, self.chips_in_play)
            self.version += 1
            if on_accept is not None:
                on_accept()
            return result
