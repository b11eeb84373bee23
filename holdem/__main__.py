import argparse
import logging
from typing import Callable, Optional, Set, Tuple

from .betting import all_players_acted, legal_actions
from .models import ActionType, ActionWindow, GameState, Player, Stage, TableConfig
from .serialization import dumps
from .session import TableSession
from .turns import active_players

LOGGER = logging.getLogger("holdem_sim")


Strategy = Callable[[GameState, Player, ActionWindow], Tuple[ActionType, Optional[int]]]


def passive_strategy(state: GameState, player: Player, window: ActionWindow) -> Tuple[ActionType, Optional[int]]:
    if ActionType.CHECK in window.legal:
        return ActionType.CHECK, None
    return ActionType.CALL, None


def play_hand(session: TableSession, strategy: Strategy = passive_strategy) -> None:
    """Drive one hand to its end, then pay the first player still in at showdown."""
    acted: Set[str] = set()
    while True:
        _, state = session.snapshot()
        if state.stage == Stage.ENDED:
            return
        if state.stage == Stage.SHOWDOWN:
            # No hand ranking here: the sim pays the first seat still in.
            session.award([active_players(state)[0].id])
            return

        pending = [player.id for player in state.players if player.can_act and player.id not in acted]
        actor = state.current_player
        if actor is None or (not pending and all_players_acted(state)):
            result = session.advance()
            if not result.accepted:
                raise RuntimeError(f"Could not close betting round: {result.reason.value}")
            acted.clear()
            continue

        action, amount = strategy(state, actor, legal_actions(state, actor.id))
        result = session.act(actor.id, action, amount)
        if not result.accepted:
            raise RuntimeError(f"Strategy picked an illegal {action.value}: {result.reason.value}")
        acted.add(actor.id)


def main() -> None:
    parser = argparse.ArgumentParser(description="Simulate Hold'em hands at a single table")
    parser.add_argument("--players", type=int, default=6)
    parser.add_argument("--starting-stack", type=int, default=1_000)
    parser.add_argument("--sb", type=int, default=5)
    parser.add_argument("--bb", type=int, default=10)
    parser.add_argument("--hands", type=int, default=10)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--verbose", action="store_true", help="Also log rejected actions")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    config = TableConfig(
        players=args.players,
        starting_stack=args.starting_stack,
        sb=args.sb,
        bb=args.bb,
        seed=args.seed,
    )
    session = TableSession(config)
    for hand in range(args.hands):
        if hand:
            seed = None if args.seed is None else args.seed + hand
            result = session.new_hand(seed=seed)
            if not result.accepted:
                LOGGER.info("Stopping after %d hands: %s", hand, result.reason.value)
                break
        play_hand(session)

    _, state = session.snapshot()
    print(dumps(state))


if __name__ == "__main__":
    main()
