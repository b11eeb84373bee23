from __future__ import annotations

from typing import Iterable, List


class EngineError(Exception):
    """Base class for errors raised by the table engine."""


class DeckExhaustedError(EngineError, ValueError):
    def __init__(self, requested: int, remaining: int) -> None:
        super().__init__(f"Not enough cards left in deck: need {requested}, have {remaining}")
        self.requested = requested
        self.remaining = remaining


class ConfigurationError(EngineError, ValueError):
    pass


class InvalidStateError(EngineError, ValueError):
    def __init__(self, problems: Iterable[str]) -> None:
        self.problems: List[str] = list(problems)
        super().__init__("Invalid game state: " + "; ".join(self.problems))


class TableFullError(EngineError, RuntimeError):
    pass
