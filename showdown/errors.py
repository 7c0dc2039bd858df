from __future__ import annotations

from typing import Optional, Sequence


class ShowdownError(Exception):
    """Base class for failures that abort a deal. ``code`` is what the host reports."""

    code = "SHOWDOWN_ERROR"

    def __init__(self, msg: str, code: Optional[str] = None) -> None:
        super().__init__(msg)
        self.msg = msg
        if code is not None:
            self.code = code


class DeckExhausted(ShowdownError, RuntimeError):
    code = "DECK_EXHAUSTED"


class ValidationError(ShowdownError, ValueError):
    code = "INVALID_ROSTER"


class UnregisteredPlayers(ValidationError):
    code = "UNREGISTERED_PLAYERS"

    def __init__(self, names: Sequence[str]) -> None:
        super().__init__(f"Some players are not registered: {list(names)}")
        self.names = list(names)


class NoWinner(ShowdownError, RuntimeError):
    code = "NO_WINNER"
