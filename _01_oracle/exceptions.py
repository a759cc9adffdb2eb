"""Custom exception classes for the UCT search engine."""

from __future__ import annotations

from typing import Any


class SearchEngineError(Exception):
    """Base exception for all search engine errors."""


class InvalidPositionError(SearchEngineError):
    """Raised when a starting position is malformed or not a legal configuration."""

    def __init__(self, notation: str, reason: str) -> None:
        self.notation = notation
        self.reason = reason
        super().__init__(f"Invalid position {notation!r}: {reason}")


class IllegalMoveError(SearchEngineError):
    """Raised by an oracle when asked to play a move that is not legal."""

    def __init__(self, move: Any) -> None:
        self.move = move
        super().__init__(f"Illegal move: {move}")


class OracleContractError(SearchEngineError):
    """Raised when the rules oracle breaks its contract with the search.

    Either a move taken from the oracle's own legal-move list failed to
    apply, or a rollout reached a position with no legal moves and no
    reported outcome. The in-progress search is aborted.
    """


class InvalidConfigError(SearchEngineError):
    """Raised when search configuration values or files are invalid."""


__all__ = [
    "IllegalMoveError",
    "InvalidConfigError",
    "InvalidPositionError",
    "OracleContractError",
    "SearchEngineError",
]
