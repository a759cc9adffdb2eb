"""PositionOracle backed by python-chess boards."""

from __future__ import annotations

from typing import Optional

import chess
import chess.variant

from .exceptions import IllegalMoveError, InvalidPositionError
from .oracle import Outcome


class ChessOracle:
    """Rules oracle for standard chess and the python-chess variants.

    Positions are `chess.Board` instances (or the variant's board subclass),
    moves are `chess.Move` and sides are `chess.WHITE` / `chess.BLACK`.
    Boards handed out by `play` are fresh copies, so positions stored in the
    search tree are never mutated.
    """

    def __init__(self, variant: str = "chess") -> None:
        try:
            self._board_cls = chess.variant.find_variant(variant)
        except ValueError as exc:
            raise ValueError(f"Unknown chess variant: {variant}") from exc
        self.variant = variant

    def parse(self, notation: str) -> chess.Board:
        try:
            board = self._board_cls(notation)
        except ValueError as exc:
            raise InvalidPositionError(notation, str(exc)) from exc

        status = board.status()
        if status != chess.STATUS_VALID:
            raise InvalidPositionError(notation, _describe_status(status))
        return board

    def legal_moves(self, position: chess.Board) -> list[chess.Move]:
        # Automatic draws (75-move rule, fivefold repetition, insufficient
        # material) end the game even though python-chess still lists moves.
        if position.outcome() is not None:
            return []
        return list(position.legal_moves)

    def play(self, position: chess.Board, move: chess.Move) -> chess.Board:
        if not position.is_legal(move):
            raise IllegalMoveError(move)
        successor = position.copy()
        successor.push(move)
        return successor

    def scratch_copy(self, position: chess.Board) -> chess.Board:
        # Dropping the move stack loses repetition history from before the
        # rollout; the seventy-five-move rule still bounds every game.
        return position.copy(stack=False)

    def push(self, position: chess.Board, move: chess.Move) -> None:
        if not position.is_legal(move):
            raise IllegalMoveError(move)
        position.push(move)

    def outcome(self, position: chess.Board) -> Optional[Outcome[chess.Color]]:
        result = position.outcome()
        if result is None:
            return None
        if result.winner is None:
            return Outcome.draw()
        return Outcome.decisive(result.winner)

    def turn(self, position: chess.Board) -> chess.Color:
        return position.turn

    def opponent(self, side: chess.Color) -> chess.Color:
        return not side


def _describe_status(status: chess.Status) -> str:
    problems = [flag.name.lower().replace("_", " ") for flag in chess.Status if flag and flag in status]
    return ", ".join(problems) or "invalid position"


__all__ = ["ChessOracle"]
