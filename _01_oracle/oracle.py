"""Rules oracle contract consumed by the search core."""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, Optional, Protocol, TypeVar, runtime_checkable

PositionT = TypeVar("PositionT")
MoveT = TypeVar("MoveT")
SideT = TypeVar("SideT", bound=Hashable)


@dataclass(frozen=True)
class Outcome(Generic[SideT]):
    """Result of a finished game.

    `winner` is the side that won a decisive game, or None for a draw.
    """

    winner: Optional[SideT] = None

    @classmethod
    def decisive(cls, winner: SideT) -> Outcome[SideT]:
        return cls(winner=winner)

    @classmethod
    def draw(cls) -> Outcome[SideT]:
        return cls(winner=None)

    def score_for(self, side: SideT) -> float:
        """Return 1.0 for a win by `side`, 0.5 for a draw and 0.0 otherwise."""
        if self.winner is None:
            return 0.5
        return 1.0 if self.winner == side else 0.0


class PositionOracle(Protocol[PositionT, MoveT, SideT]):
    """Game-rules capability the search relies on.

    The oracle is the only source of truth for the rules. Every move returned
    by `legal_moves` must be accepted by `play`, and `legal_moves` is empty
    exactly when `outcome` reports a result.
    """

    def parse(self, notation: str) -> PositionT:
        """Parse and validate a starting position.

        Raises:
            InvalidPositionError: If the notation is malformed or illegal.
        """
        ...

    def legal_moves(self, position: PositionT) -> Sequence[MoveT]:
        """Return every legal move in `position`, in a stable order."""
        ...

    def play(self, position: PositionT, move: MoveT) -> PositionT:
        """Return the successor position, leaving `position` untouched.

        Raises:
            IllegalMoveError: If `move` is not legal in `position`.
        """
        ...

    def outcome(self, position: PositionT) -> Optional[Outcome[SideT]]:
        """Return the terminal outcome, or None while the game continues."""
        ...

    def turn(self, position: PositionT) -> SideT:
        """Return the side to move."""
        ...

    def opponent(self, side: SideT) -> SideT:
        """Return the other player."""
        ...


@runtime_checkable
class InPlaceOracle(Protocol):
    """Optional oracle extension for cheap rollouts.

    Rollouts discard every intermediate position, so an oracle that can
    advance a private scratch position in place lets the search skip one
    full copy per ply. Tree nodes still go through `play`.
    """

    def scratch_copy(self, position: Any) -> Any:
        """Return a position the caller may mutate freely."""
        ...

    def push(self, position: Any, move: Any) -> None:
        """Apply `move` to `position` in place.

        Raises:
            IllegalMoveError: If `move` is not legal in `position`.
        """
        ...


__all__ = ["InPlaceOracle", "MoveT", "Outcome", "PositionOracle", "PositionT", "SideT"]
