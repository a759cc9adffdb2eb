"""Search loop: run UCT iterations under a budget and pick a move."""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from _01_oracle.exceptions import OracleContractError
from _01_oracle.oracle import PositionOracle

from .config import SearchConfig
from .node import ROOT
from .tree import SearchTree

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Milliseconds:
    """Search until this much wall-clock time has elapsed."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Millisecond budget must be non-negative")


@dataclass(frozen=True)
class Iterations:
    """Search for exactly this many iterations."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Iteration budget must be non-negative")


Until = Union[Milliseconds, Iterations]


@dataclass(frozen=True)
class ChildStats:
    move: Any
    wins: float
    simulations: int

    @property
    def win_rate(self) -> float:
        if self.simulations == 0:
            return 0.0
        return self.wins / self.simulations


@dataclass(frozen=True)
class SearchReport:
    """Diagnostic snapshot of the root after a search."""

    iterations: int
    total_iterations: int
    root_simulations: int
    best_move: Any
    children: tuple[ChildStats, ...] = field(default_factory=tuple)


class Engine:
    """UCT engine owning one search tree rooted at the construction position.

    Repeated calls to `go` keep growing the same tree, so statistics from
    earlier searches carry over.
    """

    def __init__(
        self,
        position: Any,
        oracle: PositionOracle,
        config: Optional[SearchConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        """Initialize the engine.

        Args:
            position: Starting position, already validated by the oracle.
            oracle: Rules capability for legal moves, play and outcomes.
            config: Search parameters; defaults to `SearchConfig()`.
            rng: Random source for rollouts and child choice. Seeded from
                `config.seed` when omitted.
            clock: Monotonic clock in seconds used for time budgets.
        """
        self.config = config or SearchConfig()
        self._search = SearchTree(position, oracle, self.config, rng)
        self._clock = clock or time.monotonic
        self.last_iterations = 0
        self.total_iterations = 0

    @classmethod
    def from_notation(
        cls,
        notation: str,
        oracle: PositionOracle,
        config: Optional[SearchConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> Engine:
        """Build an engine from a position in the oracle's notation.

        Raises:
            InvalidPositionError: If the oracle rejects the notation.
        """
        position = oracle.parse(notation)
        return cls(position, oracle, config=config, rng=rng, clock=clock)

    @property
    def search_tree(self) -> SearchTree:
        return self._search

    @property
    def root_position(self) -> Any:
        return self._search.tree.root.position

    def go(self, until: Until) -> Optional[Any]:
        """Search under the given budget and return the most visited move.

        Returns None when the root position is terminal.

        Raises:
            OracleContractError: If the oracle breaks its contract mid-search.
        """
        logger.debug("Starting search with budget %s", until)
        keep_going = self._continuation(until)
        iterations = 0
        try:
            while keep_going(iterations):
                self._search.execute_iteration()
                iterations += 1
        except OracleContractError:
            logger.error("Search aborted after %d iterations: oracle contract violated", iterations)
            raise
        finally:
            self.last_iterations = iterations
            self.total_iterations += iterations

        logger.info("iterations: %d", iterations)
        for child in self.root_children():
            logger.debug("Move %s was simulated %d times", child.move, child.simulations)
        return self._search.best_move()

    def root_children(self) -> list[ChildStats]:
        tree = self._search.tree
        return [
            ChildStats(move=tree[child_id].last_move, wins=tree[child_id].wins, simulations=tree[child_id].simulations)
            for child_id in tree[ROOT].children
        ]

    def report(self) -> SearchReport:
        return SearchReport(
            iterations=self.last_iterations,
            total_iterations=self.total_iterations,
            root_simulations=self._search.tree.root.simulations,
            best_move=self._search.best_move(),
            children=tuple(self.root_children()),
        )

    def _continuation(self, until: Until) -> Callable[[int], bool]:
        if isinstance(until, Milliseconds):
            deadline = self._clock() + until.value / 1000.0
            return lambda _iterations: self._clock() < deadline
        if isinstance(until, Iterations):
            return lambda iterations: iterations < until.value
        raise TypeError(f"Unsupported search budget: {until!r}")


__all__ = ["ChildStats", "Engine", "Iterations", "Milliseconds", "SearchReport", "Until"]
