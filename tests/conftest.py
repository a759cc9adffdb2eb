"""
Pytest configuration and fixtures for the search tests.

Provides small in-memory games that satisfy the PositionOracle contract and
a scripted random source so that searches can be replayed move for move.
"""

from __future__ import annotations

import pytest

from _01_oracle.exceptions import IllegalMoveError, InvalidPositionError
from _01_oracle.oracle import Outcome

A = "A"
B = "B"


class GameTreeOracle:
    """Oracle over an explicit game graph.

    Positions are `(name, side_to_move)` tuples. `graph` maps a position
    name to its `(move, next_name)` edges and `outcomes` maps terminal
    names to their Outcome.
    """

    def __init__(self, graph, outcomes, start="start"):
        self.graph = graph
        self.outcomes = outcomes
        self.start = start
        self.played = []

    def parse(self, notation):
        if notation not in self.graph and notation not in self.outcomes:
            raise InvalidPositionError(notation, "unknown position")
        return (notation, A)

    def legal_moves(self, position):
        return [move for move, _ in self.graph.get(position[0], ())]

    def play(self, position, move):
        name, side = position
        for candidate, target in self.graph.get(name, ()):
            if candidate == move:
                self.played.append(move)
                return (target, self.opponent(side))
        raise IllegalMoveError(move)

    def outcome(self, position):
        return self.outcomes.get(position[0])

    def turn(self, position):
        return position[1]

    def opponent(self, side):
        return B if side == A else A


class NimOracle:
    """Subtraction game: take `takes` stones, whoever takes the last one wins.

    Positions are `(stones, side_to_move)` tuples.
    """

    def __init__(self, takes=(1, 2, 3)):
        self.takes = tuple(takes)

    def parse(self, notation):
        try:
            stones = int(notation)
        except ValueError as exc:
            raise InvalidPositionError(notation, "stone count must be an integer") from exc
        if stones < 0:
            raise InvalidPositionError(notation, "stone count must be non-negative")
        return (stones, A)

    def legal_moves(self, position):
        stones, _ = position
        return [take for take in self.takes if take <= stones]

    def play(self, position, move):
        stones, side = position
        if move not in self.takes or move > stones:
            raise IllegalMoveError(move)
        return (stones - move, self.opponent(side))

    def outcome(self, position):
        stones, side = position
        if stones == 0:
            return Outcome.decisive(self.opponent(side))
        return None

    def turn(self, position):
        return position[1]

    def opponent(self, side):
        return B if side == A else A


class ScriptedRandom:
    """Random source replaying fixed indices for each `choice` call."""

    def __init__(self, indices):
        self._indices = list(indices)
        self.calls = 0

    def choice(self, seq):
        if not self._indices:
            raise AssertionError(f"Scripted random exhausted after {self.calls} calls")
        self.calls += 1
        return seq[self._indices.pop(0)]


@pytest.fixture
def two_move_game():
    """Root with moves x and y.

    x leads to a position where A can win (xa) or draw (xb); y leads to a
    position whose only move (ya) loses for A.
    """
    graph = {
        "start": [("x", "X"), ("y", "Y")],
        "X": [("xa", "X_win"), ("xb", "X_draw")],
        "Y": [("ya", "Y_loss")],
    }
    outcomes = {
        "X_win": Outcome.decisive(A),
        "X_draw": Outcome.draw(),
        "Y_loss": Outcome.decisive(B),
    }
    return GameTreeOracle(graph, outcomes)


@pytest.fixture
def single_move_game():
    graph = {"start": [("only", "end")]}
    outcomes = {"end": Outcome.decisive(B)}
    return GameTreeOracle(graph, outcomes)


@pytest.fixture
def terminal_game():
    return GameTreeOracle({}, {"start": Outcome.decisive(B)})


@pytest.fixture
def nim():
    return NimOracle()


@pytest.fixture
def scripted_random():
    return ScriptedRandom
