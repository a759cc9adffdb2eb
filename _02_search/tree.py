"""UCT tree operations: selection, expansion, rollout and backpropagation."""

from __future__ import annotations

import math
import random
import sys
from collections.abc import Sequence
from typing import Any, Optional

from _01_oracle.exceptions import IllegalMoveError, OracleContractError
from _01_oracle.oracle import InPlaceOracle, Outcome, PositionOracle

from .config import SearchConfig
from .node import ROOT, Node, NodeId, Tree

# Score given to children that have never been simulated. The largest finite
# float keeps every comparison well defined.
UNVISITED_SCORE = sys.float_info.max


class SearchTree:
    """A UCT search tree over positions supplied by a rules oracle.

    `rng` only needs a `choice(sequence)` method, so tests can substitute a
    scripted source for `random.Random`.
    """

    def __init__(
        self,
        root_position: Any,
        oracle: PositionOracle,
        config: Optional[SearchConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.oracle = oracle
        self.config = config or SearchConfig()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        root = Node(
            side_that_moved=oracle.opponent(oracle.turn(root_position)),
            position=root_position,
        )
        self.tree = Tree(root)

    def __getitem__(self, node_id: NodeId) -> Node:
        return self.tree[node_id]

    def uct(self, parent: Node, child: Node) -> float:
        """Calculate the UCT score of `child` under `parent`."""
        if child.simulations == 0:
            return UNVISITED_SCORE
        exploitation = child.wins / child.simulations
        exploration = self.config.exploration * math.sqrt(math.log(parent.simulations) / child.simulations)
        return exploitation + exploration

    def select_next(self, node_id: NodeId) -> Optional[NodeId]:
        """Return the child with the highest UCT score, first one on ties."""
        node = self.tree[node_id]
        best_child: Optional[NodeId] = None
        best_score = -1.0
        for child_id in node.children:
            score = self.uct(node, self.tree[child_id])
            if score > best_score:
                best_child = child_id
                best_score = score
        return best_child

    def select_branch(self, start: NodeId = ROOT) -> list[NodeId]:
        """Follow UCT choices from `start` down to a node with no children."""
        branch = [start]
        next_id = self.select_next(start)
        while next_id is not None:
            branch.append(next_id)
            next_id = self.select_next(next_id)
        return branch

    def expand(self, leaf_id: NodeId) -> list[NodeId]:
        """Create one child per legal move of the leaf.

        Returns the new handles, empty when the leaf position is terminal.
        """
        leaf = self.tree[leaf_id]
        if leaf.children:
            raise ValueError(f"Node {leaf_id} is already expanded")

        child_side = self.oracle.opponent(leaf.side_that_moved)
        children = [
            Node(
                side_that_moved=child_side,
                position=self._play_listed(leaf.position, move),
                last_move=move,
            )
            for move in self.oracle.legal_moves(leaf.position)
        ]
        child_ids = [self.tree.push_node(child) for child in children]
        leaf.children.extend(child_ids)
        return child_ids

    def simulate(self, position: Any) -> Outcome:
        """Play uniformly random legal moves until the game ends.

        Oracles implementing `InPlaceOracle` advance one scratch copy of
        `position`; others return a fresh position from `play` each ply.
        """
        if isinstance(self.oracle, InPlaceOracle):
            current = self.oracle.scratch_copy(position)
            advance = self._push_listed
        else:
            current = position
            advance = self._play_listed
        while True:
            legal = self.oracle.legal_moves(current)
            if legal:
                current = advance(current, self.rng.choice(legal))
                continue
            outcome = self.oracle.outcome(current)
            if outcome is None:
                raise OracleContractError(
                    "No legal moves were found, but the oracle reports no outcome"
                )
            return outcome

    def backpropagate(self, branch: Sequence[NodeId], outcome: Outcome) -> None:
        """Credit the outcome to every node on the branch."""
        for node_id in branch:
            node = self.tree[node_id]
            node.wins += outcome.score_for(node.side_that_moved)
            node.simulations += 1

    def execute_iteration(self) -> bool:
        """Run one select, expand, simulate, backpropagate cycle.

        Returns:
            True if statistics were updated. A terminal leaf leaves the tree
            unchanged unless `backpropagate_terminal` is configured.
        """
        branch = self.select_branch(ROOT)
        leaf_id = branch[-1]
        child_ids = self.expand(leaf_id)

        if not child_ids:
            if not self.config.backpropagate_terminal:
                return False
            outcome = self.oracle.outcome(self.tree[leaf_id].position)
            if outcome is None:
                raise OracleContractError(
                    "No legal moves were found, but the oracle reports no outcome"
                )
            self.backpropagate(branch, outcome)
            return True

        chosen = self.rng.choice(child_ids)
        outcome = self.simulate(self.tree[chosen].position)
        branch.append(chosen)
        self.backpropagate(branch, outcome)
        return True

    def best_child(self) -> Optional[NodeId]:
        """Return the most simulated root child; the earliest wins ties."""
        best: Optional[NodeId] = None
        for child_id in self.tree.root.children:
            if best is None or self.tree[child_id].simulations > self.tree[best].simulations:
                best = child_id
        return best

    def best_move(self) -> Optional[Any]:
        best = self.best_child()
        if best is None:
            return None
        move = self.tree[best].last_move
        if move is None:
            raise RuntimeError("Every node except the root should have a last move")
        return move

    def _play_listed(self, position: Any, move: Any) -> Any:
        try:
            return self.oracle.play(position, move)
        except IllegalMoveError as exc:
            raise OracleContractError(f"Illegal move {move} played from legal move list") from exc

    def _push_listed(self, position: Any, move: Any) -> Any:
        try:
            self.oracle.push(position, move)
        except IllegalMoveError as exc:
            raise OracleContractError(f"Illegal move {move} played from legal move list") from exc
        return position


__all__ = ["SearchTree", "UNVISITED_SCORE"]
