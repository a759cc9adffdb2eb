"""Search tree storage: nodes kept in a flat, append-only arena."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, NewType, Optional

NodeId = NewType("NodeId", int)

ROOT = NodeId(0)


@dataclass
class Node:
    """One vertex of the search tree.

    Statistics are scored from the perspective of `side_that_moved`, the
    player whose move produced `position`.
    """

    side_that_moved: Any
    position: Any
    last_move: Optional[Any] = None
    wins: float = 0.0
    simulations: int = 0
    children: list[NodeId] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return not self.children


class Tree:
    """Arena owning every node; edges are parent-to-child handles only."""

    def __init__(self, root: Node) -> None:
        if root.last_move is not None:
            raise ValueError("Root node must not carry a last move")
        self._nodes: list[Node] = [root]

    def __getitem__(self, node_id: NodeId) -> Node:
        return self._nodes[node_id]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    @property
    def root(self) -> Node:
        return self._nodes[ROOT]

    def push_node(self, node: Node) -> NodeId:
        """Append a node and return its handle."""
        self._nodes.append(node)
        return NodeId(len(self._nodes) - 1)

    def node_ids(self) -> Iterator[NodeId]:
        return (NodeId(idx) for idx in range(len(self._nodes)))


__all__ = ["ROOT", "Node", "NodeId", "Tree"]
