"""UCT Monte Carlo Tree Search core."""

from .config import SearchConfig, load_config
from .engine import ChildStats, Engine, Iterations, Milliseconds, SearchReport, Until
from .node import ROOT, Node, NodeId, Tree
from .tree import UNVISITED_SCORE, SearchTree

__all__ = [
    "ROOT",
    "UNVISITED_SCORE",
    "ChildStats",
    "Engine",
    "Iterations",
    "Milliseconds",
    "Node",
    "NodeId",
    "SearchConfig",
    "SearchReport",
    "SearchTree",
    "Tree",
    "Until",
    "load_config",
]
