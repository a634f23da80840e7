"""Directed graph description for minimum-cost flow problems.

Nodes are numbered from 1 to ``n_nodes``; node 0 is reserved for the
artificial root that the network simplex method attaches to every node.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import NamedTuple


class Arc(NamedTuple):
    """A directed arc from node ``i`` to node ``j``."""

    i: int
    j: int


class ArcKind(IntEnum):
    """Origin of an arc: supplied by the user or added by the solver."""

    ARTIFICIAL = 0
    ORIGINAL = 1


@dataclass
class Graph:
    """A capacitated network with arc costs and node supplies.

    A positive supply marks a source node, a negative one a demand node.
    """

    n_nodes: int
    kinds: dict[Arc, ArcKind] = field(default_factory=dict)
    capacities: dict[Arc, float] = field(default_factory=dict)
    costs: dict[Arc, float] = field(default_factory=dict)
    supplies: list[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.n_nodes < 0:
            raise ValueError(f"number of nodes must not be negative: {self.n_nodes}")
        if not self.supplies:
            self.supplies = [0.0] * (self.n_nodes + 1)
        elif len(self.supplies) != self.n_nodes + 1:
            raise ValueError(
                f"supplies must hold {self.n_nodes + 1} entries, got {len(self.supplies)}"
            )

    @property
    def n_arcs(self) -> int:
        """Number of arcs, artificial ones included."""
        return len(self.kinds)

    def _check_node(self, node: int) -> None:
        if not 1 <= node <= self.n_nodes:
            raise ValueError(f"node {node} is outside 1..{self.n_nodes}")

    def add_arc(self, i: int, j: int, capacity: float, cost: float) -> Arc:
        """Add (or replace) the original arc ``i -> j``."""
        self._check_node(i)
        self._check_node(j)
        if i == j:
            raise ValueError(f"self-loop on node {i} is not allowed")
        arc = Arc(i, j)
        self.kinds[arc] = ArcKind.ORIGINAL
        self.capacities[arc] = float(capacity)
        self.costs[arc] = float(cost)
        return arc

    def set_supply(self, node: int, amount: float) -> None:
        """Set the supply (positive) or demand (negative) of ``node``."""
        self._check_node(node)
        self.supplies[node] = float(amount)

    def has_arc(self, i: int, j: int) -> bool:
        """Whether any arc, original or artificial, goes from ``i`` to ``j``."""
        return (i, j) in self.kinds

    def is_original(self, i: int, j: int) -> bool:
        """Whether ``i -> j`` is an arc supplied by the user."""
        return self.kinds.get(Arc(i, j)) is ArcKind.ORIGINAL

    def original_arcs(self) -> list[Arc]:
        """The user-supplied arcs in row-major order."""
        return sorted(arc for arc, kind in self.kinds.items() if kind is ArcKind.ORIGINAL)

    def copy(self) -> Graph:
        """An independent copy of this graph."""
        return Graph(
            n_nodes=self.n_nodes,
            kinds=dict(self.kinds),
            capacities=dict(self.capacities),
            costs=dict(self.costs),
            supplies=list(self.supplies),
        )